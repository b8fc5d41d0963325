# core/query_flow.py
import asyncio
from typing import Any, Dict, Optional
from pydantic import BaseModel, Field, ValidationError
from config.settings import settings
from core.anthropic_client import StructuredModel
from core.citations import ground_citations, sanitize_citations
from core.entities import PageCorpus
from core.schema import citations_json_schema
from model.classification import Citation, QueryResult
import logging
from util.errors import EmptyCorpus, QueryTooShort, SchemaViolation
from util.timing import timed

logger = logging.getLogger(__name__)

TOOL_NAME = "record_answer"


class _QueryOutput(BaseModel):
    answer: str
    answerable: bool
    sources: list[Citation] = Field(...)


def _output_schema() -> Dict[str, Any]:
    return {
        "type": "object",
        "properties": {
            "answer": {
                "type": "string",
                "description": "The information extracted from the document that answers the query.",
            },
            "answerable": {
                "type": "boolean",
                "description": "False when the document does not contain the answer.",
            },
            "sources": citations_json_schema(),
        },
        "required": ["answer", "answerable", "sources"],
    }


def _prompt(query: str, corpus: PageCorpus) -> str:
    return (
        f"{settings.CITATION_DIRECTIVE}\n"
        f"PDF Content:\n{corpus.with_markers()}\n\n"
        f"User Query: {query}\n"
    )


def validate_query(query: str, min_chars: int = settings.MIN_QUERY_CHARS) -> str:
    query = (query or "").strip()
    if len(query) < min_chars:
        raise QueryTooShort(min_chars)
    return query


async def answer(
    query: str,
    corpus: PageCorpus,
    model: StructuredModel,
    *,
    min_chars: int = settings.MIN_QUERY_CHARS,
    grounding: Optional[bool] = None,
) -> QueryResult:
    """
    Answer a free-text question from the corpus only.

    A non-answerable outcome always carries the fixed not-found message and no sources.
    """
    query = validate_query(query, min_chars)
    if corpus.is_empty:
        raise EmptyCorpus()

    grounding = settings.CITATION_GROUNDING if grounding is None else grounding

    with timed(logger, "flow.query", pages=len(corpus), chars=len(query)):
        raw = await model.generate(
            system=settings.QUERY_SYSTEM_PROMPT,
            prompt=_prompt(query, corpus),
            tool_name=TOOL_NAME,
            output_schema=_output_schema(),
        )

    try:
        parsed = _QueryOutput.model_validate(raw)
    except ValidationError as e:
        raise SchemaViolation(f"{TOOL_NAME}: malformed output") from e

    text = parsed.answer.strip()
    if not parsed.answerable:
        logger.info("flow.query.unanswerable pages=%d", len(corpus))
        return QueryResult(answer=settings.NOT_FOUND_ANSWER, answerable=False, sources=[])
    if not text:
        raise SchemaViolation(f"{TOOL_NAME}: empty answer")

    sources = sanitize_citations(corpus, parsed.sources)
    if grounding:
        # Fuzzy matching is CPU-bound; keep it off the event loop.
        sources = await asyncio.to_thread(
            ground_citations,
            corpus,
            sources,
            threshold=settings.CITATION_MATCH_THRESHOLD,
        )
    logger.info("flow.query.ok sources=%d", len(sources))
    return QueryResult(answer=text, answerable=True, sources=sources)
