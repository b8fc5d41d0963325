# core/classification_flow.py
import asyncio
from typing import Dict, Iterable, List, Optional, Union
from config.settings import settings
from core.anthropic_client import StructuredModel
from core.citations import ground_citations, sanitize_citations
from core.entities import PageCorpus
from core.schema import ClassificationSchema
from model.classification import ClassificationResult
import logging
from util.errors import EmptyCorpus, FlowError
from util.timing import timed

logger = logging.getLogger(__name__)


async def classify(
    schema: ClassificationSchema,
    corpus: PageCorpus,
    model: StructuredModel,
    *,
    grounding: Optional[bool] = None,
) -> ClassificationResult:
    """
    Run one dimension against one corpus:
    1) serialize the corpus with page markers
    2) render the dimension prompt + shared citation directive
    3) one model call with the two-field output contract
    4) validate/canonicalize the value against the dimension
    5) sanitize (and optionally ground) the citations
    Raises EmptyCorpus before any model call, SchemaViolation / ModelInvocationFailed after.
    """
    if corpus.is_empty:
        raise EmptyCorpus()

    grounding = settings.CITATION_GROUNDING if grounding is None else grounding
    prompt = schema.render_prompt(corpus.with_markers())

    with timed(logger, "flow.classify", dim=schema.field_name, pages=len(corpus)):
        raw = await model.generate(
            system=settings.CLASSIFY_SYSTEM_PROMPT,
            prompt=prompt,
            tool_name=schema.tool_name,
            output_schema=schema.output_schema(),
        )

    raw_value, citations = schema.parse_output(raw)
    value = schema.coerce(raw_value)

    sources = sanitize_citations(corpus, citations)
    if grounding:
        # Fuzzy matching is CPU-bound; keep it off the event loop.
        sources = await asyncio.to_thread(
            ground_citations,
            corpus,
            sources,
            threshold=settings.CITATION_MATCH_THRESHOLD,
        )

    logger.info(
        "flow.classify.ok dim=%s value=%s sources=%d",
        schema.field_name,
        value,
        len(sources),
    )
    return ClassificationResult(dimension=schema.field_name, value=value, sources=sources)


async def classify_many(
    schemas: Iterable[ClassificationSchema],
    corpus: PageCorpus,
    model: StructuredModel,
    *,
    concurrency: int = settings.CLASSIFY_CONCURRENCY,
    grounding: Optional[bool] = None,
) -> Dict[str, Union[ClassificationResult, FlowError]]:
    """
    Classify several dimensions concurrently against the same corpus.

    Each dimension gets its own outcome slot: a result, or the FlowError that
    dimension raised. A dimension listed twice runs once. Unexpected
    exceptions still propagate.
    """
    targets: List[ClassificationSchema] = list(
        {s.field_name: s for s in schemas}.values()
    )
    sem = asyncio.Semaphore(max(1, concurrency))

    async def _one(schema: ClassificationSchema) -> Union[ClassificationResult, FlowError]:
        async with sem:
            try:
                return await classify(schema, corpus, model, grounding=grounding)
            except FlowError as e:
                logger.warning(
                    "flow.classify.failed dim=%s error=%s", schema.field_name, e.code
                )
                return e

    with timed(logger, "flow.classify_many", dims=len(targets), conc=concurrency):
        outcomes = await asyncio.gather(*(_one(s) for s in targets))
    return {s.field_name: o for s, o in zip(targets, outcomes)}
