# service/classification_service.py
import logging
from typing import List, Optional, Union
from core.anthropic_client import AnthropicStructuredClient, StructuredModel
from core.classification_flow import classify, classify_many
from core.entities import PageCorpus
from core.query_flow import answer, validate_query
from core.schema_registry import SchemaRegistry, registry as default_registry
from model.api import (
    ClassificationResponse,
    ClassifyManyResponse,
    DimensionError,
    DimensionInfo,
    CategoryInfo,
    QueryResponse,
)
from model.classification import ClassificationResult
from service.document_service import DocumentService
from util.errors import StaleDocument

logger = logging.getLogger(__name__)


def default_model_factory(api_key: str) -> StructuredModel:
    return AnthropicStructuredClient(api_key=api_key)


class ClassificationService:
    """
    Runs flows against the active document and discards results whose
    document was replaced or cleared while the model call was in flight.
    """

    def __init__(
        self,
        documents: DocumentService,
        registry: SchemaRegistry = default_registry,
        model_factory=default_model_factory,
    ) -> None:
        self._documents = documents
        self._registry = registry
        self._model_factory = model_factory

    def dimensions(self) -> List[DimensionInfo]:
        return [
            DimensionInfo(
                fieldName=s.field_name,
                label=s.label,
                cardinality=s.cardinality,
                separator=s.separator,
                notReportedToken=s.not_reported,
                categories=[
                    CategoryInfo(token=c.token, definition=c.definition)
                    for c in s.listed_categories
                ]
                if s.has_vocabulary
                else [],
            )
            for s in self._registry.all()
        ]

    async def _ensure_current(self, corpus: PageCorpus) -> None:
        active = await self._documents.current_generation()
        if active != corpus.generation:
            logger.warning(
                "flow.stale gen=%d active=%d", corpus.generation, active
            )
            raise StaleDocument()

    @staticmethod
    def _response(result: ClassificationResult, generation: int) -> ClassificationResponse:
        return ClassificationResponse(
            dimension=result.dimension,
            value=result.value,
            sources=result.sources,
            generation=generation,
        )

    async def classify(self, dimension: str, api_key: str) -> ClassificationResponse:
        schema = self._registry.get(dimension)
        corpus = await self._documents.current_corpus()
        result = await classify(schema, corpus, self._model_factory(api_key))
        await self._ensure_current(corpus)
        return self._response(result, corpus.generation)

    async def classify_many(
        self, dimensions: Optional[List[str]], api_key: str
    ) -> ClassifyManyResponse:
        # None means every dimension; an explicit list (even empty) is taken as given.
        schemas = (
            self._registry.all()
            if dimensions is None
            else [self._registry.get(d) for d in dict.fromkeys(dimensions)]
        )
        corpus = await self._documents.current_corpus()
        outcomes = await classify_many(schemas, corpus, self._model_factory(api_key))
        await self._ensure_current(corpus)

        results: List[Union[ClassificationResponse, DimensionError]] = []
        for name, outcome in outcomes.items():
            if isinstance(outcome, ClassificationResult):
                results.append(self._response(outcome, corpus.generation))
            else:
                results.append(
                    DimensionError(dimension=name, error=outcome.code, message=outcome.message)
                )
        failed = sum(1 for r in results if isinstance(r, DimensionError))
        logger.info(
            "classify.batch.ok dims=%d failed=%d gen=%d",
            len(results),
            failed,
            corpus.generation,
        )
        return ClassifyManyResponse(generation=corpus.generation, results=results)

    async def answer(self, query: str, api_key: str) -> QueryResponse:
        query = validate_query(query)
        corpus = await self._documents.current_corpus()
        result = await answer(query, corpus, self._model_factory(api_key))
        await self._ensure_current(corpus)
        return QueryResponse(
            answer=result.answer,
            answerable=result.answerable,
            sources=result.sources,
            generation=corpus.generation,
        )
