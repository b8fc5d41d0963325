# controller/classification_controller.py
from typing import List
from fastapi import APIRouter, Depends
from controller.controller_dependencies import get_classification_service, rate_limiter
from model.api import (
    ClassificationResponse,
    ClassifyManyRequest,
    ClassifyManyResponse,
    ClassifyRequest,
    DimensionInfo,
    QueryRequest,
    QueryResponse,
)
from service.classification_service import ClassificationService
from util.constants import InternalURIs

classification_router = APIRouter(dependencies=[Depends(rate_limiter)])


@classification_router.get(InternalURIs.DIMENSIONS, response_model=List[DimensionInfo])
async def list_dimensions(
    service: ClassificationService = Depends(get_classification_service),
) -> List[DimensionInfo]:
    return service.dimensions()


@classification_router.post(
    InternalURIs.CLASSIFY_DIMENSION, response_model=ClassificationResponse
)
async def classify_dimension(
    dimension: str,
    payload: ClassifyRequest,
    service: ClassificationService = Depends(get_classification_service),
) -> ClassificationResponse:
    return await service.classify(dimension, payload.apiKey)


@classification_router.post(InternalURIs.CLASSIFY, response_model=ClassifyManyResponse)
async def classify_dimensions(
    payload: ClassifyManyRequest,
    service: ClassificationService = Depends(get_classification_service),
) -> ClassifyManyResponse:
    return await service.classify_many(payload.dimensions, payload.apiKey)


@classification_router.post(InternalURIs.QUERY, response_model=QueryResponse)
async def query_document(
    payload: QueryRequest,
    service: ClassificationService = Depends(get_classification_service),
) -> QueryResponse:
    return await service.answer(payload.query, payload.apiKey)
