# controller/document_controller.py
from fastapi import APIRouter, Depends, File, UploadFile, status
from controller.controller_dependencies import (
    enforce_max_upload_size,
    get_document_service,
    rate_limiter,
)
from model.api import ClearDocumentResponse, DocumentResponse
from service.document_service import DocumentService
from util.constants import InternalURIs
from util.errors import NoDocument

document_router = APIRouter(dependencies=[Depends(rate_limiter)])


@document_router.post(
    InternalURIs.DOCUMENTS,
    response_model=DocumentResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(enforce_max_upload_size)],
)
async def upload_document(
    file: UploadFile = File(...),
    service: DocumentService = Depends(get_document_service),
) -> DocumentResponse:
    return await service.upload(file)


@document_router.get(InternalURIs.CURRENT_DOCUMENT, response_model=DocumentResponse)
async def current_document(
    service: DocumentService = Depends(get_document_service),
) -> DocumentResponse:
    doc = await service.current()
    if doc is None:
        raise NoDocument()
    return doc


@document_router.delete(
    InternalURIs.CURRENT_DOCUMENT, response_model=ClearDocumentResponse
)
async def clear_document(
    service: DocumentService = Depends(get_document_service),
) -> ClearDocumentResponse:
    return await service.clear()
