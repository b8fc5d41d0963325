# controller/controller_dependencies.py
from fastapi import File, Request, UploadFile
from fastapi_limiter.depends import RateLimiter
from config.settings import settings
from repository.document_repository import DocumentRepository
from service.api_key_validation_service import ApiKeyValidationService
from service.classification_service import ClassificationService
from service.document_service import DocumentService
from util.enums import ErrorMessage
from util.errors import AppError

# Shared by every router; tests override it through app.dependency_overrides.
rate_limiter = RateLimiter(
    times=settings.RATE_LIMIT_TIMES, seconds=settings.RATE_LIMIT_SECONDS
)


def get_document_service() -> DocumentService:
    return DocumentService(DocumentRepository())


def get_classification_service() -> ClassificationService:
    return ClassificationService(get_document_service())


def get_api_key_validation_service() -> ApiKeyValidationService:
    return ApiKeyValidationService()


def _too_large() -> AppError:
    info = ErrorMessage.FILE_TOO_LARGE.value
    return AppError(
        f"File exceeds the {settings.MAX_FILE_MB} MB upload limit.",
        info.http_status,
        info.code,
    )


async def enforce_max_upload_size(
    request: Request, file: UploadFile = File(...)
) -> UploadFile:
    # Fast pre-check via Content-Length if present
    max_bytes = settings.MAX_FILE_MB * 1024 * 1024
    cl = request.headers.get("content-length")
    if cl and cl.isdigit() and int(cl) > max_bytes:
        raise _too_large()

    # Hard cap while reading initial bytes (works even if no Content-Length)
    blob = await file.read(max_bytes + 1)
    if len(blob) > max_bytes:
        raise _too_large()

    # Reset so downstream can re-read file stream
    await file.seek(0)
    return file
