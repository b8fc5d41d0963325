# util/errors.py
from typing import Optional
from fastapi import HTTPException, status
from util.enums import ErrorInfo, ErrorMessage


class AppError(HTTPException):
    # Request-boundary failure (upload type, API key); rendered as the same envelope as FlowError.
    def __init__(
        self,
        message: str,
        http_status: int = status.HTTP_400_BAD_REQUEST,
        code: str = "bad_request",
    ) -> None:
        super().__init__(status_code=http_status, detail=message)
        self.code = code

    @classmethod
    def of(cls, error: ErrorMessage) -> "AppError":
        return cls(error.value.message, error.value.http_status, error.value.code)

    def to_payload(self) -> dict:
        return {"ok": False, "error": self.code, "message": self.detail}


class FlowError(Exception):
    """
    Typed failure of a single classification or query invocation.

    Scoped to one dimension/query: callers report it for that slot only.
    """

    info: ErrorInfo = ErrorMessage.INTERNAL_ERROR.value

    def __init__(self, message: Optional[str] = None) -> None:
        self.message = message or self.info.message
        super().__init__(self.message)

    @property
    def code(self) -> str:
        return self.info.code

    @property
    def http_status(self) -> int:
        return self.info.http_status

    def to_payload(self) -> dict:
        return {"ok": False, "error": self.code, "message": self.message}


class EmptyCorpus(FlowError):
    info = ErrorMessage.EMPTY_CORPUS.value


class NoDocument(FlowError):
    info = ErrorMessage.NO_DOCUMENT.value


class ModelInvocationFailed(FlowError):
    info = ErrorMessage.MODEL_INVOCATION_FAILED.value


class SchemaViolation(FlowError):
    info = ErrorMessage.SCHEMA_VIOLATION.value


class UnknownDimension(FlowError):
    info = ErrorMessage.UNKNOWN_DIMENSION.value

    def __init__(self, field_name: str) -> None:
        self.field_name = field_name
        super().__init__(f"Unknown dimension: {field_name}")


class QueryTooShort(FlowError):
    info = ErrorMessage.QUERY_TOO_SHORT.value

    def __init__(self, min_chars: int) -> None:
        self.min_chars = min_chars
        super().__init__(f"Query must be at least {min_chars} characters.")


class StaleDocument(FlowError):
    info = ErrorMessage.STALE_DOCUMENT.value
