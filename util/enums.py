# util/enums.py
from enum import Enum
from typing import NamedTuple
from fastapi import status


class Color(str, Enum):
    RESET = "\033[0m"
    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    BLUE = "\033[34m"
    MAGENTA = "\033[35m"
    CYAN = "\033[36m"
    BOLD = "\033[1m"

    def __str__(self):
        return self.value


class Environment(str, Enum):
    DEV = "dev"
    PROD = "prod"


class Cardinality(str, Enum):
    SINGLE = "single"  # exactly one token from the vocabulary
    MULTI = "multi"  # one or more vocabulary tokens, separator-joined
    FREE_TEXT = "free_text"
    FREE_TEXT_MULTI = "free_text_multi"  # open vocabulary, separator-joined
    NUMERIC = "numeric"  # digits as a string

    def __str__(self):
        return self.value


class ErrorInfo(NamedTuple):
    code: str
    message: str
    http_status: int


class ErrorMessage(Enum):
    INVALID_API_KEY = ErrorInfo(
        "invalid_api_key", "Invalid API Key", status.HTTP_401_UNAUTHORIZED
    )
    INTERNAL_ERROR = ErrorInfo(
        "internal_error", "Internal Error", status.HTTP_502_BAD_GATEWAY
    )
    INVALID_FILE = ErrorInfo(
        "invalid_file",
        "Please upload a valid PDF file.",
        status.HTTP_415_UNSUPPORTED_MEDIA_TYPE,
    )
    UNREADABLE_PDF = ErrorInfo(
        "unreadable_pdf",
        "Could not process the PDF file.",
        status.HTTP_422_UNPROCESSABLE_ENTITY,
    )
    NO_DOCUMENT = ErrorInfo(
        "no_document", "No document is loaded.", status.HTTP_404_NOT_FOUND
    )
    EMPTY_CORPUS = ErrorInfo(
        "empty_corpus",
        "No PDF text available to search.",
        status.HTTP_422_UNPROCESSABLE_ENTITY,
    )
    MODEL_INVOCATION_FAILED = ErrorInfo(
        "model_invocation_failed",
        "The language model request failed. Please try again.",
        status.HTTP_502_BAD_GATEWAY,
    )
    SCHEMA_VIOLATION = ErrorInfo(
        "schema_violation",
        "The language model returned an answer outside the expected format.",
        status.HTTP_502_BAD_GATEWAY,
    )
    UNKNOWN_DIMENSION = ErrorInfo(
        "unknown_dimension", "Unknown dimension.", status.HTTP_404_NOT_FOUND
    )
    QUERY_TOO_SHORT = ErrorInfo(
        "query_too_short",
        "Query must be at least 5 characters.",
        status.HTTP_422_UNPROCESSABLE_ENTITY,
    )
    FILE_TOO_LARGE = ErrorInfo(
        "file_too_large",
        "File exceeds the upload size limit.",
        status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
    )
    STALE_DOCUMENT = ErrorInfo(
        "stale_document",
        "The document changed while the request was in flight.",
        status.HTTP_409_CONFLICT,
    )
