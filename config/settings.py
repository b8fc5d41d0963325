# config/settings.py
import os
import sys
from dotenv import load_dotenv
from pydantic import ValidationError, Field
from pydantic_settings import BaseSettings
from util.enums import Environment
import logging


if os.getenv("APP_ENV", Environment.DEV) == Environment.DEV:
    load_dotenv()

_log = logging.getLogger("config.settings")


class Settings(BaseSettings):
    # App
    APP_ENV: str = Field(..., validation_alias="APP_ENV")
    REDIS_URL: str = Field(..., validation_alias="REDIS_URL")
    PERSISTENCE_TTL_SECONDS: int = Field(
        ..., validation_alias="PERSISTENCE_TTL_SECONDS"
    )

    # CORS & Limits
    ALLOWED_ORIGIN: str = Field(..., validation_alias="ALLOWED_ORIGIN")
    RATE_LIMIT_TIMES: int = Field(..., validation_alias="RATE_LIMIT_TIMES")
    RATE_LIMIT_SECONDS: int = Field(..., validation_alias="RATE_LIMIT_SECONDS")
    MAX_FILE_MB: int = Field(..., validation_alias="MAX_FILE_MB")
    TRUST_PROXY: bool = Field(..., validation_alias="TRUST_PROXY")

    # Anthropic Settings
    ANTHROPIC_API_URL: str = Field(..., validation_alias="ANTHROPIC_API_URL")
    ANTHROPIC_MODEL: str = Field(..., validation_alias="ANTHROPIC_MODEL")
    ANTHROPIC_VERSION: str = Field(..., validation_alias="ANTHROPIC_VERSION")
    MODEL_TIMEOUT_SECONDS: float = Field(
        default=90.0, validation_alias="MODEL_TIMEOUT_SECONDS"
    )
    MODEL_MAX_TOKENS: int = Field(default=2048, validation_alias="MODEL_MAX_TOKENS")

    # Flows
    CLASSIFY_CONCURRENCY: int = Field(
        default=4, validation_alias="CLASSIFY_CONCURRENCY"
    )
    MIN_QUERY_CHARS: int = Field(default=5, validation_alias="MIN_QUERY_CHARS")
    CITATION_GROUNDING: bool = Field(default=True, validation_alias="CITATION_GROUNDING")
    CITATION_MATCH_THRESHOLD: float = Field(
        default=0.8, validation_alias="CITATION_MATCH_THRESHOLD"
    )

    # Logging knobs
    LOGGER_NAME: str = "scholarlens"
    LOG_LEVEL: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    LOG_TO_FILE: bool = Field(default=False, validation_alias="LOG_TO_FILE")
    LOG_DIR: str = Field(default="logs", validation_alias="LOG_DIR")
    LOG_FILE_NAME: str = Field(default="app.log", validation_alias="LOG_FILE_NAME")
    LOG_MAX_BYTES: int = Field(
        default=50 * 1024 * 1024, validation_alias="LOG_MAX_BYTES"
    )
    LOG_BACKUP_COUNT: int = Field(default=5, validation_alias="LOG_BACKUP_COUNT")

    # Prompts
    CLASSIFY_SYSTEM_PROMPT: str = (
        "You are a research assistant who tags research papers along fixed metadata "
        "dimensions. You answer ONLY from the paper content you are given and you never guess: "
        "when the paper does not report the information, you use the not-reported value.\n"
        "Record your answer by calling the provided tool exactly once."
    )

    CITATION_DIRECTIVE: str = (
        "SOURCES:\n"
        "The PDF content is provided with page markers (e.g., \"Page 1: ...\").\n"
        "You MUST identify the page number(s) and the exact source text that justify your answer.\n"
        "- Provide all the exact sentences or phrases from the document that justify your answer "
        "in the 'sources' field, each with its page number.\n"
        "- Only cite page numbers that appear as page markers in the content. Never invent a page.\n"
        "- Copy the text verbatim from that page (original punctuation/case). Do not paraphrase "
        "beyond trimming, and never invent text.\n"
        "- If a claim cannot be grounded in the content, leave it out of 'sources' instead of "
        "adding a placeholder.\n"
        "- When the answer is the not-reported value, prefer an empty 'sources' list.\n"
    )

    QUERY_SYSTEM_PROMPT: str = (
        "You are an expert AI assistant specializing in extracting information from PDF documents. "
        "Given the content of a PDF document and a user's query, synthesize the most relevant "
        "information from the document that answers the query.\n"
        "Rules:\n"
        "- Use ONLY evidence from the document itself; do not use outside knowledge.\n"
        "- Do not use literature-review or related-work sections as evidence for the document's "
        "own findings, methods, or participants.\n"
        "- If the query cannot be answered using the content of the PDF, set 'answerable' to false, "
        "say that you cannot answer the question, and return no sources. Do not guess.\n"
        "Record your answer by calling the provided tool exactly once."
    )

    NOT_FOUND_ANSWER: str = (
        "I could not find an answer to this question in the document."
    )


try:
    settings = Settings()
except ValidationError as e:
    print("❌ Missing/invalid environment variables:", file=sys.stderr)
    for err in e.errors():
        loc = ".".join(str(x) for x in err.get("loc", []))
        msg = err.get("msg", "")
        print(f" - {loc}: {msg}", file=sys.stderr)
    sys.exit(1)
except Exception as e:
    print(f"❌ Settings initialization failed: {e}", file=sys.stderr)
    sys.exit(1)
