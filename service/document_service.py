# service/document_service.py
import logging
from typing import Dict, Optional
from uuid import uuid4
from fastapi import UploadFile
from core.entities import PageCorpus
from core.pdf_text import build_corpus
from model.api import ClearDocumentResponse, DocumentResponse
from repository.document_repository import DocumentRepository
from util.constants import PDF_MEDIA_TYPE
from util.enums import ErrorMessage
from util.errors import AppError, NoDocument
from util.timing import timed

logger = logging.getLogger(__name__)

# Built corpora keyed by generation; only the active generation is kept.
_CORPUS_CACHE: Dict[int, PageCorpus] = {}


def _remember(corpus: PageCorpus) -> None:
    _CORPUS_CACHE.clear()
    _CORPUS_CACHE[corpus.generation] = corpus


def _is_pdf(file: UploadFile, head: bytes) -> bool:
    return (file.content_type == PDF_MEDIA_TYPE) or head.startswith(b"%PDF-")


class DocumentService:
    """
    Owns the single active document: upload, load, clear, and the PageCorpus
    session object handed to the flows.
    """

    def __init__(self, documents: DocumentRepository) -> None:
        self._documents = documents

    async def upload(self, file: UploadFile) -> DocumentResponse:
        """
        Validate, parse and persist a PDF, replacing any previous document.
        Logs: id, byte size and page count (no payloads).
        """
        try:
            data = await file.read()
            await file.seek(0)
        except Exception:
            logger.error("upload.read.error")
            raise

        if not _is_pdf(file, data[:5]):
            logger.warning("upload.rejected type=%s", file.content_type)
            raise AppError.of(ErrorMessage.INVALID_FILE)

        with timed(logger, "upload.parse", bytes=len(data)):
            parsed = build_corpus(data)
        if parsed.is_empty:
            raise AppError.of(ErrorMessage.UNREADABLE_PDF)

        doc_id = str(uuid4())
        name = file.filename or "document.pdf"
        try:
            generation = await self._documents.save(doc_id, name, data)
        except Exception:
            logger.error("upload.persist.error")
            raise

        corpus = PageCorpus(
            pages=parsed.pages, document_id=doc_id, name=name, generation=generation
        )
        _remember(corpus)
        logger.info(
            "upload.ok doc=%s bytes=%d pages=%d gen=%d",
            doc_id,
            len(data),
            len(corpus),
            generation,
        )
        return DocumentResponse(
            documentId=doc_id, name=name, pageCount=len(corpus), generation=generation
        )

    async def current(self) -> Optional[DocumentResponse]:
        corpus = await self.current_corpus_or_none()
        if corpus is None:
            return None
        return DocumentResponse(
            documentId=corpus.document_id or "",
            name=corpus.name or "",
            pageCount=len(corpus),
            generation=corpus.generation,
        )

    async def current_corpus_or_none(self) -> Optional[PageCorpus]:
        stored = await self._documents.load_most_recent()
        if stored is None:
            return None
        cached = _CORPUS_CACHE.get(stored.generation)
        if cached is not None and cached.document_id == stored.id:
            return cached
        with timed(logger, "document.reparse", gen=stored.generation):
            corpus = build_corpus(
                stored.data,
                document_id=stored.id,
                name=stored.name,
                generation=stored.generation,
            )
        _remember(corpus)
        return corpus

    async def current_corpus(self) -> PageCorpus:
        """
        The active document's corpus. Raises NoDocument when nothing is loaded.
        """
        corpus = await self.current_corpus_or_none()
        if corpus is None:
            raise NoDocument()
        return corpus

    async def current_generation(self) -> int:
        return await self._documents.current_generation()

    async def clear(self) -> ClearDocumentResponse:
        generation = await self._documents.clear_all()
        _CORPUS_CACHE.clear()
        logger.info("document.cleared gen=%d", generation)
        return ClearDocumentResponse(ok=True, generation=generation)
