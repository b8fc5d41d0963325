# core/pdf_text.py
from typing import List, Optional, Tuple
import fitz
from core.entities import PageCorpus
from util.timing import timed
import logging

logger = logging.getLogger(__name__)


def extract_pages_texts(file_bytes: bytes) -> List[Tuple[int, str]]:
    """
    Return [(page_number, page_text)] for the whole PDF, in page order.
    Pages without extractable text yield "".
    If parsing fails, returns [].
    """
    try:
        out: List[Tuple[int, str]] = []
        with timed(logger, "pdf.open"):
            with fitz.open(stream=file_bytes, filetype="pdf") as doc:
                pages = doc.page_count
                with timed(logger, "pdf.parse", pages=pages):
                    for i in range(pages):
                        page = doc.load_page(i)
                        txt = (page.get_text("text") or "").strip()
                        out.append((i + 1, txt))
        logger.info("pdf.pages count=%d", len(out))
        return out
    except Exception:
        # do not log payloads
        logger.error("pdf.parse.error", exc_info=True)
        return []


def build_corpus(
    file_bytes: bytes,
    *,
    document_id: Optional[str] = None,
    name: Optional[str] = None,
    generation: int = 0,
) -> PageCorpus:
    """
    Parse a PDF into a PageCorpus. Unreadable input gives an empty corpus.
    """
    pages = extract_pages_texts(file_bytes)
    return PageCorpus.from_texts(
        (txt for _, txt in pages),
        document_id=document_id,
        name=name,
        generation=generation,
    )
