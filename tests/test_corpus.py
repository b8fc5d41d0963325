"""Tests for the page corpus and its page-marked serialization."""

import fitz
import pytest

from core.entities import Page, PageCorpus
from core.pdf_text import build_corpus, extract_pages_texts


def _pdf(*page_texts: str) -> bytes:
    doc = fitz.open()
    for text in page_texts:
        page = doc.new_page()
        if text:
            page.insert_text((72, 72), text)
    data = doc.tobytes()
    doc.close()
    return data


def test_pages_are_numbered_from_one_in_order() -> None:
    corpus = PageCorpus.from_texts(["alpha", "beta", "gamma"])

    assert [p.index for p in corpus.pages] == [1, 2, 3]
    assert corpus.page(2).text == "beta"
    assert corpus.page(0) is None
    assert corpus.page(4) is None
    assert len(corpus) == 3


def test_with_markers_joins_pages_with_page_prefixes() -> None:
    corpus = PageCorpus.from_texts(["first page", "second page"])

    assert corpus.with_markers() == "Page 1: first page\n\nPage 2: second page"


def test_non_contiguous_pages_are_rejected() -> None:
    with pytest.raises(ValueError, match="contiguous"):
        PageCorpus(pages=(Page(1, "a"), Page(3, "c")))


def test_missing_page_text_becomes_empty_string() -> None:
    corpus = PageCorpus.from_texts(["a", None, "c"])  # type: ignore[list-item]

    assert corpus.page(2).text == ""
    assert "Page 2: \n\nPage 3: c" in corpus.with_markers()


def test_empty_corpus_reports_empty() -> None:
    corpus = PageCorpus.from_texts([])

    assert corpus.is_empty
    assert corpus.with_markers() == ""


def test_extract_pages_preserves_order_and_blank_pages() -> None:
    pages = extract_pages_texts(_pdf("Hello first page", "", "Third page here"))

    assert [n for n, _ in pages] == [1, 2, 3]
    assert "Hello first page" in pages[0][1]
    assert pages[1][1] == ""
    assert "Third page here" in pages[2][1]


def test_unreadable_pdf_yields_empty_corpus() -> None:
    assert extract_pages_texts(b"not a pdf at all") == []
    assert build_corpus(b"not a pdf at all").is_empty


def test_build_corpus_carries_document_identity() -> None:
    corpus = build_corpus(_pdf("Only page"), document_id="d1", name="paper.pdf", generation=7)

    assert corpus.document_id == "d1"
    assert corpus.name == "paper.pdf"
    assert corpus.generation == 7
    assert corpus.with_markers().startswith("Page 1: Only page")
