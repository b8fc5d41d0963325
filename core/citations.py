# core/citations.py
import re
from collections import Counter
from dataclasses import dataclass
from difflib import SequenceMatcher
from typing import Iterable, List, Optional, Sequence, Tuple
from core.entities import PageCorpus
from model.classification import Citation
import logging

logger = logging.getLogger(__name__)

_WORD = re.compile(r"\w+", re.UNICODE)


def _words(text: str) -> List[str]:
    return [w.casefold() for w in _WORD.findall(text or "")]


@dataclass(frozen=True)
class _PageWords:
    index: int
    words: Tuple[str, ...]
    joined: str  # " word word ... " for whole-word substring checks
    counts: Counter


def _index_pages(corpus: PageCorpus) -> List[_PageWords]:
    out: List[_PageWords] = []
    for p in corpus.pages:
        words = tuple(_words(p.text))
        out.append(_PageWords(p.index, words, f" {' '.join(words)} ", Counter(words)))
    return out


def _window_similarity(
    needle: Sequence[str], hay: Sequence[str], threshold: float = 0.0
) -> float:
    """
    Best word-level similarity of `needle` against any same-length window of `hay`.

    The shared-word count of a window bounds its SequenceMatcher ratio from
    above, so it is tracked incrementally and the exact ratio is only computed
    for windows whose bound reaches both `threshold` and the best so far.
    """
    n = len(needle)
    if n == 0 or not hay:
        return 0.0
    if n >= len(hay):
        return SequenceMatcher(None, list(hay), list(needle), autojunk=False).ratio()

    want = Counter(needle)
    have: Counter = Counter()
    shared = 0
    sm = SequenceMatcher(None, autojunk=False)
    sm.set_seq2(list(needle))
    best = 0.0
    for i, w in enumerate(hay):
        have[w] += 1
        if have[w] <= want[w]:
            shared += 1
        if i >= n:
            old = hay[i - n]
            if have[old] <= want[old]:
                shared -= 1
            have[old] -= 1
        if i < n - 1:
            continue
        bound = shared / n
        if bound < threshold or bound <= best:
            continue
        sm.set_seq1(list(hay[i - n + 1 : i + 1]))
        best = max(best, sm.ratio())
        if best == 1.0:
            break
    return best


def _matches(page: _PageWords, needle: List[str], want: Counter, threshold: float) -> bool:
    if f" {' '.join(needle)} " in page.joined:
        return True
    if len(needle) < len(page.words):
        # No window can share more words with the quote than the whole page does.
        shared = sum((want & page.counts).values())
        if shared / len(needle) < threshold:
            return False
    return _window_similarity(needle, page.words, threshold) >= threshold


def _locate(
    pages: List[_PageWords], text: str, hint: Optional[int], threshold: float
) -> Optional[int]:
    needle = _words(text)
    if not needle:
        return None
    want = Counter(needle)
    order = [p for p in pages if p.index == hint] + [p for p in pages if p.index != hint]
    for page in order:
        if _matches(page, needle, want, threshold):
            return page.index
    return None


def sanitize_citations(corpus: PageCorpus, citations: Iterable[Citation]) -> List[Citation]:
    """
    Structural cleanup: drop empty citations, out-of-range pages and duplicates.
    Order is preserved.
    """
    out: List[Citation] = []
    seen: set[Tuple[Optional[int], Optional[str]]] = set()
    dropped = 0
    for c in citations:
        if c.page is None and c.text is None:
            dropped += 1
            continue
        if c.page is not None and not corpus.has_page(c.page):
            dropped += 1
            continue
        key = (c.page, c.text)
        if key in seen:
            continue
        seen.add(key)
        out.append(c)
    if dropped:
        logger.warning("citations.sanitize.dropped count=%d pages=%d", dropped, len(corpus))
    return out


def locate_quote(
    corpus: PageCorpus, text: str, *, hint: Optional[int] = None, threshold: float = 0.8
) -> Optional[int]:
    """
    Return the page whose text contains `text` (fuzzily), trying `hint` first.
    """
    return _locate(_index_pages(corpus), text, hint, threshold)


def ground_citations(
    corpus: PageCorpus, citations: Iterable[Citation], *, threshold: float = 0.8
) -> List[Citation]:
    """
    Verify quoted text against the corpus.
    - quote found on the cited page: kept
    - quote found on another page: re-anchored to that page
    - quote found nowhere: dropped
    Citations without text are kept as-is.

    CPU-bound; the async flows run it with asyncio.to_thread.
    """
    pages: Optional[List[_PageWords]] = None
    out: List[Citation] = []
    moved = dropped = 0
    for c in citations:
        if c.text is None:
            out.append(c)
            continue
        if pages is None:
            pages = _index_pages(corpus)
        found = _locate(pages, c.text, c.page, threshold)
        if found is None:
            dropped += 1
            continue
        if found != c.page:
            moved += 1
            c = c.model_copy(update={"page": found})
        out.append(c)
    if moved or dropped:
        logger.warning(
            "citations.ground moved=%d dropped=%d kept=%d", moved, dropped, len(out)
        )
    return out
