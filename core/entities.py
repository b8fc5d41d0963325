# core/entities.py
from dataclasses import dataclass, field
from typing import Iterable, Optional, Tuple


@dataclass(frozen=True)
class Page:
    index: int  # 1-based page index
    text: str


@dataclass(frozen=True)
class PageCorpus:
    """
    Page-ordered text of one loaded document.

    Immutable; a new corpus (with a new generation) replaces it when the
    document is replaced or cleared. Flows only ever read it.
    """

    pages: Tuple[Page, ...]
    document_id: Optional[str] = None
    name: Optional[str] = None
    generation: int = 0
    _markers: str = field(default="", init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        for expected, page in enumerate(self.pages, start=1):
            if page.index != expected:
                raise ValueError(
                    f"page indices must be contiguous from 1: got {page.index} at position {expected}"
                )
        marked = "\n\n".join(f"Page {p.index}: {p.text}" for p in self.pages)
        object.__setattr__(self, "_markers", marked)

    @classmethod
    def from_texts(
        cls,
        texts: Iterable[str],
        *,
        document_id: Optional[str] = None,
        name: Optional[str] = None,
        generation: int = 0,
    ) -> "PageCorpus":
        pages = tuple(Page(index=i, text=t or "") for i, t in enumerate(texts, start=1))
        return cls(pages=pages, document_id=document_id, name=name, generation=generation)

    def __len__(self) -> int:
        return len(self.pages)

    @property
    def is_empty(self) -> bool:
        return not self.pages

    def page(self, index: int) -> Optional[Page]:
        if 1 <= index <= len(self.pages):
            return self.pages[index - 1]
        return None

    def has_page(self, index: int) -> bool:
        return 1 <= index <= len(self.pages)

    def with_markers(self) -> str:
        """
        Canonical serialization consumed by the flows: "Page 1: ...\\n\\nPage 2: ...".
        """
        return self._markers
