# util/functions.py
import re
from typing import List

_WS = re.compile(r"\s+")


def collapse_ws(text: str) -> str:
    return _WS.sub(" ", text or "").strip()


def split_tokens(raw: str, separator: str) -> List[str]:
    """
    Split a separator-joined model answer into trimmed, non-empty tokens.
    """
    return [t.strip() for t in (raw or "").split(separator) if t.strip()]


def join_tokens(tokens: List[str], separator: str) -> str:
    return f"{separator} ".join(tokens)
