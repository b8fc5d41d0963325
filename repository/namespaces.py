# repository/namespaces.py
from typing import Final

ROOT: Final[str] = "scholarlens"

DOCUMENTS: Final[str] = f"{ROOT}:documents"
CURRENT_DOCUMENT: Final[str] = f"{DOCUMENTS}:current"  # hash: id, name, generation
CURRENT_BLOB: Final[str] = f"{CURRENT_DOCUMENT}:blob"  # raw PDF bytes
GENERATION: Final[str] = f"{DOCUMENTS}:generation"  # INCR on every save/clear
