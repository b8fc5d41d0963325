# model/document.py
from pydantic import BaseModel


class StoredDocument(BaseModel):
    id: str
    name: str
    data: bytes
    generation: int = 0
