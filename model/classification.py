# model/classification.py
from typing import List, Optional
from pydantic import BaseModel, Field, field_validator


class Citation(BaseModel):
    page: Optional[int] = Field(
        default=None,
        description="The page number from which the information was extracted.",
    )
    text: Optional[str] = Field(
        default=None,
        description="The exact paragraph or sentence from the document that was used to formulate the answer.",
    )

    @field_validator("text")
    @classmethod
    def _blank_to_none(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        v = v.strip()
        return v or None


class ClassificationResult(BaseModel):
    dimension: str
    value: str
    sources: List[Citation] = Field(default_factory=list)


class QueryResult(BaseModel):
    answer: str
    answerable: bool = True
    sources: List[Citation] = Field(default_factory=list)
