# model/api.py
from typing import List, Literal, Optional, Union
from pydantic import BaseModel, Field
from model.classification import Citation
from util.enums import Cardinality


class ValidateKeyRequest(BaseModel):
    apiKey: str = Field(min_length=1)


class ValidateKeyResponse(BaseModel):
    ok: bool


class DocumentResponse(BaseModel):
    documentId: str
    name: str
    pageCount: int
    generation: int


class ClearDocumentResponse(BaseModel):
    ok: bool
    generation: int


class CategoryInfo(BaseModel):
    token: str
    definition: str


class DimensionInfo(BaseModel):
    fieldName: str
    label: str
    cardinality: Cardinality
    separator: Optional[str] = None
    notReportedToken: str
    categories: List[CategoryInfo]


class ClassifyRequest(BaseModel):
    apiKey: str = Field(min_length=1)


class ClassifyManyRequest(BaseModel):
    apiKey: str = Field(min_length=1)
    dimensions: Optional[List[str]] = None


class ClassificationResponse(BaseModel):
    ok: Literal[True] = True
    dimension: str
    value: str
    sources: List[Citation]
    generation: int


class DimensionError(BaseModel):
    ok: Literal[False] = False
    dimension: str
    error: str
    message: str


class ClassifyManyResponse(BaseModel):
    generation: int
    results: List[Union[ClassificationResponse, DimensionError]]


class QueryRequest(BaseModel):
    apiKey: str = Field(min_length=1)
    query: str


class QueryResponse(BaseModel):
    answer: str
    answerable: bool
    sources: List[Citation]
    generation: int
