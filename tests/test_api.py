"""HTTP surface tests: routers, dependency wiring and error envelopes."""

import fitz
import httpx
import pytest
from fastapi.testclient import TestClient

import service.document_service as document_service_module
from conftest import FakeModel, FakeRedis, tool_output
from controller.controller_dependencies import (
    get_api_key_validation_service,
    get_classification_service,
    get_document_service,
    rate_limiter,
)
from main import app
from repository.document_repository import DocumentRepository
from service.api_key_validation_service import ApiKeyValidationService
from service.classification_service import ClassificationService
from service.document_service import DocumentService

PARTICIPANTS_SENTENCE = "Participants were 30 graduate students from a university in Japan."


def _pdf(*page_texts: str) -> bytes:
    doc = fitz.open()
    for text in page_texts:
        doc.new_page().insert_text((72, 72), text)
    data = doc.tobytes()
    doc.close()
    return data


def _respond(prompt: str, tool_name: str) -> dict:
    if tool_name == "record_answer":
        return {
            "answer": "Thirty graduate students.",
            "answerable": True,
            "sources": [{"page": 1, "text": "30 graduate students"}],
        }
    if tool_name == "record_participantsGroup":
        return tool_output(
            "participantsGroup", "Students", {"page": 1, "text": PARTICIPANTS_SENTENCE}
        )
    return tool_output(tool_name[len("record_"):], "NR")


@pytest.fixture
def model() -> FakeModel:
    return FakeModel(_respond)


@pytest.fixture
def client(model):
    redis = FakeRedis()
    document_service_module._CORPUS_CACHE.clear()

    def documents() -> DocumentService:
        return DocumentService(DocumentRepository(client=redis))

    app.dependency_overrides[rate_limiter] = lambda: None
    app.dependency_overrides[get_document_service] = documents
    app.dependency_overrides[get_classification_service] = lambda: ClassificationService(
        documents(), model_factory=lambda api_key: model
    )
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
        document_service_module._CORPUS_CACHE.clear()


def _upload(client: TestClient, data: bytes, name: str = "paper.pdf", ctype: str = "application/pdf"):
    return client.post("/api/v1/documents", files={"file": (name, data, ctype)})


def test_healthz(client) -> None:
    assert client.get("/healthz").json() == {"ok": True}


def test_dimensions_listing(client) -> None:
    res = client.get("/api/v1/dimensions")

    assert res.status_code == 200
    body = res.json()
    assert len(body) == 19
    first = body[0]
    assert first["fieldName"] == "subjectLevel"
    assert first["cardinality"] == "single"
    assert first["notReportedToken"] == "NotApplicable"


def test_document_lifecycle(client) -> None:
    assert client.get("/api/v1/documents/current").status_code == 404

    created = _upload(client, _pdf(PARTICIPANTS_SENTENCE, "Page two"))
    assert created.status_code == 201
    doc = created.json()
    assert doc["pageCount"] == 2
    assert doc["generation"] == 1

    current = client.get("/api/v1/documents/current")
    assert current.status_code == 200
    assert current.json()["documentId"] == doc["documentId"]

    cleared = client.delete("/api/v1/documents/current")
    assert cleared.json() == {"ok": True, "generation": 2}
    assert client.get("/api/v1/documents/current").json()["error"] == "no_document"


def test_non_pdf_upload_is_unsupported(client) -> None:
    res = _upload(client, b"plain text", name="notes.txt", ctype="text/plain")

    assert res.status_code == 415
    assert res.json()["error"] == "invalid_file"


def test_classify_one_dimension(client, model) -> None:
    _upload(client, _pdf(PARTICIPANTS_SENTENCE))

    res = client.post("/api/v1/classify/participantsGroup", json={"apiKey": "sk-test"})

    assert res.status_code == 200
    body = res.json()
    assert body["ok"] is True
    assert body["value"] == "Students"
    assert body["sources"][0]["page"] == 1
    assert len(model.calls) == 1


def test_unknown_dimension_envelope(client) -> None:
    res = client.post("/api/v1/classify/colour", json={"apiKey": "sk-test"})

    assert res.status_code == 404
    assert res.json() == {
        "ok": False,
        "error": "unknown_dimension",
        "message": "Unknown dimension: colour",
    }


def test_classify_without_document_envelope(client, model) -> None:
    res = client.post("/api/v1/classify/sampleSize", json={"apiKey": "sk-test"})

    assert res.status_code == 404
    assert res.json()["error"] == "no_document"
    assert model.calls == []


def test_classify_selected_dimensions(client) -> None:
    _upload(client, _pdf(PARTICIPANTS_SENTENCE))

    res = client.post(
        "/api/v1/classify",
        json={"apiKey": "sk-test", "dimensions": ["participantsGroup", "aiTechType"]},
    )

    assert res.status_code == 200
    results = {r["dimension"]: r for r in res.json()["results"]}
    assert results["participantsGroup"]["value"] == "Students"
    assert results["aiTechType"]["value"] == "NR"
    assert results["aiTechType"]["sources"] == []


def test_query_endpoint(client) -> None:
    _upload(client, _pdf(PARTICIPANTS_SENTENCE))

    res = client.post("/api/v1/query", json={"apiKey": "sk-test", "query": "Who took part?"})

    assert res.status_code == 200
    body = res.json()
    assert body["answerable"] is True
    assert body["sources"] == [{"page": 1, "text": "30 graduate students"}]


def test_short_query_envelope(client) -> None:
    _upload(client, _pdf(PARTICIPANTS_SENTENCE))

    res = client.post("/api/v1/query", json={"apiKey": "sk-test", "query": "why"})

    assert res.status_code == 422
    assert res.json()["error"] == "query_too_short"


def test_missing_api_key_is_rejected(client) -> None:
    res = client.post("/api/v1/classify/participantsGroup", json={})

    assert res.status_code == 422


@pytest.mark.parametrize(("upstream", "expected"), [(200, 200), (401, 401), (500, 502)])
def test_validate_api_key(client, upstream, expected) -> None:
    transport = httpx.MockTransport(lambda request: httpx.Response(upstream, json={}))
    app.dependency_overrides[get_api_key_validation_service] = lambda: ApiKeyValidationService(
        transport=transport
    )

    res = client.post("/api/v1/validate-api-key", json={"apiKey": "sk-test"})

    assert res.status_code == expected


def test_rejected_api_key_envelope(client) -> None:
    transport = httpx.MockTransport(lambda request: httpx.Response(401, json={}))
    app.dependency_overrides[get_api_key_validation_service] = lambda: ApiKeyValidationService(
        transport=transport
    )

    res = client.post("/api/v1/validate-api-key", json={"apiKey": "sk-bad"})

    assert res.json() == {"ok": False, "error": "invalid_api_key", "message": "Invalid API Key"}


def test_oversized_upload_envelope(client) -> None:
    too_big = b"%PDF-" + b"0" * (5 * 1024 * 1024 + 10)

    res = _upload(client, too_big)

    assert res.status_code == 413
    assert res.json() == {
        "ok": False,
        "error": "file_too_large",
        "message": "File exceeds the 5 MB upload limit.",
    }
    assert client.get("/api/v1/documents/current").status_code == 404
