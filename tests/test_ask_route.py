import httpx
from fastapi.testclient import TestClient

from neura.dependencies import get_gemini_service, get_http_client
from neura.exceptions import GeminiServiceError


class DummyGeminiService:
    def __init__(self) -> None:
        self.questions: list[str] = []

    async def generate(self, question: str) -> str:
        self.questions.append(question)
        return f"Answer to: {question}"


class FailingGeminiService:
    async def generate(self, question: str) -> str:
        raise GeminiServiceError(
            "Unexpected response from Gemini API",
            status_code=200,
            data={"unexpected": "structure"},
        )


def get_test_client(app, service) -> TestClient:
    app.dependency_overrides[get_gemini_service] = lambda: service
    return TestClient(app)


def get_upstream_client(app, handler) -> TestClient:
    upstream = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    app.dependency_overrides[get_http_client] = lambda: upstream
    return TestClient(app)


def test_ask_happy_path(app) -> None:
    service = DummyGeminiService()
    client = get_test_client(app, service)

    response = client.post("/ask", json={"question": "hello"})

    assert response.status_code == 200
    assert response.json() == {"answer": "Answer to: hello"}
    assert service.questions == ["hello"]


def test_ask_service_error(app) -> None:
    client = get_test_client(app, FailingGeminiService())

    response = client.post("/ask", json={"question": "hello"})

    assert response.status_code == 500
    body = response.json()
    assert body["error"] == "Unexpected response from Gemini API"
    assert body["data"] == {"unexpected": "structure"}


def test_ask_blank_question_rejected(app) -> None:
    service = DummyGeminiService()
    client = get_test_client(app, service)

    response = client.post("/ask", json={"question": "   "})

    assert response.status_code == 400
    assert response.json()["error"] == "validation_error"
    assert service.questions == []


def test_ask_question_length_enforced(app) -> None:
    client = get_test_client(app, DummyGeminiService())

    response = client.post("/ask", json={"question": "a" * 5000})

    assert response.status_code == 400
    assert response.json()["error"] == "validation_error"


def test_ask_invalid_payload(app) -> None:
    client = get_test_client(app, DummyGeminiService())

    response = client.post("/ask", json={"text": "hello"})

    assert response.status_code == 422
    assert response.json()["error"] == "invalid_payload"


def test_ask_relays_upstream_answer(app) -> None:
    async def handler(_: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200, json={"candidates": [{"content": {"parts": [{"text": "hi"}]}}]}
        )

    client = get_upstream_client(app, handler)

    response = client.post("/ask", json={"question": "hello"})

    assert response.status_code == 200
    assert response.json() == {"answer": "hi"}


def test_ask_malformed_upstream_response(app) -> None:
    async def handler(_: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"usageMetadata": {}})

    client = get_upstream_client(app, handler)

    response = client.post("/ask", json={"question": "hello"})

    assert response.status_code == 500
    body = response.json()
    assert "error" in body
    assert body["data"] == {"usageMetadata": {}}


def test_cors_headers_present(app) -> None:
    client = get_test_client(app, DummyGeminiService())

    response = client.post(
        "/ask",
        json={"question": "hello"},
        headers={"Origin": "http://localhost:3000"},
    )

    assert response.headers["access-control-allow-origin"] == "*"


def test_healthz(app) -> None:
    client = TestClient(app)

    assert client.get("/healthz").json() == {"status": "ok"}
