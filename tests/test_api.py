"""
Tests for the saju fortune API.
"""

import pytest
from conftest import StatusError, always
from fastapi.testclient import TestClient

from saju_fortune.api.app import app
from saju_fortune.api.dependencies import get_handler
from saju_fortune.classification import ERROR_CATEGORIES, ErrorCategory
from saju_fortune.errors import (
    INVALID_BODY_MESSAGE,
    INVALID_DATE_MESSAGE,
    INVALID_TIME_MESSAGE,
    MISSING_API_KEY_MESSAGE,
    MISSING_NAME_MESSAGE,
    RATE_LIMIT_MESSAGE,
)
from saju_fortune.handlers import FortuneHandler

VALID_BODY = {"name": "홍길동", "birthDate": "1997-03-21", "birthTime": "09:35"}

MODEL_UNAVAILABLE_MESSAGE = next(
    message for category, _, message in ERROR_CATEGORIES if category is ErrorCategory.MODEL_UNAVAILABLE
)
NETWORK_MESSAGE = next(message for category, _, message in ERROR_CATEGORIES if category is ErrorCategory.NETWORK)


@pytest.fixture
def install_handler():
    """Route requests to a given FortuneHandler instead of the lifespan-built one."""

    def _install(handler: FortuneHandler) -> TestClient:
        app.dependency_overrides[get_handler] = lambda: handler
        return TestClient(app)

    yield _install
    app.dependency_overrides.clear()


@pytest.fixture
def make_client(make_service, install_handler):
    """Create a test client backed by a FakeTextGenerator.

    Returns (client, generator).
    """

    def _make(behavior=always("당신의 사주는..."), api_key="test-key"):
        service, generator, _ = make_service(behavior)
        handler = FortuneHandler(
            fortune_service=service,
            api_key_provider=lambda: api_key,
            retry_after_seconds=20,
        )
        return install_handler(handler), generator

    return _make


class BrokenService:
    """FortuneService stand-in whose get_fortune raises an arbitrary error."""

    def __init__(self, error: Exception) -> None:
        self._error = error
        self.cache = None

    async def get_fortune(self, profile, api_key, request_id=None):
        raise self._error


def test_root():
    """Test root endpoint."""
    response = TestClient(app).get("/")
    assert response.status_code == 200
    data = response.json()
    assert data["name"] == "Saju Fortune API"
    assert data["endpoints"]["fortune"] == "/api/saju"


def test_fortune_success(make_client):
    client, generator = make_client()

    response = client.post("/api/saju", json=VALID_BODY)

    assert response.status_code == 200
    data = response.json()
    assert data["result"] == "당신의 사주는..."
    assert data["cached"] is False
    assert data["requestId"]
    assert response.headers["X-Request-ID"] == data["requestId"]
    assert len(generator.calls) == 1


def test_second_identical_request_is_cached(make_client):
    client, generator = make_client()

    first = client.post("/api/saju", json=VALID_BODY).json()
    second = client.post("/api/saju", json=VALID_BODY).json()

    assert first["cached"] is False
    assert second["cached"] is True
    assert second["result"] == first["result"]
    assert second["requestId"] != first["requestId"]
    assert len(generator.calls) == 1


def test_locale_formats_share_cache_with_iso(make_client):
    client, generator = make_client()

    client.post("/api/saju", json=VALID_BODY)
    response = client.post(
        "/api/saju",
        json={"name": "  홍길동 ", "birthDate": "1997. 3. 21.", "birthTime": "오전 9:35"},
    )

    assert response.json()["cached"] is True
    assert len(generator.calls) == 1


def test_missing_api_key_checked_before_validation(make_client):
    client, generator = make_client(api_key=None)

    response = client.post("/api/saju", json={"name": ""})

    assert response.status_code == 500
    data = response.json()
    assert data["error"] == MISSING_API_KEY_MESSAGE
    assert data["requestId"]
    assert generator.calls == []


def test_missing_api_key_checked_before_body_parsing(make_client):
    client, _ = make_client(api_key="")

    response = client.post("/api/saju", content=b"not json", headers={"Content-Type": "application/json"})

    assert response.status_code == 500
    assert response.json()["error"] == MISSING_API_KEY_MESSAGE


def test_missing_name(make_client):
    client, generator = make_client()

    response = client.post("/api/saju", json={"birthDate": "1997-03-21", "birthTime": "09:35"})

    assert response.status_code == 400
    data = response.json()
    assert data["error"] == MISSING_NAME_MESSAGE
    assert data["requestId"]
    assert "received" not in data
    assert generator.calls == []


def test_invalid_calendar_date(make_client):
    client, _ = make_client()

    response = client.post("/api/saju", json={**VALID_BODY, "birthDate": "2021-02-30"})

    assert response.status_code == 400
    data = response.json()
    assert data["error"] == INVALID_DATE_MESSAGE
    assert data["received"] == "2021-02-30"


def test_invalid_time_echoes_received(make_client):
    client, generator = make_client()

    response = client.post("/api/saju", json={**VALID_BODY, "birthTime": "25:00"})

    assert response.status_code == 400
    data = response.json()
    assert data["error"] == INVALID_TIME_MESSAGE
    assert data["received"] == "25:00"
    assert generator.calls == []


@pytest.mark.parametrize(
    "kwargs",
    [
        {"content": b"{not json", "headers": {"Content-Type": "application/json"}},
        {"content": b"", "headers": {"Content-Type": "application/json"}},
        {"json": ["홍길동", "1997-03-21", "09:35"]},
        {"json": {"name": 123, "birthDate": "1997-03-21", "birthTime": "09:35"}},
    ],
)
def test_malformed_body_is_client_error(make_client, kwargs):
    client, generator = make_client()

    response = client.post("/api/saju", **kwargs)

    assert response.status_code == 400
    assert response.json()["error"] == INVALID_BODY_MESSAGE
    assert generator.calls == []


def test_quota_error_returns_429(make_client):
    client, generator = make_client(always(Exception("Quota exceeded for this project")))

    response = client.post("/api/saju", json=VALID_BODY)

    assert response.status_code == 429
    assert response.headers["Retry-After"] == "20"
    data = response.json()
    assert data["error"] == RATE_LIMIT_MESSAGE
    assert data["details"] == "Quota exceeded for this project"
    assert data["retryAfterSeconds"] == 20
    assert data["requestId"]
    assert len(generator.calls) == 1


def test_status_429_returns_429(make_client):
    client, generator = make_client(always(StatusError("Too Many Requests", code=429)))

    response = client.post("/api/saju", json=VALID_BODY)

    assert response.status_code == 429
    assert len(generator.calls) == 1


def test_all_models_not_found(make_client):
    client, generator = make_client(always(Exception("model not found")))

    response = client.post("/api/saju", json=VALID_BODY)

    assert response.status_code == 500
    data = response.json()
    assert data["error"] == MODEL_UNAVAILABLE_MESSAGE
    assert "last=model not found" in data["details"]
    assert "model-a:systemInstruction" in data["details"]
    assert data["requestId"]
    assert "retryAfterSeconds" not in data
    assert len(generator.calls) == 6


def test_failed_request_is_not_cached(make_client):
    client, generator = make_client(always(Exception("model not found")))

    client.post("/api/saju", json=VALID_BODY)
    client.post("/api/saju", json=VALID_BODY)

    assert len(generator.calls) == 12


def test_unknown_error_is_translated(install_handler):
    handler = FortuneHandler(
        fortune_service=BrokenService(RuntimeError("socket timeout while reading")),
        api_key_provider=lambda: "k",
    )
    client = install_handler(handler)

    response = client.post("/api/saju", json=VALID_BODY)

    assert response.status_code == 500
    data = response.json()
    assert data["error"] == NETWORK_MESSAGE
    assert data["details"] == "socket timeout while reading"


def test_unknown_rate_limit_error_maps_to_429(install_handler):
    handler = FortuneHandler(
        fortune_service=BrokenService(RuntimeError("resource exhausted")),
        api_key_provider=lambda: "k",
        retry_after_seconds=20,
    )
    client = install_handler(handler)

    response = client.post("/api/saju", json=VALID_BODY)

    assert response.status_code == 429
    assert response.headers["Retry-After"] == "20"
    assert response.json()["retryAfterSeconds"] == 20


def test_cache_stats_and_clear(make_client):
    client, _ = make_client()
    client.post("/api/saju", json=VALID_BODY)

    stats = client.get("/cache/stats")
    assert stats.status_code == 200
    assert stats.json() == {
        "backend": "memory",
        "total_entries": 1,
        "max_entries": 200,
        "ttl_seconds": 1800,
    }

    cleared = client.delete("/cache")
    assert cleared.status_code == 200
    assert cleared.json()["deleted_count"] == 1
    assert client.get("/cache/stats").json()["total_entries"] == 0


def test_health(make_client):
    client, _ = make_client()
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "cache_healthy": True, "api_key_configured": True}


def test_health_without_api_key(make_client):
    client, _ = make_client(api_key=None)
    data = client.get("/health").json()

    assert data["status"] == "unhealthy"
    assert data["api_key_configured"] is False
