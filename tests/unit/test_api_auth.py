"""Unit tests for translation API key checks."""
import pytest
from fastapi import HTTPException
from fastapi.testclient import TestClient

from src.kmq_core.api.auth import api_key_matches, require_api_key
from src.kmq_core.config import load_api_key
from src.kmq_core.exceptions import ApiKeyNotConfiguredError, KMQError
from src.kmq_core.main import create_app


def test_load_api_key_strips_whitespace(monkeypatch):
    """Test the configured key is read from KMQ_API_KEY."""
    monkeypatch.setenv("KMQ_API_KEY", "  secret-key \n")

    assert load_api_key() == "secret-key"


@pytest.mark.parametrize("value", [None, "", "   "])
def test_load_api_key_not_configured(monkeypatch, value):
    """Test unset or blank keys raise the adapter's own error."""
    if value is None:
        monkeypatch.delenv("KMQ_API_KEY", raising=False)
    else:
        monkeypatch.setenv("KMQ_API_KEY", value)

    with pytest.raises(ApiKeyNotConfiguredError) as exc_info:
        load_api_key()

    assert isinstance(exc_info.value, KMQError)
    assert exc_info.value.name == "KMQ_API_KEY"


def test_api_key_matches():
    """Test key comparison, including missing keys."""
    assert api_key_matches("secret", "secret")
    assert not api_key_matches("Secret", "secret")
    assert not api_key_matches("", "secret")
    assert not api_key_matches(None, "secret")


@pytest.mark.asyncio
async def test_require_api_key_accepts_configured_key(monkeypatch):
    """Test the dependency returns the accepted key."""
    monkeypatch.setenv("KMQ_API_KEY", "secret")

    assert await require_api_key("secret") == "secret"


@pytest.mark.asyncio
@pytest.mark.parametrize("provided", [None, "wrong"])
async def test_require_api_key_rejects_missing_or_wrong(monkeypatch, provided):
    """Test missing and wrong keys both give 401."""
    monkeypatch.setenv("KMQ_API_KEY", "secret")

    with pytest.raises(HTTPException) as exc_info:
        await require_api_key(provided)

    assert exc_info.value.status_code == 401
    assert exc_info.value.headers == {"WWW-Authenticate": "API-Key"}


def test_unconfigured_key_served_as_adapter_error(monkeypatch):
    """Test the app turns a missing server key into a typed 500."""
    monkeypatch.delenv("KMQ_API_KEY", raising=False)

    with TestClient(create_app()) as client:
        response = client.post(
            "/api/v1/translate",
            json={"calls": [{"type": "identify", "userId": "id"}]},
            headers={"X-KMQ-API-KEY": "anything"},
        )

    assert response.status_code == 500
    assert response.json() == {
        "detail": "KMQ_API_KEY environment variable not configured",
        "error": "ApiKeyNotConfiguredError",
    }
