"""API key check for the translation endpoints."""
import hmac
import logging
from typing import Annotated, Optional

from fastapi import HTTPException, Security, status
from fastapi.security import APIKeyHeader

from ..config import load_api_key


logger = logging.getLogger(__name__)

API_KEY_HEADER = "X-KMQ-API-KEY"

api_key_header = APIKeyHeader(name=API_KEY_HEADER, auto_error=False)


def api_key_matches(provided: Optional[str], expected: str) -> bool:
    """Constant-time comparison; a missing key never matches."""
    if not provided:
        return False
    return hmac.compare_digest(provided.encode(), expected.encode())


async def require_api_key(
    api_key: Annotated[Optional[str], Security(api_key_header)] = None
) -> str:
    """Reject requests whose header does not carry the configured key.

    Raises:
        ApiKeyNotConfiguredError: KMQ_API_KEY unset (served as 500)
        HTTPException: 401 if the header is missing or wrong
    """
    if not api_key_matches(api_key, load_api_key()):
        logger.warning(
            "Rejected translate request with %s API key",
            "missing" if not api_key else "invalid",
        )
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid API key",
            headers={"WWW-Authenticate": "API-Key"},
        )
    return api_key
