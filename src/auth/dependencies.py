"""X-API-Key guard for the article routes (FastAPI dependency)."""

import hmac
import logging

from fastapi import Depends, HTTPException, Security, status
from fastapi.security import APIKeyHeader

from src.config import Settings, get_settings

logger = logging.getLogger(__name__)

_api_key_header = APIKeyHeader(name="X-API-Key", auto_error=False)


def _reject(reason: str) -> HTTPException:
    logger.info("api key rejected", extra={"reason": reason})
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Invalid API key",
    )


async def require_api_key(
    api_key: str | None = Security(_api_key_header),
    settings: Settings = Depends(get_settings),
) -> str:
    """Compare the X-API-Key header with ``settings.api_key`` in constant time."""
    if not api_key:
        raise _reject("missing")
    if not hmac.compare_digest(api_key.encode(), settings.api_key.encode()):
        raise _reject("mismatch")
    return api_key
