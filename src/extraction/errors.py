"""Failure classification with retry guidance."""

from __future__ import annotations

import asyncio
import re
from typing import Any

import httpx
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from .models import ErrorClassification

_HTTP_STATUS_RE = re.compile(r"\bHTTP\s+(\d{3})\b", re.IGNORECASE)


class ArticleFetchError(Exception):
    """A page-level fetch failure annotated with retry guidance.

    The engine never retries on its own; callers read ``classification`` and
    decide. The original error is kept as ``__cause__``.
    """

    def __init__(self, url: str, message: str, classification: ErrorClassification) -> None:
        super().__init__(message)
        self.url = url
        self.classification = classification


class PageStatusError(Exception):
    """Raised when navigation succeeds but the server answers with an error status."""

    def __init__(self, status: int, url: str = "") -> None:
        reason = "Forbidden" if status == 403 else "error response"
        super().__init__(f"HTTP {status} {reason} while loading {url}".rstrip())
        self.status = status
        self.url = url


def describe_error(error: Any) -> str:
    """Best-effort message for errors of any shape (exception, str, dict, None)."""
    if error is None:
        return ""
    if isinstance(error, BaseException):
        return str(error)
    if isinstance(error, str):
        return error
    if isinstance(error, dict):
        message = error.get("message")
        return message if isinstance(message, str) else ""
    message = getattr(error, "message", None)
    return message if isinstance(message, str) else ""


def _error_name(error: Any) -> str:
    if isinstance(error, BaseException):
        return type(error).__name__
    if isinstance(error, dict):
        name = error.get("name")
        return name if isinstance(name, str) else ""
    name = getattr(error, "name", None)
    return name if isinstance(name, str) else ""


def _http_status(error: Any, message: str) -> int | None:
    if isinstance(error, PageStatusError):
        return error.status
    match = _HTTP_STATUS_RE.search(message)
    return int(match.group(1)) if match else None


def _is_timeout(error: Any, name: str, message: str) -> bool:
    if isinstance(error, (PlaywrightTimeoutError, httpx.TimeoutException, asyncio.TimeoutError, TimeoutError)):
        return True
    lowered = message.lower()
    return name == "TimeoutError" or ("timeout" in lowered and "navigat" in lowered)


def classify_error(error: Any, attempt: int = 1) -> ErrorClassification:
    """Map a caught failure of any shape onto the closed retry taxonomy.

    ``attempt`` is the 1-based attempt number of the fetch that failed; it
    only affects ``should_retry`` and ``delay_ms`` for timeouts and network
    failures.
    """
    message = describe_error(error)
    lowered = message.lower()
    name = _error_name(error)
    status = _http_status(error, message)

    if _is_timeout(error, name, message):
        return ErrorClassification(
            type="timeout",
            should_retry=attempt < 3,
            delay_ms=2000 * attempt,
            fallback_strategy="simplified-selectors",
        )

    if "net::" in message or isinstance(error, httpx.TransportError):
        return ErrorClassification(
            type="network",
            should_retry=attempt < 2,
            delay_ms=5000,
            fallback_strategy="cached-content",
        )

    if status == 403 or "forbidden" in lowered:
        return ErrorClassification(
            type="forbidden",
            should_retry=False,
            delay_ms=0,
            fallback_strategy="none",
        )

    if "navigat" in lowered or (status is not None and status >= 400):
        return ErrorClassification(
            type="navigation",
            should_retry=True,
            delay_ms=1000,
            fallback_strategy="direct-fetch",
        )

    if isinstance(error, Exception) or message:
        return ErrorClassification(
            type="extraction",
            should_retry=False,
            delay_ms=0,
            fallback_strategy="basic-selectors",
        )

    return ErrorClassification(
        type="unknown",
        should_retry=False,
        delay_ms=0,
        fallback_strategy="none",
    )
