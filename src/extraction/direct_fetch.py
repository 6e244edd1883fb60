"""Plain HTTP article fetcher, used when the browser cannot navigate."""

from __future__ import annotations

import logging

import httpx
from bs4 import BeautifulSoup

from src.config import Settings

from .errors import ArticleFetchError, PageStatusError, classify_error
from .fetcher import build_article
from .html_cleaner import clean_html
from .models import FIELD_CONTENT, ArticleContent, ExtractionAttempt
from .sites import GENERIC_PROFILE
from .structured import extract_from_html

logger = logging.getLogger(__name__)

# Body containers, most specific first
_CONTAINERS = ("article", "main", "body")
_NOISE_TAGS = ("nav", "header", "footer", "aside")


def extract_body(html_text: str) -> ExtractionAttempt:
    """Cascade over ``<article>``, ``<main>`` and ``<body>`` in raw HTML.

    The outermost matching element wins, so nested cards or embeds stay
    part of the body. Navigation, header, footer and aside elements are
    dropped before any container is read.
    """
    attempt = ExtractionAttempt(field=FIELD_CONTENT)
    soup = BeautifulSoup(html_text, "html.parser")
    for element in soup.find_all(_NOISE_TAGS):
        # Nested noise goes with its already removed ancestor
        if not element.decomposed:
            element.decompose()

    for level, name in enumerate(_CONTAINERS):
        attempt.selectors_tried.append(name)
        container = soup.find(name)
        if container is None:
            continue
        text = clean_html(container.decode_contents())
        if text:
            attempt.value = text
            attempt.used_selector = name
            attempt.fallback_level = level
            break
    return attempt


class DirectFetcher:
    """Fetches raw HTML over HTTP and scores it with the generic profile.

    No JavaScript runs, so images and code blocks are never collected and
    the quality maximum is reduced accordingly.
    """

    def __init__(
        self,
        *,
        timeout: float = 15.0,
        user_agent: str = "article-content-extractor/0.1.0",
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._timeout = timeout
        self._user_agent = user_agent
        self._transport = transport

    @classmethod
    def from_settings(cls, settings: Settings) -> DirectFetcher:
        return cls(timeout=settings.direct_fetch_timeout_seconds, user_agent=settings.user_agent)

    async def fetch(self, url: str, attempt: int = 1) -> ArticleContent:
        logger.info("direct fetch started", extra={"url": url, "attempt": attempt})
        try:
            async with httpx.AsyncClient(
                follow_redirects=True,
                headers={"User-Agent": self._user_agent},
                transport=self._transport,
            ) as client:
                resp = await client.get(url, timeout=self._timeout)
            if not resp.is_success:
                raise PageStatusError(resp.status_code, url)
            html_text = resp.text
        except Exception as exc:
            classification = classify_error(exc, attempt)
            logger.warning(
                "direct fetch failed",
                extra={"url": url, "error_type": classification.type, "error": str(exc)[:200]},
            )
            raise ArticleFetchError(url, f"Direct fetch failed: {exc}", classification) from exc

        structured, meta = extract_from_html(html_text)
        body = extract_body(html_text)

        article = build_article(
            url=url,
            profile=GENERIC_PROFILE,
            structured=structured,
            meta=meta,
            attempts={FIELD_CONTENT: body},
        )
        logger.info(
            "direct fetch complete",
            extra={
                "url": url,
                "extraction_method": article.extraction_method,
                "quality_score": round(article.quality_score, 3),
                "content_length": len(article.content),
            },
        )
        return article
