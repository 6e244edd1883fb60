"""Service layer: fetch orchestration and fallbacks for the API routes."""

from __future__ import annotations

import logging

from src.api.schemas import RatingPromptRequest, ToolResponse, ToolTextContent
from src.config import Settings
from src.extraction import (
    ArticleContent,
    ArticleContentFetcher,
    ArticleFetchError,
    DirectFetcher,
    generate_rating_prompt,
)

logger = logging.getLogger(__name__)

PREVIEW_CHARS = 500


def _text_response(text: str, *, is_error: bool = False) -> ToolResponse:
    return ToolResponse(content=[ToolTextContent(text=text)], is_error=is_error)


def _null_prompt_response(article_id: int, url: str) -> ToolResponse:
    prompt = generate_rating_prompt(None, url)
    return _text_response(f"Rating prompt for article ID {article_id}:\n\n{prompt}")


def _content_prompt_response(article_id: int, url: str, article: ArticleContent) -> ToolResponse:
    prompt = generate_rating_prompt(article, url)
    text = (
        f"Article ID: {article_id}\n"
        f"Title: {article.title}\n"
        f"URL: {url}\n\n"
        f"Content preview (first {PREVIEW_CHARS} chars):\n"
        f"{article.content[:PREVIEW_CHARS]}...\n\n"
        f"===== RATING PROMPT =====\n{prompt}"
    )
    return _text_response(text)


async def fetch_content(fetcher: ArticleContentFetcher, url: str) -> ArticleContent:
    """Fetch *url* through the browser; ``ArticleFetchError`` propagates."""
    return await fetcher.fetch(url)


async def _fetch_with_fallback(
    fetcher: ArticleContentFetcher,
    direct_fetcher: DirectFetcher | None,
    settings: Settings,
    url: str,
) -> ArticleContent | None:
    """Browser fetch, then direct fetch when the failure suggests it.

    Returns ``None`` when every route failed.
    """
    try:
        return await fetcher.fetch(url)
    except ArticleFetchError as exc:
        strategy = exc.classification.fallback_strategy
        logger.warning(
            "content fetch failed, falling back",
            extra={"url": url, "error_type": exc.classification.type, "fallback_strategy": strategy},
        )
        if strategy != "direct-fetch" or direct_fetcher is None or not settings.direct_fetch_enabled:
            return None

    try:
        return await direct_fetcher.fetch(url)
    except ArticleFetchError as exc:
        logger.warning(
            "direct fetch fallback failed",
            extra={"url": url, "error_type": exc.classification.type},
        )
        return None


async def prepare_rating_prompt(
    fetcher: ArticleContentFetcher,
    direct_fetcher: DirectFetcher | None,
    settings: Settings,
    body: RatingPromptRequest,
) -> ToolResponse:
    """Build the rating tool response for one article.

    Fetch failures never abort the flow: they degrade to the prompt built
    from no content. Only unexpected errors come back with ``is_error``.
    """
    if not body.fetch_content:
        return _null_prompt_response(body.article_id, body.url)

    try:
        article = await _fetch_with_fallback(fetcher, direct_fetcher, settings, body.url)
    except Exception as exc:
        logger.exception("rating prompt preparation failed", extra={"url": body.url})
        return _text_response(f"Error fetching article content: {exc}", is_error=True)

    if article is None:
        return _null_prompt_response(body.article_id, body.url)

    logger.info(
        "rating prompt prepared",
        extra={
            "article_id": body.article_id,
            "url": body.url,
            "extraction_method": article.extraction_method,
            "quality_score": round(article.quality_score, 3),
        },
    )
    return _content_prompt_response(body.article_id, body.url, article)
