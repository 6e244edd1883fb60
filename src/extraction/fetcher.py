"""Article fetch orchestration: navigation, extraction, fusion and scoring."""

from __future__ import annotations

import logging
from typing import Any, Mapping, Sequence

from playwright.async_api import Page
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from src.config import Settings, get_settings

from .browser import PageProvider, PlaywrightPageProvider
from .errors import ArticleFetchError, PageStatusError, classify_error
from .extractor import (
    ContentExtractor,
    read_dom_signals,
    read_json_ld_blocks,
    read_meta_map,
    remove_elements,
)
from .fusion import (
    SOURCE_CONTENT,
    SOURCE_META,
    SOURCE_STRUCTURED,
    contributing_sources,
    merge_with_provenance,
)
from .models import (
    FIELD_AUTHOR,
    FIELD_CONTENT,
    FIELD_PUBLISHED_DATE,
    FIELD_TAGS,
    FIELD_TITLE,
    ArticleContent,
    ArticleMetadata,
    ExtractionAttempt,
    ExtractionMethod,
    SiteProfile,
)
from .reading_time import count_words, estimate_reading_time
from .scoring import QualitySignals, quality_score, reliability_score
from .sites import SiteRegistry, get_default_registry
from .structured import parse_json_ld, parse_meta_tags

logger = logging.getLogger(__name__)

STRUCTURED_SELECTOR = "json-ld"
UNTITLED = "Untitled"

_SCROLL_JS = """
async ({ steps, pauseMs }) => {
  const sleep = (ms) => new Promise((resolve) => setTimeout(resolve, ms));
  for (let i = 0; i < steps; i++) {
    window.scrollBy(0, window.innerHeight);
    await sleep(pauseMs);
    if (window.innerHeight + window.scrollY >= document.body.scrollHeight) break;
  }
  window.scrollTo(0, 0);
}
"""


def choose_extraction_method(
    provenance: Mapping[str, str],
    profile: SiteProfile,
    content_attempt: ExtractionAttempt | None,
) -> ExtractionMethod:
    """Label the result by the highest-ranked source that supplied a field.

    Ranking: JSON-LD, then DOM selectors of a known site, then a semantic
    content container found by the generic profile, then meta tags. Anything
    else (whole-body text or nothing at all) is ``fallback``.

    This departs from the fusion priority on purpose: there meta tags beat
    DOM values, here a DOM strategy outranks meta tags even when a meta tag
    supplied the title.
    """
    sources = contributing_sources(provenance)
    if SOURCE_STRUCTURED in sources:
        return "structured-data"
    if SOURCE_CONTENT in sources:
        if not profile.is_generic:
            return "site-specific"
        if content_attempt is not None and content_attempt.used_selector not in (None, "body"):
            return "readability"
    if SOURCE_META in sources:
        return "meta-tags"
    return "fallback"


def _split_tags(value: Any) -> tuple[str, ...]:
    if isinstance(value, str):
        items = value.splitlines()
    elif isinstance(value, (list, tuple)):
        items = [str(v) for v in value]
    else:
        return ()
    seen: dict[str, None] = {}
    for item in items:
        item = item.strip().lstrip("#").strip()
        if item:
            seen.setdefault(item, None)
    return tuple(seen)


def build_article(
    *,
    url: str,
    profile: SiteProfile,
    structured: Mapping[str, Any] | None,
    meta: Mapping[str, Any] | None,
    attempts: Mapping[str, ExtractionAttempt],
    images: Sequence[str] | None = None,
    code_blocks: Sequence[str] | None = None,
) -> ArticleContent:
    """Fuse the per-source bags into a scored ArticleContent.

    Shared by the browser path and the direct-fetch path so both label and
    score results identically.
    """
    structured = dict(structured or {})
    article_body = structured.pop("article_body", None)

    content_attempt = attempts.get(FIELD_CONTENT)
    content_text = content_attempt.value if content_attempt and content_attempt.value else ""

    dom_bag: dict[str, Any] = {}
    for field_name in (FIELD_TITLE, FIELD_AUTHOR, FIELD_PUBLISHED_DATE, FIELD_TAGS):
        attempt = attempts.get(field_name)
        if attempt is not None and attempt.value:
            dom_bag[field_name] = attempt.value
    if content_text:
        dom_bag[FIELD_CONTENT] = content_text
    elif article_body:
        # JSON-LD only carries the body when the DOM did not yield one
        structured[FIELD_CONTENT] = article_body

    merged, provenance = merge_with_provenance(structured=structured, meta=meta, content=dom_bag)

    content = merged.get(FIELD_CONTENT, "")
    title = merged.get(FIELD_TITLE) or UNTITLED
    reading_time = estimate_reading_time(content)
    method = choose_extraction_method(provenance, profile, content_attempt)

    metadata = ArticleMetadata(
        author=merged.get("author"),
        published_date=merged.get("published_date"),
        modified_date=merged.get("modified_date"),
        reading_time=reading_time,
        word_count=count_words(content),
        tags=_split_tags(merged.get("tags")),
        description=merged.get("description"),
        image=merged.get("image") or (images[0] if images else None),
        language=merged.get("language"),
        images=tuple(images or ()),
        code_blocks=tuple(code_blocks or ()),
    )

    signals = QualitySignals(
        title=merged.get(FIELD_TITLE),
        content=content,
        author=metadata.author,
        published_date=metadata.published_date,
        reading_time=reading_time,
        images=images,
        code_blocks=code_blocks,
        extraction_method=method,
    )

    used_selectors = [
        attempt.used_selector
        for attempt in attempts.values()
        if attempt.used_selector and provenance.get(attempt.field) == SOURCE_CONTENT
    ]
    if SOURCE_STRUCTURED in provenance.values():
        used_selectors.insert(0, STRUCTURED_SELECTOR)

    return ArticleContent(
        url=url,
        title=title,
        content=content,
        metadata=metadata,
        extraction_method=method,
        quality_score=quality_score(signals),
        reliability_score=reliability_score(method, used_selectors),
    )


class ArticleContentFetcher:
    """Fetches one URL per call through a browser page.

    Each call acquires its own page from the provider and releases it on
    every exit path. Failures surface as ``ArticleFetchError`` with a
    classification; this class never retries.
    """

    def __init__(
        self,
        page_provider: PageProvider,
        *,
        registry: SiteRegistry | None = None,
        settings: Settings | None = None,
    ) -> None:
        self._pages = page_provider
        self._registry = registry or get_default_registry()
        self._settings = settings or get_settings()

    async def fetch(self, url: str, attempt: int = 1) -> ArticleContent:
        profile = self._registry.resolve(url)
        logger.info(
            "article fetch started",
            extra={"url": url, "profile": profile.name, "attempt": attempt},
        )

        try:
            async with self._pages.page() as page:
                await self._navigate(page, url, profile)
                article = await self._extract(page, url, profile)
        except ArticleFetchError:
            raise
        except Exception as exc:
            classification = classify_error(exc, attempt)
            logger.warning(
                "article fetch failed",
                extra={
                    "url": url,
                    "error_type": classification.type,
                    "should_retry": classification.should_retry,
                    "fallback_strategy": classification.fallback_strategy,
                    "error": str(exc)[:200],
                },
            )
            raise ArticleFetchError(url, f"Failed to fetch article content: {exc}", classification) from exc

        logger.info(
            "article fetch complete",
            extra={
                "url": url,
                "extraction_method": article.extraction_method,
                "quality_score": round(article.quality_score, 3),
                "content_length": len(article.content),
            },
        )
        return article

    async def _navigate(self, page: Page, url: str, profile: SiteProfile) -> None:
        response = await page.goto(
            url,
            wait_until="domcontentloaded",
            timeout=self._settings.navigation_timeout_ms,
        )
        if response is not None and response.status >= 400:
            raise PageStatusError(response.status, url)

        if profile.wait_time_ms > 0:
            await page.wait_for_timeout(profile.wait_time_ms)

        if profile.js_required:
            content_selectors = ", ".join(profile.selectors_for(FIELD_CONTENT))
            try:
                await page.wait_for_selector(content_selectors, timeout=self._settings.js_wait_timeout_ms)
            except PlaywrightTimeoutError:
                # rendered content never showed up; extract whatever is there
                logger.debug("content selector wait timed out", extra={"url": url, "profile": profile.name})

        if profile.scroll_to_load:
            await page.evaluate(
                _SCROLL_JS,
                {"steps": self._settings.scroll_steps, "pauseMs": self._settings.scroll_pause_ms},
            )

    async def _extract(self, page: Page, url: str, profile: SiteProfile) -> ArticleContent:
        structured = parse_json_ld(await read_json_ld_blocks(page))
        meta = parse_meta_tags(await read_meta_map(page))

        extractor = ContentExtractor(page, url)
        header_fields = [name for name in profile.selectors if name != FIELD_CONTENT]
        attempts = await extractor.extract_profile(profile, header_fields)

        removed = await remove_elements(page, profile.exclude_selectors)
        if removed:
            logger.debug("noise elements removed", extra={"url": url, "count": removed})

        content_attempt = await extractor.extract_field(FIELD_CONTENT, profile.selectors_for(FIELD_CONTENT))
        attempts[FIELD_CONTENT] = content_attempt
        images, code_blocks = await read_dom_signals(page, content_attempt.used_selector)

        for attempt in attempts.values():
            logger.debug(
                "field extracted",
                extra={
                    "url": url,
                    "field": attempt.field,
                    "selector": attempt.used_selector,
                    "fallback_level": attempt.fallback_level,
                },
            )

        return build_article(
            url=url,
            profile=profile,
            structured=structured,
            meta=meta,
            attempts=attempts,
            images=images,
            code_blocks=code_blocks,
        )


async def fetch_article_content(
    url: str,
    page_provider: PageProvider | None = None,
    *,
    attempt: int = 1,
) -> ArticleContent:
    """Fetch and score the article at *url*.

    Raises ``ArticleFetchError`` on failure; callers are expected to fall
    back to ``generate_rating_prompt(None, url)``.
    """
    settings = get_settings()
    provider = page_provider or PlaywrightPageProvider.from_settings(settings)
    fetcher = ArticleContentFetcher(provider, settings=settings)
    return await fetcher.fetch(url, attempt=attempt)
