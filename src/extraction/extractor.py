"""Cascading selector extraction against a live page."""

from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable, Sequence

from playwright.async_api import Page

from .html_cleaner import clean_html
from .models import FIELD_CONTENT, FIELD_TAGS, ExtractionAttempt, SiteProfile

logger = logging.getLogger(__name__)

MODE_TEXT = "text"
MODE_HTML = "html"
MODE_LIST = "list"

_READ_SELECTOR_JS = """
({ selector, mode }) => {
  if (mode === "list") {
    return Array.from(document.querySelectorAll(selector))
      .map((el) => (el.textContent || "").trim())
      .filter(Boolean);
  }
  const el = document.querySelector(selector);
  if (!el) return null;
  if (el.tagName.toLowerCase() === "meta") return el.getAttribute("content");
  if (el.hasAttribute("datetime")) return el.getAttribute("datetime");
  if (mode === "html") return el.innerHTML;
  return el.innerText || el.textContent;
}
"""

_JSON_LD_JS = """
() => Array.from(document.querySelectorAll('script[type="application/ld+json"]'))
  .map((script) => script.textContent || "")
"""

_META_MAP_JS = """
() => {
  const meta = {};
  for (const el of document.querySelectorAll("meta[content]")) {
    const key = el.getAttribute("property") || el.getAttribute("name") || el.getAttribute("http-equiv");
    if (key && !(key.toLowerCase() in meta)) meta[key.toLowerCase()] = el.getAttribute("content");
  }
  if (!("content-language" in meta) && document.documentElement.lang) {
    meta["content-language"] = document.documentElement.lang;
  }
  return meta;
}
"""

_DOM_SIGNALS_JS = """
(selector) => {
  const root = (selector && document.querySelector(selector)) || document.body;
  if (!root) return { images: [], codeBlocks: [] };
  const images = Array.from(root.querySelectorAll("img[src]"))
    .map((img) => img.currentSrc || img.src)
    .filter(Boolean)
    .slice(0, 50);
  const codeBlocks = Array.from(root.querySelectorAll("pre"))
    .map((pre) => (pre.textContent || "").trim())
    .filter(Boolean)
    .slice(0, 50);
  return { images, codeBlocks };
}
"""

_REMOVE_JS = """
(selectors) => {
  let removed = 0;
  for (const selector of selectors) {
    try {
      for (const el of document.querySelectorAll(selector)) { el.remove(); removed++; }
    } catch (e) { /* invalid selector */ }
  }
  return removed;
}
"""


def _normalize(raw: Any, mode: str) -> str | None:
    if raw is None:
        return None
    if isinstance(raw, list):
        items = [str(item).strip() for item in raw if str(item).strip()]
        return "\n".join(items) or None
    if not isinstance(raw, str):
        return None
    value = clean_html(raw) if mode == MODE_HTML else raw.strip()
    return value or None


async def cascade(
    field_name: str,
    selectors: Sequence[str],
    read: Callable[[str], Awaitable[Any]],
) -> ExtractionAttempt:
    """Try *selectors* in order and keep the first non-empty result.

    A selector that raises is treated exactly like one that matched nothing.
    """
    attempt = ExtractionAttempt(field=field_name)
    for level, selector in enumerate(selectors):
        attempt.selectors_tried.append(selector)
        try:
            raw = await read(selector)
        except Exception as exc:
            logger.debug(
                "selector failed",
                extra={"field": field_name, "selector": selector, "error": str(exc)},
            )
            continue

        value = raw.strip() if isinstance(raw, str) else None
        if value:
            attempt.value = value
            attempt.used_selector = selector
            attempt.fallback_level = level
            return attempt

    logger.debug("no selector matched", extra={"field": field_name, "tried": len(selectors)})
    return attempt


class ContentExtractor:
    """Runs the cascading fallback search for each field of a profile.

    One instance serves a single fetch; selector results are memoised per
    ``(url, selector, mode)`` for the lifetime of the instance.
    """

    def __init__(self, page: Page, url: str) -> None:
        self._page = page
        self._url = url
        self._cache: dict[tuple[str, str, str], str | None] = {}

    async def read_selector(self, selector: str, mode: str = MODE_TEXT) -> str | None:
        key = (self._url, selector, mode)
        if key in self._cache:
            return self._cache[key]
        raw = await self._page.evaluate(_READ_SELECTOR_JS, {"selector": selector, "mode": mode})
        value = _normalize(raw, mode)
        self._cache[key] = value
        return value

    async def extract_field(self, field_name: str, selectors: Sequence[str]) -> ExtractionAttempt:
        if field_name == FIELD_CONTENT:
            mode = MODE_HTML
        elif field_name == FIELD_TAGS:
            mode = MODE_LIST
        else:
            mode = MODE_TEXT

        async def read(selector: str) -> str | None:
            return await self.read_selector(selector, mode)

        return await cascade(field_name, selectors, read)

    async def extract_profile(
        self, profile: SiteProfile, fields: Sequence[str] | None = None
    ) -> dict[str, ExtractionAttempt]:
        """Extract every field of *profile* (or just *fields*), in profile order."""
        names = fields if fields is not None else list(profile.selectors)
        attempts: dict[str, ExtractionAttempt] = {}
        for name in names:
            attempts[name] = await self.extract_field(name, profile.selectors_for(name))
        return attempts


async def read_json_ld_blocks(page: Page) -> list[str]:
    blocks = await page.evaluate(_JSON_LD_JS)
    return [b for b in blocks or [] if isinstance(b, str)]


async def read_meta_map(page: Page) -> dict[str, str]:
    meta = await page.evaluate(_META_MAP_JS)
    if not isinstance(meta, dict):
        return {}
    return {str(k): v for k, v in meta.items() if isinstance(v, str)}


async def read_dom_signals(page: Page, content_selector: str | None) -> tuple[list[str], list[str]]:
    """Images and code blocks inside the content element (or the body)."""
    signals = await page.evaluate(_DOM_SIGNALS_JS, content_selector)
    if not isinstance(signals, dict):
        return [], []
    images = [s for s in signals.get("images") or [] if isinstance(s, str)]
    code_blocks = [s for s in signals.get("codeBlocks") or [] if isinstance(s, str)]
    return images, code_blocks


async def remove_elements(page: Page, selectors: Sequence[str]) -> int:
    if not selectors:
        return 0
    removed = await page.evaluate(_REMOVE_JS, list(selectors))
    return int(removed or 0)
