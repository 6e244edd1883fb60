"""
Metadata bags from structured data (JSON-LD) and social/meta tags.

Each function returns a plain dict using the fusion field names
(``title``, ``author``, ``published_date``, ``modified_date``,
``description``, ``image``, ``tags``, ``language``); fields that were not
found are simply absent. The browser path feeds raw JSON-LD script bodies
and a ``{name_or_property: content}`` map read from the live page; the
direct-fetch path feeds a raw HTML document.
"""

from __future__ import annotations

import html
import json
import logging
import re
from typing import Any, Iterable, Mapping

logger = logging.getLogger(__name__)

# JSON-LD script block pattern
_JSONLD_BLOCK_RE = re.compile(
    r'<script[^>]*type=["\']application/ld\+json["\'][^>]*>(.*?)</script>',
    re.DOTALL | re.IGNORECASE,
)
_META_TAG_RE = re.compile(r"<meta\b[^>]*>", re.IGNORECASE)
_ATTR_RE = re.compile(r'([\w:-]+)\s*=\s*(?:"([^"]*)"|\'([^\']*)\')')
_TITLE_RE = re.compile(r"<title[^>]*>(.*?)</title>", re.DOTALL | re.IGNORECASE)
_HTML_LANG_RE = re.compile(r"<html\b[^>]*\blang=[\"']([^\"']+)[\"']", re.IGNORECASE)

# Article types to process in JSON-LD
ARTICLE_TYPES = frozenset(
    {
        "article",
        "newsarticle",
        "blogposting",
        "techarticle",
        "reportagenewsarticle",
        "scholarlyarticle",
        "socialmediaposting",
        "webpage",
    }
)

# meta key -> fusion field, in lookup order
_META_FIELDS: dict[str, tuple[str, ...]] = {
    "title": ("og:title", "twitter:title"),
    "author": ("author", "article:author", "twitter:creator"),
    "published_date": ("article:published_time", "date", "pubdate"),
    "modified_date": ("article:modified_time", "og:updated_time"),
    "description": ("og:description", "description", "twitter:description"),
    "image": ("og:image", "twitter:image"),
    "language": ("content-language", "og:locale"),
}


def _clean_str(value: Any) -> str | None:
    if isinstance(value, str):
        value = value.strip()
        return value or None
    return None


def _author_name(author: Any) -> str | None:
    """
    Extract author name from a JSON-LD author field.

    Handles a plain string, a ``{"@type": "Person", "name": ...}`` object,
    or a list of either (names joined with ``"; "``).
    """
    if isinstance(author, str):
        return _clean_str(author)
    if isinstance(author, dict):
        return _clean_str(author.get("name"))
    if isinstance(author, list):
        names = [name for name in (_author_name(a) for a in author) if name]
        if names:
            return "; ".join(names)
    return None


def _image_url(image: Any) -> str | None:
    if isinstance(image, str):
        return _clean_str(image)
    if isinstance(image, dict):
        return _clean_str(image.get("url") or image.get("contentUrl"))
    if isinstance(image, list):
        for item in image:
            url = _image_url(item)
            if url:
                return url
    return None


def _keywords(value: Any) -> list[str]:
    if isinstance(value, str):
        return [kw.strip() for kw in value.split(",") if kw.strip()]
    if isinstance(value, list):
        return [kw.strip() for kw in value if isinstance(kw, str) and kw.strip()]
    return []


def _iter_items(data: Any) -> Iterable[dict[str, Any]]:
    """Flatten top-level lists and ``@graph`` containers into item dicts."""
    if isinstance(data, list):
        for entry in data:
            yield from _iter_items(entry)
    elif isinstance(data, dict):
        graph = data.get("@graph")
        if isinstance(graph, list):
            yield from _iter_items(graph)
        else:
            yield data


def _is_article(item: dict[str, Any]) -> bool:
    item_type = item.get("@type", "")
    types = item_type if isinstance(item_type, list) else [item_type]
    return any(isinstance(t, str) and t.lower() in ARTICLE_TYPES for t in types)


def parse_json_ld(blocks: Iterable[str]) -> dict[str, Any]:
    """Build a metadata bag from raw JSON-LD script bodies.

    Only article-like items (including ``WebPage``) are read; the first value
    found for each field wins. Malformed blocks are skipped.
    """
    result: dict[str, Any] = {}

    for raw in blocks:
        try:
            data = json.loads(raw)
        except (json.JSONDecodeError, TypeError):
            logger.debug("skipping malformed json-ld block", extra={"length": len(raw or "")})
            continue

        for item in _iter_items(data):
            if not _is_article(item):
                continue

            if "title" not in result:
                headline = _clean_str(item.get("headline")) or _clean_str(item.get("name"))
                if headline:
                    result["title"] = headline

            if "author" not in result:
                author = _author_name(item.get("author"))
                if author:
                    result["author"] = author

            if "published_date" not in result:
                published = _clean_str(item.get("datePublished")) or _clean_str(item.get("dateCreated"))
                if published:
                    result["published_date"] = published

            if "modified_date" not in result:
                modified = _clean_str(item.get("dateModified"))
                if modified:
                    result["modified_date"] = modified

            if "description" not in result:
                description = _clean_str(item.get("description"))
                if description:
                    result["description"] = description

            if "image" not in result:
                image = _image_url(item.get("image"))
                if image:
                    result["image"] = image

            if "tags" not in result:
                tags = _keywords(item.get("keywords"))
                if tags:
                    result["tags"] = tags

            if "language" not in result:
                language = _clean_str(item.get("inLanguage"))
                if language:
                    result["language"] = language

            if "article_body" not in result:
                body = _clean_str(item.get("articleBody"))
                if body:
                    result["article_body"] = body

    return result


def parse_meta_tags(meta: Mapping[str, str]) -> dict[str, Any]:
    """Build a metadata bag from a ``{name/property: content}`` map.

    Keys are compared case-insensitively.
    """
    normalized = {key.lower(): value for key, value in meta.items() if isinstance(key, str)}
    result: dict[str, Any] = {}

    for target, keys in _META_FIELDS.items():
        for key in keys:
            value = _clean_str(normalized.get(key))
            if value:
                result[target] = value
                break

    tags = [t.strip() for t in normalized.get("article:tag", "").split(",") if t.strip()]
    if not tags:
        tags = _keywords(normalized.get("keywords", ""))
    if tags:
        result["tags"] = tags

    return result


def read_meta_tags(html_text: str) -> dict[str, str]:
    """Collect ``name``/``property``/``http-equiv`` meta tags from raw HTML."""
    meta: dict[str, str] = {}
    for tag in _META_TAG_RE.findall(html_text):
        attrs = {
            name.lower(): double or single
            for name, double, single in _ATTR_RE.findall(tag)
        }
        key = attrs.get("property") or attrs.get("name") or attrs.get("http-equiv")
        content = attrs.get("content")
        if key and content is not None and key.lower() not in meta:
            meta[key.lower()] = html.unescape(content)
    return meta


def extract_from_html(html_text: str) -> tuple[dict[str, Any], dict[str, Any]]:
    """Return ``(structured, meta)`` bags for a raw HTML document.

    The ``<title>`` element and the ``<html lang>`` attribute are folded into
    the meta bag when the meta tags themselves do not provide them.
    """
    structured: dict[str, Any] = {}
    if "application/ld+json" in html_text:
        structured = parse_json_ld(m.group(1) for m in _JSONLD_BLOCK_RE.finditer(html_text))

    meta = parse_meta_tags(read_meta_tags(html_text))

    if "title" not in meta:
        match = _TITLE_RE.search(html_text)
        if match:
            title = _clean_str(html.unescape(re.sub(r"\s+", " ", match.group(1))))
            if title:
                meta["title"] = title

    if "language" not in meta:
        match = _HTML_LANG_RE.search(html_text)
        if match:
            meta["language"] = match.group(1).strip()

    return structured, meta
