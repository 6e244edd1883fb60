"""Article content extraction: site profiles, fetchers, scoring and prompts."""

from __future__ import annotations

from .browser import PageProvider, PlaywrightPageProvider, launch_browser
from .direct_fetch import DirectFetcher
from .errors import ArticleFetchError, classify_error
from .fetcher import ArticleContentFetcher, build_article, fetch_article_content
from .models import (
    ArticleContent,
    ArticleMetadata,
    ErrorClassification,
    ExtractionAttempt,
    SiteProfile,
)
from .prompts import generate_rating_prompt
from .sites import GENERIC_PROFILE, SiteRegistry, build_default_registry, resolve_site_profile

__all__ = [
    "GENERIC_PROFILE",
    "ArticleContent",
    "ArticleContentFetcher",
    "ArticleFetchError",
    "ArticleMetadata",
    "DirectFetcher",
    "ErrorClassification",
    "ExtractionAttempt",
    "PageProvider",
    "PlaywrightPageProvider",
    "SiteProfile",
    "SiteRegistry",
    "build_article",
    "build_default_registry",
    "classify_error",
    "fetch_article_content",
    "generate_rating_prompt",
    "launch_browser",
    "resolve_site_profile",
]
