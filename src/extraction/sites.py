"""Site profile registry with regex domain matching."""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import lru_cache
from urllib.parse import urlparse

from .models import (
    FIELD_AUTHOR,
    FIELD_CONTENT,
    FIELD_PUBLISHED_DATE,
    FIELD_TAGS,
    FIELD_TITLE,
    SiteProfile,
)

GENERIC_PROFILE = SiteProfile(
    name="generic",
    selectors={
        FIELD_TITLE: ("article h1", "h1", "title"),
        FIELD_CONTENT: ("article", ".content", ".post-content", "main", "body"),
        FIELD_AUTHOR: (".author", ".byline", "[rel='author']"),
        FIELD_PUBLISHED_DATE: ("article time[datetime]", "time[datetime]", ".date"),
    },
    wait_time_ms=1000,
    scroll_to_load=False,
    js_required=False,
    exclude_selectors=("nav", "header", "footer", "aside", ".advertisement", ".ad"),
    is_generic=True,
)


def _host_patterns(*domains: str) -> tuple[str, ...]:
    """Regex patterns matching each domain exactly or any of its subdomains."""
    return tuple(r"^(?:[\w-]+\.)*" + re.escape(domain) + r"$" for domain in domains)


@dataclass
class ProfileRegistration:
    """A site profile registration with domain patterns."""

    patterns: tuple[str, ...]  # regex patterns for hostnames
    profile: SiteProfile


class SiteRegistry:
    """Registry mapping hostname patterns to site profiles."""

    def __init__(self, default: SiteProfile = GENERIC_PROFILE) -> None:
        self._registrations: list[ProfileRegistration] = []
        self._default_profile = default

    def register(self, patterns: tuple[str, ...], profile: SiteProfile) -> None:
        """Register a profile for hostname patterns (regex supported)."""
        self._registrations.append(
            ProfileRegistration(patterns=tuple(patterns), profile=profile),
        )

    @property
    def default(self) -> SiteProfile:
        return self._default_profile

    @property
    def profiles(self) -> tuple[SiteProfile, ...]:
        return tuple(reg.profile for reg in self._registrations) + (self._default_profile,)

    def resolve(self, url: str) -> SiteProfile:
        """Find the profile for a URL; unknown or unparsable URLs get the default."""
        try:
            hostname = (urlparse(url).hostname or "").lower()
        except (ValueError, TypeError, AttributeError):
            hostname = ""

        if hostname:
            for reg in self._registrations:
                for pattern in reg.patterns:
                    if re.match(pattern, hostname):
                        return reg.profile

        return self._default_profile


def build_default_registry() -> SiteRegistry:
    """Build the registry of known publishing sites.

    Selector strings track each site's current markup and are revised as
    sites change; the lists are ordered from most to least specific and
    always end in a broad selector that still works on the generic layout.
    """
    registry = SiteRegistry(default=GENERIC_PROFILE)

    registry.register(
        patterns=_host_patterns("zenn.dev"),
        profile=SiteProfile(
            name="zenn",
            selectors={
                FIELD_TITLE: ("h1.ArticleHeader_title", "[data-testid='article-title']", "h1"),
                FIELD_CONTENT: (".znc", ".zenn-content", "article"),
                FIELD_AUTHOR: (".ArticleHeader_author a", ".znc_author a", ".author-name"),
                FIELD_PUBLISHED_DATE: ("time[datetime]", "[datetime]"),
                FIELD_TAGS: (".ArticleHeader_tag", ".znc_tag"),
            },
            wait_time_ms=1500,
            js_required=True,
            exclude_selectors=(".znc_sidebar", ".znc_ad"),
        ),
    )

    registry.register(
        patterns=_host_patterns("qiita.com"),
        profile=SiteProfile(
            name="qiita",
            selectors={
                FIELD_TITLE: ("h1.it-MainHeader_title", "h1.p-items_title", "h1"),
                FIELD_CONTENT: (".it-MdContent", ".p-items_article", "article"),
                FIELD_AUTHOR: (".p-items_authorName", ".it-UserInfo_name", ".UserInfo_name"),
                FIELD_PUBLISHED_DATE: (".p-items_createdAt time", "time[datetime]", "time"),
                FIELD_TAGS: (".p-items_tag", ".TagList_tag"),
            },
            wait_time_ms=1000,
        ),
    )

    registry.register(
        patterns=_host_patterns("note.com"),
        profile=SiteProfile(
            name="note",
            selectors={
                FIELD_TITLE: ("h1.o-noteContentHeader__title", ".note-header__title", "h1"),
                FIELD_CONTENT: (
                    ".note-common-styles__textnote-body",
                    ".o-noteContentBody",
                    ".o-noteContentText__body",
                ),
                FIELD_AUTHOR: (".o-noteContentHeader__authorName", ".p-userInfo__name", ".o-userInfo__name"),
                FIELD_PUBLISHED_DATE: (".o-noteContentHeader__date time", "time[datetime]", "time"),
            },
            wait_time_ms=2000,
            js_required=True,
            scroll_to_load=True,
        ),
    )

    registry.register(
        patterns=_host_patterns("medium.com"),
        profile=SiteProfile(
            name="medium",
            selectors={
                FIELD_TITLE: ("h1[data-testid='storyTitle']", "article h1", "h1"),
                FIELD_CONTENT: ("article section", ".postArticle-content", "article"),
                FIELD_AUTHOR: ("[data-testid='authorName']", ".ds-link--styleSubtle", "a[rel='author']"),
                FIELD_PUBLISHED_DATE: ("[data-testid='storyPublishDate']", "time[datetime]", "time"),
                FIELD_TAGS: ("[data-testid='storyTags'] a", ".tag"),
            },
            wait_time_ms=2000,
            js_required=True,
            scroll_to_load=True,
        ),
    )

    registry.register(
        patterns=_host_patterns("dev.to"),
        profile=SiteProfile(
            name="devto",
            selectors={
                FIELD_TITLE: ("#main-title h1", ".crayons-article__header h1", "h1"),
                FIELD_CONTENT: ("#article-body", ".crayons-article__body", "article"),
                FIELD_AUTHOR: (".crayons-article__subheader a.crayons-link", "[data-author-name]", ".author"),
                FIELD_PUBLISHED_DATE: (".crayons-article__subheader time[datetime]", "time[datetime]"),
                FIELD_TAGS: (".crayons-tag", ".tags a"),
            },
            wait_time_ms=1000,
        ),
    )

    registry.register(
        patterns=_host_patterns("hatenablog.com", "hatenablog.jp", "hateblo.jp", "hatenadiary.com"),
        profile=SiteProfile(
            name="hatenablog",
            selectors={
                FIELD_TITLE: ("h1.entry-title a", "h1.entry-title", "h1"),
                FIELD_CONTENT: (".entry-content", ".hatenablog-entry", "article"),
                FIELD_AUTHOR: (".author-link", ".entry-footer-section .author", ".author"),
                FIELD_PUBLISHED_DATE: ("time[datetime]", ".entry-date time", ".date"),
                FIELD_TAGS: (".entry-categories a", ".categories a"),
            },
            wait_time_ms=1000,
            exclude_selectors=("#box2", ".hatena-module", ".entry-footer-section .share-button"),
        ),
    )

    return registry


@lru_cache
def get_default_registry() -> SiteRegistry:
    return build_default_registry()


def resolve_site_profile(url: str) -> SiteProfile:
    """Resolve the profile for *url* against the shared default registry."""
    return get_default_registry().resolve(url)
