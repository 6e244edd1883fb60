"""Site profile registry tests."""

import pytest

from src.extraction.models import FIELD_CONTENT, FIELD_TITLE, SiteProfile
from src.extraction.sites import (
    GENERIC_PROFILE,
    SiteRegistry,
    build_default_registry,
    resolve_site_profile,
)


@pytest.fixture
def registry() -> SiteRegistry:
    return build_default_registry()


@pytest.mark.parametrize(
    ("url", "expected"),
    [
        ("https://zenn.dev/someone/articles/abc123", "zenn"),
        ("https://qiita.com/user/items/0123456789abcdef", "qiita"),
        ("https://note.com/writer/n/n1234", "note"),
        ("https://medium.com/@author/a-story-1234", "medium"),
        ("https://engineering.medium.com/post-1", "medium"),
        ("https://dev.to/someone/my-post-1a2b", "devto"),
        ("https://example.hatenablog.com/entry/2024/01/01/000000", "hatenablog"),
        ("https://blog.hateblo.jp/entry/1", "hatenablog"),
    ],
)
def test_known_hosts_resolve_to_site_profile(registry, url, expected):
    assert registry.resolve(url).name == expected


def test_hostname_match_is_case_insensitive(registry):
    assert registry.resolve("https://QIITA.COM/user/items/1").name == "qiita"


@pytest.mark.parametrize(
    "url",
    [
        "https://example.com/blog/post",
        "https://notzenn.dev/articles/1",
        "https://qiita.com.evil.example/items/1",
    ],
)
def test_unknown_host_gets_generic_profile(registry, url):
    profile = registry.resolve(url)
    assert profile is GENERIC_PROFILE
    assert profile.js_required is False


@pytest.mark.parametrize("url", ["not a url", "", "http://[::1", "mailto:someone@example.com"])
def test_unparsable_url_gets_generic_profile(registry, url):
    assert registry.resolve(url) is GENERIC_PROFILE


def test_generic_profile_uses_broad_selectors():
    assert "h1" in GENERIC_PROFILE.selectors_for(FIELD_TITLE)
    content = GENERIC_PROFILE.selectors_for(FIELD_CONTENT)
    for selector in ("article", ".content", ".post-content", "main"):
        assert selector in content
    assert GENERIC_PROFILE.is_generic


def test_every_profile_has_non_empty_selector_lists(registry):
    for profile in registry.profiles:
        assert profile.selectors_for(FIELD_TITLE)
        assert profile.selectors_for(FIELD_CONTENT)
        for selectors in profile.selectors.values():
            assert len(selectors) > 0


def test_profile_selectors_are_immutable():
    profile = SiteProfile(name="test", selectors={FIELD_TITLE: ["h1.a", "h1"]})
    assert profile.selectors_for(FIELD_TITLE) == ("h1.a", "h1")
    with pytest.raises(TypeError):
        profile.selectors[FIELD_TITLE] = ("h2",)  # type: ignore[index]


def test_profile_rejects_empty_selector_list():
    with pytest.raises(ValueError):
        SiteProfile(name="broken", selectors={FIELD_TITLE: []})


def test_registration_order_wins():
    first = SiteProfile(name="first", selectors={FIELD_TITLE: ("h1",)})
    second = SiteProfile(name="second", selectors={FIELD_TITLE: ("h1",)})
    registry = SiteRegistry()
    registry.register((r".*example\.org$",), first)
    registry.register((r"^www\.example\.org$",), second)
    assert registry.resolve("https://www.example.org/a").name == "first"
    assert registry.default is GENERIC_PROFILE


def test_resolve_site_profile_uses_default_registry():
    assert resolve_site_profile("https://zenn.dev/a/articles/b").name == "zenn"
    assert resolve_site_profile("https://unknown.example/") is GENERIC_PROFILE
