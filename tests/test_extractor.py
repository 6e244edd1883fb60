"""Cascading selector extraction tests."""

from unittest.mock import AsyncMock

import pytest

from src.extraction.extractor import (
    ContentExtractor,
    cascade,
    read_dom_signals,
    read_meta_map,
    remove_elements,
)
from src.extraction.models import FIELD_AUTHOR, FIELD_CONTENT, FIELD_TAGS, FIELD_TITLE, SiteProfile
from tests.fakes import FakePage

pytestmark = pytest.mark.asyncio

URL = "https://example.com/post"


async def test_cascade_falls_through_empty_results():
    results = {".main-title": "", "h1.title": "", "h1": "Main Article Title"}
    read = AsyncMock(side_effect=lambda selector: results[selector])

    attempt = await cascade(FIELD_TITLE, [".main-title", "h1.title", "h1"], read)

    assert attempt.value == "Main Article Title"
    assert attempt.used_selector == "h1"
    assert attempt.fallback_level == 2
    assert attempt.selectors_tried == [".main-title", "h1.title", "h1"]


async def test_cascade_treats_raising_selector_as_miss():
    def read_value(selector):
        if selector == "bad[":
            raise ValueError("invalid selector")
        return "  Found  "

    attempt = await cascade(FIELD_TITLE, ["bad[", "h1"], AsyncMock(side_effect=read_value))

    assert attempt.value == "Found"
    assert attempt.used_selector == "h1"
    assert attempt.fallback_level == 1


async def test_cascade_all_miss_returns_empty_attempt():
    attempt = await cascade(FIELD_AUTHOR, [".a", ".b"], AsyncMock(return_value=None))

    assert attempt.value is None
    assert attempt.used_selector is None
    assert attempt.fallback_level == -1
    assert not attempt.succeeded


async def test_cascade_stops_at_first_hit():
    read = AsyncMock(return_value="hit")
    await cascade(FIELD_TITLE, ["a", "b", "c"], read)
    read.assert_awaited_once_with("a")


async def test_extract_field_cleans_content_html():
    page = FakePage({"article": "<p>First</p><script>x()</script><p>Second &amp; last</p>"})
    extractor = ContentExtractor(page, URL)

    attempt = await extractor.extract_field(FIELD_CONTENT, ["article"])

    assert attempt.value == "First\nSecond & last"


async def test_extract_field_joins_tag_lists():
    page = FakePage({".tag": ["python", " ", "asyncio"]})
    extractor = ContentExtractor(page, URL)

    attempt = await extractor.extract_field(FIELD_TAGS, [".tag"])

    assert attempt.value == "python\nasyncio"


async def test_selector_results_are_cached_per_extractor():
    page = FakePage({"h1": "Title"})
    extractor = ContentExtractor(page, URL)

    await extractor.read_selector("h1")
    await extractor.read_selector("h1")

    assert page.read_count("h1") == 1

    await ContentExtractor(page, URL).read_selector("h1")
    assert page.read_count("h1") == 2


async def test_extract_profile_reports_every_field():
    profile = SiteProfile(
        name="test",
        selectors={
            FIELD_TITLE: ("h1.missing", "h1"),
            FIELD_AUTHOR: (".author",),
        },
    )
    page = FakePage({"h1": "Title", ".author": RuntimeError("detached")})

    attempts = await ContentExtractor(page, URL).extract_profile(profile)

    assert attempts[FIELD_TITLE].value == "Title"
    assert attempts[FIELD_TITLE].fallback_level == 1
    assert attempts[FIELD_AUTHOR].value is None


async def test_page_helpers():
    page = FakePage(
        {"nav": "menu", "article": "body"},
        meta={"og:title": "T", "broken": 1},  # type: ignore[dict-item]
        images=["a.png"],
        code_blocks=["print(1)"],
    )

    assert await read_meta_map(page) == {"og:title": "T"}
    assert await read_dom_signals(page, "article") == (["a.png"], ["print(1)"])
    assert await remove_elements(page, ["nav", ".ad"]) == 1
    assert await remove_elements(page, []) == 0
    assert "nav" not in page.selectors
