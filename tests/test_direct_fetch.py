"""Direct HTTP fetcher tests."""

import httpx
import pytest

from src.extraction.direct_fetch import DirectFetcher, extract_body
from src.extraction.errors import ArticleFetchError

PAGE = """
<html lang="en">
<head>
  <title>Fallback Title</title>
  <meta property="og:title" content="Direct Fetch Title">
  <meta name="author" content="Meta Author">
  <script>window.tracking = true;</script>
</head>
<body>
  <nav>Home | About</nav>
  <article>
    <header>Share this</header>
    <h1>Direct Fetch Title</h1>
    <p>First paragraph of the article.</p>
    <p>Second paragraph with <a href="/x">a link</a>.</p>
  </article>
  <footer>Copyright</footer>
</body>
</html>
"""


def _fetcher(handler) -> DirectFetcher:
    return DirectFetcher(timeout=5.0, user_agent="test-agent", transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_fetch_parses_article():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["user_agent"] = request.headers["User-Agent"]
        return httpx.Response(200, text=PAGE, headers={"Content-Type": "text/html"})

    article = await _fetcher(handler).fetch("https://example.com/post")

    assert seen["user_agent"] == "test-agent"
    assert article.title == "Direct Fetch Title"
    assert article.metadata.author == "Meta Author"
    assert article.metadata.language == "en"
    assert "First paragraph of the article." in article.content
    assert "Share this" not in article.content
    assert "Home" not in article.content
    assert "tracking" not in article.content
    assert article.extraction_method == "readability"
    assert 0.0 <= article.quality_score <= 1.0


@pytest.mark.asyncio
async def test_fetch_follows_redirects():
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/old":
            return httpx.Response(301, headers={"Location": "https://example.com/new"})
        return httpx.Response(200, text="<html><body><p>Moved body</p></body></html>")

    article = await _fetcher(handler).fetch("https://example.com/old")

    assert article.content == "Moved body"
    assert article.extraction_method == "fallback"


@pytest.mark.asyncio
@pytest.mark.parametrize(("status", "error_type"), [(403, "forbidden"), (404, "navigation"), (503, "navigation")])
async def test_error_status_is_classified(status, error_type):
    fetcher = _fetcher(lambda request: httpx.Response(status, text="nope"))

    with pytest.raises(ArticleFetchError) as exc_info:
        await fetcher.fetch("https://example.com/post")

    assert exc_info.value.classification.type == error_type


@pytest.mark.asyncio
async def test_connection_error_is_network():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(ArticleFetchError) as exc_info:
        await _fetcher(handler).fetch("https://example.com/post")

    assert exc_info.value.classification.type == "network"
    assert isinstance(exc_info.value.__cause__, httpx.ConnectError)


def test_extract_body_prefers_article_then_main_then_body():
    assert extract_body("<main><p>m</p></main><article><p>a</p></article>").used_selector == "article"
    assert extract_body("<body><main><p>m</p></main></body>").used_selector == "main"
    attempt = extract_body("<body><p>b</p></body>")
    assert (attempt.value, attempt.used_selector, attempt.fallback_level) == ("b", "body", 2)
    assert extract_body("no containers").fallback_level == -1


def test_extract_body_keeps_content_after_nested_article():
    markup = (
        "<article><h1>Main</h1><p>Intro paragraph.</p>"
        "<article>Embedded tweet</article>"
        "<p>The actual long article body.</p></article>"
    )
    attempt = extract_body(markup)
    assert attempt.used_selector == "article"
    assert attempt.value == "Main\nIntro paragraph.\nEmbedded tweet\nThe actual long article body."


def test_extract_body_drops_nested_noise_without_truncating():
    markup = (
        "<article><header><nav>Section links</nav><p>Byline bar</p></header>"
        "<p>First part.</p><aside><aside>Related</aside>More related</aside>"
        "<p>Second part.</p></article>"
    )
    attempt = extract_body(markup)
    assert attempt.value == "First part.\nSecond part."
