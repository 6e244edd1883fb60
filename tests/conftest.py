"""Fixtures: settings, fake fetchers and an API test client."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from src.api.routes import router
from src.config import Settings, get_settings
from src.extraction.models import ArticleContent, ArticleMetadata

API_KEY = "test-secret-key"


@pytest.fixture
def settings() -> Settings:
    return Settings(api_key=API_KEY)  # type: ignore[call-arg]


@pytest.fixture
def sample_article() -> ArticleContent:
    return ArticleContent(
        url="https://example.com/post",
        title="Sample Article Title",
        content="Sample body text. " * 50,
        metadata=ArticleMetadata(
            author="Jane Doe",
            published_date="2024-01-01",
            reading_time=1,
            word_count=150,
            tags=("python",),
        ),
        extraction_method="readability",
        quality_score=0.8,
        reliability_score=0.9,
    )


@pytest.fixture
def fetcher() -> MagicMock:
    mock = MagicMock()
    mock.fetch = AsyncMock()
    return mock


@pytest.fixture
def direct_fetcher() -> MagicMock:
    mock = MagicMock()
    mock.fetch = AsyncMock()
    return mock


@pytest.fixture
def api_app(settings, fetcher, direct_fetcher) -> FastAPI:
    app = FastAPI()
    app.include_router(router)
    app.dependency_overrides[get_settings] = lambda: settings
    app.state.settings = settings
    app.state.fetcher = fetcher
    app.state.direct_fetcher = direct_fetcher
    return app


@pytest.fixture
def client(api_app) -> TestClient:
    return TestClient(api_app, headers={"X-API-Key": API_KEY})
