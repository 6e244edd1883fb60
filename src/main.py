"""FastAPI app entrypoint."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from src.api.routes import router
from src.config import get_settings
from src.extraction import (
    ArticleContentFetcher,
    DirectFetcher,
    PlaywrightPageProvider,
    build_default_registry,
    launch_browser,
)
from src.logging_config import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()

    # Initialize logging FIRST so all subsequent operations produce JSON logs
    setup_logging(settings.log_level)
    logger.info("starting article content service")

    registry = build_default_registry()

    async with launch_browser(settings) as browser:
        pages = PlaywrightPageProvider.from_settings(settings, browser=browser)

        # Attach to app state for dependency injection
        app.state.settings = settings
        app.state.fetcher = ArticleContentFetcher(pages, registry=registry, settings=settings)
        app.state.direct_fetcher = DirectFetcher.from_settings(settings) if settings.direct_fetch_enabled else None

        logger.info(
            "article content service ready",
            extra={
                "site_profiles": [profile.name for profile in registry.profiles],
                "headless": settings.browser_headless,
                "direct_fetch_enabled": settings.direct_fetch_enabled,
            },
        )

        yield

        logger.info("shutting down article content service")


app = FastAPI(title="Article Content Service", lifespan=lifespan)
app.include_router(router)


@app.get("/health")
async def health():
    return {"status": "ok"}
