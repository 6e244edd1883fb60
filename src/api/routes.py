"""POST /articles/content and POST /articles/rating-prompt endpoint handlers."""

from __future__ import annotations

from dataclasses import asdict
from typing import Any

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from src.api.schemas import (
    ArticleContentRequest,
    ArticleContentResponse,
    FetchErrorResponse,
    RatingPromptRequest,
)
from src.api.service import fetch_content, prepare_rating_prompt
from src.auth.dependencies import require_api_key
from src.config import Settings
from src.extraction import ArticleContentFetcher, ArticleFetchError, DirectFetcher

router = APIRouter(dependencies=[Depends(require_api_key)])


def _get_fetcher(request: Request) -> ArticleContentFetcher:
    return request.app.state.fetcher


def _get_direct_fetcher(request: Request) -> DirectFetcher | None:
    return getattr(request.app.state, "direct_fetcher", None)


def _get_settings(request: Request) -> Settings:
    return request.app.state.settings


@router.post(
    "/articles/content",
    response_model=ArticleContentResponse,
    responses={502: {"model": FetchErrorResponse}},
)
async def get_article_content(
    body: ArticleContentRequest,
    fetcher: ArticleContentFetcher = Depends(_get_fetcher),
) -> Any:
    try:
        article = await fetch_content(fetcher, body.url)
    except ArticleFetchError as exc:
        return JSONResponse(
            status_code=502,
            content={
                "detail": str(exc),
                "url": exc.url,
                "classification": asdict(exc.classification),
            },
        )
    return article.to_dict()


@router.post("/articles/rating-prompt")
async def create_rating_prompt(
    body: RatingPromptRequest,
    fetcher: ArticleContentFetcher = Depends(_get_fetcher),
    direct_fetcher: DirectFetcher | None = Depends(_get_direct_fetcher),
    settings: Settings = Depends(_get_settings),
) -> dict[str, Any]:
    response = await prepare_rating_prompt(fetcher, direct_fetcher, settings, body)
    return response.model_dump(by_alias=True)
