"""Request/response Pydantic models for the article routes."""

from typing import Literal

from pydantic import BaseModel, Field


class ArticleContentRequest(BaseModel):
    url: str = Field(min_length=1)


class RatingPromptRequest(BaseModel):
    article_id: int = Field(gt=0)
    url: str = Field(min_length=1)
    fetch_content: bool = True


class ArticleMetadataResponse(BaseModel):
    author: str | None = None
    published_date: str | None = None
    modified_date: str | None = None
    reading_time: int | None = None
    word_count: int | None = None
    tags: list[str] = []
    description: str | None = None
    image: str | None = None
    language: str | None = None
    images: list[str] = []
    code_block_count: int = 0


class ArticleContentResponse(BaseModel):
    url: str
    title: str
    content: str
    metadata: ArticleMetadataResponse
    extraction_method: Literal["structured-data", "site-specific", "readability", "meta-tags", "fallback"]
    quality_score: float
    reliability_score: float


class ErrorClassificationResponse(BaseModel):
    type: str
    should_retry: bool
    delay_ms: int
    fallback_strategy: str


class FetchErrorResponse(BaseModel):
    detail: str
    url: str
    classification: ErrorClassificationResponse


class ToolTextContent(BaseModel):
    type: Literal["text"] = "text"
    text: str


class ToolResponse(BaseModel):
    """Text envelope understood by the rating consumer."""

    content: list[ToolTextContent]
    is_error: bool = Field(default=False, serialization_alias="isError")
