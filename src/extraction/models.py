"""Data models for the extraction engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Literal, Mapping

ExtractionMethod = Literal[
    "structured-data",
    "site-specific",
    "readability",
    "meta-tags",
    "fallback",
]

EXTRACTION_METHODS: tuple[str, ...] = (
    "structured-data",
    "site-specific",
    "readability",
    "meta-tags",
    "fallback",
)

ErrorType = Literal["timeout", "network", "navigation", "forbidden", "extraction", "unknown"]

FallbackStrategy = Literal[
    "simplified-selectors",
    "cached-content",
    "direct-fetch",
    "basic-selectors",
    "none",
]

# Field names understood by ContentExtractor and SiteProfile.selectors
FIELD_TITLE = "title"
FIELD_CONTENT = "content"
FIELD_AUTHOR = "author"
FIELD_PUBLISHED_DATE = "published_date"
FIELD_TAGS = "tags"


@dataclass(frozen=True)
class SiteProfile:
    """Per-site selector lists and navigation hints.

    ``selectors`` maps a field name to selectors ordered most specific first.
    The mapping is frozen on construction and never mutated afterwards.
    """

    name: str
    selectors: Mapping[str, tuple[str, ...]]
    wait_time_ms: int = 1000
    scroll_to_load: bool = False
    js_required: bool = False
    exclude_selectors: tuple[str, ...] = ()
    is_generic: bool = False

    def __post_init__(self) -> None:
        frozen = {key: tuple(values) for key, values in self.selectors.items()}
        for key, values in frozen.items():
            if not values:
                raise ValueError(f"profile {self.name!r} has no selectors for {key!r}")
        object.__setattr__(self, "selectors", MappingProxyType(frozen))
        object.__setattr__(self, "exclude_selectors", tuple(self.exclude_selectors))

    def selectors_for(self, field_name: str) -> tuple[str, ...]:
        return self.selectors.get(field_name, ())


@dataclass
class ExtractionAttempt:
    """Outcome of the cascading selector search for one field."""

    field: str
    selectors_tried: list[str] = field(default_factory=list)
    value: str | None = None
    used_selector: str | None = None
    fallback_level: int = -1

    @property
    def succeeded(self) -> bool:
        return self.value is not None


@dataclass(frozen=True)
class ArticleMetadata:
    """Fused article metadata. Every field is optional."""

    author: str | None = None
    published_date: str | None = None
    modified_date: str | None = None
    reading_time: int | None = None
    word_count: int | None = None
    tags: tuple[str, ...] = ()
    description: str | None = None
    image: str | None = None
    language: str | None = None
    images: tuple[str, ...] = ()
    code_blocks: tuple[str, ...] = ()


@dataclass(frozen=True)
class ArticleContent:
    """The engine's output for one successful fetch."""

    title: str
    content: str
    metadata: ArticleMetadata
    extraction_method: ExtractionMethod
    quality_score: float
    reliability_score: float = 0.0
    url: str = ""

    def to_dict(self) -> dict[str, Any]:
        """JSON-friendly representation used by the API layer."""
        meta = self.metadata
        return {
            "url": self.url,
            "title": self.title,
            "content": self.content,
            "metadata": {
                "author": meta.author,
                "published_date": meta.published_date,
                "modified_date": meta.modified_date,
                "reading_time": meta.reading_time,
                "word_count": meta.word_count,
                "tags": list(meta.tags),
                "description": meta.description,
                "image": meta.image,
                "language": meta.language,
                "images": list(meta.images),
                "code_block_count": len(meta.code_blocks),
            },
            "extraction_method": self.extraction_method,
            "quality_score": self.quality_score,
            "reliability_score": self.reliability_score,
        }


@dataclass(frozen=True)
class ErrorClassification:
    """Retry guidance derived from a caught failure."""

    type: ErrorType
    should_retry: bool
    delay_ms: int
    fallback_strategy: FallbackStrategy
