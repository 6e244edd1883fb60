"""Quality and reliability scoring for extracted articles."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

TITLE_MAX = 25
CONTENT_MAX = 35
METADATA_MAX = 20
METHOD_MAX = 20

IMAGES_POINTS = 3
CODE_BLOCKS_POINTS = 2

METHOD_BONUS: dict[str, int] = {
    "structured-data": 20,
    "readability": 18,
    "site-specific": 15,
    "meta-tags": 10,
    "fallback": 5,
}

METHOD_RELIABILITY: dict[str, float] = {
    "structured-data": 0.95,
    "readability": 0.9,
    "site-specific": 0.8,
    "meta-tags": 0.7,
    "fallback": 0.4,
}
DEFAULT_RELIABILITY = 0.3
SELECTOR_BONUS = 0.05
SELECTOR_BONUS_CAP = 0.2


@dataclass(frozen=True)
class QualitySignals:
    """Inputs to the quality score.

    ``images`` and ``code_blocks`` left as ``None`` mean the signal was never
    collected; their points are then removed from the attainable maximum.
    """

    title: str | None = None
    content: str | None = None
    author: str | None = None
    published_date: str | None = None
    reading_time: int | None = None
    images: Sequence[str] | None = None
    code_blocks: Sequence[str] | None = None
    extraction_method: str = "fallback"


def _title_points(title: str | None) -> int:
    if not title:
        return 0
    length = len(title)
    if 10 <= length <= 100:
        return 25
    if 5 <= length < 10:
        return 15
    return 5


def _content_points(content: str | None) -> int:
    length = len(content or "")
    if length >= 2000:
        return 35
    if length >= 1000:
        return 25
    if length >= 500:
        return 15
    if length >= 100:
        return 10
    return 0


def _metadata_points(signals: QualitySignals) -> int:
    points = 0
    if signals.author:
        points += 5
    if signals.published_date:
        points += 5
    if signals.reading_time and signals.reading_time > 0:
        points += 5
    if signals.images:
        points += IMAGES_POINTS
    if signals.code_blocks:
        points += CODE_BLOCKS_POINTS
    return points


def max_quality_points(signals: QualitySignals) -> int:
    maximum = TITLE_MAX + CONTENT_MAX + METADATA_MAX + METHOD_MAX
    if signals.images is None:
        maximum -= IMAGES_POINTS
    if signals.code_blocks is None:
        maximum -= CODE_BLOCKS_POINTS
    return maximum


def quality_score(signals: QualitySignals) -> float:
    """Completeness score in ``[0, 1]``."""
    achieved = (
        _title_points(signals.title)
        + _content_points(signals.content)
        + _metadata_points(signals)
        + METHOD_BONUS.get(signals.extraction_method, 0)
    )
    return max(0.0, min(achieved / max_quality_points(signals), 1.0))


def reliability_score(extraction_method: str, selectors: Sequence[str] = ()) -> float:
    """Trust in the extraction method, nudged up per successfully used selector."""
    base = METHOD_RELIABILITY.get(extraction_method, DEFAULT_RELIABILITY)
    bonus = min(SELECTOR_BONUS * len(selectors), SELECTOR_BONUS_CAP)
    return min(base + bonus, 1.0)
