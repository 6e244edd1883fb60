"""Priority-ordered merge of metadata bags from independent sources."""

from __future__ import annotations

from typing import Any, Mapping

SOURCE_STRUCTURED = "structured"
SOURCE_META = "meta"
SOURCE_CONTENT = "content"

# Highest priority first
SOURCE_PRIORITY: tuple[str, ...] = (SOURCE_STRUCTURED, SOURCE_META, SOURCE_CONTENT)


def _is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple, set, dict)):
        return len(value) == 0
    return False


def _ordered_sources(
    structured: Mapping[str, Any] | None,
    meta: Mapping[str, Any] | None,
    content: Mapping[str, Any] | None,
) -> list[tuple[str, Mapping[str, Any]]]:
    bags = {SOURCE_STRUCTURED: structured, SOURCE_META: meta, SOURCE_CONTENT: content}
    return [(name, bags[name]) for name in SOURCE_PRIORITY if bags[name]]


def merge_with_provenance(
    structured: Mapping[str, Any] | None = None,
    meta: Mapping[str, Any] | None = None,
    content: Mapping[str, Any] | None = None,
) -> tuple[dict[str, Any], dict[str, str]]:
    """Merge the bags and report which source supplied each field.

    Returns ``(merged, provenance)`` where ``provenance`` maps every merged
    field to the name of the source it came from.
    """
    merged: dict[str, Any] = {}
    provenance: dict[str, str] = {}

    for source_name, bag in _ordered_sources(structured, meta, content):
        for key, value in bag.items():
            if key in merged or _is_empty(value):
                continue
            merged[key] = value
            provenance[key] = source_name

    return merged, provenance


def merge_metadata(
    structured: Mapping[str, Any] | None = None,
    meta: Mapping[str, Any] | None = None,
    content: Mapping[str, Any] | None = None,
) -> dict[str, Any]:
    """Merge metadata with priority structured data > meta tags > content.

    For each field the first source holding a non-empty value wins; lower
    priority sources still fill fields the higher ones lack. Inputs are not
    modified.
    """
    merged, _ = merge_with_provenance(structured=structured, meta=meta, content=content)
    return merged


def contributing_sources(provenance: Mapping[str, str]) -> list[str]:
    """Sources that won at least one field, highest priority first."""
    used = set(provenance.values())
    return [name for name in SOURCE_PRIORITY if name in used]
