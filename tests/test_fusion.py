"""Metadata fusion tests."""

from src.extraction.fusion import (
    SOURCE_CONTENT,
    SOURCE_META,
    SOURCE_STRUCTURED,
    contributing_sources,
    merge_metadata,
    merge_with_provenance,
)


def test_structured_title_wins_over_meta_and_content():
    merged = merge_metadata(
        structured={"title": "From JSON-LD"},
        meta={"title": "From OG"},
        content={"title": "From H1"},
    )
    assert merged["title"] == "From JSON-LD"


def test_meta_wins_over_content():
    merged = merge_metadata(meta={"author": "Meta Author"}, content={"author": "Byline"})
    assert merged["author"] == "Meta Author"


def test_lower_priority_sources_fill_gaps():
    merged = merge_metadata(
        structured={"title": "T"},
        meta={"description": "D"},
        content={"reading_time": 4},
    )
    assert merged == {"title": "T", "description": "D", "reading_time": 4}


def test_content_only_field_surfaces_unchanged():
    tags = ["python", "testing"]
    merged = merge_metadata(structured={"title": "T"}, content={"tags": tags})
    assert merged["tags"] == tags


def test_empty_values_do_not_shadow_lower_sources():
    merged = merge_metadata(
        structured={"title": "  ", "tags": []},
        meta={"title": None},
        content={"title": "DOM Title", "tags": ["x"]},
    )
    assert merged == {"title": "DOM Title", "tags": ["x"]}


def test_inputs_are_not_modified():
    structured = {"title": "A"}
    meta = {"title": "B", "author": "C"}
    merge_metadata(structured=structured, meta=meta)
    assert structured == {"title": "A"}
    assert meta == {"title": "B", "author": "C"}


def test_all_sources_missing():
    assert merge_metadata() == {}


def test_provenance_records_winning_source():
    _, provenance = merge_with_provenance(
        structured={"title": "A"},
        meta={"title": "B", "description": "D"},
        content={"content": "body"},
    )
    assert provenance == {
        "title": SOURCE_STRUCTURED,
        "description": SOURCE_META,
        "content": SOURCE_CONTENT,
    }
    assert contributing_sources(provenance) == [SOURCE_STRUCTURED, SOURCE_META, SOURCE_CONTENT]


def test_source_that_won_nothing_does_not_contribute():
    _, provenance = merge_with_provenance(structured={"title": "A"}, meta={"title": "B"})
    assert contributing_sources(provenance) == [SOURCE_STRUCTURED]
