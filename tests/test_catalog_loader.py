"""Tests for catalog fetching and normalization."""

import pytest

from quizdeck.core.catalog_loader import fetch_catalog, parse_catalog
from quizdeck.core.errors import CatalogEmpty, CatalogUnavailable
from quizdeck.core.resource_fetcher import ResourceFetcher


def test_flat_catalog_preserves_order():
    catalog = parse_catalog([
        {"title": "B", "file": "b.json"},
        {"title": "A", "file": "a.json"},
    ])
    assert [entry.title for entry in catalog.entries] == ["B", "A"]
    assert all(entry.category is None for entry in catalog.entries)


def test_grouped_catalog_is_flattened_with_labels():
    catalog = parse_catalog([
        {"category": "Math", "quizzes": [{"title": "Sums", "file": "s.json"}, {"title": "Angles", "file": "a.json"}]},
        {"category": "Geo", "quizzes": [{"title": "Capitals", "file": "c.json"}]},
    ])
    assert [entry.title for entry in catalog.entries] == ["Sums", "Angles", "Capitals"]
    assert [entry.category for entry in catalog.entries] == ["Math", "Math", "Geo"]
    groups = catalog.groups()
    assert [label for label, _ in groups] == ["Math", "Geo"]
    assert [index for index, _ in groups[1][1]] == [2]


def test_mixed_flat_and_grouped_entries():
    catalog = parse_catalog([
        {"title": "Loose", "file": "l.json"},
        {"category": "Group", "quizzes": [{"title": "Inside", "file": "i.json"}]},
    ])
    assert [(e.title, e.category) for e in catalog.entries] == [("Loose", None), ("Inside", "Group")]


def test_sets_wrapper_and_keyed_object():
    wrapped = parse_catalog({"sets": [{"title": "One", "file": "1.json"}]})
    assert wrapped.entry_at(0).title == "One"

    keyed = parse_catalog({"capitals": {"file": "c.json"}, "sums": {"title": "Sums", "file": "s.json"}})
    assert [entry.title for entry in keyed.entries] == ["capitals", "Sums"]


def test_missing_title_gets_positional_placeholder():
    catalog = parse_catalog([{"file": "a.json"}, {"file": "b.json", "title": "  "}])
    assert [entry.title for entry in catalog.entries] == ["Quiz set 1", "Quiz set 2"]


def test_entry_with_inline_questions_needs_no_file():
    catalog = parse_catalog([{"title": "Inline", "questions": [{"question": "q", "options": ["a"], "answer": 0}]}])
    entry = catalog.entry_at(0)
    assert entry.file is None
    assert len(entry.inline_questions) == 1


def test_entries_without_file_are_skipped():
    catalog = parse_catalog([{"title": "Broken"}, "junk", {"title": "Good", "file": "g.json"}])
    assert [entry.title for entry in catalog.entries] == ["Good"]


def test_empty_catalog_raises():
    with pytest.raises(CatalogEmpty):
        parse_catalog([])
    with pytest.raises(CatalogEmpty):
        parse_catalog([{"category": "Empty", "quizzes": []}])


def test_scalar_document_is_unavailable():
    with pytest.raises(CatalogUnavailable):
        parse_catalog(42)


def test_entry_at_out_of_range():
    catalog = parse_catalog([{"title": "Only", "file": "o.json"}])
    with pytest.raises(IndexError):
        catalog.entry_at(1)


def test_fetch_catalog_from_directory(fetcher):
    catalog = fetch_catalog(fetcher)
    assert [entry.title for entry in catalog.entries] == ["Sums", "Colours"]
    assert catalog.entry_at(0).file == "data/sums.json"


def test_fetch_catalog_missing_file(tmp_path):
    with pytest.raises(CatalogUnavailable):
        fetch_catalog(ResourceFetcher(tmp_path))


def test_fetch_catalog_invalid_json(tmp_path):
    (tmp_path / "data").mkdir()
    (tmp_path / "data" / "quizzes.json").write_text("[{", encoding="utf-8")
    with pytest.raises(CatalogUnavailable):
        fetch_catalog(ResourceFetcher(tmp_path))


def test_fetch_catalog_blank_file(tmp_path):
    (tmp_path / "data").mkdir()
    (tmp_path / "data" / "quizzes.json").write_text("   \n", encoding="utf-8")
    with pytest.raises(CatalogUnavailable):
        fetch_catalog(ResourceFetcher(tmp_path))


def test_fetch_catalog_invalid_utf8(tmp_path):
    (tmp_path / "data").mkdir()
    (tmp_path / "data" / "quizzes.json").write_bytes(b'[{"title": "\xff\xfe", "file": "a.json"}]')
    with pytest.raises(CatalogUnavailable):
        fetch_catalog(ResourceFetcher(tmp_path))
