"""Loading and normalizing the catalog of available quizzes.

Accepted catalog shapes:

    [{"title": "...", "file": "..."}, ...]                        flat list
    [{"category": "...", "quizzes": [{"title", "file"}, ...]}]    grouped list
    {"sets": [...]}                                              wrapped list
    {"capitals": {"file": "..."}, ...}                           keyed by id

Grouped and flat entries may be mixed. Callers always receive a flat,
order-preserving list; category labels are kept for display only.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Any

from quizdeck.constants.quiz_constants import CATALOG_PATH, UNTITLED_SET_TEMPLATE
from quizdeck.core.errors import CatalogEmpty, CatalogUnavailable
from quizdeck.core.models import QuizCatalogEntry
from quizdeck.core.resource_fetcher import ResourceFetcher, ResourceFetchError

logger = logging.getLogger(__name__)

_GROUP_ENTRY_KEYS = ("quizzes", "entries", "sets")


@dataclass(frozen=True, slots=True)
class QuizCatalog:
    """Flat list of catalog entries with optional category labels."""

    entries: tuple[QuizCatalogEntry, ...]

    def __len__(self) -> int:
        return len(self.entries)

    def entry_at(self, index: int) -> QuizCatalogEntry:
        if not 0 <= index < len(self.entries):
            raise IndexError(f"Catalog index {index} out of range")
        return self.entries[index]

    def groups(self) -> list[tuple[str | None, list[tuple[int, QuizCatalogEntry]]]]:
        """Group entries by category in first-seen order, keeping their flat index."""
        grouped: dict[str | None, list[tuple[int, QuizCatalogEntry]]] = {}
        for index, entry in enumerate(self.entries):
            grouped.setdefault(entry.category, []).append((index, entry))
        return list(grouped.items())


def fetch_catalog(fetcher: ResourceFetcher, path: str = CATALOG_PATH) -> QuizCatalog:
    """Fetch and parse the catalog; never returns a partial catalog."""
    try:
        document = fetcher.fetch_json(path)
    except ResourceFetchError as exc:
        logger.warning("Catalog fetch failed: %s", exc)
        raise CatalogUnavailable(str(exc)) from exc

    catalog = parse_catalog(document)
    logger.info("Loaded catalog with %d quiz(zes) from %s", len(catalog), fetcher.resolve(path))
    return catalog


def parse_catalog(document: Any) -> QuizCatalog:
    raw_items = _top_level_items(document)
    entries: list[QuizCatalogEntry] = []
    for raw in raw_items:
        if not isinstance(raw, dict):
            logger.warning("Skipping catalog item that is not an object: %r", raw)
            continue
        group_items = _group_items(raw)
        if group_items is not None:
            category = _clean_text(raw.get("category")) or _clean_text(raw.get("title"))
            for item in group_items:
                entry = _parse_entry(item, position=len(entries) + 1, category=category)
                if entry is not None:
                    entries.append(entry)
            continue
        entry = _parse_entry(raw, position=len(entries) + 1, category=_clean_text(raw.get("category")))
        if entry is not None:
            entries.append(entry)

    if not entries:
        raise CatalogEmpty("The catalog does not list any quizzes.")
    return QuizCatalog(entries=tuple(entries))


def _top_level_items(document: Any) -> list[Any]:
    if isinstance(document, list):
        return document
    if isinstance(document, dict):
        sets = document.get("sets")
        if isinstance(sets, list):
            return sets
        items: list[Any] = []
        for key, value in document.items():
            if isinstance(value, dict):
                value = dict(value)
                value.setdefault("title", key)
            items.append(value)
        return items
    raise CatalogUnavailable("Catalog must be a JSON array or object.")


def _group_items(raw: dict) -> list[Any] | None:
    for key in _GROUP_ENTRY_KEYS:
        value = raw.get(key)
        if isinstance(value, list) and "file" not in raw:
            return value
    return None


def _parse_entry(raw: Any, *, position: int, category: str | None) -> QuizCatalogEntry | None:
    if not isinstance(raw, dict):
        logger.warning("Skipping catalog entry that is not an object: %r", raw)
        return None

    title = _clean_text(raw.get("title")) or UNTITLED_SET_TEMPLATE.format(number=position)
    file = _clean_text(raw.get("file"))
    inline = raw.get("questions", raw.get("items"))
    inline_questions = tuple(inline) if isinstance(inline, list) else None

    if file is None and inline_questions is None:
        logger.warning("Skipping catalog entry %r without a quiz file", title)
        return None
    return QuizCatalogEntry(
        title=title,
        file=file,
        category=category,
        inline_questions=inline_questions,
    )


def _clean_text(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None
