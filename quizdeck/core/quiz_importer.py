"""Utilities for turning quiz JSON documents into questions.

A quiz document is either a bare array of question records or an object with
a ``questions`` (or ``items``) array. Each record looks like:

    {
        "question": "What is $2 + 2$?",
        "options": ["3", "4", "5"],
        "answer": 1,
        "explanation": "Two plus two is four."
    }

Field aliases seen across quiz files are accepted: the text may be under
``question``, ``text`` or ``prompt``; options under ``options`` or
``choices``; the answer under ``correctAnswer``, ``correct_answer``,
``answer`` or ``correct``; the explanation under ``explanation`` or ``note``.

Malformed fields degrade instead of failing the whole quiz: missing options
become an empty tuple (the question is shown but cannot be answered), a
missing text becomes a placeholder and non-object records are skipped.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Any

from quizdeck.constants.quiz_constants import MISSING_QUESTION_TEXT
from quizdeck.core.errors import EmptyQuestionSet, QuestionSetUnavailable
from quizdeck.core.models import CorrectAnswer, Question, QuizCatalogEntry
from quizdeck.core.resource_fetcher import ResourceFetcher, ResourceFetchError

logger = logging.getLogger(__name__)

_TEXT_KEYS = ("question", "text", "prompt")
_OPTION_KEYS = ("options", "choices")
_ANSWER_KEYS = ("correctAnswer", "correct_answer", "answer", "correct")
_EXPLANATION_KEYS = ("explanation", "note")
_QUESTION_LIST_KEYS = ("questions", "items")


@dataclass(slots=True)
class ImportedQuiz:
    """Container for imported quiz metadata and questions."""

    title: str
    source: str | None
    questions: list[Question]


def load_quiz_for_entry(fetcher: ResourceFetcher, entry: QuizCatalogEntry) -> ImportedQuiz:
    """Fetch and parse the quiz a catalog entry points at."""
    if entry.inline_questions is not None:
        document: Any = list(entry.inline_questions)
    elif entry.file is not None:
        try:
            document = fetcher.fetch_json(entry.file)
        except ResourceFetchError as exc:
            logger.warning("Quiz %r could not be fetched: %s", entry.title, exc)
            raise QuestionSetUnavailable(str(exc)) from exc
    else:
        raise QuestionSetUnavailable(f"Catalog entry {entry.title!r} has no quiz file.")

    questions = parse_questions(document)
    if not questions:
        raise EmptyQuestionSet(f"Quiz {entry.title!r} does not contain any questions.")
    logger.info("Imported %d question(s) for %r", len(questions), entry.title)
    return ImportedQuiz(title=entry.title, source=entry.file, questions=questions)


def parse_questions(document: Any) -> list[Question]:
    records = _question_records(document)
    questions: list[Question] = []
    for position, record in enumerate(records, start=1):
        if not isinstance(record, dict):
            logger.warning("Skipping question %d: expected an object, got %r", position, record)
            continue
        questions.append(_parse_record(record))
    return questions


def _question_records(document: Any) -> list[Any]:
    if isinstance(document, list):
        return document
    if isinstance(document, dict):
        for key in _QUESTION_LIST_KEYS:
            records = document.get(key)
            if isinstance(records, list):
                return records
    raise QuestionSetUnavailable("Quiz file must be an array of questions or contain a 'questions' array.")


def _parse_record(record: dict) -> Question:
    text = _first_text(record, _TEXT_KEYS) or MISSING_QUESTION_TEXT
    raw_options = _first_present(record, _OPTION_KEYS)
    options = tuple(str(option) for option in raw_options) if isinstance(raw_options, list) else ()
    return Question(
        text=text,
        options=options,
        correct_answer=_parse_correct_answer(_first_present(record, _ANSWER_KEYS)),
        explanation=_first_text(record, _EXPLANATION_KEYS),
    )


def _parse_correct_answer(raw: Any) -> CorrectAnswer:
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    if isinstance(raw, float) and raw.is_integer():
        return int(raw)
    if isinstance(raw, list):
        indices = tuple(int(value) for value in raw if _is_index(value))
        return indices or None
    if isinstance(raw, str):
        return raw
    logger.warning("Ignoring unsupported correct answer %r", raw)
    return None


def _is_index(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    return isinstance(value, int) or (isinstance(value, float) and value.is_integer())


def _first_present(record: dict, keys: tuple[str, ...]) -> Any:
    for key in keys:
        if record.get(key) is not None:
            return record[key]
    return None


def _first_text(record: dict, keys: tuple[str, ...]) -> str | None:
    value = _first_present(record, keys)
    if value is None:
        return None
    text = str(value).strip()
    return text or None
