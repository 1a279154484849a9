"""Domain models for the quiz player."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum, auto

# Correct answers arrive as a zero-based index, a set of indices, or a literal
# string matched against option text.
CorrectAnswer = int | tuple[int, ...] | str | None


@dataclass(frozen=True, slots=True)
class QuizCatalogEntry:
    """A selectable quiz file listed in the catalog."""

    title: str
    file: str | None
    category: str | None = None
    # Some catalogs embed the questions directly instead of pointing at a file.
    inline_questions: tuple[dict, ...] | None = field(default=None, repr=False, compare=False)


@dataclass(frozen=True, slots=True)
class Question:
    """Multiple-choice question as loaded from a quiz file."""

    text: str
    options: tuple[str, ...]
    correct_answer: CorrectAnswer = None
    explanation: str | None = None

    @property
    def is_answerable(self) -> bool:
        return bool(self.options)


@dataclass(frozen=True, slots=True)
class AnswerRecord:
    """Outcome of the single submission allowed for one question."""

    question_index: int
    chosen_index: int | None
    is_correct: bool
    submitted_at: datetime


class SessionState(Enum):
    """Lifecycle of a quiz session."""

    UNLOADED = auto()
    ACTIVE = auto()
    COMPLETED = auto()


@dataclass(slots=True)
class QuestionOutcome:
    """Per-question line of a results summary."""

    index: int
    question_text: str
    chosen_index: int | None
    is_correct: bool
    answered: bool


@dataclass(slots=True)
class QuizResults:
    """Snapshot of a session's score."""

    total_questions: int
    score: int
    percentage: float
    breakdown: list[QuestionOutcome]

    @property
    def answered_count(self) -> int:
        return sum(1 for outcome in self.breakdown if outcome.answered)


@dataclass(slots=True)
class ScoreRecord:
    """Final score emitted when a session completes."""

    title: str
    score: int
    total_questions: int
    finished_at: datetime
