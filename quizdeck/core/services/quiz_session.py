"""Service holding the state of one quiz attempt."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Sequence

from quizdeck.core.answer_key import is_choice_correct
from quizdeck.core.errors import (
    EmptyQuestionSet,
    InvalidChoice,
    NotActive,
)
from quizdeck.core.models import (
    AnswerRecord,
    Question,
    QuestionOutcome,
    QuizResults,
    SessionState,
)


class QuizSession:
    """Walks a loaded question set one question at a time and keeps the score.

    Each question accepts a single answer; later submissions for the same
    question return the first record unchanged.
    """

    def __init__(self) -> None:
        self._questions: tuple[Question, ...] = ()
        self._current_index: int = 0
        self._score: int = 0
        self._answers: dict[int, AnswerRecord] = {}
        self._state: SessionState = SessionState.UNLOADED

    # --- Lifecycle ---

    def load(self, questions: Sequence[Question]) -> None:
        """Replace the question set and start at the first question."""
        if not questions:
            raise EmptyQuestionSet("Quiz must contain at least one question.")
        self._questions = tuple(questions)
        self._restart()

    def reset(self) -> None:
        """Start the loaded quiz over, keeping the same questions."""
        if self._state is SessionState.UNLOADED:
            raise NotActive("No quiz is loaded.")
        self._restart()

    def clear(self) -> None:
        self._questions = ()
        self._current_index = 0
        self._score = 0
        self._answers = {}
        self._state = SessionState.UNLOADED

    def _restart(self) -> None:
        self._current_index = 0
        self._score = 0
        self._answers = {}
        self._state = SessionState.ACTIVE

    # --- State ---

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def current_index(self) -> int:
        return self._current_index

    @property
    def score(self) -> int:
        return self._score

    @property
    def question_count(self) -> int:
        return len(self._questions)

    @property
    def questions(self) -> tuple[Question, ...]:
        return self._questions

    def is_active(self) -> bool:
        return self._state is SessionState.ACTIVE

    def is_completed(self) -> bool:
        return self._state is SessionState.COMPLETED

    def is_last_question(self) -> bool:
        return self._current_index == len(self._questions) - 1

    def current_question(self) -> Question:
        self._require_active()
        return self._questions[self._current_index]

    def answer_for(self, index: int) -> AnswerRecord | None:
        return self._answers.get(index)

    def get_answers(self) -> dict[int, AnswerRecord]:
        return dict(self._answers)

    def progress_label(self) -> str:
        self._require_active()
        return f"Question {self._current_index + 1} / {len(self._questions)}"

    # --- Answering and navigation ---

    def submit_answer(self, choice: int) -> AnswerRecord:
        """Record the answer for the current question, scoring only the first one."""
        self._require_active()
        existing = self._answers.get(self._current_index)
        if existing is not None:
            return existing

        question = self._questions[self._current_index]
        if not question.is_answerable:
            # Nothing to choose from: report a wrong answer but keep the question open.
            return AnswerRecord(
                question_index=self._current_index,
                chosen_index=None,
                is_correct=False,
                submitted_at=datetime.now(timezone.utc),
            )
        if not 0 <= choice < len(question.options):
            raise InvalidChoice(
                f"Option {choice} does not exist; expected 0..{len(question.options) - 1}."
            )

        record = AnswerRecord(
            question_index=self._current_index,
            chosen_index=choice,
            is_correct=is_choice_correct(question, choice),
            submitted_at=datetime.now(timezone.utc),
        )
        self._answers[self._current_index] = record
        if record.is_correct:
            self._score += 1
        return record

    def advance(self) -> SessionState:
        """Move to the next question, completing the quiz after the last one."""
        self._require_active()
        if self.is_last_question():
            self._state = SessionState.COMPLETED
        else:
            self._current_index += 1
        return self._state

    def retreat(self) -> int:
        self._require_active()
        if self._current_index > 0:
            self._current_index -= 1
        return self._current_index

    # --- Results ---

    def results(self) -> QuizResults:
        """Return the tally so far; complete once the session has finished."""
        if self._state is SessionState.UNLOADED:
            raise NotActive("No quiz is loaded.")

        total = len(self._questions)
        breakdown: list[QuestionOutcome] = []
        for index, question in enumerate(self._questions):
            record = self._answers.get(index)
            breakdown.append(
                QuestionOutcome(
                    index=index,
                    question_text=question.text,
                    chosen_index=record.chosen_index if record else None,
                    is_correct=bool(record and record.is_correct),
                    answered=record is not None,
                )
            )
        percentage = (self._score / total) * 100 if total else 0.0
        return QuizResults(
            total_questions=total,
            score=self._score,
            percentage=percentage,
            breakdown=breakdown,
        )

    def _require_active(self) -> None:
        if self._state is not SessionState.ACTIVE:
            raise NotActive(f"Quiz session is {self._state.name.lower()}, not active.")
