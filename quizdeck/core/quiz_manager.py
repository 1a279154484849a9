"""Business logic for the quiz player shared between the Qt and web surfaces."""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum, auto
import logging
from threading import Lock
from typing import Callable

from quizdeck.core.catalog_loader import QuizCatalog, fetch_catalog
from quizdeck.core.errors import NotActive
from quizdeck.core.models import (
    AnswerRecord,
    Question,
    QuizCatalogEntry,
    QuizResults,
    ScoreRecord,
    SessionState,
)
from quizdeck.core.quiz_importer import ImportedQuiz, load_quiz_for_entry
from quizdeck.core.resource_fetcher import ResourceFetcher
from quizdeck.core.services.quiz_session import QuizSession
from quizdeck.core.services.score_history import ScoreHistory

logger = logging.getLogger(__name__)


class SessionEvent(Enum):
    """Notifications sent to views after the session changes."""

    CATALOG_LOADED = auto()
    QUIZ_LOADED = auto()
    ANSWER_RECORDED = auto()
    POSITION_CHANGED = auto()
    COMPLETED = auto()
    RESET = auto()


SessionListener = Callable[[SessionEvent], None]


class QuizManager:
    """Facade owning the catalog, the single active session and the score history.

    Quiz loads are split into ``begin_load`` and ``complete_load`` so the fetch
    can run without holding the lock. Every ``begin_load`` hands out a newer
    token; a completion carrying an older token is dropped, so a slow fetch can
    never replace a quiz the user selected afterwards.
    """

    def __init__(self, fetcher: ResourceFetcher, score_history: ScoreHistory | None = None) -> None:
        self._lock = Lock()
        self._fetcher = fetcher
        self._score_history = score_history

        self._session = QuizSession()
        self._catalog: QuizCatalog | None = None
        self._quiz_title: str | None = None
        self._load_generation: int = 0
        self._listeners: list[SessionListener] = []

    # --- Listeners ---

    def add_listener(self, listener: SessionListener) -> None:
        with self._lock:
            self._listeners.append(listener)

    def remove_listener(self, listener: SessionListener) -> None:
        with self._lock:
            if listener in self._listeners:
                self._listeners.remove(listener)

    def _notify(self, event: SessionEvent) -> None:
        with self._lock:
            listeners = list(self._listeners)
        for listener in listeners:
            listener(event)

    # --- Catalog ---

    def load_catalog(self) -> QuizCatalog:
        """Fetch the catalog; on failure the previously loaded catalog is kept."""
        catalog = fetch_catalog(self._fetcher)
        with self._lock:
            self._catalog = catalog
        self._notify(SessionEvent.CATALOG_LOADED)
        return catalog

    def get_catalog(self) -> QuizCatalog | None:
        with self._lock:
            return self._catalog

    def get_catalog_entry(self, index: int) -> QuizCatalogEntry:
        with self._lock:
            if self._catalog is None:
                raise LookupError("The catalog has not been loaded.")
            return self._catalog.entry_at(index)

    # --- Quiz loading ---

    def begin_load(self) -> int:
        with self._lock:
            self._load_generation += 1
            return self._load_generation

    def is_current_load(self, token: int) -> bool:
        with self._lock:
            return token == self._load_generation

    def fetch_quiz(self, entry: QuizCatalogEntry) -> ImportedQuiz:
        """Fetch and parse a quiz without touching the active session."""
        return load_quiz_for_entry(self._fetcher, entry)

    def complete_load(self, token: int, quiz: ImportedQuiz) -> bool:
        """Install a fetched quiz unless a newer load has started since ``token``."""
        with self._lock:
            if token != self._load_generation:
                logger.info(
                    "Ignoring stale load of %r (token %d, latest %d)",
                    quiz.title,
                    token,
                    self._load_generation,
                )
                return False
            self._session.load(quiz.questions)
            self._quiz_title = quiz.title
        logger.info("Quiz %r is ready with %d question(s)", quiz.title, len(quiz.questions))
        self._notify(SessionEvent.QUIZ_LOADED)
        return True

    def select_quiz(self, catalog_index: int) -> bool:
        """Load the quiz at ``catalog_index``; returns False if a newer selection won."""
        entry = self.get_catalog_entry(catalog_index)
        token = self.begin_load()
        quiz = self.fetch_quiz(entry)
        return self.complete_load(token, quiz)

    def load_questions(self, title: str, questions: list[Question]) -> None:
        """Load questions that are already in memory."""
        token = self.begin_load()
        self.complete_load(token, ImportedQuiz(title=title, source=None, questions=questions))

    def has_loaded_quiz(self) -> bool:
        with self._lock:
            return self._session.state is not SessionState.UNLOADED

    def get_quiz_title(self) -> str | None:
        with self._lock:
            return self._quiz_title

    # --- Session delegation ---

    def get_state(self) -> SessionState:
        with self._lock:
            return self._session.state

    def get_current_index(self) -> int:
        with self._lock:
            return self._session.current_index

    def get_question_count(self) -> int:
        with self._lock:
            return self._session.question_count

    def get_score(self) -> int:
        with self._lock:
            return self._session.score

    def get_current_question(self) -> Question:
        with self._lock:
            return self._session.current_question()

    def get_progress_label(self) -> str:
        with self._lock:
            return self._session.progress_label()

    def is_last_question(self) -> bool:
        with self._lock:
            return self._session.is_last_question()

    def get_current_answer(self) -> AnswerRecord | None:
        with self._lock:
            if not self._session.is_active():
                return None
            return self._session.answer_for(self._session.current_index)

    def submit_answer(self, choice: int) -> AnswerRecord:
        with self._lock:
            index = self._session.current_index
            already_answered = self._session.answer_for(index) is not None
            record = self._session.submit_answer(choice)
            stored = self._session.answer_for(index) is not None
        if stored and not already_answered:
            self._notify(SessionEvent.ANSWER_RECORDED)
        return record

    def advance(self) -> SessionState:
        with self._lock:
            state = self._session.advance()
            finished = self._score_record() if state is SessionState.COMPLETED else None
        if finished is not None:
            logger.info(
                "Quiz %r completed: %d/%d", finished.title, finished.score, finished.total_questions
            )
            if self._score_history is not None:
                self._score_history.record(finished)
            self._notify(SessionEvent.COMPLETED)
        else:
            self._notify(SessionEvent.POSITION_CHANGED)
        return state

    def retreat(self) -> int:
        with self._lock:
            previous = self._session.current_index
            index = self._session.retreat()
        if index != previous:
            self._notify(SessionEvent.POSITION_CHANGED)
        return index

    def get_results(self) -> QuizResults:
        with self._lock:
            return self._session.results()

    def get_best_score(self) -> ScoreRecord | None:
        """Best finished attempt of the loaded quiz, or None without a history."""
        with self._lock:
            title = self._quiz_title
        if self._score_history is None or title is None:
            return None
        return self._score_history.best_for(title)

    def reset_quiz_progress(self) -> None:
        with self._lock:
            self._session.reset()
        self._notify(SessionEvent.RESET)

    def _score_record(self) -> ScoreRecord:
        if self._quiz_title is None:
            raise NotActive("No quiz is loaded.")
        return ScoreRecord(
            title=self._quiz_title,
            score=self._session.score,
            total_questions=self._session.question_count,
            finished_at=datetime.now(timezone.utc),
        )
