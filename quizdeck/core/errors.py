"""Exceptions raised by the quiz core."""

from __future__ import annotations


class QuizDeckError(Exception):
    """Base class for all quiz player errors."""


class CatalogUnavailable(QuizDeckError):
    """Raised when the catalog cannot be retrieved or is not valid JSON."""


class CatalogEmpty(QuizDeckError):
    """Raised when the catalog parses but lists no quizzes."""


class QuestionSetUnavailable(QuizDeckError):
    """Raised when a quiz file cannot be retrieved or parsed."""


class EmptyQuestionSet(QuizDeckError):
    """Raised when a quiz contains no questions."""


class NotActive(QuizDeckError):
    """Raised when an operation is not valid in the session's current state."""


class InvalidChoice(QuizDeckError):
    """Raised when the chosen option index does not exist."""
