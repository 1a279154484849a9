"""Qt UI components for the quiz player."""

from .dialog_helpers import confirm_switch_quiz, show_error, show_info
from .question_renderer import render_question_document, render_results_document
from .quiz_main_window import QuizMainWindow

__all__ = [
    "QuizMainWindow",
    "confirm_switch_quiz",
    "show_error",
    "show_info",
    "render_question_document",
    "render_results_document",
]
