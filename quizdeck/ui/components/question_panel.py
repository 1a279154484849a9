"""Component showing the current question, its options and navigation."""

from __future__ import annotations

from typing import Callable

from PySide6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QPushButton,
    QVBoxLayout,
    QWidget,
)
from PySide6.QtWebEngineWidgets import QWebEngineView

from quizdeck.constants.ui_constants import (
    CORRECT_FEEDBACK,
    FINISH_BUTTON,
    NEXT_BUTTON,
    NO_OPTIONS_MESSAGE,
    PREV_BUTTON,
    RETRY_BUTTON,
    WRONG_FEEDBACK_TEMPLATE,
)
from quizdeck.core.answer_key import correct_indices, format_correct_answer
from quizdeck.core.errors import InvalidChoice, NotActive
from quizdeck.core.models import SessionState
from quizdeck.core.quiz_manager import QuizManager
from quizdeck.styling.color_palette import Theme
from quizdeck.styling.styles import Styles
from quizdeck.ui.dialog_helpers import show_error
from quizdeck.ui.question_renderer import render_question_document, render_results_document


class QuestionPanel(QWidget):
    """Renders whatever the quiz manager's session currently shows."""

    def __init__(
        self,
        quiz_manager: QuizManager,
        on_retry: Callable[[], None] | None = None,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.quiz_manager = quiz_manager
        self.on_retry = on_retry
        self._theme = Theme.LIGHT
        self._font_size = 14
        self._option_buttons: list[QPushButton] = []

        self._build_ui()
        self.show_placeholder("")

    def _build_ui(self) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)

        self.progress_label = QLabel("", self)
        self.progress_label.setStyleSheet(Styles.get_large_label_style())
        layout.addWidget(self.progress_label)

        self.question_view = QWebEngineView(self)
        layout.addWidget(self.question_view, stretch=1)

        self.options_row = QHBoxLayout()
        layout.addLayout(self.options_row)

        self.feedback_label = QLabel("", self)
        self.feedback_label.setWordWrap(True)
        layout.addWidget(self.feedback_label)

        nav_row = QHBoxLayout()
        self.prev_button = QPushButton(PREV_BUTTON, self)
        self.prev_button.clicked.connect(self._handle_prev)
        nav_row.addWidget(self.prev_button)

        nav_row.addStretch()

        self.retry_button = QPushButton(RETRY_BUTTON, self)
        self.retry_button.clicked.connect(self._handle_retry)
        nav_row.addWidget(self.retry_button)

        self.next_button = QPushButton(NEXT_BUTTON, self)
        self.next_button.clicked.connect(self._handle_next)
        nav_row.addWidget(self.next_button)
        layout.addLayout(nav_row)

    # --- Rendering ---

    def show_placeholder(self, message: str) -> None:
        self.progress_label.setText("")
        self.feedback_label.setText(message)
        self.feedback_label.setStyleSheet("")
        self._clear_option_buttons()
        self.question_view.setHtml("")
        self.prev_button.setVisible(False)
        self.next_button.setVisible(False)
        self.retry_button.setVisible(False)

    def refresh(self) -> None:
        state = self.quiz_manager.get_state()
        if state is SessionState.UNLOADED:
            self.show_placeholder("")
        elif state is SessionState.COMPLETED:
            self._show_results()
        else:
            self._show_current_question()

    def _show_current_question(self) -> None:
        question = self.quiz_manager.get_current_question()
        answer = self.quiz_manager.get_current_answer()

        self.progress_label.setText(self.quiz_manager.get_progress_label())
        self.question_view.setHtml(
            render_question_document(question, answer, font_size=self._font_size)
        )

        self._clear_option_buttons()
        highlighted = correct_indices(question) if answer is not None else set()
        for idx in range(len(question.options)):
            button = QPushButton(chr(ord("A") + idx) if idx < 26 else str(idx + 1), self)
            button.clicked.connect(lambda _checked=False, choice=idx: self._handle_answer(choice))
            button.setEnabled(answer is None)
            if answer is not None:
                if idx in highlighted:
                    button.setStyleSheet(Styles.get_option_button_style(self._theme, correct=True))
                elif idx == answer.chosen_index:
                    button.setStyleSheet(Styles.get_option_button_style(self._theme, correct=False))
            self.options_row.addWidget(button)
            self._option_buttons.append(button)

        if not question.is_answerable:
            self.feedback_label.setText(NO_OPTIONS_MESSAGE)
            self.feedback_label.setStyleSheet("")
        elif answer is None:
            self.feedback_label.setText("")
            self.feedback_label.setStyleSheet("")
        elif answer.is_correct:
            self.feedback_label.setText(CORRECT_FEEDBACK)
            self.feedback_label.setStyleSheet(Styles.get_feedback_style(self._theme, correct=True))
        else:
            self.feedback_label.setText(
                WRONG_FEEDBACK_TEMPLATE.format(answer=format_correct_answer(question))
            )
            self.feedback_label.setStyleSheet(Styles.get_feedback_style(self._theme, correct=False))

        self.prev_button.setVisible(True)
        self.prev_button.setEnabled(self.quiz_manager.get_current_index() > 0)
        self.next_button.setVisible(True)
        self.next_button.setText(FINISH_BUTTON if self.quiz_manager.is_last_question() else NEXT_BUTTON)
        self.retry_button.setVisible(False)

    def _show_results(self) -> None:
        results = self.quiz_manager.get_results()
        title = self.quiz_manager.get_quiz_title() or ""
        self.progress_label.setText(title)
        self.question_view.setHtml(
            render_results_document(
                title,
                results,
                font_size=self._font_size,
                best=self.quiz_manager.get_best_score(),
            )
        )
        self._clear_option_buttons()
        self.feedback_label.setText("")
        self.feedback_label.setStyleSheet("")
        self.prev_button.setVisible(False)
        self.next_button.setVisible(False)
        self.retry_button.setVisible(True)

    def _clear_option_buttons(self) -> None:
        for button in self._option_buttons:
            self.options_row.removeWidget(button)
            button.deleteLater()
        self._option_buttons = []

    # --- Handlers ---

    def _handle_answer(self, choice: int) -> None:
        try:
            self.quiz_manager.submit_answer(choice)
        except (InvalidChoice, NotActive) as exc:
            show_error(self, "Answer not recorded", str(exc))

    def _handle_next(self) -> None:
        try:
            self.quiz_manager.advance()
        except NotActive as exc:
            show_error(self, "Cannot continue", str(exc))

    def _handle_prev(self) -> None:
        try:
            self.quiz_manager.retreat()
        except NotActive as exc:
            show_error(self, "Cannot go back", str(exc))

    def _handle_retry(self) -> None:
        self.quiz_manager.reset_quiz_progress()
        if self.on_retry is not None:
            self.on_retry()
