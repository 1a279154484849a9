"""Qt main window: catalog selection plus the question panel."""

from __future__ import annotations

import logging
from threading import Thread

from PySide6.QtCore import QObject, Signal
from PySide6.QtWidgets import (
    QComboBox,
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from quizdeck.constants.about import APP_ABOUT_TEXT, APP_LICENSE, APP_NAME, APP_VERSION, HELP_TEXT
from quizdeck.constants.ui_constants import (
    CATALOG_ERROR_TITLE,
    CATALOG_LOADED_MESSAGE,
    CATALOG_PLACEHOLDER,
    LOADING_QUIZ_MESSAGE,
    QUIZ_ERROR_TITLE,
    RELOAD_CATALOG_BUTTON,
    WINDOW_TITLE,
)
from quizdeck.core.errors import CatalogEmpty, CatalogUnavailable, QuizDeckError
from quizdeck.core.models import QuizCatalogEntry, SessionState
from quizdeck.core.quiz_importer import ImportedQuiz
from quizdeck.core.quiz_manager import QuizManager, SessionEvent
from quizdeck.styling.styles import Styles
from quizdeck.ui.components.question_panel import QuestionPanel
from quizdeck.ui.dialog_helpers import confirm_switch_quiz, show_error, show_info

logger = logging.getLogger(__name__)


class _LoadSignals(QObject):
    """Carries worker-thread results back to the GUI thread."""

    finished = Signal(int, object)
    failed = Signal(int, str)


class QuizMainWindow(QMainWindow):
    """Main Qt window for picking a quiz and working through it."""

    _session_changed = Signal(object)

    def __init__(self, quiz_manager: QuizManager) -> None:
        super().__init__()
        self.setWindowTitle(WINDOW_TITLE)
        self.quiz_manager = quiz_manager
        self._selected_row: int = 0

        self._load_signals = _LoadSignals(self)
        self._load_signals.finished.connect(self._handle_quiz_fetched)
        self._load_signals.failed.connect(self._handle_quiz_failed)

        self._build_ui()
        self.setStyleSheet(Styles.get_main_window_style())

        # Listeners may fire on API server threads; the signal queues them onto the GUI thread.
        self._session_changed.connect(self._handle_session_event)
        self.quiz_manager.add_listener(self._forward_session_event)

        self._load_catalog()

    def _build_ui(self) -> None:
        central_widget = QWidget(self)
        self.setCentralWidget(central_widget)
        root_layout = QVBoxLayout()
        central_widget.setLayout(root_layout)

        top_row = QHBoxLayout()
        self.catalog_combo = QComboBox(self)
        self.catalog_combo.currentIndexChanged.connect(self._handle_catalog_selection)
        top_row.addWidget(self.catalog_combo, stretch=1)

        self.reload_button = QPushButton(RELOAD_CATALOG_BUTTON, self)
        self.reload_button.clicked.connect(self._load_catalog)
        top_row.addWidget(self.reload_button)

        self.help_button = QPushButton("Help", self)
        self.help_button.clicked.connect(lambda: show_info(self, "Help", HELP_TEXT))
        top_row.addWidget(self.help_button)

        self.about_button = QPushButton(f"About {APP_NAME}", self)
        self.about_button.clicked.connect(self._handle_about)
        top_row.addWidget(self.about_button)
        root_layout.addLayout(top_row)

        self.status_label = QLabel("", self)
        root_layout.addWidget(self.status_label)

        self.question_panel = QuestionPanel(self.quiz_manager, parent=self)
        root_layout.addWidget(self.question_panel, stretch=1)

    # --- Catalog ---

    def _load_catalog(self) -> None:
        try:
            catalog = self.quiz_manager.load_catalog()
        except (CatalogUnavailable, CatalogEmpty) as exc:
            self.status_label.setText(str(exc))
            show_error(self, CATALOG_ERROR_TITLE, str(exc))
            return

        self.catalog_combo.blockSignals(True)
        self.catalog_combo.clear()
        self.catalog_combo.addItem(CATALOG_PLACEHOLDER, None)
        for category, items in catalog.groups():
            for index, entry in items:
                label = f"{category} / {entry.title}" if category else entry.title
                self.catalog_combo.addItem(label, index)
        self.catalog_combo.setCurrentIndex(0)
        self._selected_row = 0
        self.catalog_combo.blockSignals(False)
        self.status_label.setText(CATALOG_LOADED_MESSAGE)

    def _handle_catalog_selection(self, row: int) -> None:
        catalog_index = self.catalog_combo.itemData(row)
        if catalog_index is None:
            return
        if self.quiz_manager.get_state() is SessionState.ACTIVE and self.quiz_manager.get_results().answered_count:
            if not confirm_switch_quiz(self):
                self.catalog_combo.blockSignals(True)
                self.catalog_combo.setCurrentIndex(self._selected_row)
                self.catalog_combo.blockSignals(False)
                return
        self._selected_row = row
        entry = self.quiz_manager.get_catalog_entry(catalog_index)
        self._start_quiz_load(entry)

    # --- Quiz loading ---

    def _start_quiz_load(self, entry: QuizCatalogEntry) -> None:
        token = self.quiz_manager.begin_load()
        self.status_label.setText(LOADING_QUIZ_MESSAGE)

        def fetch() -> None:
            try:
                quiz = self.quiz_manager.fetch_quiz(entry)
            except QuizDeckError as exc:
                self._load_signals.failed.emit(token, str(exc))
                return
            self._load_signals.finished.emit(token, quiz)

        Thread(target=fetch, name="QuizFetch", daemon=True).start()

    def _handle_quiz_fetched(self, token: int, quiz: ImportedQuiz) -> None:
        try:
            installed = self.quiz_manager.complete_load(token, quiz)
        except QuizDeckError as exc:
            self._handle_quiz_failed(token, str(exc))
            return
        if installed:
            self.status_label.setText(quiz.title)

    def _handle_quiz_failed(self, token: int, message: str) -> None:
        if not self.quiz_manager.is_current_load(token):
            logger.info("Ignoring failure of superseded quiz load %d", token)
            return
        logger.warning("Quiz load %d failed: %s", token, message)
        self.status_label.setText(message)
        show_error(self, QUIZ_ERROR_TITLE, message)

    # --- Session updates ---

    def _forward_session_event(self, event: SessionEvent) -> None:
        self._session_changed.emit(event)

    def _handle_session_event(self, event: SessionEvent) -> None:
        if event is SessionEvent.CATALOG_LOADED:
            return
        self.question_panel.refresh()

    def _handle_about(self) -> None:
        show_info(self, f"About {APP_NAME}", f"{APP_NAME} {APP_VERSION}\n\n{APP_ABOUT_TEXT}\n\n{APP_LICENSE}")

    def closeEvent(self, event) -> None:  # noqa: N802 - Qt override
        self.quiz_manager.remove_listener(self._forward_session_event)
        super().closeEvent(event)
