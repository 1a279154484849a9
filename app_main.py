"""Application entry point for QuizDeck."""

from __future__ import annotations

import os
from pathlib import Path
import sys

from PySide6.QtWidgets import QApplication

from quizdeck.constants.network_constants import DEFAULT_HOST, DEFAULT_PORT
from quizdeck.constants.quiz_constants import (
    CONTENT_ROOT_ENV_VAR,
    DEFAULT_CONTENT_ROOT,
    DEFAULT_HISTORY_PATH,
    HISTORY_PATH_ENV_VAR,
)
from quizdeck.core.quiz_manager import QuizManager
from quizdeck.core.resource_fetcher import ResourceFetcher
from quizdeck.core.services.score_history import ScoreHistory
from quizdeck.server.api_server import start_api_server
from quizdeck.ui.quiz_main_window import QuizMainWindow
from quizdeck.utils.logging_config import configure_logging


def main() -> None:
    """Initialize logging, start the API server, and launch the Qt UI."""
    logger = configure_logging()
    content_root = os.environ.get(CONTENT_ROOT_ENV_VAR, DEFAULT_CONTENT_ROOT)
    history_path = Path(os.environ.get(HISTORY_PATH_ENV_VAR, DEFAULT_HISTORY_PATH))
    logger.info("Starting QuizDeck with content root %s", content_root)

    quiz_manager = QuizManager(
        fetcher=ResourceFetcher(content_root),
        score_history=ScoreHistory(history_path),
    )
    start_api_server(quiz_manager=quiz_manager, host=DEFAULT_HOST, port=DEFAULT_PORT)
    logger.info("Browser player available at http://%s:%d/", DEFAULT_HOST, DEFAULT_PORT)

    app = QApplication(sys.argv)
    window = QuizMainWindow(quiz_manager=quiz_manager)
    window.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
