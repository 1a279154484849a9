"""Quiz-related constants shared across UI and core layers."""

DEFAULT_CONTENT_ROOT: str = "."
CATALOG_PATH: str = "data/quizzes.json"
DEFAULT_HISTORY_PATH: str = "score_history.json"
CONTENT_ROOT_ENV_VAR: str = "QUIZDECK_CONTENT_ROOT"
HISTORY_PATH_ENV_VAR: str = "QUIZDECK_HISTORY_PATH"

UNTITLED_SET_TEMPLATE: str = "Quiz set {number}"
MISSING_QUESTION_TEXT: str = "(No question text)"
