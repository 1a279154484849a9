"""Qt UI constants used across widgets."""

WINDOW_TITLE: str = "QuizDeck"
CATALOG_PLACEHOLDER: str = "Select a quiz…"

PREV_BUTTON: str = "Previous"
NEXT_BUTTON: str = "Next"
FINISH_BUTTON: str = "Show Results"
RETRY_BUTTON: str = "Try Again"
RELOAD_CATALOG_BUTTON: str = "Reload Catalog"

CATALOG_LOADED_MESSAGE: str = "Catalog loaded. Choose a quiz to begin."
CATALOG_ERROR_TITLE: str = "Catalog unavailable"
QUIZ_ERROR_TITLE: str = "Quiz unavailable"
LOADING_QUIZ_MESSAGE: str = "Loading quiz…"
NO_OPTIONS_MESSAGE: str = "This question has no options to choose from."
CORRECT_FEEDBACK: str = "Correct!"
WRONG_FEEDBACK_TEMPLATE: str = "Wrong. Correct answer: {answer}"
RESULTS_SUMMARY_TEMPLATE: str = "Total: {total} | Correct: {score} | {percentage:.0f}%"
BEST_SCORE_TEMPLATE: str = "Best so far: {score} / {total}"
NOT_ANSWERED_LABEL: str = "not answered"
