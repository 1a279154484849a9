"""Static metadata describing QuizDeck."""

APP_NAME = "QuizDeck"
APP_VERSION = "0.1"
APP_LICENSE = "MIT License"
APP_ABOUT_TEXT = (
    "QuizDeck is a multiple-choice quiz player built with Qt and FastAPI. "
    "Pick a quiz from the catalog, answer one question at a time and review your results."
)

HELP_TEXT = (
    "Quizzes are listed in data/quizzes.json under the content root, either as a flat list:\n\n"
    '[{"title": "Capitals", "file": "data/capitals.json"}]\n\n'
    "or grouped by category:\n\n"
    '[{"category": "Geography", "quizzes": [{"title": "Capitals", "file": "data/capitals.json"}]}]\n\n'
    "Each quiz file holds its questions:\n\n"
    '{"questions": [{"question": "1 + 1 = ?", "options": ["1", "2", "3"], "answer": 1}]}\n\n'
    "The answer may be an option index, a list of accepted indices, or the option text."
)
