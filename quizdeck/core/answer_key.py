"""Correct-answer matching for the three answer representations quiz files use.

A question's ``correct_answer`` may be:

* a single zero-based option index,
* a tuple of indices when several options are accepted,
* a literal string.

String answers match either the option text at the chosen index or the
chosen index written as a string (``"2"``). Quiz files in the wild disagree on
which of the two they mean, so both are accepted.
"""

from __future__ import annotations

from quizdeck.core.models import Question


def is_choice_correct(question: Question, choice: int) -> bool:
    correct = question.correct_answer
    if isinstance(correct, bool) or correct is None:
        return False
    if isinstance(correct, int):
        return choice == correct
    if isinstance(correct, tuple):
        return choice in correct
    if isinstance(correct, str):
        option_text = question.options[choice] if 0 <= choice < len(question.options) else ""
        return option_text == correct or str(choice) == correct
    return False


def correct_indices(question: Question) -> set[int]:
    """Return the option indices a view may highlight as correct."""
    correct = question.correct_answer
    if isinstance(correct, bool) or correct is None:
        return set()
    if isinstance(correct, int):
        return {correct} if 0 <= correct < len(question.options) else set()
    if isinstance(correct, tuple):
        return {index for index in correct if 0 <= index < len(question.options)}
    return {index for index in range(len(question.options)) if is_choice_correct(question, index)}


def format_correct_answer(question: Question) -> str:
    """Human readable correct answer, falling back to ``#n`` for missing options."""
    correct = question.correct_answer
    if isinstance(correct, bool) or correct is None:
        return ""
    if isinstance(correct, int):
        return _option_label(question, correct)
    if isinstance(correct, tuple):
        return ", ".join(_option_label(question, index) for index in correct)
    return correct


def _option_label(question: Question, index: int) -> str:
    if 0 <= index < len(question.options) and question.options[index]:
        return question.options[index]
    return f"#{index + 1}"
