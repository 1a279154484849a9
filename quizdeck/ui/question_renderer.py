"""Question rendering utilities for displaying quiz questions."""

from __future__ import annotations

from html import escape

from quizdeck.constants.ui_constants import (
    BEST_SCORE_TEMPLATE,
    NOT_ANSWERED_LABEL,
    RESULTS_SUMMARY_TEMPLATE,
)
from quizdeck.core.answer_key import correct_indices
from quizdeck.core.markdown_math_renderer import renderer
from quizdeck.core.models import AnswerRecord, Question, QuizResults, ScoreRecord


def render_question_document(
    question: Question,
    answer: AnswerRecord | None = None,
    font_size: int = 14,
) -> str:
    """Render a question, its options and, once answered, the explanation as HTML.

    Args:
        question: The question to display (text supports Markdown and LaTeX)
        answer: The recorded answer for this question, if any
        font_size: Font size in points for the question text (default 14)

    Returns:
        HTML string ready for display in QWebEngineView
    """
    parts = [renderer.render_fragment(question.text)]
    highlighted = correct_indices(question) if answer is not None else set()
    for idx, option in enumerate(question.options):
        css_class = "option"
        if answer is not None:
            if idx in highlighted:
                css_class += " correct"
            elif idx == answer.chosen_index:
                css_class += " wrong"
        letter = chr(ord("A") + idx) if idx < 26 else str(idx + 1)
        body = renderer.render_inline(option) or "(empty)"
        parts.append(f'<div class="{css_class}"><strong>{escape(letter)}.</strong> {body}</div>')
    if answer is not None and question.explanation:
        parts.append(f'<div class="explanation">{renderer.render_fragment(question.explanation)}</div>')
    return renderer.wrap_with_mathjax("\n".join(parts), font_size=font_size)


def render_results_document(
    title: str,
    results: QuizResults,
    font_size: int = 14,
    best: ScoreRecord | None = None,
) -> str:
    """Render the final score, the best recorded attempt and a per-question summary as HTML."""
    summary = RESULTS_SUMMARY_TEMPLATE.format(
        total=results.total_questions,
        score=results.score,
        percentage=results.percentage,
    )
    items = []
    for outcome in results.breakdown:
        if not outcome.answered:
            verdict = NOT_ANSWERED_LABEL
            css_class = "option"
        elif outcome.is_correct:
            verdict = "correct"
            css_class = "option correct"
        else:
            verdict = "wrong"
            css_class = "option wrong"
        text = renderer.render_inline(outcome.question_text)
        items.append(f'<div class="{css_class}">{outcome.index + 1}. {text} ({verdict})</div>')
    header = [f"<h2>{escape(title)}</h2>", f"<p>{escape(summary)}</p>"]
    if best is not None:
        best_line = BEST_SCORE_TEMPLATE.format(score=best.score, total=best.total_questions)
        header.append(f"<p>{escape(best_line)}</p>")
    body = "\n".join(header + items)
    return renderer.wrap_with_mathjax(body, title=title, font_size=font_size)
