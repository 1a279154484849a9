"""Tests for the quiz session state machine."""

import pytest

from conftest import make_question
from quizdeck.core.errors import EmptyQuestionSet, InvalidChoice, NotActive
from quizdeck.core.models import SessionState
from quizdeck.core.services.quiz_session import QuizSession


@pytest.fixture
def session(sample_questions):
    session = QuizSession()
    session.load(sample_questions)
    return session


def test_new_session_is_unloaded():
    session = QuizSession()
    assert session.state is SessionState.UNLOADED
    with pytest.raises(NotActive):
        session.current_question()
    with pytest.raises(NotActive):
        session.advance()
    with pytest.raises(NotActive):
        session.results()
    with pytest.raises(NotActive):
        session.reset()


def test_load_empty_question_set_keeps_session_unloaded():
    session = QuizSession()
    with pytest.raises(EmptyQuestionSet):
        session.load([])
    assert session.state is SessionState.UNLOADED


def test_load_empty_question_set_keeps_previous_quiz(session):
    session.submit_answer(1)
    with pytest.raises(EmptyQuestionSet):
        session.load([])
    assert session.state is SessionState.ACTIVE
    assert session.score == 1


def test_load_starts_at_first_question(session, sample_questions):
    assert session.state is SessionState.ACTIVE
    assert session.current_index == 0
    assert session.score == 0
    assert session.get_answers() == {}
    assert session.current_question() == sample_questions[0]
    assert session.progress_label() == "Question 1 / 3"


def test_advancing_len_minus_one_times_then_once_more_completes(session):
    for _ in range(session.question_count - 1):
        assert session.advance() is SessionState.ACTIVE
    assert session.is_last_question()
    assert session.advance() is SessionState.COMPLETED
    assert session.current_index == session.question_count - 1
    with pytest.raises(NotActive):
        session.advance()


def test_retreat_is_clamped_at_first_question(session):
    assert session.retreat() == 0
    session.advance()
    session.advance()
    assert session.retreat() == 1
    assert session.retreat() == 0
    assert session.retreat() == 0


def test_index_answer_scores(session):
    record = session.submit_answer(1)
    assert record.is_correct
    assert record.chosen_index == 1
    assert record.question_index == 0
    assert session.score == 1


def test_index_set_answer_scores(session):
    session.advance()
    record = session.submit_answer(0)
    assert record.is_correct
    assert session.score == 1


def test_string_answer_scores(session):
    session.advance()
    session.advance()
    assert session.submit_answer(1).is_correct


def test_second_submission_returns_first_record(session):
    first = session.submit_answer(0)
    second = session.submit_answer(1)
    assert second is first
    assert not second.is_correct
    assert session.score == 0


def test_score_increments_once_per_question(session):
    session.submit_answer(1)
    session.submit_answer(1)
    session.advance()
    session.retreat()
    session.submit_answer(1)
    assert session.score == 1
    assert len(session.get_answers()) == 1


def test_answer_is_kept_when_navigating_back(session):
    session.submit_answer(2)
    session.advance()
    session.retreat()
    assert session.answer_for(0).chosen_index == 2


def test_question_without_options_reports_wrong_without_recording():
    session = QuizSession()
    session.load([make_question(options=[], correct=0), make_question(correct=0)])
    record = session.submit_answer(0)
    assert record.question_index == 0
    assert record.chosen_index is None
    assert not record.is_correct
    assert session.answer_for(0) is None
    assert session.score == 0
    session.advance()
    assert session.submit_answer(0).is_correct


def test_choice_out_of_range_is_rejected(session):
    with pytest.raises(InvalidChoice):
        session.submit_answer(5)
    with pytest.raises(InvalidChoice):
        session.submit_answer(-1)
    assert session.answer_for(0) is None


def test_submit_after_completion_is_not_active(session):
    for _ in range(session.question_count):
        session.advance()
    with pytest.raises(NotActive):
        session.submit_answer(0)


def test_results_percentage():
    session = QuizSession()
    session.load([make_question(correct=0) for _ in range(4)])
    for choice in (0, 0, 0, 1):
        session.submit_answer(choice)
        session.advance()
    results = session.results()
    assert session.state is SessionState.COMPLETED
    assert results.total_questions == 4
    assert results.score == 3
    assert results.percentage == 75.0
    assert [o.is_correct for o in results.breakdown] == [True, True, True, False]


def test_partial_results_while_active(session):
    session.submit_answer(1)
    results = session.results()
    assert results.score == 1
    assert results.answered_count == 1
    assert results.breakdown[1].answered is False
    assert results.breakdown[1].chosen_index is None
    assert results.percentage == pytest.approx(100 / 3)


def test_score_matches_correct_answer_records(session):
    choices = [1, 1, 0]
    for choice in choices:
        session.submit_answer(choice)
        session.advance()
    answers = session.get_answers()
    assert session.score == sum(1 for record in answers.values() if record.is_correct)
    assert session.score == 1


def test_reset_after_completion_restarts_same_questions(session, sample_questions):
    session.submit_answer(1)
    for _ in range(session.question_count):
        session.advance()
    session.reset()
    assert session.state is SessionState.ACTIVE
    assert session.current_index == 0
    assert session.score == 0
    assert session.get_answers() == {}
    assert session.questions == tuple(sample_questions)


def test_clear_unloads(session):
    session.clear()
    assert session.state is SessionState.UNLOADED
    assert session.question_count == 0
