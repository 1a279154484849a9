"""Shared fixtures for the quiz player tests."""

import json

import pytest

from quizdeck.core.models import Question
from quizdeck.core.resource_fetcher import ResourceFetcher


def make_question(text="Q", options=("a", "b", "c"), correct=None, explanation=None):
    return Question(text=text, options=tuple(options), correct_answer=correct, explanation=explanation)


@pytest.fixture
def sample_questions():
    """Three questions covering the index, index-set and string answer forms."""
    return [
        make_question("First", ["a", "b", "c"], correct=1),
        make_question("Second", ["x", "y", "z"], correct=(0, 2)),
        make_question("Third", ["red", "green"], correct="green"),
    ]


@pytest.fixture
def content_root(tmp_path):
    """A content root with a grouped catalog and two quiz files."""
    data_dir = tmp_path / "data"
    data_dir.mkdir()
    catalog = [
        {"category": "Math", "quizzes": [{"title": "Sums", "file": "data/sums.json"}]},
        {"title": "Colours", "file": "data/colours.json"},
    ]
    (data_dir / "quizzes.json").write_text(json.dumps(catalog), encoding="utf-8")
    sums = [
        {"question": "1 + 1 = ?", "options": ["1", "2", "3"], "answer": 1},
        {"question": "2 + 2 = ?", "options": ["4", "5"], "answer": 0},
    ]
    (data_dir / "sums.json").write_text(json.dumps(sums), encoding="utf-8")
    colours = {
        "questions": [
            {"prompt": "Colour of grass?", "choices": ["blue", "green"], "answer": "green"},
        ]
    }
    (data_dir / "colours.json").write_text(json.dumps(colours), encoding="utf-8")
    return tmp_path


@pytest.fixture
def fetcher(content_root):
    return ResourceFetcher(content_root)
