"""Tests for the HTTP surface of the quiz player."""

from fastapi.testclient import TestClient
import pytest

from conftest import make_question
from quizdeck.core.quiz_manager import QuizManager
from quizdeck.core.resource_fetcher import ResourceFetcher
from quizdeck.core.services.score_history import ScoreHistory
from quizdeck.server.api_server import create_api_app


@pytest.fixture
def history():
    return ScoreHistory()


@pytest.fixture
def client(fetcher, history):
    manager = QuizManager(fetcher, score_history=history)
    return TestClient(create_api_app(manager))


def test_player_page_is_served(client):
    response = client.get("/")
    assert response.status_code == 200
    assert "QuizDeck" in response.text


def test_catalog_lists_entries(client):
    response = client.get("/catalog")
    assert response.status_code == 200
    assert response.json()["entries"] == [
        {"index": 0, "title": "Sums", "category": "Math"},
        {"index": 1, "title": "Colours", "category": None},
    ]


def test_missing_catalog_is_bad_gateway(tmp_path):
    client = TestClient(create_api_app(QuizManager(ResourceFetcher(tmp_path))))
    response = client.get("/catalog")
    assert response.status_code == 502


def test_question_before_selection(client):
    assert client.get("/question").json() == {"state": "unloaded"}
    assert client.post("/answer", json={"selected_option_index": 0}).status_code == 409
    assert client.post("/next").status_code == 409
    assert client.get("/results").status_code == 409


def test_full_quiz_flow(client, history):
    client.get("/catalog")
    response = client.post("/quiz", json={"catalog_index": 0})
    assert response.status_code == 201
    assert response.json() == {"title": "Sums", "question_count": 2}

    question = client.get("/question").json()
    assert question["state"] == "active"
    assert question["progress"] == "Question 1 / 2"
    assert question["options"] == ["1", "2", "3"]
    assert question["answered"] is False
    assert question["correct_answer"] is None

    answer = client.post("/answer", json={"selected_option_index": 1})
    assert answer.status_code == 201
    assert answer.json()["is_correct"] is True
    assert answer.json()["score"] == 1

    repeat = client.post("/answer", json={"selected_option_index": 0}).json()
    assert repeat["chosen_index"] == 1
    assert repeat["score"] == 1

    question = client.get("/question").json()
    assert question["answered"] is True
    assert question["correct_indices"] == [1]
    assert question["correct_answer"] == "2"

    assert client.post("/prev").json() == {"state": "active", "index": 0}
    assert client.post("/next").json() == {"state": "active", "index": 1}
    client.post("/answer", json={"selected_option_index": 1})
    assert client.post("/next").json()["state"] == "completed"
    assert client.get("/question").json() == {"state": "completed"}

    results = client.get("/results").json()
    assert results["title"] == "Sums"
    assert results["score"] == 1
    assert results["percentage"] == 50.0
    assert [item["is_correct"] for item in results["breakdown"]] == [True, False]
    assert results["best_score"] == {"score": 1, "total_questions": 2}
    assert len(history.get_records()) == 1

    assert client.post("/reset").json() == {"state": "active", "index": 0}
    assert client.get("/question").json()["answered"] is False


def test_invalid_choice_is_unprocessable(client):
    client.get("/catalog")
    client.post("/quiz", json={"catalog_index": 0})
    response = client.post("/answer", json={"selected_option_index": 9})
    assert response.status_code == 422


def test_unknown_catalog_index(client):
    client.get("/catalog")
    assert client.post("/quiz", json={"catalog_index": 7}).status_code == 404


def test_unavailable_quiz_file(client, content_root):
    client.get("/catalog")
    (content_root / "data" / "sums.json").unlink()
    assert client.post("/quiz", json={"catalog_index": 0}).status_code == 502


def test_answer_to_question_without_options(tmp_path):
    manager = QuizManager(ResourceFetcher(tmp_path))
    manager.load_questions("Blank", [make_question(options=[], correct=0)])
    client = TestClient(create_api_app(manager))
    response = client.post("/answer", json={"selected_option_index": 0})
    assert response.status_code == 201
    assert response.json()["chosen_index"] is None
    assert response.json()["is_correct"] is False
    assert response.json()["score"] == 0
    assert client.get("/question").json()["answered"] is False


def test_results_without_history_have_no_best_score(tmp_path):
    manager = QuizManager(ResourceFetcher(tmp_path))
    manager.load_questions("Inline", [make_question(correct=0)])
    client = TestClient(create_api_app(manager))
    assert client.get("/results").json()["best_score"] is None
