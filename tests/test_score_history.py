"""Tests for the score history log."""

from datetime import datetime, timedelta, timezone
import json
from threading import Thread

from quizdeck.core.models import ScoreRecord
from quizdeck.core.services.score_history import ScoreHistory


def _record(title, score, minutes=0):
    finished = datetime(2024, 1, 1, tzinfo=timezone.utc) + timedelta(minutes=minutes)
    return ScoreRecord(title=title, score=score, total_questions=5, finished_at=finished)


def test_records_are_persisted_and_reloaded(tmp_path):
    path = tmp_path / "history" / "scores.json"
    history = ScoreHistory(path)
    history.record(_record("Sums", 3))
    history.record(_record("Sums", 4, minutes=1))

    payload = json.loads(path.read_text(encoding="utf-8"))
    assert [item["score"] for item in payload] == [3, 4]

    reloaded = ScoreHistory(path)
    assert reloaded.get_records() == history.get_records()


def test_best_for_prefers_highest_then_earliest():
    history = ScoreHistory()
    history.record(_record("Sums", 4, minutes=2))
    history.record(_record("Sums", 4, minutes=1))
    history.record(_record("Sums", 2))
    history.record(_record("Other", 5))
    best = history.best_for("Sums")
    assert best.score == 4
    assert best.finished_at.minute == 1
    assert history.best_for("Missing") is None


def test_unreadable_file_starts_empty(tmp_path):
    path = tmp_path / "scores.json"
    path.write_text("not json", encoding="utf-8")
    assert ScoreHistory(path).get_records() == []


def test_malformed_entries_are_skipped(tmp_path):
    path = tmp_path / "scores.json"
    path.write_text(
        json.dumps([
            {"title": "Sums", "score": 1, "total_questions": 2, "finished_at": "2024-01-01T00:00:00+00:00"},
            {"title": "Broken"},
        ]),
        encoding="utf-8",
    )
    records = ScoreHistory(path).get_records()
    assert [record.title for record in records] == ["Sums"]


def test_unreadable_bytes_start_an_empty_history(tmp_path):
    path = tmp_path / "scores.json"
    path.write_bytes(b"[\xff\xfe]")
    assert ScoreHistory(path).get_records() == []


def test_concurrent_records_are_all_written(tmp_path):
    path = tmp_path / "scores.json"
    history = ScoreHistory(path)
    threads = [
        Thread(target=history.record, args=(_record(f"Quiz {n}", n, minutes=n),))
        for n in range(20)
    ]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    assert len(history.get_records()) == 20
    payload = json.loads(path.read_text(encoding="utf-8"))
    assert sorted(item["title"] for item in payload) == sorted(f"Quiz {n}" for n in range(20))
