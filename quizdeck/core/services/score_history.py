"""Service that keeps a log of finished quiz scores."""

from __future__ import annotations

from dataclasses import asdict
from datetime import datetime
import json
import logging
from pathlib import Path
from threading import Lock

from quizdeck.core.models import ScoreRecord

logger = logging.getLogger(__name__)


class ScoreHistory:
    """Appends final scores to a JSON file.

    The quiz core only writes to the history; nothing in a session depends on
    what was recorded before. Record and read calls may arrive from the Qt
    thread and FastAPI worker threads; an internal lock serializes them.
    """

    def __init__(self, file_path: Path | None = None) -> None:
        self._lock = Lock()
        self._file_path = file_path.resolve() if file_path is not None else None
        self._records: list[ScoreRecord] = []
        if self._file_path is not None and self._file_path.exists():
            self._records = self._read_records(self._file_path)

    def record(self, record: ScoreRecord) -> None:
        with self._lock:
            self._records.append(record)
            if self._file_path is not None:
                self._write_records()
        logger.info(
            "Recorded score %d/%d for %r", record.score, record.total_questions, record.title
        )

    def get_records(self) -> list[ScoreRecord]:
        with self._lock:
            return list(self._records)

    def best_for(self, title: str) -> ScoreRecord | None:
        """Return the highest score recorded for a quiz, earliest first on ties."""
        with self._lock:
            matching = [record for record in self._records if record.title == title]
        if not matching:
            return None
        return sorted(matching, key=lambda r: (-r.score, r.finished_at))[0]

    def _write_records(self) -> None:
        assert self._file_path is not None
        self._file_path.parent.mkdir(parents=True, exist_ok=True)
        payload = [
            {**asdict(record), "finished_at": record.finished_at.isoformat()}
            for record in self._records
        ]
        self._file_path.write_text(json.dumps(payload, indent=2), encoding="utf-8")

    @staticmethod
    def _read_records(file_path: Path) -> list[ScoreRecord]:
        try:
            payload = json.loads(file_path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
            logger.warning("Ignoring unreadable score history %s: %s", file_path, exc)
            return []
        records: list[ScoreRecord] = []
        for item in payload if isinstance(payload, list) else []:
            try:
                records.append(
                    ScoreRecord(
                        title=str(item["title"]),
                        score=int(item["score"]),
                        total_questions=int(item["total_questions"]),
                        finished_at=datetime.fromisoformat(item["finished_at"]),
                    )
                )
            except (KeyError, TypeError, ValueError):
                logger.warning("Skipping malformed score history entry: %r", item)
        return records
