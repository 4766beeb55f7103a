"""
Unit tests for the day-scoped JSON detection log.
"""
import json
import threading

import pytest
from facewatch.core.exceptions import InvalidInputError
from facewatch.domain.models.detection_log_entry import DetectionLogEntry
from facewatch.domain.models.face import FaceBox
from facewatch.infrastructure.storage.json_detection_log_repository import (
    JsonDetectionLogRepository,
    safe_camera_name,
)


@pytest.fixture
def repo(tmp_path):
    return JsonDetectionLogRepository(tmp_path / "logs")


def _entry(camera, timestamp, identity="Unknown", confidence=0.0, user_id=None):
    return DetectionLogEntry(
        timestamp=timestamp,
        camera=camera,
        identity=identity,
        confidence=confidence,
        bounding_box=FaceBox(x=10, y=20, width=30, height=40, confidence=0.9),
        user_id=user_id,
    )


class TestAppendAndRead:
    """Tests for append and per-camera reads"""

    def test_lobby_and_door_on_the_same_day(self, repo):
        repo.append(_entry("lobby", "2024-01-01T10:00:00.000Z", "Alice", 0.81, "alice-id"))
        repo.append(_entry("door", "2024-01-01T11:00:00.000Z"))
        repo.append(_entry("lobby", "2024-01-01T09:00:00.000Z"))

        lobby = repo.get_logs("lobby", "2024-01-01")
        assert [e.timestamp for e in lobby] == [
            "2024-01-01T10:00:00.000Z",
            "2024-01-01T09:00:00.000Z",
        ]
        assert lobby[0].identity == "Alice"
        assert lobby[0].user_id == "alice-id"

        everything = repo.get_logs("all", "2024-01-01")
        assert [e.timestamp for e in everything] == [
            "2024-01-01T11:00:00.000Z",
            "2024-01-01T10:00:00.000Z",
            "2024-01-01T09:00:00.000Z",
        ]
        assert {e.camera for e in everything} == {"lobby", "door"}

    def test_file_layout(self, repo, tmp_path):
        repo.append(_entry("lobby", "2024-01-01T10:00:00.000Z", "Alice", 0.8))
        path = tmp_path / "logs" / "lobby_2024-01-01.json"
        records = json.loads(path.read_text(encoding="utf-8"))
        assert records[0]["boundingBox"] == {
            "x": 10.0,
            "y": 20.0,
            "width": 30.0,
            "height": 40.0,
            "confidence": 0.9,
        }
        assert records[0]["identity"] == "Alice"

    def test_day_is_derived_in_utc(self, repo):
        repo.append(_entry("lobby", "2024-01-01T23:30:00-02:00"))
        assert repo.get_logs("lobby", "2024-01-01") == []
        assert len(repo.get_logs("lobby", "2024-01-02")) == 1

    def test_missing_day_is_empty(self, repo):
        assert repo.get_logs("lobby", "2030-05-05") == []
        assert repo.get_logs("all", "2030-05-05") == []

    def test_invalid_date_rejected(self, repo):
        with pytest.raises(InvalidInputError):
            repo.get_logs("lobby", "01-01-2024")
        with pytest.raises(InvalidInputError):
            repo.get_logs("all", "../secrets")

    def test_malformed_file_skipped_in_union(self, repo, tmp_path):
        repo.append(_entry("lobby", "2024-01-01T10:00:00.000Z"))
        (tmp_path / "logs" / "door_2024-01-01.json").write_text("{oops", encoding="utf-8")
        assert len(repo.get_logs("all", "2024-01-01")) == 1

    def test_list_cameras(self, repo):
        repo.append(_entry("lobby", "2024-01-01T10:00:00.000Z"))
        repo.append(_entry("door", "2024-01-01T11:00:00.000Z"))
        repo.append(_entry("garage", "2024-01-02T11:00:00.000Z"))
        assert repo.list_cameras("2024-01-01") == ["door", "lobby"]

    def test_list_cameras_validates_date(self, repo):
        with pytest.raises(InvalidInputError):
            repo.list_cameras("../*")

    def test_concurrent_appends_lose_nothing(self, repo):
        threads_count, per_thread = 8, 25
        errors = []

        def worker(thread_index):
            try:
                for i in range(per_thread):
                    second = thread_index * per_thread + i
                    timestamp = f"2024-01-01T10:{second // 60:02d}:{second % 60:02d}.000Z"
                    repo.append(_entry("lobby", timestamp))
            except Exception as e:  # surfaced by the assertion below
                errors.append(e)

        threads = [threading.Thread(target=worker, args=(t,)) for t in range(threads_count)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert errors == []
        logs = repo.get_logs("lobby", "2024-01-01")
        assert len(logs) == threads_count * per_thread
        assert len({e.timestamp for e in logs}) == threads_count * per_thread


def test_safe_camera_name():
    assert safe_camera_name("front door/1") == "front_door_1"
    assert safe_camera_name("lobby-2") == "lobby-2"
