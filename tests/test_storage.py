#!/usr/bin/env python3
"""Tests for TaskStorage - slot files, round-trip and damage tolerance.

Run with: pytest tests/test_storage.py -v
"""

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

import pytest

from dos_todo.storage import TaskStorage, format_timestamp, parse_timestamp
from dos_todo.task_store import Task, TaskStore


@pytest.fixture
def storage(tmp_path):
    return TaskStorage(tmp_path / "data")


class TestRoundTrip:
    """Saving then loading gives back the same tasks and counter"""

    def test_round_trip(self, storage):
        store = TaskStore()
        store.add("Buy milk")
        done = store.add("Write report").task
        store.toggle(done.id)

        assert storage.save(store.all(), store.counter) is True

        loaded = storage.load()
        assert [(t.id, t.text, t.completed) for t in loaded] == [
            (t.id, t.text, t.completed) for t in store.all()
        ]
        # Millisecond precision on disk
        for original, restored in zip(store.all(), loaded):
            delta = abs(original.created_at - restored.created_at).total_seconds()
            assert delta < 0.001
        assert storage.load_counter() == store.counter

    def test_empty_round_trip(self, storage):
        storage.save([], 5)
        assert storage.load() == []
        assert storage.load_counter() == 5

    def test_wire_format(self, storage):
        created = datetime(2025, 1, 2, 3, 4, 5, 678000, tzinfo=timezone.utc)
        storage.save([Task(id=4, text="a", completed=True, created_at=created)], 5)
        data = json.loads(storage.tasks_path.read_text())
        assert data == [{
            "id": 4,
            "text": "a",
            "completed": True,
            "createdAt": "2025-01-02T03:04:05.678Z",
        }]
        assert storage.counter_path.read_text() == "5"


class TestMissingOrDamaged:
    """Absent or damaged slots fall back to defaults"""

    def test_missing_slots(self, storage):
        assert storage.load() == []
        assert storage.load_counter() == 1

    @pytest.mark.parametrize("content", [
        "not json",
        '{"id": 1}',
        '[{"id": "one", "text": "a", "completed": false}]',
        '[{"id": 1, "text": "", "completed": false}]',
        '[{"id": 1, "text": "a", "completed": "yes"}]',
        '[{"id": 1, "text": "a", "completed": false, "createdAt": "yesterday"}]',
        '[{"id": 1, "text": "a"}, {"id": 1, "text": "b"}]',
    ])
    def test_corrupt_collection(self, storage, content, caplog):
        storage.data_dir.mkdir(parents=True)
        storage.tasks_path.write_text(content)
        with caplog.at_level(logging.WARNING, logger="dos_todo.storage"):
            assert storage.load() == []
        assert "Could not load tasks" in caplog.text

    @pytest.mark.parametrize("content", ["", "abc", "1.5", "0", "-3"])
    def test_bad_counter(self, storage, content):
        storage.data_dir.mkdir(parents=True)
        storage.counter_path.write_text(content)
        assert storage.load_counter() == 1

    def test_missing_created_at_tolerated(self, storage):
        storage.data_dir.mkdir(parents=True)
        storage.tasks_path.write_text('[{"id": 2, "text": "legacy", "completed": false}]')
        [task] = storage.load()
        assert task.text == "legacy"
        assert task.created_at.tzinfo is not None


class TestSaveFailure:
    """Save problems are logged, never raised"""

    def test_unwritable_dir(self, tmp_path, caplog):
        blocker = tmp_path / "blocker"
        blocker.write_text("a file where the data dir should be")
        storage = TaskStorage(blocker)
        with caplog.at_level(logging.WARNING, logger="dos_todo.storage"):
            assert storage.save([Task(id=1, text="a")], 2) is False
        assert "Could not save tasks" in caplog.text


class TestTimestamps:
    """ISO-8601 helpers"""

    def test_z_suffix(self):
        dt = datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)
        assert format_timestamp(dt) == "2025-06-01T12:00:00.000Z"

    def test_parse_browser_format(self):
        dt = parse_timestamp("2025-06-01T12:00:00.123Z")
        assert dt == datetime(2025, 6, 1, 12, 0, 0, 123000, tzinfo=timezone.utc)

    def test_parse_naive_assumes_utc(self):
        assert parse_timestamp("2025-06-01T12:00:00").tzinfo == timezone.utc


class TestTornWrites:
    """A save that dies half way leaves the previous slot readable"""

    def test_torn_write_keeps_previous_tasks(self, storage, monkeypatch):
        storage.save([Task(id=1, text="precious")], 2)

        real_write_text = Path.write_text

        def torn_write_text(self, data, *args, **kwargs):
            real_write_text(self, data[: len(data) // 2], *args, **kwargs)
            raise OSError("disk full")

        monkeypatch.setattr(Path, "write_text", torn_write_text)
        assert storage.save([Task(id=1, text="precious"), Task(id=2, text="new")], 3) is False
        monkeypatch.undo()

        assert [t.text for t in storage.load()] == ["precious"]
        assert storage.load_counter() == 2
        assert sorted(p.name for p in storage.data_dir.iterdir()) == sorted(
            [storage.tasks_path.name, storage.counter_path.name]
        )

    def test_deeply_nested_slot(self, storage):
        storage.data_dir.mkdir(parents=True)
        storage.tasks_path.write_text("[" * 200000 + "]" * 200000)
        assert storage.load() == []
