"""
Persistence for the task list.

Two slots in the data dir: the task collection (JSON array) and the id
counter (a bare integer). Every failure is logged and swallowed so that a
broken disk never takes the app down; the in-memory list keeps working.
"""

import contextlib
import json
import logging
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Iterable

from .constants import TASKS_SLOT, COUNTER_SLOT, FIRST_TASK_ID
from .task_store import Task

logger = logging.getLogger(__name__)


class CorruptSlotError(ValueError):
    """A slot exists but its content is not what we wrote"""


def format_timestamp(dt: datetime) -> str:
    """ISO-8601 in UTC with millisecond precision and a Z suffix"""
    dt = dt.astimezone(timezone.utc)
    return dt.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_timestamp(raw: str) -> datetime:
    if raw.endswith("Z"):
        raw = raw[:-1] + "+00:00"
    dt = datetime.fromisoformat(raw)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def task_to_record(task: Task) -> dict[str, Any]:
    return {
        "id": task.id,
        "text": task.text,
        "completed": task.completed,
        "createdAt": format_timestamp(task.created_at),
    }


def task_from_record(raw: Any) -> Task:
    """Build a Task from one stored record, or raise CorruptSlotError."""
    if not isinstance(raw, dict):
        raise CorruptSlotError(f"record is not an object: {raw!r}")

    task_id = raw.get("id")
    text = raw.get("text")
    completed = raw.get("completed", False)
    created_raw = raw.get("createdAt")

    # bool is an int subclass; reject it as an id
    if not isinstance(task_id, int) or isinstance(task_id, bool):
        raise CorruptSlotError(f"bad id: {task_id!r}")
    if not isinstance(text, str) or not text.strip():
        raise CorruptSlotError(f"bad text for task {task_id}")
    if not isinstance(completed, bool):
        raise CorruptSlotError(f"bad completed flag for task {task_id}")

    if created_raw is None:
        created_at = datetime.now(timezone.utc)
    else:
        try:
            created_at = parse_timestamp(str(created_raw))
        except ValueError as e:
            raise CorruptSlotError(f"bad createdAt for task {task_id}") from e

    return Task(id=task_id, text=text, completed=completed, created_at=created_at)


def _write_slot(path: Path, payload: str) -> None:
    """Write via a sibling temp file so a torn write never replaces a good slot"""
    tmp = path.with_name(path.name + ".tmp")
    try:
        tmp.write_text(payload, encoding="utf-8")
        os.replace(tmp, path)
    except OSError:
        with contextlib.suppress(OSError):
            tmp.unlink()
        raise


class TaskStorage:
    """
    Slot storage rooted at a directory.

    save() and the load methods never raise.
    """

    def __init__(self, data_dir: str | Path):
        self.data_dir = Path(data_dir)

    @property
    def tasks_path(self) -> Path:
        return self.data_dir / TASKS_SLOT

    @property
    def counter_path(self) -> Path:
        return self.data_dir / COUNTER_SLOT

    def save(self, tasks: Iterable[Task], counter: int) -> bool:
        """Write both slots. Returns False (and logs) if anything failed."""
        try:
            payload = json.dumps([task_to_record(t) for t in tasks])
            self.data_dir.mkdir(parents=True, exist_ok=True)
            _write_slot(self.tasks_path, payload)
            _write_slot(self.counter_path, str(int(counter)))
        except (OSError, TypeError, ValueError) as e:
            logger.warning("Could not save tasks to %s: %s", self.data_dir, e)
            return False
        logger.debug("Saved tasks to %s (counter=%s)", self.data_dir, counter)
        return True

    def load(self) -> list[Task]:
        """Read the collection slot. Missing or damaged slot -> []."""
        path = self.tasks_path
        if not path.exists():
            return []
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
            if not isinstance(data, list):
                raise CorruptSlotError("collection is not a list")
            tasks = [task_from_record(raw) for raw in data]
            ids = [t.id for t in tasks]
            if len(set(ids)) != len(ids):
                raise CorruptSlotError("duplicate task ids")
        except (OSError, UnicodeDecodeError, RecursionError,
                json.JSONDecodeError, CorruptSlotError) as e:
            logger.warning("Could not load tasks from %s: %s", path, e)
            return []
        logger.info("Loaded %d task(s) from %s", len(tasks), path)
        return tasks

    def load_counter(self) -> int:
        """Read the counter slot. Missing or damaged slot -> 1."""
        path = self.counter_path
        if not path.exists():
            return FIRST_TASK_ID
        try:
            counter = int(path.read_text(encoding="utf-8").strip())
        except (OSError, UnicodeDecodeError, ValueError) as e:
            logger.warning("Could not load counter from %s: %s", path, e)
            return FIRST_TASK_ID
        if counter < FIRST_TASK_ID:
            logger.warning("Ignoring out-of-range counter %s in %s", counter, path)
            return FIRST_TASK_ID
        return counter
