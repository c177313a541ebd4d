"""
Task Store: the in-memory task collection and its id counter.

Tasks are kept newest-first. The store never touches the disk or the
screen; callers persist and re-render after each mutation.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Iterable

from .constants import MAX_TASK_LENGTH, FIRST_TASK_ID


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Task:
    """A single task. Only `completed` changes after creation."""
    id: int
    text: str
    completed: bool = False
    created_at: datetime = field(default_factory=utc_now)


@dataclass(frozen=True)
class TaskStats:
    total: int
    completed: int
    pending: int


class TaskValidationError(ValueError):
    """Raised by TaskStore.add() when the text breaks a rule.

    `rule` is "empty" or "too_long"; `message` is what the status line shows.
    """

    def __init__(self, rule: str, message: str) -> None:
        self.rule = rule
        self.message = message
        super().__init__(message)


class EventKind(Enum):
    CREATED = "created"
    COMPLETED = "completed"
    REACTIVATED = "reactivated"
    DELETED = "deleted"
    CLEARED = "cleared"
    NOTHING_TO_CLEAR = "nothing_to_clear"


@dataclass(frozen=True)
class StoreEvent:
    """Outcome of a store operation, used for the status line"""
    kind: EventKind
    task: Task | None = None
    count: int = 0

    @property
    def message(self) -> str:
        if self.kind == EventKind.CREATED:
            return f'ADDED: "{self.task.text}"'
        elif self.kind == EventKind.COMPLETED:
            return f'COMPLETED: "{self.task.text}"'
        elif self.kind == EventKind.REACTIVATED:
            return f'REACTIVATED: "{self.task.text}"'
        elif self.kind == EventKind.DELETED:
            return f'DELETED: "{self.task.text}"'
        elif self.kind == EventKind.CLEARED:
            return f"CLEARED: {self.count} completed task(s)"
        return "No completed tasks to clear."


def validate_text(text: str) -> str:
    """Return stripped text, or raise TaskValidationError."""
    text = text.strip()
    if not text:
        raise TaskValidationError("empty", "ERROR: Task cannot be empty!")
    if len(text) > MAX_TASK_LENGTH:
        raise TaskValidationError(
            "too_long", f"ERROR: Task too long! (Max {MAX_TASK_LENGTH} chars)"
        )
    return text


class TaskStore:
    """
    Ordered task collection plus the next-id counter.

    add() prepends. toggle() and delete() on an unknown id return None
    and change nothing.
    """

    def __init__(self, tasks: Iterable[Task] = (), counter: int = FIRST_TASK_ID):
        self._tasks: list[Task] = list(tasks)
        ids = [t.id for t in self._tasks]
        if len(set(ids)) != len(ids):
            raise ValueError("duplicate task ids")
        # Counter must stay ahead of every id already handed out
        self._counter = max([counter, FIRST_TASK_ID] + [i + 1 for i in ids])

    @property
    def counter(self) -> int:
        """The id the next add() will use"""
        return self._counter

    def get(self, task_id: int) -> Task | None:
        for task in self._tasks:
            if task.id == task_id:
                return task
        return None

    def add(self, text: str) -> StoreEvent:
        text = validate_text(text)
        task = Task(id=self._counter, text=text)
        self._counter += 1
        self._tasks.insert(0, task)
        return StoreEvent(EventKind.CREATED, task=task)

    def toggle(self, task_id: int) -> StoreEvent | None:
        task = self.get(task_id)
        if task is None:
            return None
        task.completed = not task.completed
        kind = EventKind.COMPLETED if task.completed else EventKind.REACTIVATED
        return StoreEvent(kind, task=task)

    def delete(self, task_id: int) -> StoreEvent | None:
        for index, task in enumerate(self._tasks):
            if task.id == task_id:
                del self._tasks[index]
                return StoreEvent(EventKind.DELETED, task=task)
        return None

    def clear_completed(self) -> StoreEvent:
        remaining = [t for t in self._tasks if not t.completed]
        removed = len(self._tasks) - len(remaining)
        if removed == 0:
            return StoreEvent(EventKind.NOTHING_TO_CLEAR)
        self._tasks = remaining
        return StoreEvent(EventKind.CLEARED, count=removed)

    def all(self) -> tuple[Task, ...]:
        return tuple(self._tasks)

    def stats(self) -> TaskStats:
        total = len(self._tasks)
        completed = sum(1 for t in self._tasks if t.completed)
        return TaskStats(total=total, completed=completed, pending=total - completed)

    def __len__(self) -> int:
        return len(self._tasks)
