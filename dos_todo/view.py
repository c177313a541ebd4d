"""
View widgets for DOS TODO.

The list, the stats bar and the status line. Widgets never reach into the
app's store: rows post TaskToggleRequested / TaskDeleteRequested carrying
the task id, and the app decides what to do with them.

Task text is always wrapped in rich.text.Text so it is shown as typed and
never parsed as markup.
"""

from typing import Iterable

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, VerticalScroll
from textual.message import Message
from textual.timer import Timer
from textual.widgets import Static
from textual import events
from rich.text import Text

from .constants import (
    PROMPT, DEFAULT_PROMPT_TEXT, EMPTY_LIST_TEXT,
    GLYPH_PENDING, GLYPH_COMPLETED, DELETE_LABEL,
    MESSAGE_DURATION,
)
from .task_store import Task, TaskStats


# =============================================================================
# Pure formatting helpers
# =============================================================================

def task_glyph(completed: bool) -> str:
    return GLYPH_COMPLETED if completed else GLYPH_PENDING


def format_stats(stats: TaskStats) -> tuple[str, str, str]:
    return (
        f"Tasks: {stats.total}",
        f"Completed: {stats.completed}",
        f"Pending: {stats.pending}",
    )


def format_prompt(message: str | None = None) -> str:
    return f"{PROMPT} {message if message is not None else DEFAULT_PROMPT_TEXT}"


# =============================================================================
# Messages
# =============================================================================

class TaskToggleRequested(Message):
    """A row was clicked (or Enter/Space pressed on it)"""
    def __init__(self, task_id: int) -> None:
        self.task_id = task_id
        super().__init__()


class TaskDeleteRequested(Message):
    """A row's [X] was clicked (or Delete pressed on it)"""
    def __init__(self, task_id: int) -> None:
        self.task_id = task_id
        super().__init__()


# =============================================================================
# Widgets
# =============================================================================

class DeleteButton(Static):
    """The [X] on each row"""

    DEFAULT_CSS = """
    DeleteButton {
        width: auto;
        padding: 0 1;
    }

    DeleteButton:hover {
        background: $primary;
        color: $background;
    }
    """

    def __init__(self, task_id: int, **kwargs):
        super().__init__(Text(DELETE_LABEL), **kwargs)
        self.task_id = task_id

    def on_click(self, event: events.Click) -> None:
        # Keep the click away from the row, which would toggle
        event.stop()
        self.post_message(TaskDeleteRequested(self.task_id))


class TaskRow(Horizontal, can_focus=True):
    """A single task: checkbox glyph, text, delete affordance"""

    DEFAULT_CSS = """
    TaskRow {
        width: 100%;
        height: 1;
    }

    TaskRow:hover, TaskRow:focus {
        background: $surface;
    }

    TaskRow .task-checkbox {
        width: 2;
    }

    TaskRow .task-text {
        width: 1fr;
    }

    TaskRow.completed .task-text {
        text-style: strike;
        color: $text-muted;
    }
    """

    BINDINGS = [
        Binding("enter,space", "toggle", "Toggle", show=False),
        Binding("delete", "delete", "Delete", show=False),
    ]

    def __init__(self, task: Task, **kwargs):
        super().__init__(**kwargs)
        self.task_id = task.id
        self.completed = task.completed
        self.text = task.text
        if task.completed:
            self.add_class("completed")

    def compose(self) -> ComposeResult:
        yield Static(task_glyph(self.completed), classes="task-checkbox")
        yield Static(Text(self.text), classes="task-text")
        yield DeleteButton(self.task_id, classes="task-delete")

    def on_mount(self) -> None:
        self.tooltip = "Click to toggle completion"

    def on_click(self, event: events.Click) -> None:
        self.post_message(TaskToggleRequested(self.task_id))

    def action_toggle(self) -> None:
        self.post_message(TaskToggleRequested(self.task_id))

    def action_delete(self) -> None:
        self.post_message(TaskDeleteRequested(self.task_id))


class TaskList(VerticalScroll):
    """Scrollable list of TaskRows, or a placeholder when empty"""

    DEFAULT_CSS = """
    TaskList {
        width: 100%;
        height: 1fr;
        border: solid $primary;
        padding: 0 1;
    }

    TaskList .empty-state {
        width: 100%;
        color: $text-muted;
        text-align: center;
        margin-top: 1;
    }
    """

    async def render_list(self, tasks: Iterable[Task]) -> None:
        """Replace all rows with one per task, in the given order."""
        rows = [TaskRow(task) for task in tasks]
        await self.remove_children()
        if rows:
            await self.mount_all(rows)
        else:
            await self.mount(Static(Text(EMPTY_LIST_TEXT), classes="empty-state"))

    @property
    def task_rows(self) -> list[TaskRow]:
        return list(self.query(TaskRow))


class StatsBar(Horizontal):
    """Task / Completed / Pending counters"""

    DEFAULT_CSS = """
    StatsBar {
        width: 100%;
        height: 1;
    }

    StatsBar Static {
        width: 1fr;
        text-align: center;
    }
    """

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.stats = TaskStats(0, 0, 0)

    def compose(self) -> ComposeResult:
        total, completed, pending = format_stats(self.stats)
        yield Static(total, id="task-count")
        yield Static(completed, id="completed-count")
        yield Static(pending, id="pending-count")

    def render_stats(self, stats: TaskStats) -> None:
        self.stats = stats
        total, completed, pending = format_stats(stats)
        self.query_one("#task-count", Static).update(total)
        self.query_one("#completed-count", Static).update(completed)
        self.query_one("#pending-count", Static).update(pending)


class StatusLine(Static):
    """
    The C:\\TODO> prompt line.

    show_message() replaces the prompt for a while, then it reverts.
    Only one revert timer is ever pending: a newer message stops the
    older timer, so a stale timer can never wipe a newer message.
    """

    DEFAULT_CSS = """
    StatusLine {
        width: 100%;
        height: 1;
        color: $text;
    }

    StatusLine.message {
        text-style: bold;
    }
    """

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.message: str | None = None
        self._revert_timer: Timer | None = None

    def render(self) -> Text:
        return Text(format_prompt(self.message))

    def show_message(self, message: str, duration: float = MESSAGE_DURATION) -> None:
        if self._revert_timer is not None:
            self._revert_timer.stop()
        self.message = message
        self.add_class("message")
        self.refresh()
        self._revert_timer = self.set_timer(duration, self._revert)

    def _revert(self) -> None:
        self._revert_timer = None
        self.message = None
        self.remove_class("message")
        self.refresh()

    def on_unmount(self) -> None:
        if self._revert_timer is not None:
            self._revert_timer.stop()
            self._revert_timer = None
