#!/usr/bin/env python3
"""
DOS TODO - Main Textual TUI Application

A black & white task list in the style of an old DOS prompt.

Keyboard controls:
- Enter (in the input): Add task
- Click a task / Enter or Space on a focused task: Toggle completed
- Click [X] / Delete on a focused task: Delete task
- Escape: Clear all completed tasks
- Ctrl+Q: Quit
"""

import logging

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Container, Horizontal
from textual.theme import Theme
from textual.widgets import Button, Input, Static
from rich.text import Text

from .config import Settings, load_settings
from .constants import APP_TITLE, MAX_TASK_LENGTH, MESSAGE_DURATION, STARTUP_LINES
from .logging_setup import setup_logging
from .storage import TaskStorage
from .task_store import EventKind, StoreEvent, TaskStore, TaskValidationError
from .view import (
    StatsBar, StatusLine, TaskList, TaskRow,
    TaskDeleteRequested, TaskToggleRequested,
)

logger = logging.getLogger(__name__)


class DosTodoApp(App):
    """
    DOS TODO - a task list with a C:\\TODO> prompt.

    The store, the storage and the message duration are handed in by the
    caller (see main()); the app only wires events to them. Every change
    goes: store -> re-render -> save -> status message.
    """

    TITLE = APP_TITLE

    CSS = """
    Screen {
        background: $background;
    }

    #frame {
        width: 100%;
        height: 100%;
        border: double $primary;
        padding: 0 1;
    }

    #title {
        width: 100%;
        height: 1;
        text-align: center;
        text-style: bold reverse;
        margin-bottom: 1;
    }

    #input-row {
        width: 100%;
        height: 3;
    }

    #task-input {
        width: 1fr;
        border: tall $primary;
    }

    #add-button {
        width: 9;
        min-width: 9;
    }

    #task-list {
        margin-top: 1;
    }

    #stats-bar {
        dock: bottom;
    }
    """

    # No commands to offer, and Escape belongs to clear_completed
    ENABLE_COMMAND_PALETTE = False

    BINDINGS = [
        Binding("escape", "clear_completed", "Clear done", show=False, priority=True),
    ]

    def __init__(
        self,
        store: TaskStore,
        storage: TaskStorage,
        message_duration: float = MESSAGE_DURATION,
    ):
        super().__init__()
        self.store = store
        self.storage = storage
        self.message_duration = message_duration

        self.register_theme(
            Theme(
                name="dos-bw",
                primary="#ffffff",
                secondary="#c0c0c0",
                warning="#ffffff",
                error="#ffffff",
                success="#ffffff",
                accent="#ffffff",
                foreground="#ffffff",
                background="#000000",
                surface="#303030",
                panel="#000000",
                dark=True,
            )
        )
        self.theme = "dos-bw"

    def compose(self) -> ComposeResult:
        """Create the UI layout"""
        with Container(id="frame"):
            yield Static(Text(APP_TITLE), id="title")
            yield StatusLine(id="status-line")
            with Horizontal(id="input-row"):
                yield Input(
                    placeholder=f"Enter task (max {MAX_TASK_LENGTH} chars)",
                    id="task-input",
                )
                yield Button("ADD", id="add-button")
            yield TaskList(id="task-list")
            yield StatsBar(id="stats-bar")

    async def on_mount(self) -> None:
        """Called when app starts"""
        for line in STARTUP_LINES:
            logger.info(line)
        await self.refresh_view()
        self.focus_input()

    def on_unmount(self) -> None:
        """Final flush on the way out"""
        self.persist()

    # -------------------- view / persistence --------------------

    async def refresh_view(self) -> None:
        await self.query_one("#task-list", TaskList).render_list(self.store.all())
        self.query_one("#stats-bar", StatsBar).render_stats(self.store.stats())

    def persist(self) -> None:
        self.storage.save(self.store.all(), self.store.counter)

    def show_message(self, message: str) -> None:
        self.query_one("#status-line", StatusLine).show_message(message, self.message_duration)

    def focus_input(self) -> None:
        self.query_one("#task-input", Input).focus()

    def _refocus_row(self, task_id: int, index: int) -> None:
        """Focus the rebuilt row for task_id, else its neighbour, else the input"""
        rows = self.query_one("#task-list", TaskList).task_rows
        for row in rows:
            if row.task_id == task_id:
                row.focus()
                return
        if rows:
            rows[min(index, len(rows) - 1)].focus()
        else:
            self.focus_input()

    async def _apply(self, outcome: StoreEvent) -> None:
        # Rows are rebuilt below, so remember which one had focus
        focused_row = self.focused if isinstance(self.focused, TaskRow) else None
        if focused_row is not None:
            index = self.query_one("#task-list", TaskList).task_rows.index(focused_row)

        await self.refresh_view()
        self.persist()
        self.show_message(outcome.message)
        logger.debug("%s: %s", outcome.kind.value, outcome.message)

        if focused_row is not None:
            self._refocus_row(focused_row.task_id, index)
        elif self.focused is None:
            self.focus_input()

    # -------------------- event handlers --------------------

    async def add_task(self) -> None:
        task_input = self.query_one("#task-input", Input)
        try:
            outcome = self.store.add(task_input.value)
        except TaskValidationError as e:
            self.show_message(e.message)
            return
        task_input.value = ""
        self.focus_input()
        await self._apply(outcome)

    async def on_input_submitted(self, event: Input.Submitted) -> None:
        if event.input.id == "task-input":
            await self.add_task()

    async def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "add-button":
            await self.add_task()

    async def on_task_toggle_requested(self, event: TaskToggleRequested) -> None:
        outcome = self.store.toggle(event.task_id)
        if outcome is not None:
            await self._apply(outcome)

    async def on_task_delete_requested(self, event: TaskDeleteRequested) -> None:
        outcome = self.store.delete(event.task_id)
        if outcome is not None:
            await self._apply(outcome)

    def check_action(self, action: str, parameters: tuple[object, ...]) -> bool | None:
        # Escape on a pushed screen (dialogs etc.) is that screen's to handle
        if action == "clear_completed" and len(self.screen_stack) > 1:
            return False
        return True

    async def action_clear_completed(self) -> None:
        """Remove every completed task (Escape)"""
        outcome = self.store.clear_completed()
        if outcome.kind == EventKind.NOTHING_TO_CLEAR:
            self.show_message(outcome.message)
            return
        await self._apply(outcome)


def build_app(settings: Settings) -> DosTodoApp:
    """Load saved state and assemble the app"""
    storage = TaskStorage(settings.data_dir)
    store = TaskStore(storage.load(), storage.load_counter())
    return DosTodoApp(store, storage, message_duration=settings.message_duration)


def main():
    """Entry point for DOS TODO"""
    settings = load_settings()
    log_file = setup_logging(settings)
    if log_file is not None:
        logger.info("Logging to %s", log_file)

    app = build_app(settings)
    app.run()


if __name__ == "__main__":
    main()
