#!/usr/bin/env python3
"""Tests for the view formatting helpers.

Run with: pytest tests/test_view.py -v
"""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from dos_todo.task_store import Task, TaskStats
from dos_todo.view import TaskRow, format_prompt, format_stats, task_glyph


class TestTaskRow:
    """Test what a row is built from"""

    def test_glyphs(self):
        assert task_glyph(False) == "☐"
        assert task_glyph(True) == "☑"

    def test_completed_row_class(self):
        row = TaskRow(Task(id=1, text="Buy milk", completed=True))
        assert row.has_class("completed")
        assert row.task_id == 1

    def test_pending_row_class(self):
        row = TaskRow(Task(id=2, text="Buy milk"))
        assert not row.has_class("completed")


class TestStats:
    def test_counts(self):
        assert format_stats(TaskStats(total=2, completed=1, pending=1)) == (
            "Tasks: 2", "Completed: 1", "Pending: 1",
        )


class TestPrompt:
    def test_default_prompt(self):
        assert format_prompt() == "C:\\TODO> Type a task and press ENTER"

    def test_message_prompt(self):
        assert format_prompt('ADDED: "x"') == 'C:\\TODO> ADDED: "x"'
