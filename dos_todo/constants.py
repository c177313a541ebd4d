"""
DOS TODO - Shared Constants

Central location for constants used across the app.
"""

# =============================================================================
# TASK LIMITS
# =============================================================================

MAX_TASK_LENGTH = 60          # Characters, after stripping whitespace
FIRST_TASK_ID = 1             # Counter value for a fresh install

# =============================================================================
# TIMING
# =============================================================================

MESSAGE_DURATION = 2.0        # Seconds a status message stays before reverting

# =============================================================================
# STORAGE
# =============================================================================
# Slot names match the keys the browser version kept in localStorage,
# so an exported localStorage dump can be dropped in as-is.

TASKS_SLOT = "dos-todos-bw.json"
COUNTER_SLOT = "dos-todo-counter-bw"
LOG_FILE = "dos_todo.log"

# =============================================================================
# TEXT
# =============================================================================

APP_TITLE = "DOS TODO v1.0"
PROMPT = "C:\\TODO>"
DEFAULT_PROMPT_TEXT = "Type a task and press ENTER"
EMPTY_LIST_TEXT = "No tasks found. Type a task above and press ENTER to add."

GLYPH_PENDING = "☐"
GLYPH_COMPLETED = "☑"
DELETE_LABEL = "[X]"

STARTUP_LINES = (
    "DOS TODO v1.0 (Black & White) - System Ready",
    "Copyright (C) 2025 - All rights reserved",
    "Type tasks and press ENTER to add them",
    "Use ESC to clear completed tasks",
)
