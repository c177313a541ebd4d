"""
DOS TODO - A Black & White Task List for the Terminal

A Textual TUI application providing:
- Task entry with a C:\\TODO> style prompt
- Click (or Enter) to complete, [X] to delete
- Escape to clear completed tasks

Tasks are kept on disk between sessions.
"""

__version__ = "1.0.0"
