"""
Logging setup.

Textual owns the terminal, so nothing may go to stderr while the app runs.
Logs go to a file under the log dir, and to the Textual devtools console
(`textual console`) when one is attached.
"""

import logging
from pathlib import Path

from textual.logging import TextualHandler

from .config import Settings
from .constants import LOG_FILE


def setup_logging(settings: Settings) -> Path | None:
    """
    Configure the root logger. Call once, before the app starts.

    Returns the log file path, or None if the log dir could not be used
    (the devtools handler is still installed in that case).
    """
    root = logging.getLogger()
    root.setLevel(settings.log_level)

    # Remove any pre-existing handlers to avoid duplicates.
    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    root.addHandler(TextualHandler())

    log_file = Path(settings.log_dir) / LOG_FILE
    try:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(str(log_file), encoding="utf-8")
    except OSError as e:
        logging.getLogger(__name__).warning("File logging disabled (%s): %s", log_file, e)
        return None

    fh.setFormatter(fmt)
    root.addHandler(fh)

    logging.captureWarnings(True)
    return log_file
