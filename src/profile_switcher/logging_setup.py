"""File logging for the switcher.

The terminal belongs to the TUI while it runs, so log records go to a
file instead of stderr. A log file that cannot be opened only disables
logging; it never stops the switcher from starting.
"""

from __future__ import annotations

import logging
from pathlib import Path

from profile_switcher.exceptions import SettingsError

LOGGER_NAME = "profile_switcher"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str, log_path: Path) -> str | None:
    """Route ``profile_switcher.*`` records at ``level`` to ``log_path``.

    Replaces any handler installed by an earlier call. When the log file
    cannot be opened a ``NullHandler`` is installed instead and a warning
    line is returned for the caller to show.

    Raises:
        SettingsError: ``level`` is not a logging level name.
    """
    levels = logging.getLevelNamesMapping()
    level_name = level.upper()
    if level_name not in levels:
        raise SettingsError(f"Unknown log level: {level!r}")

    warning = None
    handler: logging.Handler
    try:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(log_path, encoding="utf-8")
    except OSError as e:
        handler = logging.NullHandler()
        warning = f"Cannot open log file {log_path}, logging disabled: {e}"
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    root = logging.getLogger(LOGGER_NAME)
    for old in list(root.handlers):
        root.removeHandler(old)
        old.close()
    root.addHandler(handler)
    root.setLevel(levels[level_name])
    root.propagate = False
    return warning
