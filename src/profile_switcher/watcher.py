"""One-shot file change watcher built on watchdog.

``wait_for_change`` blocks until the watched file is written, then
releases its observer and returns. Callers that want continuous
monitoring call it again after handling each change, so there is never
more than one live subscription per caller.
"""

from __future__ import annotations

import logging
import os
import threading
from collections.abc import Callable
from pathlib import Path

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

from profile_switcher.exceptions import WatchError

logger = logging.getLogger(__name__)

# Editors and atomic writers replace the file by rename, so a move onto
# the target counts as a write too.
_WRITE_EVENTS = frozenset({"modified", "created", "moved", "closed"})


class TargetFileHandler(FileSystemEventHandler):
    """Sets ``changed`` on the first write-type event for one file."""

    def __init__(self, target: Path, changed: threading.Event) -> None:
        super().__init__()
        self.target = os.path.normcase(str(target))
        self.changed = changed

    def on_any_event(self, event: FileSystemEvent) -> None:
        if event.is_directory or event.event_type not in _WRITE_EVENTS:
            return
        if event.event_type == "moved":
            touched = getattr(event, "dest_path", "")
        else:
            touched = event.src_path
        if os.path.normcase(os.fsdecode(touched)) != self.target:
            return
        logger.debug("Change detected on %s (%s)", self.target, event.event_type)
        self.changed.set()


def wait_for_change(
    path: Path,
    should_stop: Callable[[], bool] | None = None,
    *,
    poll_interval: float = 0.2,
    observer_factory: Callable[[], Observer] = Observer,
) -> bool:
    """Block until ``path`` is written.

    Args:
        path: File to watch. Its parent directory is subscribed
            non-recursively and events are narrowed to this file.
        should_stop: Polled every ``poll_interval`` seconds; when it
            returns True the watch is abandoned.
        poll_interval: Seconds between ``should_stop`` checks.
        observer_factory: Builds the watchdog observer.

    Returns:
        True when a write was seen, False when ``should_stop`` ended the
        watch first.

    Raises:
        WatchError: The subscription could not be created or the
            observer died while waiting.
    """
    target = path.expanduser().resolve()
    changed = threading.Event()
    observer = observer_factory()
    try:
        observer.schedule(
            TargetFileHandler(target, changed), str(target.parent), recursive=False,
        )
        observer.start()
    except Exception as e:
        raise WatchError(f"Cannot watch {target}: {e}") from e

    logger.debug("Watching %s", target)
    try:
        while not changed.wait(poll_interval):
            if should_stop is not None and should_stop():
                logger.debug("Watch on %s cancelled", target)
                return False
            if not observer.is_alive():
                raise WatchError(f"Watcher for {target} stopped unexpectedly")
        return True
    finally:
        observer.stop()
        observer.join(timeout=5.0)
