"""Promote a named profile into the ``[default]`` section."""

from __future__ import annotations

import logging
from pathlib import Path

from profile_switcher.catalog import DEFAULT_SECTION, PROFILE_PREFIX
from profile_switcher.exceptions import ProfileNotFoundError
from profile_switcher.store import ConfigDocument, save

logger = logging.getLogger(__name__)


def promote(doc: ConfigDocument, name: str, path: Path) -> None:
    """Overwrite ``[default]`` with the keys of ``[profile <name>]`` and save.

    Keys already in ``[default]`` are dropped first, so the result is an
    exact copy of the chosen profile. ``doc`` is left untouched when the
    profile does not exist.

    Raises:
        ProfileNotFoundError: No ``[profile <name>]`` section.
        StoreWriteError: The document could not be saved.
    """
    section = f"{PROFILE_PREFIX}{name}"
    if not doc.has_section(section):
        raise ProfileNotFoundError(name)
    items = doc.items(section)

    if not doc.has_section(DEFAULT_SECTION):
        doc.add_section(DEFAULT_SECTION)
    logger.debug(
        "Copying keys %s into [%s]",
        ", ".join(key for key, _ in items), DEFAULT_SECTION,
    )
    doc.replace_section(DEFAULT_SECTION, items)

    save(doc, path)
    logger.info("Promoted profile %r to [%s] in %s", name, DEFAULT_SECTION, path)
