"""Config store adapter for AWS-style INI files.

Wraps :mod:`configparser` so the rest of the package sees an ordered
document of named sections with ordered key/value pairs. Loading keeps
section and key order, key case and raw values. Saving writes back the
original text with only the rewritten sections spliced in, and replaces
the file atomically so a failed write never corrupts the previous file.
A leading UTF-8 byte order mark is accepted on load and not written back.
"""

from __future__ import annotations

import configparser
import io
import logging
import os
import stat
from collections.abc import Iterable
from pathlib import Path

from profile_switcher.exceptions import (
    StoreParseError,
    StoreReadError,
    StoreWriteError,
)

logger = logging.getLogger(__name__)

# configparser treats one section as "defaults" inherited by every other
# section. AWS files have no such concept, so park it on a name no real
# file can contain.
_NO_DEFAULTS_SECTION = "\x00defaults"
_COMMENT_PREFIXES = ("#", ";")


def _new_parser() -> configparser.ConfigParser:
    parser = configparser.ConfigParser(
        interpolation=None,
        delimiters=("=",),
        strict=True,
        default_section=_NO_DEFAULTS_SECTION,
    )
    parser.optionxform = str  # type: ignore[assignment,method-assign]
    return parser


def _is_blank_or_comment(line: str) -> bool:
    stripped = line.strip()
    return not stripped or stripped.startswith(_COMMENT_PREFIXES)


def _section_spans(lines: list[str]) -> dict[str, tuple[int, int]]:
    """Map each section name to its ``(header, end)`` line range.

    Follows configparser's reading rules: comment and blank lines are
    skipped, lines indented deeper than the current key continue its
    value, and anything else matching ``SECTCRE`` opens a section.
    """
    spans: dict[str, tuple[int, int]] = {}
    current: str | None = None
    start = 0
    key_indent: int | None = None
    for index, line in enumerate(lines):
        if _is_blank_or_comment(line):
            continue
        indent = len(line) - len(line.lstrip())
        if key_indent is not None and indent > key_indent:
            continue
        mo = configparser.ConfigParser.SECTCRE.match(line.strip())
        if mo:
            if current is not None:
                spans[current] = (start, index)
            current = mo.group("header")
            start = index
            key_indent = None
        else:
            key_indent = indent
    if current is not None:
        spans[current] = (start, len(lines))
    return spans


def _format_item(key: str, value: str) -> list[str]:
    first, *rest = value.split("\n")
    head = f"{key} = {first}" if first else f"{key} ="
    return [head + "\n"] + [f"    {line}\n" if line else "\n" for line in rest]


class ConfigDocument:
    """Ordered sections of ordered ``key = value`` pairs.

    The source text is kept alongside the parsed view. Only sections
    rewritten through :meth:`replace_section` or added through
    :meth:`add_section` change on output; every other line, comments
    included, comes back exactly as it was read.
    """

    def __init__(self, parser: configparser.ConfigParser, lines: list[str]) -> None:
        self._parser = parser
        self._lines = lines

    @classmethod
    def from_string(cls, text: str, *, source: str = "<string>") -> ConfigDocument:
        """Parse INI text, raising StoreParseError on malformed content."""
        parser = _new_parser()
        try:
            parser.read_string(text, source=source)
        except configparser.Error as e:
            raise StoreParseError(f"Invalid config in {source}: {e}") from e
        return cls(parser, text.splitlines(keepends=True))

    def sections(self) -> list[str]:
        return self._parser.sections()

    def has_section(self, name: str) -> bool:
        return self._parser.has_section(name)

    def items(self, name: str) -> list[tuple[str, str]]:
        """Return the raw key/value pairs of ``name`` in file order."""
        if not self._parser.has_section(name):
            raise KeyError(name)
        return list(self._parser.items(name, raw=True))

    def add_section(self, name: str) -> None:
        """Append an empty ``[name]`` after a blank separator line."""
        self._parser.add_section(name)
        if self._lines and not self._lines[-1].endswith("\n"):
            self._lines[-1] += "\n"
        if self._lines and self._lines[-1].strip():
            self._lines.append("\n")
        self._lines.append(f"[{name}]\n")

    def replace_section(self, name: str, items: Iterable[tuple[str, str]]) -> None:
        """Drop every key of ``name`` and write ``items`` in order.

        The section keeps its position in the document. Blank and comment
        lines trailing the old body stay, since they usually introduce
        the next section.
        """
        items = list(items)
        for key in list(self._parser.options(name)):
            self._parser.remove_option(name, key)
        for key, value in items:
            self._parser.set(name, key, value)

        span = _section_spans(self._lines).get(name)
        if span is None:
            logger.warning(
                "Cannot locate [%s] in the source text, rewriting it whole", name,
            )
            self._lines = self._render_parser().splitlines(keepends=True)
            return
        start, end = span
        body = self._lines[start + 1:end]
        keep = len(body)
        while keep and _is_blank_or_comment(body[keep - 1]):
            keep -= 1
        if not self._lines[start].endswith("\n"):
            self._lines[start] += "\n"
        new_body = [line for key, value in items for line in _format_item(key, value)]
        self._lines[start + 1:end] = new_body + body[keep:]

    def to_string(self) -> str:
        return "".join(self._lines)

    def _render_parser(self) -> str:
        buf = io.StringIO()
        self._parser.write(buf)
        return buf.getvalue()

    def __repr__(self) -> str:
        return f"ConfigDocument(sections={self.sections()!r})"


def load(path: Path) -> ConfigDocument:
    """Load a config document from ``path``."""
    try:
        text = path.read_text(encoding="utf-8-sig")
    except FileNotFoundError as e:
        raise StoreReadError(f"Config file not found: {path}") from e
    except UnicodeDecodeError as e:
        raise StoreParseError(f"Config file {path} is not valid UTF-8: {e}") from e
    except OSError as e:
        raise StoreReadError(f"Cannot read config {path}: {e}") from e
    doc = ConfigDocument.from_string(text, source=str(path))
    logger.debug("Loaded %s with %d sections", path, len(doc.sections()))
    return doc


def _atomic_write_text(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_name(f".{path.name}.tmp-{os.getpid()}")
    try:
        mode = stat.S_IMODE(path.stat().st_mode)
    except FileNotFoundError:
        mode = None
    try:
        with open(tmp_path, "w", encoding="utf-8") as f:
            f.write(content)
            f.flush()
            os.fsync(f.fileno())
        if mode is not None:
            os.chmod(tmp_path, mode)
        os.replace(tmp_path, path)
        try:
            dir_fd = os.open(path.parent, os.O_RDONLY)
            try:
                os.fsync(dir_fd)
            finally:
                os.close(dir_fd)
        except OSError:
            pass
    finally:
        try:
            if tmp_path.exists():
                tmp_path.unlink()
        except OSError:
            pass


def save(doc: ConfigDocument, path: Path) -> None:
    """Write ``doc`` over ``path`` atomically.

    A symlinked config is written through to its target so the link
    survives the rename.
    """
    try:
        _atomic_write_text(path.resolve(), doc.to_string())
    except OSError as e:
        raise StoreWriteError(f"Cannot write config {path}: {e}") from e
    logger.debug("Saved %s", path)
