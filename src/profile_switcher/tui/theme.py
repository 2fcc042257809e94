"""Switcher Dark theme for the TUI."""

from __future__ import annotations

from textual.theme import Theme

SWITCHER_DARK = Theme(
    name="switcher-dark",
    primary="#ff5faf",
    secondary="#81d4fa",
    accent="#ff9e64",
    warning="#ffff00",
    error="#f7768e",
    success="#9ece6a",
    foreground="#c0caf5",
    background="#1a1b26",
    surface="#1e2030",
    panel="#24283b",
    dark=True,
)

# Semantic color constants for Rich markup in widgets.
SELECTED = "#ff5faf"
INFO = "#81d4fa"
WARN = "#ffff00"
ERROR = "#f7768e"
DIM = "#626262"

INFO_ICON = "ℹ️"
WARN_ICON = "\U0001f6a7"
