"""Interactive AWS profile switcher."""

__version__ = "0.1.0"
