"""Textual front end for the profile switcher."""
