"""Civic Posts: content visibility and promotion core of a news publishing back end."""

__version__ = "1.0.0"
