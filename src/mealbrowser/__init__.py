"""Searchable, sectioned recipe browser backed by TheMealDB."""

__version__ = "0.1.0"
