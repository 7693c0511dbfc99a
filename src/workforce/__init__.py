"""Workforce API: branches and employees over a document store."""

__version__ = "1.0.0"
