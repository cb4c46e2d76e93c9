"""Tasks, notes and journal entries in notebooks, stored in SQLite, with a small command line."""

__version__ = "0.1.15"

__all__ = ["__version__"]