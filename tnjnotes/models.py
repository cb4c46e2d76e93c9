"""Records stored in the notebook database: tasks, notes, journal entries and notebooks."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def now_timestamp() -> str:
    """Return the current UTC time as ``YYYY-MM-DD HH:MM:SS``."""
    return datetime.now(timezone.utc).strftime(TIMESTAMP_FORMAT)


class _Timestamped:
    """Fills in creation and update timestamps that were left empty."""

    created_at: str
    updated_at: str

    def __post_init__(self) -> None:
        if not self.created_at:
            self.created_at = now_timestamp()
        if not self.updated_at:
            self.updated_at = self.created_at


@dataclass
class Task(_Timestamped):
    """A to-do item; ``due_date`` is ``YYYY-MM-DD`` and ``status`` is ``todo`` or ``done``."""

    title: str
    id: int | None = None
    description: str | None = None
    due_date: str | None = None
    status: str = "todo"
    tags: str | None = None
    order: int = 0
    archived: bool = False
    notebook_id: int | None = None
    created_at: str = ""
    updated_at: str = ""


@dataclass
class Note(_Timestamped):
    """A free-form note."""

    title: str
    id: int | None = None
    content: str | None = None
    tags: str | None = None
    archived: bool = False
    notebook_id: int | None = None
    created_at: str = ""
    updated_at: str = ""


@dataclass
class JournalEntry(_Timestamped):
    """A dated journal entry; ``date`` is ``YYYY-MM-DD``."""

    date: str
    id: int | None = None
    title: str | None = None
    content: str | None = None
    tags: str | None = None
    archived: bool = False
    notebook_id: int | None = None
    created_at: str = ""
    updated_at: str = ""


@dataclass
class Notebook(_Timestamped):
    """A named collection that tasks, notes and journal entries may belong to."""

    name: str
    id: int | None = None
    created_at: str = ""
    updated_at: str = ""