"""Database schema creation, migration and row mapping."""

from __future__ import annotations

import sqlite3
from collections.abc import Sequence
from typing import Any

from tnjnotes.models import JournalEntry, Note, Notebook, Task

TASK_COLUMNS = (
    'id, title, description, due_date, status, tags, "order", archived, '
    "notebook_id, created_at, updated_at"
)
NOTE_COLUMNS = "id, title, content, tags, archived, notebook_id, created_at, updated_at"
JOURNAL_COLUMNS = (
    "id, date, title, content, tags, archived, notebook_id, created_at, updated_at"
)
NOTEBOOK_COLUMNS = "id, name, created_at, updated_at"


class DatabaseError(Exception):
    """Raised when a database operation fails."""


_TABLES = (
    """CREATE TABLE IF NOT EXISTS tasks (
        id              INTEGER PRIMARY KEY AUTOINCREMENT,
        title           TEXT NOT NULL,
        description     TEXT,
        due_date        TEXT,
        status          TEXT DEFAULT 'todo',
        tags            TEXT,
        "order"         INTEGER DEFAULT 0,
        archived        INTEGER DEFAULT 0,
        created_at      TEXT NOT NULL,
        updated_at      TEXT NOT NULL
    )""",
    """CREATE TABLE IF NOT EXISTS notes (
        id              INTEGER PRIMARY KEY AUTOINCREMENT,
        title           TEXT NOT NULL,
        content         TEXT,
        tags            TEXT,
        archived        INTEGER DEFAULT 0,
        created_at      TEXT NOT NULL,
        updated_at      TEXT NOT NULL
    )""",
    """CREATE TABLE IF NOT EXISTS journals (
        id              INTEGER PRIMARY KEY AUTOINCREMENT,
        date            TEXT NOT NULL,
        title           TEXT,
        content         TEXT,
        tags            TEXT,
        archived        INTEGER DEFAULT 0,
        created_at      TEXT NOT NULL,
        updated_at      TEXT NOT NULL
    )""",
    """CREATE TABLE IF NOT EXISTS notebooks (
        id              INTEGER PRIMARY KEY AUTOINCREMENT,
        name            TEXT NOT NULL,
        created_at      TEXT NOT NULL,
        updated_at      TEXT NOT NULL
    )""",
)

_INDEXES = (
    "CREATE INDEX IF NOT EXISTS idx_tasks_due_date ON tasks(due_date)",
    "CREATE INDEX IF NOT EXISTS idx_journals_date ON journals(date)",
    "CREATE INDEX IF NOT EXISTS idx_notes_title ON notes(title)",
    "CREATE INDEX IF NOT EXISTS idx_tasks_title ON tasks(title)",
    "CREATE INDEX IF NOT EXISTS idx_journals_title ON journals(title)",
    "CREATE INDEX IF NOT EXISTS idx_notebooks_name ON notebooks(name)",
)

_NOTEBOOK_TABLES = ("tasks", "notes", "journals")


def column_exists(conn: sqlite3.Connection, table: str, column: str) -> bool:
    """Return whether ``table`` has a column called ``column``."""
    try:
        (count,) = conn.execute(
            "SELECT COUNT(*) FROM pragma_table_info(?) WHERE name = ?",
            (table, column),
        ).fetchone()
    except sqlite3.Error as exc:
        raise DatabaseError(f"SQLite error: {exc}") from exc
    return count > 0


def _migrate_add_notebook_id(conn: sqlite3.Connection) -> None:
    for table in _NOTEBOOK_TABLES:
        if not column_exists(conn, table, "notebook_id"):
            conn.execute(f"ALTER TABLE {table} ADD COLUMN notebook_id INTEGER")
            conn.execute(
                f"CREATE INDEX IF NOT EXISTS idx_{table}_notebook_id "
                f"ON {table}(notebook_id)"
            )


def initialize_schema(conn: sqlite3.Connection) -> None:
    """Create tables and indexes if missing and add any missing ``notebook_id`` columns."""
    try:
        for statement in (*_TABLES, *_INDEXES):
            conn.execute(statement)
        _migrate_add_notebook_id(conn)
        conn.commit()
    except sqlite3.Error as exc:
        raise DatabaseError(f"SQLite error: {exc}") from exc


def row_to_task(row: Sequence[Any]) -> Task:
    """Build a Task from a row selected with ``TASK_COLUMNS``."""
    (id_, title, description, due_date, status, tags, order, archived,
     notebook_id, created_at, updated_at) = row
    return Task(
        id=id_,
        title=title,
        description=description,
        due_date=due_date,
        status=status,
        tags=tags,
        order=order,
        archived=archived != 0,
        notebook_id=notebook_id,
        created_at=created_at,
        updated_at=updated_at,
    )


def row_to_note(row: Sequence[Any]) -> Note:
    """Build a Note from a row selected with ``NOTE_COLUMNS``."""
    id_, title, content, tags, archived, notebook_id, created_at, updated_at = row
    return Note(
        id=id_,
        title=title,
        content=content,
        tags=tags,
        archived=archived != 0,
        notebook_id=notebook_id,
        created_at=created_at,
        updated_at=updated_at,
    )


def row_to_journal(row: Sequence[Any]) -> JournalEntry:
    """Build a JournalEntry from a row selected with ``JOURNAL_COLUMNS``."""
    (id_, date, title, content, tags, archived, notebook_id,
     created_at, updated_at) = row
    return JournalEntry(
        id=id_,
        date=date,
        title=title,
        content=content,
        tags=tags,
        archived=archived != 0,
        notebook_id=notebook_id,
        created_at=created_at,
        updated_at=updated_at,
    )


def row_to_notebook(row: Sequence[Any]) -> Notebook:
    """Build a Notebook from a row selected with ``NOTEBOOK_COLUMNS``."""
    id_, name, created_at, updated_at = row
    return Notebook(id=id_, name=name, created_at=created_at, updated_at=updated_at)