"""SQLite storage for tasks, notes, journal entries and notebooks."""

from __future__ import annotations

import sqlite3
from collections.abc import Callable, Iterator, Sequence
from contextlib import contextmanager
from pathlib import Path
from typing import Any, TypeVar

from tnjnotes.models import JournalEntry, Note, Notebook, Task, now_timestamp
from tnjnotes.schema import (
    JOURNAL_COLUMNS,
    NOTE_COLUMNS,
    NOTEBOOK_COLUMNS,
    TASK_COLUMNS,
    DatabaseError,
    initialize_schema,
    row_to_journal,
    row_to_note,
    row_to_notebook,
    row_to_task,
)

_T = TypeVar("_T")


def _notebook_filter(notebook_id: int | None) -> tuple[str, tuple[Any, ...]]:
    if notebook_id is None:
        return "notebook_id IS NULL", ()
    return "notebook_id = ?", (notebook_id,)


def _require_id(record_id: int | None) -> int:
    if record_id is None:
        raise DatabaseError("SQLite error: record has no id")
    return record_id


class Database:
    """A connection to the notebook database with its schema in place."""

    def __init__(self, path: str | Path) -> None:
        db_path = Path(path)
        parent = db_path.parent
        if not parent.exists():
            try:
                parent.mkdir(parents=True, exist_ok=True)
            except OSError as exc:
                raise DatabaseError(
                    f"Failed to create database directory: {exc}"
                ) from exc
        try:
            self._conn = sqlite3.connect(db_path)
        except sqlite3.Error as exc:
            raise DatabaseError(f"SQLite error: {exc}") from exc
        initialize_schema(self._conn)

    def __enter__(self) -> Database:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    @property
    def connection(self) -> sqlite3.Connection:
        """The underlying SQLite connection."""
        return self._conn

    def close(self) -> None:
        """Close the connection."""
        self._conn.close()

    # -- low-level helpers -------------------------------------------------

    @contextmanager
    def _transaction(self) -> Iterator[sqlite3.Connection]:
        try:
            with self._conn:
                yield self._conn
        except sqlite3.Error as exc:
            raise DatabaseError(f"SQLite error: {exc}") from exc

    def _insert(self, sql: str, params: Sequence[Any]) -> int:
        with self._transaction() as conn:
            cursor = conn.execute(sql, params)
        return cursor.lastrowid

    def _fetch_all(
        self, sql: str, params: Sequence[Any], mapper: Callable[[Any], _T]
    ) -> list[_T]:
        try:
            rows = self._conn.execute(sql, params).fetchall()
        except sqlite3.Error as exc:
            raise DatabaseError(f"SQLite error: {exc}") from exc
        return [mapper(row) for row in rows]

    def _fetch_optional(
        self, sql: str, params: Sequence[Any], mapper: Callable[[Any], _T]
    ) -> _T | None:
        try:
            row = self._conn.execute(sql, params).fetchone()
        except sqlite3.Error as exc:
            raise DatabaseError(f"SQLite error: {exc}") from exc
        return None if row is None else mapper(row)

    def _fetch_one(
        self, sql: str, params: Sequence[Any], mapper: Callable[[Any], _T]
    ) -> _T:
        record = self._fetch_optional(sql, params, mapper)
        if record is None:
            raise DatabaseError("SQLite error: query returned no rows")
        return record

    def _list(
        self,
        table: str,
        columns: str,
        order_by: str,
        notebook_id: int | None,
        include_archived: bool,
        mapper: Callable[[Any], _T],
    ) -> list[_T]:
        condition, params = _notebook_filter(notebook_id)
        if not include_archived:
            condition = f"archived = 0 AND {condition}"
        sql = f"SELECT {columns} FROM {table} WHERE {condition} ORDER BY {order_by}"
        return self._fetch_all(sql, params, mapper)

    def _execute(self, sql: str, params: Sequence[Any]) -> None:
        with self._transaction() as conn:
            conn.execute(sql, params)

    def _archive(self, table: str, record_id: int) -> None:
        self._execute(
            f"UPDATE {table} SET archived = 1, updated_at = ? WHERE id = ?",
            (now_timestamp(), record_id),
        )

    # -- tasks -------------------------------------------------------------

    def insert_task(self, task: Task) -> int:
        """Insert a task and return its new id."""
        return self._insert(
            'INSERT INTO tasks (title, description, due_date, status, tags, "order", '
            "archived, notebook_id, created_at, updated_at) "
            "VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)",
            (
                task.title,
                task.description,
                task.due_date,
                task.status,
                task.tags,
                task.order,
                int(task.archived),
                task.notebook_id,
                task.created_at,
                task.updated_at,
            ),
        )

    def get_all_tasks(self, notebook_id: int | None = None) -> list[Task]:
        """Unarchived tasks of a notebook (or with none), by order ascending."""
        return self._list(
            "tasks", TASK_COLUMNS, '"order" ASC', notebook_id, False, row_to_task
        )

    def get_all_tasks_including_archived(
        self, notebook_id: int | None = None
    ) -> list[Task]:
        """All tasks of a notebook (or with none), by order ascending."""
        return self._list(
            "tasks", TASK_COLUMNS, '"order" ASC', notebook_id, True, row_to_task
        )

    def get_task(self, id: int) -> Task:
        """Return the task with ``id``; raise DatabaseError if there is none."""
        return self._fetch_one(
            f"SELECT {TASK_COLUMNS} FROM tasks WHERE id = ?", (id,), row_to_task
        )

    def update_task(self, task: Task) -> None:
        """Write every field of an existing task."""
        task_id = _require_id(task.id)
        self._execute(
            "UPDATE tasks SET title = ?, description = ?, due_date = ?, status = ?, "
            'tags = ?, "order" = ?, archived = ?, notebook_id = ?, updated_at = ? '
            "WHERE id = ?",
            (
                task.title,
                task.description,
                task.due_date,
                task.status,
                task.tags,
                task.order,
                int(task.archived),
                task.notebook_id,
                task.updated_at,
                task_id,
            ),
        )

    def get_max_task_order(self) -> int:
        """Largest order value over all tasks, or -1 when there are none."""
        try:
            (max_order,) = self._conn.execute(
                'SELECT MAX("order") FROM tasks'
            ).fetchone()
        except sqlite3.Error as exc:
            raise DatabaseError(f"SQLite error: {exc}") from exc
        return -1 if max_order is None else max_order

    def update_task_order(self, task_id: int, new_order: int) -> None:
        """Set a task's order value."""
        self._execute(
            'UPDATE tasks SET "order" = ?, updated_at = ? WHERE id = ?',
            (new_order, now_timestamp(), task_id),
        )

    def delete_task(self, id: int) -> None:
        """Delete a task."""
        self._execute("DELETE FROM tasks WHERE id = ?", (id,))

    def archive_task(self, id: int) -> None:
        """Mark a task archived."""
        self._archive("tasks", id)

    # -- notes -------------------------------------------------------------

    def insert_note(self, note: Note) -> int:
        """Insert a note and return its new id."""
        return self._insert(
            "INSERT INTO notes (title, content, tags, archived, notebook_id, "
            "created_at, updated_at) VALUES (?, ?, ?, ?, ?, ?, ?)",
            (
                note.title,
                note.content,
                note.tags,
                int(note.archived),
                note.notebook_id,
                note.created_at,
                note.updated_at,
            ),
        )

    def get_all_notes(self, notebook_id: int | None = None) -> list[Note]:
        """Unarchived notes of a notebook (or with none), newest first."""
        return self._list(
            "notes", NOTE_COLUMNS, "created_at DESC", notebook_id, False, row_to_note
        )

    def get_all_notes_including_archived(
        self, notebook_id: int | None = None
    ) -> list[Note]:
        """All notes of a notebook (or with none), newest first."""
        return self._list(
            "notes", NOTE_COLUMNS, "created_at DESC", notebook_id, True, row_to_note
        )

    def get_note(self, id: int) -> Note:
        """Return the note with ``id``; raise DatabaseError if there is none."""
        return self._fetch_one(
            f"SELECT {NOTE_COLUMNS} FROM notes WHERE id = ?", (id,), row_to_note
        )

    def update_note(self, note: Note) -> None:
        """Write every field of an existing note."""
        note_id = _require_id(note.id)
        self._execute(
            "UPDATE notes SET title = ?, content = ?, tags = ?, archived = ?, "
            "notebook_id = ?, updated_at = ? WHERE id = ?",
            (
                note.title,
                note.content,
                note.tags,
                int(note.archived),
                note.notebook_id,
                note.updated_at,
                note_id,
            ),
        )

    def delete_note(self, id: int) -> None:
        """Delete a note."""
        self._execute("DELETE FROM notes WHERE id = ?", (id,))

    def archive_note(self, id: int) -> None:
        """Mark a note archived."""
        self._archive("notes", id)

    # -- journal entries ---------------------------------------------------

    def insert_journal(self, journal: JournalEntry) -> int:
        """Insert a journal entry and return its new id."""
        return self._insert(
            "INSERT INTO journals (date, title, content, tags, archived, notebook_id, "
            "created_at, updated_at) VALUES (?, ?, ?, ?, ?, ?, ?, ?)",
            (
                journal.date,
                journal.title,
                journal.content,
                journal.tags,
                int(journal.archived),
                journal.notebook_id,
                journal.created_at,
                journal.updated_at,
            ),
        )

    def get_all_journals(self, notebook_id: int | None = None) -> list[JournalEntry]:
        """Unarchived entries of a notebook (or with none), newest date first."""
        return self._list(
            "journals",
            JOURNAL_COLUMNS,
            "date DESC, created_at DESC",
            notebook_id,
            False,
            row_to_journal,
        )

    def get_all_journals_including_archived(
        self, notebook_id: int | None = None
    ) -> list[JournalEntry]:
        """All entries of a notebook (or with none), newest date first."""
        return self._list(
            "journals",
            JOURNAL_COLUMNS,
            "date DESC, created_at DESC",
            notebook_id,
            True,
            row_to_journal,
        )

    def get_journal(self, id: int) -> JournalEntry:
        """Return the entry with ``id``; raise DatabaseError if there is none."""
        return self._fetch_one(
            f"SELECT {JOURNAL_COLUMNS} FROM journals WHERE id = ?",
            (id,),
            row_to_journal,
        )

    def update_journal(self, journal: JournalEntry) -> None:
        """Write every field of an existing journal entry."""
        journal_id = _require_id(journal.id)
        self._execute(
            "UPDATE journals SET date = ?, title = ?, content = ?, tags = ?, "
            "archived = ?, notebook_id = ?, updated_at = ? WHERE id = ?",
            (
                journal.date,
                journal.title,
                journal.content,
                journal.tags,
                int(journal.archived),
                journal.notebook_id,
                journal.updated_at,
                journal_id,
            ),
        )

    def delete_journal(self, id: int) -> None:
        """Delete a journal entry."""
        self._execute("DELETE FROM journals WHERE id = ?", (id,))

    def archive_journal(self, id: int) -> None:
        """Mark a journal entry archived."""
        self._archive("journals", id)

    # -- notebooks ---------------------------------------------------------

    def get_all_notebooks(self) -> list[Notebook]:
        """All notebooks by name ascending."""
        return self._fetch_all(
            f"SELECT {NOTEBOOK_COLUMNS} FROM notebooks ORDER BY name ASC",
            (),
            row_to_notebook,
        )

    def get_notebook(self, id: int) -> Notebook:
        """Return the notebook with ``id``; raise DatabaseError if there is none."""
        return self._fetch_one(
            f"SELECT {NOTEBOOK_COLUMNS} FROM notebooks WHERE id = ?",
            (id,),
            row_to_notebook,
        )

    def insert_notebook(self, notebook: Notebook) -> int:
        """Insert a notebook and return its new id."""
        return self._insert(
            "INSERT INTO notebooks (name, created_at, updated_at) VALUES (?, ?, ?)",
            (notebook.name, notebook.created_at, notebook.updated_at),
        )

    def update_notebook(self, notebook: Notebook) -> None:
        """Rename an existing notebook."""
        notebook_id = _require_id(notebook.id)
        self._execute(
            "UPDATE notebooks SET name = ?, updated_at = ? WHERE id = ?",
            (notebook.name, notebook.updated_at, notebook_id),
        )

    def delete_notebook(self, id: int) -> None:
        """Delete a notebook, detaching every task, note and entry that was in it."""
        with self._transaction() as conn:
            for table in ("tasks", "notes", "journals"):
                conn.execute(
                    f"UPDATE {table} SET notebook_id = NULL, updated_at = ? "
                    "WHERE notebook_id = ?",
                    (now_timestamp(), id),
                )
            conn.execute("DELETE FROM notebooks WHERE id = ?", (id,))

    def get_default_notebook(self) -> Notebook | None:
        """The first notebook by name, or None when there are none."""
        return self._fetch_optional(
            f"SELECT {NOTEBOOK_COLUMNS} FROM notebooks ORDER BY name ASC LIMIT 1",
            (),
            row_to_notebook,
        )