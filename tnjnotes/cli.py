"""Command-line entry point for quickly adding tasks, notes and journal entries."""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence
from datetime import date, datetime

from tnjnotes.config import ConfigError, Profile, load_config
from tnjnotes.database import Database
from tnjnotes.models import JournalEntry, Note, Task
from tnjnotes.schema import DatabaseError

_VERSION = "0.1.15"
_DATE_FORMAT = "%Y-%m-%d"


class CliError(Exception):
    """Raised when a command's arguments cannot be used."""


def _validate_date(text: str) -> None:
    try:
        datetime.strptime(text, _DATE_FORMAT)
    except ValueError as exc:
        raise CliError(
            f"Failed to parse date: Invalid date format '{text}': {exc}"
        ) from exc


def _current_date() -> str:
    return date.today().strftime(_DATE_FORMAT)


def handle_add_task(
    title: str, due: str | None, tags: str | None, db: Database
) -> int:
    """Add a task at the end of the task order and return its id."""
    if due is not None:
        _validate_date(due)
    try:
        max_order = db.get_max_task_order()
    except DatabaseError:
        max_order = -1
    task = Task(title=title, due_date=due, tags=tags, order=max_order + 1)
    task_id = db.insert_task(task)
    print(f"Task created successfully (ID: {task_id})")
    return task_id


def handle_add_note(
    title: str, content: str | None, tags: str | None, db: Database
) -> int:
    """Add a note and return its id."""
    note = Note(title=title, content=content, tags=tags)
    note_id = db.insert_note(note)
    print(f"Note created successfully (ID: {note_id})")
    return note_id


def handle_add_journal(
    content: str, title: str | None, tags: str | None, db: Database
) -> int:
    """Add a journal entry dated today and return its id."""
    entry = JournalEntry(date=_current_date(), content=content, title=title, tags=tags)
    entry_id = db.insert_journal(entry)
    print(f"Journal entry created successfully (ID: {entry_id})")
    return entry_id


def build_parser() -> argparse.ArgumentParser:
    """The argument parser for the ``tnj`` command."""
    parser = argparse.ArgumentParser(
        prog="tnj",
        description="Tasks, Notes, Journal - A lightweight terminal application",
    )
    parser.add_argument("-c", "--config", help="Custom config file path")
    parser.add_argument(
        "--dev",
        action="store_true",
        help="Use development mode (uses separate dev config/database)",
    )
    parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {_VERSION}")
    commands = parser.add_subparsers(dest="command", metavar="COMMAND")

    add_task = commands.add_parser("add-task", help="Quickly add a new task")
    add_task.add_argument("title", help="Task title")
    add_task.add_argument("--due", help="Due date (YYYY-MM-DD)")
    add_task.add_argument("--tags", help="Comma-separated tags")

    add_note = commands.add_parser("add-note", help="Quickly add a new note")
    add_note.add_argument("title", help="Note title")
    add_note.add_argument("--content", help="Note content")
    add_note.add_argument("--tags", help="Comma-separated tags")

    add_journal = commands.add_parser("add-journal", help="Quickly add a new journal entry")
    add_journal.add_argument("content", help="Journal content")
    add_journal.add_argument("--title", help="Journal title")
    add_journal.add_argument("--tags", help="Comma-separated tags")

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command line; return the process exit status."""
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.command is None:
        parser.print_help(sys.stderr)
        return 1

    profile = Profile.DEV if args.dev else Profile.PROD
    try:
        config = load_config(profile, args.config)
        with Database(config.database_file()) as db:
            if args.command == "add-task":
                handle_add_task(args.title, args.due, args.tags, db)
            elif args.command == "add-note":
                handle_add_note(args.title, args.content, args.tags, db)
            else:
                handle_add_journal(args.content, args.title, args.tags, db)
    except (CliError, ConfigError, DatabaseError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())