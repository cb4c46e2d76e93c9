# tnjnotes

Tasks, notes and journal entries, grouped in notebooks and kept in a local
SQLite database. The `tnj` command adds entries quickly. The library gives
full access to the stored data and to the user configuration.

## Installing

```
pip install .
```

This installs the `tnj` command.

## Command line

To add a task, give a title. You can also give a due date (`YYYY-MM-DD`) and
comma-separated tags. The task goes to the end of the task order.

```
tnj add-task "Renew library card" --due 2025-03-01 --tags errands,books
```

Add a note:

```
tnj add-note "Meeting ideas" --content "Ask about the quarterly plan" --tags work
```

Add a journal entry dated today (local date):

```
tnj add-journal "Long walk by the river this morning." --title "Sunday"
```

Each command prints the ID of the new entry, for example
`Task created successfully (ID: 3)`.

If a due date is invalid, an error goes to standard error and nothing is
stored. Configuration and database errors are reported the same way. In
each of these cases the exit status is 1.

Global options:

- `--dev` uses a separate development configuration and database, so
  experiments stay away from your real data:

  ```
  tnj --dev add-task "Try things out"
  ```

- `-c PATH` / `--config PATH` reads the configuration from `PATH`. If the
  file does not exist, a default configuration is written there.
- `-V` / `--version` prints the version.

## Configuration

On first run a `config.toml` is written to the platform's configuration
directory. In development mode that directory is named `tnj-dev`; otherwise
it is `tnj`. The file holds:

- the sidebar width
- key bindings
- the list view mode
- the theme selection
- custom themes
- colour overrides
- the current notebook

The database is always `app.db` in the platform's data directory for the
chosen profile. A `database_path` written in the file is ignored.

The preset themes are `default`, `dark`, `light`, `green` and `monochrome`.
You can add custom themes under `[themes.<name>]`, with the colours `fg`, `bg`,
`highlight_bg`, `highlight_fg` and `tab_bg`. The default configuration already
holds one example custom theme, `lightblue`.

From Python:

```python
from tnjnotes.config import Profile, Theme, load_config, save_config

config = load_config(Profile.PROD)
config.set_theme("dark")             # ThemeNotFoundError for unknown names
print(config.available_themes())     # presets and custom themes, sorted
print(config.active_theme())

config.set_color_overrides(Theme(fg="green", highlight_bg="magenta"))
config.save_theme_from_overrides("mine")   # ThemeNameExistsError for preset names
config.clear_color_overrides()

save_config(config, Profile.PROD)
```

`Config.active_theme()` picks the first of these that is set:

1. the colour overrides
2. the current theme, looked up among custom themes and then presets
3. the `default` preset

The functions `load_config` and `save_config` also take a `path` argument to
use a file other than the profile's. `Config.database_file()` returns the
database path with `~` expanded.

## Library use

```python
from tnjnotes.database import Database
from tnjnotes.models import Notebook, Task

with Database("notes.db") as db:
    notebook_id = db.insert_notebook(Notebook(name="Home"))

    task = Task(title="Water the plants", notebook_id=notebook_id)
    task.order = db.get_max_task_order() + 1
    task_id = db.insert_task(task)

    for item in db.get_all_tasks(notebook_id):
        print(item.id, item.title, item.status)

    db.archive_task(task_id)
```

`tnjnotes.models` defines the records `Task`, `Note`, `JournalEntry` and
`Notebook`. They fill in `created_at` and `updated_at` with the current UTC
time (`YYYY-MM-DD HH:MM:SS`) when these are left empty.

`Database` provides insert, get, update, delete and archive methods for
tasks, notes and journal entries, and insert, get, update and delete for
notebooks. If you fetch an ID that does not exist, or update a record
without an ID, it raises `tnjnotes.schema.DatabaseError`.

Listings:

- Listings take a notebook ID. With `None` they return the entries that
  belong to no notebook.
- Listings leave out archived entries. The `*_including_archived` variants
  include them.
- Tasks are listed by their order, notes newest first, and journal entries
  by date, newest first.
- `get_max_task_order()` returns -1 when there are no tasks.

Notebooks:

- `get_default_notebook()` returns the first notebook by name, or `None`.
- Deleting a notebook keeps its entries and moves them out of the notebook.

## What it does not do

There is no interactive screen. Running `tnj` without a command prints the
help and exits with status 1. Key bindings, themes and the list view mode
are stored in and read from the configuration, but nothing in this package
draws an interface with them. Existing entries can only be listed, edited
or removed through the library.

## Running the tests

```
pip install .[test]
pytest
```