import pytest

from tnjnotes.database import Database
from tnjnotes.models import JournalEntry, Note, Notebook, Task
from tnjnotes.schema import DatabaseError


@pytest.fixture
def db(tmp_path):
    database = Database(tmp_path / "app.db")
    yield database
    database.close()


def test_creates_missing_parent_directory(tmp_path):
    path = tmp_path / "nested" / "deeper" / "app.db"
    with Database(path) as database:
        database.insert_note(Note(title="x"))
    assert path.exists()


def test_reopen_keeps_data(tmp_path):
    path = tmp_path / "app.db"
    with Database(path) as database:
        note_id = database.insert_note(Note(title="kept"))
    with Database(path) as database:
        assert database.get_note(note_id).title == "kept"


def test_task_round_trip(db):
    task = Task(
        title="Write report",
        description="quarterly",
        due_date="2024-05-01",
        tags="work,urgent",
        order=3,
        created_at="2024-01-01 10:00:00",
        updated_at="2024-01-01 10:00:00",
    )
    task_id = db.insert_task(task)
    stored = db.get_task(task_id)
    task.id = task_id
    assert stored == task


def test_get_missing_records_raise(db):
    with pytest.raises(DatabaseError):
        db.get_task(999)
    with pytest.raises(DatabaseError):
        db.get_note(999)
    with pytest.raises(DatabaseError):
        db.get_journal(999)
    with pytest.raises(DatabaseError):
        db.get_notebook(999)


def test_update_without_id_raises(db):
    with pytest.raises(DatabaseError):
        db.update_task(Task(title="a"))
    with pytest.raises(DatabaseError):
        db.update_note(Note(title="a"))
    with pytest.raises(DatabaseError):
        db.update_journal(JournalEntry(date="2024-01-01"))
    with pytest.raises(DatabaseError):
        db.update_notebook(Notebook(name="a"))


def test_tasks_sorted_by_order(db):
    db.insert_task(Task(title="second", order=5))
    db.insert_task(Task(title="first", order=1))
    db.insert_task(Task(title="third", order=9))
    assert [t.title for t in db.get_all_tasks(None)] == ["first", "second", "third"]


def test_max_task_order(db):
    assert db.get_max_task_order() == -1
    db.insert_task(Task(title="a", order=4))
    db.insert_task(Task(title="b", order=7))
    assert db.get_max_task_order() == 7


def test_update_task_order(db):
    a = db.insert_task(Task(title="a", order=0))
    b = db.insert_task(Task(title="b", order=1))
    db.update_task_order(a, 10)
    assert [t.id for t in db.get_all_tasks(None)] == [b, a]
    assert db.get_task(a).order == 10


def test_update_task(db):
    task_id = db.insert_task(Task(title="old"))
    task = db.get_task(task_id)
    task.title = "new"
    task.status = "done"
    db.update_task(task)
    stored = db.get_task(task_id)
    assert stored.title == "new"
    assert stored.status == "done"


def test_archive_and_delete_task(db):
    kept = db.insert_task(Task(title="kept"))
    archived = db.insert_task(Task(title="archived", order=1))
    db.archive_task(archived)
    assert [t.id for t in db.get_all_tasks(None)] == [kept]
    assert [t.id for t in db.get_all_tasks_including_archived(None)] == [kept, archived]
    assert db.get_task(archived).archived is True
    db.delete_task(kept)
    with pytest.raises(DatabaseError):
        db.get_task(kept)


def test_notebook_filter(db):
    nb_id = db.insert_notebook(Notebook(name="Work"))
    in_nb = db.insert_task(Task(title="in", notebook_id=nb_id))
    loose = db.insert_task(Task(title="loose"))
    assert [t.id for t in db.get_all_tasks(nb_id)] == [in_nb]
    assert [t.id for t in db.get_all_tasks(None)] == [loose]


def test_notes_newest_first_and_archive(db):
    old = db.insert_note(Note(title="old", created_at="2024-01-01 00:00:00"))
    new = db.insert_note(Note(title="new", created_at="2024-06-01 00:00:00"))
    assert [n.id for n in db.get_all_notes(None)] == [new, old]
    db.archive_note(new)
    assert [n.id for n in db.get_all_notes(None)] == [old]
    assert [n.id for n in db.get_all_notes_including_archived(None)] == [new, old]


def test_note_update_and_delete(db):
    note_id = db.insert_note(Note(title="t", content="body", tags="a"))
    note = db.get_note(note_id)
    note.content = "changed"
    db.update_note(note)
    assert db.get_note(note_id).content == "changed"
    db.delete_note(note_id)
    assert db.get_all_notes_including_archived(None) == []


def test_journals_sorted_by_date_then_created(db):
    a = db.insert_journal(
        JournalEntry(date="2024-03-01", created_at="2024-03-01 08:00:00")
    )
    b = db.insert_journal(
        JournalEntry(date="2024-03-02", created_at="2024-03-02 08:00:00")
    )
    c = db.insert_journal(
        JournalEntry(date="2024-03-01", created_at="2024-03-01 20:00:00")
    )
    assert [j.id for j in db.get_all_journals(None)] == [b, c, a]


def test_journal_round_trip_update_archive_delete(db):
    entry = JournalEntry(date="2024-02-02", title="day", content="text", tags="x")
    entry_id = db.insert_journal(entry)
    stored = db.get_journal(entry_id)
    entry.id = entry_id
    assert stored == entry
    stored.title = "renamed"
    db.update_journal(stored)
    assert db.get_journal(entry_id).title == "renamed"
    db.archive_journal(entry_id)
    assert db.get_all_journals(None) == []
    assert [j.id for j in db.get_all_journals_including_archived(None)] == [entry_id]
    db.delete_journal(entry_id)
    assert db.get_all_journals_including_archived(None) == []


def test_notebooks_sorted_and_default(db):
    assert db.get_default_notebook() is None
    db.insert_notebook(Notebook(name="Zeta"))
    alpha = db.insert_notebook(Notebook(name="Alpha"))
    assert [n.name for n in db.get_all_notebooks()] == ["Alpha", "Zeta"]
    default = db.get_default_notebook()
    assert default.id == alpha


def test_update_notebook(db):
    nb_id = db.insert_notebook(Notebook(name="Old"))
    notebook = db.get_notebook(nb_id)
    notebook.name = "New"
    db.update_notebook(notebook)
    assert db.get_notebook(nb_id).name == "New"


def test_delete_notebook_detaches_items(db):
    nb_id = db.insert_notebook(Notebook(name="Home"))
    task_id = db.insert_task(Task(title="t", notebook_id=nb_id))
    note_id = db.insert_note(Note(title="n", notebook_id=nb_id))
    journal_id = db.insert_journal(JournalEntry(date="2024-01-01", notebook_id=nb_id))
    db.delete_notebook(nb_id)
    with pytest.raises(DatabaseError):
        db.get_notebook(nb_id)
    assert db.get_task(task_id).notebook_id is None
    assert db.get_note(note_id).notebook_id is None
    assert db.get_journal(journal_id).notebook_id is None
    assert [t.id for t in db.get_all_tasks(None)] == [task_id]