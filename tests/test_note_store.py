import base64
import json
import logging

import pytest

from tasknotes.note_store import NoteStore, load_notes, save_notes


STORED_NOTES = [
    {
        'id': '5C1B3A0E-8D7F-4B8A-9E51-0F4F0E7E1A11',
        'title': 'Groceries',
        'content': 'Groceries\n☐ milk\n☑ bread',
        'createdDate': '2024-05-01T10:00:00',
        'tags': ['home'],
        'isPinned': True,
        'color': 'yellow',
    },
    {
        'id': '7A2E9F31-1C44-4E0B-8D2B-6B9F1E0C2D22',
        'title': 'Styled',
        'content': 'Styled',
        'createdDate': '2024-05-02T09:30:15.250000',
        'richTextData': base64.b64encode(
            b'{"blocks": [{"type": "paragraph", "runs": [{"text": "Styled", "tags": ["bold"]}]}]}'
        ).decode('ascii'),
        'tags': [],
        'isPinned': False,
        'color': 'default',
    },
]


def make_store(tmp_path, data=None):
    path = tmp_path / 'notes.json'
    if data is not None:
        path.write_text(json.dumps(data), encoding='utf-8')
    return NoteStore(path=path), path


def test_missing_file_loads_empty(tmp_path):
    store, _ = make_store(tmp_path)
    assert store.notes == []


def test_corrupt_file_loads_empty_and_logs(tmp_path, caplog):
    path = tmp_path / 'notes.json'
    path.write_text('{not json', encoding='utf-8')
    with caplog.at_level(logging.WARNING, logger='tasknotes.note_store'):
        assert load_notes(str(path)) == []
    assert 'Could not read notes' in caplog.text


@pytest.mark.parametrize('data', [
    {'notes': []},
    [{'title': 'no id', 'content': '', 'createdDate': '2024-01-01T00:00:00'}],
    [{'id': 'x', 'title': 'bad date', 'content': '', 'createdDate': 'yesterday'}],
    ['not an object'],
])
def test_undecodable_file_loads_empty(tmp_path, data):
    store, _ = make_store(tmp_path, data)
    assert store.notes == []


def test_load_then_save_round_trips(tmp_path):
    src = tmp_path / 'in.json'
    src.write_text(json.dumps(STORED_NOTES), encoding='utf-8')
    dst = tmp_path / 'out.json'

    assert save_notes(str(dst), load_notes(str(src)))
    assert json.loads(dst.read_text(encoding='utf-8')) == STORED_NOTES


@pytest.mark.parametrize('created', [736000000.5, 0, '2024-05-01T10:00:00Z'])
def test_created_date_is_written_back_as_stored(tmp_path, created):
    src = tmp_path / 'in.json'
    src.write_text(json.dumps([dict(STORED_NOTES[0], createdDate=created)]), encoding='utf-8')
    dst = tmp_path / 'out.json'

    notes = load_notes(str(src))
    assert len(notes) == 1
    assert save_notes(str(dst), notes)
    assert json.loads(dst.read_text(encoding='utf-8'))[0]['createdDate'] == created


def test_older_file_without_optional_fields(tmp_path):
    store, _ = make_store(tmp_path, [{
        'id': 'a',
        'title': 'Old',
        'content': 'Old',
        'createdDate': '2023-01-01T00:00:00',
    }])
    note = store.get_note('a')
    assert note.tags == []
    assert not note.is_pinned
    assert note.color == 'default'
    assert note.rich_text_data is None


def test_create_note_persists_immediately(tmp_path):
    store, path = make_store(tmp_path)
    note = store.create_note()

    reloaded = NoteStore(path=path)
    assert [n.id for n in reloaded.notes] == [note.id]
    assert reloaded.notes[0].content == ''


def test_notes_keep_insertion_order(tmp_path):
    store, path = make_store(tmp_path)
    ids = [store.create_note().id for _ in range(3)]
    assert [n.id for n in NoteStore(path=path).notes] == ids


def test_delete_note_persists(tmp_path):
    store, path = make_store(tmp_path)
    first = store.create_note()
    second = store.create_note()

    assert store.delete_note(first.id)
    assert not store.delete_note('missing')
    assert [n.id for n in NoteStore(path=path).notes] == [second.id]


def test_ensure_note(tmp_path):
    store, _ = make_store(tmp_path)
    created = store.ensure_note()
    assert store.notes == [created]
    assert store.ensure_note() is created


def test_update_note_rederives_title(tmp_path):
    store, path = make_store(tmp_path)
    note = store.create_note()
    store.update_note(note.id, content='\nPlan\n☐ step', color='green')

    reloaded = NoteStore(path=path).get_note(note.id)
    assert reloaded.title == 'Plan'
    assert reloaded.content == '\nPlan\n☐ step'
    assert reloaded.color == 'green'


def test_update_note_rejects_unknown_fields(tmp_path):
    store, _ = make_store(tmp_path)
    note = store.create_note()
    with pytest.raises(TypeError):
        store.update_note(note.id, title='manual')


def test_toggle_pin(tmp_path):
    store, path = make_store(tmp_path)
    note = store.create_note()
    store.toggle_pin(note.id)
    assert NoteStore(path=path).get_note(note.id).is_pinned


def test_toggle_task_persists(tmp_path):
    store, path = make_store(tmp_path, STORED_NOTES)
    assert [t.text for t in store.get_tasks()] == ['milk', 'bread']

    assert store.toggle_task(0)
    assert not store.toggle_task(5)
    reloaded = NoteStore(path=path)
    assert reloaded.notes[0].content == 'Groceries\n☑ milk\n☑ bread'


def test_write_failure_is_reported_not_raised(tmp_path, caplog):
    blocker = tmp_path / 'blocker'
    blocker.write_text('', encoding='utf-8')
    store = NoteStore(path=blocker / 'notes.json')

    with caplog.at_level(logging.WARNING, logger='tasknotes.note_store'):
        note = store.create_note()
    assert store.notes == [note]
    assert store.last_save_ok is False
    assert 'Could not save notes' in caplog.text


def test_set_text_stores_text_and_blob(tmp_path):
    store, path = make_store(tmp_path)
    note = store.create_note()
    data = b'{"blocks": [{"type": "paragraph", "runs": [{"text": "Plan", "tags": ["bold"]}]}]}'
    store.set_text(note.id, 'Plan', data)

    reloaded = NoteStore(path=path).get_note(note.id)
    assert reloaded.title == 'Plan'
    assert reloaded.content == 'Plan'
    assert reloaded.rich_text_data == data


def test_set_tags_replaces_tags(tmp_path):
    store, path = make_store(tmp_path)
    note = store.create_note()
    store.set_tags(note.id, ['work', 'home'])
    store.set_tags(note.id, [' Home', 'urgent', ' ', 'HOME'])

    assert NoteStore(path=path).get_note(note.id).tags == ['home', 'urgent']
