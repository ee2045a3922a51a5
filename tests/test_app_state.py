from tasknotes.app_state import AppState, Section
from tasknotes.auto_format import FormattingMode
from tasknotes.note_store import NoteStore


def make_state(tmp_path):
    return AppState(store=NoteStore(path=tmp_path / 'notes.json'))


def test_ensure_selection_creates_first_note(tmp_path):
    state = make_state(tmp_path)
    note = state.ensure_selection()
    assert state.selected_note_id == note.id
    assert state.current_note is note


def test_select_note_resets_formatting_mode(tmp_path):
    state = make_state(tmp_path)
    a = state.new_note()
    b = state.new_note()
    state.select_note(a.id)
    state.formatter.toggle(FormattingMode.TASK, '')

    state.select_note(b.id)
    assert state.formatter.mode is FormattingMode.NONE


def test_new_note_switches_to_notes_section(tmp_path):
    state = make_state(tmp_path)
    state.section = Section.TASKS
    note = state.new_note()
    assert state.section is Section.NOTES
    assert state.selected_note_id == note.id


def test_deleting_last_note_creates_replacement(tmp_path):
    state = make_state(tmp_path)
    only = state.ensure_selection()

    replacement = state.delete_note(only.id)
    assert replacement.id != only.id
    assert state.store.notes == [replacement]
    assert state.selected_note_id == replacement.id


def test_deleting_selected_note_selects_neighbour(tmp_path):
    state = make_state(tmp_path)
    a = state.new_note()
    b = state.new_note()
    c = state.new_note()
    state.select_note(b.id)

    assert state.delete_note(b.id) is c
    assert state.selected_note_id == c.id
    assert state.delete_note(c.id) is a


def test_deleting_other_note_keeps_selection(tmp_path):
    state = make_state(tmp_path)
    a = state.new_note()
    b = state.new_note()
    state.select_note(a.id)

    assert state.delete_note(b.id) is a
    assert state.selected_note_id == a.id


def test_sidebar_lists_pinned_first(tmp_path):
    state = make_state(tmp_path)
    a = state.new_note()
    b = state.new_note()
    c = state.new_note()
    state.store.toggle_pin(c.id)
    assert [n.id for n in state.sidebar_notes()] == [c.id, a.id, b.id]


def test_visible_tasks_respects_show_completed(tmp_path):
    state = make_state(tmp_path)
    note = state.new_note()
    state.store.update_note(note.id, content='☐ open\n☑ done')

    assert len(state.visible_tasks()) == 2
    state.show_completed = False
    assert [t.text for t in state.visible_tasks()] == ['open']


def test_sidebar_layout_ignores_text_edits(tmp_path):
    state = make_state(tmp_path)
    a = state.new_note()
    b = state.new_note()
    layout = state.sidebar_layout()

    state.store.set_text(a.id, 'Renamed\nmore', None)
    assert state.sidebar_layout() == layout

    state.store.toggle_pin(b.id)
    assert [entry[0] for entry in state.sidebar_layout()] == [b.id, a.id]
    assert state.sidebar_layout() != layout


def test_sidebar_layout_tracks_tags_and_color(tmp_path):
    state = make_state(tmp_path)
    note = state.new_note()
    layout = state.sidebar_layout()

    state.store.set_tags(note.id, ['work'])
    tagged = state.sidebar_layout()
    assert tagged != layout

    state.store.update_note(note.id, color='pink')
    assert state.sidebar_layout() != tagged
