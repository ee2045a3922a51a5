import json

from tasknotes.note import Note, derive_title
from tasknotes.rich_text_serializer import get_plain_text
from tasknotes.tasks import (
    TaskItem,
    extract_tasks,
    filter_tasks,
    task_summary,
    toggle_marker,
    toggle_task,
    toggle_task_item,
)


def make_note(content):
    note = Note.new()
    note.update_content(content)
    return note


def test_extract_tasks_in_note_then_line_order():
    a = make_note('☐ one\nplain\n☑ two')
    b = make_note('☐ three')
    tasks = extract_tasks([a, b])

    assert [t.id for t in tasks] == [0, 1, 2]
    assert [t.text for t in tasks] == ['one', 'two', 'three']
    assert [t.completed for t in tasks] == [False, True, False]
    assert [t.line_index for t in tasks] == [0, 2, 0]
    assert [t.note_id for t in tasks] == [a.id, a.id, b.id]


def test_extract_tasks_keeps_text_untrimmed():
    tasks = extract_tasks([make_note('☐  spaced ')])
    assert tasks[0].text == ' spaced '


def test_extract_tasks_ignores_other_prefixes():
    note = make_note('☐x\n• bullet\n  ☐ indented\n[ ] markdown')
    assert extract_tasks([note]) == []


def test_extract_tasks_counts_marked_lines():
    lines = ['plain', '☐ a', '☑ b', 'plain', '☐ c']
    assert len(extract_tasks([make_note('\n'.join(lines))])) == 3


def test_toggle_marker():
    assert toggle_marker('☐ milk') == '☑ milk'
    assert toggle_marker('☑ milk') == '☐ milk'
    assert toggle_marker('milk') == 'milk'


def test_toggle_twice_restores_content():
    note = make_note('List\n☐ eggs\n☑ bread')
    original = note.content
    notes = [note]

    assert toggle_task(notes, 0) is note
    assert note.content == 'List\n☑ eggs\n☑ bread'
    toggle_task(notes, 0)
    assert note.content == original


def test_toggle_rederives_title():
    note = make_note('☐ first')
    toggle_task([note], 0)
    assert note.title == derive_title('☑ first') == '☑ first'


def test_toggle_out_of_range_is_noop():
    note = make_note('☐ only')
    assert toggle_task([note], 1) is None
    assert toggle_task([note], -1) is None
    assert note.content == '☐ only'


def test_toggle_stale_line_index_is_noop():
    note = make_note('a\nb\n☐ c')
    task = extract_tasks([note])[0]
    assert task.line_index == 2

    note.update_content('☐ c')
    assert toggle_task_item([note], task) is None
    assert note.content == '☐ c'


def test_toggle_stale_index_on_plain_line_is_noop():
    note = make_note('☐ a\nb')
    task = extract_tasks([note])[0]
    note.update_content('a\nb')
    assert toggle_task_item([note], task) is None
    assert note.content == 'a\nb'


def test_toggle_missing_note_is_noop():
    task = TaskItem(id=0, text='x', completed=False, note_id='gone', line_index=0)
    assert toggle_task_item([make_note('☐ x')], task) is None


def test_toggle_keeps_rich_text_in_step():
    note = make_note('Title\n☐ buy milk')
    blocks = [
        {'type': 'paragraph', 'runs': [{'text': 'Title', 'tags': ['bold']}]},
        {'type': 'task', 'runs': [
            {'text': '☐ buy ', 'tags': []},
            {'text': 'milk', 'tags': ['italic']},
        ]},
    ]
    note.rich_text_data = json.dumps({'blocks': blocks}).encode('utf-8')

    toggle_task([note], 0)

    assert note.content == 'Title\n☑ buy milk'
    assert get_plain_text(note.rich_text_data) == note.content
    runs = json.loads(note.rich_text_data)['blocks'][1]['runs']
    assert runs[1] == {'text': 'milk', 'tags': ['italic']}


def test_filter_and_summary():
    tasks = extract_tasks([make_note('☐ a\n☑ b\n☐ c')])
    visible = filter_tasks(tasks, show_completed=False)
    assert [t.text for t in visible] == ['a', 'c']
    assert filter_tasks(tasks, show_completed=True) == tasks
    assert task_summary(visible, tasks) == '2 of 3 tasks'
