# SPDX-License-Identifier: GPL-3.0-or-later
"""
Checkbox tasks embedded in note content.

A task is any line that starts with one of the two checkbox markers.
``TaskItem`` ids are positions in a single extraction pass: they are only
valid until the next content change and must never be cached across edits.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from tasknotes.constants import CHECKED_MARKER, UNCHECKED_MARKER
from tasknotes.note import Note
from tasknotes.rich_text_serializer import replace_line_prefix

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TaskItem:
    id: int
    text: str
    completed: bool
    note_id: str
    line_index: int


def extract_tasks(notes) -> list[TaskItem]:
    """Collect task lines from ``notes`` in note order, then line order."""
    tasks = []
    for note in notes:
        for line_index, line in enumerate(note.content.split('\n')):
            if line.startswith(UNCHECKED_MARKER):
                completed = False
            elif line.startswith(CHECKED_MARKER):
                completed = True
            else:
                continue
            tasks.append(TaskItem(
                id=len(tasks),
                text=line[len(UNCHECKED_MARKER):],
                completed=completed,
                note_id=note.id,
                line_index=line_index,
            ))
    return tasks


def toggle_marker(line) -> str:
    if line.startswith(UNCHECKED_MARKER):
        return CHECKED_MARKER + line[len(UNCHECKED_MARKER):]
    if line.startswith(CHECKED_MARKER):
        return UNCHECKED_MARKER + line[len(CHECKED_MARKER):]
    return line


def toggle_task_item(notes, task) -> Optional[Note]:
    """Flip the checkbox that ``task`` points at.

    Returns the modified note, or None when the note is gone or the line
    at ``task.line_index`` is no longer a task line.
    """
    note = next((n for n in notes if n.id == task.note_id), None)
    if note is None:
        logger.debug('Task %d points at missing note %s', task.id, task.note_id)
        return None

    lines = note.content.split('\n')
    if task.line_index >= len(lines):
        logger.debug('Task %d line %d is out of range', task.id, task.line_index)
        return None

    line = lines[task.line_index]
    flipped = toggle_marker(line)
    if flipped == line:
        return None

    lines[task.line_index] = flipped
    new_content = '\n'.join(lines)
    if note.has_rich_text:
        note.set_rich_content(new_content, replace_line_prefix(
            note.rich_text_data, task.line_index,
            line[:len(UNCHECKED_MARKER)], flipped[:len(UNCHECKED_MARKER)],
        ))
    else:
        note.update_content(new_content)
    return note


def toggle_task(notes, task_id) -> Optional[Note]:
    """Re-extract the task list and toggle the task with ``task_id``."""
    tasks = extract_tasks(notes)
    if not 0 <= task_id < len(tasks):
        return None
    return toggle_task_item(notes, tasks[task_id])


def filter_tasks(tasks, show_completed=True) -> list[TaskItem]:
    if show_completed:
        return list(tasks)
    return [t for t in tasks if not t.completed]


def task_summary(visible, all_tasks) -> str:
    return f'{len(visible)} of {len(all_tasks)} tasks'
