# SPDX-License-Identifier: GPL-3.0-or-later

import json
import logging
import os

from tasknotes.constants import DATA_DIR_NAME, NOTES_FILENAME
from tasknotes.note import Note
from tasknotes.tasks import extract_tasks, toggle_task

logger = logging.getLogger(__name__)

_UPDATABLE_FIELDS = {'content', 'rich_text_data', 'tags', 'color', 'is_pinned'}


def default_notes_path():
    from gi.repository import GLib

    return os.path.join(GLib.get_user_data_dir(), DATA_DIR_NAME, NOTES_FILENAME)


def load_notes(path) -> list[Note]:
    """Read every note stored at ``path``.

    A missing or unreadable file is treated as "no notes yet": the problem
    is logged and an empty list is returned.
    """
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except FileNotFoundError:
        logger.info('No notes file at %s, starting empty', path)
        return []
    except (OSError, ValueError) as exc:
        logger.warning('Could not read notes from %s: %s', path, exc)
        return []

    if not isinstance(data, list):
        logger.warning('Notes file %s does not hold a JSON array', path)
        return []

    try:
        return [Note.from_dict(item) for item in data]
    except (KeyError, TypeError, ValueError, AttributeError) as exc:
        logger.warning('Could not decode notes from %s: %s', path, exc)
        return []


def save_notes(path, notes) -> bool:
    """Overwrite ``path`` with ``notes``. Failures are logged, never raised."""
    tmp = path + '.tmp'
    try:
        os.makedirs(os.path.dirname(path) or '.', exist_ok=True)
        with open(tmp, 'w', encoding='utf-8') as f:
            json.dump([n.to_dict() for n in notes], f, ensure_ascii=False, indent=2)
        os.replace(tmp, path)
    except (OSError, TypeError, ValueError) as exc:
        logger.warning('Could not save notes to %s: %s', path, exc)
        return False
    return True


class NoteStore:

    def __init__(self, path=None):
        if path is None:
            path = default_notes_path()
        self.path = str(path)
        self.last_save_ok = True
        self._notes = load_notes(self.path)
        logger.debug('Loaded %d notes from %s', len(self._notes), self.path)

    @property
    def notes(self) -> list[Note]:
        return self._notes

    def save(self) -> bool:
        self.last_save_ok = save_notes(self.path, self._notes)
        return self.last_save_ok

    # --- Notes CRUD ---

    def get_note(self, note_id) -> Note | None:
        for note in self._notes:
            if note.id == note_id:
                return note
        return None

    def create_note(self) -> Note:
        note = Note.new()
        self._notes.append(note)
        self.save()
        return note

    def ensure_note(self) -> Note:
        """Return the first note, creating one if the store is empty."""
        if not self._notes:
            return self.create_note()
        return self._notes[0]

    def update_note(self, note_id, **fields):
        unknown = set(fields) - _UPDATABLE_FIELDS
        if unknown:
            raise TypeError(f'cannot update note fields: {sorted(unknown)}')
        note = self.get_note(note_id)
        if note is None or not fields:
            return
        if 'content' in fields:
            note.update_content(fields.pop('content'))
        for name, value in fields.items():
            setattr(note, name, value)
        self.save()

    def set_text(self, note_id, text, data):
        """Replace a note's plain text and its formatted blob together."""
        note = self.get_note(note_id)
        if note is None:
            return
        note.set_rich_content(text, data)
        self.save()

    def set_tags(self, note_id, names):
        """Make the note's tags match ``names``, keeping existing order."""
        note = self.get_note(note_id)
        if note is None:
            return
        wanted = [name.strip().lower() for name in names]
        for tag in list(note.tags):
            if tag not in wanted:
                note.remove_tag(tag)
        for name in names:
            note.add_tag(name)
        self.save()

    def toggle_pin(self, note_id):
        note = self.get_note(note_id)
        if note is not None:
            self.update_note(note_id, is_pinned=not note.is_pinned)

    def delete_note(self, note_id) -> bool:
        note = self.get_note(note_id)
        if note is None:
            return False
        self._notes.remove(note)
        self.save()
        return True

    # --- Tasks ---

    def get_tasks(self):
        return extract_tasks(self._notes)

    def toggle_task(self, task_id) -> bool:
        note = toggle_task(self._notes, task_id)
        if note is None:
            return False
        self.save()
        return True
