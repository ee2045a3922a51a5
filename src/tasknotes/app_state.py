# SPDX-License-Identifier: GPL-3.0-or-later
"""Navigation and editing state shared by the application windows."""

import enum
import logging
from dataclasses import dataclass, field
from typing import Optional

from tasknotes.auto_format import AutoFormatter
from tasknotes.note import Note
from tasknotes.note_store import NoteStore
from tasknotes.tasks import filter_tasks

logger = logging.getLogger(__name__)


class Section(enum.Enum):
    NOTES = 'notes'
    TASKS = 'tasks'


@dataclass
class AppState:
    store: NoteStore
    formatter: AutoFormatter = field(default_factory=AutoFormatter)
    selected_note_id: Optional[str] = None
    section: Section = Section.NOTES
    show_completed: bool = True

    @property
    def current_note(self) -> Optional[Note]:
        if self.selected_note_id is None:
            return None
        return self.store.get_note(self.selected_note_id)

    def select_note(self, note_id):
        """Open ``note_id`` in the editor. Sticky modes never carry over."""
        if note_id != self.selected_note_id:
            logger.debug('Selecting note %s', note_id)
        self.selected_note_id = note_id
        self.formatter.reset()

    def ensure_selection(self) -> Note:
        note = self.current_note
        if note is None:
            note = self.store.ensure_note()
            self.select_note(note.id)
        return note

    def sidebar_notes(self) -> list[Note]:
        """Pinned notes first, otherwise in store order."""
        return sorted(self.store.notes, key=lambda n: not n.is_pinned)

    def sidebar_layout(self) -> list[tuple]:
        """Order and row decorations of the sidebar, without titles or previews.

        The sidebar only needs a full rebuild when this changes.
        """
        return [
            (n.id, n.is_pinned, n.color, tuple(n.tags))
            for n in self.sidebar_notes()
        ]

    def new_note(self) -> Note:
        note = self.store.create_note()
        self.section = Section.NOTES
        self.select_note(note.id)
        return note

    def delete_note(self, note_id) -> Note:
        """Delete a note and return the note that is selected afterwards."""
        ordered = self.sidebar_notes()
        ids = [n.id for n in ordered]
        index = ids.index(note_id) if note_id in ids else 0
        if not self.store.delete_note(note_id):
            return self.ensure_selection()

        remaining = [n for n in ordered if n.id != note_id]
        if not remaining:
            replacement = self.store.create_note()
        elif self.selected_note_id == note_id:
            replacement = remaining[min(index, len(remaining) - 1)]
        else:
            return self.ensure_selection()
        self.select_note(replacement.id)
        return replacement

    def visible_tasks(self):
        return filter_tasks(self.store.get_tasks(), self.show_completed)
