# SPDX-License-Identifier: GPL-3.0-or-later

import gi
gi.require_version('Gtk', '4.0')
from gi.repository import Gtk

GENERAL_SHORTCUTS = [
    ('New Note', '<Control>n'),
    ('Quit', '<Control>q'),
    ('Preferences', '<Control>comma'),
    ('Keyboard Shortcuts', '<Control>question'),
]

EDITOR_SHORTCUTS = [
    ('Bold', '<Control>b'),
    ('Italic', '<Control>i'),
    ('Underline', '<Control>u'),
    ('Strikethrough', '<Control>d'),
    ('Bullet List', '<Control><Shift>l'),
    ('Task Checkbox', '<Control><Shift>t'),
]


class ShortcutsWindow(Gtk.ShortcutsWindow):

    def __init__(self, **kwargs):
        super().__init__(**kwargs)

        section = Gtk.ShortcutsSection(visible=True, section_name='shortcuts')
        section.append(self._build_group('General', GENERAL_SHORTCUTS))
        section.append(self._build_group('Editing', EDITOR_SHORTCUTS))
        self.add_section(section)

    def _build_group(self, title, shortcuts):
        group = Gtk.ShortcutsGroup(title=title, visible=True)
        for name, accel in shortcuts:
            group.append(Gtk.ShortcutsShortcut(
                title=name,
                accelerator=accel,
                visible=True,
            ))
        return group
