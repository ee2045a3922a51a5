# SPDX-License-Identifier: GPL-3.0-or-later

import gi
gi.require_version('Gtk', '4.0')
gi.require_version('Adw', '1')

from gi.repository import Adw, Gtk

from tasknotes.colors import COLOR_NAMES


class PreferencesWindow(Adw.PreferencesDialog):

    def __init__(self, settings=None, **kwargs):
        super().__init__(**kwargs)
        self.set_title('Preferences')
        self._settings = settings
        self._build_ui()

    def _build_ui(self):
        page = Adw.PreferencesPage(title='General', icon_name='preferences-system-symbolic')

        # Notes group
        notes_group = Adw.PreferencesGroup(title='Notes')

        color_row = Adw.ComboRow(title='Default Note Color')
        color_list = Gtk.StringList()
        for name in COLOR_NAMES:
            color_list.append(name.capitalize())
        color_row.set_model(color_list)

        if self._settings:
            current = self._settings.get_string('default-color')
            try:
                color_row.set_selected(COLOR_NAMES.index(current))
            except ValueError:
                pass
            color_row.connect('notify::selected', self._on_color_changed)
        else:
            color_row.set_sensitive(False)

        notes_group.add(color_row)
        page.add(notes_group)

        # Tasks group
        tasks_group = Adw.PreferencesGroup(title='Tasks')

        completed_row = Adw.SwitchRow(
            title='Show Completed Tasks',
            subtitle='Checked items stay visible in the task overview',
        )
        if self._settings:
            completed_row.set_active(self._settings.get_boolean('show-completed-tasks'))
            completed_row.connect('notify::active', self._on_show_completed_changed)
        else:
            completed_row.set_sensitive(False)

        tasks_group.add(completed_row)
        page.add(tasks_group)

        self.add(page)

    def _on_color_changed(self, row, pspec):
        idx = row.get_selected()
        if 0 <= idx < len(COLOR_NAMES):
            self._settings.set_string('default-color', COLOR_NAMES[idx])

    def _on_show_completed_changed(self, row, pspec):
        self._settings.set_boolean('show-completed-tasks', row.get_active())
