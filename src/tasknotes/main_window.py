# SPDX-License-Identifier: GPL-3.0-or-later

import logging

import gi
gi.require_version('Gtk', '4.0')
gi.require_version('Adw', '1')

from gi.repository import Adw, Gio, Gtk

from tasknotes.app_state import Section
from tasknotes.constants import APP_ID, APP_NAME
from tasknotes.note_editor import NoteEditor
from tasknotes.note_row import NoteRow
from tasknotes.task_overview import TaskOverview

logger = logging.getLogger(__name__)


class MainWindow(Adw.ApplicationWindow):

    def __init__(self, state, **kwargs):
        super().__init__(**kwargs)
        self._app = self.get_application()
        self._state = state
        self._updating_list = False
        self._save_warning_shown = False
        self._rows = {}
        self._sidebar_layout = None

        self.set_title(APP_NAME)
        self.set_default_size(900, 650)
        self.set_icon_name(APP_ID)

        self._build_ui()
        self._connect_signals()

        note = self._state.ensure_selection()
        self._editor.load_note(note)
        self._refresh_notes()
        self._show_section(self._state.section)

    def _build_ui(self):
        # --- Sidebar ---
        sidebar_view = Adw.ToolbarView()
        sidebar_header = Adw.HeaderBar()

        switcher = Gtk.Box(orientation=Gtk.Orientation.HORIZONTAL)
        switcher.add_css_class('linked')
        self._notes_btn = Gtk.ToggleButton(label='Notes', active=True)
        self._tasks_btn = Gtk.ToggleButton(label='Tasks', group=self._notes_btn)
        self._notes_btn.connect('toggled', self._on_section_toggled, Section.NOTES)
        self._tasks_btn.connect('toggled', self._on_section_toggled, Section.TASKS)
        switcher.append(self._notes_btn)
        switcher.append(self._tasks_btn)
        sidebar_header.set_title_widget(switcher)

        new_btn = Gtk.Button(
            icon_name='list-add-symbolic',
            tooltip_text='New Note (Ctrl+N)',
        )
        new_btn.connect('clicked', lambda b: self._app.activate_action('new-note'))
        sidebar_header.pack_start(new_btn)

        sidebar_view.add_top_bar(sidebar_header)

        notes_scroll = Gtk.ScrolledWindow(vexpand=True)
        self._notes_list = Gtk.ListBox(selection_mode=Gtk.SelectionMode.SINGLE)
        self._notes_list.add_css_class('navigation-sidebar')
        self._notes_list.connect('row-selected', self._on_row_selected)
        notes_scroll.set_child(self._notes_list)
        sidebar_view.set_content(notes_scroll)

        sidebar_page = Adw.NavigationPage(title=APP_NAME, child=sidebar_view)

        # --- Content ---
        content_view = Adw.ToolbarView()
        self._content_header = Adw.HeaderBar()

        menu = Gio.Menu()
        menu.append('Keyboard Shortcuts', 'app.shortcuts')
        menu.append('Preferences', 'app.preferences')
        menu.append(f'About {APP_NAME}', 'app.about')
        menu_btn = Gtk.MenuButton(
            icon_name='open-menu-symbolic',
            menu_model=menu,
        )
        self._content_header.pack_end(menu_btn)
        content_view.add_top_bar(self._content_header)

        self._editor = NoteEditor(self._state)
        self._task_overview = TaskOverview()

        self._content_stack = Gtk.Stack()
        self._content_stack.add_named(self._editor, Section.NOTES.value)
        self._content_stack.add_named(self._task_overview, Section.TASKS.value)
        content_view.set_content(self._content_stack)

        self._content_page = Adw.NavigationPage(title='Note', child=content_view)

        split_view = Adw.NavigationSplitView(
            sidebar=sidebar_page,
            content=self._content_page,
        )

        self._toast_overlay = Adw.ToastOverlay()
        self._toast_overlay.set_child(split_view)
        self.set_content(self._toast_overlay)

    def _connect_signals(self):
        self._app.connect('note-created', self._on_note_created)
        self._editor.connect('note-changed', self._on_note_changed)
        self._editor.connect('delete-requested', self._on_delete_requested)
        self._task_overview.connect('task-toggled', self._on_task_toggled)
        self._task_overview.connect('show-completed-changed', self._on_show_completed_changed)

        style_manager = Adw.StyleManager.get_default()
        style_manager.connect('notify::dark', self._on_dark_changed)
        self._on_dark_changed(style_manager, None)

    def _on_dark_changed(self, style_manager, pspec):
        if style_manager.get_dark():
            self.add_css_class('dark')
        else:
            self.remove_css_class('dark')

    # --- Sections ---

    def _on_section_toggled(self, btn, section):
        if btn.get_active() and section is not self._state.section:
            self._show_section(section)

    def _show_section(self, section):
        self._state.section = section
        self._content_stack.set_visible_child_name(section.value)
        self._notes_btn.set_active(section is Section.NOTES)
        self._tasks_btn.set_active(section is Section.TASKS)
        if section is Section.TASKS:
            self._content_page.set_title('Tasks')
            self._refresh_tasks()
        else:
            note = self._state.current_note
            self._content_page.set_title(note.title if note else 'Note')

    # --- Notes ---

    def _refresh_notes(self):
        self._updating_list = True
        child = self._notes_list.get_first_child()
        while child:
            next_child = child.get_next_sibling()
            self._notes_list.remove(child)
            child = next_child

        self._rows = {}
        self._sidebar_layout = self._state.sidebar_layout()
        for note in self._state.sidebar_notes():
            row = NoteRow(note)
            row.connect('pin-toggled', self._on_pin_toggled)
            self._notes_list.append(row)
            self._rows[note.id] = row
            if note.id == self._state.selected_note_id:
                self._notes_list.select_row(row)
        self._updating_list = False

    def _on_row_selected(self, listbox, row):
        if self._updating_list or row is None:
            return
        self.open_note(row.note_id, refresh_list=False)

    def open_note(self, note_id, refresh_list=True):
        note = self._state.store.get_note(note_id)
        if note is None:
            return
        self._state.select_note(note_id)
        self._editor.load_note(note)
        self._show_section(Section.NOTES)
        if refresh_list:
            self._refresh_notes()
        self._editor.focus_text()

    def _on_note_created(self, app, note_id):
        self.open_note(note_id)
        self._check_save_result()

    def _on_note_changed(self, editor, note_id):
        note = self._state.store.get_note(note_id)
        if note is not None and self._state.section is Section.NOTES:
            self._content_page.set_title(note.title)

        row = self._rows.get(note_id)
        if note is None or row is None or self._state.sidebar_layout() != self._sidebar_layout:
            self._refresh_notes()
        else:
            row.update(note)
        self._check_save_result()

    def _on_pin_toggled(self, row, note_id):
        self._state.store.toggle_pin(note_id)
        self._refresh_notes()
        self._check_save_result()

    def _on_delete_requested(self, editor, note_id):
        dialog = Adw.AlertDialog(
            heading='Delete Note?',
            body='This action cannot be undone.',
        )
        dialog.add_response('cancel', 'Cancel')
        dialog.add_response('delete', 'Delete')
        dialog.set_response_appearance('delete', Adw.ResponseAppearance.DESTRUCTIVE)
        dialog.connect('response', self._on_delete_confirmed, note_id)
        dialog.present(self)

    def _on_delete_confirmed(self, dialog, response, note_id):
        if response != 'delete':
            return
        logger.debug('Deleting note %s', note_id)
        note = self._state.delete_note(note_id)
        self._editor.load_note(note)
        self._refresh_notes()
        self._show_section(Section.NOTES)
        self._show_toast('Note deleted')
        self._check_save_result()

    # --- Tasks ---

    def _refresh_tasks(self):
        self._task_overview.refresh(
            self._state.store.get_tasks(), self._state.show_completed,
        )

    def _on_task_toggled(self, overview, task_id):
        if self._state.store.toggle_task(task_id):
            current = self._state.current_note
            if current is not None:
                self._editor.load_note(current)
            self._refresh_notes()
        self._refresh_tasks()
        self._check_save_result()

    def _on_show_completed_changed(self, overview, show_completed):
        self._state.show_completed = show_completed
        self._app.remember_show_completed(show_completed)
        self._refresh_tasks()

    # --- Feedback ---

    def _check_save_result(self):
        if self._state.store.last_save_ok:
            self._save_warning_shown = False
            return
        if not self._save_warning_shown:
            self._save_warning_shown = True
            self._show_toast('Could not save notes')

    def _show_toast(self, message):
        toast = Adw.Toast(title=message, timeout=5)
        self._toast_overlay.add_toast(toast)
