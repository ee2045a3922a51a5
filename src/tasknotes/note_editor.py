# SPDX-License-Identifier: GPL-3.0-or-later

import logging

import gi
gi.require_version('Gtk', '4.0')
gi.require_version('Adw', '1')

from gi.repository import Adw, Gio, GLib, GObject, Gtk

from tasknotes.auto_format import FormattingMode
from tasknotes.colors import COLOR_NAMES, normalize_color
from tasknotes.rich_text_serializer import (
    TAG_NAMES,
    ensure_tags,
    load_text,
    serialize_buffer,
)
from tasknotes.rich_text_toolbar import RichTextToolbar

logger = logging.getLogger(__name__)


def _common_prefix_length(a, b):
    n = min(len(a), len(b))
    for i in range(n):
        if a[i] != b[i]:
            return i
    return n


class NoteEditor(Gtk.Box):
    """Editor pane for the selected note."""

    __gsignals__ = {
        'note-changed': (GObject.SignalFlags.RUN_LAST, None, (str,)),
        'delete-requested': (GObject.SignalFlags.RUN_LAST, None, (str,)),
    }

    def __init__(self, state, **kwargs):
        super().__init__(orientation=Gtk.Orientation.VERTICAL, **kwargs)
        self._state = state
        self._note = None
        self._last_text = ''
        self._loading = False
        self._applying_follow_up = False

        self._build_ui()
        self._setup_actions()

    @property
    def note(self):
        return self._note

    def _build_ui(self):
        bar = Gtk.Box(orientation=Gtk.Orientation.HORIZONTAL, spacing=4)
        bar.set_margin_start(6)
        bar.set_margin_end(6)
        bar.set_margin_top(4)
        bar.set_margin_bottom(4)

        self._toolbar = RichTextToolbar(hexpand=True)
        self._toolbar.connect('format-toggled', self._on_format_toggled)
        self._toolbar.connect('mode-toggled', self._on_mode_toggled)
        bar.append(self._toolbar)

        color_btn = Gtk.MenuButton(
            icon_name='preferences-color-symbolic',
            tooltip_text='Change Color',
        )
        color_btn.set_popover(self._build_color_popover())
        bar.append(color_btn)

        tags_btn = Gtk.Button(
            icon_name='tag-symbolic',
            tooltip_text='Manage Tags',
        )
        tags_btn.connect('clicked', self._on_manage_tags)
        bar.append(tags_btn)

        delete_btn = Gtk.Button(
            icon_name='user-trash-symbolic',
            tooltip_text='Delete Note',
        )
        delete_btn.connect('clicked', self._on_delete)
        bar.append(delete_btn)

        self.append(bar)
        self.append(Gtk.Separator())

        scrolled = Gtk.ScrolledWindow(vexpand=True, hexpand=True)
        self._text_view = Gtk.TextView(
            wrap_mode=Gtk.WrapMode.WORD_CHAR,
            left_margin=12, right_margin=12,
            top_margin=8, bottom_margin=8,
        )
        self._text_view.add_css_class('note-text-view')
        self._buffer = self._text_view.get_buffer()
        self._buffer.set_enable_undo(True)
        ensure_tags(self._buffer)
        self._buffer.connect('changed', self._on_buffer_changed)
        self._buffer.connect('mark-set', self._on_cursor_moved)
        scrolled.set_child(self._text_view)
        self.append(scrolled)

        self._tags_bar = Gtk.FlowBox(
            selection_mode=Gtk.SelectionMode.NONE,
            max_children_per_line=10,
            min_children_per_line=1,
        )
        self._tags_bar.set_visible(False)
        self.append(self._tags_bar)

    def _build_color_popover(self):
        popover = Gtk.Popover()
        grid = Gtk.FlowBox(
            max_children_per_line=3,
            selection_mode=Gtk.SelectionMode.NONE,
            homogeneous=True,
        )
        grid.set_size_request(120, -1)

        for color_name in COLOR_NAMES:
            btn = Gtk.Button()
            btn.set_size_request(32, 32)
            btn.add_css_class('color-button')
            btn.add_css_class(f'color-{color_name}')
            btn.set_tooltip_text(color_name.capitalize())
            btn.connect('clicked', self._on_color_selected, color_name, popover)
            grid.append(btn)

        popover.set_child(grid)
        return popover

    # --- Loading ---

    def load_note(self, note):
        """Show ``note``. The caller has already reset the sticky mode."""
        self._note = note
        self._loading = True
        if not note.has_rich_text:
            self._buffer.set_text(note.content)
        elif not load_text(self._buffer, note.rich_text_data, note.content):
            logger.info('Formatting of note %s does not match its text, showing plain text', note.id)
        self._loading = False
        self._last_text = self._get_text()
        self._buffer.place_cursor(self._buffer.get_end_iter())
        self._apply_color(note.color)
        self._update_tags_bar()
        self._toolbar.update_mode(self._state.formatter.mode.name)

    def focus_text(self):
        self._text_view.grab_focus()

    def _get_text(self):
        start, end = self._buffer.get_bounds()
        return self._buffer.get_text(start, end, True)

    def _apply_color(self, color_name):
        for c in COLOR_NAMES:
            self._text_view.remove_css_class(f'note-color-{c}')
        self._text_view.add_css_class(f'note-color-{normalize_color(color_name)}')

    # --- Editing ---

    def _on_buffer_changed(self, buffer):
        if self._loading or self._note is None:
            return

        text = self._get_text()
        old, self._last_text = self._last_text, text
        if self._applying_follow_up:
            return

        follow_up = self._state.formatter.content_changed(old, text)
        self._toolbar.update_mode(self._state.formatter.mode.name)
        if follow_up is not None:
            GLib.idle_add(self._apply_follow_up, text, follow_up)
        self._save_note()

    def _apply_follow_up(self, expected, follow_up):
        if self._get_text() != expected:
            logger.debug('Dropping stale list continuation')
            return GLib.SOURCE_REMOVE
        self._replace_text(follow_up)
        return GLib.SOURCE_REMOVE

    def _replace_text(self, new_text):
        """Rewrite the buffer to ``new_text`` touching only the changed tail."""
        current = self._get_text()
        keep = _common_prefix_length(current, new_text)

        self._applying_follow_up = True
        self._buffer.begin_user_action()
        try:
            start = self._buffer.get_iter_at_offset(keep)
            self._buffer.delete(start, self._buffer.get_end_iter())
            self._buffer.insert(self._buffer.get_end_iter(), new_text[keep:])
        finally:
            self._buffer.end_user_action()
            self._applying_follow_up = False

        self._buffer.place_cursor(self._buffer.get_end_iter())
        self._save_note()

    def _save_note(self):
        self._state.store.set_text(
            self._note.id, self._get_text(), serialize_buffer(self._buffer),
        )
        self.emit('note-changed', self._note.id)

    def _on_mode_toggled(self, toolbar, mode_name):
        if self._note is None:
            return
        text = self._get_text()
        new_text = self._state.formatter.toggle(FormattingMode[mode_name], text)
        self._toolbar.update_mode(self._state.formatter.mode.name)
        if new_text != text:
            self._replace_text(new_text)
        self.focus_text()

    def _on_cursor_moved(self, buffer, iter_, mark):
        if mark.get_name() == 'insert':
            self._update_toolbar_state()

    def _update_toolbar_state(self):
        insert = self._buffer.get_iter_at_mark(self._buffer.get_insert())
        active = set()
        for tag in insert.get_tags():
            name = tag.get_property('name')
            if name in TAG_NAMES:
                active.add(name)
        self._toolbar.update_state(active)

    def _on_format_toggled(self, toolbar, format_name, is_active):
        bounds = self._buffer.get_selection_bounds()
        if not bounds:
            return

        start, end = bounds
        tag = self._buffer.get_tag_table().lookup(format_name)
        if tag is None:
            return

        if is_active:
            self._buffer.apply_tag(tag, start, end)
        else:
            self._buffer.remove_tag(tag, start, end)

        # Tag changes do not emit 'changed'
        self._save_note()

    # --- Note properties ---

    def _on_color_selected(self, btn, color_name, popover):
        popover.popdown()
        if self._note is None:
            return
        self._apply_color(color_name)
        self._state.store.update_note(self._note.id, color=color_name)
        self.emit('note-changed', self._note.id)

    def _on_delete(self, btn):
        if self._note is not None:
            self.emit('delete-requested', self._note.id)

    def _on_manage_tags(self, btn):
        if self._note is None:
            return
        dialog = Adw.AlertDialog(
            heading='Manage Tags',
            body='Enter tags separated by commas:',
        )
        dialog.add_response('cancel', 'Cancel')
        dialog.add_response('save', 'Save')
        dialog.set_response_appearance('save', Adw.ResponseAppearance.SUGGESTED)

        entry = Gtk.Entry(
            text=', '.join(self._note.tags),
            hexpand=True,
        )
        dialog.set_extra_child(entry)
        dialog.connect('response', self._on_tags_response, entry)
        dialog.present(self.get_root())

    def _on_tags_response(self, dialog, response, entry):
        if response != 'save' or self._note is None:
            return

        self._state.store.set_tags(self._note.id, entry.get_text().split(','))
        self._update_tags_bar()
        self.emit('note-changed', self._note.id)

    def _update_tags_bar(self):
        child = self._tags_bar.get_first_child()
        while child:
            next_child = child.get_next_sibling()
            self._tags_bar.remove(child)
            child = next_child

        if not self._note.tags:
            self._tags_bar.set_visible(False)
            return

        self._tags_bar.set_visible(True)
        for tag_name in self._note.tags:
            label = Gtk.Label(label=tag_name)
            label.add_css_class('tag-chip')
            self._tags_bar.append(label)

    # --- Actions ---

    def _setup_actions(self):
        action_group = Gio.SimpleActionGroup()
        for fmt in sorted(TAG_NAMES):
            action = Gio.SimpleAction.new(fmt, None)
            action.connect('activate', self._action_format, fmt)
            action_group.add_action(action)

        for name, mode_name in (('bullet-mode', 'BULLET'), ('task-mode', 'TASK')):
            action = Gio.SimpleAction.new(name, None)
            action.connect('activate', lambda a, p, m: self._on_mode_toggled(None, m), mode_name)
            action_group.add_action(action)

        self.insert_action_group('editor', action_group)

    def _action_format(self, action, param, format_name):
        bounds = self._buffer.get_selection_bounds()
        if not bounds:
            return

        start, end = bounds
        tag = self._buffer.get_tag_table().lookup(format_name)
        if tag is None:
            return

        if start.has_tag(tag):
            self._buffer.remove_tag(tag, start, end)
        else:
            self._buffer.apply_tag(tag, start, end)
        self._update_toolbar_state()
        self._save_note()
