# SPDX-License-Identifier: GPL-3.0-or-later

import gi
gi.require_version('Gtk', '4.0')

from gi.repository import GLib, GObject, Gtk

from tasknotes.tasks import filter_tasks, task_summary


class TaskOverview(Gtk.Box):
    """Checklist of every task line across all notes."""

    __gsignals__ = {
        'task-toggled': (GObject.SignalFlags.RUN_LAST, None, (int,)),
        'show-completed-changed': (GObject.SignalFlags.RUN_LAST, None, (bool,)),
    }

    def __init__(self, **kwargs):
        super().__init__(orientation=Gtk.Orientation.VERTICAL, **kwargs)
        self._updating = False

        header = Gtk.Box(orientation=Gtk.Orientation.HORIZONTAL, spacing=8)
        header.set_margin_start(12)
        header.set_margin_end(12)
        header.set_margin_top(8)
        header.set_margin_bottom(8)

        header.append(Gtk.Label(label='Show Completed'))
        self._show_completed = Gtk.Switch(valign=Gtk.Align.CENTER, active=True)
        self._show_completed.connect('notify::active', self._on_show_completed)
        header.append(self._show_completed)

        header.append(Gtk.Box(hexpand=True))

        self._count_label = Gtk.Label()
        self._count_label.add_css_class('dim-label')
        self._count_label.add_css_class('caption')
        header.append(self._count_label)

        self.append(header)
        self.append(Gtk.Separator())

        self._list = Gtk.ListBox(selection_mode=Gtk.SelectionMode.NONE)
        self._list.add_css_class('task-list')

        self._empty_label = Gtk.Label(vexpand=True, valign=Gtk.Align.START)
        self._empty_label.set_margin_top(24)
        self._empty_label.add_css_class('dim-label')

        self._stack = Gtk.Stack(vexpand=True)
        scrolled = Gtk.ScrolledWindow(vexpand=True)
        scrolled.set_child(self._list)
        self._stack.add_named(scrolled, 'list')
        self._stack.add_named(self._empty_label, 'empty')
        self.append(self._stack)

    def _on_show_completed(self, switch, pspec):
        if not self._updating:
            self.emit('show-completed-changed', switch.get_active())

    def refresh(self, tasks, show_completed):
        self._updating = True
        self._show_completed.set_active(show_completed)
        self._updating = False

        visible = filter_tasks(tasks, show_completed)
        self._count_label.set_label(task_summary(visible, tasks))

        child = self._list.get_first_child()
        while child:
            next_child = child.get_next_sibling()
            self._list.remove(child)
            child = next_child

        if not visible:
            self._empty_label.set_label(
                'No tasks found' if not tasks else 'No tasks match current filter'
            )
            self._stack.set_visible_child_name('empty')
            return

        self._stack.set_visible_child_name('list')
        for task in visible:
            self._list.append(self._build_row(task))

    def _build_row(self, task):
        row = Gtk.Box(orientation=Gtk.Orientation.HORIZONTAL, spacing=8)
        row.set_margin_start(12)
        row.set_margin_end(12)
        row.set_margin_top(4)
        row.set_margin_bottom(4)

        check = Gtk.CheckButton(active=task.completed)
        check.connect('toggled', lambda b: self.emit('task-toggled', task.id))
        row.append(check)

        text = GLib.markup_escape_text(task.text)
        if task.completed:
            text = f'<s>{text}</s>'
        label = Gtk.Label(xalign=0, hexpand=True, wrap=True, use_markup=True)
        label.set_markup(text)
        if task.completed:
            label.add_css_class('dim-label')
        row.append(label)
        return row
