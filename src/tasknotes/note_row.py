# SPDX-License-Identifier: GPL-3.0-or-later

import gi
gi.require_version('Gtk', '4.0')

from gi.repository import GObject, Gtk, Pango

from tasknotes.colors import normalize_color

MAX_VISIBLE_TAGS = 2


class NoteRow(Gtk.ListBoxRow):
    """Sidebar row showing a note's title, preview, time and tags."""

    __gsignals__ = {
        'pin-toggled': (GObject.SignalFlags.RUN_LAST, None, (str,)),
    }

    def __init__(self, note, **kwargs):
        super().__init__(**kwargs)
        self._note = note

        outer = Gtk.Box(orientation=Gtk.Orientation.HORIZONTAL, spacing=6)
        outer.set_margin_start(12)
        outer.set_margin_end(6)
        outer.set_margin_top(8)
        outer.set_margin_bottom(8)
        outer.add_css_class('note-row')

        color = normalize_color(note.color)
        if color != 'default':
            self.add_css_class(f'note-color-{color}')

        inner = Gtk.Box(
            orientation=Gtk.Orientation.VERTICAL,
            spacing=2,
            hexpand=True,
        )

        title_box = Gtk.Box(orientation=Gtk.Orientation.HORIZONTAL, spacing=4)
        if note.is_pinned:
            pin_icon = Gtk.Image.new_from_icon_name('view-pin-symbolic')
            pin_icon.add_css_class('note-row-pin')
            title_box.append(pin_icon)

        self._title_label = Gtk.Label(
            label=note.title,
            xalign=0,
            ellipsize=Pango.EllipsizeMode.END,
            hexpand=True,
        )
        self._title_label.add_css_class('note-row-title')
        title_box.append(self._title_label)
        inner.append(title_box)

        self._preview_label = Gtk.Label(
            label=note.preview,
            xalign=0,
            lines=2,
            wrap=True,
            ellipsize=Pango.EllipsizeMode.END,
        )
        self._preview_label.add_css_class('dim-label')
        self._preview_label.add_css_class('caption')
        inner.append(self._preview_label)

        footer = Gtk.Box(orientation=Gtk.Orientation.HORIZONTAL, spacing=4)
        time_label = Gtk.Label(
            label=note.created_date.strftime('%H:%M'),
            xalign=0,
            hexpand=True,
        )
        time_label.add_css_class('dim-label')
        time_label.add_css_class('caption')
        footer.append(time_label)

        for tag in note.tags[:MAX_VISIBLE_TAGS]:
            chip = Gtk.Label(label=tag)
            chip.add_css_class('tag-chip')
            chip.add_css_class('caption')
            footer.append(chip)
        if len(note.tags) > MAX_VISIBLE_TAGS:
            more = Gtk.Label(label=f'+{len(note.tags) - MAX_VISIBLE_TAGS}')
            more.add_css_class('dim-label')
            more.add_css_class('caption')
            footer.append(more)
        inner.append(footer)

        outer.append(inner)

        pin_btn = Gtk.ToggleButton(
            icon_name='view-pin-symbolic',
            active=note.is_pinned,
            valign=Gtk.Align.START,
            tooltip_text='Unpin' if note.is_pinned else 'Pin',
        )
        pin_btn.add_css_class('flat')
        pin_btn.connect('clicked', lambda b: self.emit('pin-toggled', self._note.id))
        outer.append(pin_btn)

        self.set_child(outer)

    @property
    def note_id(self):
        return self._note.id

    def update(self, note):
        """Refresh the title and preview after the note's text changed."""
        self._note = note
        self._title_label.set_label(note.title)
        self._preview_label.set_label(note.preview)
