# SPDX-License-Identifier: GPL-3.0-or-later

import gi
gi.require_version('Gtk', '4.0')

from gi.repository import GObject, Gtk


class RichTextToolbar(Gtk.Box):
    """Formatting toolbar with text style toggles and the sticky list modes."""

    __gsignals__ = {
        'format-toggled': (GObject.SignalFlags.RUN_LAST, None, (str, bool)),
        'mode-toggled': (GObject.SignalFlags.RUN_LAST, None, (str,)),
    }

    def __init__(self, **kwargs):
        super().__init__(
            orientation=Gtk.Orientation.HORIZONTAL,
            spacing=4,
            **kwargs,
        )
        self.add_css_class('rich-text-toolbar')

        self._buttons = {}
        self._mode_buttons = {}
        self._updating = False

        format_items = [
            ('bold', 'format-text-bold-symbolic', '<Control>b'),
            ('italic', 'format-text-italic-symbolic', '<Control>i'),
            ('underline', 'format-text-underline-symbolic', '<Control>u'),
            ('strikethrough', 'format-text-strikethrough-symbolic', '<Control>d'),
        ]

        for name, icon, accel in format_items:
            btn = Gtk.ToggleButton(
                icon_name=icon,
                tooltip_text=f'{name.capitalize()} ({accel})',
            )
            btn.connect('toggled', self._on_toggled, name)
            self.append(btn)
            self._buttons[name] = btn

        self.append(Gtk.Separator(orientation=Gtk.Orientation.VERTICAL))

        mode_items = [
            ('BULLET', 'view-list-bullet-symbolic', 'Bullet List (Ctrl+Shift+L)'),
            ('TASK', 'checkbox-checked-symbolic', 'Task Checkbox (Ctrl+Shift+T)'),
        ]
        for mode_name, icon, tooltip in mode_items:
            btn = Gtk.ToggleButton(icon_name=icon, tooltip_text=tooltip)
            btn.connect('toggled', self._on_mode_toggled, mode_name)
            self.append(btn)
            self._mode_buttons[mode_name] = btn

    def _on_toggled(self, button, format_name):
        if not self._updating:
            self.emit('format-toggled', format_name, button.get_active())

    def _on_mode_toggled(self, button, mode_name):
        if not self._updating:
            self.emit('mode-toggled', mode_name)

    def update_state(self, active_formats):
        """Update style toggle states based on cursor position."""
        self._updating = True
        for name, btn in self._buttons.items():
            btn.set_active(name in active_formats)
        self._updating = False

    def update_mode(self, mode_name):
        """Reflect the formatter's sticky mode, e.g. after it exits on its own."""
        self._updating = True
        for name, btn in self._mode_buttons.items():
            btn.set_active(name == mode_name)
        self._updating = False
