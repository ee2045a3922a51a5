# SPDX-License-Identifier: GPL-3.0-or-later

import logging
import os

import gi
gi.require_version('Gtk', '4.0')
gi.require_version('Adw', '1')

from gi.repository import Adw, Gdk, Gio, GLib, GObject, Gtk

from tasknotes.app_state import AppState
from tasknotes.colors import get_css
from tasknotes.constants import APP_ID, APP_NAME
from tasknotes.logging_setup import setup_logging
from tasknotes.main_window import MainWindow
from tasknotes.note_store import NoteStore

logger = logging.getLogger(__name__)


class TaskNotesApp(Adw.Application):

    __gsignals__ = {
        'note-created': (GObject.SignalFlags.RUN_LAST, None, (str,)),
    }

    def __init__(self, version='0.1.0', **kwargs):
        super().__init__(
            application_id=APP_ID,
            flags=Gio.ApplicationFlags.DEFAULT_FLAGS,
            **kwargs,
        )
        self.version = version
        self.state = None
        self.add_main_option(
            'verbose', ord('v'), GLib.OptionFlags.NONE, GLib.OptionArg.NONE,
            'Enable debug logging', None,
        )

    def do_handle_local_options(self, options):
        setup_logging('DEBUG' if options.contains('verbose') else 'INFO')
        return -1

    def do_startup(self):
        Adw.Application.do_startup(self)
        self.state = AppState(store=NoteStore())
        settings = self.get_settings()
        if settings:
            self.state.show_completed = settings.get_boolean('show-completed-tasks')
        self._load_css()
        self._setup_actions()
        self._setup_shortcuts()

    def _load_css(self):
        display = Gdk.Display.get_default()

        # Stylesheet shipped in the source tree
        css_path = os.path.join(os.path.dirname(os.path.dirname(os.path.dirname(
            os.path.abspath(__file__)))), 'data', 'resources', 'style.css')
        if os.path.exists(css_path):
            css_provider = Gtk.CssProvider()
            css_provider.load_from_path(css_path)
            Gtk.StyleContext.add_provider_for_display(
                display, css_provider, Gtk.STYLE_PROVIDER_PRIORITY_APPLICATION,
            )
        else:
            logger.debug('No stylesheet at %s', css_path)

        color_provider = Gtk.CssProvider()
        color_provider.load_from_string(get_css())
        Gtk.StyleContext.add_provider_for_display(
            display, color_provider, Gtk.STYLE_PROVIDER_PRIORITY_APPLICATION,
        )

    def _setup_actions(self):
        actions = [
            ('new-note', self._on_new_note, None),
            ('about', self._on_about, None),
            ('quit', self._on_quit, None),
            ('preferences', self._on_preferences, None),
            ('shortcuts', self._on_shortcuts, None),
        ]
        for name, callback, param_type in actions:
            action = Gio.SimpleAction.new(name, param_type)
            action.connect('activate', callback)
            self.add_action(action)

    def _setup_shortcuts(self):
        self.set_accels_for_action('app.new-note', ['<Control>n'])
        self.set_accels_for_action('app.quit', ['<Control>q'])
        self.set_accels_for_action('app.shortcuts', ['<Control>question'])
        self.set_accels_for_action('app.preferences', ['<Control>comma'])
        self.set_accels_for_action('editor.bold', ['<Control>b'])
        self.set_accels_for_action('editor.italic', ['<Control>i'])
        self.set_accels_for_action('editor.underline', ['<Control>u'])
        self.set_accels_for_action('editor.strikethrough', ['<Control>d'])
        self.set_accels_for_action('editor.bullet-mode', ['<Control><Shift>l'])
        self.set_accels_for_action('editor.task-mode', ['<Control><Shift>t'])

    def do_activate(self):
        win = self.get_active_window()
        if win and isinstance(win, MainWindow):
            win.present()
            return
        win = MainWindow(self.state, application=self)
        win.present()

    def get_settings(self):
        schema_source = Gio.SettingsSchemaSource.get_default()
        if schema_source and schema_source.lookup(APP_ID, True):
            return Gio.Settings.new(APP_ID)
        return None

    def remember_show_completed(self, show_completed):
        settings = self.get_settings()
        if settings:
            settings.set_boolean('show-completed-tasks', show_completed)

    def _on_new_note(self, action, param):
        from tasknotes.colors import normalize_color

        note = self.state.new_note()
        settings = self.get_settings()
        if settings:
            color = normalize_color(settings.get_string('default-color'))
            if color != note.color:
                self.state.store.update_note(note.id, color=color)
        logger.debug('Created note %s', note.id)
        self.emit('note-created', note.id)

    def _on_about(self, action, param):
        about = Adw.AboutDialog(
            application_name=APP_NAME,
            application_icon=APP_ID,
            version=self.version,
            license_type=Gtk.License.GPL_3_0,
        )
        about.present(self.get_active_window())

    def _on_quit(self, action, param):
        self.quit()

    def _on_preferences(self, action, param):
        from tasknotes.preferences import PreferencesWindow
        win = PreferencesWindow(settings=self.get_settings())
        win.present(self.get_active_window())

    def _on_shortcuts(self, action, param):
        from tasknotes.shortcuts import ShortcutsWindow
        win = ShortcutsWindow(transient_for=self.get_active_window())
        win.present()
