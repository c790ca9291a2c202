"""
PagePicker - Application Module

This module contains the main application class for PagePicker.
"""

import gi

gi.require_version("Gtk", "4.0")
gi.require_version("Adw", "1")
from gi.repository import Adw, Gio

from pagepicker.config import APP_ID, SHORTCUTS
from pagepicker.ui.picker_window import PickerWindow
from pagepicker.utils.logger import logger


class PagePickerApp(Adw.Application):
    """Application class for PagePicker."""

    def __init__(self, initial_file: str | None = None) -> None:
        """Initialize the application.

        Args:
            initial_file: Optional PDF to open on startup
        """
        super().__init__(application_id=APP_ID, flags=Gio.ApplicationFlags.HANDLES_OPEN)

        self._initial_file = initial_file

        self.connect("activate", self.on_activate)
        self.connect("open", self.on_open)

        quit_action = Gio.SimpleAction.new("quit", None)
        quit_action.connect("activate", lambda *_: self.quit())
        self.add_action(quit_action)

        self.set_accels_for_action("app.quit", [SHORTCUTS["quit"]])
        self.set_accels_for_action("win.open-file", [SHORTCUTS["open-file"]])
        self.set_accels_for_action("win.split", [SHORTCUTS["split"]])

    def _get_window(self) -> PickerWindow:
        window = self.get_active_window()
        if window is None:
            window = PickerWindow(application=self)
        return window

    def on_activate(self, _app: Adw.Application) -> None:
        window = self._get_window()
        if self._initial_file:
            window.open_file(self._initial_file)
            self._initial_file = None
        window.present()

    def on_open(self, _app: Adw.Application, files: list[Gio.File], _n_files: int, _hint: str) -> None:
        window = self._get_window()
        # Only one document is shown at a time; the last one wins
        paths = [f.get_path() for f in files if f.get_path()]
        if paths:
            logger.info(f"Opening {paths[-1]}")
            window.open_file(paths[-1])
        window.present()
