"""
PagePicker - Picker Window

Main window: open a PDF, pick pages from a thumbnail grid or type a
range, and save the picked pages as a new PDF.
"""

import os
import threading
from concurrent.futures import ThreadPoolExecutor

import gi

gi.require_version("Gtk", "4.0")
gi.require_version("Adw", "1")
from gi.repository import Adw, Gdk, Gio, GLib, Gtk

from pagepicker.config import GRID_COLUMNS, SPLIT_FILENAME
from pagepicker.selection.selection_model import KEY_A, KEY_CTRL, KEY_SHIFT
from pagepicker.services.document_session import (
    DocumentSession,
    RenderedPage,
    RenderSequence,
    save_pages,
)
from pagepicker.ui.page_thumbnail import PageThumbnail
from pagepicker.utils.config_manager import get_config_manager
from pagepicker.utils.exceptions import PagePickerError
from pagepicker.utils.i18n import _
from pagepicker.utils.logger import logger

_CSS = b"""
.thumbnail-frame { border: 2px solid transparent; border-radius: 8px; }
.thumbnail-frame.selected { border-color: @accent_bg_color; }
.kbd { padding: 2px 8px; border-radius: 4px; background: alpha(@view_fg_color, 0.1); }
.kbd.held { background: @accent_bg_color; color: @accent_fg_color; }
"""

_KEYVAL_NAMES = {
    "Shift_L": KEY_SHIFT,
    "Shift_R": KEY_SHIFT,
    "Control_L": KEY_CTRL,
    "Control_R": KEY_CTRL,
    "a": KEY_A,
    "A": KEY_A,
}


def _model_key(keyval: int) -> str | None:
    """Map a GDK key value to the key names the selection model tracks."""
    return _KEYVAL_NAMES.get(Gdk.keyval_name(keyval) or "")


class PickerWindow(Adw.ApplicationWindow):
    """Page picker window.

    Layout:
    - Header bar: Open + title + Split
    - Hint bar: Shift / Ctrl / A indicators that light up while held
    - Content: thumbnail grid
    - Bottom: editable range entry and status line
    """

    def __init__(self, application: Gtk.Application, pdf_path: str | None = None) -> None:
        super().__init__(application=application)

        self._config = get_config_manager()
        self._session = DocumentSession()
        self._selection = self._session.selection
        self._pool = ThreadPoolExecutor(max_workers=1)
        self._thumbnails: dict[int, PageThumbnail] = {}
        self._updating_entry = False
        self._thumb_width = int(self._config.get("picker.thumbnail_width"))

        self.set_title(_("PagePicker"))
        self.set_default_size(
            int(self._config.get("window.width")), int(self._config.get("window.height"))
        )

        self._load_css()
        self._setup_actions()
        self._setup_ui()
        self._setup_keyboard()

        self._selection.add_listener(self._on_selection_changed)
        self.connect("close-request", self._on_close_request)

        if pdf_path:
            self.open_file(pdf_path)

    # --- Setup ---

    def _load_css(self) -> None:
        provider = Gtk.CssProvider()
        provider.load_from_data(_CSS)
        Gtk.StyleContext.add_provider_for_display(
            Gdk.Display.get_default(), provider, Gtk.STYLE_PROVIDER_PRIORITY_APPLICATION
        )

    def _setup_actions(self) -> None:
        open_action = Gio.SimpleAction.new("open-file", None)
        open_action.connect("activate", lambda *_a: self._on_open_clicked(None))
        self.add_action(open_action)

        split_action = Gio.SimpleAction.new("split", None)
        split_action.connect("activate", lambda *_a: self._on_split_clicked(None))
        self.add_action(split_action)

    def _setup_ui(self) -> None:
        header = Adw.HeaderBar()

        open_button = Gtk.Button(label=_("Open"))
        open_button.connect("clicked", self._on_open_clicked)
        header.pack_start(open_button)

        self._split_button = Gtk.Button(label=_("Split Selected Pages"))
        self._split_button.add_css_class("suggested-action")
        self._split_button.set_sensitive(False)
        self._split_button.connect("clicked", self._on_split_clicked)
        header.pack_end(self._split_button)

        content = Gtk.Box(orientation=Gtk.Orientation.VERTICAL, spacing=8)
        content.set_margin_start(12)
        content.set_margin_end(12)
        content.set_margin_bottom(12)

        content.append(self._build_hint_bar())

        self._flowbox = Gtk.FlowBox()
        self._flowbox.set_selection_mode(Gtk.SelectionMode.NONE)
        self._flowbox.set_max_children_per_line(GRID_COLUMNS)
        self._flowbox.set_homogeneous(True)
        self._flowbox.set_row_spacing(12)
        self._flowbox.set_column_spacing(12)
        self._flowbox.set_valign(Gtk.Align.START)

        self._empty_page = Adw.StatusPage(
            title=_("Split PDF"),
            description=_("Split PDF file into pieces or pick just a few pages"),
            icon_name="document-open-symbolic",
        )

        self._stack = Gtk.Stack()
        scrolled = Gtk.ScrolledWindow()
        scrolled.set_vexpand(True)
        scrolled.set_child(self._flowbox)
        self._stack.add_named(self._empty_page, "empty")
        self._stack.add_named(scrolled, "pages")
        content.append(self._stack)

        self._range_entry = Gtk.Entry()
        self._range_entry.set_placeholder_text(_("Enter pages (e.g., 1,3,5-7)"))
        self._range_entry.set_sensitive(False)
        self._range_entry.connect("changed", self._on_range_changed)
        self._range_entry.connect("activate", self._on_range_committed)
        focus = Gtk.EventControllerFocus()
        focus.connect("leave", self._on_range_committed)
        self._range_entry.add_controller(focus)
        content.append(self._range_entry)

        self._status_label = Gtk.Label(xalign=0)
        self._status_label.add_css_class("dim-label")
        content.append(self._status_label)

        toolbar_view = Adw.ToolbarView()
        toolbar_view.add_top_bar(header)
        toolbar_view.set_content(content)

        self._toast_overlay = Adw.ToastOverlay()
        self._toast_overlay.set_child(toolbar_view)
        self.set_content(self._toast_overlay)

    def _build_hint_bar(self) -> Gtk.Box:
        box = Gtk.Box(orientation=Gtk.Orientation.HORIZONTAL, spacing=6)
        box.set_margin_top(6)

        self._kbd = {}
        for key, text in ((KEY_SHIFT, _("Shift")), (KEY_CTRL, _("Ctrl")), (KEY_A, "A")):
            label = Gtk.Label(label=text)
            label.add_css_class("kbd")
            self._kbd[key] = label

        box.append(Gtk.Label(label=_("Select specific pages. Use")))
        box.append(self._kbd[KEY_SHIFT])
        box.append(Gtk.Label(label=_("to select multiple pages or")))
        box.append(self._kbd[KEY_CTRL])
        box.append(Gtk.Label(label="+"))
        box.append(self._kbd[KEY_A])
        box.append(Gtk.Label(label=_("to select all.")))
        return box

    def _setup_keyboard(self) -> None:
        controller = Gtk.EventControllerKey()
        controller.set_propagation_phase(Gtk.PropagationPhase.CAPTURE)
        controller.connect("key-pressed", self._on_key_pressed)
        controller.connect("key-released", self._on_key_released)
        self.add_controller(controller)
        # Keys released while another window has focus are never reported
        self.connect("notify::is-active", self._on_active_changed)

    # --- Keyboard ---

    def _on_key_pressed(self, _ctrl, keyval: int, _keycode: int, _state) -> bool:
        key = _model_key(keyval)
        if key is None:
            return False
        # Inside the range entry ctrl+A keeps its text meaning
        focus = self.get_focus()
        typing = focus is not None and (
            focus is self._range_entry or focus.is_ancestor(self._range_entry)
        )
        if key == KEY_SHIFT or not typing:
            changed = self._selection.press_key(key)
        else:
            self._selection.modifiers.set_key(key, True)
            changed = False
        self._update_hints()
        return changed

    def _on_key_released(self, _ctrl, keyval: int, _keycode: int, _state) -> None:
        key = _model_key(keyval)
        if key is not None:
            self._selection.release_key(key)
            self._update_hints()

    def _on_active_changed(self, *_args) -> None:
        if not self.is_active():
            self._selection.modifiers.reset()
            self._update_hints()

    def _update_hints(self) -> None:
        mods = self._selection.modifiers
        for key, held in ((KEY_SHIFT, mods.shift), (KEY_CTRL, mods.ctrl), (KEY_A, mods.a)):
            if held:
                self._kbd[key].add_css_class("held")
            else:
                self._kbd[key].remove_css_class("held")

    # --- Document loading ---

    def _on_open_clicked(self, _button) -> None:
        dialog = Gtk.FileDialog(title=_("Open PDF"))
        pdf_filter = Gtk.FileFilter()
        pdf_filter.set_name(_("PDF documents"))
        pdf_filter.add_mime_type("application/pdf")
        filters = Gio.ListStore.new(Gtk.FileFilter)
        filters.append(pdf_filter)
        dialog.set_filters(filters)
        dialog.open(self, None, self._on_open_finished)

    def _on_open_finished(self, dialog: Gtk.FileDialog, result: Gio.AsyncResult) -> None:
        try:
            file = dialog.open_finish(result)
        except GLib.Error:
            return  # cancelled
        if file is not None:
            self.open_file(file.get_path())

    def open_file(self, path: str) -> None:
        """Load ``path`` and start rendering its pages."""
        try:
            with open(path, "rb") as f:
                doc_bytes = f.read()
            token = self._session.load(doc_bytes, name=os.path.basename(path))
        except (OSError, PagePickerError) as e:
            logger.error(f"Failed to load PDF: {e}")
            self._show_toast(_("Could not open {name}").format(name=os.path.basename(path)))
            return

        self.set_title(_("PagePicker - {}").format(self._session.name))
        self._clear_grid()
        self._stack.set_visible_child_name("pages")
        self._range_entry.set_sensitive(True)
        self._update_status()

        sequence = RenderSequence(
            doc_bytes,
            token,
            self._session.total_pages,
            on_page=lambda page: GLib.idle_add(self._on_page_rendered, page),
            is_current=self._session.is_current,
            width=self._thumb_width,
            on_done=lambda tok: GLib.idle_add(self._on_render_done, tok),
        )
        sequence.start(self._pool)

    def _clear_grid(self) -> None:
        child = self._flowbox.get_first_child()
        while child is not None:
            next_child = child.get_next_sibling()
            self._flowbox.remove(child)
            child = next_child
        self._thumbnails.clear()

    def _on_page_rendered(self, page: RenderedPage) -> bool:
        if not self._session.accept_render(page):
            return GLib.SOURCE_REMOVE

        thumb = PageThumbnail(page.page_index, page.image, self._thumb_width)
        thumb.selected = self._selection.is_selected(page.page_index)
        thumb.connect("thumbnail-clicked", self._on_thumbnail_clicked)
        self._thumbnails[page.page_index] = thumb
        self._flowbox.append(thumb)
        self._update_status()
        return GLib.SOURCE_REMOVE

    def _on_render_done(self, token) -> bool:
        if self._session.is_current(token):
            logger.info(f"All {self._session.total_pages} pages rendered")
            self._update_status()
        return GLib.SOURCE_REMOVE

    # --- Selection ---

    def _on_thumbnail_clicked(self, _thumb: PageThumbnail, page_number: int) -> None:
        # Leave the range entry so ctrl+A reaches the grid
        self.set_focus(None)
        self._selection.toggle_page(page_number)

    def _on_range_changed(self, entry: Gtk.Entry) -> None:
        if self._updating_entry:
            return
        self._selection.edit_text(entry.get_text())

    def _on_range_committed(self, *_args) -> None:
        if self._selection.pending_text is None:
            return
        self._set_entry_text(self._selection.commit_text())

    def _set_entry_text(self, text: str) -> None:
        self._updating_entry = True
        try:
            self._range_entry.set_text(text)
            self._range_entry.set_position(-1)
        finally:
            self._updating_entry = False

    def _on_selection_changed(self, pages: list[int]) -> None:
        selected = set(pages)
        for number, thumb in self._thumbnails.items():
            thumb.selected = number in selected
        if self._selection.pending_text is None:
            self._set_entry_text(self._selection.current_range_text())
        self._update_status()

    def _update_status(self) -> None:
        if not self._session.loaded:
            self._status_label.set_text("")
            self._split_button.set_sensitive(False)
            return

        rendered = len(self._session.pages)
        total = self._session.total_pages
        count = len(self._session.pages_for_extraction())
        if rendered < total:
            text = _("Rendering page {done} of {total}…").format(done=rendered, total=total)
        else:
            text = _("{total} pages · {count} selected").format(total=total, count=count)
        self._status_label.set_text(text)
        self._split_button.set_sensitive(count > 0)

    # --- Split ---

    def _on_split_clicked(self, _button) -> None:
        if not self._session.loaded or not self._session.pages_for_extraction():
            self._show_toast(_("Please select pages to split."))
            return

        dialog = Gtk.FileDialog(title=_("Save Selected Pages"), initial_name=SPLIT_FILENAME)
        folder = self._config.get("picker.last_output_folder")
        if folder and os.path.isdir(folder):
            dialog.set_initial_folder(Gio.File.new_for_path(folder))
        dialog.save(self, None, self._on_save_finished)

    def _on_save_finished(self, dialog: Gtk.FileDialog, result: Gio.AsyncResult) -> None:
        try:
            file = dialog.save_finish(result)
        except GLib.Error:
            return  # cancelled
        if file is None:
            return

        output = file.get_path()
        self._config.set("picker.last_output_folder", os.path.dirname(output))
        self._split_button.set_sensitive(False)

        doc_bytes = self._session.doc_bytes
        pages = self._session.pages_for_extraction()
        name = self._session.name
        strict = bool(self._config.get("extraction.strict_pages"))
        server = self._config.get("server.url")

        def worker() -> None:
            error = save_pages(
                doc_bytes, pages, output, strict=strict, server_url=server, filename=name
            )
            GLib.idle_add(self._on_split_finished, output, error)

        threading.Thread(target=worker, daemon=True).start()

    def _on_split_finished(self, output: str, error: str | None) -> bool:
        self._update_status()
        if error:
            self._show_toast(_("Could not save the new PDF: {error}").format(error=error))
        else:
            self._show_toast(_("Saved {name}").format(name=os.path.basename(output)))
        return GLib.SOURCE_REMOVE

    # --- Misc ---

    def _show_toast(self, message: str) -> None:
        self._toast_overlay.add_toast(Adw.Toast(title=message))

    def _on_close_request(self, _window) -> bool:
        width, height = self.get_default_size()
        self._config.set("window.width", width, save_immediately=False)
        self._config.set("window.height", height)
        self._session.close()
        self._pool.shutdown(wait=False, cancel_futures=True)
        return False
