"""
PagePicker - Page Thumbnail Widget

A GTK4 widget showing one rendered page with its number and a selection
border.
"""

import io

import gi

gi.require_version("Gtk", "4.0")
gi.require_version("Gdk", "4.0")
from gi.repository import Gdk, GLib, GObject, Gtk
from PIL import Image

from pagepicker.utils.i18n import _


def texture_from_image(image: Image.Image) -> Gdk.Texture:
    """Convert a PIL image into a texture GTK can display."""
    buf = io.BytesIO()
    image.save(buf, format="PNG")
    return Gdk.Texture.new_from_bytes(GLib.Bytes.new(buf.getvalue()))


class PageThumbnail(Gtk.Box):
    """Widget representing a single page in the picker grid.

    Signals:
        thumbnail-clicked: Emitted with the 1-based page number on click
    """

    __gsignals__ = {
        "thumbnail-clicked": (GObject.SignalFlags.RUN_FIRST, None, (int,)),
    }

    def __init__(self, page_number: int, image: Image.Image | None, width: int) -> None:
        """Initialize the thumbnail.

        Args:
            page_number: 1-based page number shown under the image
            image: Rendered page, or None if rendering failed
            width: Thumbnail width in pixels
        """
        super().__init__(orientation=Gtk.Orientation.VERTICAL, spacing=6)

        self.page_number = page_number
        self._selected = False

        self.add_css_class("page-thumbnail")
        self.set_cursor(Gdk.Cursor.new_from_name("pointer", None))

        self._frame = Gtk.Frame()
        self._frame.add_css_class("thumbnail-frame")

        if image is not None:
            picture = Gtk.Picture.new_for_paintable(texture_from_image(image))
            picture.set_content_fit(Gtk.ContentFit.CONTAIN)
            picture.set_size_request(width, int(width * image.height / max(image.width, 1)))
            picture.set_alternative_text(_("Page {number}").format(number=page_number))
            self._frame.set_child(picture)
        else:
            placeholder = Gtk.Label(label=_("Preview unavailable"))
            placeholder.add_css_class("dim-label")
            placeholder.set_size_request(width, int(width * 1.414))
            self._frame.set_child(placeholder)

        label = Gtk.Label(label=str(page_number))
        label.add_css_class("caption")

        self.append(self._frame)
        self.append(label)

        click = Gtk.GestureClick()
        click.connect("released", self._on_released)
        self.add_controller(click)

    @property
    def selected(self) -> bool:
        return self._selected

    @selected.setter
    def selected(self, value: bool) -> None:
        if value == self._selected:
            return
        self._selected = value
        if value:
            self._frame.add_css_class("selected")
        else:
            self._frame.remove_css_class("selected")

    def _on_released(self, _gesture: Gtk.GestureClick, _n_press: int, _x: float, _y: float) -> None:
        self.emit("thumbnail-clicked", self.page_number)
