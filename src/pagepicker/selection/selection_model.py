"""
PagePicker - Page Selection Model

Owns the set of selected pages, the shift-click anchor and the state of
the modifier keys. Every mutation goes through a named operation and
keeps the range text field in sync through the range codec.
"""

from collections.abc import Callable
from dataclasses import dataclass

from pagepicker.selection.range_codec import decode, encode

SelectionListener = Callable[[list[int]], None]

# Key names accepted by press_key/release_key
KEY_SHIFT = "shift"
KEY_CTRL = "ctrl"
KEY_A = "a"


@dataclass
class ModifierState:
    """Keys currently held down in the document view.

    Attributes:
        shift: Shift is held (click extends a range from the anchor)
        ctrl: Control is held
        a: The "a" key is held
    """

    shift: bool = False
    ctrl: bool = False
    a: bool = False

    @property
    def select_all_chord(self) -> bool:
        """Whether ctrl and "a" are held at the same time."""
        return self.ctrl and self.a

    def set_key(self, key: str, down: bool) -> bool:
        """Update one key. Returns False for keys the model does not track."""
        key = key.lower()
        if key == KEY_SHIFT:
            self.shift = down
        elif key == KEY_CTRL:
            self.ctrl = down
        elif key == KEY_A:
            self.a = down
        else:
            return False
        return True

    def reset(self) -> None:
        self.shift = False
        self.ctrl = False
        self.a = False


class SelectionModel:
    """Selected pages of the document currently on screen.

    ``known_pages`` is the number of pages known to exist. It grows while
    pages are rendered; select-all and shift-range fills never go past it.
    ``None`` means no document bound, in which case ranges are not bounded.
    ``total_pages`` is the page count of the document, used to cut spans
    typed in the range field.
    """

    def __init__(self, known_pages: int | None = None, total_pages: int | None = None) -> None:
        self._selected: set[int] = set()
        self._anchor: int | None = None
        self.modifiers = ModifierState()
        self.known_pages = known_pages
        self.total_pages = total_pages
        # Raw text while the user is typing in the range field
        self.pending_text: str | None = None
        self._listeners: list[SelectionListener] = []

    # --- Queries ---

    @property
    def anchor(self) -> int | None:
        return self._anchor

    def selected_pages(self) -> list[int]:
        """Selected pages in ascending order."""
        return sorted(self._selected)

    def is_selected(self, page: int) -> bool:
        return page in self._selected

    def __contains__(self, page: object) -> bool:
        return page in self._selected

    def __len__(self) -> int:
        return len(self._selected)

    def current_range_text(self) -> str:
        """Canonical range string for the current selection."""
        return encode(self._selected)

    @property
    def display_text(self) -> str:
        """Text the range field should show right now."""
        if self.pending_text is not None:
            return self.pending_text
        return self.current_range_text()

    # --- Listeners ---

    def add_listener(self, listener: SelectionListener) -> None:
        """Register a callback invoked with the ascending page list after every change."""
        self._listeners.append(listener)

    def remove_listener(self, listener: SelectionListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify(self) -> None:
        pages = self.selected_pages()
        for listener in list(self._listeners):
            listener(pages)

    # --- Mutations ---

    def toggle_page(self, page: int, modifiers: ModifierState | None = None) -> set[int]:
        """Apply a click on ``page``.

        With shift held and an anchor present, every page between the
        anchor and ``page`` is added and the anchor stays where it is.
        Otherwise the page is flipped in or out of the selection and
        becomes the new anchor. With ctrl+A held the click selects all
        known pages instead.

        Args:
            page: 1-based page that was clicked.
            modifiers: Key state for this click; defaults to the tracked state.

        Returns:
            Copy of the resulting selection.
        """
        modifiers = modifiers or self.modifiers

        if modifiers.select_all_chord and self.known_pages:
            return self.select_all(self.known_pages)

        if modifiers.shift and self._anchor is not None:
            low = min(self._anchor, page)
            high = max(self._anchor, page)
            if self.known_pages is not None:
                high = min(high, max(self.known_pages, page))
            self._selected.update(range(low, high + 1))
        else:
            if page in self._selected:
                self._selected.discard(page)
            else:
                self._selected.add(page)
            self._anchor = page

        self.pending_text = None
        self._notify()
        return set(self._selected)

    def select_all(self, total_pages: int) -> set[int]:
        """Replace the selection with every page from 1 to ``total_pages``."""
        self._selected = set(range(1, total_pages + 1))
        self.pending_text = None
        self._notify()
        return set(self._selected)

    def set_from_text(self, text: str) -> set[int]:
        """Replace the selection with the pages described by ``text``.

        Malformed tokens are ignored. The anchor moves to the highest
        page of the result, or is cleared when nothing was parsed.
        """
        self._replace(text)
        self.pending_text = None
        self._notify()
        return set(self._selected)

    def edit_text(self, text: str) -> set[int]:
        """Apply a keystroke in the range field.

        The selection follows the text immediately while the raw text is
        kept for display until ``commit_text`` is called. Listeners already
        see the raw text in ``display_text``.
        """
        self._replace(text)
        self.pending_text = text
        self._notify()
        return set(self._selected)

    def _replace(self, text: str) -> None:
        self._selected = decode(text, max_page=self.total_pages)
        self._anchor = max(self._selected) if self._selected else None

    def commit_text(self) -> str:
        """Stop showing raw typed text and return the canonical range string."""
        self.pending_text = None
        return self.current_range_text()

    def clear(self) -> None:
        """Drop the selection and the anchor."""
        self._selected.clear()
        self._anchor = None
        self.pending_text = None
        self._notify()

    def reset(self, known_pages: int | None = None, total_pages: int | None = None) -> None:
        """Start over for a newly loaded document."""
        self.known_pages = known_pages
        self.total_pages = total_pages
        self.modifiers.reset()
        self.clear()

    # --- Keyboard ---

    def press_key(self, key: str) -> bool:
        """Record a key-down. Completing the ctrl+A chord selects all known pages.

        Returns:
            True if the key press changed the selection.
        """
        if not self.modifiers.set_key(key, True):
            return False
        if key.lower() in (KEY_CTRL, KEY_A) and self.modifiers.select_all_chord:
            if self.known_pages:
                self.select_all(self.known_pages)
                return True
        return False

    def release_key(self, key: str) -> None:
        self.modifiers.set_key(key, False)
