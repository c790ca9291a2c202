"""
PagePicker - Document Session

State of the document currently shown in the picker: its bytes, an
identity token minted on every load, the pages rendered so far and the
page selection.

Rendering runs page by page on a background worker. Each result carries
the token of the document it was rendered for, and the session rejects
results whose token is no longer current, so a slow render of a previous
document can never leak into the next one.
"""

import logging
import uuid
from collections.abc import Callable
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass

from PIL import Image

from pagepicker.selection import SelectionModel
from pagepicker.services.page_renderer import PageRenderer
from pagepicker.services.pdf_operations import count_pages, extract_pages
from pagepicker.services.split_client import SplitClient
from pagepicker.utils.exceptions import PageSelectionError, PagePickerError
from pagepicker.utils.i18n import _

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DocumentToken:
    """Identity of one loaded document."""

    value: str

    @classmethod
    def new(cls) -> "DocumentToken":
        return cls(uuid.uuid4().hex)


@dataclass
class RenderedPage:
    """Outcome of rendering one page.

    Attributes:
        token: Document the page belongs to
        page_index: 1-based page number
        image: Rendered image, or None if rendering failed
        error: Failure message when image is None
    """

    token: DocumentToken
    page_index: int
    image: Image.Image | None = None
    error: str = ""


class DocumentSession:
    """The loaded document and everything derived from it."""

    def __init__(self, selection: SelectionModel | None = None) -> None:
        self.selection = selection or SelectionModel()
        self._token: DocumentToken | None = None
        self._doc_bytes = b""
        self.name = ""
        self.total_pages = 0
        self.pages: dict[int, RenderedPage] = {}

    @property
    def token(self) -> DocumentToken | None:
        return self._token

    @property
    def doc_bytes(self) -> bytes:
        return self._doc_bytes

    @property
    def loaded(self) -> bool:
        return self._token is not None

    @property
    def render_complete(self) -> bool:
        return self.loaded and len(self.pages) == self.total_pages

    def is_current(self, token: DocumentToken) -> bool:
        return token == self._token

    def load(self, doc_bytes: bytes, name: str = "") -> DocumentToken:
        """Replace the current document.

        Mints a new token, so results still in flight for the previous
        document are rejected from now on. The selection starts empty and
        no page is known to exist until it has been rendered.

        Raises:
            InvalidPdfError: If the bytes are not a readable PDF.
        """
        total = count_pages(doc_bytes)

        self._token = DocumentToken.new()
        self._doc_bytes = doc_bytes
        self.name = name
        self.total_pages = total
        self.pages = {}
        self.selection.reset(known_pages=0, total_pages=total)

        logger.info("Loaded %s with %d pages (token %s)", name or "document", total, self._token.value)
        return self._token

    def close(self) -> None:
        """Forget the current document."""
        self._token = None
        self._doc_bytes = b""
        self.name = ""
        self.total_pages = 0
        self.pages = {}
        self.selection.reset(known_pages=None)

    def accept_render(self, result: RenderedPage) -> bool:
        """Commit a rendered page if it belongs to the current document.

        Returns:
            False if the result was for a superseded document and was dropped.
        """
        if not self.is_current(result.token):
            logger.debug(
                "Dropping page %d rendered for stale document %s",
                result.page_index,
                result.token.value,
            )
            return False

        self.pages[result.page_index] = result
        known = self.selection.known_pages or 0
        self.selection.known_pages = max(known, result.page_index)
        return True

    def pages_for_extraction(self) -> list[int]:
        """Selected pages that exist in the document, ascending."""
        return [p for p in self.selection.selected_pages() if 1 <= p <= self.total_pages]

    def extract_selection(self, *, strict: bool = False) -> bytes:
        """Build a PDF from the selected pages.

        Raises:
            PageSelectionError: If nothing is selected or no selected page exists.
            InvalidPdfError: If the document cannot be read.
        """
        if not self.loaded:
            raise PagePickerError(_("No document loaded"))

        pages = self.selection.selected_pages()
        if not pages:
            raise PageSelectionError(_("no pages selected"), total_pages=self.total_pages)

        return extract_pages(self._doc_bytes, pages, strict=strict)


class RenderSequence:
    """Renders every page of a document in ascending order on one worker.

    ``on_page`` is called from the worker thread for each page; GUI callers
    hand the result over to their main loop before touching the session.
    The sequence stops early once ``is_current`` reports that the document
    was replaced.
    """

    def __init__(
        self,
        doc_bytes: bytes,
        token: DocumentToken,
        total_pages: int,
        on_page: Callable[[RenderedPage], None],
        is_current: Callable[[DocumentToken], bool],
        width: int | None = None,
        on_done: Callable[[DocumentToken], None] | None = None,
    ) -> None:
        self._doc_bytes = doc_bytes
        self._token = token
        self._total_pages = total_pages
        self._on_page = on_page
        self._is_current = is_current
        self._width = width
        self._on_done = on_done

    @property
    def token(self) -> DocumentToken:
        return self._token

    def run(self) -> int:
        """Render pages until done or superseded.

        Returns:
            Number of pages handed to ``on_page``.
        """
        delivered = 0
        with PageRenderer(self._doc_bytes, width=self._width) as renderer:
            for page_index in range(1, self._total_pages + 1):
                if not self._is_current(self._token):
                    logger.info(
                        "Render of %s cancelled after %d pages", self._token.value, delivered
                    )
                    return delivered
                try:
                    result = RenderedPage(self._token, page_index, renderer.render(page_index))
                except PagePickerError as e:
                    logger.warning("%s", e)
                    result = RenderedPage(self._token, page_index, error=e.message)
                self._on_page(result)
                delivered += 1

        if self._on_done:
            self._on_done(self._token)
        return delivered

    def start(self, pool: ThreadPoolExecutor) -> Future:
        """Submit the sequence to ``pool``."""
        return pool.submit(self.run)


def save_pages(
    doc_bytes: bytes,
    pages: list[int],
    output_path: str,
    *,
    strict: bool = False,
    server_url: str = "",
    filename: str = "document.pdf",
) -> str | None:
    """Build a PDF from ``pages`` and write it to ``output_path``.

    Runs on a worker thread, so every failure is reported through the
    return value instead of being raised.

    Args:
        doc_bytes: Source PDF bytes.
        pages: Pages to keep, in output order.
        output_path: Where to write the new PDF.
        strict: Reject out-of-range pages instead of skipping them.
        server_url: Split service to use; empty extracts in-process.
        filename: Name reported to the split service.

    Returns:
        None on success, otherwise a message for the user.
    """
    try:
        if server_url:
            pdf_bytes = SplitClient(server_url).split(doc_bytes, pages, filename=filename)
        else:
            pdf_bytes = extract_pages(doc_bytes, pages, strict=strict)
        with open(output_path, "wb") as f:
            f.write(pdf_bytes)
    except (PagePickerError, OSError) as e:
        logger.error("Error splitting PDF: %s", e)
        return str(e)
    except Exception as e:
        logger.exception("Unexpected error splitting PDF: %s", e)
        return str(e)

    logger.info("Saved pages %s to %s", pages, output_path)
    return None
