"""
PagePicker - Page Renderer

Rasterizes PDF pages to PIL images using pdftoppm (poppler-utils).
The document is written to a temporary file once and every page is
rendered from that copy.
"""

import io
import logging
import os
import subprocess
import tempfile

from PIL import Image

from pagepicker.config import RENDER_DPI, RENDER_TIMEOUT_SECONDS
from pagepicker.utils.exceptions import RenderError

logger = logging.getLogger(__name__)


class PageRenderer:
    """Renders pages of one in-memory PDF.

    Use as a context manager so the temporary copy is removed:

        with PageRenderer(doc_bytes) as renderer:
            image = renderer.render(1)
    """

    def __init__(self, doc_bytes: bytes, width: int | None = None, dpi: int = RENDER_DPI) -> None:
        """Initialize the renderer.

        Args:
            doc_bytes: PDF document bytes
            width: Output width in pixels; None keeps the page size at ``dpi``
            dpi: Render resolution
        """
        self._width = width
        self._dpi = dpi
        fd, self._path = tempfile.mkstemp(suffix=".pdf", prefix="pagepicker_")
        with os.fdopen(fd, "wb") as f:
            f.write(doc_bytes)

    def __enter__(self) -> "PageRenderer":
        return self

    def __exit__(self, *_exc) -> None:
        self.close()

    def close(self) -> None:
        if self._path and os.path.exists(self._path):
            os.remove(self._path)
        self._path = ""

    def _command(self, page_index: int) -> list[str]:
        cmd = ["pdftoppm", "-png", "-r", str(self._dpi)]
        if self._width:
            cmd += ["-scale-to-x", str(self._width), "-scale-to-y", "-1"]
        cmd += ["-f", str(page_index), "-l", str(page_index), "-singlefile", self._path]
        return cmd

    def render(self, page_index: int) -> Image.Image:
        """Render one page.

        Args:
            page_index: 1-based page number.

        Returns:
            The rendered page as an RGB image.

        Raises:
            RenderError: If pdftoppm is missing, fails or times out.
        """
        if not self._path:
            raise RenderError(page_index, "renderer is closed")

        try:
            result = subprocess.run(
                self._command(page_index),
                capture_output=True,
                timeout=RENDER_TIMEOUT_SECONDS,
            )
        except FileNotFoundError as e:
            raise RenderError(page_index, "pdftoppm not found (install poppler-utils)") from e
        except subprocess.TimeoutExpired as e:
            raise RenderError(page_index, f"timed out after {RENDER_TIMEOUT_SECONDS}s") from e

        if result.returncode != 0 or not result.stdout:
            stderr = result.stderr.decode(errors="replace").strip()
            raise RenderError(page_index, stderr or f"pdftoppm exit code {result.returncode}")

        image = Image.open(io.BytesIO(result.stdout))
        image.load()
        logger.debug("Rendered page %d (%dx%d)", page_index, image.width, image.height)
        return image.convert("RGB")


def render(doc_bytes: bytes, page_index: int, width: int | None = None) -> Image.Image:
    """Render a single page of an in-memory PDF.

    Args:
        doc_bytes: PDF document bytes.
        page_index: 1-based page number.
        width: Optional output width in pixels.

    Returns:
        The rendered page image.
    """
    with PageRenderer(doc_bytes, width=width) as renderer:
        return renderer.render(page_index)
