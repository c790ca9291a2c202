"""
PagePicker - PDF Operations Service

Pure-Python service for the PDF operations the picker needs.
No GTK dependencies - can be used from the CLI, the GUI or the HTTP service.

Supported operations:
  - Page count and metadata info
  - Extract an ordered list of pages into a new PDF (bytes or files)
"""

import io
import logging
import os
from dataclasses import dataclass
from enum import Enum, auto
from pathlib import Path

import pikepdf

from pagepicker.utils.exceptions import InvalidPdfError, PageSelectionError
from pagepicker.utils.i18n import _

logger = logging.getLogger(__name__)


class ErrorCode(Enum):
    """Error classification for PDF operations."""

    NONE = auto()
    FILE_NOT_FOUND = auto()
    PERMISSION_DENIED = auto()
    CORRUPT_PDF = auto()
    PASSWORD_PROTECTED = auto()
    INVALID_PAGES = auto()
    DISK_FULL = auto()
    UNKNOWN = auto()


def _classify_error(e: Exception) -> ErrorCode:
    """Classify an exception into an ErrorCode."""
    if isinstance(e, FileNotFoundError):
        return ErrorCode.FILE_NOT_FOUND
    if isinstance(e, PermissionError):
        return ErrorCode.PERMISSION_DENIED
    if isinstance(e, pikepdf.PasswordError):
        return ErrorCode.PASSWORD_PROTECTED
    if isinstance(e, (pikepdf.PdfError, InvalidPdfError)):
        return ErrorCode.CORRUPT_PDF
    if isinstance(e, PageSelectionError):
        return ErrorCode.INVALID_PAGES
    if isinstance(e, OSError) and e.errno == 28:
        return ErrorCode.DISK_FULL
    return ErrorCode.UNKNOWN


def _friendly_error(e: Exception) -> str:
    """Map common exceptions to user-friendly messages."""
    if isinstance(e, FileNotFoundError):
        return _("Could not find the file. Was it moved or deleted?")
    if isinstance(e, PermissionError):
        return _("Cannot write to this folder. Choose a different location.")
    if isinstance(e, pikepdf.PasswordError):
        return _("This PDF is password-protected. Remove the password first.")
    if isinstance(e, pikepdf.PdfError):
        return _("The PDF file appears to be damaged or invalid: {error}").format(error=e)
    return str(e)


def _fail(e: Exception) -> "OperationResult":
    """Create a failed OperationResult from an exception."""
    return OperationResult(
        success=False,
        message=_friendly_error(e),
        error_code=_classify_error(e),
    )


# ---------------------------------------------------------------------------
# Data classes
# ---------------------------------------------------------------------------


@dataclass
class PDFInfo:
    """Basic information about a PDF file."""

    path: str
    page_count: int
    file_size_bytes: int
    title: str = ""
    author: str = ""
    creator: str = ""
    encrypted: bool = False
    pdf_version: str = ""

    @property
    def file_size_mb(self) -> float:
        return self.file_size_bytes / (1024 * 1024)


@dataclass
class OperationResult:
    """Generic result for file-level PDF operations."""

    success: bool
    message: str = ""
    output_path: str = ""
    pages_affected: int = 0
    error_code: ErrorCode = ErrorCode.NONE


# ---------------------------------------------------------------------------
# Info / Inspection
# ---------------------------------------------------------------------------


def get_pdf_info(pdf_path: str | Path) -> PDFInfo:
    """Get basic information about a PDF file.

    Args:
        pdf_path: Path to the PDF file.

    Returns:
        PDFInfo with metadata.

    Raises:
        FileNotFoundError: If the file does not exist.
        pikepdf.PdfError: If the file is not a valid PDF.
    """
    pdf_path = str(pdf_path)
    if not os.path.isfile(pdf_path):
        raise FileNotFoundError(f"File not found: {pdf_path}")

    file_size = os.path.getsize(pdf_path)

    with pikepdf.open(pdf_path) as pdf:
        info = PDFInfo(
            path=pdf_path,
            page_count=len(pdf.pages),
            file_size_bytes=file_size,
            pdf_version=str(pdf.pdf_version),
            encrypted=pdf.is_encrypted,
        )

        if "/Creator" in pdf.docinfo:
            info.creator = str(pdf.docinfo["/Creator"])

        with pdf.open_metadata(set_pikepdf_as_editor=False, update_docinfo=False) as meta:
            info.title = str(meta.get("dc:title", ""))
            info.author = str(meta.get("dc:creator", ""))

    return info


def count_pages(doc_bytes: bytes) -> int:
    """Return the number of pages of an in-memory PDF.

    Raises:
        InvalidPdfError: If the bytes are not a readable PDF.
    """
    try:
        with pikepdf.open(io.BytesIO(doc_bytes)) as pdf:
            return len(pdf.pages)
    except pikepdf.PdfError as e:
        raise InvalidPdfError("<upload>", _friendly_error(e)) from e


# ---------------------------------------------------------------------------
# Page validation
# ---------------------------------------------------------------------------


def select_valid_pages(pages: list[int], total_pages: int, *, strict: bool = False) -> list[int]:
    """Check a requested page list against the document's page count.

    The permissive policy drops pages outside ``1..total_pages`` and keeps
    everything else in the requested order, duplicates included. The strict
    policy rejects the whole list if any page is out of range.

    Args:
        pages: Requested 1-indexed page numbers, in output order.
        total_pages: Page count of the source document.
        strict: Reject instead of skipping out-of-range pages.

    Returns:
        Pages to copy, in order.

    Raises:
        PageSelectionError: If nothing is left to copy, or strict mode
            found an out-of-range page.
    """
    invalid = [p for p in pages if not 1 <= p <= total_pages]
    if invalid and strict:
        raise PageSelectionError(
            f"pages {invalid} are outside 1-{total_pages}",
            pages=pages,
            total_pages=total_pages,
        )

    valid = [p for p in pages if 1 <= p <= total_pages]
    if not valid:
        raise PageSelectionError(
            f"no valid pages in {pages} (document has {total_pages} pages)",
            pages=pages,
            total_pages=total_pages,
        )

    if invalid:
        logger.info("Skipping out-of-range pages %s (document has %d pages)", invalid, total_pages)
    return valid


# ---------------------------------------------------------------------------
# Extract
# ---------------------------------------------------------------------------


def _copy_pages(src: pikepdf.Pdf, pages: list[int]) -> pikepdf.Pdf:
    """Build a new PDF holding ``pages`` of ``src`` in the given order."""
    dst = pikepdf.Pdf.new()
    # Repeated pages are copied from their first copy inside dst
    first_copy: dict[int, int] = {}
    for p in pages:
        if p in first_copy:
            dst.pages.append(dst.pages[first_copy[p]])
        else:
            first_copy[p] = len(dst.pages)
            dst.pages.append(src.pages[p - 1])
    return dst


def extract_pages(doc_bytes: bytes, pages: list[int], *, strict: bool = False) -> bytes:
    """Build a new PDF from selected pages of an in-memory PDF.

    Pages are copied in the order given and repeated pages are repeated
    in the output.

    Args:
        doc_bytes: Source PDF bytes.
        pages: 1-indexed page numbers, in output order.
        strict: Reject out-of-range pages instead of skipping them.

    Returns:
        Bytes of the new PDF.

    Raises:
        InvalidPdfError: If the source is not a readable PDF.
        PageSelectionError: If the page list cannot be applied.
    """
    try:
        with pikepdf.open(io.BytesIO(doc_bytes)) as src:
            valid = select_valid_pages(pages, len(src.pages), strict=strict)
            dst = _copy_pages(src, valid)
            buf = io.BytesIO()
            dst.save(buf)
            dst.close()
    except pikepdf.PdfError as e:
        raise InvalidPdfError("<upload>", _friendly_error(e)) from e

    logger.info("Extracted pages %s (%d bytes)", valid, buf.tell())
    return buf.getvalue()


def extract_pages_to_file(
    pdf_path: str | Path,
    output_path: str | Path,
    pages: list[int],
    *,
    strict: bool = False,
) -> OperationResult:
    """Extract specific pages of a PDF file into a new PDF file.

    Args:
        pdf_path: Source PDF path.
        output_path: Output PDF path.
        pages: List of 1-indexed page numbers to extract, in output order.
        strict: Reject out-of-range pages instead of skipping them.

    Returns:
        OperationResult.
    """
    pdf_path = Path(pdf_path)
    output_path = Path(output_path)

    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with pikepdf.open(pdf_path) as src:
            valid = select_valid_pages(pages, len(src.pages), strict=strict)
            dst = _copy_pages(src, valid)
            dst.save(str(output_path))
            dst.close()

        logger.info("Extracted pages %s → %s", valid, output_path)
        return OperationResult(
            success=True,
            message=_("Extracted {count} pages").format(count=len(valid)),
            output_path=str(output_path),
            pages_affected=len(valid),
        )
    except (OSError, pikepdf.PdfError, PageSelectionError) as e:
        logger.error("Extract failed: %s", e)
        return _fail(e)
