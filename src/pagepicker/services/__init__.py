"""
PagePicker - Services Package

PDF inspection and extraction, page rendering, the document session that
ties them to the page selection, and the client for the split service.
"""

from pagepicker.services.document_session import (
    DocumentSession,
    DocumentToken,
    RenderedPage,
    RenderSequence,
    save_pages,
)
from pagepicker.services.page_renderer import PageRenderer, render
from pagepicker.services.pdf_operations import (
    ErrorCode,
    OperationResult,
    PDFInfo,
    count_pages,
    extract_pages,
    extract_pages_to_file,
    get_pdf_info,
    select_valid_pages,
)
from pagepicker.services.split_client import SplitClient

__all__ = [
    "DocumentSession",
    "DocumentToken",
    "ErrorCode",
    "OperationResult",
    "PDFInfo",
    "PageRenderer",
    "RenderSequence",
    "RenderedPage",
    "SplitClient",
    "count_pages",
    "extract_pages",
    "extract_pages_to_file",
    "get_pdf_info",
    "render",
    "save_pages",
    "select_valid_pages",
]
