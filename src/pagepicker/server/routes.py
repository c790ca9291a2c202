"""
PagePicker - Split Route

``POST /api/pdf/split``: multipart upload with a ``file`` part and a
``pages`` field holding a JSON array of 1-based page numbers. Answers with
the new PDF, or with a JSON error payload.
"""

import io
import json
import logging

from flask import Blueprint, current_app, request, send_file

from pagepicker.config import SPLIT_ENDPOINT, SPLIT_FILENAME
from pagepicker.server.errors import ClientError
from pagepicker.services.pdf_operations import extract_pages
from pagepicker.utils.exceptions import FileTooLargeError

logger = logging.getLogger(__name__)

split_bp = Blueprint("split", __name__)


def parse_page_list(raw: str | None) -> list[int]:
    """Validate the ``pages`` form field.

    Raises:
        ClientError: If the field is missing, not JSON, not an array, empty,
            or holds anything other than integers.
    """
    if raw is None or not raw.strip():
        raise ClientError("invalid_pages", "Missing pages selection")

    try:
        pages = json.loads(raw)
    except ValueError:
        raise ClientError("invalid_pages", "Pages must be a JSON array of numbers") from None

    if not isinstance(pages, list) or not pages:
        raise ClientError("invalid_pages", "Invalid page selection")

    # bool is an int subclass; true/false are not page numbers
    if any(isinstance(p, bool) or not isinstance(p, int) for p in pages):
        raise ClientError("invalid_pages", "Page numbers must be integers")

    return pages


@split_bp.route(SPLIT_ENDPOINT, methods=["POST"])
def split_pdf():
    upload = request.files.get("file")
    if upload is None or not upload.filename:
        raise ClientError("missing_file", "Missing PDF file")

    pages = parse_page_list(request.form.get("pages"))

    doc_bytes = upload.read()
    limit = current_app.config["MAX_UPLOAD_BYTES"]
    if len(doc_bytes) > limit:
        raise FileTooLargeError(len(doc_bytes), limit)

    logger.info("Split request: %s (%d bytes), pages %s", upload.filename, len(doc_bytes), pages)
    pdf_bytes = extract_pages(doc_bytes, pages, strict=current_app.config["STRICT_PAGES"])

    return send_file(
        io.BytesIO(pdf_bytes),
        mimetype="application/pdf",
        as_attachment=True,
        download_name=SPLIT_FILENAME,
    )
