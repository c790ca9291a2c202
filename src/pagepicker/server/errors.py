"""
PagePicker - HTTP Error Mapping

Every failure of the split service is answered with
``{"error": {"kind": ..., "message": ...}}`` and a matching status code.
"""

import logging

from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException, RequestEntityTooLarge

from pagepicker.utils.exceptions import (
    FileTooLargeError,
    InvalidPdfError,
    PagePickerError,
    PageSelectionError,
)

logger = logging.getLogger(__name__)


class ClientError(PagePickerError):
    """Malformed request; answered with 400 and the given kind."""

    def __init__(self, kind: str, message: str) -> None:
        self.kind = kind
        super().__init__(message)


def error_response(kind: str, message: str, status: int):
    return jsonify({"error": {"kind": kind, "message": message}}), status


def register_error_handlers(app: Flask) -> None:
    """Attach the JSON error handlers to ``app``."""

    @app.errorhandler(ClientError)
    def _client_error(e: ClientError):
        logger.warning("Rejected request (%s): %s", e.kind, e.message)
        return error_response(e.kind, e.message, 400)

    @app.errorhandler(PageSelectionError)
    def _page_selection(e: PageSelectionError):
        logger.warning("Rejected page selection: %s", e)
        return error_response("invalid_pages", e.message, 400)

    @app.errorhandler(FileTooLargeError)
    def _too_large(e: FileTooLargeError):
        logger.warning("Rejected upload: %s", e)
        return error_response("file_too_large", e.message, 413)

    @app.errorhandler(RequestEntityTooLarge)
    def _body_too_large(_e: RequestEntityTooLarge):
        limit = app.config["MAX_UPLOAD_BYTES"]
        logger.warning("Rejected request body over %d bytes", limit)
        return error_response("file_too_large", FileTooLargeError(None, limit).message, 413)

    @app.errorhandler(InvalidPdfError)
    def _invalid_pdf(e: InvalidPdfError):
        logger.error("Error processing PDF: %s", e)
        return error_response("internal", "Error processing PDF file", 500)

    @app.errorhandler(HTTPException)
    def _http_error(e: HTTPException):
        return error_response(e.name.lower().replace(" ", "_"), e.description or e.name, e.code or 500)

    @app.errorhandler(Exception)
    def _unexpected(e: Exception):
        logger.exception("Unhandled error while processing request: %s", e)
        return error_response("internal", "Error processing PDF file", 500)
