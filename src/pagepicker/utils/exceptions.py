"""
PagePicker - Custom Exceptions Module

This module defines custom exception classes for specific error cases
in the PagePicker application.
"""


class PagePickerError(Exception):
    """Base exception for all PagePicker errors.

    All custom exceptions should inherit from this class to allow
    catching any PagePicker-specific error.
    """

    def __init__(self, message: str, details: str | None = None) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error message
            details: Optional technical details for debugging
        """
        super().__init__(message)
        self.message = message
        self.details = details

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} ({self.details})"
        return self.message


class InvalidPdfError(PagePickerError):
    """Raised when a PDF document is invalid, corrupted or locked."""

    def __init__(self, source: str, reason: str | None = None) -> None:
        """Initialize the exception.

        Args:
            source: File path or other label identifying the document
            reason: Optional reason why the PDF is invalid
        """
        self.source = source
        self.reason = reason
        msg = f"Invalid PDF document: {source}"
        if reason:
            msg += f" - {reason}"
        super().__init__(msg, details=f"source={source}")


class PageSelectionError(PagePickerError):
    """Raised when a page list cannot be applied to a document."""

    def __init__(
        self,
        reason: str,
        pages: list[int] | None = None,
        total_pages: int | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            reason: Why the selection was rejected
            pages: Optional page list that was rejected
            total_pages: Optional page count of the document
        """
        self.reason = reason
        self.pages = pages or []
        self.total_pages = total_pages

        details = None
        if total_pages is not None:
            details = f"total_pages={total_pages}"

        super().__init__(f"Invalid page selection: {reason}", details=details)


class FileTooLargeError(PagePickerError):
    """Raised when an uploaded document exceeds the configured size limit."""

    def __init__(self, size_bytes: int | None, limit_bytes: int) -> None:
        """Initialize the exception.

        Args:
            size_bytes: Size of the rejected upload, if known
            limit_bytes: Configured maximum upload size
        """
        self.size_bytes = size_bytes
        self.limit_bytes = limit_bytes

        limit_mb = limit_bytes / (1024 * 1024)
        msg = f"File exceeds the {limit_mb:g} MB upload limit"
        details = f"size={size_bytes}" if size_bytes is not None else None
        super().__init__(msg, details=details)


class RenderError(PagePickerError):
    """Raised when a page cannot be rasterized."""

    def __init__(self, page_index: int, reason: str | None = None) -> None:
        """Initialize the exception.

        Args:
            page_index: 1-based page that failed to render
            reason: Optional reason for the failure
        """
        self.page_index = page_index
        self.reason = reason

        msg = f"Failed to render page {page_index}"
        if reason:
            msg += f" - {reason}"
        super().__init__(msg, details=f"page={page_index}")


class ConfigurationError(PagePickerError):
    """Raised when there's a configuration-related error."""

    def __init__(self, setting_name: str | None = None, reason: str | None = None) -> None:
        """Initialize the exception.

        Args:
            setting_name: Optional name of the problematic setting
            reason: Optional reason for the error
        """
        self.setting_name = setting_name
        self.reason = reason

        if setting_name:
            msg = f"Configuration error for '{setting_name}'"
        else:
            msg = "Configuration error"

        if reason:
            msg += f": {reason}"

        super().__init__(msg)


class SplitRequestError(PagePickerError):
    """Raised when the split service answers with an error or is unreachable."""

    def __init__(
        self,
        message: str,
        kind: str = "internal",
        status_code: int | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Message reported by the server or the transport
            kind: Error kind reported by the server
            status_code: Optional HTTP status code
        """
        self.kind = kind
        self.status_code = status_code

        details = f"kind={kind}"
        if status_code is not None:
            details += f", status={status_code}"

        super().__init__(message, details=details)


# Exception hierarchy summary:
# PagePickerError (base)
# ├── InvalidPdfError
# ├── PageSelectionError
# ├── FileTooLargeError
# ├── RenderError
# ├── ConfigurationError
# └── SplitRequestError
