"""
PagePicker - Utils Package

Utility modules for the application.
"""

from pagepicker.utils.exceptions import (
    ConfigurationError,
    FileTooLargeError,
    InvalidPdfError,
    PagePickerError,
    PageSelectionError,
    RenderError,
    SplitRequestError,
)
from pagepicker.utils.i18n import _, setup_i18n

__all__ = [
    "_",
    "setup_i18n",
    "PagePickerError",
    "InvalidPdfError",
    "PageSelectionError",
    "FileTooLargeError",
    "RenderError",
    "ConfigurationError",
    "SplitRequestError",
]
