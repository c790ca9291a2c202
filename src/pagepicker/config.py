#!/usr/bin/env python3
"""
PagePicker - Configuration Module

This module contains all configuration constants and paths used by the application.
"""

import logging
import os
from typing import Final

from pagepicker.utils.i18n import _

# ============================================================================
# Application Constants
# ============================================================================

APP_NAME: Final[str] = "PagePicker"
APP_ID: Final[str] = "io.github.pagepicker"
APP_VERSION: Final[str] = "1.0.0"
APP_DESCRIPTION: Final[str] = _("Pick pages from a PDF and save them as a new document")
APP_ICON_NAME: Final[str] = "pagepicker"


# ============================================================================
# Configuration Directory
# ============================================================================

CONFIG_DIR: Final[str] = os.path.expanduser("~/.config/pagepicker")
CONFIG_FILE_PATH: Final[str] = os.path.join(CONFIG_DIR, "settings.json")


# ============================================================================
# Logging Configuration
# ============================================================================

LOG_LEVEL: int = logging.INFO
LOG_FORMAT: Final[str] = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOGGER_NAME: Final[str] = "PagePicker"


# ============================================================================
# Split Service
# ============================================================================

DEFAULT_HOST: Final[str] = "127.0.0.1"
DEFAULT_PORT: Final[int] = 5000
MAX_UPLOAD_BYTES: Final[int] = 10 * 1024 * 1024  # 10 MiB
SPLIT_ENDPOINT: Final[str] = "/api/pdf/split"
SPLIT_FILENAME: Final[str] = "split.pdf"
CLIENT_TIMEOUT_SECONDS: Final[int] = 60


# ============================================================================
# Rendering
# ============================================================================

RENDER_DPI: Final[int] = 72
RENDER_TIMEOUT_SECONDS: Final[int] = 30
DEFAULT_THUMBNAIL_WIDTH: Final[int] = 220


# ============================================================================
# Window Configuration
# ============================================================================

DEFAULT_WINDOW_WIDTH: Final[int] = 960
DEFAULT_WINDOW_HEIGHT: Final[int] = 720
GRID_COLUMNS: Final[int] = 3


# ============================================================================
# Keyboard Shortcuts
# ============================================================================

SHORTCUTS: Final[dict[str, str]] = {
    "open-file": "<Control>o",
    "split": "<Control>s",
    "quit": "<Control>q",
}


def get_server_port() -> int:
    """Return the split service port, honouring the PORT environment variable."""
    raw = os.environ.get("PORT", "")
    try:
        return int(raw) if raw else DEFAULT_PORT
    except ValueError:
        logging.getLogger(__name__).warning("Ignoring invalid PORT value: %r", raw)
        return DEFAULT_PORT
