"""
PagePicker - Split Service Application

Flask application factory for the split service.
"""

import logging
from typing import Any

from flask import Flask
from flask_cors import CORS

from pagepicker.server.errors import register_error_handlers
from pagepicker.server.routes import split_bp
from pagepicker.utils.config_manager import ConfigManager, get_config_manager

logger = logging.getLogger(__name__)

# Room for multipart boundaries and the pages field on top of the file itself
_MULTIPART_OVERHEAD_BYTES = 64 * 1024


def create_app(
    config_manager: ConfigManager | None = None,
    overrides: dict[str, Any] | None = None,
) -> Flask:
    """Create the split service.

    Args:
        config_manager: Settings source; defaults to the global manager.
        overrides: Flask config values applied last (used by tests).

    Returns:
        Configured Flask application.
    """
    cm = config_manager or get_config_manager()

    app = Flask(__name__)
    CORS(app)

    max_upload = int(cm.get("server.max_upload_bytes"))
    app.config["MAX_UPLOAD_BYTES"] = max_upload
    app.config["MAX_CONTENT_LENGTH"] = max_upload + _MULTIPART_OVERHEAD_BYTES
    app.config["STRICT_PAGES"] = bool(cm.get("extraction.strict_pages", False))

    if overrides:
        app.config.update(overrides)
        if "MAX_UPLOAD_BYTES" in overrides and "MAX_CONTENT_LENGTH" not in overrides:
            app.config["MAX_CONTENT_LENGTH"] = (
                overrides["MAX_UPLOAD_BYTES"] + _MULTIPART_OVERHEAD_BYTES
            )

    app.register_blueprint(split_bp)
    register_error_handlers(app)

    logger.info(
        "Split service ready (upload limit %d bytes, strict pages: %s)",
        app.config["MAX_UPLOAD_BYTES"],
        app.config["STRICT_PAGES"],
    )
    return app


def run_server(host: str | None = None, port: int | None = None) -> None:
    """Serve the split service until interrupted."""
    cm = get_config_manager()
    host = host or cm.get("server.host")
    port = port or int(cm.get("server.port"))

    app = create_app(cm)
    logger.info("Server is running on %s:%d", host, port)
    app.run(host=host, port=port)
