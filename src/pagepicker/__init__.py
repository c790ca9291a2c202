"""
PagePicker - Python package for picking pages out of PDF files

This package provides a GTK4 page picker, an HTTP split service and a
command line tool that build a new PDF from a chosen subset of pages.
"""

import sys

__version__ = "1.0.0"
__license__ = "GPL-3.0"


def _check_gtk_dependencies() -> bool:
    """Check if GTK dependencies are available.

    Returns:
        True if dependencies are met, False otherwise
    """
    try:
        import gi

        gi.require_version("Gtk", "4.0")
        gi.require_version("Adw", "1")

        from gi.repository import (
            Adw,  # noqa: F401
            Gtk,  # noqa: F401
        )

        return True
    except (ImportError, ValueError) as e:
        print(f"Error: Missing dependencies: {e}", file=sys.stderr)
        print("Please make sure GTK4 and libadwaita are installed", file=sys.stderr)
        return False


def main() -> int:
    """Main entry point for the page picker.

    Returns:
        The application exit code.
    """
    if not _check_gtk_dependencies():
        return 1

    from pagepicker.ui.application import PagePickerApp
    from pagepicker.utils.logger import logger

    try:
        app = PagePickerApp()
        return app.run(sys.argv)
    except Exception as e:
        logger.error(f"Critical error starting application: {e}")
        return 1


__all__ = ["main", "__version__", "__license__"]
