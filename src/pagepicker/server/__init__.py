"""
PagePicker - Split Service

HTTP service that receives a PDF and a page list and answers with a new
PDF holding only those pages.
"""

from pagepicker.server.app import create_app, run_server

__all__ = ["create_app", "run_server"]
