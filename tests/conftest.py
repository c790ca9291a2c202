"""Pytest configuration for pagepicker tests.

Provides in-memory PDFs whose pages can be told apart by their width
(page N is 100 + N points wide) and keeps every test away from the
user's real settings file.
"""

import io

import pikepdf
import pytest

from pagepicker.utils import config_manager


def make_pdf_bytes(num_pages: int = 5) -> bytes:
    """Build a PDF with ``num_pages`` blank pages of distinct widths."""
    pdf = pikepdf.Pdf.new()
    for i in range(num_pages):
        page = pikepdf.Page(
            pikepdf.Dictionary(
                Type=pikepdf.Name.Page,
                MediaBox=[0, 0, 101 + i, 792],
            )
        )
        pdf.pages.append(page)
    buf = io.BytesIO()
    pdf.save(buf)
    pdf.close()
    return buf.getvalue()


def page_numbers_of(pdf_bytes: bytes) -> list[int]:
    """Recover which source pages a PDF built from make_pdf_bytes holds."""
    with pikepdf.open(io.BytesIO(pdf_bytes)) as pdf:
        return [int(page.mediabox[2]) - 100 for page in pdf.pages]


@pytest.fixture
def pdf_bytes():
    """Five-page PDF."""
    return make_pdf_bytes(5)


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Point the global ConfigManager at a throwaway settings file."""
    cm = config_manager.ConfigManager(config_path=str(tmp_path / "config" / "settings.json"))
    monkeypatch.setattr(config_manager, "_config_manager", cm)
    return cm
