"""Tests for PageRenderer (pdftoppm is mocked)."""

import io
import os
import subprocess
from unittest.mock import patch

import pytest
from PIL import Image

from pagepicker.services.page_renderer import PageRenderer, render
from pagepicker.utils.exceptions import RenderError


def _png_bytes(size=(20, 30)):
    buf = io.BytesIO()
    Image.new("L", size, 128).save(buf, format="PNG")
    return buf.getvalue()


def _completed(returncode=0, stdout=b"", stderr=b""):
    return subprocess.CompletedProcess(args=[], returncode=returncode, stdout=stdout, stderr=stderr)


class TestPageRenderer:
    def test_render_returns_rgb_image(self, pdf_bytes):
        with patch("subprocess.run", return_value=_completed(stdout=_png_bytes())) as run:
            with PageRenderer(pdf_bytes, width=200) as renderer:
                image = renderer.render(3)

        assert image.mode == "RGB"
        assert image.size == (20, 30)
        cmd = run.call_args[0][0]
        assert cmd[0] == "pdftoppm"
        assert cmd[cmd.index("-f") + 1] == "3"
        assert cmd[cmd.index("-l") + 1] == "3"
        assert cmd[cmd.index("-scale-to-x") + 1] == "200"

    def test_no_width_skips_scaling(self, pdf_bytes):
        with PageRenderer(pdf_bytes) as renderer:
            assert "-scale-to-x" not in renderer._command(1)

    def test_temp_copy_removed_on_close(self, pdf_bytes):
        renderer = PageRenderer(pdf_bytes)
        path = renderer._path
        assert os.path.exists(path)
        renderer.close()
        assert not os.path.exists(path)

    def test_render_after_close(self, pdf_bytes):
        renderer = PageRenderer(pdf_bytes)
        renderer.close()
        with pytest.raises(RenderError):
            renderer.render(1)

    def test_pdftoppm_missing(self, pdf_bytes):
        with patch("subprocess.run", side_effect=FileNotFoundError("pdftoppm")):
            with PageRenderer(pdf_bytes) as renderer, pytest.raises(RenderError) as exc_info:
                renderer.render(1)
        assert exc_info.value.page_index == 1

    def test_timeout(self, pdf_bytes):
        with patch("subprocess.run", side_effect=subprocess.TimeoutExpired("pdftoppm", 30)):
            with PageRenderer(pdf_bytes) as renderer, pytest.raises(RenderError):
                renderer.render(2)

    def test_nonzero_exit(self, pdf_bytes):
        failed = _completed(returncode=99, stderr=b"Wrong page range given")
        with patch("subprocess.run", return_value=failed):
            with PageRenderer(pdf_bytes) as renderer, pytest.raises(RenderError) as exc_info:
                renderer.render(9)
        assert "Wrong page range" in str(exc_info.value)

    def test_module_render(self, pdf_bytes):
        with patch("subprocess.run", return_value=_completed(stdout=_png_bytes((5, 5)))):
            assert render(pdf_bytes, 1).size == (5, 5)
