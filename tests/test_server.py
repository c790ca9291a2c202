"""Tests for the HTTP split service."""

import io
import json

import pytest
from conftest import make_pdf_bytes, page_numbers_of

from pagepicker.server import create_app
from pagepicker.server.errors import ClientError
from pagepicker.server.routes import parse_page_list

SPLIT_URL = "/api/pdf/split"


@pytest.fixture
def app(isolated_config):
    return create_app(isolated_config, overrides={"TESTING": True})


@pytest.fixture
def client(app):
    return app.test_client()


def _post(client, doc=None, pages=None, filename="input.pdf"):
    data = {}
    if doc is not None:
        data["file"] = (io.BytesIO(doc), filename)
    if pages is not None:
        data["pages"] = pages if isinstance(pages, str) else json.dumps(pages)
    return client.post(SPLIT_URL, data=data, content_type="multipart/form-data")


def _error(resp):
    return resp.get_json()["error"]


class TestSplitSuccess:
    def test_returns_pdf_attachment(self, client, pdf_bytes):
        resp = _post(client, pdf_bytes, [1, 3])
        assert resp.status_code == 200
        assert resp.mimetype == "application/pdf"
        assert "attachment" in resp.headers["Content-Disposition"]
        assert "split.pdf" in resp.headers["Content-Disposition"]
        assert page_numbers_of(resp.data) == [1, 3]

    def test_keeps_requested_order_and_duplicates(self, client, pdf_bytes):
        resp = _post(client, pdf_bytes, [3, 1, 1])
        assert resp.status_code == 200
        assert page_numbers_of(resp.data) == [3, 1, 1]

    def test_out_of_range_pages_skipped(self, client, pdf_bytes):
        resp = _post(client, pdf_bytes, [2, 40])
        assert resp.status_code == 200
        assert page_numbers_of(resp.data) == [2]

    def test_cors_header_present(self, client, pdf_bytes):
        resp = client.post(
            SPLIT_URL,
            data={"file": (io.BytesIO(pdf_bytes), "a.pdf"), "pages": "[1]"},
            content_type="multipart/form-data",
            headers={"Origin": "http://localhost:3000"},
        )
        assert resp.status_code == 200
        assert "Access-Control-Allow-Origin" in resp.headers


class TestSplitErrors:
    def test_missing_file(self, client):
        resp = _post(client, pages=[1])
        assert resp.status_code == 400
        assert _error(resp)["kind"] == "missing_file"

    def test_missing_pages(self, client, pdf_bytes):
        resp = _post(client, pdf_bytes)
        assert resp.status_code == 400
        assert _error(resp)["kind"] == "invalid_pages"

    @pytest.mark.parametrize("pages", ["not json", "{}", "[]", '["1"]', "[true]", "[1.5]"])
    def test_invalid_pages(self, client, pdf_bytes, pages):
        resp = _post(client, pdf_bytes, pages)
        assert resp.status_code == 400
        assert _error(resp)["kind"] == "invalid_pages"

    def test_no_valid_pages(self, client, pdf_bytes):
        resp = _post(client, pdf_bytes, [0, 99])
        assert resp.status_code == 400
        assert _error(resp)["kind"] == "invalid_pages"

    def test_corrupt_pdf_is_internal_error(self, client):
        resp = _post(client, b"this is not a pdf", [1])
        assert resp.status_code == 500
        error = _error(resp)
        assert error["kind"] == "internal"
        assert error["message"] == "Error processing PDF file"

    def test_strict_mode_rejects_out_of_range(self, isolated_config, pdf_bytes):
        app = create_app(isolated_config, overrides={"TESTING": True, "STRICT_PAGES": True})
        resp = _post(app.test_client(), pdf_bytes, [1, 9])
        assert resp.status_code == 400
        assert _error(resp)["kind"] == "invalid_pages"

    def test_strict_mode_from_settings(self, isolated_config, pdf_bytes):
        isolated_config.set("extraction.strict_pages", True)
        app = create_app(isolated_config, overrides={"TESTING": True})
        resp = _post(app.test_client(), pdf_bytes, [6])
        assert resp.status_code == 400


class TestUploadLimit:
    def test_file_over_limit(self, isolated_config, pdf_bytes):
        app = create_app(isolated_config, overrides={"TESTING": True, "MAX_UPLOAD_BYTES": 100})
        resp = _post(app.test_client(), pdf_bytes, [1])
        assert resp.status_code == 413
        assert _error(resp)["kind"] == "file_too_large"

    def test_request_body_over_limit(self, isolated_config):
        app = create_app(
            isolated_config,
            overrides={"TESTING": True, "MAX_UPLOAD_BYTES": 100, "MAX_CONTENT_LENGTH": 200},
        )
        resp = _post(app.test_client(), make_pdf_bytes(20), [1])
        assert resp.status_code == 413
        assert _error(resp)["kind"] == "file_too_large"

    def test_limit_from_settings(self, isolated_config):
        isolated_config.set("server.max_upload_bytes", 2048)
        app = create_app(isolated_config)
        assert app.config["MAX_UPLOAD_BYTES"] == 2048
        assert app.config["MAX_CONTENT_LENGTH"] > 2048

    def test_default_limit_is_ten_megabytes(self, app):
        assert app.config["MAX_UPLOAD_BYTES"] == 10 * 1024 * 1024


class TestParsePageList:
    def test_valid(self):
        assert parse_page_list("[3, 1, 1]") == [3, 1, 1]

    @pytest.mark.parametrize("raw", [None, "", "   ", "[]", "3", '{"pages": [1]}'])
    def test_rejected(self, raw):
        with pytest.raises(ClientError) as exc_info:
            parse_page_list(raw)
        assert exc_info.value.kind == "invalid_pages"
