"""
Tests for viewer/loader.py — fetching and decoding the document

HTTP sources use a mocked SessionManager; no network calls are made.
"""
import json
import sys
from pathlib import Path
from unittest.mock import MagicMock

import pytest
import requests

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from viewer.errors import ParseError, TransportError
from viewer.loader import SemanticMapLoader


class TestFileSource:
    def test_loads_dataset(self, document_path):
        ds = SemanticMapLoader(document_path).load()
        assert ds.database_name == "example_cohort"
        assert ds.variable_count == 4

    def test_missing_file(self, tmp_path):
        with pytest.raises(TransportError, match="File not found") as info:
            SemanticMapLoader(tmp_path / "missing.json").load()
        assert info.value.status_code == 404

    def test_directory_is_transport_error(self, tmp_path):
        with pytest.raises(TransportError):
            SemanticMapLoader(tmp_path).load()

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(ParseError, match="Invalid JSON"):
            SemanticMapLoader(path).load()

    def test_deeply_nested_json(self, tmp_path):
        path = tmp_path / "deep.json"
        path.write_text("[" * 200_000 + "]" * 200_000, encoding="utf-8")
        with pytest.raises(ParseError, match="Invalid JSON"):
            SemanticMapLoader(path).fetch()

    def test_schema_mismatch(self, tmp_path):
        path = tmp_path / "list.json"
        path.write_text(json.dumps({"variable_info": ["a"]}), encoding="utf-8")
        with pytest.raises(ParseError):
            SemanticMapLoader(path).load()

    def test_source_stored_as_string(self, document_path):
        assert SemanticMapLoader(document_path).source == str(document_path)


class TestHttpSource:
    def test_success(self, http_loader_factory, sample_document):
        loader = http_loader_factory(body=json.dumps(sample_document).encode())
        assert loader.load().variable_count == 4

    def test_passes_timeout(self, http_loader_factory):
        loader = http_loader_factory()
        loader.timeout = 5.0
        loader.fetch()
        loader.session_manager.session.get.assert_called_once_with(
            "http://example.test/data_semantic_map.json", timeout=5.0
        )

    def test_no_timeout_by_default(self, http_loader_factory):
        loader = http_loader_factory()
        loader.fetch()
        _, kwargs = loader.session_manager.session.get.call_args
        assert kwargs["timeout"] is None

    def test_404(self, http_loader_factory):
        loader = http_loader_factory(status_code=404, body=b"Not Found")
        with pytest.raises(TransportError, match="HTTP 404") as info:
            loader.load()
        assert info.value.status_code == 404

    def test_500(self, http_loader_factory):
        with pytest.raises(TransportError, match="HTTP 500"):
            http_loader_factory(status_code=500).load()

    def test_redirect_status_is_failure(self, http_loader_factory):
        with pytest.raises(TransportError, match="HTTP 304"):
            http_loader_factory(status_code=304).load()

    def test_connection_error(self):
        session_manager = MagicMock()
        session_manager.session.get.side_effect = requests.ConnectionError("refused")
        loader = SemanticMapLoader("https://example.test/x.json", session_manager)
        with pytest.raises(TransportError, match="refused") as info:
            loader.load()
        assert info.value.status_code is None

    def test_invalid_body(self, http_loader_factory):
        with pytest.raises(ParseError):
            http_loader_factory(body=b"<html>oops</html>").load()

    def test_close_releases_session(self, http_loader_factory):
        loader = http_loader_factory()
        loader.close()
        loader.session_manager.close.assert_called_once()
