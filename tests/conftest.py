"""
Pytest fixtures for the semantic map viewer tests.

Provides a representative document (grouped, ungrouped, and sparse
variables), the same document written to a temporary file, and helpers for
building loaders whose HTTP transport is a mock.
"""

import json
import sys
from pathlib import Path
from unittest.mock import MagicMock

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from viewer.loader import SemanticMapLoader  # noqa: E402

SAMPLE_DOCUMENT = {
    "database_name": "example_cohort",
    "variable_info": {
        "sex": {
            "predicate": "hasSex",
            "class": "NCIT:C28421",
            "local_definition": "Sex recorded at enrolment.",
            "schema_reconstruction": [
                {"class_label": "Patient", "class": "NCIT:C16960",
                 "aesthetic_label": "Demographics"},
                {"class_label": "Sex", "class": "NCIT:C28421",
                 "predicate": "hasSex", "aesthetic_label": "Ignored"},
            ],
            "value_mapping": {
                "terms": {
                    "m": {"target_class": "NCIT:C20197"},
                    "f": {"target_class": "NCIT:C16576"},
                    "u": {},
                }
            },
        },
        "age": {
            "predicate": "hasAge",
            "class": "NCIT:C25150",
            "schema_reconstruction": [
                {"class_label": "Patient", "aesthetic_label": "Demographics"},
            ],
        },
        "weight_kg": {
            "predicate": "hasUnit",
            "class": "NCIT:C25208",
            "schema_reconstruction": [
                {"class_label": "Body weight", "aesthetic_label": "Measurements",
                 "predicate": "hasMeasurement"},
            ],
        },
        "site_code": {
            "local_definition": "Internal site identifier.",
        },
    },
}


@pytest.fixture()
def sample_document():
    """A fresh deep copy of SAMPLE_DOCUMENT."""
    return json.loads(json.dumps(SAMPLE_DOCUMENT))


@pytest.fixture()
def document_path(tmp_path, sample_document):
    """SAMPLE_DOCUMENT written to <tmp>/data_semantic_map.json."""
    path = tmp_path / "data_semantic_map.json"
    path.write_text(json.dumps(sample_document), encoding="utf-8")
    return path


def mock_http_loader(status_code: int = 200, body: bytes = b"{}",
                     url: str = "http://example.test/data_semantic_map.json"):
    """SemanticMapLoader whose session returns one canned response."""
    session_manager = MagicMock()
    session_manager.session.get.return_value = MagicMock(
        status_code=status_code, content=body
    )
    return SemanticMapLoader(url, session_manager)


@pytest.fixture()
def http_loader_factory():
    return mock_http_loader
