"""
Fetch and decode the semantic map document.

The source is either an http(s) URL, fetched once through a pooled
requests.Session, or a filesystem path read directly.  Each failure mode
surfaces as one typed error:

    non-2xx status / connection error / missing file  -> TransportError
    body is not JSON / JSON does not fit the schema   -> ParseError
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import requests

from utils.config import is_url
from utils.http import SessionManager
from viewer.errors import ParseError, TransportError
from viewer.models import Dataset, parse_dataset

logger = logging.getLogger(__name__)


class SemanticMapLoader:
    """Loads one Dataset from a configured source.

    Args:
        source: URL or filesystem path of data_semantic_map.json.
        session_manager: SessionManager for URL sources (default: a new one
            with no retries).
        timeout: Seconds to wait for an HTTP response; None waits
            indefinitely.
    """

    def __init__(self, source: str | Path,
                 session_manager: SessionManager | None = None,
                 timeout: float | None = None) -> None:
        self.source = str(source)
        self.session_manager = session_manager or SessionManager()
        self.timeout = timeout

    def _fetch_http(self) -> bytes:
        logger.info("fetching semantic map url=%s", self.source)
        try:
            resp = self.session_manager.session.get(self.source, timeout=self.timeout)
        except requests.RequestException as exc:
            raise TransportError(f"Request failed: {exc}") from exc
        logger.info("semantic map response status=%d bytes=%d",
                    resp.status_code, len(resp.content))
        if not 200 <= resp.status_code < 300:
            raise TransportError(f"HTTP {resp.status_code}",
                                 status_code=resp.status_code)
        return resp.content

    def _read_file(self) -> bytes:
        path = Path(self.source)
        logger.info("reading semantic map path=%s", path)
        try:
            return path.read_bytes()
        except FileNotFoundError as exc:
            raise TransportError(f"File not found: {path}", status_code=404) from exc
        except OSError as exc:
            raise TransportError(f"Cannot read {path}: {exc}") from exc

    def fetch(self) -> Any:
        """Retrieve the body and decode it as JSON."""
        body = self._fetch_http() if is_url(self.source) else self._read_file()
        try:
            return json.loads(body)
        except (json.JSONDecodeError, UnicodeDecodeError, RecursionError) as exc:
            raise ParseError(f"Invalid JSON: {exc}") from exc

    def load(self) -> Dataset:
        """Fetch, decode, and validate the document."""
        return parse_dataset(self.fetch())

    def close(self) -> None:
        self.session_manager.close()
