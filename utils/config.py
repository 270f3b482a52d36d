"""Configuration management utilities for the semantic map viewer.

Provides reusable pieces for:
- Loading application settings from environment variables
- The well-known document name and display placeholders
"""

import os
from pathlib import Path
from typing import Any, Dict, Optional


# ── Display constants ────────────────────────────────────────────────────────
# Shared by the grouping engine, the detail renderer, and the API models.

DOCUMENT_NAME = "data_semantic_map.json"
FALLBACK_GROUP = "Other"
PLACEHOLDER = "—"
DEFAULT_STEP_LABEL = "Group"


def _optional_float(raw: Optional[str]) -> Optional[float]:
    if raw is None or raw.strip() == "":
        return None
    return float(raw)


class AppConfig:
    """Application-level configuration loaded from environment variables.

    All env vars have sensible defaults so the application works out of the
    box without any configuration.

    Environment variables:
        APP_DATA_SOURCE: URL or filesystem path of the semantic map document
            (default: data/data_semantic_map.json)
        APP_FETCH_TIMEOUT: Seconds to wait for the document fetch
            (default: unset, wait indefinitely)
        APP_FETCH_RETRIES: Transport-level retries for the fetch (default: 0)
        APP_PORT: Server port (default: 8000)
        APP_HOST: Server bind address (default: 127.0.0.1)
        APP_LOG_FORMAT: Logging format, "text" or "json" (default: text)
    """

    def __init__(self) -> None:
        self.data_source = os.getenv(
            "APP_DATA_SOURCE", str(Path("data") / DOCUMENT_NAME)
        )
        self.fetch_timeout = _optional_float(os.getenv("APP_FETCH_TIMEOUT"))
        self.fetch_retries = int(os.getenv("APP_FETCH_RETRIES", "0"))
        self.api_port = int(os.getenv("APP_PORT", "8000"))
        self.api_host = os.getenv("APP_HOST", "127.0.0.1")
        self.log_format = os.getenv("APP_LOG_FORMAT", "text")

    @classmethod
    def from_env(cls) -> "AppConfig":
        """Create an AppConfig instance populated from environment variables."""
        return cls()

    @property
    def source_is_url(self) -> bool:
        """True when the data source should be fetched over HTTP."""
        return is_url(self.data_source)

    def to_dict(self) -> Dict[str, Any]:
        """Public settings as a dict (logged once at startup)."""
        return {k: v for k, v in self.__dict__.items() if not k.startswith("_")}


def is_url(source: str) -> bool:
    """Return True for http:// and https:// sources."""
    return source.lower().startswith(("http://", "https://"))
