"""Shared utilities for the semantic map viewer."""

# Configuration
from utils.config import (
    AppConfig,
    DEFAULT_STEP_LABEL,
    DOCUMENT_NAME,
    FALLBACK_GROUP,
    PLACEHOLDER,
    is_url,
)

# HTTP utilities
from utils.http import RetryStrategy, SessionManager

# String utilities
from utils.strings import escape_html, is_present, or_placeholder

__all__ = [
    # Configuration
    "AppConfig",
    "DEFAULT_STEP_LABEL",
    "DOCUMENT_NAME",
    "FALLBACK_GROUP",
    "PLACEHOLDER",
    "is_url",
    # HTTP
    "RetryStrategy",
    "SessionManager",
    # Strings
    "escape_html",
    "is_present",
    "or_placeholder",
]
