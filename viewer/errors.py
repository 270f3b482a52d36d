"""Error taxonomy for loading and rendering a semantic map.

All three are caught by ViewController.load_and_render() and collapsed into
the FAILED phase; only the message reaches the user.
"""

from __future__ import annotations


class SemanticMapError(Exception):
    """Base class for every load/render failure."""


class TransportError(SemanticMapError):
    """Non-success response status, missing file, or connection failure."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ParseError(SemanticMapError):
    """Body is not valid JSON or does not match the document schema."""


class RenderError(SemanticMapError):
    """Unexpected fault while grouping variables or building the node tree."""
