"""String processing utilities for the semantic map viewer.

escape_html() is the single path by which data-derived text enters markup.
The node renderer (viewer/nodes.py) calls it for every text child and every
attribute value.
"""

from typing import Any

# str.translate walks the original string once, so the "&" produced for
# "&lt;" is never itself rescanned.
_HTML_ESCAPES = str.maketrans({
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    '"': "&quot;",
})


def escape_html(value: Any) -> str:
    """Escape a value for safe insertion into HTML text or attribute context.

    Handles:
    - None -> ""
    - Non-string values -> str(value)
    - &, <, >, " -> named character references

    Single quotes are left alone; attribute values are always emitted inside
    double quotes.

    Example:
        '<a>&"b"' -> '&lt;a&gt;&amp;&quot;b&quot;'

    Args:
        value: Value to escape (any type)

    Returns:
        str: Escaped text
    """
    if value is None:
        return ""
    return str(value).translate(_HTML_ESCAPES)


def is_present(value: Any) -> bool:
    """Return True when an optional display field carries a non-empty value."""
    return value is not None and value != ""


def or_placeholder(value: Any, placeholder: str = "—") -> str:
    """Return *value* as a string, or *placeholder* when absent or empty.

    Example:
        or_placeholder(None) -> "—"
        or_placeholder("hasUnit") -> "hasUnit"
    """
    return str(value) if is_present(value) else placeholder
