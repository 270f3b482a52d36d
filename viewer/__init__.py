"""
Viewer package -- semantic map loading, grouping, and rendering.

Re-exports key entry points so callers can do::

    from viewer import SemanticMapLoader, ViewController, render_html
"""

from viewer.controller import Page, Phase, Region, ViewController, ViewState, select_variable
from viewer.errors import ParseError, RenderError, SemanticMapError, TransportError
from viewer.grouping import group_by_aesthetic_label
from viewer.loader import SemanticMapLoader
from viewer.models import Dataset, GroupTable, parse_dataset
from viewer.nodes import Node, render_html

__all__ = [
    "Dataset",
    "GroupTable",
    "Node",
    "Page",
    "ParseError",
    "Phase",
    "Region",
    "RenderError",
    "SemanticMapError",
    "SemanticMapLoader",
    "TransportError",
    "ViewController",
    "ViewState",
    "group_by_aesthetic_label",
    "parse_dataset",
    "render_html",
    "select_variable",
]
