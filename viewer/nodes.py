"""
Typed node tree and the default HTML renderer.

The composition code in viewer/rendering.py builds Node trees only; it never
writes markup.  render_html() is the one place a tree becomes HTML, and it
escapes every text child and attribute value with utils.strings.escape_html.
Any other presentation surface can walk the same trees instead.

Usage::

    card = h("div", h("h2", "age"), class_="card")
    render_html(card)   # '<div class="card"><h2>age</h2></div>'
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass, field
from typing import Any, Union

from utils.strings import escape_html

VOID_TAGS = frozenset({"br", "hr", "img", "input", "link", "meta"})

Child = Union["Node", str]


@dataclass
class Node:
    """One element: a tag, ordered attributes, and text-or-element children."""

    tag: str
    attrs: dict[str, Any] = field(default_factory=dict)
    children: list[Child] = field(default_factory=list)

    # ── tree helpers ──────────────────────────────────────────────────────

    def append(self, child: Child) -> "Node":
        self.children.append(child)
        return self

    def iter(self) -> Iterator["Node"]:
        """Yield this node and every element below it, depth first."""
        yield self
        for child in self.children:
            if isinstance(child, Node):
                yield from child.iter()

    def find_all(self, predicate: Callable[["Node"], bool]) -> list["Node"]:
        return [n for n in self.iter() if predicate(n)]

    def find_by_class(self, name: str) -> list["Node"]:
        return self.find_all(lambda n: n.has_class(name))

    def text_content(self) -> str:
        """Concatenated text of this subtree, unescaped."""
        parts: list[str] = []
        for child in self.children:
            if isinstance(child, Node):
                parts.append(child.text_content())
            else:
                parts.append(child)
        return "".join(parts)

    # ── class attribute ───────────────────────────────────────────────────

    @property
    def classes(self) -> list[str]:
        return str(self.attrs.get("class") or "").split()

    def has_class(self, name: str) -> bool:
        return name in self.classes

    def toggle_class(self, name: str, on: bool) -> None:
        """Add or remove *name* from the class list (classList.toggle)."""
        classes = [c for c in self.classes if c != name]
        if on:
            classes.append(name)
        if classes:
            self.attrs["class"] = " ".join(classes)
        else:
            self.attrs.pop("class", None)


def h(tag: str, *children: Child | None, class_: str | None = None,
      attrs: dict[str, Any] | None = None) -> Node:
    """Build a Node; None children are dropped so optional parts read inline."""
    node_attrs: dict[str, Any] = {}
    if class_:
        node_attrs["class"] = class_
    if attrs:
        node_attrs.update(attrs)
    return Node(tag, node_attrs, [c for c in children if c is not None])


# ── HTML renderer ─────────────────────────────────────────────────────────────

def _render_attrs(attrs: dict[str, Any]) -> str:
    out: list[str] = []
    for name, value in attrs.items():
        if value is None or value is False:
            continue
        if value is True:
            out.append(f" {name}")
        else:
            out.append(f' {name}="{escape_html(value)}"')
    return "".join(out)


def _render(child: Child, out: list[str]) -> None:
    if not isinstance(child, Node):
        out.append(escape_html(child))
        return
    out.append(f"<{child.tag}{_render_attrs(child.attrs)}>")
    if child.tag in VOID_TAGS:
        return
    for grandchild in child.children:
        _render(grandchild, out)
    out.append(f"</{child.tag}>")


def render_html(tree: Child | Iterable[Child] | None) -> str:
    """Render a node, a text string, or a sequence of them to HTML."""
    if tree is None:
        return ""
    out: list[str] = []
    if isinstance(tree, (Node, str)):
        _render(tree, out)
    else:
        for child in tree:
            _render(child, out)
    return "".join(out)
