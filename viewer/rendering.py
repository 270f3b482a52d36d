"""
Node-tree composition for the sidebar list, the detail panel, and the header.

These functions are pure: they read the typed document model and return
fresh Node trees.  Which entry is active, and what a click on an entry does,
is decided by the caller (viewer/controller.py).

Sidebar entry layout::

    div.group
      div.group-title         "Demographics"
      ul.var-list
        li.var-item[data-var-name]
          div.var-name        "age"
          div.var-label       "Class: NCIT:C25150"   (only when class is set)

Detail panel layout: a header card, then an optional "Schema reconstruction"
card, then an optional "Value mappings" card.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from utils.config import DEFAULT_STEP_LABEL, PLACEHOLDER
from utils.strings import is_present, or_placeholder
from viewer.grouping import sorted_group_labels
from viewer.models import Dataset, GroupTable, SchemaStep, Variable
from viewer.nodes import Node, h

# Extra attributes for a list entry, e.g. the HTMX hooks a host attaches.
EntryAttrs = Callable[[str], Mapping[str, Any]]

ACTIVE_CLASS = "active"


def header_summary(dataset: Dataset) -> str:
    """Header text: '<database name> · <N> variables'."""
    return f"{dataset.database_name or ''} · {dataset.variable_count} variables"


# ── Sidebar ───────────────────────────────────────────────────────────────────

def build_entry(name: str, variable: Variable,
                entry_attrs: EntryAttrs | None = None) -> Node:
    """One selectable sidebar entry."""
    attrs: dict[str, Any] = {"data-var-name": name}
    if entry_attrs is not None:
        attrs.update(entry_attrs(name))
    label = None
    if is_present(variable.class_):
        label = h("div", f"Class: {variable.class_}", class_="var-label")
    return h("li", h("div", name, class_="var-name"), label,
             class_="var-item", attrs=attrs)


def build_group_list(groups: GroupTable, variables: Mapping[str, Variable],
                     entry_attrs: EntryAttrs | None = None) -> list[Node]:
    """Sidebar nodes: groups in lexicographic order, names in table order."""
    nodes: list[Node] = []
    for label in sorted_group_labels(groups):
        items = h("ul", class_="var-list")
        for name in groups[label]:
            items.append(build_entry(name, variables[name], entry_attrs))
        nodes.append(h("div", h("div", label, class_="group-title"), items,
                       class_="group"))
    return nodes


def entries(nodes: list[Node]) -> list[Node]:
    """All var-item entries under *nodes*, in display order."""
    found: list[Node] = []
    for node in nodes:
        found.extend(node.find_by_class("var-item"))
    return found


def set_active_entry(nodes: list[Node], name: str | None) -> None:
    """Mark the entry for *name* active and every other entry inactive."""
    for entry in entries(nodes):
        entry.toggle_class(ACTIVE_CLASS, entry.attrs.get("data-var-name") == name)


# ── Detail panel ──────────────────────────────────────────────────────────────

def make_badge(label: str, value: str) -> Node:
    return h("span", h("strong", f"{label}:"), " ", h("code", value),
             class_="badge")


def _header_card(name: str, variable: Variable) -> Node:
    card = h("div",
             h("h2", name),
             h("div",
               make_badge("Predicate", or_placeholder(variable.predicate, PLACEHOLDER)),
               make_badge("Class", or_placeholder(variable.class_, PLACEHOLDER)),
               class_="muted"),
             class_="card")
    if is_present(variable.local_definition):
        card.append(h("p", variable.local_definition, class_="definition"))
    return card


def step_label(step: SchemaStep) -> str:
    """Primary label for a step: class label, else class id, else 'Group'."""
    if is_present(step.class_label):
        return step.class_label
    if is_present(step.class_id):
        return step.class_id
    return DEFAULT_STEP_LABEL


def _schema_item(step: SchemaStep) -> Node:
    item = h("li", h("strong", step_label(step)))
    if is_present(step.aesthetic_label):
        item.append(" ")
        item.append(h("span", step.aesthetic_label, class_="pill"))
    if is_present(step.predicate):
        item.append(h("br"))
        item.append(h("span", f"via {step.predicate}", class_="muted"))
    return item


def _schema_card(steps: list[SchemaStep]) -> Node:
    return h("div",
             h("h3", "Schema reconstruction"),
             h("ul", *[_schema_item(step) for step in steps], class_="schema-steps"),
             class_="card schema-card")


def _mapping_card(terms: Mapping[str, Any]) -> Node:
    body = h("tbody")
    for local_value, cfg in terms.items():
        target = cfg.target_class if cfg is not None else None
        body.append(h("tr",
                      h("td", local_value),
                      h("td", h("code", or_placeholder(target, PLACEHOLDER)))))
    table = h("table",
              h("thead", h("tr", h("th", "Local value"), h("th", "Ontology class"))),
              body)
    return h("div", h("h3", "Value mappings"), table, class_="card mapping-card")


def build_detail(name: str, variable: Variable) -> list[Node]:
    """Detail panel nodes for one variable.

    The header card is always present.  The schema card appears only for a
    non-empty schema_reconstruction; the mapping card whenever
    value_mapping.terms exists, an empty table included.
    """
    nodes = [_header_card(name, variable)]
    if variable.schema_reconstruction:
        nodes.append(_schema_card(variable.schema_reconstruction))
    if variable.terms is not None:
        nodes.append(_mapping_card(variable.terms))
    return nodes
