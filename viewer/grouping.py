"""Grouping engine: bucket variables by their first aesthetic label.

Group keys come out in first-seen order; display order is a separate concern
handled by sorted_group_labels().  Variable names inside a group are always
sorted, so the table is the same whatever order the JSON listed them in.
"""

from __future__ import annotations

from collections.abc import Mapping

from utils.config import FALLBACK_GROUP
from utils.strings import is_present
from viewer.models import GroupTable, Variable


def group_label(variable: Variable) -> str:
    """Return the group a variable belongs to.

    Only the first schema-reconstruction step counts; labels on later steps
    are ignored.
    """
    step = variable.first_step
    if step is not None and is_present(step.aesthetic_label):
        return step.aesthetic_label
    return FALLBACK_GROUP


def group_by_aesthetic_label(variables: Mapping[str, Variable]) -> GroupTable:
    """Build the GroupTable for a variable mapping.

    Every name lands in exactly one group and no group is empty.  Names are
    sorted ordinally (case-sensitive) within each group.

    Args:
        variables: VariableName -> Variable, possibly empty.

    Returns:
        dict mapping group label -> sorted list of variable names.
    """
    groups: GroupTable = {}
    for name, variable in variables.items():
        groups.setdefault(group_label(variable), []).append(name)

    for names in groups.values():
        names.sort()

    return groups


def sorted_group_labels(groups: GroupTable) -> list[str]:
    """Group labels in display order (lexicographic)."""
    return sorted(groups)


def first_variable(groups: GroupTable) -> str | None:
    """First variable in group-then-variable display order, or None."""
    for label in sorted_group_labels(groups):
        if groups[label]:
            return groups[label][0]
    return None
