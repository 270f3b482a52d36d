"""
Pydantic response models for the JSON API.

These are read-side views of the loaded document, shaped for clients rather
than mirroring the input JSON.  Optional fields default to None so sparse
variables serialize cleanly.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from viewer.controller import ViewState
from viewer.grouping import group_label, sorted_group_labels
from viewer.models import Dataset, Variable
from viewer.rendering import step_label


# ── Sidebar models ────────────────────────────────────────────────────────────

class VariableSummaryOut(BaseModel):
    """A sidebar entry."""
    name: str = Field(..., description="Variable (column) name", examples=["age"])
    ontology_class: str | None = Field(None, description="Ontology class identifier", examples=["NCIT:C25150"])


class GroupOut(BaseModel):
    """A display group and its variables in display order."""
    label: str = Field(..., description="Aesthetic label, or 'Other'", examples=["Demographics"])
    variables: list[VariableSummaryOut] = Field(..., description="Variables sorted by name")


# ── Detail models ─────────────────────────────────────────────────────────────

class SchemaStepOut(BaseModel):
    """One schema-reconstruction step as displayed."""
    label: str = Field(..., description="Class label, else class id, else 'Group'", examples=["Age"])
    aesthetic_label: str | None = Field(None, examples=["Demographics"])
    predicate: str | None = Field(None, examples=["hasAge"])


class TermOut(BaseModel):
    """One value-mapping row."""
    local_value: str = Field(..., examples=["1"])
    target_class: str | None = Field(None, examples=["NCIT:C20197"])


class VariableOut(BaseModel):
    """Full detail for one variable."""
    name: str = Field(..., examples=["sex"])
    group: str = Field(..., description="Group the variable is listed under", examples=["Demographics"])
    predicate: str | None = None
    ontology_class: str | None = None
    local_definition: str | None = None
    schema_reconstruction: list[SchemaStepOut] = Field(default_factory=list)
    value_mapping: list[TermOut] | None = Field(None, description="None when the variable has no terms table")

    @classmethod
    def from_variable(cls, name: str, variable: Variable) -> "VariableOut":
        terms = variable.terms
        return cls(
            name=name,
            group=group_label(variable),
            predicate=variable.predicate,
            ontology_class=variable.class_,
            local_definition=variable.local_definition,
            schema_reconstruction=[
                SchemaStepOut(label=step_label(s), aesthetic_label=s.aesthetic_label,
                              predicate=s.predicate)
                for s in variable.schema_reconstruction
            ],
            value_mapping=None if terms is None else [
                TermOut(local_value=k, target_class=v.target_class if v else None)
                for k, v in terms.items()
            ],
        )


class StateOut(BaseModel):
    """Current view state of the page."""
    phase: str = Field(..., description="loading | success | failed", examples=["success"])
    database_name: str | None = None
    variable_count: int = Field(0, ge=0)
    group_count: int = Field(0, ge=0)
    selected: str | None = Field(None, description="Currently selected variable")
    error: str | None = None

    @classmethod
    def from_state(cls, state: ViewState) -> "StateOut":
        dataset = state.dataset
        return cls(
            phase=state.phase.value,
            database_name=dataset.database_name if dataset else None,
            variable_count=dataset.variable_count if dataset else 0,
            group_count=len(state.groups or {}),
            selected=state.selected,
            error=state.error,
        )


def groups_out(dataset: Dataset, groups: dict[str, list[str]]) -> list[GroupOut]:
    """GroupOut list in display order."""
    return [
        GroupOut(
            label=label,
            variables=[
                VariableSummaryOut(name=n, ontology_class=dataset.variables[n].class_)
                for n in groups[label]
            ],
        )
        for label in sorted_group_labels(groups)
    ]


# ── Error model ───────────────────────────────────────────────────────────────

class ErrorResponse(BaseModel):
    """Standard error response body."""
    error: str = Field(..., description="Short error category", examples=["Bad request"])
    detail: str | None = Field(None, description="Extended error detail")
    status_code: int = Field(..., ge=400, le=599, description="HTTP status code", examples=[400])
