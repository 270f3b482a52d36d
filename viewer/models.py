"""
Pydantic document model for data_semantic_map.json.

Every field the document may omit is Optional and defaults to None (or an
empty container), so a sparse document validates while a wrongly-typed one
fails fast.  Field aliases carry the snake_case JSON keys; ``class`` is a
Python keyword and surfaces as ``class_`` / ``class_id``.

Unknown keys are ignored.  Empty strings are kept verbatim; the display code
treats them the same as absent values.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from viewer.errors import ParseError

# Group label -> alphabetically sorted variable names.
GroupTable = dict[str, list[str]]


class _DocumentModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)


# ── Leaf records ──────────────────────────────────────────────────────────────

class SchemaStep(_DocumentModel):
    """One node in a variable's reconstructed ontological path."""
    class_label: str | None = Field(None, description="Human-readable ontology class label", examples=["Age"])
    class_id: str | None = Field(None, alias="class", description="Ontology class identifier, shown when no label", examples=["NCIT:C25150"])
    predicate: str | None = Field(None, description="Predicate linking this step to the previous one", examples=["hasAge"])
    aesthetic_label: str | None = Field(None, description="Display category used for grouping", examples=["Demographics"])


class TermMapping(_DocumentModel):
    """Ontology target for one local value."""
    target_class: str | None = Field(None, description="Ontology class the local value maps to", examples=["NCIT:C20197"])


class ValueMapping(_DocumentModel):
    """Local-value to ontology-term table; insertion order is display order."""
    terms: dict[str, TermMapping | None] | None = Field(None, description="Mapping keyed by raw local value")


# ── Variable + dataset ────────────────────────────────────────────────────────

class Variable(_DocumentModel):
    """One dataset column and its semantic annotations."""
    predicate: str | None = Field(None, examples=["hasUnit"])
    class_: str | None = Field(None, alias="class", description="Ontology class identifier", examples=["NCIT:C1"])
    local_definition: str | None = Field(None, description="Free-text definition from the data owner")
    schema_reconstruction: list[SchemaStep] = Field(default_factory=list)
    value_mapping: ValueMapping | None = None

    @field_validator("schema_reconstruction", mode="before")
    @classmethod
    def _null_schema_is_empty(cls, value: Any) -> Any:
        return [] if value is None else value

    @property
    def first_step(self) -> SchemaStep | None:
        return self.schema_reconstruction[0] if self.schema_reconstruction else None

    @property
    def terms(self) -> dict[str, TermMapping | None] | None:
        """Value-mapping terms, or None when the variable carries no table."""
        if self.value_mapping is None:
            return None
        return self.value_mapping.terms


class Dataset(_DocumentModel):
    """Top-level document: an optional name plus the variable mapping."""
    database_name: str | None = Field(None, description="Display name of the source database", examples=["cohort_2024"])
    variables: dict[str, Variable] = Field(default_factory=dict, alias="variable_info")

    @field_validator("variables", mode="before")
    @classmethod
    def _null_variables_is_empty(cls, value: Any) -> Any:
        return {} if value is None else value

    @property
    def variable_count(self) -> int:
        return len(self.variables)


def parse_dataset(raw: Any) -> Dataset:
    """Validate a decoded JSON value into a Dataset.

    Args:
        raw: Result of json.loads() on the document body.

    Returns:
        The typed Dataset.

    Raises:
        ParseError: If the value does not match the document schema.
    """
    try:
        return Dataset.model_validate(raw)
    except ValidationError as exc:
        first = exc.errors()[0]
        loc = ".".join(str(part) for part in first["loc"]) or "<root>"
        raise ParseError(
            f"Unexpected document structure at {loc}: {first['msg']}"
        ) from exc
