"""Filter rule models."""

import re
from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class FilterKind(str, Enum):
    """Shape of a filter as seen by the query builder."""

    STRING = "string"
    RANGE = "range"
    MULTI_SELECT = "multi_select"
    BOOLEAN = "boolean"


class ValidationRule(BaseModel):
    """Validation rule for a single filter field."""

    model_config = ConfigDict(frozen=True)

    type: Literal["string", "array", "boolean"]
    kind: FilterKind
    label: str | None = Field(None, description="Field label shown to users")
    required: bool = False
    max_length: int | None = Field(None, ge=1)
    max_items: int | None = Field(None, ge=1)
    item_type: Literal["string"] | None = None
    pattern: str | None = Field(None, description="Regular expression for strings")
    allowed_values: tuple[str, ...] | None = None

    @field_validator("pattern")
    @classmethod
    def validate_pattern(cls, v: str | None) -> str | None:
        """Reject patterns that do not compile."""
        if v is not None:
            try:
                re.compile(v)
            except re.error as e:
                raise ValueError(f"Invalid pattern {v!r}: {e}") from e
        return v

    @model_validator(mode="after")
    def check_kind_matches_type(self) -> "ValidationRule":
        """Multi-select filters are arrays, booleans are booleans."""
        expected = {
            FilterKind.MULTI_SELECT: "array",
            FilterKind.BOOLEAN: "boolean",
            FilterKind.STRING: "string",
            FilterKind.RANGE: "string",
        }[self.kind]
        if self.type != expected:
            raise ValueError(
                f"Filter kind '{self.kind.value}' requires type '{expected}', "
                f"got '{self.type}'"
            )
        return self

    def matches_pattern(self, value: str) -> bool:
        """Check a string value against the rule's pattern.

        The pattern must match the whole value, so a trailing newline is
        never accepted by a '$' anchor.
        """
        if self.pattern is None:
            return True
        return re.fullmatch(self.pattern, value) is not None


class RuleSet(BaseModel):
    """All filter rules plus the order in which filters are applied."""

    model_config = ConfigDict(frozen=True)

    rules: dict[str, ValidationRule]
    filter_order: tuple[str, ...] = Field(
        ..., description="Filter names, most selective first"
    )

    @model_validator(mode="after")
    def check_filter_order(self) -> "RuleSet":
        """Every ordered filter must have a rule."""
        unknown = [name for name in self.filter_order if name not in self.rules]
        if unknown:
            raise ValueError(f"filter_order names unknown filters: {unknown}")
        return self

    def get(self, name: str) -> ValidationRule | None:
        return self.rules.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self.rules

    def names_of_kind(self, kind: FilterKind) -> set[str]:
        """Names of all filters declared with the given kind."""
        return {name for name, rule in self.rules.items() if rule.kind == kind}

    def label_for(self, name: str) -> str:
        """User-facing label for a filter, falling back to its name."""
        rule = self.rules.get(name)
        if rule is not None and rule.label:
            return rule.label
        return name
