"""Typed filter models.

Raw filter mappings coming from the search form are duck-typed. These models
give each filter kind an explicit shape so a malformed filter fails when it
is constructed rather than while a query is being built.
"""

from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictStr

from .rules import FilterKind, RuleSet


def is_empty_value(value: Any) -> bool:
    """Whether a filter value counts as "not set".

    ``None``, the empty string and the empty list are empty. ``False`` is a
    value.
    """
    if value is None or value == "":
        return True
    return isinstance(value, list | tuple) and len(value) == 0


class _BaseFilter(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Filter field name")


class StringFilter(_BaseFilter):
    """Free-text or single-choice filter."""

    kind: Literal["string"] = "string"
    value: StrictStr


class RangeFilter(_BaseFilter):
    """Numeric bucket filter such as ``10000000-50000000`` or ``1000000+``."""

    kind: Literal["range"] = "range"
    value: StrictStr

    @property
    def bounds(self) -> tuple[int, int | None]:
        """Lower and upper bound; the upper bound is None for open ranges."""
        if self.value.endswith("+"):
            return int(self.value[:-1]), None
        low, _, high = self.value.partition("-")
        return int(low), int(high) if high else int(low)


class MultiSelectFilter(_BaseFilter):
    """Filter matching any of several values."""

    kind: Literal["multi_select"] = "multi_select"
    values: list[StrictStr]


class BooleanFilter(_BaseFilter):
    """Yes/no filter."""

    kind: Literal["boolean"] = "boolean"
    value: StrictBool


SearchFilter = Annotated[
    StringFilter | RangeFilter | MultiSelectFilter | BooleanFilter,
    Field(discriminator="kind"),
]


class FilterSet(BaseModel):
    """An ordered collection of typed filters."""

    filters: list[SearchFilter] = Field(default_factory=list)

    @classmethod
    def from_mapping(cls, mapping: dict[str, Any], rules: RuleSet) -> "FilterSet":
        """Build typed filters from a raw name/value mapping.

        Empty entries are skipped. Filters without a rule are kept as string
        filters so validation can still report them.
        """
        filters = []
        for name, value in mapping.items():
            if is_empty_value(value):
                continue
            rule = rules.get(name)
            kind = rule.kind if rule is not None else FilterKind.STRING
            if kind == FilterKind.MULTI_SELECT:
                filters.append({"kind": kind.value, "name": name, "values": value})
            else:
                filters.append({"kind": kind.value, "name": name, "value": value})
        return cls.model_validate({"filters": filters})

    def to_mapping(self) -> dict[str, Any]:
        """Convert back to a plain mapping, preserving order."""
        mapping: dict[str, Any] = {}
        for f in self.filters:
            mapping[f.name] = list(f.values) if isinstance(f, MultiSelectFilter) else f.value
        return mapping

    def names(self) -> list[str]:
        return [f.name for f in self.filters]
