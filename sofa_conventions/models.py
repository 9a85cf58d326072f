"""Pydantic models describing what a convention requires of a file.

These are plain data. The shared validation algorithm lives in
:mod:`sofa_conventions.validation`; a convention is nothing more than a
:class:`ConventionSchema` instance.
"""

from __future__ import annotations

from typing import Any, Callable, Iterable, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from sofa_conventions.units import CoordinateSystem, Units

# M measurements, R receivers, E emitters, N samples or frequencies,
# I singleton, C coordinate triplet, S string length
DIMENSION_LETTERS: tuple[str, ...] = ("M", "R", "E", "N", "I", "C", "S")

ElementType = Literal["double", "float", "int", "char", "string"]


class Dimension(BaseModel):
    """Resolved size of one dimension letter and where it was first seen."""

    model_config = ConfigDict(frozen=True)

    letter: str
    size: int = Field(ge=0)
    source: Optional[str] = None

    @field_validator("letter")
    @classmethod
    def validate_letter(cls, value: str) -> str:
        if value not in DIMENSION_LETTERS:
            raise ValueError(f"letter must be one of {DIMENSION_LETTERS}, got {value!r}")
        return value


class AttributeRule(BaseModel):
    """A required global attribute, optionally constrained in value."""

    model_config = ConfigDict(frozen=True)

    name: str
    equals: Optional[str] = None
    one_of: Optional[tuple[str, ...]] = None
    check: Optional[Callable[[Any], bool]] = None
    description: Optional[str] = None

    def accepts(self, value: Any) -> bool:
        text = str(value)
        if self.equals is not None and text != self.equals:
            return False
        if self.one_of is not None and text not in self.one_of:
            return False
        if self.check is not None and not self.check(value):
            return False
        return True

    def expectation(self) -> str:
        """Human-readable description of the accepted values."""
        if self.description:
            return self.description
        if self.equals is not None:
            return repr(self.equals)
        if self.one_of is not None:
            return "one of " + ", ".join(repr(v) for v in self.one_of)
        return "a valid value"


class VariableSpec(BaseModel):
    """Expected shape and metadata of one named variable.

    ``signatures`` lists the allowed dimension-letter signatures; the first
    one is canonical and is what new files are created with.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    signatures: tuple[tuple[str, ...], ...]
    element_type: ElementType = "double"
    required: bool = True
    coordinates: Optional[tuple[tuple[CoordinateSystem, Units], ...]] = None
    coordinates_from: Optional[str] = None
    units: Optional[Units] = None

    @field_validator("signatures")
    @classmethod
    def validate_signatures(
        cls, value: tuple[tuple[str, ...], ...]
    ) -> tuple[tuple[str, ...], ...]:
        if not value:
            raise ValueError("at least one dimension signature is required")
        for signature in value:
            unknown = [letter for letter in signature if letter not in DIMENSION_LETTERS]
            if unknown:
                raise ValueError(f"unknown dimension letters {unknown} in {signature}")
        return value

    @property
    def signature(self) -> tuple[str, ...]:
        return self.signatures[0]

    @property
    def ranks(self) -> tuple[int, ...]:
        return tuple(sorted({len(s) for s in self.signatures}))

    def signatures_for_rank(self, rank: int) -> list[tuple[str, ...]]:
        return [s for s in self.signatures if len(s) == rank]

    @property
    def is_positional(self) -> bool:
        return self.coordinates is not None or self.coordinates_from is not None

    def default_coordinates(self) -> Optional[tuple[CoordinateSystem, Units]]:
        return self.coordinates[0] if self.coordinates else None


def _merge(base: Iterable[Any], overrides: Iterable[Any]) -> tuple[Any, ...]:
    """Replace same-named entries in place and append new ones."""
    merged = {item.name: item for item in base}
    for item in overrides:
        merged[item.name] = item
    return tuple(merged.values())


class ConventionSchema(BaseModel):
    """Everything a convention requires: attributes, variables, dimensions."""

    model_config = ConfigDict(frozen=True)

    name: str
    version: str = "1.0"
    description: str = ""
    attributes: tuple[AttributeRule, ...] = ()
    variables: tuple[VariableSpec, ...] = ()
    fixed_dimensions: dict[str, int] = Field(default_factory=dict)
    matching_shapes: tuple[tuple[str, str], ...] = ()

    def variable(self, name: str) -> Optional[VariableSpec]:
        for spec in self.variables:
            if spec.name == name:
                return spec
        return None

    def attribute(self, name: str) -> Optional[AttributeRule]:
        for rule in self.attributes:
            if rule.name == name:
                return rule
        return None

    @property
    def required_variables(self) -> tuple[VariableSpec, ...]:
        return tuple(spec for spec in self.variables if spec.required)

    def extend(
        self,
        name: str,
        *,
        version: str = "1.0",
        description: str = "",
        attributes: Iterable[AttributeRule] = (),
        variables: Iterable[VariableSpec] = (),
        fixed_dimensions: Optional[dict[str, int]] = None,
        matching_shapes: Iterable[tuple[str, str]] = (),
    ) -> "ConventionSchema":
        """Derive a new schema; same-named rules replace the inherited ones."""
        return ConventionSchema(
            name=name,
            version=version,
            description=description,
            attributes=_merge(self.attributes, attributes),
            variables=_merge(self.variables, variables),
            fixed_dimensions={**self.fixed_dimensions, **(fixed_dimensions or {})},
            matching_shapes=tuple(self.matching_shapes) + tuple(matching_shapes),
        )
