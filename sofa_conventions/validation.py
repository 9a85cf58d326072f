"""Check a file against a convention schema.

One algorithm serves every convention, in a fixed order:

1. Required global attributes exist and hold an accepted value.
2. Each variable spec, in schema order: presence, rank, dimension sizes
   (through the :class:`~sofa_conventions.dimensions.DimensionRegistry`),
   element type and coordinate/units metadata.
3. Convention extras: fixed dimension sizes and pairs of variables that must
   share a shape.

The first violation found is reported. Validation only reads; a file that
opens always yields a :class:`ValidationResult`, never a violation error.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional, Union

from sofa_conventions.conventions import get_convention
from sofa_conventions.dimensions import DimensionRegistry
from sofa_conventions.errors import (
    ConventionViolation,
    ElementTypeMismatch,
    InvalidAttribute,
    MissingAttribute,
    MissingVariable,
    ShapeMismatch,
)
from sofa_conventions.models import ConventionSchema, VariableSpec
from sofa_conventions.store import GLOBAL, NetCDFStore
from sofa_conventions.units import get_coordinate_system, get_units

if TYPE_CHECKING:
    from sofa_conventions.file import SofaFile

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ValidationResult:
    """Verdict of :func:`validate`.

    Attributes:
        valid: True if the file satisfies the convention.
        convention: Name of the convention checked.
        violation: The first violation found, or None.
    """

    valid: bool
    convention: str
    violation: Optional[ConventionViolation] = None

    def __bool__(self) -> bool:
        return self.valid

    @property
    def message(self) -> str:
        if self.violation is None:
            return f"valid '{self.convention}' file"
        return str(self.violation)


def validate(
    file: Union["SofaFile", NetCDFStore],
    convention: Union[str, ConventionSchema],
) -> ValidationResult:
    """Validate an open file against a convention.

    Args:
        file: An open SofaFile or a bare store.
        convention: Convention name or schema.

    Returns:
        ValidationResult with the first violation found, if any.

    Raises:
        UnknownConvention: If ``convention`` names no registered convention.
        StoreIOError: If the store itself fails while being read.
    """
    schema = get_convention(convention) if isinstance(convention, str) else convention
    store = file if isinstance(file, NetCDFStore) else file.store
    try:
        check_convention(store, schema)
    except ConventionViolation as violation:
        logger.debug("%s is not a valid %s file: %s", store.path, schema.name, violation)
        return ValidationResult(valid=False, convention=schema.name, violation=violation)
    return ValidationResult(valid=True, convention=schema.name)


def check_convention(store: NetCDFStore, schema: ConventionSchema) -> DimensionRegistry:
    """Raise the first violation of ``schema`` in ``store``.

    Returns:
        The registry of dimension sizes resolved along the way.
    """
    _check_attributes(store, schema)
    registry = DimensionRegistry.from_store(store, schema.fixed_dimensions)
    for spec in schema.variables:
        _check_variable(store, spec, registry)
    _check_fixed_dimensions(registry, schema)
    _check_matching_shapes(store, schema)
    return registry


def _check_attributes(store: NetCDFStore, schema: ConventionSchema) -> None:
    attributes = store.list_attributes(GLOBAL)
    for rule in schema.attributes:
        if rule.name not in attributes:
            raise MissingAttribute(rule.name)
        value = attributes[rule.name]
        if not rule.accepts(value):
            raise InvalidAttribute(rule.name, value, rule.expectation())


def _check_variable(store: NetCDFStore, spec: VariableSpec, registry: DimensionRegistry) -> None:
    if not store.has_variable(spec.name):
        if spec.required:
            raise MissingVariable(spec.name)
        return

    shape = store.get_variable_shape(spec.name)
    signature = registry.choose_signature(spec, shape)
    if signature is None:
        ranks = " or ".join(str(rank) for rank in spec.ranks)
        raise ShapeMismatch(
            spec.name,
            expected=spec.ranks,
            found=len(shape),
            message=f"Variable '{spec.name}' has rank {len(shape)}, expected {ranks}",
        )
    registry.observe(spec.name, signature, shape)

    element_type = store.get_element_type(spec.name)
    if element_type != spec.element_type:
        raise ElementTypeMismatch(spec.name, spec.element_type, element_type)

    attributes = store.list_attributes(spec.name)
    if spec.coordinates is not None:
        _check_coordinates(spec, attributes)
    if spec.units is not None:
        units_name = f"{spec.name}:Units"
        if "Units" not in attributes:
            raise MissingAttribute(units_name)
        units = get_units(attributes["Units"])
        if units != spec.units:
            raise InvalidAttribute(units_name, attributes["Units"], repr(spec.units.value))


def _check_coordinates(spec: VariableSpec, attributes: dict) -> None:
    for key in ("Type", "Units"):
        if key not in attributes:
            raise MissingAttribute(f"{spec.name}:{key}")
    coordinates = get_coordinate_system(attributes["Type"])
    units = get_units(attributes["Units"])
    if (coordinates, units) not in spec.coordinates:
        allowed = ", ".join(f"{c.value} in {u.value}" for c, u in spec.coordinates)
        raise InvalidAttribute(
            f"{spec.name}:Type",
            f"{coordinates.value} in {units.value}",
            f"one of: {allowed}",
        )


def _check_fixed_dimensions(registry: DimensionRegistry, schema: ConventionSchema) -> None:
    for letter, size in schema.fixed_dimensions.items():
        found = registry.size(letter)
        if found is not None and found != size:
            raise ShapeMismatch(
                letter,
                expected=size,
                found=found,
                message=f"{schema.name} requires dimension '{letter}' = {size}, found {found}",
            )


def _check_matching_shapes(store: NetCDFStore, schema: ConventionSchema) -> None:
    for first, second in schema.matching_shapes:
        first_shape = store.get_variable_shape(first)
        second_shape = store.get_variable_shape(second)
        if first_shape != second_shape:
            raise ShapeMismatch(
                second,
                expected=first_shape,
                found=second_shape,
                message=f"'{second}' has shape {second_shape}, '{first}' has {first_shape}",
            )
