"""Create new SOFA files laid out for a given convention.

:func:`create_file` writes the dimensions, the required global attributes
and every required variable (zero-filled, with default coordinate metadata)
so that the result validates against the convention. Values are then filled
in through the accessors of a file opened in ``"a"`` mode.
"""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Mapping, Optional, Union

from sofa_conventions import __version__
from sofa_conventions.conventions import get_convention
from sofa_conventions.errors import ShapeMismatch
from sofa_conventions.models import ConventionSchema, VariableSpec
from sofa_conventions.store import NetCDFStore
from sofa_conventions.units import get_coordinate_system_name, get_units_name

logger = logging.getLogger(__name__)

DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def default_attributes(schema: ConventionSchema) -> dict[str, str]:
    """Placeholder global attributes that satisfy ``schema``."""
    now = datetime.now().strftime(DATE_FORMAT)
    attributes = {
        "Conventions": "SOFA",
        "Version": "2.1",
        "SOFAConventions": schema.name,
        "SOFAConventionsVersion": schema.version,
        "APIName": "sofa_conventions",
        "APIVersion": __version__,
        "AuthorContact": "",
        "Organization": "",
        "License": "No license provided, ask the author for permission",
        "DataType": "FIR",
        "RoomType": "free field",
        "DateCreated": now,
        "DateModified": now,
        "Title": "",
    }
    for rule in schema.attributes:
        if rule.equals is not None:
            attributes[rule.name] = rule.equals
        elif rule.name not in attributes:
            attributes[rule.name] = rule.one_of[0] if rule.one_of else ""
    return attributes


def _signature_for(spec: VariableSpec, sizes: Mapping[str, int]) -> tuple[str, ...]:
    for signature in spec.signatures:
        if all(letter in sizes for letter in signature):
            return signature
    raise ShapeMismatch(
        spec.name,
        expected=spec.signature,
        found=None,
        message=f"No size given for the dimensions of '{spec.name}' {spec.signature}",
    )


def create_file(
    path: Union[str, Path],
    convention: Union[str, ConventionSchema],
    dimensions: Mapping[str, int],
    attributes: Optional[Mapping[str, Any]] = None,
    signatures: Optional[Mapping[str, tuple[str, ...]]] = None,
) -> Path:
    """Create an empty SOFA file for ``convention``.

    Args:
        path: Output path; overwritten if it exists.
        convention: Convention name or schema.
        dimensions: Sizes of M, R, E, N (and S if needed); I=1 and C=3 are
            added unless given.
        attributes: Global attributes overriding the placeholders.
        signatures: Per-variable signature overrides, e.g.
            ``{"ListenerPosition": ("M", "C")}``.

    Returns:
        The path written.
    """
    schema = get_convention(convention) if isinstance(convention, str) else convention
    sizes = {**schema.fixed_dimensions, **dict(dimensions)}
    overrides = dict(signatures or {})

    with NetCDFStore(path, "w") as store:
        for name, value in {**default_attributes(schema), **dict(attributes or {})}.items():
            store.set_attribute(name, value)
        for letter, size in sizes.items():
            store.create_dimension(letter, size)

        for spec in schema.required_variables:
            signature = overrides.get(spec.name) or _signature_for(spec, sizes)
            store.create_variable(spec.name, signature)
            store.write_typed(spec.name, [0.0] * _count(signature, sizes))
            _write_default_metadata(store, spec)

        logger.debug("Created %s file %s with dimensions %s", schema.name, path, sizes)
    return Path(path)


def _count(signature: tuple[str, ...], sizes: Mapping[str, int]) -> int:
    count = 1
    for letter in signature:
        count *= sizes[letter]
    return count


def _write_default_metadata(store: NetCDFStore, spec: VariableSpec) -> None:
    default = spec.default_coordinates()
    if default is not None:
        coordinates, units = default
        store.set_attribute("Type", get_coordinate_system_name(coordinates), scope=spec.name)
        store.set_attribute("Units", get_units_name(units), scope=spec.name)
    if spec.units is not None:
        store.set_attribute("Units", get_units_name(spec.units), scope=spec.name)
