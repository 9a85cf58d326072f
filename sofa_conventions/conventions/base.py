"""Requirements shared by every SOFA file.

Every convention is derived from :data:`SOFA_BASE` with
:meth:`ConventionSchema.extend`; a file that satisfies no specific
convention may still be a valid generic SOFA file.

Position variables are 2-D or 3-D:

- Listener and Source: ``[I, C]`` (fixed), ``[M, C]`` (one per measurement),
  ``[I, C, M]`` or ``[M, C, I]``
- Receiver and Emitter: ``[R|E, C, I]``, ``[R|E, C, M]`` or ``[R|E, C]``
"""

from __future__ import annotations

import re
from typing import Any

from sofa_conventions.models import AttributeRule, ConventionSchema, VariableSpec
from sofa_conventions.units import CoordinateSystem, Units

DATA_TYPES: tuple[str, ...] = ("FIR", "TF", "SOS", "FIR-E", "TF-E")
ROOM_TYPES: tuple[str, ...] = ("free field", "reverberant", "shoebox")

ROLES: tuple[str, ...] = ("Listener", "Receiver", "Source", "Emitter")
KINDS: tuple[str, ...] = ("Position", "View", "Up")

ANY_COORDINATES: tuple[tuple[CoordinateSystem, Units], ...] = (
    (CoordinateSystem.CARTESIAN, Units.METRE),
    (CoordinateSystem.SPHERICAL, Units.SPHERICAL),
)
CARTESIAN_ONLY: tuple[tuple[CoordinateSystem, Units], ...] = (
    (CoordinateSystem.CARTESIAN, Units.METRE),
)
SPHERICAL_ONLY: tuple[tuple[CoordinateSystem, Units], ...] = (
    (CoordinateSystem.SPHERICAL, Units.SPHERICAL),
)

_VERSION_PATTERN = re.compile(r"^\d+(\.\d+)*$")


def is_version_string(value: Any) -> bool:
    return bool(_VERSION_PATTERN.match(str(value)))


def _signatures_for(role: str) -> tuple[tuple[str, ...], ...]:
    if role == "Receiver":
        return (("R", "C", "I"), ("R", "C", "M"), ("R", "C"))
    if role == "Emitter":
        return (("E", "C", "I"), ("E", "C", "M"), ("E", "C"))
    return (("I", "C"), ("M", "C"), ("I", "C", "M"), ("M", "C", "I"))


def position_spec(
    role: str,
    kind: str = "Position",
    *,
    required: bool = True,
    coordinates: tuple[tuple[CoordinateSystem, Units], ...] = ANY_COORDINATES,
    signatures: tuple[tuple[str, ...], ...] | None = None,
) -> VariableSpec:
    """Spec for ``{role}{kind}``; Up vectors share the View metadata."""
    if kind == "Up":
        return VariableSpec(
            name=f"{role}Up",
            signatures=signatures or _signatures_for(role),
            required=required,
            coordinates_from=f"{role}View",
        )
    return VariableSpec(
        name=f"{role}{kind}",
        signatures=signatures or _signatures_for(role),
        required=required,
        coordinates=coordinates,
    )


def required_attribute(name: str, **constraints: Any) -> AttributeRule:
    return AttributeRule(name=name, **constraints)


SOFA_BASE = ConventionSchema(
    name="SOFA",
    version="2.1",
    description="Generic AES69 file, no specific convention",
    attributes=(
        required_attribute("Conventions", equals="SOFA"),
        required_attribute("Version", check=is_version_string, description="a dotted version number"),
        required_attribute("SOFAConventions"),
        required_attribute("SOFAConventionsVersion", check=is_version_string, description="a dotted version number"),
        required_attribute("APIName"),
        required_attribute("APIVersion"),
        required_attribute("AuthorContact"),
        required_attribute("Organization"),
        required_attribute("License"),
        required_attribute("DataType", one_of=DATA_TYPES),
        required_attribute("RoomType", one_of=ROOM_TYPES),
        required_attribute("DateCreated"),
        required_attribute("DateModified"),
        required_attribute("Title"),
    ),
    variables=(
        position_spec("Listener"),
        position_spec("Receiver"),
        position_spec("Source"),
        position_spec("Emitter"),
        position_spec("Listener", "View", required=False),
        position_spec("Listener", "Up", required=False),
        position_spec("Receiver", "View", required=False),
        position_spec("Receiver", "Up", required=False),
        position_spec("Source", "View", required=False),
        position_spec("Source", "Up", required=False),
        position_spec("Emitter", "View", required=False),
        position_spec("Emitter", "Up", required=False),
    ),
    fixed_dimensions={"I": 1, "C": 3},
)


# Shared building blocks for the time- and frequency-domain conventions

FIR_VARIABLES: tuple[VariableSpec, ...] = (
    VariableSpec(name="Data.IR", signatures=(("M", "R", "N"),)),
    VariableSpec(
        name="Data.SamplingRate",
        signatures=(("I",), ("M",)),
        units=Units.HERTZ,
    ),
    VariableSpec(name="Data.Delay", signatures=(("I", "R"), ("M", "R"))),
)

TF_VARIABLES: tuple[VariableSpec, ...] = (
    VariableSpec(name="N", signatures=(("N",),), units=Units.HERTZ),
    VariableSpec(name="Data.Real", signatures=(("M", "R", "N"),)),
    VariableSpec(name="Data.Imag", signatures=(("M", "R", "N"),)),
)
