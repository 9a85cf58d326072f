"""Coordinate systems and physical units used by SOFA position metadata.

Every position-bearing variable carries a ``Type`` attribute (the coordinate
system) and a ``Units`` attribute. Names are matched exactly, including case.
Common spellings found in the wild (``meter``, ``metres``...) are listed as
explicit aliases rather than matched loosely.
"""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Iterable, Mapping

from sofa_conventions.errors import UnknownCoordinateSystem, UnknownUnit

__all__ = [
    "CoordinateSystem",
    "Units",
    "DEFAULT_UNITS",
    "get_coordinate_system",
    "get_coordinate_system_name",
    "get_units",
    "get_units_name",
    "is_known_units",
]


class CoordinateSystem(str, Enum):
    CARTESIAN = "cartesian"
    SPHERICAL = "spherical"
    SPHERICAL_HARMONICS = "spherical harmonics"


class Units(str, Enum):
    METRE = "metre"
    CUBIC_METRE = "cubic metre"
    HERTZ = "hertz"
    SAMPLES = "samples"
    KELVIN = "kelvin"
    DEGREE = "degree"
    SPHERICAL = "degree, degree, metre"  # azimuth, elevation, radius


_UNIT_ALIASES: dict[Units, Iterable[str]] = {
    Units.METRE: (Units.METRE.value, "meter", "metres", "meters"),
    Units.CUBIC_METRE: (Units.CUBIC_METRE.value, "cubic meter", "cubic metres", "cubic meters"),
    Units.HERTZ: (Units.HERTZ.value,),
    Units.SAMPLES: (Units.SAMPLES.value,),
    Units.KELVIN: (Units.KELVIN.value,),
    Units.DEGREE: (Units.DEGREE.value, "degrees"),
    Units.SPHERICAL: (
        Units.SPHERICAL.value,
        "degree, degree, meter",
        "degrees, degrees, metre",
        "degrees, degrees, meter",
    ),
}

_COORDINATE_ALIASES: dict[CoordinateSystem, Iterable[str]] = {
    CoordinateSystem.CARTESIAN: (CoordinateSystem.CARTESIAN.value,),
    CoordinateSystem.SPHERICAL: (CoordinateSystem.SPHERICAL.value,),
    CoordinateSystem.SPHERICAL_HARMONICS: (CoordinateSystem.SPHERICAL_HARMONICS.value,),
}


def _invert(aliases: Mapping[Enum, Iterable[str]]) -> Mapping[str, Enum]:
    table: dict[str, Enum] = {}
    for member, names in aliases.items():
        for name in names:
            table[name] = member
    return MappingProxyType(table)


_UNITS_BY_NAME: Mapping[str, Units] = _invert(_UNIT_ALIASES)
_COORDINATES_BY_NAME: Mapping[str, CoordinateSystem] = _invert(_COORDINATE_ALIASES)

DEFAULT_UNITS: Mapping[CoordinateSystem, Units] = MappingProxyType(
    {
        CoordinateSystem.CARTESIAN: Units.METRE,
        CoordinateSystem.SPHERICAL: Units.SPHERICAL,
        CoordinateSystem.SPHERICAL_HARMONICS: Units.SPHERICAL,
    }
)


def get_units(name: str) -> Units:
    """Look up units by name.

    Raises:
        UnknownUnit: If the name is not a known spelling.
    """
    try:
        return _UNITS_BY_NAME[name]
    except (KeyError, TypeError):
        raise UnknownUnit(str(name)) from None


def get_units_name(units: Units) -> str:
    """Canonical name written to files for ``units``."""
    return Units(units).value


def is_known_units(name: str) -> bool:
    return name in _UNITS_BY_NAME


def get_coordinate_system(name: str) -> CoordinateSystem:
    """Look up a coordinate system by name.

    Raises:
        UnknownCoordinateSystem: If the name is not recognized.
    """
    try:
        return _COORDINATES_BY_NAME[name]
    except (KeyError, TypeError):
        raise UnknownCoordinateSystem(str(name)) from None


def get_coordinate_system_name(coordinates: CoordinateSystem) -> str:
    return CoordinateSystem(coordinates).value
