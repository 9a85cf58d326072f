"""Typed read/write access to SOFA variables."""

from sofa_conventions.accessors.data import DataAccessors
from sofa_conventions.accessors.positions import (
    Kind,
    PositionAccessors,
    Role,
    position_variable_name,
)

__all__ = [
    "DataAccessors",
    "PositionAccessors",
    "Kind",
    "Role",
    "position_variable_name",
]
