"""Typed, convention-checked access to AES69 (SOFA) acoustic measurement files.

A SOFA file is a netCDF-4 file holding the positions of listeners, sources,
receivers and emitters together with impulse responses or transfer functions.
Each file declares a convention (``SOFAConventions``) fixing which variables
must exist, their dimensions and their coordinate metadata.

Usage:
    from sofa_conventions import open_file, list_supported_conventions

    with open_file("hrtf.sofa") as sofa:
        result = sofa.validate()
        coordinates, units = sofa.get_position("Source")
        positions = sofa.get_position_values("Source", ndim=2)
"""

__version__ = "0.1.0"

from sofa_conventions.conventions import get_convention, list_supported_conventions
from sofa_conventions.errors import (
    ConventionViolation,
    DimensionConflict,
    ElementTypeMismatch,
    FileClosedError,
    InvalidAttribute,
    MissingAttribute,
    MissingVariable,
    OpenError,
    ShapeMismatch,
    SofaError,
    StoreIOError,
    UnknownConvention,
    UnknownCoordinateSystem,
    UnknownUnit,
)
from sofa_conventions.file import SofaFile, is_valid_convention, open_file
from sofa_conventions.indexing import FlatBuffer, flatten_index, unflatten_index
from sofa_conventions.units import CoordinateSystem, Units
from sofa_conventions.validation import ValidationResult, validate

__all__ = [
    "__version__",
    # file
    "SofaFile",
    "open_file",
    "is_valid_convention",
    # conventions
    "get_convention",
    "list_supported_conventions",
    "validate",
    "ValidationResult",
    # values
    "FlatBuffer",
    "flatten_index",
    "unflatten_index",
    "CoordinateSystem",
    "Units",
    # errors
    "SofaError",
    "OpenError",
    "FileClosedError",
    "StoreIOError",
    "UnknownConvention",
    "ConventionViolation",
    "MissingAttribute",
    "InvalidAttribute",
    "MissingVariable",
    "ShapeMismatch",
    "DimensionConflict",
    "ElementTypeMismatch",
    "UnknownUnit",
    "UnknownCoordinateSystem",
]
