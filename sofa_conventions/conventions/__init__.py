"""Supported SOFA conventions.

Each convention is a :class:`~sofa_conventions.models.ConventionSchema`
derived from the generic SOFA requirements, registered by name.

Usage:
    from sofa_conventions.conventions import get_convention

    schema = get_convention("FreeFieldDirectivityTF")
    schema.variable("Data.Real").signature  # ("M", "R", "N")
"""

from sofa_conventions.conventions.base import KINDS, ROLES, SOFA_BASE
from sofa_conventions.conventions.free_field import (
    FREE_FIELD_DIRECTIVITY_TF,
    SIMPLE_FREE_FIELD_HRIR,
    SIMPLE_FREE_FIELD_TF,
)
from sofa_conventions.conventions.general import GENERAL_FIR, GENERAL_TF
from sofa_conventions.conventions.headphone import SIMPLE_HEADPHONE_IR
from sofa_conventions.conventions.registry import (
    find_variable_spec,
    get_convention,
    list_supported_conventions,
    register_convention,
)

__all__ = [
    "KINDS",
    "ROLES",
    "SOFA_BASE",
    "GENERAL_FIR",
    "GENERAL_TF",
    "SIMPLE_FREE_FIELD_HRIR",
    "SIMPLE_FREE_FIELD_TF",
    "FREE_FIELD_DIRECTIVITY_TF",
    "SIMPLE_HEADPHONE_IR",
    "find_variable_spec",
    "get_convention",
    "list_supported_conventions",
    "register_convention",
]
