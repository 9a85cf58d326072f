"""An open SOFA file.

:class:`SofaFile` owns its netCDF store exclusively: it cannot be copied or
pickled, and once closed it cannot be reopened (open a new instance).

Usage:
    from sofa_conventions import open_file

    with open_file("directivity.sofa") as sofa:
        if sofa.is_valid("FreeFieldDirectivityTF"):
            freqs = sofa.get_frequency_values()
            real = sofa.get_data_real()  # FlatBuffer of shape [M, R, N]
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Literal, Optional, Union

from sofa_conventions.accessors import DataAccessors, PositionAccessors
from sofa_conventions.conventions import SOFA_BASE, get_convention
from sofa_conventions.dimensions import DimensionRegistry, build_registry
from sofa_conventions.errors import (
    FileClosedError,
    MissingAttribute,
    MissingVariable,
    ShapeMismatch,
    UnknownConvention,
)
from sofa_conventions.models import ConventionSchema
from sofa_conventions.store import GLOBAL, NetCDFStore
from sofa_conventions.validation import ValidationResult, validate

logger = logging.getLogger(__name__)


class SofaFile(PositionAccessors, DataAccessors):
    """Typed, convention-aware view of one SOFA file.

    Args:
        path: File to open.
        mode: ``"r"`` to read, ``"a"`` to read and update values in place.

    Raises:
        OpenError: If the file is missing or not a netCDF-4 file.
    """

    def __init__(self, path: Union[str, Path], mode: Literal["r", "a"] = "r") -> None:
        self.path = Path(path)
        self.mode = mode
        self._registry: Optional[DimensionRegistry] = None
        self._store: Optional[NetCDFStore] = NetCDFStore(self.path, mode)

    # ── lifecycle ───────────────────────────────────────────────

    @property
    def is_open(self) -> bool:
        return self._store is not None

    @property
    def store(self) -> NetCDFStore:
        if self._store is None:
            raise FileClosedError(f"{self.path} is closed")
        return self._store

    def close(self) -> None:
        if self._store is not None:
            self._store.close()
            self._store = None
            self._registry = None

    def __enter__(self) -> "SofaFile":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def __copy__(self) -> "SofaFile":
        raise TypeError("SofaFile owns its file handle and cannot be copied")

    def __deepcopy__(self, memo: dict) -> "SofaFile":
        raise TypeError("SofaFile owns its file handle and cannot be copied")

    def __reduce__(self) -> Any:
        raise TypeError("SofaFile owns its file handle and cannot be pickled")

    def __repr__(self) -> str:
        state = "open" if self.is_open else "closed"
        return f"SofaFile({str(self.path)!r}, mode={self.mode!r}, {state})"

    # ── convention ──────────────────────────────────────────────

    @property
    def convention_name(self) -> Optional[str]:
        """Value of the ``SOFAConventions`` attribute, if any."""
        value = self.store.get_attribute("SOFAConventions")
        return None if value is None else str(value)

    @property
    def schema(self) -> ConventionSchema:
        """Schema of the declared convention, or the generic SOFA schema."""
        name = self.convention_name
        if name is None:
            return SOFA_BASE
        try:
            return get_convention(name)
        except UnknownConvention:
            logger.debug("%s declares unsupported convention %r; using generic SOFA rules", self.path, name)
            return SOFA_BASE

    def validate(self, convention: Union[str, ConventionSchema, None] = None) -> ValidationResult:
        """Validate against ``convention`` (default: the declared one)."""
        return validate(self, convention or self.schema)

    def is_valid(self, convention: Union[str, ConventionSchema, None] = None) -> bool:
        return self.validate(convention).valid

    # ── dimensions ──────────────────────────────────────────────

    @property
    def registry(self) -> DimensionRegistry:
        """Resolved dimension sizes, computed once per open file.

        Raises:
            DimensionConflict: If two variables disagree on a dimension.
        """
        if self._registry is None:
            self._registry = build_registry(self.store, self.schema)
        return self._registry

    @property
    def dimensions(self) -> dict[str, int]:
        return self.registry.as_dict()

    def get_dimension(self, letter: str) -> int:
        size = self.registry.size(letter)
        if size is None:
            raise ShapeMismatch(
                letter, expected="a resolved size", found=None,
                message=f"Dimension '{letter}' is not defined in {self.path}",
            )
        return size

    @property
    def num_measurements(self) -> int:
        return self.get_dimension("M")

    @property
    def num_receivers(self) -> int:
        return self.get_dimension("R")

    @property
    def num_emitters(self) -> int:
        return self.get_dimension("E")

    @property
    def num_data_samples(self) -> int:
        return self.get_dimension("N")

    # ── raw metadata ────────────────────────────────────────────

    def attributes(self, scope: str = GLOBAL) -> dict[str, Any]:
        """Global attributes, or those of the variable named ``scope``."""
        if scope != GLOBAL and not self.store.has_variable(scope):
            raise MissingVariable(scope)
        return self.store.list_attributes(scope)

    def get_attribute(self, name: str, scope: str = GLOBAL) -> Any:
        attributes = self.attributes(scope)
        if name not in attributes:
            raise MissingAttribute(name if scope == GLOBAL else f"{scope}:{name}")
        return attributes[name]

    def variables(self) -> list[str]:
        return self.store.list_variables()

    def get_variable_shape(self, name: str) -> tuple[int, ...]:
        if not self.store.has_variable(name):
            raise MissingVariable(name)
        return self.store.get_variable_shape(name)

    def get_variable_dimensions(self, name: str) -> tuple[str, ...]:
        if not self.store.has_variable(name):
            raise MissingVariable(name)
        return self.store.get_variable_dimensions(name)


def open_file(path: Union[str, Path], mode: Literal["r", "a"] = "r") -> SofaFile:
    """Open a SOFA file; use as a context manager or call ``close()``."""
    return SofaFile(path, mode)


def is_valid_convention(file: Union[SofaFile, str, Path], convention: str) -> bool:
    """Whether ``file`` (open, or a path) satisfies ``convention``."""
    if isinstance(file, SofaFile):
        return file.is_valid(convention)
    with open_file(file) as sofa:
        return sofa.is_valid(convention)
