"""Thin adapter over a netCDF-4 dataset.

This is the only module that talks to ``netCDF4``. It exposes variable and
attribute enumeration, dimension sizes and typed buffer I/O by variable name.
It knows nothing about SOFA conventions.
"""

from __future__ import annotations

import logging
import math
from pathlib import Path
from typing import Any, Literal, Optional, Sequence

import netCDF4 as nc
import numpy as np

from sofa_conventions.errors import OpenError, ShapeMismatch, StoreIOError

logger = logging.getLogger(__name__)

GLOBAL = "global"

# netCDF-level failures surface as OSError or RuntimeError depending on the call
_STORE_ERRORS = (OSError, RuntimeError, IndexError, TypeError, ValueError)


class NetCDFStore:
    """A netCDF-4 file opened for reading (``"r"``), appending (``"a"``) or
    creation (``"w"``)."""

    def __init__(self, path: str | Path, mode: Literal["r", "a", "w"] = "r") -> None:
        self.path = Path(path)
        self.mode = mode
        if mode != "w" and not self.path.exists():
            raise OpenError(self.path, "file not found")
        try:
            if mode == "w":
                self._dataset = nc.Dataset(str(self.path), "w", format="NETCDF4")
            else:
                self._dataset = nc.Dataset(str(self.path), mode)
        except _STORE_ERRORS as exc:
            raise OpenError(self.path, str(exc)) from exc
        # Raw arrays, no masked fill values
        self._dataset.set_auto_mask(False)
        logger.debug("Opened %s (mode=%s)", self.path, mode)

    # ── lifecycle ───────────────────────────────────────────────

    @property
    def is_open(self) -> bool:
        return bool(self._dataset.isopen())

    def close(self) -> None:
        if self.is_open:
            self._dataset.close()
            logger.debug("Closed %s", self.path)

    def __enter__(self) -> "NetCDFStore":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    # ── enumeration ─────────────────────────────────────────────

    def list_variables(self) -> list[str]:
        """Variable names in declaration order."""
        return list(self._dataset.variables)

    def has_variable(self, name: str) -> bool:
        return name in self._dataset.variables

    def list_dimensions(self) -> dict[str, int]:
        return {name: len(dim) for name, dim in self._dataset.dimensions.items()}

    def list_attributes(self, scope: str = GLOBAL) -> dict[str, Any]:
        """Attributes of the file (``scope="global"``) or of a variable."""
        try:
            if scope == GLOBAL:
                owner = self._dataset
            else:
                owner = self._variable(scope)
            return {key: owner.getncattr(key) for key in owner.ncattrs()}
        except _STORE_ERRORS as exc:
            raise StoreIOError(scope, str(exc)) from exc

    def get_attribute(self, name: str, scope: str = GLOBAL) -> Optional[Any]:
        return self.list_attributes(scope).get(name)

    def get_variable_shape(self, name: str) -> tuple[int, ...]:
        return tuple(int(d) for d in self._variable(name).shape)

    def get_variable_dimensions(self, name: str) -> tuple[str, ...]:
        return tuple(self._variable(name).dimensions)

    def get_element_type(self, name: str) -> str:
        """Element kind of a variable: double, float, int, char or string."""
        dtype = self._variable(name).dtype
        if dtype is str:
            return "string"
        dtype = np.dtype(dtype)
        if dtype.kind == "f":
            return "double" if dtype.itemsize == 8 else "float"
        if dtype.kind in "iu":
            return "int"
        if dtype.kind in "SU":
            return "char"
        return dtype.name

    # ── typed I/O ───────────────────────────────────────────────

    def read_typed(self, name: str, expected_count: int) -> np.ndarray:
        """Read a variable as a flat row-major float64 vector.

        Raises:
            ShapeMismatch: If the variable does not hold exactly
                ``expected_count`` elements.
            StoreIOError: If netCDF fails to read the data.
        """
        variable = self._variable(name)
        count = math.prod(variable.shape)
        if count != expected_count:
            raise ShapeMismatch(name, expected=expected_count, found=count)
        try:
            data = np.asarray(variable[...], dtype=np.float64)
        except _STORE_ERRORS as exc:
            raise StoreIOError(name, str(exc)) from exc
        return data.reshape(-1)

    def write_typed(self, name: str, data: Sequence[float] | np.ndarray) -> None:
        """Overwrite all elements of a variable from a flat or shaped buffer."""
        variable = self._variable(name)
        values = np.asarray(data, dtype=np.float64)
        count = math.prod(variable.shape)
        if values.size != count:
            raise ShapeMismatch(name, expected=count, found=int(values.size))
        try:
            variable[...] = values.reshape(variable.shape)
        except _STORE_ERRORS as exc:
            raise StoreIOError(name, str(exc)) from exc

    # ── authoring ───────────────────────────────────────────────

    def create_dimension(self, name: str, size: int) -> None:
        try:
            self._dataset.createDimension(name, size)
        except _STORE_ERRORS as exc:
            raise StoreIOError(name, str(exc)) from exc

    def create_variable(
        self,
        name: str,
        dimensions: Sequence[str],
        element_type: str = "f8",
    ) -> None:
        try:
            self._dataset.createVariable(name, element_type, tuple(dimensions))
        except _STORE_ERRORS as exc:
            raise StoreIOError(name, str(exc)) from exc

    def set_attribute(self, name: str, value: Any, scope: str = GLOBAL) -> None:
        owner = self._dataset if scope == GLOBAL else self._variable(scope)
        try:
            owner.setncattr(name, value)
        except _STORE_ERRORS as exc:
            raise StoreIOError(f"{scope}:{name}", str(exc)) from exc

    # ── helpers ─────────────────────────────────────────────────

    def _variable(self, name: str) -> Any:
        try:
            return self._dataset.variables[name]
        except KeyError:
            raise StoreIOError(name, "no such variable") from None
