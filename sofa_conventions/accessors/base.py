"""Shared read/write path of the typed accessors.

Every accessor goes through :meth:`VariableAccessor._read_variable`:
locate the variable, match its shape against the convention's signatures,
check each axis against the resolved dimension sizes, then read exactly
that many doubles. Either the whole buffer comes back or an error is raised.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, Optional, Sequence

import numpy as np

from sofa_conventions.conventions import find_variable_spec
from sofa_conventions.errors import MissingVariable, ShapeMismatch
from sofa_conventions.indexing import FlatBuffer
from sofa_conventions.models import VariableSpec

if TYPE_CHECKING:
    from sofa_conventions.dimensions import DimensionRegistry
    from sofa_conventions.models import ConventionSchema
    from sofa_conventions.store import NetCDFStore


class VariableAccessor:
    """Mixin base; the host class provides ``store``, ``schema`` and ``registry``."""

    store: "NetCDFStore"
    schema: "ConventionSchema"
    registry: "DimensionRegistry"

    def _spec_for(self, name: str) -> VariableSpec:
        spec = self.schema.variable(name) or find_variable_spec(name)
        if spec is None:
            raise MissingVariable(name)
        return spec

    def _resolve_shape(self, name: str, ndim: Optional[int] = None) -> tuple[tuple[int, ...], tuple[str, ...]]:
        """Checked shape and dimension letters of ``name``."""
        store = self.store
        if not store.has_variable(name):
            raise MissingVariable(name)
        shape = store.get_variable_shape(name)
        if ndim is not None and len(shape) != ndim:
            raise ShapeMismatch(
                name,
                expected=ndim,
                found=len(shape),
                message=f"'{name}' has {len(shape)} dimensions, {ndim}D access requested",
            )
        spec = self._spec_for(name)
        registry = self.registry
        signature = registry.choose_signature(spec, shape)
        if signature is None:
            raise ShapeMismatch(name, expected=spec.ranks, found=len(shape))
        registry.check(name, signature, shape)
        resolved = []
        for letter, size in zip(signature, shape):
            known = registry.size(letter)
            resolved.append(size if known is None else known)
        return tuple(resolved), signature

    def _read_variable(self, name: str, ndim: Optional[int] = None) -> FlatBuffer:
        shape, signature = self._resolve_shape(name, ndim)
        values = self.store.read_typed(name, math.prod(shape))
        return FlatBuffer(values=values, shape=shape, dimensions=signature, name=name)

    def _write_variable(self, name: str, values: FlatBuffer | Sequence[float] | np.ndarray) -> None:
        shape, _ = self._resolve_shape(name)
        if isinstance(values, FlatBuffer):
            if values.shape != shape:
                raise ShapeMismatch(name, expected=shape, found=values.shape)
            data = values.values
        else:
            data = np.asarray(values, dtype=np.float64)
            if data.ndim > 1 and data.shape != shape:
                raise ShapeMismatch(name, expected=shape, found=data.shape)
        self.store.write_typed(name, data)
