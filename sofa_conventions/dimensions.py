"""Resolution of the canonical sizes of SOFA dimension letters.

A SOFA file names its axes with single letters (M measurements, R receivers,
E emitters, N samples, I singleton, C coordinates, S string length). The
convention assigns a letter to every axis of every variable it knows about;
all axes carrying the same letter must agree on their size.

The first occurrence of a letter establishes its size. The file's own
declared netCDF dimension of that name counts as the first occurrence; after
that, variables are scanned in declaration order. The first disagreement is
reported as a :class:`DimensionConflict` and scanning stops.
"""

from __future__ import annotations

import logging
from typing import Mapping, Optional, Sequence

from sofa_conventions.errors import DimensionConflict, ShapeMismatch
from sofa_conventions.models import DIMENSION_LETTERS, ConventionSchema, Dimension, VariableSpec
from sofa_conventions.store import NetCDFStore

logger = logging.getLogger(__name__)


class DimensionRegistry:
    """First-seen sizes of dimension letters.

    Args:
        fixed: Sizes a convention imposes (e.g. ``{"I": 1, "C": 3}``). They
            only steer the choice between alternative signatures; a file that
            breaks them is reported by the validator, not here.
    """

    def __init__(self, fixed: Optional[Mapping[str, int]] = None) -> None:
        self._dimensions: dict[str, Dimension] = {}
        self._fixed = dict(fixed or {})

    @classmethod
    def from_store(
        cls, store: NetCDFStore, fixed: Optional[Mapping[str, int]] = None
    ) -> "DimensionRegistry":
        """A registry seeded with the file's declared letter dimensions."""
        registry = cls(fixed)
        for name, size in store.list_dimensions().items():
            if name in DIMENSION_LETTERS:
                registry.record(name, size, f"dimension '{name}'")
        return registry

    def record(self, letter: str, size: int, source: str) -> None:
        """Record ``size`` for ``letter`` or raise if it disagrees."""
        known = self._dimensions.get(letter)
        if known is None:
            self._dimensions[letter] = Dimension(letter=letter, size=size, source=source)
        elif known.size != size:
            raise DimensionConflict(letter, known.source or "?", known.size, source, size)

    def size(self, letter: str) -> Optional[int]:
        known = self._dimensions.get(letter)
        return None if known is None else known.size

    def get(self, letter: str) -> Optional[Dimension]:
        return self._dimensions.get(letter)

    def as_dict(self) -> dict[str, int]:
        return {letter: dim.size for letter, dim in self._dimensions.items()}

    def __contains__(self, letter: str) -> bool:
        return letter in self._dimensions

    # ── per-variable operations ─────────────────────────────────

    def is_consistent(self, signature: Sequence[str], shape: Sequence[int]) -> bool:
        """Whether ``shape`` fits ``signature`` given what is already known."""
        if len(signature) != len(shape):
            return False
        seen: dict[str, int] = {}
        for letter, size in zip(signature, shape):
            expected = self.size(letter)
            if expected is None:
                expected = self._fixed.get(letter, seen.get(letter))
            if expected is not None and expected != size:
                return False
            seen[letter] = size
        return True

    def choose_signature(
        self, spec: VariableSpec, shape: Sequence[int]
    ) -> Optional[tuple[str, ...]]:
        """Pick the signature of ``spec`` that describes ``shape``.

        Among signatures of the right rank, the first one consistent with the
        known and fixed sizes wins; if none is, the first of the right rank is
        returned so that :meth:`observe` reports the disagreement. Returns
        None if no signature has the right rank.
        """
        candidates = spec.signatures_for_rank(len(shape))
        if not candidates:
            return None
        for signature in candidates:
            if self.is_consistent(signature, shape):
                return signature
        return candidates[0]

    def observe(self, variable: str, signature: Sequence[str], shape: Sequence[int]) -> None:
        """Record every axis of ``variable``; raise on the first disagreement."""
        if len(signature) != len(shape):
            raise ShapeMismatch(variable, expected=len(signature), found=len(shape))
        for letter, size in zip(signature, shape):
            self.record(letter, int(size), variable)

    def check(self, variable: str, signature: Sequence[str], shape: Sequence[int]) -> None:
        """Like :meth:`observe` but without recording anything new."""
        if len(signature) != len(shape):
            raise ShapeMismatch(variable, expected=len(signature), found=len(shape))
        for letter, size in zip(signature, shape):
            known = self.get(letter)
            if known is not None and known.size != size:
                raise DimensionConflict(letter, known.source or "?", known.size, variable, int(size))

    def expected_shape(self, variable: str, signature: Sequence[str]) -> tuple[int, ...]:
        """Shape implied by ``signature``; every letter must be resolved."""
        shape = []
        for letter in signature:
            size = self.size(letter)
            if size is None:
                raise ShapeMismatch(
                    variable,
                    expected=tuple(signature),
                    found=None,
                    message=f"Dimension '{letter}' of '{variable}' is not resolved",
                )
            shape.append(size)
        return tuple(shape)


def build_registry(store: NetCDFStore, schema: ConventionSchema) -> DimensionRegistry:
    """Scan every variable of ``store`` known to ``schema``.

    Variables absent from the file, unknown to the schema, or whose rank
    matches no signature are skipped; rank problems are the validator's job.

    Raises:
        DimensionConflict: On the first disagreement, in declaration order.
    """
    registry = DimensionRegistry.from_store(store, schema.fixed_dimensions)
    for name in store.list_variables():
        spec = schema.variable(name)
        if spec is None:
            continue
        shape = store.get_variable_shape(name)
        signature = registry.choose_signature(spec, shape)
        if signature is None:
            logger.debug("Skipping %s: rank %d fits no signature", name, len(shape))
            continue
        registry.observe(name, signature, shape)
    return registry


def resolve_dimensions(store: NetCDFStore, schema: ConventionSchema) -> dict[str, int]:
    """Mapping of dimension letter to size for ``store`` under ``schema``."""
    return build_registry(store, schema).as_dict()
