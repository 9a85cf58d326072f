"""Positions and orientations of listeners, sources, receivers and emitters.

Each role has a ``{Role}Position`` and optional ``{Role}View`` /
``{Role}Up`` vectors, either 2-D or 3-D. Listener and source variables are
``[I, C]`` or ``[M, C]``, or ``[I, C, M]`` / ``[M, C, I]``; receiver and
emitter variables are ``[R, C]`` or ``[R, C, I]`` / ``[R, C, M]``. Which form
a file uses is detected from its shape. Values are returned flattened in
that axis order.
"""

from __future__ import annotations

from typing import Literal, Optional, Sequence

import numpy as np

from sofa_conventions.accessors.base import VariableAccessor
from sofa_conventions.conventions import KINDS, ROLES
from sofa_conventions.errors import MissingAttribute, MissingVariable
from sofa_conventions.indexing import FlatBuffer
from sofa_conventions.units import (
    CoordinateSystem,
    Units,
    get_coordinate_system,
    get_coordinate_system_name,
    get_units,
    get_units_name,
)

Role = Literal["Listener", "Source", "Receiver", "Emitter"]
Kind = Literal["Position", "View", "Up"]


def position_variable_name(role: str, kind: str = "Position") -> str:
    """``("Listener", "View")`` -> ``"ListenerView"``."""
    if role not in ROLES:
        raise ValueError(f"role must be one of {ROLES}, got {role!r}")
    if kind not in KINDS:
        raise ValueError(f"kind must be one of {KINDS}, got {kind!r}")
    return f"{role}{kind}"


class PositionAccessors(VariableAccessor):
    def has_position(self, role: Role, kind: Kind = "Position") -> bool:
        return self.store.has_variable(position_variable_name(role, kind))

    def get_position(self, role: Role, kind: Kind = "Position") -> tuple[CoordinateSystem, Units]:
        """Coordinate system and units of a position variable.

        An Up vector without its own metadata shares that of the View vector.

        Raises:
            MissingVariable: If the variable is not present.
            MissingAttribute: If ``Type`` or ``Units`` is absent.
            UnknownCoordinateSystem, UnknownUnit: For unrecognized names.
        """
        name = position_variable_name(role, kind)
        store = self.store
        if not store.has_variable(name):
            raise MissingVariable(name)
        attributes = store.list_attributes(name)
        source = name
        if kind == "Up" and "Type" not in attributes:
            view = position_variable_name(role, "View")
            if store.has_variable(view):
                attributes = store.list_attributes(view)
                source = view
        for key in ("Type", "Units"):
            if key not in attributes:
                raise MissingAttribute(f"{source}:{key}")
        return get_coordinate_system(attributes["Type"]), get_units(attributes["Units"])

    def get_position_values(
        self,
        role: Role,
        kind: Kind = "Position",
        ndim: Optional[Literal[2, 3]] = None,
    ) -> FlatBuffer:
        """Values of a position variable.

        Args:
            role: Listener, Source, Receiver or Emitter.
            kind: Position, View or Up.
            ndim: Request 2-D or 3-D access; the file's rank must match.

        Raises:
            MissingVariable: If the variable is not present.
            ShapeMismatch: If the rank differs from ``ndim`` or an axis
                disagrees with the resolved dimension sizes.
        """
        return self._read_variable(position_variable_name(role, kind), ndim)

    def set_position(
        self,
        role: Role,
        kind: Kind,
        coordinates: CoordinateSystem,
        units: Units,
    ) -> None:
        name = position_variable_name(role, kind)
        if not self.store.has_variable(name):
            raise MissingVariable(name)
        self.store.set_attribute("Type", get_coordinate_system_name(coordinates), scope=name)
        self.store.set_attribute("Units", get_units_name(units), scope=name)

    def set_position_values(
        self,
        role: Role,
        kind: Kind,
        values: FlatBuffer | Sequence[float] | np.ndarray,
    ) -> None:
        """Overwrite a position variable; the shape must match the file's."""
        self._write_variable(position_variable_name(role, kind), values)
