"""Export utilities for SOFA positions and measurement data.

Turns the flat buffers returned by the accessors into tidy pandas
DataFrames (one row per position or per data bin) and writes them to CSV.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import numpy as np
import pandas as pd

from sofa_conventions.accessors import Kind, Role
from sofa_conventions.file import SofaFile, open_file
from sofa_conventions.units import CoordinateSystem

logger = logging.getLogger(__name__)

COORDINATE_LABELS: dict[CoordinateSystem, tuple[str, str, str]] = {
    CoordinateSystem.CARTESIAN: ("x", "y", "z"),
    CoordinateSystem.SPHERICAL: ("azimuth", "elevation", "distance"),
    CoordinateSystem.SPHERICAL_HARMONICS: ("azimuth", "elevation", "radius"),
}

_INDEX_COLUMNS: dict[str, str] = {
    "M": "measurement",
    "R": "receiver",
    "E": "emitter",
    "I": "instance",
    "N": "bin",
}


def position_frame(sofa: SofaFile, role: Role, kind: Kind = "Position") -> pd.DataFrame:
    """One row per position, one column per coordinate.

    A 2-D ``[count, C]`` variable gives one row per role instance; a 3-D
    ``[count, C, M]`` variable gives one row per (instance, measurement).
    """
    coordinates, units = sofa.get_position(role, kind)
    buffer = sofa.get_position_values(role, kind)
    labels = COORDINATE_LABELS[coordinates]
    data = buffer.to_array()

    if buffer.ndim == 2:
        index_letter = buffer.dimensions[0]
        frame = pd.DataFrame(data, columns=list(labels))
        frame.insert(0, _INDEX_COLUMNS.get(index_letter, index_letter), np.arange(data.shape[0]))
    else:
        count, n_coords, inner = data.shape
        rows = data.transpose(0, 2, 1).reshape(count * inner, n_coords)
        frame = pd.DataFrame(rows, columns=list(labels))
        outer_name = _INDEX_COLUMNS.get(buffer.dimensions[0], buffer.dimensions[0])
        inner_name = _INDEX_COLUMNS.get(buffer.dimensions[2], buffer.dimensions[2])
        frame.insert(0, inner_name, np.tile(np.arange(inner), count))
        frame.insert(0, outer_name, np.repeat(np.arange(count), inner))

    frame.attrs["variable"] = buffer.name
    frame.attrs["coordinates"] = coordinates.value
    frame.attrs["units"] = units.value
    return frame


def data_frame(sofa: SofaFile) -> pd.DataFrame:
    """Long-format data: one row per (measurement, receiver, bin).

    Transfer-function files get ``frequency``, ``real`` and ``imag``
    columns; impulse-response files get ``sample`` and ``ir``.
    """
    store = sofa.store
    if store.has_variable("Data.Real"):
        real = sofa.get_data_real()
        imag = sofa.get_data_imag()
        m, r, n = real.shape
        frequencies = sofa.get_frequency_values()
        frame = pd.DataFrame(
            {
                "measurement": np.repeat(np.arange(m), r * n),
                "receiver": np.tile(np.repeat(np.arange(r), n), m),
                "frequency": np.tile(frequencies, m * r),
                "real": real.values,
                "imag": imag.values,
            }
        )
    else:
        ir = sofa.get_data_ir()
        m, r, n = ir.shape
        frame = pd.DataFrame(
            {
                "measurement": np.repeat(np.arange(m), r * n),
                "receiver": np.tile(np.repeat(np.arange(r), n), m),
                "sample": np.tile(np.arange(n), m * r),
                "ir": ir.values,
            }
        )
    return frame


def export_positions_to_csv(
    sofa_path: str | Path,
    role: Role = "Source",
    out_path: Optional[str | Path] = None,
) -> Path:
    """Write the positions of ``role`` to CSV.

    Args:
        sofa_path: SOFA file to read.
        role: Listener, Source, Receiver or Emitter.
        out_path: Destination; defaults to ``<stem>_<role>_positions.csv``.

    Returns:
        Path to the written CSV file.
    """
    sofa_path = Path(sofa_path)
    csv_out = Path(out_path) if out_path else sofa_path.with_name(
        f"{sofa_path.stem}_{role.lower()}_positions.csv"
    )
    with open_file(sofa_path) as sofa:
        frame = position_frame(sofa, role)
    frame.to_csv(csv_out, index=False, float_format="%.6f")
    logger.debug("Wrote %d %s positions to %s", len(frame), role, csv_out)
    return csv_out
