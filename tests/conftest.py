"""Global pytest fixtures for the test suite."""

import copy
import sys
from pathlib import Path

import netCDF4 as nc
import numpy as np
import pytest

# Add parent directory to path for module imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from sofa_conventions.authoring import create_file, default_attributes  # noqa: E402
from sofa_conventions.conventions import get_convention  # noqa: E402
from sofa_conventions.file import open_file  # noqa: E402

FREQUENCIES = [125.0, 250.0, 500.0, 1000.0, 2000.0]
CARTESIAN = {"Type": "cartesian", "Units": "metre"}
SPHERICAL = {"Type": "spherical", "Units": "degree, degree, metre"}


def write_raw_sofa(
    path: Path,
    dimensions: dict[str, int],
    variables: dict[str, dict],
    attributes: dict[str, str] | None = None,
) -> Path:
    """Write a netCDF file directly, bypassing any convention logic.

    ``variables`` maps a name to a dict with keys ``dims`` (required),
    ``values``, ``attrs`` and ``dtype`` (default ``"f8"``).
    """
    with nc.Dataset(str(path), "w", format="NETCDF4") as ds:
        for key, value in (attributes or {}).items():
            ds.setncattr(key, value)
        for name, size in dimensions.items():
            ds.createDimension(name, size)
        for name, layout in variables.items():
            dims = tuple(layout["dims"])
            var = ds.createVariable(name, layout.get("dtype", "f8"), dims)
            shape = tuple(len(ds.dimensions[d]) for d in dims)
            values = layout.get("values")
            if values is None:
                values = np.zeros(shape)
            var[...] = np.asarray(values, dtype=float).reshape(shape)
            for key, value in layout.get("attrs", {}).items():
                var.setncattr(key, value)
    return path


@pytest.fixture
def raw_sofa_writer():
    """The raw netCDF writer, for tests that need malformed files."""
    return write_raw_sofa


@pytest.fixture
def directivity_layout():
    """Dimensions, variables and attributes of a valid FreeFieldDirectivityTF file.

    Returned as a fresh deep copy so tests can remove or alter entries.
    """
    m, r, n = 2, 2, len(FREQUENCIES)
    layout = {
        "dimensions": {"M": m, "R": r, "E": 1, "N": n, "I": 1, "C": 3},
        "variables": {
            "ListenerPosition": {"dims": ("I", "C"), "attrs": CARTESIAN},
            "ReceiverPosition": {
                "dims": ("R", "C", "I"),
                "values": [[[0.0], [0.1], [0.0]], [[0.0], [-0.1], [0.0]]],
                "attrs": CARTESIAN,
            },
            "SourcePosition": {"dims": ("I", "C"), "values": [[0.0, 0.0, 1.5]], "attrs": CARTESIAN},
            "EmitterPosition": {"dims": ("E", "C", "I"), "attrs": CARTESIAN},
            "N": {"dims": ("N",), "values": FREQUENCIES, "attrs": {"Units": "hertz"}},
            "Data.Real": {"dims": ("M", "R", "N"), "values": np.arange(m * r * n, dtype=float)},
            "Data.Imag": {"dims": ("M", "R", "N"), "values": -np.arange(m * r * n, dtype=float)},
        },
        "attributes": {
            **default_attributes(get_convention("FreeFieldDirectivityTF")),
            "DatabaseName": "unit-test loudspeaker",
        },
    }
    return copy.deepcopy(layout)


@pytest.fixture
def directivity_path(tmp_path, directivity_layout):
    """A valid FreeFieldDirectivityTF file written from ``directivity_layout``."""
    return write_raw_sofa(
        tmp_path / "directivity.sofa",
        directivity_layout["dimensions"],
        directivity_layout["variables"],
        directivity_layout["attributes"],
    )


@pytest.fixture
def hrir_path(tmp_path):
    """A SimpleFreeFieldHRIR file created and filled through the package API."""
    path = create_file(
        tmp_path / "hrir.sofa",
        "SimpleFreeFieldHRIR",
        {"M": 3, "N": 4},
        attributes={"DatabaseName": "unit-test head"},
        signatures={"SourcePosition": ("M", "C")},
    )
    with open_file(path, mode="a") as sofa:
        sofa.set_sampling_rate(48000.0)
        sofa.set_position_values(
            "Source",
            "Position",
            [[0.0, 0.0, 1.2], [90.0, 0.0, 1.2], [180.0, 45.0, 1.2]],
        )
        sofa.set_position_values("Listener", "View", [[1.0, 0.0, 0.0]])
        sofa.set_position_values("Listener", "Up", [[0.0, 0.0, 1.0]])
        sofa.set_data_ir(np.linspace(-1.0, 1.0, 3 * 2 * 4).reshape(3, 2, 4))
    return path


@pytest.fixture
def plain_netcdf_path(tmp_path):
    """A valid netCDF-4 file that is not a SOFA file at all."""
    return write_raw_sofa(
        tmp_path / "plain.nc",
        {"time": 3},
        {"temperature": {"dims": ("time",), "values": [280.0, 281.5, 282.0]}},
        {"title": "weather"},
    )
