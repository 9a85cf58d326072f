"""Measurement data: transfer functions, impulse responses and their axes."""

from __future__ import annotations

from typing import Sequence

import numpy as np

from sofa_conventions.accessors.base import VariableAccessor
from sofa_conventions.errors import MissingAttribute, MissingVariable, ShapeMismatch
from sofa_conventions.indexing import FlatBuffer
from sofa_conventions.units import Units, get_units

FREQUENCIES = "N"
DATA_REAL = "Data.Real"
DATA_IMAG = "Data.Imag"
DATA_IR = "Data.IR"
SAMPLING_RATE = "Data.SamplingRate"
DATA_DELAY = "Data.Delay"


class DataAccessors(VariableAccessor):

    def _units_of(self, name: str) -> Units:
        if not self.store.has_variable(name):
            raise MissingVariable(name)
        units = self.store.list_attributes(name).get("Units")
        if units is None:
            raise MissingAttribute(f"{name}:Units")
        return get_units(units)

    # ── frequency domain ────────────────────────────────────────

    def get_frequency_values(self) -> np.ndarray:
        """The N frequencies, in file order."""
        return np.array(self._read_variable(FREQUENCIES, ndim=1).values)

    def get_frequency_units(self) -> Units:
        return self._units_of(FREQUENCIES)

    def get_data_real(self) -> FlatBuffer:
        """Real part of the transfer functions, shape ``[M, R, N]``."""
        return self._read_variable(DATA_REAL, ndim=3)

    def get_data_imag(self) -> FlatBuffer:
        """Imaginary part of the transfer functions, shape ``[M, R, N]``."""
        return self._read_variable(DATA_IMAG, ndim=3)

    def get_data_complex(self) -> np.ndarray:
        """``Data.Real + 1j * Data.Imag`` as an ``[M, R, N]`` array."""
        real = self.get_data_real()
        imag = self.get_data_imag()
        if real.shape != imag.shape:
            raise ShapeMismatch(DATA_IMAG, expected=real.shape, found=imag.shape)
        return real.to_array() + 1j * imag.to_array()

    def set_frequency_values(self, values: Sequence[float] | np.ndarray) -> None:
        self._write_variable(FREQUENCIES, values)

    def set_data_real(self, values: FlatBuffer | np.ndarray) -> None:
        self._write_variable(DATA_REAL, values)

    def set_data_imag(self, values: FlatBuffer | np.ndarray) -> None:
        self._write_variable(DATA_IMAG, values)

    # ── time domain ─────────────────────────────────────────────

    def get_data_ir(self) -> FlatBuffer:
        """Impulse responses, shape ``[M, R, N]``."""
        return self._read_variable(DATA_IR, ndim=3)

    def get_sampling_rate(self) -> float:
        """The single sampling rate of a file whose rate is not per measurement."""
        buffer = self._read_variable(SAMPLING_RATE, ndim=1)
        if buffer.dimensions != ("I",):
            raise ShapeMismatch(
                SAMPLING_RATE,
                expected=("I",),
                found=buffer.dimensions,
                message=f"'{SAMPLING_RATE}' varies per measurement; read it with get_sampling_rates()",
            )
        return float(buffer.values[0])

    def get_sampling_rates(self) -> FlatBuffer:
        """Sampling rate(s), shape ``[I]`` or ``[M]``."""
        return self._read_variable(SAMPLING_RATE, ndim=1)

    def get_sampling_rate_units(self) -> Units:
        return self._units_of(SAMPLING_RATE)

    def get_data_delay(self) -> FlatBuffer:
        """Broadband delays, shape ``[I, R]`` or ``[M, R]``."""
        return self._read_variable(DATA_DELAY, ndim=2)

    def set_data_ir(self, values: FlatBuffer | np.ndarray) -> None:
        self._write_variable(DATA_IR, values)

    def set_sampling_rate(self, value: float) -> None:
        self._write_variable(SAMPLING_RATE, [value])

    def set_data_delay(self, values: FlatBuffer | np.ndarray) -> None:
        self._write_variable(DATA_DELAY, values)
