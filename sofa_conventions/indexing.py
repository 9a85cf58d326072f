"""Row-major flattening between multi-dimensional indices and flat buffers.

SOFA variables are read from the store as one contiguous vector of doubles.
For a shape ``[d0, d1, ..., dn-1]`` the element ``(i0, ..., in-1)`` lives at::

    sum(ik * prod(dj for j > k))

which is C order, i.e. the last axis varies fastest.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Iterator, Sequence

import numpy as np


def _check_index(index: Sequence[int], shape: Sequence[int]) -> None:
    if len(index) != len(shape):
        raise IndexError(
            f"Index {tuple(index)} has {len(index)} components, shape {tuple(shape)} has {len(shape)}"
        )
    for axis, (i, size) in enumerate(zip(index, shape)):
        if not 0 <= i < size:
            raise IndexError(f"Index {i} out of range for axis {axis} of size {size}")


def flatten_index(index: Sequence[int], shape: Sequence[int]) -> int:
    """Flat position of ``index`` within a row-major buffer of ``shape``.

    Raises:
        IndexError: If the index has the wrong length or is out of range.
    """
    _check_index(index, shape)
    flat = 0
    for i, size in zip(index, shape):
        flat = flat * size + i
    return flat


def unflatten_index(flat: int, shape: Sequence[int]) -> tuple[int, ...]:
    """Inverse of :func:`flatten_index`."""
    total = math.prod(shape)
    if not 0 <= flat < total:
        raise IndexError(f"Flat index {flat} out of range for shape {tuple(shape)}")
    index = []
    for size in reversed(shape):
        flat, i = divmod(flat, size)
        index.append(i)
    return tuple(reversed(index))


@dataclass(frozen=True, eq=False)
class FlatBuffer:
    """A contiguous vector of doubles plus the logical shape it represents.

    Attributes:
        values: Read-only 1-D float64 array, row-major.
        shape: Logical shape, outer to inner.
        dimensions: Dimension letters for each axis (may be empty).
        name: Variable the buffer was read from, if any.
    """

    values: np.ndarray
    shape: tuple[int, ...]
    dimensions: tuple[str, ...] = ()
    name: str = ""
    _array: np.ndarray = field(init=False, repr=False)

    def __post_init__(self) -> None:
        values = np.array(self.values, dtype=np.float64).ravel()
        shape = tuple(int(d) for d in self.shape)
        if values.size != math.prod(shape):
            raise ValueError(
                f"Buffer of {values.size} values does not fit shape {shape}"
            )
        if self.dimensions and len(self.dimensions) != len(shape):
            raise ValueError(
                f"Dimensions {self.dimensions} do not match rank of shape {shape}"
            )
        values.flags.writeable = False
        object.__setattr__(self, "values", values)
        object.__setattr__(self, "shape", shape)
        object.__setattr__(self, "dimensions", tuple(self.dimensions))
        object.__setattr__(self, "_array", values.reshape(shape))

    @property
    def ndim(self) -> int:
        return len(self.shape)

    def __len__(self) -> int:
        return int(self.values.size)

    def __iter__(self) -> Iterator[float]:
        return iter(self.values.tolist())

    def flat_index(self, *index: int) -> int:
        return flatten_index(index, self.shape)

    def __getitem__(self, index: int | tuple[int, ...]) -> float:
        if isinstance(index, (int, np.integer)):
            index = (index,)
        return float(self.values[flatten_index(index, self.shape)])

    def to_array(self) -> np.ndarray:
        """Shaped, read-only view of the buffer."""
        return self._array

    def size_of(self, letter: str) -> int:
        """Size of the axis labelled ``letter``."""
        try:
            return self.shape[self.dimensions.index(letter)]
        except ValueError:
            raise KeyError(f"Buffer '{self.name}' has no dimension '{letter}'") from None
