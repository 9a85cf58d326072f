"""Exception hierarchy for SOFA file access and convention validation.

Everything raised by the package derives from :class:`SofaError`.

Structural problems with a file (missing attributes, wrong shapes, unknown
units, ...) derive from :class:`ConventionViolation`. The validator turns
these into a structured result; the accessors raise them directly.
"""

from __future__ import annotations

from typing import Any, Optional


class SofaError(Exception):
    """Base class for all errors raised by sofa_conventions."""


class OpenError(SofaError):
    """The file is missing, unreadable, or not a netCDF-4 file."""

    def __init__(self, path: Any, reason: str) -> None:
        self.path = str(path)
        self.reason = reason
        super().__init__(f"Cannot open '{self.path}': {reason}")


class FileClosedError(SofaError):
    """An operation was attempted on a closed SofaFile."""


class StoreIOError(SofaError):
    """Reading or writing the underlying store failed.

    The original netCDF4/OS error is chained as ``__cause__``.
    """

    def __init__(self, name: str, reason: str) -> None:
        self.name = name
        self.reason = reason
        super().__init__(f"I/O error on '{name}': {reason}")


class UnknownConvention(SofaError, ValueError):
    """No convention is registered under the requested name."""

    def __init__(self, name: str, available: list[str]) -> None:
        self.name = name
        listing = ", ".join(available) or "(none)"
        super().__init__(f"Unknown convention '{name}'. Available: {listing}")


class ConventionViolation(SofaError):
    """A file does not satisfy a structural requirement.

    ``subject`` is the attribute, variable or dimension the violation is about.
    """

    def __init__(self, subject: str, message: str) -> None:
        self.subject = subject
        super().__init__(message)


class MissingAttribute(ConventionViolation):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(name, f"Missing required attribute '{name}'")


class InvalidAttribute(ConventionViolation):
    def __init__(self, name: str, value: Any, expected: str) -> None:
        self.name = name
        self.value = value
        self.expected = expected
        super().__init__(
            name, f"Attribute '{name}' has value {value!r}, expected {expected}"
        )


class MissingVariable(ConventionViolation):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(name, f"Missing required variable '{name}'")


class ShapeMismatch(ConventionViolation):
    """A rank or a dimension size differs from what was expected."""

    def __init__(
        self,
        subject: str,
        expected: Any,
        found: Any,
        message: Optional[str] = None,
    ) -> None:
        self.expected = expected
        self.found = found
        if message is None:
            message = f"Shape mismatch for '{subject}': expected {expected}, found {found}"
        super().__init__(subject, message)


class DimensionConflict(ShapeMismatch):
    """Two variables disagree on the size of a shared dimension letter."""

    def __init__(
        self,
        letter: str,
        first_source: str,
        first_size: int,
        second_source: str,
        second_size: int,
    ) -> None:
        self.letter = letter
        self.first_source = first_source
        self.first_size = first_size
        self.second_source = second_source
        self.second_size = second_size
        super().__init__(
            second_source,
            expected=first_size,
            found=second_size,
            message=(
                f"Dimension '{letter}' is {second_size} in '{second_source}' "
                f"but {first_size} in '{first_source}' (expected {first_size}, "
                f"found {second_size})"
            ),
        )


class ElementTypeMismatch(ConventionViolation):
    def __init__(self, name: str, expected: str, found: str) -> None:
        self.name = name
        self.expected = expected
        self.found = found
        super().__init__(
            name, f"Variable '{name}' has element type {found}, expected {expected}"
        )


class UnknownUnit(ConventionViolation):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(name, f"Unknown units '{name}'")


class UnknownCoordinateSystem(ConventionViolation):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(name, f"Unknown coordinate system '{name}'")
