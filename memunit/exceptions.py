"""
MemUnit Exceptions

Errors raised by the unit formatter. Both are fatal to the call in progress and carry
the rejected input for diagnostics.
"""

# Standard library -----------------------------------------------------------------------------------------------------
from typing import Any

# Local ----------------------------------------------------------------------------------------------------------------
from .formatters import fmt_value


# Classes --------------------------------------------------------------------------------------------------------------

class MemUnitError(ValueError):
    """Base class for memunit errors."""


class InvalidUnitFormatError(MemUnitError):
    """
    A unit format code does not match the format-code grammar.

    Attributes:
        unit_format: The rejected format code.
    """

    def __init__(self, unit_format: str, expected: tuple[str, ...] = ()):
        self.unit_format = unit_format
        message = f"invalid unit format: {unit_format!r}"
        if expected:
            message += f", expected one of {expected}"
        super().__init__(message)


class InvalidRangeError(MemUnitError):
    """
    A measurement is negative, not finite or exceeds the largest representable value.

    Attributes:
        value: The rejected measurement.
    """

    def __init__(self, value: Any, max_value: int | float):
        self.value = value
        self.max_value = max_value
        super().__init__(
            f"invalid measurement range {fmt_value(value, label_primitives=True)}, "
            f"allowed range is [0, {max_value:g}] (0 B - 1024 YB)"
        )
