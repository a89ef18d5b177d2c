"""
Standardize measurement values to plain Python numbers.

Byte and bit counts arrive from many places: Python ints, floats, Decimal, Fraction,
NumPy scalars, byte counts from psutil. The formatter works on int | float only, so
every measurement passes through std_numeric() before range validation.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import math
import operator
from decimal import Decimal
from fractions import Fraction

# Local ----------------------------------------------------------------------------------------------------------------
from .formatters import fmt_type, fmt_value


# Methods --------------------------------------------------------------------------------------------------------------

def std_numeric(value, *, allow_bool: bool = False) -> int | float:
    """
    Convert a numeric measurement to standard Python int or float.

    Python int is returned unchanged (arbitrary precision), so exact powers of the
    base keep exact comparisons in scale selection. Special float values (nan, inf)
    are returned as-is; rejecting them is the range validator's job.

    Args:
        value: Numeric value. Supports int, float, Decimal, Fraction and third-party
               scalars via __index__, .item() or __float__.
        allow_bool: If True, convert bool to int (True→1, False→0). Booleans are
                    rejected by default since a flag is never a byte count.

    Returns:
        int for ints, integer-valued Decimal/Fraction and __index__ types; float otherwise.

    Raises:
        TypeError: For None, str, bytes, bool (unless allowed) and other unsupported types.

    Examples:
        >>> std_numeric(1536)
        1536
        >>> std_numeric(Decimal("1.5"))
        1.5
        >>> std_numeric(Fraction(3072, 2))
        1536
    """
    if isinstance(value, bool):
        if allow_bool:
            return int(value)
        raise TypeError(
            f"boolean values not supported, got {value}. "
            f"Set allow_bool=True to convert booleans to int (True→1, False→0)"
        )

    # Fast path
    if isinstance(value, (int, float)):
        return value

    if value is None or isinstance(value, (str, bytes, bytearray)):
        raise TypeError(f"numeric measurement required, got {fmt_type(value)}: {fmt_value(value)}")

    # NumPy integer types implement __index__, exact int conversion
    if hasattr(value, "__index__"):
        try:
            return operator.index(value)
        except (TypeError, ValueError) as e:
            raise TypeError(f"cannot convert {fmt_type(value)} to int via __index__: {e}") from e

    # Array scalars, .item() returns a Python scalar
    if hasattr(value, "item") and callable(value.item):
        try:
            result = value.item()
        except (TypeError, ValueError, AttributeError):
            result = None
        if result is not None:
            return std_numeric(result, allow_bool=allow_bool)

    # Integer-valued Decimal/Fraction stay exact
    if isinstance(value, (Decimal, Fraction)):
        try:
            as_int = int(value)
            if value == as_int:
                return as_int
        except (ValueError, OverflowError):
            pass

    if hasattr(value, "__float__"):
        try:
            return float(value)
        except OverflowError:
            # Beyond ~±1.8e308, e.g. Fraction(10**400, 3)
            return math.inf if value > 0 else -math.inf
        except (TypeError, ValueError) as e:
            raise TypeError(f"cannot convert {fmt_type(value)} to float: {e}") from e

    raise TypeError(
        f"unsupported numeric type: {fmt_type(value)}. "
        f"Expected int, float or types implementing __index__, __float__ or .item()"
    )
