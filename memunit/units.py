#
# MemUnit Units of Measurement Tools
#

# Standard library -----------------------------------------------------------------------------------------------------
import math
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from enum import StrEnum, unique

# Third-party ----------------------------------------------------------------------------------------------------------
from frozendict import frozendict

# Local ----------------------------------------------------------------------------------------------------------------
from .exceptions import InvalidRangeError, InvalidUnitFormatError
from .formatters import fmt_type, fmt_value
from .numeric import std_numeric


# @formatter:off

class MemUnitsConf:
    """
    Default configuration constants for memory unit formatting.

    Attributes:
        MEM_UNITS: Scale names, the index is the power of the base.
        MAX_VALUE: Largest accepted measurement, 1024 Yotta on the binary scale.
        DEFAULT_FORMAT: Format code used when none is supplied (decimal SI suffix, "KB").
        ROUND_DIGITS: Decimal digits of the first rounding of a scaled quantity.
        DISPLAY_DIGITS: Decimal digits of the displayed quantity.
    """
    MEM_UNITS = ("Byte", "Kilo", "Mega", "Giga", "Tera", "Peta", "Exa", "Zetta", "Yotta")
    MAX_VALUE = 1.2379400392854e+27
    DEFAULT_FORMAT = "D"
    ROUND_DIGITS = 3
    DISPLAY_DIGITS = 2

# @formatter:on


# Classes --------------------------------------------------------------------------------------------------------------

@unique
class MeasureType(StrEnum):
    """Kind of measured quantity, the value doubles as the unit name suffix."""
    BIT = "bit"
    BYTE = "byte"

    @property
    def base(self) -> int:
        return MEASURE_BASES[self]


# @formatter:off
@unique
class UnitStyle(StrEnum):
    """
    Unit suffix styles, shown for 1.5×2²⁰ bytes.

    Attributes:
        ABBREVIATED_BI (str) : IEC binary prefix name - 1.5 Mebibyte
        BINARY_IEC (str)     : First letter and "IB"  - 1.5 MIB
        DECIMAL_SI (str)     : First letter and "B"   - 1.5 MB
        FULL_WORD (str)      : SI prefix name         - 1.5 Megabyte
        SINGLE_LETTER (str)  : First letter only      - 1.5 M
    """
    ABBREVIATED_BI = "abbreviated_bi"
    BINARY_IEC = "binary_iec"
    DECIMAL_SI = "decimal_si"
    FULL_WORD = "full_word"
    SINGLE_LETTER = "single_letter"
# @formatter:on


@dataclass(frozen=True)
class UnitFormat:
    """Parsed format code: suffix style and whether the suffix is lowercased."""
    style: UnitStyle
    lowercase: bool = False
    code: str = ""


@dataclass(frozen=True)
class ScaledValue:
    """
    A measurement divided by base**unit_index.

    Example:
        1536 bytes on base 1024 is ScaledValue(quantity=1.5, unit_index=1), unit_name 'Kilo'
    """
    quantity: int | float
    unit_index: int

    @property
    def unit_name(self) -> str:
        return MemUnitsConf.MEM_UNITS[self.unit_index]


# @formatter:off

MEASURE_BASES = frozendict({
    MeasureType.BIT: 1000,
    MeasureType.BYTE: 1024,
})

UNIT_FORMATS = frozendict({
    "BF": UnitFormat(UnitStyle.ABBREVIATED_BI, code="BF"),
    "bf": UnitFormat(UnitStyle.ABBREVIATED_BI, code="bf"),
    "DF": UnitFormat(UnitStyle.FULL_WORD, code="DF"),
    "df": UnitFormat(UnitStyle.FULL_WORD, code="df"),
    "S":  UnitFormat(UnitStyle.SINGLE_LETTER, code="S"),
    "B":  UnitFormat(UnitStyle.BINARY_IEC, code="B"),
    "D":  UnitFormat(UnitStyle.DECIMAL_SI, code="D"),
    "s":  UnitFormat(UnitStyle.SINGLE_LETTER, lowercase=True, code="s"),
    "b":  UnitFormat(UnitStyle.BINARY_IEC, lowercase=True, code="b"),
    "d":  UnitFormat(UnitStyle.DECIMAL_SI, lowercase=True, code="d"),
})

# @formatter:on


# Methods --------------------------------------------------------------------------------------------------------------

def byte_format(value, unit_format: str = MemUnitsConf.DEFAULT_FORMAT) -> str:
    """
    Format a number of bytes with a power-of-1024 unit suffix.

    Args:
        value: Number of bytes in [0, MemUnitsConf.MAX_VALUE].
        unit_format: Format code, one of 'BF', 'bf', 'DF', 'df', 'S', 'B', 'D', 's', 'b', 'd'.

    Returns:
        Quantity and unit separated by a space.

    Raises:
        InvalidUnitFormatError: If unit_format is not a valid format code.
        InvalidRangeError: If value is negative, not finite or above MAX_VALUE.
        TypeError: If value is not numeric or unit_format is not a str.

    Examples:
        >>> byte_format(1536)
        '1.5 KB'
        >>> byte_format(1536, "DF")
        '1.5 Kilobyte'
        >>> byte_format(0)
        '0 Bytes'
    """
    return _mem_format(value, MeasureType.BYTE, unit_format)


def bit_format(value, unit_format: str = MemUnitsConf.DEFAULT_FORMAT) -> str:
    """
    Format a number of bits with a power-of-1000 unit suffix.

    Examples:
        >>> bit_format(1_500_000, "DF")
        '1.5 Megabit'
        >>> bit_format(12_000, "S")
        '12 K'
    """
    return _mem_format(value, MeasureType.BIT, unit_format)


def mem_format(value, format_bits: bool = False, unit_format: str = MemUnitsConf.DEFAULT_FORMAT) -> str:
    """Format bits if format_bits is set, bytes otherwise."""
    if format_bits:
        return bit_format(value, unit_format)
    return byte_format(value, unit_format)


def parse_unit_format(unit_format: str) -> UnitFormat:
    """
    Parse a format code into a UnitFormat.

    The style letter is matched case-insensitively, the case of a single-letter code
    additionally sets the lowercase flag: 'D' renders 'KB', 'd' renders 'kb'.
    Two-letter codes are accepted in all-upper or all-lower case only.

    Raises:
        InvalidUnitFormatError: If unit_format is none of the valid codes.
        TypeError: If unit_format is not a str.

    Examples:
        >>> parse_unit_format("b")
        UnitFormat(style=<UnitStyle.BINARY_IEC: 'binary_iec'>, lowercase=True, code='b')
    """
    if not isinstance(unit_format, str):
        raise TypeError(f"unit_format must be a str, got {fmt_type(unit_format)}: {fmt_value(unit_format)}")

    parsed = UNIT_FORMATS.get(unit_format)
    if parsed is None:
        raise InvalidUnitFormatError(unit_format, expected=tuple(UNIT_FORMATS))
    return parsed


def validate_range(value) -> int | float:
    """
    Return the numeric measurement if it lies in [0, MemUnitsConf.MAX_VALUE].

    Raises:
        InvalidRangeError: If value is negative, NaN, infinite or above MAX_VALUE.
        TypeError: If value is not numeric.
    """
    number = std_numeric(value)
    # Exact ints, Decimals and Fractions may be too large for float, only floats can be NaN
    if number < 0 or number > MemUnitsConf.MAX_VALUE or (isinstance(number, float) and math.isnan(number)):
        raise InvalidRangeError(value, max_value=MemUnitsConf.MAX_VALUE)
    return number


def scale_value(value: int | float, base: int) -> ScaledValue:
    """
    Select the unit index and scaled quantity of a validated measurement.

    unit_index = floor(log(value, base)) clamped to the unit table, so values below 1
    stay on the base unit and values above 1024 Yotta stay on Yotta.

    Examples:
        >>> scale_value(1536, 1024)
        ScaledValue(quantity=1.5, unit_index=1)
        >>> scale_value(10**9, 1000)
        ScaledValue(quantity=1.0, unit_index=3)
    """
    if value == 0:
        return ScaledValue(quantity=0, unit_index=0)

    last_index = len(MemUnitsConf.MEM_UNITS) - 1
    unit_index = min(max(math.floor(math.log(value, base)), 0), last_index)

    # log() is inexact near powers of the base: log(1000**3, 1000) == 2.9999999999999996
    while unit_index < last_index and value >= base ** (unit_index + 1):
        unit_index += 1
    while unit_index > 0 and value < base ** unit_index:
        unit_index -= 1

    return ScaledValue(quantity=value / base ** unit_index, unit_index=unit_index)


def round_quantity(quantity: int | float) -> float:
    """
    Round a scaled quantity for display.

    Rounds half away from zero to ROUND_DIGITS, truncates to DISPLAY_DIGITS and rounds
    to DISPLAY_DIGITS once more, which drops the noise of the first rounding.

    Examples:
        >>> round_quantity(1.4999)
        1.5
        >>> round_quantity(1.2379)
        1.23
    """
    rounded = _round_half_up(quantity, MemUnitsConf.ROUND_DIGITS)
    scale = 10 ** MemUnitsConf.DISPLAY_DIGITS
    truncated = math.floor(rounded * scale) / scale
    return _round_half_up(truncated, MemUnitsConf.DISPLAY_DIGITS)


def unit_text(unit_name: str, measure: MeasureType, style: UnitStyle, quantity: int | float = 0) -> str:
    """
    Unit suffix of a scale name in the given style.

    On the base scale all styles render the capitalized measure name, pluralized
    unless the quantity is exactly 1; the single letter style keeps its first letter.

    Examples:
        >>> unit_text("Mega", MeasureType.BYTE, UnitStyle.ABBREVIATED_BI)
        'Mebibyte'
        >>> unit_text("Kilo", MeasureType.BIT, UnitStyle.FULL_WORD)
        'Kilobit'
        >>> unit_text("Byte", MeasureType.BIT, UnitStyle.DECIMAL_SI, quantity=2)
        'Bits'
    """
    if unit_name == MemUnitsConf.MEM_UNITS[0]:
        word = measure.value.capitalize()
        if quantity != 1:
            word += "s"
        return word[0] if style == UnitStyle.SINGLE_LETTER else word

    match style:
        case UnitStyle.FULL_WORD:
            return f"{unit_name}{measure.value}"
        case UnitStyle.ABBREVIATED_BI:
            return f"{unit_name[:2]}bi{measure.value}"
        case UnitStyle.SINGLE_LETTER:
            return unit_name[0]
        case UnitStyle.DECIMAL_SI:
            return f"{unit_name[0]}B"
        case UnitStyle.BINARY_IEC:
            return f"{unit_name[0]}IB"
        case _:
            raise ValueError(f"unsupported unit style: {fmt_value(style)}")


def render(scaled: ScaledValue, unit_fmt: UnitFormat, measure: MeasureType) -> str:
    """Render a scaled measurement as '<quantity> <unit>'."""
    quantity = round_quantity(scaled.quantity)
    units = unit_text(scaled.unit_name, measure, unit_fmt.style, quantity)
    if unit_fmt.lowercase:
        units = units.lower()
    return f"{quantity:g} {units}"


# Private Methods ------------------------------------------------------------------------------------------------------

def _mem_format(value, measure: MeasureType, unit_format: str) -> str:
    """Grammar → range → scale → render."""
    unit_fmt = parse_unit_format(unit_format)
    number = validate_range(value)
    scaled = _scale_rounded(number, measure.base)
    return render(scaled, unit_fmt, measure)


def _scale_rounded(value: int | float, base: int) -> ScaledValue:
    """
    Scale a measurement, moving to the next unit when rounding reaches the base.

    1048575.9999 bytes scale to 1023.99 KB and round to 1024, displayed as 1 MB.
    Yotta is the last unit, its quantities stay up to 1024.
    """
    scaled = scale_value(value, base)
    last_index = len(MemUnitsConf.MEM_UNITS) - 1
    if scaled.unit_index < last_index and round_quantity(scaled.quantity) >= base:
        unit_index = scaled.unit_index + 1
        scaled = ScaledValue(quantity=value / base ** unit_index, unit_index=unit_index)
    return scaled


def _round_half_up(number: int | float, digits: int) -> float:
    """Round half away from zero on the shortest decimal repr of number."""
    exponent = Decimal(1).scaleb(-digits)
    return float(Decimal(repr(number)).quantize(exponent, rounding=ROUND_HALF_UP))
