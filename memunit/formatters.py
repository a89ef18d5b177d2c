"""
Robust type and value formatters for exception messages.

Both formatters survive broken __repr__ implementations and truncate long reprs,
so they are safe to call while building an error for arbitrary user input.
"""

# Standard library -----------------------------------------------------------------------------------------------------
from typing import Any

PRIMITIVE_TYPES = (
    type(None),
    bool,  # Comes before int (is subclass of int)
    int,
    float,
    complex,
    str,
    bytes,
)


# Methods --------------------------------------------------------------------------------------------------------------

def fmt_type(obj: Any, *, fully_qualified: bool = False) -> str:
    """Format type information of an object or a type for exception messages.

    Examples:
        >>> fmt_type(42)
        '<int>'
        >>> fmt_type(int)
        '<int>'
        >>> fmt_type(ValueError("bad"))
        '<ValueError>'
    """
    cls = obj if isinstance(obj, type) else type(obj)
    name = getattr(cls, "__name__", None) or "<unknown>"
    if fully_qualified and cls.__module__ != "builtins":
        name = f"{cls.__module__}.{name}"
    return f"<{name}>"


def fmt_value(
        obj: Any,
        *,
        max_repr: int = 120,
        ellipsis: str = "...",
        label_primitives: bool = False,
) -> str:
    """
    Format a single value as a type-value pair for exception messages.

    Primitive values are returned as their bare repr unless label_primitives is set.

    Args:
        obj: Any Python object to format.
        max_repr: Maximum length of the value's repr before truncation.
        ellipsis: Truncation token appended to truncated reprs.
        label_primitives: Whether to wrap primitives in a "<type: repr>" label too.

    Examples:
        >>> fmt_value(-1)
        '-1'
        >>> fmt_value(-1, label_primitives=True)
        '<int: -1>'
        >>> fmt_value([1, 2, 3])
        '<list: [1, 2, 3]>'
    """
    repr_ = _fmt_truncate(_safe_repr(obj), max_repr, ellipsis=ellipsis)

    if type(obj) in PRIMITIVE_TYPES and not label_primitives:
        return repr_

    return f"<{type(obj).__name__}: {repr_}>"


# Private Methods ------------------------------------------------------------------------------------------------------

def _fmt_truncate(repr_: str, max_len: int, ellipsis: str = "...") -> str:
    """Truncate repr to max_len chars, the ellipsis included."""
    if max_len <= 0 or len(repr_) <= max_len:
        return repr_
    keep = max(max_len - len(ellipsis), 1)
    return repr_[:keep] + ellipsis


def _safe_repr(obj: Any) -> str:
    try:
        return repr(obj)
    except Exception as e:
        return f"<repr failed: {type(e).__name__}>"
