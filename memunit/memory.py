#
# MemUnit Memory Usage Tools
#

# Standard library -----------------------------------------------------------------------------------------------------
import sys
import tracemalloc

# Third-party ----------------------------------------------------------------------------------------------------------
import psutil

# Local ----------------------------------------------------------------------------------------------------------------
from .units import byte_format


# Methods --------------------------------------------------------------------------------------------------------------

def usage(real_usage: bool = False, formatted: bool = False) -> int | str:
    """
    Returns the amount of memory allocated by the Python interpreter.

    Args:
        real_usage: If True, return the resident set size of the whole process from the OS,
                    allocator overhead and native extensions included. Otherwise return the
                    memory traced by tracemalloc, which is started on first use.
        formatted: If True, return the amount formatted with byte_format().

    Returns:
        Number of bytes, or a string like '1.46 MB' when formatted.
    """
    if real_usage:
        amount = psutil.Process().memory_info().rss
    else:
        _ensure_tracing()
        amount, _ = tracemalloc.get_traced_memory()
    return byte_format(amount) if formatted else amount


def peak_usage(real_usage: bool = False, formatted: bool = False) -> int | str:
    """
    Returns the peak of memory allocated by the Python interpreter.

    The traced peak counts from the start of tracing or from the last reset().
    With real_usage the peak resident set size since process start is returned.
    """
    if real_usage:
        amount = _peak_rss()
    else:
        _ensure_tracing()
        _, amount = tracemalloc.get_traced_memory()
    return byte_format(amount) if formatted else amount


def reset() -> None:
    """
    Reset peak memory usage before a new operation.

    Sets the traced peak to the current traced size. The real usage peak is an OS
    high-water mark and is not affected.
    """
    _ensure_tracing()
    tracemalloc.reset_peak()


# Private Methods ------------------------------------------------------------------------------------------------------

def _ensure_tracing() -> None:
    if not tracemalloc.is_tracing():
        tracemalloc.start()


def _peak_rss() -> int:
    """Peak resident set size of the current process in bytes."""
    info = psutil.Process().memory_info()

    # Windows reports the peak working set directly
    peak = getattr(info, "peak_wset", None)
    if peak is not None:
        return peak

    import resource

    max_rss = resource.getrusage(resource.RUSAGE_SELF).ru_maxrss
    # ru_maxrss is bytes on macOS, kilobytes elsewhere
    if sys.platform == "darwin":
        return max_rss
    return max_rss * 1024
