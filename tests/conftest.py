#
# Pytest Fixtures
#

# Standard library -----------------------------------------------------------------------------------------------------
from types import SimpleNamespace
from typing import Callable

# Third-party ----------------------------------------------------------------------------------------------------------
import pytest

# Local ----------------------------------------------------------------------------------------------------------------
import memunit.memory as memory

RSS_BYTES = 48 * 1024 * 1024


# Fixtures -------------------------------------------------------------------------------------------------------------

@pytest.fixture
def fake_process(monkeypatch) -> Callable[..., SimpleNamespace]:
    """Fixture to replace psutil.Process in memunit.memory with a process reporting given counters."""

    def _install(rss: int = RSS_BYTES, **extra) -> SimpleNamespace:
        info = SimpleNamespace(rss=rss, **extra)
        process = SimpleNamespace(memory_info=lambda: info)
        monkeypatch.setattr(memory.psutil, "Process", lambda *args, **kwargs: process)
        return info

    return _install


@pytest.fixture
def fake_tracer(monkeypatch) -> SimpleNamespace:
    """Fixture to replace the tracemalloc counters used by memunit.memory."""
    state = SimpleNamespace(tracing=False, current=0, peak=0, starts=0)

    def _start():
        state.tracing = True
        state.starts += 1

    def _reset_peak():
        state.peak = state.current

    monkeypatch.setattr(memory.tracemalloc, "is_tracing", lambda: state.tracing)
    monkeypatch.setattr(memory.tracemalloc, "start", _start)
    monkeypatch.setattr(memory.tracemalloc, "get_traced_memory", lambda: (state.current, state.peak))
    monkeypatch.setattr(memory.tracemalloc, "reset_peak", _reset_peak)
    return state
