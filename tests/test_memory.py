#
# MemUnit - Memory Tests
#

# Standard library -----------------------------------------------------------------------------------------------------
import sys

# Third-party ----------------------------------------------------------------------------------------------------------
import pytest

# Local ----------------------------------------------------------------------------------------------------------------
import memunit.memory as memory
from memunit.memory import peak_usage, reset, usage


# Tests ----------------------------------------------------------------------------------------------------------------

class TestUsage:

    def test_traced_usage(self, fake_tracer):
        """Traced usage starts tracing once and reports the current traced size."""
        fake_tracer.current = 1536
        assert usage() == 1536
        assert usage() == 1536
        assert fake_tracer.starts == 1

    def test_traced_usage_formatted(self, fake_tracer):
        fake_tracer.current = 1536
        assert usage(formatted=True) == "1.5 KB"

    def test_real_usage(self, fake_process):
        fake_process(rss=48 * 1024 * 1024)
        assert usage(real_usage=True) == 48 * 1024 * 1024
        assert usage(real_usage=True, formatted=True) == "48 MB"


class TestPeakUsage:

    def test_traced_peak(self, fake_tracer):
        fake_tracer.current, fake_tracer.peak = 1024, 4096
        assert peak_usage() == 4096
        assert peak_usage(formatted=True) == "4 KB"

    def test_real_peak_from_peak_working_set(self, fake_process):
        """Windows memory info reports the peak working set directly."""
        fake_process(rss=1024, peak_wset=3 * 1024 ** 3)
        assert peak_usage(real_usage=True) == 3 * 1024 ** 3
        assert peak_usage(real_usage=True, formatted=True) == "3 GB"

    @pytest.mark.skipif(sys.platform == "win32", reason="resource module is POSIX only")
    def test_real_peak_from_rusage(self, fake_process, monkeypatch):
        import resource

        fake_process(rss=1024)
        usage_ = type("RUsage", (), {"ru_maxrss": 2048})()
        monkeypatch.setattr(resource, "getrusage", lambda who: usage_)
        expected = 2048 if sys.platform == "darwin" else 2048 * 1024
        assert memory._peak_rss() == expected

    def test_live_counters(self):
        """Real counters of the running interpreter are positive byte counts."""
        assert usage(real_usage=True) > 0
        assert peak_usage(real_usage=True) >= 0
        assert usage(real_usage=True, formatted=True).endswith("B")


class TestReset:

    def test_reset_peak(self, fake_tracer):
        fake_tracer.current, fake_tracer.peak = 1024, 1024 ** 2
        reset()
        assert peak_usage() == 1024
        assert fake_tracer.starts == 1

    def test_reset_returns_none(self, fake_tracer):
        assert reset() is None
