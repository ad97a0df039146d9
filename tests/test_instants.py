#
# reltime - Instants Tests
#

# Standard library -----------------------------------------------------------------------------------------------------
import datetime as dt
import time

# Third-party ----------------------------------------------------------------------------------------------------------
import pytest

# Local ----------------------------------------------------------------------------------------------------------------
from reltime.instants import now_millis, to_millis

UTC = dt.timezone.utc
BERLIN_WINTER = dt.timezone(dt.timedelta(hours=1))


# Tests ----------------------------------------------------------------------------------------------------------------

class TestToMillis:

    @pytest.mark.parametrize(
        "value, tz, expected",
        [
            pytest.param(dt.datetime(1970, 1, 1, 0, 0, 1, tzinfo=UTC), None, 1000, id="aware"),
            pytest.param(dt.datetime(1970, 1, 1, 1, 0, 0, tzinfo=BERLIN_WINTER), None, 0, id="aware-offset"),
            pytest.param(dt.datetime(1970, 1, 1, 0, 0, 0, 1500, tzinfo=UTC), None, 1, id="sub-millisecond"),
            pytest.param(dt.datetime(1969, 12, 31, 23, 59, 59, 999500, tzinfo=UTC), None, -1, id="pre-epoch"),
            pytest.param(dt.datetime(1970, 1, 2), UTC, 86_400_000, id="naive-with-tz"),
            pytest.param(dt.date(1970, 1, 2), UTC, 86_400_000, id="date-utc"),
            pytest.param(dt.date(1970, 1, 2), BERLIN_WINTER, 82_800_000, id="date-offset"),
            pytest.param(1234, None, 1234, id="int"),
            pytest.param(-1234, None, -1234, id="negative-int"),
            pytest.param(1234.9, None, 1234, id="float"),
        ],
    )
    def test_convert(self, value, tz, expected):
        """Convert instants to epoch milliseconds."""
        assert to_millis(value, tz) == expected

    def test_aware_ignores_tz(self):
        """Aware datetimes keep their own zone."""
        value = dt.datetime(1970, 1, 1, 0, 0, 1, tzinfo=UTC)
        assert to_millis(value, BERLIN_WINTER) == 1000

    def test_naive_is_local(self):
        """Naive datetimes are local time."""
        value = dt.datetime(2024, 3, 15, 12, 0, 0)
        assert to_millis(value) == int(value.timestamp()) * 1000

    def test_far_past(self):
        """Dates far before the epoch."""
        assert to_millis(dt.date(100, 1, 1), UTC) == -59_011_459_200_000

    @pytest.mark.parametrize(
        "value, error",
        [
            pytest.param(None, TypeError, id="none"),
            pytest.param("2024-01-01", TypeError, id="str"),
            pytest.param(True, TypeError, id="bool"),
            pytest.param(float("nan"), ValueError, id="nan"),
            pytest.param(float("inf"), ValueError, id="inf"),
        ],
    )
    def test_invalid(self, value, error):
        """Reject missing and unsupported instants."""
        with pytest.raises(error):
            to_millis(value)


class TestNowMillis:

    def test_now(self):
        """Current time in milliseconds."""
        before = time.time_ns() // 1_000_000
        now = now_millis()
        after = time.time_ns() // 1_000_000
        assert before <= now <= after
