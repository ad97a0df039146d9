#
# Pytest Fixtures
#

# Standard library -----------------------------------------------------------------------------------------------------
import datetime as dt

# Third-party ----------------------------------------------------------------------------------------------------------
import pytest

# Local ----------------------------------------------------------------------------------------------------------------
from reltime.formatter import RelativeFormatter
from reltime.units import MINUTE

REFERENCE = dt.datetime(2024, 3, 15, 12, 0, 0, tzinfo=dt.timezone.utc)


# Fixtures -------------------------------------------------------------------------------------------------------------

@pytest.fixture
def reference() -> dt.datetime:
    """Fixed UTC reference instant."""
    return REFERENCE


@pytest.fixture
def formatter(reference) -> RelativeFormatter:
    """English formatter with the default units at the fixed reference."""
    return RelativeFormatter(reference, locale="en")


@pytest.fixture
def minute_formatter(reference) -> RelativeFormatter:
    """English formatter with the minute as its only unit."""
    rf = RelativeFormatter(reference, locale="en")
    rf.clear_units()
    rf.register_unit(MINUTE)
    return rf
