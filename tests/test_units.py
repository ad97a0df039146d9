#
# reltime - Units Tests
#

# Third-party ----------------------------------------------------------------------------------------------------------
import pytest

# Local ----------------------------------------------------------------------------------------------------------------
from reltime.units import (
    JUST_NOW, MILLISECOND, MINUTE, HOUR, MONTH, YEAR, MILLENNIUM,
    TimeUnit, UnitKey, UnitsConf, default_units, sort_units,
)


# Tests ----------------------------------------------------------------------------------------------------------------

class TestTimeUnit:

    def test_defaults(self):
        """Bare unit is precise, uncapped and keyless."""
        unit = TimeUnit(5000)
        assert unit.max_quantity == 0
        assert unit.is_precise is True
        assert unit.key == ""
        assert str(unit) == "5000ms"

    def test_equality_by_fields(self):
        """Units compare and hash by value."""
        assert TimeUnit(60_000, key="Minute") == MINUTE
        assert hash(TimeUnit(60_000, key="Minute")) == hash(MINUTE)
        assert TimeUnit(60_000) != MINUTE

    def test_frozen(self):
        """Units are immutable."""
        with pytest.raises(AttributeError):
            MINUTE.millis_per_unit = 1  # type: ignore[misc]

    @pytest.mark.parametrize(
        "kwargs, error",
        [
            pytest.param(dict(millis_per_unit=0), ValueError, id="zero-millis"),
            pytest.param(dict(millis_per_unit=-5), ValueError, id="negative-millis"),
            pytest.param(dict(millis_per_unit=float("inf")), ValueError, id="inf-millis"),
            pytest.param(dict(millis_per_unit="1000"), TypeError, id="str-millis"),
            pytest.param(dict(millis_per_unit=True), TypeError, id="bool-millis"),
            pytest.param(dict(millis_per_unit=1000, max_quantity=-1), ValueError, id="negative-max"),
            pytest.param(dict(millis_per_unit=1000, max_quantity=1.5), TypeError, id="float-max"),
            pytest.param(dict(millis_per_unit=1000, key=None), TypeError, id="none-key"),
        ],
    )
    def test_invalid(self, kwargs, error):
        """Reject invalid unit fields."""
        with pytest.raises(error):
            TimeUnit(**kwargs)


class TestDefaultUnits:

    def test_cascade_ratios(self):
        """Fixed ratios between neighbouring units."""
        assert HOUR.millis_per_unit == 60 * MINUTE.millis_per_unit
        assert YEAR.millis_per_unit == 12 * MONTH.millis_per_unit
        assert MILLENNIUM.millis_per_unit == 1000 * YEAR.millis_per_unit
        assert MONTH.millis_per_unit == 2_629_743_830

    def test_just_now_first(self):
        """Just-now unit is tried before the millisecond."""
        units = default_units()
        assert units[0] == JUST_NOW
        assert units[1] == MILLISECOND
        assert JUST_NOW.max_quantity == UnitsConf.JUST_NOW_MAX
        assert JUST_NOW.is_precise is False

    def test_keys(self):
        """Every unit key appears once."""
        assert [unit.key for unit in default_units()] == list(UnitKey)


class TestSortUnits:

    def test_ascending_and_stable(self):
        """Sort ascending, ties keep their order."""
        tick = TimeUnit(1, key="Tick")
        assert sort_units([HOUR, tick, MINUTE, JUST_NOW]) == [tick, JUST_NOW, MINUTE, HOUR]
