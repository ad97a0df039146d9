#
# reltime Time Units
#

# Standard library -----------------------------------------------------------------------------------------------------
import math
from dataclasses import dataclass
from enum import StrEnum, unique


# @formatter:off

class UnitsConf:
    """Fixed millisecond ratios of the default unit cascade."""
    MILLISECOND = 1
    SECOND      = 1000
    MINUTE      = 60 * SECOND
    HOUR        = 60 * MINUTE
    DAY         = 24 * HOUR
    WEEK        = 7 * DAY
    MONTH       = 2_629_743_830     # average Gregorian month
    YEAR        = 12 * MONTH
    DECADE      = 10 * YEAR
    CENTURY     = 10 * DECADE
    MILLENNIUM  = 10 * CENTURY

    JUST_NOW_MAX = 60 * SECOND      # below one minute a delta is "moments"


units_conf = UnitsConf()

# @formatter:on

# Classes --------------------------------------------------------------------------------------------------------------

@unique
class UnitKey(StrEnum):
    """Resource keys of the built-in units."""
    JUST_NOW = "JustNow"
    MILLISECOND = "Millisecond"
    SECOND = "Second"
    MINUTE = "Minute"
    HOUR = "Hour"
    DAY = "Day"
    WEEK = "Week"
    MONTH = "Month"
    YEAR = "Year"
    DECADE = "Decade"
    CENTURY = "Century"
    MILLENNIUM = "Millennium"


@dataclass(frozen=True)
class TimeUnit:
    """
    Static description of a time granularity.

    Attributes:
        millis_per_unit: Length of one unit in milliseconds, must be positive.
        max_quantity: Largest count of this unit before the next coarser unit takes over.
                      0 means the cap is derived from the next registered unit.
        is_precise: Hint for precise breakdowns; imprecise units are dropped from them
                    unless they are the only entry.
        key: Resource key used to resolve names and directional text for a locale.

    Examples:
        >>> TimeUnit(5000, key="Tick")
        TimeUnit(millis_per_unit=5000, max_quantity=0, is_precise=True, key='Tick')
    """

    millis_per_unit: int | float
    max_quantity: int = 0
    is_precise: bool = True
    key: str = ""

    def __post_init__(self):
        if isinstance(self.millis_per_unit, bool) or not isinstance(self.millis_per_unit, (int, float)):
            raise TypeError(f"millis_per_unit must be int | float, got {type(self.millis_per_unit).__name__}")
        if not math.isfinite(self.millis_per_unit) or self.millis_per_unit <= 0:
            raise ValueError(f"millis_per_unit must be a positive finite number, got {self.millis_per_unit}")

        if isinstance(self.max_quantity, bool) or not isinstance(self.max_quantity, int):
            raise TypeError(f"max_quantity must be int, got {type(self.max_quantity).__name__}")
        if self.max_quantity < 0:
            raise ValueError(f"max_quantity must be >= 0, got {self.max_quantity}")

        if not isinstance(self.key, str):
            raise TypeError(f"key must be str, got {type(self.key).__name__}")

    def __str__(self):
        return f"{self.key}" if self.key else f"{self.millis_per_unit}ms"


# @formatter:off

JUST_NOW    = TimeUnit(UnitsConf.MILLISECOND, max_quantity=UnitsConf.JUST_NOW_MAX,
                       is_precise=False, key=UnitKey.JUST_NOW)
MILLISECOND = TimeUnit(UnitsConf.MILLISECOND, key=UnitKey.MILLISECOND)
SECOND      = TimeUnit(UnitsConf.SECOND, key=UnitKey.SECOND)
MINUTE      = TimeUnit(UnitsConf.MINUTE, key=UnitKey.MINUTE)
HOUR        = TimeUnit(UnitsConf.HOUR, key=UnitKey.HOUR)
DAY         = TimeUnit(UnitsConf.DAY, key=UnitKey.DAY)
WEEK        = TimeUnit(UnitsConf.WEEK, key=UnitKey.WEEK)
MONTH       = TimeUnit(UnitsConf.MONTH, key=UnitKey.MONTH)
YEAR        = TimeUnit(UnitsConf.YEAR, key=UnitKey.YEAR)
DECADE      = TimeUnit(UnitsConf.DECADE, key=UnitKey.DECADE)
CENTURY     = TimeUnit(UnitsConf.CENTURY, key=UnitKey.CENTURY)
MILLENNIUM  = TimeUnit(UnitsConf.MILLENNIUM, key=UnitKey.MILLENNIUM)

# @formatter:on

# Methods --------------------------------------------------------------------------------------------------------------

def default_units() -> tuple[TimeUnit, ...]:
    """
    The built-in cascade, ascending by unit length.

    JUST_NOW precedes MILLISECOND: both are one millisecond long, and the first
    registered of equally long units is tried first.
    """
    return (
        JUST_NOW, MILLISECOND, SECOND, MINUTE, HOUR, DAY,
        WEEK, MONTH, YEAR, DECADE, CENTURY, MILLENNIUM,
    )


def sort_units(units) -> list[TimeUnit]:
    """Stable ascending sort by millis_per_unit, ties keep their order."""
    return sorted(units, key=lambda unit: unit.millis_per_unit)


# Module Sanity Checks -------------------------------------------------------------------------------------------------

# Ensure every default unit has a resource key and the cascade is ordered.
if {unit.key for unit in default_units()} != set(UnitKey):
    raise AssertionError("Configuration Error: every UnitKey must have exactly one default TimeUnit.")

if list(default_units()) != sort_units(default_units()):
    raise AssertionError("Configuration Error: default_units() must be ascending by millis_per_unit.")
