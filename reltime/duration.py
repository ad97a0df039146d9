#
# reltime Durations
#

# Standard library -----------------------------------------------------------------------------------------------------
from collections.abc import Iterable, Mapping
from dataclasses import dataclass

# Local ----------------------------------------------------------------------------------------------------------------
from .units import TimeUnit

DEFAULT_TOLERANCE = 50


# Classes --------------------------------------------------------------------------------------------------------------

@dataclass(frozen=True)
class Duration:
    """
    A signed quantity of one time unit, as produced by decompose().

    Attributes:
        unit: The TimeUnit counted by this duration.
        quantity: Signed count of units; negative values lie in the past.
        delta: Signed leftover in milliseconds not covered by quantity, |delta| < unit.millis_per_unit.
    """

    unit: TimeUnit
    quantity: int
    delta: int | float = 0

    @property
    def is_in_past(self) -> bool:
        if self.quantity:
            return self.quantity < 0
        return self.delta < 0

    @property
    def is_in_future(self) -> bool:
        return not self.is_in_past

    @property
    def millis(self) -> int | float:
        """Total signed milliseconds covered, leftover included."""
        return self.quantity * self.unit.millis_per_unit + self.delta

    def quantity_rounded(self, tolerance: int | float = DEFAULT_TOLERANCE) -> int:
        """
        Quantity rounded up by one unit when the leftover reaches tolerance percent of the unit.

        The sign of the quantity is preserved and ties round up.

        Examples:
            >>> Duration(HOUR, -1, -45 * UnitsConf.MINUTE).quantity_rounded(50)
            -2
            >>> Duration(HOUR, 3, 10 * UnitsConf.MINUTE).quantity_rounded(50)
            3
        """
        magnitude = abs(self.quantity)
        if self.delta and abs(self.delta) / self.unit.millis_per_unit * 100 >= tolerance:
            magnitude += 1
        return -magnitude if self.is_in_past else magnitude


# Methods --------------------------------------------------------------------------------------------------------------

def largest_fitting(delta: int | float, units: Iterable[TimeUnit]) -> Duration:
    """
    Express delta in the first unit, smallest to largest, whose span can hold it.

    The span of a unit is millis_per_unit × max_quantity; a zero max_quantity is derived
    from the next larger unit, so 4 weeks move on to months once a month is registered.
    The largest unit holds any delta. A non-zero delta smaller than the chosen unit counts
    as one unit in its direction.

    Args:
        delta: Signed milliseconds, negative for the past.
        units: Units ascending by millis_per_unit.

    Returns:
        Duration with a leftover delta smaller than one chosen unit.

    Raises:
        ValueError: If units are empty or not ascending.
    """
    units = _checked_units(units)

    magnitude = abs(delta)
    sign = -1 if delta < 0 else 1
    last = len(units) - 1

    unit = units[last]
    for i, candidate in enumerate(units):
        cap = candidate.max_quantity
        if cap == 0 and i < last:
            cap = units[i + 1].millis_per_unit // candidate.millis_per_unit
        if candidate.millis_per_unit * cap > magnitude:
            unit = candidate
            break

    millis = unit.millis_per_unit
    if magnitude == 0:
        return Duration(unit, 0, 0)
    if millis > magnitude:
        return Duration(unit, sign, 0)

    quantity = int(magnitude // millis)
    leftover = magnitude - quantity * millis
    return Duration(unit, sign * quantity, sign * leftover)


def decompose(delta: int | float, units: Iterable[TimeUnit]) -> list[Duration]:
    """
    Break a signed millisecond delta into a coarsest-first list of durations.

    Each entry takes the leftover of the previous one until nothing is left, or until the
    same unit would be chosen twice in a row. Imprecise units are kept; filtering them is
    left to callers.

    Examples:
        >>> delta = -(2 * UnitsConf.HOUR + 2 * UnitsConf.MINUTE)
        >>> [(str(d.unit), d.quantity) for d in decompose(delta, default_units())]
        [('Hour', -2), ('Minute', -2)]
        >>> [(str(d.unit), d.quantity) for d in decompose(0, default_units())]
        [('JustNow', 0)]

    Raises:
        ValueError: If units are empty or not ascending.
    """
    units = _checked_units(units)

    duration = largest_fitting(delta, units)
    durations = [duration]
    while duration.delta != 0:
        following = largest_fitting(duration.delta, units)
        if following.unit == duration.unit:
            break
        durations.append(following)
        duration = following

    return durations


def leading(durations: Iterable[Duration]) -> Duration:
    """First entry with a non-zero quantity, or the first entry when all are zero."""
    durations = list(durations)
    if not durations:
        raise ValueError("Cannot take the leading entry of an empty sequence of durations")
    return next((d for d in durations if d.quantity != 0), durations[0])


def round_to_leading(
        durations: Iterable[Duration],
        tolerances: Mapping[TimeUnit, int | float] | None = None,
        default_tolerance: int | float = DEFAULT_TOLERANCE,
) -> Duration:
    """
    Collapse a decomposition into its rounded leading duration.

    The head is the first entry with a non-zero quantity, or the first entry when all are
    zero. The finer entries are dropped; their total is the head's leftover delta, which
    rounds the head up when it reaches the head unit's tolerance.

    Args:
        durations: Coarsest-first decomposition.
        tolerances: Rounding tolerance in percent per unit.
        default_tolerance: Tolerance for units missing from tolerances.

    Returns:
        The head, unchanged or rounded up with zero leftover. A zero quantity
        marks a negligible delta.

    Raises:
        ValueError: If durations are empty.
    """
    head = leading(durations)
    tolerance = default_tolerance if tolerances is None else tolerances.get(head.unit, default_tolerance)

    quantity = head.quantity_rounded(tolerance)
    if quantity == head.quantity:
        return head
    return Duration(head.unit, quantity, 0)


def _checked_units(units: Iterable[TimeUnit]) -> list[TimeUnit]:
    units = list(units)
    if not units:
        raise ValueError("No time units registered, register at least one unit before formatting")

    for unit in units:
        if not isinstance(unit, TimeUnit):
            raise TypeError(f"TimeUnit expected, got {type(unit).__name__}")

    for smaller, larger in zip(units, units[1:]):
        if smaller.millis_per_unit > larger.millis_per_unit:
            raise ValueError(f"Units must be ascending by millis_per_unit: {smaller} comes before {larger}")

    return units
