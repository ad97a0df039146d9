"""
reltime Relative Formatter

Human-readable relative time between a target instant and a reference instant:

    >>> import datetime as dt
    >>> ref = dt.datetime(2024, 1, 1, 12, tzinfo=dt.timezone.utc)
    >>> rf = RelativeFormatter(ref, locale="en")
    >>> rf.format(ref - dt.timedelta(hours=3))
    '3 hours ago'
    >>> rf.format(ref + dt.timedelta(hours=1, minutes=45))
    '2 hours from now'
    >>> rf.format(rf.calculate_precise_duration(ref - dt.timedelta(days=3, hours=15, minutes=38)))
    '3 days 15 hours 38 minutes ago'

A formatter owns mutable state (unit registry, reference, locale) and is not safe for
mutation concurrent with formatting; use copy() to hand out independent instances.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import datetime as dt
import logging
from collections.abc import Iterable, Sequence

# Local ----------------------------------------------------------------------------------------------------------------
from .duration import Duration, decompose, leading, round_to_leading
from .formats import TimeFormat, join_phrase
from .instants import Instant, now_millis, to_millis
from .resources import default_locale, normalize_locale, resolve_locale
from .units import JUST_NOW, TimeUnit, UnitKey, default_units, sort_units

logger = logging.getLogger(__name__)


# Classes --------------------------------------------------------------------------------------------------------------

class RelativeFormatter:
    """
    Formats instants and duration sequences relative to a reference instant.

    Args:
        reference: Reference instant; optional, defaults to the current time at construction.
        locale: Locale identifier; optional, defaults to the process locale.
        units: Units to register with locale-backed formats; None registers default_units().
        tz: Zone for naive datetimes and dates passed as reference.

    Notes:
        - Registry order is ascending by millis_per_unit, equally long units keep their
          registration order.
        - Registering a unit equal to a registered one replaces its format.
        - Deltas the units resolve to a zero quantity render the just-now phrase
          ("moments ago", "moments from now").
    """

    def __init__(
            self,
            reference: Instant | None = None,
            locale: str | None = None,
            units: Iterable[TimeUnit] | None = None,
            *,
            tz: dt.tzinfo | None = None,
    ):
        self._reference = now_millis() if reference is None else to_millis(reference, tz)
        self._locale = default_locale() if locale is None else normalize_locale(locale)
        self._formats: dict[TimeUnit, TimeFormat] = {}
        self._units: list[TimeUnit] = []

        for unit in default_units() if units is None else units:
            self.register_unit(unit)

    def __repr__(self):
        units = ", ".join(str(unit) for unit in self._units)
        return f"{type(self).__name__}(reference={self._reference}, locale={self._locale!r}, units=[{units}])"

    # ----- Session state -----

    @property
    def reference(self) -> int:
        """Reference instant in epoch milliseconds."""
        return self._reference

    def set_reference(self, instant: Instant, *, tz: dt.tzinfo | None = None) -> None:
        self._reference = to_millis(instant, tz)

    @property
    def locale(self) -> str:
        return self._locale

    def set_locale(self, identifier: str | None) -> None:
        """Set the locale; None restores the process locale."""
        self._locale = default_locale() if identifier is None else normalize_locale(identifier)
        logger.debug("Locale set to %r, resources from %r", self._locale, resolve_locale(self._locale))

    def copy(self, *, reference: Instant | None = None, locale: str | None = None) -> "RelativeFormatter":
        """
        Independent formatter with the same registry.

        Reference and locale are kept unless given.
        """
        clone = type(self).__new__(type(self))
        clone._reference = self._reference if reference is None else to_millis(reference)
        clone._locale = self._locale if locale is None else normalize_locale(locale)
        clone._formats = dict(self._formats)
        clone._units = list(self._units)
        return clone

    # ----- Unit registry -----

    @property
    def units(self) -> tuple[TimeUnit, ...]:
        """Registered units, ascending by millis_per_unit."""
        return tuple(self._units)

    def register_unit(self, unit: TimeUnit, fmt: TimeFormat | None = None) -> None:
        """
        Register a unit with its format, replacing the format of an equal unit.

        Args:
            unit: Unit to register.
            fmt: Format of the unit; None uses a format resolved from locale resources.
        """
        if not isinstance(unit, TimeUnit):
            raise TypeError(f"unit must be TimeUnit, got {type(unit).__name__}")
        if fmt is None:
            fmt = TimeFormat()
        elif not isinstance(fmt, TimeFormat):
            raise TypeError(f"fmt must be TimeFormat | None, got {type(fmt).__name__}")

        replaced = unit in self._formats
        self._formats[unit] = fmt
        self._units = sort_units(self._formats)
        logger.debug("%s unit %s", "Replaced" if replaced else "Registered", unit)

    def remove_unit(self, unit: TimeUnit) -> TimeFormat | None:
        """Unregister a unit; returns its format, or None if it was not registered."""
        fmt = self._formats.pop(unit, None)
        if fmt is not None:
            self._units = sort_units(self._formats)
            logger.debug("Removed unit %s", unit)
        return fmt

    def clear_units(self) -> None:
        """Remove all units; formatting fails until units are registered again."""
        self._formats.clear()
        self._units = []
        logger.debug("Cleared all units")

    def get_unit(self, key: str) -> TimeUnit | None:
        """Registered unit with the given resource key, or None."""
        return next((unit for unit in self._units if unit.key == key), None)

    def get_format(self, unit: TimeUnit) -> TimeFormat | None:
        """Format registered for unit, or None."""
        return self._formats.get(unit)

    # ----- Durations -----

    def calculate_precise_duration(self, target: Instant, *, tz: dt.tzinfo | None = None) -> list[Duration]:
        """
        Multi-unit breakdown of target relative to the reference, coarsest first.

        Entries after the first are kept only when their quantity is non-zero and their
        unit is precise, so the sub-minute remainder absorbed by the just-now unit is dropped.

        Raises:
            TypeError: If target is None or not an instant.
            ValueError: If no units are registered.
        """
        head, *tail = decompose(self._delta(target, tz), self._units)
        return [head] + [d for d in tail if d.quantity != 0 and d.unit.is_precise]

    # ----- Formatting -----

    def format(self, target: Instant | Sequence[Duration], *, tz: dt.tzinfo | None = None) -> str:
        """
        Rounded phrase with direction, e.g. '2 hours ago' or '3 days 15 hours from now'.

        Args:
            target: Instant to format, or a duration sequence from calculate_precise_duration().
            tz: Zone for a naive datetime or date target.
        """
        return self._format(target, tz, rounded=True, decorated=True)

    def format_unrounded(self, target: Instant | Sequence[Duration], *, tz: dt.tzinfo | None = None) -> str:
        """Like format() without rounding up by the leftover."""
        return self._format(target, tz, rounded=False, decorated=True)

    def format_duration(self, target: Instant | Sequence[Duration], *, tz: dt.tzinfo | None = None) -> str:
        """Like format() without prefix and suffix, e.g. '2 hours'."""
        return self._format(target, tz, rounded=True, decorated=False)

    def format_duration_unrounded(
            self,
            target: Instant | Sequence[Duration],
            *,
            tz: dt.tzinfo | None = None,
    ) -> str:
        """Like format_duration() without rounding."""
        return self._format(target, tz, rounded=False, decorated=False)

    # ----- Private -----

    def _delta(self, target: Instant, tz: dt.tzinfo | None) -> int:
        return to_millis(target, tz) - self._reference

    def _format(self, target, tz, *, rounded: bool, decorated: bool) -> str:
        if isinstance(target, (list, tuple)):
            return self._format_sequence(target, rounded=rounded, decorated=decorated)

        durations = decompose(self._delta(target, tz), self._units)
        if rounded:
            duration = round_to_leading(durations, self._tolerances())
        else:
            duration = leading(durations)

        if duration.quantity == 0:
            return self._negligible(duration.is_in_past, decorated)

        fmt = self._format_of(duration.unit)
        text = fmt.render(duration, self._locale)
        return fmt.decorate(duration, text, self._locale) if decorated else text

    def _format_sequence(self, durations: Sequence[Duration], *, rounded: bool, decorated: bool) -> str:
        if not durations:
            raise ValueError("Cannot format an empty sequence of durations")
        for duration in durations:
            if not isinstance(duration, Duration):
                raise TypeError(f"Duration sequence expected, got item of type {type(duration).__name__}")

        shown = [d for d in durations if d.quantity != 0]
        if not shown:
            return self._negligible(durations[0].is_in_past, decorated)

        fragments = []
        for i, duration in enumerate(shown):
            last = i == len(shown) - 1
            fragments.append(self._format_of(duration.unit).render(duration, self._locale, rounded=rounded and last))
        text = " ".join(fragments)
        if not decorated:
            return text

        first, final = shown[0], shown[-1]
        past = first.is_in_past
        return join_phrase(
            self._format_of(first.unit).prefix(first.unit, past, self._locale),
            text,
            self._format_of(final.unit).suffix(final.unit, past, self._locale),
        )

    def _negligible(self, past: bool, decorated: bool) -> str:
        unit = self.get_unit(UnitKey.JUST_NOW) or JUST_NOW
        fmt = self._format_of(unit)
        text = fmt.render(Duration(unit, 0), self._locale)
        if not decorated:
            return text
        return join_phrase(fmt.prefix(unit, past, self._locale), text, fmt.suffix(unit, past, self._locale))

    def _format_of(self, unit: TimeUnit) -> TimeFormat:
        # Durations may outlive the registry they were calculated with
        fmt = self._formats.get(unit)
        return TimeFormat() if fmt is None else fmt

    def _tolerances(self) -> dict[TimeUnit, int | float]:
        return {unit: fmt.rounding_tolerance for unit, fmt in self._formats.items()}
