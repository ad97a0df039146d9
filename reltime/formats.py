#
# reltime Time Formats
#

# Standard library -----------------------------------------------------------------------------------------------------
import dataclasses
import math
import re
from dataclasses import dataclass
from typing import Self

# Local ----------------------------------------------------------------------------------------------------------------
from .duration import DEFAULT_TOLERANCE, Duration
from .resources import lookup
from .units import TimeUnit


class FormatConf:
    PATTERN = "%n %u"
    QUANTITY_TOKEN = "%n"
    UNIT_TOKEN = "%u"
    TOLERANCE = DEFAULT_TOLERANCE


_TOKENS = re.compile(f"{re.escape(FormatConf.QUANTITY_TOKEN)}|{re.escape(FormatConf.UNIT_TOKEN)}")

_TEXT_FIELDS = (
    "pattern",
    "singular_name",
    "plural_name",
    "past_singular_name",
    "past_plural_name",
    "future_singular_name",
    "future_plural_name",
    "literal",
    "past_prefix",
    "past_suffix",
    "future_prefix",
    "future_suffix",
)


# Classes --------------------------------------------------------------------------------------------------------------

@dataclass(frozen=True)
class TimeFormat:
    """
    Rendering rules for one time unit.

    Every text field left as None is resolved from the locale resources by the unit key
    at render time; an empty string is an explicit override. Instances are immutable,
    use replace() to derive a reconfigured copy.

    Attributes:
        pattern: Template where %n is the absolute quantity and %u the unit name.
                 Unknown %-sequences are kept as they are.
        singular_name, plural_name: Unit names, plural used for any quantity other than ±1.
        past_singular_name, past_plural_name, future_singular_name, future_plural_name:
            Names for one direction only, preferred over the generic names.
        literal: Fixed text rendered instead of the pattern, regardless of quantity.
        past_prefix, past_suffix, future_prefix, future_suffix: Directional decoration.
        rounding_tolerance: Percent of a unit the leftover must reach to round up, 0..100.

    Examples:
        >>> ticks = TimeFormat(singular_name="tick", plural_name="ticks", rounding_tolerance=20)
        >>> ticks.render(Duration(TimeUnit(5000), 5))
        '5 ticks'
    """

    pattern: str | None = None
    singular_name: str | None = None
    plural_name: str | None = None
    past_singular_name: str | None = None
    past_plural_name: str | None = None
    future_singular_name: str | None = None
    future_plural_name: str | None = None
    literal: str | None = None
    past_prefix: str | None = None
    past_suffix: str | None = None
    future_prefix: str | None = None
    future_suffix: str | None = None
    rounding_tolerance: int | float = FormatConf.TOLERANCE

    def __post_init__(self):
        for name in _TEXT_FIELDS:
            value = getattr(self, name)
            if value is not None and not isinstance(value, str):
                raise TypeError(f"{name} must be str | None, got {type(value).__name__}")

        tolerance = self.rounding_tolerance
        if isinstance(tolerance, bool) or not isinstance(tolerance, (int, float)):
            raise TypeError(f"rounding_tolerance must be int | float, got {type(tolerance).__name__}")
        if math.isnan(tolerance) or not 0 <= tolerance <= 100:
            raise ValueError(f"rounding_tolerance must be a percentage in [0, 100], got {tolerance}")

    def replace(self, **changes) -> Self:
        """Copy with the given fields changed."""
        return dataclasses.replace(self, **changes)

    def resolve(self, field: str, unit: TimeUnit, locale: str | None = None) -> str | None:
        """Field value if set, otherwise the locale resource for the unit, or None."""
        value = getattr(self, field)
        if value is not None:
            return value
        return lookup(locale, unit.key, field)

    def name(self, duration: Duration, locale: str | None = None, quantity: int | None = None) -> str:
        """
        Grammatically matching unit name for the duration.

        Explicit fields win over locale resources; within each, the direction-specific
        name wins over the generic one. Falls back to an empty string.
        """
        quantity = duration.quantity if quantity is None else quantity
        number = "singular" if abs(quantity) == 1 else "plural"
        direction = "past" if duration.is_in_past else "future"
        fields = (f"{direction}_{number}_name", f"{number}_name")

        for field in fields:
            value = getattr(self, field)
            if value is not None:
                return value
        for field in fields:
            value = lookup(locale, duration.unit.key, field)
            if value is not None:
                return value
        return ""

    def render(self, duration: Duration, locale: str | None = None, *, rounded: bool = False) -> str:
        """
        Undecorated text of a duration, e.g. '3 hours'.

        Args:
            duration: Duration to render.
            locale: Locale for unset fields.
            rounded: Round the quantity with this format's rounding_tolerance first.
        """
        literal = self.resolve("literal", duration.unit, locale)
        if literal is not None:
            return literal

        quantity = duration.quantity_rounded(self.rounding_tolerance) if rounded else duration.quantity
        pattern = self.resolve("pattern", duration.unit, locale)
        if pattern is None:
            pattern = FormatConf.PATTERN

        name = self.name(duration, locale, quantity)
        substitutions = {
            FormatConf.QUANTITY_TOKEN: str(abs(quantity)),
            FormatConf.UNIT_TOKEN: name,
        }
        return _TOKENS.sub(lambda match: substitutions[match.group()], pattern)

    def prefix(self, unit: TimeUnit, past: bool, locale: str | None = None) -> str:
        return self.resolve("past_prefix" if past else "future_prefix", unit, locale) or ""

    def suffix(self, unit: TimeUnit, past: bool, locale: str | None = None) -> str:
        return self.resolve("past_suffix" if past else "future_suffix", unit, locale) or ""

    def decorate(self, duration: Duration, text: str, locale: str | None = None) -> str:
        """Wrap rendered text with the prefix and suffix for the duration's direction."""
        past = duration.is_in_past
        return join_phrase(
            self.prefix(duration.unit, past, locale),
            text,
            self.suffix(duration.unit, past, locale),
        )


# Methods --------------------------------------------------------------------------------------------------------------

def join_phrase(*parts: str) -> str:
    """
    Join phrase parts with single spaces, collapsing runs of whitespace and trimming ends.

    Examples:
        >>> join_phrase("", "moments", "ago")
        'moments ago'
        >>> join_phrase("self destruct in: ", "5 ticks", "... RUN!")
        'self destruct in: 5 ticks ... RUN!'
    """
    return " ".join(" ".join(parts).split())
