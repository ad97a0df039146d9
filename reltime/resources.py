"""
reltime Locale Resources

Built-in text bundles for the default units, keyed by locale, unit key and field.

Fields:
    pattern: Template with %n (quantity) and %u (unit name) tokens
    singular_name, plural_name: Unit names
    past_singular_name, past_plural_name, future_singular_name, future_plural_name:
        Names inflected by direction, for languages that need them
    literal: Fixed text replacing the pattern (just-now phrase)
    past_prefix, past_suffix, future_prefix, future_suffix: Directional decoration

Lookups walk from the most specific locale to the root bundle, field by field,
so a regional bundle only needs the fields that differ from its language.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import locale as _locale
import logging
from functools import lru_cache

# Third-party ----------------------------------------------------------------------------------------------------------
from frozendict import frozendict

# Local ----------------------------------------------------------------------------------------------------------------
from .units import UnitKey

logger = logging.getLogger(__name__)

FIELDS = (
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


# Methods --------------------------------------------------------------------------------------------------------------

_NO_DECORATION = frozendict(past_prefix="", past_suffix="", future_prefix="", future_suffix="")


def _decorated(**fields: str) -> frozendict:
    # Decoration is always complete, a bundle never inherits another language's prefix or suffix
    return frozendict({**_NO_DECORATION, **fields})


def _unit(singular: str, plural: str, **fields: str) -> frozendict:
    return _decorated(pattern="%n %u", singular_name=singular, plural_name=plural, **fields)


def _en(singular: str, plural: str) -> frozendict:
    return _unit(singular, plural, past_suffix="ago", future_suffix="from now")


def _de(singular: str, plural: str, dative_plural: str | None = None) -> frozendict:
    dative_plural = dative_plural or plural
    return _unit(singular, plural,
                 past_prefix="vor", future_prefix="in",
                 past_plural_name=dative_plural, future_plural_name=dative_plural)


# Configuration --------------------------------------------------------------------------------------------------------

# @formatter:off

class ResourcesConf:
    ROOT_LOCALE = "en"

    BUNDLES = frozendict({
        "en": frozendict({
            UnitKey.JUST_NOW:    _decorated(literal="moments", past_suffix="ago", future_suffix="from now"),
            UnitKey.MILLISECOND: _en("millisecond", "milliseconds"),
            UnitKey.SECOND:      _en("second", "seconds"),
            UnitKey.MINUTE:      _en("minute", "minutes"),
            UnitKey.HOUR:        _en("hour", "hours"),
            UnitKey.DAY:         _en("day", "days"),
            UnitKey.WEEK:        _en("week", "weeks"),
            UnitKey.MONTH:       _en("month", "months"),
            UnitKey.YEAR:        _en("year", "years"),
            UnitKey.DECADE:      _en("decade", "decades"),
            UnitKey.CENTURY:     _en("century", "centuries"),
            UnitKey.MILLENNIUM:  _en("millennium", "millennia"),
        }),
        "de": frozendict({
            UnitKey.JUST_NOW:    _decorated(literal="einem Augenblick", past_prefix="vor", future_prefix="in"),
            UnitKey.MILLISECOND: _de("Millisekunde", "Millisekunden"),
            UnitKey.SECOND:      _de("Sekunde", "Sekunden"),
            UnitKey.MINUTE:      _de("Minute", "Minuten"),
            UnitKey.HOUR:        _de("Stunde", "Stunden"),
            UnitKey.DAY:         _de("Tag", "Tage", "Tagen"),
            UnitKey.WEEK:        _de("Woche", "Wochen"),
            UnitKey.MONTH:       _de("Monat", "Monate", "Monaten"),
            UnitKey.YEAR:        _de("Jahr", "Jahre", "Jahren"),
            UnitKey.DECADE:      _de("Jahrzehnt", "Jahrzehnte", "Jahrzehnten"),
            UnitKey.CENTURY:     _de("Jahrhundert", "Jahrhunderte", "Jahrhunderten"),
            UnitKey.MILLENNIUM:  _de("Jahrtausend", "Jahrtausende", "Jahrtausenden"),
        }),
    })

# @formatter:on


# Lookups --------------------------------------------------------------------------------------------------------------

def normalize_locale(identifier: str | None) -> str:
    """
    Normalize a locale identifier to the language[_REGION] form used by the bundles.

    Encodings and modifiers are dropped, hyphens become underscores. Empty or None
    identifiers, and the C/POSIX locales, map to the root locale.

    Examples:
        >>> normalize_locale("de-de")
        'de_DE'
        >>> normalize_locale("en_US.UTF-8")
        'en_US'
        >>> normalize_locale(None)
        'en'
    """
    if identifier is None:
        return ResourcesConf.ROOT_LOCALE
    if not isinstance(identifier, str):
        raise TypeError(f"locale identifier must be str | None, got {type(identifier).__name__}")

    identifier = identifier.split(".", 1)[0].split("@", 1)[0].strip().replace("-", "_")
    if not identifier or identifier.upper() in ("C", "POSIX"):
        return ResourcesConf.ROOT_LOCALE

    language, _, region = identifier.partition("_")
    if region:
        return f"{language.lower()}_{region.upper()}"
    return language.lower()


def locale_chain(identifier: str | None) -> tuple[str, ...]:
    """Candidate bundle locales, most specific first, ending with the root locale."""
    normalized = normalize_locale(identifier)
    chain = [normalized]
    language = normalized.partition("_")[0]
    if language != normalized:
        chain.append(language)
    if ResourcesConf.ROOT_LOCALE not in chain:
        chain.append(ResourcesConf.ROOT_LOCALE)
    return tuple(chain)


@lru_cache(maxsize=64)
def resolve_locale(identifier: str | None) -> str:
    """The most specific locale with a built-in bundle."""
    chain = locale_chain(identifier)
    for candidate in chain:
        if candidate in ResourcesConf.BUNDLES:
            if candidate != chain[0]:
                logger.debug("No resource bundle for locale %r, using %r", chain[0], candidate)
            return candidate
    return ResourcesConf.ROOT_LOCALE


def lookup(identifier: str | None, unit_key: str, field: str) -> str | None:
    """
    Resolve a resource string for a unit in a locale.

    Args:
        identifier: Locale identifier, e.g. "de", "en_GB", "de-AT".
        unit_key: Unit resource key, e.g. UnitKey.MINUTE.
        field: One of FIELDS.

    Returns:
        The string from the most specific bundle defining it, or None when no bundle
        knows the unit or field.

    Raises:
        ValueError: If field is not a known resource field.
    """
    if field not in FIELDS:
        raise ValueError(f"Unknown resource field {field!r}, expected one of {FIELDS}")

    for candidate in locale_chain(identifier):
        unit_fields = ResourcesConf.BUNDLES.get(candidate, frozendict()).get(unit_key)
        if unit_fields is not None and field in unit_fields:
            return unit_fields[field]
    return None


def available_locales() -> tuple[str, ...]:
    return tuple(ResourcesConf.BUNDLES)


def default_locale() -> str:
    """The process locale normalized, or the root locale when it is unset or unknown."""
    try:
        identifier = _locale.getlocale()[0]
    except ValueError:
        identifier = None
    return normalize_locale(identifier)


# Module Sanity Checks -------------------------------------------------------------------------------------------------

# The root bundle backs every lookup, so it must cover all built-in units.
if set(ResourcesConf.BUNDLES[ResourcesConf.ROOT_LOCALE]) != set(UnitKey):
    raise AssertionError("Configuration Error: the root resource bundle must define every UnitKey.")

for _bundle in ResourcesConf.BUNDLES.values():
    for _fields in _bundle.values():
        if not set(_fields) <= set(FIELDS):
            raise AssertionError(f"Configuration Error: unknown resource fields {set(_fields) - set(FIELDS)}")
