"""Locale-aware formatting of dates, numbers and lists.

Thin wrappers over Babel's CLDR formatters. Parsed Babel locales and
percent patterns are cached per locale; clear_formatting_caches() resets
them. Input that cannot be interpreted is returned as ``str(value)`` rather
than raising, so a bad value never breaks a rendered page.

Usage:
    format_date(order.created_at, "fr", "long")     # "3 mars 2025"
    format_currency(1234.5, "ar", "EUR")
    format_relative_time(expires_at, "en")          # "in 3 hours"

    with provide_translations(context):
        fmt = use_formatter()
        fmt.number(1234567.891)
"""

import copy
from datetime import date, datetime, time, timedelta, timezone
from functools import lru_cache
from typing import Any, Iterable, Optional, Union

from babel import Locale as BabelLocale
from babel import UnknownLocaleError
from babel import dates as babel_dates
from babel import lists as babel_lists
from babel import numbers as babel_numbers

from infrastructure.i18n.models import Locale
from infrastructure.logging import get_module_logger

logger = get_module_logger()

FALLBACK_FORMAT_LOCALE = "en"

DATE_STYLES = ("short", "medium", "long", "full")
TIME_STYLES = ("short", "medium", "long")

_LIST_STYLES = {
    "conjunction": "standard",
    "disjunction": "or",
    "unit": "unit",
}

_ENGINEERING_PATTERN = "##0.###E0"

# Errors Babel and the date parsers raise for values they cannot format.
_FORMAT_ERRORS = (TypeError, ValueError, ArithmeticError, OverflowError, OSError)

DateInput = Union[datetime, date, int, float, str]
ReferenceTime = Optional[datetime]


@lru_cache(maxsize=64)
def get_babel_locale(locale: Locale) -> BabelLocale:
    """Parsed Babel locale for a locale code.

    Region subtags may use "-" or "_". Codes Babel does not know fall back
    to English.
    """
    try:
        return BabelLocale.parse(str(locale).replace("-", "_"))
    except (UnknownLocaleError, ValueError, TypeError):
        logger.debug("unknown_format_locale", locale=locale)
        return BabelLocale.parse(FALLBACK_FORMAT_LOCALE)


@lru_cache(maxsize=128)
def _percent_pattern(locale: Locale, decimals: int) -> babel_numbers.NumberPattern:
    babel_locale = get_babel_locale(locale)
    pattern = copy.copy(babel_numbers.parse_pattern(babel_locale.percent_formats[None]))
    pattern.frac_prec = (decimals, decimals)
    return pattern


def clear_formatting_caches() -> None:
    """Drop cached Babel locales, patterns and bound formatters."""
    get_babel_locale.cache_clear()
    _percent_pattern.cache_clear()
    get_formatter.cache_clear()


def to_datetime(value: DateInput) -> Optional[datetime]:
    """Interpret a date-like value.

    Accepts datetimes, dates (midnight), Unix timestamps in seconds and ISO
    8601 strings. Returns None for anything else.
    """
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, time())
    if isinstance(value, bool):
        return None
    try:
        if isinstance(value, (int, float)):
            return datetime.fromtimestamp(value, tz=timezone.utc)
        if isinstance(value, str):
            return datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    except _FORMAT_ERRORS:
        return None
    return None


def format_date(value: DateInput, locale: Locale, style: str = "medium") -> str:
    """Format the date part of a value.

    Args:
        value: datetime, date, Unix timestamp or ISO string.
        locale: Locale code.
        style: One of short, medium, long, full.

    Returns:
        Formatted date, or ``str(value)`` if it is not a date.
    """
    moment = to_datetime(value)
    if moment is None or style not in DATE_STYLES:
        return str(value)
    try:
        return babel_dates.format_date(moment.date(), format=style, locale=get_babel_locale(locale))
    except _FORMAT_ERRORS:
        return str(value)


def format_time(value: DateInput, locale: Locale, style: str = "short") -> str:
    """Format the time part of a value (short, medium or long)."""
    moment = to_datetime(value)
    if moment is None or style not in TIME_STYLES:
        return str(value)
    try:
        return babel_dates.format_time(moment, format=style, locale=get_babel_locale(locale))
    except _FORMAT_ERRORS:
        return str(value)


def format_datetime(
    value: DateInput,
    locale: Locale,
    date_style: str = "medium",
    time_style: str = "short",
) -> str:
    """Format date and time with independent styles.

    The locale's date-time pattern for ``date_style`` joins the two parts.
    """
    moment = to_datetime(value)
    if moment is None or date_style not in DATE_STYLES or time_style not in TIME_STYLES:
        return str(value)

    babel_locale = get_babel_locale(locale)
    try:
        date_part = babel_dates.format_date(moment.date(), format=date_style, locale=babel_locale)
        time_part = babel_dates.format_time(moment, format=time_style, locale=babel_locale)
        pattern = babel_dates.get_datetime_format(date_style, locale=babel_locale)
    except _FORMAT_ERRORS:
        return str(value)
    return pattern.replace("'", "").replace("{0}", time_part).replace("{1}", date_part)


def format_number(value: Any, locale: Locale, pattern: Optional[str] = None) -> str:
    """Format a number with the locale's decimal pattern or ``pattern``."""
    try:
        return babel_numbers.format_decimal(value, format=pattern, locale=get_babel_locale(locale))
    except _FORMAT_ERRORS:
        return str(value)


def format_currency(value: Any, locale: Locale, currency: str = "USD") -> str:
    """Format an amount in ``currency`` (ISO 4217 code)."""
    try:
        return babel_numbers.format_currency(value, currency, locale=get_babel_locale(locale))
    except _FORMAT_ERRORS:
        return str(value)


def format_percent(value: Any, locale: Locale, decimals: int = 0) -> str:
    """Format a ratio as a percentage with exactly ``decimals`` digits.

    0.256 -> "26%" (en), "25,6 %" (fr, decimals=1)
    """
    try:
        pattern = _percent_pattern(locale, max(int(decimals), 0))
        return pattern.apply(value, get_babel_locale(locale))
    except _FORMAT_ERRORS:
        return str(value)


def format_compact(value: Any, locale: Locale, notation: str = "compact") -> str:
    """Format a number in compact (1.2K), scientific or engineering notation."""
    babel_locale = get_babel_locale(locale)
    try:
        if notation == "scientific":
            return babel_numbers.format_scientific(value, locale=babel_locale)
        if notation == "engineering":
            return babel_numbers.format_scientific(
                value, format=_ENGINEERING_PATTERN, locale=babel_locale
            )
        return babel_numbers.format_compact_decimal(
            value, format_type="short", fraction_digits=1, locale=babel_locale
        )
    except _FORMAT_ERRORS:
        return str(value)


def format_relative_time(
    value: DateInput, locale: Locale, now: ReferenceTime = None
) -> str:
    """Describe a moment relative to ``now`` ("3 hours ago", "in 2 days").

    The largest unit with a magnitude of at least one is used. Naive
    datetimes are taken as UTC.
    """
    moment = to_datetime(value)
    if moment is None:
        return str(value)

    now = now or datetime.now(timezone.utc)
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)

    delta: timedelta = moment - now
    try:
        return babel_dates.format_timedelta(
            delta,
            threshold=1,
            add_direction=True,
            locale=get_babel_locale(locale),
        )
    except _FORMAT_ERRORS:
        return str(value)


def format_list(items: Iterable[Any], locale: Locale, style: str = "conjunction") -> str:
    """Join items as a locale-aware list ("A, B, and C").

    Args:
        items: Items to join; each is converted with str().
        locale: Locale code.
        style: conjunction ("and"), disjunction ("or") or unit.
    """
    values = [str(item) for item in items]
    try:
        return babel_lists.format_list(
            values, style=_LIST_STYLES.get(style, "standard"), locale=get_babel_locale(locale)
        )
    except _FORMAT_ERRORS:
        return ", ".join(values)


class LocaleFormatter:
    """Formatting helpers bound to one locale.

    Handed out by TranslationContext.formatter and use_formatter(), so
    rendering code formats values in the active locale without passing it.
    """

    def __init__(self, locale: Locale):
        self.locale = locale

    def date(self, value: DateInput, style: str = "medium") -> str:
        return format_date(value, self.locale, style)

    def time(self, value: DateInput, style: str = "short") -> str:
        return format_time(value, self.locale, style)

    def datetime(
        self, value: DateInput, date_style: str = "medium", time_style: str = "short"
    ) -> str:
        return format_datetime(value, self.locale, date_style, time_style)

    def number(self, value: Any, pattern: Optional[str] = None) -> str:
        return format_number(value, self.locale, pattern)

    def currency(self, value: Any, currency: str = "USD") -> str:
        return format_currency(value, self.locale, currency)

    def percent(self, value: Any, decimals: int = 0) -> str:
        return format_percent(value, self.locale, decimals)

    def compact(self, value: Any, notation: str = "compact") -> str:
        return format_compact(value, self.locale, notation)

    def relative_time(self, value: DateInput, now: ReferenceTime = None) -> str:
        return format_relative_time(value, self.locale, now)

    def list(self, items: Iterable[Any], style: str = "conjunction") -> str:
        return format_list(items, self.locale, style)

    def __repr__(self) -> str:
        return f"LocaleFormatter(locale={self.locale!r})"


@lru_cache(maxsize=64)
def get_formatter(locale: Locale) -> LocaleFormatter:
    """Shared LocaleFormatter for a locale."""
    return LocaleFormatter(locale)
