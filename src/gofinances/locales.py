"""Locale presets and the formatting helpers that use them.

Formatting never reads process locale state: every helper receives the
``LocaleConfig`` it should use.
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal, localcontext

from .errors import UnknownLocaleError

CENTS = Decimal("0.01")


@dataclass(frozen=True)
class LocaleConfig:
    """Formatting conventions for one locale."""

    code: str
    currency_symbol: str
    decimal_separator: str
    thousands_separator: str
    currency_pattern: str  # uses {symbol} and {number}
    month_names: tuple[str, ...]
    long_date_pattern: str  # uses {day} and {month}
    short_date_pattern: str  # uses {day}, {month} and {year}
    interval_prefix: str
    no_transactions: str


PT_BR = LocaleConfig(
    code="pt-BR",
    currency_symbol="R$",
    decimal_separator=",",
    thousands_separator=".",
    currency_pattern="{symbol} {number}",
    month_names=(
        "janeiro",
        "fevereiro",
        "março",
        "abril",
        "maio",
        "junho",
        "julho",
        "agosto",
        "setembro",
        "outubro",
        "novembro",
        "dezembro",
    ),
    long_date_pattern="{day} de {month}",
    short_date_pattern="{day:02d}/{month:02d}/{year:02d}",
    interval_prefix="01 a",
    no_transactions="Não há transações",
)

EN_US = LocaleConfig(
    code="en-US",
    currency_symbol="$",
    decimal_separator=".",
    thousands_separator=",",
    currency_pattern="{symbol}{number}",
    month_names=(
        "January",
        "February",
        "March",
        "April",
        "May",
        "June",
        "July",
        "August",
        "September",
        "October",
        "November",
        "December",
    ),
    long_date_pattern="{month} {day}",
    short_date_pattern="{month:02d}/{day:02d}/{year:02d}",
    interval_prefix="01 to",
    no_transactions="No transactions",
)

DEFAULT_LOCALE = PT_BR

LOCALES = {locale.code.lower(): locale for locale in (PT_BR, EN_US)}


def get_locale(code: str) -> LocaleConfig:
    """Get a locale preset by code (case-insensitive, '_' or '-').

    Raises:
        UnknownLocaleError: If no preset exists for the code.
    """
    key = code.strip().replace("_", "-").lower()
    try:
        return LOCALES[key]
    except KeyError:
        available = ", ".join(sorted(loc.code for loc in LOCALES.values()))
        raise UnknownLocaleError(
            f"Unknown locale '{code}'. Available: {available}"
        ) from None


def format_currency(value: Decimal, locale: LocaleConfig = DEFAULT_LOCALE) -> str:
    """Format a value as currency, rounded half away from zero to cents.

    Args:
        value: Amount to format
        locale: Formatting conventions

    Returns:
        Formatted string, e.g. "R$ 1.234,56" or "-$60.00"
    """
    value = Decimal(value)
    with localcontext() as ctx:
        # Room for every integer digit plus the cents.
        ctx.prec = max(ctx.prec, value.adjusted() + 4)
        rounded = value.quantize(CENTS, rounding=ROUND_HALF_UP)
        magnitude = abs(rounded)
    negative = rounded < 0
    number = f"{magnitude:,.2f}".translate(
        str.maketrans(
            {",": locale.thousands_separator, ".": locale.decimal_separator}
        )
    )
    text = locale.currency_pattern.format(symbol=locale.currency_symbol, number=number)
    return f"-{text}" if negative else text


def format_short_date(dt: datetime, locale: LocaleConfig = DEFAULT_LOCALE) -> str:
    """Format a date as the locale's two-digit short date (e.g. 15/01/24)."""
    return locale.short_date_pattern.format(
        day=dt.day, month=dt.month, year=dt.year % 100
    )


def format_long_date(dt: datetime, locale: LocaleConfig = DEFAULT_LOCALE) -> str:
    """Format a date as day and long month name (e.g. "15 de janeiro")."""
    return locale.long_date_pattern.format(
        day=dt.day, month=locale.month_names[dt.month - 1]
    )
