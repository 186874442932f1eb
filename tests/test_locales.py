from datetime import datetime, timezone
from decimal import Decimal

import pytest

from gofinances.errors import UnknownLocaleError
from gofinances.locales import (
    EN_US,
    PT_BR,
    format_currency,
    format_long_date,
    format_short_date,
    get_locale,
)


# Tests for get_locale
def test_get_locale_known_codes():
    """Test lookup of locale presets."""
    assert get_locale("pt-BR") is PT_BR
    assert get_locale("en-US") is EN_US


def test_get_locale_normalizes_code():
    """Test lookup is case-insensitive and accepts underscores."""
    assert get_locale("pt_br") is PT_BR
    assert get_locale(" EN-us ") is EN_US


def test_get_locale_unknown():
    """Test unknown locale codes raise."""
    with pytest.raises(UnknownLocaleError, match="fr-FR"):
        get_locale("fr-FR")


# Tests for format_currency
def test_format_currency_pt_br():
    """Test Brazilian real formatting with grouping."""
    assert format_currency(Decimal("1234567.891"), PT_BR) == "R$ 1.234.567,89"
    assert format_currency(Decimal("0"), PT_BR) == "R$ 0,00"
    assert format_currency(Decimal("999"), PT_BR) == "R$ 999,00"


def test_format_currency_en_us():
    """Test US dollar formatting with grouping."""
    assert format_currency(Decimal("1234567.891"), EN_US) == "$1,234,567.89"
    assert format_currency(Decimal("1000"), EN_US) == "$1,000.00"


def test_format_currency_negative():
    """Test negative values keep a leading minus."""
    assert format_currency(Decimal("-60"), PT_BR) == "-R$ 60,00"
    assert format_currency(Decimal("-1500.5"), EN_US) == "-$1,500.50"


def test_format_currency_rounds_half_away_from_zero():
    """Test rounding to cents."""
    assert format_currency(Decimal("2.005"), EN_US) == "$2.01"
    assert format_currency(Decimal("-2.005"), EN_US) == "-$2.01"
    assert format_currency(Decimal("2.004"), EN_US) == "$2.00"


def test_format_currency_negative_zero_after_rounding():
    """Test tiny negative values do not render as minus zero."""
    assert format_currency(Decimal("-0.001"), PT_BR) == "R$ 0,00"


# Tests for date formatting
def test_format_short_date():
    """Test two-digit short dates."""
    dt = datetime(2024, 1, 5, tzinfo=timezone.utc)
    assert format_short_date(dt, PT_BR) == "05/01/24"
    assert format_short_date(dt, EN_US) == "01/05/24"


def test_format_long_date():
    """Test day and long month name."""
    dt = datetime(2024, 3, 5, tzinfo=timezone.utc)
    assert format_long_date(dt, PT_BR) == "5 de março"
    assert format_long_date(dt, EN_US) == "March 5"


def test_sentinels_are_properly_encoded():
    """Test the no-transactions text keeps its accents."""
    assert PT_BR.no_transactions == "Não há transações"
    assert EN_US.no_transactions == "No transactions"


def test_format_currency_beyond_default_precision():
    """Test values wider than the default decimal precision still format."""
    assert format_currency(Decimal("1e30"), EN_US) == "$1" + ",000" * 10 + ".00"
    assert format_currency(Decimal("-1e30"), PT_BR) == "-R$ 1" + ".000" * 10 + ",00"
    assert (
        format_currency(Decimal("9" * 30 + ".995"), EN_US)
        == "$1" + ",000" * 10 + ".00"
    )
