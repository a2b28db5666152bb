"""Currency and number formatting for reports."""

from __future__ import annotations

from roicalc.errors import InvalidInput
from roicalc.models.enums import Currency

_SYMBOLS: dict[Currency, str] = {
    Currency.USD: "$",
    Currency.AUD: "A$",
    Currency.NZD: "NZ$",
    Currency.EUR: "€",
    Currency.GBP: "£",
}


def resolve_currency(currency: Currency | str) -> Currency:
    try:
        return Currency(str(currency).upper())
    except ValueError:
        raise InvalidInput(f"Unsupported currency '{currency}'", field="currency") from None


def format_currency(value: float, currency: Currency | str = Currency.USD) -> str:
    """Whole units with thousands separators, e.g. ``-$1,234``."""
    symbol = _SYMBOLS[resolve_currency(currency)]
    sign = "-" if round(value) < 0 else ""
    return f"{sign}{symbol}{abs(value):,.0f}"


def format_number(value: float, decimals: int = 0) -> str:
    return f"{value:,.{decimals}f}"


def format_percent(value: float, decimals: int = 1) -> str:
    return f"{value:,.{decimals}f}%"


def format_months(value: float) -> str:
    return f"{value:,.1f} months"
