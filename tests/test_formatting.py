"""Tests for currency and number formatting."""

import pytest

from roicalc.errors import InvalidInput
from roicalc.exporters.formatting import (
    format_currency,
    format_months,
    format_number,
    format_percent,
    resolve_currency,
)
from roicalc.models.enums import Currency


class TestFormatting:
    @pytest.mark.parametrize(
        "currency,expected",
        [("USD", "$1,234,568"), ("AUD", "A$1,234,568"), ("EUR", "€1,234,568"), ("gbp", "£1,234,568")],
    )
    def test_currency_symbols(self, currency, expected):
        assert format_currency(1_234_567.89, currency) == expected

    def test_negative_currency(self):
        assert format_currency(-2500, Currency.NZD) == "-NZ$2,500"

    def test_unknown_currency(self):
        with pytest.raises(InvalidInput, match="Unsupported currency"):
            resolve_currency("XYZ")

    def test_number_percent_months(self):
        assert format_number(1234.5678, 2) == "1,234.57"
        assert format_percent(1263.2) == "1,263.2%"
        assert format_months(5.0563) == "5.1 months"
