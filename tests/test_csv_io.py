"""Tests for CSV export and import of the InputModel."""

import csv
from io import StringIO

import pytest

from roicalc.errors import ImportParseError
from roicalc.exporters.csv_io import CSV_HEADER, export_to_csv, format_value, import_from_csv


class TestExport:
    def test_header_and_labels(self):
        text = export_to_csv({"monthly_visitors": 50_000, "current_conversion_rate": 2.5})
        rows = list(csv.reader(StringIO(text)))
        assert rows[0] == CSV_HEADER
        assert rows[1] == ["Monthly Website Visitors", "50000"]
        assert rows[2] == ["Current Conversion Rate (%)", "2.5"]

    def test_one_row_per_key(self, marketing_preset):
        text = export_to_csv(marketing_preset.defaults)
        assert len(text.strip().splitlines()) == len(marketing_preset.defaults) + 1

    def test_header_line(self):
        text = export_to_csv({"monthly_visitors": 1})
        assert text.splitlines()[0] == "Input Parameter,Value"

    @pytest.mark.parametrize(
        "value,expected",
        [(50000.0, "50000"), (0.1, "0.1"), (-3.0, "-3"), (1 / 3, repr(1 / 3))],
    )
    def test_default_decimal_notation(self, value, expected):
        assert format_value(value) == expected


class TestImport:
    def test_round_trip_reproduces_inputs(self, catalog):
        for preset in catalog.values():
            inputs = {**preset.defaults}
            inputs[next(iter(inputs))] = 1 / 7
            result = import_from_csv(export_to_csv(inputs))
            assert result.values == inputs
            assert result.skipped == 0

    def test_label_lookup_is_case_insensitive(self):
        text = "Input Parameter,Value\nmonthly website VISITORS,1200\n"
        assert import_from_csv(text).values == {"monthly_visitors": 1200.0}

    def test_raw_keys_accepted(self):
        text = "Input Parameter,Value\nnumber_of_cms,4\n"
        assert import_from_csv(text).values == {"number_of_cms": 4.0}

    def test_quoted_fields_unescaped(self):
        text = 'Input Parameter,Value\n"Monthly Website Visitors","1,500"\n'
        assert import_from_csv(text).values == {"monthly_visitors": 1500.0}

    def test_header_row_skipped_even_if_recognizable(self):
        text = "Monthly Website Visitors,10\nNumber of CMS Platforms,2\n"
        assert import_from_csv(text).values == {"number_of_cms": 2.0}

    def test_unrecognized_and_unparseable_rows_skipped(self):
        text = (
            "Input Parameter,Value\n"
            "Monthly Website Visitors,abc\n"
            "Coffee Budget,100\n"
            "lonely\n"
            "\n"
            "Number of CMS Platforms,2\n"
            "Marketing Team Size,inf\n"
        )
        result = import_from_csv(text)
        assert result.values == {"number_of_cms": 2.0}
        assert result.skipped == 4
        assert all(isinstance(e, ImportParseError) for e in result.errors)
        assert [e.row_number for e in result.errors] == [2, 3, 4, 7]

    def test_byte_order_mark_tolerated(self):
        text = "\ufeffInput Parameter,Value\nNumber of CMS Platforms,2\n"
        assert import_from_csv(text).values == {"number_of_cms": 2.0}

    def test_empty_file(self):
        result = import_from_csv("")
        assert result.updated == 0
        assert result.skipped == 0
