"""CSV export and import of an InputModel.

The file is a two-column table with a header row; each row holds a parameter's
human-readable label and its value.
"""

from __future__ import annotations

import csv
import logging
import math
from dataclasses import dataclass, field
from io import StringIO
from typing import Mapping

from roicalc.errors import ImportParseError
from roicalc.models.parameters import PARAMETERS, InputModel, label_for

logger = logging.getLogger(__name__)

CSV_HEADER = ["Input Parameter", "Value"]


def format_value(value: float) -> str:
    """Default decimal notation; integral values drop the trailing ``.0``."""
    number = float(value)
    if number.is_integer() and abs(number) < 1e16:
        return str(int(number))
    return repr(number)


def export_to_csv(inputs: Mapping[str, float]) -> str:
    """Serialize an InputModel to CSV text."""
    output = StringIO()
    writer = csv.writer(output, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    for key, value in inputs.items():
        writer.writerow([label_for(key), format_value(value)])
    return output.getvalue()


def _label_index() -> dict[str, str]:
    """Lower-cased label (and raw key) -> parameter key."""
    index: dict[str, str] = {}
    for key, spec in PARAMETERS.items():
        index[key.lower()] = key
        index[spec.label.lower()] = key
    return index


@dataclass
class ImportResult:
    """Recognized values plus the rows that were skipped."""

    values: InputModel = field(default_factory=dict)
    errors: list[ImportParseError] = field(default_factory=list)

    @property
    def updated(self) -> int:
        return len(self.values)

    @property
    def skipped(self) -> int:
        return len(self.errors)


def _parse_row(row: list[str], row_number: int, index: dict[str, str]) -> tuple[str, float]:
    if len(row) < 2:
        raise ImportParseError(f"Row {row_number} has fewer than two columns", row_number)
    label, raw_value = row[0].strip(), row[1].strip()
    key = index.get(label.lower())
    if key is None:
        raise ImportParseError(f"Row {row_number}: unknown parameter '{label}'", row_number)
    try:
        value = float(raw_value.replace(",", ""))
    except ValueError:
        raise ImportParseError(
            f"Row {row_number}: value '{raw_value}' is not a number", row_number
        ) from None
    if not math.isfinite(value):
        raise ImportParseError(f"Row {row_number}: value must be finite", row_number)
    return key, value


def import_from_csv(csv_content: str) -> ImportResult:
    """Parse CSV text produced by :func:`export_to_csv` (or edited by hand).

    The header row is skipped; labels match case-insensitively; rows that
    cannot be mapped or parsed are skipped and reported in ``errors``.
    """
    result = ImportResult()
    index = _label_index()
    reader = csv.reader(StringIO(csv_content.lstrip("\ufeff")))

    for row_number, row in enumerate(reader, start=1):
        if row_number == 1:
            continue
        if not any(cell.strip() for cell in row):
            continue
        try:
            key, value = _parse_row(row, row_number, index)
        except ImportParseError as e:
            result.errors.append(e)
            continue
        result.values[key] = value

    if result.errors:
        logger.info(f"CSV import skipped {result.skipped} rows, updated {result.updated}")
    return result
