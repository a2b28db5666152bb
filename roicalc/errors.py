"""Typed failures raised by the calculation core."""

from __future__ import annotations

from typing import Optional


class ROICalcError(Exception):
    """Base class for every error raised by roicalc."""

    kind = "roicalc_error"


class InvalidInput(ROICalcError, ValueError):
    """A parameter value outside its mathematically valid domain."""

    kind = "invalid_input"

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class DivisionByZeroError(InvalidInput):
    """A zero denominator that would otherwise yield Infinity or NaN."""

    kind = "division_by_zero"


class LookupFailure(ROICalcError):
    """The company lookup service did not return a usable result."""

    kind = "lookup_failure"


class ImportParseError(ROICalcError, ValueError):
    """A CSV row that cannot be mapped to a parameter or parsed as a number."""

    kind = "import_parse_error"

    def __init__(self, message: str, row_number: int):
        super().__init__(message)
        self.row_number = row_number
