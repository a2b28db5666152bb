from .csv_io import CSV_HEADER, ImportResult, export_to_csv, import_from_csv
from .formatting import format_currency, format_number, format_percent
from .report import render_report

__all__ = [
    "CSV_HEADER",
    "ImportResult",
    "export_to_csv",
    "import_from_csv",
    "format_currency",
    "format_number",
    "format_percent",
    "render_report",
]
