"""Static HTML report of an evaluation, rendered with Jinja2."""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from typing import Mapping, Optional

from jinja2 import Environment, FileSystemLoader, select_autoescape

from roicalc.catalog.schema import ModelPreset
from roicalc.drivers.registry import get_driver
from roicalc.models.enums import Currency
from roicalc.models.parameters import PARAMETERS, label_for
from roicalc.models.results import AggregateResult

from .formatting import (
    format_currency,
    format_months,
    format_number,
    format_percent,
    resolve_currency,
)

_TEMPLATE_DIR = Path(__file__).parent / "templates"

FONT_URL = "https://fonts.googleapis.com/css2?family=Inter:wght@400;600;700&display=swap"


def _build_environment() -> Environment:
    env = Environment(
        loader=FileSystemLoader(str(_TEMPLATE_DIR)),
        autoescape=select_autoescape(["html", "j2"]),
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.filters["number"] = format_number
    env.filters["percent"] = format_percent
    env.filters["months"] = format_months
    env.filters["label"] = label_for
    return env


_ENV = _build_environment()


def _component_label(name: str) -> str:
    return name.replace("_", " ").capitalize()


def render_report(
    preset: ModelPreset,
    inputs: Mapping[str, float],
    result: AggregateResult,
    currency: Currency | str = Currency.USD,
    company_name: Optional[str] = None,
    generated_at: Optional[datetime] = None,
    logo_url: Optional[str] = None,
) -> str:
    """Render a self-contained HTML document. Write-only; not re-importable.

    The font stylesheet and the optional ``logo_url`` image are the only
    remote references.
    """
    code = resolve_currency(currency)

    def money(value: float) -> str:
        return format_currency(value, code)

    drivers = []
    for driver_id, driver_result in result.drivers.items():
        definition = get_driver(driver_id)
        drivers.append(
            {
                "id": driver_id.value,
                "label": definition.label if definition else driver_id.value,
                "description": definition.description if definition else "",
                "monetary": definition.monetary if definition else True,
                "benchmark": definition.benchmark if definition else None,
                "total": driver_result.total,
                "contribution": result.contribution_of(driver_id),
                "components": [
                    (_component_label(name), value)
                    for name, value in driver_result.components().items()
                ],
            }
        )

    input_rows = [
        (label_for(key), value, PARAMETERS[key].unit if key in PARAMETERS else "")
        for key, value in inputs.items()
    ]

    template = _ENV.get_template("report.html.j2")
    return template.render(
        preset=preset,
        company_name=company_name,
        result=result,
        drivers=drivers,
        donations=result.donations,
        input_rows=input_rows,
        money=money,
        currency=code.value,
        font_url=FONT_URL,
        logo_url=logo_url,
        generated_at=(generated_at or datetime.now(tz=timezone.utc)).strftime("%d %B %Y"),
    )
