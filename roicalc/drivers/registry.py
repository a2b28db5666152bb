"""Value-driver registry.

Driver formulas declare themselves with :func:`register_driver`; the
aggregator and the preset schema discover them here by :class:`DriverId`.
Whether a driver counts as money (``unit``) and whether the attribution
factor scales it (``attributable``) live on the definition, so the engine
never special-cases a driver by name.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from roicalc.models.enums import DriverId
from roicalc.models.results import DriverResult

_DRIVERS: dict[DriverId, DriverDefinition] = {}


@dataclass(frozen=True)
class DriverDefinition:
    id: DriverId
    label: str
    description: str
    required_inputs: list[str]
    formula_fn: Callable[..., DriverResult]
    unit: str = "currency"
    attributable: bool = False
    benchmark: Optional[str] = None  # published customer results, shown in the report

    @property
    def monetary(self) -> bool:
        """Only currency drivers feed annual_benefit."""
        return self.unit == "currency"


def register_driver(
    driver_id: DriverId,
    label: str,
    description: str,
    required_inputs: list[str],
    unit: str = "currency",
    attributable: bool = False,
    benchmark: Optional[str] = None,
) -> Callable:
    """Record the decorated formula as the calculator for ``driver_id``.

    Registering the same id twice replaces the earlier formula.
    """

    def decorator(fn: Callable[..., DriverResult]) -> Callable[..., DriverResult]:
        _DRIVERS[driver_id] = DriverDefinition(
            id=driver_id,
            label=label,
            description=description,
            required_inputs=required_inputs,
            formula_fn=fn,
            unit=unit,
            attributable=attributable,
            benchmark=benchmark,
        )
        return fn

    return decorator


def get_driver(driver_id: DriverId | str) -> Optional[DriverDefinition]:
    """None for ids that are not value drivers, so callers pick the error."""
    try:
        return _DRIVERS.get(DriverId(driver_id))
    except ValueError:
        return None


def get_all_drivers() -> dict[DriverId, DriverDefinition]:
    return dict(_DRIVERS)
