"""FastAPI application for the ROI calculator -- REST endpoints and exports."""

from __future__ import annotations

import logging
from typing import Any, Optional

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse, Response
from pydantic import BaseModel, Field

from roicalc.catalog.loader import get_catalog
from roicalc.catalog.schema import PresetSummary
from roicalc.config.settings import Settings
from roicalc.engine.calculator import evaluate
from roicalc.errors import ROICalcError
from roicalc.exporters.csv_io import export_to_csv, import_from_csv
from roicalc.exporters.report import render_report
from roicalc.models.enums import CostModel, CXVariant, DriverId
from roicalc.models.parameters import PARAMETERS
from roicalc.orchestrator.session import CalculatorSession
from roicalc.providers.company_lookup import CompanyLookupProvider, LookupTracker
from roicalc.storage.store import KeyValueStore, build_store

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

settings = Settings()

app = FastAPI(title="ROI Calculator API", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Single-user scope: one store and one lookup tracker per process
_store = build_store(settings.state_file)
_tracker: Optional[LookupTracker] = None


def get_store() -> KeyValueStore:
    return _store


def get_lookup_tracker() -> LookupTracker:
    global _tracker
    if _tracker is None:
        _tracker = LookupTracker(CompanyLookupProvider(settings=settings))
    return _tracker


def get_session(preset_id: str, store: KeyValueStore = Depends(get_store)) -> CalculatorSession:
    session = CalculatorSession(store)
    try:
        session.select_preset(preset_id)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Preset '{preset_id}' not found")
    return session


@app.exception_handler(ROICalcError)
async def roicalc_error_handler(request: Request, exc: ROICalcError) -> JSONResponse:
    logger.warning(f"{request.method} {request.url.path} rejected: {exc}")
    return JSONResponse(
        status_code=422,
        content={
            "error": exc.kind,
            "field": getattr(exc, "field", None),
            "detail": str(exc),
        },
    )


class EvaluateRequest(BaseModel):
    inputs: dict[str, float]
    enabled_drivers: list[DriverId]
    attribution_factor: float = 1.0
    horizon_years: int = 3
    cx_variant: CXVariant = CXVariant.DAMPENED
    cost_model: CostModel = CostModel.STANDARD


class DriversRequest(BaseModel):
    enabled_drivers: list[str]


class LookupRequest(BaseModel):
    query: str = Field(min_length=1)


class SuggestionsRequest(BaseModel):
    suggestions: dict[str, Optional[float]]


def _state(session: CalculatorSession) -> dict[str, Any]:
    return {
        "preset_id": session.preset.id,
        "inputs": session.inputs,
        "enabled_drivers": [d.value for d in session.enabled_drivers],
    }


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "ok"}


@app.get("/api/presets")
async def list_presets():
    return [PresetSummary.from_preset(p).model_dump(mode="json") for p in get_catalog().values()]


@app.get("/api/presets/{preset_id}")
async def get_preset_detail(preset_id: str):
    preset = get_catalog().get(preset_id)
    if preset is None:
        raise HTTPException(status_code=404, detail=f"Preset '{preset_id}' not found")
    parameters = [
        {
            "key": key,
            "label": PARAMETERS[key].label,
            "group": PARAMETERS[key].group.value,
            "min": PARAMETERS[key].min,
            "max": PARAMETERS[key].max,
            "step": PARAMETERS[key].step,
            "unit": PARAMETERS[key].unit,
            "default": value,
        }
        for key, value in preset.defaults.items()
    ]
    return {**preset.model_dump(mode="json"), "parameters": parameters}


@app.get("/api/presets/{preset_id}/state")
async def get_state(session: CalculatorSession = Depends(get_session)):
    return _state(session)


@app.patch("/api/presets/{preset_id}/inputs")
async def update_inputs(updates: dict[str, Any], session: CalculatorSession = Depends(get_session)):
    session.update_inputs(updates)
    return _state(session)


@app.put("/api/presets/{preset_id}/drivers")
async def set_drivers(body: DriversRequest, session: CalculatorSession = Depends(get_session)):
    session.set_enabled_drivers(body.enabled_drivers)
    return _state(session)


@app.delete("/api/presets/{preset_id}/state")
async def reset_state(session: CalculatorSession = Depends(get_session)):
    session.reset()
    return _state(session)


@app.get("/api/presets/{preset_id}/evaluate")
async def evaluate_preset(
    attribution_factor: float = 1.0,
    horizon_years: int = settings.default_horizon_years,
    session: CalculatorSession = Depends(get_session),
):
    return session.evaluate(attribution_factor=attribution_factor, horizon_years=horizon_years).to_dict()


@app.post("/api/evaluate")
async def evaluate_inputs(body: EvaluateRequest):
    """Stateless evaluation of an arbitrary InputModel."""
    result = evaluate(
        body.inputs,
        body.enabled_drivers,
        attribution_factor=body.attribution_factor,
        horizon_years=body.horizon_years,
        cx_variant=body.cx_variant,
        cost_model=body.cost_model,
    )
    return result.to_dict()


@app.get("/api/presets/{preset_id}/export.csv")
async def export_csv(session: CalculatorSession = Depends(get_session)):
    return Response(
        content=export_to_csv(session.inputs),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="roi-inputs-{session.preset.id}.csv"'},
    )


@app.post("/api/presets/{preset_id}/import")
async def import_csv(request: Request, session: CalculatorSession = Depends(get_session)):
    """Import a CSV body; only recognized numeric rows update the inputs."""
    raw = await request.body()
    result = import_from_csv(raw.decode("utf-8-sig", errors="replace"))
    if result.values:
        session.replace_inputs(result.values)
    return {
        **_state(session),
        "updated": result.updated,
        "skipped": result.skipped,
        "errors": [str(e) for e in result.errors],
    }


@app.get("/api/presets/{preset_id}/report", response_class=HTMLResponse)
async def export_report(
    attribution_factor: float = 1.0,
    horizon_years: int = settings.default_horizon_years,
    currency: str = settings.default_currency,
    company_name: Optional[str] = None,
    session: CalculatorSession = Depends(get_session),
):
    result = session.evaluate(attribution_factor=attribution_factor, horizon_years=horizon_years)
    html = render_report(
        session.preset,
        session.inputs,
        result,
        currency=currency,
        company_name=company_name,
        logo_url=settings.report_logo_url or None,
    )
    return HTMLResponse(
        content=html,
        headers={"Content-Disposition": f'attachment; filename="roi-report-{session.preset.id}.html"'},
    )


@app.post("/api/lookup")
async def lookup_company(body: LookupRequest, tracker: LookupTracker = Depends(get_lookup_tracker)):
    """Propose InputModel values for a company. Never applies them."""
    result = await tracker.run(body.query)
    return {
        "query": result.query,
        "kind": result.kind.value,
        "status": result.status.value,
        "generation": result.generation,
        "profile": result.profile.model_dump() if result.profile else None,
        "suggestions": result.suggestions,
        "error": result.error,
    }


@app.post("/api/presets/{preset_id}/suggestions")
async def apply_suggestions(body: SuggestionsRequest, session: CalculatorSession = Depends(get_session)):
    """Apply lookup suggestions the user has confirmed."""
    entries = session.apply_suggestions(body.suggestions)
    return {**_state(session), "applied": [e.field_name for e in entries]}
