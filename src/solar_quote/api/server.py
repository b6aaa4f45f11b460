"""FastAPI server — HTTP access to the solar quote engine.

Run with:
    uvicorn solar_quote.api.server:app --reload --port 8000

Or:
    python -m solar_quote.api.server

Endpoints:
    GET  /                   — welcome + pointer to /docs
    GET  /health             — liveness
    GET  /schema             — JSON Schema for Scenario inputs
    GET  /scenario/defaults  — complete default scenario as JSON
    POST /bill               — usage → itemised bill
    POST /estimate           — bill amount → estimated usage + bill
    POST /quote              — full quote (partial or full Scenario)
    POST /tariff/curve       — bill sampled over a usage grid
    GET  /financing/banks    — banks and their instalment durations
    GET  /financing/banks/{bank} — one bank's durations + duration fallback
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field, ValidationError

from solar_quote.config.financing import FinancingConfig
from solar_quote.config.scenario import Scenario
from solar_quote.config.tariff import AFA_PRESETS, TariffConfig
from solar_quote.engine.curve import compute_bill_curve
from solar_quote.engine.estimator import estimate_usage_from_bill
from solar_quote.engine.orchestrator import build_quote
from solar_quote.engine.tariff import calculate_bill
from solar_quote.finance.financing import UnknownBankError, available_durations, resolve_duration


# ═══════════════════════════════════════════════════════════════════════════
# App setup
# ═══════════════════════════════════════════════════════════════════════════

app = FastAPI(
    title="Solar Quote API",
    version="1.0",
    description=(
        "Reverse electricity bill calculator and solar quotation engine. "
        "Reconstructs monthly usage from a bill amount, then sizes a solar "
        "system, projects the net bill, prices the system and plans instalments."
    ),
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


# ═══════════════════════════════════════════════════════════════════════════
# Request / response models
# ═══════════════════════════════════════════════════════════════════════════

class BillRequest(BaseModel):
    """Request body for /bill."""
    usage_kwh: float = Field(ge=0, description="Monthly usage (kWh)")
    afa_rate: float = Field(default=0.0, description="AFA / ICPT rate (RM/kWh, signed)")
    tariff: dict[str, Any] = Field(default_factory=dict, description="Optional tariff overrides")


class EstimateRequest(BaseModel):
    """Request body for /estimate.  Negative amounts estimate to 0 kWh."""
    bill_amount: float = Field(description="Monthly bill (RM)")
    afa_rate: float = Field(default=0.0, description="AFA / ICPT rate (RM/kWh, signed)")
    tariff: dict[str, Any] = Field(default_factory=dict, description="Optional tariff overrides")


class EstimateResponse(BaseModel):
    """Response from /estimate."""
    bill_amount: float
    afa_rate: float
    usage_kwh: float
    bill: dict[str, Any]


class QuoteRequest(BaseModel):
    """Request body for /quote. All fields optional — defaults used for missing."""
    scenario: dict[str, Any] = Field(
        default_factory=dict,
        description="Partial or full Scenario JSON. Missing fields use defaults. "
                    "Example: {'bill_amount': 350, 'pricing': {'discount_pct': 5}}",
    )


class CurveRequest(BaseModel):
    """Request body for /tariff/curve."""
    afa_rate: float = Field(default=0.0)
    max_kwh: float = Field(default=2_000.0, gt=0, le=100_000)
    step_kwh: float = Field(default=10.0, gt=0)
    tariff: dict[str, Any] = Field(default_factory=dict)


# ═══════════════════════════════════════════════════════════════════════════
# Helpers
# ═══════════════════════════════════════════════════════════════════════════

def _deep_merge(base: dict, overrides: dict) -> dict:
    """Recursively merge overrides into base dict."""
    for key, val in overrides.items():
        if key in base and isinstance(base[key], dict) and isinstance(val, dict):
            _deep_merge(base[key], val)
        else:
            base[key] = val
    return base


def _build_scenario(overrides: dict[str, Any]) -> Scenario:
    """Build a Scenario from partial overrides merged onto defaults."""
    defaults = Scenario().model_dump()
    _deep_merge(defaults, overrides)
    return _validated(Scenario, defaults)


def _build_tariff(overrides: dict[str, Any]) -> TariffConfig:
    return _validated(TariffConfig, _deep_merge(TariffConfig().model_dump(), overrides))


def _validated(model_cls: type[BaseModel], data: dict[str, Any]) -> Any:
    """Validate merged request data, surfacing errors as 422s."""
    try:
        return model_cls.model_validate(data)
    except ValidationError as exc:
        raise HTTPException(
            status_code=422,
            detail=exc.errors(include_url=False, include_context=False),
        ) from exc


# ═══════════════════════════════════════════════════════════════════════════
# Endpoints
# ═══════════════════════════════════════════════════════════════════════════

@app.get("/health")
def health_check():
    """Health check for deployment platforms."""
    return {"status": "ok"}


@app.get("/")
def root():
    """API root — returns a welcome message and pointer to /docs."""
    return {
        "name": "Solar Quote API",
        "version": "1.0",
        "start_here": "POST /quote with {'scenario': {'bill_amount': 300}}",
        "docs": "GET /docs (interactive Swagger UI)",
        "afa_presets": AFA_PRESETS,
    }


@app.get("/schema")
def get_schema():
    """Full JSON Schema for Scenario — all inputs with types, defaults, constraints."""
    return Scenario.model_json_schema()


@app.get("/scenario/defaults")
def get_defaults():
    """Complete default Scenario as JSON. Use as a starting point for modifications."""
    return Scenario().model_dump()


@app.post("/bill")
def bill(req: BillRequest):
    """Forward tariff: itemised bill for a usage figure, at display precision."""
    tariff = _build_tariff(req.tariff)
    return calculate_bill(req.usage_kwh, req.afa_rate, tariff).rounded().model_dump()


@app.post("/estimate", response_model=EstimateResponse)
def estimate(req: EstimateRequest):
    """Inverse tariff: the usage that reproduces a bill amount."""
    tariff = _build_tariff(req.tariff)
    usage = estimate_usage_from_bill(req.bill_amount, req.afa_rate, tariff)
    breakdown = calculate_bill(usage, req.afa_rate, tariff)
    return EstimateResponse(
        bill_amount=req.bill_amount,
        afa_rate=req.afa_rate,
        usage_kwh=usage,
        bill=breakdown.rounded().model_dump(),
    )


@app.post("/quote")
def quote(req: QuoteRequest):
    """Run the full quote pipeline.

    Send a partial Scenario (only the fields you want to change).
    Missing fields use defaults.

    Example minimal request:
    ```json
    {"scenario": {"bill_amount": 450, "afa_rate": -0.02}}
    ```
    """
    scenario = _build_scenario(req.scenario)
    result = build_quote(scenario)
    payload = result.model_dump()
    payload["bill"] = result.bill.rounded().model_dump()
    return payload


@app.post("/tariff/curve")
def tariff_curve(req: CurveRequest):
    """Bill sampled over [0, max_kwh], with a monotonicity check."""
    if req.max_kwh / req.step_kwh > 100_000:
        raise HTTPException(status_code=422, detail="Grid too fine: at most 100,000 points")
    tariff = _build_tariff(req.tariff)
    return compute_bill_curve(req.afa_rate, req.max_kwh, req.step_kwh, tariff).model_dump()


@app.get("/financing/banks")
def financing_banks():
    """Banks in the default EPP table with their durations and rates."""
    rates = FinancingConfig().epp_rates
    return {
        bank: [
            {"duration_months": d, "interest_rate_pct": rates[bank][d]}
            for d in available_durations(bank, rates)
        ]
        for bank in rates
    }


@app.get("/financing/banks/{bank}")
def financing_bank(bank: str, duration_months: int | None = None):
    """Durations for one bank, and the duration a request would resolve to."""
    rates = FinancingConfig().epp_rates
    try:
        durations = available_durations(bank, rates)
    except UnknownBankError:
        raise HTTPException(status_code=404, detail=f"Unknown bank: {bank}")
    resolved = resolve_duration(bank, duration_months, rates) if duration_months is not None else None
    return {
        "bank": bank,
        "durations": durations,
        "requested_duration_months": duration_months,
        "resolved_duration_months": resolved,
    }


# ═══════════════════════════════════════════════════════════════════════════
# CLI entry point
# ═══════════════════════════════════════════════════════════════════════════

def main():
    """Run the API server."""
    import uvicorn
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    uvicorn.run(
        "solar_quote.api.server:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )


if __name__ == "__main__":
    main()
