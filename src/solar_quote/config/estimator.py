"""Bisection tuning for the bill → usage inversion."""

from pydantic import BaseModel, Field


class EstimatorConfig(BaseModel):
    """Search bounds and tolerances.

    ``max_iterations`` is a safety fuse: with the defaults, bisection from a
    bracket of a few thousand kWh reaches ``kwh_tolerance`` in ~35 steps.
    """

    seed_upper_kwh: float = Field(default=100.0, gt=0, description="Initial bracket upper bound (kWh)")
    max_bracket_doublings: int = Field(
        default=64, ge=1, le=1_000,
        description="Maximum times the upper bound is doubled while bracketing",
    )
    kwh_tolerance: float = Field(default=1e-6, gt=0, description="Stop when bracket width ≤ this (kWh)")
    bill_tolerance: float = Field(default=1e-7, gt=0, description="Stop when |bill − target| ≤ this (RM)")
    max_iterations: int = Field(default=200, ge=1, le=10_000, description="Bisection step fuse")
