"""
Router: /half_atwood - Half-Atwood Machine Solver

Serves the table-and-pulley lab. The front end polls /dynamic once per
animation frame and /from_rest whenever a slider changes; /run produces a
whole run server-side for replay or grading.

Endpoints:
1. POST /half_atwood/from_rest  → forces for a release from rest
2. POST /half_atwood/dynamic    → forces at the current signed velocity
3. POST /half_atwood/run        → fixed-step frames until the run stops
4. GET  /half_atwood/presets    → named starting configurations
"""

import logging
from typing import Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, ConfigDict, Field

from physlab.models.settings import get_settings
from physlab.sim.analytic import simulate_half_atwood_run
from physlab.sim.half_atwood import calculate_half_atwood_from_rest, resolve_dynamic_forces
from physlab.sim.presets import PRESETS, get_preset
from physlab.sim.schema import (
    DynamicInput,
    DynamicResult,
    HalfAtwoodInput,
    HalfAtwoodResult,
    Preset,
    RunConfig,
    RunResult,
)

logger = logging.getLogger("physlab.half_atwood")

router = APIRouter(prefix="/half_atwood", tags=["half_atwood"])


# ===========================
# Request Models
# ===========================

class ApparatusRequest(BaseModel):
    """Apparatus settings; omitted gravity falls back to the configured classroom value."""

    model_config = ConfigDict(allow_inf_nan=False)

    mass_table_kg: float = Field(description="Table block mass (negative values are floored to 0)")
    mass_hanging_kg: float = Field(description="Hanging mass (negative values are floored to 0)")
    mu: float = Field(default=0.0, description="Friction coefficient")
    friction_enabled: bool = Field(default=False, description="Whether the table is rough")
    gravity: Optional[float] = Field(default=None, description="Gravity override in m/s²")


class FromRestRequest(ApparatusRequest):
    target_distance_m: Optional[float] = Field(
        default=None,
        description="Distance for time-to-target; defaults to the configured track length"
    )


class DynamicRequest(ApparatusRequest):
    velocity_mps: float = Field(default=0.0, description="Current signed velocity")


def _gravity(request: ApparatusRequest) -> float:
    if request.gravity is not None:
        return request.gravity
    return get_settings().HALF_ATWOOD_GRAVITY_M_S2


# ===========================
# Endpoints
# ===========================

@router.post("/from_rest", response_model=HalfAtwoodResult)
async def from_rest(request: FromRestRequest) -> HalfAtwoodResult:
    """Classify the regime (frictionless, kinetic, static_hold) for a release from rest."""
    target = request.target_distance_m
    if target is None:
        target = get_settings().HALF_ATWOOD_TARGET_DISTANCE_M
    return calculate_half_atwood_from_rest(HalfAtwoodInput(
        mass_table_kg=request.mass_table_kg,
        mass_hanging_kg=request.mass_hanging_kg,
        mu=request.mu,
        friction_enabled=request.friction_enabled,
        gravity=_gravity(request),
        target_distance_m=target,
    ))


@router.post("/dynamic", response_model=DynamicResult)
async def dynamic(request: DynamicRequest) -> DynamicResult:
    """Resolve forces with friction opposing the current velocity."""
    return resolve_dynamic_forces(DynamicInput(
        mass_table_kg=request.mass_table_kg,
        mass_hanging_kg=request.mass_hanging_kg,
        mu=request.mu,
        friction_enabled=request.friction_enabled,
        gravity=_gravity(request),
        velocity_mps=request.velocity_mps,
    ))


@router.post("/run", response_model=RunResult)
async def run(config: RunConfig) -> RunResult:
    """
    Integrate one run from zero displacement.

    The step is capped at the front end's frame clamp and the frame count
    at RUN_MAX_FRAMES so a long total_time_s cannot exhaust memory.
    """
    settings = get_settings()
    logger.info(
        f"[half_atwood] Run m_t={config.mass_table_kg} m_h={config.mass_hanging_kg} "
        f"mu={config.mu if config.friction_enabled else 0.0} v0={config.initial_velocity_mps}"
    )
    try:
        result = simulate_half_atwood_run(
            config,
            max_dt_s=settings.RUN_MAX_DT_S,
            max_frames=settings.RUN_MAX_FRAMES,
        )
    except Exception as e:
        logger.error(f"[half_atwood] Run failed: {e}", exc_info=True)
        raise HTTPException(
            status_code=500,
            detail=f"Run error: {str(e)}"
        )

    logger.info(f"[half_atwood] ✅ Run stopped ({result.stop_reason}) after {len(result.frames)} frames")
    return result


@router.get("/presets", response_model=dict[str, Preset])
async def list_presets() -> dict[str, Preset]:
    return PRESETS


@router.get("/presets/{name}", response_model=Preset)
async def read_preset(name: str) -> Preset:
    preset = get_preset(name)
    if preset is None:
        raise HTTPException(
            status_code=404,
            detail=f"Preset '{name}' not found"
        )
    return preset
