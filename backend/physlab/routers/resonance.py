"""
Router: /resonance - Resonance Tube Solver

Closed-pipe first-harmonic relationships for the tuning-fork lab. Every
endpoint is a thin wrapper over physlab.sim.resonance.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Query
from pydantic import BaseModel, ConfigDict, Field

from physlab.models.settings import get_settings
from physlab.sim.presets import FORK_FREQUENCIES_HZ
from physlab.sim.resonance import (
    clamp_air_length_m,
    clamp_frequency_hz,
    derive_resonance_state,
    first_harmonic_air_length_m,
    inferred_speed_mps,
    quality_band,
    resonance_strength,
    speed_of_sound_from_temp,
)
from physlab.sim.schema import QualityBand, ResonanceState

logger = logging.getLogger("physlab.resonance")

router = APIRouter(prefix="/resonance", tags=["resonance"])


# ===========================
# Request/Response Models
# ===========================

class TubeRequest(BaseModel):
    """Fork and tube settings. Speed of sound comes from speed_mps, else temp_c, else room temperature."""

    model_config = ConfigDict(allow_inf_nan=False)

    frequency_hz: float = Field(gt=0.0, description="Tuning fork frequency")
    temp_c: Optional[float] = Field(default=None, description="Air temperature in °C")
    speed_mps: Optional[float] = Field(default=None, gt=0.0, description="Explicit speed of sound")
    tube_diameter_m: Optional[float] = Field(default=None, ge=0.0, description="Tube inner diameter")

    def resolved_speed_mps(self) -> float:
        if self.speed_mps is not None:
            return self.speed_mps
        temp_c = self.temp_c if self.temp_c is not None else get_settings().RESONANCE_ROOM_TEMP_C
        return speed_of_sound_from_temp(temp_c)

    def resolved_diameter_m(self) -> float:
        if self.tube_diameter_m is not None:
            return self.tube_diameter_m
        return get_settings().RESONANCE_TUBE_DIAMETER_M


class StateRequest(TubeRequest):
    air_length_m: float = Field(description="Current air column length (clamped to the tube)")


class InferredSpeedRequest(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)

    frequency_hz: float = Field(gt=0.0)
    air_length_m: float
    tube_diameter_m: Optional[float] = Field(default=None, ge=0.0)


class StrengthRequest(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)

    air_length_m: float
    target_length_m: float
    bandwidth_m: Optional[float] = Field(default=None, gt=0.0)


class QualityRequest(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)

    strength: float


class SpeedResponse(BaseModel):
    speed_mps: float


class LengthResponse(BaseModel):
    length_m: float


class StrengthResponse(BaseModel):
    strength: float
    quality: QualityBand


# ===========================
# Endpoints
# ===========================

@router.get("/speed_of_sound")
async def speed_of_sound(
    temp_c: Optional[float] = Query(None, description="Air temperature in °C; defaults to room temperature"),
) -> dict[str, float]:
    if temp_c is None:
        temp_c = get_settings().RESONANCE_ROOM_TEMP_C
    return {"temp_c": temp_c, "speed_mps": speed_of_sound_from_temp(temp_c)}


@router.post("/first_harmonic", response_model=LengthResponse)
async def first_harmonic(request: TubeRequest) -> LengthResponse:
    """Air column for the first resonance; may be negative for very high forks."""
    return LengthResponse(length_m=first_harmonic_air_length_m(
        request.frequency_hz,
        request.resolved_speed_mps(),
        request.resolved_diameter_m(),
    ))


@router.post("/inferred_speed", response_model=SpeedResponse)
async def inferred_speed(request: InferredSpeedRequest) -> SpeedResponse:
    diameter = request.tube_diameter_m
    if diameter is None:
        diameter = get_settings().RESONANCE_TUBE_DIAMETER_M
    return SpeedResponse(speed_mps=inferred_speed_mps(request.frequency_hz, request.air_length_m, diameter))


@router.post("/strength", response_model=StrengthResponse)
async def strength(request: StrengthRequest) -> StrengthResponse:
    value = resonance_strength(request.air_length_m, request.target_length_m, request.bandwidth_m)
    return StrengthResponse(strength=value, quality=quality_band(value))


@router.post("/quality", response_model=QualityBand)
async def quality(request: QualityRequest) -> QualityBand:
    return quality_band(request.strength)


@router.post("/state", response_model=ResonanceState)
async def state(request: StateRequest) -> ResonanceState:
    """Readouts for the tube view: target, loudness, quality and instantaneous speed."""
    settings = get_settings()
    frequency = clamp_frequency_hz(request.frequency_hz)
    air_length = clamp_air_length_m(
        request.air_length_m,
        settings.RESONANCE_AIR_LENGTH_MIN_M,
        settings.RESONANCE_AIR_LENGTH_MAX_M,
    )
    if frequency != request.frequency_hz or air_length != request.air_length_m:
        logger.debug(f"[resonance] Clamped request to {frequency} Hz, {air_length:.3f} m")
    return derive_resonance_state(
        frequency,
        air_length,
        speed_mps=request.resolved_speed_mps(),
        tube_diameter_m=request.resolved_diameter_m(),
        air_length_min_m=settings.RESONANCE_AIR_LENGTH_MIN_M,
        air_length_max_m=settings.RESONANCE_AIR_LENGTH_MAX_M,
    )


@router.get("/forks")
async def forks() -> dict[str, list[int]]:
    return {"frequencies_hz": list(FORK_FREQUENCIES_HZ)}
