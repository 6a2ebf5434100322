"""Pydantic models for the trial log."""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Union

from pydantic import BaseModel, ConfigDict, Field

from physlab.sim.schema import QualityCss, QualityLabel


class Experiment(str, Enum):
    """Labs that keep a trial table."""

    HALF_ATWOOD = "half_atwood"
    RESONANCE = "resonance"


class HalfAtwoodTrial(BaseModel):
    """One row of the half-Atwood trial table, solved from rest."""

    id: int
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    mass_table_kg: float
    mass_hanging_kg: float
    mu: float = Field(description="Effective coefficient; 0 when friction was switched off.")
    acceleration_mps2: float
    tension_n: float
    moved: bool


class ResonanceTrial(BaseModel):
    """One measured resonance point."""

    id: int
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    frequency_hz: int
    length_m: float = Field(description="Measured air column including reading noise.")
    speed_mps: float
    accepted: bool
    quality_label: QualityLabel
    quality_css: QualityCss


Trial = Union[HalfAtwoodTrial, ResonanceTrial]


class HalfAtwoodTrialRequest(BaseModel):
    """Incoming payload for recording a half-Atwood trial."""

    model_config = ConfigDict(allow_inf_nan=False)

    mass_table_kg: float
    mass_hanging_kg: float
    mu: float = 0.0
    friction_enabled: bool = False
    gravity: float | None = Field(
        default=None,
        description="Override the configured classroom gravity.",
    )


class ResonanceTrialRequest(BaseModel):
    """Incoming payload for recording a resonance trial."""

    model_config = ConfigDict(allow_inf_nan=False)

    frequency_hz: float
    air_length_m: float


class ResonanceSummary(BaseModel):
    """Statistics over accepted resonance trials."""

    accepted_count: int
    total_count: int
    reference_speed_mps: float
    mean_speed_mps: float | None = None
    percent_error: float | None = None
