"""Value types for the half-Atwood and resonance-tube solvers.

Every model is frozen: solvers receive inputs by value and hand back fresh
results. Physical quantities carry no sign constraints here because the
solvers floor them at zero instead of rejecting them.
"""
from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

Mode = Literal["frictionless", "kinetic", "static_hold"]
QualityLabel = Literal["High", "Fair", "Off peak"]
QualityCss = Literal["good", "ok", "low"]
StopReason = Literal["static_hold", "boundary", "time_limit", "frame_limit"]


class _Frozen(BaseModel):
  model_config = ConfigDict(frozen=True)


# ===========================
# Half-Atwood
# ===========================

class HalfAtwoodParams(_Frozen):
  """Parameters shared by the from-rest and dynamic solvers."""
  mass_table_kg: float = Field(..., description="Mass resting on the table.")
  mass_hanging_kg: float = Field(..., description="Mass hanging from the pulley.")
  mu: float = Field(0.0, description="Single friction coefficient (static cap and kinetic magnitude).")
  friction_enabled: bool = Field(False, description="When false, mu is ignored.")
  gravity: float = Field(10.0, description="Magnitude of gravitational acceleration in m/s^2.")


class HalfAtwoodInput(HalfAtwoodParams):
  target_distance_m: float = Field(0.0, description="Travel distance used for time-to-target.")


class DynamicInput(HalfAtwoodParams):
  velocity_mps: float = Field(0.0, description="Current signed velocity; positive means toward the pulley.")


class HalfAtwoodResult(_Frozen):
  acceleration_mps2: float
  tension_n: float
  friction_n: float
  net_force_n: float
  drive_force_n: float
  moved: bool
  time_to_target_s: Optional[float] = None
  mode: Mode


class DynamicResult(_Frozen):
  acceleration_mps2: float
  tension_n: float
  friction_signed_n: float
  friction_magnitude_n: float
  net_force_n: float
  drive_force_n: float
  mode: Mode


class RunConfig(HalfAtwoodParams):
  """Fixed-step run of the half-Atwood apparatus starting at zero displacement."""
  model_config = ConfigDict(frozen=True, allow_inf_nan=False)

  initial_velocity_mps: float = Field(0.0, description="Signed launch velocity.")
  dt_s: float = Field(1.0 / 60.0, gt=0.0, description="Integrator step; capped by the front end's frame clamp.")
  total_time_s: float = Field(5.0, gt=0.0, description="Simulated time before the run is cut off.")
  travel_min_m: float = Field(0.0, description="Displacement floor (block against the left stop).")
  travel_max_m: float = Field(2.1, description="Displacement at which the hanging mass hits the floor.")

  @model_validator(mode="after")
  def _check_travel(self) -> "RunConfig":
    if self.travel_max_m <= self.travel_min_m:
      raise ValueError("travel_max_m must be greater than travel_min_m")
    return self


class RunFrame(_Frozen):
  t: float
  displacement_m: float
  velocity_mps: float
  acceleration_mps2: float
  tension_n: float
  friction_signed_n: float
  net_force_n: float
  mode: Mode


class RunResult(_Frozen):
  frames: list[RunFrame] = Field(default_factory=list)
  stop_reason: StopReason
  from_rest: HalfAtwoodResult


class Preset(_Frozen):
  name: str
  description: str
  mass_table_kg: float
  mass_hanging_kg: float
  mu: float
  friction_enabled: bool
  initial_velocity_mps: float = 0.0


# ===========================
# Resonance tube
# ===========================

class QualityBand(_Frozen):
  label: QualityLabel
  accepted: bool
  css: QualityCss


class ResonanceState(_Frozen):
  """Everything the tube view needs for one frequency/air-length setting."""
  frequency_hz: float
  air_length_m: float
  speed_mps: float
  tube_diameter_m: float
  target_length_m: float
  strength: float
  quality: QualityBand
  at_maximum: bool
  instant_speed_mps: float


__all__ = [
  "Mode",
  "QualityLabel",
  "QualityCss",
  "StopReason",
  "HalfAtwoodParams",
  "HalfAtwoodInput",
  "DynamicInput",
  "HalfAtwoodResult",
  "DynamicResult",
  "RunConfig",
  "RunFrame",
  "RunResult",
  "Preset",
  "QualityBand",
  "ResonanceState",
]
