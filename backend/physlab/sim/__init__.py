"""Physics core for the teaching labs.

This module provides:
- Value types (schema.py)
- Half-Atwood solver (half_atwood.py)
- Resonance tube equations (resonance.py)
- Fixed-step run integrator (analytic.py)
"""

from physlab.sim.schema import (
    DynamicInput,
    DynamicResult,
    HalfAtwoodInput,
    HalfAtwoodResult,
    QualityBand,
    ResonanceState,
    RunConfig,
    RunResult,
)
from physlab.sim.half_atwood import (
    VELOCITY_EPSILON,
    calculate_half_atwood_from_rest,
    resolve_dynamic_forces,
)
from physlab.sim.resonance import (
    END_CORRECTION_FACTOR,
    derive_resonance_state,
    first_harmonic_air_length_m,
    inferred_speed_mps,
    quality_band,
    resonance_strength,
    speed_of_sound_from_temp,
)
from physlab.sim.analytic import simulate_half_atwood_run

__all__ = [
    # Schema
    "DynamicInput",
    "DynamicResult",
    "HalfAtwoodInput",
    "HalfAtwoodResult",
    "QualityBand",
    "ResonanceState",
    "RunConfig",
    "RunResult",
    # Half-Atwood
    "VELOCITY_EPSILON",
    "calculate_half_atwood_from_rest",
    "resolve_dynamic_forces",
    # Resonance
    "END_CORRECTION_FACTOR",
    "derive_resonance_state",
    "first_harmonic_air_length_m",
    "inferred_speed_mps",
    "quality_band",
    "resonance_strength",
    "speed_of_sound_from_temp",
    # Integrator
    "simulate_half_atwood_run",
]
