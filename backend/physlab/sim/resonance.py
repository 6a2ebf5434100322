"""Closed-pipe first-harmonic relationships for the resonance tube lab.

A tuning fork of frequency ``f`` is held over a tube whose water level sets
the air column length ``L``. The first resonance appears when the effective
column ``L + 0.3 d`` equals a quarter wavelength.
"""
from __future__ import annotations

import math

from physlab.sim.schema import QualityBand, ResonanceState

# Open-end correction as a fraction of tube diameter
END_CORRECTION_FACTOR = 0.3

HIGH_QUALITY_THRESHOLD = 0.94
FAIR_QUALITY_THRESHOLD = 0.8
TARGET_MAX_THRESHOLD = 0.985

MIN_BANDWIDTH_M = 0.008
DEFAULT_BANDWIDTH_FRACTION = 0.06
# The tube view draws a slightly sharper peak than the bare default
TUBE_BANDWIDTH_FRACTION = 0.055

FREQUENCY_MIN_HZ = 220
FREQUENCY_MAX_HZ = 800
AIR_LENGTH_MIN_M = 0.08
AIR_LENGTH_MAX_M = 0.95


# Local copy of the half-Atwood clamp; the two solvers do not import each other
def _clamp(value: float, lo: float, hi: float) -> float:
    return min(hi, max(lo, value))


def speed_of_sound_from_temp(temp_c: float) -> float:
    """Approximate speed of sound in dry air at atmospheric pressure (m/s)."""
    return 331.0 + 0.6 * temp_c


def first_harmonic_air_length_m(frequency_hz: float, speed_mps: float, tube_diameter_m: float) -> float:
    effective_length = speed_mps / (4.0 * frequency_hz)
    return effective_length - END_CORRECTION_FACTOR * tube_diameter_m


def inferred_speed_mps(frequency_hz: float, air_length_m: float, tube_diameter_m: float) -> float:
    return 4.0 * frequency_hz * (air_length_m + END_CORRECTION_FACTOR * tube_diameter_m)


def resonance_strength(air_length_m: float, target_length_m: float, bandwidth_m: float | None = None) -> float:
    """Return a 0..1 Gaussian score centred on the target length."""
    if bandwidth_m is None:
        bandwidth_m = max(MIN_BANDWIDTH_M, target_length_m * DEFAULT_BANDWIDTH_FRACTION)
    delta = air_length_m - target_length_m
    return math.exp(-(delta * delta) / (2.0 * bandwidth_m * bandwidth_m))


def quality_band(strength: float) -> QualityBand:
    if strength >= HIGH_QUALITY_THRESHOLD:
        return QualityBand(label="High", accepted=True, css="good")
    if strength >= FAIR_QUALITY_THRESHOLD:
        return QualityBand(label="Fair", accepted=False, css="ok")
    return QualityBand(label="Off peak", accepted=False, css="low")


def clamp_frequency_hz(frequency_hz: float) -> int:
    # Clamp before rounding so inf and NaN land on a range edge.
    # Half-up rounding so 340.5 lands on the 341 Hz fork.
    return int(math.floor(_clamp(frequency_hz, FREQUENCY_MIN_HZ, FREQUENCY_MAX_HZ) + 0.5))


def clamp_air_length_m(
    air_length_m: float,
    air_length_min_m: float = AIR_LENGTH_MIN_M,
    air_length_max_m: float = AIR_LENGTH_MAX_M,
) -> float:
    return _clamp(air_length_m, air_length_min_m, air_length_max_m)


def derive_resonance_state(
    frequency_hz: float,
    air_length_m: float,
    *,
    speed_mps: float,
    tube_diameter_m: float,
    air_length_min_m: float = AIR_LENGTH_MIN_M,
    air_length_max_m: float = AIR_LENGTH_MAX_M,
) -> ResonanceState:
    """Resolve the readouts for one frequency and water-level setting.

    The target is kept inside the tube's travel so very low forks still show
    a reachable (if imperfect) peak.
    """
    target = _clamp(
        first_harmonic_air_length_m(frequency_hz, speed_mps, tube_diameter_m),
        air_length_min_m,
        air_length_max_m,
    )
    strength = resonance_strength(
        air_length_m,
        target,
        bandwidth_m=max(MIN_BANDWIDTH_M, target * TUBE_BANDWIDTH_FRACTION),
    )
    return ResonanceState(
        frequency_hz=frequency_hz,
        air_length_m=air_length_m,
        speed_mps=speed_mps,
        tube_diameter_m=tube_diameter_m,
        target_length_m=target,
        strength=strength,
        quality=quality_band(strength),
        at_maximum=strength >= TARGET_MAX_THRESHOLD,
        instant_speed_mps=inferred_speed_mps(frequency_hz, air_length_m, tube_diameter_m),
    )


__all__ = [
    "END_CORRECTION_FACTOR",
    "TARGET_MAX_THRESHOLD",
    "speed_of_sound_from_temp",
    "first_harmonic_air_length_m",
    "inferred_speed_mps",
    "resonance_strength",
    "quality_band",
    "clamp_frequency_hz",
    "clamp_air_length_m",
    "derive_resonance_state",
]
