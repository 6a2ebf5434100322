from __future__ import annotations

import math

import pytest

from physlab.sim.resonance import (
    END_CORRECTION_FACTOR,
    clamp_air_length_m,
    clamp_frequency_hz,
    derive_resonance_state,
    first_harmonic_air_length_m,
    inferred_speed_mps,
    quality_band,
    resonance_strength,
    speed_of_sound_from_temp,
)


def test_speed_of_sound_room_temperature():
    assert abs(speed_of_sound_from_temp(20) - 343.0) < 1e-9
    assert abs(speed_of_sound_from_temp(0) - 331.0) < 1e-9


def test_end_correction_factor():
    assert END_CORRECTION_FACTOR == 0.3


def test_first_harmonic_length():
    length = first_harmonic_air_length_m(384, 343, 0.04)
    assert abs(length - (343 / 1536 - 0.012)) < 1e-12


@pytest.mark.parametrize("f,s,d", [(384, 343, 0.04), (256, 331, 0.0), (768, 349.5, 0.1)])
def test_length_and_inferred_speed_are_inverse(f, s, d):
    length = first_harmonic_air_length_m(f, s, d)
    assert math.isclose(inferred_speed_mps(f, length, d), s, rel_tol=1e-12)


def test_strength_peaks_at_target_and_falls_off():
    target = 0.21
    at_target = resonance_strength(target, target)
    close = resonance_strength(target + 0.01, target)
    far = resonance_strength(target + 0.07, target)
    assert at_target == 1.0
    assert far < close < at_target
    assert far > 0.0
    # symmetric about the target
    assert abs(resonance_strength(target - 0.01, target) - close) < 1e-12


def test_default_bandwidth_floor():
    # 0.06 * 0.1 = 0.006 < 0.008, so the floor applies
    explicit = resonance_strength(0.11, 0.1, bandwidth_m=0.008)
    assert abs(resonance_strength(0.11, 0.1) - explicit) < 1e-15
    # above the floor the bandwidth scales with the target
    explicit = resonance_strength(0.55, 0.5, bandwidth_m=0.03)
    assert abs(resonance_strength(0.55, 0.5) - explicit) < 1e-15


def test_quality_bands():
    high = quality_band(0.95)
    fair = quality_band(0.85)
    low = quality_band(0.4)
    assert (high.label, high.accepted, high.css) == ("High", True, "good")
    assert (fair.label, fair.accepted, fair.css) == ("Fair", False, "ok")
    assert (low.label, low.accepted, low.css) == ("Off peak", False, "low")


def test_quality_band_boundaries_inclusive():
    assert quality_band(0.94).label == "High"
    assert quality_band(0.9399).label == "Fair"
    assert quality_band(0.8).label == "Fair"
    assert quality_band(0.7999).label == "Off peak"


def test_clamp_frequency():
    assert clamp_frequency_hz(100) == 220
    assert clamp_frequency_hz(1200) == 800
    assert clamp_frequency_hz(340.5) == 341
    assert clamp_frequency_hz(384.2) == 384


def test_clamp_frequency_non_finite():
    assert clamp_frequency_hz(float("inf")) == 800
    assert clamp_frequency_hz(float("-inf")) == 220
    assert clamp_frequency_hz(float("nan")) == 220


def test_clamp_air_length():
    assert clamp_air_length_m(0.01) == 0.08
    assert clamp_air_length_m(2.0) == 0.95
    assert clamp_air_length_m(0.3) == 0.3


def test_derive_state_at_target():
    target = first_harmonic_air_length_m(384, 343, 0.04)
    state = derive_resonance_state(384, target, speed_mps=343, tube_diameter_m=0.04)
    assert abs(state.target_length_m - target) < 1e-12
    assert state.strength == 1.0
    assert state.at_maximum is True
    assert state.quality.accepted is True
    assert abs(state.instant_speed_mps - 343) < 1e-9


def test_derive_state_clamps_unreachable_target():
    # 100 Hz would need ~0.85 m; a 50 Hz fork needs more than the tube holds
    state = derive_resonance_state(50, 0.5, speed_mps=343, tube_diameter_m=0.04)
    assert state.target_length_m == 0.95
    assert state.quality.label == "Off peak"
    assert state.at_maximum is False


def test_derive_state_uses_tube_bandwidth():
    target = first_harmonic_air_length_m(384, 343, 0.04)
    state = derive_resonance_state(384, target + 0.01, speed_mps=343, tube_diameter_m=0.04)
    expected = resonance_strength(target + 0.01, target, bandwidth_m=max(0.008, target * 0.055))
    assert abs(state.strength - expected) < 1e-12
