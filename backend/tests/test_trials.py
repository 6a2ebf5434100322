from __future__ import annotations

import random

import pytest

from physlab.models.settings import Settings
from physlab.sim.resonance import first_harmonic_air_length_m
from physlab.trials import (
    Experiment,
    HalfAtwoodTrialRequest,
    ResonanceTrial,
    ResonanceTrialRequest,
    TrialRepository,
    TrialService,
    summarize_resonance,
)


def make_service() -> TrialService:
    return TrialService(TrialRepository(), Settings(), rng=random.Random(1234))


@pytest.mark.asyncio
async def test_half_atwood_trials_newest_first_and_ids_increment():
    service = make_service()
    first = await service.record_half_atwood(HalfAtwoodTrialRequest(mass_table_kg=2.0, mass_hanging_kg=1.0))
    second = await service.record_half_atwood(HalfAtwoodTrialRequest(mass_table_kg=6.0, mass_hanging_kg=1.0, mu=0.2, friction_enabled=True))

    assert (first.id, second.id) == (1, 2)
    trials = await service.list_trials(Experiment.HALF_ATWOOD)
    assert [t.id for t in trials] == [2, 1]
    assert abs(first.acceleration_mps2 - 10 / 3) < 1e-9
    assert second.moved is False
    assert second.mu == 0.2


@pytest.mark.asyncio
async def test_half_atwood_trial_records_zero_mu_when_friction_off():
    service = make_service()
    trial = await service.record_half_atwood(HalfAtwoodTrialRequest(mass_table_kg=2.5, mass_hanging_kg=1.2, mu=0.4, friction_enabled=False))
    assert trial.mu == 0.0
    assert trial.moved is True


@pytest.mark.asyncio
async def test_clear_resets_ids_per_experiment():
    service = make_service()
    await service.record_half_atwood(HalfAtwoodTrialRequest(mass_table_kg=2.0, mass_hanging_kg=1.0))
    await service.record_half_atwood(HalfAtwoodTrialRequest(mass_table_kg=2.0, mass_hanging_kg=1.0))
    await service.record_resonance(ResonanceTrialRequest(frequency_hz=384, air_length_m=0.21))

    removed = await service.clear(Experiment.HALF_ATWOOD)
    assert removed == 2
    assert await service.list_trials(Experiment.HALF_ATWOOD) == []
    assert len(await service.list_trials(Experiment.RESONANCE)) == 1

    again = await service.record_half_atwood(HalfAtwoodTrialRequest(mass_table_kg=2.0, mass_hanging_kg=1.0))
    assert again.id == 1


@pytest.mark.asyncio
async def test_resonance_trial_at_peak_is_accepted():
    service = make_service()
    target = first_harmonic_air_length_m(384, 343.0, 0.04)
    trial = await service.record_resonance(ResonanceTrialRequest(frequency_hz=384, air_length_m=target))
    assert trial.accepted is True
    assert trial.quality_label == "High"
    assert abs(trial.length_m - target) <= 0.0015 + 1e-12
    # 1.5 mm of noise moves the inferred speed by at most 4 * 384 * 0.0015 m/s
    assert abs(trial.speed_mps - 343.0) <= 4 * 384 * 0.0015 + 1e-9


@pytest.mark.asyncio
async def test_resonance_trial_off_peak_and_clamped():
    service = make_service()
    trial = await service.record_resonance(ResonanceTrialRequest(frequency_hz=1000, air_length_m=5.0))
    assert trial.frequency_hz == 800
    assert trial.length_m <= 0.95
    assert trial.accepted is False
    assert trial.quality_css == "low"


@pytest.mark.asyncio
async def test_resonance_summary_ignores_rejected_trials():
    service = make_service()
    target = first_harmonic_air_length_m(384, 343.0, 0.04)
    await service.record_resonance(ResonanceTrialRequest(frequency_hz=384, air_length_m=target))
    await service.record_resonance(ResonanceTrialRequest(frequency_hz=384, air_length_m=0.9))

    summary = await service.resonance_summary()
    assert summary.total_count == 2
    assert summary.accepted_count == 1
    assert abs(summary.reference_speed_mps - 343.0) < 1e-9
    assert summary.percent_error is not None and summary.percent_error < 2.0


def test_summary_math():
    trials = [
        ResonanceTrial(id=1, frequency_hz=384, length_m=0.21, speed_mps=340.0, accepted=True, quality_label="High", quality_css="good"),
        ResonanceTrial(id=2, frequency_hz=512, length_m=0.16, speed_mps=346.0, accepted=True, quality_label="High", quality_css="good"),
        ResonanceTrial(id=3, frequency_hz=256, length_m=0.40, speed_mps=500.0, accepted=False, quality_label="Off peak", quality_css="low"),
    ]
    summary = summarize_resonance(trials, 343.0)
    assert summary.accepted_count == 2
    assert abs(summary.mean_speed_mps - 343.0) < 1e-9
    assert abs(summary.percent_error) < 1e-9


def test_summary_without_accepted_trials():
    summary = summarize_resonance([], 343.0)
    assert summary.accepted_count == 0
    assert summary.mean_speed_mps is None
    assert summary.percent_error is None
