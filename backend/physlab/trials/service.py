"""Trial service: solves, measures and stores trial records."""

from __future__ import annotations

import logging
import random
from typing import Sequence

from physlab.models.settings import Settings, get_settings
from physlab.sim.half_atwood import calculate_half_atwood_from_rest
from physlab.sim.resonance import (
    clamp_air_length_m,
    clamp_frequency_hz,
    derive_resonance_state,
    inferred_speed_mps,
    speed_of_sound_from_temp,
)
from physlab.sim.schema import HalfAtwoodInput

from .repository import TrialRepository, get_trial_repository
from .schemas import (
    Experiment,
    HalfAtwoodTrial,
    HalfAtwoodTrialRequest,
    ResonanceSummary,
    ResonanceTrial,
    ResonanceTrialRequest,
    Trial,
)

logger = logging.getLogger("physlab.trials")


def summarize_resonance(trials: Sequence[ResonanceTrial], reference_speed_mps: float) -> ResonanceSummary:
    accepted = [t for t in trials if t.accepted]
    if not accepted:
        return ResonanceSummary(
            accepted_count=0,
            total_count=len(trials),
            reference_speed_mps=reference_speed_mps,
        )
    mean_speed = sum(t.speed_mps for t in accepted) / len(accepted)
    return ResonanceSummary(
        accepted_count=len(accepted),
        total_count=len(trials),
        reference_speed_mps=reference_speed_mps,
        mean_speed_mps=mean_speed,
        percent_error=abs(mean_speed - reference_speed_mps) / reference_speed_mps * 100.0,
    )


class TrialService:
    """Application service behind the trial endpoints."""

    def __init__(
        self,
        repository: TrialRepository,
        settings: Settings,
        rng: random.Random | None = None,
    ) -> None:
        self._repository = repository
        self._settings = settings
        self._rng = rng or random.Random()

    @property
    def reference_speed_mps(self) -> float:
        return speed_of_sound_from_temp(self._settings.RESONANCE_ROOM_TEMP_C)

    async def record_half_atwood(self, request: HalfAtwoodTrialRequest) -> HalfAtwoodTrial:
        gravity = request.gravity if request.gravity is not None else self._settings.HALF_ATWOOD_GRAVITY_M_S2
        rest = calculate_half_atwood_from_rest(HalfAtwoodInput(
            mass_table_kg=request.mass_table_kg,
            mass_hanging_kg=request.mass_hanging_kg,
            mu=request.mu,
            friction_enabled=request.friction_enabled,
            gravity=gravity,
            target_distance_m=self._settings.HALF_ATWOOD_TARGET_DISTANCE_M,
        ))

        def build(trial_id: int) -> HalfAtwoodTrial:
            return HalfAtwoodTrial(
                id=trial_id,
                mass_table_kg=request.mass_table_kg,
                mass_hanging_kg=request.mass_hanging_kg,
                mu=request.mu if request.friction_enabled else 0.0,
                acceleration_mps2=rest.acceleration_mps2,
                tension_n=rest.tension_n,
                moved=rest.moved,
            )

        trial = await self._repository.add(Experiment.HALF_ATWOOD, build)
        logger.info(f"[trials] half_atwood #{trial.id}: a={rest.acceleration_mps2:.3f} m/s², mode={rest.mode}")
        return trial

    async def record_resonance(self, request: ResonanceTrialRequest) -> ResonanceTrial:
        s = self._settings
        frequency = clamp_frequency_hz(request.frequency_hz)
        air_length = clamp_air_length_m(request.air_length_m, s.RESONANCE_AIR_LENGTH_MIN_M, s.RESONANCE_AIR_LENGTH_MAX_M)
        state = derive_resonance_state(
            frequency,
            air_length,
            speed_mps=self.reference_speed_mps,
            tube_diameter_m=s.RESONANCE_TUBE_DIAMETER_M,
            air_length_min_m=s.RESONANCE_AIR_LENGTH_MIN_M,
            air_length_max_m=s.RESONANCE_AIR_LENGTH_MAX_M,
        )
        # Reading the water level is imprecise by a couple of millimetres
        noise = self._rng.uniform(-1.0, 1.0) * s.RESONANCE_MEASUREMENT_NOISE_M
        measured = clamp_air_length_m(air_length + noise, s.RESONANCE_AIR_LENGTH_MIN_M, s.RESONANCE_AIR_LENGTH_MAX_M)

        def build(trial_id: int) -> ResonanceTrial:
            return ResonanceTrial(
                id=trial_id,
                frequency_hz=frequency,
                length_m=measured,
                speed_mps=inferred_speed_mps(frequency, measured, s.RESONANCE_TUBE_DIAMETER_M),
                accepted=state.quality.accepted,
                quality_label=state.quality.label,
                quality_css=state.quality.css,
            )

        trial = await self._repository.add(Experiment.RESONANCE, build)
        if not trial.accepted:
            logger.info(f"[trials] resonance #{trial.id} recorded off peak ({state.quality.label}, strength={state.strength:.3f})")
        else:
            logger.info(f"[trials] resonance #{trial.id} accepted: v={trial.speed_mps:.1f} m/s")
        return trial

    async def list_trials(self, experiment: Experiment) -> list[Trial]:
        return await self._repository.list_trials(experiment)

    async def clear(self, experiment: Experiment) -> int:
        removed = await self._repository.clear(experiment)
        logger.info(f"[trials] cleared {removed} {experiment.value} trial(s)")
        return removed

    async def resonance_summary(self) -> ResonanceSummary:
        trials = await self._repository.list_trials(Experiment.RESONANCE)
        return summarize_resonance(trials, self.reference_speed_mps)


def get_trial_service() -> TrialService:
    """Service bound to the global repository and cached settings."""
    return TrialService(get_trial_repository(), get_settings())
