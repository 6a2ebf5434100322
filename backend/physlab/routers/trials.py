"""
Router: /trials - Trial Tables

Records, lists and clears trials for both labs. Records come back newest
first; clearing a table restarts its ids at 1.
"""

import logging

from fastapi import APIRouter, Depends

from physlab.trials import (
    Experiment,
    HalfAtwoodTrial,
    HalfAtwoodTrialRequest,
    ResonanceSummary,
    ResonanceTrial,
    ResonanceTrialRequest,
    Trial,
    TrialService,
    get_trial_service,
)

logger = logging.getLogger("physlab.trials.router")

router = APIRouter(prefix="/trials", tags=["trials"])


@router.post("/half_atwood", response_model=HalfAtwoodTrial)
async def record_half_atwood(
    request: HalfAtwoodTrialRequest,
    service: TrialService = Depends(get_trial_service),
) -> HalfAtwoodTrial:
    return await service.record_half_atwood(request)


@router.post("/resonance", response_model=ResonanceTrial)
async def record_resonance(
    request: ResonanceTrialRequest,
    service: TrialService = Depends(get_trial_service),
) -> ResonanceTrial:
    return await service.record_resonance(request)


@router.get("/resonance/summary", response_model=ResonanceSummary)
async def resonance_summary(service: TrialService = Depends(get_trial_service)) -> ResonanceSummary:
    return await service.resonance_summary()


@router.get("/{experiment}", response_model=list[Trial])
async def list_trials(
    experiment: Experiment,
    service: TrialService = Depends(get_trial_service),
) -> list[Trial]:
    return await service.list_trials(experiment)


@router.delete("/{experiment}")
async def clear_trials(
    experiment: Experiment,
    service: TrialService = Depends(get_trial_service),
) -> dict[str, int]:
    removed = await service.clear(experiment)
    logger.debug(f"[trials] DELETE /trials/{experiment.value} removed {removed}")
    return {"cleared": removed}
