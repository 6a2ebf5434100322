"""Trial log for both labs."""

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
from .service import TrialService, get_trial_service, summarize_resonance

__all__ = [
    "Experiment",
    "HalfAtwoodTrial",
    "HalfAtwoodTrialRequest",
    "ResonanceSummary",
    "ResonanceTrial",
    "ResonanceTrialRequest",
    "Trial",
    "TrialRepository",
    "TrialService",
    "get_trial_repository",
    "get_trial_service",
    "summarize_resonance",
]
