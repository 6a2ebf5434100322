"""In-memory persistence layer for trial tables.

The repository abstraction makes it easy to swap a real database later
without touching higher-level orchestration code.
"""

from __future__ import annotations

import asyncio
from typing import Callable

from .schemas import Experiment, Trial


class TrialRepository:
    """Per-experiment trial lists, newest first, with sequential ids."""

    def __init__(self) -> None:
        self._records: dict[Experiment, list[Trial]] = {e: [] for e in Experiment}
        self._next_id: dict[Experiment, int] = {e: 1 for e in Experiment}
        self._lock = asyncio.Lock()

    async def add(self, experiment: Experiment, build: Callable[[int], Trial]) -> Trial:
        """Allocate the next id, build the record with it and store it on top."""
        async with self._lock:
            trial = build(self._next_id[experiment])
            self._records[experiment].insert(0, trial)
            self._next_id[experiment] += 1
            return trial

    async def list_trials(self, experiment: Experiment) -> list[Trial]:
        async with self._lock:
            return list(self._records[experiment])

    async def clear(self, experiment: Experiment) -> int:
        """Drop every record and restart ids at 1. Returns the number removed."""
        async with self._lock:
            removed = len(self._records[experiment])
            self._records[experiment] = []
            self._next_id[experiment] = 1
            return removed


_repository = TrialRepository()


def get_trial_repository() -> TrialRepository:
    """Get global trial repository instance."""
    return _repository
