"""Application runtime composition helpers."""
from __future__ import annotations

from functools import lru_cache

from influencerflow.config import config
from influencerflow.orchestration.supervisor import Supervisor


@lru_cache
def get_supervisor() -> Supervisor:
    """Process-wide supervisor holding the in-memory campaign state."""
    return Supervisor(settings=config.simulation)
