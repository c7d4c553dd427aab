"""Shared fixtures: deterministic random sources and zero-latency agents."""
from __future__ import annotations

import random
from typing import Callable, Iterable, List

import pytest

from influencerflow.agents.analytics import AnalyticsAgent
from influencerflow.agents.base import Agent
from influencerflow.agents.contract import ContractAgent
from influencerflow.agents.crm import CRMAgent
from influencerflow.agents.discovery import CreatorDiscoveryAgent
from influencerflow.agents.outreach import OutreachAgent
from influencerflow.agents.payment import PaymentAgent
from influencerflow.config import SimulationConfig
from influencerflow.orchestration.supervisor import Supervisor


class FixedRandom(random.Random):
    """Random source whose ``random()`` always returns the same value."""

    def __init__(self, value: float) -> None:
        super().__init__(0)
        self.value = value

    def random(self) -> float:
        return self.value


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def settings() -> SimulationConfig:
    return SimulationConfig(latency_scale=0)


@pytest.fixture
def fixed_random() -> Callable[[float], random.Random]:
    return FixedRandom


@pytest.fixture
def build_agents(settings: SimulationConfig) -> Callable[..., List[Agent]]:
    """Build the six specialists with one fixed random value per agent.

    0.0 makes every simulated send and charge succeed and puts every pool
    creator in the Tech/youtube bucket; 0.99 makes every send and charge fail.
    """

    def _build(
        discovery: float = 0.0,
        outreach: float = 0.0,
        payment: float = 0.0,
        other: float = 0.5,
        exclude: Iterable[type] = (),
        sim: SimulationConfig = settings,
    ) -> List[Agent]:
        agents: List[Agent] = [
            CreatorDiscoveryAgent(rng=FixedRandom(discovery), settings=sim),
            OutreachAgent(rng=FixedRandom(outreach), settings=sim),
            ContractAgent(rng=FixedRandom(other), settings=sim),
            PaymentAgent(rng=FixedRandom(payment), settings=sim),
            AnalyticsAgent(rng=FixedRandom(other), settings=sim),
            CRMAgent(rng=FixedRandom(other), settings=sim),
        ]
        excluded = tuple(exclude)
        return [a for a in agents if not isinstance(a, excluded)]

    return _build


@pytest.fixture
def build_supervisor(
    build_agents: Callable[..., List[Agent]], settings: SimulationConfig
) -> Callable[..., Supervisor]:
    def _build(sim: SimulationConfig = settings, **kwargs) -> Supervisor:
        return Supervisor(build_agents(sim=sim, **kwargs), settings=sim)

    return _build
