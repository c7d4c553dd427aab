"""HTTP API exposing agent and system status."""
from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends

from influencerflow.api.schemas import AgentResponse, SystemStatusResponse
from influencerflow.orchestration.supervisor import Supervisor
from influencerflow.runtime import get_supervisor

router = APIRouter(tags=["agents"])


@router.get("/agents", response_model=List[AgentResponse])
async def list_agents(supervisor: Supervisor = Depends(get_supervisor)) -> List[AgentResponse]:
    return [AgentResponse(**agent.describe()) for agent in supervisor.list_agents()]


@router.get("/status", response_model=SystemStatusResponse)
async def system_status(supervisor: Supervisor = Depends(get_supervisor)) -> SystemStatusResponse:
    return SystemStatusResponse(**supervisor.get_system_status())
