"""Campaign creation and lookup routes."""
from __future__ import annotations

from typing import List

import structlog
from fastapi import APIRouter, Depends, HTTPException, status

from influencerflow.api.schemas import (
    CampaignCreateRequest,
    CampaignOutcomeResponse,
    CampaignResponse,
    WorkflowStepResponse,
)
from influencerflow.core.errors import InfluencerFlowError
from influencerflow.orchestration.supervisor import Supervisor
from influencerflow.runtime import get_supervisor

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/campaigns", tags=["campaigns"])


@router.post("", response_model=CampaignOutcomeResponse, status_code=status.HTTP_201_CREATED)
async def create_campaign(
    request: CampaignCreateRequest,
    supervisor: Supervisor = Depends(get_supervisor),
) -> CampaignOutcomeResponse:
    """Create a campaign and run its workflow to completion."""
    try:
        outcome = await supervisor.create_campaign(request.to_input())
    except InfluencerFlowError as exc:
        logger.warning("api.campaign_failed", title=request.title, error=str(exc))
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc)) from exc

    return CampaignOutcomeResponse(
        campaign_id=outcome.campaign_id,
        status=outcome.status.value,
        message=outcome.message,
        workflow=[WorkflowStepResponse.from_step(s) for s in outcome.workflow],
    )


@router.get("", response_model=List[CampaignResponse])
async def list_campaigns(supervisor: Supervisor = Depends(get_supervisor)) -> List[CampaignResponse]:
    return [CampaignResponse.from_campaign(c) for c in supervisor.list_campaigns()]


@router.get("/{campaign_id}", response_model=CampaignResponse)
async def get_campaign(
    campaign_id: str,
    supervisor: Supervisor = Depends(get_supervisor),
) -> CampaignResponse:
    campaign = supervisor.get_campaign(campaign_id)
    if campaign is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Unknown campaign")
    return CampaignResponse.from_campaign(campaign)
