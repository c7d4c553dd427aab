"""Request and response models for the HTTP API."""
from __future__ import annotations

from dataclasses import asdict
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from influencerflow.core.models import Campaign, CampaignInput, TargetCriteria, WorkflowStep


class TargetCriteriaModel(BaseModel):
    niche: str = Field(..., min_length=1, description="Creator niche, e.g. Tech")
    platform: str = Field(..., description="youtube or instagram")
    min_followers: int = Field(0, ge=0)
    max_budget: Optional[float] = Field(None, gt=0, description="Highest acceptable creator rate")


class CampaignCreateRequest(BaseModel):
    title: str = Field(..., min_length=1)
    brand: str = Field(..., min_length=1)
    budget: float = Field(..., gt=0)
    target_criteria: TargetCriteriaModel
    deliverables: str = Field(..., min_length=1)
    timeline: str = Field(..., min_length=1)

    def to_input(self) -> CampaignInput:
        return CampaignInput(
            title=self.title,
            brand=self.brand,
            budget=self.budget,
            target_criteria=TargetCriteria(**self.target_criteria.model_dump()),
            deliverables=self.deliverables,
            timeline=self.timeline,
        )


class WorkflowStepResponse(BaseModel):
    step: str
    status: str
    agent_name: str
    task_id: int
    processing_time: int
    timestamp: str
    result: Dict[str, Any]

    @classmethod
    def from_step(cls, step: WorkflowStep) -> "WorkflowStepResponse":
        return cls(
            step=step.step,
            status=step.status,
            agent_name=step.result.agent_name,
            task_id=step.result.task_id,
            processing_time=step.result.processing_time,
            timestamp=step.result.timestamp,
            result=step.result.result,
        )


class CampaignResponse(BaseModel):
    campaign_id: str
    title: str
    brand: str
    budget: float
    target_criteria: Dict[str, Any]
    deliverables: str
    timeline: str
    status: str
    created_at: str
    workflow: List[WorkflowStepResponse]
    error: Optional[str] = None

    @classmethod
    def from_campaign(cls, campaign: Campaign) -> "CampaignResponse":
        return cls(
            campaign_id=campaign.campaign_id,
            title=campaign.title,
            brand=campaign.brand,
            budget=campaign.budget,
            target_criteria=asdict(campaign.target_criteria),
            deliverables=campaign.deliverables,
            timeline=campaign.timeline,
            status=campaign.status.value,
            created_at=campaign.created_at,
            workflow=[WorkflowStepResponse.from_step(s) for s in campaign.workflow],
            error=campaign.error,
        )


class CampaignOutcomeResponse(BaseModel):
    campaign_id: str
    status: str
    message: str
    workflow: List[WorkflowStepResponse]


class AgentResponse(BaseModel):
    id: str
    name: str
    specialty: str
    capabilities: List[str]
    status: str
    completed_tasks: int
    performance: int
    current_task: Optional[str]
    last_error: Optional[str]


class CampaignCounts(BaseModel):
    active: int
    completed: int
    failed: int
    total: int


class TaskCounts(BaseModel):
    queue: int
    completed: int
    total: int


class SystemStatusResponse(BaseModel):
    agents: List[AgentResponse]
    campaigns: CampaignCounts
    tasks: TaskCounts
