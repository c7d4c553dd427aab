"""Supervisor that routes typed tasks to specialists and drives campaign workflows."""
from __future__ import annotations

import math
import random
import uuid
from typing import Any, Dict, Iterable, List, Optional

import structlog

from influencerflow.agents.analytics import AnalyticsAgent
from influencerflow.agents.base import Agent
from influencerflow.agents.contract import ContractAgent
from influencerflow.agents.crm import SYNC_CAMPAIGN_DATA, CRMAgent
from influencerflow.agents.discovery import CreatorDiscoveryAgent
from influencerflow.agents.outreach import OutreachAgent
from influencerflow.agents.payment import PaymentAgent
from influencerflow.config import SimulationConfig
from influencerflow.core.errors import DuplicateCapabilityError, NoAgentAvailableError
from influencerflow.core.models import (
    Campaign,
    CampaignInput,
    CampaignOutcome,
    CampaignStatus,
    Task,
    TaskResult,
    TaskStatus,
    TaskType,
    WorkflowStep,
    task_tag,
    utcnow,
)

logger = structlog.get_logger(__name__)


def default_agents(
    settings: Optional[SimulationConfig] = None,
    rng: Optional[random.Random] = None,
) -> List[Agent]:
    """Instantiate the six specialists sharing one settings object."""
    return [
        CreatorDiscoveryAgent(rng=rng, settings=settings),
        OutreachAgent(rng=rng, settings=settings),
        ContractAgent(rng=rng, settings=settings),
        PaymentAgent(rng=rng, settings=settings),
        AnalyticsAgent(rng=rng, settings=settings),
        CRMAgent(rng=rng, settings=settings),
    ]


class Supervisor:
    """Own the agent registry, task queue, completed-task log and campaigns."""

    def __init__(
        self,
        agents: Optional[Iterable[Agent]] = None,
        *,
        settings: Optional[SimulationConfig] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.settings = settings or SimulationConfig()
        self._agents: List[Agent] = list(
            agents if agents is not None else default_agents(self.settings, rng)
        )
        self._routes = self._build_routes(self._agents)
        self._task_queue: List[Task] = []
        self._completed_tasks: List[Task] = []
        self._campaigns: List[Campaign] = []
        self._task_counter = 0

    @staticmethod
    def _build_routes(agents: Iterable[Agent]) -> Dict[str, Agent]:
        routes: Dict[str, Agent] = {}
        for agent in agents:
            for task_type in agent.capabilities:
                existing = routes.get(task_type)
                if existing is not None:
                    raise DuplicateCapabilityError(task_type, existing.name, agent.name)
                routes[task_type] = agent
        return routes

    @property
    def task_queue(self) -> List[Task]:
        return list(self._task_queue)

    @property
    def completed_tasks(self) -> List[Task]:
        return list(self._completed_tasks)

    def list_agents(self) -> List[Agent]:
        return list(self._agents)

    def list_campaigns(self) -> List[Campaign]:
        return list(self._campaigns)

    def get_campaign(self, campaign_id: str) -> Optional[Campaign]:
        return next((c for c in self._campaigns if c.campaign_id == campaign_id), None)

    def resolve_agent(self, task_type: str) -> Agent:
        tag = task_tag(task_type)
        agent = self._routes.get(tag)
        if agent is None:
            raise NoAgentAvailableError(tag)
        return agent

    async def create_campaign(self, campaign_input: CampaignInput) -> CampaignOutcome:
        """Register a campaign and run its workflow to a terminal status."""
        campaign = Campaign(
            campaign_id=f"campaign_{uuid.uuid4().hex[:12]}",
            title=campaign_input.title,
            brand=campaign_input.brand,
            budget=campaign_input.budget,
            target_criteria=campaign_input.target_criteria,
            deliverables=campaign_input.deliverables,
            timeline=campaign_input.timeline,
        )
        self._campaigns.append(campaign)
        log = logger.bind(campaign_id=campaign.campaign_id)
        log.info("supervisor.campaign_created", title=campaign.title, budget=campaign.budget)

        try:
            workflow = await self.execute_workflow(campaign)
        except Exception as exc:  # noqa: BLE001
            campaign.status = CampaignStatus.FAILED
            campaign.error = str(exc)
            log.error("supervisor.campaign_failed", error=campaign.error)
            raise

        campaign.status = CampaignStatus.COMPLETED
        log.info("supervisor.campaign_completed", steps=[s.step for s in workflow])
        return CampaignOutcome(
            campaign_id=campaign.campaign_id,
            status=campaign.status,
            workflow=workflow,
            message="Campaign workflow completed successfully",
        )

    async def execute_workflow(self, campaign: Campaign) -> List[WorkflowStep]:
        """Run discovery, outreach, optional contract/payment, analytics and CRM sync."""
        workflow = campaign.workflow

        discovery = await self.delegate_task(
            TaskType.DISCOVER_CREATORS,
            {"criteria": campaign.target_criteria.as_dict()},
        )
        workflow.append(WorkflowStep(step="discovery", result=discovery))

        creators = discovery.result["creators"][: self.settings.outreach_batch_size]
        outreach = await self.delegate_task(
            TaskType.SEND_OUTREACH,
            {"creators": creators, "campaign": self._campaign_brief(campaign)},
        )
        workflow.append(WorkflowStep(step="outreach", result=outreach))

        responded = math.floor(outreach.result["summary"]["expected_responses"])
        if responded > 0:
            contract = await self.delegate_task(
                TaskType.GENERATE_CONTRACT,
                {
                    "deal_details": {
                        "campaign": campaign.title,
                        "brand": campaign.brand,
                        "creator": "Selected Creator",
                        "deliverables": campaign.deliverables,
                        "amount": campaign.budget / responded,
                        "timeline": campaign.timeline,
                        "milestones": ["50% upfront", "50% on completion"],
                    }
                },
            )
            workflow.append(WorkflowStep(step="contract", result=contract))

            payment = await self.delegate_task(
                TaskType.PROCESS_PAYMENT,
                {"payment_details": self._payment_plan(campaign)},
            )
            workflow.append(WorkflowStep(step="payment", result=payment))

        analytics = await self.delegate_task(
            TaskType.ANALYZE_PERFORMANCE,
            {"campaign_id": campaign.campaign_id},
        )
        workflow.append(WorkflowStep(step="analytics", result=analytics))

        crm = await self.delegate_task(
            TaskType.UPDATE_CRM,
            {"action": SYNC_CAMPAIGN_DATA, "data": {"campaign_id": campaign.campaign_id}},
        )
        workflow.append(WorkflowStep(step="crm", result=crm))

        return workflow

    async def delegate_task(self, task_type: str, payload: Dict[str, Any]) -> TaskResult:
        """Route one task to its agent, tracking it through queue and completed log."""
        agent = self.resolve_agent(task_type)

        self._task_counter += 1
        task = Task(
            task_id=self._task_counter,
            task_type=task_tag(task_type),
            payload=payload,
        )
        self._task_queue.append(task)
        log = logger.bind(task_id=task.task_id, task_type=task.task_type, agent=agent.name)
        log.info("supervisor.task_delegated")

        try:
            result = await agent.process_task(task)
        except Exception as exc:  # noqa: BLE001
            task.status = TaskStatus.FAILED
            task.error = str(exc)
            log.warning("supervisor.task_failed", error=task.error)
            raise
        else:
            task.status = TaskStatus.COMPLETED
            task.completed_at = utcnow()
            self._completed_tasks.append(task)
            return result
        finally:
            self._task_queue = [t for t in self._task_queue if t.task_id != task.task_id]

    def get_system_status(self) -> Dict[str, Any]:
        """Read-only snapshot of agents, campaigns and task bookkeeping."""
        statuses = [c.status for c in self._campaigns]
        return {
            "agents": [agent.describe() for agent in self._agents],
            "campaigns": {
                "active": statuses.count(CampaignStatus.ACTIVE),
                "completed": statuses.count(CampaignStatus.COMPLETED),
                "failed": statuses.count(CampaignStatus.FAILED),
                "total": len(statuses),
            },
            "tasks": {
                "queue": len(self._task_queue),
                "completed": len(self._completed_tasks),
                "total": self._task_counter,
            },
        }

    @staticmethod
    def _campaign_brief(campaign: Campaign) -> Dict[str, Any]:
        return {
            "campaign_id": campaign.campaign_id,
            "title": campaign.title,
            "brand": campaign.brand,
            "budget": campaign.budget,
            "deliverables": campaign.deliverables,
            "timeline": campaign.timeline,
        }

    @staticmethod
    def _payment_plan(campaign: Campaign) -> Dict[str, Any]:
        upfront = campaign.budget * 0.5
        completion = campaign.budget - upfront
        return {
            "campaign_id": campaign.campaign_id,
            "amount": upfront,
            "milestones": [
                {"description": "Upfront payment", "amount": upfront, "status": "completed"},
                {"description": "Completion payment", "amount": completion, "status": "pending"},
            ],
        }
