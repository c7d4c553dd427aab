"""Tests for the agent state machine and the six specialist operations."""
from __future__ import annotations

import asyncio
import random
from typing import Any, Dict, List, Tuple

import pytest

from influencerflow.agents.analytics import AnalyticsAgent
from influencerflow.agents.base import Agent
from influencerflow.agents.contract import ContractAgent
from influencerflow.agents.crm import CRMAgent
from influencerflow.agents.discovery import CreatorDiscoveryAgent
from influencerflow.agents.outreach import OutreachAgent
from influencerflow.agents.payment import PaymentAgent
from influencerflow.config import SimulationConfig
from influencerflow.core.errors import PaymentDeclinedError, UnknownCRMActionError
from influencerflow.core.models import AgentStatus, Task, TaskType


class ObservingAgent(Agent):
    """Agent that records its own status while executing."""

    def __init__(self, fail: bool = False) -> None:
        super().__init__(
            name="Observer",
            specialty="testing",
            capabilities=(TaskType.UPDATE_CRM, "OBSERVE"),
            settings=SimulationConfig(latency_scale=0),
        )
        self.fail = fail
        self.status_during_run = None
        self.task_during_run = None

    async def execute_task(self, task: Task) -> Dict[str, Any]:
        self.status_during_run = self.status
        self.task_during_run = self.current_task
        if self.fail:
            raise ValueError("observed failure")
        return {"ok": True}


def make_task(task_type: str, payload: Dict[str, Any], task_id: int = 1) -> Task:
    return Task(task_id=task_id, task_type=task_type, payload=payload)


def test_can_handle_accepts_enum_members_and_tags() -> None:
    agent = ObservingAgent()
    assert agent.can_handle(TaskType.UPDATE_CRM)
    assert agent.can_handle("UPDATE_CRM")
    assert agent.can_handle("OBSERVE")
    assert not agent.can_handle("DISCOVER_CREATORS")


@pytest.mark.anyio
async def test_process_task_success_transitions() -> None:
    agent = ObservingAgent()
    task = make_task("UPDATE_CRM", {})

    result = await agent.process_task(task)

    assert agent.status_during_run is AgentStatus.WORKING
    assert agent.task_during_run is task
    assert agent.status is AgentStatus.IDLE
    assert agent.current_task is None
    assert agent.completed_tasks == 1
    assert 80 <= agent.performance <= 100
    assert result.task_id == 1
    assert result.agent_id == agent.agent_id
    assert result.agent_name == "Observer"
    assert result.result == {"ok": True}
    assert result.processing_time == 800
    assert result.status == "completed"


@pytest.mark.anyio
async def test_process_task_failure_sets_error_and_recovers() -> None:
    agent = ObservingAgent(fail=True)

    with pytest.raises(ValueError, match="observed failure"):
        await agent.process_task(make_task("OBSERVE", {}))

    assert agent.status is AgentStatus.ERROR
    assert agent.current_task is None
    assert agent.completed_tasks == 0
    assert agent.last_error == "observed failure"

    agent.fail = False
    await agent.process_task(make_task("OBSERVE", {}, task_id=2))
    assert agent.status_during_run is AgentStatus.WORKING
    assert agent.status is AgentStatus.IDLE
    assert agent.completed_tasks == 1


class GatedAgent(Agent):
    """Agent whose tasks block until ``release`` is set."""

    def __init__(self) -> None:
        super().__init__(
            name="Gated",
            specialty="testing",
            capabilities=("GATE",),
            settings=SimulationConfig(latency_scale=0),
        )
        self.release = asyncio.Event()
        self.runs: List[Tuple[int, int]] = []

    async def execute_task(self, task: Task) -> Dict[str, Any]:
        self.runs.append((task.task_id, self.current_task.task_id))
        await self.release.wait()
        assert self.current_task is task
        return {"task_id": task.task_id}


@pytest.mark.anyio
async def test_concurrent_calls_on_one_agent_run_one_at_a_time() -> None:
    agent = GatedAgent()
    first_task = make_task("GATE", {}, task_id=1)
    second_task = make_task("GATE", {}, task_id=2)

    first = asyncio.create_task(agent.process_task(first_task))
    second = asyncio.create_task(agent.process_task(second_task))
    for _ in range(5):
        await asyncio.sleep(0)

    assert agent.runs == [(1, 1)]
    assert agent.current_task is first_task
    assert agent.status is AgentStatus.WORKING
    assert agent._lock.locked()
    assert not first.done()
    assert not second.done()

    agent.release.set()
    results = await asyncio.gather(first, second)

    assert [r.task_id for r in results] == [1, 2]
    assert agent.runs == [(1, 1), (2, 2)]
    assert agent.completed_tasks == 2
    assert agent.current_task is None
    assert agent.status is AgentStatus.IDLE


def test_processing_time_defaults_for_unlisted_types() -> None:
    agent = ObservingAgent()
    assert agent.processing_time("DISCOVER_CREATORS") == 2000
    assert agent.processing_time("ANALYZE_PERFORMANCE") == 3000
    assert agent.processing_time("OBSERVE") == 1500


def test_describe_reports_runtime_state() -> None:
    agent = ObservingAgent()
    snapshot = agent.describe()
    assert snapshot["status"] == "idle"
    assert snapshot["current_task"] is None
    assert snapshot["capabilities"] == ["UPDATE_CRM", "OBSERVE"]


def test_discovery_builds_fixed_size_pool(settings) -> None:
    agent = CreatorDiscoveryAgent(rng=random.Random(42), settings=settings)
    assert len(agent.creator_pool) == 50
    for creator in agent.creator_pool:
        assert 10_000 <= creator.followers < 910_000
        assert 500 <= creator.rate < 5_500
        assert 70 <= creator.score <= 99
        assert 2.0 <= creator.engagement <= 10.0
        assert creator.platform in {"youtube", "instagram"}


@pytest.mark.anyio
async def test_discovery_filters_sorts_and_truncates(settings) -> None:
    agent = CreatorDiscoveryAgent(rng=random.Random(1234), settings=settings)
    criteria = {"min_followers": 100_000, "max_budget": 4_000}

    result = await agent.execute_task(make_task("DISCOVER_CREATORS", {"criteria": criteria}))

    creators = result["creators"]
    assert len(creators) <= 10
    assert result["total_found"] == len(creators)
    assert result["search_criteria"] == criteria
    assert result["platforms"] == ["YouTube", "Instagram"]
    assert all(c["followers"] >= 100_000 and c["rate"] <= 4_000 for c in creators)
    scores = [c["score"] for c in creators]
    assert scores == sorted(scores, reverse=True)
    eligible = [
        c for c in agent.creator_pool if c.followers >= 100_000 and c.rate <= 4_000
    ]
    assert len(creators) == min(10, len(eligible))


@pytest.mark.anyio
async def test_discovery_matches_niche_case_insensitively(settings, fixed_random) -> None:
    agent = CreatorDiscoveryAgent(rng=fixed_random(0.0), settings=settings)

    hit = await agent.execute_task(
        make_task("DISCOVER_CREATORS", {"criteria": {"niche": "tech", "platform": "youtube"}})
    )
    miss = await agent.execute_task(
        make_task("DISCOVER_CREATORS", {"criteria": {"niche": "Tech", "platform": "instagram"}})
    )
    over_budget = await agent.execute_task(
        make_task("DISCOVER_CREATORS", {"criteria": {"max_budget": 400}})
    )

    assert hit["total_found"] == 10
    assert miss["total_found"] == 0
    assert over_budget["creators"] == []


@pytest.mark.anyio
async def test_outreach_summary_counts_sent_and_failed(settings, fixed_random) -> None:
    creators = [
        {"creator_id": f"creator_{i}", "name": f"Creator {i}", "platform": "youtube",
         "niche": "Tech", "followers": 20_000, "rate": 900}
        for i in range(4)
    ]
    campaign = {"title": "Launch", "brand": "Acme"}

    sent = await OutreachAgent(rng=fixed_random(0.0), settings=settings).execute_task(
        make_task("SEND_OUTREACH", {"creators": creators, "campaign": campaign})
    )
    failed = await OutreachAgent(rng=fixed_random(0.99), settings=settings).execute_task(
        make_task("SEND_OUTREACH", {"creators": creators, "campaign": campaign})
    )

    assert sent["summary"] == {
        "total": 4,
        "sent": 4,
        "failed": 0,
        "expected_responses": 4 * 0.15,
    }
    assert [r["creator_id"] for r in sent["outreach_results"]] == [c["creator_id"] for c in creators]
    assert sent["outreach_results"][0]["subject"] == "Collaboration Opportunity - Launch"
    assert failed["summary"]["sent"] == 0
    assert failed["summary"]["expected_responses"] == 0
    assert {r["status"] for r in failed["outreach_results"]} == {"failed"}


@pytest.mark.anyio
async def test_outreach_with_no_creators(settings) -> None:
    result = await OutreachAgent(settings=settings).execute_task(
        make_task("SEND_OUTREACH", {"creators": [], "campaign": {}})
    )
    assert result["outreach_results"] == []
    assert result["summary"]["total"] == 0


@pytest.mark.anyio
async def test_contract_document_and_signature(settings) -> None:
    deal = {
        "campaign": "Launch",
        "brand": "Acme",
        "creator": "Selected Creator",
        "deliverables": "1 post",
        "amount": 250.0,
        "timeline": "1 week",
        "milestones": ["50% upfront", "50% on completion"],
    }

    result = await ContractAgent(settings=settings).execute_task(
        make_task("GENERATE_CONTRACT", {"deal_details": deal})
    )

    contract = result["contract"]
    assert result["contract_id"].startswith("contract_")
    assert contract["title"] == "Influencer Agreement - Launch"
    assert contract["parties"] == {"brand": "Acme", "creator": "Selected Creator"}
    assert contract["terms"]["payment"] == "$250.00"
    assert result["signature_status"]["status"] == "awaiting_signatures"
    assert result["signature_status"]["completed_signatures"] == 0
    assert set(result["timeline"]) == {"generated", "sent_for_signature", "expected_completion"}


@pytest.mark.anyio
async def test_payment_success_and_decline(settings, fixed_random) -> None:
    payload = {
        "payment_details": {
            "campaign_id": "c1",
            "amount": 50.0,
            "milestones": [
                {"description": "Upfront payment", "amount": 50.0, "status": "completed"},
                {"description": "Completion payment", "amount": 50.0, "status": "pending"},
            ],
        }
    }

    paid = await PaymentAgent(rng=fixed_random(0.0), settings=settings).execute_task(
        make_task("PROCESS_PAYMENT", payload)
    )
    assert paid["status"] == "completed"
    assert paid["amount"] == 50.0
    assert paid["invoice_id"].startswith("inv_")
    assert paid["payment_id"].startswith("pay_")
    assert paid["next_payment"]["description"] == "Completion payment"

    with pytest.raises(PaymentDeclinedError) as excinfo:
        await PaymentAgent(rng=fixed_random(0.99), settings=settings).execute_task(
            make_task("PROCESS_PAYMENT", payload)
        )
    assert excinfo.value.amount == 50.0


def test_analytics_report_aggregates_platforms(settings, fixed_random) -> None:
    agent = AnalyticsAgent(rng=fixed_random(0.0), settings=settings)
    youtube = {"views": 1000, "likes": 50, "comments": 10, "shares": 5, "watch_time": 100}
    instagram = {"reach": 1000, "impressions": 1500, "likes": 30, "comments": 10, "saves": 4}

    report = agent.build_report(youtube, instagram)

    assert report["summary"] == {
        "total_reach": 2000,
        "total_engagement": 100,
        "engagement_rate": 5.0,
        "platforms": 2,
    }
    assert report["platform_breakdown"]["youtube"] is youtube
    assert report["roi"] == {"estimated": 2, "confidence": 80}


@pytest.mark.anyio
async def test_analytics_task_result(settings) -> None:
    result = await AnalyticsAgent(rng=random.Random(3), settings=settings).execute_task(
        make_task("ANALYZE_PERFORMANCE", {"campaign_id": "c9"})
    )
    summary = result["report"]["summary"]
    assert result["campaign_id"] == "c9"
    assert summary["total_reach"] > 0
    assert 0 < summary["engagement_rate"] < 100
    assert 2 <= result["report"]["roi"]["estimated"] <= 6


@pytest.mark.anyio
async def test_crm_actions(settings) -> None:
    agent = CRMAgent(settings=settings)

    profile = await agent.execute_task(make_task("UPDATE_CRM", {
        "action": "UPDATE_CREATOR_PROFILE",
        "data": {"creator_id": "creator_1", "updates": {"rate": 900, "niche": "Tech"}},
    }))
    interaction = await agent.execute_task(make_task("UPDATE_CRM", {
        "action": "LOG_INTERACTION",
        "data": {"type": "email", "participants": ["brand", "creator_1"]},
    }))
    sync = await agent.execute_task(make_task("UPDATE_CRM", {
        "action": "SYNC_CAMPAIGN_DATA",
        "data": {"campaign_id": "c1"},
    }))

    assert profile["profile_id"] == "creator_1"
    assert profile["updated_fields"] == ["niche", "rate"]
    assert interaction["interaction_id"].startswith("int_")
    assert interaction["participants"] == ["brand", "creator_1"]
    assert sync["campaign_id"] == "c1"
    assert 10 <= sync["synced_records"] <= 59


@pytest.mark.anyio
async def test_crm_rejects_unknown_action(settings) -> None:
    with pytest.raises(UnknownCRMActionError, match="SEND_FAX"):
        await CRMAgent(settings=settings).execute_task(
            make_task("UPDATE_CRM", {"action": "SEND_FAX", "data": {}})
        )
