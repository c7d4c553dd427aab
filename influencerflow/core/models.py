"""Core data models shared across supervisor and agent components."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional


def utcnow() -> str:
    return datetime.now(timezone.utc).isoformat()


def task_tag(task_type: Any) -> str:
    """Normalize a TaskType member or plain string to its tag."""
    return str(getattr(task_type, "value", task_type))


class TaskType(str, Enum):
    """Task tags understood by the specialist agents."""

    DISCOVER_CREATORS = "DISCOVER_CREATORS"
    SEARCH_INFLUENCERS = "SEARCH_INFLUENCERS"
    PROFILE_ANALYSIS = "PROFILE_ANALYSIS"
    SEND_OUTREACH = "SEND_OUTREACH"
    NEGOTIATE_DEALS = "NEGOTIATE_DEALS"
    MULTILINGUAL_COMM = "MULTILINGUAL_COMM"
    GENERATE_CONTRACT = "GENERATE_CONTRACT"
    E_SIGNATURE = "E_SIGNATURE"
    TRACK_STATUS = "TRACK_STATUS"
    PROCESS_PAYMENT = "PROCESS_PAYMENT"
    VERIFY_PAYMENT = "VERIFY_PAYMENT"
    REFUND_PAYMENT = "REFUND_PAYMENT"
    ANALYZE_PERFORMANCE = "ANALYZE_PERFORMANCE"
    GENERATE_REPORTS = "GENERATE_REPORTS"
    TRACK_ROI = "TRACK_ROI"
    UPDATE_CRM = "UPDATE_CRM"
    MANAGE_RELATIONSHIPS = "MANAGE_RELATIONSHIPS"
    DATA_SYNC = "DATA_SYNC"


class AgentStatus(str, Enum):
    """Runtime states of a specialist agent."""

    IDLE = "idle"
    WORKING = "working"
    ERROR = "error"


class TaskStatus(str, Enum):
    ASSIGNED = "assigned"
    COMPLETED = "completed"
    FAILED = "failed"


class CampaignStatus(str, Enum):
    ACTIVE = "active"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass(slots=True)
class Task:
    """Work item handed from the supervisor to a single agent."""

    task_id: int
    task_type: str
    payload: Dict[str, Any]
    status: TaskStatus = TaskStatus.ASSIGNED
    created_at: str = field(default_factory=utcnow)
    completed_at: Optional[str] = None
    error: Optional[str] = None


@dataclass(slots=True)
class TaskResult:
    """Envelope returned by ``Agent.process_task``."""

    task_id: int
    agent_id: str
    agent_name: str
    result: Dict[str, Any]
    processing_time: int
    timestamp: str = field(default_factory=utcnow)
    status: str = TaskStatus.COMPLETED.value


@dataclass(slots=True)
class TargetCriteria:
    niche: str
    platform: str
    min_followers: int = 0
    max_budget: Optional[float] = None

    def as_dict(self) -> Dict[str, Any]:
        return {
            "niche": self.niche,
            "platform": self.platform,
            "min_followers": self.min_followers,
            "max_budget": self.max_budget,
        }


@dataclass(slots=True)
class CampaignInput:
    """Brand-supplied fields needed to start a campaign."""

    title: str
    brand: str
    budget: float
    target_criteria: TargetCriteria
    deliverables: str
    timeline: str


@dataclass(slots=True)
class WorkflowStep:
    step: str
    result: TaskResult
    status: str = TaskStatus.COMPLETED.value


@dataclass(slots=True)
class Campaign:
    """In-memory campaign record owned by the supervisor."""

    campaign_id: str
    title: str
    brand: str
    budget: float
    target_criteria: TargetCriteria
    deliverables: str
    timeline: str
    status: CampaignStatus = CampaignStatus.ACTIVE
    created_at: str = field(default_factory=utcnow)
    workflow: List[WorkflowStep] = field(default_factory=list)
    error: Optional[str] = None


@dataclass(slots=True)
class CampaignOutcome:
    campaign_id: str
    status: CampaignStatus
    workflow: List[WorkflowStep]
    message: str
