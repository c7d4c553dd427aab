"""Base agent definition used by the supervisor."""
from __future__ import annotations

import abc
import asyncio
import random
import uuid
from typing import Any, Dict, Iterable, Optional, Sequence, TypeVar

import structlog

from influencerflow.config import SimulationConfig
from influencerflow.core.models import AgentStatus, Task, TaskResult, TaskType, task_tag

logger = structlog.get_logger(__name__)

T = TypeVar("T")

# Simulated latency per task type, in milliseconds.
BASE_PROCESSING_TIMES: Dict[str, int] = {
    TaskType.DISCOVER_CREATORS.value: 2000,
    TaskType.SEND_OUTREACH.value: 1500,
    TaskType.GENERATE_CONTRACT.value: 2500,
    TaskType.PROCESS_PAYMENT.value: 1000,
    TaskType.ANALYZE_PERFORMANCE.value: 3000,
    TaskType.UPDATE_CRM.value: 800,
}
DEFAULT_PROCESSING_TIME = 1500


class Agent(abc.ABC):
    """Abstract specialist holding a capability set and per-task runtime state."""

    def __init__(
        self,
        *,
        name: str,
        specialty: str,
        capabilities: Iterable[str],
        rng: Optional[random.Random] = None,
        settings: Optional[SimulationConfig] = None,
    ) -> None:
        self.agent_id = uuid.uuid4().hex[:9]
        self.name = name
        self.specialty = specialty
        self.capabilities = tuple(task_tag(c) for c in capabilities)
        self.settings = settings or SimulationConfig()
        self._rng = rng or random.Random(self.settings.seed)
        self._lock = asyncio.Lock()
        self.status = AgentStatus.IDLE
        self.current_task: Optional[Task] = None
        self.completed_tasks = 0
        self.last_error: Optional[str] = None
        self.performance = self._randint(80, 100)

    def can_handle(self, task_type: str) -> bool:
        return task_tag(task_type) in self.capabilities

    def processing_time(self, task_type: str) -> int:
        return BASE_PROCESSING_TIMES.get(task_type, DEFAULT_PROCESSING_TIME)

    async def process_task(self, task: Task) -> TaskResult:
        """Run one task, keeping ``status``/``current_task`` consistent.

        Calls are serialized per agent so a single task is in flight at a
        time. Failures flip the agent to ``error`` and propagate; the next
        call starts from ``working`` again.
        """
        async with self._lock:
            self.status = AgentStatus.WORKING
            self.current_task = task
            log = logger.bind(agent=self.name, task_id=task.task_id, task_type=task.task_type)
            log.info("agent.task_started")
            processing_time = self.processing_time(task.task_type)
            try:
                await self.simulate_delay(processing_time)
                result = await self.execute_task(task)
            except Exception as exc:  # noqa: BLE001
                self.status = AgentStatus.ERROR
                self.current_task = None
                self.last_error = str(exc)
                log.warning("agent.task_failed", error=str(exc))
                raise

            self.status = AgentStatus.IDLE
            self.current_task = None
            self.completed_tasks += 1
            self.performance = self._randint(80, 100)
            log.info("agent.task_completed", completed_tasks=self.completed_tasks)
            return TaskResult(
                task_id=task.task_id,
                agent_id=self.agent_id,
                agent_name=self.name,
                result=result,
                processing_time=processing_time,
            )

    @abc.abstractmethod
    async def execute_task(self, task: Task) -> Dict[str, Any]:
        """Perform the simulated domain operation for ``task``."""

    def describe(self) -> Dict[str, Any]:
        return {
            "id": self.agent_id,
            "name": self.name,
            "specialty": self.specialty,
            "capabilities": list(self.capabilities),
            "status": self.status.value,
            "completed_tasks": self.completed_tasks,
            "performance": self.performance,
            "current_task": self.current_task.task_type if self.current_task else None,
            "last_error": self.last_error,
        }

    async def simulate_delay(self, milliseconds: float) -> None:
        """Sleep for a scaled simulated latency."""
        seconds = milliseconds / 1000 * self.settings.latency_scale
        if seconds > 0:
            await asyncio.sleep(seconds)

    # Random helpers: everything random goes through ``self._rng.random()``
    # so a stub source controls every outcome.

    def _chance(self, probability: float) -> bool:
        return self._rng.random() < probability

    def _randint(self, low: int, high: int) -> int:
        """Uniform integer in [low, high]."""
        return low + int(self._rng.random() * (high - low + 1))

    def _uniform(self, low: float, high: float) -> float:
        return low + self._rng.random() * (high - low)

    def _pick(self, options: Sequence[T]) -> T:
        return options[int(self._rng.random() * len(options))]
