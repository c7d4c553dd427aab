"""CRM record keeping: creator profiles, interactions and campaign sync."""
from __future__ import annotations

import random
import uuid
from typing import Any, Dict, Optional

from influencerflow.agents.base import Agent
from influencerflow.config import SimulationConfig
from influencerflow.core.errors import UnknownCRMActionError
from influencerflow.core.models import Task, TaskType, utcnow

UPDATE_CREATOR_PROFILE = "UPDATE_CREATOR_PROFILE"
LOG_INTERACTION = "LOG_INTERACTION"
SYNC_CAMPAIGN_DATA = "SYNC_CAMPAIGN_DATA"


class CRMAgent(Agent):
    """Dispatch on the payload ``action`` to one simulated CRM write."""

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        settings: Optional[SimulationConfig] = None,
    ) -> None:
        super().__init__(
            name="CRM Data Agent",
            specialty="data_management",
            capabilities=(
                TaskType.UPDATE_CRM,
                TaskType.MANAGE_RELATIONSHIPS,
                TaskType.DATA_SYNC,
            ),
            rng=rng,
            settings=settings,
        )
        self._handlers = {
            UPDATE_CREATOR_PROFILE: self._update_creator_profile,
            LOG_INTERACTION: self._log_interaction,
            SYNC_CAMPAIGN_DATA: self._sync_campaign_data,
        }

    async def execute_task(self, task: Task) -> Dict[str, Any]:
        action = task.payload.get("action")
        handler = self._handlers.get(action)
        if handler is None:
            raise UnknownCRMActionError(action)
        return await handler(dict(task.payload.get("data") or {}))

    async def _update_creator_profile(self, data: Dict[str, Any]) -> Dict[str, Any]:
        await self.simulate_delay(400)
        return {
            "action": UPDATE_CREATOR_PROFILE,
            "profile_id": data.get("creator_id"),
            "updated_fields": sorted(dict(data.get("updates") or {})),
            "last_updated": utcnow(),
            "message": "Creator profile updated successfully",
        }

    async def _log_interaction(self, data: Dict[str, Any]) -> Dict[str, Any]:
        await self.simulate_delay(200)
        return {
            "action": LOG_INTERACTION,
            "interaction_id": f"int_{uuid.uuid4().hex[:10]}",
            "type": data.get("type"),
            "participants": list(data.get("participants") or []),
            "logged_at": utcnow(),
            "message": "Interaction logged in CRM",
        }

    async def _sync_campaign_data(self, data: Dict[str, Any]) -> Dict[str, Any]:
        await self.simulate_delay(600)
        return {
            "action": SYNC_CAMPAIGN_DATA,
            "campaign_id": data.get("campaign_id"),
            "synced_records": self._randint(10, 59),
            "last_sync": utcnow(),
            "message": "Campaign data synchronized",
        }
