"""Personalized creator outreach with simulated e-mail delivery."""
from __future__ import annotations

import random
from typing import Any, Dict, List, Optional

import structlog

from influencerflow.agents.base import Agent
from influencerflow.config import SimulationConfig
from influencerflow.core.models import Task, TaskType, utcnow

logger = structlog.get_logger(__name__)


class OutreachAgent(Agent):
    """Compose and send one outreach message per creator, sequentially."""

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        settings: Optional[SimulationConfig] = None,
    ) -> None:
        super().__init__(
            name="AI Outreach Agent",
            specialty="outreach_automation",
            capabilities=(
                TaskType.SEND_OUTREACH,
                TaskType.NEGOTIATE_DEALS,
                TaskType.MULTILINGUAL_COMM,
            ),
            rng=rng,
            settings=settings,
        )

    async def execute_task(self, task: Task) -> Dict[str, Any]:
        creators: List[Dict[str, Any]] = list(task.payload.get("creators") or [])
        campaign: Dict[str, Any] = dict(task.payload.get("campaign") or {})

        outreach_results = []
        for creator in creators:
            message = await self._compose_message(creator, campaign)
            delivered = await self._send_email(creator, message)
            outreach_results.append(
                {
                    "creator_id": creator.get("creator_id"),
                    "creator_name": creator.get("name"),
                    "status": "sent" if delivered else "failed",
                    "subject": message["subject"],
                    "sent_at": utcnow(),
                }
            )

        sent = sum(1 for r in outreach_results if r["status"] == "sent")
        return {
            "outreach_results": outreach_results,
            "summary": {
                "total": len(creators),
                "sent": sent,
                "failed": len(creators) - sent,
                "expected_responses": sent * self.settings.outreach_response_rate,
            },
            "message": f"Outreach sent to {sent}/{len(creators)} creators",
        }

    async def _compose_message(
        self, creator: Dict[str, Any], campaign: Dict[str, Any]
    ) -> Dict[str, Any]:
        await self.simulate_delay(300)
        title = campaign.get("title", "")
        name = creator.get("name", "there")
        body = (
            f"Hi {name},\n\n"
            f"I came across your {creator.get('platform')} content and was impressed by "
            f"your {creator.get('niche')} expertise.\n\n"
            f"{campaign.get('brand', 'We')} would love to collaborate with you on the "
            f"{title} campaign. Budget: ${creator.get('rate')}\n\n"
            "Best regards,\nInfluencerFlow"
        )
        return {
            "subject": f"Collaboration Opportunity - {title}",
            "body": body,
            "personalized_elements": [
                f"{creator.get('niche')} expertise",
                f"{creator.get('followers')} followers",
            ],
        }

    async def _send_email(self, creator: Dict[str, Any], message: Dict[str, Any]) -> bool:
        await self.simulate_delay(200)
        delivered = self._chance(self.settings.outreach_success_rate)
        logger.debug(
            "outreach.email_sent",
            creator=creator.get("creator_id"),
            subject=message["subject"],
            delivered=delivered,
        )
        return delivered
