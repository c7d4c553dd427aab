"""Contract drafting and simulated e-signature."""
from __future__ import annotations

import random
import uuid
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from influencerflow.agents.base import Agent
from influencerflow.config import SimulationConfig
from influencerflow.core.models import Task, TaskType

SIGNATURE_WINDOW = timedelta(hours=48)


class ContractAgent(Agent):
    def __init__(
        self,
        rng: Optional[random.Random] = None,
        settings: Optional[SimulationConfig] = None,
    ) -> None:
        super().__init__(
            name="Contract Automation Agent",
            specialty="contract_management",
            capabilities=(
                TaskType.GENERATE_CONTRACT,
                TaskType.E_SIGNATURE,
                TaskType.TRACK_STATUS,
            ),
            rng=rng,
            settings=settings,
        )

    async def execute_task(self, task: Task) -> Dict[str, Any]:
        deal: Dict[str, Any] = dict(task.payload.get("deal_details") or {})

        contract = await self._generate_contract(deal)
        signature_status = await self._initiate_signature(contract)

        now = datetime.now(timezone.utc)
        return {
            "contract_id": f"contract_{uuid.uuid4().hex[:12]}",
            "contract": contract,
            "signature_status": signature_status,
            "timeline": {
                "generated": now.isoformat(),
                "sent_for_signature": now.isoformat(),
                "expected_completion": (now + SIGNATURE_WINDOW).isoformat(),
            },
            "message": "Contract generated and sent for e-signature",
        }

    async def _generate_contract(self, deal: Dict[str, Any]) -> Dict[str, Any]:
        await self.simulate_delay(1000)
        amount = float(deal.get("amount", 0.0))
        return {
            "title": f"Influencer Agreement - {deal.get('campaign', '')}",
            "parties": {
                "brand": deal.get("brand"),
                "creator": deal.get("creator"),
            },
            "terms": {
                "deliverables": deal.get("deliverables"),
                "timeline": deal.get("timeline"),
                "payment": f"${amount:.2f}",
                "milestones": list(deal.get("milestones") or []),
            },
            "status": "generated",
        }

    async def _initiate_signature(self, contract: Dict[str, Any]) -> Dict[str, Any]:
        await self.simulate_delay(500)
        return {
            "document_id": f"doc_{uuid.uuid4().hex[:12]}",
            "status": "awaiting_signatures",
            "signers": ["brand", "creator"],
            "completed_signatures": 0,
        }
