"""Invoice generation and simulated milestone payments."""
from __future__ import annotations

import random
import uuid
from typing import Any, Dict, List, Optional

import structlog

from influencerflow.agents.base import Agent
from influencerflow.config import SimulationConfig
from influencerflow.core.errors import PaymentDeclinedError
from influencerflow.core.models import Task, TaskType, utcnow

logger = structlog.get_logger(__name__)


class PaymentAgent(Agent):
    """Charge the first milestone of a payment plan.

    A declined charge raises :class:`PaymentDeclinedError`, which aborts the
    surrounding campaign workflow.
    """

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        settings: Optional[SimulationConfig] = None,
    ) -> None:
        super().__init__(
            name="Smart Payment Agent",
            specialty="payment_automation",
            capabilities=(
                TaskType.PROCESS_PAYMENT,
                TaskType.VERIFY_PAYMENT,
                TaskType.REFUND_PAYMENT,
            ),
            rng=rng,
            settings=settings,
        )

    async def execute_task(self, task: Task) -> Dict[str, Any]:
        details: Dict[str, Any] = dict(task.payload.get("payment_details") or {})
        amount = float(details.get("amount", 0.0))
        milestones: List[Dict[str, Any]] = [dict(m) for m in details.get("milestones") or []]

        invoice_id = await self._generate_invoice(details, amount)
        payment_id = await self._charge(invoice_id, amount)

        next_payment = next(
            (m for m in milestones if m.get("status") == "pending"),
            None,
        )
        return {
            "invoice_id": invoice_id,
            "payment_id": payment_id,
            "amount": amount,
            "status": "completed",
            "milestones": milestones,
            "next_payment": next_payment,
            "processed_at": utcnow(),
            "message": f"Payment completed for {amount:.2f}",
        }

    async def _generate_invoice(self, details: Dict[str, Any], amount: float) -> str:
        await self.simulate_delay(300)
        invoice_id = f"inv_{uuid.uuid4().hex[:10]}"
        logger.debug(
            "payment.invoice_generated",
            invoice_id=invoice_id,
            amount=amount,
            campaign_id=details.get("campaign_id"),
        )
        return invoice_id

    async def _charge(self, invoice_id: str, amount: float) -> str:
        await self.simulate_delay(500)
        if not self._chance(self.settings.payment_success_rate):
            raise PaymentDeclinedError(invoice_id, amount)
        return f"pay_{uuid.uuid4().hex[:10]}"
