"""Exception hierarchy raised by the supervisor and its agents."""
from __future__ import annotations


class InfluencerFlowError(Exception):
    """Base class for every error raised by the campaign core."""


class NoAgentAvailableError(InfluencerFlowError, LookupError):
    def __init__(self, task_type: str) -> None:
        super().__init__(f"No agent available for task: {task_type}")
        self.task_type = task_type


class DuplicateCapabilityError(InfluencerFlowError, ValueError):
    def __init__(self, task_type: str, first: str, second: str) -> None:
        super().__init__(
            f"Task type '{task_type}' claimed by both '{first}' and '{second}'"
        )
        self.task_type = task_type


class AgentExecutionError(InfluencerFlowError):
    """A specialist's simulated operation failed."""


class PaymentDeclinedError(AgentExecutionError):
    def __init__(self, invoice_id: str, amount: float) -> None:
        super().__init__(f"Payment for invoice {invoice_id} declined ({amount:.2f})")
        self.invoice_id = invoice_id
        self.amount = amount


class UnknownCRMActionError(AgentExecutionError, ValueError):
    def __init__(self, action: object) -> None:
        super().__init__(f"Unknown CRM action: {action}")
        self.action = action
