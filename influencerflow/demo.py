"""CLI demonstration of a full campaign workflow."""
from __future__ import annotations

import asyncio
import json

from influencerflow.config import config
from influencerflow.core.errors import InfluencerFlowError
from influencerflow.core.log import configure_logging
from influencerflow.core.models import CampaignInput, TargetCriteria
from influencerflow.orchestration.supervisor import Supervisor


async def main() -> None:
    configure_logging(config.log_level, json=config.log_json)
    supervisor = Supervisor(settings=config.simulation)

    try:
        outcome = await supervisor.create_campaign(
            CampaignInput(
                title="Spring Gadget Launch",
                brand="Acme",
                budget=5000,
                target_criteria=TargetCriteria(niche="Tech", platform="youtube", min_followers=50_000),
                deliverables="1 video review, 2 shorts",
                timeline="3 weeks",
            )
        )
    except InfluencerFlowError as exc:
        print(f"Campaign failed: {exc}")
    else:
        print(f"Campaign {outcome.campaign_id}: {outcome.status.value}")
        for step in outcome.workflow:
            print(f"  {step.step:<10} {step.result.agent_name} ({step.result.processing_time} ms)")

    print(json.dumps(supervisor.get_system_status(), indent=2))


def run() -> None:
    asyncio.run(main())


if __name__ == "__main__":
    run()
