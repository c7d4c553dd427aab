"""Creator discovery over a synthetic creator pool."""
from __future__ import annotations

import random
from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Optional

import structlog

from influencerflow.agents.base import Agent
from influencerflow.config import SimulationConfig
from influencerflow.core.models import Task, TaskType

logger = structlog.get_logger(__name__)

NICHES = ("Tech", "Fashion", "Food", "Travel", "Fitness", "Gaming", "Beauty", "Lifestyle")
PLATFORMS = ("youtube", "instagram")
LOCATIONS = ("US", "UK", "India", "Canada", "Australia")


@dataclass(slots=True)
class Creator:
    creator_id: str
    name: str
    handle: str
    platform: str
    niche: str
    followers: int
    engagement: float
    avg_views: int
    location: str
    rate: int
    score: int


class CreatorDiscoveryAgent(Agent):
    """Search the creator pool by niche, audience size, rate and platform."""

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        settings: Optional[SimulationConfig] = None,
    ) -> None:
        super().__init__(
            name="Creator Discovery Agent",
            specialty="creator_discovery",
            capabilities=(
                TaskType.DISCOVER_CREATORS,
                TaskType.SEARCH_INFLUENCERS,
                TaskType.PROFILE_ANALYSIS,
            ),
            rng=rng,
            settings=settings,
        )
        self.creator_pool = self._generate_creators(self.settings.creator_pool_size)

    def _generate_creators(self, count: int) -> List[Creator]:
        creators = []
        for i in range(count):
            creators.append(
                Creator(
                    creator_id=f"creator_{i}",
                    name=f"Creator {i + 1}",
                    handle=f"@creator{i + 1}",
                    platform=self._pick(PLATFORMS),
                    niche=self._pick(NICHES),
                    followers=self._randint(10_000, 909_999),
                    engagement=round(self._uniform(2.0, 10.0), 1),
                    avg_views=self._randint(5_000, 54_999),
                    location=self._pick(LOCATIONS),
                    rate=self._randint(500, 5_499),
                    score=self._randint(70, 99),
                )
            )
        return creators

    async def execute_task(self, task: Task) -> Dict[str, Any]:
        criteria: Dict[str, Any] = dict(task.payload.get("criteria") or {})

        await self._search_platform("youtube", criteria)
        await self._search_platform("instagram", criteria)

        matches = [creator for creator in self.creator_pool if self._matches(creator, criteria)]
        # sorted() is stable, so equal scores keep pool order.
        matches = sorted(matches, key=lambda c: c.score, reverse=True)
        matches = matches[: self.settings.discovery_result_limit]

        return {
            "creators": [asdict(creator) for creator in matches],
            "total_found": len(matches),
            "search_criteria": criteria,
            "platforms": ["YouTube", "Instagram"],
            "message": f"Found {len(matches)} relevant creators matching your criteria",
        }

    @staticmethod
    def _matches(creator: Creator, criteria: Dict[str, Any]) -> bool:
        niche = criteria.get("niche")
        if niche and creator.niche.lower() != str(niche).lower():
            return False
        min_followers = criteria.get("min_followers")
        if min_followers and creator.followers < min_followers:
            return False
        max_budget = criteria.get("max_budget")
        if max_budget and creator.rate > max_budget:
            return False
        platform = criteria.get("platform")
        if platform and creator.platform != platform:
            return False
        return True

    async def _search_platform(self, platform: str, criteria: Dict[str, Any]) -> None:
        logger.debug("discovery.platform_search", platform=platform, criteria=criteria)
        await self.simulate_delay(500)
