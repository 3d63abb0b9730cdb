import logging
from dataclasses import dataclass
from typing import List, Sequence

import numpy as np

from .errors import RosterError
from .layout import PlacedAsset, Vec3

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AgentRecord:
    index: int
    home: Vec3
    office: Vec3


def assign(houses: Sequence[PlacedAsset], offices: Sequence[PlacedAsset],
           agent_count: int, rng: np.random.RandomState) -> List[AgentRecord]:
    """Give every agent a random house and an independent random office (with replacement)."""
    if agent_count < 0:
        raise RosterError(f"Agent count cannot be negative ({agent_count})")
    if agent_count and not houses:
        raise RosterError("Cannot assign agents: no houses were placed")
    if agent_count and not offices:
        raise RosterError("Cannot assign agents: no offices were placed")

    roster = []
    for i in range(agent_count):
        h = rng.randint(0, len(houses))
        o = rng.randint(0, len(offices))
        roster.append(AgentRecord(i, houses[h].position, offices[o].position))

    logger.info("Assigned %d agents to %d houses and %d offices",
                agent_count, len(houses), len(offices))
    return roster
