"""
Boundary contracts with the engine side, plus a small in-memory world that
honours them so a city can be simulated without one.
"""
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List

import numpy as np

from .config import AGENT_SPEED, ARRIVAL_THRESHOLD
from .layout import Vec3

logger = logging.getLogger(__name__)


class InstanceSpawner(ABC):
    """Creates moving agents and reports how many are still travelling"""

    @abstractmethod
    def spawn(self, origin: Vec3, destination: Vec3, name: str) -> None:
        pass

    @abstractmethod
    def active_count(self) -> int:
        pass


class SurfaceBaker(ABC):
    """Told once that the layout is final and the walkable surface can be built"""

    @abstractmethod
    def bake(self) -> None:
        pass


class TerrainRenderer(ABC):
    @abstractmethod
    def apply(self, pixels: np.ndarray, width: int, height: int) -> None:
        pass


class NullBaker(SurfaceBaker):
    def bake(self) -> None:
        logger.debug("Surface bake requested")


class NullRenderer(TerrainRenderer):
    def apply(self, pixels: np.ndarray, width: int, height: int) -> None:
        logger.debug("Terrain texture of %dx%d received", width, height)


@dataclass
class MobileInstance:
    name: str
    position: np.ndarray
    destination: np.ndarray

    @property
    def remaining_distance(self) -> float:
        return float(np.linalg.norm(self.destination - self.position))


class SimulatedWorld(InstanceSpawner):
    """
    Agents walk in a straight line toward their destination and vanish
    once they are closer than `arrival_threshold`.
    """

    def __init__(self, speed: float = AGENT_SPEED, arrival_threshold: float = ARRIVAL_THRESHOLD):
        self.speed = speed
        self.arrival_threshold = arrival_threshold
        self.instances: List[MobileInstance] = []
        self.arrivals = 0

    def spawn(self, origin: Vec3, destination: Vec3, name: str) -> None:
        self.instances.append(MobileInstance(
            name=name,
            position=np.array(origin, dtype=np.float64),
            destination=np.array(destination, dtype=np.float64),
        ))
        logger.debug("Spawned %s at %s heading to %s", name, origin, destination)

    def active_count(self) -> int:
        return len(self.instances)

    def step(self, dt: float = 1.0) -> int:
        """Advance every instance by dt seconds. Returns how many arrived."""
        still_moving = []
        for inst in self.instances:
            remaining = inst.remaining_distance
            move = self.speed * dt
            if remaining > 0:
                inst.position = inst.position + (inst.destination - inst.position) * min(1.0, move / remaining)
            if inst.remaining_distance < self.arrival_threshold:
                logger.debug("Destroyed: %s", inst.name)
                continue
            still_moving.append(inst)

        arrived = len(self.instances) - len(still_moving)
        self.instances = still_moving
        self.arrivals += arrived
        return arrived
