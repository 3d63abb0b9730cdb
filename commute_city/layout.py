import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence, Tuple

import numpy as np

from . import sampler
from .config import (CityConfig, HOUSE_T_RANGE, OFFICE_SCALE_X, OFFICE_SCALE_Y,
                     OFFICE_SCALE_Z)
from .errors import LayoutError
from .graph import GraphEdge

logger = logging.getLogger(__name__)

Vec3 = Tuple[float, float, float]


class AssetKind(Enum):
    ROAD = "road"
    HOUSE = "house"
    OFFICE = "office"


class HouseVariant(Enum):
    LEFT = "left"
    RIGHT = "right"


@dataclass(frozen=True)
class PlacedAsset:
    kind: AssetKind
    index: int
    name: str
    position: Vec3          # terrain space, y == 0
    rotation: float         # degrees about the vertical axis
    scale: Vec3
    variant: Optional[HouseVariant] = None


def grid_to_terrain(x: float, y: float, config: CityConfig) -> Vec3:
    """Grid (x, y) to terrain (x, 0, z). Grid y feeds terrain x and grid x feeds terrain z."""
    return ((y - config.height / 2.0) / config.scaling_factor,
            0.0,
            (x - config.width / 2.0) / config.scaling_factor)


def place_roads(edges: Sequence[GraphEdge], config: CityConfig) -> List[PlacedAsset]:
    roads = []
    for edge in edges:
        roads.append(PlacedAsset(
            kind=AssetKind.ROAD,
            index=len(roads),
            name=f"Road {len(roads)}",
            position=grid_to_terrain(edge.p0[0], edge.p0[1], config),
            rotation=edge.angle,
            scale=(1.0, 1.0, edge.length / config.scaling_factor),
        ))
    logger.info("Placed %d roads", len(roads))
    return roads


def place_houses(edges: Sequence[GraphEdge], count: int, config: CityConfig,
                 rng: np.random.RandomState) -> List[PlacedAsset]:
    """
    Drop `count` houses beside randomly chosen roads.

    Edges are picked with replacement, so several houses can share one road.
    Each house sits at a random fraction of the way along its edge and
    faces along it, on a randomly chosen side.
    """
    if count < 0:
        raise LayoutError(f"House count cannot be negative ({count})")
    if count and not edges:
        raise LayoutError("Cannot place houses without any road edges")

    houses = []
    for i in range(count):
        edge = edges[rng.randint(0, len(edges))]
        t = rng.uniform(*HOUSE_T_RANGE)
        # grid_to_terrain is affine
        position = grid_to_terrain(*edge.lerp(t), config)
        variant = HouseVariant.LEFT if rng.uniform(0.0, 1.0) > 0.5 else HouseVariant.RIGHT

        houses.append(PlacedAsset(
            kind=AssetKind.HOUSE,
            index=i,
            name=f"House {i}",
            position=position,
            rotation=edge.angle,
            scale=(1.0, 1.0, 1.0),
            variant=variant,
        ))
    logger.info("Placed %d houses", len(houses))
    return houses


def place_offices(field: np.ndarray, count: int, config: CityConfig,
                  rng: np.random.RandomState) -> List[PlacedAsset]:
    points = sampler.sample(field, count, rng,
                            threshold=config.office_threshold,
                            max_trials=config.max_trials)
    offices = []
    for x, y in points:
        scale = (rng.uniform(*OFFICE_SCALE_X),
                 rng.uniform(*OFFICE_SCALE_Y),
                 rng.uniform(*OFFICE_SCALE_Z))
        offices.append(PlacedAsset(
            kind=AssetKind.OFFICE,
            index=len(offices),
            name=f"Office {len(offices)}",
            position=grid_to_terrain(x, y, config),
            rotation=0.0,
            scale=scale,
        ))
    logger.info("Placed %d offices", len(offices))
    return offices
