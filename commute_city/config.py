# config.py
from dataclasses import dataclass
from typing import Tuple

from .errors import ConfigError

# Canvas
WIDTH = 800
HEIGHT = 800

# Generation
NPOINTS = 80
NBUILDINGS = 800
NOFFICES = 3
NAGENTS = 10

# Density field
FREQ_X = 0.02
FREQ_Y = 0.018
OFFSET_X = 0.43
OFFSET_Y = 0.22

# Grid units per terrain unit
SCALING_FACTOR = 20.0

# Acceptance thresholds for the neighbour-mean test
SITE_THRESHOLD = (0.4, 0.8)
OFFICE_THRESHOLD = (0.0, 0.8)   # looser than sites

# Where along a road a house may sit
HOUSE_T_RANGE = (0.2, 0.8)

# Office footprint ranges (x, y, z)
OFFICE_SCALE_X = (0.7, 1.0)
OFFICE_SCALE_Y = (1.5, 2.0)
OFFICE_SCALE_Z = (0.7, 1.0)

# Rejection sampling gives up after this many draws
MAX_SAMPLING_TRIALS = 100_000

# Agents
ARRIVAL_THRESHOLD = 0.5
AGENT_SPEED = 3.5


def _check_range(name: str, bounds: Tuple[float, float]):
    lo, hi = bounds
    if not 0.0 <= lo <= hi:
        raise ConfigError(f"{name} must satisfy 0 <= low <= high, got {bounds}")


@dataclass
class CityConfig:
    seed: int = 42
    width: int = WIDTH
    height: int = HEIGHT
    n_points: int = NPOINTS
    n_buildings: int = NBUILDINGS
    n_offices: int = NOFFICES
    n_agents: int = NAGENTS
    freq_x: float = FREQ_X
    freq_y: float = FREQ_Y
    offset_x: float = OFFSET_X
    offset_y: float = OFFSET_Y
    octaves: int = 1
    scaling_factor: float = SCALING_FACTOR
    site_threshold: Tuple[float, float] = SITE_THRESHOLD
    office_threshold: Tuple[float, float] = OFFICE_THRESHOLD
    max_trials: int = MAX_SAMPLING_TRIALS
    arrival_threshold: float = ARRIVAL_THRESHOLD
    agent_speed: float = AGENT_SPEED
    # draw the road skeleton into the texture handed to the renderer
    overlay_roads: bool = False

    def __post_init__(self):
        """Reject settings the generator cannot work with."""
        # the neighbour lookups need x-1 and x+1 inside the grid
        if self.width < 4 or self.height < 4:
            raise ConfigError(f"Grid must be at least 4x4, got {self.width}x{self.height}")
        for name in ("n_points", "n_buildings", "n_offices", "n_agents"):
            if getattr(self, name) < 0:
                raise ConfigError(f"{name} cannot be negative")
        if self.octaves < 1:
            raise ConfigError("octaves must be >= 1")
        if self.scaling_factor <= 0:
            raise ConfigError("scaling_factor must be positive")
        if self.max_trials < 1:
            raise ConfigError("max_trials must be >= 1")
        if self.arrival_threshold <= 0 or self.agent_speed <= 0:
            raise ConfigError("arrival_threshold and agent_speed must be positive")
        _check_range("site_threshold", self.site_threshold)
        _check_range("office_threshold", self.office_threshold)
