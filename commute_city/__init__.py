from .city_generator import CityGenerator, CityLayout
from .config import CityConfig
from .scheduler import CommutePhase, CommuteScheduler
from .world import SimulatedWorld

__all__ = [
    "CityConfig",
    "CityGenerator",
    "CityLayout",
    "CommutePhase",
    "CommuteScheduler",
    "SimulatedWorld",
]
