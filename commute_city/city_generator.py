import logging
from dataclasses import dataclass
from typing import List, Optional

import numpy as np

from . import graph as planar
from . import layout, roster, sampler
from .config import CityConfig
from .graph import PlanarGraph
from .layout import PlacedAsset
from . import noise_utils
from .render import density_to_pixels, draw_edges
from .roster import AgentRecord
from .world import NullBaker, NullRenderer, SurfaceBaker, TerrainRenderer

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class CityLayout:
    config: CityConfig
    field: np.ndarray
    sites: List[sampler.Site]
    graph: PlanarGraph
    roads: List[PlacedAsset]
    houses: List[PlacedAsset]
    offices: List[PlacedAsset]
    roster: List[AgentRecord]


class CityGenerator:
    def __init__(self, config: Optional[CityConfig] = None,
                 renderer: Optional[TerrainRenderer] = None,
                 baker: Optional[SurfaceBaker] = None):
        self.config = config or CityConfig()
        self.rng = np.random.RandomState(self.config.seed)
        self.renderer = renderer or NullRenderer()
        self.baker = baker or NullBaker()

    def generate(self) -> CityLayout:
        """
        Build a whole city in the fixed order
        field -> sites -> graphs -> roads -> houses -> offices -> roster.
        Any fault stops generation; there is no partial city.
        """
        cfg = self.config

        field = noise_utils.generate(cfg.width, cfg.height, cfg.freq_x, cfg.freq_y,
                                     cfg.offset_x, cfg.offset_y,
                                     base=cfg.seed % 256, octaves=cfg.octaves)

        sites = sampler.sample(field, cfg.n_points, self.rng,
                               threshold=cfg.site_threshold, max_trials=cfg.max_trials)
        graph = planar.build(sites, cfg.width, cfg.height)

        roads = layout.place_roads(graph.voronoi_edges, cfg)
        houses = layout.place_houses(graph.voronoi_edges, cfg.n_buildings, cfg, self.rng)
        offices = layout.place_offices(field, cfg.n_offices, cfg, self.rng)

        pixels = density_to_pixels(field)
        if cfg.overlay_roads:
            draw_edges(pixels, graph.voronoi_edges, cfg.width, cfg.height)
        self.renderer.apply(pixels, cfg.width, cfg.height)
        self.baker.bake()

        agents = roster.assign(houses, offices, cfg.n_agents, self.rng)

        logger.info("Generated city: %d roads, %d houses, %d offices, %d agents",
                    len(roads), len(houses), len(offices), len(agents))
        return CityLayout(cfg, field, sites, graph, roads, houses, offices, agents)
