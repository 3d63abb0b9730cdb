import argparse
import logging
import sys

from .city_generator import CityGenerator
from .config import CityConfig
from .errors import CityError
from .render import plot_city
from .scheduler import CommuteScheduler
from .world import SimulatedWorld

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Generate a procedural city and run its commute cycle.")
    parser.add_argument("--seed", type=int, default=42, help="RNG seed for deterministic generation.")
    parser.add_argument("--width", type=int, default=CityConfig.width)
    parser.add_argument("--height", type=int, default=CityConfig.height)
    parser.add_argument("--points", type=int, default=CityConfig.n_points, help="Number of Voronoi sites.")
    parser.add_argument("--buildings", type=int, default=CityConfig.n_buildings, help="Number of houses.")
    parser.add_argument("--offices", type=int, default=CityConfig.n_offices)
    parser.add_argument("--agents", type=int, default=CityConfig.n_agents)
    parser.add_argument("--ticks", type=int, default=500, help="Scheduler ticks to simulate.")
    parser.add_argument("--max-commute-ticks", type=int, default=None,
                        help="Fail if one commute leg takes longer than this many ticks.")
    parser.add_argument("--plot", type=str, default=None, help="Save a city plot to this PNG path.")
    parser.add_argument("--log-level", type=str.upper, default="INFO",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"])
    parser.add_argument("--overlay-roads", action="store_true",
                        help="Draw the road skeleton into the terrain texture.")
    return parser


def run(args) -> int:
    config = CityConfig(
        seed=args.seed, width=args.width, height=args.height,
        n_points=args.points, n_buildings=args.buildings,
        n_offices=args.offices, n_agents=args.agents,
        overlay_roads=args.overlay_roads,
    )
    city = CityGenerator(config).generate()

    if args.plot:
        plot_city(city, args.plot)

    world = SimulatedWorld(speed=config.agent_speed, arrival_threshold=config.arrival_threshold)
    scheduler = CommuteScheduler(city.roster, world, max_commute_ticks=args.max_commute_ticks)
    for _ in range(args.ticks):
        scheduler.tick()
        world.step()

    print(f"Simulated {args.ticks} ticks: {scheduler.batches_spawned} waves dispatched, "
          f"{scheduler.legs_completed} legs completed, phase {scheduler.phase.value}")
    return 0


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=args.log_level,
                        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    try:
        return run(args)
    except CityError as exc:
        logger.error("City generation failed: %s", exc)
        return 1


if __name__ == "__main__":
    sys.exit(main())
