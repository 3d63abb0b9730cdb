import logging
from typing import List, Optional, Tuple

import numpy as np

from .config import MAX_SAMPLING_TRIALS, SITE_THRESHOLD
from .errors import SamplingError

logger = logging.getLogger(__name__)

Site = Tuple[int, int]

# (dx, dy) offsets averaged by the density test
NEIGHBOR_OFFSETS = [(-1, -1), (1, 1), (1, 0), (0, 1), (0, 0)]


def mean_neighbors(field: np.ndarray, x: int, y: int) -> float:
    """Mean of the five-cell neighbourhood around (x, y). Caller keeps it in bounds."""
    return sum(field[x + dx, y + dy] for dx, dy in NEIGHBOR_OFFSETS) / 5.0


def _window(field: np.ndarray, margin_low: int, margin_high: Optional[int]) -> Tuple[int, int, int, int]:
    width, height = field.shape
    hi_x = width - 2 if margin_high is None else margin_high
    hi_y = height - 2 if margin_high is None else margin_high
    if margin_low < 1:
        raise SamplingError(f"margin_low must be >= 1, got {margin_low}")
    # draws are exclusive of the upper bound, so x + 1 <= hi - 1 stays inside
    if hi_x > width - 1 or hi_y > height - 1:
        raise SamplingError(f"margin_high {margin_high} reaches outside a {width}x{height} field")
    if hi_x <= margin_low or hi_y <= margin_low:
        raise SamplingError(f"Empty sampling window [{margin_low}, {margin_high}) on a {width}x{height} field")
    return margin_low, hi_x, margin_low, hi_y


def sample(field: np.ndarray, count: int, rng: np.random.RandomState,
           margin_low: int = 1, margin_high: Optional[int] = None,
           threshold: Tuple[float, float] = SITE_THRESHOLD,
           max_trials: int = MAX_SAMPLING_TRIALS) -> List[Site]:
    """
    Rejection-sample `count` grid points biased toward dense areas.

    Every trial draws a point in [margin_low, margin_high) on both axes and a
    fresh threshold from `threshold`; the point is kept when its neighbour
    mean reaches the threshold. Points come back in draw order and may repeat.
    """
    if count < 0:
        raise SamplingError(f"Cannot sample a negative number of points ({count})")
    if field.size == 0:
        raise SamplingError("Cannot sample from an empty field")
    lo_x, hi_x, lo_y, hi_y = _window(field, margin_low, margin_high)

    points: List[Site] = []
    trials = 0
    while len(points) < count:
        if trials >= max_trials:
            raise SamplingError(
                f"Failed to satisfy density constraint: {len(points)}/{count} points "
                f"after {max_trials} trials")
        trials += 1

        x = rng.randint(lo_x, hi_x)
        y = rng.randint(lo_y, hi_y)
        if mean_neighbors(field, x, y) >= rng.uniform(*threshold):
            points.append((int(x), int(y)))

    logger.debug("Sampled %d points in %d trials", count, trials)
    return points
