"""
Planar graphs over the sampled sites.

The Voronoi diagram is the road skeleton. The Delaunay triangulation and
its minimum spanning tree are kept alongside it for debugging and for
anything that later needs a guaranteed-connected subnetwork.
"""
import logging
from dataclasses import dataclass
from typing import List, Sequence, Tuple

import numpy as np
from scipy.sparse import csr_matrix
from scipy.sparse.csgraph import minimum_spanning_tree
from scipy.spatial import Delaunay, QhullError, Voronoi
from shapely.geometry import LineString, box

from .errors import GraphError

logger = logging.getLogger(__name__)

Point = Tuple[float, float]


@dataclass(frozen=True)
class GraphEdge:
    p0: Point
    p1: Point

    @property
    def length(self) -> float:
        return float(np.hypot(self.p1[0] - self.p0[0], self.p1[1] - self.p0[1]))

    @property
    def angle(self) -> float:
        """Direction of p0 -> p1 in degrees"""
        return float(np.degrees(np.arctan2(self.p1[1] - self.p0[1], self.p1[0] - self.p0[0])))

    def lerp(self, t: float) -> Point:
        return (self.p0[0] + t * (self.p1[0] - self.p0[0]),
                self.p0[1] + t * (self.p1[1] - self.p0[1]))


@dataclass(frozen=True, eq=False)
class PlanarGraph:
    sites: np.ndarray
    voronoi_edges: List[GraphEdge]
    delaunay_edges: List[GraphEdge]
    spanning_tree: List[GraphEdge]


def unique_sites(sites: Sequence[Tuple[float, float]]) -> np.ndarray:
    """Drop repeated sites, keeping first-draw order"""
    arr = np.asarray(sites, dtype=np.float64).reshape(-1, 2)
    if len(arr) == 0:
        return arr
    _, first = np.unique(arr, axis=0, return_index=True)
    return arr[np.sort(first)]


def _voronoi_edges(vor: Voronoi, width: float, height: float) -> List[GraphEdge]:
    bounds = box(0, 0, width, height)
    points = vor.points
    center = points.mean(axis=0)
    reach = 2.0 * (width + height)

    edges = []
    for pointidx, simplex in zip(vor.ridge_points, vor.ridge_vertices):
        simplex = np.asarray(simplex)
        if np.all(simplex >= 0):
            start, end = vor.vertices[simplex[0]], vor.vertices[simplex[1]]
        else:
            # Infinite ridge: run from the finite vertex along the outward normal
            start = vor.vertices[simplex[simplex >= 0][0]]
            t = points[pointidx[1]] - points[pointidx[0]]
            t = t / np.linalg.norm(t)
            n = np.array([-t[1], t[0]])
            midpoint = points[pointidx].mean(axis=0)
            side = np.sign(np.dot(midpoint - center, n)) or 1.0
            end = start + side * n * (reach + np.linalg.norm(start - center))

        clipped = LineString([tuple(start), tuple(end)]).intersection(bounds)
        if not isinstance(clipped, LineString) or clipped.is_empty or clipped.length == 0:
            continue
        (x0, y0), (x1, y1) = list(clipped.coords)[0], list(clipped.coords)[-1]
        edges.append(GraphEdge((float(x0), float(y0)), (float(x1), float(y1))))
    return edges


def _delaunay_pairs(tri: Delaunay) -> List[Tuple[int, int]]:
    pairs = set()
    for a, b, c in tri.simplices:
        for i, j in ((a, b), (b, c), (a, c)):
            pairs.add((min(i, j), max(i, j)))
    return sorted(pairs)


def _spanning_tree_pairs(points: np.ndarray, pairs: List[Tuple[int, int]]) -> List[Tuple[int, int]]:
    """Euclidean MST; the Delaunay edges always contain it."""
    n = len(points)
    rows = [i for i, _ in pairs]
    cols = [j for _, j in pairs]
    weights = [float(np.linalg.norm(points[i] - points[j])) for i, j in pairs]
    graph = csr_matrix((weights, (rows, cols)), shape=(n, n))
    tree = minimum_spanning_tree(graph).tocoo()
    return sorted((min(i, j), max(i, j)) for i, j in zip(tree.row, tree.col))


def build(sites: Sequence[Tuple[float, float]], width: float, height: float) -> PlanarGraph:
    """Voronoi, Delaunay and MST edge sets over `sites`, clipped to [0, width] x [0, height]."""
    points = unique_sites(sites)
    if len(points) < 3:
        raise GraphError(f"Need at least 3 distinct sites, got {len(points)}")

    try:
        vor = Voronoi(points)
        tri = Delaunay(points)
    except QhullError as exc:
        raise GraphError(f"Degenerate site set: {exc}") from exc

    def to_edge(i, j):
        return GraphEdge((float(points[i][0]), float(points[i][1])),
                         (float(points[j][0]), float(points[j][1])))

    pairs = _delaunay_pairs(tri)
    graph = PlanarGraph(
        sites=points,
        voronoi_edges=_voronoi_edges(vor, width, height),
        delaunay_edges=[to_edge(i, j) for i, j in pairs],
        spanning_tree=[to_edge(i, j) for i, j in _spanning_tree_pairs(points, pairs)],
    )
    logger.info("Graph: %d sites, %d voronoi edges, %d delaunay edges, %d tree edges",
                len(points), len(graph.voronoi_edges), len(graph.delaunay_edges),
                len(graph.spanning_tree))
    return graph
