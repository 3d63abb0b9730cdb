import logging
from typing import Optional, Sequence, Tuple

import matplotlib.pyplot as plt
import numpy as np

from .graph import GraphEdge

logger = logging.getLogger(__name__)

Color = Tuple[float, float, float, float]

BLACK = (0.0, 0.0, 0.0, 1.0)
WHITE = (1.0, 1.0, 1.0, 1.0)
BLUE = (0.0, 0.0, 1.0, 1.0)


def density_to_pixels(field: np.ndarray) -> np.ndarray:
    """
    Flat RGBA buffer for a (width, height) field. Pixel i * height + j is
    field[i, j] blended from black to white.
    """
    t = field.reshape(-1, 1)
    black, white = np.array(BLACK), np.array(WHITE)
    return (black + (white - black) * t).astype(np.float32)


def draw_point(pixels: np.ndarray, p: Tuple[float, float], color: Color, width: int, height: int):
    x, y = p
    if 0 <= x < width and 0 <= y < height:
        pixels[int(x) * height + int(y)] = color


def draw_line(pixels: np.ndarray, p0: Tuple[float, float], p1: Tuple[float, float],
              color: Color, width: int, height: int):
    """Bresenham line; cells outside the grid are skipped"""
    x0, y0 = int(p0[0]), int(p0[1])
    x1, y1 = int(p1[0]), int(p1[1])

    dx = abs(x1 - x0)
    dy = abs(y1 - y0)
    sx = 1 if x0 < x1 else -1
    sy = 1 if y0 < y1 else -1
    err = dx - dy
    while True:
        if 0 <= x0 < width and 0 <= y0 < height:
            pixels[x0 * height + y0] = color
        if x0 == x1 and y0 == y1:
            break
        e2 = 2 * err
        if e2 > -dy:
            err -= dy
            x0 += sx
        if e2 < dx:
            err += dx
            y0 += sy


def draw_edges(pixels: np.ndarray, edges: Sequence[GraphEdge], width: int, height: int,
               color: Color = BLUE) -> np.ndarray:
    for edge in edges:
        draw_line(pixels, edge.p0, edge.p1, color, width, height)
    return pixels


def plot_city(layout, path: Optional[str] = None, show_tree: bool = True):
    """Grayscale density with roads, spanning tree, houses and offices on top."""
    cfg = layout.config
    fig, ax = plt.subplots(figsize=(10, 10))

    # field is indexed [x, y]; imshow wants rows = y
    ax.imshow(layout.field.T, cmap='gray', origin='lower',
              extent=[0, cfg.width, 0, cfg.height], vmin=0.0, vmax=1.0)

    for edge in layout.graph.voronoi_edges:
        ax.plot([edge.p0[0], edge.p1[0]], [edge.p0[1], edge.p1[1]],
                color='#3498db', linewidth=1.2, zorder=2)

    if show_tree:
        for edge in layout.graph.spanning_tree:
            ax.plot([edge.p0[0], edge.p1[0]], [edge.p0[1], edge.p1[1]],
                    color='#e67e22', linewidth=0.8, linestyle='--', zorder=3)

    ax.scatter(layout.graph.sites[:, 0], layout.graph.sites[:, 1],
               c='#2c3e50', s=8, zorder=4, label='Sites')

    # assets live in terrain space, map them back to grid (x = z, y = x)
    s = cfg.scaling_factor
    if layout.houses:
        hx = [h.position[2] * s + cfg.width / 2 for h in layout.houses]
        hy = [h.position[0] * s + cfg.height / 2 for h in layout.houses]
        ax.scatter(hx, hy, c='#2ecc71', s=6, marker='s', zorder=5, label='Houses')
    if layout.offices:
        ox = [o.position[2] * s + cfg.width / 2 for o in layout.offices]
        oy = [o.position[0] * s + cfg.height / 2 for o in layout.offices]
        ax.scatter(ox, oy, c='#e74c3c', s=60, marker='^', zorder=6, label='Offices')

    ax.set_xlim(0, cfg.width)
    ax.set_ylim(0, cfg.height)
    ax.set_aspect('equal')
    ax.set_title(f"Commute City | Seed: {cfg.seed}")
    ax.legend(loc='upper right')

    if path:
        fig.savefig(path, bbox_inches='tight', dpi=150)
        logger.info("Saved city plot to %s", path)
        plt.close(fig)
    else:
        plt.show()
    return fig
