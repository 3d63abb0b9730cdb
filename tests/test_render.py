"""Tests for commute_city.render."""

import matplotlib

matplotlib.use("Agg")

import numpy as np
import pytest

from commute_city.city_generator import CityGenerator
from commute_city.config import CityConfig
from commute_city.graph import GraphEdge
from commute_city.render import BLUE, density_to_pixels, draw_edges, draw_line, draw_point, plot_city


class TestDensityToPixels:
    def test_black_to_white_blend(self) -> None:
        field = np.array([[0.0, 0.25], [0.5, 1.0]])
        pixels = density_to_pixels(field)
        assert pixels.shape == (4, 4)
        assert pixels[0].tolist() == [0.0, 0.0, 0.0, 1.0]
        assert pixels[1].tolist() == pytest.approx([0.25, 0.25, 0.25, 1.0])
        # pixel i * height + j holds field[i, j]
        assert pixels[1 * 2 + 0].tolist() == pytest.approx([0.5, 0.5, 0.5, 1.0])
        assert pixels[3].tolist() == [1.0, 1.0, 1.0, 1.0]


class TestDrawing:
    def test_point_outside_is_ignored(self) -> None:
        pixels = np.zeros((9, 4))
        draw_point(pixels, (5, 1), BLUE, 3, 3)
        draw_point(pixels, (-1, 0), BLUE, 3, 3)
        assert not pixels.any()

    def test_point_inside_is_written(self) -> None:
        pixels = np.zeros((9, 4))
        draw_point(pixels, (2, 1), BLUE, 3, 3)
        assert pixels[2 * 3 + 1].tolist() == list(BLUE)

    def test_diagonal_line(self) -> None:
        pixels = np.zeros((25, 4))
        draw_line(pixels, (0, 0), (4, 4), BLUE, 5, 5)
        lit = {int(i) for i in np.flatnonzero(pixels[:, 3])}
        assert lit == {i * 5 + i for i in range(5)}

    def test_line_is_clipped(self) -> None:
        pixels = np.zeros((25, 4))
        draw_line(pixels, (-3, 2), (7, 2), BLUE, 5, 5)
        lit = {int(i) for i in np.flatnonzero(pixels[:, 3])}
        assert lit == {x * 5 + 2 for x in range(5)}

    def test_draw_edges(self) -> None:
        pixels = np.zeros((100, 4))
        draw_edges(pixels, [GraphEdge((0.0, 0.0), (0.0, 9.0)), GraphEdge((0.0, 0.0), (9.0, 0.0))], 10, 10)
        assert int(pixels[:, 3].sum()) == 19


class TestPlotCity:
    def test_saves_png(self, tmp_path) -> None:
        config = CityConfig(width=60, height=60, n_points=8, n_buildings=10, n_offices=2, n_agents=2)
        city = CityGenerator(config).generate()
        out = tmp_path / "city.png"
        plot_city(city, str(out))
        assert out.exists()
        assert out.stat().st_size > 0
