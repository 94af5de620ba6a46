"""ランダム多角形（頂点計算/色/サンプリング/塗り）のテスト群。"""

from __future__ import annotations

import math

import numpy as np
import pytest

from geomart.core.color import Hsla
from geomart.core.shape import (
    FILL_ALPHA,
    PolygonDescriptor,
    paint_polygon,
    paint_random_polygon,
    polygon_vertices,
    radius_range,
    random_fill_color,
    sample_polygon,
)
from geomart.core.surface import CanvasSurface


@pytest.mark.parametrize("n_sides", [3, 4, 5, 6])
@pytest.mark.parametrize("radius", [0.5, 12.0, 250.0])
def test_polygon_vertices_lie_on_circle_with_equal_angular_steps(n_sides: int, radius: float) -> None:
    """頂点数は n_sides、中心からの距離は radius、隣接頂点は 2π/n ずつ離れる。"""
    cx, cy = 40.0, -7.5
    vertices = polygon_vertices(cx, cy, radius, n_sides, phase=1.234)

    assert vertices.shape == (n_sides, 2)
    dist = np.hypot(vertices[:, 0] - cx, vertices[:, 1] - cy)
    np.testing.assert_allclose(dist, radius, rtol=1e-12, atol=1e-9)

    angles = np.arctan2(vertices[:, 1] - cy, vertices[:, 0] - cx)
    steps = np.mod(np.diff(np.append(angles, angles[0])), 2.0 * math.pi)
    np.testing.assert_allclose(steps, 2.0 * math.pi / n_sides, atol=1e-9)


def test_polygon_vertices_phase_rotates_first_vertex() -> None:
    """phase[rad] により先頭頂点の角度が回転する。"""
    v0 = polygon_vertices(0.0, 0.0, 10.0, 4, phase=0.0)
    np.testing.assert_allclose(v0[0], [10.0, 0.0], atol=1e-9)

    v90 = polygon_vertices(0.0, 0.0, 10.0, 4, phase=math.pi / 2.0)
    np.testing.assert_allclose(v90[0], [0.0, 10.0], atol=1e-9)


def test_random_fill_color_stays_in_ranges() -> None:
    """色相 [0,360)、彩度 [0,100]、明度 [0,50)、alpha=0.8。"""
    rng = np.random.default_rng(0)
    for _ in range(2000):
        c = random_fill_color(rng)
        assert 0.0 <= c.hue < 360.0
        assert 0.0 <= c.saturation <= 100.0
        assert 0.0 <= c.lightness < 50.0
        assert c.alpha == FILL_ALPHA


def test_radius_range_uses_short_side() -> None:
    assert radius_range(1200, 600) == (30.0, 60.0)
    assert radius_range(400, 800) == (20.0, 40.0)


def test_sample_polygon_stays_in_bounds_and_covers_all_side_counts() -> None:
    rng = np.random.default_rng(1)
    width, height = 300, 200
    seen_sides: set[int] = set()
    for _ in range(2000):
        cx, cy, r, n = sample_polygon(rng, width, height)
        assert 0.0 <= cx < width
        assert 0.0 <= cy < height
        assert 10.0 <= r <= 20.0
        assert 3 <= n <= 6
        seen_sides.add(n)
    assert seen_sides == {3, 4, 5, 6}


def test_paint_polygon_blends_translucent_fill_over_background() -> None:
    """alpha=0.8 の塗りが背景とブレンドされ、多角形の外は変わらない。"""
    surface = CanvasSurface((100, 100), background_color=(255, 255, 255))
    descriptor = PolygonDescriptor(
        center_x=50.0,
        center_y=50.0,
        radius=20.0,
        n_sides=4,
        phase=0.0,
        fill_color=Hsla(hue=0.0, saturation=100.0, lightness=25.0, alpha=0.8),
    )

    paint_polygon(surface, descriptor)

    # (128, 0, 0) を 0.8 で白に重ねると約 (153, 51, 51)。
    r, g, b = surface.pixel(50, 50)
    assert abs(r - 153) <= 2
    assert abs(g - 51) <= 2
    assert abs(b - 51) <= 2
    assert surface.pixel(2, 2) == (255, 255, 255)


def test_paint_random_polygon_paints_once_near_center() -> None:
    surface = CanvasSurface((100, 100))
    before = surface.revision

    paint_random_polygon(surface, 20.0, 20.0, 8.0, 5, rng=np.random.default_rng(3))

    assert surface.revision == before + 1
    # 半径外の遠い点は塗られない。
    assert surface.pixel(90, 90) == (255, 255, 255)
