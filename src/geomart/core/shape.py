"""
どこで: `src/geomart/core/shape.py`。ランダム多角形の生成と塗り。
何を: 正多角形の頂点計算、半透明 HSLA 色の抽選、1 tick 分の多角形記述子のサンプリングを行う。
なぜ: 生成ループから「何をどう塗るか」を切り出し、純粋関数としてテストできるようにするため。
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

from geomart.core.color import Hsla, hsla_to_rgba255
from geomart.core.surface import CanvasSurface

MIN_SIDES = 3
MAX_SIDES = 6

FILL_ALPHA = 0.8
# 明度は白飛びしないよう 50% 未満に抑える。
MAX_LIGHTNESS = 50.0

TWO_PI = 2.0 * math.pi


@dataclass(frozen=True, slots=True)
class PolygonDescriptor:
    """1 個の多角形を塗るための記述子（塗ったら破棄する）。"""

    center_x: float
    center_y: float
    radius: float
    n_sides: int
    phase: float
    fill_color: Hsla


def polygon_vertices(
    center_x: float,
    center_y: float,
    radius: float,
    n_sides: int,
    phase: float = 0.0,
) -> np.ndarray:
    """正多角形の頂点を返す。

    Parameters
    ----------
    center_x, center_y : float
        中心座標（ピクセル）。
    radius : float
        外接円の半径。
    n_sides : int
        辺の数。
    phase : float
        頂点開始角 [rad]。

    Returns
    -------
    np.ndarray
        shape `(n_sides, 2)` の float64 配列。先頭頂点は終端に複製しない。
    """

    n = int(n_sides)
    angles = float(phase) + np.arange(n, dtype=np.float64) / float(n) * TWO_PI
    x = float(center_x) + float(radius) * np.cos(angles)
    y = float(center_y) + float(radius) * np.sin(angles)
    return np.stack([x, y], axis=1)


def random_fill_color(rng: np.random.Generator) -> Hsla:
    """塗り用の半透明 HSLA 色をランダムに返す。"""

    return Hsla(
        hue=float(rng.uniform(0.0, 360.0)),
        saturation=float(rng.uniform(0.0, 100.0)),
        lightness=float(rng.uniform(0.0, MAX_LIGHTNESS)),
        alpha=FILL_ALPHA,
    )


def radius_range(width: int, height: int) -> tuple[float, float]:
    """キャンバス寸法から半径の (min, max) を返す。"""

    short = float(min(int(width), int(height)))
    return short / 20.0, short / 10.0


def sample_polygon(
    rng: np.random.Generator,
    width: int,
    height: int,
) -> tuple[float, float, float, int]:
    """キャンバス内のランダムな `(center_x, center_y, radius, n_sides)` を返す。"""

    min_radius, max_radius = radius_range(width, height)
    center_x = float(rng.uniform(0.0, float(width)))
    center_y = float(rng.uniform(0.0, float(height)))
    radius = float(rng.uniform(min_radius, max_radius))
    n_sides = MIN_SIDES + int(math.floor(float(rng.random()) * 4.0))
    return center_x, center_y, radius, n_sides


def paint_polygon(surface: CanvasSurface, descriptor: PolygonDescriptor) -> None:
    """記述子どおりの多角形を surface に塗る。"""

    vertices = polygon_vertices(
        descriptor.center_x,
        descriptor.center_y,
        descriptor.radius,
        descriptor.n_sides,
        descriptor.phase,
    )
    surface.fill_polygon(
        [(float(x), float(y)) for x, y in vertices],
        hsla_to_rgba255(descriptor.fill_color),
    )


def paint_random_polygon(
    surface: CanvasSurface,
    center_x: float,
    center_y: float,
    radius: float,
    n_sides: int,
    *,
    rng: np.random.Generator,
) -> None:
    """向きと色をランダムに決めて多角形を 1 個塗る。

    Notes
    -----
    入力は呼び出し側で検証済みである前提（n_sides は 3..6、radius > 0）。
    """

    descriptor = PolygonDescriptor(
        center_x=float(center_x),
        center_y=float(center_y),
        radius=float(radius),
        n_sides=int(n_sides),
        phase=float(rng.uniform(0.0, TWO_PI)),
        fill_color=random_fill_color(rng),
    )
    paint_polygon(surface, descriptor)


__all__ = [
    "FILL_ALPHA",
    "MAX_SIDES",
    "MIN_SIDES",
    "PolygonDescriptor",
    "paint_polygon",
    "paint_random_polygon",
    "polygon_vertices",
    "radius_range",
    "random_fill_color",
    "sample_polygon",
]
