"""
どこで: `src/driftline/stripes/fills.py`。
何を: ストライプ矩形を塗りバリアントごとの線画（ポリライン列 + グラデーション位置 g）に変換し、左右入れ替えを適用する。
なぜ: 面塗りの代わりにハッチ・点・小四角などのストロークで濃淡を表し、SVG/PNG の線画経路に載せるため。
"""

from __future__ import annotations

import math
from functools import lru_cache

import numpy as np

from driftline.stripes.params import FillVariant, GradientDirection

Rect = tuple[float, float, float, float]

SOLID_SPACING = 2.0
DOT_CELL = 6.0
DOT_RING_SIDES = 8
HATCH_SPACING = 4.0
PATTERN_CELL = 10.0
STIPPLE_DENSITY = 0.7
STIPPLE_RANGE = (1000, 30000)


def _gradient(xs: np.ndarray, ys: np.ndarray, rect: Rect, direction: GradientDirection) -> np.ndarray:
    x, y, w, h = rect
    if direction is GradientDirection.HORIZONTAL:
        return np.clip((xs - x) / w, 0.0, 1.0)
    return np.clip((ys - y) / h, 0.0, 1.0)


def _solid(rect: Rect, direction: GradientDirection) -> tuple[list[np.ndarray], np.ndarray]:
    """グラデーション方向に並べた密なハッチで面を表す。"""
    x, y, w, h = rect
    if direction is GradientDirection.HORIZONTAL:
        xs = np.arange(x, x + w + 1e-9, SOLID_SPACING)
        lines = [np.array([[xi, y], [xi, y + h]]) for xi in xs]
        return lines, _gradient(xs, np.full_like(xs, y), rect, direction)
    ys = np.arange(y, y + h + 1e-9, SOLID_SPACING)
    lines = [np.array([[x, yi], [x + w, yi]]) for yi in ys]
    return lines, _gradient(np.full_like(ys, x), ys, rect, direction)


def _ring(cx: float, cy: float, r: float) -> np.ndarray:
    theta = np.linspace(0.0, 2.0 * math.pi, DOT_RING_SIDES + 1)
    return np.stack([cx + r * np.cos(theta), cy + r * np.sin(theta)], axis=1)


def _dots(rect: Rect, direction: GradientDirection) -> tuple[list[np.ndarray], np.ndarray]:
    """セル中心の輪。g に応じて直径 1 → セル幅*0.8 に大きくなる。"""
    x, y, w, h = rect
    rows = max(1, int(h / DOT_CELL))
    cols = max(1, int(w / DOT_CELL))
    dx = w / cols
    dy = h / rows
    px, py = np.meshgrid(x + (np.arange(cols) + 0.5) * dx, y + (np.arange(rows) + 0.5) * dy)
    px = px.reshape(-1)
    py = py.reshape(-1)
    g = _gradient(px, py, rect, direction)
    sizes = 1.0 + (dx * 0.8 - 1.0) * g
    rings = [_ring(cx, cy, s / 2.0) for cx, cy, s in zip(px, py, sizes)]
    return rings, g


def _hatch(rect: Rect, direction: GradientDirection) -> tuple[list[np.ndarray], np.ndarray]:
    """間隔 4 の平行線。線幅と不透明度は g で増す（スタイル側で適用）。"""
    x, y, w, h = rect
    count = max(5, int(w / HATCH_SPACING))
    g = np.arange(count + 1, dtype=np.float64) / count
    if direction is GradientDirection.HORIZONTAL:
        xs = x + g * w
        return [np.array([[xi, y], [xi, y + h]]) for xi in xs], g
    ys = y + g * h
    return [np.array([[x, yi], [x + w, yi]]) for yi in ys], g


def _pattern(rect: Rect, direction: GradientDirection) -> tuple[list[np.ndarray], np.ndarray]:
    """セルごとの回転した小四角。g で大きさ 0.2 → 0.9、回転 0 → 2π。"""
    x, y, w, h = rect
    size = PATTERN_CELL
    cols = max(1, int(w / size))
    rows = max(1, int(h / size))
    px, py = np.meshgrid(x + (np.arange(cols) + 0.5) * size, y + (np.arange(rows) + 0.5) * size)
    px = px.reshape(-1)
    py = py.reshape(-1)
    g = _gradient(px, py, rect, direction)

    corners = np.array([[-0.5, -0.5], [0.5, -0.5], [0.5, 0.5], [-0.5, 0.5], [-0.5, -0.5]])
    squares: list[np.ndarray] = []
    for cx, cy, gi in zip(px, py, g):
        s = size * (0.2 + 0.7 * gi)
        a = gi * 2.0 * math.pi
        rot = np.array([[math.cos(a), math.sin(a)], [-math.sin(a), math.cos(a)]])
        squares.append(corners * s @ rot + np.array([cx, cy]))
    return squares, g


def _stipple(
    rect: Rect, direction: GradientDirection, seed: int
) -> tuple[list[np.ndarray], np.ndarray]:
    """一様乱数点のうち確率 g で残した点を小さな十字で表す。"""
    x, y, w, h = rect
    rng = np.random.default_rng(int(seed) & 0xFFFFFFFF)
    lo, hi = STIPPLE_RANGE
    n = min(max(int(w * h * STIPPLE_DENSITY), lo), hi)
    px = rng.uniform(x, x + w, size=n)
    py = rng.uniform(y, y + h, size=n)
    g = _gradient(px, py, rect, direction)
    keep = rng.random(size=n) < g
    radius = 0.4 + rng.random(size=n) * 0.6

    marks: list[np.ndarray] = []
    for cx, cy, r in zip(px[keep], py[keep], radius[keep]):
        marks.append(np.array([[cx - r, cy], [cx + r, cy]]))
        marks.append(np.array([[cx, cy - r], [cx, cy + r]]))
    return marks, np.repeat(g[keep], 2)


def fill_polylines(
    rect: Rect,
    fill: FillVariant,
    direction: GradientDirection,
    *,
    seed: int = 0,
) -> tuple[list[np.ndarray], np.ndarray]:
    """矩形 rect を塗りバリアント fill の線画へ変換する。

    Returns
    -------
    tuple[list[np.ndarray], np.ndarray]
        shape (n, 2) のポリライン列と、各ポリラインのグラデーション位置 g（0..1）。
    """
    if rect[2] <= 0.0 or rect[3] <= 0.0:
        return [], np.zeros((0,), dtype=np.float64)
    if fill is FillVariant.SOLID:
        return _solid(rect, direction)
    if fill is FillVariant.DOT:
        return _dots(rect, direction)
    if fill is FillVariant.HATCH:
        return _hatch(rect, direction)
    if fill is FillVariant.PATTERN:
        return _pattern(rect, direction)
    return _stipple(rect, direction, seed)


def split_polyline_x(polyline: np.ndarray, x_split: float) -> tuple[list[np.ndarray], list[np.ndarray]]:
    """折れ線を x = x_split で切り、左側と右側の断片列を返す。

    x がちょうど x_split の点は右側に含める。
    """
    pts = np.asarray(polyline, dtype=np.float64)
    left: list[np.ndarray] = []
    right: list[np.ndarray] = []
    if pts.shape[0] == 0:
        return left, right

    side_left = bool(pts[0, 0] < x_split)
    current = [pts[0]]
    for p, q in zip(pts[:-1], pts[1:]):
        q_left = bool(q[0] < x_split)
        if q_left != side_left:
            t = (x_split - p[0]) / (q[0] - p[0])
            m = p + (q - p) * t
            current.append(m)
            (left if side_left else right).append(np.asarray(current))
            current = [m, q]
            side_left = q_left
        else:
            current.append(q)
    (left if side_left else right).append(np.asarray(current))
    return left, right


def swap_halves(
    polylines: list[np.ndarray], g: np.ndarray, split_x: float, width: float
) -> tuple[list[np.ndarray], np.ndarray]:
    """split_x の左右を入れ替える（左断片は +(width - split_x)、右断片は -split_x だけ移す）。"""
    out: list[np.ndarray] = []
    out_g: list[float] = []
    shift_left = np.array([float(width) - float(split_x), 0.0])
    shift_right = np.array([-float(split_x), 0.0])
    for poly, gi in zip(polylines, g):
        left, right = split_polyline_x(poly, float(split_x))
        for piece in left:
            out.append(piece + shift_left)
            out_g.append(float(gi))
        for piece in right:
            out.append(piece + shift_right)
            out_g.append(float(gi))
    return out, np.asarray(out_g, dtype=np.float64)


@lru_cache(maxsize=128)
def stripe_polylines(
    rect: Rect,
    fill: FillVariant,
    direction: GradientDirection,
    seed: int,
    split_x: float,
    swap: bool,
    width: float,
) -> tuple[tuple[np.ndarray, ...], np.ndarray]:
    """1 本のストライプの最終的な線画（入れ替え適用済み）を返す（キャッシュ）。"""
    polylines, g = fill_polylines(rect, fill, direction, seed=seed)
    if swap:
        polylines, g = swap_halves(polylines, g, split_x, width)
    g.setflags(write=False)
    return tuple(polylines), g


def band_index(g: np.ndarray, bands: int) -> np.ndarray:
    """グラデーション位置 g を bands 段に量子化した段番号を返す。"""
    n = int(bands)
    return np.minimum((np.asarray(g) * n).astype(np.int64), n - 1)


__all__ = [
    "band_index",
    "fill_polylines",
    "split_polyline_x",
    "stripe_polylines",
    "swap_halves",
]
