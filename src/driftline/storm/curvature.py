"""輪郭上の離散曲率と、ハイライト区間の選択。"""

from __future__ import annotations

import numpy as np

from driftline.storm.contour import ClosedContour
from driftline.storm.params import StormParams

CURVATURE_EPSILON = 0.001
CURVATURE_DENOM_EPSILON = 1e-4
HIGHLIGHT_CURVATURE_THRESHOLD = 0.15
HIGHLIGHT_PROBABILITY = 0.3
HIGHLIGHT_SEGMENTS = 200
HIGHLIGHT_SPAN = 3


def curvature(contour: ClosedContour, u: float, epsilon: float = CURVATURE_EPSILON) -> float:
    """曲線パラメータ u における離散曲率を返す。

    u-ε, u, u+ε（[0, 1] にクランプ）の 3 点から
    `|d1 × d2| / (|d1| |d2| + 1e-4)` を求める。値は非負。
    空の輪郭では 0.0。
    """
    if contour.empty:
        return 0.0
    uu = float(u)
    eps = float(epsilon)
    p0, p1, p2 = contour.positions(
        np.array([max(uu - eps, 0.0), uu, min(uu + eps, 1.0)], dtype=np.float64)
    )
    d1 = p1 - p0
    d2 = p2 - p1
    cross = float(d1[0] * d2[1] - d1[1] * d2[0])
    return abs(cross) / (float(np.hypot(*d1)) * float(np.hypot(*d2)) + CURVATURE_DENOM_EPSILON)


def highlight_rng(params: StormParams, step: int) -> np.random.Generator:
    """レイヤ step のハイライト判定用の乱数生成器（seed + step）を返す。"""
    return np.random.default_rng((int(params.seed) + int(step)) & 0xFFFFFFFF)


def should_highlight(
    contour: ClosedContour,
    u: float,
    step: int,
    params: StormParams,
    *,
    rng: np.random.Generator | None = None,
) -> bool:
    """位置 u をハイライトするかどうかを返す。

    曲率が閾値 0.15 を超え、かつ乱数が 0.3 未満のとき True。
    乱数は曲率が閾値を超えたときだけ 1 回消費する。

    Parameters
    ----------
    rng : np.random.Generator or None, optional
        判定に使う乱数生成器。None の場合は `highlight_rng(params, step)` を新規に作る
        （つまり同じ (seed, step) の単発呼び出しは常に同じ結果になる）。
    """
    if curvature(contour, u) <= HIGHLIGHT_CURVATURE_THRESHOLD:
        return False
    gen = rng if rng is not None else highlight_rng(params, step)
    return bool(gen.random() < HIGHLIGHT_PROBABILITY)


def highlight_segments(
    contour: ClosedContour,
    step: int,
    params: StormParams,
    *,
    segments: int = HIGHLIGHT_SEGMENTS,
    span: int = HIGHLIGHT_SPAN,
) -> list[tuple[float, float]]:
    """輪郭を segments 等分して走査し、ハイライトする区間 (u0, u1) の列を返す。

    乱数生成器はレイヤごとに 1 つ作り、走査順に消費する。
    """
    if contour.empty or segments <= 0:
        return []
    rng = highlight_rng(params, step)
    out: list[tuple[float, float]] = []
    for i in range(int(segments)):
        u = i / segments
        if should_highlight(contour, u, step, params, rng=rng):
            out.append((u, min((i + span) / segments, 1.0)))
    return out


def highlight_polylines(
    contour: ClosedContour,
    step: int,
    params: StormParams,
    *,
    segments: int = HIGHLIGHT_SEGMENTS,
    span: int = HIGHLIGHT_SPAN,
    samples: int = 8,
) -> list[np.ndarray]:
    """ハイライト区間を部分曲線のポリラインとして返す。"""
    return [
        contour.sub(u0, u1, samples)
        for u0, u1 in highlight_segments(contour, step, params, segments=segments, span=span)
    ]


__all__ = [
    "curvature",
    "highlight_polylines",
    "highlight_rng",
    "highlight_segments",
    "should_highlight",
]
