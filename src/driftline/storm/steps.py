"""
どこで: `src/driftline/storm/steps.py`。
何を: レイヤ step ごとの輪郭生成と、太線・アクセント・破線の判定/幾何を提供する。
なぜ: primitive（realize 側）と Layer 組み立て（render 側）が同じ規則を共有するため。
"""

from __future__ import annotations

from functools import lru_cache

import numpy as np

from driftline.core.noise import noise1
from driftline.storm.contour import ClosedContour, fit_closed_contour
from driftline.storm.displacement import displaced_polygon
from driftline.storm.params import DEFAULT_SEED_OFFSETS, NoiseSeedOffsets, StormParams
from driftline.storm.polygon import BasePolygon, base_polygon

PASS_SEED_STRIDE = 100
PASS_SEED_Y_OFFSET = 50
PASS_TIME_SCALE = 0.1
PASS_JITTER = 0.3

DASH_SEGMENTS = 100
DASH_LENGTH = 10.0
DASH_GAP = 8.0


@lru_cache(maxsize=64)
def cached_base_polygon(params: StormParams, width: float, height: float) -> BasePolygon:
    """base_polygon の結果を (params, width, height) ごとにキャッシュして返す。"""
    return base_polygon(params, width, height)


def contour_for_step(
    params: StormParams,
    step: int,
    width: float,
    height: float,
    offsets: NoiseSeedOffsets = DEFAULT_SEED_OFFSETS,
) -> ClosedContour:
    """レイヤ step（時刻 step*dt）の輪郭を返す。"""
    base = cached_base_polygon(params, float(width), float(height))
    displaced = displaced_polygon(
        base, params.time_at(step), params, width, height, offsets
    )
    return fit_closed_contour(displaced, params.tension)


def is_bold_step(step: int, params: StormParams) -> bool:
    return int(step) % int(params.bold_every) == 0


def is_accent_step(step: int, params: StormParams) -> bool:
    """ハイライトを描くレイヤか（太線、または bold_every//2 ごと）。"""
    half = max(1, int(params.bold_every) // 2)
    return is_bold_step(step, params) or int(step) % half == 0


def is_dash_step(step: int, params: StormParams) -> bool:
    """破線の前線を重ねるレイヤか（bold_every*3 ごと）。"""
    return int(step) % (int(params.bold_every) * 3) == 0


def pass_count(step: int, params: StormParams) -> int:
    """多重描画のパス数（太線 4, 通常 2）。"""
    return 4 if is_bold_step(step, params) else 2


def pass_offset(params: StormParams, step: int, pass_index: int) -> tuple[float, float]:
    """パス pass_index の平行移動量を返す。パス 0 は (0, 0)。"""
    if pass_index == 0:
        return 0.0, 0.0
    seed = int(params.seed) + int(pass_index) * PASS_SEED_STRIDE
    u = int(step) * PASS_TIME_SCALE
    return (
        noise1(seed, u) * PASS_JITTER,
        noise1(seed + PASS_SEED_Y_OFFSET, u) * PASS_JITTER,
    )


def dash_polylines(
    contour: ClosedContour,
    *,
    segments: int = DASH_SEGMENTS,
    dash: float = DASH_LENGTH,
    gap: float = DASH_GAP,
) -> list[np.ndarray]:
    """輪郭を segments 等分し、累積長が dash 区間に入る区間だけを折れ線で返す。

    連続して描かれる区間は 1 本の折れ線にまとめる。
    """
    if contour.empty or segments <= 0:
        return []
    pts = contour.positions(np.linspace(0.0, 1.0, int(segments) + 1))
    period = float(dash) + float(gap)

    runs: list[np.ndarray] = []
    start: int | None = None
    accumulated = 0.0
    for i in range(int(segments)):
        on = (accumulated % period) < dash
        if on and start is None:
            start = i
        elif not on and start is not None:
            runs.append(pts[start : i + 1])
            start = None
        sub = contour.sub(i / segments, (i + 1) / segments, 8)
        accumulated += float(np.sum(np.hypot(*np.diff(sub, axis=0).T)))
    if start is not None:
        runs.append(pts[start:])
    return runs


__all__ = [
    "cached_base_polygon",
    "contour_for_step",
    "dash_polylines",
    "is_accent_step",
    "is_bold_step",
    "is_dash_step",
    "pass_count",
    "pass_offset",
]
