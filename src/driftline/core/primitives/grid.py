"""
どこで: `src/driftline/core/primitives/grid.py`。回転ガイドグリッドの実体生成。
何を: 中心・間隔・本数・回転角から、縦横の線分列を構築する。
なぜ: 背景ガイドとして使う薄いグリッドを、他の要素と同じ Geometry 経路で扱うため。
"""

from __future__ import annotations

import math

import numpy as np

from driftline.core.param_meta import ParamMeta
from driftline.core.primitive_registry import primitive
from driftline.core.realized_geometry import RealizedGeometry, empty_geometry

grid_meta = {
    "center": ParamMeta(kind="vec2"),
    "spacing": ParamMeta(kind="float", min=0.0),
    "half_count": ParamMeta(kind="int", min=0, max=500),
    "angle": ParamMeta(kind="float", min=-360.0, max=360.0),
}


@primitive(meta=grid_meta)
def grid(
    *,
    center: tuple[float, float] = (0.0, 0.0),
    spacing: float = 10.0,
    half_count: int | float = 5,
    angle: float = 0.0,
) -> RealizedGeometry:
    """中心まわりに回転したグリッド（縦線・横線 各 2*half_count+1 本）を生成する。

    Parameters
    ----------
    center : tuple[float, float], optional
        グリッド中心 (cx, cy)。
    spacing : float, optional
        線の間隔。各線の長さは `2 * half_count * spacing`。
    half_count : int | float, optional
        中心から片側に並べる線の本数。
    angle : float, optional
        回転角 [deg]。

    Returns
    -------
    RealizedGeometry
        各線が 2 頂点からなるポリライン列（縦線が先、横線が後）。
    """
    n = int(half_count)
    if n < 0:
        raise ValueError("grid の half_count は 0 以上である必要がある")
    try:
        cx, cy = (float(v) for v in center)
    except Exception as exc:
        raise ValueError(
            "grid の center は長さ 2 のシーケンスである必要がある"
        ) from exc

    s = float(spacing)
    extent = n * s
    if extent <= 0.0:
        return empty_geometry()

    ticks = np.arange(-n, n + 1, dtype=np.float64) * s
    count = ticks.shape[0]

    lines = np.zeros((2 * count, 2, 2), dtype=np.float64)
    lines[:count, 0, 0] = ticks
    lines[:count, 1, 0] = ticks
    lines[:count, 0, 1] = -extent
    lines[:count, 1, 1] = extent
    lines[count:, 0, 0] = -extent
    lines[count:, 1, 0] = extent
    lines[count:, 0, 1] = ticks
    lines[count:, 1, 1] = ticks

    theta = math.radians(float(angle))
    c, sn = math.cos(theta), math.sin(theta)
    xy = lines.reshape((-1, 2))
    rotated = np.stack(
        [cx + xy[:, 0] * c - xy[:, 1] * sn, cy + xy[:, 0] * sn + xy[:, 1] * c], axis=1
    )

    coords = np.zeros((rotated.shape[0], 3), dtype=np.float32)
    coords[:, :2] = rotated
    offsets = np.arange(0, coords.shape[0] + 1, 2, dtype=np.int32)
    return RealizedGeometry(coords=coords, offsets=offsets)
