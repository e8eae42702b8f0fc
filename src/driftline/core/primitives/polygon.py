"""
どこで: `src/driftline/core/primitives/polygon.py`。正多角形・矩形プリミティブの実体生成。
何を: 辺数・位相・中心・半径から正多角形の閉ポリラインを、原点とサイズから矩形を構築する。
なぜ: ドットの輪・凡例ボックスなど、スケッチ間で使い回す基本図形を提供するため。
"""

from __future__ import annotations

import math

import numpy as np

from driftline.core.param_meta import ParamMeta
from driftline.core.primitive_registry import primitive
from driftline.core.realized_geometry import RealizedGeometry

polygon_meta = {
    "n_sides": ParamMeta(kind="int", min=3, max=256),
    "phase": ParamMeta(kind="float", min=0.0, max=360.0),
    "center": ParamMeta(kind="vec2"),
    "radius": ParamMeta(kind="float", min=0.0),
}


@primitive(meta=polygon_meta)
def polygon(
    *,
    n_sides: int | float = 6,
    phase: float = 0.0,
    center: tuple[float, float] = (0.0, 0.0),
    radius: float = 1.0,
) -> RealizedGeometry:
    """正多角形の閉ポリラインを生成する。

    Parameters
    ----------
    n_sides : int | float, optional
        辺の数。3 未満は 3 にクランプする。
    phase : float, optional
        頂点開始角 [deg]。0° で +X 軸上に頂点を置く。
    center : tuple[float, float], optional
        中心座標 (cx, cy)。
    radius : float, optional
        外接円の半径。

    Returns
    -------
    RealizedGeometry
        開始点を終端に重ねた閉じたポリラインとしての正多角形。
    """
    sides = int(round(float(n_sides)))
    if sides < 3:
        sides = 3

    try:
        cx, cy = center
    except Exception as exc:
        raise ValueError(
            "polygon の center は長さ 2 のシーケンスである必要がある"
        ) from exc

    angles = np.linspace(0.0, 2.0 * math.pi, num=sides, endpoint=False)
    phase_deg = float(phase)
    if phase_deg != 0.0:
        angles = angles + math.radians(phase_deg)

    r = float(radius)
    coords = np.zeros((sides + 1, 3), dtype=np.float32)
    coords[:sides, 0] = float(cx) + r * np.cos(angles)
    coords[:sides, 1] = float(cy) + r * np.sin(angles)
    # 先頭頂点を終端に複製してポリラインを閉じる。
    coords[sides] = coords[0]
    offsets = np.array([0, coords.shape[0]], dtype=np.int32)
    return RealizedGeometry(coords=coords, offsets=offsets)


rect_meta = {
    "origin": ParamMeta(kind="vec2"),
    "size": ParamMeta(kind="vec2"),
}


@primitive(meta=rect_meta)
def rect(
    *,
    origin: tuple[float, float] = (0.0, 0.0),
    size: tuple[float, float] = (1.0, 1.0),
) -> RealizedGeometry:
    """軸平行な矩形の閉ポリラインを生成する。

    Parameters
    ----------
    origin : tuple[float, float], optional
        左上隅の座標 (x, y)。
    size : tuple[float, float], optional
        幅と高さ (w, h)。負の値は拒否する。
    """
    try:
        x, y = (float(v) for v in origin)
        w, h = (float(v) for v in size)
    except Exception as exc:
        raise ValueError(
            "rect の origin/size は長さ 2 のシーケンスである必要がある"
        ) from exc
    if w < 0.0 or h < 0.0:
        raise ValueError("rect の size は非負である必要がある")

    coords = np.array(
        [
            [x, y, 0.0],
            [x + w, y, 0.0],
            [x + w, y + h, 0.0],
            [x, y + h, 0.0],
            [x, y, 0.0],
        ],
        dtype=np.float32,
    )
    offsets = np.array([0, 5], dtype=np.int32)
    return RealizedGeometry(coords=coords, offsets=offsets)
