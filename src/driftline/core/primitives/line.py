"""
どこで: `src/driftline/core/primitives/line.py`。線分・折れ線プリミティブの実体生成。
何を: 始点/終点の線分と、頂点列からの折れ線を構築する。
なぜ: 最小の一次元形状として、凡例や区切り線の基礎にするため。
"""

from __future__ import annotations

import numpy as np

from driftline.core.param_meta import ParamMeta
from driftline.core.primitive_registry import primitive
from driftline.core.realized_geometry import RealizedGeometry, empty_geometry

line_meta = {
    "start": ParamMeta(kind="vec2"),
    "end": ParamMeta(kind="vec2"),
}


@primitive(meta=line_meta)
def line(
    *,
    start: tuple[float, float] = (0.0, 0.0),
    end: tuple[float, float] = (1.0, 0.0),
) -> RealizedGeometry:
    """2 点の線分（offsets=[0,2]）を生成する。"""
    try:
        x0, y0 = (float(v) for v in start)
        x1, y1 = (float(v) for v in end)
    except Exception as exc:
        raise ValueError(
            "line の start/end は長さ 2 のシーケンスである必要がある"
        ) from exc

    coords = np.array([[x0, y0, 0.0], [x1, y1, 0.0]], dtype=np.float32)
    offsets = np.array([0, 2], dtype=np.int32)
    return RealizedGeometry(coords=coords, offsets=offsets)


polyline_meta = {
    "points": ParamMeta(kind="points"),
    "closed": ParamMeta(kind="bool"),
}


@primitive(meta=polyline_meta)
def polyline(
    *,
    points: tuple[tuple[float, float], ...] = (),
    closed: bool = False,
) -> RealizedGeometry:
    """頂点列 (x, y) から 1 本の折れ線を生成する。

    closed=True なら先頭点を終端に重ねる。2 点未満なら空ジオメトリ。
    """
    arr = np.asarray(points, dtype=np.float64).reshape(-1, 2)
    if arr.shape[0] < 2:
        return empty_geometry()
    if closed:
        arr = np.concatenate([arr, arr[:1]], axis=0)

    coords = np.zeros((arr.shape[0], 3), dtype=np.float32)
    coords[:, :2] = arr
    offsets = np.array([0, coords.shape[0]], dtype=np.int32)
    return RealizedGeometry(coords=coords, offsets=offsets)
