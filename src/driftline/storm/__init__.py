# どこで: `src/driftline/storm/__init__.py`。
# 何を: noise storm（ノイズ駆動の等圧線風輪郭）の公開関数を再エクスポートする。

from __future__ import annotations

from .contour import ClosedContour, fit_closed_contour
from .curvature import curvature, highlight_segments, should_highlight
from .displacement import displaced_polygon, smooth_circular
from .params import StormParams, apply_key
from .polygon import BasePolygon, base_polygon

__all__ = [
    "BasePolygon",
    "ClosedContour",
    "StormParams",
    "apply_key",
    "base_polygon",
    "curvature",
    "displaced_polygon",
    "fit_closed_contour",
    "highlight_segments",
    "should_highlight",
    "smooth_circular",
]
