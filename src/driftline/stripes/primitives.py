"""
どこで: `src/driftline/stripes/primitives.py`。split stripes の primitive。
何を: 1 本のストライプ線画のうち、指定したグラデーション段に属するポリラインを返す。
なぜ: 段ごとに色・線幅・不透明度が異なる Layer を、同じ Geometry 経路で組み立てるため。
"""

from __future__ import annotations

from driftline.core.param_meta import ParamMeta
from driftline.core.primitive_registry import primitive
from driftline.core.realized_geometry import RealizedGeometry, geometry_from_polylines
from driftline.stripes.fills import band_index, stripe_polylines
from driftline.stripes.params import FillVariant, GradientDirection

stripe_band_meta = {
    "rect": ParamMeta(kind="rect"),
    "fill": ParamMeta(kind="choice", choices=tuple(v.value for v in FillVariant)),
    "direction": ParamMeta(kind="choice", choices=tuple(d.value for d in GradientDirection)),
    "seed": ParamMeta(kind="int", min=0),
    "split_x": ParamMeta(kind="float"),
    "swap": ParamMeta(kind="bool"),
    "canvas_width": ParamMeta(kind="float", min=0.0),
    "band": ParamMeta(kind="int", min=0),
    "bands": ParamMeta(kind="int", min=1, max=64),
}


@primitive(meta=stripe_band_meta)
def stripe_band(
    *,
    rect: tuple[float, float, float, float] = (0.0, 0.0, 1.0, 1.0),
    fill: str = "solid",
    direction: str = "horizontal",
    seed: int = 0,
    split_x: float = 0.0,
    swap: bool = False,
    canvas_width: float = 1.0,
    band: int = 0,
    bands: int = 8,
) -> RealizedGeometry:
    """ストライプ rect の線画から段 band（全 bands 段）に属する部分を返す。

    Parameters
    ----------
    rect : tuple[float, float, float, float]
        ストライプ矩形 (x, y, w, h)。
    fill, direction : str
        FillVariant / GradientDirection の value。
    seed : int
        stipple の点配置に使う seed。
    split_x, swap : float, bool
        swap=True なら split_x の左右を入れ替える。
    canvas_width : float
        入れ替え時の移動量に使うキャンバス幅。
    band, bands : int
        取り出す段番号と段数。
    """
    x, y, w, h = (float(v) for v in rect)
    polylines, g = stripe_polylines(
        (x, y, w, h),
        FillVariant(fill),
        GradientDirection(direction),
        int(seed),
        float(split_x),
        bool(swap),
        float(canvas_width),
    )
    idx = band_index(g, int(bands))
    return geometry_from_polylines(p for p, b in zip(polylines, idx) if int(b) == int(band))


__all__ = ["stripe_band"]
