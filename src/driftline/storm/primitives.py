"""
どこで: `src/driftline/storm/primitives.py`。noise storm の primitive 群。
何を: レイヤ step の輪郭・ハイライト区間・破線前線を RealizedGeometry として生成する。
なぜ: 各レイヤを Geometry レシピとして表し、同じ引数の評価を realize_cache で共有するため。
"""

from __future__ import annotations

from dataclasses import asdict
from typing import Any

import numpy as np

from driftline.core.param_meta import ParamMeta
from driftline.core.primitive_registry import primitive
from driftline.core.realized_geometry import RealizedGeometry, geometry_from_polylines
from driftline.storm.curvature import highlight_polylines
from driftline.storm.params import DEFAULT_SEED_OFFSETS, NoiseSeedOffsets, StormParams
from driftline.storm.steps import contour_for_step, dash_polylines


def params_to_arg(params: StormParams) -> dict[str, Any]:
    """StormParams を Geometry 引数（mapping）へ変換する。"""
    return asdict(params)


def params_from_arg(value: Any) -> StormParams:
    """正規化済み mapping（(key, value) タプル列）から StormParams を復元する。"""
    if not value:
        return StormParams()
    return StormParams(**dict(value))


_common_meta = {
    "params": ParamMeta(kind="mapping"),
    "canvas": ParamMeta(kind="vec2"),
    "step": ParamMeta(kind="int", min=0),
    "seed_offsets": ParamMeta(kind="int3"),
}

storm_contour_meta = {
    **_common_meta,
    "offset": ParamMeta(kind="vec2"),
    "samples_per_segment": ParamMeta(kind="int", min=1, max=256),
}


@primitive(meta=storm_contour_meta)
def storm_contour(
    *,
    params: Any = (),
    canvas: tuple[float, float] = (600.0, 800.0),
    step: int = 0,
    seed_offsets: tuple[int, int, int] = DEFAULT_SEED_OFFSETS.as_tuple(),
    offset: tuple[float, float] = (0.0, 0.0),
    samples_per_segment: int = 12,
) -> RealizedGeometry:
    """レイヤ step の閉輪郭を offset だけ平行移動したポリラインを返す。"""
    p = params_from_arg(params)
    w, h = canvas
    contour = contour_for_step(
        p, int(step), float(w), float(h), NoiseSeedOffsets(*seed_offsets)
    )
    pts = contour.sample(int(samples_per_segment))
    if pts.shape[0] == 0:
        return geometry_from_polylines([])
    return geometry_from_polylines([pts + np.asarray(offset, dtype=np.float64)])


@primitive(meta=dict(_common_meta))
def storm_highlights(
    *,
    params: Any = (),
    canvas: tuple[float, float] = (600.0, 800.0),
    step: int = 0,
    seed_offsets: tuple[int, int, int] = DEFAULT_SEED_OFFSETS.as_tuple(),
) -> RealizedGeometry:
    """レイヤ step の高曲率ハイライト区間を部分曲線の列として返す。"""
    p = params_from_arg(params)
    w, h = canvas
    contour = contour_for_step(
        p, int(step), float(w), float(h), NoiseSeedOffsets(*seed_offsets)
    )
    return geometry_from_polylines(highlight_polylines(contour, int(step), p))


@primitive(meta=dict(_common_meta))
def storm_dashes(
    *,
    params: Any = (),
    canvas: tuple[float, float] = (600.0, 800.0),
    step: int = 0,
    seed_offsets: tuple[int, int, int] = DEFAULT_SEED_OFFSETS.as_tuple(),
) -> RealizedGeometry:
    """レイヤ step の輪郭を破線（dash 10 / gap 8）にしたポリライン列を返す。"""
    p = params_from_arg(params)
    w, h = canvas
    contour = contour_for_step(
        p, int(step), float(w), float(h), NoiseSeedOffsets(*seed_offsets)
    )
    return geometry_from_polylines(dash_polylines(contour))


__all__ = ["params_from_arg", "params_to_arg"]
