"""
どこで: `src/driftline/core/pipeline.py`。
何を: draw が生成するシーンを正規化・スタイル解決・realize し、出力に使える最終形を返す。
なぜ: SVG/PNG export と CLI で同じパイプラインを共有するため。
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from driftline.core.layer import ColorRGB, Layer, LayerStyleDefaults, resolve_layer_style
from driftline.core.realize import realize
from driftline.core.realized_geometry import RealizedGeometry
from driftline.core.scene import SceneItem, normalize_scene


@dataclass(frozen=True, slots=True)
class RealizedLayer:
    """出力のために realize 済みにした Layer 表現。"""

    layer: Layer
    realized: RealizedGeometry
    color: ColorRGB
    thickness: float
    opacity: float = 1.0


def realize_layers(
    scene: SceneItem,
    defaults: LayerStyleDefaults,
) -> list[RealizedLayer]:
    """シーンを realize 済み Layer 列へ変換する。"""
    out: list[RealizedLayer] = []
    for layer in normalize_scene(scene):
        resolved = resolve_layer_style(layer, defaults)
        out.append(
            RealizedLayer(
                layer=layer,
                realized=realize(layer.geometry),
                color=resolved.color,
                thickness=resolved.thickness,
                opacity=resolved.opacity,
            )
        )
    return out


def realize_scene(
    draw: Callable[[float], SceneItem],
    t: float,
    defaults: LayerStyleDefaults,
) -> list[RealizedLayer]:
    """1 フレーム分のシーンを realize して返す。

    Parameters
    ----------
    draw : Callable[[float], SceneItem]
        フレーム時刻 t を受け取り Geometry / Layer / Sequence を返すコールバック。
    t : float
        フレーム時刻。
    defaults : LayerStyleDefaults
        スタイル欠損を埋める既定値。
    """
    return realize_layers(draw(t), defaults)


__all__ = ["RealizedLayer", "realize_layers", "realize_scene"]
