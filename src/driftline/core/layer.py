"""
どこで: `src/driftline/core/layer.py`。
何を: Layer モデルとスタイル既定値適用のユーティリティを定義する。
なぜ: Geometry と描画スタイル（色・線幅・不透明度）を分離し、どの出力経路でも同じシーン表現を扱うため。
"""

from __future__ import annotations

from dataclasses import dataclass

from driftline.core.geometry import Geometry

ColorRGB = tuple[float, float, float]


@dataclass(frozen=True, slots=True)
class Layer:
    """Geometry と線スタイルを束ねるシーン要素。

    None のスタイルは LayerStyleDefaults で埋める。
    """

    geometry: Geometry
    color: ColorRGB | None = None
    thickness: float | None = None
    opacity: float | None = None
    name: str | None = None


@dataclass(frozen=True, slots=True)
class LayerStyleDefaults:
    """Layer の欠損スタイルを埋める既定値。"""

    color: ColorRGB = (0.0, 0.0, 0.0)
    thickness: float = 1.0
    opacity: float = 1.0


@dataclass(frozen=True, slots=True)
class ResolvedLayer:
    """スタイルを欠損なく解決した Layer。"""

    layer: Layer
    color: ColorRGB
    thickness: float
    opacity: float


def resolve_layer_style(layer: Layer, defaults: LayerStyleDefaults) -> ResolvedLayer:
    """Layer の色・線幅・不透明度を確定させる。

    Parameters
    ----------
    layer : Layer
        スタイル未指定（None を含む）を許容する Layer。
    defaults : LayerStyleDefaults
        欠損を埋めるための既定スタイル。

    Returns
    -------
    ResolvedLayer
        スタイルを欠損なく持つ Layer 表現。opacity は 0..1 にクランプする。

    Raises
    ------
    ValueError
        thickness が正の値でない場合。
    """
    thickness = layer.thickness if layer.thickness is not None else defaults.thickness
    if thickness <= 0:
        raise ValueError("thickness は正の値である必要がある")

    color = layer.color if layer.color is not None else defaults.color
    opacity = float(layer.opacity if layer.opacity is not None else defaults.opacity)
    opacity = 0.0 if opacity < 0.0 else 1.0 if opacity > 1.0 else opacity

    return ResolvedLayer(
        layer=layer,
        color=color,
        thickness=float(thickness),
        opacity=opacity,
    )


__all__ = ["ColorRGB", "Layer", "LayerStyleDefaults", "ResolvedLayer", "resolve_layer_style"]
