# どこで: `src/driftline/core/scene.py`。
# 何を: draw(t) の戻り値をフラットな `list[Layer]` にそろえる。
# なぜ: export と CLI が同じシーン表現だけを扱えばよいようにするため。

from __future__ import annotations

from collections.abc import Iterator, Sequence
from typing import TypeAlias

from driftline.core.geometry import Geometry
from driftline.core.layer import Layer

SceneItem: TypeAlias = Geometry | Layer | Sequence["SceneItem"]


def _iter_layers(item: object) -> Iterator[Layer]:
    if isinstance(item, Layer):
        yield item
    elif isinstance(item, Geometry):
        # 素の Geometry はスタイル未指定の Layer として扱う。
        yield Layer(item)
    elif isinstance(item, Sequence) and not isinstance(item, (str, bytes)):
        for child in item:
            yield from _iter_layers(child)
    else:
        raise TypeError(f"シーンに含められない要素: {type(item)!r}")


def normalize_scene(scene: SceneItem) -> list[Layer]:
    """ネストした Geometry/Layer 列を描画順のまま Layer のリストにする。"""
    return list(_iter_layers(scene))
