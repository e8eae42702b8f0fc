# どこで: `src/driftline/api/layers.py`。
# 何を: Geometry に線スタイルを付けて Layer 化する公開ヘルパ L。
# なぜ: スケッチ側は `out += L(...)` の形でポスターを積み上げるため。

from __future__ import annotations

from collections.abc import Iterable

from driftline.core.geometry import Geometry
from driftline.core.layer import ColorRGB, Layer


def _collect(geometry_or_list: Geometry | Iterable[Geometry]) -> tuple[Geometry, ...]:
    if isinstance(geometry_or_list, Geometry):
        return (geometry_or_list,)
    if isinstance(geometry_or_list, (str, bytes)) or not isinstance(
        geometry_or_list, Iterable
    ):
        raise TypeError(
            f"L は Geometry またはその列のみを受け付けます: {type(geometry_or_list)!r}"
        )
    items = tuple(geometry_or_list)
    for g in items:
        if not isinstance(g, Geometry):
            raise TypeError(f"L には Geometry だけを渡してください: {type(g)!r}")
    if not items:
        raise ValueError("L に空の Geometry リストは渡せません")
    return items


class LayerHelper:
    """Geometry（または列）を 1 枚の Layer に包み、リストで返す。

    複数の Geometry は concat でまとめ、同じ色・線幅・不透明度で描く。
    戻り値がリストなのは、呼び出し側で `+=` によりシーンへ連結するため。
    thickness が 0 以下なら ValueError、Geometry 以外は TypeError。
    """

    def __call__(
        self,
        geometry_or_list: Geometry | Iterable[Geometry],
        *,
        color: ColorRGB | None = None,
        thickness: float | None = None,
        opacity: float | None = None,
        name: str | None = None,
    ) -> list[Layer]:
        if thickness is not None and thickness <= 0:
            raise ValueError("thickness は正の値である必要がある")
        items = _collect(geometry_or_list)
        geometry = items[0] if len(items) == 1 else Geometry.concat(*items)
        return [Layer(geometry, color=color, thickness=thickness, opacity=opacity, name=name)]


L = LayerHelper()

__all__ = ["L", "LayerHelper"]
