# どこで: `src/driftline/api/primitives.py`。
# 何を: primitive Geometry ノードを生成する公開名前空間 G を提供する。
# なぜ: primitive 専用のファサードに分離し、責務を明確化するため。

from __future__ import annotations

from typing import Any, Callable

from driftline.core.geometry import Geometry
from driftline.core.primitive_registry import primitive_registry

# primitive 実装モジュールをインポートしてレジストリに登録させる。
from driftline.core.primitives import grid as _primitive_grid  # noqa: F401
from driftline.core.primitives import line as _primitive_line  # noqa: F401
from driftline.core.primitives import polygon as _primitive_polygon  # noqa: F401
from driftline.core.primitives import label as _primitive_label  # noqa: F401
from driftline.storm import primitives as _primitive_storm  # noqa: F401
from driftline.stripes import primitives as _primitive_stripes  # noqa: F401


class PrimitiveNamespace:
    """primitive Geometry ノードを生成する名前空間。

    Attributes
    ----------
    <name> : Callable[..., Geometry]
        登録済み primitive 名ごとのファクトリ。
        例: G.polygon(n_sides=6) -> Geometry(op="polygon", inputs=(), args=...)
    """

    def __getattr__(self, name: str) -> Callable[..., Geometry]:
        """primitive 名に対応する Geometry ファクトリを返す。

        Raises
        ------
        AttributeError
            未登録の primitive 名が指定された場合。
        """
        if name.startswith("_"):
            raise AttributeError(name)

        if name not in primitive_registry:
            raise AttributeError(f"未登録の primitive: {name!r}")

        def factory(**params: Any) -> Geometry:
            """primitive Geometry ノードを生成する。

            Raises
            ------
            TypeError
                meta を持つ primitive に未知の引数が渡された場合。
            """
            meta = primitive_registry.get_meta(name)
            if meta:
                unknown = sorted(set(params) - set(meta))
                if unknown:
                    raise TypeError(f"primitive {name!r} の未知の引数: {unknown}")

            # 省略された引数はシグネチャ由来の既定値で埋め、署名を呼び出し方に依らず一定にする。
            resolved = primitive_registry.get_defaults(name)
            resolved.update(params)
            return Geometry.create(op=name, params=resolved)

        return factory


G = PrimitiveNamespace()
"""primitive Geometry ノードを生成する公開名前空間。"""

__all__ = ["G"]
