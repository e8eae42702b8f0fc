# src/driftline/core/realize.py
# Geometry ノードの評価と realize_cache 管理を実装する。

from __future__ import annotations

import threading

from driftline.core.geometry import Geometry, GeometryId
from driftline.core.primitive_registry import primitive_registry
from driftline.core.realized_geometry import RealizedGeometry, concat_realized_geometries


class RealizeError(RuntimeError):
    """realize 実行中の例外をラップするエラー。"""


class RealizeCache:
    """GeometryId をキーとする実体ジオメトリのキャッシュ。

    Notes
    -----
    描画は単一スレッドで進むが、export を別スレッドから呼ぶ使い方に備えて
    dict 操作だけはロックで保護する。
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._items: dict[GeometryId, RealizedGeometry] = {}

    def get(self, key: GeometryId) -> RealizedGeometry | None:
        with self._lock:
            return self._items.get(key)

    def set(self, key: GeometryId, value: RealizedGeometry) -> None:
        with self._lock:
            self._items[key] = value

    def clear(self) -> None:
        with self._lock:
            self._items.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)


realize_cache = RealizeCache()


def _evaluate_geometry_node(geometry: Geometry) -> RealizedGeometry:
    """単一 Geometry ノードを評価する。"""
    if geometry.op == "concat":
        return concat_realized_geometries(*(realize(g) for g in geometry.inputs))
    return primitive_registry.get(geometry.op)(geometry.args)


def realize(geometry: Geometry) -> RealizedGeometry:
    """Geometry を評価し、RealizedGeometry を返す。

    同じ内容署名のノードは realize_cache から返す。

    Raises
    ------
    RealizeError
        評価中に発生した例外をラップして送出する。
    """
    cached = realize_cache.get(geometry.id)
    if cached is not None:
        return cached

    try:
        result = _evaluate_geometry_node(geometry)
    except RealizeError:
        raise
    except Exception as exc:
        raise RealizeError(
            f"realize に失敗した: op={geometry.op!r}, id={geometry.id}"
        ) from exc

    realize_cache.set(geometry.id, result)
    return result


__all__ = ["RealizeCache", "RealizeError", "realize", "realize_cache"]
