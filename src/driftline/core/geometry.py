# src/driftline/core/geometry.py
# driftline コアの Geometry ノード定義。
# 「どの primitive をどの引数で評価するか」を不変レシピとして表し、内容署名を付ける。

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from hashlib import blake2b
from math import isfinite
from types import NotImplementedType
from typing import Any, Mapping, Sequence

import numpy as np

GeometryId = str

DEFAULT_SCHEMA_VERSION = 1


def _normalize_value(value: Any) -> Any:
    """引数値を内容署名用の正規形へ変換する。

    Raises
    ------
    TypeError
        サポートされない型が渡された場合。
    ValueError
        float の値が NaN/inf の場合。
    """
    if isinstance(value, np.generic):
        value = value.item()
    if value is None or isinstance(value, (bool, str)):
        return value
    if isinstance(value, Enum):
        return f"{value.__class__.__name__}.{value.name}"
    if isinstance(value, int):
        return int(value)
    if isinstance(value, float):
        if not isfinite(value):
            raise ValueError("非有限の float は Geometry 引数に使用できない")
        # -0.0 と 0.0 を同一視する。
        return value + 0.0
    if isinstance(value, (list, tuple, np.ndarray)):
        return tuple(_normalize_value(v) for v in value)
    if isinstance(value, Mapping):
        return tuple(
            (str(k), _normalize_value(v))
            for k, v in sorted(value.items(), key=lambda item: str(item[0]))
        )
    raise TypeError(f"正規化できない引数型: {type(value)!r}")


def normalize_args(params: Mapping[str, Any]) -> tuple[tuple[str, Any], ...]:
    """パラメータ辞書をキー順の (名前, 正規化値) タプル列へ変換する。"""
    return tuple((str(k), _normalize_value(params[k])) for k in sorted(params))


def _encode(value: Any) -> bytes:
    """正規化済み値を型タグ付きのバイト列へ変換する。"""
    if value is None:
        return b"n"
    if isinstance(value, bool):
        return b"b1" if value else b"b0"
    if isinstance(value, int):
        return b"i" + str(value).encode("ascii")
    if isinstance(value, float):
        return b"f" + f"{value:.17g}".encode("ascii")
    if isinstance(value, str):
        return b"s" + value.encode("utf-8")
    if isinstance(value, tuple):
        return b"t[" + b",".join(_encode(v) for v in value) + b"]"
    raise TypeError(f"署名に使用できない値型: {type(value)!r}")


def compute_geometry_id(
    op: str,
    inputs: Sequence["Geometry"],
    args: tuple[tuple[str, Any], ...],
    *,
    schema_version: int = DEFAULT_SCHEMA_VERSION,
) -> GeometryId:
    """op・子ノード・正規化済み引数から GeometryId（内容署名）を計算する。"""
    h = blake2b(digest_size=16)
    h.update(f"v{schema_version}|op:{op}|inputs:".encode("utf-8"))
    for g in inputs:
        h.update(b"#" + g.id.encode("ascii"))
    h.update(b"|args:")
    for name, value in args:
        h.update(name.encode("utf-8") + b"=" + _encode(value) + b";")
    return h.hexdigest()


@dataclass(frozen=True, slots=True)
class Geometry:
    """幾何レシピを表す不変ノード。

    Parameters
    ----------
    id : GeometryId
        内容署名。同じ op/inputs/args なら同じ値になる。
    op : str
        primitive 名、または ``"concat"``。
    inputs : tuple[Geometry, ...]
        子ノード列。primitive の場合は空タプル。
    args : tuple[tuple[str, Any], ...]
        正規化済み引数。
    """

    id: GeometryId
    op: str
    inputs: tuple["Geometry", ...]
    args: tuple[tuple[str, Any], ...]

    @classmethod
    def create(
        cls,
        op: str,
        *,
        inputs: Sequence["Geometry"] | None = None,
        params: Mapping[str, Any] | None = None,
    ) -> "Geometry":
        """演算子名とパラメータから Geometry ノードを生成する。"""
        inputs_tuple = tuple(inputs or ())
        args = normalize_args(params or {})
        return cls(
            id=compute_geometry_id(op, inputs_tuple, args),
            op=op,
            inputs=inputs_tuple,
            args=args,
        )

    @staticmethod
    def concat(*geometries: "Geometry") -> "Geometry":
        """Geometry 列を 1 つの ``concat`` ノードへまとめる（入れ子は平坦化）。"""
        flat: list[Geometry] = []
        for g in geometries:
            if g.op == "concat":
                flat.extend(g.inputs)
            else:
                flat.append(g)
        if len(flat) == 1:
            return flat[0]
        return Geometry.create("concat", inputs=flat)

    def __add__(self, other: object) -> "Geometry | NotImplementedType":
        """`g1 + g2` を `concat` として表現する。"""
        if not isinstance(other, Geometry):
            return NotImplemented
        return Geometry.concat(self, other)


__all__ = ["Geometry", "GeometryId", "compute_geometry_id", "normalize_args"]
