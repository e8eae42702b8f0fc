# src/driftline/core/realized_geometry.py
# Geometry 評価結果である RealizedGeometry（ポリライン配列）のモデルと構築ヘルパ。

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True, slots=True)
class RealizedGeometry:
    """Geometry を評価した結果であるポリライン配列。

    Parameters
    ----------
    coords : np.ndarray
        float32 型 shape (N, 3) の頂点配列。(N, 2) は z=0 を補完する。
    offsets : np.ndarray
        int32 型 shape (M+1,) のポリライン開始インデックス配列。

    Notes
    -----
    配列は writeable=False に固定して保持する。
    """

    coords: np.ndarray
    offsets: np.ndarray

    def __post_init__(self) -> None:
        coords = np.asarray(self.coords)
        offsets = np.asarray(self.offsets)

        if coords.ndim == 2 and coords.shape[1] == 2:
            z = np.zeros((coords.shape[0], 1), dtype=coords.dtype)
            coords = np.concatenate([coords, z], axis=1)

        if coords.ndim != 2 or coords.shape[1] != 3:
            raise ValueError("coords は shape (N,3) の 2 次元配列である必要がある")
        if offsets.ndim != 1 or offsets.size == 0:
            raise ValueError("offsets は 1 要素以上の 1 次元配列である必要がある")

        coords = coords.astype(np.float32, copy=False)
        offsets = offsets.astype(np.int32, copy=False)

        if offsets[0] != 0:
            raise ValueError("offsets[0] は 0 である必要がある")
        if offsets[-1] != coords.shape[0]:
            raise ValueError("offsets[-1] は coords 行数と一致する必要がある")
        if np.any(np.diff(offsets) < 0):
            raise ValueError("offsets は単調非減少である必要がある")

        coords.setflags(write=False)
        offsets.setflags(write=False)
        object.__setattr__(self, "coords", coords)
        object.__setattr__(self, "offsets", offsets)

    @property
    def n_polylines(self) -> int:
        """含まれるポリライン本数を返す。"""
        return int(self.offsets.size) - 1

    def polylines(self) -> list[np.ndarray]:
        """ポリラインごとの座標配列（view）を返す。"""
        out: list[np.ndarray] = []
        for s, e in zip(self.offsets[:-1], self.offsets[1:]):
            out.append(self.coords[int(s) : int(e)])
        return out


def empty_geometry() -> RealizedGeometry:
    """頂点を持たない RealizedGeometry を返す。"""
    return RealizedGeometry(
        coords=np.zeros((0, 3), dtype=np.float32),
        offsets=np.zeros((1,), dtype=np.int32),
    )


def geometry_from_polylines(polylines: Iterable[np.ndarray]) -> RealizedGeometry:
    """(n,2) または (n,3) のポリライン列から RealizedGeometry を構築する。

    2 点未満のポリラインは描画できないため捨てる。
    """
    kept: list[np.ndarray] = []
    for p in polylines:
        arr = np.asarray(p, dtype=np.float32)
        if arr.ndim != 2 or arr.shape[0] < 2:
            continue
        if arr.shape[1] == 2:
            arr = np.concatenate(
                [arr, np.zeros((arr.shape[0], 1), dtype=np.float32)], axis=1
            )
        kept.append(arr)

    if not kept:
        return empty_geometry()

    offsets = np.zeros(len(kept) + 1, dtype=np.int32)
    offsets[1:] = np.cumsum([int(p.shape[0]) for p in kept])
    return RealizedGeometry(coords=np.concatenate(kept, axis=0), offsets=offsets)


def concat_realized_geometries(*geometries: RealizedGeometry) -> RealizedGeometry:
    """複数の RealizedGeometry を 1 つに連結する。"""
    if not geometries:
        return empty_geometry()

    coords = np.concatenate([g.coords for g in geometries], axis=0)
    offsets: list[int] = [0]
    base = 0
    for g in geometries:
        offsets.extend((g.offsets[1:] + base).tolist())
        base += int(g.offsets[-1])
    return RealizedGeometry(coords=coords, offsets=np.asarray(offsets, dtype=np.int32))


__all__ = [
    "RealizedGeometry",
    "concat_realized_geometries",
    "empty_geometry",
    "geometry_from_polylines",
]
