"""seed 付きの 2 次元コヒーレントノイズ（Perlin improved noise）。

`noise2(seed, x, y)` は (seed, 座標) だけで値が決まる決定的な関数で、
同じ seed なら呼び出し順やプロセスに依らず同じ値を返す。
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache

import numpy as np
from numba import njit  # type: ignore[import-untyped]

# 2D 用の勾配ベクトル（軸方向 4 + 対角 4）。
_GRAD2 = np.asarray(
    [
        [1.0, 1.0],
        [-1.0, 1.0],
        [1.0, -1.0],
        [-1.0, -1.0],
        [1.0, 0.0],
        [-1.0, 0.0],
        [0.0, 1.0],
        [0.0, -1.0],
    ],
    dtype=np.float64,
)


@dataclass(frozen=True, slots=True)
class NoiseTable:
    """seed から導出した置換テーブルと座標オフセット。

    offset は格子点上（ノイズ値 0）に原点が乗らないようにずらす量。
    """

    seed: int
    perm: np.ndarray
    offset: tuple[float, float]


@lru_cache(maxsize=256)
def noise_table(seed: int) -> NoiseTable:
    """seed に対応する NoiseTable を返す（キャッシュ）。"""
    rng = np.random.default_rng(int(seed) & 0xFFFFFFFF)
    perm = rng.permutation(256).astype(np.int64)
    perm = np.concatenate([perm, perm])
    perm.setflags(write=False)
    ox, oy = rng.uniform(0.0, 256.0, size=2)
    return NoiseTable(seed=int(seed), perm=perm, offset=(float(ox), float(oy)))


# 総和順序を固定したいので fastmath は使わない。
@njit(cache=True)
def _fade(t):
    return t * t * t * (t * (t * 6.0 - 15.0) + 10.0)


@njit(cache=True)
def _lerp(a, b, t):
    return a + t * (b - a)


@njit(cache=True)
def _grad(hash_val, x, y, grads):
    g = grads[hash_val & 7]
    return g[0] * x + g[1] * y


@njit(cache=True)
def perlin_noise_2d(x, y, perm, grads):
    """2 次元 Perlin ノイズ（おおよそ [-1, 1]）。"""
    xf = np.floor(x)
    yf = np.floor(y)
    X = int(xf) & 255
    Y = int(yf) & 255
    x -= xf
    y -= yf

    u = _fade(x)
    v = _fade(y)

    aa = perm[perm[X] + Y]
    ab = perm[perm[X] + Y + 1]
    ba = perm[perm[X + 1] + Y]
    bb = perm[perm[X + 1] + Y + 1]

    return _lerp(
        _lerp(_grad(aa, x, y, grads), _grad(ba, x - 1.0, y, grads), u),
        _lerp(_grad(ab, x, y - 1.0, grads), _grad(bb, x - 1.0, y - 1.0, grads), u),
        v,
    )


@njit(cache=True)
def _noise2_many(xs, ys, ox, oy, perm, grads):
    n = xs.shape[0]
    out = np.empty(n, dtype=np.float64)
    for i in range(n):
        out[i] = perlin_noise_2d(xs[i] + ox, ys[i] + oy, perm, grads)
    return out


def noise2(seed: int, x: float, y: float) -> float:
    """(seed, x, y) の 2D ノイズ値を返す。"""
    table = noise_table(int(seed))
    ox, oy = table.offset
    return float(perlin_noise_2d(float(x) + ox, float(y) + oy, table.perm, _GRAD2))


def noise1(seed: int, x: float) -> float:
    """(seed, x) の 1D ノイズ値を返す（2D ノイズの y=0 断面）。"""
    return noise2(seed, x, 0.0)


def noise2_array(seed: int, xs: np.ndarray, ys: np.ndarray | float) -> np.ndarray:
    """座標配列に対する 2D ノイズ値を float64 配列で返す。

    ys にスカラーを渡すと xs と同じ長さへブロードキャストする。
    """
    xs_arr = np.ascontiguousarray(xs, dtype=np.float64).reshape(-1)
    ys_arr = np.ascontiguousarray(
        np.broadcast_to(np.asarray(ys, dtype=np.float64), xs_arr.shape)
    )
    table = noise_table(int(seed))
    ox, oy = table.offset
    return _noise2_many(xs_arr, ys_arr, ox, oy, table.perm, _GRAD2)


__all__ = ["NoiseTable", "noise1", "noise2", "noise2_array", "noise_table", "perlin_noise_2d"]
