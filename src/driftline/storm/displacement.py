"""ノイズ駆動の変位場と、円環状の平滑化カーネル。

基準多角形の各頂点 i に対し、
- 半径方向: noise(seed, i/N * noise_freq, t * time_freq) * min_dim * 0.15
- 角度方向: noise(seed + angular, 同上) * 0.3 [rad]
を求め、それぞれ円環ガウス平滑化してから極座標で加える。
"""

from __future__ import annotations

import numpy as np
from numba import njit  # type: ignore[import-untyped]

from driftline.core.noise import noise1, noise2_array
from driftline.storm.params import DEFAULT_SEED_OFFSETS, NoiseSeedOffsets, StormParams
from driftline.storm.polygon import BasePolygon

SMOOTHING_IDENTITY_THRESHOLD = 0.01
KERNEL_WIDTH_FACTOR = 5.0
KERNEL_EPSILON = 0.1

RADIAL_AMPLITUDE_PCT = 0.15
ANGULAR_AMPLITUDE_RAD = 0.3
DRIFT_AMPLITUDE_PCT = 0.02
DRIFT_TIME_SCALE = 0.1


@njit(cache=True)
def _smooth_circular_nb(values, smoothing, half_width):
    n = values.shape[0]
    out = np.empty(n, dtype=np.float64)
    denom = 2.0 * smoothing * smoothing + KERNEL_EPSILON
    for i in range(n):
        acc = 0.0
        wsum = 0.0
        for k in range(-half_width, half_width + 1):
            idx = (i + k) % n
            w = np.exp(-(k * k) / denom)
            acc += values[idx] * w
            wsum += w
        out[i] = acc / wsum
    return out


def kernel_half_width(smoothing: float) -> int:
    """平滑化強度に対するカーネル半幅 `max(1, round(s*5))` を返す。"""
    return max(1, int(round(float(smoothing) * KERNEL_WIDTH_FACTOR)))


def smooth_circular(values: np.ndarray, smoothing: float) -> np.ndarray:
    """列を円環とみなしてガウス重み付き移動平均をとる。

    Parameters
    ----------
    values : np.ndarray
        shape (N,) のスカラー列。末尾と先頭は隣接するものとして扱う。
    smoothing : float
        平滑化強度 s。0.01 未満または非有限値では入力をそのまま返す。

    Returns
    -------
    np.ndarray
        shape (N,) の float64 配列。各要素は
        `sum(w_k * v[(i+k) mod N]) / sum(w_k)`,
        `w_k = exp(-k^2 / (2 s^2 + 0.1))`, `|k| <= max(1, round(5 s))`。
    """
    arr = np.ascontiguousarray(values, dtype=np.float64).reshape(-1)
    s = float(smoothing)
    if not np.isfinite(s) or s < SMOOTHING_IDENTITY_THRESHOLD or arr.shape[0] == 0:
        return arr.copy()
    return _smooth_circular_nb(arr, s, kernel_half_width(s))


def center_drift(
    t: float,
    params: StormParams,
    min_dim: float,
    offsets: NoiseSeedOffsets = DEFAULT_SEED_OFFSETS,
) -> np.ndarray:
    """時刻 t における中心のわずかな平行移動量 (dx, dy) を返す。"""
    u = float(t) * params.time_freq * DRIFT_TIME_SCALE
    amp = float(min_dim) * DRIFT_AMPLITUDE_PCT
    return np.array(
        [
            noise1(params.seed + offsets.drift_x, u) * amp,
            noise1(params.seed + offsets.drift_y, u) * amp,
        ],
        dtype=np.float64,
    )


def raw_displacements(
    n_points: int,
    t: float,
    params: StormParams,
    min_dim: float,
    offsets: NoiseSeedOffsets = DEFAULT_SEED_OFFSETS,
) -> tuple[np.ndarray, np.ndarray]:
    """平滑化前の (半径方向変位, 角度方向変位) を返す。"""
    n = int(n_points)
    xs = np.arange(n, dtype=np.float64) / n * params.noise_freq
    y = float(t) * params.time_freq
    radial = noise2_array(params.seed, xs, y) * (float(min_dim) * RADIAL_AMPLITUDE_PCT)
    angular = noise2_array(params.seed + offsets.angular, xs, y) * ANGULAR_AMPLITUDE_RAD
    return radial, angular


def displacement_field(
    n_points: int,
    t: float,
    params: StormParams,
    min_dim: float,
    offsets: NoiseSeedOffsets = DEFAULT_SEED_OFFSETS,
) -> tuple[np.ndarray, np.ndarray]:
    """平滑化済みの (半径方向変位, 角度方向変位) を返す。

    角度方向は半径方向の半分の強度で平滑化する。
    """
    radial, angular = raw_displacements(n_points, t, params, min_dim, offsets)
    s = float(params.shape_smoothing)
    return smooth_circular(radial, s), smooth_circular(angular, s * 0.5)


def displaced_polygon(
    base: BasePolygon,
    t: float,
    params: StormParams,
    width: float,
    height: float,
    offsets: NoiseSeedOffsets = DEFAULT_SEED_OFFSETS,
) -> np.ndarray:
    """時刻 t の変位済み多角形を shape (N, 2) で返す。

    各基準点を、ドリフトした中心まわりの極座標 (r, θ) に直し、
    平滑化済みの変位を r と θ に加えて直交座標へ戻す。
    頂点の並び順は基準多角形と同じ。
    """
    min_dim = float(min(width, height))
    n = base.n_points
    center = base.center + center_drift(t, params, min_dim, offsets)

    dr, dtheta = displacement_field(n, t, params, min_dim, offsets)

    rel = base.points - center
    radius = np.hypot(rel[:, 0], rel[:, 1]) + dr
    angle = np.arctan2(rel[:, 1], rel[:, 0]) + dtheta

    return np.stack(
        [center[0] + np.cos(angle) * radius, center[1] + np.sin(angle) * radius],
        axis=1,
    )


__all__ = [
    "center_drift",
    "displaced_polygon",
    "displacement_field",
    "kernel_half_width",
    "raw_displacements",
    "smooth_circular",
]
