"""時間に依存しない基準多角形（楕円上の N 点）の生成。"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from driftline.storm.params import StormParams


@dataclass(frozen=True, slots=True)
class BasePolygon:
    """基準多角形。

    Attributes
    ----------
    center : np.ndarray
        shape (2,) の中心座標。
    points : np.ndarray
        shape (N, 2) の頂点列。i 番目は角度 2πi/N に対応する。
    radii : tuple[float, float]
        楕円の (rx, ry)。
    """

    center: np.ndarray
    points: np.ndarray
    radii: tuple[float, float]

    def __post_init__(self) -> None:
        self.center.setflags(write=False)
        self.points.setflags(write=False)

    @property
    def n_points(self) -> int:
        return int(self.points.shape[0])


def base_polygon(params: StormParams, width: float, height: float) -> BasePolygon:
    """seed から中心をずらした楕円上の N 点を生成する。

    乱数の消費順は 中心 x → 中心 y → rx 比率 → ry 比率 で固定する。
    同じ (params, width, height) なら常に同じ結果を返す。
    """
    rng = np.random.default_rng(int(params.seed) & 0xFFFFFFFF)
    min_dim = float(min(width, height))

    cx = float(width) * 0.5 + rng.uniform(-1.0, 1.0) * min_dim * params.center_offset_pct
    cy = float(height) * 0.5 + rng.uniform(-1.0, 1.0) * min_dim * params.center_offset_pct

    rx_pct = rng.uniform(params.base_radius_min_pct, params.base_radius_max_pct)
    ry_pct = rng.uniform(params.base_radius_min_pct, params.base_radius_max_pct)
    rx = min_dim * float(rx_pct)
    ry = min_dim * float(ry_pct)

    n = int(params.n_points)
    theta = 2.0 * np.pi * np.arange(n, dtype=np.float64) / n
    points = np.stack([cx + np.cos(theta) * rx, cy + np.sin(theta) * ry], axis=1)

    return BasePolygon(
        center=np.array([cx, cy], dtype=np.float64),
        points=points,
        radii=(rx, ry),
    )


__all__ = ["BasePolygon", "base_polygon"]
