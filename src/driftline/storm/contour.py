"""
どこで: `src/driftline/storm/contour.py`。
何を: 変位済み多角形を通る閉じた 3 次ベジェ曲線（ClosedContour）の当てはめと評価。
なぜ: 描画（ポリライン化）と曲率クエリの両方で同じ曲線表現を使うため。
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

import numpy as np

TENSION_MIN = 0.1
TENSION_MAX = 3.0


def clamp_tension(tension: float) -> float:
    """tension を [0.1, 3.0] にクランプして返す。"""
    t = float(tension)
    return TENSION_MIN if t < TENSION_MIN else TENSION_MAX if t > TENSION_MAX else t


def _bezier(p0: np.ndarray, c1: np.ndarray, c2: np.ndarray, p1: np.ndarray, s: np.ndarray) -> np.ndarray:
    s = s[:, None]
    ms = 1.0 - s
    return ms * ms * ms * p0 + 3.0 * ms * ms * s * c1 + 3.0 * ms * s * s * c2 + s * s * s * p1


@dataclass(frozen=True, slots=True)
class ClosedContour:
    """閉じた区分 3 次ベジェ曲線。

    Attributes
    ----------
    points : np.ndarray
        shape (N, 2) のアンカー点。セグメント i は points[i] → points[(i+1) mod N]。
    c1, c2 : np.ndarray
        shape (N, 2) のセグメント i の制御点。

    Notes
    -----
    曲線パラメータ u ∈ [0, 1] はセグメント数で等分する（弧長ではない）。
    u=0 と u=1 はどちらも points[0] に一致する。
    """

    points: np.ndarray
    c1: np.ndarray
    c2: np.ndarray

    EMPTY: ClassVar["ClosedContour"]

    def __post_init__(self) -> None:
        for arr in (self.points, self.c1, self.c2):
            arr.setflags(write=False)

    @property
    def segment_count(self) -> int:
        return int(self.points.shape[0])

    @property
    def empty(self) -> bool:
        return self.segment_count == 0

    def positions(self, us: np.ndarray) -> np.ndarray:
        """曲線パラメータ列 us における座標を shape (len(us), 2) で返す。

        Raises
        ------
        ValueError
            空の輪郭に対して呼ばれた場合。
        """
        if self.empty:
            raise ValueError("空の ClosedContour は評価できない")
        n = self.segment_count
        u = np.clip(np.asarray(us, dtype=np.float64).reshape(-1), 0.0, 1.0)
        scaled = u * n
        idx = np.minimum(np.floor(scaled).astype(np.int64), n - 1)
        local = scaled - idx
        nxt = (idx + 1) % n
        return _bezier(self.points[idx], self.c1[idx], self.c2[idx], self.points[nxt], local)

    def position(self, u: float) -> np.ndarray:
        """曲線パラメータ u における座標 shape (2,) を返す。"""
        return self.positions(np.array([u], dtype=np.float64))[0]

    def sample(self, samples_per_segment: int = 16) -> np.ndarray:
        """曲線を閉ポリライン（先頭点を末尾に重ねる）として返す。

        空の輪郭では shape (0, 2) を返す。
        """
        if self.empty:
            return np.zeros((0, 2), dtype=np.float64)
        k = max(1, int(samples_per_segment))
        us = np.linspace(0.0, 1.0, self.segment_count * k + 1)
        return self.positions(us)

    def sub(self, u0: float, u1: float, samples: int = 8) -> np.ndarray:
        """u0..u1 の部分曲線をポリラインとして返す。"""
        if self.empty:
            return np.zeros((0, 2), dtype=np.float64)
        return self.positions(np.linspace(float(u0), float(u1), max(2, int(samples))))

    def length(self, samples_per_segment: int = 16) -> float:
        """ポリライン近似による曲線長を返す。"""
        pts = self.sample(samples_per_segment)
        if pts.shape[0] < 2:
            return 0.0
        return float(np.sum(np.hypot(*np.diff(pts, axis=0).T)))


ClosedContour.EMPTY = ClosedContour(
    points=np.zeros((0, 2), dtype=np.float64),
    c1=np.zeros((0, 2), dtype=np.float64),
    c2=np.zeros((0, 2), dtype=np.float64),
)


def fit_closed_contour(points: np.ndarray, tension: float) -> ClosedContour:
    """点列を順に通る閉じた滑らかな曲線を当てはめる。

    頂点 p1 → p2 のセグメント（前後の近傍 p0, p3）の制御点は
    k = 1 / clamp(tension, 0.1, 3.0) として
    `c1 = p1 + (p2 - p0) * k / 6`, `c2 = p2 - (p3 - p1) * k / 6`。

    Parameters
    ----------
    points : np.ndarray
        shape (N, 2) の点列。添字は N を法として循環する。
    tension : float
        曲線のテンション。大きいほど接線が短くなり角ばる。

    Returns
    -------
    ClosedContour
        3 点未満なら ClosedContour.EMPTY。
    """
    pts = np.asarray(points, dtype=np.float64).reshape(-1, 2)
    if pts.shape[0] < 3:
        return ClosedContour.EMPTY

    k = 1.0 / clamp_tension(tension)
    prev_pts = np.roll(pts, 1, axis=0)
    next_pts = np.roll(pts, -1, axis=0)
    next2_pts = np.roll(pts, -2, axis=0)

    c1 = pts + (next_pts - prev_pts) * k / 6.0
    c2 = next_pts - (next2_pts - pts) * k / 6.0
    return ClosedContour(points=pts.copy(), c1=c1, c2=c2)


__all__ = ["ClosedContour", "clamp_tension", "fit_closed_contour"]
