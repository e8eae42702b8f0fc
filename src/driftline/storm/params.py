"""
どこで: `src/driftline/storm/params.py`。
何を: noise storm スケッチの不変パラメータレコードと、キー操作によるコピー編集を定義する。
なぜ: 編集はレコード丸ごとの差し替えに限定し、範囲外の値は境界でクランプしてからコアへ渡すため。
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields, replace

import numpy as np

from driftline.core.param_meta import ParamMeta, clamp_value

logger = logging.getLogger(__name__)

storm_params_meta = {
    "seed": ParamMeta(kind="int", min=0, max=2**31 - 1),
    "n_points": ParamMeta(kind="int", min=3, max=512),
    "noise_freq": ParamMeta(kind="float", min=0.0, max=50.0),
    "time_freq": ParamMeta(kind="float", min=0.0, max=50.0),
    "tension": ParamMeta(kind="float", min=-10.0, max=10.0),
    "layers": ParamMeta(kind="int", min=1, max=1000),
    "dt": ParamMeta(kind="float", min=0.0, max=10.0),
    "shape_smoothing": ParamMeta(kind="float", min=0.0, max=20.0),
    "bold_every": ParamMeta(kind="int", min=2, max=1000),
    "center_offset_pct": ParamMeta(kind="float", min=0.0, max=0.5),
    "base_radius_min_pct": ParamMeta(kind="float", min=0.01, max=1.0),
    "base_radius_max_pct": ParamMeta(kind="float", min=0.01, max=1.0),
}

# キー操作で許すレンジ（storm_params_meta より狭い）。
NOISE_FREQ_STEP = 0.2
NOISE_FREQ_RANGE = (0.5, 10.0)
TENSION_STEP = 0.1
TENSION_RANGE = (0.5, 2.0)
RESEED_MAX = 100_000


@dataclass(frozen=True, slots=True)
class NoiseSeedOffsets:
    """ノイズチャンネルごとの seed オフセット。

    半径方向は base seed をそのまま使い、角度・中心ドリフト x/y は
    それぞれオフセットした seed で独立に評価する。
    """

    angular: int = 500
    drift_x: int = 1000
    drift_y: int = 2000

    def as_tuple(self) -> tuple[int, int, int]:
        """Geometry 引数に載せる (angular, drift_x, drift_y) を返す。"""
        return int(self.angular), int(self.drift_x), int(self.drift_y)


DEFAULT_SEED_OFFSETS = NoiseSeedOffsets()


@dataclass(frozen=True, slots=True)
class StormParams:
    """1 回の生成に使うパラメータ一式。

    Attributes
    ----------
    seed : int
        乱数とノイズの基準 seed。
    n_points : int
        制御多角形の頂点数 N。
    noise_freq : float
        頂点インデックス方向のノイズ空間周波数。
    time_freq : float
        時間方向のノイズ周波数。
    tension : float
        曲線のテンション（使用時に 0.1..3.0 へクランプ）。
    layers : int
        重ねる輪郭の枚数。
    dt : float
        レイヤ間の時間刻み。
    shape_smoothing : float
        半径方向変位の平滑化強度（角度方向はその半分）。
    bold_every : int
        太線レイヤの間隔。
    center_offset_pct, base_radius_min_pct, base_radius_max_pct : float
        キャンバス短辺に対する中心ずれ・基準半径の比率。
    """

    seed: int = 42
    n_points: int = 24
    noise_freq: float = 3.5
    time_freq: float = 0.8
    tension: float = 1.2
    layers: int = 120
    dt: float = 0.05
    shape_smoothing: float = 2.5
    bold_every: int = 15
    center_offset_pct: float = 0.08
    base_radius_min_pct: float = 0.25
    base_radius_max_pct: float = 0.35

    def clamped(self) -> "StormParams":
        """全フィールドを storm_params_meta のレンジへ丸めたコピーを返す。

        基準半径は min <= max になるよう入れ替える。
        """
        values = {
            f.name: clamp_value(storm_params_meta[f.name], getattr(self, f.name))
            for f in fields(self)
        }
        if values["base_radius_min_pct"] > values["base_radius_max_pct"]:
            values["base_radius_min_pct"], values["base_radius_max_pct"] = (
                values["base_radius_max_pct"],
                values["base_radius_min_pct"],
            )
        return StormParams(**values)

    def time_at(self, step: int) -> float:
        """レイヤ step の時間サンプル値を返す。"""
        return float(step) * float(self.dt)


def _step_within(value: float, delta: float, bounds: tuple[float, float]) -> float:
    lo, hi = bounds
    v = float(value) + float(delta)
    return lo if v < lo else hi if v > hi else v


def apply_key(
    params: StormParams,
    key: str,
    *,
    rng: np.random.Generator | None = None,
) -> StormParams:
    """キー操作に対応する編集を適用した新しいレコードを返す。

    Parameters
    ----------
    params : StormParams
        編集前のレコード（変更しない）。
    key : str
        `r`（reseed）, `[` / `]`（noise_freq -/+）, `-` / `=`（tension -/+）。
    rng : np.random.Generator or None, optional
        reseed に使う乱数生成器。None の場合は新規生成する。

    Returns
    -------
    StormParams
        編集後のレコード。未対応キーなら params をそのまま返す。
    """
    if key == "r":
        gen = rng if rng is not None else np.random.default_rng()
        out = replace(params, seed=int(gen.integers(0, RESEED_MAX)))
        logger.info("Reseeded: %d", out.seed)
        return out
    if key in ("[", "]"):
        delta = -NOISE_FREQ_STEP if key == "[" else NOISE_FREQ_STEP
        out = replace(
            params, noise_freq=_step_within(params.noise_freq, delta, NOISE_FREQ_RANGE)
        )
        logger.info("Noise freq: %.2f", out.noise_freq)
        return out
    if key in ("-", "="):
        delta = -TENSION_STEP if key == "-" else TENSION_STEP
        out = replace(params, tension=_step_within(params.tension, delta, TENSION_RANGE))
        logger.info("Tension: %.2f", out.tension)
        return out
    return params


__all__ = [
    "DEFAULT_SEED_OFFSETS",
    "NoiseSeedOffsets",
    "StormParams",
    "apply_key",
    "storm_params_meta",
]
