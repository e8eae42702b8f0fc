"""
どこで: `src/driftline/stripes/params.py`。
何を: split stripes のパラメータレコード・塗りモード列挙と、キー操作によるコピー編集を定義する。
なぜ: 生成は不変レコードを受け取る純粋関数に限定し、モード切替は列挙順の巡回として表すため。
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields, replace
from enum import Enum

import numpy as np

from driftline.core.param_meta import ParamMeta, clamp_value
from driftline.stripes.palettes import PalettePreset

logger = logging.getLogger(__name__)


class FillVariant(Enum):
    SOLID = "solid"
    DOT = "dot"
    HATCH = "hatch"
    PATTERN = "pattern"
    STIPPLE = "stipple"


class FillVariantMode(Enum):
    SOLID = "solid"
    DOTS = "dots"
    HATCH = "hatch"
    PATTERN = "pattern"
    STIPPLE = "stipple"
    RANDOM = "random"
    GROUPED = "grouped"


class GradientDirection(Enum):
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


stripe_params_meta = {
    "seed": ParamMeta(kind="int", min=0, max=1_000_000),
    "stripe_count": ParamMeta(kind="int", min=18, max=60),
    "stripe_jitter": ParamMeta(kind="float", min=0.0, max=0.2),
    "min_split": ParamMeta(kind="float", min=20.0, max=200.0),
    "split_bias": ParamMeta(kind="float", min=0.0, max=1.0),
    "swap_probability": ParamMeta(kind="float", min=0.0, max=1.0),
    "palette": ParamMeta(kind="choice", choices=tuple(p.name for p in PalettePreset)),
    "fill_mode": ParamMeta(kind="choice", choices=tuple(m.name for m in FillVariantMode)),
    "gradient_direction": ParamMeta(
        kind="choice", choices=tuple(d.name for d in GradientDirection)
    ),
}

STRIPE_COUNT_STEP = 2
SPLIT_BIAS_STEP = 0.1
RESEED_MAX = 1_000_000


@dataclass(frozen=True, slots=True)
class StripeParams:
    """split stripes の生成パラメータ。

    Attributes
    ----------
    seed : int
        ストライプ生成の乱数 seed。
    stripe_count : int
        横ストライプの本数。
    stripe_jitter : float
        各ストライプ高さの相対ゆらぎ幅（±）。
    min_split : float
        分割位置をキャンバス左右端から離す最小距離。
    split_bias : float
        分割位置の分布（< 0.3 中央寄り、> 0.7 三分割寄り、それ以外は一様）。
    swap_probability : float
        ストライプの左右を入れ替える確率。
    palette : PalettePreset
        色テーブル。
    fill_mode : FillVariantMode
        塗りバリアントの選び方。
    gradient_direction : GradientDirection
        ストライプ内のグラデーション方向。
    """

    seed: int = 123456
    stripe_count: int = 32
    stripe_jitter: float = 0.0
    min_split: float = 60.0
    split_bias: float = 0.5
    swap_probability: float = 1.0
    palette: PalettePreset = PalettePreset.MUTED_PAPER
    fill_mode: FillVariantMode = FillVariantMode.RANDOM
    gradient_direction: GradientDirection = GradientDirection.HORIZONTAL

    def clamped(self) -> "StripeParams":
        """数値フィールドを stripe_params_meta のレンジへ丸めたコピーを返す。"""
        values = {
            f.name: clamp_value(stripe_params_meta[f.name], getattr(self, f.name))
            for f in fields(self)
        }
        return StripeParams(**values)


def _cycle(member: Enum) -> Enum:
    members = list(type(member))
    return members[(members.index(member) + 1) % len(members)]


def apply_key(
    params: StripeParams,
    key: str,
    *,
    rng: np.random.Generator | None = None,
) -> StripeParams:
    """キー操作に対応する編集を適用した新しいレコードを返す。

    `r` reseed, `v` 塗りモード巡回, `p` パレット巡回, `[` / `]` 本数 -/+2（18..60）,
    `-` / `=` split_bias -/+0.1（0..1）, `g` グラデーション方向の切替。
    未対応キーなら params をそのまま返す。
    """
    if key == "r":
        gen = rng if rng is not None else np.random.default_rng()
        out = replace(params, seed=int(gen.integers(0, RESEED_MAX)))
        logger.info("Reseeded: %d", out.seed)
        return out
    if key == "v":
        out = replace(params, fill_mode=_cycle(params.fill_mode))
        logger.info("Fill mode: %s", out.fill_mode.name)
        return out
    if key == "p":
        out = replace(params, palette=_cycle(params.palette))
        logger.info("Palette: %s", out.palette.name)
        return out
    if key in ("[", "]"):
        delta = -STRIPE_COUNT_STEP if key == "[" else STRIPE_COUNT_STEP
        count = min(max(params.stripe_count + delta, 18), 60)
        out = replace(params, stripe_count=count)
        logger.info("Stripe count: %d", out.stripe_count)
        return out
    if key in ("-", "="):
        delta = -SPLIT_BIAS_STEP if key == "-" else SPLIT_BIAS_STEP
        bias = min(max(params.split_bias + delta, 0.0), 1.0)
        out = replace(params, split_bias=bias)
        logger.info("Split bias: %.1f", out.split_bias)
        return out
    if key == "g":
        direction = (
            GradientDirection.VERTICAL
            if params.gradient_direction is GradientDirection.HORIZONTAL
            else GradientDirection.HORIZONTAL
        )
        out = replace(params, gradient_direction=direction)
        logger.info("Gradient: %s", out.gradient_direction.name)
        return out
    return params


__all__ = [
    "FillVariant",
    "FillVariantMode",
    "GradientDirection",
    "StripeParams",
    "apply_key",
    "stripe_params_meta",
]
