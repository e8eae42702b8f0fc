"""
どこで: `src/driftline/stripes/generate.py`。
何を: StripeParams からストライプ列（高さ・塗りバリアント・分割位置・入れ替え・2 色）を生成する。
なぜ: 乱数を明示的な Generator に閉じ込め、同じ (params, width, height) なら常に同じ列を返すため。
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from driftline.core.color import RGB01
from driftline.stripes.palettes import palette_for
from driftline.stripes.params import FillVariant, FillVariantMode, StripeParams

_FIXED_VARIANTS = {
    FillVariantMode.SOLID: FillVariant.SOLID,
    FillVariantMode.DOTS: FillVariant.DOT,
    FillVariantMode.HATCH: FillVariant.HATCH,
    FillVariantMode.PATTERN: FillVariant.PATTERN,
    FillVariantMode.STIPPLE: FillVariant.STIPPLE,
}

# GROUPED モードの区切り（進捗 i/count に対する上限）。
_GROUPED_SECTIONS = (
    (0.2, FillVariant.SOLID),
    (0.4, FillVariant.DOT),
    (0.6, FillVariant.HATCH),
    (0.8, FillVariant.PATTERN),
)


@dataclass(frozen=True, slots=True)
class Stripe:
    """1 本の横ストライプ。

    Attributes
    ----------
    y0, height : float
        上端と高さ。
    fill : FillVariant
        塗りバリアント。
    split_x : float
        入れ替えの分割位置。
    swap : bool
        True なら split_x の左右を入れ替えて描く。
    color_a, color_b : RGB01
        グラデーションの始点色と終点色。
    """

    y0: float
    height: float
    fill: FillVariant
    split_x: float
    swap: bool
    color_a: RGB01
    color_b: RGB01

    @property
    def y1(self) -> float:
        return self.y0 + self.height


def _fill_variant(i: int, params: StripeParams, rng: np.random.Generator) -> FillVariant:
    mode = params.fill_mode
    if mode is FillVariantMode.RANDOM:
        variants = list(FillVariant)
        return variants[int(rng.integers(0, len(variants)))]
    if mode is FillVariantMode.GROUPED:
        section = i / params.stripe_count
        for upper, variant in _GROUPED_SECTIONS:
            if section < upper:
                return variant
        return FillVariant.STIPPLE
    return _FIXED_VARIANTS[mode]


def split_position(params: StripeParams, width: float, rng: np.random.Generator) -> float:
    """split_bias に従って分割位置を 1 つ引く。

    - bias < 0.3: `(t - 0.5)^3 * 4 + 0.5` で中央に寄せる
    - bias > 0.7: 左 1/3 か右 1/3 のどちらかに寄せる
    - それ以外: [min_split, width - min_split) の一様分布

    min_split はキャンバス幅の 1/3 を上限に丸めてから使う（狭いキャンバスでも区間が空にならない）。
    """
    w = max(0.0, float(width))
    m = min(max(0.0, float(params.min_split)), w / 3.0)
    if params.split_bias < 0.3:
        t = float(rng.random())
        b = (t - 0.5) ** 3 * 4.0 + 0.5
        return m + b * (w - 2.0 * m)
    if params.split_bias > 0.7:
        if rng.random() < 0.5:
            return float(rng.uniform(m, w / 3.0))
        return float(rng.uniform(2.0 * w / 3.0, w - m))
    return float(rng.uniform(m, w - m))


def _pick_colors(ramp: tuple[RGB01, ...], rng: np.random.Generator) -> tuple[RGB01, RGB01]:
    a = ramp[int(rng.integers(0, len(ramp)))]
    b = ramp[int(rng.integers(0, len(ramp)))]
    while b == a and len(set(ramp)) > 1:
        b = ramp[int(rng.integers(0, len(ramp)))]
    return a, b


def generate_stripes(params: StripeParams, width: float, height: float) -> list[Stripe]:
    """ストライプ列を上から順に生成する。

    各ストライプの乱数消費順は 高さゆらぎ → 塗り（RANDOM 時のみ）→ 分割位置 →
    2 色 → 入れ替え で固定する。最後のストライプは必ずキャンバス下端で終わる。
    """
    rng = np.random.default_rng(int(params.seed) & 0xFFFFFFFF)
    ramp = palette_for(params.palette).ramp
    count = int(params.stripe_count)
    h_total = float(height)
    base_h = h_total / count
    jitter = float(params.stripe_jitter)

    stripes: list[Stripe] = []
    y = 0.0
    for i in range(count):
        h = base_h * (1.0 + float(rng.uniform(-jitter, jitter)))
        y1 = h_total if i == count - 1 else min(y + h, h_total)

        fill = _fill_variant(i, params, rng)
        split_x = split_position(params, width, rng)
        color_a, color_b = _pick_colors(ramp, rng)
        swap = bool(rng.random() < params.swap_probability)

        stripes.append(
            Stripe(
                y0=y,
                height=y1 - y,
                fill=fill,
                split_x=split_x,
                swap=swap,
                color_a=color_a,
                color_b=color_b,
            )
        )
        y = y1
    return stripes


__all__ = ["Stripe", "generate_stripes", "split_position"]
