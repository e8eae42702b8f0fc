# どこで: `src/driftline/stripes/__init__.py`。
# 何を: split stripes（分割・入れ替えされた横ストライプ）の公開関数を再エクスポートする。

from __future__ import annotations

from .generate import Stripe, generate_stripes
from .palettes import PALETTES, Palette, PalettePreset
from .params import FillVariant, FillVariantMode, GradientDirection, StripeParams, apply_key

__all__ = [
    "FillVariant",
    "FillVariantMode",
    "GradientDirection",
    "PALETTES",
    "Palette",
    "PalettePreset",
    "Stripe",
    "StripeParams",
    "apply_key",
    "generate_stripes",
]
