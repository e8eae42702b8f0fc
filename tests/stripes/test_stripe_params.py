"""StripeParams・パレット表・キー操作のテスト。"""

from __future__ import annotations

import numpy as np
import pytest

from driftline.stripes.palettes import PALETTES, PalettePreset, palette_for
from driftline.stripes.params import (
    FillVariantMode,
    GradientDirection,
    StripeParams,
    apply_key,
)


def test_palette_table_is_complete() -> None:
    assert len(PALETTES) == 24
    assert set(PALETTES) == set(PalettePreset)
    for preset in PalettePreset:
        pal = palette_for(preset)
        assert len(pal.ramp) >= 3
        assert all(0.0 <= c <= 1.0 for rgb in pal.ramp for c in rgb)


def test_palette_colors() -> None:
    pal = palette_for(PalettePreset.MUTED_PAPER)
    assert pal.background == pytest.approx((0xF5 / 255, 0xF2 / 255, 0xE7 / 255))
    assert pal.vignette is None
    assert palette_for(PalettePreset.NEON_DARK).vignette == (0.0, 0.0, 0.0)


def test_fill_mode_cycles() -> None:
    p = StripeParams()
    assert p.fill_mode is FillVariantMode.RANDOM
    p = apply_key(p, "v")
    assert p.fill_mode is FillVariantMode.GROUPED
    p = apply_key(p, "v")
    assert p.fill_mode is FillVariantMode.SOLID


def test_palette_cycles_and_wraps() -> None:
    p = StripeParams(palette=PalettePreset.MONOCHROME)
    assert apply_key(p, "p").palette is PalettePreset.MUTED_PAPER
    assert apply_key(StripeParams(), "p").palette is PalettePreset.NEON_DARK


def test_stripe_count_keys_clamp() -> None:
    assert apply_key(StripeParams(stripe_count=32), "]").stripe_count == 34
    assert apply_key(StripeParams(stripe_count=18), "[").stripe_count == 18
    assert apply_key(StripeParams(stripe_count=60), "]").stripe_count == 60


def test_split_bias_keys_clamp() -> None:
    assert apply_key(StripeParams(split_bias=0.5), "=").split_bias == pytest.approx(0.6)
    assert apply_key(StripeParams(split_bias=1.0), "=").split_bias == 1.0
    assert apply_key(StripeParams(split_bias=0.0), "-").split_bias == 0.0


def test_gradient_toggle() -> None:
    p = apply_key(StripeParams(), "g")
    assert p.gradient_direction is GradientDirection.VERTICAL
    assert apply_key(p, "g").gradient_direction is GradientDirection.HORIZONTAL


def test_reseed_and_unknown_key() -> None:
    p = StripeParams()
    a = apply_key(p, "r", rng=np.random.default_rng(4))
    assert a.seed == apply_key(p, "r", rng=np.random.default_rng(4)).seed
    assert 0 <= a.seed < 1_000_000
    assert apply_key(p, "?") is p


def test_clamped() -> None:
    p = StripeParams(stripe_count=3, split_bias=2.0, stripe_jitter=1.0).clamped()
    assert (p.stripe_count, p.split_bias, p.stripe_jitter) == (18, 1.0, 0.2)
    assert p.palette is PalettePreset.MUTED_PAPER
