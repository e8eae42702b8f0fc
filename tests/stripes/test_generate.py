"""ストライプ列生成のテスト。"""

from __future__ import annotations

import numpy as np
import pytest

from driftline.stripes.generate import generate_stripes, split_position
from driftline.stripes.palettes import PALETTES, PalettePreset
from driftline.stripes.params import FillVariant, FillVariantMode, StripeParams

W, H = 600.0, 800.0


def test_generation_is_deterministic() -> None:
    p = StripeParams(seed=99, stripe_jitter=0.1)
    assert generate_stripes(p, W, H) == generate_stripes(p, W, H)
    assert generate_stripes(p, W, H) != generate_stripes(StripeParams(seed=100), W, H)


def test_stripes_tile_the_canvas() -> None:
    stripes = generate_stripes(StripeParams(stripe_jitter=0.2), W, H)
    assert len(stripes) == 32
    assert stripes[0].y0 == 0.0
    for a, b in zip(stripes, stripes[1:]):
        assert a.y1 == pytest.approx(b.y0)
    assert stripes[-1].y1 == pytest.approx(H)
    assert all(s.height >= 0.0 for s in stripes)


def test_zero_jitter_gives_equal_heights() -> None:
    stripes = generate_stripes(StripeParams(stripe_count=20), W, H)
    np.testing.assert_allclose([s.height for s in stripes], H / 20)


def test_two_colors_differ_and_come_from_ramp() -> None:
    p = StripeParams(palette=PalettePreset.OCEANIC)
    ramp = PALETTES[PalettePreset.OCEANIC].ramp
    for s in generate_stripes(p, W, H):
        assert s.color_a != s.color_b
        assert s.color_a in ramp and s.color_b in ramp


@pytest.mark.parametrize("prob,expected", [(1.0, True), (0.0, False)])
def test_swap_probability_extremes(prob: float, expected: bool) -> None:
    stripes = generate_stripes(StripeParams(swap_probability=prob), W, H)
    assert all(s.swap is expected for s in stripes)


def test_fixed_fill_mode() -> None:
    stripes = generate_stripes(StripeParams(fill_mode=FillVariantMode.HATCH), W, H)
    assert {s.fill for s in stripes} == {FillVariant.HATCH}


def test_grouped_fill_mode_sections() -> None:
    stripes = generate_stripes(
        StripeParams(stripe_count=20, fill_mode=FillVariantMode.GROUPED), W, H
    )
    fills = [s.fill for s in stripes]
    assert fills[:4] == [FillVariant.SOLID] * 4
    assert fills[4:8] == [FillVariant.DOT] * 4
    assert fills[8:12] == [FillVariant.HATCH] * 4
    assert fills[12:16] == [FillVariant.PATTERN] * 4
    assert fills[16:] == [FillVariant.STIPPLE] * 4


def test_random_fill_mode_uses_several_variants() -> None:
    stripes = generate_stripes(StripeParams(stripe_count=60), W, H)
    assert len({s.fill for s in stripes}) >= 3


def _splits(bias: float, n: int = 400) -> np.ndarray:
    p = StripeParams(split_bias=bias, min_split=60.0)
    rng = np.random.default_rng(1)
    return np.array([split_position(p, W, rng) for _ in range(n)])


def test_uniform_split_range() -> None:
    xs = _splits(0.5)
    assert xs.min() >= 60.0 and xs.max() < W - 60.0


def test_center_biased_splits() -> None:
    xs = _splits(0.1)
    assert xs.min() >= 60.0 and xs.max() <= W - 60.0
    # 3 次曲線で中央に寄る。
    assert np.mean(np.abs(xs - W / 2)) < np.mean(np.abs(_splits(0.5) - W / 2))


def test_thirds_biased_splits() -> None:
    xs = _splits(0.9)
    left = xs[xs < W / 2]
    right = xs[xs >= W / 2]
    assert left.size > 0 and right.size > 0
    assert left.min() >= 60.0 and left.max() < W / 3
    assert right.min() >= 2 * W / 3 and right.max() < W - 60.0


@pytest.mark.parametrize("bias", [0.1, 0.5, 0.9])
@pytest.mark.parametrize("width", [100.0, 150.0, 30.0])
def test_narrow_canvas_clamps_min_split(bias: float, width: float) -> None:
    """min_split*2（または *3）より狭いキャンバスでも分割位置はキャンバス内に収まる。"""
    p = StripeParams(split_bias=bias, min_split=60.0)
    rng = np.random.default_rng(3)
    xs = np.array([split_position(p, width, rng) for _ in range(200)])
    assert np.isfinite(xs).all()
    assert xs.min() >= 0.0 and xs.max() <= width


def test_generate_stripes_on_small_canvas() -> None:
    for bias in (0.1, 0.5, 0.8):
        stripes = generate_stripes(StripeParams(split_bias=bias), 100.0, 100.0)
        assert len(stripes) == 32
        assert all(0.0 <= s.split_x <= 100.0 for s in stripes)
