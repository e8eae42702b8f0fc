"""seed 付き Perlin ノイズのテスト。"""

from __future__ import annotations

import numpy as np

from driftline.core.noise import noise1, noise2, noise2_array, noise_table


def test_noise_is_deterministic() -> None:
    assert noise2(42, 1.25, 3.5) == noise2(42, 1.25, 3.5)


def test_different_seeds_differ() -> None:
    xs = np.linspace(0.0, 5.0, 32)
    a = noise2_array(1, xs, 0.7)
    b = noise2_array(2, xs, 0.7)
    assert not np.allclose(a, b)


def test_noise1_is_y_zero_slice() -> None:
    for x in (0.0, 0.3, 7.9):
        assert noise1(7, x) == noise2(7, x, 0.0)


def test_array_matches_scalar() -> None:
    xs = np.array([0.1, 0.5, 2.75, 9.0])
    ys = np.array([0.0, 1.5, -3.0, 4.25])
    out = noise2_array(99, xs, ys)
    expected = [noise2(99, x, y) for x, y in zip(xs, ys)]
    np.testing.assert_allclose(out, expected, rtol=0, atol=1e-12)


def test_noise_is_bounded_and_continuous() -> None:
    xs = np.linspace(0.0, 20.0, 4001)
    out = noise2_array(5, xs, 0.0)
    assert np.all(np.abs(out) <= 1.0 + 1e-9)
    # 刻み 0.005 で大きく跳ばない。
    assert np.max(np.abs(np.diff(out))) < 0.05


def test_noise_table_is_cached_and_readonly() -> None:
    t = noise_table(3)
    assert noise_table(3) is t
    assert t.perm.shape == (512,)
    assert not t.perm.flags.writeable
