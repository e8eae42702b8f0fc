"""StormParams とキー操作のテスト。"""

from __future__ import annotations

import logging

import numpy as np
import pytest

from driftline.storm.params import StormParams, apply_key
from driftline.storm.primitives import params_from_arg, params_to_arg
from driftline.core.geometry import normalize_args


def test_defaults() -> None:
    p = StormParams()
    assert (p.seed, p.n_points, p.noise_freq, p.time_freq, p.tension) == (42, 24, 3.5, 0.8, 1.2)
    assert (p.layers, p.dt, p.shape_smoothing, p.bold_every) == (120, 0.05, 2.5, 15)
    assert p.time_at(10) == pytest.approx(0.5)


def test_noise_freq_keys_step_and_clamp() -> None:
    p = apply_key(StormParams(noise_freq=3.5), "]")
    assert p.noise_freq == pytest.approx(3.7)
    assert apply_key(StormParams(noise_freq=10.0), "]").noise_freq == 10.0
    assert apply_key(StormParams(noise_freq=0.6), "[").noise_freq == 0.5


def test_tension_keys_step_and_clamp() -> None:
    assert apply_key(StormParams(tension=1.2), "=").tension == pytest.approx(1.3)
    assert apply_key(StormParams(tension=0.5), "-").tension == 0.5
    assert apply_key(StormParams(tension=2.0), "=").tension == 2.0


def test_reseed_uses_given_generator(caplog: pytest.LogCaptureFixture) -> None:
    p = StormParams()
    with caplog.at_level(logging.INFO, logger="driftline.storm.params"):
        a = apply_key(p, "r", rng=np.random.default_rng(0))
    b = apply_key(p, "r", rng=np.random.default_rng(0))
    assert a.seed == b.seed
    assert 0 <= a.seed < 100_000
    assert f"Reseeded: {a.seed}" in caplog.text
    # 元のレコードは変更しない。
    assert p.seed == 42


def test_unknown_key_returns_same_record() -> None:
    p = StormParams()
    assert apply_key(p, "x") is p


def test_clamped_limits_fields() -> None:
    p = StormParams(
        n_points=1,
        layers=0,
        bold_every=0,
        shape_smoothing=-1.0,
        base_radius_min_pct=0.5,
        base_radius_max_pct=0.2,
    ).clamped()
    assert p.n_points == 3
    assert p.layers == 1
    assert p.bold_every == 2
    assert p.shape_smoothing == 0.0
    assert (p.base_radius_min_pct, p.base_radius_max_pct) == (0.2, 0.5)


def test_params_roundtrip_through_geometry_args() -> None:
    p = StormParams(seed=9, tension=0.7)
    args = dict(normalize_args({"params": params_to_arg(p)}))
    assert params_from_arg(args["params"]) == p
    assert params_from_arg(()) == StormParams()


def test_clamped_replaces_nan_with_lower_bound() -> None:
    p = StormParams(shape_smoothing=float("nan"), n_points=float("nan")).clamped()  # type: ignore[arg-type]
    assert p.shape_smoothing == 0.0
    assert p.n_points == 3
    assert StormParams(noise_freq=float("inf")).clamped().noise_freq == 50.0
