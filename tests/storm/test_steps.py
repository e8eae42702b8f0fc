"""レイヤ step ごとの判定と破線前線のテスト。"""

from __future__ import annotations

import numpy as np

from driftline.storm.contour import ClosedContour, fit_closed_contour
from driftline.storm.params import StormParams
from driftline.storm.steps import (
    dash_polylines,
    is_accent_step,
    is_bold_step,
    is_dash_step,
    pass_count,
    pass_offset,
)


def test_step_predicates_with_defaults() -> None:
    p = StormParams()
    assert [s for s in range(50) if is_bold_step(s, p)] == [0, 15, 30, 45]
    assert [s for s in range(50) if is_accent_step(s, p)] == [0, 7, 14, 15, 21, 28, 30, 35, 42, 45, 49]
    assert [s for s in range(100) if is_dash_step(s, p)] == [0, 45, 90]
    assert pass_count(15, p) == 4
    assert pass_count(16, p) == 2


def test_pass_offsets() -> None:
    p = StormParams()
    assert pass_offset(p, 5, 0) == (0.0, 0.0)
    dx, dy = pass_offset(p, 5, 2)
    assert abs(dx) <= 0.3 and abs(dy) <= 0.3
    assert pass_offset(p, 5, 2) == (dx, dy)
    assert pass_offset(p, 5, 1) != (dx, dy)


def _line_loop(length: float) -> ClosedContour:
    # 往復する細長い輪郭で弧長を見積もりやすくする。
    theta = 2.0 * np.pi * np.arange(48) / 48
    pts = np.stack([length / 2 * np.cos(theta), 5.0 * np.sin(theta)], axis=1)
    return fit_closed_contour(pts, 1.0)


def test_dashes_cover_about_dash_fraction_of_length() -> None:
    c = _line_loop(400.0)
    runs = dash_polylines(c)
    assert runs
    drawn = sum(float(np.sum(np.hypot(*np.diff(r, axis=0).T))) for r in runs)
    total = c.length()
    # dash 10 / gap 8 なので描画は全長の 10/18 前後。
    assert 0.4 < drawn / total < 0.7


def test_first_dash_starts_at_curve_start() -> None:
    c = _line_loop(400.0)
    runs = dash_polylines(c)
    np.testing.assert_allclose(runs[0][0], c.position(0.0))


def test_dashes_of_empty_contour() -> None:
    assert dash_polylines(ClosedContour.EMPTY) == []
    assert dash_polylines(_line_loop(10.0), segments=0) == []
