"""RealizedGeometry の検証と構築ヘルパのテスト。"""

from __future__ import annotations

import numpy as np
import pytest

from driftline.core.realized_geometry import (
    RealizedGeometry,
    concat_realized_geometries,
    empty_geometry,
    geometry_from_polylines,
)


def test_2d_coords_are_padded_with_z() -> None:
    g = RealizedGeometry(coords=np.zeros((3, 2)), offsets=np.array([0, 3]))
    assert g.coords.shape == (3, 3)
    assert g.coords.dtype == np.float32
    assert g.offsets.dtype == np.int32
    assert not g.coords.flags.writeable


@pytest.mark.parametrize(
    "offsets",
    [
        np.array([1, 3]),
        np.array([0, 2]),
        np.array([0, 2, 1, 3]),
        np.array([], dtype=np.int32),
    ],
)
def test_invalid_offsets_are_rejected(offsets: np.ndarray) -> None:
    with pytest.raises(ValueError):
        RealizedGeometry(coords=np.zeros((3, 3)), offsets=offsets)


def test_geometry_from_polylines_drops_short_polylines() -> None:
    g = geometry_from_polylines(
        [np.array([[0.0, 0.0], [1.0, 1.0]]), np.array([[5.0, 5.0]]), np.zeros((3, 3))]
    )
    assert g.n_polylines == 2
    np.testing.assert_array_equal(g.offsets, [0, 2, 5])


def test_geometry_from_polylines_empty() -> None:
    g = geometry_from_polylines([])
    assert g.n_polylines == 0
    assert g.coords.shape == (0, 3)


def test_concat_shifts_offsets() -> None:
    a = geometry_from_polylines([np.zeros((2, 2))])
    b = geometry_from_polylines([np.ones((3, 2)), np.ones((2, 2))])
    out = concat_realized_geometries(a, empty_geometry(), b)
    np.testing.assert_array_equal(out.offsets, [0, 2, 5, 7])
    assert [p.shape[0] for p in out.polylines()] == [2, 3, 2]
