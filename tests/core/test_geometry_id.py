"""Geometry の内容署名と concat の挙動テスト。"""

from __future__ import annotations

from enum import Enum

import numpy as np
import pytest

from driftline.core.geometry import Geometry, normalize_args


class _Mode(Enum):
    A = "a"
    B = "b"


def test_same_params_give_same_id() -> None:
    a = Geometry.create("polygon", params={"n_sides": 6, "radius": 2.0})
    b = Geometry.create("polygon", params={"radius": 2.0, "n_sides": 6})
    assert a.id == b.id


def test_different_params_give_different_id() -> None:
    a = Geometry.create("polygon", params={"n_sides": 6})
    b = Geometry.create("polygon", params={"n_sides": 7})
    assert a.id != b.id


def test_negative_zero_is_normalized() -> None:
    a = Geometry.create("line", params={"start": (0.0, -0.0)})
    b = Geometry.create("line", params={"start": (0.0, 0.0)})
    assert a.id == b.id


def test_numpy_scalars_match_python_scalars() -> None:
    a = Geometry.create("grid", params={"spacing": np.float64(2.5), "half_count": np.int64(3)})
    b = Geometry.create("grid", params={"spacing": 2.5, "half_count": 3})
    assert a.id == b.id


def test_mapping_and_enum_args_are_normalized() -> None:
    args = normalize_args({"params": {"b": 2, "a": 1.0}, "mode": _Mode.B})
    assert args == (("mode", "_Mode.B"), ("params", (("a", 1.0), ("b", 2))))


def test_non_finite_float_is_rejected() -> None:
    with pytest.raises(ValueError):
        Geometry.create("line", params={"start": (float("nan"), 0.0)})


def test_unsupported_type_is_rejected() -> None:
    with pytest.raises(TypeError):
        Geometry.create("line", params={"start": object()})


def test_concat_flattens_and_keeps_order() -> None:
    a = Geometry.create("a")
    b = Geometry.create("b")
    c = Geometry.create("c")
    combined = (a + b) + c
    assert combined.op == "concat"
    assert combined.inputs == (a, b, c)
    assert Geometry.concat(a) is a


def test_add_with_non_geometry_is_not_supported() -> None:
    with pytest.raises(TypeError):
        Geometry.create("a") + 1  # type: ignore[operator]
