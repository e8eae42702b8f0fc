"""primitive レジストリとデコレータのテスト。"""

from __future__ import annotations

import numpy as np
import pytest

import driftline.api  # noqa: F401
from driftline.core.param_meta import ParamMeta
from driftline.core.primitive_registry import primitive, primitive_registry
from driftline.core.realized_geometry import RealizedGeometry, empty_geometry


def test_builtin_primitives_are_registered() -> None:
    names = set(primitive_registry)
    assert {"polygon", "rect", "grid", "line", "polyline", "label"} <= names
    assert {"storm_contour", "storm_highlights", "storm_dashes", "stripe_band"} <= names


def test_defaults_come_from_signature() -> None:
    assert primitive_registry.get_defaults("rect") == {"origin": (0.0, 0.0), "size": (1.0, 1.0)}
    assert set(primitive_registry.get_meta("grid")) == {"center", "spacing", "half_count", "angle"}
    assert primitive_registry.get_defaults("_nope") == {}


def test_meta_arg_without_default_is_rejected() -> None:
    with pytest.raises(ValueError):

        @primitive(meta={"r": ParamMeta(kind="float")})
        def _needs_default(*, r=None) -> RealizedGeometry:
            return empty_geometry()


def test_unsignable_default_is_rejected() -> None:
    with pytest.raises(ValueError):

        @primitive(meta={"r": ParamMeta(kind="float")})
        def _bad_default(*, r=float("inf")) -> RealizedGeometry:
            return empty_geometry()


def test_overwrite_false_rejects_duplicates() -> None:
    @primitive(meta={"n": ParamMeta(kind="int")})
    def _dup(*, n=1) -> RealizedGeometry:
        return empty_geometry()

    with pytest.raises(ValueError):

        @primitive(overwrite=False, meta={"n": ParamMeta(kind="int")})
        def _dup(*, n=1) -> RealizedGeometry:  # noqa: F811
            return empty_geometry()


def test_registered_function_receives_normalized_args() -> None:
    seen: list[dict] = []

    @primitive
    def _echo(*, pts=()) -> RealizedGeometry:
        seen.append({"pts": pts})
        return empty_geometry()

    primitive_registry.get("_echo")((("pts", ((1.0, 2.0),)),))
    assert seen == [{"pts": ((1.0, 2.0),)}]
    assert np.asarray(seen[0]["pts"]).shape == (1, 2)
