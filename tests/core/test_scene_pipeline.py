"""Layer / scene 正規化 / realize パイプラインのテスト。"""

from __future__ import annotations

import numpy as np
import pytest

from driftline.api import G
from driftline.core.geometry import Geometry
from driftline.core.layer import Layer, LayerStyleDefaults, resolve_layer_style
from driftline.core.pipeline import realize_scene
from driftline.core.realize import realize_cache
from driftline.core.scene import normalize_scene


@pytest.fixture(autouse=True)
def _clear_cache() -> None:
    realize_cache.clear()


def test_normalize_scene_flattens_nested_sequences() -> None:
    g1 = G.polygon(n_sides=3)
    g2 = G.polygon(n_sides=4)
    layer = Layer(g2, color=(1.0, 0.0, 0.0))
    out = normalize_scene([g1, [layer, (g1,)]])
    assert [x.geometry for x in out] == [g1, g2, g1]
    assert out[1] is layer


def test_normalize_scene_rejects_unknown_items() -> None:
    with pytest.raises(TypeError):
        normalize_scene([G.polygon(), 3])  # type: ignore[list-item]
    with pytest.raises(TypeError):
        normalize_scene("polygon")  # type: ignore[arg-type]


def test_resolve_layer_style_fills_defaults_and_clamps_opacity() -> None:
    defaults = LayerStyleDefaults(color=(0.1, 0.2, 0.3), thickness=2.0, opacity=0.5)
    resolved = resolve_layer_style(Layer(G.line(), opacity=1.7), defaults)
    assert resolved.color == (0.1, 0.2, 0.3)
    assert resolved.thickness == 2.0
    assert resolved.opacity == 1.0

    resolved = resolve_layer_style(Layer(G.line()), defaults)
    assert resolved.opacity == 0.5


def test_resolve_layer_style_rejects_non_positive_thickness() -> None:
    with pytest.raises(ValueError):
        resolve_layer_style(Layer(G.line(), thickness=0.0), LayerStyleDefaults())


def test_realize_scene_keeps_draw_order() -> None:
    g1 = G.polygon(n_sides=3)
    g2 = G.rect(size=(2.0, 1.0))

    def draw(t: float):
        return [Layer(g1, thickness=3.0), g2]

    layers = realize_scene(draw, 0.0, LayerStyleDefaults(thickness=0.5))
    assert [x.layer.geometry for x in layers] == [g1, g2]
    assert [x.thickness for x in layers] == [3.0, 0.5]
    assert layers[0].realized.coords.shape == (4, 3)
    assert isinstance(layers[1].realized.coords, np.ndarray)


def test_geometry_for_concat_layer_is_realized_once_per_child() -> None:
    g = Geometry.concat(G.line(end=(1.0, 1.0)), G.line(end=(2.0, 2.0)))
    layers = realize_scene(lambda t: g, 0.0, LayerStyleDefaults())
    assert layers[0].realized.n_polylines == 2
