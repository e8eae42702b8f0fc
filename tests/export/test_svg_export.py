"""SVG export のテスト。"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from pathlib import Path

import numpy as np
import pytest

from driftline.api import G
from driftline.core.layer import Layer
from driftline.core.pipeline import RealizedLayer
from driftline.core.realized_geometry import geometry_from_polylines
from driftline.export.svg import export_svg, svg_document

_SVG_NS = "http://www.w3.org/2000/svg"
_NS = {"svg": _SVG_NS}


def _layer(
    polylines, *, color=(1.0, 0.0, 0.0), thickness=2.0, opacity=1.0, name=None
) -> RealizedLayer:
    return RealizedLayer(
        layer=Layer(G.line(), name=name),
        realized=geometry_from_polylines(polylines),
        color=color,
        thickness=thickness,
        opacity=opacity,
    )


def test_export_svg_writes_one_group_per_layer(tmp_path: Path) -> None:
    layer = _layer([np.array([[0.0, 0.0], [10.0, -0.0004], [10.0, 10.0]])])
    out = export_svg([layer], tmp_path / "nested" / "a.svg", canvas_size=(100, 50))
    assert out == tmp_path / "nested" / "a.svg"

    root = ET.parse(out).getroot()
    assert root.attrib["viewBox"] == "0 0 100 50"
    groups = root.findall("svg:g", _NS)
    assert len(groups) == 1
    g = groups[0].attrib
    assert g["stroke"] == "#FF0000"
    assert g["stroke-width"] == "2.000"
    assert g["fill"] == "none"
    assert "stroke-opacity" not in g
    assert "class" not in g
    paths = groups[0].findall("svg:path", _NS)
    assert [p.attrib["d"] for p in paths] == ["M 0.000 0.000 L 10.000 0.000 L 10.000 10.000"]
    assert root.find("svg:rect", _NS) is None


def test_opacity_background_and_name() -> None:
    layer = _layer([np.zeros((2, 2))], opacity=0.25, name="step0")
    text = svg_document([layer], canvas_size=(10, 10), background_color=(0.0, 0.0, 1.0))
    root = ET.fromstring(text)
    rect = root.find("svg:rect", _NS)
    assert rect is not None and rect.attrib["fill"] == "#0000FF"
    group = root.find("svg:g", _NS)
    assert group is not None
    assert group.attrib["stroke-opacity"] == "0.250"
    assert group.attrib["class"] == "step0"


def test_each_polyline_becomes_a_path_and_empty_layers_are_skipped() -> None:
    layers = [_layer([np.zeros((2, 2)), np.ones((3, 2))]), _layer([])]
    root = ET.fromstring(svg_document(layers, canvas_size=(10, 10)))
    assert len(root.findall("svg:g", _NS)) == 1
    assert len(root.findall(".//svg:path", _NS)) == 2


def test_output_is_deterministic() -> None:
    layer = _layer([np.array([[1.23456, 2.0], [3.0, 4.0]])])
    a = svg_document([layer], canvas_size=(5, 5))
    assert a == svg_document([layer], canvas_size=(5, 5))
    assert 'd="M 1.235 2.000 L 3.000 4.000"' in a


@pytest.mark.parametrize("size", [None, (0, 10)])
def test_invalid_canvas_size(tmp_path: Path, size) -> None:
    with pytest.raises(ValueError):
        export_svg([], tmp_path / "x.svg", canvas_size=size)
