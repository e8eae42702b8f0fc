"""ストライプの段別 Layer 組み立てと書き出しのテスト。"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from pathlib import Path

import numpy as np
import pytest

from driftline.core.realize import realize, realize_cache
from driftline.core.runtime_config import set_config_path
from driftline.stripes.generate import Stripe, generate_stripes
from driftline.stripes.fills import stripe_polylines
from driftline.stripes.params import FillVariant, FillVariantMode, GradientDirection, StripeParams
from driftline.stripes.render import band_style, export_filename, export_stripes, stripe_layers

_SVG_NS = "http://www.w3.org/2000/svg"


@pytest.fixture(autouse=True)
def _isolated(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    set_config_path(None)
    realize_cache.clear()
    yield
    set_config_path(None)


def _stripe(fill: FillVariant) -> Stripe:
    return Stripe(
        y0=0.0,
        height=20.0,
        fill=fill,
        split_x=30.0,
        swap=False,
        color_a=(0.0, 0.0, 0.0),
        color_b=(1.0, 1.0, 1.0),
    )


def test_band_style_mixes_colors() -> None:
    s = _stripe(FillVariant.SOLID)
    assert band_style(s, 0, 8).color == pytest.approx((1 / 16,) * 3)
    assert band_style(s, 7, 8).color == pytest.approx((15 / 16,) * 3)


def test_hatch_band_gets_heavier() -> None:
    s = _stripe(FillVariant.HATCH)
    light = band_style(s, 0, 8)
    heavy = band_style(s, 7, 8)
    assert heavy.thickness > light.thickness
    assert heavy.opacity > light.opacity


def test_stripe_layers_one_layer_per_band() -> None:
    p = StripeParams(stripe_count=18)
    stripes = generate_stripes(p, 200, 180)
    layers = stripe_layers(stripes, p, 200, 180, bands=4)
    assert len(layers) == 18 * 4
    assert layers[0].name == "stripe0_band0"
    assert layers[-1].name == "stripe17_band3"


def test_bands_partition_stripe_polylines() -> None:
    p = StripeParams(stripe_count=18, fill_mode=FillVariantMode.HATCH)
    stripes = generate_stripes(p, 200, 180)
    layers = stripe_layers(stripes[:1], p, 200, 180)
    total = sum(realize(x.geometry).n_polylines for x in layers)
    s = stripes[0]
    polylines, _ = stripe_polylines(
        (0.0, s.y0, 200.0, s.height),
        s.fill,
        GradientDirection.HORIZONTAL,
        int(p.seed),
        s.split_x,
        s.swap,
        200.0,
    )
    assert total == len(polylines)


def test_swapped_stripe_stays_on_canvas() -> None:
    p = StripeParams(stripe_count=18, swap_probability=1.0)
    stripes = generate_stripes(p, 200, 180)
    for layer in stripe_layers(stripes[:3], p, 200, 180):
        coords = realize(layer.geometry).coords
        if coords.shape[0]:
            assert coords[:, 0].min() >= -2.0
            assert coords[:, 0].max() <= 202.0


def test_export_filename() -> None:
    assert export_filename(StripeParams()) == "split_stripes_123456_muted_paper_random.png"


def test_export_stripes_writes_svg_with_palette_background(tmp_path: Path) -> None:
    p = StripeParams(stripe_count=18, fill_mode=FillVariantMode.HATCH)
    out = export_stripes(p, canvas_size=(120, 90))
    assert out == Path("data/output/svg/split_stripes_123456_muted_paper_hatch.svg")
    root = ET.parse(tmp_path / out).getroot()
    bg = root.find(f"{{{_SVG_NS}}}rect")
    assert bg is not None
    assert bg.attrib["fill"] == "#F5F2E7"
    groups = root.findall(f"{{{_SVG_NS}}}g")
    assert groups
    widths = {float(x.attrib["stroke-width"]) for x in groups}
    assert len(widths) > 1
    assert np.isfinite(list(widths)).all()
