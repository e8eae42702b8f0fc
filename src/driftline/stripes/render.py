"""
どこで: `src/driftline/stripes/render.py`。
何を: ストライプ列を、グラデーション段ごとの Layer（色・線幅・不透明度）へ組み立てて書き出す。
なぜ: 連続グラデーションを有限個の線スタイルへ量子化し、ベクター出力で表現するため。
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from driftline.api import Export, G, L
from driftline.core.color import RGB01, mix_rgb
from driftline.core.layer import Layer
from driftline.core.output_paths import output_path_for
from driftline.core.runtime_config import runtime_config
from driftline.stripes.fills import SOLID_SPACING
from driftline.stripes.generate import Stripe, generate_stripes
from driftline.stripes.palettes import palette_for
from driftline.stripes.params import FillVariant, StripeParams

DEFAULT_BANDS = 8


@dataclass(frozen=True, slots=True)
class BandStyle:
    color: RGB01
    thickness: float
    opacity: float


def _lerp(lo: float, hi: float, t: float) -> float:
    return lo + (hi - lo) * t


def band_style(stripe: Stripe, band: int, bands: int) -> BandStyle:
    """段 band の中央位置 g におけるストライプの線スタイルを返す。"""
    g = (int(band) + 0.5) / int(bands)
    color = mix_rgb(stripe.color_a, stripe.color_b, g)
    fill = stripe.fill
    if fill is FillVariant.SOLID:
        return BandStyle(color, SOLID_SPACING, 1.0)
    if fill is FillVariant.DOT:
        return BandStyle(color, 0.8, _lerp(0.2, 1.0, g))
    if fill is FillVariant.HATCH:
        return BandStyle(color, _lerp(0.5, 3.0, g), _lerp(0.3, 1.0, g))
    if fill is FillVariant.PATTERN:
        return BandStyle(color, 0.8, 1.0)
    return BandStyle(color, 0.6, 1.0)


def stripe_layers(
    stripes: list[Stripe],
    params: StripeParams,
    width: float,
    height: float,
    *,
    bands: int = DEFAULT_BANDS,
) -> list[Layer]:
    """ストライプ列を上から順に Layer 列へ変換する。

    各ストライプは bands 段に分けられ、段ごとに 1 Layer になる。
    swap のストライプは split_x の左右が入れ替わった線画になる。
    """
    w = float(width)
    out: list[Layer] = []
    for i, s in enumerate(stripes):
        for band in range(int(bands)):
            style = band_style(s, band, bands)
            out += L(
                G.stripe_band(
                    rect=(0.0, s.y0, w, s.height),
                    fill=s.fill.value,
                    direction=params.gradient_direction.value,
                    seed=int(params.seed) + i,
                    split_x=s.split_x,
                    swap=s.swap,
                    canvas_width=w,
                    band=band,
                    bands=int(bands),
                ),
                color=style.color,
                thickness=style.thickness,
                opacity=style.opacity,
                name=f"stripe{i}_band{band}",
            )
    return out


def export_filename(params: StripeParams) -> str:
    """`split_stripes_{seed}_{palette}_{mode}.png` を返す。"""
    return (
        f"split_stripes_{params.seed}_{params.palette.value}_{params.fill_mode.value}.png"
    )


def export_stripes(
    params: StripeParams,
    *,
    fmt: str = "svg",
    path: str | Path | None = None,
    canvas_size: tuple[int, int] | None = None,
) -> Path:
    """ストライプ画像を書き出し、保存先パスを返す。背景はパレットの背景色。"""
    size = canvas_size if canvas_size is not None else runtime_config().canvas_size
    if path is None:
        stem = Path(export_filename(params)).stem
        path = output_path_for(stem, ext="png" if fmt in {"png", "image"} else fmt)

    p = params.clamped()
    w, h = size
    stripes = generate_stripes(p, w, h)
    export = Export(
        lambda t: stripe_layers(stripes, p, w, h),
        0.0,
        fmt,
        path,
        canvas_size=(int(w), int(h)),
        background_color=palette_for(p.palette).background,
    )
    return export.path


__all__ = ["BandStyle", "band_style", "export_filename", "export_stripes", "stripe_layers"]
