"""
どこで: `src/driftline/storm/render.py`。
何を: noise storm のポスター全体（輪郭レイヤ・アクセント・破線前線・グリッド・凡例）を Layer 列として組み立てる。
なぜ: 生成規則（steps / curvature）と描画スタイルを分離し、export はシーンを受け取るだけにするため。
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from driftline.api import Export, G, L
from driftline.core.color import RGB01
from driftline.core.layer import Layer
from driftline.core.output_paths import output_path_for
from driftline.core.runtime_config import runtime_config
from driftline.storm.params import DEFAULT_SEED_OFFSETS, NoiseSeedOffsets, StormParams
from driftline.storm.primitives import params_to_arg
from driftline.storm.steps import (
    cached_base_polygon,
    is_accent_step,
    is_bold_step,
    is_dash_step,
    pass_count,
    pass_offset,
)

BACKGROUND_COLOR: RGB01 = (0.1, 0.12, 0.25)
BOLD_COLOR: RGB01 = (0.6, 0.62, 0.65)
WHITE: RGB01 = (1.0, 1.0, 1.0)

BOLD_WIDTH = 2.5
BOLD_ALPHA = 0.6
BASE_WIDTH = 1.2
BASE_ALPHA_RANGE = (0.12, 0.35)

HIGHLIGHT_COLOR: RGB01 = (1.0, 0.2, 0.6)
HIGHLIGHT_ALPHA = 0.7
HIGHLIGHT_WIDTH_SCALE = 1.8

DASH_COLOR: RGB01 = (0.7, 0.7, 0.75)
DASH_ALPHA = 0.5
DASH_WIDTH = 2.0

GRID_ANGLE_DEG = 3.0
GRID_DIVISIONS = 10
GRID_ALPHA = 0.04
GRID_WIDTH = 0.5

SAFE_MARGIN_PCT = 0.08
LEGEND_SIZE = (180.0, 90.0)
LABEL_SIZE = 10.0


@dataclass(frozen=True, slots=True)
class StrokeStyle:
    """輪郭レイヤの線幅と不透明度（多重パス分割前）。"""

    width: float
    alpha: float


def stroke_style_for_layer(step: int, params: StormParams) -> StrokeStyle:
    """レイヤ step の線スタイルを返す。

    太線レイヤは幅 2.5 / 不透明度 0.6。
    それ以外は幅 1.2 で、不透明度を進捗 step/layers に応じて 0.12 → 0.35 に線形補間する。
    """
    if is_bold_step(step, params):
        return StrokeStyle(width=BOLD_WIDTH, alpha=BOLD_ALPHA)
    progress = float(step) / float(params.layers)
    lo, hi = BASE_ALPHA_RANGE
    return StrokeStyle(width=BASE_WIDTH, alpha=lo + (hi - lo) * progress)


def layer_color(step: int, params: StormParams) -> RGB01:
    """レイヤ step の線色（通常は進捗でわずかに色相をずらした青灰色）。"""
    if is_bold_step(step, params):
        return BOLD_COLOR
    shift = float(step) / float(params.layers) * 0.05
    return (0.5 + shift, 0.55 + shift, 0.65)


def legend_lines(params: StormParams) -> list[str]:
    return [
        "NOISE SYSTEM",
        f"seed: {params.seed}",
        f"N: {params.n_points}",
        f"ωₛ: {params.noise_freq:.2f}",
        f"ωₜ: {params.time_freq:.2f}",
        f"τ: {params.tension:.2f}",
    ]


def pressure_label(params: StormParams) -> str:
    """気圧記号（seed が偶数なら "L"、奇数なら "H"）。"""
    return "L" if int(params.seed) % 2 == 0 else "H"


def export_filename(params: StormParams) -> str:
    """`noise_storm_s{seed}_n{N}_nf{noise_freq:.2f}_t{tension:.2f}.png` を返す。"""
    return (
        f"noise_storm_s{params.seed}_n{params.n_points}"
        f"_nf{params.noise_freq:.2f}_t{params.tension:.2f}.png"
    )


def _contour_layers(
    params: StormParams, canvas: tuple[float, float], offsets: NoiseSeedOffsets
) -> list[Layer]:
    arg = params_to_arg(params)
    seeds = offsets.as_tuple()
    out: list[Layer] = []
    for step in range(int(params.layers)):
        style = stroke_style_for_layer(step, params)
        color = layer_color(step, params)
        passes = pass_count(step, params)
        for k in range(passes):
            out += L(
                G.storm_contour(
                    params=arg,
                    canvas=canvas,
                    step=step,
                    seed_offsets=seeds,
                    offset=pass_offset(params, step, k),
                ),
                color=color,
                thickness=style.width,
                opacity=style.alpha / passes,
                name=f"step{step}",
            )

        if is_accent_step(step, params):
            out += L(
                G.storm_highlights(params=arg, canvas=canvas, step=step, seed_offsets=seeds),
                color=HIGHLIGHT_COLOR,
                thickness=style.width * HIGHLIGHT_WIDTH_SCALE,
                opacity=HIGHLIGHT_ALPHA,
                name=f"highlight{step}",
            )

        if is_dash_step(step, params):
            out += L(
                G.storm_dashes(params=arg, canvas=canvas, step=step, seed_offsets=seeds),
                color=DASH_COLOR,
                thickness=DASH_WIDTH,
                opacity=DASH_ALPHA,
                name=f"front{step}",
            )
    return out


def _overlay_layers(
    params: StormParams, width: float, height: float, *, font: str
) -> list[Layer]:
    min_dim = min(width, height)
    margin = min_dim * SAFE_MARGIN_PCT
    x = margin * 1.5
    y = height - margin * 2.5

    out: list[Layer] = []
    out += L(G.rect(origin=(x, y), size=LEGEND_SIZE), color=WHITE, opacity=0.25, name="legend")
    out += L(
        [
            G.label(text=line, font=font, origin=(x + 8.0, y + 18.0 + i * 12.0), size=LABEL_SIZE)
            for i, line in enumerate(legend_lines(params))
        ],
        color=WHITE,
        opacity=0.5,
        name="legend_text",
    )

    spacing = min_dim / GRID_DIVISIONS
    out += L(
        G.grid(
            center=(width * 0.5, height * 0.5),
            spacing=spacing,
            half_count=GRID_DIVISIONS // 2,
            angle=GRID_ANGLE_DEG,
        ),
        color=WHITE,
        thickness=GRID_WIDTH,
        opacity=GRID_ALPHA,
        name="grid",
    )

    cx, cy = cached_base_polygon(params, width, height).center
    out += L(
        G.label(
            text=pressure_label(params),
            font=font,
            origin=(float(cx) - 5.0, float(cy) + 5.0),
            size=LABEL_SIZE,
        ),
        color=WHITE,
        opacity=0.3,
        name="pressure",
    )
    return out


def storm_layers(
    params: StormParams,
    width: float,
    height: float,
    *,
    font: str = "",
    offsets: NoiseSeedOffsets = DEFAULT_SEED_OFFSETS,
) -> list[Layer]:
    """ポスター 1 枚分の Layer 列を描画順（奥 → 手前）で返す。

    Parameters
    ----------
    params : StormParams
        生成パラメータ。範囲外の値はクランプしてから使う。
    width, height : float
        キャンバス寸法。
    font : str, optional
        凡例ラベルのフォント指定。解決できない場合ラベルは空になる。
    offsets : NoiseSeedOffsets, optional
        角度・中心ドリフトのノイズチャンネルに使う seed オフセット。
    """
    p = params.clamped()
    w, h = float(width), float(height)
    return _contour_layers(p, (w, h), offsets) + _overlay_layers(p, w, h, font=font)


def export_storm(
    params: StormParams,
    *,
    fmt: str = "svg",
    path: str | Path | None = None,
    canvas_size: tuple[int, int] | None = None,
    font: str = "",
    offsets: NoiseSeedOffsets = DEFAULT_SEED_OFFSETS,
) -> Path:
    """ポスターを書き出し、保存先パスを返す。

    path を省略すると `output_dir/{fmt}/` 配下に export_filename の名前で保存する。
    """
    params = params.clamped()
    size = canvas_size if canvas_size is not None else runtime_config().canvas_size
    if path is None:
        stem = Path(export_filename(params)).stem
        path = output_path_for(stem, ext="png" if fmt in {"png", "image"} else fmt)

    w, h = size
    export = Export(
        lambda t: storm_layers(params, w, h, font=font, offsets=offsets),
        0.0,
        fmt,
        path,
        canvas_size=(int(w), int(h)),
        background_color=BACKGROUND_COLOR,
    )
    return export.path


__all__ = [
    "StrokeStyle",
    "export_filename",
    "export_storm",
    "layer_color",
    "legend_lines",
    "pressure_label",
    "storm_layers",
    "stroke_style_for_layer",
]
