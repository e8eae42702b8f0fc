"""
どこで: `src/driftline/export/svg.py`。
何を: realize 済みの Layer 列を SVG 文書として書き出す。
なぜ: ヘッドレス出力の正（ソース）を SVG とし、PNG はそこからラスタライズするため。
"""

from __future__ import annotations

import html
import logging
from collections.abc import Iterator, Sequence
from pathlib import Path

import numpy as np

from driftline.core.color import RGB01, rgb01_to_hex
from driftline.core.pipeline import RealizedLayer

logger = logging.getLogger(__name__)

_SVG_NS = "http://www.w3.org/2000/svg"
_FLOAT_DECIMALS = 3


def _fmt(value: float, *, decimals: int = _FLOAT_DECIMALS) -> str:
    """float を固定小数点の文字列にする（`-0.000` は `0.000`）。"""
    text = f"{float(value):.{int(decimals)}f}"
    if text.startswith("-") and float(text) == 0.0:
        return text[1:]
    return text


def _path_data(layer: RealizedLayer) -> Iterator[str]:
    """Layer の各ポリラインを path の d 属性文字列として列挙する（2 点未満は飛ばす）。"""
    coords = np.asarray(layer.realized.coords)
    offsets = np.asarray(layer.realized.offsets)
    for start, end in zip(offsets[:-1], offsets[1:]):
        xy = coords[int(start) : int(end), :2]
        if xy.shape[0] < 2:
            continue
        head = f"M {_fmt(xy[0, 0])} {_fmt(xy[0, 1])}"
        yield " ".join([head, *(f"L {_fmt(x)} {_fmt(y)}" for x, y in xy[1:])])


def _group_open(layer: RealizedLayer) -> str:
    attrs = [
        'fill="none"',
        f'stroke="{rgb01_to_hex(layer.color)}"',
        f'stroke-width="{_fmt(layer.thickness)}"',
    ]
    if layer.opacity < 1.0:
        attrs.append(f'stroke-opacity="{_fmt(layer.opacity)}"')
    attrs.append('stroke-linecap="round" stroke-linejoin="round"')
    name = layer.layer.name
    if name:
        attrs.insert(0, f'class="{html.escape(name, quote=True)}"')
    return f"  <g {' '.join(attrs)}>"


def svg_document(
    layers: Sequence[RealizedLayer],
    *,
    canvas_size: tuple[int, int],
    background_color: RGB01 | None = None,
) -> str:
    """Layer 列を SVG 文書文字列へ変換して返す。

    Layer ごとに 1 つの `<g>` を作り、線色・線幅（キャンバス単位）・不透明度は
    `<g>` の属性に置く。ポリラインを持たない Layer は出力しない。

    Raises
    ------
    ValueError
        canvas_size が正でない場合。
    """
    w, h = (int(v) for v in canvas_size)
    if w <= 0 or h <= 0:
        raise ValueError("canvas_size は正の値である必要がある")

    lines = [
        '<?xml version="1.0" encoding="UTF-8"?>',
        f'<svg xmlns="{_SVG_NS}" viewBox="0 0 {w} {h}" width="{w}" height="{h}">',
    ]
    if background_color is not None:
        lines.append(
            f'  <rect x="0" y="0" width="{w}" height="{h}" '
            f'fill="{rgb01_to_hex(background_color)}" />'
        )

    for layer in layers:
        paths = [f'    <path d="{d}" />' for d in _path_data(layer)]
        if not paths:
            continue
        lines.append(_group_open(layer))
        lines.extend(paths)
        lines.append("  </g>")

    lines.append("</svg>")
    return "\n".join(lines) + "\n"


def export_svg(
    layers: Sequence[RealizedLayer],
    path: str | Path,
    *,
    canvas_size: tuple[int, int] | None = None,
    background_color: RGB01 | None = None,
) -> Path:
    """Layer 列を SVG ファイルとして保存し、保存先パスを返す。

    Parameters
    ----------
    layers : Sequence[RealizedLayer]
        realize 済みの Layer 列（描画順）。
    path : str or Path
        出力先。親ディレクトリは作成する。
    canvas_size : tuple[int, int] or None, optional
        viewBox の寸法。None は許容しない。
    background_color : tuple[float, float, float] or None, optional
        背景色。None なら背景矩形を書かない（透明）。

    Raises
    ------
    ValueError
        canvas_size が None または正でない場合。
    """
    if canvas_size is None:
        raise ValueError("canvas_size=None は未対応（現在は必須）")
    text = svg_document(layers, canvas_size=canvas_size, background_color=background_color)

    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    with out.open("w", encoding="utf-8", newline="\n") as f:
        f.write(text)

    logger.info("Exported SVG: %s (%d layers)", out, len(layers))
    return out


__all__ = ["export_svg", "svg_document"]
