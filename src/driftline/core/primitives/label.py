"""
どこで: `src/driftline/core/primitives/label.py`。
何を: フォントのグリフ輪郭を平坦化し、1 行ラベルのポリライン列を作る `label` primitive。
なぜ: 凡例や気圧記号も、他の線画と同じポリライン経路で SVG/PNG に出すため。
"""

from __future__ import annotations

import functools
import logging
import struct
from pathlib import Path
from typing import Any

import numpy as np

from driftline.core.font_resolver import resolve_font_path
from driftline.core.param_meta import ParamMeta
from driftline.core.primitive_registry import primitive
from driftline.core.realized_geometry import (
    RealizedGeometry,
    empty_geometry,
    geometry_from_polylines,
)

logger = logging.getLogger(__name__)

# 平坦化の許容誤差（em 比）。quality=0 で粗く、1 で細かい。
_TOL_COARSE_EM = 0.1
_TOL_FINE_EM = 0.001
_SPACE_ADVANCE_EM = 0.25


@functools.lru_cache(maxsize=16)
def _load_font(path: str) -> Any:
    """TTFont を開く。`.ttc` は先頭の subfont を使う。"""
    from fontTools.ttLib import TTFont  # type: ignore[import-untyped]

    if path.lower().endswith(".ttc"):
        return TTFont(path, fontNumber=0)
    return TTFont(path)


def _glyph_name(font: Any, char: str) -> str | None:
    cmap = font.getBestCmap()
    return None if cmap is None else cmap.get(ord(char))


@functools.lru_cache(maxsize=4096)
def _flat_outline(path: str, char: str, seg_len_units: float) -> tuple:
    """グリフ輪郭を直線だけのペンコマンド列にして返す（見つからなければ空）。"""
    from fontPens.flattenPen import FlattenPen  # type: ignore[import-untyped]
    from fontTools.pens.recordingPen import (  # type: ignore[import-untyped]
        DecomposingRecordingPen,
        RecordingPen,
    )

    font = _load_font(path)
    name = _glyph_name(font, char)
    glyph_set = font.getGlyphSet()
    if name is None or name not in glyph_set:
        logger.warning("Character %r (U+%04X) not found in font '%s'", char, ord(char), path)
        return ()

    rec = DecomposingRecordingPen(glyph_set, reverseFlipped=True)
    try:
        glyph_set[name].draw(rec)
    except rec.MissingComponentError:  # type: ignore[attr-defined]
        logger.warning("Glyph '%s' has missing components in font '%s'", name, path)
        return ()

    flat = RecordingPen()
    rec.replay(FlattenPen(flat, approximateSegmentLength=seg_len_units, segmentLines=True))
    return tuple(flat.value)


def _advance_em(font: Any, char: str) -> float:
    units = float(font["head"].unitsPerEm)
    metrics = font["hmtx"].metrics
    if char == " ":
        space = metrics.get("space")
        return _SPACE_ADVANCE_EM if space is None else space[0] / units
    name = _glyph_name(font, char)
    if name is None or name not in metrics:
        return 0.0
    return metrics[name][0] / units


def _outline_to_polylines(commands: tuple, *, scale: float, x_em: float) -> list[np.ndarray]:
    """ペンコマンド列を「1em=1, Y+下」座標のポリライン列にする。閉路は始点を末尾に足す。"""
    out: list[np.ndarray] = []
    contour: list[tuple[float, float]] = []
    for op, args in commands:
        if op in ("moveTo", "lineTo"):
            if op == "moveTo" and contour:
                out.append(np.asarray(contour))
                contour = []
            contour.append(args[0])
        elif op == "closePath" and contour:
            if len(contour) > 1 and contour[0] != contour[-1]:
                contour.append(contour[0])
            out.append(np.asarray(contour))
            contour = []
    if contour:
        out.append(np.asarray(contour))

    flipped = np.array([scale, -scale])
    return [p.astype(np.float64) * flipped + np.array([x_em, 0.0]) for p in out]


label_meta = {
    "text": ParamMeta(kind="str"),
    "font": ParamMeta(kind="str"),
    "origin": ParamMeta(kind="vec2"),
    "size": ParamMeta(kind="float", min=0.0),
    "text_align": ParamMeta(kind="choice", choices=("left", "center", "right")),
    "letter_spacing_em": ParamMeta(kind="float", min=0.0, max=2.0),
    "quality": ParamMeta(kind="float", min=0.0, max=1.0),
}


@primitive(meta=label_meta)
def label(
    *,
    text: str = "",
    font: str = "",
    origin: tuple[float, float] = (0.0, 0.0),
    size: float = 12.0,
    text_align: str = "left",
    letter_spacing_em: float = 0.0,
    quality: float = 0.5,
) -> RealizedGeometry:
    """1 行のテキストをフォント輪郭のポリライン列として生成する。

    Parameters
    ----------
    text : str, optional
        描画する文字列（1 行）。
    font : str, optional
        フォント指定（実在パス / ファイル名 / 部分一致）。空文字なら
        `font_dirs` 内で最初に見つかったフォント。
    origin : tuple[float, float], optional
        ベースライン上の基準点 (x, y)。
    size : float, optional
        1em の大きさ（キャンバス単位）。
    text_align : str, optional
        origin に対する揃え（`left|center|right`）。
    letter_spacing_em : float, optional
        文字間の追加スペーシング（em 比）。
    quality : float, optional
        平坦化品質（0..1）。大きいほど点が増える。

    Returns
    -------
    RealizedGeometry
        フォントを解決・読み込みできない場合は警告を出して空ジオメトリ。
    """
    if not text:
        return empty_geometry()
    try:
        font_path = resolve_font_path(font)
    except FileNotFoundError as exc:
        logger.warning("Label %r skipped: %s", text, exc)
        return empty_geometry()

    from fontTools.ttLib import TTLibError  # type: ignore[import-untyped]

    path = str(Path(font_path).resolve())
    try:
        polylines = _layout(path, text, text_align, float(letter_spacing_em), quality)
    except (TTLibError, OSError, KeyError, struct.error) as exc:
        logger.warning("Label %r skipped: font '%s' could not be read: %s", text, path, exc)
        return empty_geometry()

    shift = np.array([float(origin[0]), float(origin[1])])
    return geometry_from_polylines(p * float(size) + shift for p in polylines)


def _layout(
    path: str, text: str, text_align: str, spacing: float, quality: float
) -> list[np.ndarray]:
    """揃えと文字間を適用した「1em=1」座標のポリライン列を返す。"""
    tt_font = _load_font(path)
    units = float(tt_font["head"].unitsPerEm)
    q = min(max(float(quality), 0.0), 1.0)
    tol_em = _TOL_COARSE_EM * (_TOL_FINE_EM / _TOL_COARSE_EM) ** q
    seg_len_units = round(max(1.0, tol_em * units), 6)

    advances = [_advance_em(tt_font, ch) for ch in text]
    width_em = sum(advances) + spacing * (len(text) - 1)
    x_em = {"center": -width_em / 2.0, "right": -width_em}.get(text_align, 0.0)

    polylines: list[np.ndarray] = []
    for ch, adv in zip(text, advances):
        if ch != " ":
            commands = _flat_outline(path, ch, seg_len_units)
            polylines += _outline_to_polylines(commands, scale=1.0 / units, x_em=x_em)
        x_em += adv + spacing
    return polylines
