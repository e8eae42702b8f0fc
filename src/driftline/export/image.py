"""
どこで: `src/driftline/export/image.py`。
何を: ポスターの SVG を resvg でラスタライズして PNG を書き出す。
なぜ: 数百枚の半透明レイヤの合成はラスタライザに任せ、SVG を正（ソース）として高解像度の PNG を再生成できるようにするため。
"""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Sequence
from pathlib import Path

from driftline.core.color import RGB01, rgb01_to_hex
from driftline.core.pipeline import RealizedLayer
from driftline.core.runtime_config import runtime_config
from driftline.export.svg import export_svg

logger = logging.getLogger(__name__)


def png_output_size(canvas_size: tuple[int, int]) -> tuple[int, int]:
    """キャンバス寸法に config の `export.png.scale` を掛けたピクセルサイズを返す。

    Raises
    ------
    ValueError
        canvas_size が正でない場合。
    """
    w, h = (int(v) for v in canvas_size)
    if w <= 0 or h <= 0:
        raise ValueError("canvas_size は正の (width, height) である必要がある")
    scale = float(runtime_config().png_scale)
    return int(w * scale), int(h * scale)


def export_image(
    layers: Sequence[RealizedLayer],
    path: str | Path,
    *,
    canvas_size: tuple[int, int] | None = None,
    background_color: RGB01 = (1.0, 1.0, 1.0),
    keep_svg: bool = True,
) -> Path:
    """Layer 列を `.svg` または `.png` として保存する。

    `.png` の場合は同名の `.svg` を先に書き出してからラスタライズする。
    keep_svg=False なら PNG 生成後にその SVG を削除する。

    Raises
    ------
    ValueError
        canvas_size が None、または拡張子が `.svg`/`.png` 以外の場合。
    RuntimeError
        ラスタライズに失敗した場合。
    """
    if canvas_size is None:
        raise ValueError("canvas_size=None は未対応（現在は必須）")
    target = Path(path)
    suffix = target.suffix.lower()

    if suffix == ".svg":
        return export_svg(
            layers, target, canvas_size=canvas_size, background_color=background_color
        )
    if suffix != ".png":
        raise ValueError(f"未対応の画像フォーマット: {suffix!r}")

    svg_path = export_svg(
        layers,
        target.with_suffix(".svg"),
        canvas_size=canvas_size,
        background_color=background_color,
    )
    try:
        return rasterize_svg_to_png(
            svg_path,
            target,
            output_size=png_output_size(canvas_size),
            background_color=background_color,
        )
    finally:
        if not keep_svg:
            svg_path.unlink(missing_ok=True)


def resvg_command(
    svg_path: Path,
    png_path: Path,
    *,
    output_size: tuple[int, int],
    background_color: RGB01,
) -> list[str]:
    """resvg の呼び出し引数列を返す。実行ファイルは config の `export.png.resvg`。"""
    out_w, out_h = (int(v) for v in output_size)
    if out_w <= 0 or out_h <= 0:
        raise ValueError("output_size は正の (width, height) である必要がある")
    return [
        runtime_config().resvg,
        "--width",
        str(out_w),
        "--height",
        str(out_h),
        "--background",
        rgb01_to_hex(background_color),
        str(svg_path),
        str(png_path),
    ]


def rasterize_svg_to_png(
    svg_path: str | Path,
    png_path: str | Path,
    *,
    output_size: tuple[int, int],
    background_color: RGB01 = (1.0, 1.0, 1.0),
) -> Path:
    """SVG ファイルを resvg で PNG に変換し、出力パスを返す。

    Parameters
    ----------
    svg_path, png_path : str or Path
        入力 SVG と出力 PNG。PNG の親ディレクトリは作成する。
    output_size : tuple[int, int]
        出力ピクセルサイズ (width, height)。
    background_color : tuple[float, float, float]
        透明部分を埋める背景色（0..1）。

    Raises
    ------
    RuntimeError
        resvg が見つからない、または非ゼロ終了した場合。
    """
    src = Path(svg_path)
    dst = Path(png_path)
    dst.parent.mkdir(parents=True, exist_ok=True)

    cmd = resvg_command(src, dst, output_size=output_size, background_color=background_color)
    logger.debug("Running %s", " ".join(cmd))
    try:
        proc = subprocess.run(cmd, capture_output=True, text=True, check=False)
    except FileNotFoundError as exc:
        raise RuntimeError(
            f"resvg が見つかりません: {cmd[0]!r}"
            "（インストールするか config.yaml の export.png.resvg を設定してください）"
        ) from exc

    if proc.returncode != 0:
        details = (proc.stderr or proc.stdout or "").strip()
        raise RuntimeError(f"resvg が失敗しました (code={proc.returncode}). {details}".strip())

    logger.info("Exported PNG: %s (%dx%d)", dst, *output_size)
    return dst


__all__ = ["export_image", "png_output_size", "rasterize_svg_to_png", "resvg_command"]
