"""
どこで: `src/driftline/core/color.py`。
何を: RGB の表現変換（0..1 float / 0..255 int / #RRGGBB）と補間を提供する。
なぜ: パレット定義と SVG 出力で同じ変換規則を共有するため。
"""

from __future__ import annotations

RGB01 = tuple[float, float, float]


def _clamp01(v: float) -> float:
    return 0.0 if v < 0.0 else 1.0 if v > 1.0 else v


def rgb01_to_rgb255(rgb: RGB01) -> tuple[int, int, int]:
    """0..1 float の RGB を 0..255 int の RGB に変換して返す。"""
    r, g, b = rgb
    return (
        int(round(_clamp01(float(r)) * 255.0)),
        int(round(_clamp01(float(g)) * 255.0)),
        int(round(_clamp01(float(b)) * 255.0)),
    )


def rgb01_to_hex(rgb: RGB01) -> str:
    """0..1 float RGB を `#RRGGBB` に変換して返す。"""
    r, g, b = rgb01_to_rgb255(rgb)
    return f"#{r:02X}{g:02X}{b:02X}"


def hex_to_rgb01(text: str) -> RGB01:
    """`#RRGGBB`（`#` 省略可）を 0..1 float RGB に変換して返す。

    Raises
    ------
    ValueError
        16 進 6 桁として解釈できない場合。
    """
    s = str(text).strip().lstrip("#")
    if len(s) != 6:
        raise ValueError(f"#RRGGBB 形式である必要がある: {text!r}")
    try:
        r, g, b = int(s[0:2], 16), int(s[2:4], 16), int(s[4:6], 16)
    except ValueError as exc:
        raise ValueError(f"#RRGGBB 形式である必要がある: {text!r}") from exc
    return r / 255.0, g / 255.0, b / 255.0


def mix_rgb(a: RGB01, b: RGB01, t: float) -> RGB01:
    """a→b を t で線形補間した RGB を返す（t は 0..1 にクランプ）。"""
    u = _clamp01(float(t))
    return (
        a[0] + (b[0] - a[0]) * u,
        a[1] + (b[1] - a[1]) * u,
        a[2] + (b[2] - a[2]) * u,
    )


__all__ = ["RGB01", "hex_to_rgb01", "mix_rgb", "rgb01_to_hex", "rgb01_to_rgb255"]
