"""
どこで: `src/driftline/stripes/palettes.py`。
何を: split stripes 用のパレットプリセット（背景色・ランプ色列・ビネット色）の静的テーブル。
なぜ: プリセットの切り替えを列挙型の順序だけで表し、色定義をコードから分離して一覧できるようにするため。
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from driftline.core.color import RGB01, hex_to_rgb01


class PalettePreset(Enum):
    MUTED_PAPER = "muted_paper"
    NEON_DARK = "neon_dark"
    OCEANIC = "oceanic"
    CYBERPUNK_NIGHT = "cyberpunk_night"
    DESERT_SUNSET = "desert_sunset"
    FOREST_MIST = "forest_mist"
    VINTAGE_POSTER = "vintage_poster"
    ARCTIC_ICE = "arctic_ice"
    LAVA_FLOW = "lava_flow"
    BERRY_GARDEN = "berry_garden"
    GOLDEN_HOUR = "golden_hour"
    MIDNIGHT_GARDEN = "midnight_garden"
    COFFEE_SHOP = "coffee_shop"
    RETRO_FUTURE = "retro_future"
    SPRING_BLOOM = "spring_bloom"
    STORM_CLOUDS = "storm_clouds"
    MARS_ROVER = "mars_rover"
    TOKYO_DRIFT = "tokyo_drift"
    CHALKBOARD = "chalkboard"
    AUTUMN_LEAVES = "autumn_leaves"
    CANDY_SHOP = "candy_shop"
    SPACE_NEBULA = "space_nebula"
    MONO_NO_AWARE = "mono_no_aware"
    MONOCHROME = "monochrome"


@dataclass(frozen=True, slots=True)
class Palette:
    """背景色・ストライプに使うランプ色列・ビネット色（無ければ None）。"""

    background: RGB01
    ramp: tuple[RGB01, ...]
    vignette: RGB01 | None = None


def _palette(background: str, ramp: tuple[str, ...], vignette: str | None = None) -> Palette:
    return Palette(
        background=hex_to_rgb01(background),
        ramp=tuple(hex_to_rgb01(c) for c in ramp),
        vignette=None if vignette is None else hex_to_rgb01(vignette),
    )


PALETTES: dict[PalettePreset, Palette] = {
    PalettePreset.MUTED_PAPER: _palette("#F5F2E7", ("#D8D1C5", "#8E806A", "#C84B31")),
    PalettePreset.NEON_DARK: _palette(
        "#0F0F0F", ("#00FFC6", "#FF00FF", "#FFFF00", "#007DFF"), "#000000"
    ),
    PalettePreset.OCEANIC: _palette("#003B46", ("#07575B", "#66A5AD", "#C4DFE6", "#FF6F61")),
    PalettePreset.CYBERPUNK_NIGHT: _palette(
        "#050505", ("#FF0055", "#00FF9F", "#7000FF", "#FFD300"), "#000000"
    ),
    PalettePreset.DESERT_SUNSET: _palette(
        "#2D142C", ("#510A32", "#801336", "#C72C41", "#EE4540")
    ),
    PalettePreset.FOREST_MIST: _palette(
        "#1B262C", ("#0F4C75", "#3282B8", "#BBE1FA", "#1A5F7A"), "#000000"
    ),
    PalettePreset.VINTAGE_POSTER: _palette(
        "#EAE3C8", ("#D96098", "#C85250", "#415A77", "#778DA9")
    ),
    PalettePreset.ARCTIC_ICE: _palette("#F0F5F9", ("#C9D6DF", "#52616B", "#1E2022", "#00ADB5")),
    PalettePreset.LAVA_FLOW: _palette(
        "#000000", ("#3D0000", "#950101", "#FF0000", "#FFBD33"), "#000000"
    ),
    PalettePreset.BERRY_GARDEN: _palette("#2B1B17", ("#5E1914", "#962D2D", "#C21E56", "#800020")),
    PalettePreset.GOLDEN_HOUR: _palette("#3E2723", ("#D84315", "#FF8F00", "#FFCA28", "#FFF59D")),
    PalettePreset.MIDNIGHT_GARDEN: _palette(
        "#1A1A1D", ("#4E4E50", "#6F2232", "#950740", "#C3073F"), "#000000"
    ),
    PalettePreset.COFFEE_SHOP: _palette("#3C2A21", ("#5F4B32", "#8D7B68", "#E4DCCF", "#F9F5EB")),
    PalettePreset.RETRO_FUTURE: _palette(
        "#222831", ("#393E46", "#00ADB5", "#EEEEEE", "#FF5722"), "#000000"
    ),
    PalettePreset.SPRING_BLOOM: _palette("#F7F9F2", ("#E2F1AF", "#89B399", "#F9B7B0", "#E78292")),
    PalettePreset.STORM_CLOUDS: _palette(
        "#2C3333", ("#2E4F4F", "#0E8388", "#CBE4DE", "#7C9D96"), "#000000"
    ),
    PalettePreset.MARS_ROVER: _palette("#4E342E", ("#A1887F", "#8D6E63", "#6D4C41", "#FF8A65")),
    PalettePreset.TOKYO_DRIFT: _palette(
        "#000000", ("#00D2FF", "#3A7BD5", "#BB00FF", "#FF00C1"), "#111111"
    ),
    PalettePreset.CHALKBOARD: _palette("#1E2022", ("#67727E", "#A2B29F", "#F9F5EB", "#E8C4C4")),
    PalettePreset.AUTUMN_LEAVES: _palette(
        "#3D2B1F", ("#63412C", "#D4AC0D", "#A04000", "#5D4037")
    ),
    PalettePreset.CANDY_SHOP: _palette("#FFF5E4", ("#FFC4C4", "#EE6983", "#850E35", "#FFACAC")),
    PalettePreset.SPACE_NEBULA: _palette(
        "#0B0B19", ("#1B1B2F", "#162447", "#1F4068", "#E43F5A"), "#000000"
    ),
    PalettePreset.MONO_NO_AWARE: _palette(
        "#E8E8E8", ("#D1D1D1", "#B9C4C9", "#C9B9B9", "#B9C9B9")
    ),
    PalettePreset.MONOCHROME: _palette(
        "#FFFFFF", ("#000000", "#333333", "#666666", "#999999", "#CCCCCC"), "#000000"
    ),
}


def palette_for(preset: PalettePreset) -> Palette:
    """プリセットに対応する Palette を返す。"""
    return PALETTES[preset]


__all__ = ["PALETTES", "Palette", "PalettePreset", "palette_for"]
