"""
どこで: `src/driftline/api/export.py`。
何を: ヘッドレス export の公開導線 `Export` を提供する。
なぜ: ウィンドウを立ち上げずに `draw(t)` の 1 フレーム出力を SVG/PNG として保存するため。
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

from driftline.core.color import RGB01
from driftline.core.layer import LayerStyleDefaults
from driftline.core.pipeline import RealizedLayer, realize_scene
from driftline.core.runtime_config import runtime_config
from driftline.core.scene import SceneItem
from driftline.export.image import export_image
from driftline.export.svg import export_svg


class Export:
    """`draw(t)` の 1 フレーム分をファイルへ書き出す。

    Attributes
    ----------
    path : Path
        実際に書き出したファイルのパス。
    layers : list[RealizedLayer]
        書き出しに使った realize 済み Layer 列。
    """

    def __init__(
        self,
        draw: Callable[[float], SceneItem],
        t: float,
        fmt: str,
        path: str | Path,
        *,
        canvas_size: tuple[int, int] | None = None,
        line_color: RGB01 = (0.0, 0.0, 0.0),
        line_thickness: float = 1.0,
        background_color: RGB01 | None = (1.0, 1.0, 1.0),
    ) -> None:
        """export を実行する。

        Parameters
        ----------
        draw : Callable[[float], SceneItem]
            フレーム時刻 t を受け取り Geometry/Layer/Sequence を返すコールバック。
        t : float
            出力対象のフレーム時刻。
        fmt : str
            出力フォーマット。`"svg"` または `"png"`（`"image"` も可）。
        path : str or Path
            出力先パス。
        canvas_size : tuple[int, int] or None
            キャンバス寸法。None なら config.yaml の `canvas.size`。
        line_color : tuple[float, float, float]
            Layer の既定線色（0..1）。
        line_thickness : float
            Layer の既定線幅（キャンバス単位）。
        background_color : tuple[float, float, float] or None
            背景色（0..1）。SVG で None なら透明。

        Raises
        ------
        ValueError
            未対応の fmt が指定された場合。
        """
        self.fmt = str(fmt).lower().strip()
        size = canvas_size if canvas_size is not None else runtime_config().canvas_size

        defaults = LayerStyleDefaults(color=line_color, thickness=float(line_thickness))
        self.layers: list[RealizedLayer] = realize_scene(draw, float(t), defaults)

        if self.fmt == "svg":
            self.path = export_svg(
                self.layers, path, canvas_size=size, background_color=background_color
            )
            return
        if self.fmt in {"image", "png"}:
            self.path = export_image(
                self.layers,
                Path(path).with_suffix(".png"),
                canvas_size=size,
                background_color=background_color or (1.0, 1.0, 1.0),
            )
            return

        raise ValueError(f"未対応の export fmt: {fmt!r}")
