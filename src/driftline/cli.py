"""
どこで: `src/driftline/cli.py`。
何を: `python -m driftline storm|stripes ...` でポスター 1 枚をヘッドレス出力するコマンドライン。
なぜ: ウィンドウ無しで seed やパラメータを変えた書き出しを反復できるようにするため。
"""

from __future__ import annotations

import argparse
import logging
from dataclasses import replace

import numpy as np

from driftline.core.runtime_config import set_config_path
from driftline.storm import render as storm_render
from driftline.storm.params import StormParams
from driftline.storm.params import apply_key as apply_storm_key
from driftline.stripes import render as stripes_render
from driftline.stripes.palettes import PalettePreset
from driftline.stripes.params import FillVariantMode, StripeParams
from driftline.stripes.params import apply_key as apply_stripes_key

logger = logging.getLogger("driftline")


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )
    if args.config:
        set_config_path(args.config)

    canvas = tuple(args.canvas) if args.canvas else None
    # キー操作列の reseed にも使うので、seed 由来の Generator を 1 つだけ作る。
    rng = np.random.default_rng(args.seed)

    if args.command == "storm":
        params = StormParams(seed=args.seed)
        overrides = {
            k: v
            for k, v in (
                ("n_points", args.n_points),
                ("noise_freq", args.noise_freq),
                ("time_freq", args.time_freq),
                ("tension", args.tension),
                ("layers", args.layers),
            )
            if v is not None
        }
        params = replace(params, **overrides)
        for key in args.keys:
            params = apply_storm_key(params, key, rng=rng)
        path = storm_render.export_storm(
            params, fmt=args.format, path=args.out, canvas_size=canvas, font=args.font
        )
    else:
        params_s = StripeParams(seed=args.seed)
        if args.palette:
            params_s = replace(params_s, palette=PalettePreset(args.palette))
        if args.mode:
            params_s = replace(params_s, fill_mode=FillVariantMode(args.mode))
        if args.stripes is not None:
            params_s = replace(params_s, stripe_count=args.stripes)
        for key in args.keys:
            params_s = apply_stripes_key(params_s, key, rng=rng)
        path = stripes_render.export_stripes(
            params_s, fmt=args.format, path=args.out, canvas_size=canvas
        )

    logger.info("Exported: %s", path)
    return 0


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="driftline")
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--seed", type=int, default=None, help="乱数 seed（省略時は各スケッチの既定値）")
    common.add_argument("--format", choices=("svg", "png"), default="svg", help="出力フォーマット")
    common.add_argument("--out", default=None, help="出力パス（省略時は output_dir/{format}/ 配下）")
    common.add_argument("--config", default=None, help="明示的に読む config.yaml")
    common.add_argument("--canvas", type=int, nargs=2, metavar=("W", "H"), default=None)
    common.add_argument(
        "--keys", default="", help="生成前に順に適用するキー操作列（例: ']]=r'）"
    )
    common.add_argument("-v", "--verbose", action="store_true")

    sub = p.add_subparsers(dest="command", required=True)

    storm = sub.add_parser("storm", parents=[common], help="ノイズ駆動の等圧線ポスター")
    storm.add_argument("--n-points", type=int, default=None, help="制御多角形の頂点数")
    storm.add_argument("--noise-freq", type=float, default=None)
    storm.add_argument("--time-freq", type=float, default=None)
    storm.add_argument("--tension", type=float, default=None)
    storm.add_argument("--layers", type=int, default=None)
    storm.add_argument("--font", default="", help="凡例ラベルのフォント（config の font_dirs から探索）")

    stripes = sub.add_parser("stripes", parents=[common], help="分割・入れ替えストライプ")
    stripes.add_argument(
        "--palette", default=None, choices=[x.value for x in PalettePreset], help="パレット"
    )
    stripes.add_argument(
        "--mode", default=None, choices=[x.value for x in FillVariantMode], help="塗りモード"
    )
    stripes.add_argument("--stripes", type=int, default=None, help="ストライプ本数")

    args = p.parse_args(argv)
    if args.seed is None:
        args.seed = StormParams().seed if args.command == "storm" else StripeParams().seed
    return args


__all__ = ["main"]
