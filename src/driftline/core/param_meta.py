# どこで: `src/driftline/core/param_meta.py`。
# 何を: ParamMeta（引数の型とレンジ）と、それを使ったクランプ関数を提供する。
# なぜ: パラメータ編集の境界で範囲外の値を丸め、コアへ不正値を流さないため。

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Sequence


@dataclass(frozen=True, slots=True)
class ParamMeta:
    """パラメータの型とレンジ。

    `clamp_value` は min/max が与えられた数値だけを丸める。
    """

    kind: str  # "float" | "int" | "bool" | "str" | "choice" | "vec2" | "int3" | "rgb" | "mapping"
    min: Any | None = None
    max: Any | None = None
    choices: Sequence[str] | None = None


def clamp_value(meta: ParamMeta, value: Any) -> Any:
    """meta のレンジに従って value をクランプして返す。

    Parameters
    ----------
    meta : ParamMeta
        レンジ情報。
    value : Any
        入力値。

    Returns
    -------
    Any
        int/float はレンジ内へ丸めた値、それ以外はそのまま。
        NaN は min（無ければ max、どちらも無ければ 0）に置き換える。
    """
    if meta.kind not in ("int", "float"):
        return value

    v = float(value)
    if math.isnan(v):
        v = next((float(b) for b in (meta.min, meta.max) if b is not None), 0.0)
    if meta.min is not None and v < meta.min:
        v = float(meta.min)
    if meta.max is not None and v > meta.max:
        v = float(meta.max)
    if meta.kind == "int":
        # 上下限の無い側の inf はそのまま int にできない。
        if math.isinf(v):
            raise ValueError(f"int パラメータに無限大は使えない: {value!r}")
        return int(round(v))
    return v


__all__ = ["ParamMeta", "clamp_value"]
