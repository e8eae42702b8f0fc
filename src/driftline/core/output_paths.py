# どこで: `src/driftline/core/output_paths.py`。
# 何を: スケッチの出力ファイル名（seed や主要パラメータを埋め込む）から保存先パスを決める。
# なぜ: `output/{kind}/` 配下に、同じパラメータなら同じファイル名で整理して保存するため。

from __future__ import annotations

import re
from pathlib import Path

from driftline.core.runtime_config import output_root_dir


def sanitize_stem(stem: str) -> str:
    """ファイル名の一部として使えない文字を `_` に置き換えて返す。"""
    return re.sub(r"[^A-Za-z0-9._-]+", "_", str(stem).strip())


def output_path_for(
    stem: str,
    *,
    ext: str,
    kind: str | None = None,
) -> Path:
    """`output_root/{kind}/{stem}.{ext}` を返す。

    Parameters
    ----------
    stem : str
        拡張子を除いたファイル名。
    ext : str
        拡張子（先頭の `.` は省略可）。
    kind : str or None, optional
        サブディレクトリ名。None の場合は ext を使う。

    Raises
    ------
    ValueError
        ext または stem が空の場合。
    """
    ext_norm = str(ext).lstrip(".").strip().lower()
    if not ext_norm:
        raise ValueError("ext は空でない必要がある")
    clean = sanitize_stem(stem)
    if not clean:
        raise ValueError("stem は空でない必要がある")
    return output_root_dir() / str(kind or ext_norm) / f"{clean}.{ext_norm}"


__all__ = ["output_path_for", "sanitize_stem"]
