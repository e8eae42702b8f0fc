# どこで: `src/driftline/core/font_resolver.py`。
# 何を: ラベル描画用フォントの探索・解決を提供する。
# なぜ: フォントはユーザー環境に依存するため、config.yaml の `font_dirs` から見つけられるようにするため。

from __future__ import annotations

from pathlib import Path

from driftline.core.runtime_config import runtime_config

_FONT_EXTENSIONS = (".ttf", ".otf", ".ttc")
_FONT_FILES_CACHE: dict[tuple[str, ...], tuple[Path, ...]] = {}


def _search_dirs() -> tuple[Path, ...]:
    return tuple(Path(d).expanduser() for d in runtime_config().font_dirs)


def _list_font_files(dirs: tuple[Path, ...]) -> tuple[Path, ...]:
    key = tuple(str(d) for d in dirs)
    cached = _FONT_FILES_CACHE.get(key)
    if cached is not None:
        return cached

    found: set[Path] = set()
    for root in dirs:
        if not root.is_dir():
            continue
        for ext in _FONT_EXTENSIONS:
            for fp in root.glob(f"**/*{ext}"):
                if fp.is_file():
                    found.add(fp.resolve())

    out = tuple(sorted(found))
    _FONT_FILES_CACHE[key] = out
    return out


def clear_font_cache() -> None:
    """フォント一覧のキャッシュを破棄する。"""
    _FONT_FILES_CACHE.clear()


def resolve_font_path(font: str) -> Path:
    """`font` 指定（実在パス / ファイル名 / 部分一致）を実体ファイルへ解決して返す。

    空文字の場合は探索ディレクトリ内で最初に見つかったフォントを返す。

    Raises
    ------
    FileNotFoundError
        どの探索でもフォントが見つからない場合。
    """
    raw = str(font).strip()

    if raw:
        direct = Path(raw).expanduser()
        if direct.is_file():
            return direct.resolve()

    dirs = _search_dirs()
    if raw:
        for d in dirs:
            fp = d / raw
            if fp.is_file():
                return fp.resolve()

    files = _list_font_files(dirs)
    if not raw and files:
        return files[0]

    key = raw.lower().replace(" ", "")
    for fp in files:
        if key and key in fp.name.lower().replace(" ", ""):
            return fp

    searched = ", ".join(str(d) for d in dirs) if dirs else "(none)"
    raise FileNotFoundError(
        f"フォントが見つかりません: font={raw!r}, searched_dirs={searched}"
        "（config.yaml の paths.font_dirs を設定してください）"
    )


__all__ = ["clear_font_cache", "resolve_font_path"]
