# どこで: `src/driftline/core/runtime_config.py`。
# 何を: config.yaml による実行時設定（探索・ロード・キャッシュ）を提供する。
# なぜ: 出力先・フォント探索先・キャンバス寸法をスケッチのコード外から指定できるようにするため。

from __future__ import annotations

import os
from dataclasses import dataclass
from importlib import resources
from pathlib import Path
from typing import Any

import yaml


@dataclass(frozen=True, slots=True)
class RuntimeConfig:
    """driftline の実行時設定。"""

    config_path: Path | None
    output_dir: Path
    font_dirs: tuple[Path, ...]
    canvas_size: tuple[int, int]
    png_scale: float
    resvg: str


_EXPLICIT_CONFIG_PATH: Path | None = None
_CONFIG_CACHE: RuntimeConfig | None = None


def set_config_path(path: str | Path | None) -> None:
    """以降の設定探索で使う明示 config パスを設定する。

    Notes
    -----
    `path` を None にすると明示指定を解除し、既定の探索に戻る。
    どちらの場合もキャッシュは破棄する。
    """
    global _EXPLICIT_CONFIG_PATH, _CONFIG_CACHE
    _EXPLICIT_CONFIG_PATH = None if path is None else Path(str(path)).expanduser()
    _CONFIG_CACHE = None


def _default_config_candidates() -> tuple[Path, ...]:
    return (
        Path.cwd() / ".driftline" / "config.yaml",
        Path.home() / ".config" / "driftline" / "config.yaml",
    )


def _as_path(value: Any) -> Path | None:
    if value is None:
        return None
    s = str(value).strip()
    if not s:
        return None
    return Path(os.path.expandvars(os.path.expanduser(s)))


def _as_path_list(value: Any) -> list[Path]:
    if value is None:
        return []
    if isinstance(value, str):
        items: list[Any] = [p for p in value.split(os.pathsep) if p]
    else:
        items = list(value)
    return [p for p in (_as_path(v) for v in items) if p is not None]


def _as_mapping(value: Any, *, key: str) -> dict[str, Any]:
    if value is None:
        return {}
    if isinstance(value, dict):
        return dict(value)
    raise RuntimeError(f"{key} は mapping である必要があります: got={value!r}")


def _as_int_pair(value: Any, *, key: str) -> tuple[int, int]:
    try:
        a, b = value
        return int(a), int(b)
    except Exception as exc:
        raise RuntimeError(f"{key} は [w, h] の整数配列である必要があります: got={value!r}") from exc


def _load_yaml_text(text: str, *, source: str) -> dict[str, Any]:
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise RuntimeError(f"config.yaml の読み込みに失敗しました: source={source}") from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise RuntimeError(f"config.yaml は mapping である必要があります: source={source}")
    return dict(data)


def _load_packaged_default_config() -> dict[str, Any]:
    blob = (
        resources.files("driftline")
        .joinpath("resource", "default_config.yaml")
        .read_text(encoding="utf-8")
    )
    return _load_yaml_text(blob, source="driftline/resource/default_config.yaml")


def _merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """mapping を 1 段ずつ再帰的に上書きマージする。"""
    out = dict(base)
    for k, v in override.items():
        if isinstance(v, dict) and isinstance(out.get(k), dict):
            out[k] = _merge(out[k], v)
        else:
            out[k] = v
    return out


def runtime_config() -> RuntimeConfig:
    """実行時設定をロードして返す（キャッシュ）。

    上書き順（後勝ち）:
    1) 同梱 default_config.yaml
    2) `./.driftline/config.yaml` または `~/.config/driftline/config.yaml`
    3) `set_config_path(...)` で指定したパス

    Raises
    ------
    FileNotFoundError
        明示パスが存在しない場合。
    RuntimeError
        YAML の構造や値が不正な場合。
    """
    global _CONFIG_CACHE
    if _CONFIG_CACHE is not None:
        return _CONFIG_CACHE

    explicit_path = _EXPLICIT_CONFIG_PATH
    if explicit_path is not None and not explicit_path.is_file():
        raise FileNotFoundError(f"config.yaml が見つかりません: {explicit_path}")

    discovered_path = next((p for p in _default_config_candidates() if p.is_file()), None)

    payload = _load_packaged_default_config()
    for p in (discovered_path, explicit_path):
        if p is not None:
            payload = _merge(payload, _load_yaml_text(p.read_text(encoding="utf-8"), source=str(p)))

    try:
        version = int(payload.get("version"))  # type: ignore[arg-type]
    except Exception as exc:
        raise RuntimeError(f"config.yaml の version は整数である必要があります: got={payload.get('version')!r}") from exc
    if version != 1:
        raise RuntimeError(f"未対応の config.yaml version です: got={version}")

    paths = _as_mapping(payload.get("paths"), key="paths")
    output_dir = _as_path(paths.get("output_dir"))
    if output_dir is None:
        raise RuntimeError("paths.output_dir が未設定です")

    canvas = _as_mapping(payload.get("canvas"), key="canvas")
    canvas_size = _as_int_pair(canvas.get("size"), key="canvas.size")
    if canvas_size[0] <= 0 or canvas_size[1] <= 0:
        raise RuntimeError(f"canvas.size は正の値である必要があります: got={canvas_size}")

    png = _as_mapping(_as_mapping(payload.get("export"), key="export").get("png"), key="export.png")
    try:
        png_scale = float(png.get("scale"))  # type: ignore[arg-type]
    except Exception as exc:
        raise RuntimeError(f"export.png.scale は数値である必要があります: got={png.get('scale')!r}") from exc
    if png_scale <= 0:
        raise RuntimeError(f"export.png.scale は正の値である必要があります: got={png_scale}")
    resvg = str(png.get("resvg") or "").strip()
    if not resvg:
        raise RuntimeError("export.png.resvg が未設定です")

    _CONFIG_CACHE = RuntimeConfig(
        config_path=explicit_path or discovered_path,
        output_dir=output_dir,
        font_dirs=tuple(_as_path_list(paths.get("font_dirs"))),
        canvas_size=canvas_size,
        png_scale=png_scale,
        resvg=resvg,
    )
    return _CONFIG_CACHE


def output_root_dir() -> Path:
    """出力ファイルを保存する既定ルートディレクトリを返す。"""
    return Path(runtime_config().output_dir)


__all__ = ["RuntimeConfig", "output_root_dir", "runtime_config", "set_config_path"]
