"""runtime_config の探索・マージ・検証のテスト。"""

from __future__ import annotations

from pathlib import Path

import pytest

from driftline.core.runtime_config import output_root_dir, runtime_config, set_config_path


@pytest.fixture(autouse=True)
def _isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    set_config_path(None)
    yield
    set_config_path(None)


def test_packaged_defaults() -> None:
    cfg = runtime_config()
    assert cfg.config_path is None
    assert cfg.output_dir == Path("data/output")
    assert cfg.canvas_size == (600, 800)
    assert cfg.png_scale == 2.0
    assert cfg.font_dirs == (Path("data/input/font"),)
    assert cfg.resvg == "resvg"
    assert output_root_dir() == Path("data/output")


def test_discovered_config_overrides_defaults(tmp_path: Path) -> None:
    cfg_dir = tmp_path / ".driftline"
    cfg_dir.mkdir()
    (cfg_dir / "config.yaml").write_text(
        "canvas:\n  size: [300, 400]\n", encoding="utf-8"
    )
    cfg = runtime_config()
    assert cfg.config_path == cfg_dir / "config.yaml"
    assert cfg.canvas_size == (300, 400)
    # 上書きしていないキーは同梱既定値のまま。
    assert cfg.png_scale == 2.0


def test_explicit_config_wins(tmp_path: Path) -> None:
    cfg_dir = tmp_path / ".driftline"
    cfg_dir.mkdir()
    (cfg_dir / "config.yaml").write_text("export:\n  png:\n    scale: 3\n", encoding="utf-8")
    explicit = tmp_path / "explicit.yaml"
    explicit.write_text(
        "paths:\n  output_dir: out\nexport:\n  png:\n    scale: 1.5\n", encoding="utf-8"
    )

    set_config_path(explicit)
    cfg = runtime_config()
    assert cfg.config_path == explicit
    assert cfg.output_dir == Path("out")
    assert cfg.png_scale == 1.5


def test_result_is_cached_until_path_changes(tmp_path: Path) -> None:
    first = runtime_config()
    assert runtime_config() is first
    set_config_path(None)
    assert runtime_config() is not first


def test_missing_explicit_path_raises(tmp_path: Path) -> None:
    set_config_path(tmp_path / "nope.yaml")
    with pytest.raises(FileNotFoundError):
        runtime_config()


@pytest.mark.parametrize(
    "text",
    [
        "version: 2\n",
        "canvas:\n  size: [0, 100]\n",
        "canvas:\n  size: 12\n",
        "export:\n  png:\n    scale: -1\n",
        "- not\n- a mapping\n",
    ],
)
def test_invalid_config_raises(tmp_path: Path, text: str) -> None:
    p = tmp_path / "bad.yaml"
    p.write_text(text, encoding="utf-8")
    set_config_path(p)
    with pytest.raises(RuntimeError):
        runtime_config()
