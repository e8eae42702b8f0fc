"""`python -m driftline` コマンドラインのテスト。"""

from __future__ import annotations

from pathlib import Path

import pytest

from driftline.cli import main
from driftline.core.realize import realize_cache
from driftline.core.runtime_config import set_config_path


@pytest.fixture(autouse=True)
def _isolated(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    set_config_path(None)
    realize_cache.clear()
    yield
    set_config_path(None)


def test_storm_command_writes_default_path(tmp_path: Path) -> None:
    assert main(["storm", "--layers", "2", "--canvas", "200", "300"]) == 0
    assert (tmp_path / "data/output/svg/noise_storm_s42_n24_nf3.50_t1.20.svg").is_file()


def test_storm_keys_are_applied_in_order(tmp_path: Path) -> None:
    assert main(["storm", "--layers", "1", "--keys", "]]=", "--seed", "8"]) == 0
    assert (tmp_path / "data/output/svg/noise_storm_s8_n24_nf3.90_t1.30.svg").is_file()


def test_stripes_command_with_explicit_output(tmp_path: Path) -> None:
    out = tmp_path / "stripes.svg"
    rc = main(
        [
            "stripes",
            "--palette",
            "oceanic",
            "--mode",
            "hatch",
            "--stripes",
            "18",
            "--canvas",
            "120",
            "90",
            "--out",
            str(out),
        ]
    )
    assert rc == 0
    assert out.is_file()
    assert "#003B46" in out.read_text(encoding="utf-8")


def test_explicit_config_sets_output_dir(tmp_path: Path) -> None:
    cfg = tmp_path / "cfg.yaml"
    cfg.write_text("paths:\n  output_dir: renders\ncanvas:\n  size: [100, 100]\n", encoding="utf-8")
    assert main(["stripes", "--stripes", "18", "--mode", "solid", "--config", str(cfg)]) == 0
    assert (tmp_path / "renders/svg/split_stripes_123456_muted_paper_solid.svg").is_file()


def test_unknown_subcommand_exits() -> None:
    with pytest.raises(SystemExit):
        main(["waves"])
