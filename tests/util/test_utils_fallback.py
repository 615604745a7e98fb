from __future__ import annotations

from pathlib import Path

import pytest

from util.utils import _find_project_root, _safe_load_yaml, load_config


def test_find_project_root_fallback(tmp_path: Path) -> None:
    # tmp_path/a/b のような構造（上流に .git/pyproject.toml/configs が無い）では
    # フォールバックで start.parent.parent を返す
    a = tmp_path / "a" / "b"
    a.mkdir(parents=True)
    start = a
    got = _find_project_root(start)
    assert got == start.parent.parent


def test_load_config_explicit_path(tmp_path: Path) -> None:
    p = tmp_path / "scene.yaml"
    p.write_text("viewport:\n  width: 100\n  height: 50\n", encoding="utf-8")
    assert load_config(p) == {"viewport": {"width": 100, "height": 50}}


@pytest.mark.parametrize("text", ["viewport: [unclosed\n", "- 1\n- 2\n", "", "# comment only\n"])
def test_load_config_explicit_invalid_raises(tmp_path: Path, text: str) -> None:
    # 明示指定のファイルは不正/空でも空辞書に落とさない
    p = tmp_path / "broken.yaml"
    p.write_text(text, encoding="utf-8")
    with pytest.raises(ValueError):
        load_config(p)


def test_load_config_missing_explicit_path_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "nope.yaml")


def test_default_search_loader_is_fail_soft(tmp_path: Path) -> None:
    # 既定の探索（configs/default.yaml, config.yaml）は不正ファイルを空扱いにする
    p = tmp_path / "config.yaml"
    p.write_text("viewport: [unclosed\n", encoding="utf-8")
    assert _safe_load_yaml(p) == {}
    p.write_text("- 1\n", encoding="utf-8")
    assert _safe_load_yaml(p) == {}
    assert _safe_load_yaml(tmp_path / "missing.yaml") == {}
