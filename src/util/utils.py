"""
どこで: `util.utils`。
何を: YAML のシーン構成読み込みとプロジェクトルート推定。
なぜ: ビューポート/カメラ/ピック対象の定義をコード外に置き、CLI/セッション生成で共有するため。
"""

from pathlib import Path
from typing import Any, Dict

import yaml


def _safe_load_yaml(path: Path) -> Dict[str, Any]:
    try:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError):
        return {}
    return data if isinstance(data, dict) else {}


def _load_yaml_strict(path: Path) -> Dict[str, Any]:
    """明示指定のファイルを読む。構文エラー/空/mapping 以外は `ValueError`。"""
    try:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(f"config is not valid YAML: {path}: {e}") from e
    if not isinstance(data, dict):
        raise ValueError(f"config must be a mapping: {path} (got {type(data).__name__})")
    return data


def _find_project_root(start: Path) -> Path:
    """プロジェクトルートを推定して返す。

    - `src/` 配下から呼ばれることを想定し、上位に `.git` や `pyproject.toml`、`configs/` がある
      もっとも近いディレクトリを返す。
    - 見つからない場合は `start.parent.parent` をフォールバックとして返す。
    """
    cur = start.resolve()
    for parent in [cur] + list(cur.parents):
        if (
            (parent / ".git").exists()
            or (parent / "pyproject.toml").exists()
            or (parent / "configs").exists()
        ):
            return parent
    # 典型: <repo>/src/util/utils.py -> <repo>
    return cur.parent.parent


def load_config(path: str | Path | None = None) -> Dict[str, Any]:
    """構成を読み込んで辞書で返す（フェイルソフト）。

    `path` 指定時:
    - そのファイルのみを読む。明示指定の誤りは隠さない:
      存在しない場合は `FileNotFoundError`、YAML 不正/空/mapping 以外は `ValueError`。

    `path` 未指定時の優先順:
    1) `configs/default.yaml`（ベース）
    2) ルート `config.yaml`（ベースに上書き）

    - いずれも存在しない/不正な場合は空辞書を返す（既定の探索のみフェイルソフト）。
    - ネストした辞書のディープマージは行わず、トップレベルのみ上書き。
    """
    if path is not None:
        p = Path(path)
        if not p.exists():
            raise FileNotFoundError(f"config not found: {p}")
        return _load_yaml_strict(p)

    project_root = _find_project_root(Path(__file__).parent)
    base: Dict[str, Any] = {}

    default_path = project_root / "configs" / "default.yaml"
    if default_path.exists():
        base.update(_safe_load_yaml(default_path))

    root_config_path = project_root / "config.yaml"
    if root_config_path.exists():
        base.update(_safe_load_yaml(root_config_path))

    return base
