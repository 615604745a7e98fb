"""
どこで: `common.settings`
何を: ピッキング関連の環境変数を型付きで一元管理し、起動時に読み込む。
なぜ: `os.getenv` の散在を解消し、既定値/型の一貫性とテスト容易性を高めるため。
"""

from __future__ import annotations

from dataclasses import dataclass

from .env import env_bool, env_float, env_str

DEFAULT_PICK_EPSILON = 1e-3
DEFAULT_PICK_MAX_DISTANCE = 100_000.0
DEFAULT_SINGULAR_TOLERANCE = 1e-12


@dataclass
class _Settings:
    # スラブ判定
    PICK_EPSILON: float = DEFAULT_PICK_EPSILON
    PICK_MAX_DISTANCE: float = DEFAULT_PICK_MAX_DISTANCE
    PICK_NORMALIZE_AXES: bool = True

    # 逆行列
    SINGULAR_TOLERANCE: float = DEFAULT_SINGULAR_TOLERANCE

    # Misc
    LOG_LEVEL: str = "INFO"


_settings = _Settings()


def reload_from_env() -> None:
    """環境変数から設定を再読込。

    - 浮動小数は `env_float`（正値のみ許容）、bool は `env_bool` を使用。
    - 不正値は既定値へフォールバックする。
    """

    _settings.PICK_EPSILON = env_float(
        "RPK_PICK_EPSILON", DEFAULT_PICK_EPSILON, positive=True
    )
    _settings.PICK_MAX_DISTANCE = env_float(
        "RPK_PICK_MAX_DISTANCE", DEFAULT_PICK_MAX_DISTANCE, positive=True
    )
    _settings.PICK_NORMALIZE_AXES = env_bool("RPK_PICK_NORMALIZE_AXES", True)
    _settings.SINGULAR_TOLERANCE = env_float(
        "RPK_SINGULAR_TOLERANCE", DEFAULT_SINGULAR_TOLERANCE, positive=True
    )
    _settings.LOG_LEVEL = env_str("RPK_LOG_LEVEL", "INFO").upper()


def get() -> _Settings:
    """現在の設定スナップショットを返す。"""
    return _settings


# 初期ロード
reload_from_env()


__all__ = ["get", "reload_from_env", "_Settings"]
