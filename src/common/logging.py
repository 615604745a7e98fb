"""
プロジェクト向けの軽量ロギングユーティリティ。

要点:
- 既定では各モジュールが `logging.getLogger(__name__)` でロガーを取得する。
- コア（engine.picking）はハンドラを設定しない。CLI/アプリ側が 1 度だけ本ヘルパを呼ぶ。
"""

from __future__ import annotations

import logging


def resolve_level(level: int | str) -> int:
    """`"debug"` や `10` のようなレベル指定を logging の整数値へ変換する。"""
    if isinstance(level, str):
        lvl = getattr(logging, level.upper(), None)
        return lvl if isinstance(lvl, int) else logging.INFO
    return int(level)


def setup_default_logging(level: int | str = "INFO") -> None:
    """最小限のロギング設定を 1 度だけ適用する。

    - ルートロガーにハンドラが既にあれば何もしない（no-op）
    - 上位のランナー/CLI から呼び出す想定
    """
    lvl = resolve_level(level)

    root = logging.getLogger()
    if root.handlers:
        # Assume the app has configured logging
        return
    logging.basicConfig(
        level=lvl,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


__all__ = ["setup_default_logging", "resolve_level"]
