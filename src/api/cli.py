"""
どこで: `api.cli`（console script `raypick`）。
何を: シーン構成を読み込み、指定ピクセルでレイピッキングを 1 回行って結果を表示する。
なぜ: ウィンドウを開かずにシーン定義とピッキング結果を確認できるようにするため。

使用例:
    raypick 320 240
    raypick 100 50 --window-coords --config configs/default.yaml --log-level DEBUG
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Sequence

from common import settings as _settings
from common.errors import PickingError
from common.logging import setup_default_logging
from util.utils import load_config

from .scene import SceneConfigError, demo_session, session_from_config
from .session import PickingSession

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="raypick",
        description="Pick the nearest bounding box under a pointer position.",
    )
    p.add_argument("x", type=float, help="pointer x in pixels")
    p.add_argument("y", type=float, help="pointer y in pixels (bottom-left origin)")
    p.add_argument("--config", default=None, help="scene YAML (default: configs/default.yaml)")
    p.add_argument(
        "--window-coords",
        action="store_true",
        help="treat y as window coordinates (top-left origin)",
    )
    p.add_argument("--log-level", default=None, help="logging level (default: RPK_LOG_LEVEL)")
    return p


def _load_session(path: str | None) -> PickingSession:
    """構成からセッションを作る。既定の探索で何も無ければデモシーン。"""
    try:
        config = load_config(path)
    except ValueError as e:
        raise SceneConfigError(str(e)) from e
    if path is None and not config:
        return demo_session()
    return session_from_config(config)


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_default_logging(args.log_level or _settings.get().LOG_LEVEL)

    try:
        session = _load_session(args.config)
        if args.window_coords:
            session.on_cursor_move(args.x, args.y)
        else:
            session.set_pointer(args.x, args.y)
        result = session.click()
    except (PickingError, SceneConfigError, OSError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    if result is None:
        print("picked: none")
    else:
        print(f"picked: {result.id} distance={result.distance:.4f}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
