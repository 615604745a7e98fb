"""
どこで: `common` パッケージ。
何を: 例外階層・環境設定・ロギングなど、engine/api 双方で使う軽量基盤。
なぜ: 数値コアと API 層の共通基盤を分離し、依存の向きを単純化するため。
"""

from .errors import (
    InvalidBoundingBoxError,
    InvalidViewportError,
    PickingError,
    SingularMatrixError,
)

__all__ = [
    "PickingError",
    "InvalidViewportError",
    "InvalidBoundingBoxError",
    "SingularMatrixError",
]
