"""
どこで: `common.errors`。
何を: ピッキング処理が送出する例外階層を定義する。
なぜ: 呼び出し側が `PickingError` 一つで捕捉でき、かつ `ValueError`/`ArithmeticError`
としても扱えるよう、組込み例外との多重継承で表現するため。
"""

from __future__ import annotations


class PickingError(Exception):
    """ピッキング系の全例外の基底。"""


class InvalidViewportError(PickingError, ValueError):
    """ビューポート幅/高さが正でない場合に送出される例外。"""


class InvalidBoundingBoxError(PickingError, ValueError):
    """バウンディングボックスの min/max が不正（min > max 等）な場合に送出される例外。"""


class SingularMatrixError(PickingError, ArithmeticError):
    """行列が特異で逆行列/逆射影が定義できない場合に送出される例外。"""


__all__ = [
    "PickingError",
    "InvalidViewportError",
    "InvalidBoundingBoxError",
    "SingularMatrixError",
]
