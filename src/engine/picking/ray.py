"""
どこで: `engine.picking` のレイ生成。
何を: 画面上のポインタ位置とカメラ行列からワールド空間のレイ（原点 + 単位方向）を逆射影で求める。
なぜ: ピッキングの入口を 1 関数に集約し、ビューポート/特異行列の検証を一箇所で行うため。

アルゴリズム:
1. ピクセル座標を NDC へ: `ndc = (pixel / dimension - 0.5) * 2`（x, y 独立）。
2. 同じ NDC x/y で near 面（z=-1）と far 面（z=+1）の同次座標点を作る（w=1）。
3. `inv(projection @ view)` を 1 回だけ計算し、両点を変換して w で除算。
4. 原点 = near 面上の点、方向 = normalize(far - near)。
"""

from __future__ import annotations

import math
from typing import NamedTuple

import numpy as np

from common.errors import InvalidViewportError, SingularMatrixError
from common.types import Mat4Like
from engine.core.transforms import as_mat4, invert

# w 除算を許容する下限（これ以下は無限遠点とみなす）
_W_EPS = 1e-12


class Ray(NamedTuple):
    """ワールド空間のレイ。`origin, direction = ray` で分解できる値型。"""

    origin: np.ndarray
    direction: np.ndarray

    def point_at(self, t: float) -> np.ndarray:
        return self.origin + float(t) * self.direction


def to_ndc(pointer: float, dimension: float) -> float:
    """ピクセル座標を [-1, 1] の NDC へ写す。"""
    return (float(pointer) / float(dimension) - 0.5) * 2.0


def validate_viewport(width: float, height: float) -> None:
    """ビューポート幅/高さが正の有限値であることを検証する。"""
    for name, v in (("width", width), ("height", height)):
        try:
            fv = float(v)
        except (TypeError, ValueError) as e:
            raise InvalidViewportError(f"viewport {name} が数値ではありません: {v!r}") from e
        if not math.isfinite(fv) or fv <= 0.0:
            raise InvalidViewportError(f"viewport {name} は正である必要があります: {v!r}")


def unproject(
    pointer_x: float,
    pointer_y: float,
    viewport_width: int,
    viewport_height: int,
    view_matrix: Mat4Like,
    projection_matrix: Mat4Like,
) -> Ray:
    """ポインタ位置をワールド空間のレイへ逆射影する。

    Parameters
    ----------
    pointer_x, pointer_y : float
        ポインタ位置（ピクセル、ウィンドウ左下原点）。
    viewport_width, viewport_height : int
        ビューポートの大きさ（ピクセル、正）。
    view_matrix : Mat4Like
        world→camera の 4x4 行列。
    projection_matrix : Mat4Like
        camera→clip の 4x4 行列。

    Returns
    -------
    Ray
        原点は near 面上の点（カメラ位置ではない）、方向は単位ベクトル。

    Raises
    ------
    InvalidViewportError
        幅/高さが正でない場合。
    SingularMatrixError
        `projection @ view` が特異、または逆射影の結果が退化した場合。
    """
    validate_viewport(viewport_width, viewport_height)
    ndc_x = to_ndc(pointer_x, viewport_width)
    ndc_y = to_ndc(pointer_y, viewport_height)

    # 列 0 = near 面, 列 1 = far 面
    ndc = np.array(
        [
            [ndc_x, ndc_x],
            [ndc_y, ndc_y],
            [-1.0, 1.0],
            [1.0, 1.0],
        ],
        dtype=np.float64,
    )

    # 因子ごとではなく積を 1 回だけ反転する
    pv = as_mat4(projection_matrix, "projection_matrix") @ as_mat4(view_matrix, "view_matrix")
    inv_pv = invert(pv)

    world_h = inv_pv @ ndc
    w = world_h[3]
    if np.any(np.abs(w) <= _W_EPS):
        raise SingularMatrixError("逆射影の w 成分が 0 です（無限遠点）。")
    world = world_h[:3] / w
    start = world[:, 0]
    end = world[:, 1]

    d = end - start
    n = float(np.linalg.norm(d))
    if not math.isfinite(n) or n == 0.0:
        raise SingularMatrixError("near/far 点が一致し、レイ方向を決定できません。")
    return Ray(origin=start.copy(), direction=d / n)


__all__ = ["Ray", "to_ndc", "validate_viewport", "unproject"]
