"""
どこで: `engine.picking` のレイ–OBB 交差判定。
何を: ローカル空間の AABB をモデル行列で配置した有向ボックスに対し、スラブ法で交差と距離を求める。
なぜ: モデル行列の逆行列を取らず、ワールド空間のボックス軸へレイを射影するだけで判定できるため。

スラブ法（各軸 a ∈ {X, Y, Z}）:
- `delta = box_origin - ray_origin`, `e = dot(axis, delta)`, `f = dot(direction, axis)`。
- `|f| > epsilon`: `t1 = (e + min_a) / f`, `t2 = (e + max_a) / f` を整列し、区間
  `[t_min, t_max]` を狭める。空になった時点で非交差（残りの軸は見ない）。
- `|f| <= epsilon`（スラブ面と平行）: レイ原点のローカル座標 `-e` がスラブ外なら非交差。

軸の正規化:
- モデル行列の基底列はスケールを含み得る。既定では軸を正規化し、min/max に軸長を掛ける。
  これで epsilon 判定がスケールに依存せず、返す距離もワールド単位になる。
- 軸長 0（潰れたスケール）のボックスはヒットしない。
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

import numpy as np

from common import settings as _settings
from common.errors import InvalidBoundingBoxError
from common.types import Mat4Like, Vec3Like
from engine.core.transforms import as_mat4, as_vec3

from .ray import Ray

logger = logging.getLogger(__name__)

_MISS: tuple[bool, float] = (False, math.inf)


def validate_box(box_min: Vec3Like, box_max: Vec3Like) -> tuple[np.ndarray, np.ndarray]:
    """min/max 角を `float64 (3,)` へ正規化し、成分ごとに min <= max を検証する。"""
    try:
        lo = as_vec3(box_min, "box_min")
        hi = as_vec3(box_max, "box_max")
    except ValueError as e:
        raise InvalidBoundingBoxError(str(e)) from e
    if not (np.all(np.isfinite(lo)) and np.all(np.isfinite(hi))):
        raise InvalidBoundingBoxError("bounding box に非有限値が含まれています。")
    if np.any(lo > hi):
        raise InvalidBoundingBoxError(f"bounding box の min > max です: min={lo}, max={hi}")
    return lo, hi


@dataclass(frozen=True, eq=False)
class BoundingBox:
    """ローカル空間の軸平行ボックス（min <= max を生成時に検証）。"""

    min_corner: np.ndarray
    max_corner: np.ndarray

    def __post_init__(self) -> None:
        lo, hi = validate_box(self.min_corner, self.max_corner)
        # 呼び出し側の配列を凍結しないようコピーしてから読み取り専用にする
        lo, hi = lo.copy(), hi.copy()
        lo.setflags(write=False)
        hi.setflags(write=False)
        object.__setattr__(self, "min_corner", lo)
        object.__setattr__(self, "max_corner", hi)

    @classmethod
    def cube(cls, half_extent: float = 0.5) -> "BoundingBox":
        """原点中心の立方体 `[-h, h]^3`。"""
        h = float(half_extent)
        return cls(np.array([-h, -h, -h]), np.array([h, h, h]))

    @property
    def center(self) -> np.ndarray:
        return (self.min_corner + self.max_corner) * 0.5

    @property
    def size(self) -> np.ndarray:
        return self.max_corner - self.min_corner

    def corners(self, model_matrix: Mat4Like | None = None) -> np.ndarray:
        """8 頂点 `(8, 3)` を返す。`model_matrix` 指定時はワールド空間へ変換する。"""
        lo, hi = self.min_corner, self.max_corner
        pts = np.array(
            [[x, y, z] for x in (lo[0], hi[0]) for y in (lo[1], hi[1]) for z in (lo[2], hi[2])],
            dtype=np.float64,
        )
        if model_matrix is None:
            return pts
        M = as_mat4(model_matrix, "model_matrix")
        return pts @ M[:3, :3].T + M[:3, 3]


def intersect(
    ray_origin: Vec3Like,
    ray_direction: Vec3Like,
    box_min: Vec3Like,
    box_max: Vec3Like,
    model_matrix: Mat4Like,
    *,
    epsilon: float | None = None,
    max_distance: float | None = None,
    normalize_axes: bool | None = None,
) -> tuple[bool, float]:
    """ワールド空間のレイと有向ボックスの交差を判定する。

    Parameters
    ----------
    ray_origin : Vec3Like
        レイ原点（ワールド空間）。
    ray_direction : Vec3Like
        レイ方向。単位長でなければ正規化してから使う。
    box_min, box_max : Vec3Like
        変換前（ローカル空間）のボックス角。
    model_matrix : Mat4Like
        ボックスをワールドへ配置する 4x4 アフィン行列。
    epsilon : float | None
        平行判定の閾値。`None` なら設定値 `PICK_EPSILON`（既定 0.001）。
    max_distance : float | None
        `t_max` の初期値。`None` なら設定値 `PICK_MAX_DISTANCE`（既定 100000）。
    normalize_axes : bool | None
        基底列を正規化するか。`None` なら設定値 `PICK_NORMALIZE_AXES`（既定 True）。

    Returns
    -------
    tuple[bool, float]
        `(hit, distance)`。非交差時は `(False, inf)`。原点がボックス内なら距離 0。

    Raises
    ------
    InvalidBoundingBoxError
        min > max などボックスが不正な場合。
    ValueError
        方向が長さ 0、原点/モデル行列に非有限値を含む、または行列/ベクトルの形状が不正な場合。
    """
    cfg = _settings.get()
    eps = cfg.PICK_EPSILON if epsilon is None else float(epsilon)
    t_max = cfg.PICK_MAX_DISTANCE if max_distance is None else float(max_distance)
    normalize = cfg.PICK_NORMALIZE_AXES if normalize_axes is None else bool(normalize_axes)

    lo, hi = validate_box(box_min, box_max)
    origin = as_vec3(ray_origin, "ray_origin")
    if not np.all(np.isfinite(origin)):
        raise ValueError(f"ray_origin に非有限値が含まれています: {origin}")
    direction = as_vec3(ray_direction, "ray_direction")
    dn = float(np.linalg.norm(direction))
    if dn == 0.0 or not math.isfinite(dn):
        raise ValueError("ray_direction の長さが 0 または非有限です。")
    if dn != 1.0:
        direction = direction / dn
    M = as_mat4(model_matrix, "model_matrix")
    # NaN は比較がすべて偽になり、距離 0 のヒットに化けるため先に弾く
    if not np.all(np.isfinite(M)):
        raise ValueError("model_matrix に非有限値が含まれています。")

    t_min = 0.0
    delta = M[:3, 3] - origin

    for a in range(3):
        axis = M[:3, a]
        lo_a = float(lo[a])
        hi_a = float(hi[a])
        if normalize:
            length = float(np.linalg.norm(axis))
            if length == 0.0:
                logger.debug("zero-length box axis %d; treating as miss", a)
                return _MISS
            axis = axis / length
            lo_a *= length
            hi_a *= length

        e = float(np.dot(axis, delta))
        f = float(np.dot(direction, axis))

        if abs(f) > eps:
            t1 = (e + lo_a) / f
            t2 = (e + hi_a) / f
            if t1 > t2:
                t1, t2 = t2, t1
            if t2 < t_max:
                t_max = t2
            if t1 > t_min:
                t_min = t1
            if t_max < t_min:
                return _MISS
        else:
            # レイ原点のローカル座標は -e。スラブ [lo, hi] の外なら交差しない
            if e + lo_a > 0.0 or e + hi_a < 0.0:
                return _MISS

    return True, t_min


def intersect_box(
    ray: Ray,
    box: BoundingBox,
    model_matrix: Mat4Like,
    **kwargs: float | bool | None,
) -> tuple[bool, float]:
    """`Ray`/`BoundingBox` を受け取る `intersect()` の薄いラッパ。"""
    return intersect(
        ray.origin, ray.direction, box.min_corner, box.max_corner, model_matrix, **kwargs  # type: ignore[arg-type]
    )


__all__ = ["BoundingBox", "validate_box", "intersect", "intersect_box"]
