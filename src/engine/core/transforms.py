"""
どこで: `engine.core` の 4x4 変換行列ユーティリティ。
何を: 平行移動/スケール/回転/透視投影/look_at の行列生成と、失敗し得る逆行列 `invert()`。
なぜ: カメラ/モデル行列の生成を純関数に集約し、ピッキング層から numpy 演算の詳細を隠すため。

行列の規約:
- numpy 配列 `(4, 4) float64`、`M[row, col]`、列ベクトル（`p' = M @ p`）。
- 平行移動成分は `M[:3, 3]`、基底軸 a は `M[:3, a]`（OpenGL/glm の列優先と同じ意味）。
"""

from __future__ import annotations

import math

import numpy as np

from common import settings as _settings
from common.errors import SingularMatrixError
from common.types import Mat4Like, Vec3, Vec3Like


def as_vec3(v: Vec3Like, name: str = "vector") -> np.ndarray:
    """3 要素の `float64` ベクトルへ正規化する。形状不正は `ValueError`。"""
    arr = np.asarray(v, dtype=np.float64)
    if arr.shape != (3,):
        raise ValueError(f"{name} は 3 要素である必要があります: shape={arr.shape}")
    return arr


def as_mat4(m: Mat4Like, name: str = "matrix") -> np.ndarray:
    """`(4, 4) float64` 行列へ正規化する。形状不正は `ValueError`。"""
    arr = np.asarray(m, dtype=np.float64)
    if arr.shape != (4, 4):
        raise ValueError(f"{name} は形状 (4, 4) である必要があります: shape={arr.shape}")
    return arr


def translate(dx: float, dy: float, dz: float = 0.0) -> np.ndarray:
    """平行移動行列。"""
    m = np.eye(4, dtype=np.float64)
    m[:3, 3] = (float(dx), float(dy), float(dz))
    return m


def scale(sx: float, sy: float, sz: float = 1.0) -> np.ndarray:
    """非一様スケール行列（原点中心）。"""
    return np.diag([float(sx), float(sy), float(sz), 1.0])


def rotate_x(angle_rad: float) -> np.ndarray:
    """X 軸回りの回転（右手系）。"""
    c, s = math.cos(angle_rad), math.sin(angle_rad)
    m = np.eye(4, dtype=np.float64)
    m[1, 1], m[1, 2] = c, -s
    m[2, 1], m[2, 2] = s, c
    return m


def rotate_y(angle_rad: float) -> np.ndarray:
    """Y 軸回りの回転（右手系）。"""
    c, s = math.cos(angle_rad), math.sin(angle_rad)
    m = np.eye(4, dtype=np.float64)
    m[0, 0], m[0, 2] = c, s
    m[2, 0], m[2, 2] = -s, c
    return m


def rotate_z(angle_rad: float) -> np.ndarray:
    """Z 軸回りの回転（右手系）。"""
    c, s = math.cos(angle_rad), math.sin(angle_rad)
    m = np.eye(4, dtype=np.float64)
    m[0, 0], m[0, 1] = c, -s
    m[1, 0], m[1, 1] = s, c
    return m


def rotate_xyz(rx: float, ry: float, rz: float) -> np.ndarray:
    """XYZ まとめ回転。X→Y→Z の順に適用（`Rz @ Ry @ Rx`）。"""
    return rotate_z(rz) @ rotate_y(ry) @ rotate_x(rx)


def rotate_axis(axis: Vec3Like, angle_rad: float) -> np.ndarray:
    """任意軸回りの回転（Rodrigues）。軸長 0 は `ValueError`。"""
    a = as_vec3(axis, "axis")
    na = float(np.linalg.norm(a))
    if na == 0.0:
        raise ValueError("回転軸の長さが 0 です。")
    a = a / na
    K = np.zeros((3, 3), dtype=np.float64)
    K[0, 1] = -a[2]
    K[0, 2] = a[1]
    K[1, 0] = a[2]
    K[1, 2] = -a[0]
    K[2, 0] = -a[1]
    K[2, 1] = a[0]
    R = np.eye(3) + math.sin(angle_rad) * K + (1.0 - math.cos(angle_rad)) * (K @ K)
    m = np.eye(4, dtype=np.float64)
    m[:3, :3] = R
    return m


def transform_combined(
    center: Vec3 = (0.0, 0.0, 0.0),
    scale_factors: Vec3 = (1.0, 1.0, 1.0),
    rotate_angles: Vec3 = (0.0, 0.0, 0.0),
) -> np.ndarray:
    """複合変換：スケール → 回転 → 移動 を順に適用するモデル行列。

    引数:
        center: 最終的な原点位置（ワールド座標）
        scale_factors: (sx, sy, sz) スケール係数
        rotate_angles: (rx, ry, rz) 回転角度（ラジアン）

    返り値:
        `T @ R @ S` の 4x4 行列
    """
    sx, sy, sz = scale_factors
    rx, ry, rz = rotate_angles
    cx, cy, cz = center
    return translate(cx, cy, cz) @ rotate_xyz(rx, ry, rz) @ scale(sx, sy, sz)


def perspective(fov_deg: float, aspect: float, near: float, far: float) -> np.ndarray:
    """OpenGL 互換の透視投影行列（NDC の z は near=-1, far=+1）。

    Parameters
    ----------
    fov_deg : float
        垂直画角（度）。0 < fov < 180。
    aspect : float
        幅 / 高さ。
    near, far : float
        クリップ面距離。0 < near < far。
    """
    if not 0.0 < fov_deg < 180.0:
        raise ValueError(f"fov_deg は (0, 180) の範囲である必要があります: {fov_deg}")
    if aspect <= 0.0:
        raise ValueError(f"aspect は正である必要があります: {aspect}")
    if not 0.0 < near < far:
        raise ValueError(f"0 < near < far である必要があります: near={near}, far={far}")
    f = 1.0 / math.tan(math.radians(fov_deg) / 2.0)
    m = np.zeros((4, 4), dtype=np.float64)
    m[0, 0] = f / aspect
    m[1, 1] = f
    m[2, 2] = (far + near) / (near - far)
    m[2, 3] = (2.0 * far * near) / (near - far)
    m[3, 2] = -1.0
    return m


def look_at(eye: Vec3Like, target: Vec3Like, up: Vec3Like) -> np.ndarray:
    """ビュー行列（world→camera）。カメラは -Z を向く右手系。"""
    e = as_vec3(eye, "eye")
    f = as_vec3(target, "target") - e
    nf = float(np.linalg.norm(f))
    if nf == 0.0:
        raise ValueError("eye と target が一致しています。")
    f = f / nf
    s = np.cross(f, as_vec3(up, "up"))
    ns = float(np.linalg.norm(s))
    if ns == 0.0:
        raise ValueError("up が視線方向と平行です。")
    s = s / ns
    u = np.cross(s, f)

    m = np.eye(4, dtype=np.float64)
    m[0, :3] = s
    m[1, :3] = u
    m[2, :3] = -f
    m[0, 3] = -float(np.dot(s, e))
    m[1, 3] = -float(np.dot(u, e))
    m[2, 3] = float(np.dot(f, e))
    return m


def invert(m: Mat4Like, *, tolerance: float | None = None) -> np.ndarray:
    """4x4 行列の逆行列を返す。特異/悪条件なら `SingularMatrixError`。

    Parameters
    ----------
    m : Mat4Like
        対象行列。
    tolerance : float | None
        条件数の逆数の下限。`None` の場合は設定値 `SINGULAR_TOLERANCE` を使う。

    Raises
    ------
    SingularMatrixError
        入力が非有限、条件数が `1 / tolerance` を超える、または結果が非有限の場合。
    """
    arr = as_mat4(m)
    tol = _settings.get().SINGULAR_TOLERANCE if tolerance is None else float(tolerance)
    if not np.all(np.isfinite(arr)):
        raise SingularMatrixError("行列に非有限値が含まれています。")
    with np.errstate(divide="ignore", invalid="ignore"):
        cond = float(np.linalg.cond(arr))
    if not math.isfinite(cond) or cond * tol > 1.0:
        raise SingularMatrixError(f"行列が特異です（cond={cond:.3g}）。")
    try:
        inv = np.linalg.inv(arr)
    except np.linalg.LinAlgError as e:
        raise SingularMatrixError("行列が特異です。") from e
    if not np.all(np.isfinite(inv)):
        raise SingularMatrixError("逆行列に非有限値が含まれています。")
    return inv


__all__ = [
    "as_vec3",
    "as_mat4",
    "translate",
    "scale",
    "rotate_x",
    "rotate_y",
    "rotate_z",
    "rotate_xyz",
    "rotate_axis",
    "transform_combined",
    "perspective",
    "look_at",
    "invert",
]
