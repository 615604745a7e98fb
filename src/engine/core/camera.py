"""
どこで: `engine.core` のカメラ値型。
何を: 位置/注視点/上方向と透視パラメータから、ビュー行列と投影行列を生成する `Camera`。
なぜ: カメラ状態をグローバル変数ではなく不変値として受け渡し、ピッキング関数を純粋に保つため。
"""

from __future__ import annotations

from dataclasses import dataclass, replace

import numpy as np

from common.types import Vec3

from . import transforms


@dataclass(frozen=True)
class Camera:
    """透視カメラ（不変）。更新は `orbit()`/`dataclasses.replace` で新しいインスタンスを得る。"""

    position: Vec3 = (0.0, 1.0, 4.0)
    target: Vec3 = (0.0, 0.0, 0.0)
    up: Vec3 = (0.0, 1.0, 0.0)
    fov_deg: float = 45.0
    aspect: float = 640.0 / 480.0
    near: float = 0.1
    far: float = 100.0

    def view_matrix(self) -> np.ndarray:
        return transforms.look_at(self.position, self.target, self.up)

    def projection_matrix(self) -> np.ndarray:
        return transforms.perspective(self.fov_deg, self.aspect, self.near, self.far)

    @property
    def forward(self) -> np.ndarray:
        """ワールド座標での視線方向（単位ベクトル）。"""
        f = np.asarray(self.target, dtype=np.float64) - np.asarray(self.position, dtype=np.float64)
        return f / np.linalg.norm(f)

    def orbit(self, angle_rad: float) -> "Camera":
        """注視点を中心に `up` 軸回りで位置を回転したカメラを返す。"""
        R = transforms.rotate_axis(self.up, angle_rad)[:3, :3]
        t = np.asarray(self.target, dtype=np.float64)
        p = R @ (np.asarray(self.position, dtype=np.float64) - t) + t
        return replace(self, position=(float(p[0]), float(p[1]), float(p[2])))

    def with_viewport(self, width: int, height: int) -> "Camera":
        """ビューポート比に合わせて `aspect` を更新したカメラを返す。"""
        if width <= 0 or height <= 0:
            raise ValueError(f"viewport は正の大きさである必要があります: {width}x{height}")
        return replace(self, aspect=float(width) / float(height))


__all__ = ["Camera"]
