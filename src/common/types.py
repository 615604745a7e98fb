"""
どこで: `common` の型定義。
何を: Vec3/Mat4Like などの軽量エイリアス（組込みジェネリックで記述）。
なぜ: 依存の少ない場所に配置して循環と分散定義を避けるため。
"""

from typing import Sequence

import numpy as np

Vec2 = tuple[float, float]
Vec3 = tuple[float, float, float]
RGB = tuple[float, float, float]

# 3 要素ベクトル/4x4 行列として受理する入力
Vec3Like = np.ndarray | Sequence[float]
Mat4Like = np.ndarray | Sequence[Sequence[float]]


__all__ = ["Vec2", "Vec3", "RGB", "Vec3Like", "Mat4Like"]
