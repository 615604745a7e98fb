"""
どこで: `api` 入口（高レベル公開 API）。
何を: 逆射影 `unproject`・交差判定 `intersect`・最近傍 `pick`・色 ID 変換・セッション等を再輸出。
なぜ: 利用者が単一名前空間からシーン構築→ピッキングまで完結できるようにするため。

Usage:
    from api import BoundingBox, Camera, PickableObject, PickingSession, translate

    session = PickingSession(640, 480, Camera())
    session.add_object(PickableObject(1, BoundingBox.cube(), translate(0.3, 0.0, -2.0)))
    session.on_cursor_move(330, 250)
    result = session.click()   # PickResult(id=1, distance=...) or None
"""

from common.errors import (
    InvalidBoundingBoxError,
    InvalidViewportError,
    PickingError,
    SingularMatrixError,
)
from engine.core.camera import Camera
from engine.core.transforms import (
    look_at,
    perspective,
    rotate_xyz,
    scale,
    transform_combined,
    translate,
)
from engine.picking import (
    BoundingBox,
    PickableObject,
    PickResult,
    Ray,
    intersect,
    pick,
    unproject,
)
from util.color import color_to_id, id_to_color, ids_to_colors

from .scene import SceneConfigError, demo_session, session_from_config
from .session import PickingSession

__all__ = [
    # コア
    "unproject",
    "intersect",
    "pick",
    "id_to_color",
    "color_to_id",
    "ids_to_colors",
    # 値型
    "Ray",
    "BoundingBox",
    "PickableObject",
    "PickResult",
    "Camera",
    # 行列
    "translate",
    "scale",
    "rotate_xyz",
    "transform_combined",
    "perspective",
    "look_at",
    # セッション
    "PickingSession",
    "demo_session",
    "session_from_config",
    # 例外
    "PickingError",
    "InvalidViewportError",
    "InvalidBoundingBoxError",
    "SingularMatrixError",
    "SceneConfigError",
]

# バージョン情報
__version__ = "2026.10"
