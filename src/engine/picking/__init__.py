"""
どこで: `engine.picking` サブパッケージ。
何を: レイ逆射影・レイ–OBB 交差・最近傍ピッキングを提供。
なぜ: 描画やウィンドウから独立した純関数群として、アプリ/セッション層から再利用するため。
"""

from .obb import BoundingBox, intersect, intersect_box, validate_box
from .picker import PickableObject, PickResult, pick, pick_ray
from .ray import Ray, unproject

__all__ = [
    "Ray",
    "unproject",
    "BoundingBox",
    "validate_box",
    "intersect",
    "intersect_box",
    "PickableObject",
    "PickResult",
    "pick",
    "pick_ray",
]
