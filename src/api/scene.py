"""
どこで: `api.scene`。
何を: 既定のデモシーンと、YAML 構成（dict）からの `PickingSession` 生成。
なぜ: CLI/テスト/アプリが同じシーン定義を共有し、手書きのセットアップを繰り返さないため。

構成スキーマ（すべて任意、欠落時は既定値）:
    viewport: {width: int, height: int}
    camera: {position, target, up: [x, y, z], fov_deg, near, far: float}
    objects:
      - id: int
        box_min: [x, y, z]
        box_max: [x, y, z]
        # 以下のどちらか
        model_matrix: 4x4 の入れ子リスト（行優先、列ベクトル規約）
        translate / rotate / scale: [x, y, z]（rotate はラジアン、X→Y→Z 順）
"""

from __future__ import annotations

from typing import Any, Mapping

import numpy as np

from common.errors import PickingError
from engine.core.camera import Camera
from engine.core.transforms import transform_combined, translate
from engine.picking.obb import BoundingBox
from engine.picking.picker import PickableObject

from .session import PickingSession

DEMO_VIEWPORT = (640, 480)


class SceneConfigError(ValueError):
    """シーン構成の形式が不正な場合に送出される例外。"""


def demo_session() -> PickingSession:
    """奥 (0.3, 0, -2) と手前 (-0.3, 0, 1) に単位立方体を置いたデモシーン。"""
    w, h = DEMO_VIEWPORT
    cube = BoundingBox.cube(0.5)
    return PickingSession(
        w,
        h,
        Camera(),
        [
            PickableObject(1, cube, translate(0.3, 0.0, -2.0)),
            PickableObject(2, cube, translate(-0.3, 0.0, 1.0)),
        ],
    )


def _vec3(raw: Any, key: str, default: tuple[float, float, float]) -> tuple[float, float, float]:
    if raw is None:
        return default
    try:
        x, y, z = (float(v) for v in raw)
    except (TypeError, ValueError) as e:
        raise SceneConfigError(f"{key} は 3 要素の数値列である必要があります: {raw!r}") from e
    return (x, y, z)


def _object_from_config(item: Any) -> PickableObject:
    if not isinstance(item, Mapping):
        raise SceneConfigError(f"objects の要素は mapping である必要があります: {item!r}")
    if "id" not in item:
        raise SceneConfigError("objects の要素に id がありません。")
    try:
        box = BoundingBox(
            np.asarray(_vec3(item.get("box_min"), "box_min", (-0.5, -0.5, -0.5))),
            np.asarray(_vec3(item.get("box_max"), "box_max", (0.5, 0.5, 0.5))),
        )
    except PickingError as e:
        raise SceneConfigError(f"object {item['id']!r}: {e}") from e

    if "model_matrix" in item:
        model = np.asarray(item["model_matrix"], dtype=np.float64)
        if model.shape != (4, 4):
            raise SceneConfigError(f"object {item['id']!r}: model_matrix は 4x4 である必要があります。")
    else:
        model = transform_combined(
            center=_vec3(item.get("translate"), "translate", (0.0, 0.0, 0.0)),
            scale_factors=_vec3(item.get("scale"), "scale", (1.0, 1.0, 1.0)),
            rotate_angles=_vec3(item.get("rotate"), "rotate", (0.0, 0.0, 0.0)),
        )
    try:
        return PickableObject(item["id"], box, model)
    except (TypeError, ValueError) as e:
        raise SceneConfigError(str(e)) from e


def session_from_config(config: Mapping[str, Any]) -> PickingSession:
    """構成 dict から `PickingSession` を生成する。"""
    vp = config.get("viewport") or {}
    if not isinstance(vp, Mapping):
        raise SceneConfigError(f"viewport は mapping である必要があります: {vp!r}")
    width = vp.get("width", DEMO_VIEWPORT[0])
    height = vp.get("height", DEMO_VIEWPORT[1])

    cam_cfg = config.get("camera") or {}
    if not isinstance(cam_cfg, Mapping):
        raise SceneConfigError(f"camera は mapping である必要があります: {cam_cfg!r}")
    base = Camera()
    try:
        camera = Camera(
            position=_vec3(cam_cfg.get("position"), "camera.position", base.position),
            target=_vec3(cam_cfg.get("target"), "camera.target", base.target),
            up=_vec3(cam_cfg.get("up"), "camera.up", base.up),
            fov_deg=float(cam_cfg.get("fov_deg", base.fov_deg)),
            near=float(cam_cfg.get("near", base.near)),
            far=float(cam_cfg.get("far", base.far)),
        )
        # 行列が作れない設定（fov/near/far の範囲外、eye == target 等）をここで弾く
        camera.projection_matrix()
        camera.view_matrix()
    except (TypeError, ValueError) as e:
        raise SceneConfigError(f"camera 設定が不正です: {e}") from e

    objects = [_object_from_config(item) for item in (config.get("objects") or [])]
    try:
        return PickingSession(width, height, camera, objects)
    except ValueError as e:
        raise SceneConfigError(str(e)) from e


__all__ = ["DEMO_VIEWPORT", "SceneConfigError", "demo_session", "session_from_config"]
