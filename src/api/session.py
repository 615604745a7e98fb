"""
どこで: `api.session`。
何を: ビューポート・カメラ・ピック対象・ポインタ/オービット状態を保持し、入力イベントからピッキングを行う。
なぜ: 入力コールバックが書き換えるグローバル状態を持たず、状態を 1 つのセッションに閉じ込めるため。

利用イメージ（ウィンドウ層の薄い配線）:
    session = PickingSession(640, 480)
    session.add_object(PickableObject(1, BoundingBox.cube(), translate(0.3, 0, -2)))

    on_mouse_motion(x, y)     -> session.on_cursor_move(x, y)   # 左上原点の座標を渡す
    左クリック                -> session.click()
    中ボタン押下/解放         -> session.begin_orbit() / session.end_orbit()
"""

from __future__ import annotations

import logging
from typing import Iterable

import numpy as np

from common.errors import PickingError
from common.types import Mat4Like, Vec2
from engine.core.camera import Camera
from engine.picking.picker import PickableObject, PickResult, pick
from engine.picking.ray import validate_viewport
from util.color import MAX_ID, ids_from_pixels

logger = logging.getLogger(__name__)


class PickingSession:
    """1 つのビュー（ウィンドウ）に対応するピッキング状態。"""

    def __init__(
        self,
        width: int,
        height: int,
        camera: Camera | None = None,
        objects: Iterable[PickableObject] = (),
    ) -> None:
        validate_viewport(width, height)
        self._width = int(width)
        self._height = int(height)
        self.camera = (camera or Camera()).with_viewport(self._width, self._height)
        self._objects: dict[int, PickableObject] = {}
        self._pointer: Vec2 = (0.0, 0.0)
        self._orbit_anchor: tuple[float, Camera] | None = None
        self.last_result: PickResult | None = None
        for obj in objects:
            self.add_object(obj)

    # ---- viewport ----
    @property
    def viewport(self) -> tuple[int, int]:
        return (self._width, self._height)

    def resize(self, width: int, height: int) -> None:
        """ビューポート変更。カメラの aspect も追従させる。"""
        validate_viewport(width, height)
        self._width = int(width)
        self._height = int(height)
        self.camera = self.camera.with_viewport(self._width, self._height)

    # ---- objects ----
    @property
    def objects(self) -> tuple[PickableObject, ...]:
        """登録順のピック対象。"""
        return tuple(self._objects.values())

    def add_object(self, obj: PickableObject) -> None:
        if obj.id in self._objects:
            raise ValueError(f"object id {obj.id} は既に登録されています。")
        if obj.id > MAX_ID:
            # 色 ID 経路では下位 24bit しか残らない
            logger.warning("object id %d exceeds 24-bit color id range", obj.id)
        self._objects[obj.id] = obj

    def remove_object(self, object_id: int) -> PickableObject:
        return self._objects.pop(object_id)

    def set_model(self, object_id: int, model_matrix: Mat4Like) -> None:
        """毎フレームのモデル行列更新。未登録 ID は `KeyError`。"""
        self._objects[object_id].model = model_matrix

    # ---- pointer / camera ----
    @property
    def pointer(self) -> Vec2:
        """ポインタ位置（ピクセル、左下原点）。"""
        return self._pointer

    def set_pointer(self, x: float, y: float) -> None:
        """左下原点の座標でポインタ位置を設定する。"""
        self._pointer = (float(x), float(y))
        if self._orbit_anchor is not None:
            self._update_orbit()

    def on_cursor_move(self, xpos: float, ypos: float) -> None:
        """ウィンドウ座標（左上原点）のカーソル移動を受け取る。"""
        self.set_pointer(xpos, self._height - float(ypos))

    @property
    def is_orbiting(self) -> bool:
        return self._orbit_anchor is not None

    def begin_orbit(self) -> None:
        """現在のポインタ x とカメラを基準にオービット操作を開始する。"""
        self._orbit_anchor = (self._pointer[0], self.camera)

    def end_orbit(self) -> None:
        self._orbit_anchor = None

    def _update_orbit(self) -> None:
        assert self._orbit_anchor is not None
        anchor_x, anchor_camera = self._orbit_anchor
        # 画面幅ぶんのドラッグで 2 ラジアン
        angle = -(self._pointer[0] - anchor_x) * 2.0 / self._width
        self.camera = anchor_camera.orbit(angle)

    def view_matrix(self) -> np.ndarray:
        return self.camera.view_matrix()

    def projection_matrix(self) -> np.ndarray:
        return self.camera.projection_matrix()

    # ---- picking ----
    def click(self) -> PickResult | None:
        """現在のポインタ位置でレイピッキングを行い、結果を記録して返す。"""
        # 呼び出し中の行列更新から隔離するためコピーで判定する
        snapshot = [obj.snapshot() for obj in self._objects.values()]
        x, y = self._pointer
        try:
            result = pick(
                x,
                y,
                self._width,
                self._height,
                self.view_matrix(),
                self.projection_matrix(),
                snapshot,
            )
        except PickingError as e:
            logger.warning("pick failed at (%.1f, %.1f): %s", x, y, e)
            raise
        self.last_result = result
        if result is None:
            logger.info("picked: none")
        else:
            logger.info("picked: %d (distance=%.4f)", result.id, result.distance)
        return result

    def pick_color_id(self, pixels: np.ndarray) -> int | None:
        """色 ID で描いた読み戻しバッファから、ポインタ下の ID を返す（0 は背景で `None`）。

        `pixels` は `(height, width, 3+) uint8`、行 0 が画面下端（glReadPixels と同じ向き）。
        """
        arr = np.asarray(pixels)
        if arr.ndim != 3 or arr.shape[0] != self._height or arr.shape[1] != self._width:
            raise ValueError(
                f"pixels の形状がビューポートと一致しません: shape={arr.shape}, "
                f"viewport={self._width}x{self._height}"
            )
        px = min(max(int(self._pointer[0]), 0), self._width - 1)
        py = min(max(int(self._pointer[1]), 0), self._height - 1)
        oid = int(ids_from_pixels(arr[py, px]))
        if oid == 0:
            logger.info("picked (color): none")
            return None
        logger.info("picked (color): %d", oid)
        return oid


__all__ = ["PickingSession"]
