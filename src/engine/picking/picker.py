"""
どこで: `engine.picking` のピッキング調停。
何を: 逆射影を 1 回だけ行い、全候補に交差判定をかけて最も近いヒットを返す `pick()`。
なぜ: 最初に当たった候補を採用すると、レイ上で重なる手前の物体を取り逃すため。全候補を走査する。

候補の受理形式:
- `PickableObject`
- `Mapping`（キー: `id`, `box_min`, `box_max`, `model_matrix`）
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Union

import numpy as np

from common.types import Mat4Like
from engine.core.transforms import as_mat4

from .obb import BoundingBox, intersect_box
from .ray import Ray, unproject

logger = logging.getLogger(__name__)


class PickableObject:
    """ピック対象。ID は生成時に固定、モデル行列はアプリ側が毎フレーム更新する。"""

    __slots__ = ("_id", "box", "_model")

    box: BoundingBox

    def __init__(
        self,
        object_id: int,
        box: BoundingBox,
        model_matrix: Mat4Like | None = None,
    ) -> None:
        if isinstance(object_id, bool) or not isinstance(object_id, (int, np.integer)):
            raise TypeError(f"object_id は int である必要があります: {object_id!r}")
        self._id = int(object_id)
        self.box = box
        self._model = np.eye(4, dtype=np.float64)
        if model_matrix is not None:
            self.model = model_matrix

    @property
    def id(self) -> int:
        return self._id

    @property
    def model(self) -> np.ndarray:
        return self._model

    @model.setter
    def model(self, value: Mat4Like) -> None:
        m = as_mat4(value, "model_matrix")
        if not np.all(np.isfinite(m)):
            raise ValueError("model_matrix に非有限値が含まれています。")
        self._model = m.copy()

    def snapshot(self) -> "PickableObject":
        """モデル行列をコピーした独立インスタンスを返す（並行更新からの隔離用）。"""
        return PickableObject(self._id, self.box, self._model)

    def __repr__(self) -> str:  # pragma: no cover - 表示用
        return f"PickableObject(id={self._id}, origin={self._model[:3, 3].tolist()})"


Candidate = Union[PickableObject, Mapping[str, Any]]


@dataclass(frozen=True)
class PickResult:
    """最も近いヒットの ID とレイ上の距離。"""

    id: int
    distance: float


def as_pickable(candidate: Candidate) -> PickableObject:
    """候補を `PickableObject` へ正規化する。Mapping はキー欠落で `KeyError`。"""
    if isinstance(candidate, PickableObject):
        return candidate
    box = BoundingBox(
        np.asarray(candidate["box_min"], dtype=np.float64),
        np.asarray(candidate["box_max"], dtype=np.float64),
    )
    return PickableObject(candidate["id"], box, candidate["model_matrix"])


def pick_ray(ray: Ray, candidates: Iterable[Candidate]) -> PickResult | None:
    """既知のレイに対して最も近いヒットを返す。同距離なら先に現れた候補を残す。"""
    best_id: int | None = None
    best_distance = math.inf
    for cand in candidates:
        obj = as_pickable(cand)
        hit, distance = intersect_box(ray, obj.box, obj.model)
        if hit and distance < best_distance:
            best_id = obj.id
            best_distance = distance
    if best_id is None:
        return None
    return PickResult(id=best_id, distance=best_distance)


def pick(
    pointer_x: float,
    pointer_y: float,
    viewport_width: int,
    viewport_height: int,
    view_matrix: Mat4Like,
    projection_matrix: Mat4Like,
    candidates: Iterable[Candidate],
) -> PickResult | None:
    """ポインタ下で最も近い候補を返す（無ければ `None`）。

    Parameters
    ----------
    pointer_x, pointer_y : float
        ポインタ位置（ピクセル、左下原点）。
    viewport_width, viewport_height : int
        ビューポートの大きさ。
    view_matrix, projection_matrix : Mat4Like
        カメラ行列。
    candidates : Iterable[Candidate]
        順序付きの候補列。空でもよい（結果は常に `None`）。

    Returns
    -------
    PickResult | None
        最も近いヒット。候補順に依存しない（同距離のみ先勝ち）。
    """
    ray = unproject(
        pointer_x,
        pointer_y,
        viewport_width,
        viewport_height,
        view_matrix,
        projection_matrix,
    )
    result = pick_ray(ray, candidates)
    logger.debug("pick at (%s, %s) -> %s", pointer_x, pointer_y, result)
    return result


__all__ = ["PickableObject", "PickResult", "Candidate", "as_pickable", "pick_ray", "pick"]
