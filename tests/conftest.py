"""共通フィクスチャ。

- 乱数シード固定
- 単位ボックス・既定カメラ・デモセッション
- 設定の環境変数リセット
"""

from __future__ import annotations

from typing import Iterator

import numpy as np
import pytest

from api.scene import demo_session
from api.session import PickingSession
from common import settings
from engine.core.camera import Camera
from engine.picking.obb import BoundingBox


@pytest.fixture(scope="session", autouse=True)
def np_seed() -> None:
    """NumPy の乱数を固定。"""
    np.random.seed(12345)


@pytest.fixture()
def unit_box() -> BoundingBox:
    return BoundingBox.cube(0.5)


@pytest.fixture()
def camera() -> Camera:
    return Camera()


@pytest.fixture()
def demo() -> PickingSession:
    return demo_session()


def world_to_pixel(
    point: np.ndarray,
    view: np.ndarray,
    proj: np.ndarray,
    width: int,
    height: int,
) -> tuple[float, float]:
    """ワールド点をピクセル座標（左下原点）へ投影する。"""
    p = np.array([point[0], point[1], point[2], 1.0], dtype=np.float64)
    clip = proj @ view @ p
    ndc = clip[:3] / clip[3]
    return ((ndc[0] + 1.0) * 0.5 * width, (ndc[1] + 1.0) * 0.5 * height)


@pytest.fixture()
def project_point():
    return world_to_pixel


@pytest.fixture()
def env_clean_settings(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    for name in (
        "RPK_PICK_EPSILON",
        "RPK_PICK_MAX_DISTANCE",
        "RPK_PICK_NORMALIZE_AXES",
        "RPK_SINGULAR_TOLERANCE",
        "RPK_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    settings.reload_from_env()
    yield
    monkeypatch.undo()
    settings.reload_from_env()
