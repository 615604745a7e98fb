from __future__ import annotations

import numpy as np
import pytest

from common.errors import InvalidViewportError, PickingError, SingularMatrixError
from engine.core.camera import Camera
from engine.picking.ray import Ray, to_ndc, unproject


def test_to_ndc_maps_viewport_edges() -> None:
    assert to_ndc(0, 640) == -1.0
    assert to_ndc(320, 640) == 0.0
    assert to_ndc(640, 640) == 1.0


@pytest.mark.parametrize(
    "position, target",
    [
        ((0.0, 1.0, 4.0), (0.0, 0.0, 0.0)),
        ((3.0, -2.0, 1.0), (0.5, 0.5, 0.5)),
        ((-5.0, 4.0, -6.0), (1.0, 0.0, 2.0)),
    ],
)
def test_center_pixel_direction_is_camera_forward(position, target) -> None:
    cam = Camera(position=position, target=target).with_viewport(640, 480)
    ray = unproject(320, 240, 640, 480, cam.view_matrix(), cam.projection_matrix())
    np.testing.assert_allclose(ray.direction, cam.forward, atol=1e-9)
    # 原点は near 面上（カメラから near だけ前方）
    np.testing.assert_allclose(
        ray.origin, np.asarray(position) + cam.near * cam.forward, atol=1e-9
    )


def test_direction_is_unit_length(camera: Camera) -> None:
    _, direction = unproject(17, 401, 640, 480, camera.view_matrix(), camera.projection_matrix())
    assert np.linalg.norm(direction) == pytest.approx(1.0)


def test_ray_passes_through_projected_point(camera: Camera, project_point) -> None:
    view, proj = camera.view_matrix(), camera.projection_matrix()
    target = np.array([0.7, -0.2, -2.0])
    px, py = project_point(target, view, proj, 640, 480)
    ray = unproject(px, py, 640, 480, view, proj)
    to_target = target - ray.origin
    t = float(np.dot(to_target, ray.direction))
    assert t > 0.0
    np.testing.assert_allclose(ray.point_at(t), target, atol=1e-7)


def test_ray_unpacks_as_origin_direction() -> None:
    ray = Ray(np.zeros(3), np.array([0.0, 0.0, -1.0]))
    origin, direction = ray
    assert origin is ray.origin and direction is ray.direction


@pytest.mark.parametrize("width, height", [(0, 480), (640, 0), (-1, 480), (float("nan"), 480)])
def test_degenerate_viewport_rejected(camera: Camera, width, height) -> None:
    with pytest.raises(InvalidViewportError):
        unproject(0, 0, width, height, camera.view_matrix(), camera.projection_matrix())


def test_singular_view_projection_raises(camera: Camera) -> None:
    with pytest.raises(SingularMatrixError):
        unproject(320, 240, 640, 480, camera.view_matrix(), np.zeros((4, 4)))
    # 行列積が特異（ビューが潰れている）
    flat_view = np.diag([1.0, 1.0, 0.0, 1.0])
    with pytest.raises(PickingError):
        unproject(320, 240, 640, 480, flat_view, camera.projection_matrix())


def test_affine_projection_with_collapsed_depth_raises() -> None:
    # 逆変換後、far 点の w が 0 になる射影（無限遠へ飛ぶ）。この行列は自身が逆行列
    proj = np.eye(4)
    proj[3] = [0.0, 0.0, 1.0, -1.0]
    with pytest.raises(SingularMatrixError):
        unproject(320, 240, 640, 480, np.eye(4), proj)
