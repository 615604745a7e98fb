from __future__ import annotations

import math

import numpy as np
import pytest

from engine.core.camera import Camera


def test_default_camera_matches_demo_scene(camera: Camera) -> None:
    assert camera.position == (0.0, 1.0, 4.0)
    assert camera.fov_deg == 45.0
    np.testing.assert_allclose(camera.forward, np.array([0.0, -1.0, -4.0]) / math.sqrt(17.0))


def test_orbit_keeps_distance_and_height(camera: Camera) -> None:
    moved = camera.orbit(math.pi / 2)
    p = np.asarray(moved.position)
    assert p[1] == pytest.approx(1.0)
    assert np.linalg.norm(p) == pytest.approx(math.sqrt(17.0))
    # +Y 回りに 90° 回すと +Z は +X へ
    np.testing.assert_allclose(p, [4.0, 1.0, 0.0], atol=1e-12)
    # 元のカメラは不変
    assert camera.position == (0.0, 1.0, 4.0)


def test_with_viewport_updates_aspect(camera: Camera) -> None:
    assert camera.with_viewport(800, 400).aspect == pytest.approx(2.0)
    with pytest.raises(ValueError):
        camera.with_viewport(0, 400)
