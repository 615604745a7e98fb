from __future__ import annotations

import math

import numpy as np
import pytest

from api.scene import SceneConfigError, demo_session, session_from_config
from util.utils import load_config


def test_demo_session_layout() -> None:
    s = demo_session()
    assert s.viewport == (640, 480)
    assert [o.id for o in s.objects] == [1, 2]
    np.testing.assert_allclose(s.objects[0].model[:3, 3], [0.3, 0.0, -2.0])
    np.testing.assert_allclose(s.objects[1].model[:3, 3], [-0.3, 0.0, 1.0])


def test_default_config_matches_demo() -> None:
    from_cfg = session_from_config(load_config())
    demo = demo_session()
    for a, b in zip(from_cfg.objects, demo.objects):
        assert a.id == b.id
        np.testing.assert_allclose(a.model, b.model)
    from_cfg.set_pointer(320, 240)
    demo.set_pointer(320, 240)
    assert from_cfg.click() == demo.click()


def test_empty_config_uses_defaults() -> None:
    s = session_from_config({})
    assert s.viewport == (640, 480)
    assert s.objects == ()


def test_object_transform_fields() -> None:
    cfg = {
        "objects": [
            {"id": 3, "translate": [1, 2, 3], "scale": [2, 2, 2], "rotate": [0, math.pi / 2, 0]},
            {"id": 4, "model_matrix": np.eye(4).tolist(), "box_min": [0, 0, 0], "box_max": [1, 2, 3]},
        ]
    }
    s = session_from_config(cfg)
    m3 = s.objects[0].model
    np.testing.assert_allclose(m3[:3, 3], [1.0, 2.0, 3.0])
    # Y 回り 90° で X 軸は -Z へ、長さはスケール 2
    np.testing.assert_allclose(m3[:3, 0], [0.0, 0.0, -2.0], atol=1e-12)
    np.testing.assert_allclose(s.objects[1].box.max_corner, [1.0, 2.0, 3.0])


@pytest.mark.parametrize(
    "cfg",
    [
        {"viewport": {"width": 0, "height": 480}},
        {"viewport": [640, 480]},
        {"camera": {"fov_deg": 0}},
        {"camera": {"position": [0, 0, 0], "target": [0, 0, 0]}},
        {"camera": {"position": [0, 1]}},
        {"objects": [{"box_min": [0, 0, 0]}]},
        {"objects": [{"id": 1, "box_min": [1, 1, 1], "box_max": [0, 0, 0]}]},
        {"objects": [{"id": 1, "model_matrix": [[1, 0], [0, 1]]}]},
        {"objects": [{"id": 1, "model_matrix": [[float("nan")] * 4] * 4}]},
        {"objects": [{"id": "one"}]},
        {"objects": [{"id": 1}, {"id": 1}]},
        {"objects": ["cube"]},
    ],
)
def test_invalid_config_rejected(cfg) -> None:
    with pytest.raises(SceneConfigError):
        session_from_config(cfg)
