from __future__ import annotations

import pytest

from util.utils import load_config


@pytest.mark.integration
# - load_config() without a path reads configs/default.yaml (the two-cube demo scene).
def test_load_config_reads_default_scene():
    cfg = load_config()
    assert cfg["viewport"] == {"width": 640, "height": 480}
    assert [o["id"] for o in cfg["objects"]] == [1, 2]
    assert cfg["camera"]["position"] == [0.0, 1.0, 4.0]
