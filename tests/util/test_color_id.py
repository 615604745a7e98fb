from __future__ import annotations

import numpy as np
import pytest

from util.color import (
    MAX_ID,
    color_to_id,
    id_to_color,
    ids_from_pixels,
    ids_to_colors,
    to_u8_rgb,
)


def test_id_to_color_big_endian_channels() -> None:
    r, g, b = id_to_color(0x123456)
    assert to_u8_rgb((r, g, b)) == (0x12, 0x34, 0x56)
    assert id_to_color(0) == (0.0, 0.0, 0.0)
    assert id_to_color(MAX_ID) == (1.0, 1.0, 1.0)


def test_color_to_id_formula() -> None:
    assert color_to_id(1, 2, 3) == 1 * 65536 + 2 * 256 + 3
    assert color_to_id(255, 255, 255) == MAX_ID
    assert color_to_id(np.uint8(0), np.uint8(1), np.uint8(0)) == 256


def test_round_trip_all_24bit_ids() -> None:
    # 全 2^24 ID を一括符号化 → 8bit 丸め → 復号（メモリ節約のため分割）
    chunk = 1 << 20
    for start in range(0, MAX_ID + 1, chunk):
        ids = np.arange(start, start + chunk, dtype=np.uint32)
        u8 = np.rint(ids_to_colors(ids) * 255.0).astype(np.uint8)
        np.testing.assert_array_equal(ids_from_pixels(u8), ids)


def test_vectorized_encoder_matches_scalar() -> None:
    ids = np.arange(0, MAX_ID + 1, 9973, dtype=np.int64)
    got = ids_to_colors(ids)
    want = np.array([id_to_color(int(i)) for i in ids])
    np.testing.assert_array_equal(got, want)
    for k in range(0, len(ids), 64):
        assert color_to_id(*to_u8_rgb(got[k])) == int(ids[k])


def test_vectorized_encoder_validates_input() -> None:
    np.testing.assert_array_equal(ids_to_colors(np.array([MAX_ID + 1 + 7])), [[0.0, 0.0, 7 / 255.0]])
    with pytest.raises(ValueError):
        ids_to_colors(np.array([1, -1]))
    with pytest.raises(ValueError):
        ids_to_colors(np.array([0.5]))
    with pytest.raises(ValueError):
        ids_to_colors(np.array([True]))


@pytest.mark.parametrize("oid", [0, 1, 255, 256, 65535, 65536, 0xABCDEF, MAX_ID])
def test_round_trip_scalar(oid: int) -> None:
    assert color_to_id(*to_u8_rgb(id_to_color(oid))) == oid


def test_ids_beyond_24_bits_truncate() -> None:
    assert color_to_id(*to_u8_rgb(id_to_color(MAX_ID + 1))) == 0
    assert color_to_id(*to_u8_rgb(id_to_color((1 << 24) + 42))) == 42


@pytest.mark.parametrize("oid", [-1, True, False, 1.9, "1", None])
def test_invalid_id_rejected(oid) -> None:
    with pytest.raises(ValueError):
        id_to_color(oid)


def test_integral_values_accepted_as_id() -> None:
    assert id_to_color(np.int64(256)) == id_to_color(256)
    assert id_to_color(2.0) == id_to_color(2)


@pytest.mark.parametrize("rgb", [(256, 0, 0), (0, -1, 0), (0, 0, 1.5), (True, 0, 0), ("a", 0, 0)])
def test_color_to_id_rejects_out_of_range(rgb) -> None:
    with pytest.raises(ValueError):
        color_to_id(*rgb)


def test_to_u8_rgb_clamps() -> None:
    assert to_u8_rgb((-0.5, 0.5, 2.0)) == (0, 128, 255)
    with pytest.raises(ValueError):
        to_u8_rgb((0.1, 0.2))


def test_ids_from_pixels_validates_input() -> None:
    with pytest.raises(ValueError):
        ids_from_pixels(np.zeros((2, 2, 3), dtype=np.float32))
    with pytest.raises(ValueError):
        ids_from_pixels(np.zeros((2, 2), dtype=np.uint8))
    rgba = np.array([[[0, 1, 2, 255]]], dtype=np.uint8)
    assert ids_from_pixels(rgba)[0, 0] == 258
