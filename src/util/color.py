"""
どこで: `util.color`。
何を: オブジェクト ID と RGB 色の相互変換（GPU ピッキング用）と、0–1 色の 8bit 量子化。
なぜ: ID を色で描き分けて読み戻す代替ピッキング手法で、エンコード/デコード仕様を一元化するため。

符号化（ビッグエンディアン, 各 8bit）:
- R = bit 16–23, G = bit 8–15, B = bit 0–7。出力は各成分 `/ 255` の 0–1 float。
- 復号は `ID = R * 65536 + G * 256 + B`（各成分 0–255 の整数）。
- 表現できるのは `[0, 2^24 - 1]`。それを超える ID は下位 24bit のみが残る（黙って切り詰め）。
"""

from __future__ import annotations

from typing import Sequence

import numpy as np

from common.types import RGB

MAX_ID = 0xFFFFFF


def _clamp01(x: float) -> float:
    return 0.0 if x < 0.0 else 1.0 if x > 1.0 else float(x)


def _as_id(value: object) -> int:
    if isinstance(value, bool):
        raise ValueError(f"object id は非負の整数である必要があります: {value!r}")
    try:
        oid = int(value)  # type: ignore[call-overload]
    except (TypeError, ValueError) as e:
        raise ValueError(f"object id は非負の整数である必要があります: {value!r}") from e
    if oid != value or oid < 0:
        raise ValueError(f"object id は非負の整数である必要があります: {value!r}")
    return oid


def id_to_color(object_id: int) -> RGB:
    """ID を RGB(0–1) に符号化する。負/非整数/bool の ID は `ValueError`。"""
    oid = _as_id(object_id)
    r = (oid & 0x00FF0000) >> 16
    g = (oid & 0x0000FF00) >> 8
    b = oid & 0x000000FF
    return (r / 255.0, g / 255.0, b / 255.0)


def _as_u8(name: str, value: object) -> int:
    if isinstance(value, bool):
        raise ValueError(f"{name} は 0–255 の整数である必要があります: {value!r}")
    try:
        iv = int(value)  # type: ignore[call-overload]
    except (TypeError, ValueError) as e:
        raise ValueError(f"{name} は 0–255 の整数である必要があります: {value!r}") from e
    if iv != value or not 0 <= iv <= 255:
        raise ValueError(f"{name} は 0–255 の整数である必要があります: {value!r}")
    return iv


def color_to_id(r: int, g: int, b: int) -> int:
    """読み戻した RGB(0–255) を ID に復号する。範囲外/非整数は `ValueError`。"""
    ri = _as_u8("r", r)
    gi = _as_u8("g", g)
    bi = _as_u8("b", b)
    return ri * 256 * 256 + gi * 256 + bi


def to_u8_rgb(rgb: Sequence[float]) -> tuple[int, int, int]:
    """RGB(0–1) を 8bit 整数へ丸める（範囲外はクランプ）。"""
    if len(rgb) != 3:
        raise ValueError("color tuple/list must be length 3")
    r, g, b = (_clamp01(float(c)) for c in rgb)
    return (int(round(r * 255)), int(round(g * 255)), int(round(b * 255)))


def ids_to_colors(ids: np.ndarray) -> np.ndarray:
    """ID 配列 `(...)` を RGB(0–1) 配列 `(..., 3) float64` へ一括符号化する（`id_to_color` と同じ規則）。"""
    arr = np.asarray(ids)
    if not np.issubdtype(arr.dtype, np.integer):
        raise ValueError(f"ids は整数配列である必要があります: dtype={arr.dtype}")
    if arr.size and int(arr.min()) < 0:
        raise ValueError("ids に負の値が含まれています。")
    oid = arr.astype(np.int64) & MAX_ID
    rgb = np.stack([(oid >> 16) & 0xFF, (oid >> 8) & 0xFF, oid & 0xFF], axis=-1)
    return rgb / 255.0


def ids_from_pixels(pixels: np.ndarray) -> np.ndarray:
    """読み戻しバッファ `(..., 3) uint8` を ID 配列 `(...) uint32` へ一括復号する。"""
    arr = np.asarray(pixels)
    if arr.ndim < 1 or arr.shape[-1] < 3:
        raise ValueError(f"pixels は末尾次元が 3 以上である必要があります: shape={arr.shape}")
    if arr.dtype != np.uint8:
        raise ValueError(f"pixels は uint8 である必要があります: dtype={arr.dtype}")
    rgb = arr[..., :3].astype(np.uint32)
    return (rgb[..., 0] << 16) | (rgb[..., 1] << 8) | rgb[..., 2]


__all__ = [
    "MAX_ID",
    "id_to_color",
    "color_to_id",
    "to_u8_rgb",
    "ids_to_colors",
    "ids_from_pixels",
]
