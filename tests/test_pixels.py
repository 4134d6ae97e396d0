import numpy as np
import pytest
from PIL import Image

from splashimg.errors import SizeMismatch
from splashimg.pixels import (
    bgr_to_bytes, bgr_to_image, bytes_to_bgr, image_to_bgr, load_bgr,
    truncate_to_u8, widen_to_u16,
)


def test_truncate_keeps_high_byte_without_rounding():
    s = np.array([0x0000, 0x00FF, 0x0100, 0x7FFF, 0x80FF, 0xFFFF], dtype=np.uint16)
    assert truncate_to_u8(s).tolist() == [0x00, 0x00, 0x01, 0x7F, 0x80, 0xFF]


def test_widen_then_truncate_is_identity_for_8bit():
    v = np.arange(256, dtype=np.uint8)
    assert np.array_equal(truncate_to_u8(widen_to_u16(v)), v)


def test_rgb_image_becomes_bgr():
    rgb = np.array([[[255, 0, 0], [0, 128, 7]]], dtype=np.uint8)
    bgr = image_to_bgr(Image.fromarray(rgb))
    assert bgr.tolist() == [[[0, 0, 255], [7, 128, 0]]]


def test_alpha_is_discarded():
    rgba = np.array([[[10, 20, 30, 0], [40, 50, 60, 128]]], dtype=np.uint8)
    bgr = image_to_bgr(Image.fromarray(rgba))
    assert bgr.tolist() == [[[30, 20, 10], [60, 50, 40]]]


def test_palette_image_is_expanded():
    img = Image.new("P", (3, 2))
    img.putpalette([0, 0, 0, 9, 8, 7] + [0] * 762)
    img.putpixel((1, 1), 1)
    bgr = image_to_bgr(img)
    assert bgr.shape == (2, 3, 3)
    assert bgr[1, 1].tolist() == [7, 8, 9]


def test_16bit_gray_is_truncated():
    gray = np.array([[0x1234, 0xFFFF, 0x00FF]], dtype=np.uint16)
    img = Image.new("I;16", (3, 1))
    for x, v in enumerate(gray[0].tolist()):
        img.putpixel((x, 0), v)
    bgr = image_to_bgr(img)
    assert bgr.tolist() == [[[0x12] * 3, [0xFF] * 3, [0x00] * 3]]


def test_bgr_to_image_is_opaque_rgba():
    bgr = np.array([[[1, 2, 3]]], dtype=np.uint8)
    img = bgr_to_image(bgr)
    assert img.mode == "RGBA"
    assert img.getpixel((0, 0)) == (3, 2, 1, 255)


def test_load_bgr_sniffs_content_not_extension(tmp_path):
    rgb = np.array([[[5, 6, 7]]], dtype=np.uint8)
    path = tmp_path / "logo.dat"
    Image.fromarray(rgb).save(path, format="PNG")
    assert load_bgr(path).tolist() == [[[7, 6, 5]]]


def test_raw_bytes_roundtrip_and_layout():
    bgr = np.arange(2 * 3 * 3, dtype=np.uint8).reshape(2, 3, 3)
    data = bgr_to_bytes(bgr)
    assert data == bytes(range(18))
    assert np.array_equal(bytes_to_bgr(data + b"\x00\x00", 3, 2), bgr)


def test_raw_bytes_too_short():
    with pytest.raises(SizeMismatch):
        bytes_to_bgr(bytes(17), 3, 2)
