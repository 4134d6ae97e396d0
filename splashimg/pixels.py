import numpy as np
from PIL import Image

from splashimg.errors import SizeMismatch

# Pillow modes that carry 16-bit grayscale samples
_WIDE_GRAY_MODES = ("I;16", "I;16B", "I;16L", "I")


def truncate_to_u8(samples: np.ndarray) -> np.ndarray:
    """16-bit channel samples -> high 8 bits. Lossy, no rounding."""
    return (samples.astype(np.uint32) >> 8).astype(np.uint8)


def widen_to_u16(samples: np.ndarray) -> np.ndarray:
    """8-bit samples -> full-scale 16-bit (0xAB -> 0xABAB)."""
    return samples.astype(np.uint16) * np.uint16(257)


def rgb16_to_bgr(rgb16: np.ndarray) -> np.ndarray:
    """(H,W,3) 16-bit RGB -> (H,W,3) uint8 BGR."""
    return np.ascontiguousarray(truncate_to_u8(rgb16)[:, :, ::-1])


def image_to_bgr(img: Image.Image) -> np.ndarray:
    if img.mode in _WIDE_GRAY_MODES:
        gray = np.clip(np.asarray(img, dtype=np.int64), 0, 65535)
        rgb16 = np.repeat(gray[:, :, None], 3, axis=2)
    else:
        # alpha is dropped, not premultiplied
        rgb16 = widen_to_u16(np.asarray(img.convert("RGB"), dtype=np.uint8))
    return rgb16_to_bgr(rgb16)


def load_bgr(path) -> np.ndarray:
    with Image.open(path) as img:
        return image_to_bgr(img)


def bgr_to_image(bgr: np.ndarray) -> Image.Image:
    h, w, _ = bgr.shape
    rgba = np.empty((h, w, 4), dtype=np.uint8)
    rgba[:, :, :3] = bgr[:, :, ::-1]
    rgba[:, :, 3] = 255
    return Image.fromarray(rgba)  # (H,W,4) uint8 -> RGBA


def bgr_to_bytes(bgr: np.ndarray) -> bytes:
    """Raw body: row-major BGR triplets."""
    assert bgr.dtype == np.uint8 and bgr.ndim == 3 and bgr.shape[2] == 3
    return np.ascontiguousarray(bgr).tobytes(order="C")


def bytes_to_bgr(data: bytes, width: int, height: int) -> np.ndarray:
    need = width * height * 3
    if len(data) < need:
        raise SizeMismatch(f"Raw body too short: expected {need} bytes, got {len(data)}")
    return np.frombuffer(data, dtype=np.uint8, count=need).reshape(height, width, 3).copy()
