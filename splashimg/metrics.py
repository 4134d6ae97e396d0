import numpy as np


def mismatched_pixels(x: np.ndarray, y: np.ndarray) -> int:
    if x.shape != y.shape:
        raise ValueError(f"shape mismatch: {x.shape} vs {y.shape}")
    return int(np.count_nonzero(np.any(x != y, axis=-1)))


def compression_ratio(raw_bytes: int, coded_bytes: int) -> float:
    if raw_bytes == 0:
        return float("inf")
    return coded_bytes / raw_bytes


def unique_colors(bgr: np.ndarray) -> int:
    flat = bgr.reshape(-1, 3)
    return int(np.unique(flat, axis=0).shape[0])
