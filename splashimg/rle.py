from typing import List, Tuple

import numpy as np

from splashimg.errors import SizeMismatch, UnexpectedEndOfData

MAX_RUN = 128         # pixels per entry, literal or repeat
REPEAT_FLAG = 0x80    # control byte >= 0x80 means repeat run

Run = Tuple[bool, int, int]  # (repeat, start, count)


def _pixel_keys(row: np.ndarray) -> List[int]:
    row = row.astype(np.uint32)
    return ((row[:, 0] << 16) | (row[:, 1] << 8) | row[:, 2]).tolist()


def rle_split_row(row: np.ndarray) -> List[Run]:
    """
    Input: one scanline, uint8 array (W,3), W >= 1
    Output: list of (repeat, start, count) covering the row exactly once
    repeat=True : row[start] repeated count times
    repeat=False: row[start:start+count] stored verbatim
    """
    keys = _pixel_keys(row)
    n = len(keys)
    runs = []
    i = 0
    while i < n:
        j = i + 1
        # a pixel equal to its predecessor here only follows a repeat that hit MAX_RUN
        if (j < n and keys[j] == keys[i]) or (i > 0 and keys[i - 1] == keys[i]):
            while j < n and j - i < MAX_RUN and keys[j] == keys[i]:
                j += 1
            runs.append((True, i, j - i))
        else:
            # stop before a pixel that starts a repeat
            while j < n and j - i < MAX_RUN and (j + 1 == n or keys[j] != keys[j + 1]):
                j += 1
            runs.append((False, i, j - i))
        i = j
    return runs


def control_byte(repeat: bool, count: int) -> int:
    if not (1 <= count <= MAX_RUN):
        raise ValueError(f"run length out of range: {count}")
    return (count - 1) + (REPEAT_FLAG if repeat else 0)


def rle_encode_row(row: np.ndarray) -> bytes:
    row = np.ascontiguousarray(row, dtype=np.uint8)
    out = bytearray()
    for repeat, start, count in rle_split_row(row):
        out.append(control_byte(repeat, count))
        if repeat:
            out += row[start].tobytes()
        else:
            out += row[start:start + count].tobytes()
    return bytes(out)


def rle_encode(bgr: np.ndarray) -> bytes:
    """
    Input: uint8 array (H,W,3) in BGR order
    Output: entry stream, rows top-to-bottom, no run crosses a row boundary
    """
    assert bgr.dtype == np.uint8 and bgr.ndim == 3 and bgr.shape[2] == 3
    return b"".join(rle_encode_row(bgr[r]) for r in range(bgr.shape[0]))


def rle_decode(data: bytes, width: int, height: int) -> np.ndarray:
    """
    Input: entry stream + declared size
    Output: uint8 array (H,W,3) in BGR order
    Bytes after the last needed entry are ignored (block padding).
    """
    total = width * height
    # every entry is at least 4 bytes and covers at most MAX_RUN pixels
    min_len = -(-total // MAX_RUN) * 4
    if len(data) < min_len:
        raise SizeMismatch(
            f"RLE stream of {len(data)} bytes cannot hold {total} pixels (need >= {min_len})")
    out = np.empty((total, 3), dtype=np.uint8)
    buf = memoryview(data)
    n = len(buf)
    pos = 0
    produced = 0
    while produced < total:
        if pos >= n:
            raise SizeMismatch(
                f"RLE stream exhausted after {produced} of {total} pixels")
        ctrl = buf[pos]
        pos += 1
        count = ctrl + 1
        if count > MAX_RUN:
            count -= MAX_RUN
            need = 3
        else:
            need = count * 3
        if pos + need > n:
            raise UnexpectedEndOfData(
                f"RLE entry at offset {pos - 1} needs {need} bytes, {n - pos} left")
        if produced + count > total:
            raise SizeMismatch(
                f"RLE entry at offset {pos - 1} overruns image: "
                f"{produced} + {count} > {total} pixels")
        chunk = np.frombuffer(buf[pos:pos + need], dtype=np.uint8).reshape(-1, 3)
        out[produced:produced + count] = chunk  # a single pixel broadcasts
        pos += need
        produced += count
    return out.reshape(height, width, 3)
