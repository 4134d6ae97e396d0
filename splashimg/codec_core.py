import numpy as np

from splashimg.bitstream import (
    BLOCK_SIZE, HEADER_SIZE, KIND_RAW, KIND_RLE, block_count,
    check_dimensions, check_kind, pack_header, unpack_header,
)
from splashimg.pixels import bgr_to_bytes, bytes_to_bgr
from splashimg.rle import rle_decode, rle_encode


def encode_body(bgr: np.ndarray, kind: int) -> bytes:
    check_kind(kind)
    if kind == KIND_RLE:
        return rle_encode(bgr)
    return bgr_to_bytes(bgr)


def decode_body(body: bytes, *, width: int, height: int, kind: int) -> np.ndarray:
    check_kind(kind)
    if kind == KIND_RLE:
        return rle_decode(body, width, height)
    return bytes_to_bgr(body, width, height)


def pad_to_block(body: bytes) -> bytes:
    rem = len(body) % BLOCK_SIZE
    if rem == 0:
        return body
    return body + bytes(BLOCK_SIZE - rem)


def encode_container(bgr: np.ndarray, *, rle: bool, pad: bool = False):
    """
    Returns:
      data: header (512B) + body
      meta: width, height, kind, body_len, blocks
    """
    assert bgr.dtype == np.uint8 and bgr.ndim == 3 and bgr.shape[2] == 3
    height, width = bgr.shape[:2]
    check_dimensions(width, height)

    kind = KIND_RLE if rle else KIND_RAW
    body = encode_body(bgr, kind)
    body_len = len(body)
    if pad:
        body = pad_to_block(body)

    header = pack_header(width=width, height=height, kind=kind, body_len=body_len)
    meta = dict(width=width, height=height, kind=kind, body_len=body_len,
                blocks=block_count(body_len), padded_len=len(body))
    return header + body, meta


def decode_container(data: bytes):
    """Returns (header dict, uint8 BGR array (H,W,3))."""
    h = unpack_header(data)
    body = data[HEADER_SIZE:]
    bgr = decode_body(body, width=h["width"], height=h["height"], kind=h["kind"])
    return h, bgr
