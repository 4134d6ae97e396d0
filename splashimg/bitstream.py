import struct

from splashimg.errors import DimensionError, HeaderFormatError, UnsupportedKind

MAGIC = b"SPLASH!!"   # 8 bytes
HEADER_SIZE = 512     # firmware contract, never changes
BLOCK_SIZE = 512

KIND_RAW = 0
KIND_RLE = 1
KINDS = (KIND_RAW, KIND_RLE)

MAX_DIMENSION = 32768

# Header (little-endian):
# magic(8) width(u32) height(u32) kind(u32) blocks(u32)
# reserved zero bytes up to HEADER_SIZE
HDR_FMT = "<8sIIII"
HDR_FIELDS_SIZE = struct.calcsize(HDR_FMT)
RESERVED_SIZE = HEADER_SIZE - HDR_FIELDS_SIZE


def block_count(body_len: int) -> int:
    """Number of 512-byte blocks needed to hold body_len bytes."""
    return (body_len + BLOCK_SIZE - 1) // BLOCK_SIZE


def check_dimensions(width: int, height: int):
    if not (0 < width <= MAX_DIMENSION) or not (0 < height <= MAX_DIMENSION):
        raise DimensionError(
            f"Image size {width}x{height} out of range (1..{MAX_DIMENSION} per side)")


def check_kind(kind: int):
    if kind not in KINDS:
        raise UnsupportedKind(f"Unsupported body kind: {kind}")


def pack_header(*, width: int, height: int, kind: int, body_len: int) -> bytes:
    check_dimensions(width, height)
    check_kind(kind)
    data = struct.pack(HDR_FMT, MAGIC, width, height, kind, block_count(body_len))
    return data + bytes(RESERVED_SIZE)


def unpack_header(data: bytes):
    if len(data) < HEADER_SIZE:
        raise HeaderFormatError(
            f"Malformed stream: header too short ({len(data)} < {HEADER_SIZE} bytes)")
    magic, width, height, kind, blocks = struct.unpack_from(HDR_FMT, data)
    if magic != MAGIC:
        raise HeaderFormatError(f"Bad magic {magic!r} (not {MAGIC!r})")
    check_kind(kind)
    check_dimensions(width, height)
    # blocks is advisory only; reserved bytes are ignored
    return dict(width=width, height=height, kind=kind, blocks=blocks)


def write_header(f, *, width, height, kind, body_len):
    f.write(pack_header(width=width, height=height, kind=kind, body_len=body_len))


def read_header(f):
    return unpack_header(f.read(HEADER_SIZE))
