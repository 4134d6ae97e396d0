import argparse
import os

from splashimg.bitstream import KIND_RLE
from splashimg.codec_core import decode_container, encode_container
from splashimg.errors import SplashError
from splashimg.fileio import write_atomic
from splashimg.metrics import compression_ratio, mismatched_pixels, unique_colors
from splashimg.pixels import load_bgr

RLE_ENV = "RLE24"


def rle_from_env(environ=None) -> bool:
    """RLE24=0 selects raw bodies; anything else keeps RLE."""
    environ = os.environ if environ is None else environ
    return environ.get(RLE_ENV, "1").strip() != "0"


def encode_file(src, dst, *, rle: bool, pad: bool = False, verify: bool = False, quiet: bool = False):
    bgr = load_bgr(src)
    data, meta = encode_container(bgr, rle=rle, pad=pad)

    if verify:
        _, back = decode_container(data)
        bad = mismatched_pixels(bgr, back)
        if bad:
            raise SplashError(f"Round trip changed {bad} pixels")

    write_atomic(dst, data)

    if not quiet:
        kind = "rle" if meta["kind"] == KIND_RLE else "raw"
        ratio = compression_ratio(bgr.size, meta["body_len"])
        print(f"[encode] wrote {dst}")
        print(f"[encode] {meta['width']}x{meta['height']} kind={kind} colors={unique_colors(bgr)} "
              f"body={meta['body_len']}B blocks={meta['blocks']} ratio={ratio:.2f}")
        if verify:
            print("[encode] verify: ok")
    return meta


def add_arguments(ap: argparse.ArgumentParser):
    ap.add_argument("image", help="source image (any format Pillow reads)")
    ap.add_argument("container", help="output splash container")
    mode = ap.add_mutually_exclusive_group()
    mode.add_argument("--rle", dest="rle", action="store_true", default=None,
                      help="RLE body (default unless RLE24=0)")
    mode.add_argument("--raw", dest="rle", action="store_false",
                      help="uncompressed BGR body")
    ap.add_argument("--pad", action="store_true", help="zero-pad body to 512-byte blocks")
    ap.add_argument("--verify", action="store_true", help="decode in memory and compare")
    ap.add_argument("--quiet", action="store_true")


def run(args):
    rle = rle_from_env() if args.rle is None else args.rle
    encode_file(args.image, args.container, rle=rle, pad=args.pad,
                verify=args.verify, quiet=args.quiet)


def main(argv=None):
    ap = argparse.ArgumentParser(description="image -> splash container")
    add_arguments(ap)
    run(ap.parse_args(argv))


if __name__ == "__main__":
    main()
