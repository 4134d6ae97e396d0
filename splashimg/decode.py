import argparse
import io

from splashimg.bitstream import KIND_RLE
from splashimg.codec_core import decode_container
from splashimg.fileio import write_atomic
from splashimg.pixels import bgr_to_image


def decode_file(src, dst, *, quiet: bool = False):
    with open(src, "rb") as f:
        data = f.read()
    h, bgr = decode_container(data)

    buf = io.BytesIO()
    bgr_to_image(bgr).save(buf, format="PNG")
    write_atomic(dst, buf.getvalue())

    if not quiet:
        kind = "rle" if h["kind"] == KIND_RLE else "raw"
        print(f"[decode] wrote {dst}")
        print(f"[decode] {h['width']}x{h['height']} kind={kind} blocks={h['blocks']}")
    return h


def add_arguments(ap: argparse.ArgumentParser):
    ap.add_argument("container", help="splash container")
    ap.add_argument("image", help="output PNG")
    ap.add_argument("--quiet", action="store_true")


def run(args):
    decode_file(args.container, args.image, quiet=args.quiet)


def main(argv=None):
    ap = argparse.ArgumentParser(description="splash container -> PNG")
    add_arguments(ap)
    run(ap.parse_args(argv))


if __name__ == "__main__":
    main()
