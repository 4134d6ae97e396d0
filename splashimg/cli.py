import argparse
import sys

from splashimg import decode, encode
from splashimg.errors import SplashError


def build_parser():
    ap = argparse.ArgumentParser(
        prog="splashimg",
        description="Convert images to/from firmware splash containers.",
        epilog="Set RLE24=0 to write raw (uncompressed) bodies by default.",
    )
    sub = ap.add_subparsers(dest="command", required=True)

    enc = sub.add_parser("encode", help="image -> splash container")
    encode.add_arguments(enc)
    enc.set_defaults(run=encode.run)

    dec = sub.add_parser("decode", help="splash container -> PNG")
    decode.add_arguments(dec)
    dec.set_defaults(run=decode.run)
    return ap


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    try:
        args.run(args)
    except (SplashError, OSError) as e:
        print(f"[splashimg] error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
