#!/usr/bin/env python3
"""Write the photometric negative of a 24-bit BMP image.

Usage:
    python negate_bmp.py photo.bmp                 # writes temp_file.bmp
    python negate_bmp.py photo.bmp -o negative.bmp
    python negate_bmp.py                           # asks for the file name
"""

import argparse
import logging
import sys

import bmp_parser
import bmp_writer
from bmp_errors import BMPError
from negative import negate_bitmap
from validation import FILE_HEADER_SIZE, INFO_HEADER_SIZE

DEFAULT_OUTPUT_PATH = "temp_file.bmp"

logger = logging.getLogger("negate_bmp")


def print_headers(fh, ih):
    print(
        f"Header Data\n"
        f"------------------\n"
        f"  Signature:           {fh.signature.decode('latin-1')}\n"
        f"  File Size:           {fh.file_size} bytes\n"
        f"  Data Offset:         {fh.offset}\n"
        f"\n"
        f"DIB Header Data\n"
        f"------------------\n"
        f"  Header Size:         {ih.header_size}\n"
        f"  Width:               {ih.width}\n"
        f"  Height:              {ih.height}\n"
        f"  Color Planes:        {ih.color_planes}\n"
        f"  Bits per Pixel:      {ih.bits_per_pixel}\n"
        f"  Compression:         {ih.compression}\n"
        f"  Image Data Size:     {ih.image_size}"
    )


def convert(input_path, output_path=DEFAULT_OUTPUT_PATH, show_headers=False):
    """Decode ``input_path``, invert every pixel and write ``output_path``."""
    with open(input_path, "rb") as f:
        data = f.read()

    # Shown before validation so a rejected file still gets its header dump
    if show_headers and len(data) >= FILE_HEADER_SIZE + INFO_HEADER_SIZE:
        print_headers(*bmp_parser.parse_headers(data))

    bitmap = bmp_parser.decode_bytes(data)
    logger.info("Read %s (%dx%d)", input_path, bitmap.pixels.width, bitmap.pixels.height)
    bmp_writer.save(negate_bitmap(bitmap), output_path)
    return bitmap


def main(argv=None):
    parser = argparse.ArgumentParser(description="Write the negative of a 24-bit BMP image")
    parser.add_argument("input", nargs="?", help="BMP file to convert")
    parser.add_argument("-o", "--output", default=DEFAULT_OUTPUT_PATH,
                        help=f"Output file path (default: {DEFAULT_OUTPUT_PATH})")
    parser.add_argument("-q", "--quiet", action="store_true", help="Do not print header data")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug output")
    args = parser.parse_args(argv)

    logging.basicConfig(format="%(name)s -- %(message)s",
                        level=logging.DEBUG if args.verbose else logging.WARNING)

    input_path = args.input
    if not input_path:
        try:
            input_path = input("Enter the name of the BMP image file (add .bmp extension): ").strip()
        except EOFError:
            input_path = ""
        if not input_path:
            print("ERROR: No input file given.", file=sys.stderr)
            return 1

    try:
        convert(input_path, args.output, show_headers=not args.quiet)
    except BMPError as e:
        print(f"ERROR: Could not process {input_path}: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    if not args.quiet:
        print(f"\nNegative written to {args.output}")
    logger.debug("Converted %s -> %s", input_path, args.output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
