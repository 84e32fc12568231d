from bmp_errors import (
    FormatError, UnsupportedFormatError, InvalidDimensionError
)

FILE_HEADER_SIZE = 14
INFO_HEADER_SIZE = 40
BITS_PER_PIXEL = 24
COLOR_PLANES = 1
COMPRESSION_NONE = 0
SIGNATURE = b'BM'

# Each check looks at one header field and returns None when the value is
# accepted, or the error to raise when it is not. They never raise themselves.


def check_signature(signature):
    if signature != SIGNATURE:
        return FormatError("bad signature", "signature", SIGNATURE, signature)
    return None


def check_header_size(size):
    if size != INFO_HEADER_SIZE:
        return UnsupportedFormatError(
            "unsupported info header size", "header_size", INFO_HEADER_SIZE, size
        )
    return None


def check_color_planes(planes):
    if planes != COLOR_PLANES:
        return UnsupportedFormatError(
            "color planes must be 1", "color_planes", COLOR_PLANES, planes
        )
    return None


def check_bits_per_pixel(bits):
    if bits != BITS_PER_PIXEL:
        return UnsupportedFormatError(
            "only 24 bits per pixel is supported", "bits_per_pixel", BITS_PER_PIXEL, bits
        )
    return None


def check_compression(compression):
    if compression != COMPRESSION_NONE:
        return UnsupportedFormatError(
            "image must not be compressed", "compression", COMPRESSION_NONE, compression
        )
    return None


def check_width(width):
    if width <= 0:
        return InvalidDimensionError("width must be positive", "width", "> 0", width)
    return None


def check_height(height):
    # Negative height means top-down rows, which are not supported either
    if height <= 0:
        return InvalidDimensionError("height must be positive", "height", "> 0", height)
    return None


def check_offset(offset):
    minimum = FILE_HEADER_SIZE + INFO_HEADER_SIZE
    if offset < minimum:
        return FormatError(
            "pixel array offset points inside the headers", "offset", f">= {minimum}", offset
        )
    return None


def first_rejection(file_header, info_header):
    """Run every header check in order and return the first failure, or None."""
    checks = (
        (check_signature, file_header.signature),
        (check_header_size, info_header.header_size),
        (check_color_planes, info_header.color_planes),
        (check_bits_per_pixel, info_header.bits_per_pixel),
        (check_compression, info_header.compression),
        (check_width, info_header.width),
        (check_height, info_header.height),
        (check_offset, file_header.offset),
    )
    for check, value in checks:
        error = check(value)
        if error is not None:
            return error
    return None
