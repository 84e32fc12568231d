import logging

from bmp_parser import row_stride

logger = logging.getLogger(__name__)


def _le(value, size, signed=False):
    return value.to_bytes(size, 'little', signed=signed)


def encode_file_header(header):
    return (
        header.signature
        + _le(header.file_size, 4)
        + header.reserved
        + _le(header.offset, 4)
    )


def encode_info_header(header):
    return (
        _le(header.header_size, 4)
        + _le(header.width, 4, signed=True)
        + _le(header.height, 4, signed=True)
        + _le(header.color_planes, 2)
        + _le(header.bits_per_pixel, 2)
        + _le(header.compression, 4)
        + _le(header.image_size, 4)
        + header.extra
    )


def encode_pixels(grid, bits_per_pixel):
    stride = row_stride(bits_per_pixel, grid.width)
    padding = bytes(stride - 3 * grid.width)
    out = bytearray()
    # Row 0 is the bottom scanline and is written first
    for row in range(grid.height):
        for pixel in grid.row(row):
            out.append(pixel.blue)
            out.append(pixel.green)
            out.append(pixel.red)
        out += padding
    return bytes(out)


def encode(bitmap):
    """
    Encode a Bitmap back to BMP bytes.

    Both headers and the gap before the pixel array are written exactly as they
    were decoded; only the pixel rows and their zero padding are generated.
    """
    return (
        encode_file_header(bitmap.file_header)
        + encode_info_header(bitmap.info_header)
        + bitmap.gap
        + encode_pixels(bitmap.pixels, bitmap.info_header.bits_per_pixel)
    )


def write(bitmap, stream):
    data = encode(bitmap)
    written = stream.write(data)
    # Raw (unbuffered) streams may accept only part of the data
    if written is not None and written != len(data):
        raise OSError(f"short write: {written} of {len(data)} bytes accepted")
    return len(data)


def save(bitmap, filepath):
    with open(filepath, "wb") as f:
        size = write(bitmap, f)
    logger.info("Wrote %s (%d bytes)", filepath, size)
    return size
