import logging
from collections import namedtuple

from bmp_errors import TruncatedInputError
from validation import (
    FILE_HEADER_SIZE, INFO_HEADER_SIZE, check_signature, check_header_size,
    first_rejection
)

logger = logging.getLogger(__name__)

FileHeader = namedtuple("FileHeader", ["signature", "file_size", "reserved", "offset"])

InfoHeader = namedtuple("InfoHeader", [
    "header_size",
    "width",
    "height",
    "color_planes",
    "bits_per_pixel",
    "compression",
    "image_size",
    "extra",         # 16 opaque bytes: resolution and palette counts
])

Pixel = namedtuple("Pixel", ["blue", "green", "red"])

# gap holds whatever sits between the info header and the pixel array
Bitmap = namedtuple("Bitmap", ["file_header", "info_header", "gap", "pixels"])


def row_stride(bits_per_pixel, width):
    # Each row is padded to a multiple of 4 bytes
    return ((bits_per_pixel * width + 31) // 32) * 4


class PixelGrid:
    """
    Rectangular grid of pixels stored in one flat list.

    Row 0 is the bottom scanline of the image, the same row that comes first
    in the file.
    """

    def __init__(self, width, height, pixels=None):
        self.width = width
        self.height = height
        if pixels is None:
            pixels = [Pixel(0, 0, 0)] * (width * height)
        if len(pixels) != width * height:
            raise ValueError(f"expected {width * height} pixels, got {len(pixels)}")
        self.pixels = list(pixels)

    def get(self, row, col):
        return self.pixels[self._index(row, col)]

    def set(self, row, col, pixel):
        self.pixels[self._index(row, col)] = pixel

    def row(self, row):
        start = self._index(row, 0)
        return self.pixels[start:start + self.width]

    def copy(self):
        return PixelGrid(self.width, self.height, self.pixels)

    def _index(self, row, col):
        if not (0 <= row < self.height and 0 <= col < self.width):
            raise IndexError(f"pixel ({row}, {col}) outside {self.width}x{self.height} grid")
        return row * self.width + col

    def __eq__(self, other):
        if not isinstance(other, PixelGrid):
            return NotImplemented
        return (self.width, self.height, self.pixels) == (other.width, other.height, other.pixels)

    def __repr__(self):
        return f"PixelGrid({self.width}x{self.height})"


def _take(data, start, size, what):
    # Bounds are checked before slicing, so a header declaring more data than
    # the file holds never causes a large allocation
    found = max(0, len(data) - start)
    if size > found:
        raise TruncatedInputError(f"file ends inside {what}", "bytes", size, found)
    return data[start:start + size]


def _u(data, start, end, signed=False):
    return int.from_bytes(data[start:end], 'little', signed=signed)


def parse_file_header(data):
    return FileHeader(
        signature=bytes(data[0:2]),
        file_size=_u(data, 2, 6),
        reserved=bytes(data[6:10]),
        offset=_u(data, 10, 14),
    )


def parse_info_header(data):
    return InfoHeader(
        header_size=_u(data, 0, 4),
        width=_u(data, 4, 8, signed=True),
        height=_u(data, 8, 12, signed=True),
        color_planes=_u(data, 12, 14),
        bits_per_pixel=_u(data, 14, 16),
        compression=_u(data, 16, 20),
        image_size=_u(data, 20, 24),
        extra=bytes(data[24:40]),
    )


def parse_headers(data):
    """Both headers as they appear in the file, without any validation."""
    file_header = parse_file_header(_take(data, 0, FILE_HEADER_SIZE, "file header"))
    info_header = parse_info_header(
        _take(data, FILE_HEADER_SIZE, INFO_HEADER_SIZE, "info header")
    )
    return file_header, info_header


def decode_bytes(data):
    """
    Decode a 24-bit uncompressed BMP held in memory.

    Raises FormatError, UnsupportedFormatError, InvalidDimensionError or
    TruncatedInputError; nothing is returned for a file that fails a check.
    """
    file_header = parse_file_header(_take(data, 0, FILE_HEADER_SIZE, "file header"))
    logger.debug("File header: %s", file_header)
    error = check_signature(file_header.signature)
    if error is not None:
        raise error

    # Only the size is trusted until it is known to be a 40-byte header
    error = check_header_size(_u(_take(data, FILE_HEADER_SIZE, 4, "info header"), 0, 4))
    if error is not None:
        raise error
    info_header = parse_info_header(
        _take(data, FILE_HEADER_SIZE, INFO_HEADER_SIZE, "info header")
    )
    logger.debug("Info header: %s", info_header)

    error = first_rejection(file_header, info_header)
    if error is not None:
        raise error

    headers_end = FILE_HEADER_SIZE + INFO_HEADER_SIZE
    gap = bytes(_take(data, headers_end, file_header.offset - headers_end,
                      "data before the pixel array"))

    width = info_header.width
    height = info_header.height
    stride = row_stride(info_header.bits_per_pixel, width)
    pixel_array = _take(data, file_header.offset, stride * height, "pixel array")
    pixels = []
    for row in range(height):
        start = row * stride
        for col in range(width):
            idx = start + col * 3
            pixels.append(Pixel(pixel_array[idx], pixel_array[idx + 1], pixel_array[idx + 2]))

    logger.debug("Decoded %dx%d pixels, row stride %d", width, height, stride)
    return Bitmap(file_header, info_header, gap, PixelGrid(width, height, pixels))


def decode(stream):
    # Whole-file buffering; every size in the headers is checked against it
    return decode_bytes(stream.read())


def load(filepath):
    with open(filepath, "rb") as f:
        bitmap = decode(f)
    logger.info("Read %s (%dx%d)", filepath, bitmap.pixels.width, bitmap.pixels.height)
    return bitmap


def describe(bitmap):
    """Header fields worth showing to a person, in file order."""
    fh = bitmap.file_header
    ih = bitmap.info_header
    return {
        'signature': fh.signature.decode('latin-1'),
        'file_size': fh.file_size,
        'data_offset': fh.offset,
        'header_size': ih.header_size,
        'width': ih.width,
        'height': ih.height,
        'color_planes': ih.color_planes,
        'bpp': ih.bits_per_pixel,
        'compression': ih.compression,
        'image_size': ih.image_size,
    }


class BMPParser:
    def __init__(self, filepath):
        self.filepath = filepath
        self.bitmap = None
        self.metadata = {}      # Store header information (width, height, etc.)
        self.pixel_data = None  # PixelGrid, row 0 at the bottom

    def load(self):
        self.bitmap = load(self.filepath)
        self.metadata = describe(self.bitmap)
        self.pixel_data = self.bitmap.pixels
        return self.bitmap
