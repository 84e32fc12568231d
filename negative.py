from bmp_parser import Bitmap, Pixel


def negate_pixel(pixel):
    # Every channel is inverted on its own; they are never combined
    return Pixel(255 - pixel.blue, 255 - pixel.green, 255 - pixel.red)


def negate_grid(grid):
    """Return a new grid holding the photometric negative of ``grid``."""
    return negate_in_place(grid.copy())


def negate_in_place(grid):
    pixels = grid.pixels
    for i, pixel in enumerate(pixels):
        pixels[i] = negate_pixel(pixel)
    return grid


def negate_bitmap(bitmap):
    """Same headers, inverted pixels. The input bitmap is left untouched."""
    return Bitmap(bitmap.file_header, bitmap.info_header, bitmap.gap,
                  negate_grid(bitmap.pixels))
