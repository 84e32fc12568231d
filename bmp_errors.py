class BMPError(Exception):
    """Base class for every error raised while reading a BMP file."""

    def __init__(self, message, field=None, expected=None, actual=None):
        self.field = field
        self.expected = expected
        self.actual = actual
        if field is not None:
            message = f"{message} ({field}: expected {expected}, found {actual})"
        super().__init__(message)


class FormatError(BMPError):
    """The bytes are not a BMP file at all."""


class UnsupportedFormatError(BMPError):
    """A valid BMP, but a variant this codec does not handle."""


class InvalidDimensionError(BMPError):
    pass


class TruncatedInputError(BMPError):
    pass
