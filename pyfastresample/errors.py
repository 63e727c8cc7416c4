"""
Exception types raised by the resampling operations.

All errors derive from ResampleError so callers can catch the whole family,
and from the builtin they specialise so generic ``except ValueError`` code
keeps working.

Author: B.G.
"""


class ResampleError(Exception):
    """Base class for resampling failures."""


class InvalidDimensionError(ResampleError, ValueError):
    """A width, height, block size or target dimension is not a positive integer."""

    def __init__(self, name, value):
        self.name = name
        self.value = value
        super().__init__(f"{name} must be a positive integer, got {value!r}")


class SizeMismatchError(ResampleError, ValueError):
    """Source buffer length does not match width * height * block_size."""

    def __init__(self, length, width, height, block_size):
        self.length = length
        self.expected = width * height * block_size
        super().__init__(
            f"Source buffer holds {length} elements, expected "
            f"{width} * {height} * {block_size} = {self.expected}"
        )


class UnsupportedElementKindError(ResampleError, TypeError):
    """Requested output representation has no clamp-and-convert rule."""


__all__ = [
    "ResampleError",
    "InvalidDimensionError",
    "SizeMismatchError",
    "UnsupportedElementKindError",
]
