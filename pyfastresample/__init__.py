"""
PyFastResample: Taichi-accelerated resampling of 2D image slices.

Resizes (nearest-neighbor, bilinear) and flips raster slices extracted from
volumetric data before display. Slices are flat row-major buffers with any
number of interleaved channels per cell.

Submodules:
- rastermanip: scaling, flipping, display fitting and element kinds
- pool: reusable Taichi field pool
- errors: exception types
- constants: package defaults
- cli: command line tools (pfr-scale, pfr-flip, pfr-slice2png)

Taichi must be initialised (ti.init) before the first resampling call.

Author: B.G.
"""

from . import constants
from . import errors
from . import pool
from . import rastermanip
from .errors import (
    ResampleError,
    InvalidDimensionError,
    SizeMismatchError,
    UnsupportedElementKindError,
)
from .rastermanip import flip_grid, resize_to_max_dim, scale_bilinear, scale_nearest

__version__ = "0.1.0"

__all__ = [
    "constants",
    "errors",
    "pool",
    "rastermanip",
    "ResampleError",
    "InvalidDimensionError",
    "SizeMismatchError",
    "UnsupportedElementKindError",
    "scale_nearest",
    "scale_bilinear",
    "flip_grid",
    "resize_to_max_dim",
]
