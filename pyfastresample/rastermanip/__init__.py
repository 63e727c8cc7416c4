"""Raster manipulation module for PyFastResample.

Resizes and reorients 2D slices stored as flat row-major buffers of
interleaved channels: nearest-neighbor and bilinear scaling to arbitrary
target dimensions, and axis flips. Per-cell work runs in Taichi kernels with
temporary fields borrowed from the memory pool; outputs are converted through
a pluggable element kind (clamped 8-bit by default).

Usage:
    import taichi as ti
    import pyfastresample as pr

    ti.init(ti.cpu)
    big = pr.rastermanip.scale_bilinear(slice_data, 256, 256, 512, 512)
    upright = pr.rastermanip.flip_grid(big, 512, 512, flip_y=True)

Author: B.G.
"""

from .element_kinds import (
    ElementKind,
    available_element_kinds,
    get_element_kind,
    register_element_kind,
)
from .scaling import scale_nearest, scale_bilinear, nearest_kernel, bilinear_kernel
from .flipping import flip_grid, flip_kernel
from .fitting import resize_to_max_dim, target_shape_for_max_dim

__all__ = [
    "ElementKind",
    "available_element_kinds",
    "get_element_kind",
    "register_element_kind",
    "scale_nearest",
    "scale_bilinear",
    "nearest_kernel",
    "bilinear_kernel",
    "flip_grid",
    "flip_kernel",
    "resize_to_max_dim",
    "target_shape_for_max_dim",
]
