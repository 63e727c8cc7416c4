"""
Grid scaling operations for PyFastResample.

Resizes flat row-major grids of interleaved channels to arbitrary target
dimensions using nearest-neighbor sampling or bilinear interpolation. Work is
done per target cell in Taichi kernels; the float result is then passed
through the requested element kind's clamp-and-convert rule.

Source positions are derived from ``t * n_src / n_t`` in integer arithmetic
so the floor/ceil neighbours and blend weights are exact.

When source and target dimensions are equal both operations return the
source object itself (no copy, no conversion).

Author: B.G.
"""

import logging

import taichi as ti

from .. import constants as cte
from .element_kinds import get_element_kind
from .gridio import as_flat_buffer, check_dimension, run_on_fields, validate_grid

logger = logging.getLogger(__name__)


@ti.func
def _scaled_position(t: ti.i32, n_src: ti.i32) -> cte.INDEX_TYPE_TI:
    return ti.cast(t, cte.INDEX_TYPE_TI) * ti.cast(n_src, cte.INDEX_TYPE_TI)


@ti.func
def _lower_index(t: ti.i32, n_src: ti.i32, n_t: ti.i32) -> ti.i32:
    return ti.cast(_scaled_position(t, n_src) // n_t, ti.i32)


@ti.func
def _upper_index(t: ti.i32, n_src: ti.i32, n_t: ti.i32) -> ti.i32:
    pos = _scaled_position(t, n_src)
    res = ti.cast(pos // n_t, ti.i32)
    if pos % n_t != 0:
        res += 1
    # ceil of the last target positions can land one past the source edge
    return ti.min(res, n_src - 1)


@ti.func
def _blend_weight(t: ti.i32, n_src: ti.i32, n_t: ti.i32) -> cte.FLOAT_TYPE_TI:
    rem = _scaled_position(t, n_src) % n_t
    w = ti.cast(0.5, cte.FLOAT_TYPE_TI)
    if rem != 0:
        w = ti.cast(rem, cte.FLOAT_TYPE_TI) / ti.cast(n_t, cte.FLOAT_TYPE_TI)
    return w


@ti.kernel
def nearest_kernel(
    source_field: ti.template(),
    target_field: ti.template(),
    nx_src: ti.i32,
    ny_src: ti.i32,
    nx_t: ti.i32,
    ny_t: ti.i32,
    block_size: ti.i32,
):
    """
    Nearest-neighbor resampling.

    Target cell (i_t, j_t) copies every channel of source cell
    (floor(i_t * nx_src / nx_t), floor(j_t * ny_src / ny_t)).

    Args:
        source_field: Flat source (nx_src * ny_src * block_size elements)
        target_field: Flat target (nx_t * ny_t * block_size elements)
        nx_src: Source width
        ny_src: Source height
        nx_t: Target width
        ny_t: Target height
        block_size: Channels per cell
    """
    for idx in range(nx_t * ny_t):
        j_t = idx // nx_t
        i_t = idx % nx_t

        j_s = _lower_index(j_t, ny_src, ny_t)
        i_s = _lower_index(i_t, nx_src, nx_t)

        source_offset = (j_s * nx_src + i_s) * block_size
        target_offset = idx * block_size
        for k in range(block_size):
            target_field[target_offset + k] = source_field[source_offset + k]


@ti.kernel
def bilinear_kernel(
    source_field: ti.template(),
    target_field: ti.template(),
    nx_src: ti.i32,
    ny_src: ti.i32,
    nx_t: ti.i32,
    ny_t: ti.i32,
    block_size: ti.i32,
    extend_border: ti.i32,
):
    """
    Bilinear resampling.

    Each target cell blends the four source cells around its fractional
    source position: a horizontal lerp on the top and bottom rows, then a
    vertical lerp between them. A weight of 0.5 is used along an axis where
    the position falls exactly on a source cell.

    With extend_border == 0 the outermost ring of target rows and columns is
    skipped and keeps whatever the target field held (zero when staged by
    run_on_fields).
    """
    for idx in range(nx_t * ny_t):
        j_t = idx // nx_t
        i_t = idx % nx_t

        on_ring = j_t == 0 or j_t == ny_t - 1 or i_t == 0 or i_t == nx_t - 1
        if on_ring and extend_border == 0:
            continue

        x0 = _lower_index(i_t, nx_src, nx_t)
        x1 = _upper_index(i_t, nx_src, nx_t)
        y0 = _lower_index(j_t, ny_src, ny_t)
        y1 = _upper_index(j_t, ny_src, ny_t)
        wx = _blend_weight(i_t, nx_src, nx_t)
        wy = _blend_weight(j_t, ny_src, ny_t)

        top_left = (y0 * nx_src + x0) * block_size
        top_right = (y0 * nx_src + x1) * block_size
        bottom_left = (y1 * nx_src + x0) * block_size
        bottom_right = (y1 * nx_src + x1) * block_size
        target_offset = idx * block_size

        for k in range(block_size):
            top = (1.0 - wx) * source_field[top_left + k] + wx * source_field[
                top_right + k
            ]
            bottom = (1.0 - wx) * source_field[bottom_left + k] + wx * source_field[
                bottom_right + k
            ]
            target_field[target_offset + k] = (1.0 - wy) * top + wy * bottom


def _prepare(source, width, height, target_width, target_height, block_size):
    width, height, block_size = validate_grid(source, width, height, block_size)
    target_width = check_dimension("target_width", target_width)
    target_height = check_dimension("target_height", target_height)
    return width, height, target_width, target_height, block_size


def scale_nearest(
    source,
    width,
    height,
    target_width,
    target_height,
    block_size: int = cte.DEFAULT_BLOCK_SIZE,
    element_kind=cte.DEFAULT_ELEMENT_KIND,
    return_field: bool = False,
):
    """
    Resize a grid using nearest-neighbor sampling.

    Each target cell's channels are copied verbatim from exactly one source
    cell, then converted with ``element_kind``.

    Args:
        source: Flat row-major buffer (NumPy array of any shape, list, tuple,
                bytes-like object or Taichi field) of width*height*block_size
                elements
        width: Source width in cells
        height: Source height in cells
        target_width: Width of the scaled grid (>0)
        target_height: Height of the scaled grid (>0)
        block_size: Interleaved channels per cell (default: 1)
        element_kind: Output representation, name or ElementKind
                      (default: 'uint8_clamped')
        return_field: If True, return a Taichi field instead of a NumPy array

    Returns:
        numpy.ndarray or taichi.Field: Flat target buffer of
        target_width*target_height*block_size elements, or ``source`` itself
        when the dimensions already match.

    Raises:
        InvalidDimensionError: a dimension or block_size is not positive
        SizeMismatchError: source length differs from width*height*block_size
        UnsupportedElementKindError: element_kind cannot be resolved

    Example:
        # RGBA slice, 256x256 -> 512x512
        scaled = scale_nearest(rgba, 256, 256, 512, 512, block_size=4)
    """
    width, height, target_width, target_height, block_size = _prepare(
        source, width, height, target_width, target_height, block_size
    )
    kind = get_element_kind(element_kind)

    if width == target_width and height == target_height:
        logger.debug("scale_nearest: %dx%d unchanged, returning source", width, height)
        return source

    logger.debug(
        "scale_nearest: %dx%d -> %dx%d (block_size=%d, kind=%s)",
        width, height, target_width, target_height, block_size, kind.name,
    )
    data = as_flat_buffer(source)
    return run_on_fields(
        nearest_kernel,
        data,
        target_width * target_height * block_size,
        kind,
        width,
        height,
        target_width,
        target_height,
        block_size,
        return_field=return_field,
    )


def scale_bilinear(
    source,
    width,
    height,
    target_width,
    target_height,
    block_size: int = cte.DEFAULT_BLOCK_SIZE,
    element_kind=cte.DEFAULT_ELEMENT_KIND,
    border: str = cte.DEFAULT_BORDER,
    return_field: bool = False,
):
    """
    Resize a grid using bilinear interpolation.

    Interior target cells are a weighted blend of the four nearest source
    cells, converted with ``element_kind`` (rounded and clamped for the
    integer kinds).

    Args:
        source: Flat row-major buffer of width*height*block_size elements
        width: Source width in cells
        height: Source height in cells
        target_width: Width of the scaled grid (>0)
        target_height: Height of the scaled grid (>0)
        block_size: Interleaved channels per cell (default: 1)
        element_kind: Output representation (default: 'uint8_clamped')
        border: 'zero' leaves the outermost ring of target rows and columns
                at 0 (reference behaviour); 'extend' interpolates it too
        return_field: If True, return a Taichi field instead of a NumPy array

    Returns:
        numpy.ndarray or taichi.Field: Flat target buffer, or ``source``
        itself when the dimensions already match.

    Raises:
        InvalidDimensionError, SizeMismatchError, UnsupportedElementKindError
        ValueError: unknown border mode
    """
    width, height, target_width, target_height, block_size = _prepare(
        source, width, height, target_width, target_height, block_size
    )
    kind = get_element_kind(element_kind)
    if border not in cte.BORDER_MODES:
        raise ValueError(f"border must be one of {cte.BORDER_MODES}, got '{border}'")

    if width == target_width and height == target_height:
        logger.debug("scale_bilinear: %dx%d unchanged, returning source", width, height)
        return source

    logger.debug(
        "scale_bilinear: %dx%d -> %dx%d (block_size=%d, kind=%s, border=%s)",
        width, height, target_width, target_height, block_size, kind.name, border,
    )
    data = as_flat_buffer(source)
    return run_on_fields(
        bilinear_kernel,
        data,
        target_width * target_height * block_size,
        kind,
        width,
        height,
        target_width,
        target_height,
        block_size,
        1 if border == "extend" else 0,
        return_field=return_field,
    )


__all__ = ["scale_nearest", "scale_bilinear", "nearest_kernel", "bilinear_kernel"]
