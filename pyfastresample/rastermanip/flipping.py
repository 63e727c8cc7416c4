"""
Axis reversal for flat row-major grids.

Without an element kind the flip is a pure permutation in the source dtype,
so any NumPy dtype (int64, bool, ...) is reversed exactly. With a kind the
cells are gathered by flip_kernel on staged fields and then converted.

Author: B.G.
"""

import logging

import numpy as np
import taichi as ti

from .. import constants as cte
from .element_kinds import get_element_kind
from .gridio import as_flat_buffer, run_on_fields, to_field, validate_grid

logger = logging.getLogger(__name__)


@ti.kernel
def flip_kernel(
    source_field: ti.template(),
    target_field: ti.template(),
    nx: ti.i32,
    ny: ti.i32,
    block_size: ti.i32,
    flip_x: ti.i32,
    flip_y: ti.i32,
):
    """
    Reverse columns (flip_x) and/or rows (flip_y).

    Target cell (i, j) takes source cell (nx-1-i or i, ny-1-j or j).
    """
    for idx in range(nx * ny):
        j = idx // nx
        i = idx % nx

        y = j
        if flip_y != 0:
            y = ny - 1 - j
        x = i
        if flip_x != 0:
            x = nx - 1 - i

        source_offset = (y * nx + x) * block_size
        target_offset = idx * block_size
        for k in range(block_size):
            target_field[target_offset + k] = source_field[source_offset + k]


def _flip_cells(data, width, height, block_size, flip_x, flip_y):
    """Reverse rows and/or columns of ``data`` into a new buffer of its dtype."""
    cells = data.reshape(height, width, block_size)
    if flip_y:
        cells = cells[::-1]
    if flip_x:
        cells = cells[:, ::-1]
    return cells.copy().reshape(-1)


def flip_grid(
    source,
    width,
    height,
    flip_x: bool = False,
    flip_y: bool = False,
    block_size: int = cte.DEFAULT_BLOCK_SIZE,
    element_kind=None,
    return_field: bool = False,
):
    """
    Flip a grid along its x axis, y axis, or both.

    The target always has the source dimensions and is freshly allocated;
    with neither flag set it is an exact copy. Flipping twice with the same
    flags reproduces the source content.

    Args:
        source: Flat row-major buffer of width*height*block_size elements
        width: Grid width in cells
        height: Grid height in cells
        flip_x: Reverse the order of columns (default: False)
        flip_y: Reverse the order of rows (default: False)
        block_size: Interleaved channels per cell (default: 1)
        element_kind: Output representation. None (default) keeps the
                      source values and dtype untouched, whatever the dtype.
                      A kind routes the flip through flip_kernel and converts
                      the result.
        return_field: If True, return a Taichi field instead of a NumPy array

    Returns:
        numpy.ndarray or taichi.Field: Flat flipped buffer

    Raises:
        UnsupportedElementKindError: element_kind cannot be resolved, or
            return_field is set for a dtype Taichi fields cannot hold

    Example:
        # Viewer slices come bottom-up; display wants them top-down
        display = flip_grid(slice_data, 256, 256, flip_y=True)
    """
    width, height, block_size = validate_grid(source, width, height, block_size)
    data = as_flat_buffer(source)

    if element_kind is None:
        logger.debug(
            "flip_grid: %dx%d in source dtype %s (flip_x=%s, flip_y=%s)",
            width, height, data.dtype, flip_x, flip_y,
        )
        result = _flip_cells(data, width, height, block_size, flip_x, flip_y)
        if return_field:
            return to_field(result)
        return result

    kind = get_element_kind(element_kind)
    if not flip_x and not flip_y:
        logger.debug("flip_grid: no axis selected, copying %dx%d grid", width, height)
        result = kind.convert(np.array(data, copy=True))
        if return_field:
            return to_field(result, kind.ti_dtype)
        return result

    logger.debug(
        "flip_grid: %dx%d (flip_x=%s, flip_y=%s, block_size=%d, kind=%s)",
        width, height, flip_x, flip_y, block_size, kind.name,
    )
    return run_on_fields(
        flip_kernel,
        data,
        data.size,
        kind,
        width,
        height,
        block_size,
        1 if flip_x else 0,
        1 if flip_y else 0,
        return_field=return_field,
    )


__all__ = ["flip_grid", "flip_kernel"]
