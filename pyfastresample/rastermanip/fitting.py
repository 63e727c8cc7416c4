"""
Fit a slice into a maximum display dimension while keeping its aspect ratio.

Author: B.G.
"""

from .. import constants as cte
from .gridio import check_dimension
from .scaling import scale_bilinear, scale_nearest

_METHODS = {
    "nearest": scale_nearest,
    "bilinear": scale_bilinear,
}


def target_shape_for_max_dim(width, height, max_dim):
    """
    Compute target dimensions whose longer side equals ``max_dim``.

    The shorter side is scaled by the same factor, rounded, and never drops
    below 1.

    Returns:
        tuple: (target_width, target_height)
    """
    width = check_dimension("width", width)
    height = check_dimension("height", height)
    max_dim = check_dimension("max_dim", max_dim)

    if width >= height:
        return max_dim, max(1, int(round(height * max_dim / width)))
    return max(1, int(round(width * max_dim / height))), max_dim


def resize_to_max_dim(
    source,
    width,
    height,
    max_dim,
    method: str = "nearest",
    block_size: int = cte.DEFAULT_BLOCK_SIZE,
    element_kind=cte.DEFAULT_ELEMENT_KIND,
    **kwargs,
):
    """
    Scale a grid so that its longer side is ``max_dim`` cells.

    Args:
        source: Flat row-major buffer of width*height*block_size elements
        width: Source width
        height: Source height
        max_dim: Size of the longer side after scaling
        method: 'nearest' or 'bilinear'
        block_size: Channels per cell
        element_kind: Output representation
        **kwargs: Forwarded to the scaling function (border, return_field)

    Returns:
        tuple: (target, target_width, target_height)

    Example:
        # Zoom a 181x217 MRI slice to fit a 512 pixel panel
        img, w, h = resize_to_max_dim(slice_data, 181, 217, 512, method="bilinear")
    """
    if method not in _METHODS:
        raise ValueError(f"method must be one of {tuple(_METHODS)}, got '{method}'")
    target_width, target_height = target_shape_for_max_dim(width, height, max_dim)
    target = _METHODS[method](
        source,
        width,
        height,
        target_width,
        target_height,
        block_size=block_size,
        element_kind=element_kind,
        **kwargs,
    )
    return target, target_width, target_height


__all__ = ["resize_to_max_dim", "target_shape_for_max_dim"]
