"""
Slice to PNG Conversion CLI Commands for PyFastResample

Command line interface for rendering a resampled slice to a PNG image.

Author: B.G.
"""

import sys

import click
import numpy as np
from PIL import Image

import pyfastresample as pr

from .rastermanip_commands import init_backend, load_slice


def normalise_to_uint8(data):
    """Linearly map a slice onto [0, 255]; constant slices become 0."""
    data = np.asarray(data, dtype=np.float64)
    lo = np.nanmin(data)
    hi = np.nanmax(data)
    if lo == hi:
        return np.zeros(data.shape, dtype=np.float64)
    return np.nan_to_num((data - lo) / (hi - lo) * 255.0, nan=0.0)


@click.command()
@click.argument("input_npy", type=click.Path(exists=True))
@click.option(
    "-o",
    "--output",
    type=click.Path(),
    default=None,
    help="Output PNG filename (default: input name with .png extension)",
)
@click.option(
    "--max-dim",
    "-d",
    type=int,
    default=512,
    show_default=True,
    help="Size of the longer side of the image",
)
@click.option(
    "--method",
    "-m",
    type=click.Choice(["nearest", "bilinear"]),
    default="nearest",
    show_default=True,
    help="Interpolation method",
)
@click.option("--flip-x", "-x", is_flag=True, help="Reverse columns")
@click.option("--flip-y", "-y", is_flag=True, help="Reverse rows")
@click.option("--gpu/--cpu", default=False, show_default=True, help="Taichi backend")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
def slice2png(input_npy, output, max_dim, method, flip_x, flip_y, gpu, verbose):
    """
    Render a 2D slice stored as .npy to a grayscale PNG.

    The slice is normalised to 0-255, fitted so its longer side is
    MAX_DIM pixels, optionally flipped, and saved as an 8-bit image.

    INPUT_NPY: Path to a (h, w) .npy slice

    Examples:

        # Fit a slice into 512 pixels with bilinear interpolation
        pfr-slice2png slice.npy --method bilinear

        # Flip upside down and name the output
        pfr-slice2png slice.npy --flip-y -o axial.png
    """
    try:
        init_backend(gpu)
        data, width, height, block_size = load_slice(input_npy)
        if block_size != 1:
            raise ValueError("slice2png expects a single channel (h, w) slice")

        if output is None:
            output = input_npy.rsplit(".", 1)[0] + ".png"

        if verbose:
            click.echo(f"Processing slice (shape: {data.shape})...")

        normalised = normalise_to_uint8(data)
        img, target_width, target_height = pr.rastermanip.resize_to_max_dim(
            normalised, width, height, max_dim, method=method
        )
        if img is normalised:
            img = pr.rastermanip.get_element_kind("uint8_clamped").convert(img)
        if flip_x or flip_y:
            img = pr.rastermanip.flip_grid(
                img, target_width, target_height, flip_x=flip_x, flip_y=flip_y
            )

        # 2D uint8 arrays map to 8-bit grayscale ("L")
        image = Image.fromarray(
            np.asarray(img, dtype=np.uint8).reshape(target_height, target_width)
        )

        if verbose:
            click.echo(f"Saving PNG to '{output}'...")
        image.save(output)
        click.echo(f"Converted '{input_npy}' -> '{output}' ({target_width}x{target_height})")

    except Exception as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


if __name__ == "__main__":
    slice2png()
