"""CLI commands for slice resampling using PyFastResample's rastermanip utilities."""

import sys

import click
import numpy as np
import taichi as ti

import pyfastresample as pr


def init_backend(gpu):
    """Initialise Taichi on the requested arch and reset the field pool."""
    pr.pool.init_taichi(arch=ti.gpu if gpu else ti.cpu)


def load_slice(path):
    """
    Load a .npy slice and describe it as a grid.

    Returns:
        tuple: (data, width, height, block_size)
    """
    data = np.load(path)
    if data.ndim == 2:
        height, width = data.shape
        block_size = 1
    elif data.ndim == 3:
        height, width, block_size = data.shape
    else:
        raise ValueError(f"Expected a (h, w) or (h, w, c) array, got shape {data.shape}")
    return data, width, height, block_size


def save_slice(path, flat, width, height, block_size):
    """Save a flat grid buffer as a (h, w) or (h, w, c) .npy array."""
    shape = (height, width) if block_size == 1 else (height, width, block_size)
    np.save(path, np.asarray(flat).reshape(shape))


_KIND_CHOICE = click.Choice(pr.rastermanip.available_element_kinds())


@click.command()
@click.argument("input_npy", type=click.Path(exists=True))
@click.argument("output_npy", type=click.Path())
@click.option("--width", "-W", "target_width", required=True, type=int, help="Target width")
@click.option("--height", "-H", "target_height", required=True, type=int, help="Target height")
@click.option(
    "--method",
    "-m",
    type=click.Choice(["nearest", "bilinear"]),
    default="nearest",
    show_default=True,
    help="Interpolation method",
)
@click.option(
    "--kind",
    "-k",
    type=_KIND_CHOICE,
    default="uint8_clamped",
    show_default=True,
    help="Output element kind",
)
@click.option(
    "--border",
    type=click.Choice(["zero", "extend"]),
    default="zero",
    show_default=True,
    help="Bilinear border handling",
)
@click.option("--gpu/--cpu", default=False, show_default=True, help="Taichi backend")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
def grid_scale(
    input_npy, output_npy, target_width, target_height, method, kind, border, gpu, verbose
):
    """Scale the slice in INPUT_NPY and save it to OUTPUT_NPY."""
    try:
        init_backend(gpu)
        data, width, height, block_size = load_slice(input_npy)
        if verbose:
            click.echo(
                f"Scaling '{input_npy}' {width}x{height} -> {target_width}x{target_height} "
                f"using method='{method}'"
            )
        if method == "bilinear":
            result = pr.rastermanip.scale_bilinear(
                data,
                width,
                height,
                target_width,
                target_height,
                block_size=block_size,
                element_kind=kind,
                border=border,
            )
        else:
            result = pr.rastermanip.scale_nearest(
                data,
                width,
                height,
                target_width,
                target_height,
                block_size=block_size,
                element_kind=kind,
            )
        save_slice(output_npy, result, target_width, target_height, block_size)
        if verbose:
            click.echo("Scaling completed successfully!")
    except Exception as e:  # pragma: no cover - error handling path
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


@click.command()
@click.argument("input_npy", type=click.Path(exists=True))
@click.argument("output_npy", type=click.Path())
@click.option("--flip-x", "-x", is_flag=True, help="Reverse columns")
@click.option("--flip-y", "-y", is_flag=True, help="Reverse rows")
@click.option(
    "--kind",
    "-k",
    type=_KIND_CHOICE,
    default=None,
    help="Output element kind (default: same as input)",
)
@click.option("--gpu/--cpu", default=False, show_default=True, help="Taichi backend")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
def grid_flip(input_npy, output_npy, flip_x, flip_y, kind, gpu, verbose):
    """Flip the slice in INPUT_NPY along x and/or y and save it to OUTPUT_NPY."""
    try:
        init_backend(gpu)
        data, width, height, block_size = load_slice(input_npy)
        if verbose:
            click.echo(f"Flipping '{input_npy}' (flip_x={flip_x}, flip_y={flip_y})")
        result = pr.rastermanip.flip_grid(
            data,
            width,
            height,
            flip_x=flip_x,
            flip_y=flip_y,
            block_size=block_size,
            element_kind=kind,
        )
        save_slice(output_npy, result, width, height, block_size)
        if verbose:
            click.echo("Flip completed successfully!")
    except Exception as e:  # pragma: no cover - error handling path
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


__all__ = ["grid_scale", "grid_flip", "init_backend", "load_slice", "save_slice"]
