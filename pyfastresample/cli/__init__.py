"""
Command Line Interface for PyFastResample

This module provides command line utilities for PyFastResample, enabling
slice resampling from the terminal without writing Python scripts.

Available Commands:
- grid_scale (pfr-scale): Scale a .npy slice with nearest or bilinear sampling
- grid_flip (pfr-flip): Flip a .npy slice along x and/or y
- slice2png (pfr-slice2png): Fit a .npy slice to a display size and save as PNG

Author: B.G.
"""

_CLI_SUBMODULES = {
    "grid_scale": (".rastermanip_commands", "grid_scale"),
    "grid_flip": (".rastermanip_commands", "grid_flip"),
    "slice2png": (".slice2png_commands", "slice2png"),
}

__all__ = list(_CLI_SUBMODULES.keys())


def __getattr__(name):
    info = _CLI_SUBMODULES.get(name)
    if info is None:
        raise AttributeError(name)
    pkg, attr = info
    import importlib
    mod = importlib.import_module(pkg, __package__)
    obj = getattr(mod, attr)
    globals()[name] = obj
    return obj
