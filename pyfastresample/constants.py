"""
Package-wide constants and defaults for PyFastResample.

Field staging precision follows the element kind (see
rastermanip.element_kinds); blend weights and source positions always use
the wide types below.

Author: B.G.
"""

import taichi as ti

# Blend weights, whatever the precision of the staged fields
FLOAT_TYPE_TI = ti.f64

# Source position products t * n_src, which overflow i32 on large grids
INDEX_TYPE_TI = ti.i64

# Channels per grid cell when the caller does not say otherwise
DEFAULT_BLOCK_SIZE = 1

# Output representation for the scaling operations
DEFAULT_ELEMENT_KIND = "uint8_clamped"

# Bilinear border policy: "zero" leaves the outer ring untouched,
# "extend" interpolates it as well
DEFAULT_BORDER = "zero"
BORDER_MODES = ("zero", "extend")
