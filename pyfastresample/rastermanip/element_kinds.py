"""
Element kinds: numeric representations of output channel values.

An element kind pairs an output dtype with the clamp-and-convert rule used
when a computed (possibly fractional or out-of-range) value is written to
the target buffer. The resampling kernels always compute in floating point;
the kind's ``convert`` turns that float buffer into the final representation.

Built-in kinds:
- uint8_clamped: round half to even and clip to [0, 255] (default)
- uint16_clamped: round and clip to [0, 65535]
- int16_clamped: round and clip to [-32768, 32767]
- int32_clamped: round and clip to the int32 range
  (the 16 and 32 bit integer kinds compute in float64)
- float32, float64: plain casts

Integer kinds map NaN to 0. Additional kinds can be registered with
register_element_kind().

Author: B.G.
"""

from dataclasses import dataclass
from typing import Callable

import numpy as np
import taichi as ti

from ..errors import UnsupportedElementKindError


@dataclass(frozen=True)
class ElementKind:
    """
    Output representation of a channel value.

    Attributes:
        name: Registry name
        dtype: NumPy dtype of the converted buffer
        ti_dtype: Taichi dtype used when the result is returned as a field
        compute_dtype: NumPy float dtype the kernels compute in
        convert: Clamp-and-convert rule, float ndarray -> ndarray of ``dtype``
    """

    name: str
    dtype: np.dtype
    ti_dtype: object
    compute_dtype: np.dtype
    convert: Callable[[np.ndarray], np.ndarray]


def clamped_integer_converter(dtype):
    """Build a round-and-clip converter for an integer dtype."""
    info = np.iinfo(dtype)

    def convert(values):
        values = np.nan_to_num(np.asarray(values, dtype=np.float64), nan=0.0)
        return np.clip(np.rint(values), info.min, info.max).astype(dtype)

    return convert


def float_converter(dtype):
    """Build a plain-cast converter for a float dtype."""

    def convert(values):
        return np.asarray(values).astype(dtype)

    return convert


_REGISTRY = {}


def register_element_kind(kind):
    """
    Register an element kind so it can be requested by name.

    Args:
        kind: ElementKind instance; replaces any kind of the same name

    Returns:
        ElementKind: the registered kind
    """
    if not isinstance(kind, ElementKind):
        raise UnsupportedElementKindError(
            f"Expected an ElementKind instance, got {type(kind).__name__}"
        )
    _REGISTRY[kind.name] = kind
    return kind


def available_element_kinds():
    """Return the names of all registered kinds."""
    return sorted(_REGISTRY)


def get_element_kind(kind):
    """
    Resolve an element kind from a name or an ElementKind instance.

    Raises:
        UnsupportedElementKindError: unknown name or unsupported object
    """
    if isinstance(kind, ElementKind):
        return kind
    if isinstance(kind, str):
        try:
            return _REGISTRY[kind]
        except KeyError:
            raise UnsupportedElementKindError(
                f"Unknown element kind '{kind}'. "
                f"Available kinds: {', '.join(available_element_kinds())}"
            ) from None
    raise UnsupportedElementKindError(
        f"element_kind must be a kind name or ElementKind, got {type(kind).__name__}"
    )


UINT8_CLAMPED = register_element_kind(
    ElementKind(
        "uint8_clamped",
        np.dtype(np.uint8),
        ti.u8,
        np.dtype(np.float32),
        clamped_integer_converter(np.uint8),
    )
)
# Blends of 16 bit values need more than the 24 bit f32 mantissa to round
# like f64 arithmetic does
UINT16_CLAMPED = register_element_kind(
    ElementKind(
        "uint16_clamped",
        np.dtype(np.uint16),
        ti.u16,
        np.dtype(np.float64),
        clamped_integer_converter(np.uint16),
    )
)
INT16_CLAMPED = register_element_kind(
    ElementKind(
        "int16_clamped",
        np.dtype(np.int16),
        ti.i16,
        np.dtype(np.float64),
        clamped_integer_converter(np.int16),
    )
)
INT32_CLAMPED = register_element_kind(
    ElementKind(
        "int32_clamped",
        np.dtype(np.int32),
        ti.i32,
        np.dtype(np.float64),
        clamped_integer_converter(np.int32),
    )
)
FLOAT32 = register_element_kind(
    ElementKind(
        "float32",
        np.dtype(np.float32),
        ti.f32,
        np.dtype(np.float32),
        float_converter(np.float32),
    )
)
FLOAT64 = register_element_kind(
    ElementKind(
        "float64",
        np.dtype(np.float64),
        ti.f64,
        np.dtype(np.float64),
        float_converter(np.float64),
    )
)


__all__ = [
    "ElementKind",
    "clamped_integer_converter",
    "float_converter",
    "register_element_kind",
    "available_element_kinds",
    "get_element_kind",
    "UINT8_CLAMPED",
    "UINT16_CLAMPED",
    "INT16_CLAMPED",
    "INT32_CLAMPED",
    "FLOAT32",
    "FLOAT64",
]
