"""
Source buffer handling shared by the resampling operations.

Normalises the accepted source containers (NumPy arrays, Python sequences,
bytes-like objects, Taichi fields) into flat row-major buffers, validates
grid dimensions against the buffer length, and stages buffers through pooled
Taichi fields for kernel execution.

Author: B.G.
"""

import logging

import numpy as np
import taichi as ti

from .. import pool
from ..errors import (
    InvalidDimensionError,
    SizeMismatchError,
    UnsupportedElementKindError,
)

logger = logging.getLogger(__name__)


def check_dimension(name, value):
    """Raise InvalidDimensionError unless ``value`` is a positive integer."""
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
        raise InvalidDimensionError(name, value)
    if value <= 0:
        raise InvalidDimensionError(name, value)
    return int(value)


def source_length(source):
    """
    Number of scalar elements in ``source`` without reading them.

    Raises:
        TypeError: unsupported container
    """
    if isinstance(source, np.ndarray):
        return int(source.size)
    if isinstance(source, (bytes, bytearray, memoryview)):
        return len(memoryview(source).cast("B"))
    if hasattr(source, "to_numpy") and hasattr(source, "shape"):
        return int(np.prod(source.shape, dtype=np.int64))
    if isinstance(source, (list, tuple)):
        return len(source)
    raise TypeError(
        "source must be a numpy array, a sequence of numbers, a bytes-like "
        f"object or a Taichi field, got {type(source).__name__}"
    )


def as_flat_buffer(source):
    """
    Return ``source`` as a flat NumPy array in row-major order.

    NumPy arrays keep their dtype (and are not copied when contiguous), lists
    and tuples become float64, bytes-like objects become uint8.
    """
    if isinstance(source, np.ndarray):
        return source.reshape(-1)
    if isinstance(source, (bytes, bytearray, memoryview)):
        return np.frombuffer(memoryview(source).cast("B"), dtype=np.uint8)
    if hasattr(source, "to_numpy"):
        with pool.taichi_lock:
            return source.to_numpy().reshape(-1)
    if isinstance(source, (list, tuple)):
        return np.asarray(source, dtype=np.float64).reshape(-1)
    raise TypeError(
        "source must be a numpy array, a sequence of numbers, a bytes-like "
        f"object or a Taichi field, got {type(source).__name__}"
    )


def validate_grid(source, width, height, block_size):
    """
    Check grid dimensions and buffer length.

    Dimensions are checked first, then the buffer length; nothing is read
    from ``source`` before both checks pass.

    Returns:
        tuple: (width, height, block_size) as Python ints
    """
    width = check_dimension("width", width)
    height = check_dimension("height", height)
    block_size = check_dimension("block_size", block_size)
    length = source_length(source)
    if length != width * height * block_size:
        raise SizeMismatchError(length, width, height, block_size)
    return width, height, block_size


def staging_dtype(data, kind):
    """
    Float dtype the kernels compute in for ``data`` converted to ``kind``.

    The kind's compute dtype is widened to float64 when it cannot hold every
    source value exactly (int32, int64 or float64 sources).
    """
    compute = np.dtype(kind.compute_dtype)
    if compute != np.float64 and not np.can_cast(data.dtype, compute, "safe"):
        return np.dtype(np.float64)
    return compute


def run_on_fields(kernel, data, target_size, kind, *args, return_field=False):
    """
    Stage ``data`` into a pooled field, run ``kernel`` and convert the result.

    The kernel is called as ``kernel(source_field, target_field, *args)``.
    The target field is zeroed before launch so cells the kernel skips read
    as 0. Every Taichi call runs under ``pool.taichi_lock``.

    Args:
        kernel: Taichi kernel
        data: Flat NumPy source buffer
        target_size: Number of scalar elements in the target
        kind: ElementKind applied to the kernel output
        *args: Extra kernel arguments
        return_field: If True, return a Taichi field of ``kind.ti_dtype``

    Returns:
        numpy.ndarray or taichi.Field: 1D converted target buffer
    """
    compute = staging_dtype(data, kind)
    compute_ti = ti.f64 if compute == np.float64 else ti.f32
    logger.debug("Staging %d elements as %s for %s", data.size, compute, kind.name)

    with pool.taichi_lock:
        source_field = pool.get_temp_field(compute_ti, (data.size,))
        target_field = pool.get_temp_field(compute_ti, (target_size,))
        try:
            source_field.field.from_numpy(np.ascontiguousarray(data, dtype=compute))
            target_field.field.fill(0)
            kernel(source_field.field, target_field.field, *args)
            values = target_field.field.to_numpy()
        finally:
            source_field.release()
            target_field.release()

    result = kind.convert(values)
    if return_field:
        return to_field(result, kind.ti_dtype)
    return result


_TI_DTYPES = {
    np.dtype(np.int8): ti.i8,
    np.dtype(np.int16): ti.i16,
    np.dtype(np.int32): ti.i32,
    np.dtype(np.int64): ti.i64,
    np.dtype(np.uint8): ti.u8,
    np.dtype(np.uint16): ti.u16,
    np.dtype(np.uint32): ti.u32,
    np.dtype(np.uint64): ti.u64,
    np.dtype(np.float32): ti.f32,
    np.dtype(np.float64): ti.f64,
}


def taichi_dtype(dtype):
    """
    Taichi dtype matching a NumPy dtype.

    Raises:
        UnsupportedElementKindError: Taichi has no matching scalar type
    """
    dtype = np.dtype(dtype)
    if dtype not in _TI_DTYPES:
        raise UnsupportedElementKindError(
            f"Taichi fields cannot hold dtype '{dtype}'; use return_field=False"
        )
    return _TI_DTYPES[dtype]


def to_field(values, ti_dtype=None):
    """
    Copy a flat buffer into a new Taichi field owned by the caller.

    The field is not pooled; like any Taichi field it lives until the next
    ``ti.reset`` / ``ti.init``.
    """
    if ti_dtype is None:
        ti_dtype = taichi_dtype(values.dtype)
    with pool.taichi_lock:
        out = ti.field(dtype=ti_dtype, shape=(values.size,))
        out.from_numpy(np.ascontiguousarray(values.reshape(-1)))
    return out


__all__ = [
    "check_dimension",
    "source_length",
    "as_flat_buffer",
    "validate_grid",
    "staging_dtype",
    "run_on_fields",
    "taichi_dtype",
    "to_field",
]
