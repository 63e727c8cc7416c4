"""
Taichi field pool for PyFastResample.

Allocating Taichi fields is expensive and every new field instance forces the
kernels taking it as a ti.template() argument to recompile. The pool keeps
released fields around, keyed by (dtype, shape), and hands them back out on
the next request for the same layout.

Fields obtained from the pool are wrapped in a TPField handle. Call
``release()`` once the field is no longer needed so it can be reused.
Released fields keep their previous content; kernels that do not write every
cell must clear them first.

Usage:
    import taichi as ti
    import pyfastresample as pr

    ti.init(ti.cpu)
    tmp = pr.pool.taipool.get_tpfield(dtype=ti.f32, shape=(512 * 512,))
    ...
    tmp.release()

Calling ``ti.init`` again destroys every field of the previous runtime; call
``taipool.clear()`` right after re-initialising.

All pool bookkeeping and every Taichi call made by the resampling operations
run under ``taichi_lock``, so operations may be called from several threads
at once; their kernel launches are serialised.

Author: B.G.
"""

import logging
import threading
from collections import defaultdict

import taichi as ti

logger = logging.getLogger(__name__)

# Serialises Taichi field creation, transfers and kernel launches, which the
# Taichi runtime does not support from several threads at once. Reentrant so
# pool calls can be made while it is held.
taichi_lock = threading.RLock()


def _normalise_shape(shape):
    if isinstance(shape, int):
        return (shape,)
    return tuple(int(s) for s in shape)


class TPField:
    """Handle on a pooled Taichi field."""

    def __init__(self, pool, dtype, shape):
        self._pool = pool
        self.dtype = dtype
        self.shape = shape
        self.field = ti.field(dtype=dtype, shape=shape)
        self.in_use = False

    def release(self):
        """Give the field back to its pool."""
        self._pool.release(self)

    def __repr__(self):
        state = "in use" if self.in_use else "free"
        return f"TPField(dtype={self.dtype}, shape={self.shape}, {state})"


class TaiPool:
    """Pool of reusable Taichi fields keyed by dtype and shape."""

    def __init__(self):
        self._free = defaultdict(list)
        self._n_allocated = 0
        self._n_in_use = 0

    def get_tpfield(self, dtype, shape):
        """
        Borrow a field of the requested dtype and shape.

        Args:
            dtype: Taichi data type (ti.f32, ti.u8, ...)
            shape: int or tuple of ints

        Returns:
            TPField: handle whose ``field`` attribute is the Taichi field
        """
        shape = _normalise_shape(shape)
        key = (dtype, shape)
        with taichi_lock:
            free = self._free[key]
            if free:
                tpf = free.pop()
            else:
                tpf = TPField(self, dtype, shape)
                self._n_allocated += 1
                logger.debug("Allocated new pooled field %s %s", dtype, shape)
            tpf.in_use = True
            self._n_in_use += 1
        return tpf

    def release(self, tpf):
        """Mark ``tpf`` free for reuse; releasing a free field does nothing."""
        with taichi_lock:
            if not tpf.in_use:
                return
            tpf.in_use = False
            self._n_in_use -= 1
            self._free[(tpf.dtype, tpf.shape)].append(tpf)

    def clear(self):
        """Forget every pooled field (required after ti.init / ti.reset)."""
        with taichi_lock:
            self._free.clear()
            self._n_allocated = 0
            self._n_in_use = 0

    def stats(self):
        """Return allocation counters as a dict."""
        with taichi_lock:
            n_free = sum(len(v) for v in self._free.values())
            return {
                "allocated": self._n_allocated,
                "in_use": self._n_in_use,
                "free": n_free,
            }

    def __repr__(self):
        s = self.stats()
        return (
            f"TaiPool(allocated={s['allocated']}, in_use={s['in_use']}, "
            f"free={s['free']})"
        )


# Process-wide pool shared by all kernels
taipool = TaiPool()


def get_temp_field(dtype, shape):
    """Shortcut for ``taipool.get_tpfield``."""
    return taipool.get_tpfield(dtype=dtype, shape=shape)


def init_taichi(arch=None, **kwargs):
    """
    Initialise Taichi and reset the pool.

    Args:
        arch: Taichi arch (ti.cpu, ti.gpu, ...). Defaults to ti.cpu.
        **kwargs: forwarded to ti.init
    """
    with taichi_lock:
        ti.init(arch=ti.cpu if arch is None else arch, **kwargs)
        taipool.clear()


__all__ = [
    "TPField",
    "TaiPool",
    "taipool",
    "taichi_lock",
    "get_temp_field",
    "init_taichi",
]
