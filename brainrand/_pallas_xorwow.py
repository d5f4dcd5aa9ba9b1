# Copyright 2026 BrainX Ecosystem Limited. All Rights Reserved.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
# ==============================================================================

import threading
from typing import Optional

import jax
import jax.numpy as jnp
import numpy as np

from ._constants import (
    XORWOW_N,
    XORWOW_M,
    XORWOW_STATE_WORDS,
    XORWOW_JUMP_LOG2,
    XORWOW_WEYL_STEP,
    XORWOW_DEFAULT_SEED,
    UINT32_MASK,
)
from ._engine import XorwowEngine, _as_uint64
from ._precomputed import XorwowJumpTables, check_jump_matrices, get_xorwow_jump_tables
from ._typing import JumpMatrices, PallasXorwowKey, Uint64Like

__all__ = [
    'PallasXorwowRNG',
    'get_device_jump_tables',
]

_device_tables: Optional[XorwowJumpTables] = None
_device_tables_lock = threading.Lock()


def get_device_jump_tables() -> XorwowJumpTables:
    """Return the process-wide jump tables as device-resident ``jax.Array`` objects.

    The host tables from :func:`~brainrand.get_xorwow_jump_tables` are
    transferred once to the default JAX device and reused afterwards.
    """
    global _device_tables
    if _device_tables is None:
        with _device_tables_lock:
            if _device_tables is None:
                host = get_xorwow_jump_tables()
                _device_tables = XorwowJumpTables(
                    step=jnp.asarray(host.step, dtype=jnp.uint32),
                    sequence=jnp.asarray(host.sequence, dtype=jnp.uint32),
                )
    return _device_tables


@jax.jit
def _mul_mat_vec(m, x):
    # Unpack the 160 bits of x, select the matching rows of m and XOR them.
    shifts = jnp.arange(XORWOW_M, dtype=jnp.uint32)
    bits = ((x[:, None] >> shifts[None, :]) & jnp.uint32(1)).reshape(-1)
    selected = jnp.where(bits[:, None] == 1, m, jnp.uint32(0))
    return jax.lax.reduce(selected, np.uint32(0), jax.lax.bitwise_xor, (0,))


@jax.jit
def _mul_mat_mat(a, b):
    # b . a, one row (basis image) of a at a time.
    return jax.vmap(_mul_mat_vec, in_axes=(None, 0))(b, a)


def _jump(x: jax.Array, v: int, jump_matrices: JumpMatrices) -> jax.Array:
    # Same decomposition as brainrand._jump.jump; v is a static Python int.
    n_matrices = jump_matrices.shape[0]
    mi = 0
    while v > 0 and mi < n_matrices:
        l = XORWOW_JUMP_LOG2 if mi < n_matrices - 1 else 1
        for _ in range(v & ((1 << l) - 1)):
            x = _mul_mat_vec(jump_matrices[mi], x)
        mi += 1
        v >>= l

    if v > 0:
        a = jump_matrices[n_matrices - 1]
        while v > 0:
            a = _mul_mat_mat(a, a)
            if v & 1:
                x = _mul_mat_vec(a, x)
            v >>= 1
    return x


@jax.tree_util.register_pytree_node_class
class PallasXorwowRNG:
    """XORWOW random number generator expressed as JAX array operations.

    Produces exactly the stream of :class:`~brainrand.XorwowEngine` for
    the same ``(seed, subsequence, offset)``, but keeps its state as six
    ``jnp.uint32`` scalars so that it can live on an accelerator and be
    passed through ``jax.jit`` and other transformations.

    Parameters
    ----------
    seed : int, optional
        64-bit seed.  Defaults to ``0``.
    subsequence : int, optional
        Subsequence to start in.  Defaults to ``0``.
    offset : int, optional
        Draws to skip inside the subsequence.  Defaults to ``0``.
    tables : XorwowJumpTables, optional
        Host tables used for the initial positioning.  Defaults to the
        process-wide tables.

    See Also
    --------
    XorwowEngine : Host (numba) engine with the same stream.
    get_device_jump_tables : Device-resident copy of the jump tables.

    Notes
    -----
    Construction runs on the host: the state is seeded and positioned by
    the numba engine and then moved to the device.  :meth:`discard` and
    :meth:`discard_subsequence` run on the device; their counts are
    Python integers, so each distinct count is a distinct sequence of
    matrix products rather than a traced value.

    Examples
    --------
    .. code-block:: python

        >>> rng = PallasXorwowRNG(seed=0)
        >>> int(rng.randint())
        3179217846
        >>> rng.discard(10**15)
    """
    __module__ = 'brainrand'

    def __init__(
        self,
        seed: Uint64Like = XORWOW_DEFAULT_SEED,
        subsequence: Uint64Like = 0,
        offset: Uint64Like = 0,
        tables: Optional[XorwowJumpTables] = None,
    ):
        engine = XorwowEngine(seed, subsequence, offset, tables=tables)
        self._key = tuple(jnp.asarray(w, dtype=jnp.uint32) for w in engine.state)

    @property
    def key(self) -> PallasXorwowKey:
        """Get the current state ``(x0, x1, x2, x3, x4, d)``."""
        return self._key

    @key.setter
    def key(self, value: PallasXorwowKey):
        """Set the state, checking it is a tuple of six ``uint32`` arrays.

        Raises
        ------
        TypeError
            If ``value`` is not a tuple of length 6 or an element is not
            an array.
        ValueError
            If an element does not have dtype ``uint32``.
        """
        if not isinstance(value, tuple) or len(value) != XORWOW_STATE_WORDS:
            raise TypeError(f"Key must be a tuple of length {XORWOW_STATE_WORDS}")
        for i, val in enumerate(value):
            if not isinstance(val, (jax.Array, np.ndarray)):
                raise TypeError(f"Key element {i} must be a jnp.ndarray")
            if val.dtype != jnp.uint32:
                raise ValueError(f"Key element {i} must be of type jnp.uint32")
        self._key = value

    def generate_next_key(self) -> PallasXorwowKey:
        """Advance the state by one step and return the new key."""
        x0, x1, x2, x3, x4, d = self.key
        t = x0 ^ (x0 >> 2)
        new_x4 = (x4 ^ (x4 << 4)) ^ (t ^ (t << 1))
        d = d + jnp.asarray(XORWOW_WEYL_STEP, dtype=jnp.uint32)
        new_key = (
            jnp.asarray(x1, dtype=jnp.uint32),
            jnp.asarray(x2, dtype=jnp.uint32),
            jnp.asarray(x3, dtype=jnp.uint32),
            jnp.asarray(x4, dtype=jnp.uint32),
            jnp.asarray(new_x4, dtype=jnp.uint32),
            jnp.asarray(d, dtype=jnp.uint32),
        )
        self.key = new_key
        return new_key

    def randint(self) -> jax.Array:
        """Advance the state and return the next ``uint32`` draw ``d + x4``."""
        key = self.generate_next_key()
        return jnp.asarray(key[5] + key[4], dtype=jnp.uint32)

    def discard(self, offset: Uint64Like, jump_matrices: Optional[JumpMatrices] = None):
        """Skip ``offset`` draws on the device.

        Parameters
        ----------
        offset : int
            Number of draws to skip, in ``[0, 2^64)``.
        jump_matrices : jax.Array, optional
            Step table; defaults to the device copy of the process-wide
            step table.
        """
        offset = int(_as_uint64('offset', offset))
        if jump_matrices is None:
            jump_matrices = get_device_jump_tables().step
        else:
            jump_matrices = jnp.asarray(check_jump_matrices(jump_matrices, 'step'))
        x = _jump(jnp.stack(self.key[:XORWOW_N]), offset, jump_matrices)
        weyl = (offset * XORWOW_WEYL_STEP) & UINT32_MASK
        d = self.key[XORWOW_N] + jnp.asarray(weyl, dtype=jnp.uint32)
        self.key = tuple(x[i] for i in range(XORWOW_N)) + (jnp.asarray(d, dtype=jnp.uint32),)

    def discard_subsequence(self, subsequence: Uint64Like, jump_matrices: Optional[JumpMatrices] = None):
        """Skip ``subsequence`` subsequences of ``2^67`` draws on the device."""
        subsequence = int(_as_uint64('subsequence', subsequence))
        if jump_matrices is None:
            jump_matrices = get_device_jump_tables().sequence
        else:
            jump_matrices = jnp.asarray(check_jump_matrices(jump_matrices, 'sequence'))
        x = _jump(jnp.stack(self.key[:XORWOW_N]), subsequence, jump_matrices)
        self.key = tuple(x[i] for i in range(XORWOW_N)) + (self.key[XORWOW_N],)

    def tree_flatten(self):
        """Flatten the RNG for JAX pytree utilities: the key is the only child."""
        return (self.key,), ()

    @classmethod
    def tree_unflatten(cls, aux_data, children):
        """Rebuild an RNG from its flattened key."""
        obj = object.__new__(cls)
        key, = children
        # Leaves may be placeholders during JAX tracing; bypass the setter checks.
        obj._key = tuple(key)
        return obj
