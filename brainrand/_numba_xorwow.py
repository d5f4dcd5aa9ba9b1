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

"""
Numba-compatible XORWOW random number generator.

This module provides standalone ``@numba.njit`` functions implementing
the XORWOW generator of cuRAND/rocRAND.  State is represented as
``np.array([x0, x1, x2, x3, x4, d], dtype=np.uint32)`` and mutated
in-place, so a kernel can keep one state per logical thread in a
``(n_threads, 6)`` buffer and pass row views to these functions.

Jump tables are always passed explicitly: host code usually gets them
from :func:`~brainrand.get_xorwow_jump_tables`, tests may inject smaller
tables.  Nothing in this module selects a table on its own.
"""

import numba
import numpy as np

from ._constants import (
    XORWOW_N,
    XORWOW_STATE_WORDS,
    XORWOW_WEYL_STEP,
    XORWOW_INITIAL_X,
    XORWOW_INITIAL_D,
    XORWOW_SEED_XOR_LO,
    XORWOW_SEED_XOR_HI,
    XORWOW_SEED_MUL_LO,
    XORWOW_SEED_MUL_HI,
)
from ._jump import jump

__all__ = [
    'xorshift_step',
    'xorwow_seed',
    'xorwow_next_key',
    'xorwow_randint',
    'xorwow_discard',
    'xorwow_discard_subsequence',
]

_X0, _X1, _X2, _X3, _X4 = XORWOW_INITIAL_X


@numba.njit(inline='always')
def xorshift_step(x):
    """Advance the ``(5,)`` xorshift register by one transition in place.

    This is the linear part of XORWOW; the Weyl value is not touched.
    """
    t = x[0] ^ (x[0] >> np.uint32(2))
    x4 = x[4]
    x[0] = x[1]
    x[1] = x[2]
    x[2] = x[3]
    x[3] = x4
    x[4] = (x4 ^ (x4 << np.uint32(4))) ^ (t ^ (t << np.uint32(1)))


@numba.njit
def xorwow_seed(seed, subsequence, offset, jump_matrices, sequence_jump_matrices):
    """Create a XORWOW state array positioned at ``(seed, subsequence, offset)``.

    Parameters
    ----------
    seed : np.uint64
        Seed value.  The low and high 32-bit halves are scrambled into
        the register and the Weyl value.
    subsequence : np.uint64
        Index of the subsequence (each ``2^67`` draws long) to start in.
    offset : np.uint64
        Number of draws to skip inside that subsequence.
    jump_matrices : np.ndarray
        Step table, ``(n, 160, 5) uint32``.
    sequence_jump_matrices : np.ndarray
        Subsequence table, ``(n, 160, 5) uint32``.

    Returns
    -------
    state : np.ndarray
        A ``(6,) uint32`` array ``[x0, x1, x2, x3, x4, d]``.
    """
    state = np.empty(XORWOW_STATE_WORDS, dtype=np.uint32)
    state[0] = np.uint32(_X0)
    state[1] = np.uint32(_X1)
    state[2] = np.uint32(_X2)
    state[3] = np.uint32(_X3)
    state[4] = np.uint32(_X4)
    state[5] = np.uint32(XORWOW_INITIAL_D)

    s = np.uint64(seed)
    s0 = np.uint64(np.uint32(s & np.uint64(0xFFFFFFFF)) ^ np.uint32(XORWOW_SEED_XOR_LO))
    s1 = np.uint64(np.uint32(s >> np.uint64(32)) ^ np.uint32(XORWOW_SEED_XOR_HI))
    t0 = np.uint32(np.uint64(XORWOW_SEED_MUL_LO) * s0)
    t1 = np.uint32(np.uint64(XORWOW_SEED_MUL_HI) * s1)
    state[0] = np.uint32(state[0] + t0)
    state[1] = state[1] ^ t0
    state[2] = np.uint32(state[2] + t1)
    state[3] = state[3] ^ t1
    state[4] = np.uint32(state[4] + t0)
    state[5] = np.uint32(state[5] + t1 + t0)

    xorwow_discard_subsequence(state, subsequence, sequence_jump_matrices)
    xorwow_discard(state, offset, jump_matrices)
    return state


@numba.njit(inline='always')
def xorwow_next_key(state):
    """Advance the XORWOW state in-place by one step."""
    xorshift_step(state[:XORWOW_N])
    state[5] = np.uint32(state[5] + np.uint32(XORWOW_WEYL_STEP))


@numba.njit(inline='always')
def xorwow_randint(state):
    """Generate a random ``uint32`` value and advance the XORWOW state.

    Returns
    -------
    val : np.uint32
        ``d + x4`` after the update, modulo ``2^32``.
    """
    xorwow_next_key(state)
    return np.uint32(state[5] + state[4])


@numba.njit
def xorwow_discard(state, offset, jump_matrices):
    """Skip ``offset`` draws of the XORWOW state in place.

    The register jumps through ``jump_matrices``; the Weyl value moves in
    closed form by ``offset * 362437`` modulo ``2^32``.
    """
    jump(offset, jump_matrices, state[:XORWOW_N])
    step = np.uint64(offset) * np.uint64(XORWOW_WEYL_STEP)
    state[5] = np.uint32(state[5] + np.uint32(step & np.uint64(0xFFFFFFFF)))


@numba.njit
def xorwow_discard_subsequence(state, subsequence, sequence_jump_matrices):
    """Skip ``subsequence`` whole subsequences (``2^67`` draws each) in place."""
    jump(subsequence, sequence_jump_matrices, state[:XORWOW_N])
    # d is unchanged: 2^67 is a multiple of 2^32.
