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

import numba
import numpy as np

from ._constants import XORWOW_BITS, XORWOW_N, XORWOW_JUMP_LOG2
from ._matrix import copy_mat, mul_mat_vec_inplace, mul_mat_mat_inplace

__all__ = [
    'jump',
    'jump_reach_log2',
]


@numba.njit
def jump(v, jump_matrices, x):
    """Advance the xorshift vector ``x`` by ``v`` table steps in place.

    Parameters
    ----------
    v : np.uint64
        Number of steps.  One step is whatever ``jump_matrices[0]``
        represents: a single transition for the step table, a whole
        subsequence (``2^67`` transitions) for the subsequence table.
    jump_matrices : np.ndarray
        ``(n_matrices, 160, 5) uint32`` table with
        ``jump_matrices[i] = jump_matrices[0]^(4^i)``.
    x : np.ndarray
        ``(5,) uint32`` state vector, overwritten.

    Notes
    -----
    With ``A`` the base matrix, ``x(n + v) = A^v x(n)``.  The offset is
    consumed two bits at a time, lowest first, each window applying the
    matching table entry ``window`` times; the last entry consumes one
    bit.  Bits above the table's reach are handled by exponentiation by
    squaring starting from the last entry, so the cost stays
    ``O(log v)`` for any table depth.

    ``v == 0`` leaves ``x`` untouched.
    """
    rem = np.uint64(v)
    n_matrices = jump_matrices.shape[0]

    mi = 0
    while rem > np.uint64(0) and mi < n_matrices:
        l = XORWOW_JUMP_LOG2 if mi < n_matrices - 1 else 1
        window = np.int64(rem & ((np.uint64(1) << np.uint64(l)) - np.uint64(1)))
        for _ in range(window):
            mul_mat_vec_inplace(jump_matrices[mi], x)
        mi += 1
        rem = rem >> np.uint64(l)

    if rem > np.uint64(0):
        # All precomputed matrices are used; square the last one to
        # create the next powers of two.
        a = np.empty((XORWOW_BITS, XORWOW_N), dtype=np.uint32)
        b = np.empty((XORWOW_BITS, XORWOW_N), dtype=np.uint32)
        copy_mat(a, jump_matrices[n_matrices - 1])
        copy_mat(b, a)
        while rem > np.uint64(0):
            mul_mat_mat_inplace(a, b)
            copy_mat(b, a)
            if rem & np.uint64(1):
                mul_mat_vec_inplace(b, x)
            rem = rem >> np.uint64(1)


def jump_reach_log2(n_matrices: int) -> int:
    """Number of offset bits a table of ``n_matrices`` entries covers without squaring."""
    if n_matrices < 1:
        raise ValueError(f'A jump table needs at least one matrix, got {n_matrices}.')
    return XORWOW_JUMP_LOG2 * (n_matrices - 1) + 1
