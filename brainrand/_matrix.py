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
Numba-compiled linear algebra over GF(2) for the XORWOW state vector.

The xorshift part of XORWOW is a linear map on a 160-bit vector, so
advancing it by ``n`` steps is a matrix-vector product over GF(2)
(addition is XOR, multiplication is AND).

Layout
------
* A *vector* is a ``(5,) uint32`` array, bit ``j`` of word ``i`` being
  coordinate ``32 * i + j``.
* A *matrix* is a ``(160, 5) uint32`` array whose row ``32 * i + j`` is
  the image of the unit vector with only bit ``j`` of word ``i`` set.
  This is the flat ``N * M * N`` word layout of cuRAND/rocRAND reshaped
  to two dimensions.

All functions mutate their first argument in place, so they can be
called from other ``@numba.njit`` kernels on views of larger buffers.
"""

import numba
import numpy as np

from ._constants import XORWOW_N, XORWOW_M, XORWOW_BITS

__all__ = [
    'copy_vec',
    'copy_mat',
    'mul_mat_vec_inplace',
    'mul_mat_mat_inplace',
    'square_mat_inplace',
    'identity_mat',
]


@numba.njit(inline='always')
def copy_vec(dst, src):
    """Copy the ``5`` words of ``src`` into ``dst``."""
    for i in range(XORWOW_N):
        dst[i] = src[i]


@numba.njit(inline='always')
def copy_mat(dst, src):
    """Copy the ``160 x 5`` words of ``src`` into ``dst``."""
    for i in range(XORWOW_BITS):
        for k in range(XORWOW_N):
            dst[i, k] = src[i, k]


@numba.njit
def mul_mat_vec_inplace(m, v):
    """Compute ``v <- m . v`` over GF(2).

    Parameters
    ----------
    m : np.ndarray
        A ``(160, 5) uint32`` jump matrix.
    v : np.ndarray
        A ``(5,) uint32`` state vector, overwritten with the product.

    Notes
    -----
    The product is the XOR of the rows of ``m`` selected by the set bits
    of ``v``.  It is linear: for any ``v1`` and ``v2`` the product of
    ``v1 ^ v2`` equals the XOR of the two products.
    """
    r = np.zeros(XORWOW_N, dtype=np.uint32)
    for i in range(XORWOW_N):
        w = np.int64(v[i])
        for j in range(XORWOW_M):
            if (w >> j) & 1:
                row = i * XORWOW_M + j
                for k in range(XORWOW_N):
                    r[k] ^= m[row, k]
    copy_vec(v, r)


@numba.njit
def mul_mat_mat_inplace(a, b):
    """Compute ``a <- b . a`` over GF(2).

    Every row of ``a`` is the image of one basis vector, so multiplying
    ``b`` into each row independently composes the two maps: the result
    first applies ``a`` and then ``b``.
    """
    for i in range(XORWOW_BITS):
        mul_mat_vec_inplace(b, a[i])


@numba.njit
def square_mat_inplace(a, times):
    """Replace ``a`` with ``a^(2^times)`` by repeated squaring."""
    b = np.empty((XORWOW_BITS, XORWOW_N), dtype=np.uint32)
    for _ in range(times):
        copy_mat(b, a)
        mul_mat_mat_inplace(a, b)


def identity_mat() -> np.ndarray:
    """Return the ``(160, 5) uint32`` identity matrix."""
    m = np.zeros((XORWOW_BITS, XORWOW_N), dtype=np.uint32)
    for i in range(XORWOW_N):
        for j in range(XORWOW_M):
            m[i * XORWOW_M + j, i] = np.uint32(1 << j)
    return m
