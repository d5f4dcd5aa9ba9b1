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
Precomputed XORWOW jump tables.

Two tables are used by every engine:

* the *step* table ``A^1, A^4, A^16, ...`` where ``A`` is one xorshift
  transition, used by ``discard``;
* the *sequence* table ``A^(2^67), A^(4 * 2^67), ...``, used by
  ``discard_subsequence``.

They are built once per process, on first use, and handed out as
read-only arrays so that any number of engines (or threads) can share
them without locking.
"""

import threading
import warnings
from typing import NamedTuple, Optional

import numpy as np

from . import config
from ._constants import (
    XORWOW_N,
    XORWOW_M,
    XORWOW_BITS,
    XORWOW_JUMP_MATRICES,
    XORWOW_JUMP_LOG2,
    XORWOW_SEQUENCE_JUMP_LOG2,
)
from ._error import JumpTableError
from ._matrix import copy_mat, square_mat_inplace
from ._numba_xorwow import xorshift_step

__all__ = [
    'XorwowJumpTables',
    'xorwow_step_matrix',
    'build_jump_matrices',
    'build_xorwow_jump_tables',
    'check_jump_matrices',
    'get_xorwow_jump_tables',
    'reset_xorwow_jump_tables',
]


class XorwowJumpTables(NamedTuple):
    """The pair of jump tables an engine reads.

    Attributes
    ----------
    step : np.ndarray
        ``(n, 160, 5) uint32``; entry ``i`` advances ``4^i`` draws.
    sequence : np.ndarray
        ``(n, 160, 5) uint32``; entry ``i`` advances ``4^i``
        subsequences of ``2^67`` draws.
    """
    step: np.ndarray
    sequence: np.ndarray


_tables: Optional[XorwowJumpTables] = None
_tables_lock = threading.Lock()


def xorwow_step_matrix() -> np.ndarray:
    """Return the matrix ``A`` of one xorshift transition.

    Row ``32 * i + j`` is the register after one step from the state
    whose only set bit is bit ``j`` of word ``i``.
    """
    m = np.zeros((XORWOW_BITS, XORWOW_N), dtype=np.uint32)
    x = np.zeros(XORWOW_N, dtype=np.uint32)
    for i in range(XORWOW_N):
        for j in range(XORWOW_M):
            x[:] = 0
            x[i] = np.uint32(1 << j)
            xorshift_step(x)
            m[i * XORWOW_M + j] = x
    return m


def build_jump_matrices(base: np.ndarray, n_matrices: int = XORWOW_JUMP_MATRICES) -> np.ndarray:
    """Build a table ``base^(4^0), base^(4^1), ..., base^(4^(n_matrices-1))``.

    Parameters
    ----------
    base : np.ndarray
        ``(160, 5) uint32`` matrix of one table step.
    n_matrices : int, optional
        Table depth.  Any depth ``>= 1`` gives the same jump results;
        shallower tables fall back to squaring earlier.

    Returns
    -------
    np.ndarray
        A read-only ``(n_matrices, 160, 5) uint32`` array.
    """
    if n_matrices < 1:
        raise JumpTableError(f'A jump table needs at least one matrix, got {n_matrices}.')
    table = np.empty((n_matrices, XORWOW_BITS, XORWOW_N), dtype=np.uint32)
    current = np.ascontiguousarray(base, dtype=np.uint32).copy()
    for i in range(n_matrices):
        copy_mat(table[i], current)
        square_mat_inplace(current, XORWOW_JUMP_LOG2)
    table.flags.writeable = False
    return table


def build_xorwow_jump_tables(n_matrices: int = XORWOW_JUMP_MATRICES) -> XorwowJumpTables:
    """Build the step and sequence tables from scratch.

    The sequence base ``A^(2^67)`` is obtained by squaring ``A`` 67
    times.
    """
    step_base = xorwow_step_matrix()
    sequence_base = step_base.copy()
    square_mat_inplace(sequence_base, XORWOW_SEQUENCE_JUMP_LOG2)
    return XorwowJumpTables(
        step=build_jump_matrices(step_base, n_matrices),
        sequence=build_jump_matrices(sequence_base, n_matrices),
    )


def check_jump_matrices(jump_matrices, name: str = 'jump_matrices') -> np.ndarray:
    """Validate a jump table and return it as a read-only contiguous array.

    Raises
    ------
    JumpTableError
        If the array is not ``uint32`` or not shaped ``(n, 160, 5)`` with
        ``n >= 1``.
    """
    arr = np.asarray(jump_matrices)
    if arr.dtype != np.uint32:
        raise JumpTableError(f'{name} must have dtype uint32, got {arr.dtype}.')
    if arr.ndim != 3 or arr.shape[1:] != (XORWOW_BITS, XORWOW_N):
        raise JumpTableError(
            f'{name} must have shape (n_matrices, {XORWOW_BITS}, {XORWOW_N}), got {arr.shape}.'
        )
    if arr.shape[0] < 1:
        raise JumpTableError(f'{name} must contain at least one matrix.')
    if not arr.flags.c_contiguous or arr.flags.writeable:
        arr = np.ascontiguousarray(arr).copy()
        arr.flags.writeable = False
    return arr


def _load_or_build() -> XorwowJumpTables:
    if config.get_table_cache_enabled():
        path = config.get_table_cache_path()
        data = config.read_table_file(path)
        if data is not None:
            try:
                return XorwowJumpTables(
                    step=check_jump_matrices(data['step'], 'step'),
                    sequence=check_jump_matrices(data['sequence'], 'sequence'),
                )
            except JumpTableError as e:
                warnings.warn(
                    f"brainrand: Invalid jump table cache at {path}: {e}. Rebuilding tables.",
                    stacklevel=3,
                )
        tables = build_xorwow_jump_tables()
        config.write_table_file(path, tables.step, tables.sequence)
        return tables
    return build_xorwow_jump_tables()


def get_xorwow_jump_tables() -> XorwowJumpTables:
    """Return the process-wide XORWOW jump tables, building them on first use.

    The tables are created at most once per process (guarded by a lock)
    and are read-only afterwards, so the returned object can be shared by
    any number of engines without synchronization.

    Returns
    -------
    XorwowJumpTables
        Step and sequence tables with ``32`` entries each.

    See Also
    --------
    reset_xorwow_jump_tables : Drop the process-wide tables.
    brainrand.config.set_table_cache_enabled : Persist the tables on disk.

    Examples
    --------
    .. code-block:: python

        >>> import brainrand
        >>> tables = brainrand.get_xorwow_jump_tables()
        >>> tables.step.shape
        (32, 160, 5)
    """
    global _tables
    if _tables is None:
        with _tables_lock:
            if _tables is None:
                _tables = _load_or_build()
    return _tables


def reset_xorwow_jump_tables():
    """Forget the process-wide tables; the next access rebuilds or reloads them.

    Engines created earlier keep the tables they were built with.
    """
    global _tables
    with _tables_lock:
        _tables = None
