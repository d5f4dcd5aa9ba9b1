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

from typing import Optional, Sequence, Tuple

import numpy as np

from ._constants import XORWOW_N, XORWOW_STATE_WORDS, XORWOW_DEFAULT_SEED, UINT64_MAX
from ._error import StateLayoutError
from ._numba_xorwow import (
    xorwow_seed,
    xorwow_randint,
    xorwow_discard,
    xorwow_discard_subsequence,
)
from ._precomputed import XorwowJumpTables, check_jump_matrices, get_xorwow_jump_tables
from ._typing import Uint64Like, XorwowState

__all__ = [
    'XORWOW_STATE_DTYPE',
    'XorwowEngine',
    'xorwow_init',
    'xorwow',
    'skipahead',
    'skipahead_subsequence',
]

# C layout of the state record, as persisted or exchanged with device code.
XORWOW_STATE_DTYPE = np.dtype(
    [
        ('x', '<u4', (XORWOW_N,)),
        ('d', '<u4'),
        ('boxmuller_float_state', '<u4'),
        ('boxmuller_double_state', '<u4'),
        ('boxmuller_float', '<f4'),
        ('boxmuller_double', '<f8'),
    ],
    align=True,
)


def _as_uint64(name: str, value: Uint64Like) -> np.uint64:
    if isinstance(value, (bool, np.bool_)) or not isinstance(value, (int, np.integer)):
        raise TypeError(f'{name} must be an integer, got {type(value).__name__}.')
    value = int(value)
    if value < 0 or value > UINT64_MAX:
        raise ValueError(f'{name} must be in [0, 2^64), got {value}.')
    return np.uint64(value)


def _resolve_tables(tables: Optional[Sequence[np.ndarray]]) -> XorwowJumpTables:
    if tables is None:
        return get_xorwow_jump_tables()
    step, sequence = tables
    return XorwowJumpTables(
        step=check_jump_matrices(step, 'step'),
        sequence=check_jump_matrices(sequence, 'sequence'),
    )


class XorwowEngine:
    """XORWOW pseudo-random number generator with skip-ahead.

    Implements the XORWOW generator of G. Marsaglia (a 160-bit xorshift
    register combined with a 32-bit Weyl sequence) with the seeding and
    stream layout of cuRAND/rocRAND.  The period is split into
    subsequences of ``2^67`` draws; an engine is positioned at any
    ``(subsequence, offset)`` in ``O(log)`` time through precomputed
    GF(2) jump matrices.

    Parameters
    ----------
    seed : int, optional
        64-bit seed.  Defaults to ``0``.
    subsequence : int, optional
        Index of the subsequence to start in.  Defaults to ``0``.
    offset : int, optional
        Number of draws to skip inside the subsequence.  Defaults to
        ``0``.
    tables : XorwowJumpTables or tuple of np.ndarray, optional
        Step and sequence tables.  Defaults to the process-wide tables
        from :func:`~brainrand.get_xorwow_jump_tables`.  Any valid table
        depth produces the same stream.

    Raises
    ------
    TypeError
        If ``seed``, ``subsequence`` or ``offset`` is not an integer.
    ValueError
        If any of them is outside ``[0, 2^64)``.
    JumpTableError
        If ``tables`` does not hold two valid jump tables.

    See Also
    --------
    PallasXorwowRNG : JAX version of the same generator.
    xorwow_seed : Numba functional interface.

    Notes
    -----
    The engine also holds two one-slot caches for the second output of a
    Box-Muller transform (one ``float32``, one ``float64``).  They are
    empty after construction; a sampling layer fills them with
    :attr:`boxmuller_float` / :attr:`boxmuller_double` and consumes them
    with :meth:`take_boxmuller_float` / :meth:`take_boxmuller_double`.
    The engine itself never reads them.

    Examples
    --------
    .. code-block:: python

        >>> from brainrand import XorwowEngine
        >>> rng = XorwowEngine(seed=0)
        >>> rng.next()
        3179217846
        >>> rng = XorwowEngine(seed=1234, subsequence=7, offset=10**12)
    """
    __module__ = 'brainrand'

    def __init__(
        self,
        seed: Uint64Like = XORWOW_DEFAULT_SEED,
        subsequence: Uint64Like = 0,
        offset: Uint64Like = 0,
        *,
        tables: Optional[Sequence[np.ndarray]] = None,
    ):
        seed = _as_uint64('seed', seed)
        subsequence = _as_uint64('subsequence', subsequence)
        offset = _as_uint64('offset', offset)
        self._tables = _resolve_tables(tables)
        self._state: XorwowState = xorwow_seed(
            seed, subsequence, offset, self._tables.step, self._tables.sequence
        )
        self._boxmuller_float: Optional[float] = None
        self._boxmuller_double: Optional[float] = None

    @property
    def x(self) -> Tuple[int, ...]:
        """The five xorshift register words."""
        return tuple(int(w) for w in self._state[:XORWOW_N])

    @property
    def d(self) -> int:
        """The Weyl sequence value."""
        return int(self._state[XORWOW_N])

    @property
    def state(self) -> XorwowState:
        """A copy of the ``(6,) uint32`` numba state ``[x0, ..., x4, d]``."""
        return self._state.copy()

    @property
    def tables(self) -> XorwowJumpTables:
        return self._tables

    def next(self) -> int:
        """Advance one step and return the next ``uint32`` draw."""
        return int(xorwow_randint(self._state))

    def __call__(self) -> int:
        return self.next()

    def discard(self, offset: Uint64Like):
        """Skip ``offset`` draws.

        Equivalent to calling :meth:`next` ``offset`` times, in
        ``O(log offset)`` matrix operations.  ``offset == 0`` leaves the
        state unchanged.
        """
        xorwow_discard(self._state, _as_uint64('offset', offset), self._tables.step)

    def discard_subsequence(self, subsequence: Uint64Like):
        """Skip ``subsequence`` whole subsequences of ``2^67`` draws."""
        xorwow_discard_subsequence(
            self._state, _as_uint64('subsequence', subsequence), self._tables.sequence
        )

    @property
    def boxmuller_float(self) -> Optional[float]:
        """Cached ``float32`` normal sample, or ``None``."""
        return self._boxmuller_float

    @boxmuller_float.setter
    def boxmuller_float(self, value: Optional[float]):
        self._boxmuller_float = None if value is None else float(np.float32(value))

    @property
    def boxmuller_double(self) -> Optional[float]:
        """Cached ``float64`` normal sample, or ``None``."""
        return self._boxmuller_double

    @boxmuller_double.setter
    def boxmuller_double(self, value: Optional[float]):
        self._boxmuller_double = None if value is None else float(value)

    def take_boxmuller_float(self) -> Optional[float]:
        """Return the cached ``float32`` sample and empty the slot."""
        value, self._boxmuller_float = self._boxmuller_float, None
        return value

    def take_boxmuller_double(self) -> Optional[float]:
        """Return the cached ``float64`` sample and empty the slot."""
        value, self._boxmuller_double = self._boxmuller_double, None
        return value

    def to_bytes(self) -> bytes:
        """Serialize the engine to one :data:`XORWOW_STATE_DTYPE` record.

        Padding and the value of an empty cache slot are written as zero,
        so equal engines serialize to equal bytes.
        """
        rec = np.zeros((), dtype=XORWOW_STATE_DTYPE)
        rec['x'] = self._state[:XORWOW_N]
        rec['d'] = self._state[XORWOW_N]
        if self._boxmuller_float is not None:
            rec['boxmuller_float_state'] = 1
            rec['boxmuller_float'] = self._boxmuller_float
        if self._boxmuller_double is not None:
            rec['boxmuller_double_state'] = 1
            rec['boxmuller_double'] = self._boxmuller_double
        return rec.tobytes()

    @classmethod
    def from_bytes(
        cls,
        data: bytes,
        *,
        tables: Optional[Sequence[np.ndarray]] = None,
    ) -> 'XorwowEngine':
        """Restore an engine written by :meth:`to_bytes`.

        Raises
        ------
        StateLayoutError
            If ``data`` is not exactly one record, or a cache flag is not
            ``0`` or ``1``.
        """
        buf = bytes(data)
        if len(buf) != XORWOW_STATE_DTYPE.itemsize:
            raise StateLayoutError(
                f'XORWOW state buffer must be {XORWOW_STATE_DTYPE.itemsize} bytes, got {len(buf)}.'
            )
        rec = np.frombuffer(buf, dtype=XORWOW_STATE_DTYPE)[0]
        float_flag = int(rec['boxmuller_float_state'])
        double_flag = int(rec['boxmuller_double_state'])
        if float_flag not in (0, 1) or double_flag not in (0, 1):
            raise StateLayoutError(
                f'Box-Muller cache flags must be 0 or 1, got {float_flag} and {double_flag}.'
            )

        engine = cls.__new__(cls)
        engine._tables = _resolve_tables(tables)
        engine._state = np.empty(XORWOW_STATE_WORDS, dtype=np.uint32)
        engine._state[:XORWOW_N] = rec['x']
        engine._state[XORWOW_N] = rec['d']
        engine._boxmuller_float = float(rec['boxmuller_float']) if float_flag else None
        engine._boxmuller_double = float(rec['boxmuller_double']) if double_flag else None
        return engine

    def copy(self) -> 'XorwowEngine':
        """Return an independent engine at the same position."""
        engine = self.__class__.__new__(self.__class__)
        engine._tables = self._tables
        engine._state = self._state.copy()
        engine._boxmuller_float = self._boxmuller_float
        engine._boxmuller_double = self._boxmuller_double
        return engine

    def __copy__(self):
        return self.copy()

    def __eq__(self, other):
        if not isinstance(other, XorwowEngine):
            return NotImplemented
        return (
            np.array_equal(self._state, other._state)
            and self._boxmuller_float == other._boxmuller_float
            and self._boxmuller_double == other._boxmuller_double
        )

    __hash__ = None

    def __repr__(self):
        return f'{self.__class__.__name__}(x={self.x}, d={self.d})'


def xorwow_init(
    seed: Uint64Like,
    subsequence: Uint64Like = 0,
    offset: Uint64Like = 0,
    tables: Optional[Sequence[np.ndarray]] = None,
) -> XorwowEngine:
    """Create an engine at ``(seed, subsequence, offset)``."""
    return XorwowEngine(seed, subsequence, offset, tables=tables)


def xorwow(state: XorwowEngine) -> int:
    """Return the next ``uint32`` draw of ``state``."""
    return state.next()


def skipahead(offset: Uint64Like, state: XorwowEngine):
    """Skip ``offset`` draws of ``state``."""
    state.discard(offset)


def skipahead_subsequence(subsequence: Uint64Like, state: XorwowEngine):
    """Skip ``subsequence`` subsequences of ``state``."""
    state.discard_subsequence(subsequence)
