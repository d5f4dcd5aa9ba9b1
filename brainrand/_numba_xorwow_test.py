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
import pytest

from brainrand._numba_xorwow import (
    xorwow_seed,
    xorwow_next_key,
    xorwow_randint,
    xorwow_discard,
    xorwow_discard_subsequence,
)
from brainrand._precomputed import get_xorwow_jump_tables

SEED0_STATE = [1478573778, 1163863128, 4171507460, 3705206908, 1360900310, 716983765]
SEED0_DRAWS = [
    3179217846, 1883133293, 2220552389, 674260989,
    306521119, 1986458431, 977720403, 1414583917,
]


@pytest.fixture(scope='module')
def tables():
    return get_xorwow_jump_tables()


def _seed(tables, seed, subsequence=0, offset=0):
    return xorwow_seed(
        np.uint64(seed), np.uint64(subsequence), np.uint64(offset),
        tables.step, tables.sequence,
    )


def _draws(state, n):
    return [int(xorwow_randint(state)) for _ in range(n)]


class TestSeed:
    def test_state_layout(self, tables):
        state = _seed(tables, 0)
        assert state.shape == (6,)
        assert state.dtype == np.uint32

    def test_seed_zero_state(self, tables):
        assert _seed(tables, 0).tolist() == SEED0_STATE

    def test_seed_zero_draws(self, tables):
        assert _draws(_seed(tables, 0), 8) == SEED0_DRAWS

    @pytest.mark.parametrize(
        'seed, expected',
        [
            (12345, [1283759346, 1636376615, 1239293409, 1726449579]),
            (0x123456789ABCDEF0, [659909570, 1683698917, 4246992159, 3394647409]),
        ]
    )
    def test_known_draws(self, tables, seed, expected):
        assert _draws(_seed(tables, seed), 4) == expected

    def test_deterministic(self, tables):
        assert np.array_equal(_seed(tables, 987654321, 3, 1000), _seed(tables, 987654321, 3, 1000))

    def test_seeds_differ(self, tables):
        assert _draws(_seed(tables, 1), 4) != _draws(_seed(tables, 2), 4)

    def test_high_half_of_seed_matters(self, tables):
        assert _draws(_seed(tables, 1), 4) != _draws(_seed(tables, 1 + (1 << 32)), 4)

    def test_offset_equals_draws(self, tables):
        state = _seed(tables, 0, offset=5)
        assert int(xorwow_randint(state)) == SEED0_DRAWS[5]


class TestStep:
    def test_next_key_then_output(self, tables):
        state = _seed(tables, 0)
        xorwow_next_key(state)
        assert int(np.uint32(state[5] + state[4])) == SEED0_DRAWS[0]

    def test_weyl_increment(self, tables):
        state = _seed(tables, 0)
        d = int(state[5])
        xorwow_next_key(state)
        assert int(state[5]) == (d + 362437) % 2 ** 32

    def test_row_views_of_state_buffer(self, tables):
        buf = np.stack([_seed(tables, 0), _seed(tables, 0, subsequence=1)])
        assert int(xorwow_randint(buf[0])) == SEED0_DRAWS[0]
        assert int(xorwow_randint(buf[0])) == SEED0_DRAWS[1]
        assert buf[1].tolist() == _seed(tables, 0, subsequence=1).tolist()

    def test_callable_from_njit(self, tables):
        @numba.njit
        def fill(state, out):
            for i in range(out.shape[0]):
                out[i] = xorwow_randint(state)

        out = np.zeros(8, dtype=np.uint32)
        fill(_seed(tables, 0), out)
        assert out.tolist() == SEED0_DRAWS


class TestDiscard:
    @pytest.mark.parametrize('k', [0, 1, 2, 3, 7, 64, 1000])
    def test_discard_matches_draws(self, tables, k):
        a = _seed(tables, 42)
        b = a.copy()
        for _ in range(k):
            xorwow_next_key(a)
        xorwow_discard(b, np.uint64(k), tables.step)
        assert np.array_equal(a, b)

    def test_weyl_closed_form(self, tables):
        state = _seed(tables, 7)
        d = int(state[5])
        k = 2 ** 40 + 17
        xorwow_discard(state, np.uint64(k), tables.step)
        assert int(state[5]) == (d + k * 362437) % 2 ** 32

    def test_discard_composes(self, tables):
        a = _seed(tables, 7)
        b = a.copy()
        xorwow_discard(a, np.uint64(10 ** 12), tables.step)
        xorwow_discard(a, np.uint64(3 * 10 ** 12), tables.step)
        xorwow_discard(b, np.uint64(4 * 10 ** 12), tables.step)
        assert np.array_equal(a, b)

    def test_subsequence_keeps_weyl(self, tables):
        state = _seed(tables, 7)
        d = int(state[5])
        xorwow_discard_subsequence(state, np.uint64(12345), tables.sequence)
        assert int(state[5]) == d

    def test_subsequence_matches_seeding(self, tables):
        state = _seed(tables, 99)
        xorwow_discard_subsequence(state, np.uint64(3), tables.sequence)
        assert np.array_equal(state, _seed(tables, 99, subsequence=3))

    def test_subsequence_is_2_pow_67_draws(self, tables):
        a = _seed(tables, 5)
        b = a.copy()
        xorwow_discard_subsequence(a, np.uint64(1), tables.sequence)
        # 2^67 = 32 * 2^62; the Weyl value is unaffected either way.
        for _ in range(32):
            xorwow_discard(b, np.uint64(2 ** 62), tables.step)
        assert np.array_equal(a, b)
