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

import copy

import numpy as np
import pytest

import brainrand
from brainrand import (
    XORWOW_STATE_DTYPE,
    JumpTableError,
    StateLayoutError,
    XorwowEngine,
    skipahead,
    skipahead_subsequence,
    xorwow,
    xorwow_init,
)
from brainrand._precomputed import build_xorwow_jump_tables

SEED0_X = (1478573778, 1163863128, 4171507460, 3705206908, 1360900310)
SEED0_D = 716983765
SEED0_DRAWS = [3179217846, 1883133293, 2220552389, 674260989, 306521119, 1986458431]


@pytest.fixture(scope='module')
def shallow_tables():
    # Reach of 2^5 draws per table: larger counts use squaring.
    return build_xorwow_jump_tables(n_matrices=3)


class TestConstruction:
    def test_seed_zero_state(self):
        rng = XorwowEngine(0)
        assert rng.x == SEED0_X
        assert rng.d == SEED0_D

    def test_default_seed_is_zero(self):
        assert XorwowEngine() == XorwowEngine(0, 0, 0)

    def test_state_is_copy(self):
        rng = XorwowEngine(0)
        state = rng.state
        state[:] = 0
        assert rng.x == SEED0_X

    def test_numpy_integer_arguments(self):
        assert XorwowEngine(np.uint64(0), np.int32(0), np.uint8(0)) == XorwowEngine(0)

    def test_max_seed(self):
        rng = XorwowEngine(2 ** 64 - 1, 2 ** 64 - 1, 2 ** 64 - 1)
        assert 0 <= rng.next() < 2 ** 32

    @pytest.mark.parametrize('name', ['seed', 'subsequence', 'offset'])
    def test_negative_rejected(self, name):
        with pytest.raises(ValueError, match=name):
            XorwowEngine(**{name: -1})

    @pytest.mark.parametrize('name', ['seed', 'subsequence', 'offset'])
    def test_too_large_rejected(self, name):
        with pytest.raises(ValueError, match=name):
            XorwowEngine(**{name: 2 ** 64})

    @pytest.mark.parametrize('value', [1.0, '1', None, True])
    def test_non_integer_rejected(self, value):
        with pytest.raises(TypeError):
            XorwowEngine(value)

    def test_invalid_tables_rejected(self):
        bad = np.zeros((2, 160, 5), dtype=np.int32)
        with pytest.raises(JumpTableError):
            XorwowEngine(0, tables=(bad, bad))

    def test_shares_process_tables(self):
        assert XorwowEngine(1).tables is XorwowEngine(2).tables


class TestDraws:
    def test_seed_zero_draws(self):
        rng = XorwowEngine(0)
        assert [rng.next() for _ in range(6)] == SEED0_DRAWS

    def test_call_is_next(self):
        rng = XorwowEngine(0)
        assert rng() == SEED0_DRAWS[0]
        assert rng.next() == SEED0_DRAWS[1]

    def test_returns_python_int(self):
        value = XorwowEngine(3).next()
        assert type(value) is int
        assert 0 <= value < 2 ** 32

    def test_discard_then_next(self):
        rng = XorwowEngine(0)
        rng.discard(5)
        assert rng.next() == SEED0_DRAWS[5]

    def test_offset_argument(self):
        assert XorwowEngine(0, 0, 5).next() == SEED0_DRAWS[5]

    def test_zero_discard_is_noop(self):
        rng = XorwowEngine(11)
        before = rng.copy()
        rng.discard(0)
        rng.discard_subsequence(0)
        assert rng == before

    @pytest.mark.parametrize('k', [1, 2, 3, 4, 5, 31, 32, 33, 100, 257])
    def test_skip_ahead_equals_stepping(self, k):
        a = XorwowEngine(2026)
        b = a.copy()
        for _ in range(k):
            a.next()
        b.discard(k)
        assert a == b
        assert a.next() == b.next()

    @pytest.mark.parametrize('k', [31, 32, 64, 65, 100, 500])
    def test_skip_ahead_past_table_reach(self, shallow_tables, k):
        a = XorwowEngine(2026, tables=shallow_tables)
        b = a.copy()
        for _ in range(k):
            a.next()
        b.discard(k)
        assert a == b

    @pytest.mark.parametrize('k', [10 ** 9, 2 ** 62 + 1, 2 ** 64 - 1])
    def test_table_depth_does_not_change_stream(self, shallow_tables, k):
        a = XorwowEngine(17, 2, k)
        b = XorwowEngine(17, 2, k, tables=shallow_tables)
        assert a == b

    def test_discards_compose(self):
        a = XorwowEngine(8)
        b = XorwowEngine(8)
        a.discard(2 ** 63)
        a.discard(2 ** 63 - 1)
        b.discard(2 ** 63)
        b.discard(2 ** 62)
        b.discard(2 ** 62 - 1)
        assert a == b


class TestSubsequence:
    def test_discard_subsequence_equals_seeding(self):
        a = XorwowEngine(31415, 0, 0)
        a.discard_subsequence(1)
        assert a == XorwowEngine(31415, 1, 0)

    def test_large_subsequence(self, shallow_tables):
        a = XorwowEngine(5, 0, 0)
        a.discard_subsequence(10 ** 15)
        assert a == XorwowEngine(5, 10 ** 15, 0, tables=shallow_tables)

    def test_subsequence_then_offset(self):
        a = XorwowEngine(9, 4, 0)
        a.discard(123)
        assert a == XorwowEngine(9, 4, 123)

    def test_streams_differ(self):
        draws = []
        for k in range(4):
            rng = XorwowEngine(0, k)
            draws.append(tuple(rng.next() for _ in range(4)))
        assert len(set(draws)) == 4

    def test_weyl_unchanged(self):
        rng = XorwowEngine(1)
        d = rng.d
        rng.discard_subsequence(77)
        assert rng.d == d


class TestBoxMullerSlots:
    def test_empty_after_construction(self):
        rng = XorwowEngine(0)
        assert rng.boxmuller_float is None
        assert rng.boxmuller_double is None

    def test_take_empties_slot(self):
        rng = XorwowEngine(0)
        rng.boxmuller_double = 0.25
        assert rng.take_boxmuller_double() == 0.25
        assert rng.boxmuller_double is None
        assert rng.take_boxmuller_double() is None

    def test_float_slot_has_float32_precision(self):
        rng = XorwowEngine(0)
        rng.boxmuller_float = 0.1
        assert rng.boxmuller_float == float(np.float32(0.1))
        assert rng.take_boxmuller_float() == float(np.float32(0.1))
        assert rng.boxmuller_float is None

    def test_slots_do_not_affect_stream(self):
        a = XorwowEngine(0)
        a.boxmuller_float = 1.5
        a.boxmuller_double = -2.5
        assert [a.next() for _ in range(3)] == SEED0_DRAWS[:3]

    def test_slots_take_part_in_equality(self):
        a = XorwowEngine(0)
        b = XorwowEngine(0)
        a.boxmuller_double = 1.0
        assert a != b
        b.boxmuller_double = 1.0
        assert a == b


class TestSerialization:
    def test_record_size(self):
        assert XORWOW_STATE_DTYPE.itemsize == 48
        assert len(XorwowEngine(0).to_bytes()) == 48

    def test_field_offsets(self):
        offsets = {name: XORWOW_STATE_DTYPE.fields[name][1] for name in XORWOW_STATE_DTYPE.names}
        assert offsets == {
            'x': 0,
            'd': 20,
            'boxmuller_float_state': 24,
            'boxmuller_double_state': 28,
            'boxmuller_float': 32,
            'boxmuller_double': 40,
        }

    def test_round_trip(self):
        rng = XorwowEngine(123, 4, 5678)
        rng.boxmuller_float = 0.5
        rng.boxmuller_double = -1.25
        restored = XorwowEngine.from_bytes(rng.to_bytes())
        assert restored == rng
        assert restored.next() == rng.next()

    def test_empty_slots_round_trip(self):
        rng = XorwowEngine(3)
        restored = XorwowEngine.from_bytes(rng.to_bytes())
        assert restored.boxmuller_float is None
        assert restored.boxmuller_double is None

    def test_record_contents(self):
        rec = np.frombuffer(XorwowEngine(0).to_bytes(), dtype=XORWOW_STATE_DTYPE)[0]
        assert tuple(int(w) for w in rec['x']) == SEED0_X
        assert int(rec['d']) == SEED0_D
        assert int(rec['boxmuller_float_state']) == 0
        assert int(rec['boxmuller_double_state']) == 0

    def test_equal_engines_equal_bytes(self):
        assert XorwowEngine(6).to_bytes() == XorwowEngine(6).to_bytes()

    def test_wrong_size(self):
        with pytest.raises(StateLayoutError, match='48 bytes'):
            XorwowEngine.from_bytes(b'\x00' * 40)

    def test_bad_flag(self):
        rec = np.zeros((), dtype=XORWOW_STATE_DTYPE)
        rec['boxmuller_float_state'] = 2
        with pytest.raises(StateLayoutError):
            XorwowEngine.from_bytes(rec.tobytes())

    def test_accepts_bytearray(self):
        data = bytearray(XorwowEngine(0).to_bytes())
        assert XorwowEngine.from_bytes(data) == XorwowEngine(0)

    def test_restored_engine_uses_given_tables(self, shallow_tables):
        restored = XorwowEngine.from_bytes(XorwowEngine(0).to_bytes(), tables=shallow_tables)
        assert restored.tables.step.shape == (3, 160, 5)


class TestCopy:
    def test_copy_is_independent(self):
        a = XorwowEngine(0)
        b = a.copy()
        b.next()
        assert a.next() == SEED0_DRAWS[0]

    def test_copy_module(self):
        a = XorwowEngine(0)
        a.boxmuller_float = 2.0
        b = copy.copy(a)
        assert b == a
        assert b is not a

    def test_not_hashable(self):
        with pytest.raises(TypeError):
            hash(XorwowEngine(0))

    def test_not_equal_to_other_types(self):
        assert XorwowEngine(0) != SEED0_X

    def test_repr(self):
        text = repr(XorwowEngine(0))
        assert text.startswith('XorwowEngine(')
        assert str(SEED0_D) in text


class TestFunctionalInterface:
    def test_init_and_draw(self):
        state = xorwow_init(0)
        assert [xorwow(state) for _ in range(3)] == SEED0_DRAWS[:3]

    def test_skipahead(self):
        state = xorwow_init(0)
        skipahead(5, state)
        assert xorwow(state) == SEED0_DRAWS[5]

    def test_skipahead_subsequence(self):
        state = xorwow_init(42)
        skipahead_subsequence(2, state)
        assert state == xorwow_init(42, 2)

    def test_init_with_tables(self, shallow_tables):
        assert xorwow_init(1, 1, 1000, shallow_tables) == xorwow_init(1, 1, 1000)

    def test_exported(self):
        assert brainrand.XorwowEngine is XorwowEngine
        assert XorwowEngine.__module__ == 'brainrand'
