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
Constants of the XORWOW generator (G. Marsaglia, Xorshift RNGs, 2003).

The seeding constants are the ones used by cuRAND and rocRAND, so that
streams produced here agree with those libraries for the same
``(seed, subsequence, offset)``.
"""

__all__ = [
    'XORWOW_N',
    'XORWOW_M',
    'XORWOW_BITS',
    'XORWOW_STATE_WORDS',
    'XORWOW_JUMP_MATRICES',
    'XORWOW_JUMP_LOG2',
    'XORWOW_SEQUENCE_JUMP_LOG2',
    'XORWOW_DEFAULT_SEED',
    'XORWOW_WEYL_STEP',
    'XORWOW_INITIAL_X',
    'XORWOW_INITIAL_D',
    'XORWOW_SEED_XOR_LO',
    'XORWOW_SEED_XOR_HI',
    'XORWOW_SEED_MUL_LO',
    'XORWOW_SEED_MUL_HI',
    'UINT32_MASK',
    'UINT64_MAX',
]

# Words in the xorshift register and bits per word.
XORWOW_N = 5
XORWOW_M = 32
XORWOW_BITS = XORWOW_N * XORWOW_M

# Register words plus the Weyl accumulator.
XORWOW_STATE_WORDS = XORWOW_N + 1

# Each table holds A^1, A^4, A^16, ... (or the same powers times 2^67).
XORWOW_JUMP_MATRICES = 32
XORWOW_JUMP_LOG2 = 2
XORWOW_SEQUENCE_JUMP_LOG2 = 67

XORWOW_DEFAULT_SEED = 0
XORWOW_WEYL_STEP = 362437

XORWOW_INITIAL_X = (123456789, 362436069, 521288629, 88675123, 5783321)
XORWOW_INITIAL_D = 6615241

XORWOW_SEED_XOR_LO = 0xaad26b49
XORWOW_SEED_XOR_HI = 0xf7dcefdd
XORWOW_SEED_MUL_LO = 1099087573
XORWOW_SEED_MUL_HI = 2591861531

UINT32_MASK = 0xFFFFFFFF
UINT64_MAX = 0xFFFFFFFFFFFFFFFF
