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

__version__ = "0.0.1"

from . import config
from ._engine import (
    XORWOW_STATE_DTYPE,
    XorwowEngine,
    xorwow_init,
    xorwow,
    skipahead,
    skipahead_subsequence,
)
from ._error import JumpTableError, StateLayoutError
from ._numba_xorwow import (
    xorwow_seed,
    xorwow_next_key,
    xorwow_randint,
    xorwow_discard,
    xorwow_discard_subsequence,
)
from ._pallas_xorwow import PallasXorwowRNG, get_device_jump_tables
from ._precomputed import (
    XorwowJumpTables,
    build_xorwow_jump_tables,
    check_jump_matrices,
    get_xorwow_jump_tables,
    reset_xorwow_jump_tables,
)

__all__ = [

    # --- engines --- #
    'XorwowEngine',
    'PallasXorwowRNG',
    'XORWOW_STATE_DTYPE',

    # --- collaborator interface --- #
    'xorwow_init',
    'xorwow',
    'skipahead',
    'skipahead_subsequence',

    # --- numba kernels --- #
    'xorwow_seed',
    'xorwow_next_key',
    'xorwow_randint',
    'xorwow_discard',
    'xorwow_discard_subsequence',

    # --- jump tables --- #
    'XorwowJumpTables',
    'build_xorwow_jump_tables',
    'check_jump_matrices',
    'get_xorwow_jump_tables',
    'reset_xorwow_jump_tables',
    'get_device_jump_tables',

    # --- errors --- #
    'JumpTableError',
    'StateLayoutError',

    # --- configuration --- #
    'config',

]
