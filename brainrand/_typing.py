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

from typing import Tuple, Union

import jax
import numpy as np

__all__ = [
    'Uint64Like',
    'XorwowState',
    'JumpMatrices',
    'PallasXorwowKey',
]

# Seeds, offsets and subsequence counts (values in [0, 2^64)).
Uint64Like = Union[int, np.integer]

# ``(6,) uint32`` array: five xorshift words followed by the Weyl value.
XorwowState = np.ndarray

# ``(n_matrices, 160, 5) uint32``.
JumpMatrices = Union[np.ndarray, jax.Array]

# ``(x0, x1, x2, x3, x4, d)`` as ``jnp.uint32`` scalars.
PallasXorwowKey = Tuple[jax.Array, jax.Array, jax.Array, jax.Array, jax.Array, jax.Array]
