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

# -*- coding: utf-8 -*-


__all__ = [
    'JumpTableError',
    'StateLayoutError',
]


class JumpTableError(ValueError):
    """Raised when an array cannot be used as a XORWOW jump table.

    A jump table is a C-contiguous ``uint32`` array of shape
    ``(n_matrices, 160, 5)``: one ``160 x 160`` matrix over GF(2) per
    entry, stored as the images of the 160 state bits.  Tables that are
    injected by the caller or loaded from the on-disk cache are checked
    against this layout before any engine reads them.

    Parameters
    ----------
    message : str
        A human-readable description of which property of the array is
        wrong (dtype, rank, shape or depth).

    See Also
    --------
    check_jump_matrices : The validator that raises this exception.
    XorwowJumpTables : The pair of tables consumed by the engines.

    Notes
    -----
    The exception derives from :class:`ValueError`, so callers that only
    care about "bad input" can catch the builtin.

    Examples
    --------
    .. code-block:: python

        >>> from brainrand._error import JumpTableError
        >>> raise JumpTableError(
        ...     "Jump matrices must have dtype uint32, got float64."
        ... )  # doctest: +SKIP
    """
    __module__ = 'brainrand'


class StateLayoutError(ValueError):
    """Raised when a raw XORWOW state buffer cannot be restored.

    :meth:`~brainrand.XorwowEngine.from_bytes` accepts exactly one record
    of :data:`~brainrand.XORWOW_STATE_DTYPE`.  Buffers with a different
    size, or whose cached-Gaussian flags hold anything other than ``0``
    or ``1``, are rejected with this exception rather than silently
    producing a corrupted engine.

    Parameters
    ----------
    message : str
        A description of the mismatch, including the expected and the
        received size where relevant.

    See Also
    --------
    XorwowEngine.to_bytes : Serialize an engine to the raw layout.
    XorwowEngine.from_bytes : Restore an engine from the raw layout.

    Examples
    --------
    .. code-block:: python

        >>> from brainrand._error import StateLayoutError
        >>> raise StateLayoutError(
        ...     "XORWOW state buffer must be 48 bytes, got 24."
        ... )  # doctest: +SKIP
    """
    __module__ = 'brainrand'
