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

"""User-level configuration and jump-table persistence for brainrand.

The XORWOW jump tables are pure functions of the generator, so they can
be built once and reused across processes.  This module decides where
they are stored and reads/writes the cache file.  Writes are atomic and
the file carries a schema version; a cache that cannot be read is
reported with a warning and ignored, never trusted.

Cache locations:
    - ``$BRAINRAND_CACHE_DIR`` when set
    - Linux:   ``$XDG_CACHE_HOME/brainrand`` or ``~/.cache/brainrand``
    - macOS:   ``~/Library/Caches/brainrand``
    - Windows: ``%LOCALAPPDATA%/brainrand``
"""

import os
import platform
import tempfile
import warnings
import zipfile
from typing import Dict, Optional

import numpy as np

__all__ = [
    'get_cache_dir',
    'get_table_cache_path',
    'set_table_cache_enabled',
    'get_table_cache_enabled',
    'read_table_file',
    'write_table_file',
    'clear_table_cache',
]

_SCHEMA_VERSION = 1
_SUPPORTED_SCHEMA_VERSIONS = {1}
_TABLE_FILE_NAME = 'xorwow_jump_tables.npz'
_TABLE_KEYS = ('step', 'sequence')

_table_cache_enabled: bool = False


def get_cache_dir() -> str:
    """Return the directory used for brainrand's on-disk caches.

    Returns
    -------
    str
        ``$BRAINRAND_CACHE_DIR`` if set, otherwise a platform-appropriate
        per-user cache directory ending in ``brainrand``.

    Examples
    --------
    .. code-block:: python

        >>> import brainrand
        >>> brainrand.config.get_cache_dir()  # doctest: +SKIP
        '/home/user/.cache/brainrand'
    """
    override = os.environ.get('BRAINRAND_CACHE_DIR')
    if override:
        return override
    system = platform.system()
    if system == 'Windows':
        base = os.environ.get('LOCALAPPDATA', os.path.expanduser('~'))
    elif system == 'Darwin':
        base = os.path.join(os.path.expanduser('~'), 'Library', 'Caches')
    else:
        base = os.environ.get('XDG_CACHE_HOME', os.path.join(os.path.expanduser('~'), '.cache'))
    return os.path.join(base, 'brainrand')


def get_table_cache_path() -> str:
    """Return the path of the persisted XORWOW jump tables."""
    return os.path.join(get_cache_dir(), _TABLE_FILE_NAME)


def set_table_cache_enabled(enabled: bool = True):
    """Enable or disable the on-disk cache for the process-wide jump tables.

    When enabled, :func:`~brainrand.get_xorwow_jump_tables` first tries
    :func:`get_table_cache_path` and writes the file after building the
    tables in memory.  Tables that are already loaded in this process
    are not affected.

    Parameters
    ----------
    enabled : bool, optional
        Defaults to ``True``.

    See Also
    --------
    get_table_cache_enabled : Query the current setting.
    clear_table_cache : Delete the cache file.

    Examples
    --------
    .. code-block:: python

        >>> import brainrand
        >>> brainrand.config.set_table_cache_enabled(True)
        >>> brainrand.config.get_table_cache_enabled()
        True
    """
    global _table_cache_enabled
    _table_cache_enabled = bool(enabled)


def get_table_cache_enabled() -> bool:
    """Return whether the on-disk jump-table cache is used (``False`` by default)."""
    return _table_cache_enabled


def read_table_file(path: str) -> Optional[Dict[str, np.ndarray]]:
    """Read persisted jump tables.

    Parameters
    ----------
    path : str
        Path of a ``.npz`` file written by :func:`write_table_file`.

    Returns
    -------
    dict of str to np.ndarray or None
        ``{'step': ..., 'sequence': ...}``, or ``None`` if the file is
        missing, unreadable, or has an unsupported schema version.  The
        arrays are returned as stored; shape and dtype checks are left to
        :func:`~brainrand.check_jump_matrices`.
    """
    if not os.path.isfile(path):
        return None

    try:
        with np.load(path, allow_pickle=False) as data:
            schema_ver = int(data['schema_version']) if 'schema_version' in data.files else 0
            if schema_ver not in _SUPPORTED_SCHEMA_VERSIONS:
                warnings.warn(
                    f"brainrand: Jump table cache schema version {schema_ver} is not supported "
                    f"(supported: {_SUPPORTED_SCHEMA_VERSIONS}). Rebuilding tables.",
                    stacklevel=3,
                )
                return None
            return {key: np.array(data[key]) for key in _TABLE_KEYS}
    except (OSError, ValueError, KeyError, zipfile.BadZipFile) as e:
        warnings.warn(
            f"brainrand: Corrupted jump table cache at {path}: {e}. Rebuilding tables.",
            stacklevel=3,
        )
        return None


def write_table_file(path: str, step: np.ndarray, sequence: np.ndarray) -> bool:
    """Atomically write the jump tables to ``path``.

    Uses a temporary file in the destination directory and
    ``os.replace`` so the cache is never left partially written.

    Parameters
    ----------
    path : str
        Destination ``.npz`` path.
    step : np.ndarray
        Step table.
    sequence : np.ndarray
        Subsequence table.

    Returns
    -------
    bool
        ``True`` if the file was written.  Failures are reported with a
        warning and return ``False``.
    """
    cache_dir = os.path.dirname(path) or '.'
    try:
        os.makedirs(cache_dir, exist_ok=True)
    except OSError as e:
        warnings.warn(
            f"brainrand: Cannot create cache directory {cache_dir}: {e}. "
            f"Jump table persistence skipped.",
            stacklevel=3,
        )
        return False

    try:
        fd, tmp_path = tempfile.mkstemp(dir=cache_dir, suffix='.tmp')
        try:
            with os.fdopen(fd, 'wb') as f:
                np.savez(
                    f,
                    schema_version=np.asarray(_SCHEMA_VERSION),
                    step=np.ascontiguousarray(step),
                    sequence=np.ascontiguousarray(sequence),
                )
            os.replace(tmp_path, path)
        except BaseException:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
            raise
    except OSError as e:
        warnings.warn(
            f"brainrand: Cannot write jump table cache {path}: {e}. "
            f"Jump table persistence skipped.",
            stacklevel=3,
        )
        return False
    return True


def clear_table_cache():
    """Delete the jump-table cache file if it exists.

    Tables already loaded in this process stay in memory.
    """
    path = get_table_cache_path()
    try:
        if os.path.isfile(path):
            os.unlink(path)
    except OSError as e:
        warnings.warn(
            f"brainrand: Cannot delete jump table cache {path}: {e}.",
            stacklevel=3,
        )
