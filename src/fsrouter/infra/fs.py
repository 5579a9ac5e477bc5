from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Path normalization and the single output write of a generator run. The
write goes through a temporary file in the target directory followed by an
atomic rename, so readers never observe a half-written file. Concurrent
runs against the same target are last-writer-wins; there is no locking.
"""

import os
import stat
import tempfile
from typing import Optional

from fsrouter.domain.errors import FilesystemError

# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

def normalize_path(path: Optional[str], fallback: str) -> str:
    """
    Normalize a path string into an absolute filesystem path.

    Handles environment variable expansion ($VAR/%VAR%) and user home
    shortcuts (~/). Reverts to fallback if the input is empty.

    Args:
        path: Raw input path string.
        fallback: Default path to use if the input is empty.

    Returns:
        str: Normalized absolute path.
    """
    p = (path or "").strip()
    if not p:
        p = fallback
    return os.path.abspath(os.path.expandvars(os.path.expanduser(p)))

# -----------------------------------------------------------------------------
# OUTPUT API
# -----------------------------------------------------------------------------

def write_text_atomic(path: str, text: str) -> None:
    """
    Replace ``path`` with ``text`` in one rename.

    The new file keeps the permission bits of the file it replaces. A first
    write gets the umask-derived default, as ``open()`` would create it.

    Args:
        path: Target file; parent directories are created.
        text: Full file content.

    Raises:
        FilesystemError: If the directory cannot be created or written.
    """
    out_dir = os.path.dirname(os.path.abspath(path))
    tmp_path = ""
    try:
        os.makedirs(out_dir, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(prefix=".fsrouter-", suffix=".tmp", dir=out_dir)
        with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as f:
            f.write(text)
        # mkstemp creates 0600 files
        os.chmod(tmp_path, _target_mode(path))
        os.replace(tmp_path, path)
    except OSError as e:
        if tmp_path and os.path.exists(tmp_path):
            os.remove(tmp_path)
        raise FilesystemError(f"Cannot write output file ({e.strerror or e})", path) from e

# -----------------------------------------------------------------------------
# HELPERS
# -----------------------------------------------------------------------------

def _target_mode(path: str) -> int:
    """Permission bits for the output: the existing file's, else 0666 minus umask."""
    try:
        return stat.S_IMODE(os.stat(path).st_mode)
    except FileNotFoundError:
        pass
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask
