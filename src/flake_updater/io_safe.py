"""Safe I/O helpers (atomic writes).

Writes go to a temporary file in the target's directory, are fsynced when
possible, then renamed into place so a reader never sees a half-written
manifest. Write errors propagate after the temporary file is cleaned up.
"""

from __future__ import annotations
import os
import tempfile
from pathlib import Path


def atomic_write_bytes(path: Path, data: bytes) -> None:
    """Atomically replace ``path`` with ``data`` (fsync, then rename).

    The file mode of an existing target is carried over to the new file.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmppath = tempfile.mkstemp(
        prefix=path.name + ".", suffix=".tmp", dir=str(path.parent)
    )
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
            f.flush()
            try:
                os.fsync(f.fileno())
            except OSError:  # pragma: no cover
                pass
        try:
            os.chmod(tmppath, path.stat().st_mode & 0o7777)
        except FileNotFoundError:
            pass
        os.replace(tmppath, path)
    except Exception:
        try:
            os.remove(tmppath)
        except OSError:  # pragma: no cover
            pass
        raise


__all__ = ["atomic_write_bytes"]
