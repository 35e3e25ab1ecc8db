"""Filesystem helpers."""

from __future__ import annotations

import errno
import os
import shutil
import tempfile
from pathlib import Path

__all__ = ["atomic_write_text", "copy_tree"]


def atomic_write_text(path: Path, content: str, *, encoding: str = "utf-8") -> None:
    """Write text to path atomically using temp file + replace."""
    path.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_name = tempfile.mkstemp(
        prefix=f".{path.name}.",
        suffix=".tmp",
        dir=str(path.parent),
    )
    tmp_path = Path(tmp_name)

    try:
        with os.fdopen(fd, "w", encoding=encoding, newline="") as handle:
            handle.write(content)
            handle.flush()
            os.fsync(handle.fileno())
        os.replace(tmp_path, path)
    finally:
        if tmp_path.exists():
            tmp_path.unlink(missing_ok=True)


def copy_tree(src: Path, dst: Path) -> None:
    """Recursively copy src into dst, overwriting files that already exist.

    Files present in dst but not in src are left alone.
    """
    if not src.is_dir():
        raise FileNotFoundError(errno.ENOENT, "source directory not found", str(src))
    shutil.copytree(src, dst, dirs_exist_ok=True)
