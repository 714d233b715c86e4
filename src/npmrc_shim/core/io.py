"""Shared I/O utilities for atomic file operations."""

import contextlib
import logging
import os
from pathlib import Path

__all__ = [
    "atomic_write",
    "remove_if_exists",
]

logger = logging.getLogger(__name__)


def atomic_write(path: Path, content: bytes, mode: int = 0o600) -> None:
    """Write content to path atomically using temp file + os.replace.

    Uses PID in temp filename to prevent collisions when multiple
    processes write simultaneously.

    Args:
        path: Target file path.
        content: Bytes to write.
        mode: Permission bits of the written file.

    Raises:
        OSError: If write fails.

    """
    temp_path = path.parent / f".{path.name}.{os.getpid()}.tmp"
    try:
        fd = os.open(temp_path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, mode)
        with os.fdopen(fd, "wb") as f:
            f.write(content)
        os.chmod(temp_path, mode)
        os.replace(temp_path, path)
    except OSError:
        # Cleanup temp file if it exists, ignoring errors
        with contextlib.suppress(OSError):
            if temp_path.exists():
                temp_path.unlink()
        raise


def remove_if_exists(path: Path) -> bool:
    """Delete path if it exists.

    Returns:
        True if a file was removed.

    Raises:
        OSError: If the file exists but cannot be removed.

    """
    try:
        path.unlink()
    except FileNotFoundError:
        return False
    logger.debug("Removed %s", path)
    return True
