"""Backup and restore of the project .npmrc around a rewrite.

A BackupHandle is created before the override file is written. Its single
release action, restore(), deletes whatever file is at the original path
and moves the backup back into place. The handle restores on context exit
so the release runs on every control-flow path:

    with begin_backup(npmrc, backup) as handle:
        with handle.restore_on_error():
            write_override(npmrc)
        run_npm()
    # original .npmrc is back here, whether or not run_npm() raised

When there is no original, an empty marker file next to the backup records
that, so a later restore_from_disk() knows the override may be deleted.
An existing backup or marker means an earlier rewrite was never restored;
begin_backup() refuses to overwrite it.
"""

from __future__ import annotations

import logging
import os
import shutil
from collections.abc import Iterator
from contextlib import contextmanager
from enum import Enum
from pathlib import Path
from types import TracebackType

from npmrc_shim.core.exceptions import CombinedRestoreError, FileOperationError
from npmrc_shim.core.io import remove_if_exists

__all__ = [
    "ABSENT_MARKER_SUFFIX",
    "BackupHandle",
    "RestoreOutcome",
    "absent_marker_path",
    "begin_backup",
    "restore_from_disk",
]

logger = logging.getLogger(__name__)


ABSENT_MARKER_SUFFIX = ".absent"


class RestoreOutcome(Enum):
    """What restore_from_disk() found and did."""

    RESTORED = "restored"
    REMOVED_OVERRIDE = "removed_override"
    NOTHING_TO_RESTORE = "nothing_to_restore"


def absent_marker_path(backup_path: Path) -> Path:
    """Marker recording that no original existed when backup_path was due."""
    return backup_path.with_name(backup_path.name + ABSENT_MARKER_SUFFIX)


def _remove(path: Path) -> None:
    try:
        remove_if_exists(path)
    except OSError as e:
        raise FileOperationError(f"Cannot remove {path}: {e}", path) from e


def _restore(path: Path, backup_path: Path, existed: bool) -> None:
    """Delete path, then move the backup back or drop the absent marker.

    Raises:
        FileOperationError: If a delete or the rename fails.

    """
    _remove(path)

    if not existed:
        _remove(absent_marker_path(backup_path))
        return

    try:
        os.replace(backup_path, path)
    except OSError as e:
        raise FileOperationError(
            f"Cannot restore {path} from backup {backup_path}: {e}", path
        ) from e
    logger.debug("Restored %s from %s", path, backup_path)


class BackupHandle:
    """Saved state of a file that is about to be overwritten.

    Exactly one of restore() or discard() takes effect; once the handle is
    released, further calls are no-ops.

    Attributes:
        path: File being protected.
        backup_path: Location of the copy.
        existed: Whether path existed when the backup was taken.

    """

    def __init__(self, path: Path, backup_path: Path, existed: bool) -> None:
        self.path = path
        self.backup_path = backup_path
        self.existed = existed
        self._released = False

    @property
    def released(self) -> bool:
        return self._released

    def restore(self) -> None:
        """Put the original file back, or remove the override if there was none.

        Safe to call when the override was never written.

        Raises:
            FileOperationError: If the file cannot be removed or renamed.

        """
        if self._released:
            logger.debug("Backup of %s already released, skipping restore", self.path)
            return
        # Released before the attempt: a failed restore is reported, not retried
        self._released = True
        _restore(self.path, self.backup_path, self.existed)
        logger.info("Restored original %s", self.path)

    def discard(self) -> None:
        """Keep the current file and delete the backup or absent marker.

        Raises:
            FileOperationError: If the backup cannot be removed.

        """
        if self._released:
            return
        self._released = True
        _remove(self.backup_path if self.existed else absent_marker_path(self.backup_path))

    @contextmanager
    def restore_on_error(self) -> Iterator[BackupHandle]:
        """Restore if the body raises, then re-raise the body's error.

        Raises:
            CombinedRestoreError: If the body raised and the restore failed too.

        """
        try:
            yield self
        except Exception as e:
            _restore_after(self, e)
            raise

    def __enter__(self) -> BackupHandle:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if exc is None:
            self.restore()
        elif isinstance(exc, Exception):
            _restore_after(self, exc)
        else:
            # KeyboardInterrupt and friends: restore, keep the interrupt
            self.restore()

    def __repr__(self) -> str:
        return (
            f"BackupHandle(path={self.path}, backup_path={self.backup_path}, "
            f"existed={self.existed}, released={self._released})"
        )


def _restore_after(handle: BackupHandle, error: Exception) -> None:
    """Restore following a failure; raise CombinedRestoreError if that fails too."""
    try:
        handle.restore()
    except Exception as restore_error:
        logger.error("Restoring %s failed after error: %s", handle.path, restore_error)
        raise CombinedRestoreError(error, restore_error) from error


def begin_backup(path: Path, backup_path: Path) -> BackupHandle:
    """Copy path to backup_path before path is overwritten.

    A missing path is not an error: an absent marker is written instead and
    the handle restores by deleting whatever was written at path.

    Args:
        path: File to protect.
        backup_path: Where the copy goes. Must not exist yet.

    Returns:
        BackupHandle owning the restore.

    Raises:
        FileOperationError: If a backup or marker from an earlier rewrite is
            still present, or if the copy or marker cannot be written.

    """
    marker_path = absent_marker_path(backup_path)
    for leftover in (backup_path, marker_path):
        if leftover.exists():
            raise FileOperationError(
                f"{leftover} is left over from an earlier rewrite of {path}. "
                "Run 'npmrc-shim restore' first.",
                leftover,
            )

    if not path.exists():
        try:
            marker_path.touch(exist_ok=False)
        except OSError as e:
            raise FileOperationError(f"Cannot create {marker_path}: {e}", marker_path) from e
        logger.debug("%s does not exist, recorded %s", path, marker_path)
        return BackupHandle(path, backup_path, existed=False)

    try:
        # copy2 keeps permissions and timestamps
        shutil.copy2(path, backup_path)
    except OSError as e:
        raise FileOperationError(f"Cannot back up {path} to {backup_path}: {e}", path) from e

    logger.debug("Backed up %s to %s", path, backup_path)
    return BackupHandle(path, backup_path, existed=True)


def restore_from_disk(path: Path, backup_path: Path) -> RestoreOutcome:
    """Restore path from backup_path without an in-process handle.

    Used when the rewrite happened in another process. A backup is moved
    back over path; an absent marker means no original existed, so the
    override at path is removed. With neither present path was never
    rewritten and is left alone.

    Returns:
        What was found and done.

    Raises:
        FileOperationError: If a delete or the rename fails.

    """
    if backup_path.exists():
        _restore(path, backup_path, existed=True)
        outcome = RestoreOutcome.RESTORED
    elif absent_marker_path(backup_path).exists():
        _restore(path, backup_path, existed=False)
        outcome = RestoreOutcome.REMOVED_OVERRIDE
    else:
        outcome = RestoreOutcome.NOTHING_TO_RESTORE

    logger.info("Restore of %s: %s", path, outcome.value)
    return outcome
