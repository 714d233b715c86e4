"""Rewrite and restore of the project .npmrc.

Sequence of a rewrite:

1. Back up the existing .npmrc (nothing to restore on failure before this)
2. Fetch `npm config list`, the json flag and Artifactory credentials
3. Transform the configuration and resolve the type restriction
4. Write the override file

Any failure after step 1 restores the backup and propagates the original
error; if the restore fails too, a CombinedRestoreError names both.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from types import TracebackType

from npmrc_shim.core.config.constants import NPMRC_BACKUP_FILE_NAME, NPMRC_FILE_NAME
from npmrc_shim.core.exceptions import FileOperationError
from npmrc_shim.core.io import atomic_write
from npmrc_shim.npmrc.backup import BackupHandle, begin_backup
from npmrc_shim.npmrc.restriction import resolve_type_restriction
from npmrc_shim.npmrc.source import RegistryOverrideSource
from npmrc_shim.npmrc.transformer import transform_config
from npmrc_shim.npmrc.types import TypeRestriction
from npmrc_shim.npmrc.writer import build_npmrc

__all__ = [
    "NpmrcOverride",
    "npmrc_override",
]

logger = logging.getLogger(__name__)


class NpmrcOverride:
    """Owns the override .npmrc of one working directory.

    Call rewrite_config() once, then restore_original_config() once,
    whatever the outcome of the rewrite.
    Used as a context manager after rewrite_config(), exit restores.

    Attributes:
        working_directory: Project directory holding .npmrc.
        npmrc_path: Override file path.
        backup_path: Backup file path, next to npmrc_path.

    """

    def __init__(
        self,
        working_directory: Path,
        *,
        file_name: str = NPMRC_FILE_NAME,
        backup_name: str = NPMRC_BACKUP_FILE_NAME,
    ) -> None:
        self.working_directory = working_directory
        self.npmrc_path = working_directory / file_name
        self.backup_path = working_directory / backup_name
        self._handle: BackupHandle | None = None

    def rewrite_config(self, source: RegistryOverrideSource) -> TypeRestriction:
        """Point the project .npmrc at the authenticated registry.

        Args:
            source: Provider of npm configuration and credentials.

        Returns:
            Type restriction inferred from the npm configuration.

        Raises:
            FileOperationError: If the backup or the write fails.
            ProcessError: If npm cannot be queried.
            AuthError: If credentials cannot be resolved.
            ConfigError: If npm output cannot be decoded.
            CombinedRestoreError: If any of the above happened after the
                backup and restoring the original failed as well.

        """
        if self._handle is not None:
            raise RuntimeError(f"{self.npmrc_path} was already rewritten")

        logger.debug("Creating project .npmrc in %s", self.working_directory)
        self._handle = begin_backup(self.npmrc_path, self.backup_path)

        with self._handle.restore_on_error():
            raw = source.fetch_raw_config()
            json_output = source.resolve_json_flag()
            registry, credential = source.authenticate()

            result = transform_config(raw, registry, source.is_recognized_key)
            restriction = resolve_type_restriction(result.pairs)
            content = build_npmrc(result.lines, json_output, registry, credential)

            try:
                atomic_write(self.npmrc_path, content, mode=0o600)
            except OSError as e:
                raise FileOperationError(
                    f"Cannot write {self.npmrc_path}: {e}", self.npmrc_path
                ) from e

        logger.info(
            "Wrote %s: registry=%s, type_restriction=%s",
            self.npmrc_path,
            registry,
            restriction.value,
        )
        return restriction

    def restore_original_config(self) -> None:
        """Restore the .npmrc that existed before rewrite_config().

        No-op if rewrite_config() never got as far as the backup, or if the
        original was already restored.

        Raises:
            FileOperationError: If the restore fails.

        """
        if self._handle is None:
            logger.debug("No backup taken for %s, nothing to restore", self.npmrc_path)
            return
        self._handle.restore()

    def __enter__(self) -> NpmrcOverride:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        """Restore the original; see BackupHandle for error reporting."""
        if self._handle is None:
            return
        self._handle.__exit__(exc_type, exc, tb)


@contextmanager
def npmrc_override(
    working_directory: Path,
    source: RegistryOverrideSource,
    *,
    file_name: str = NPMRC_FILE_NAME,
    backup_name: str = NPMRC_BACKUP_FILE_NAME,
) -> Iterator[TypeRestriction]:
    """Rewrite .npmrc for the duration of the block, then restore it.

    Example:
        >>> with npmrc_override(project, source) as restriction:  # doctest: +SKIP
        ...     subprocess.run(["npm", "install"], cwd=project, check=True)

    Raises:
        CombinedRestoreError: If the block raised and restoring failed too.

    """
    override = NpmrcOverride(working_directory, file_name=file_name, backup_name=backup_name)
    restriction = override.rewrite_config(source)
    with override:
        yield restriction
