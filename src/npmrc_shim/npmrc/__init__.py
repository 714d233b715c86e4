"""Project .npmrc rewriting.

Public API:
    - NpmrcOverride / npmrc_override: backup, rewrite and restore of .npmrc
    - transform_config: npm config output -> override lines
    - resolve_type_restriction: dependency types implied by the config
    - build_npmrc: override file serialization
    - begin_backup / restore_from_disk: backup lifecycle
"""

from npmrc_shim.npmrc.backup import (
    BackupHandle,
    RestoreOutcome,
    absent_marker_path,
    begin_backup,
    restore_from_disk,
)
from npmrc_shim.npmrc.keys import RecognizedKeys
from npmrc_shim.npmrc.orchestrator import NpmrcOverride, npmrc_override
from npmrc_shim.npmrc.restriction import next_restriction, resolve_type_restriction
from npmrc_shim.npmrc.source import NpmRegistrySource, RegistryOverrideSource
from npmrc_shim.npmrc.transformer import transform_config
from npmrc_shim.npmrc.types import ConfigEntry, EntryKind, TransformResult, TypeRestriction
from npmrc_shim.npmrc.writer import build_npmrc

__all__ = [
    "BackupHandle",
    "ConfigEntry",
    "EntryKind",
    "NpmRegistrySource",
    "NpmrcOverride",
    "RecognizedKeys",
    "RegistryOverrideSource",
    "RestoreOutcome",
    "TransformResult",
    "TypeRestriction",
    "absent_marker_path",
    "begin_backup",
    "build_npmrc",
    "next_restriction",
    "npmrc_override",
    "resolve_type_restriction",
    "restore_from_disk",
    "transform_config",
]
