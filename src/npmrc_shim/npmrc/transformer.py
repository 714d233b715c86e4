"""Transformation of `npm config list` output into project .npmrc lines.

The transformer keeps every option npm reports that is safe to persist,
points scoped registries (`@scope = url`) at the Artifactory registry,
and expands array options into npm's ini array syntax:

    omit = ["dev", "optional"]   ->   omit[] = "dev"
                                      omit[] = "optional"

Lines without "=" (blank lines, section banners) and keys outside the
allow-list (credentials, comments, machine specific paths) are dropped.
"""

from __future__ import annotations

import io
import logging
from collections.abc import Callable, Iterator

from npmrc_shim.core.exceptions import ConfigError
from npmrc_shim.npmrc.types import ConfigEntry, EntryKind, TransformResult

__all__ = [
    "classify_line",
    "expand_array",
    "iter_entries",
    "iter_lines",
    "transform_config",
]

logger = logging.getLogger(__name__)

KeyPredicate = Callable[[str], bool]


def iter_lines(raw: bytes | str) -> Iterator[str]:
    """Lazily yield lines of npm output without line terminators.

    Raises:
        ConfigError: If raw bytes are not valid UTF-8.

    """
    if isinstance(raw, bytes):
        try:
            text = raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise ConfigError(f"npm configuration output is not valid UTF-8: {e}") from e
    else:
        text = raw

    for line in io.StringIO(text, newline=None):
        yield line.rstrip("\r\n")


def classify_line(line: str, is_recognized_key: KeyPredicate) -> ConfigEntry:
    """Parse one line into a ConfigEntry.

    Args:
        line: A single line of npm output.
        is_recognized_key: Allow-list predicate for non-scoped keys.

    Returns:
        The classified entry. Lines without "=" and keys rejected by the
        allow-list are INVALID.

    """
    left, sep, right = line.partition("=")
    key = left.strip()
    value = right.strip()

    if not sep:
        return ConfigEntry(key, value, EntryKind.INVALID, line)
    if key.startswith("@"):
        return ConfigEntry(key, value, EntryKind.SCOPED_REGISTRY, line)
    if not is_recognized_key(key):
        return ConfigEntry(key, value, EntryKind.INVALID, line)
    if value.startswith("[") and value.endswith("]"):
        return ConfigEntry(key, value, EntryKind.ARRAY_VALUED, line)
    return ConfigEntry(key, value, EntryKind.SCALAR, line)


def iter_entries(raw: bytes | str, is_recognized_key: KeyPredicate) -> Iterator[ConfigEntry]:
    """Yield classified entries for every non-empty line, in source order."""
    for line in iter_lines(raw):
        if line:
            yield classify_line(line, is_recognized_key)


def expand_array(key: str, array_value: str) -> list[str]:
    """Expand a bracketed value into repeated `key[] = element` lines.

    Example:
        >>> expand_array("omit", "[dev, optional]")
        ['omit[] = dev', 'omit[] = optional']
        >>> expand_array("omit", "[]")
        []

    """
    inner = array_value[1:-1]
    if not inner.strip():
        return []
    return [f"{key}[] = {element.strip()}" for element in inner.split(",")]


def transform_config(
    raw: bytes | str,
    registry: str,
    is_recognized_key: KeyPredicate,
) -> TransformResult:
    """Transform npm configuration output into override file lines.

    Args:
        raw: Output of `npm config list`.
        registry: Authenticated registry URL scoped registries are pointed at.
        is_recognized_key: Allow-list predicate for non-scoped keys.

    Returns:
        TransformResult with the kept lines and the recognized (key, value)
        pairs in source order.

    Raises:
        ConfigError: If raw is not valid UTF-8.

    """
    lines: list[str] = []
    pairs: list[tuple[str, str]] = []
    dropped = 0

    for entry in iter_entries(raw, is_recognized_key):
        if entry.kind is EntryKind.SCOPED_REGISTRY:
            lines.append(f"{entry.key} = {registry}")
        elif entry.kind is EntryKind.ARRAY_VALUED:
            lines.extend(expand_array(entry.key, entry.raw_value))
        elif entry.kind is EntryKind.SCALAR:
            lines.append(entry.line)
        else:
            dropped += 1
            continue
        if entry.is_recognized:
            pairs.append((entry.key, entry.raw_value))

    logger.debug("Transformed npm config: kept=%d, dropped=%d", len(lines), dropped)
    return TransformResult(lines=tuple(lines), pairs=tuple(pairs))
