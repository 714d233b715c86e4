"""Data types shared by the npmrc transformation pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

__all__ = [
    "ConfigEntry",
    "EntryKind",
    "TransformResult",
    "TypeRestriction",
]


class TypeRestriction(Enum):
    """Which dependency types npm installs.

    UNSET means no restriction was found in the configuration; callers
    recording build metadata treat it as "no restriction".
    """

    UNSET = "unset"
    ALL = "all"
    PROD_ONLY = "prod-only"
    DEV_ONLY = "dev-only"


class EntryKind(Enum):
    """Classification of a single `npm config list` line."""

    SCALAR = auto()
    ARRAY_VALUED = auto()
    SCOPED_REGISTRY = auto()
    INVALID = auto()


@dataclass(frozen=True)
class ConfigEntry:
    """One parsed line of npm configuration output.

    Attributes:
        key: Trimmed text left of the first "=".
        raw_value: Trimmed text right of the first "=".
        kind: How the line is treated when writing the override file.
        line: The source line, emitted verbatim for scalar entries.

    """

    key: str
    raw_value: str
    kind: EntryKind
    line: str

    @property
    def is_recognized(self) -> bool:
        """True for entries whose (key, value) feeds type restriction resolution."""
        return self.kind in (EntryKind.SCALAR, EntryKind.ARRAY_VALUED)


@dataclass(frozen=True)
class TransformResult:
    """Output of transforming npm configuration.

    Attributes:
        lines: Override file lines in source order, without trailing newlines.
        pairs: (key, value) pairs of recognized entries in source order.

    """

    lines: tuple[str, ...]
    pairs: tuple[tuple[str, str], ...]
