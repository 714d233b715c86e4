"""Allow-list of npm configuration keys safe to persist in a project .npmrc."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from npmrc_shim.core.config.models import (
    DEFAULT_EXCLUDED_KEYS,
    DEFAULT_EXCLUDED_PREFIXES,
    NpmrcConfig,
)

logger = logging.getLogger(__name__)


class RecognizedKeys:
    """Predicate deciding whether a configuration key may be persisted.

    A key is recognized unless it is empty, equals an excluded key or starts
    with an excluded prefix. Instances are callable so they can be passed
    wherever an `is_recognized_key(key) -> bool` function is expected.

    Example:
        >>> is_recognized = RecognizedKeys()
        >>> is_recognized("save-exact"), is_recognized("//host/:_authToken")
        (True, False)

    """

    def __init__(
        self,
        excluded_keys: Iterable[str] = DEFAULT_EXCLUDED_KEYS,
        excluded_prefixes: Iterable[str] = DEFAULT_EXCLUDED_PREFIXES,
    ) -> None:
        self.excluded_keys = frozenset(excluded_keys)
        self.excluded_prefixes = tuple(excluded_prefixes)

    @classmethod
    def from_config(cls, config: NpmrcConfig) -> RecognizedKeys:
        """Build the predicate from the `npmrc` config section."""
        return cls(config.excluded_keys, config.excluded_prefixes)

    def __call__(self, key: str) -> bool:
        if not key:
            return False
        if key in self.excluded_keys:
            return False
        return not key.startswith(self.excluded_prefixes)

    def __repr__(self) -> str:
        return (
            f"RecognizedKeys(excluded_keys={sorted(self.excluded_keys)}, "
            f"excluded_prefixes={list(self.excluded_prefixes)})"
        )
