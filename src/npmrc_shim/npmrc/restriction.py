"""Type restriction resolution from npm configuration keys.

From npm 7, the dependency types to install are set by `omit` (and
`include`); npm derives `omit` from the deprecated `only`, `production`
and `dev` options, so `omit` always wins when present.

Until npm 6, `npm config list` prints options sorted by priority in
descending order, so the first legacy option seen wins and later ones
must not override it.
"""

from __future__ import annotations

from collections.abc import Iterable
from functools import reduce

from npmrc_shim.npmrc.types import TypeRestriction

__all__ = [
    "next_restriction",
    "resolve_type_restriction",
]


def next_restriction(state: TypeRestriction, key: str, value: str) -> TypeRestriction:
    """Compute the restriction after observing one configuration pair.

    Args:
        state: Restriction resolved so far.
        key: Configuration key.
        value: Trimmed configuration value.

    Returns:
        The new restriction (state itself when the pair does not apply).

    """
    if key == "omit":
        return TypeRestriction.PROD_ONLY if "dev" in value else TypeRestriction.ALL

    if state is not TypeRestriction.UNSET:
        return state

    if key == "only":
        if "prod" in value:
            return TypeRestriction.PROD_ONLY
        if "dev" in value:
            return TypeRestriction.DEV_ONLY
    elif key == "production" and "true" in value:
        return TypeRestriction.PROD_ONLY

    return state


def resolve_type_restriction(
    pairs: Iterable[tuple[str, str]],
    initial: TypeRestriction = TypeRestriction.UNSET,
) -> TypeRestriction:
    """Fold configuration pairs, in output order, into a type restriction.

    Example:
        >>> resolve_type_restriction([("only", "prod"), ("omit", "")])
        <TypeRestriction.ALL: 'all'>

    """
    return reduce(lambda state, pair: next_restriction(state, *pair), pairs, initial)
