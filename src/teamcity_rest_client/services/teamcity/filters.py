"""Include/exclude selection of a project's build types.

A filter holds a pool of pending tokens (build type ids or names). Matching a
build type consumes the token, so every token accounts for at most one build
type and tokens left in the pool afterwards name build types that do not
exist. Repeating a token in a filter is the same as giving it once.

For each build type the id is tried before the name, and the first hit
consumes the token. A token equal to one build type's id and another's name
is therefore taken by whichever of the two comes first in server order.

The exclude filter only sees build types the include filter kept, so an
exclude token naming a build type outside the include set is unmatched.
"""

from typing import Any, Iterable, List, Mapping, Optional, Sequence, Union

import structlog

from ...core.exceptions import FilterMismatch, UnsupportedOption
from ...models.teamcity import BuildType

logger = structlog.get_logger(__name__)

SUPPORTED_OPTIONS = ("include", "exclude")


class TokenPool:
    """Set of tokens still waiting for a match, in the order supplied."""

    def __init__(self, tokens: Iterable[str]):
        self._pending = dict.fromkeys(tokens)

    def consume(self, *candidates: str) -> Optional[str]:
        """Remove and return the first candidate present in the pool."""
        for candidate in candidates:
            if candidate in self._pending:
                del self._pending[candidate]
                return candidate
        return None

    def remaining(self) -> List[str]:
        """Unconsumed tokens, in the order they were first supplied."""
        return list(self._pending)

    def __len__(self) -> int:
        return len(self._pending)


class IncludeAllFilter:
    """Retains every build type."""

    def retain(self, build_type: BuildType) -> bool:
        return True

    def misses(self) -> List[str]:
        return []


class ExcludeNoneFilter:
    """Rejects no build type."""

    def retain(self, build_type: BuildType) -> bool:
        return True

    def misses(self) -> List[str]:
        return []


class IncludeFilter:
    """Retains only build types named by one of its tokens."""

    def __init__(self, tokens: Iterable[str]):
        self.pool = TokenPool(tokens)
        self.hits: List[str] = []

    def retain(self, build_type: BuildType) -> bool:
        match = self.pool.consume(build_type.id, build_type.name)
        if match is None:
            return False
        self.hits.append(match)
        return True

    def misses(self) -> List[str]:
        return self.pool.remaining()


class ExcludeFilter:
    """Rejects build types named by one of its tokens."""

    def __init__(self, tokens: Iterable[str]):
        self.pool = TokenPool(tokens)
        self.hits: List[str] = []

    def retain(self, build_type: BuildType) -> bool:
        match = self.pool.consume(build_type.id, build_type.name)
        if match is None:
            return True
        self.hits.append(match)
        return False

    def misses(self) -> List[str]:
        return self.pool.remaining()


def _tokens(value: Union[str, Iterable[Any]]) -> List[str]:
    """Normalize a single token or a list of tokens to a list of strings."""
    if isinstance(value, (list, tuple, set, frozenset)):
        return [str(token) for token in value]
    return [str(value)]


def filter_build_types(
    build_types: Sequence[BuildType],
    filter_spec: Mapping[str, Any],
) -> List[BuildType]:
    """Select build types according to include/exclude tokens.

    Args:
        build_types: Candidate build types, in server order
        filter_spec: Mapping with optional ``include`` and ``exclude`` keys

    Returns:
        Build types retained by both filters, input order preserved

    Raises:
        UnsupportedOption: filter_spec contains any other key
        FilterMismatch: a token matched no build type
    """
    unsupported = sorted(str(key) for key in filter_spec if key not in SUPPORTED_OPTIONS)
    if unsupported:
        logger.warning("Unsupported build type filter options", options=unsupported)
        raise UnsupportedOption(
            f"Unsupported filter option(s): {', '.join(unsupported)}; "
            f"expected only {' and '.join(SUPPORTED_OPTIONS)}",
            options=unsupported,
        )

    # a key set to None is the same as a missing key
    including = (
        IncludeFilter(_tokens(filter_spec["include"]))
        if filter_spec.get("include") is not None
        else IncludeAllFilter()
    )
    excluding = (
        ExcludeFilter(_tokens(filter_spec["exclude"]))
        if filter_spec.get("exclude") is not None
        else ExcludeNoneFilter()
    )

    survivors = [
        build_type
        for build_type in build_types
        if including.retain(build_type) and excluding.retain(build_type)
    ]

    include_misses = including.misses()
    exclude_misses = excluding.misses()
    if include_misses or exclude_misses:
        logger.warning(
            "Build type filter tokens matched nothing",
            include=include_misses,
            exclude=exclude_misses,
        )
        parts = []
        if include_misses:
            parts.append(f"include {include_misses}")
        if exclude_misses:
            parts.append(f"exclude {exclude_misses}")
        raise FilterMismatch(
            f"No build type matches {' and '.join(parts)}",
            include=include_misses,
            exclude=exclude_misses,
        )

    logger.debug(
        "Filtered build types",
        candidates=len(build_types),
        survivors=[bt.id for bt in survivors],
    )
    return survivors
