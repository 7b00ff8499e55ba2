"""Sorting engine: ordering of a filtered game list by a named sort mode.

Two key orderings exist:

- ``lexicographic`` (default): enum values compare as strings, so durations
  sort LONG < MEDIUM < SHORT and complexities HIGH < LOW < MEDIUM. This is
  the catalog's established behaviour.
- ``semantic``: SHORT < MEDIUM < LONG and LOW < MEDIUM < HIGH.

In both, games without a value for the key are always placed last, also in
descending modes. Sorting is stable and never mutates its input.
"""
from functools import cmp_to_key
from typing import Any, Callable, Dict, List, Optional, Sequence, Union

from catalog.core.config import SORT_ORDERINGS, settings
from catalog.core.errors import UnsupportedSortMode
from catalog.domain.filters import SORT_MODE_VALUES, SortMode
from catalog.domain.types import FIRST_PLAY_COMPLEXITY_RANK, PLAY_DURATION_RANK
from catalog.utils.records import read_field

# sort mode -> (attribute, wire alias, semantic rank table, descending)
SORT_KEYS: Dict[str, tuple] = {
    SortMode.PLAY_DURATION_ASC.value: ("play_duration", "playDuration", PLAY_DURATION_RANK, False),
    SortMode.PLAY_DURATION_DESC.value: ("play_duration", "playDuration", PLAY_DURATION_RANK, True),
    SortMode.FIRST_PLAY_COMPLEXITY_ASC.value: (
        "first_play_complexity", "firstPlayComplexity", FIRST_PLAY_COMPLEXITY_RANK, False,
    ),
    SortMode.FIRST_PLAY_COMPLEXITY_DESC.value: (
        "first_play_complexity", "firstPlayComplexity", FIRST_PLAY_COMPLEXITY_RANK, True,
    ),
}


def compare_values(a: Any, b: Any, descending: bool = False) -> int:
    """Three-way comparison with missing values ordered last.

    *descending* reverses non-null values only; nulls stay last.
    """
    if a is None and b is None:
        return 0
    if a is None:
        return 1
    if b is None:
        return -1

    if a < b:
        result = -1
    elif a > b:
        result = 1
    else:
        result = 0
    return -result if descending else result


def _key_reader(attribute: str, alias: str, ranks: Dict[str, int], ordering: str) -> Callable[[Any], Any]:
    def read(game: Any) -> Any:
        value = read_field(game, attribute, alias)
        if value is None:
            return None
        value = getattr(value, "value", value)
        if ordering == "semantic":
            return ranks.get(value)
        return value

    return read


def _normalise_mode(sort_mode: Union[SortMode, str, None]) -> Optional[str]:
    if not sort_mode:
        return None
    mode = getattr(sort_mode, "value", sort_mode)
    if mode not in SORT_MODE_VALUES:
        raise UnsupportedSortMode(mode)
    return mode


def apply_sorting(
    games: Sequence[Any],
    sort_mode: Union[SortMode, str, None] = None,
    ordering: Optional[str] = None,
) -> List[Any]:
    """Return a new list of *games* ordered by *sort_mode*.

    Args:
        games: Games to order (not modified)
        sort_mode: A :class:`SortMode` or its name; empty/None keeps input order
        ordering: ``lexicographic`` or ``semantic``; defaults to the
            ``CATALOG_SORT_ORDERING`` setting

    Raises:
        UnsupportedSortMode: If *sort_mode* is not a known mode
    """
    mode = _normalise_mode(sort_mode)
    if games is None:
        return []
    if mode is None:
        return list(games)

    ordering = ordering or settings.sort_ordering
    if ordering not in SORT_ORDERINGS:
        raise ValueError(f"Unknown sort ordering: {ordering!r}")

    attribute, alias, ranks, descending = SORT_KEYS[mode]
    read_key = _key_reader(attribute, alias, ranks, ordering)

    # sorted() is stable, so ties keep their input order
    return sorted(
        games,
        key=cmp_to_key(lambda a, b: compare_values(read_key(a), read_key(b), descending)),
    )
