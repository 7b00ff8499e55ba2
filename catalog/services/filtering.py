"""Filtering engine: deterministic selection of games by a FilterSet.

Pure and stateless. Inputs are never mutated and the output keeps the
relative order of the input list.

Matching rules:
- all present filters are combined with AND
- multi-value filters match when the game has ANY of the listed values
- ``player_count`` is a range-overlap test, not containment: a 3-4 player
  game matches both 2-4 and 4-6
- ``has_awards`` / ``favorite_only`` only constrain when True

The engine applies no visibility rule of its own; archived games are
removed by the repository for visitors.
"""
from typing import Any, Iterable, List, Mapping, Optional, Sequence, Union

from catalog.core.errors import CatalogError, EmptyFilterValues, InvalidFilterValue
from catalog.core.logging import get_logger
from catalog.domain.filters import FilterSet, ValuesFilter
from catalog.domain.types import FIRST_PLAY_COMPLEXITY_VALUES, PLAY_DURATION_VALUES
from catalog.utils.records import is_non_empty_string, read_field

logger = get_logger(__name__)

FilterInput = Union[FilterSet, Mapping[str, Any], None]

# Fixed validation order: the first error reported by apply_filters is stable.
# Closed-enum filters carry their allowed values; open vocabularies carry None
# and only require non-empty strings.
MULTI_VALUE_FILTERS = (
    ("playDuration", "play_duration", PLAY_DURATION_VALUES),
    ("firstPlayComplexity", "first_play_complexity", FIRST_PLAY_COMPLEXITY_VALUES),
    ("categories", "categories", None),
    ("mechanics", "mechanics", None),
)


def validate_filters(filters: FilterInput) -> List[CatalogError]:
    """Check a filter definition before any matching.

    Args:
        filters: FilterSet, camelCase mapping, or None

    Returns:
        Errors in field order; empty means the definition is valid
    """
    try:
        filter_set = FilterSet.coerce(filters)
    except InvalidFilterValue as error:
        return [error]
    errors: List[CatalogError] = []

    for filter_name, attribute, allowed in MULTI_VALUE_FILTERS:
        value_filter: Optional[ValuesFilter] = getattr(filter_set, attribute)
        if value_filter is None:
            continue
        if not value_filter.values:
            errors.append(EmptyFilterValues(filter_name))
            continue
        for value in value_filter.values:
            if allowed is None:
                if not is_non_empty_string(value):
                    errors.append(InvalidFilterValue(filter_name, value))
            elif value not in allowed:
                errors.append(InvalidFilterValue(filter_name, value))

    return errors


def _overlaps_player_range(game: Any, filter_set: FilterSet) -> bool:
    wanted_min = filter_set.player_count.min_players
    wanted_max = filter_set.player_count.max_players
    if wanted_min is None or wanted_max is None:
        return False
    game_min = read_field(game, "min_players", "minPlayers")
    game_max = read_field(game, "max_players", "maxPlayers")
    if game_min is None or game_max is None:
        return False
    return game_min <= wanted_max and game_max >= wanted_min


def _matches_any(game_values: Iterable[Any], wanted: Sequence[Any]) -> bool:
    present = list(game_values or ())
    return any(value in present for value in wanted)


def matches_all(game: Any, filter_set: FilterSet) -> bool:
    """Return True when *game* satisfies every present filter."""
    if filter_set.player_count is not None and not _overlaps_player_range(game, filter_set):
        return False

    if filter_set.play_duration is not None:
        if read_field(game, "play_duration", "playDuration") not in filter_set.play_duration.values:
            return False

    if filter_set.first_play_complexity is not None:
        complexity = read_field(game, "first_play_complexity", "firstPlayComplexity")
        if complexity not in filter_set.first_play_complexity.values:
            return False

    if filter_set.categories is not None:
        if not _matches_any(read_field(game, "categories"), filter_set.categories.values):
            return False

    if filter_set.mechanics is not None:
        if not _matches_any(read_field(game, "mechanics"), filter_set.mechanics.values):
            return False

    if filter_set.has_awards and not read_field(game, "awards"):
        return False

    if filter_set.favorite_only and read_field(game, "favorite") is not True:
        return False

    return True


def apply_filters(games: Sequence[Any], filters: FilterInput = None) -> List[Any]:
    """Select the games matching *filters*.

    Args:
        games: Validated games (or wire-shaped mappings)
        filters: FilterSet, camelCase mapping, or None

    Returns:
        New list, input order preserved. With no filters, a copy of *games*.

    Raises:
        EmptyFilterValues: A present multi-value filter has no values
        InvalidFilterValue: A closed-enum filter lists an unknown value
    """
    filter_set = FilterSet.coerce(filters)
    errors = validate_filters(filter_set)
    if errors:
        logger.debug(
            "Rejected filter definition",
            extra={"error_code": errors[0].code.value, "filters": filter_set.model_dump(exclude_none=True)},
        )
        raise errors[0]

    if games is None:
        return []
    if filter_set.is_empty():
        return list(games)

    return [game for game in games if matches_all(game, filter_set)]
