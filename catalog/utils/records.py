"""Field access shared by the pipeline stages.

Stages accept either :class:`~catalog.domain.game.Game` instances
(snake_case attributes) or raw mappings using the camelCase wire names.
"""
import math
from typing import Any, Mapping, Optional


def read_field(record: Any, field: str, alias: Optional[str] = None, default: Any = None) -> Any:
    """Read *field* from a model/object, or *alias* (then *field*) from a mapping.

    Examples:
        >>> read_field({"playDuration": "SHORT"}, "play_duration", "playDuration")
        'SHORT'
        >>> read_field(game, "play_duration", "playDuration")
        'MEDIUM'
    """
    if isinstance(record, Mapping):
        if alias is not None and alias in record:
            return record[alias]
        return record.get(field, default)
    return getattr(record, field, default)


def is_non_empty_string(value: Any) -> bool:
    return isinstance(value, str) and value.strip() != ""


def is_player_count(value: Any) -> bool:
    """True for a finite, integral number that is not a bool."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value) and float(value).is_integer()
