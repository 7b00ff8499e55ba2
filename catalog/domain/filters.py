"""Query value types: filter sets, sort modes and visibility contexts."""
from enum import Enum
from typing import Any, Mapping, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from catalog.core.errors import InvalidFilterValue


class Visibility(str, Enum):
    """Who is reading the catalog. Governs read access, not authorization."""
    VISITOR = "visitor"
    ADMIN = "admin"


class SortMode(str, Enum):
    PLAY_DURATION_ASC = "PLAY_DURATION_ASC"
    PLAY_DURATION_DESC = "PLAY_DURATION_DESC"
    FIRST_PLAY_COMPLEXITY_ASC = "FIRST_PLAY_COMPLEXITY_ASC"
    FIRST_PLAY_COMPLEXITY_DESC = "FIRST_PLAY_COMPLEXITY_DESC"


SORT_MODE_VALUES = tuple(member.value for member in SortMode)


class PlayerCountFilter(BaseModel):
    """Player range wanted by the visitor; matched by range overlap."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    min_players: Optional[int] = Field(default=None, alias="minPlayers")
    max_players: Optional[int] = Field(default=None, alias="maxPlayers")


class ValuesFilter(BaseModel):
    """Multi-value filter; a game matches when it has any of the values.

    Values stay untyped here so that unknown or empty definitions reach
    the filtering engine's own validation.
    """
    model_config = ConfigDict(frozen=True)

    values: Tuple[Any, ...] = ()

    @model_validator(mode="before")
    @classmethod
    def _wrap_bare_values(cls, data: Any) -> Any:
        if isinstance(data, (Mapping, ValuesFilter)):
            return data
        return {"values": data}

    @field_validator("values", mode="before")
    @classmethod
    def _values_as_tuple(cls, value: Any) -> Tuple[Any, ...]:
        # anything but a list counts as "no values"
        if isinstance(value, (list, tuple)):
            return tuple(value)
        return ()


class FilterSet(BaseModel):
    """Declarative query. Absent fields impose no constraint.

    Built fresh by the caller whenever the filters change, either directly
    or from the camelCase shape used by the UI::

        FilterSet.model_validate({"playDuration": {"values": ["SHORT"]}})
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    player_count: Optional[PlayerCountFilter] = Field(default=None, alias="playerCount")
    play_duration: Optional[ValuesFilter] = Field(default=None, alias="playDuration")
    first_play_complexity: Optional[ValuesFilter] = Field(default=None, alias="firstPlayComplexity")
    categories: Optional[ValuesFilter] = None
    mechanics: Optional[ValuesFilter] = None
    has_awards: bool = Field(default=False, alias="hasAwards")
    favorite_only: bool = Field(default=False, alias="favoriteOnly")

    @classmethod
    def coerce(cls, filters: Union["FilterSet", Mapping[str, Any], None]) -> "FilterSet":
        """Accept a FilterSet, a camelCase mapping or None.

        Raises:
            InvalidFilterValue: A filter has a value of the wrong type, e.g. a
                non-integer player bound
        """
        if filters is None:
            return cls()
        if isinstance(filters, cls):
            return filters
        try:
            return cls.model_validate(filters)
        except ValidationError as exc:
            error = exc.errors()[0]
            filter_name = str(error["loc"][0]) if error["loc"] else "filters"
            raise InvalidFilterValue(filter_name, error.get("input")) from exc

    def is_empty(self) -> bool:
        return (
            self.player_count is None
            and self.play_duration is None
            and self.first_play_complexity is None
            and self.categories is None
            and self.mechanics is None
            and not self.has_awards
            and not self.favorite_only
        )
