"""Game domain entity, validator and factory.

Raw records (admin form input, JSON files) are untyped mappings using the
camelCase wire names. :func:`validate_game` reports every problem it finds;
:func:`create_game` narrows a valid record into a frozen :class:`Game`.
"""
from typing import Any, List, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from catalog.core.errors import (
    AtLeastOneImageRequired,
    CatalogError,
    InvalidEnumValue,
    InvalidPlayerRange,
    MissingMandatoryField,
    ValidationFailed,
)
from catalog.domain.types import (
    AGE_RANGE_VALUES,
    FIRST_PLAY_COMPLEXITY_VALUES,
    PLAY_DURATION_VALUES,
    AgeRange,
    FirstPlayComplexity,
    PlayDuration,
)
from catalog.utils.records import is_non_empty_string, is_player_count


class Award(BaseModel):
    """An award won by a game, e.g. Spiel des Jahres 2018."""
    model_config = ConfigDict(frozen=True)

    name: str
    year: Optional[int] = None


class GameImage(BaseModel):
    """Reference to a stored picture of the game box or components."""
    model_config = ConfigDict(frozen=True)

    id: str
    source: Optional[str] = None
    attribution: Optional[str] = None


class Game(BaseModel):
    """Canonical catalog entry.

    Instances are deep-immutable: the model is frozen and every collection
    is a tuple. Archiving, restoring or editing a game produces a new value.

    Attributes:
        id: Unique, immutable identifier (also the storage file name)
        title: Display title
        description: Free-text description
        min_players: Smallest supported player count
        max_players: Largest supported player count
        play_duration: Duration bucket
        age_recommendation: Minimum recommended age band
        first_play_complexity: How hard the first game is to pick up
        categories: Open-vocabulary categories, display order preserved
        mechanics: Open-vocabulary mechanics, display order preserved
        awards: Awards in display order
        images: At least one image, the first is the cover
        favorite: Highlighted by the library staff
        archived: Hidden from visitors when True
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True, use_enum_values=True)

    id: str
    title: str
    description: str
    min_players: int = Field(alias="minPlayers")
    max_players: int = Field(alias="maxPlayers")
    play_duration: PlayDuration = Field(alias="playDuration")
    age_recommendation: AgeRange = Field(alias="ageRecommendation")
    first_play_complexity: FirstPlayComplexity = Field(alias="firstPlayComplexity")
    categories: Tuple[str, ...] = ()
    mechanics: Tuple[str, ...] = ()
    awards: Tuple[Award, ...] = ()
    images: Tuple[GameImage, ...]
    favorite: bool = False
    archived: bool = False

    @property
    def has_awards(self) -> bool:
        return len(self.awards) > 0

    def to_record(self) -> dict:
        """Return the persisted JSON shape (camelCase field names)."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


def validate_game(raw: Any) -> List[CatalogError]:
    """Validate a raw game record.

    Every check runs, so the caller receives the complete list of problems
    in one pass.

    Args:
        raw: Mapping using the wire field names (``minPlayers``, ...)

    Returns:
        List of errors; empty means the record is valid
    """
    if isinstance(raw, Game):
        raw = raw.to_record()
    data: Mapping[str, Any] = raw if isinstance(raw, Mapping) else {}
    errors: List[CatalogError] = []

    for field in ("id", "title", "description"):
        if not is_non_empty_string(data.get(field)):
            errors.append(MissingMandatoryField(field))

    for field in ("minPlayers", "maxPlayers"):
        if not is_player_count(data.get(field)):
            errors.append(MissingMandatoryField(field))

    min_players, max_players = data.get("minPlayers"), data.get("maxPlayers")
    if is_player_count(min_players) and is_player_count(max_players):
        if min_players > max_players:
            errors.append(InvalidPlayerRange(min_players, max_players))

    for field, allowed in (
        ("playDuration", PLAY_DURATION_VALUES),
        ("ageRecommendation", AGE_RANGE_VALUES),
        ("firstPlayComplexity", FIRST_PLAY_COMPLEXITY_VALUES),
    ):
        if data.get(field) not in allowed:
            errors.append(InvalidEnumValue(field, data.get(field)))

    for field in ("categories", "mechanics"):
        values = data.get(field)
        if not isinstance(values, (list, tuple)):
            errors.append(MissingMandatoryField(field))
            continue
        for value in values:
            if not is_non_empty_string(value):
                errors.append(InvalidEnumValue(f"{field}[]", value))

    awards = data.get("awards", [])
    if awards is None:
        awards = []
    if not isinstance(awards, (list, tuple)):
        errors.append(MissingMandatoryField("awards"))
    else:
        for index, award in enumerate(awards):
            if not isinstance(award, Mapping) or not is_non_empty_string(award.get("name")):
                errors.append(MissingMandatoryField(f"awards[{index}].name"))
                continue
            year = award.get("year")
            if year is not None and (isinstance(year, bool) or not isinstance(year, int)):
                errors.append(InvalidEnumValue(f"awards[{index}].year", year))

    images = data.get("images")
    if not isinstance(images, (list, tuple)):
        errors.append(MissingMandatoryField("images"))
    elif not images:
        errors.append(AtLeastOneImageRequired())
    else:
        for index, image in enumerate(images):
            if not isinstance(image, Mapping) or not is_non_empty_string(image.get("id")):
                errors.append(MissingMandatoryField(f"images[{index}].id"))

    for field in ("favorite", "archived"):
        if not isinstance(data.get(field), bool):
            errors.append(MissingMandatoryField(field))

    return errors


def _optional_string(value: Any) -> Optional[str]:
    return value if isinstance(value, str) else None


def create_game(raw: Any) -> Game:
    """Build a :class:`Game` from a raw record.

    The input is only read, never modified.

    Raises:
        ValidationFailed: If :func:`validate_game` reports any error
    """
    errors = validate_game(raw)
    if errors:
        raise ValidationFailed(errors)
    if isinstance(raw, Game):
        return raw

    return Game(
        id=raw["id"],
        title=raw["title"],
        description=raw["description"],
        min_players=int(raw["minPlayers"]),
        max_players=int(raw["maxPlayers"]),
        play_duration=raw["playDuration"],
        age_recommendation=raw["ageRecommendation"],
        first_play_complexity=raw["firstPlayComplexity"],
        categories=tuple(raw["categories"]),
        mechanics=tuple(raw["mechanics"]),
        awards=tuple(
            Award(name=award["name"], year=award.get("year"))
            for award in (raw.get("awards") or [])
        ),
        images=tuple(
            GameImage(
                id=image["id"],
                source=_optional_string(image.get("source")),
                attribution=_optional_string(image.get("attribution")),
            )
            for image in raw["images"]
        ),
        favorite=raw["favorite"],
        archived=raw["archived"],
    )
