"""List-view projection of a game."""
from pydantic import BaseModel, ConfigDict, Field


class GameCard(BaseModel):
    """Display-only summary of a :class:`~catalog.domain.game.Game`.

    Deliberately lossy: description, categories, mechanics, images and the
    archive flag are not carried. Created per render, never persisted.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    title: str
    player_count: str = Field(alias="playerCount")
    play_duration: str = Field(alias="playDuration")
    has_awards: bool = Field(default=False, alias="hasAwards")
    is_favorite: bool = Field(default=False, alias="isFavorite")
