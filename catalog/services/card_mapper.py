"""Maps games to the cards shown in list views."""
from typing import Any, Optional

from catalog.core.config import settings
from catalog.core.errors import GameRequired, MissingMandatoryField
from catalog.domain.card import GameCard
from catalog.utils.records import is_non_empty_string, is_player_count, read_field

# Default for top_bucket: read CATALOG_PLAYER_COUNT_TOP_BUCKET at call time.
USE_SETTING = object()


def _player_word(count: int) -> str:
    return "joueur" if count == 1 else "joueurs"


def format_player_count(min_players: int, max_players: int, top_bucket: Any = USE_SETTING) -> str:
    """Human-facing player count.

    Examples:
        >>> format_player_count(1, 1)
        '1 joueur'
        >>> format_player_count(2, 4)
        '2-4 joueurs'
        >>> format_player_count(3, 6)
        '3-6+ joueurs'

    Args:
        min_players: Smallest supported player count
        max_players: Largest supported player count
        top_bucket: Largest option of the UI's player-count list. A range
            ending on it is open-ended and gets a "+" marker. ``None``
            disables the marker; defaults to ``CATALOG_PLAYER_COUNT_TOP_BUCKET``.
    """
    if top_bucket is USE_SETTING:
        top_bucket = settings.player_count_top_bucket

    if min_players == max_players:
        return f"{min_players} {_player_word(min_players)}"

    suffix = "+" if top_bucket is not None and max_players == top_bucket else ""
    return f"{min_players}-{max_players}{suffix} joueurs"


def to_card(game: Any, top_bucket: Any = USE_SETTING) -> GameCard:
    """Project *game* onto a :class:`GameCard`.

    The repository already hands out valid games, but the mapper re-checks
    the fields it needs rather than trusting its caller.

    Raises:
        GameRequired: If *game* is None
        MissingMandatoryField: If id, title, player counts or play duration
            are missing
    """
    if game is None:
        raise GameRequired()

    game_id = read_field(game, "id")
    if not is_non_empty_string(game_id):
        raise MissingMandatoryField("id")

    title = read_field(game, "title")
    if not is_non_empty_string(title):
        raise MissingMandatoryField("title")

    min_players = read_field(game, "min_players", "minPlayers")
    max_players = read_field(game, "max_players", "maxPlayers")
    for field, value in (("minPlayers", min_players), ("maxPlayers", max_players)):
        if not is_player_count(value):
            raise MissingMandatoryField(field)

    play_duration = read_field(game, "play_duration", "playDuration")
    play_duration = getattr(play_duration, "value", play_duration)
    if not is_non_empty_string(play_duration):
        raise MissingMandatoryField("playDuration")

    awards: Optional[Any] = read_field(game, "awards")

    return GameCard(
        id=game_id,
        title=title,
        player_count=format_player_count(int(min_players), int(max_players), top_bucket),
        play_duration=play_duration,
        has_awards=bool(awards),
        is_favorite=read_field(game, "favorite") is True,
    )


def to_cards(games: Any, top_bucket: Any = USE_SETTING) -> list:
    return [to_card(game, top_bucket) for game in games]
