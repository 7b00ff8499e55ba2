"""Authoritative read access to the catalog, with visibility rules.

The repository pulls raw records from an injected loader, validates each one
and applies the visibility context:

- ``admin`` sees every valid game
- ``visitor`` sees only games with ``archived == False``

Invalid records are dropped from the result rather than failing the whole
catalog; they are logged with their error codes.
"""
import inspect
from typing import Any, Awaitable, Callable, List, Union

from catalog.core.errors import DataLoadFailure, GameArchivedNotVisible, GameNotFound
from catalog.core.logging import LogTimer, get_logger
from catalog.domain.filters import Visibility
from catalog.domain.game import Game, create_game, validate_game

logger = get_logger(__name__)

Loader = Callable[[], Union[List[Any], Awaitable[List[Any]]]]


def _as_visibility(context: Union[Visibility, str]) -> Visibility:
    try:
        return Visibility(context)
    except ValueError:
        raise ValueError(f"Unknown visibility context: {context!r}") from None


class GameRepository:
    """Read-side access to games through a loader port.

    Example:
        >>> repo = GameRepository(store.load_games)
        >>> games = await repo.get_all_games("visitor")
    """

    def __init__(self, load_games: Loader) -> None:
        """
        Args:
            load_games: Callable returning raw records, either directly or
                as an awaitable.
        """
        self._load_games = load_games

    async def _load_raw(self) -> List[Any]:
        try:
            with LogTimer(logger, "load_games"):
                result = self._load_games()
                if inspect.isawaitable(result):
                    result = await result
        except DataLoadFailure:
            raise
        except Exception as exc:
            logger.error(f"Loader failed: {exc}", exc_info=True)
            raise DataLoadFailure(str(exc)) from exc

        if not isinstance(result, (list, tuple)):
            raise DataLoadFailure(f"loader returned {type(result).__name__}, expected a list")
        return list(result)

    async def _load_valid(self) -> List[Game]:
        games: List[Game] = []
        dropped = 0
        for raw in await self._load_raw():
            errors = validate_game(raw)
            if errors:
                dropped += 1
                logger.warning(
                    "Dropping invalid game record",
                    extra={
                        "game_id": raw.get("id") if isinstance(raw, dict) else None,
                        "error_code": [error.code.value for error in errors],
                    },
                )
                continue
            games.append(create_game(raw))

        logger.debug(
            f"Loaded {len(games)} valid games",
            extra={"record_count": len(games), "dropped_count": dropped},
        )
        return games

    async def get_all_games(self, context: Union[Visibility, str] = Visibility.VISITOR) -> List[Game]:
        """Return every game visible in *context*, in loader order.

        Raises:
            DataLoadFailure: The loader failed or returned a non-list
        """
        visibility = _as_visibility(context)
        games = await self._load_valid()
        if visibility is Visibility.ADMIN:
            return games
        return [game for game in games if not game.archived]

    async def get_game_by_id(self, game_id: str, context: Union[Visibility, str] = Visibility.VISITOR) -> Game:
        """Return one game, distinguishing "missing" from "hidden".

        Always loads with admin visibility so archived games can be found.

        Raises:
            GameNotFound: No valid game has this id
            GameArchivedNotVisible: The game is archived and *context* is visitor
            DataLoadFailure: The loader failed
        """
        visibility = _as_visibility(context)
        for game in await self.get_all_games(Visibility.ADMIN):
            if game.id == game_id:
                if game.archived and visibility is Visibility.VISITOR:
                    raise GameArchivedNotVisible(game_id)
                return game
        raise GameNotFound(game_id)
