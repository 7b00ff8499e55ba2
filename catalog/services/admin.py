"""Administrative use cases: add, update, archive and restore games.

Each operation validates before touching the store and writes the whole
record in a single ``save_game`` call, so a failure never leaves a partial
write behind. Errors raised by the store are surfaced as
:class:`~catalog.core.errors.OperationFailed` with the original chained;
retries, if any, belong to the store.
"""
from typing import Any, Awaitable, Callable, Mapping, Optional, TypeVar

from catalog.core.errors import (
    DuplicateGameId,
    GameNotFound,
    InvalidGameData,
    OperationFailed,
    PersistenceError,
)
from catalog.core.logging import get_logger
from catalog.domain.game import Game, create_game, validate_game
from catalog.infrastructure.stores import GameStore
from catalog.services import archive as archive_machine

logger = get_logger(__name__)

T = TypeVar("T")


class AdminGameService:
    """Orchestrates the validator, the archive state machine and a store.

    Store contract (see :class:`~catalog.infrastructure.stores.GameStore`):

    - ``has_game(id)`` tells whether the id is already in use
    - ``get_game_by_id(id)`` returns the stored game or ``None``
    - ``save_game(game)`` persists the whole record
    """

    def __init__(self, store: GameStore) -> None:
        self._store = store

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    async def _call_store(
        self, operation: str, game_id: Optional[str], call: Callable[[], Awaitable[T]]
    ) -> T:
        try:
            return await call()
        except PersistenceError as exc:
            logger.error(
                f"{operation} failed in store: {exc}",
                extra={"operation": operation, "game_id": game_id, "error_code": exc.code.value},
            )
            raise OperationFailed(operation, game_id, exc) from exc

    @staticmethod
    def _validated(raw: Any) -> Game:
        errors = validate_game(raw)
        if errors:
            codes = ", ".join(error.code.value for error in errors)
            raise InvalidGameData(f"Invalid game data: {codes}", errors)
        return create_game(raw)

    async def _require_existing(self, operation: str, game_id: str) -> Game:
        existing = await self._call_store(
            operation, game_id, lambda: self._store.get_game_by_id(game_id)
        )
        if existing is None:
            raise GameNotFound(game_id)
        return existing

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def add_game(self, raw: Mapping[str, Any]) -> Game:
        """Create a new, active game.

        Raises:
            InvalidGameData: Input fails validation or is marked archived
            DuplicateGameId: A game with this id already exists
            OperationFailed: The store failed
        """
        game = self._validated(raw)
        if game.archived:
            raise InvalidGameData("A new game must start active (archived must be false)")

        # a stored record that no longer validates still owns its id
        taken = await self._call_store("add_game", game.id, lambda: self._store.has_game(game.id))
        if taken:
            raise DuplicateGameId(game.id)

        await self._call_store("add_game", game.id, lambda: self._store.save_game(game))
        logger.info("Game added", extra={"operation": "add_game", "game_id": game.id})
        return game

    async def update_game(self, game_id: str, raw: Mapping[str, Any]) -> Game:
        """Replace an existing game wholesale; *game_id* wins over any id in *raw*.

        Raises:
            InvalidGameData: Input fails validation
            GameNotFound: No game with *game_id*
            OperationFailed: The store failed
        """
        payload = {**raw, "id": game_id} if isinstance(raw, Mapping) else raw
        game = self._validated(payload)
        await self._require_existing("update_game", game_id)

        await self._call_store("update_game", game_id, lambda: self._store.save_game(game))
        logger.info("Game updated", extra={"operation": "update_game", "game_id": game_id})
        return game

    async def archive_game(self, game_id: str) -> Game:
        """Hide a game from visitors.

        Raises:
            GameNotFound: No game with *game_id*
            GameAlreadyArchived: The game is already archived
            OperationFailed: The store failed
        """
        existing = await self._require_existing("archive_game", game_id)
        archived = archive_machine.archive(existing)

        await self._call_store("archive_game", game_id, lambda: self._store.save_game(archived))
        logger.info("Game archived", extra={"operation": "archive_game", "game_id": game_id})
        return archived

    async def restore_game(self, game_id: str) -> Game:
        """Make an archived game visible again.

        Raises:
            GameNotFound: No game with *game_id*
            GameNotArchived: The game is already active
            OperationFailed: The store failed
        """
        existing = await self._require_existing("restore_game", game_id)
        restored = archive_machine.restore(existing)

        await self._call_store("restore_game", game_id, lambda: self._store.save_game(restored))
        logger.info("Game restored", extra={"operation": "restore_game", "game_id": game_id})
        return restored
