"""Archive state machine: Active (archived=False) <-> Archived (archived=True).

Pure transitions with no persistence. Both return a new value and leave
their argument untouched.
"""
from typing import Any, Mapping

from catalog.core.errors import GameAlreadyArchived, GameNotArchived, MissingArchiveFlag
from catalog.domain.game import Game
from catalog.utils.records import read_field


def _current_flag(game: Any) -> bool:
    if game is None:
        raise MissingArchiveFlag()
    flag = read_field(game, "archived")
    if not isinstance(flag, bool):
        raise MissingArchiveFlag()
    return flag


def _with_flag(game: Any, archived: bool) -> Any:
    if isinstance(game, Game):
        return game.model_copy(update={"archived": archived})
    if isinstance(game, Mapping):
        return {**game, "archived": archived}
    raise MissingArchiveFlag()


def archive(game: Any) -> Any:
    """Active -> Archived.

    Raises:
        MissingArchiveFlag: Input has no boolean ``archived`` field
        GameAlreadyArchived: Game is already archived
    """
    if _current_flag(game):
        raise GameAlreadyArchived(read_field(game, "id"))
    return _with_flag(game, True)


def restore(game: Any) -> Any:
    """Archived -> Active.

    Raises:
        MissingArchiveFlag: Input has no boolean ``archived`` field
        GameNotArchived: Game is already active
    """
    if not _current_flag(game):
        raise GameNotArchived(read_field(game, "id"))
    return _with_flag(game, False)
