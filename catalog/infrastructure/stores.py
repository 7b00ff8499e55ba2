"""Store adapters implementing the loader and persistence ports.

Both stores expose the same surface:

- ``load_games()``: raw records for :class:`~catalog.infrastructure.repository.GameRepository`
- ``has_game(id)``: whether any record, valid or not, uses the id
- ``get_game_by_id(id)``: the stored :class:`Game` or ``None``
- ``save_game(game)``: whole-record replace-or-insert

``InMemoryGameStore`` does no I/O and backs the tests; ``JsonDirectoryGameStore``
keeps one ``<id>.json`` file per game in the persisted wire shape.
"""
import json
import os
import tempfile
from pathlib import Path
from typing import Any, Iterable, List, Optional, Protocol

from catalog.core.config import settings
from catalog.core.errors import DataLoadFailure, InvalidPath, UnknownPersistenceError
from catalog.core.logging import LogTimer, get_logger
from catalog.domain.game import Game, create_game, validate_game


class GameStore(Protocol):
    """Persistence port used by the admin service."""

    async def has_game(self, game_id: str) -> bool:
        """Return True when any record is stored under this id, valid or not."""
        ...

    async def get_game_by_id(self, game_id: str) -> Optional[Game]:
        """Return the stored game with this id, if any."""
        ...

    async def save_game(self, game: Game) -> None:
        """Persist the whole record, replacing any game with the same id."""
        ...


class InMemoryGameStore:
    """List-backed store for tests and demos. Insertion order is kept."""

    def __init__(self, games: Iterable[Any] = ()) -> None:
        self._records: List[dict] = [
            game.to_record() if isinstance(game, Game) else dict(game) for game in games
        ]

    def load_games(self) -> List[dict]:
        return [dict(record) for record in self._records]

    async def get_all_games(self) -> List[Game]:
        return [create_game(record) for record in self._records if not validate_game(record)]

    async def has_game(self, game_id: str) -> bool:
        return any(record.get("id") == game_id for record in self._records)

    async def get_game_by_id(self, game_id: str) -> Optional[Game]:
        for record in self._records:
            if record.get("id") == game_id and not validate_game(record):
                return create_game(record)
        return None

    async def save_game(self, game: Game) -> None:
        record = game.to_record()
        for index, existing in enumerate(self._records):
            if existing.get("id") == game.id:
                self._records[index] = record
                return
        self._records.append(record)


class JsonDirectoryGameStore:
    """One JSON file per game under *directory* (default ``CATALOG_DATA_DIR``).

    Writes are atomic: the record goes to a temp file in the same directory
    which is then renamed over the target, so a file is never left half
    written.
    """

    def __init__(self, directory: Optional[str] = None) -> None:
        self._dir = Path(directory or settings.data_dir)
        self._log = get_logger(f"{__name__}.JsonDirectoryGameStore", {"store": "json_directory"})

    def _path_for(self, game_id: str) -> Path:
        candidate = (self._dir / f"{game_id}.json").resolve()
        if candidate.parent != self._dir.resolve():
            raise InvalidPath(str(candidate))
        return candidate

    def load_games(self) -> List[Any]:
        """Read every ``*.json`` file, in file-name order."""
        if not self._dir.exists():
            return []
        records: List[Any] = []
        for path in sorted(self._dir.glob("*.json")):
            try:
                with open(path, "r", encoding="utf-8") as fh:
                    records.append(json.load(fh))
            except (json.JSONDecodeError, OSError) as exc:
                raise DataLoadFailure(f"could not read {path.name}: {exc}") from exc
        return records

    async def has_game(self, game_id: str) -> bool:
        return self._path_for(game_id).exists()

    async def get_game_by_id(self, game_id: str) -> Optional[Game]:
        path = self._path_for(game_id)
        if not path.exists():
            return None
        try:
            with open(path, "r", encoding="utf-8") as fh:
                record = json.load(fh)
        except (json.JSONDecodeError, OSError) as exc:
            raise UnknownPersistenceError(exc) from exc
        if validate_game(record):
            self._log.warning("Stored record is invalid", extra={"game_id": game_id})
            return None
        return create_game(record)

    async def save_game(self, game: Game) -> None:
        path = self._path_for(game.id)
        with LogTimer(self._log, "save_game"):
            try:
                self._dir.mkdir(parents=True, exist_ok=True)
                fd, tmp_path = tempfile.mkstemp(dir=self._dir, suffix=".tmp")
            except OSError as exc:
                raise UnknownPersistenceError(exc) from exc
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as fh:
                    json.dump(game.to_record(), fh, indent=2, ensure_ascii=False)
                os.replace(tmp_path, path)
            except OSError as exc:
                try:
                    os.unlink(tmp_path)
                except OSError:
                    pass
                raise UnknownPersistenceError(exc) from exc
        self._log.info("Saved game", extra={"game_id": game.id})
