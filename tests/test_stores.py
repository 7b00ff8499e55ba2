"""Tests for the in-memory and JSON-directory stores."""
import json

import pytest

from catalog.core.errors import DataLoadFailure, DuplicateGameId, InvalidPath
from catalog.infrastructure.repository import GameRepository
from catalog.infrastructure.stores import InMemoryGameStore, JsonDirectoryGameStore
from catalog.services.admin import AdminGameService


class TestInMemoryGameStore:
    """Test InMemoryGameStore."""

    async def test_load_games_returns_copies(self, store):
        """Test that loaded records are copies."""
        records = store.load_games()
        records[0]["title"] = "Changed"

        assert store.load_games()[0]["title"] == "Azul"

    async def test_get_game_by_id(self, store):
        """Test reading a game by id."""
        game = await store.get_game_by_id("skull")

        assert game.min_players == 3
        assert await store.get_game_by_id("missing") is None

    async def test_save_replaces_in_place(self, store, make_game):
        """Test that saving an existing id keeps its position."""
        await store.save_game(make_game(id="catan", title="Catan 5th"))

        ids = [record["id"] for record in store.load_games()]
        assert ids == ["azul", "catan", "skull", "agricola"]
        assert (await store.get_game_by_id("catan")).title == "Catan 5th"

    async def test_save_appends_new(self, store, make_game):
        """Test that saving a new id appends it."""
        await store.save_game(make_game(id="cascadia"))

        assert store.load_games()[-1]["id"] == "cascadia"

    async def test_has_game_counts_invalid_records(self, raw_game):
        """Test that has_game sees records that do not validate."""
        store = InMemoryGameStore([raw_game(id="broken", images=[])])

        assert await store.has_game("broken") is True
        assert await store.get_game_by_id("broken") is None
        assert await store.has_game("missing") is False

    async def test_get_all_games_skips_invalid(self, raw_game):
        """Test that get_all_games leaves out invalid records."""
        store = InMemoryGameStore([raw_game(), raw_game(id="bad", images=[])])

        assert [game.id for game in await store.get_all_games()] == ["azul"]


class TestJsonDirectoryGameStore:
    """Test JsonDirectoryGameStore on a temporary directory."""

    @pytest.fixture
    def directory(self, tmp_path):
        return tmp_path / "games"

    @pytest.fixture
    def json_store(self, directory):
        return JsonDirectoryGameStore(str(directory))

    def test_missing_directory_loads_nothing(self, json_store):
        """Test loading from a directory that does not exist."""
        assert json_store.load_games() == []

    async def test_save_writes_one_file_per_game(self, json_store, directory, make_game):
        """Test that each game is saved as <id>.json."""
        await json_store.save_game(make_game())

        path = directory / "azul.json"
        assert path.exists()
        assert json.loads(path.read_text(encoding="utf-8"))["minPlayers"] == 2
        assert list(directory.glob("*.tmp")) == []

    async def test_round_trip(self, json_store, make_game):
        """Test saving then reading a game."""
        game = make_game(categories=["Stratégie"])

        await json_store.save_game(game)

        assert await json_store.get_game_by_id("azul") == game
        assert await json_store.get_game_by_id("missing") is None

    async def test_load_games_in_file_name_order(self, json_store, make_game):
        """Test that records load in file-name order."""
        for game_id in ("catan", "azul"):
            await json_store.save_game(make_game(id=game_id))

        assert [record["id"] for record in json_store.load_games()] == ["azul", "catan"]

    async def test_path_escape_rejected(self, json_store):
        """Test an id that would leave the directory."""
        with pytest.raises(InvalidPath):
            await json_store.get_game_by_id("../outside")

    async def test_corrupt_file_fails_repository_load(self, json_store, directory):
        """Test that an unreadable file fails the repository load."""
        directory.mkdir()
        (directory / "broken.json").write_text("{not json", encoding="utf-8")

        with pytest.raises(DataLoadFailure):
            await GameRepository(json_store.load_games).get_all_games()

    async def test_invalid_stored_record_is_ignored(self, json_store, directory, raw_game):
        """Test that an invalid stored record reads as None."""
        directory.mkdir()
        record = raw_game(id="broken", title="")
        (directory / "broken.json").write_text(json.dumps(record), encoding="utf-8")

        assert await json_store.get_game_by_id("broken") is None

    async def test_add_does_not_overwrite_invalid_file(self, json_store, directory, raw_game):
        """Test that adding an id held by an invalid file is refused."""
        directory.mkdir()
        path = directory / "azul.json"
        path.write_text(json.dumps(raw_game(title="")), encoding="utf-8")

        assert await json_store.has_game("azul") is True
        with pytest.raises(DuplicateGameId):
            await AdminGameService(json_store).add_game(raw_game(title="New"))

        assert json.loads(path.read_text(encoding="utf-8"))["title"] == ""

    async def test_admin_workflow_on_disk(self, json_store, directory, raw_game):
        """Test add and archive through the admin service."""
        service = AdminGameService(json_store)
        repository = GameRepository(json_store.load_games)

        await service.add_game(raw_game())
        await service.archive_game("azul")

        assert await repository.get_all_games("visitor") == []
        assert json.loads((directory / "azul.json").read_text(encoding="utf-8"))["archived"] is True
