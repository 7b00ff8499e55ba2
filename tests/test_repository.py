"""Tests for GameRepository visibility and loading."""
import pytest

from catalog.core.errors import (
    DataLoadFailure,
    ErrorCode,
    GameArchivedNotVisible,
    GameNotFound,
)
from catalog.domain.filters import Visibility
from catalog.domain.game import Game
from catalog.infrastructure.repository import GameRepository


class TestGetAllGames:
    """Test GameRepository.get_all_games."""

    async def test_visitor_sees_only_active_games(self, repository):
        """Test that visitors do not see archived games."""
        games = await repository.get_all_games(Visibility.VISITOR)

        assert [game.id for game in games] == ["azul", "catan", "skull"]
        assert all(isinstance(game, Game) for game in games)

    async def test_admin_sees_archived_games(self, repository):
        """Test that admins see every valid game."""
        games = await repository.get_all_games("admin")

        assert [game.id for game in games] == ["azul", "catan", "skull", "agricola"]

    async def test_default_context_is_visitor(self, repository):
        """Test the default visibility context."""
        games = await repository.get_all_games()

        assert "agricola" not in [game.id for game in games]

    async def test_unknown_context(self, repository):
        """Test an unknown visibility context."""
        with pytest.raises(ValueError):
            await repository.get_all_games("editor")

    async def test_invalid_records_are_dropped(self, raw_game):
        """Test that invalid records are left out."""
        records = [raw_game(id="ok"), raw_game(id="broken", images=[]), "not a record"]
        repository = GameRepository(lambda: records)

        games = await repository.get_all_games("admin")

        assert [game.id for game in games] == ["ok"]

    async def test_async_loader(self, raw_game):
        """Test a coroutine loader."""
        async def load():
            return [raw_game(id="remote")]

        repository = GameRepository(load)

        assert [game.id for game in await repository.get_all_games()] == ["remote"]

    async def test_empty_catalog(self):
        """Test an empty loader result."""
        assert await GameRepository(lambda: []).get_all_games() == []


class TestLoaderFailures:
    """Test loader errors surfacing as DataLoadFailure."""

    async def test_loader_exception_is_wrapped(self):
        """Test that a loader exception is wrapped and chained."""
        def load():
            raise ConnectionError("backend down")

        with pytest.raises(DataLoadFailure) as exc_info:
            await GameRepository(load).get_all_games()

        assert exc_info.value.code == ErrorCode.DATA_LOAD_FAILURE
        assert isinstance(exc_info.value.__cause__, ConnectionError)
        assert "backend down" in exc_info.value.message

    @pytest.mark.parametrize("result", [None, {"id": "azul"}, "azul"])
    async def test_non_list_result(self, result):
        """Test a loader that returns something other than a list."""
        with pytest.raises(DataLoadFailure):
            await GameRepository(lambda: result).get_all_games()

    async def test_data_load_failure_passes_through(self):
        """Test that DataLoadFailure is not wrapped twice."""
        original = DataLoadFailure("bad file")

        def load():
            raise original

        with pytest.raises(DataLoadFailure) as exc_info:
            await GameRepository(load).get_all_games()

        assert exc_info.value is original


class TestGetGameById:
    """Test GameRepository.get_game_by_id."""

    async def test_visitor_gets_active_game(self, repository):
        """Test a visitor reading an active game."""
        game = await repository.get_game_by_id("catan")

        assert game.title == "Catan"

    async def test_archived_hidden_from_visitor(self, repository):
        """Test a visitor reading an archived game."""
        with pytest.raises(GameArchivedNotVisible) as exc_info:
            await repository.get_game_by_id("agricola", Visibility.VISITOR)

        assert exc_info.value.game_id == "agricola"

    async def test_admin_gets_archived_game(self, repository):
        """Test an admin reading an archived game."""
        game = await repository.get_game_by_id("agricola", Visibility.ADMIN)

        assert game.archived is True

    @pytest.mark.parametrize("context", ["visitor", "admin"])
    async def test_unknown_id(self, repository, context):
        """Test reading an id that does not exist."""
        with pytest.raises(GameNotFound):
            await repository.get_game_by_id("gloomhaven", context)

    async def test_invalid_record_counts_as_not_found(self, raw_game):
        """Test that an invalid record is not found."""
        repository = GameRepository(lambda: [raw_game(id="broken", title="")])

        with pytest.raises(GameNotFound):
            await repository.get_game_by_id("broken", "admin")
