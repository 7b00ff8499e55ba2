"""Pytest configuration and shared fixtures."""
import os

os.environ.setdefault("ENVIRONMENT", "test")

import pytest

from catalog.domain.game import create_game
from catalog.infrastructure.repository import GameRepository
from catalog.infrastructure.stores import InMemoryGameStore
from catalog.services.admin import AdminGameService
from catalog.services.browse import BrowseService


def build_raw_game(**overrides):
    """Valid raw record in the persisted wire shape."""
    record = {
        "id": "azul",
        "title": "Azul",
        "description": "Tile drafting for the Portuguese king.",
        "minPlayers": 2,
        "maxPlayers": 4,
        "playDuration": "MEDIUM",
        "ageRecommendation": "8+",
        "firstPlayComplexity": "LOW",
        "categories": ["Abstrait", "Famille"],
        "mechanics": ["Draft", "Pattern Building"],
        "awards": [{"name": "Spiel des Jahres", "year": 2018}],
        "images": [{"id": "azul-cover", "source": "publisher", "attribution": "Plan B Games"}],
        "favorite": False,
        "archived": False,
    }
    record.update(overrides)
    return record


@pytest.fixture
def raw_game():
    """Factory for raw game records."""
    return build_raw_game


@pytest.fixture
def make_game():
    """Factory for validated Game values."""
    def _make(**overrides):
        return create_game(build_raw_game(**overrides))
    return _make


@pytest.fixture
def catalog_records():
    """Mixed catalog: three active games and one archived."""
    return [
        build_raw_game(),
        build_raw_game(
            id="catan", title="Catan", minPlayers=3, maxPlayers=4,
            playDuration="LONG", firstPlayComplexity="MEDIUM",
            categories=["Stratégie", "Négociation"],
            mechanics=["Jet de dés", "Construction de routes"],
            awards=[], favorite=True,
        ),
        build_raw_game(
            id="skull", title="Skull", minPlayers=3, maxPlayers=6,
            playDuration="SHORT", firstPlayComplexity="LOW",
            categories=["Ambiance", "Petit jeu"], mechanics=["Autre"],
            awards=[{"name": "As d'Or"}],
        ),
        build_raw_game(
            id="agricola", title="Agricola", minPlayers=1, maxPlayers=4,
            playDuration="LONG", firstPlayComplexity="HIGH",
            categories=["Expert"], mechanics=["Placement d'ouvriers"],
            awards=[], archived=True,
        ),
    ]


@pytest.fixture
def store(catalog_records):
    """In-memory store seeded with the mixed catalog."""
    return InMemoryGameStore(catalog_records)


@pytest.fixture
def repository(store):
    return GameRepository(store.load_games)


@pytest.fixture
def admin_service(store):
    return AdminGameService(store)


@pytest.fixture
def browse_service(repository):
    return BrowseService(repository)
