"""Visitor/admin browsing: repository -> filtering -> sorting -> cards."""
from typing import Any, List, Mapping, Union

from catalog.core.config import settings
from catalog.core.logging import get_logger
from catalog.domain.card import GameCard
from catalog.domain.filters import FilterSet, SortMode, Visibility
from catalog.domain.game import Game
from catalog.infrastructure.repository import GameRepository
from catalog.services.card_mapper import USE_SETTING, to_cards
from catalog.services.filtering import apply_filters
from catalog.services.sorting import apply_sorting

logger = get_logger(__name__)

FilterInput = Union[FilterSet, Mapping[str, Any], None]


class BrowseService:
    """Runs one catalog query end to end.

    Each call loads a fresh snapshot from the repository; nothing is cached
    between calls. A caller that no longer needs a result (e.g. the filters
    changed again) simply discards it.
    """

    def __init__(self, repository: GameRepository) -> None:
        self._repository = repository

    async def list_games(
        self,
        filters: FilterInput = None,
        sort_mode: Union[SortMode, str, None] = None,
        context: Union[Visibility, str, None] = None,
    ) -> List[Game]:
        """Return full games visible in *context*, filtered then sorted."""
        context = context or settings.default_context
        games = await self._repository.get_all_games(context)
        filtered = apply_filters(games, filters)
        ordered = apply_sorting(filtered, sort_mode)
        logger.debug(
            f"Query returned {len(ordered)} of {len(games)} games",
            extra={"context": getattr(context, "value", context), "record_count": len(ordered), "sort_mode": sort_mode},
        )
        return ordered

    async def list_cards(
        self,
        filters: FilterInput = None,
        sort_mode: Union[SortMode, str, None] = None,
        context: Union[Visibility, str, None] = None,
        top_bucket: Any = USE_SETTING,
    ) -> List[GameCard]:
        """Same query as :meth:`list_games`, projected onto cards.

        *top_bucket* overrides ``CATALOG_PLAYER_COUNT_TOP_BUCKET`` for this call;
        ``None`` drops the "+" marker.
        """
        games = await self.list_games(filters, sort_mode, context)
        return to_cards(games, top_bucket)

    async def get_game(self, game_id: str, context: Union[Visibility, str, None] = None) -> Game:
        """Detail view; see :meth:`GameRepository.get_game_by_id` for errors."""
        return await self._repository.get_game_by_id(game_id, context or settings.default_context)
