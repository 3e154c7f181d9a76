"""
Player stats service.

Validates lookups, reads profiles and battles through the stores and
assembles season-aware character summaries, ranked matchups and battle
history. Nothing computed here is written back.
"""

from dataclasses import replace
from typing import Dict, List, Optional
import logging

from tracker.config import Config
from tracker.data_models.player import (
    CharacterSummary, PageRequest, PlayerMetadata, PlayerSearchResult, PlayerStats,
    RecentlyActivePlayer, region_or_sentinel
)
from tracker.services.character_stats import CharacterStatsAggregator
from tracker.services.matchup import BattleMatchupProcessor, MatchupResult
from tracker.services.stores import BattleStore, PlayerStore
from tracker.utils.validation import normalize_player_id, validate_public_id

logger = logging.getLogger(__name__)


class PlayerStatsService:
    """Read-only player lookups and stat aggregation."""

    def __init__(self, player_store: PlayerStore, battle_store: BattleStore,
                 search_page_size: Optional[int] = None, active_window_minutes: Optional[int] = None):
        self.player_store = player_store
        self.battle_store = battle_store
        if search_page_size is None:
            search_page_size = Config.SEARCH_PAGE_SIZE
        if active_window_minutes is None:
            active_window_minutes = Config.ACTIVE_WINDOW_MINUTES
        self.search_page_size = search_page_size
        self.active_window_minutes = active_window_minutes

    async def get_player_stats(self, public_id: Optional[str]) -> Optional[PlayerStats]:
        """
        Build the full stat summary for a player.

        Args:
            public_id: Player's public id; surrounding whitespace is ignored

        Returns:
            PlayerStats, or None if no player has this id

        Raises:
            InvalidPublicIdError: if the id is malformed. Raised before any store access.
        """
        public_id = validate_public_id(public_id)

        profile = await self.player_store.find_by_public_id(public_id)
        if profile is None:
            logger.debug(f"No player found for {public_id}")
            return None

        battles = await self.battle_store.find_all_by_player_id(profile.player_id)
        if battles is None:
            battles = []

        summaries = CharacterStatsAggregator.aggregate(profile.character_stats.values())
        matchup_result = BattleMatchupProcessor.process(battles, profile.public_id)
        played_characters = self._merge_matchups(summaries, matchup_result)

        return PlayerStats(
            player_id=profile.player_id,
            public_id=profile.public_id,
            name=profile.name,
            region_id=region_or_sentinel(profile.region_id),
            power=profile.power,
            last_active=profile.last_active,
            main_character_id=self._main_character(played_characters),
            played_characters=played_characters,
            battles=matchup_result.battles,
        )

    @staticmethod
    def _merge_matchups(summaries: Dict[int, CharacterSummary],
                        matchup_result: MatchupResult) -> Dict[int, CharacterSummary]:
        """Attach ranked matchups to the summaries of characters with stat records."""
        merged = {}
        for character_id, summary in summaries.items():
            matchups = matchup_result.matchups.get(character_id, {})
            best, worst = matchup_result.best_and_worst(character_id)
            merged[character_id] = replace(summary, matchups=dict(matchups),
                                           best_matchup=best, worst_matchup=worst)

        orphaned = set(matchup_result.matchups) - set(summaries)
        if orphaned:
            logger.debug(f"Dropping matchups for characters without stat records: {sorted(orphaned)}")
        return merged

    @staticmethod
    def _main_character(played_characters: Dict[int, CharacterSummary]) -> Optional[int]:
        """Most played character; ties go to the most recently played, then the lower id."""
        if not played_characters:
            return None
        main = min(
            played_characters.values(),
            key=lambda s: (-s.games, -(s.last_active or 0), s.character_id)
        )
        return main.character_id

    async def get_player_metadata(self, public_id: Optional[str]) -> Optional[PlayerMetadata]:
        """Profile header only; no battles are read and nothing is aggregated."""
        public_id = validate_public_id(public_id)

        profile = await self.player_store.find_by_public_id(public_id)
        if profile is None:
            return None
        return PlayerMetadata.from_profile(profile)

    async def get_player_id(self, public_id: Optional[str]) -> Optional[str]:
        """Stored primary id for a public id, zero-padded to full width."""
        public_id = validate_public_id(public_id)

        player_id = await self.player_store.find_player_id_by_public_id(public_id)
        if player_id is None:
            return None
        return normalize_player_id(player_id)

    async def search_players(self, query: Optional[str]) -> List[PlayerSearchResult]:
        """
        Search players by name or public id.

        The store applies the page size; its results are passed through as-is.
        A blank query returns an empty list without touching the store.
        """
        query = (query or "").strip()
        if not query:
            return []

        players = await self.player_store.search_by_name_or_public_id(
            query, PageRequest(page=0, size=self.search_page_size)
        )
        if not players:
            return []

        logger.debug(f"Search '{query}' matched {len(players)} player(s)")
        return [PlayerSearchResult.from_profile(player) for player in players]

    async def get_recently_active_players(self) -> List[RecentlyActivePlayer]:
        """Players seen within the configured activity window."""
        players = await self.player_store.find_active_within(self.active_window_minutes)
        if not players:
            return []
        return [RecentlyActivePlayer.from_profile(player) for player in players]
