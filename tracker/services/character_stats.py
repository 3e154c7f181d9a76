"""
Per-character aggregation of a player's stat records.

A player has one stat record per (character, game version) they played in.
Totals are merged across every version; ranks are taken per season from
the newest version played in that season.
"""

from collections import defaultdict
from typing import Dict, Iterable, List, Optional, Tuple
import logging

from tracker.data_models.player import CharacterStatRecord, CharacterSummary
from tracker.utils.season import is_current_season

logger = logging.getLogger(__name__)


class CharacterStatsAggregator:
    """Reduces raw stat records to one summary per character."""

    @staticmethod
    def calculate_winrate(wins: int, losses: int) -> float:
        """
        Win percentage rounded to two decimals.

        Args:
            wins: Games won
            losses: Games lost

        Returns:
            wins / (wins + losses) * 100, or 0.0 when no games were played
        """
        games = wins + losses
        if games == 0:
            return 0.0
        return round(wins / games * 100, 2)

    @staticmethod
    def _recency_key(record: CharacterStatRecord) -> Tuple[int, int, int]:
        # Newest version first; same version falls back to latest activity, then rank
        return (record.game_version, record.last_active or 0, record.rank or 0)

    @staticmethod
    def select_latest(records: List[CharacterStatRecord]) -> Optional[CharacterStatRecord]:
        """Record with the greatest game version, or None for an empty list."""
        if not records:
            return None
        return max(records, key=CharacterStatsAggregator._recency_key)

    @staticmethod
    def summarize(character_id: int, records: List[CharacterStatRecord]) -> CharacterSummary:
        """Build the summary for one character from all of its records."""
        current_season = [r for r in records if is_current_season(r.game_version)]
        previous_season = [r for r in records if not is_current_season(r.game_version)]

        current = CharacterStatsAggregator.select_latest(current_season)
        previous = CharacterStatsAggregator.select_latest(previous_season)

        wins = sum(r.wins for r in records)
        losses = sum(r.losses for r in records)
        activity = [r.last_active for r in records if r.last_active is not None]

        return CharacterSummary(
            character_id=character_id,
            wins=wins,
            losses=losses,
            winrate=CharacterStatsAggregator.calculate_winrate(wins, losses),
            current_season_rank=current.rank if current else None,
            previous_season_rank=previous.rank if previous else None,
            last_active=max(activity) if activity else None,
        )

    @staticmethod
    def aggregate(records: Iterable[CharacterStatRecord]) -> Dict[int, CharacterSummary]:
        """
        Summarize every character a player has stat records for.

        Args:
            records: Stat records in any order

        Returns:
            Mapping of character id to its summary; empty when there are no records
        """
        by_character: Dict[int, List[CharacterStatRecord]] = defaultdict(list)
        for record in records:
            by_character[record.character_id].append(record)

        summaries = {
            character_id: CharacterStatsAggregator.summarize(character_id, character_records)
            for character_id, character_records in by_character.items()
        }
        logger.debug(f"Aggregated {len(summaries)} character(s)")
        return summaries
