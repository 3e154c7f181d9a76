"""
Battle history and ranked matchup accounting for a single player.
"""

from collections import defaultdict
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple
import logging

from tracker.constants import MatchupConstants
from tracker.data_models.player import Battle, BattleEntry, BattleType, MatchupRecord

logger = logging.getLogger(__name__)


@dataclass
class MatchupResult:
    """Battle history plus ranked matchups keyed by the player's character."""
    battles: List[BattleEntry] = field(default_factory=list)
    matchups: Dict[int, Dict[int, MatchupRecord]] = field(default_factory=lambda: defaultdict(dict))

    def record(self, character_id: int, opponent_character_id: int, won: bool):
        opponents = self.matchups[character_id]
        if opponent_character_id not in opponents:
            opponents[opponent_character_id] = MatchupRecord(opponent_character_id)
        opponents[opponent_character_id].record(won)

    def best_and_worst(self, character_id: int,
                       min_games: int = MatchupConstants.MIN_MATCHUP_GAMES) -> Tuple[Optional[int], Optional[int]]:
        """
        Opponent characters with the highest and lowest ranked winrate.

        Ties prefer the matchup with more games, then the lower opponent id.
        Returns (None, None) when no matchup reaches min_games.
        """
        eligible = [m for m in self.matchups.get(character_id, {}).values() if m.total >= min_games]
        if not eligible:
            return None, None

        best = min(eligible, key=lambda m: (-m.winrate, -m.total, m.opponent_character_id))
        worst = min(eligible, key=lambda m: (m.winrate, -m.total, m.opponent_character_id))
        return best.opponent_character_id, worst.opponent_character_id


class BattleMatchupProcessor:
    """Walks a player's battles in order."""

    @staticmethod
    def player_side(battle: Battle, public_id: str) -> int:
        """Side number (1 or 2) the player with public_id fought on."""
        if battle.player1.public_id == public_id:
            return 1
        else:
            return 2

    @staticmethod
    def process(battles: Iterable[Battle], public_id: str) -> MatchupResult:
        """
        Build the battle history and ranked matchups for one player.

        Every battle is added to the history in input order. Only ranked
        battles count toward matchups.

        Args:
            battles: The player's battles as returned by the store
            public_id: Public id of the player the battles belong to

        Returns:
            MatchupResult with the history and per-character matchups
        """
        result = MatchupResult()
        ranked_count = 0

        for battle in battles:
            result.battles.append(BattleEntry.from_battle(battle))

            if battle.battle_type is not BattleType.RANKED:
                continue

            side = BattleMatchupProcessor.player_side(battle, public_id)
            player = battle.side(side)
            opponent = battle.side(2 if side == 1 else 1)
            result.record(player.character_id, opponent.character_id, battle.winner == side)
            ranked_count += 1

        logger.debug(f"Processed {len(result.battles)} battle(s), {ranked_count} ranked")
        return result
