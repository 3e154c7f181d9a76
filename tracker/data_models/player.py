"""
Player data models for the stat tracker.

Provides the immutable inputs read from the stores (profiles, per-version
character stats, battles) and the data transfer objects produced by the
aggregation services.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

from tracker.constants import LookupConstants


class BattleType(Enum):
    RANKED = "ranked"
    QUICK = "quick"
    PLAYER_MATCH = "player_match"
    GROUP_MATCH = "group_match"


def region_or_sentinel(region_id: Optional[int]) -> int:
    """Outward region value; profiles without a region report NO_REGION."""
    return LookupConstants.NO_REGION if region_id is None else region_id


# ---------------------------------------------------------------------------
# Store-side records
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class CharacterStatsKey:
    """Identifies one character's stats within one game version."""
    character_id: int
    game_version: int


@dataclass(frozen=True)
class CharacterStatRecord:
    """Wins, losses and rank for one character in one game version."""
    key: CharacterStatsKey
    wins: int
    losses: int
    rank: Optional[int] = None
    last_active: Optional[int] = None  # Epoch seconds of the latest battle

    @property
    def character_id(self) -> int:
        return self.key.character_id

    @property
    def game_version(self) -> int:
        return self.key.game_version


@dataclass(frozen=True)
class PlayerProfile:
    """A stored player together with every per-version stat record."""
    player_id: str
    public_id: str
    name: str
    region_id: Optional[int]
    power: int
    last_active: Optional[int] = None
    character_stats: Dict[CharacterStatsKey, CharacterStatRecord] = field(default_factory=dict)


@dataclass(frozen=True)
class BattleSide:
    """One participant of a battle."""
    name: str
    public_id: str
    character_id: int
    region_id: Optional[int]
    power: int
    rank: Optional[int]
    rounds_won: int


@dataclass(frozen=True)
class Battle:
    """Single stored battle between two players."""
    battle_id: str
    date: str
    battle_at: int
    battle_type: BattleType
    game_version: int
    player1: BattleSide
    player2: BattleSide
    winner: int  # 1 or 2
    stage_id: int

    def side(self, number: int) -> BattleSide:
        return self.player1 if number == 1 else self.player2


@dataclass(frozen=True)
class PageRequest:
    """Zero-based page of results."""
    page: int
    size: int

    @property
    def offset(self) -> int:
        return self.page * self.size


# ---------------------------------------------------------------------------
# Aggregated results
# ---------------------------------------------------------------------------

@dataclass
class MatchupRecord:
    """Ranked results of one character against one opposing character."""
    opponent_character_id: int
    wins: int = 0
    losses: int = 0

    @property
    def total(self) -> int:
        return self.wins + self.losses

    @property
    def winrate(self) -> float:
        if self.total == 0:
            return 0.0
        return round(self.wins / self.total * 100, 2)

    def record(self, won: bool):
        if won:
            self.wins += 1
        else:
            self.losses += 1


@dataclass(frozen=True)
class CharacterSummary:
    """All-time totals and per-season ranks for one played character."""
    character_id: int
    wins: int
    losses: int
    winrate: float
    current_season_rank: Optional[int]
    previous_season_rank: Optional[int]
    last_active: Optional[int] = None

    # Ranked matchups keyed by opponent character id
    matchups: Dict[int, MatchupRecord] = field(default_factory=dict)
    best_matchup: Optional[int] = None
    worst_matchup: Optional[int] = None

    @property
    def games(self) -> int:
        return self.wins + self.losses


@dataclass(frozen=True)
class BattleEntry:
    """Single battle history entry."""
    battle_id: str
    date: str
    battle_at: int
    battle_type: BattleType
    game_version: int

    player1_name: str
    player1_public_id: str
    player1_character_id: int
    player1_region_id: int
    player1_power: int
    player1_rank: Optional[int]
    player1_rounds_won: int

    player2_name: str
    player2_public_id: str
    player2_character_id: int
    player2_region_id: int
    player2_power: int
    player2_rank: Optional[int]
    player2_rounds_won: int

    winner: int
    stage_id: int

    @classmethod
    def from_battle(cls, battle: Battle) -> 'BattleEntry':
        p1, p2 = battle.player1, battle.player2
        return cls(
            battle_id=battle.battle_id,
            date=battle.date,
            battle_at=battle.battle_at,
            battle_type=battle.battle_type,
            game_version=battle.game_version,
            player1_name=p1.name,
            player1_public_id=p1.public_id,
            player1_character_id=p1.character_id,
            player1_region_id=region_or_sentinel(p1.region_id),
            player1_power=p1.power,
            player1_rank=p1.rank,
            player1_rounds_won=p1.rounds_won,
            player2_name=p2.name,
            player2_public_id=p2.public_id,
            player2_character_id=p2.character_id,
            player2_region_id=region_or_sentinel(p2.region_id),
            player2_power=p2.power,
            player2_rank=p2.rank,
            player2_rounds_won=p2.rounds_won,
            winner=battle.winner,
            stage_id=battle.stage_id,
        )


@dataclass(frozen=True)
class PlayerStats:
    """Complete stat summary for a player."""
    # Basic info
    player_id: str
    public_id: str
    name: str
    region_id: int
    power: int
    last_active: Optional[int]

    # Character performance
    main_character_id: Optional[int]
    played_characters: Dict[int, CharacterSummary]

    # Battle history in store order
    battles: List[BattleEntry]


@dataclass(frozen=True)
class PlayerMetadata:
    """Profile header without any aggregation."""
    name: str
    public_id: str
    region_id: int
    power: int
    last_active: Optional[int]

    @classmethod
    def from_profile(cls, profile: PlayerProfile) -> 'PlayerMetadata':
        return cls(
            name=profile.name,
            public_id=profile.public_id,
            region_id=region_or_sentinel(profile.region_id),
            power=profile.power,
            last_active=profile.last_active,
        )


@dataclass(frozen=True)
class PlayerSearchResult:
    """Lightweight search row."""
    name: str
    public_id: str
    region_id: int
    power: int

    @classmethod
    def from_profile(cls, profile: PlayerProfile) -> 'PlayerSearchResult':
        return cls(
            name=profile.name,
            public_id=profile.public_id,
            region_id=region_or_sentinel(profile.region_id),
            power=profile.power,
        )


@dataclass(frozen=True)
class RecentlyActivePlayer:
    """Player seen within the activity window."""
    name: str
    public_id: str
    power: int
    region_id: int
    last_active: Optional[int]

    @classmethod
    def from_profile(cls, profile: PlayerProfile) -> 'RecentlyActivePlayer':
        return cls(
            name=profile.name,
            public_id=profile.public_id,
            power=profile.power,
            region_id=region_or_sentinel(profile.region_id),
            last_active=profile.last_active,
        )
