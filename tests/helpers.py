# tests/helpers.py

import asyncio
from typing import Dict, List, Optional

from tracker.data_models.player import (
    Battle, BattleSide, BattleType, CharacterStatRecord, CharacterStatsKey, PageRequest, PlayerProfile
)
from tracker.services.stores import BattleStore, PlayerStore

PLAYER_ID = "12345678901234567890"
PUBLIC_ID = "ABC123456789"
OPPONENT_PUBLIC_ID = "DEF987654321"


def run(coro):
    """Drive a coroutine to completion from a synchronous test."""
    return asyncio.run(coro)


def make_record(character_id: int, game_version: int, wins: int = 0, losses: int = 0,
                rank: Optional[int] = None, last_active: Optional[int] = None) -> CharacterStatRecord:
    return CharacterStatRecord(
        key=CharacterStatsKey(character_id=character_id, game_version=game_version),
        wins=wins,
        losses=losses,
        rank=rank,
        last_active=last_active,
    )


def make_profile(records: List[CharacterStatRecord] = (), public_id: str = PUBLIC_ID,
                 player_id: str = PLAYER_ID, name: str = "TestPlayer",
                 region_id: Optional[int] = 1, power: int = 100000,
                 last_active: Optional[int] = 1735689600) -> PlayerProfile:
    return PlayerProfile(
        player_id=player_id,
        public_id=public_id,
        name=name,
        region_id=region_id,
        power=power,
        last_active=last_active,
        character_stats={record.key: record for record in records},
    )


def make_battle(battle_id: str = "battle123", battle_type: BattleType = BattleType.RANKED,
                player1_public_id: str = PUBLIC_ID, player1_character_id: int = 32,
                player2_public_id: str = OPPONENT_PUBLIC_ID, player2_character_id: int = 28,
                winner: int = 1, game_version: int = 20001, battle_at: int = 1735689600) -> Battle:
    player1_rounds, player2_rounds = (3, 1) if winner == 1 else (1, 3)
    return Battle(
        battle_id=battle_id,
        date="2025-01-01",
        battle_at=battle_at,
        battle_type=battle_type,
        game_version=game_version,
        player1=BattleSide(
            name="TestPlayer" if player1_public_id == PUBLIC_ID else "Opponent",
            public_id=player1_public_id,
            character_id=player1_character_id,
            region_id=1,
            power=100000,
            rank=15,
            rounds_won=player1_rounds,
        ),
        player2=BattleSide(
            name="TestPlayer" if player2_public_id == PUBLIC_ID else "Opponent",
            public_id=player2_public_id,
            character_id=player2_character_id,
            region_id=2,
            power=95000,
            rank=14,
            rounds_won=player2_rounds,
        ),
        winner=winner,
        stage_id=1,
    )


class FakePlayerStore(PlayerStore):
    """In-memory PlayerStore that records every call."""

    def __init__(self, profiles: Optional[List[PlayerProfile]] = None,
                 player_ids: Optional[Dict[str, str]] = None,
                 search_results: Optional[List[PlayerProfile]] = None,
                 active_players: Optional[List[PlayerProfile]] = None):
        self.profiles = {profile.public_id: profile for profile in profiles or []}
        self.player_ids = player_ids or {}
        self.search_results = search_results
        self.active_players = active_players
        self.calls = []

    async def find_by_public_id(self, public_id):
        self.calls.append(("find_by_public_id", public_id))
        return self.profiles.get(public_id)

    async def find_player_id_by_public_id(self, public_id):
        self.calls.append(("find_player_id_by_public_id", public_id))
        return self.player_ids.get(public_id)

    async def search_by_name_or_public_id(self, query, page: PageRequest):
        self.calls.append(("search_by_name_or_public_id", query, page))
        return self.search_results

    async def find_active_within(self, window_minutes):
        self.calls.append(("find_active_within", window_minutes))
        return self.active_players


class FakeBattleStore(BattleStore):
    """In-memory BattleStore; a player mapped to None simulates an absent result."""

    def __init__(self, battles_by_player: Optional[Dict[str, Optional[List[Battle]]]] = None):
        self.battles_by_player = battles_by_player or {}
        self.calls = []

    async def find_all_by_player_id(self, player_id):
        self.calls.append(("find_all_by_player_id", player_id))
        return self.battles_by_player.get(player_id)
