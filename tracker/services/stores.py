"""
Read-only stores for players, character stats and battles.

PlayerStore and BattleStore are the only way the aggregation services reach
stored data. The SQL implementations read through async SQLAlchemy sessions
and convert rows to the immutable records in tracker.data_models.player.
"""

from abc import ABC, abstractmethod
from typing import List, Optional
import logging
import time

from sqlalchemy import select, or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import selectinload

from tracker.services.base import BaseService
from tracker.database.models import Player, CharacterStats, BattleRow
from tracker.data_models.player import (
    Battle, BattleSide, CharacterStatRecord, CharacterStatsKey, PageRequest, PlayerProfile
)
from tracker.utils.exceptions import StoreError

logger = logging.getLogger(__name__)


class PlayerStore(ABC):
    """Lookup interface for stored player profiles."""

    @abstractmethod
    async def find_by_public_id(self, public_id: str) -> Optional[PlayerProfile]:
        """Profile with all character stat records, or None."""

    @abstractmethod
    async def find_player_id_by_public_id(self, public_id: str) -> Optional[str]:
        """Stored primary id for a public id, or None."""

    @abstractmethod
    async def search_by_name_or_public_id(self, query: str, page: PageRequest) -> Optional[List[PlayerProfile]]:
        """Case-insensitive substring match on name or public id, limited to one page."""

    @abstractmethod
    async def find_active_within(self, window_minutes: int) -> Optional[List[PlayerProfile]]:
        """Players whose latest battle falls inside the last window_minutes."""


class BattleStore(ABC):
    """Lookup interface for stored battles."""

    @abstractmethod
    async def find_all_by_player_id(self, player_id: str) -> Optional[List[Battle]]:
        """Every battle the player took part in, on either side."""


def _to_stat_record(row: CharacterStats) -> CharacterStatRecord:
    return CharacterStatRecord(
        key=CharacterStatsKey(character_id=row.character_id, game_version=row.game_version),
        wins=row.wins or 0,
        losses=row.losses or 0,
        rank=row.rank,
        last_active=row.last_active,
    )


def _to_profile(player: Player, stats: Optional[List[CharacterStats]] = None) -> PlayerProfile:
    records = [_to_stat_record(row) for row in stats or []]
    return PlayerProfile(
        player_id=player.id,
        public_id=player.public_id,
        name=player.name,
        region_id=player.region_id,
        power=player.power or 0,
        last_active=player.last_active,
        character_stats={record.key: record for record in records},
    )


def _to_battle(row: BattleRow) -> Battle:
    return Battle(
        battle_id=row.battle_id,
        date=row.date,
        battle_at=row.battle_at,
        battle_type=row.battle_type,
        game_version=row.game_version,
        player1=BattleSide(
            name=row.player1_name,
            public_id=row.player1_public_id,
            character_id=row.player1_character_id,
            region_id=row.player1_region_id,
            power=row.player1_power or 0,
            rank=row.player1_rank,
            rounds_won=row.player1_rounds_won or 0,
        ),
        player2=BattleSide(
            name=row.player2_name,
            public_id=row.player2_public_id,
            character_id=row.player2_character_id,
            region_id=row.player2_region_id,
            power=row.player2_power or 0,
            rank=row.player2_rank,
            rounds_won=row.player2_rounds_won or 0,
        ),
        winner=row.winner,
        stage_id=row.stage_id,
    )


class SqlPlayerStore(BaseService, PlayerStore):
    """PlayerStore backed by the players and character_stats tables."""

    async def find_by_public_id(self, public_id: str) -> Optional[PlayerProfile]:
        try:
            async with self.get_session() as session:
                result = await session.execute(
                    select(Player)
                    .options(selectinload(Player.character_stats))
                    .where(Player.public_id == public_id)
                )
                player = result.scalar_one_or_none()
                if not player:
                    return None
                return _to_profile(player, player.character_stats)
        except SQLAlchemyError as e:
            logger.error(f"Database error fetching player {public_id}: {e}")
            raise StoreError("find_by_public_id", str(e)) from e

    async def find_player_id_by_public_id(self, public_id: str) -> Optional[str]:
        try:
            async with self.get_session() as session:
                result = await session.execute(
                    select(Player.id).where(Player.public_id == public_id)
                )
                return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error(f"Database error fetching player id for {public_id}: {e}")
            raise StoreError("find_player_id_by_public_id", str(e)) from e

    async def search_by_name_or_public_id(self, query: str, page: PageRequest) -> Optional[List[PlayerProfile]]:
        try:
            async with self.get_session() as session:
                result = await session.execute(
                    select(Player)
                    .where(or_(
                        Player.name.icontains(query, autoescape=True),
                        Player.public_id.icontains(query, autoescape=True)
                    ))
                    .order_by(Player.power.desc(), Player.name)
                    .offset(page.offset)
                    .limit(page.size)
                )
                return [_to_profile(player) for player in result.scalars().all()]
        except SQLAlchemyError as e:
            logger.error(f"Database error searching players for '{query}': {e}")
            raise StoreError("search_by_name_or_public_id", str(e)) from e

    async def find_active_within(self, window_minutes: int) -> Optional[List[PlayerProfile]]:
        cutoff = int(time.time()) - window_minutes * 60
        try:
            async with self.get_session() as session:
                result = await session.execute(
                    select(Player)
                    .where(Player.last_active >= cutoff)
                    .order_by(Player.last_active.desc())
                )
                return [_to_profile(player) for player in result.scalars().all()]
        except SQLAlchemyError as e:
            logger.error(f"Database error fetching active players: {e}")
            raise StoreError("find_active_within", str(e)) from e


class SqlBattleStore(BaseService, BattleStore):
    """BattleStore backed by the battles table. Newest battles come first."""

    async def find_all_by_player_id(self, player_id: str) -> Optional[List[Battle]]:
        try:
            async with self.get_session() as session:
                result = await session.execute(
                    select(BattleRow)
                    .where(or_(BattleRow.player1_id == player_id, BattleRow.player2_id == player_id))
                    .order_by(BattleRow.battle_at.desc(), BattleRow.battle_id)
                )
                return [_to_battle(row) for row in result.scalars().all()]
        except SQLAlchemyError as e:
            logger.error(f"Database error fetching battles for player {player_id}: {e}")
            raise StoreError("find_all_by_player_id", str(e)) from e
