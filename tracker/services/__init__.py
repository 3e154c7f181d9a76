"""
Services package for the stat tracker bot.

Stores, aggregation and the player stats service.
"""

from .base import BaseService
from .player_stats import PlayerStatsService
from .stores import BattleStore, PlayerStore, SqlBattleStore, SqlPlayerStore

__all__ = [
    'BaseService', 'PlayerStatsService',
    'BattleStore', 'PlayerStore', 'SqlBattleStore', 'SqlPlayerStore'
]
