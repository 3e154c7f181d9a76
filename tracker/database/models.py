from sqlalchemy import (
    Column, Integer, String, BigInteger, ForeignKey, Enum as SQLEnum, Index
)
from sqlalchemy.orm import declarative_base, relationship

from tracker.data_models.player import BattleType

Base = declarative_base()

class Player(Base):
    __tablename__ = 'players'

    id = Column(String(32), primary_key=True)  # Primary player id, stored unpadded
    public_id = Column(String(12), unique=True, nullable=False, index=True)
    name = Column(String(100), nullable=False, index=True)
    region_id = Column(Integer, nullable=True)
    power = Column(BigInteger, default=0)

    # Epoch seconds of the latest battle seen for this player
    last_active = Column(BigInteger, nullable=True, index=True)

    character_stats = relationship("CharacterStats", back_populates="player", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<Player(public_id='{self.public_id}', name='{self.name}', power={self.power})>"

class CharacterStats(Base):
    """Stats for one character in one game version."""
    __tablename__ = 'character_stats'

    player_id = Column(String(32), ForeignKey('players.id'), primary_key=True)
    character_id = Column(Integer, primary_key=True)
    game_version = Column(Integer, primary_key=True)

    wins = Column(Integer, default=0)
    losses = Column(Integer, default=0)
    rank = Column(Integer, nullable=True)
    last_active = Column(BigInteger, nullable=True)

    player = relationship("Player", back_populates="character_stats")

    def __repr__(self):
        return (f"<CharacterStats(player_id='{self.player_id}', character={self.character_id}, "
                f"version={self.game_version}, {self.wins}W/{self.losses}L)>")

class BattleRow(Base):
    __tablename__ = 'battles'

    battle_id = Column(String(64), primary_key=True)
    date = Column(String(10), nullable=False)
    battle_at = Column(BigInteger, nullable=False)
    battle_type = Column(SQLEnum(BattleType), nullable=False)
    game_version = Column(Integer, nullable=False)

    # Side 1
    player1_id = Column(String(32), nullable=False, index=True)
    player1_name = Column(String(100))
    player1_public_id = Column(String(12), nullable=False)
    player1_character_id = Column(Integer, nullable=False)
    player1_region_id = Column(Integer, nullable=True)
    player1_power = Column(BigInteger, default=0)
    player1_rank = Column(Integer, nullable=True)
    player1_rounds_won = Column(Integer, default=0)

    # Side 2
    player2_id = Column(String(32), nullable=False, index=True)
    player2_name = Column(String(100))
    player2_public_id = Column(String(12), nullable=False)
    player2_character_id = Column(Integer, nullable=False)
    player2_region_id = Column(Integer, nullable=True)
    player2_power = Column(BigInteger, default=0)
    player2_rank = Column(Integer, nullable=True)
    player2_rounds_won = Column(Integer, default=0)

    winner = Column(Integer, nullable=False)  # 1 or 2
    stage_id = Column(Integer)

    __table_args__ = (Index('ix_battles_battle_at', 'battle_at'),)

    def __repr__(self):
        return f"<BattleRow(battle_id='{self.battle_id}', type={self.battle_type}, winner={self.winner})>"
