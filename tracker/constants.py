"""
Bot-wide constants for the stat tracker bot.

Fixed game and lookup values used by the aggregation services and the
Discord layer.
"""

class SeasonConstants:
    """Constants related to season classification."""

    # First game version of season 2; anything below belongs to the previous season
    SEASON2_MIN_VERSION = 20001

    CURRENT_SEASON_LABEL = "current"
    PREVIOUS_SEASON_LABEL = "previous"

class LookupConstants:
    """Constants for player lookups and projections."""

    # Public ids are short alphanumeric codes
    MAX_PUBLIC_ID_LENGTH = 12

    # Stored primary ids are left-padded with zeros to this width
    PLAYER_ID_WIDTH = 18

    # Outward value for a profile with no region
    NO_REGION = -1

class MatchupConstants:
    """Constants for matchup accounting."""

    # Minimum games against a character before it can be a best/worst matchup
    MIN_MATCHUP_GAMES = 1

class UIConstants:
    """Constants for Discord UI elements."""

    DEFAULT_EMBED_COLOR = 0x3498db  # Blue
    SUCCESS_COLOR = 0x2ecc71       # Green for success

    # Discord allows at most 25 fields per embed
    MAX_EMBED_FIELDS = 25
    MAX_CHARACTER_FIELDS = 6
    MAX_BATTLE_LINES = 5

    TROPHY_EMOJI = "🏆"
    SWORDS_EMOJI = "⚔️"
