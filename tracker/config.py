import os
from dotenv import load_dotenv

load_dotenv()

class Config:
    """Bot configuration settings"""

    # Discord settings
    DISCORD_TOKEN = os.getenv('DISCORD_TOKEN')
    DISCORD_GUILD_ID = int(os.getenv('DISCORD_GUILD_ID', 0))
    DISCORD_GUILD_IDS = os.getenv('DISCORD_GUILD_IDS', '')  # Comma-separated for multi-guild support

    # Database settings
    DATABASE_URL = os.getenv('DATABASE_URL', 'sqlite:///tracker.db')

    # Bot settings
    COMMAND_PREFIX = os.getenv('COMMAND_PREFIX', '!')
    DEBUG = os.getenv('DEBUG', 'False').lower() == 'true'
    LOG_DIR = os.getenv('LOG_DIR', 'logs')
    COMMAND_TIMEOUT_SECONDS = float(os.getenv('COMMAND_TIMEOUT_SECONDS', 15))

    # Lookup settings
    ACTIVE_WINDOW_MINUTES = int(os.getenv('ACTIVE_WINDOW_MINUTES', 10))
    SEARCH_PAGE_SIZE = int(os.getenv('SEARCH_PAGE_SIZE', 20))

    @classmethod
    def get_guild_ids(cls):
        """Get list of guild IDs for command syncing"""
        if cls.DISCORD_GUILD_IDS:
            try:
                return [int(guild_id.strip()) for guild_id in cls.DISCORD_GUILD_IDS.split(',') if guild_id.strip()]
            except ValueError:
                raise ValueError("DISCORD_GUILD_IDS must be comma-separated integers")
        elif cls.DISCORD_GUILD_ID:
            return [cls.DISCORD_GUILD_ID]
        else:
            # Global sync
            return []

    @classmethod
    def validate(cls):
        """Validate that required configuration is present"""
        if not cls.DISCORD_TOKEN:
            raise ValueError("DISCORD_TOKEN is required")
        if cls.ACTIVE_WINDOW_MINUTES <= 0:
            raise ValueError("ACTIVE_WINDOW_MINUTES must be positive")
        if cls.SEARCH_PAGE_SIZE <= 0:
            raise ValueError("SEARCH_PAGE_SIZE must be positive")
