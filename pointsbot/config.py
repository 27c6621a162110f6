import os
from dotenv import load_dotenv

load_dotenv()

class Config:
    """Bot configuration settings"""

    # Discord settings
    DISCORD_TOKEN = os.getenv('DISCORD_TOKEN')
    DISCORD_GUILD_ID = int(os.getenv('DISCORD_GUILD_ID', 0))
    DISCORD_GUILD_IDS = os.getenv('DISCORD_GUILD_IDS', '')  # Comma-separated for multi-guild support

    # Bot settings
    COMMAND_PREFIX = os.getenv('COMMAND_PREFIX', '!')
    DEBUG = os.getenv('DEBUG', 'False').lower() == 'true'
    LOG_DIR = os.getenv('LOG_DIR', 'logs')  # empty disables file logging

    # Points snapshot (read-only JSON export from the points store)
    POINTS_SNAPSHOT_PATH = os.getenv('POINTS_SNAPSHOT_PATH', 'points_snapshot.json')

    # Level tiers as a JSON list of {"level", "min", "max"}; empty means built-in defaults
    LEVEL_TIERS = os.getenv('LEVEL_TIERS', '')

    # Ranking settings
    RANK_TIE_POLICY = os.getenv('RANK_TIE_POLICY', 'participant_id')  # participant_id, input_order, shared
    RANK_CACHE_TTL = int(os.getenv('RANK_CACHE_TTL', 60))  # seconds
    LEADERBOARD_SIZE = int(os.getenv('LEADERBOARD_SIZE', 10))

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
        if cls.RANK_TIE_POLICY not in ('participant_id', 'input_order', 'shared'):
            raise ValueError(
                f"RANK_TIE_POLICY must be one of participant_id, input_order, shared (got '{cls.RANK_TIE_POLICY}')"
            )
        if cls.RANK_CACHE_TTL < 0:
            raise ValueError("RANK_CACHE_TTL must be non-negative")
        if cls.LEADERBOARD_SIZE <= 0:
            raise ValueError("LEADERBOARD_SIZE must be positive")
