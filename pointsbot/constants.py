"""
Bot-wide constants for the Points Meter bot.

This module contains the default level table and the magic numbers used by
the status formatters and the ranking cache.
"""

import math


class LevelConstants:
    """Constants related to level tiers."""

    # Default tier table: (level, min_points, max_points), inclusive bounds.
    # The final tier is unbounded.
    DEFAULT_LEVEL_TIERS = (
        (0, 0, 999),
        (1, 1000, 1499),
        (2, 1500, 2499),
        (3, 2500, 4999),
        (4, 5000, 9999),
        (5, 10000, math.inf),
    )

    # Zero padding for the "Lv.NN" badge
    LEVEL_BADGE_DIGITS = 2


class TimeConstants:
    """Bucket sizes for relative-time captions (seconds)."""

    MINUTE = 60
    HOUR = 60 * 60
    DAY = 24 * 60 * 60


class CacheConstants:
    """Constants for caching behavior."""

    # Default TTL for the cached leaderboard order (seconds)
    DEFAULT_RANK_CACHE_TTL = 60


class UIConstants:
    """Constants for Discord UI elements."""

    # Embed colors
    DEFAULT_EMBED_COLOR = 0x2600FF  # Gauge gradient start
    MAX_LEVEL_COLOR = 0x8400FF      # Gauge gradient end
    GOLD_RANK_COLOR = 0xffd700      # Gold for #1 ranked participants
    NEUTRAL_COLOR = 0x95a5a6        # Grey for unregistered participants

    # Rank badge zero padding ("0001th")
    RANK_BADGE_DIGITS = 4

    # Text progress gauge
    PROGRESS_BAR_WIDTH = 20
    PROGRESS_FILLED = "█"
    PROGRESS_EMPTY = "░"

    # Emoji for UI elements
    POINTS_EMOJI = "🕊️"
    TROPHY_EMOJI = "🏆"
    CLOCK_EMOJI = "🕒"
