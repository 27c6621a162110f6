"""
Services package for the Points Meter bot.

Stateful wrappers around the pure status operations: snapshot loading,
leaderboard caching and participant lookups.
"""

from .leaderboard_cache import LeaderboardCache
from .snapshot import JsonSnapshotSource
from .status import StatusService

__all__ = ['JsonSnapshotSource', 'LeaderboardCache', 'StatusService']
