"""
Cached leaderboard order in front of the pure ranker.

Whoever applies a points update must call invalidate(); the TTL only bounds
how stale the order can get when that does not happen.
"""

import threading
import time
from typing import Callable, Dict, Optional, Sequence

from pointsbot.constants import CacheConstants
from pointsbot.data_models.points import PointRecord, RankStatus
from pointsbot.operations.leaderboard_ranker import DEFAULT_TIE_POLICY, TiePolicy, rank_all
from pointsbot.utils.exceptions import ParticipantNotFoundError
from pointsbot.utils.logger import setup_logger

logger = setup_logger(__name__)


class LeaderboardCache:
    """Caches rank_all() results with TTL-based expiry and manual invalidation."""

    def __init__(
        self,
        ttl: float = CacheConstants.DEFAULT_RANK_CACHE_TTL,
        tie_policy: TiePolicy = DEFAULT_TIE_POLICY,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.ttl = ttl
        self.tie_policy = tie_policy
        self._clock = clock
        self._lock = threading.Lock()
        self._ranks: Optional[Dict[str, RankStatus]] = None
        self._computed_at = 0.0

    def get_ranks(self, population: Sequence[PointRecord]) -> Dict[str, RankStatus]:
        """Ranks for the whole snapshot, recomputed when missing or expired."""
        with self._lock:
            now = self._clock()
            if self._ranks is not None and now - self._computed_at < self.ttl:
                logger.debug("Leaderboard cache hit")
                return self._ranks

            logger.debug(f"Leaderboard cache miss, ranking {len(population)} participants")
            self._ranks = rank_all(population, self.tie_policy)
            self._computed_at = now
            return self._ranks

    def get_rank(self, participant_id: str, population: Sequence[PointRecord]) -> RankStatus:
        """
        Rank one participant, serving from the cached order when fresh.

        Raises:
            ParticipantNotFoundError: If the participant is not ranked
        """
        rank_status = self.get_ranks(population).get(participant_id)
        if rank_status is None:
            raise ParticipantNotFoundError(participant_id)
        return rank_status

    def invalidate(self):
        """Drop the cached order; the next lookup re-ranks."""
        with self._lock:
            if self._ranks is not None:
                logger.info("Invalidating leaderboard cache")
            self._ranks = None
