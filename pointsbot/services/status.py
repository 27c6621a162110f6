"""
Status service: participant-id lookups over the current points snapshot.

Wraps the pure status assembly with snapshot loading and the leaderboard
cache, so commands only deal with participant ids.
"""

from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from pointsbot.data_models.points import LevelTier, PointRecord, RankStatus, StatusReport
from pointsbot.operations.leaderboard_ranker import DEFAULT_TIE_POLICY, TiePolicy, rank_all, sort_population
from pointsbot.operations.status_assembler import assemble
from pointsbot.services.leaderboard_cache import LeaderboardCache
from pointsbot.services.snapshot import JsonSnapshotSource
from pointsbot.utils.exceptions import ParticipantNotFoundError
from pointsbot.utils.logger import setup_logger

logger = setup_logger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class StatusService:
    """Builds StatusReports for participants in the current snapshot."""

    def __init__(
        self,
        source: JsonSnapshotSource,
        tiers: Sequence[LevelTier],
        cache: Optional[LeaderboardCache] = None,
        tie_policy: TiePolicy = DEFAULT_TIE_POLICY,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self.source = source
        self.tiers = tuple(tiers)
        self.cache = cache
        self.tie_policy = cache.tie_policy if cache else tie_policy
        self._clock = clock

    def _population(self) -> Tuple[PointRecord, ...]:
        if self.source.refresh() and self.cache:
            self.cache.invalidate()
        return self.source.load()

    def _ranks(self, population: Sequence[PointRecord]) -> Dict[str, RankStatus]:
        if self.cache:
            return self.cache.get_ranks(population)
        return rank_all(population, self.tie_policy)

    def get_status(self, participant_id: str, now: Optional[datetime] = None) -> StatusReport:
        """
        Fetch the status report for one participant.

        Raises:
            ParticipantNotFoundError: If the participant is not in the snapshot
            SnapshotFormatError: If the snapshot cannot be read
        """
        population = self._population()
        record = next((r for r in population if r.participant_id == participant_id), None)
        if record is None:
            logger.debug(f"No points record for participant {participant_id}")
            raise ParticipantNotFoundError(participant_id)

        rank_status = self._ranks(population).get(participant_id)
        if rank_status is None:
            raise ParticipantNotFoundError(participant_id)

        return assemble(
            record,
            population,
            self.tiers,
            now or self._clock(),
            tie_policy=self.tie_policy,
            rank_status=rank_status,
        )

    def get_leaderboard(self, limit: int, now: Optional[datetime] = None) -> List[StatusReport]:
        """Status reports for the top ``limit`` participants, in rank order."""
        population = self._population()
        ranks = self._ranks(population)
        now = now or self._clock()

        return [
            assemble(
                record,
                population,
                self.tiers,
                now,
                tie_policy=self.tie_policy,
                rank_status=ranks[record.participant_id],
            )
            for record in sort_population(population, self.tie_policy)[:limit]
        ]
