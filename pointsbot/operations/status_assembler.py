"""
Status assembly: combines level, rank and last-sync text into one StatusReport.
"""

import math
from datetime import datetime
from typing import Optional, Sequence

from pointsbot.data_models.points import LevelStatus, LevelTier, PointRecord, RankStatus, StatusReport
from pointsbot.operations.leaderboard_ranker import DEFAULT_TIE_POLICY, TiePolicy, rank
from pointsbot.operations.level_resolver import resolve_level
from pointsbot.utils.relative_time import format_since


def progress_fraction(points: int, level_status: LevelStatus) -> float:
    """
    Position of ``points`` within its tier, clamped to [0, 1].

    A single-point tier or the unbounded final tier counts as full.
    """
    span = level_status.max_points - level_status.min_points
    if span <= 0 or math.isinf(span):
        return 1.0
    fraction = (points - level_status.min_points) / span
    return min(1.0, max(0.0, fraction))


def assemble(
    record: PointRecord,
    population: Sequence[PointRecord],
    tiers: Sequence[LevelTier],
    now: datetime,
    tie_policy: TiePolicy = DEFAULT_TIE_POLICY,
    rank_status: Optional[RankStatus] = None,
) -> StatusReport:
    """
    Build the status report for one participant.

    Args:
        record: The participant's points record; must belong to ``population``
        population: Snapshot used for ranking
        tiers: Validated tier table
        now: Reference time for the last-sync caption
        tie_policy: Ordering of equal points when ranking
        rank_status: Precomputed rank (e.g. from LeaderboardCache); skips ranking

    Raises:
        ParticipantNotFoundError: If ``record`` is absent from ``population``
    """
    level_status = resolve_level(record.points, tiers)
    if rank_status is None:
        rank_status = rank(record.participant_id, population, tie_policy)

    return StatusReport(
        participant_id=record.participant_id,
        display_name=record.display_name,
        points=record.points,
        level=level_status,
        rank=rank_status,
        fraction=progress_fraction(max(0, record.points), level_status),
        last_updated_at=record.last_updated_at,
        last_sync=format_since(record.last_updated_at, now),
    )
