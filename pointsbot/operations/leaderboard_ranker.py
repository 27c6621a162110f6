"""
Leaderboard ranking over a population snapshot.

Ranks are 1-based with points descending. How equal points are ordered is
fixed by a TiePolicy:

- PARTICIPANT_ID: equal points ordered by participant id ascending (default)
- INPUT_ORDER: equal points ordered by position in the snapshot
- SHARED: equal points share a rank and the next rank is skipped (1, 1, 3),
  the same as SQL RANK()

The snapshot is never mutated. Callers that rank often should put a
LeaderboardCache in front of these functions.
"""

from enum import Enum
from typing import Dict, List, Sequence, Tuple

from pointsbot.data_models.points import PointRecord, RankStatus
from pointsbot.utils.exceptions import ParticipantNotFoundError


class TiePolicy(Enum):
    PARTICIPANT_ID = "participant_id"
    INPUT_ORDER = "input_order"
    SHARED = "shared"


DEFAULT_TIE_POLICY = TiePolicy.PARTICIPANT_ID


def _sort_key(policy: TiePolicy, index: int, record: PointRecord) -> Tuple:
    if policy is TiePolicy.PARTICIPANT_ID:
        return (-record.points, record.participant_id, index)
    return (-record.points, index)


def _first_occurrences(population: Sequence[PointRecord]) -> List[Tuple[int, PointRecord]]:
    """Drop repeated participant ids, keeping the first row seen."""
    seen = set()
    unique = []
    for index, record in enumerate(population):
        if record.participant_id in seen:
            continue
        seen.add(record.participant_id)
        unique.append((index, record))
    return unique


def rank(
    participant_id: str,
    population: Sequence[PointRecord],
    tie_policy: TiePolicy = DEFAULT_TIE_POLICY,
) -> RankStatus:
    """
    Rank one participant within a population snapshot.

    The rank is 1 plus the number of records strictly ahead of the participant
    under the tie policy; the total is the size of the snapshot.

    Raises:
        ParticipantNotFoundError: If ``participant_id`` is not in ``population``
    """
    entries = _first_occurrences(population)

    target = next(((i, r) for i, r in entries if r.participant_id == participant_id), None)
    if target is None:
        raise ParticipantNotFoundError(participant_id)

    target_key = _sort_key(tie_policy, *target)
    if tie_policy is TiePolicy.SHARED:
        ahead = sum(1 for _, record in entries if record.points > target[1].points)
    else:
        ahead = sum(1 for index, record in entries if _sort_key(tie_policy, index, record) < target_key)

    return RankStatus(rank=ahead + 1, total_participants=len(population))


def sort_population(
    population: Sequence[PointRecord],
    tie_policy: TiePolicy = DEFAULT_TIE_POLICY,
) -> List[PointRecord]:
    """Return the snapshot in leaderboard order (duplicates dropped)."""
    entries = _first_occurrences(population)
    entries.sort(key=lambda entry: _sort_key(tie_policy, *entry))
    return [record for _, record in entries]


def rank_all(
    population: Sequence[PointRecord],
    tie_policy: TiePolicy = DEFAULT_TIE_POLICY,
) -> Dict[str, RankStatus]:
    """Rank every participant in one sort. Keys are participant ids."""
    total = len(population)
    ordered = sort_population(population, tie_policy)

    ranks: Dict[str, RankStatus] = {}
    previous_points = None
    current_rank = 0
    for position, record in enumerate(ordered, start=1):
        if tie_policy is not TiePolicy.SHARED or record.points != previous_points:
            current_rank = position
        previous_points = record.points
        ranks[record.participant_id] = RankStatus(rank=current_rank, total_participants=total)
    return ranks
