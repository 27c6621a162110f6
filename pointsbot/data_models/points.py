"""
Points status data models.

Provides immutable data transfer objects for participant points, level tiers
and the derived level/rank status consumed by the embed builders.
"""

import math
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Union

from pointsbot.utils.exceptions import SnapshotFormatError


def parse_timestamp(value: Union[str, datetime]) -> datetime:
    """Parse an ISO-8601 timestamp (trailing 'Z' allowed) into an aware datetime."""
    if isinstance(value, datetime):
        parsed = value
    else:
        text = value.strip()
        if text.endswith('Z'):
            text = text[:-1] + '+00:00'
        parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


@dataclass(frozen=True)
class PointRecord:
    """One participant's raw points state."""
    participant_id: str
    points: int
    last_updated_at: datetime
    display_name: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PointRecord":
        """
        Build a record from a snapshot row.

        Accepts the export shape ({"id", "name", "points", "updatedAt"}) as well
        as snake_case keys matching the field names.

        Raises:
            SnapshotFormatError: If a required field is missing or malformed
        """
        if not isinstance(data, dict):
            raise SnapshotFormatError("row", f"expected an object, got {type(data).__name__}")

        participant_id = data.get('id', data.get('participant_id'))
        points = data.get('points')
        updated_at = data.get('updatedAt', data.get('last_updated_at'))

        if participant_id is None or points is None or updated_at is None:
            raise SnapshotFormatError("row", f"missing id, points or updatedAt in {data!r}")
        if isinstance(points, bool) or not isinstance(points, int):
            raise SnapshotFormatError("row", f"points must be an integer for '{participant_id}'")

        try:
            last_updated_at = parse_timestamp(updated_at)
        except (TypeError, ValueError) as e:
            raise SnapshotFormatError("row", f"bad timestamp for '{participant_id}': {updated_at!r}") from e

        return cls(
            participant_id=str(participant_id),
            points=points,
            last_updated_at=last_updated_at,
            display_name=data.get('name', data.get('display_name')),
        )


@dataclass(frozen=True)
class LevelTier:
    """A contiguous, closed range of points mapped to one level."""
    level: int
    min_points: int
    max_points: float  # math.inf for the final tier

    @property
    def is_terminal(self) -> bool:
        return math.isinf(self.max_points)

    def contains(self, points: int) -> bool:
        return self.min_points <= points <= self.max_points


@dataclass(frozen=True)
class LevelStatus:
    """Level derived from a points value."""
    level: int
    min_points: int
    max_points: float
    next_level: int
    remaining_points: int


@dataclass(frozen=True)
class RankStatus:
    """Position of one participant within a population snapshot."""
    rank: int  # 1-based
    total_participants: int


@dataclass(frozen=True)
class StatusReport:
    """Everything the status embed needs for one participant."""
    participant_id: str
    display_name: Optional[str]
    points: int
    level: LevelStatus
    rank: RankStatus
    fraction: float  # progress within the current tier, [0, 1]
    last_updated_at: datetime
    last_sync: str

    @property
    def level_number(self) -> int:
        return self.level.level

    @property
    def next_level(self) -> int:
        return self.level.next_level

    @property
    def remaining_points(self) -> int:
        return self.level.remaining_points

    @property
    def position(self) -> int:
        return self.rank.rank

    @property
    def total_participants(self) -> int:
        return self.rank.total_participants

    @property
    def is_max_level(self) -> bool:
        """True once the participant sits in the unbounded final tier."""
        return math.isinf(self.level.max_points)
