"""
Level resolution for the points meter.

Maps a points total onto the configured tier table. The table is validated once
at startup by load_level_tiers(); resolve_level() trusts it afterwards.
"""

import json
import math
from bisect import bisect_right
from typing import Iterable, Optional, Sequence, Tuple

from pointsbot.config import Config
from pointsbot.constants import LevelConstants
from pointsbot.data_models.points import LevelStatus, LevelTier
from pointsbot.utils.exceptions import TierConfigurationError
from pointsbot.utils.logger import setup_logger

logger = setup_logger(__name__)


def resolve_level(points: int, tiers: Sequence[LevelTier]) -> LevelStatus:
    """
    Resolve the level, next level and remaining points for a points total.

    Args:
        points: Participant's points (negative values are clamped to zero)
        tiers: Validated tier table, sorted by min_points

    Returns:
        LevelStatus for the tier containing ``points``. In the final tier the
        next level is a virtual one past the table and remaining_points is 0.
    """
    if points < 0:
        logger.warning(f"Negative points value {points} clamped to 0")
        points = 0

    # Tiers are sorted and contiguous, so the last tier starting at or below
    # ``points`` is the only candidate.
    index = bisect_right([tier.min_points for tier in tiers], points) - 1
    if index >= 0 and tiers[index].contains(points):
        current = tiers[index]
    else:
        logger.warning(f"No tier contains {points} points, falling back to level {tiers[0].level}")
        current = tiers[0]

    next_tier = next((tier for tier in tiers if tier.level == current.level + 1), None)
    if next_tier is None:
        return LevelStatus(
            level=current.level,
            min_points=current.min_points,
            max_points=current.max_points,
            next_level=current.level + 1,
            remaining_points=0,
        )

    return LevelStatus(
        level=current.level,
        min_points=current.min_points,
        max_points=current.max_points,
        next_level=next_tier.level,
        remaining_points=max(0, next_tier.min_points - points),
    )


def validate_tier_table(tiers: Sequence[LevelTier]) -> None:
    """
    Check the contiguity invariant of a tier table.

    Raises:
        TierConfigurationError: If the table is empty, does not start at 0,
            has gaps, overlaps or non-increasing levels, or ends bounded
    """
    if not tiers:
        raise TierConfigurationError("table is empty")

    if tiers[0].min_points != 0:
        raise TierConfigurationError(f"first tier must start at 0, starts at {tiers[0].min_points}")

    for previous, tier in zip(tiers, tiers[1:]):
        if tier.level <= previous.level:
            raise TierConfigurationError(
                f"levels must strictly increase (level {tier.level} follows {previous.level})"
            )
        if math.isinf(previous.max_points):
            raise TierConfigurationError(f"only the final tier may be unbounded (level {previous.level})")
        if tier.min_points != previous.max_points + 1:
            raise TierConfigurationError(
                f"level {tier.level} starts at {tier.min_points} but level {previous.level} ends at {previous.max_points}"
            )

    for tier in tiers:
        if tier.min_points > tier.max_points:
            raise TierConfigurationError(
                f"level {tier.level} has min {tier.min_points} above max {tier.max_points}"
            )

    if not tiers[-1].is_terminal:
        raise TierConfigurationError(f"final tier (level {tiers[-1].level}) must be unbounded")


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def build_tiers(rows: Iterable[Tuple[int, int, Optional[float]]]) -> Tuple[LevelTier, ...]:
    """
    Build tiers from (level, min, max) rows; a max of None (or math.inf) means unbounded.

    Raises:
        TierConfigurationError: If a level or bound is not an integer
    """
    tiers = []
    for level, min_points, max_points in rows:
        if not _is_int(level):
            raise TierConfigurationError(f"level must be an integer (got {level!r})")
        if not _is_int(min_points):
            raise TierConfigurationError(f"level {level} min must be an integer (got {min_points!r})")
        if max_points is None or max_points == math.inf:
            max_points = math.inf
        elif not _is_int(max_points):
            raise TierConfigurationError(f"level {level} max must be an integer or null (got {max_points!r})")
        tiers.append(LevelTier(level=level, min_points=min_points, max_points=max_points))
    return tuple(tiers)


def load_level_tiers(raw: Optional[str] = None) -> Tuple[LevelTier, ...]:
    """
    Load and validate the process-wide tier table.

    Args:
        raw: JSON list of {"level", "min", "max"} objects ("max" may be null).
            Defaults to Config.LEVEL_TIERS; an empty value selects the
            built-in table.

    Returns:
        Validated tuple of tiers

    Raises:
        TierConfigurationError: If the JSON is unreadable or the table invalid
    """
    raw = Config.LEVEL_TIERS if raw is None else raw

    if not raw.strip():
        tiers = build_tiers(LevelConstants.DEFAULT_LEVEL_TIERS)
        source = "defaults"
    else:
        try:
            rows = json.loads(raw)
            tiers = build_tiers((row['level'], row['min'], row.get('max')) for row in rows)
        except (json.JSONDecodeError, KeyError, TypeError, ValueError, AttributeError) as e:
            raise TierConfigurationError(f"could not parse LEVEL_TIERS: {e}") from e
        source = "LEVEL_TIERS"

    validate_tier_table(tiers)
    logger.info(f"Loaded {len(tiers)} level tiers from {source}")
    return tiers
