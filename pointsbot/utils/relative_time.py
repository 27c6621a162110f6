"""
Relative-time captions for the "last sync" line of the status embed.
"""

from datetime import datetime, timezone

from pointsbot.constants import TimeConstants


def _as_aware(value: datetime) -> datetime:
    # Naive datetimes are taken as UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def format_since(timestamp: datetime, now: datetime) -> str:
    """
    Describe how long ago ``timestamp`` was, relative to ``now``.

    Buckets (each unit floored, upper bounds exclusive):
    - under a minute: "just now"
    - under an hour: "N minutes ago"
    - under a day: "N hours ago"
    - otherwise: "N days ago"

    Future timestamps (clock skew) read as "just now".
    """
    elapsed = int((_as_aware(now) - _as_aware(timestamp)).total_seconds())

    if elapsed < TimeConstants.MINUTE:
        return "just now"
    if elapsed < TimeConstants.HOUR:
        return f"{elapsed // TimeConstants.MINUTE} minutes ago"
    if elapsed < TimeConstants.DAY:
        return f"{elapsed // TimeConstants.HOUR} hours ago"
    return f"{elapsed // TimeConstants.DAY} days ago"
