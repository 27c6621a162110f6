"""
Shared embed utilities for the points status display.

The caption helpers are plain string functions so every view renders the
same labels: "2,640pt", "Lv.03", "2,360 pt to Lv.04", "0001th of 3".
"""

import discord
from typing import List, Optional

from pointsbot.constants import LevelConstants, UIConstants
from pointsbot.data_models.points import RankStatus, StatusReport


def format_points_label(points: int) -> str:
    return f"{points:,}pt"


def format_level_badge(level: int) -> str:
    return f"Lv.{level:0{LevelConstants.LEVEL_BADGE_DIGITS}d}"


def format_next_level_caption(report: StatusReport) -> str:
    """Caption under the level badge; the final tier reads as max level."""
    if report.is_max_level and report.remaining_points == 0:
        return "Max level reached"
    return f"{report.remaining_points:,} pt to {format_level_badge(report.next_level)}"


def format_rank_badge(rank_status: RankStatus) -> str:
    return f"{rank_status.rank:0{UIConstants.RANK_BADGE_DIGITS}d}th of {rank_status.total_participants:,}"


def format_progress_bar(fraction: float, width: int = UIConstants.PROGRESS_BAR_WIDTH) -> str:
    """Text gauge standing in for the progress arc."""
    fraction = min(1.0, max(0.0, fraction))
    filled = int(round(fraction * width))
    return UIConstants.PROGRESS_FILLED * filled + UIConstants.PROGRESS_EMPTY * (width - filled)


def format_tier_range(report: StatusReport) -> str:
    if report.is_max_level:
        return f"{report.level.min_points:,}pt +"
    return f"{report.level.min_points:,}pt – {int(report.level.max_points):,}pt"


def build_status_embed(report: StatusReport, target_member: Optional[discord.abc.User] = None) -> discord.Embed:
    """
    Build the points status embed for one participant.

    Args:
        report: Assembled status for the participant
        target_member: Discord user for the avatar, if available

    Returns:
        Formatted Discord embed ready for display
    """
    if report.position == 1:
        embed_color = UIConstants.GOLD_RANK_COLOR
    elif report.is_max_level:
        embed_color = UIConstants.MAX_LEVEL_COLOR
    else:
        embed_color = UIConstants.DEFAULT_EMBED_COLOR

    name = report.display_name or (target_member.display_name if target_member else report.participant_id)
    embed = discord.Embed(
        title=f"{UIConstants.POINTS_EMOJI} Points: {name}",
        description=f"**{format_points_label(report.points)}**",
        color=embed_color
    )

    if target_member:
        embed.set_thumbnail(url=target_member.display_avatar.url)

    embed.add_field(
        name=f"Level {format_level_badge(report.level_number)}",
        value=(
            f"`{format_progress_bar(report.fraction)}` {report.fraction:.0%}\n"
            f"{format_tier_range(report)}\n"
            f"{format_next_level_caption(report)}"
        ),
        inline=False
    )

    embed.add_field(
        name=f"{UIConstants.TROPHY_EMOJI} Rank",
        value=format_rank_badge(report.rank),
        inline=True
    )

    embed.set_footer(text=f"{UIConstants.CLOCK_EMOJI} Last synced {report.last_sync}")
    return embed


def build_leaderboard_embed(reports: List[StatusReport]) -> discord.Embed:
    """Build the top-N leaderboard embed from reports in rank order."""
    embed = discord.Embed(
        title=f"{UIConstants.TROPHY_EMOJI} Points Leaderboard",
        color=UIConstants.DEFAULT_EMBED_COLOR
    )

    if not reports:
        embed.description = "No participants yet."
        return embed

    lines = [
        f"`#{report.position:>3}` **{report.display_name or report.participant_id}** "
        f"{format_points_label(report.points)} · {format_level_badge(report.level_number)}"
        for report in reports
    ]
    embed.description = "\n".join(lines)
    embed.set_footer(text=f"{reports[0].total_participants:,} participants")
    return embed
