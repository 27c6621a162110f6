"""
Centralized error embeds for the points commands.

Unregistered participants get a neutral embed rather than an error, so a
missing points record never reads as a failure.
"""

import discord
from typing import Optional

from pointsbot.constants import UIConstants


class ErrorEmbeds:
    """Error embed factory for the points commands."""

    @staticmethod
    def participant_not_found(member: Optional[discord.abc.User] = None) -> discord.Embed:
        """Neutral embed for participants without a points record."""
        if member:
            description = f"{member.mention} hasn't been registered for this event yet."
        else:
            description = "This participant hasn't been registered for this event yet."

        return discord.Embed(
            title="Not Registered",
            description=description,
            color=UIConstants.NEUTRAL_COLOR
        )

    @staticmethod
    def points_unavailable() -> discord.Embed:
        """Embed for when the points snapshot cannot be read."""
        return discord.Embed(
            title="Points Unavailable",
            description="Points data is unavailable right now. Please try again later.",
            color=discord.Color.red()
        )

    @staticmethod
    def command_error(error: str) -> discord.Embed:
        """Create embed for general command errors."""
        return discord.Embed(
            title="Command Error",
            description=f"An error occurred: {error}\n\nPlease try again or contact an administrator.",
            color=discord.Color.red()
        )
