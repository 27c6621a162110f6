import asyncio
import discord
from discord import app_commands
from discord.ext import commands
from typing import Optional
from pointsbot.utils.embeds import build_leaderboard_embed, build_status_embed
from pointsbot.utils.error_embeds import ErrorEmbeds
from pointsbot.utils.exceptions import ParticipantNotFoundError, SnapshotFormatError
from pointsbot.utils.logger import setup_logger

logger = setup_logger(__name__)

class PointsCog(commands.Cog):
    """Points, level and rank status commands"""

    def __init__(self, bot):
        self.bot = bot
        self.status_service = bot.status_service

    @app_commands.command(name="points", description="Show points, level and rank")
    @app_commands.describe(member="Whose points to show (defaults to you)")
    async def points(
        self,
        interaction: discord.Interaction,
        member: Optional[discord.Member] = None
    ):
        """Display the points status for a participant."""
        target = member or interaction.user
        await interaction.response.defer()

        try:
            report = await asyncio.to_thread(self.status_service.get_status, str(target.id))
            await interaction.followup.send(embed=build_status_embed(report, target))
        except ParticipantNotFoundError:
            await interaction.followup.send(embed=ErrorEmbeds.participant_not_found(target))
        except SnapshotFormatError as e:
            logger.error(f"Points snapshot unreadable: {e}")
            await interaction.followup.send(embed=ErrorEmbeds.points_unavailable())
        except Exception as e:
            logger.error(f"Error in points command: {e}", exc_info=True)
            await interaction.followup.send(embed=ErrorEmbeds.command_error("Could not load points status. Please try again later."))

    @app_commands.command(name="leaderboard", description="View the points leaderboard")
    async def leaderboard(self, interaction: discord.Interaction):
        """Display the top participants by points."""
        await interaction.response.defer()

        try:
            reports = await asyncio.to_thread(self.status_service.get_leaderboard, self.bot.leaderboard_size)
            await interaction.followup.send(embed=build_leaderboard_embed(reports))
        except SnapshotFormatError as e:
            logger.error(f"Points snapshot unreadable: {e}")
            await interaction.followup.send(embed=ErrorEmbeds.points_unavailable())
        except Exception as e:
            logger.error(f"Error in leaderboard command: {e}", exc_info=True)
            await interaction.followup.send(embed=ErrorEmbeds.command_error("Could not load the leaderboard. Please try again later."))

async def setup(bot):
    await bot.add_cog(PointsCog(bot))
