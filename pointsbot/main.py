import asyncio
import logging
import traceback
from typing import Optional

import discord
from discord.ext import commands
from discord import app_commands

from pointsbot.config import Config
from pointsbot.operations.leaderboard_ranker import TiePolicy
from pointsbot.operations.level_resolver import load_level_tiers
from pointsbot.services import JsonSnapshotSource, LeaderboardCache, StatusService
from pointsbot.utils.logger import setup_logger

class PointsBot(commands.Bot):
    def __init__(self):
        intents = discord.Intents.default()
        intents.guilds = True

        super().__init__(
            command_prefix=Config.COMMAND_PREFIX,
            intents=intents,
            help_command=None
        )

        self.tree.on_error = self.on_app_command_error

        self.status_service: Optional[StatusService] = None
        self.leaderboard_size = Config.LEADERBOARD_SIZE
        self.logger = setup_logger(__name__)

    async def setup_hook(self):
        """Called when the bot is starting up"""
        self.logger.info("Setting up Points Bot...")

        # Tier table is process-wide; a bad table stops startup
        tiers = load_level_tiers()

        cache = LeaderboardCache(
            ttl=Config.RANK_CACHE_TTL,
            tie_policy=TiePolicy(Config.RANK_TIE_POLICY)
        )
        self.status_service = StatusService(
            JsonSnapshotSource(Config.POINTS_SNAPSHOT_PATH),
            tiers,
            cache=cache
        )
        self.logger.info(f"Status service ready (snapshot: {Config.POINTS_SNAPSHOT_PATH}, ties: {Config.RANK_TIE_POLICY})")

        await self.load_extension('pointsbot.cogs.points')
        await self._sync_commands()

        self.logger.info("Points Bot setup complete!")

    async def _sync_commands(self):
        """Sync slash commands with Discord"""
        if not self.tree.get_commands():
            self.logger.warning("No application commands found to sync. Check for cog loading errors.")
            return

        try:
            guild_ids = Config.get_guild_ids()

            if guild_ids:
                for guild_id in guild_ids:
                    try:
                        guild = discord.Object(id=guild_id)
                        self.tree.copy_global_to(guild=guild)
                        synced = await self.tree.sync(guild=guild)
                        self.logger.info(f"Synced {len(synced)} command(s) to guild {guild_id}")
                    except discord.errors.HTTPException as e:
                        self.logger.error(f"HTTP error syncing to guild {guild_id}. Status: {e.status}, Response: {e.text}", exc_info=True)
            else:
                # Global sync can take up to an hour to propagate
                synced = await self.tree.sync()
                self.logger.info(f"Synced {len(synced)} command(s) globally")
        except Exception as e:
            self.logger.error(f"Failed to sync commands: {e}", exc_info=True)

    async def on_ready(self):
        """Called when the bot is ready"""
        self.logger.info(f'{self.user} has connected to Discord!')
        await self.change_presence(activity=discord.Game(name="/points"))

    async def on_app_command_error(self, interaction: discord.Interaction, error: app_commands.AppCommandError):
        """Global error handler for slash commands"""
        command_name = interaction.command.name if interaction.command else 'Unknown'
        self.logger.error(f"Error in app command '{command_name}': {error}", exc_info=True)

        title = "❌ An unexpected error occurred while processing your command."

        error_embed = discord.Embed(title=title, color=discord.Color.red())
        try:
            if interaction.response.is_done():
                await interaction.followup.send(embed=error_embed, ephemeral=True)
            else:
                await interaction.response.send_message(embed=error_embed, ephemeral=True)
        except Exception as e:
            self.logger.error(f"Failed to send error response: {e}")

async def main():
    """Main entry point"""
    Config.validate()

    bot = PointsBot()

    try:
        await bot.start(Config.DISCORD_TOKEN)
    except KeyboardInterrupt:
        pass
    except Exception as e:
        logging.error(f"Fatal error: {e}")
        traceback.print_exc()
    finally:
        await bot.close()

def run():
    """Console script entry point"""
    asyncio.run(main())

if __name__ == "__main__":
    run()
