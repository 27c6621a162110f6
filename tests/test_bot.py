"""Tests for the slash command handlers and bot wiring, driven with mocked interactions."""

import asyncio
import threading
from pathlib import Path
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest
from discord import app_commands

from pointsbot.cogs import points as points_cog
from pointsbot.cogs.points import PointsCog
from pointsbot.main import PointsBot
from pointsbot.services import JsonSnapshotSource, StatusService
from pointsbot.services import snapshot

EXAMPLE_SNAPSHOT = Path(__file__).resolve().parent.parent / "points_snapshot.example.json"
MORI_ID = 412908176530448384


class ThreadRecordingService(StatusService):
    """StatusService that remembers which thread served each call."""

    threads = ()

    def get_status(self, participant_id, now=None):
        self.threads += (threading.current_thread(),)
        return super().get_status(participant_id, now)

    def get_leaderboard(self, limit, now=None):
        self.threads += (threading.current_thread(),)
        return super().get_leaderboard(limit, now)


def make_interaction(user_id=MORI_ID):
    interaction = MagicMock()
    interaction.user.id = user_id
    interaction.user.display_name = "member"
    interaction.user.display_avatar.url = "https://cdn.discordapp.com/embed/avatars/0.png"
    interaction.response.defer = AsyncMock()
    interaction.response.send_message = AsyncMock()
    interaction.response.is_done = MagicMock(return_value=False)
    interaction.followup.send = AsyncMock()
    return interaction


@pytest.fixture
def service(tiers):
    return ThreadRecordingService(JsonSnapshotSource(EXAMPLE_SNAPSHOT), tiers)


@pytest.fixture
def cog(service):
    return PointsCog(SimpleNamespace(status_service=service, leaderboard_size=3))


def sent_embed(interaction):
    interaction.followup.send.assert_awaited_once()
    return interaction.followup.send.await_args.kwargs["embed"]


class TestExampleSnapshot:
    def test_ids_are_discord_user_ids(self):
        records = JsonSnapshotSource(EXAMPLE_SNAPSHOT).load()
        assert records
        assert all(r.participant_id.isdigit() for r in records)

    def test_member_id_finds_row(self, service):
        report = service.get_status(str(MORI_ID))
        assert report.display_name == "Mori"
        assert report.points == 2640


class TestPointsCommand:
    def test_status_for_caller(self, cog, service):
        interaction = make_interaction()
        asyncio.run(PointsCog.points.callback(cog, interaction))

        interaction.response.defer.assert_awaited_once()
        assert "Mori" in sent_embed(interaction).title

    def test_snapshot_read_off_event_loop_thread(self, cog, service):
        asyncio.run(PointsCog.points.callback(cog, make_interaction()))
        assert service.threads
        assert threading.main_thread() not in service.threads

    def test_unknown_member(self, cog):
        interaction = make_interaction(user_id=1)
        asyncio.run(PointsCog.points.callback(cog, interaction))
        assert sent_embed(interaction).title == "Not Registered"


class TestLeaderboardCommand:
    def test_top_entries(self, cog, service):
        interaction = make_interaction()
        asyncio.run(PointsCog.leaderboard.callback(cog, interaction))

        embed = sent_embed(interaction)
        assert "Mori" in embed.description
        assert "Tanaka" not in embed.description
        assert threading.main_thread() not in service.threads


class TestAppCommandErrorHandler:
    @pytest.mark.parametrize("error", [
        app_commands.AppCommandError("boom"),
        app_commands.CheckFailure("nope"),
    ])
    def test_generic_reply(self, error):
        bot = SimpleNamespace(logger=MagicMock())
        interaction = make_interaction()
        interaction.command.name = "points"

        asyncio.run(PointsBot.on_app_command_error(bot, interaction, error))

        interaction.response.send_message.assert_awaited_once()
        kwargs = interaction.response.send_message.await_args.kwargs
        assert kwargs["ephemeral"] is True
        assert kwargs["embed"].title == "❌ An unexpected error occurred while processing your command."

    def test_followup_when_already_deferred(self):
        bot = SimpleNamespace(logger=MagicMock())
        interaction = make_interaction()
        interaction.response.is_done.return_value = True

        asyncio.run(PointsBot.on_app_command_error(bot, interaction, app_commands.AppCommandError("boom")))

        interaction.followup.send.assert_awaited_once()
        interaction.response.send_message.assert_not_awaited()


@pytest.mark.parametrize("module", [snapshot, points_cog])
def test_module_logger_has_handlers(module):
    assert module.logger.handlers
