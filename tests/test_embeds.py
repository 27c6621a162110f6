"""Tests for status captions and embed building."""

import discord
import pytest

from pointsbot.constants import UIConstants
from pointsbot.data_models.points import RankStatus
from pointsbot.operations.status_assembler import assemble
from pointsbot.utils.embeds import (
    build_leaderboard_embed,
    build_status_embed,
    format_level_badge,
    format_next_level_caption,
    format_points_label,
    format_progress_bar,
    format_rank_badge,
)
from pointsbot.utils.error_embeds import ErrorEmbeds

from conftest import make_record


@pytest.fixture
def report(tiers, now, population):
    record = next(r for r in population if r.participant_id == "u3")
    return assemble(record, population, tiers, now)


def test_points_label():
    assert format_points_label(2640) == "2,640pt"


def test_level_badge_padding():
    assert format_level_badge(3) == "Lv.03"
    assert format_level_badge(12) == "Lv.12"


def test_rank_badge():
    assert format_rank_badge(RankStatus(rank=1, total_participants=1020)) == "0001th of 1,020"


def test_next_level_caption(report):
    assert format_next_level_caption(report) == "2,360 pt to Lv.04"


def test_next_level_caption_at_max(tiers, now):
    record = make_record("top", 12000)
    report = assemble(record, [record], tiers, now)
    assert format_next_level_caption(report) == "Max level reached"


@pytest.mark.parametrize("fraction,filled", [(0.0, 0), (0.5, 10), (1.0, 20), (1.7, 20), (-1, 0)])
def test_progress_bar(fraction, filled):
    bar = format_progress_bar(fraction)
    assert len(bar) == UIConstants.PROGRESS_BAR_WIDTH
    assert bar.count(UIConstants.PROGRESS_FILLED) == filled


def test_status_embed(report):
    embed = build_status_embed(report)
    assert "Mori" in embed.title
    assert embed.description == "**2,640pt**"
    assert embed.color.value == UIConstants.GOLD_RANK_COLOR
    assert embed.fields[0].name == "Level Lv.03"
    assert "2,360 pt to Lv.04" in embed.fields[0].value
    assert embed.fields[1].value == "0001th of 4"
    assert embed.footer.text.endswith("Last synced 16 hours ago")


def test_leaderboard_embed(tiers, now, population):
    reports = [assemble(r, population, tiers, now) for r in population]
    reports.sort(key=lambda r: r.position)
    embed = build_leaderboard_embed(reports)
    assert embed.description.splitlines()[0].startswith("`#  1` **Mori**")
    assert embed.footer.text == "4 participants"


def test_empty_leaderboard_embed():
    assert build_leaderboard_embed([]).description == "No participants yet."


def test_participant_not_found_embed_is_neutral():
    embed = ErrorEmbeds.participant_not_found()
    assert embed.title == "Not Registered"
    assert embed.color.value == UIConstants.NEUTRAL_COLOR
    assert embed.color != discord.Color.red()
