import json
from datetime import datetime, timedelta, timezone

import pytest

from pointsbot.constants import LevelConstants
from pointsbot.data_models.points import PointRecord
from pointsbot.operations.level_resolver import build_tiers

NOW = datetime(2025, 9, 30, 12, 30, tzinfo=timezone.utc)

SNAPSHOT_ROWS = [
    {"id": "u1", "name": "Tanaka", "points": 120, "updatedAt": "2025-09-30T12:00:00Z"},
    {"id": "u2", "name": "Sato", "points": 805, "updatedAt": "2025-09-29T20:00:00Z"},
    {"id": "u3", "name": "Mori", "points": 2640, "updatedAt": "2025-09-29T20:00:00Z"},
    {"id": "aaa", "name": "Matsuhashi", "points": 810, "updatedAt": "2025-09-29T20:00:00Z"},
]


def make_record(participant_id, points, age=timedelta(minutes=5)):
    return PointRecord(participant_id=participant_id, points=points, last_updated_at=NOW - age)


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def tiers():
    return build_tiers(LevelConstants.DEFAULT_LEVEL_TIERS)


@pytest.fixture
def population():
    return tuple(PointRecord.from_dict(row) for row in SNAPSHOT_ROWS)


@pytest.fixture
def snapshot_file(tmp_path):
    path = tmp_path / "points_snapshot.json"
    path.write_text(json.dumps(SNAPSHOT_ROWS), encoding="utf-8")
    return path
