"""Shared fixtures for the listings test suite."""

import json

import pytest

from src.directory.response_cache import ResponseCache
from src.table_engine.data_table import TabularDataEngine

LETTERS = "ABCDEFGHIJKL"


def make_district_players():
    """Twelve players "Player A".."Player L", districts alternating
    Hyderabad / Warangal by letter, stored in reverse letter order so that
    sorting visibly changes the sequence."""
    players = []
    for index, letter in enumerate(LETTERS):
        players.append({
            "id": f"p{index + 1}",
            "name": f"Player {letter}",
            "district": "Hyderabad" if index % 2 == 0 else "Warangal",
            "ranking": index + 1,
            "isActive": index % 3 != 0,
        })
    return list(reversed(players))


# ------------------------------------------------------------------
# Lightweight factories – cheap to construct, no I/O
# ------------------------------------------------------------------

@pytest.fixture(scope="module")
def engine():
    return TabularDataEngine()


@pytest.fixture
def district_players():
    return make_district_players()


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start=1000.0):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def cache(clock):
    return ResponseCache(max_entries=4, default_ttl=60, clock=clock)


# ------------------------------------------------------------------
# Filesystem fixtures
# ------------------------------------------------------------------

@pytest.fixture
def snapshot_dir(tmp_path):
    """Directory with a players snapshot in the paginated envelope shape."""
    records = [
        {
            "id": "p1", "name": "Ravi Kumar", "districtName": "Warangal",
            "dateOfBirth": "1998-04-12", "category": "MEN",
            "statistics": {"winPercentage": 71.25}, "totalAchievements": 4,
        },
        {
            "id": "p2", "name": "Anitha Reddy", "districtName": "Hyderabad",
            "dateOfBirth": "2001-09-30", "category": "WOMEN",
            "statistics": {"winPercentage": 64.0}, "totalAchievements": None,
        },
        {
            "id": "p3", "name": "Suresh Babu", "districtName": "Warangal",
            "dateOfBirth": "2008-01-05", "category": "JUNIOR",
            "statistics": {"winPercentage": 80.5}, "totalAchievements": 2,
        },
    ]
    payload = {
        "data": records,
        "pagination": {"page": 1, "size": 3, "total": 3, "totalPages": 1},
    }
    with open(tmp_path / "players.json", "w", encoding="utf-8") as f:
        json.dump(payload, f)
    return tmp_path
