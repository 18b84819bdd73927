"""
Pytest configuration for test discovery and imports.

Provides fixtures for testing including:
- A small two-conference league with owners
- Schedule entry factories
- Seeded random sources
"""

import random
import sys
from pathlib import Path

import pytest


# Determine paths
project_root = Path(__file__).parent.parent
src_path = project_root / "src"
tests_path = project_root / "tests"


def pytest_configure(config):
    """Configure pytest - runs very early in startup.

    src/ MUST come before tests/ so test directories named like packages
    (tests/season, tests/offseason) never shadow the real ones.
    """
    seen = set()
    new_path = []
    for p in sys.path:
        if p not in seen and p != str(tests_path):
            seen.add(p)
            new_path.append(p)

    if str(src_path) in new_path:
        new_path.remove(str(src_path))
    new_path.insert(0, str(src_path))

    sys.path[:] = new_path


# ============================================================================
# LEAGUE FIXTURES
# ============================================================================

# team_id -> (nickname, conference, division)
LEAGUE_LAYOUT = {
    1: ("Bills", "AFC", "East"),
    2: ("Dolphins", "AFC", "East"),
    3: ("Jets", "AFC", "East"),
    4: ("Patriots", "AFC", "East"),
    5: ("Ravens", "AFC", "North"),
    6: ("Bengals", "AFC", "North"),
    7: ("Browns", "AFC", "North"),
    8: ("Steelers", "AFC", "North"),
    9: ("Cowboys", "NFC", "East"),
    10: ("Giants", "NFC", "East"),
    11: ("Eagles", "NFC", "East"),
    12: ("Commanders", "NFC", "East"),
}


@pytest.fixture
def league_teams():
    """Twelve teams in three four-team divisions, keyed by team ID."""
    from shared.league_models import Team

    return {
        team_id: Team(team_id=team_id, nickname=nickname, conference=conference, division=division)
        for team_id, (nickname, conference, division) in LEAGUE_LAYOUT.items()
    }


@pytest.fixture
def owner():
    """Owner with neutral traits."""
    from career.owner_models import OwnerProfile

    return OwnerProfile(owner_id="owner_1")


@pytest.fixture
def rng():
    """Seeded random source so results are reproducible."""
    return random.Random(42)


@pytest.fixture
def make_game():
    """
    Factory for schedule entries.

    Usage:
        make_game("g1", 1, home=1, away=2, score=(24, 17))
    """
    from shared.league_models import ScheduledGame

    def _make(game_id, week, home, away, score=None):
        game = ScheduledGame(game_id=game_id, week=week, home_team_id=home, away_team_id=away)
        if score is not None:
            game = game.complete(*score)
        return game

    return _make
