"""
Tests for playoff bracket generation and re-seeding.

The twelve-team test league seeds five AFC teams (two division leaders,
three wild cards) and four NFC teams (one leader, three wild cards).
"""

import logging

import pytest

from playoff_system.playoff_manager import (
    PlayoffManager,
    create_conference_matchups,
    get_playoff_loser,
)


@pytest.fixture
def manager(league_teams):
    return PlayoffManager(league_teams.values())


@pytest.fixture
def final_week(make_game):
    """
    One completed regular season game: Bills beat Dolphins.

    Seeds: AFC [1, 5, 3, 4, 6], NFC [9, 10, 11, 12]
    """
    return [make_game("g18", 18, home=1, away=2, score=(24, 17))]


def _home_wins(games):
    return [game.complete(24, 17) for game in games]


def _pairs(games):
    return [(game.home_team_id, game.away_team_id) for game in games]


class TestMatchups:
    """Highest remaining seed hosts the lowest."""

    def test_seven_seed_wild_card_round(self):
        games = create_conference_matchups("AFC", [1, 2, 3, 4, 5, 6, 7], 19)

        assert _pairs(games) == [(2, 7), (3, 6), (4, 5)]
        assert [game.game_id for game in games] == [
            "playoff-19-AFC-1", "playoff-19-AFC-2", "playoff-19-AFC-3"
        ]

    def test_reseeding_sends_top_seed_the_lowest_survivor(self):
        games = create_conference_matchups("NFC", [1, 3, 4, 7], 20)

        assert _pairs(games) == [(1, 7), (3, 4)]

    def test_single_team_has_no_game(self):
        assert create_conference_matchups("NFC", [9], 21) == []


class TestPlayoffLoser:

    def test_loser_of_decided_game(self, make_game):
        assert get_playoff_loser(make_game("p", 19, home=1, away=2, score=(10, 20))) == 1

    def test_tied_game_eliminates_away_team(self, make_game):
        assert get_playoff_loser(make_game("p", 19, home=1, away=2, score=(20, 20))) == 2

    def test_unplayed_game_eliminates_nobody(self, make_game):
        assert get_playoff_loser(make_game("p", 19, home=1, away=2)) is None


class TestGenerateRound:

    def test_seeding_from_regular_season(self, manager, final_week):
        seeding = manager.get_seeding(final_week)

        assert seeding == {"AFC": [1, 5, 3, 4, 6], "NFC": [9, 10, 11, 12]}

    def test_wild_card_round(self, manager, final_week):
        games = manager.generate_round(final_week, 19)

        assert _pairs(games) == [(5, 6), (3, 4), (9, 12), (10, 11)]
        assert all(game.week == 19 and not game.is_complete for game in games)

    def test_rounds_follow_winners_to_the_super_bowl(self, manager, final_week):
        schedule = list(final_week)
        rounds = {}
        for week in range(19, 23):
            games = manager.generate_round(schedule, week)
            rounds[week] = _pairs(games)
            schedule.extend(_home_wins(games))

        assert rounds[20] == [(5, 3), (9, 10)]
        assert rounds[21] == [(1, 5)]
        assert rounds[22] == [(1, 9)]
        assert schedule[-1].game_id == "playoff-22-super-bowl"

    def test_remaining_teams_ignore_games_of_the_same_week(self, manager, final_week):
        schedule = final_week + _home_wins(manager.generate_round(final_week, 19))

        assert manager.get_remaining_teams(schedule, 19)["AFC"] == [1, 5, 3, 4, 6]
        assert manager.get_remaining_teams(schedule, 20)["AFC"] == [1, 5, 3]

    def test_super_bowl_waits_for_champions(self, manager, final_week, caplog):
        with caplog.at_level(logging.WARNING, logger="playoff_system.playoff_manager"):
            games = manager.generate_round(final_week, 22)

        assert games == []
        assert "conference champions undecided" in caplog.text

    @pytest.mark.parametrize("week", [18, 23])
    def test_rejects_non_playoff_weeks(self, manager, final_week, week):
        with pytest.raises(ValueError):
            manager.generate_round(final_week, week)
