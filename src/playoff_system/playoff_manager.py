"""
Playoff Manager

Pure logic for playoff bracket generation and progression with NFL
re-seeding. The bracket is never stored: each round is derived from the
regular season standings, which fix the seeds, and the completed playoff
games already on the schedule, which decide who is still alive.

Round rules, per conference:
- With an odd number of teams left, the top remaining seed gets a bye
- The highest remaining seed hosts the lowest, the next highest hosts the
  next lowest, and so on
- Seven seeds therefore open with (2)v(7), (3)v(6), (4)v(5) and #1 on bye,
  and #1 meets the lowest remaining seed in the divisional round
- Super Bowl: the two conference champions
"""

import logging
from typing import Dict, Iterable, List, Optional

from config.season_rules import SeasonRules
from shared.league_models import ScheduledGame, Team
from playoff_system.standings_calculator import calculate_standings, determine_playoff_teams

logger = logging.getLogger(__name__)


class PlayoffManager:
    """
    Generates playoff rounds for a league.

    No side effects: takes the schedule as input and returns the games of
    the requested round. Adding them to the schedule is the caller's job.

    Usage:
        manager = PlayoffManager(teams.values())
        wild_card_games = manager.generate_round(schedule, 19)
    """

    def __init__(self, teams: Iterable[Team]):
        self.teams = list(teams)

    def get_seeding(self, schedule: Iterable[ScheduledGame]) -> Dict[str, List[int]]:
        """Conference -> team IDs in seed order, from regular season results."""
        standings = calculate_standings(schedule, self.teams)
        return {
            conference: field.seeds
            for conference, field in determine_playoff_teams(standings).items()
        }

    def get_remaining_teams(
        self,
        schedule: List[ScheduledGame],
        week: int
    ) -> Dict[str, List[int]]:
        """Seeds not yet eliminated before `week` is played, best seed first."""
        eliminated = set()
        for game in schedule:
            if game.is_playoff and game.week < week:
                loser = get_playoff_loser(game)
                if loser is not None:
                    eliminated.add(loser)

        return {
            conference: [team_id for team_id in seeds if team_id not in eliminated]
            for conference, seeds in self.get_seeding(schedule).items()
        }

    def generate_round(self, schedule: List[ScheduledGame], week: int) -> List[ScheduledGame]:
        """
        Create the games of one playoff week.

        Args:
            schedule: Full schedule including every playoff game played so far
            week: Playoff week to generate (19-22)

        Returns:
            New, unplayed games for the week (empty once a conference is decided)

        Raises:
            ValueError: If week is not a playoff week
        """
        if not SeasonRules.PLAYOFF_FIRST_WEEK <= week <= SeasonRules.PLAYOFF_LAST_WEEK:
            raise ValueError(
                f"Playoff week must be {SeasonRules.PLAYOFF_FIRST_WEEK}-"
                f"{SeasonRules.PLAYOFF_LAST_WEEK}, got {week}"
            )

        remaining = self.get_remaining_teams(schedule, week)

        if week == SeasonRules.PLAYOFF_LAST_WEEK:
            return self._create_super_bowl(remaining, week)

        games = []
        for conference in sorted(remaining):
            games.extend(create_conference_matchups(conference, remaining[conference], week))
        return games

    def _create_super_bowl(self, remaining: Dict[str, List[int]], week: int) -> List[ScheduledGame]:
        champions = [teams[0] for _, teams in sorted(remaining.items()) if len(teams) == 1]
        if len(remaining) != 2 or len(champions) != 2:
            logger.warning(
                f"No Super Bowl scheduled: conference champions undecided ({remaining})"
            )
            return []

        # First conference alphabetically is the designated home team
        home, away = champions
        return [ScheduledGame(
            game_id=f"playoff-{week}-super-bowl",
            week=week,
            home_team_id=home,
            away_team_id=away
        )]


def create_conference_matchups(
    conference: str,
    remaining: List[int],
    week: int
) -> List[ScheduledGame]:
    """
    Pair the remaining seeds of one conference, highest hosting lowest.

    Args:
        conference: Conference code used in the game IDs
        remaining: Team IDs still alive, best seed first
        week: Playoff week of the games
    """
    if len(remaining) < 2:
        return []

    playing = remaining[1:] if len(remaining) % 2 else list(remaining)
    games = []
    for index in range(len(playing) // 2):
        games.append(ScheduledGame(
            game_id=f"playoff-{week}-{conference}-{index + 1}",
            week=week,
            home_team_id=playing[index],
            away_team_id=playing[-1 - index]
        ))
    return games


def get_playoff_loser(game: ScheduledGame) -> Optional[int]:
    """
    Team eliminated by a completed playoff game.

    A tied playoff game (possible only with an engine that allows it) is
    won by the home team, the higher seed.
    """
    if not game.is_complete:
        return None
    if game.winner_id is None:
        return game.away_team_id
    return game.opponent_of(game.winner_id)
