"""
Standings calculator.

Builds ranked division and conference standings from the full set of
completed regular season games. The calculation is a pure function of its
inputs: the same games and teams always produce the same rankings.

Tie-break order (division and conference alike):
    1. Win percentage
    2. Head-to-head win percentage (two-team ties where the teams have met)
    3. Point differential
    4. Lower team ID (stable coin flip)
"""

import logging
from functools import cmp_to_key
from itertools import groupby
from typing import Dict, Iterable, List, Optional

from config.season_rules import SeasonRules
from shared.league_models import Team, ScheduledGame
from playoff_system.standings_models import (
    ConferencePlayoffTeams,
    HeadToHeadRecord,
    LeagueStandings,
    PlayoffPosition,
    TeamStanding,
)

logger = logging.getLogger(__name__)


class StandingsCalculator:
    """
    Computes standings for a fixed set of teams.

    Handles:
    - Folding completed games into per-team standings
    - Ranking teams within divisions and conferences
    - Determining the current playoff field
    """

    def __init__(self, teams: Iterable[Team]):
        """
        Initialize with the league's teams.

        Args:
            teams: Every team that should appear in the standings
        """
        self.teams: Dict[int, Team] = {team.team_id: team for team in teams}

    def calculate(self, games: Iterable[ScheduledGame]) -> LeagueStandings:
        """
        Calculate standings from completed games.

        Incomplete games and playoff games are ignored. Games are folded in
        (week, game_id) order so streaks do not depend on input order.

        Args:
            games: Any collection of scheduled games

        Returns:
            LeagueStandings ranked by division and conference
        """
        standings = {
            team_id: TeamStanding(
                team_id=team_id,
                conference=team.conference,
                division=team.division
            )
            for team_id, team in self.teams.items()
        }

        counted = 0
        for game in sorted(games, key=lambda g: (g.week, g.game_id)):
            if not game.is_complete or game.week > SeasonRules.REGULAR_SEASON_WEEKS:
                continue
            if game.home_team_id not in standings or game.away_team_id not in standings:
                logger.warning(
                    f"Ignoring game {game.game_id}: team {game.home_team_id} or "
                    f"{game.away_team_id} is not in the league"
                )
                continue
            self._record_game(standings, game)
            counted += 1

        logger.debug(f"Standings calculated from {counted} completed games")
        return self.rank(standings)

    def rank(self, standings: Dict[int, TeamStanding]) -> LeagueStandings:
        """
        Rank already-accumulated standings.

        Assigns division rank, games behind, conference rank and playoff
        position in place.
        """
        divisions = self._rank_divisions(standings)
        conferences = self._rank_conferences(divisions)
        return LeagueStandings(divisions=divisions, conferences=conferences)

    def _record_game(self, standings: Dict[int, TeamStanding], game: ScheduledGame) -> None:
        """Fold one completed game into both teams' standings."""
        home = self.teams[game.home_team_id]
        away = self.teams[game.away_team_id]
        is_divisional = home.division_key == away.division_key
        is_conference = home.conference == away.conference

        self._record_side(
            standings[game.home_team_id], game.away_team_id,
            game.home_score, game.away_score, is_divisional, is_conference
        )
        self._record_side(
            standings[game.away_team_id], game.home_team_id,
            game.away_score, game.home_score, is_divisional, is_conference
        )

    def _record_side(
        self,
        standing: TeamStanding,
        opponent_id: int,
        own_score: int,
        opponent_score: int,
        is_divisional: bool,
        is_conference: bool
    ) -> None:
        """Record a win, loss or tie for one team."""
        h2h = standing.head_to_head.setdefault(opponent_id, HeadToHeadRecord())
        standing.points_for += own_score
        standing.points_against += opponent_score

        if own_score > opponent_score:
            standing.wins += 1
            h2h.wins += 1
            if is_divisional:
                standing.division_wins += 1
            if is_conference:
                standing.conference_wins += 1
            standing.current_streak = standing.current_streak + 1 if standing.current_streak > 0 else 1
        elif own_score < opponent_score:
            standing.losses += 1
            h2h.losses += 1
            if is_divisional:
                standing.division_losses += 1
            if is_conference:
                standing.conference_losses += 1
            standing.current_streak = standing.current_streak - 1 if standing.current_streak < 0 else -1
        else:
            standing.ties += 1
            h2h.ties += 1
            if is_divisional:
                standing.division_ties += 1
            if is_conference:
                standing.conference_ties += 1
            standing.current_streak = 0

    def _rank_divisions(self, standings: Dict[int, TeamStanding]) -> Dict[str, List[TeamStanding]]:
        """Group by division, sort, and assign division rank and games behind."""
        grouped: Dict[str, List[TeamStanding]] = {}
        for standing in standings.values():
            grouped.setdefault(standing.division_key, []).append(standing)

        divisions = {}
        for key in sorted(grouped):
            ranked = sort_standings(grouped[key])
            leader = ranked[0]
            for rank, standing in enumerate(ranked, start=1):
                standing.division_rank = rank
                standing.games_behind = (
                    (leader.wins - standing.wins) + (standing.losses - leader.losses)
                ) / 2
            divisions[key] = ranked
        return divisions

    def _rank_conferences(
        self,
        divisions: Dict[str, List[TeamStanding]]
    ) -> Dict[str, List[TeamStanding]]:
        """
        Assign conference ranks.

        Division leaders always hold the top ranks; everyone else is ranked
        behind them. The best non-leaders hold the wild card spots.
        """
        leaders: Dict[str, List[TeamStanding]] = {}
        others: Dict[str, List[TeamStanding]] = {}
        for ranked in divisions.values():
            conference = ranked[0].conference
            leaders.setdefault(conference, []).append(ranked[0])
            others.setdefault(conference, []).extend(ranked[1:])

        conferences = {}
        for conference in sorted(leaders):
            ranked_leaders = sort_standings(leaders[conference])
            ranked_others = sort_standings(others.get(conference, []))

            for standing in ranked_leaders:
                standing.playoff_position = PlayoffPosition.DIVISION_LEADER
            for index, standing in enumerate(ranked_others):
                if index < SeasonRules.WILDCARDS_PER_CONFERENCE:
                    standing.playoff_position = PlayoffPosition.WILDCARD
                else:
                    standing.playoff_position = PlayoffPosition.IN_HUNT

            ordered = ranked_leaders + ranked_others
            for rank, standing in enumerate(ordered, start=1):
                standing.conference_rank = rank
            conferences[conference] = ordered
        return conferences


def compare_standings(a: TeamStanding, b: TeamStanding) -> int:
    """
    Compare two standings; negative means a ranks ahead of b.

    Head-to-head only applies when both teams have a record against each
    other. Only use this to order a two-team tie; sort_standings handles
    larger ties without head-to-head.
    """
    if a.win_percentage != b.win_percentage:
        return -1 if a.win_percentage > b.win_percentage else 1

    a_vs_b = a.head_to_head.get(b.team_id)
    b_vs_a = b.head_to_head.get(a.team_id)
    if a_vs_b and b_vs_a and a_vs_b.win_percentage != b_vs_a.win_percentage:
        return -1 if a_vs_b.win_percentage > b_vs_a.win_percentage else 1

    if a.point_differential != b.point_differential:
        return -1 if a.point_differential > b.point_differential else 1

    return a.team_id - b.team_id


def sort_standings(standings: List[TeamStanding]) -> List[TeamStanding]:
    """
    Sort standings best-first using the documented tie-break order.

    Teams are grouped by win percentage. A two-team group is ordered with
    compare_standings; a group of three or more skips head-to-head, since
    results among three teams can form a cycle.
    """
    by_pct = sorted(standings, key=lambda s: (-s.win_percentage, s.team_id))

    ranked: List[TeamStanding] = []
    for _, group in groupby(by_pct, key=lambda s: s.win_percentage):
        tied = list(group)
        if len(tied) == 2:
            ranked.extend(sorted(tied, key=cmp_to_key(compare_standings)))
        else:
            ranked.extend(sorted(tied, key=lambda s: (-s.point_differential, s.team_id)))
    return ranked


def calculate_standings(games: Iterable[ScheduledGame], teams: Iterable[Team]) -> LeagueStandings:
    """Convenience wrapper around StandingsCalculator.calculate."""
    return StandingsCalculator(teams).calculate(games)


def get_team_standing(standings: LeagueStandings, team_id: int) -> Optional[TeamStanding]:
    """Get standing for a specific team."""
    return standings.get_team_standing(team_id)


def determine_playoff_teams(standings: LeagueStandings) -> Dict[str, ConferencePlayoffTeams]:
    """
    Determine the current playoff field for each conference.

    Returns:
        Dict of conference -> ConferencePlayoffTeams (division winners and wild cards)
    """
    field = {}
    for conference, ranked in standings.conferences.items():
        field[conference] = ConferencePlayoffTeams(
            conference=conference,
            division_winners=[
                s.team_id for s in ranked if s.playoff_position == PlayoffPosition.DIVISION_LEADER
            ],
            wild_cards=[
                s.team_id for s in ranked if s.playoff_position == PlayoffPosition.WILDCARD
            ]
        )
    return field
