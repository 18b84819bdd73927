"""
Playoff implication analyzer.

Derives clinch and elimination claims from a standings snapshot. Nothing is
carried over between weeks; every call starts from scratch.

Checks are gated by week so that early-season noise never produces a claim:
    - no implications before week 10
    - elimination from week 12
    - division clinch from week 14
    - wild card clinch from week 15
"""

import logging
from typing import List, Optional

from config.season_rules import SeasonRules
from playoff_system.standings_models import (
    ImplicationType,
    LeagueStandings,
    PlayoffImplication,
    TeamStanding,
)

logger = logging.getLogger(__name__)


def games_remaining(standing: TeamStanding) -> int:
    """Decisive games left for a team (17-game season)."""
    return SeasonRules.games_remaining(standing.games_played)


def max_possible_wins(standing: TeamStanding) -> int:
    return standing.wins + games_remaining(standing)


class PlayoffImplicationAnalyzer:
    """Evaluates clinch/elimination conditions for every team."""

    def __init__(self, rules=SeasonRules):
        self.rules = rules

    def analyze(self, standings: LeagueStandings, week: int) -> List[PlayoffImplication]:
        """
        Generate playoff implications for the given week.

        Args:
            standings: Freshly calculated standings
            week: Week that just finished

        Returns:
            Implications ordered by conference, division, then division rank
        """
        implications: List[PlayoffImplication] = []

        if week < self.rules.IMPLICATIONS_START_WEEK:
            return implications

        for division_key in sorted(standings.divisions):
            ranked = standings.divisions[division_key]
            for standing in ranked:
                clinched = self._check_division_clinch(standing, ranked, week)
                if clinched:
                    implications.append(clinched)

                wildcard = self._check_wildcard_clinch(standing, standings, week)
                if wildcard:
                    implications.append(wildcard)

                eliminated = self._check_elimination(standing, standings, week)
                if eliminated:
                    implications.append(eliminated)

        if implications:
            logger.info(f"Week {week}: {len(implications)} playoff implication(s)")
        return implications

    def _check_division_clinch(
        self,
        standing: TeamStanding,
        division: List[TeamStanding],
        week: int
    ) -> Optional[PlayoffImplication]:
        """Leader clinches once its win gap exceeds 2nd place's remaining games."""
        if week < self.rules.DIVISION_CLINCH_START_WEEK or standing.division_rank != 1:
            return None
        if len(division) < 2:
            return None

        second = division[1]
        gap = standing.wins - second.wins
        if gap > games_remaining(second):
            return PlayoffImplication(
                team_id=standing.team_id,
                implication=ImplicationType.CLINCHED_DIVISION,
                description=(
                    f"Clinched {standing.conference.upper()} {standing.division} division title"
                )
            )
        return None

    def _check_wildcard_clinch(
        self,
        standing: TeamStanding,
        standings: LeagueStandings,
        week: int
    ) -> Optional[PlayoffImplication]:
        """A non-leader in the top 7 clinches once it out-wins the 8th team's ceiling."""
        if week < self.rules.WILDCARD_CLINCH_START_WEEK:
            return None
        if standing.division_rank == 1:
            return None
        if standing.conference_rank > self.rules.PLAYOFF_SEEDS_PER_CONFERENCE:
            return None

        first_out = standings.get_team_at_conference_rank(
            standing.conference, self.rules.PLAYOFF_SEEDS_PER_CONFERENCE + 1
        )
        if first_out is None:
            return None

        if standing.wins > max_possible_wins(first_out):
            return PlayoffImplication(
                team_id=standing.team_id,
                implication=ImplicationType.CLINCHED_PLAYOFF,
                description=f"Clinched {standing.conference.upper()} wild card berth"
            )
        return None

    def _check_elimination(
        self,
        standing: TeamStanding,
        standings: LeagueStandings,
        week: int
    ) -> Optional[PlayoffImplication]:
        """A team outside the top 7 is out once its ceiling is below the 7th team's wins."""
        if week < self.rules.ELIMINATION_START_WEEK:
            return None
        if standing.conference_rank <= self.rules.PLAYOFF_SEEDS_PER_CONFERENCE:
            return None

        last_in = standings.get_team_at_conference_rank(
            standing.conference, self.rules.PLAYOFF_SEEDS_PER_CONFERENCE
        )
        if last_in is None:
            return None

        if max_possible_wins(standing) < last_in.wins:
            return PlayoffImplication(
                team_id=standing.team_id,
                implication=ImplicationType.ELIMINATED,
                description="Eliminated from playoff contention"
            )
        return None


def generate_playoff_implications(standings: LeagueStandings, week: int) -> List[PlayoffImplication]:
    """Convenience wrapper around PlayoffImplicationAnalyzer.analyze."""
    return PlayoffImplicationAnalyzer().analyze(standings, week)
