"""
Week Simulator - Simulates every remaining game of a single week.

Each game is delegated to a GameEngine. After the pass the standings are
recomputed over the entire completed schedule and the week's playoff
implications, injury report and headlines are derived from them.

A game whose team cannot be found is skipped and reported; the rest of the
week still simulates.
"""

import logging
from dataclasses import replace
from typing import Dict, Iterable, List, Optional

from config.season_rules import SeasonRules
from shared.league_models import Team, TeamRecord, ScheduledGame
from shared.game_result import GameConfig
from playoff_system.standings_calculator import StandingsCalculator
from playoff_system.implication_analyzer import PlayoffImplicationAnalyzer
from game_cycle.game_engine import GameEngine
from game_cycle.week_models import (
    HeadlineImportance,
    InjuryReportEntry,
    InjuryStatus,
    NewsHeadline,
    SimulatedGame,
    SkippedGame,
    WeekAdvancementResult,
    WeekResults,
    WeekSummary,
)

logger = logging.getLogger(__name__)


class WeekSimulator:
    """
    Orchestrates one week of games.

    Usage:
        simulator = WeekSimulator(InstantResultEngine(random.Random(7)))
        results = simulator.simulate_week(5, schedule, teams, user_team_id=3)
    """

    def __init__(self, engine: GameEngine, analyzer: Optional[PlayoffImplicationAnalyzer] = None):
        """
        Initialize the simulator.

        Args:
            engine: Game engine that plays individual games
            analyzer: Playoff implication analyzer (default uses SeasonRules)
        """
        self.engine = engine
        self.analyzer = analyzer or PlayoffImplicationAnalyzer()

    def simulate_week(
        self,
        week: int,
        schedule: List[ScheduledGame],
        teams: Dict[int, Team],
        user_team_id: Optional[int] = None,
        simulate_user_game: bool = False
    ) -> WeekResults:
        """
        Simulate all incomplete games scheduled for a week.

        Args:
            week: Week number to simulate
            schedule: Full season schedule (not modified)
            teams: Team registry keyed by team ID
            user_team_id: Team controlled by the player
            simulate_user_game: Also simulate the player's own game

        Returns:
            WeekResults with the updated schedule and derived reports
        """
        simulated: List[SimulatedGame] = []
        failures: List[SkippedGame] = []

        for game in get_week_games(schedule, week):
            if game.is_complete:
                continue

            if user_team_id is not None and game.involves(user_team_id) and not simulate_user_game:
                logger.debug(f"Leaving user game {game.game_id} for the player")
                continue

            missing = [tid for tid in (game.home_team_id, game.away_team_id) if tid not in teams]
            if missing:
                reason = f"Team not found: {', '.join(str(tid) for tid in missing)}"
                logger.warning(f"Skipping game {game.game_id}: {reason}")
                failures.append(SkippedGame(game_id=game.game_id, reason=reason))
                continue

            simulated.append(self._play(game, teams))

        updated_schedule = merge_results(schedule, [s.game for s in simulated])
        standings = StandingsCalculator(teams.values()).calculate(updated_schedule)
        implications = self.analyzer.analyze(standings, week)

        logger.info(
            f"Week {week} simulated: {len(simulated)} game(s), {len(failures)} skipped"
        )

        return WeekResults(
            week=week,
            games=simulated,
            schedule=updated_schedule,
            standings=standings,
            playoff_implications=implications,
            injury_report=generate_injury_report(simulated),
            news_headlines=generate_news_headlines(simulated, teams),
            failures=failures
        )

    def simulate_user_team_game(
        self,
        schedule: List[ScheduledGame],
        week: int,
        user_team_id: int,
        teams: Dict[int, Team]
    ) -> Optional[SimulatedGame]:
        """
        Simulate only the player's game for a week.

        Returns:
            The simulated game, or None on a bye or if already played
        """
        game = get_user_team_game(schedule, week, user_team_id)
        if game is None or game.is_complete:
            return None
        if game.home_team_id not in teams or game.away_team_id not in teams:
            logger.warning(f"Skipping user game {game.game_id}: team not found")
            return None
        return self._play(game, teams)

    def _play(self, game: ScheduledGame, teams: Dict[int, Team]) -> SimulatedGame:
        config = GameConfig(
            home_team_id=game.home_team_id,
            away_team_id=game.away_team_id,
            week=game.week,
            is_playoff=game.is_playoff
        )
        result = self.engine.play_game(config, teams)
        return SimulatedGame(game=game.complete(result.home_score, result.away_score), result=result)


def get_week_games(schedule: Iterable[ScheduledGame], week: int) -> List[ScheduledGame]:
    return [game for game in schedule if game.week == week]


def merge_results(
    schedule: List[ScheduledGame],
    completed: List[ScheduledGame]
) -> List[ScheduledGame]:
    """Return a new schedule with completed games swapped in by game_id."""
    by_id = {game.game_id: game for game in completed}
    return [by_id.get(game.game_id, game) for game in schedule]


def apply_results_to_teams(
    teams: Dict[int, Team],
    completed: Iterable[ScheduledGame]
) -> Dict[int, Team]:
    """
    Fold completed games into team records.

    Each game only touches its two teams, so the fold order does not change
    wins, losses, ties or points.
    """
    updated = dict(teams)
    for game in sorted(completed, key=lambda g: (g.week, g.game_id)):
        if not game.is_complete:
            continue
        for team_id, own, opp in (
            (game.home_team_id, game.home_score, game.away_score),
            (game.away_team_id, game.away_score, game.home_score),
        ):
            team = updated.get(team_id)
            if team is None:
                continue
            updated[team_id] = replace(team, record=team.record.apply_result(own, opp))
    return updated


def rebuild_team_records(
    teams: Dict[int, Team],
    schedule: Iterable[ScheduledGame]
) -> Dict[int, Team]:
    """Recompute every team's record from the completed regular season games."""
    reset = {team_id: replace(team, record=TeamRecord()) for team_id, team in teams.items()}
    return apply_results_to_teams(reset, [game for game in schedule if not game.is_playoff])


def generate_injury_report(games: Iterable[SimulatedGame]) -> List[InjuryReportEntry]:
    """Map each injury's weeks out to a game status designation."""
    report = []
    for simulated in games:
        for injury in simulated.result.injuries:
            report.append(InjuryReportEntry(
                player_id=injury.player_id,
                player_name=injury.player_name,
                team_id=injury.team_id,
                injury=injury.injury_type,
                status=InjuryStatus.from_weeks_out(injury.weeks_out),
                weeks_remaining=injury.weeks_out
            ))
    return report


def generate_news_headlines(
    games: Iterable[SimulatedGame],
    teams: Dict[int, Team],
    limit: int = SeasonRules.MAX_HEADLINES
) -> List[NewsHeadline]:
    """
    Build the week's headlines, most important first.

    A scoreless tie is not reported as a shutout.
    """
    headlines: List[NewsHeadline] = []

    for simulated in games:
        game = simulated.game
        home = teams.get(game.home_team_id)
        away = teams.get(game.away_team_id)
        if home is None or away is None:
            continue

        home_score = game.home_score
        away_score = game.away_score
        team_ids = [game.home_team_id, game.away_team_id]
        total = home_score + away_score
        margin = abs(home_score - away_score)
        winner, loser = (home, away) if home_score >= away_score else (away, home)

        if total >= SeasonRules.SHOOTOUT_TOTAL_POINTS:
            headlines.append(NewsHeadline(
                f"Shootout! {home.nickname} and {away.nickname} combine for {total} points",
                HeadlineImportance.MAJOR,
                team_ids
            ))

        if (home_score == 0 or away_score == 0) and total > 0:
            headlines.append(NewsHeadline(
                f"{winner.nickname} defense dominates, shuts out {loser.nickname}",
                HeadlineImportance.MAJOR,
                team_ids
            ))

        if margin <= SeasonRules.THRILLER_MAX_MARGIN and not game.is_tie:
            headlines.append(NewsHeadline(
                f"{winner.nickname} win thriller by {margin}",
                HeadlineImportance.NOTABLE,
                team_ids
            ))

        if margin >= SeasonRules.BLOWOUT_MIN_MARGIN:
            headlines.append(NewsHeadline(
                f"{winner.nickname} blow out {loser.nickname} "
                f"{max(home_score, away_score)}-{min(home_score, away_score)}",
                HeadlineImportance.NOTABLE,
                team_ids
            ))

    # sorted() is stable, so game order is kept within an importance level
    headlines = sorted(headlines, key=lambda h: h.importance.rank)
    return headlines[:limit]


def get_user_team_game(
    schedule: Iterable[ScheduledGame],
    week: int,
    user_team_id: int
) -> Optional[ScheduledGame]:
    """Get the player's game for a week, or None on a bye."""
    for game in get_week_games(schedule, week):
        if game.involves(user_team_id):
            return game
    return None


def is_user_on_bye(schedule: Iterable[ScheduledGame], week: int, user_team_id: int) -> bool:
    """A team is on bye in a regular season week in which it has no game."""
    if week > SeasonRules.REGULAR_SEASON_WEEKS:
        return False
    return get_user_team_game(schedule, week, user_team_id) is None


def get_week_summary(week_results: WeekResults) -> WeekSummary:
    """Count high-scoring games and lopsided results for a week."""
    upsets = 0
    high_scoring = 0

    for simulated in week_results.games:
        if simulated.result.total_score >= SeasonRules.HIGH_SCORING_TOTAL_POINTS:
            high_scoring += 1
        if simulated.result.margin >= SeasonRules.UPSET_MIN_MARGIN:
            upsets += 1

    return WeekSummary(
        total_games=len(week_results.games),
        upsets=upsets,
        high_scoring=high_scoring
    )


def advance_week(current_week: int, injuries: Dict[str, int]) -> WeekAdvancementResult:
    """
    Count injuries down by one week.

    Args:
        current_week: Week that just finished
        injuries: player_id -> weeks remaining

    Returns:
        WeekAdvancementResult with players who are healthy again
    """
    recovered = []
    remaining = {}
    for player_id, weeks in injuries.items():
        if weeks <= 0:
            continue
        if weeks - 1 == 0:
            recovered.append(player_id)
        else:
            remaining[player_id] = weeks - 1

    return WeekAdvancementResult(
        new_week=current_week + 1,
        recovered_players=recovered,
        injuries=remaining
    )
