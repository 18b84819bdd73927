"""
Phase Controller

Drives one "advance" of the league: simulate the current week, rebuild team
records from the completed schedule, update the owner's patience, evaluate
the firing rules and move the calendar. Entering each playoff week schedules
that round from the standings and earlier playoff results. During the
offseason an advance moves one offseason phase instead, and only when the
task manager allows it.

With simulate_user_game=False the player's own game must be completed in
state.schedule before the week can be advanced.

Every advance returns either:
- Continue(state, week_results, refusal): the new league state. When an
  advance is refused, `refusal` explains why and `state` is the
  unchanged input.
- Fired(state, record, week_results): the GM was fired. `state` is the
  pre-transition state with the firing record attached; the caller must
  call resolve_firing before advancing again.

Nothing is partially applied: a Fired result carries none of the week's
patience, record or calendar changes.
"""

import logging
import random
from dataclasses import dataclass, replace
from typing import Callable, Dict, List, Optional, Tuple, Union

from config.season_rules import SeasonRules
from career.firing_mechanics import create_firing_record, should_fire
from career.firing_models import FiringContext, FiringRecord
from career.patience_meter import process_week_end, start_new_season
from career.tenure import SeasonResult, TenureStats, update_tenure_stats
from game_cycle.week_models import WeekResults
from game_cycle.week_simulator import WeekSimulator, get_user_team_game, rebuild_team_records
from offseason.offseason_manager import advance_phase, complete_task, create_offseason_state
from playoff_system.playoff_manager import PlayoffManager
from playoff_system.standings_calculator import calculate_standings
from season.league_state import GMContract, LeagueState
from season.season_calendar import (
    SeasonPhase,
    advance_week,
    get_phase_description,
    is_offseason,
    set_offseason_phase,
    start_next_season,
)
from season.season_exceptions import InvalidSeasonStateException, UnresolvedFiringException
from shared.league_models import ScheduledGame, Team, TeamRecord

logger = logging.getLogger(__name__)

RECENT_PATIENCE_WEEKS = 8

ScheduleBuilder = Callable[[int, Dict[int, Team]], List[ScheduledGame]]


@dataclass(frozen=True)
class Continue:
    state: LeagueState
    week_results: Optional[WeekResults] = None
    refusal: Optional[str] = None

    @property
    def fired(self) -> bool:
        return False

    @property
    def advanced(self) -> bool:
        return self.refusal is None


@dataclass(frozen=True)
class Fired:
    state: LeagueState
    record: FiringRecord
    week_results: Optional[WeekResults] = None

    @property
    def fired(self) -> bool:
        return True


TransitionResult = Union[Continue, Fired]


class PhaseController:
    """
    Advances a LeagueState through the season cycle.

    Usage:
        controller = PhaseController(WeekSimulator(engine), rng=random.Random(11))
        result = controller.advance(state)
        if result.fired:
            show_firing(result.record.public_summary())
    """

    def __init__(
        self,
        simulator: WeekSimulator,
        rng: Optional[random.Random] = None,
        simulate_user_game: bool = True,
        schedule_builder: Optional[ScheduleBuilder] = None
    ):
        """
        Initialize the controller.

        Args:
            simulator: Week simulation orchestrator
            rng: Random source for firing flavor and the housecleaning check
            simulate_user_game: Simulate the player's own game during advances
            schedule_builder: Produces the next season's schedule; None leaves it empty
        """
        self.simulator = simulator
        self.rng = rng or random.Random()
        self.simulate_user_game = simulate_user_game
        self.schedule_builder = schedule_builder

    def advance(self, state: LeagueState) -> TransitionResult:
        """
        Perform one advance.

        Raises:
            UnresolvedFiringException: If a previous firing has not been resolved
        """
        if state.pending_firing is not None:
            raise UnresolvedFiringException(
                state.gm_contract.gm_id,
                season_context={
                    'year': state.calendar.current_year,
                    'phase': state.calendar.current_phase.value,
                    'week': state.calendar.current_week,
                }
            )

        calendar = state.calendar
        logger.debug(f"Advancing from {get_phase_description(calendar)} {calendar.current_year}")

        if is_offseason(calendar):
            return self._advance_offseason(state)

        if calendar.current_phase == SeasonPhase.PRESEASON:
            return Continue(replace(state, calendar=advance_week(calendar)))

        return self._advance_game_week(state)

    # ==================== Game weeks ====================

    def _advance_game_week(self, state: LeagueState) -> TransitionResult:
        calendar = state.calendar
        week = calendar.current_week

        if not self.simulate_user_game:
            user_game = get_user_team_game(state.schedule, week, state.user_team_id)
            if (
                user_game is not None
                and not user_game.is_complete
                and user_game.opponent_of(state.user_team_id) in state.teams
            ):
                refusal = f"Play game {user_game.game_id} before advancing past week {week}"
                logger.info(f"Advance refused: {refusal}")
                return Continue(state, refusal=refusal)

        results = self.simulator.simulate_week(
            week,
            list(state.schedule),
            state.teams,
            user_team_id=state.user_team_id,
            simulate_user_game=self.simulate_user_game
        )

        teams = rebuild_team_records(state.teams, results.schedule)

        patience = process_week_end(
            state.patience,
            state.user_owner,
            teams[state.user_team_id].record,
            week,
            calendar.current_year
        )
        history = state.firing_context.recent_patience_history + (patience.current_value,)
        context = replace(
            state.firing_context,
            recent_patience_history=history[-RECENT_PATIENCE_WEEKS:]
        )
        tenure = state.tenure

        season_over = (
            calendar.current_phase == SeasonPhase.PLAYOFFS
            and week >= SeasonRules.PLAYOFF_LAST_WEEK
        )
        if season_over:
            season_result = summarize_season(results.schedule, teams, state.user_team_id)
            tenure = update_tenure_stats(tenure, season_result)
            context = close_season_context(context, season_result)

        decision = should_fire(
            patience, context, state.user_owner, self.rng,
            include_season_end_rules=season_over
        )
        if decision.should_fire:
            record = create_firing_record(
                gm_id=state.gm_contract.gm_id,
                team_id=state.user_team_id,
                owner=state.user_owner,
                season=calendar.current_year,
                week=week,
                tenure=tenure,
                patience_state=patience,
                context=context,
                contract_years_remaining=state.gm_contract.years_remaining,
                annual_salary=state.gm_contract.annual_salary,
                rng=self.rng,
                gm_name=state.gm_contract.gm_name
            )
            return Fired(replace(state, pending_firing=record), record, results)

        new_calendar = advance_week(calendar)
        offseason = state.offseason
        if is_offseason(new_calendar) and offseason is None:
            offseason = create_offseason_state(calendar.current_year)

        schedule = tuple(results.schedule)
        if new_calendar.current_phase == SeasonPhase.PLAYOFFS:
            schedule += self._schedule_playoff_round(schedule, teams, new_calendar.current_week)

        new_state = replace(
            state,
            calendar=new_calendar,
            teams=teams,
            schedule=schedule,
            patience=patience,
            firing_context=context,
            tenure=tenure,
            offseason=offseason
        )
        return Continue(new_state, results)

    def _schedule_playoff_round(
        self,
        schedule: Tuple[ScheduledGame, ...],
        teams: Dict[int, Team],
        week: int
    ) -> Tuple[ScheduledGame, ...]:
        """Games for the coming playoff week, unless the schedule already has them."""
        if any(game.week == week for game in schedule):
            return ()

        games = PlayoffManager(teams.values()).generate_round(list(schedule), week)
        logger.info(f"{SeasonRules.PLAYOFF_ROUND_NAMES[week]}: {len(games)} game(s) scheduled")
        return tuple(games)

    # ==================== Offseason ====================

    def _advance_offseason(self, state: LeagueState) -> Continue:
        offseason = state.offseason or create_offseason_state(state.calendar.current_year)

        result = advance_phase(offseason, state.offseason_context)
        if isinstance(result, str):
            return Continue(state, refusal=result)

        if result.is_complete:
            return Continue(self._start_next_season(state))

        calendar = set_offseason_phase(state.calendar, result.current_phase)
        return Continue(replace(state, calendar=calendar, offseason=result))

    def _start_next_season(self, state: LeagueState) -> LeagueState:
        calendar = start_next_season(state.calendar)
        teams = {
            team_id: replace(team, record=TeamRecord())
            for team_id, team in state.teams.items()
        }

        schedule = ()
        if self.schedule_builder is not None:
            schedule = tuple(self.schedule_builder(calendar.current_year, teams))

        contract = state.gm_contract
        logger.info(
            f"Season {calendar.current_year} begins; {len(schedule)} game(s) scheduled"
        )

        return replace(
            state,
            calendar=calendar,
            teams=teams,
            schedule=schedule,
            patience=start_new_season(state.patience) if state.patience else None,
            firing_context=replace(state.firing_context, ownership_just_changed=False),
            offseason=None,
            gm_contract=replace(contract, years_remaining=max(0, contract.years_remaining - 1))
        )


# ==================== Season bookkeeping ====================

def summarize_season(
    schedule: List[ScheduledGame],
    teams: Dict[int, Team],
    team_id: int
) -> SeasonResult:
    """Season outcome for one team, for tenure bookkeeping."""
    record = teams[team_id].record
    playoff_games = [
        game for game in schedule
        if game.is_playoff and game.is_complete and game.involves(team_id)
    ]
    final = [game for game in playoff_games if game.week == SeasonRules.PLAYOFF_LAST_WEEK]

    standing = calculate_standings(schedule, teams.values()).get_team_standing(team_id)

    return SeasonResult(
        wins=record.wins,
        losses=record.losses,
        made_playoffs=bool(playoff_games),
        won_division=standing is not None and standing.division_rank == 1,
        won_conference=bool(final),
        won_super_bowl=any(game.winner_id == team_id for game in final),
        made_super_bowl=bool(final)
    )


def close_season_context(context: FiringContext, season: SeasonResult) -> FiringContext:
    """Roll the losing-season and missed-playoff counters forward one season."""
    losing = season.losses > season.wins
    return replace(
        context,
        consecutive_losing_seasons=context.consecutive_losing_seasons + 1 if losing else 0,
        missed_playoffs_count=context.missed_playoffs_count + (0 if season.made_playoffs else 1)
    )


# ==================== Caller helpers ====================

def resolve_firing(
    state: LeagueState,
    new_contract: GMContract,
    new_gm_tenure: Optional[TenureStats] = None
) -> LeagueState:
    """
    Clear a pending firing once a new hire has been made.

    Tenure, patience and firing context restart for the new job.

    Raises:
        InvalidSeasonStateException: If no firing is pending
    """
    if state.pending_firing is None:
        raise InvalidSeasonStateException(
            "No pending firing to resolve",
            issues=["pending_firing is None"],
            operation="resolve_firing"
        )

    logger.info(
        f"Firing of GM {state.pending_firing.gm_id} resolved; "
        f"GM {new_contract.gm_id} hired by team {new_contract.team_id}"
    )
    return replace(
        state,
        gm_contract=new_contract,
        tenure=new_gm_tenure or TenureStats(),
        patience=None,
        firing_context=FiringContext(),
        pending_firing=None
    )


def complete_offseason_task(state: LeagueState, task_id: str) -> LeagueState:
    """
    Mark an offseason task complete using the state's offseason context.

    Raises:
        InvalidSeasonStateException: If the league is not in the offseason
    """
    if state.offseason is None:
        raise InvalidSeasonStateException(
            f"Cannot complete task '{task_id}' outside the offseason",
            issues=["offseason state is None"],
            operation="complete_offseason_task"
        )
    return state.with_offseason(complete_task(state.offseason, task_id, state.offseason_context))
