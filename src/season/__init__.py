"""
Season Management System

Calendar, league-state snapshot and the phase controller that advances the
league one week (or one offseason phase) at a time.
"""

from .season_calendar import (
    SeasonPhase,
    SeasonCalendar,
    create_default_calendar,
    validate_calendar,
    get_calendar_issues,
    get_phase_description,
    is_regular_season,
    is_offseason,
    advance_week,
    set_offseason_phase,
    start_next_season,
)
from .league_state import GMContract, LeagueState
from .phase_controller import (
    Continue,
    Fired,
    TransitionResult,
    PhaseController,
    summarize_season,
    close_season_context,
    resolve_firing,
    complete_offseason_task,
)
from .season_exceptions import (
    SeasonException,
    InvalidPhaseTransitionException,
    UnresolvedFiringException,
    InvalidSeasonStateException,
)

__all__ = [
    'SeasonPhase',
    'SeasonCalendar',
    'create_default_calendar',
    'validate_calendar',
    'get_calendar_issues',
    'get_phase_description',
    'is_regular_season',
    'is_offseason',
    'advance_week',
    'set_offseason_phase',
    'start_next_season',
    'GMContract',
    'LeagueState',
    'Continue',
    'Fired',
    'TransitionResult',
    'PhaseController',
    'summarize_season',
    'close_season_context',
    'resolve_firing',
    'complete_offseason_task',
    'SeasonException',
    'InvalidPhaseTransitionException',
    'UnresolvedFiringException',
    'InvalidSeasonStateException',
]
