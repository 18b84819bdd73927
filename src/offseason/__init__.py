"""
Offseason Phase/Task Module

Gates the twelve offseason phases between the playoffs and the next
preseason:
- Season End, Coaching Decisions, Contract Management, Combine
- Free Agency, Draft, UDFA, OTAs, Training Camp
- Preseason, Final Cuts, Season Start

Main Components:
- OffseasonPhase: Enum defining the fixed phase order
- PHASE_TASKS / PHASE_GATES: Declarative task and validation table
- OffSeasonState: Immutable progress value
- offseason_manager functions: complete tasks, advance phases, record moves
"""

from offseason.offseason_phases import OffseasonPhase
from offseason.offseason_tasks import (
    TaskActionType,
    CompletionCondition,
    OffseasonContext,
    OffseasonTask,
    PHASE_TASKS,
    PHASE_GATES,
    get_phase_tasks,
    check_task_condition,
    check_phase_gate,
)
from offseason.offseason_manager import (
    OffSeasonState,
    OffseasonEvent,
    OffseasonProgress,
    OffseasonSummary,
    PhaseTaskStatus,
    PlayerSigning,
    PlayerRelease,
    RosterChange,
    create_offseason_state,
    complete_task,
    can_advance,
    get_advance_refusal,
    advance_phase,
    advance_day,
    get_progress,
    auto_complete_phase,
    simulate_remaining_offseason,
    reset_phase,
    record_signing,
    record_release,
    record_roster_change,
    get_summary,
    validate_offseason_state,
)

__all__ = [
    'OffseasonPhase',
    'TaskActionType',
    'CompletionCondition',
    'OffseasonContext',
    'OffseasonTask',
    'PHASE_TASKS',
    'PHASE_GATES',
    'get_phase_tasks',
    'check_task_condition',
    'check_phase_gate',
    'OffSeasonState',
    'OffseasonEvent',
    'OffseasonProgress',
    'OffseasonSummary',
    'PhaseTaskStatus',
    'PlayerSigning',
    'PlayerRelease',
    'RosterChange',
    'create_offseason_state',
    'complete_task',
    'can_advance',
    'get_advance_refusal',
    'advance_phase',
    'advance_day',
    'get_progress',
    'auto_complete_phase',
    'simulate_remaining_offseason',
    'reset_phase',
    'record_signing',
    'record_release',
    'record_roster_change',
    'get_summary',
    'validate_offseason_state',
]
