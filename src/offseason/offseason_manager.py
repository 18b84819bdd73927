"""
Offseason Manager

State-passing operations over OffSeasonState. Every function takes a state
and returns a new one; nothing is mutated in place.

Refused actions (advancing before required tasks or validations pass) are
reported as a plain refusal string rather than an exception so the caller
can show it to the user. A refused action never changes the state.

Usage:
    state = create_offseason_state(2025)
    state = complete_task(state, 'view_recap')
    result = advance_phase(state)
    if isinstance(result, str):
        show(result)
"""

import logging
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional, Tuple, Union

from config.season_rules import SeasonRules
from offseason.offseason_phases import OffseasonPhase
from offseason.offseason_tasks import (
    OffseasonContext,
    OffseasonTask,
    TaskActionType,
    check_phase_gate,
    check_task_condition,
    get_phase_tasks,
)

logger = logging.getLogger(__name__)


EVENT_TYPES = (
    'phase_start',
    'phase_complete',
    'task_complete',
    'signing',
    'release',
    'roster_change',
)

SIGNING_TYPES = ('free_agent', 'udfa', 'extension', 'restructure')
RELEASE_TYPES = ('cut', 'waived', 'released', 'buyout')
ROSTER_CHANGE_TYPES = ('signing', 'release', 'trade', 'draft', 'waiver', 'ir')

KEY_EVENT_TYPES = ('signing', 'release', 'roster_change')
SUMMARY_EVENT_LIMIT = 10


# ==================== Records ====================

@dataclass(frozen=True)
class OffseasonEvent:
    event_id: str
    phase: OffseasonPhase
    event_type: str
    description: str
    details: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'event_id': self.event_id,
            'phase': self.phase.value,
            'event_type': self.event_type,
            'description': self.description,
            'details': dict(self.details),
        }


@dataclass(frozen=True)
class PlayerSigning:
    player_id: str
    player_name: str
    position: str
    team_id: int
    contract_years: int
    contract_value: int
    signing_type: str = 'free_agent'

    def __post_init__(self):
        if self.signing_type not in SIGNING_TYPES:
            raise ValueError(f"Unknown signing type '{self.signing_type}'")
        if self.contract_years < 0 or self.contract_value < 0:
            raise ValueError("Contract years and value must be non-negative")


@dataclass(frozen=True)
class PlayerRelease:
    player_id: str
    player_name: str
    position: str
    team_id: int
    release_type: str = 'cut'
    cap_savings: int = 0
    dead_cap: int = 0

    def __post_init__(self):
        if self.release_type not in RELEASE_TYPES:
            raise ValueError(f"Unknown release type '{self.release_type}'")


@dataclass(frozen=True)
class RosterChange:
    change_id: str
    change_type: str
    player_id: str
    player_name: str
    position: str
    team_id: int
    phase: OffseasonPhase

    def __post_init__(self):
        if self.change_type not in ROSTER_CHANGE_TYPES:
            raise ValueError(f"Unknown roster change type '{self.change_type}'")


@dataclass(frozen=True)
class PhaseTaskStatus:
    """Task list for one phase plus the ids completed so far, in completion order."""
    phase: OffseasonPhase
    tasks: Tuple[OffseasonTask, ...]
    tasks_completed: Tuple[str, ...] = ()

    @property
    def required_complete(self) -> bool:
        return all(task.is_complete for task in self.tasks if task.is_required)

    @property
    def optional_complete(self) -> bool:
        return all(task.is_complete for task in self.tasks if not task.is_required)

    def get_task(self, task_id: str) -> Optional[OffseasonTask]:
        for task in self.tasks:
            if task.task_id == task_id:
                return task
        return None


def _fresh_task_status(phase: OffseasonPhase) -> PhaseTaskStatus:
    return PhaseTaskStatus(phase=phase, tasks=get_phase_tasks(phase))


@dataclass(frozen=True)
class OffSeasonState:
    """
    Progress through the offseason.

    Created when the calendar enters the offseason and discarded when the
    next preseason begins.
    """
    year: int
    current_phase: OffseasonPhase = OffseasonPhase.SEASON_END
    phase_day: int = 1
    phase_tasks: Dict[OffseasonPhase, PhaseTaskStatus] = field(default_factory=dict)
    completed_phases: Tuple[OffseasonPhase, ...] = ()
    events: Tuple[OffseasonEvent, ...] = ()
    is_complete: bool = False
    signings: Tuple[PlayerSigning, ...] = ()
    releases: Tuple[PlayerRelease, ...] = ()
    roster_changes: Tuple[RosterChange, ...] = ()

    @property
    def current_tasks(self) -> PhaseTaskStatus:
        return self.phase_tasks.get(self.current_phase) or _fresh_task_status(self.current_phase)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'year': self.year,
            'current_phase': self.current_phase.value,
            'current_phase_number': self.current_phase.phase_number,
            'phase_day': self.phase_day,
            'phase_tasks': {
                phase.value: {
                    'required_complete': status.required_complete,
                    'optional_complete': status.optional_complete,
                    'tasks': [task.to_dict() for task in status.tasks],
                    'tasks_completed': list(status.tasks_completed),
                }
                for phase, status in self.phase_tasks.items()
            },
            'completed_phases': [phase.value for phase in self.completed_phases],
            'events': [event.to_dict() for event in self.events],
            'is_complete': self.is_complete,
            'signings': len(self.signings),
            'releases': len(self.releases),
            'roster_changes': len(self.roster_changes),
        }


@dataclass(frozen=True)
class OffseasonProgress:
    current_phase: OffseasonPhase
    current_phase_number: int
    current_phase_name: str
    phase_day: int
    completed_phases: int
    total_phases: int
    percent_complete: int
    required_tasks_complete: bool
    all_tasks_complete: bool
    can_advance: bool
    is_complete: bool


@dataclass(frozen=True)
class OffseasonSummary:
    year: int
    phases_completed: int
    total_signings: int
    total_releases: int
    total_roster_moves: int
    key_events: List[OffseasonEvent]


# ==================== Creation ====================

def create_offseason_state(year: int) -> OffSeasonState:
    """New offseason at phase 1, day 1, with the first phase started."""
    if not SeasonRules.MIN_YEAR <= year <= SeasonRules.MAX_YEAR:
        raise ValueError(
            f"Offseason year must be {SeasonRules.MIN_YEAR}-{SeasonRules.MAX_YEAR}, got {year}"
        )

    state = OffSeasonState(
        year=year,
        phase_tasks={phase: _fresh_task_status(phase) for phase in OffseasonPhase.ordered()}
    )
    logger.info(f"Offseason {year} started at {state.current_phase}")
    return _start_phase(state)


# ==================== Queries ====================

def get_current_phase_tasks(state: OffSeasonState) -> Tuple[OffseasonTask, ...]:
    return state.current_tasks.tasks


def get_required_tasks(state: OffSeasonState) -> List[OffseasonTask]:
    return [task for task in get_current_phase_tasks(state) if task.is_required]


def get_optional_tasks(state: OffSeasonState) -> List[OffseasonTask]:
    return [task for task in get_current_phase_tasks(state) if not task.is_required]


def are_required_tasks_complete(state: OffSeasonState) -> bool:
    return state.current_tasks.required_complete


def are_all_tasks_complete(state: OffSeasonState) -> bool:
    return all(task.is_complete for task in get_current_phase_tasks(state))


def get_next_phase(state: OffSeasonState) -> Optional[OffseasonPhase]:
    return state.current_phase.next_phase


def get_recent_events(state: OffSeasonState, limit: int = 20) -> List[OffseasonEvent]:
    """Most recent events first."""
    return list(reversed(state.events[-limit:])) if limit > 0 else []


def get_phase_events(state: OffSeasonState, phase: OffseasonPhase) -> List[OffseasonEvent]:
    return [event for event in state.events if event.phase == phase]


def _effective_context(state: OffSeasonState,
                       context: Optional[OffseasonContext]) -> OffseasonContext:
    context = context or OffseasonContext()
    if state.signings and not context.has_signed:
        context = replace(context, has_signed=True)
    return context


def get_advance_refusal(state: OffSeasonState,
                        context: Optional[OffseasonContext] = None) -> Optional[str]:
    """
    Explain why the current phase cannot be left.

    Returns:
        None if advancing is allowed, otherwise a user-facing refusal message
    """
    if state.is_complete:
        return "The offseason is already complete"

    pending = [task.name for task in get_required_tasks(state) if not task.is_complete]
    if pending:
        return (
            f"Cannot leave {state.current_phase}: required tasks incomplete "
            f"({', '.join(pending)})"
        )

    gate_failure = check_phase_gate(state.current_phase, _effective_context(state, context))
    if gate_failure:
        return f"Cannot leave {state.current_phase}: {gate_failure}"

    return None


def can_advance(state: OffSeasonState, context: Optional[OffseasonContext] = None) -> bool:
    """True when every required task is done and the phase gate passes."""
    return get_advance_refusal(state, context) is None


def get_progress(state: OffSeasonState,
                 context: Optional[OffseasonContext] = None) -> OffseasonProgress:
    total = len(OffseasonPhase.ordered())
    completed = len(state.completed_phases)
    return OffseasonProgress(
        current_phase=state.current_phase,
        current_phase_number=state.current_phase.phase_number,
        current_phase_name=str(state.current_phase),
        phase_day=state.phase_day,
        completed_phases=completed,
        total_phases=total,
        percent_complete=int(completed * 100 / total + 0.5),
        required_tasks_complete=are_required_tasks_complete(state),
        all_tasks_complete=are_all_tasks_complete(state),
        can_advance=can_advance(state, context),
        is_complete=state.is_complete
    )


def get_summary(state: OffSeasonState) -> OffseasonSummary:
    key_events = [event for event in state.events if event.event_type in KEY_EVENT_TYPES]
    return OffseasonSummary(
        year=state.year,
        phases_completed=len(state.completed_phases),
        total_signings=len(state.signings),
        total_releases=len(state.releases),
        total_roster_moves=len(state.roster_changes),
        key_events=key_events[-SUMMARY_EVENT_LIMIT:]
    )


def validate_offseason_state(state: OffSeasonState) -> bool:
    """Structural check used before a persisted state is resumed."""
    if not SeasonRules.MIN_YEAR <= state.year <= SeasonRules.MAX_YEAR:
        return False
    if not isinstance(state.current_phase, OffseasonPhase):
        return False
    if state.phase_day < 1:
        return False
    if set(state.phase_tasks) != set(OffseasonPhase.ordered()):
        return False
    if any(event.event_type not in EVENT_TYPES for event in state.events):
        return False

    current_number = state.current_phase.phase_number
    for phase in state.completed_phases:
        if phase.phase_number > current_number:
            return False
        if phase == state.current_phase and not state.is_complete:
            return False

    return True


# ==================== Transitions ====================

def _add_event(state: OffSeasonState, event_type: str, description: str,
               details: Optional[Dict[str, Any]] = None,
               phase: Optional[OffseasonPhase] = None) -> OffSeasonState:
    event = OffseasonEvent(
        event_id=f"event-{state.year}-{len(state.events) + 1}",
        phase=phase or state.current_phase,
        event_type=event_type,
        description=description,
        details=details or {}
    )
    return replace(state, events=state.events + (event,))


def complete_task(state: OffSeasonState, task_id: str,
                  context: Optional[OffseasonContext] = None) -> OffSeasonState:
    """
    Mark a task in the current phase complete.

    Unknown or already-complete tasks leave the state unchanged, as does a
    task whose completion condition does not hold yet.
    """
    status = state.current_tasks
    task = status.get_task(task_id)
    if task is None:
        logger.debug(f"Task '{task_id}' is not part of {state.current_phase}")
        return state
    if task.is_complete:
        return state

    refusal = check_task_condition(task, _effective_context(state, context))
    if refusal:
        logger.info(f"Task '{task_id}' not completed: {refusal}")
        return state

    updated_status = replace(
        status,
        tasks=tuple(replace(t, is_complete=True) if t.task_id == task_id else t
                    for t in status.tasks),
        tasks_completed=status.tasks_completed + (task_id,)
    )
    phase_tasks = dict(state.phase_tasks)
    phase_tasks[state.current_phase] = updated_status

    new_state = replace(state, phase_tasks=phase_tasks)
    return _add_event(
        new_state, 'task_complete', f"Completed: {task.name}",
        {'task_id': task_id, 'task_name': task.name}
    )


def _start_phase(state: OffSeasonState) -> OffSeasonState:
    """Log the current phase's start and complete its AUTO tasks."""
    state = _add_event(
        state, 'phase_start', f"{state.current_phase} phase begins",
        {'phase': state.current_phase.value}
    )
    for task in get_current_phase_tasks(state):
        if task.action_type == TaskActionType.AUTO and not task.is_complete:
            state = complete_task(state, task.task_id)
    return state


def advance_phase(state: OffSeasonState,
                  context: Optional[OffseasonContext] = None) -> Union[OffSeasonState, str]:
    """
    Move to the next phase, or finish the offseason from the last one.

    Returns:
        The new state, or a refusal string when the phase cannot be left
    """
    refusal = get_advance_refusal(state, context)
    if refusal:
        logger.info(f"Offseason advance refused: {refusal}")
        return refusal

    finished = state.current_phase
    next_phase = get_next_phase(state)
    completed = state.completed_phases + (finished,)

    if next_phase is None:
        logger.info(f"Offseason {state.year} complete")
        new_state = replace(state, completed_phases=completed, is_complete=True)
        return _add_event(
            new_state, 'phase_complete', "Offseason complete! Ready for the new season.",
            {'final_phase': finished.value}
        )

    logger.info(f"Offseason phase {finished} -> {next_phase}")
    new_state = replace(state, current_phase=next_phase, phase_day=1, completed_phases=completed)
    new_state = _add_event(
        new_state, 'phase_complete', f"{finished} phase complete",
        {'phase': finished.value}, phase=finished
    )
    return _start_phase(new_state)


def advance_day(state: OffSeasonState) -> OffSeasonState:
    return replace(state, phase_day=state.phase_day + 1)


def auto_complete_phase(state: OffSeasonState,
                        context: Optional[OffseasonContext] = None) -> OffSeasonState:
    """Complete every required task of the current phase whose condition holds."""
    context = context or OffseasonContext.simulated()
    for task in get_required_tasks(state):
        if not task.is_complete:
            state = complete_task(state, task.task_id, context)
    return state


def simulate_remaining_offseason(state: OffSeasonState,
                                 context: Optional[OffseasonContext] = None) -> OffSeasonState:
    """
    Run the rest of the offseason without user input.

    Stops early (returning the last reachable state) if a phase cannot be
    left even after its required tasks are auto-completed.
    """
    context = context or OffseasonContext.simulated()

    while not state.is_complete:
        state = auto_complete_phase(state, context)
        result = advance_phase(state, context)
        if isinstance(result, str):
            logger.warning(f"Offseason simulation stopped at {state.current_phase}: {result}")
            break
        state = result

    return state


def reset_phase(state: OffSeasonState, phase: OffseasonPhase) -> OffSeasonState:
    """
    Restore a phase's tasks to incomplete and drop it from the completed list.

    AUTO tasks of the current phase are completed again straight away.
    """
    phase_tasks = dict(state.phase_tasks)
    phase_tasks[phase] = _fresh_task_status(phase)
    new_state = replace(
        state,
        phase_tasks=phase_tasks,
        completed_phases=tuple(p for p in state.completed_phases if p != phase),
        is_complete=False
    )
    if phase != state.current_phase:
        return new_state
    for task in get_current_phase_tasks(new_state):
        if task.action_type == TaskActionType.AUTO:
            new_state = complete_task(new_state, task.task_id)
    return new_state


def record_signing(state: OffSeasonState, signing: PlayerSigning) -> OffSeasonState:
    new_state = replace(state, signings=state.signings + (signing,))
    return _add_event(
        new_state, 'signing', f"Signed {signing.player_name} ({signing.position})",
        {'player_id': signing.player_id, 'signing_type': signing.signing_type,
         'contract_years': signing.contract_years, 'contract_value': signing.contract_value}
    )


def record_release(state: OffSeasonState, release: PlayerRelease) -> OffSeasonState:
    new_state = replace(state, releases=state.releases + (release,))
    return _add_event(
        new_state, 'release', f"Released {release.player_name} ({release.position})",
        {'player_id': release.player_id, 'release_type': release.release_type,
         'cap_savings': release.cap_savings, 'dead_cap': release.dead_cap}
    )


def record_roster_change(state: OffSeasonState, change_type: str, player_id: str,
                         player_name: str, position: str, team_id: int) -> OffSeasonState:
    change = RosterChange(
        change_id=f"roster-{state.year}-{len(state.roster_changes) + 1}",
        change_type=change_type,
        player_id=player_id,
        player_name=player_name,
        position=position,
        team_id=team_id,
        phase=state.current_phase
    )
    new_state = replace(state, roster_changes=state.roster_changes + (change,))
    return _add_event(
        new_state, 'roster_change', f"{change_type}: {player_name}",
        {'change_id': change.change_id, 'player_id': player_id}
    )
