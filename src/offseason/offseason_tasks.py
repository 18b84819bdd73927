"""
Offseason Task Table

Declarative definition of every offseason phase's task list and the
external checks that gate leaving a phase. Adding or reordering work is a
change to PHASE_TASKS / PHASE_GATES, not to the manager's control flow.

Action types:
    VIEW      - done when the target screen is visited
    NAVIGATE  - done after the user finishes a sub-flow
    VALIDATE  - done only when an external predicate holds (e.g. roster size)
    AUTO      - done without any user action
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Optional, Tuple

from config.season_rules import SeasonRules
from offseason.offseason_phases import OffseasonPhase


class TaskActionType(Enum):
    VIEW = "view"
    NAVIGATE = "navigate"
    VALIDATE = "validate"
    AUTO = "auto"


class CompletionCondition(Enum):
    """What must be true before a task may be marked complete."""
    VISITED = "visited"
    DRAFT_COMPLETE = "draft_complete"
    ROSTER_AT_LIMIT = "roster_size<=53"
    HAS_SIGNED = "has_signed"
    OPTIONAL = "optional"


@dataclass(frozen=True)
class OffseasonContext:
    """
    Facts supplied by the caller for validate-style checks.

    Attributes:
        active_roster_size: User team's active roster count, None if unknown
        draft_complete: All of the user team's draft picks have been made
        has_signed: The user team signed at least one player this offseason
    """
    active_roster_size: Optional[int] = None
    draft_complete: bool = False
    has_signed: bool = False

    @classmethod
    def simulated(cls) -> 'OffseasonContext':
        """Context for an AI-run offseason: every external check is satisfied."""
        return cls(
            active_roster_size=SeasonRules.ACTIVE_ROSTER_LIMIT,
            draft_complete=True,
            has_signed=True
        )


@dataclass(frozen=True)
class OffseasonTask:
    """One unit of offseason work. Instances are immutable; completion returns a copy."""
    task_id: str
    name: str
    description: str
    is_required: bool
    action_type: TaskActionType
    completion_condition: CompletionCondition
    target_screen: Optional[str] = None
    is_complete: bool = False

    def to_dict(self) -> Dict[str, object]:
        return {
            'task_id': self.task_id,
            'name': self.name,
            'description': self.description,
            'is_required': self.is_required,
            'action_type': self.action_type.value,
            'completion_condition': self.completion_condition.value,
            'target_screen': self.target_screen,
            'is_complete': self.is_complete,
        }


def _task(task_id, name, description, required, action, condition, screen=None):
    return OffseasonTask(
        task_id=task_id,
        name=name,
        description=description,
        is_required=required,
        action_type=TaskActionType(action),
        completion_condition=CompletionCondition(condition),
        target_screen=screen
    )


PHASE_TASKS: Dict[OffseasonPhase, Tuple[OffseasonTask, ...]] = {
    OffseasonPhase.SEASON_END: (
        _task('view_recap', 'View Season Recap', "Review your team's season performance",
              True, 'view', 'visited', 'SeasonRecap'),
        _task('view_awards', 'View Awards', 'See league awards and team honors',
              False, 'view', 'optional', 'SeasonRecap'),
        _task('view_draft_order', 'View Draft Order', 'Check your draft position',
              False, 'view', 'optional', 'DraftBoard'),
    ),
    OffseasonPhase.COACHING_DECISIONS: (
        _task('review_staff', 'Review Coaching Staff', 'Evaluate your coaching staff performance',
              True, 'view', 'visited', 'Staff'),
        _task('make_changes', 'Make Staff Changes', 'Fire or hire coaching staff',
              False, 'navigate', 'optional', 'Staff'),
    ),
    OffseasonPhase.CONTRACT_MANAGEMENT: (
        _task('review_cap', 'Review Cap Situation', 'Analyze your salary cap space',
              True, 'view', 'visited', 'Finances'),
        _task('franchise_tag', 'Apply Franchise Tag', 'Use franchise or transition tag on a player',
              False, 'navigate', 'optional', 'ContractManagement'),
        _task('cut_players', 'Release Players', 'Cut players to create cap space',
              False, 'navigate', 'optional', 'ContractManagement'),
        _task('restructure', 'Restructure Contracts', 'Restructure existing contracts',
              False, 'navigate', 'optional', 'ContractManagement'),
    ),
    OffseasonPhase.COMBINE: (
        _task('view_prospects', 'View Top Prospects', 'Scout the top draft prospects',
              True, 'view', 'visited', 'DraftBoard'),
        _task('attend_combine', 'Attend Combine', 'Watch combine drills and interviews',
              False, 'view', 'optional', 'DraftBoard'),
        _task('pro_days', 'Attend Pro Days', 'Visit college pro days',
              False, 'view', 'optional', 'DraftBoard'),
    ),
    OffseasonPhase.FREE_AGENCY: (
        _task('review_market', 'Review Free Agent Market', 'Evaluate available free agents',
              True, 'view', 'visited', 'FreeAgency'),
        _task('make_offers', 'Make Offers', 'Submit contract offers to free agents',
              False, 'navigate', 'optional', 'FreeAgency'),
        _task('sign_players', 'Sign Free Agents', 'Complete free agent signings',
              False, 'navigate', 'has_signed', 'FreeAgency'),
    ),
    OffseasonPhase.DRAFT: (
        _task('make_picks', 'Make Draft Picks', 'Select players in the NFL Draft',
              True, 'navigate', 'draft_complete', 'DraftRoom'),
        _task('trade_picks', 'Trade Draft Picks', 'Trade up or down in the draft',
              False, 'navigate', 'optional', 'DraftRoom'),
    ),
    OffseasonPhase.UDFA: (
        _task('review_udfa', 'Review UDFA Pool', 'Evaluate undrafted free agents',
              True, 'view', 'visited', 'FreeAgency'),
        _task('sign_udfa', 'Sign UDFAs', 'Sign undrafted free agents',
              False, 'navigate', 'optional', 'FreeAgency'),
    ),
    OffseasonPhase.OTAS: (
        _task('view_reports', 'View OTA Reports', 'Read reports on player progress',
              True, 'view', 'visited', 'OTAs'),
        _task('adjust_depth', 'Adjust Depth Chart', 'Update depth chart based on OTA performance',
              False, 'navigate', 'optional', 'Roster'),
    ),
    OffseasonPhase.TRAINING_CAMP: (
        _task('view_battles', 'View Position Battles', 'Track position competition results',
              True, 'view', 'visited', 'TrainingCamp'),
        _task('manage_injuries', 'Manage Injuries', 'Handle training camp injuries',
              False, 'navigate', 'optional', 'Roster'),
        _task('development_check', 'Check Development', 'Review player development updates',
              False, 'view', 'optional', 'TrainingCamp'),
    ),
    OffseasonPhase.PRESEASON: (
        _task('sim_games', 'Simulate Preseason', 'Play 3 preseason games',
              True, 'view', 'visited', 'Preseason'),
        _task('evaluate_players', 'Evaluate Players', 'Review preseason performances',
              False, 'view', 'optional', 'Preseason'),
    ),
    OffseasonPhase.FINAL_CUTS: (
        _task('cut_to_53', 'Cut to 53', 'Reduce roster to 53 players',
              True, 'validate', 'roster_size<=53', 'FinalCuts'),
        _task('form_practice_squad', 'Form Practice Squad', 'Sign players to practice squad',
              False, 'navigate', 'optional', 'FinalCuts'),
        _task('claim_waivers', 'Claim Waivers', 'Claim players from waivers',
              False, 'navigate', 'optional', 'FinalCuts'),
    ),
    OffseasonPhase.SEASON_START: (
        _task('view_expectations', 'View Owner Expectations',
              'Understand owner expectations for the season',
              True, 'view', 'visited', 'OwnerRelations'),
        _task('media_projections', 'View Media Projections', 'See media predictions for your team',
              False, 'auto', 'optional'),
        _task('set_goals', 'Set Season Goals', 'Define personal goals for the season',
              False, 'auto', 'optional'),
    ),
}


def get_phase_tasks(phase: OffseasonPhase) -> Tuple[OffseasonTask, ...]:
    """Fresh (all incomplete) task list for a phase."""
    return PHASE_TASKS.get(phase, ())


# ==================== Completion predicates ====================
# Each returns None when satisfied, otherwise a refusal message.

def _roster_at_limit(context: OffseasonContext) -> Optional[str]:
    limit = SeasonRules.ACTIVE_ROSTER_LIMIT
    if context.active_roster_size is None:
        return f"Active roster size unknown; it must be at most {limit}"
    if context.active_roster_size > limit:
        return (
            f"Active roster has {context.active_roster_size} players; "
            f"cut to {limit} before continuing"
        )
    return None


def _draft_complete(context: OffseasonContext) -> Optional[str]:
    if not context.draft_complete:
        return "The draft is not complete"
    return None


def _has_signed(context: OffseasonContext) -> Optional[str]:
    if not context.has_signed:
        return "No players have been signed"
    return None


CONDITION_CHECKS: Dict[CompletionCondition, Callable[[OffseasonContext], Optional[str]]] = {
    CompletionCondition.VISITED: lambda context: None,
    CompletionCondition.OPTIONAL: lambda context: None,
    CompletionCondition.DRAFT_COMPLETE: _draft_complete,
    CompletionCondition.ROSTER_AT_LIMIT: _roster_at_limit,
    CompletionCondition.HAS_SIGNED: _has_signed,
}

PHASE_GATES: Dict[OffseasonPhase, Callable[[OffseasonContext], Optional[str]]] = {
    OffseasonPhase.DRAFT: _draft_complete,
    OffseasonPhase.FINAL_CUTS: _roster_at_limit,
}
"""External validation re-checked at the moment a phase is left."""


def check_task_condition(task: OffseasonTask, context: OffseasonContext) -> Optional[str]:
    """Refusal message if the task's completion condition does not hold."""
    return CONDITION_CHECKS[task.completion_condition](context)


def check_phase_gate(phase: OffseasonPhase, context: OffseasonContext) -> Optional[str]:
    """Refusal message if the phase's external validation fails."""
    gate = PHASE_GATES.get(phase)
    if gate is None:
        return None
    return gate(context)
