"""
Patience Meter

Tracks how much tolerance an owner has left for the GM. The value is always
within 0-100 and every change is appended to an immutable history.

The player never sees raw numbers: create_patience_view_model exposes only
qualitative status, trend and urgency.
"""

import logging
import math
from dataclasses import dataclass, replace
from enum import Enum
from typing import Dict, Optional, Tuple, Any

from config.season_rules import SeasonRules
from shared.league_models import TeamRecord
from career.owner_models import JobSecurityLevel, OwnerProfile

logger = logging.getLogger(__name__)


class PatienceTrend(Enum):
    IMPROVING = "improving"
    STABLE = "stable"
    DECLINING = "declining"


@dataclass(frozen=True)
class PatienceHistoryEntry:
    """One recorded change to the meter."""
    week: int
    year: int
    delta: int
    value: int
    description: Optional[str] = None


@dataclass(frozen=True)
class PatienceMeterState:
    """
    Full patience meter state for one owner.

    Created lazily the first time an owner's patience is touched and kept
    across seasons until a new GM is hired.
    """
    owner_id: str
    current_value: int
    history: Tuple[PatienceHistoryEntry, ...] = ()
    season_start_value: int = SeasonRules.DEFAULT_PATIENCE
    last_week_value: int = SeasonRules.DEFAULT_PATIENCE
    consecutive_declines: int = 0
    consecutive_improvements: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            'owner_id': self.owner_id,
            'current_value': self.current_value,
            'history': [
                {
                    'week': e.week,
                    'year': e.year,
                    'delta': e.delta,
                    'value': e.value,
                    'description': e.description,
                }
                for e in self.history
            ],
            'season_start_value': self.season_start_value,
            'last_week_value': self.last_week_value,
            'consecutive_declines': self.consecutive_declines,
            'consecutive_improvements': self.consecutive_improvements,
        }


@dataclass(frozen=True)
class PatienceViewModel:
    status: str
    trend: PatienceTrend
    trend_description: str
    weekly_change: str
    season_change: str
    is_at_risk: bool
    urgency_level: str


def round_half_up(value: float) -> int:
    """Round to nearest integer with .5 going up (1.5 -> 2, -1.5 -> -1)."""
    return int(math.floor(value + 0.5))


def clamp_patience(value: int) -> int:
    return max(SeasonRules.PATIENCE_MIN, min(SeasonRules.PATIENCE_MAX, value))


def create_patience_meter_state(
    owner_id: str,
    initial_value: int = SeasonRules.DEFAULT_PATIENCE,
    week: int = 1,
    year: int = 1
) -> PatienceMeterState:
    """Create a new meter with an 'Initial hire' history entry."""
    value = clamp_patience(initial_value)
    return PatienceMeterState(
        owner_id=owner_id,
        current_value=value,
        history=(PatienceHistoryEntry(week, year, 0, value, "Initial hire"),),
        season_start_value=value,
        last_week_value=value
    )


def create_from_owner(owner: OwnerProfile, week: int = 1, year: int = 1) -> PatienceMeterState:
    """Create a meter seeded from the owner's stored patience value."""
    return create_patience_meter_state(owner.owner_id, owner.patience_meter, week, year)


def update_patience_value(
    state: PatienceMeterState,
    change: int,
    week: int,
    year: int,
    description: str
) -> PatienceMeterState:
    """
    Apply a change, clamp to 0-100 and record it.

    A negative change extends the decline streak and resets improvements;
    a positive change does the opposite; zero leaves both counters alone.
    """
    new_value = clamp_patience(state.current_value + change)

    declines = state.consecutive_declines
    improvements = state.consecutive_improvements
    if change < 0:
        declines += 1
        improvements = 0
    elif change > 0:
        improvements += 1
        declines = 0

    entry = PatienceHistoryEntry(
        week=week,
        year=year,
        delta=change,
        value=new_value,
        description=description
    )

    return replace(
        state,
        current_value=new_value,
        last_week_value=state.current_value,
        history=state.history + (entry,),
        consecutive_declines=declines,
        consecutive_improvements=improvements
    )


def start_new_season(state: PatienceMeterState) -> PatienceMeterState:
    return replace(state, season_start_value=state.current_value)


# ==================== Weekly processing ====================

def base_weekly_change(win_percentage: float) -> int:
    """Base delta from the season win percentage band."""
    if win_percentage >= 0.7:
        return 3
    if win_percentage >= 0.5:
        return 1
    if win_percentage >= 0.35:
        return -2
    return -4


def patience_trait_modifier(patience_trait: int) -> float:
    """Impatient owners react harder, patient owners softer."""
    if patience_trait < 30:
        return 1.5
    if patience_trait > 70:
        return 0.5
    return 1.0


def calculate_weekly_change(record: TeamRecord, owner: OwnerProfile) -> int:
    """
    Weekly patience delta for a team record.

    Win percentage here ignores ties and is 0.5 before any decisive game.
    """
    decided = record.wins + record.losses
    win_percentage = record.wins / decided if decided > 0 else 0.5
    change = base_weekly_change(win_percentage) * patience_trait_modifier(owner.traits.patience)
    return round_half_up(change)


def process_week_end(
    state: Optional[PatienceMeterState],
    owner: OwnerProfile,
    record: TeamRecord,
    week: int,
    year: int
) -> PatienceMeterState:
    """
    Run the weekly patience update for the player's owner.

    Args:
        state: Existing meter, or None to create one from the owner
        owner: Owner whose traits scale the change
        record: The player's team record after this week's games
        week: Week that just finished
        year: Current season year

    Returns:
        New PatienceMeterState
    """
    if state is None:
        state = create_from_owner(owner, week, year)

    change = calculate_weekly_change(record, owner)
    if change > 0:
        description = f"Team performance: {record.wins}-{record.losses}"
    else:
        description = f"Concerns over {record.losses} losses"

    updated = update_patience_value(state, change, week, year, description)
    logger.info(
        f"Owner {owner.owner_id} patience {state.current_value} -> {updated.current_value} "
        f"({change:+d}): {description}"
    )
    return updated


# ==================== Qualitative views ====================

def get_current_security_level(state: PatienceMeterState) -> JobSecurityLevel:
    return JobSecurityLevel.from_patience(state.current_value)


def calculate_trend(state: PatienceMeterState) -> PatienceTrend:
    """Compare the first and last of the most recent 5 entries (needs 3+)."""
    if len(state.history) < 3:
        return PatienceTrend.STABLE

    recent = state.history[-5:]
    difference = recent[-1].value - recent[0].value
    if difference >= 5:
        return PatienceTrend.IMPROVING
    if difference <= -5:
        return PatienceTrend.DECLINING
    return PatienceTrend.STABLE


def get_trend_description(trend: PatienceTrend, state: PatienceMeterState) -> str:
    level = get_current_security_level(state)

    if trend == PatienceTrend.IMPROVING:
        if level in (JobSecurityLevel.HOT_SEAT, JobSecurityLevel.WARM_SEAT):
            return "Owner confidence is recovering"
        return "Owner is increasingly pleased with your performance"

    if trend == PatienceTrend.DECLINING:
        if level in (JobSecurityLevel.SECURE, JobSecurityLevel.STABLE):
            return "Recent results have raised some concerns"
        return "Owner patience is wearing thin"

    return {
        JobSecurityLevel.SECURE: "Your position remains strong",
        JobSecurityLevel.STABLE: "Owner remains satisfied with direction",
        JobSecurityLevel.WARM_SEAT: "Your position requires improvement",
        JobSecurityLevel.HOT_SEAT: "Your job security is in serious jeopardy",
    }.get(level, "Your position is uncertain")


def get_weekly_change(state: PatienceMeterState) -> str:
    diff = state.current_value - state.last_week_value
    if diff > 2:
        return "improved"
    if diff < -2:
        return "worsened"
    return "unchanged"


def get_season_change(state: PatienceMeterState) -> str:
    diff = state.current_value - state.season_start_value
    if diff >= 20:
        return "much better"
    if diff >= 8:
        return "better"
    if diff <= -20:
        return "much worse"
    if diff <= -8:
        return "worse"
    return "same"


def get_urgency_level(state: PatienceMeterState) -> str:
    level = get_current_security_level(state)
    declining = calculate_trend(state) == PatienceTrend.DECLINING

    if level == JobSecurityLevel.SECURE:
        return "none"
    if level == JobSecurityLevel.STABLE:
        return "low" if declining else "none"
    if level == JobSecurityLevel.WARM_SEAT:
        return "medium" if declining else "low"
    if level == JobSecurityLevel.HOT_SEAT:
        return "critical" if declining else "high"
    return "critical"


def is_at_risk(state: PatienceMeterState) -> bool:
    return get_current_security_level(state) in (JobSecurityLevel.HOT_SEAT, JobSecurityLevel.FIRED)


def create_patience_view_model(state: PatienceMeterState) -> PatienceViewModel:
    """Build the qualitative view shown to the player."""
    trend = calculate_trend(state)
    return PatienceViewModel(
        status=get_current_security_level(state).status_label,
        trend=trend,
        trend_description=get_trend_description(trend, state),
        weekly_change=get_weekly_change(state),
        season_change=get_season_change(state),
        is_at_risk=is_at_risk(state),
        urgency_level=get_urgency_level(state)
    )


def get_impact_description(change: int) -> str:
    """Qualitative description of a single patience change."""
    if change >= 25:
        return "major boost"
    if change >= 15:
        return "significant boost"
    if change >= 8:
        return "moderate boost"
    if change >= 3:
        return "slight boost"
    if change > -3:
        return "no change"
    if change > -8:
        return "slight concern"
    if change > -15:
        return "moderate concern"
    if change > -25:
        return "significant concern"
    return "major concern"


_LEVEL_FLOORS = {
    JobSecurityLevel.SECURE: 70,
    JobSecurityLevel.STABLE: 50,
    JobSecurityLevel.WARM_SEAT: 35,
    JobSecurityLevel.HOT_SEAT: 20,
}

_NEXT_LEVEL_FLOORS = {
    JobSecurityLevel.STABLE: 70,
    JobSecurityLevel.WARM_SEAT: 50,
    JobSecurityLevel.HOT_SEAT: 35,
    JobSecurityLevel.FIRED: 20,
}


def get_distance_to_next_threshold(state: PatienceMeterState) -> Optional[int]:
    """Points the meter can lose before dropping a level (None when already fired)."""
    floor = _LEVEL_FLOORS.get(get_current_security_level(state))
    if floor is None:
        return None
    return state.current_value - floor


def get_points_to_improve(state: PatienceMeterState) -> Optional[int]:
    """Points needed to reach the next level up (None when already secure)."""
    target = _NEXT_LEVEL_FLOORS.get(get_current_security_level(state))
    if target is None:
        return None
    return target - state.current_value


def get_patience_summary(state: PatienceMeterState) -> Dict[str, Any]:
    """Aggregate statistics over the meter's history."""
    if len(state.history) < 2:
        return {
            'total_changes': 0,
            'positive_changes': 0,
            'negative_changes': 0,
            'biggest_gain': 0,
            'biggest_loss': 0,
            'average_change': 0.0,
        }

    changes = [
        state.history[i].value - state.history[i - 1].value
        for i in range(1, len(state.history))
    ]
    return {
        'total_changes': len(changes),
        'positive_changes': sum(1 for c in changes if c > 0),
        'negative_changes': sum(1 for c in changes if c < 0),
        'biggest_gain': max([c for c in changes if c > 0], default=0),
        'biggest_loss': min([c for c in changes if c < 0], default=0),
        'average_change': round(sum(changes) / len(changes), 1),
    }


def validate_patience_meter_state(state: PatienceMeterState) -> bool:
    """Check every stored value is within 0-100 and counters are non-negative."""
    if not state.owner_id:
        return False
    for value in (state.current_value, state.season_start_value, state.last_week_value):
        if not SeasonRules.PATIENCE_MIN <= value <= SeasonRules.PATIENCE_MAX:
            return False
    if state.consecutive_declines < 0 or state.consecutive_improvements < 0:
        return False
    for entry in state.history:
        if not SeasonRules.PATIENCE_MIN <= entry.value <= SeasonRules.PATIENCE_MAX:
            return False
        if entry.week < 0 or entry.year < 0:
            return False
    return True
