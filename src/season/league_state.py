"""
League State

The immutable snapshot the PhaseController consumes and returns. Callers
load one, hand it to PhaseController.advance, and persist whatever comes
back; nothing in the engine holds state between calls.
"""

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Optional, Tuple

from career.firing_models import FiringContext, FiringRecord
from career.owner_models import OwnerProfile
from career.patience_meter import PatienceMeterState
from career.tenure import TenureStats
from offseason.offseason_manager import OffSeasonState
from offseason.offseason_tasks import OffseasonContext
from season.season_calendar import SeasonCalendar
from shared.league_models import ScheduledGame, Team


@dataclass(frozen=True)
class GMContract:
    """
    The player's current employment.

    Attributes:
        gm_id: Player persona identifier
        team_id: Team employing the GM
        years_remaining: Full contract years still owed
        annual_salary: Salary per year in dollars
        gm_name: Display name used in public statements
    """
    gm_id: str
    team_id: int
    years_remaining: int = 3
    annual_salary: int = 2_000_000
    gm_name: Optional[str] = None

    def __post_init__(self):
        if self.years_remaining < 0:
            raise ValueError(f"years_remaining must be >= 0, got {self.years_remaining}")
        if self.annual_salary < 0:
            raise ValueError(f"annual_salary must be >= 0, got {self.annual_salary}")


@dataclass(frozen=True)
class LeagueState:
    """
    Everything one advance needs.

    Attributes:
        calendar: Current year / week / phase
        teams: Team registry keyed by team ID, records included
        schedule: Authoritative schedule for the current season
        owners: Owner profiles keyed by team ID
        gm_contract: The player's contract (identifies the user team)
        tenure: Cumulative stats for the current job
        patience: Owner patience meter, created lazily on the first weekly update
        firing_context: Tenure facts used by the firing rules
        offseason: Task manager state while in the offseason, otherwise None
        offseason_context: Externally supplied facts for offseason validation
        pending_firing: Set when the GM was fired and a new hire is outstanding
    """
    calendar: SeasonCalendar
    teams: Dict[int, Team]
    schedule: Tuple[ScheduledGame, ...]
    owners: Dict[int, OwnerProfile]
    gm_contract: GMContract
    tenure: TenureStats = field(default_factory=TenureStats)
    patience: Optional[PatienceMeterState] = None
    firing_context: FiringContext = field(default_factory=FiringContext)
    offseason: Optional[OffSeasonState] = None
    offseason_context: OffseasonContext = field(default_factory=OffseasonContext)
    pending_firing: Optional[FiringRecord] = None

    def __post_init__(self):
        if self.gm_contract.team_id not in self.teams:
            raise ValueError(f"GM team {self.gm_contract.team_id} is not in the league")
        if self.gm_contract.team_id not in self.owners:
            raise ValueError(f"No owner registered for team {self.gm_contract.team_id}")

    @property
    def user_team_id(self) -> int:
        return self.gm_contract.team_id

    @property
    def user_team(self) -> Team:
        return self.teams[self.user_team_id]

    @property
    def user_owner(self) -> OwnerProfile:
        return self.owners[self.user_team_id]

    @property
    def is_awaiting_new_hire(self) -> bool:
        return self.pending_firing is not None

    def with_offseason(self, offseason: OffSeasonState) -> 'LeagueState':
        return replace(self, offseason=offseason)

    def with_offseason_context(self, context: OffseasonContext) -> 'LeagueState':
        return replace(self, offseason_context=context)

    def to_dict(self) -> Dict[str, Any]:
        """Serializable view for the presentation layer."""
        return {
            'calendar': self.calendar.to_dict(),
            'user_team_id': self.user_team_id,
            'user_record': self.user_team.record.record_str,
            'schedule': [game.to_dict() for game in self.schedule],
            'tenure': self.tenure.to_dict(),
            'patience': self.patience.to_dict() if self.patience else None,
            'offseason': self.offseason.to_dict() if self.offseason else None,
            'pending_firing': self.pending_firing.public_summary() if self.pending_firing else None,
        }
