"""
Season Calendar

Immutable year / week / phase value and the pure week and phase advance
rules. The PhaseController drives these; nothing here simulates games.

Phase cycle:
    PRESEASON (weeks 1-4) → REGULAR_SEASON (weeks 1-18) →
    PLAYOFFS (weeks 19-22) → OFFSEASON (phases 1-12) → PRESEASON (year + 1)
"""

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import List, Optional

from config.season_rules import SeasonRules
from offseason.offseason_phases import OffseasonPhase
from season.season_exceptions import (
    InvalidSeasonStateException,
    validate_phase_transition,
)

logger = logging.getLogger(__name__)


class SeasonPhase(Enum):
    """Top-level season phases."""
    PRESEASON = "preseason"
    REGULAR_SEASON = "regular_season"
    PLAYOFFS = "playoffs"
    OFFSEASON = "offseason"

    @classmethod
    def from_string(cls, value: str) -> 'SeasonPhase':
        """
        Convert string to enum (case-insensitive).

        Accepts 'regular_season', 'REGULAR_SEASON' and 'Regular Season'.

        Raises:
            ValueError: If string doesn't match any valid phase
        """
        try:
            return cls(value.lower())
        except ValueError:
            pass

        normalized = value.upper().replace(' ', '_').replace('-', '_')
        try:
            return cls[normalized]
        except KeyError:
            raise ValueError(
                f"Invalid season phase: '{value}'. "
                f"Valid values: {[p.value for p in cls]}"
            )


@dataclass(frozen=True)
class SeasonCalendar:
    """
    Where the league is in its annual cycle.

    Attributes:
        current_year: Season year (2000-2100)
        current_week: Week number 1-22; 1 throughout the offseason
        current_phase: Top-level phase
        offseason_phase: Offseason phase number 1-12, None outside the offseason
    """
    current_year: int
    current_week: int = 1
    current_phase: SeasonPhase = SeasonPhase.PRESEASON
    offseason_phase: Optional[int] = None

    def __post_init__(self):
        issues = get_calendar_issues(self)
        if issues:
            raise InvalidSeasonStateException(
                f"Invalid season calendar: {'; '.join(issues)}",
                issues=issues,
                season_context={
                    'year': self.current_year,
                    'week': self.current_week,
                    'phase': getattr(self.current_phase, 'value', self.current_phase),
                }
            )

    @property
    def offseason_stage(self) -> Optional[OffseasonPhase]:
        if self.offseason_phase is None:
            return None
        return OffseasonPhase.from_number(self.offseason_phase)

    def to_dict(self):
        return {
            'current_year': self.current_year,
            'current_week': self.current_week,
            'current_phase': self.current_phase.value,
            'offseason_phase': self.offseason_phase,
            'description': get_phase_description(self),
        }


def get_calendar_issues(calendar: SeasonCalendar) -> List[str]:
    """Every bound the calendar breaks (empty when valid)."""
    issues = []

    if not SeasonRules.MIN_YEAR <= calendar.current_year <= SeasonRules.MAX_YEAR:
        issues.append(
            f"year {calendar.current_year} outside "
            f"{SeasonRules.MIN_YEAR}-{SeasonRules.MAX_YEAR}"
        )
    if not 1 <= calendar.current_week <= SeasonRules.PLAYOFF_LAST_WEEK:
        issues.append(f"week {calendar.current_week} outside 1-{SeasonRules.PLAYOFF_LAST_WEEK}")
    if not isinstance(calendar.current_phase, SeasonPhase):
        issues.append(f"unknown phase {calendar.current_phase!r}")
        return issues

    if calendar.current_phase == SeasonPhase.OFFSEASON:
        if calendar.offseason_phase is None:
            issues.append("offseason calendar has no offseason phase")
        elif not 1 <= calendar.offseason_phase <= SeasonRules.OFFSEASON_PHASE_COUNT:
            issues.append(
                f"offseason phase {calendar.offseason_phase} outside "
                f"1-{SeasonRules.OFFSEASON_PHASE_COUNT}"
            )
    elif calendar.offseason_phase is not None:
        issues.append(f"offseason phase set during {calendar.current_phase.value}")
    elif calendar.current_phase == SeasonPhase.PRESEASON:
        if calendar.current_week > SeasonRules.PRESEASON_WEEKS:
            issues.append(f"preseason week {calendar.current_week} beyond {SeasonRules.PRESEASON_WEEKS}")
    elif calendar.current_phase == SeasonPhase.REGULAR_SEASON:
        if calendar.current_week > SeasonRules.REGULAR_SEASON_WEEKS:
            issues.append(
                f"regular season week {calendar.current_week} beyond "
                f"{SeasonRules.REGULAR_SEASON_WEEKS}"
            )
    elif calendar.current_week < SeasonRules.PLAYOFF_FIRST_WEEK:
        issues.append(f"playoff week {calendar.current_week} before {SeasonRules.PLAYOFF_FIRST_WEEK}")

    return issues


def validate_calendar(calendar: SeasonCalendar) -> bool:
    return not get_calendar_issues(calendar)


def create_default_calendar(year: int) -> SeasonCalendar:
    """Preseason week 1 of the given year."""
    return SeasonCalendar(current_year=year)


def is_regular_season(calendar: SeasonCalendar) -> bool:
    return calendar.current_phase == SeasonPhase.REGULAR_SEASON


def is_offseason(calendar: SeasonCalendar) -> bool:
    return calendar.current_phase == SeasonPhase.OFFSEASON


def get_phase_description(calendar: SeasonCalendar) -> str:
    """
    Short label for the current point in the season.

    Examples:
        'Preseason Week 2', 'Week 11', 'Divisional Round', 'Offseason: NFL Draft'
    """
    phase = calendar.current_phase
    if phase == SeasonPhase.PRESEASON:
        return f"Preseason Week {calendar.current_week}"
    if phase == SeasonPhase.REGULAR_SEASON:
        return f"Week {calendar.current_week}"
    if phase == SeasonPhase.PLAYOFFS:
        return SeasonRules.PLAYOFF_ROUND_NAMES.get(calendar.current_week, "Playoffs")
    if calendar.offseason_stage is not None:
        return f"Offseason: {calendar.offseason_stage}"
    return "Offseason"


def _transition(calendar: SeasonCalendar, to_phase: SeasonPhase, **changes) -> SeasonCalendar:
    validate_phase_transition(calendar.current_phase.value, to_phase.value)
    if to_phase != calendar.current_phase:
        logger.info(f"Season phase {calendar.current_phase.value} → {to_phase.value}")
    return replace(calendar, current_phase=to_phase, **changes)


def advance_week(calendar: SeasonCalendar) -> SeasonCalendar:
    """
    Next calendar week, rolling into the next phase when one ends.

    Raises:
        InvalidSeasonStateException: If called during the offseason, which
            advances by phase instead
    """
    if is_offseason(calendar):
        raise InvalidSeasonStateException(
            "The offseason advances by phase, not by week",
            issues=["advance_week called during offseason"],
            operation="advance_week"
        )

    new_week = calendar.current_week + 1
    phase = calendar.current_phase

    if phase == SeasonPhase.PRESEASON and new_week > SeasonRules.PRESEASON_WEEKS:
        return _transition(calendar, SeasonPhase.REGULAR_SEASON, current_week=1)

    if phase == SeasonPhase.REGULAR_SEASON and new_week > SeasonRules.REGULAR_SEASON_WEEKS:
        return _transition(
            calendar, SeasonPhase.PLAYOFFS, current_week=SeasonRules.PLAYOFF_FIRST_WEEK
        )

    if phase == SeasonPhase.PLAYOFFS and new_week > SeasonRules.PLAYOFF_LAST_WEEK:
        return _transition(calendar, SeasonPhase.OFFSEASON, current_week=1, offseason_phase=1)

    return replace(calendar, current_week=new_week)


def set_offseason_phase(calendar: SeasonCalendar, phase: OffseasonPhase) -> SeasonCalendar:
    """Mirror the task manager's current phase onto the calendar."""
    if not is_offseason(calendar):
        raise InvalidSeasonStateException(
            f"Cannot set offseason phase during {calendar.current_phase.value}",
            issues=["not in offseason"],
            operation="set_offseason_phase"
        )
    return replace(calendar, offseason_phase=phase.phase_number)


def start_next_season(calendar: SeasonCalendar) -> SeasonCalendar:
    """Leave the offseason for preseason week 1 of the following year."""
    return _transition(
        calendar,
        SeasonPhase.PRESEASON,
        current_year=calendar.current_year + 1,
        current_week=1,
        offseason_phase=None
    )
