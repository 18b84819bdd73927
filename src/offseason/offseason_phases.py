"""
Offseason Phase Enumeration

Defines the twelve sequential stages between the end of the playoffs and
the start of the next preseason. Order is fixed; the declaration order of
the enum members IS the phase order.
"""

from enum import Enum
from typing import Optional


class OffseasonPhase(Enum):
    """
    Offseason stages in the order they are played.

    Each stage has a task list (see offseason_tasks) that must be satisfied
    before the next stage opens.
    """

    SEASON_END = "season_end"
    """
    Wrap-up of the completed season.

    - Season recap and grades
    - League awards
    - Draft order revealed
    """

    COACHING_DECISIONS = "coaching_decisions"
    """
    Staff evaluation.

    - Review coordinators and position coaches
    - Fire or hire staff
    """

    CONTRACT_MANAGEMENT = "contract_management"
    """
    Cap housekeeping before free agency.

    - Franchise / transition tags
    - Cap casualties
    - Restructures
    """

    COMBINE = "combine"
    """
    Prospect scouting at the combine and college pro days.
    """

    FREE_AGENCY = "free_agency"
    """
    Veteran free agent market opens.
    """

    DRAFT = "draft"
    """
    Player selection. Cannot be left until the user's picks are made.
    """

    UDFA = "udfa"
    """
    Undrafted free agent signings to fill out the 90-man roster.
    """

    OTAS = "otas"
    """
    Organized team activities; first impressions of new players.
    """

    TRAINING_CAMP = "training_camp"
    """
    Position battles, camp injuries and development reveals.
    """

    PRESEASON = "preseason"
    """
    Exhibition games and final evaluations.
    """

    FINAL_CUTS = "final_cuts"
    """
    Reduce the active roster to the league limit.

    - Practice squad formation
    - Waiver claims
    """

    SEASON_START = "season_start"
    """
    Owner expectations and media projections for the coming season.
    """

    def __str__(self) -> str:
        """Return human-readable phase name."""
        return _DISPLAY_NAMES[self]

    @property
    def phase_number(self) -> int:
        """1-based position in the offseason sequence."""
        return _PHASE_ORDER.index(self) + 1

    @property
    def description(self) -> str:
        return _DESCRIPTIONS[self]

    @property
    def next_phase(self) -> Optional['OffseasonPhase']:
        """Following phase, or None for the last one."""
        index = _PHASE_ORDER.index(self)
        if index >= len(_PHASE_ORDER) - 1:
            return None
        return _PHASE_ORDER[index + 1]

    @classmethod
    def ordered(cls) -> list:
        """All phases in play order."""
        return list(_PHASE_ORDER)

    @classmethod
    def from_number(cls, phase_number: int) -> 'OffseasonPhase':
        """
        Look up a phase by its 1-based number.

        Raises:
            ValueError: If phase_number is outside 1-12
        """
        if not 1 <= phase_number <= len(_PHASE_ORDER):
            raise ValueError(
                f"Offseason phase number must be 1-{len(_PHASE_ORDER)}, got {phase_number}"
            )
        return _PHASE_ORDER[phase_number - 1]

    @classmethod
    def get_display_name(cls, phase: 'OffseasonPhase') -> str:
        """
        Get user-friendly display name for phase.

        Example:
            >>> OffseasonPhase.get_display_name(OffseasonPhase.UDFA)
            'UDFA Signing'
        """
        return str(phase)


_PHASE_ORDER = tuple(OffseasonPhase)

_DISPLAY_NAMES = {
    OffseasonPhase.SEASON_END: "Season End",
    OffseasonPhase.COACHING_DECISIONS: "Coaching Decisions",
    OffseasonPhase.CONTRACT_MANAGEMENT: "Contract Management",
    OffseasonPhase.COMBINE: "NFL Combine",
    OffseasonPhase.FREE_AGENCY: "Free Agency",
    OffseasonPhase.DRAFT: "NFL Draft",
    OffseasonPhase.UDFA: "UDFA Signing",
    OffseasonPhase.OTAS: "OTAs",
    OffseasonPhase.TRAINING_CAMP: "Training Camp",
    OffseasonPhase.PRESEASON: "Preseason",
    OffseasonPhase.FINAL_CUTS: "Final Cuts",
    OffseasonPhase.SEASON_START: "Season Start",
}

_DESCRIPTIONS = {
    OffseasonPhase.SEASON_END: "Review season performance, grades, and awards",
    OffseasonPhase.COACHING_DECISIONS: "Evaluate and make coaching staff changes",
    OffseasonPhase.CONTRACT_MANAGEMENT: "Manage roster through cuts, restructures, and tags",
    OffseasonPhase.COMBINE: "Scout prospects at the NFL Combine and Pro Days",
    OffseasonPhase.FREE_AGENCY: "Sign free agents to fill roster needs",
    OffseasonPhase.DRAFT: "Select new players through the NFL Draft",
    OffseasonPhase.UDFA: "Sign undrafted free agents to complete roster",
    OffseasonPhase.OTAS: "Organized team activities and first impressions",
    OffseasonPhase.TRAINING_CAMP: "Competition and development reveals",
    OffseasonPhase.PRESEASON: "Exhibition games and final evaluations",
    OffseasonPhase.FINAL_CUTS: "Cut roster to 53 players",
    OffseasonPhase.SEASON_START: "Set expectations and prepare for the season",
}
