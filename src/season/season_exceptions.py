"""
Season Progression Exception Hierarchy

This module defines exceptions for calendar and phase-controller operations.
Refused offseason advances and GM firings are NOT exceptions: the former is
reported as a refusal string, the latter as a Fired transition result.

Exception Hierarchy:
    SeasonException (base)
    ├── InvalidPhaseTransitionException
    ├── UnresolvedFiringException
    └── InvalidSeasonStateException

All exceptions track:
- Season context (year, phase, week)
- Operation that failed
- Recovery strategy
"""

from typing import Any, Dict, List, Optional
from datetime import datetime


class SeasonException(Exception):
    """
    Base exception for all season progression errors.

    Attributes:
        message: Human-readable error message
        error_code: Unique error code
        season_context: Season information (year, phase, week)
        operation: What operation was being performed
        recovery_strategy: How to recover from this error
        original_exception: Wrapped exception if from try/except
    """

    def __init__(
        self,
        message: str,
        error_code: str = "SEASON_000",
        season_context: Optional[Dict[str, Any]] = None,
        operation: Optional[str] = None,
        recovery_strategy: str = "abort",
        original_exception: Optional[Exception] = None
    ):
        self.message = message
        self.error_code = error_code
        self.season_context = season_context or {}
        self.operation = operation
        self.recovery_strategy = recovery_strategy
        self.original_exception = original_exception
        self.timestamp = datetime.now().isoformat()

        super().__init__(self._build_error_message())

    def _build_error_message(self) -> str:
        """Build error message with all context"""
        lines = [f"[{self.error_code}] {self.message}"]

        if self.operation:
            lines.append(f"Operation: {self.operation}")

        if self.season_context:
            lines.append("Season Context:")
            for key, value in self.season_context.items():
                lines.append(f"  {key}: {value}")

        if self.recovery_strategy:
            lines.append(f"Recovery: {self.recovery_strategy}")

        if self.original_exception:
            lines.append(
                f"\nOriginal Error: {type(self.original_exception).__name__}: "
                f"{self.original_exception}"
            )

        return "\n".join(lines)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging/serialization"""
        return {
            "error_code": self.error_code,
            "message": self.message,
            "operation": self.operation,
            "season_context": self.season_context,
            "recovery_strategy": self.recovery_strategy,
            "timestamp": self.timestamp,
            "original_error": str(self.original_exception) if self.original_exception else None
        }


class InvalidPhaseTransitionException(SeasonException):
    """
    Raised when a calendar transition skips or reverses the phase cycle.

    Valid transitions:
    - PRESEASON → REGULAR_SEASON
    - REGULAR_SEASON → PLAYOFFS
    - PLAYOFFS → OFFSEASON
    - OFFSEASON → PRESEASON (next year)
    """

    def __init__(
        self,
        from_phase: str,
        to_phase: str,
        message: Optional[str] = None,
        **kwargs
    ):
        context = {
            "from_phase": from_phase,
            "to_phase": to_phase,
            "valid_next_phases": get_valid_next_phases(from_phase),
            **kwargs.get('season_context', {})
        }

        super().__init__(
            message=message or f"Invalid phase transition: {from_phase} → {to_phase}",
            error_code="SEASON_PHASE_001",
            season_context=context,
            operation=kwargs.get('operation', 'phase_transition'),
            recovery_strategy="abort",
            original_exception=kwargs.get('original_exception')
        )

        self.from_phase = from_phase
        self.to_phase = to_phase


class UnresolvedFiringException(SeasonException):
    """
    Raised when advance is called while a firing record is still pending.

    The caller must resolve employment (new hire) before the calendar moves.
    """

    def __init__(self, gm_id: str, **kwargs):
        super().__init__(
            message=f"GM {gm_id} was fired; resolve employment before advancing",
            error_code="SEASON_FIRING_002",
            season_context={"gm_id": gm_id, **kwargs.get('season_context', {})},
            operation=kwargs.get('operation', 'advance'),
            recovery_strategy="resolve_firing"
        )

        self.gm_id = gm_id


class InvalidSeasonStateException(SeasonException):
    """
    Raised when a calendar value violates its bounds.

    Examples:
    - Year outside 2000-2100
    - Week outside 1-22
    - Offseason phase set while not in the offseason
    """

    def __init__(
        self,
        message: str,
        issues: Optional[List[str]] = None,
        **kwargs
    ):
        context = {
            "issues": issues or [],
            **kwargs.get('season_context', {})
        }

        super().__init__(
            message=message,
            error_code="SEASON_STATE_003",
            season_context=context,
            operation=kwargs.get('operation', 'state_validation'),
            recovery_strategy="reset",
            original_exception=kwargs.get('original_exception')
        )

        self.issues = issues or []


def get_valid_next_phases(from_phase: str) -> list:
    """Get valid next phases for a given current phase"""
    transitions = {
        "preseason": ["regular_season"],
        "regular_season": ["playoffs"],
        "playoffs": ["offseason"],
        "offseason": ["preseason"]
    }
    return transitions.get(from_phase.lower(), [])


def validate_phase_transition(from_phase: str, to_phase: str) -> bool:
    """
    Validate if a phase transition is allowed.

    Staying in the same phase is always allowed.

    Raises:
        InvalidPhaseTransitionException if transition is invalid
    """
    if from_phase.lower() == to_phase.lower():
        return True

    valid_next = get_valid_next_phases(from_phase)
    if to_phase.lower() not in valid_next:
        raise InvalidPhaseTransitionException(
            from_phase=from_phase,
            to_phase=to_phase,
            message=f"Cannot transition from {from_phase} to {to_phase}. Valid next phases: {valid_next}"
        )

    return True
