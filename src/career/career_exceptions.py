"""
Career Exception Hierarchy

Exceptions raised when career records fail validation. A GM firing is a
normal outcome and never raises.

Exception Hierarchy:
    CareerException (base)
    └── InvariantViolationException
"""

from typing import Any, Dict, List, Optional
from datetime import datetime


class CareerException(Exception):
    """
    Base exception for career engine errors.

    Attributes:
        message: Human-readable error message
        error_code: Unique error code
        context: Identifiers of the records involved
        original_exception: Wrapped exception if from try/except
    """

    def __init__(
        self,
        message: str,
        error_code: str = "CAREER_000",
        context: Optional[Dict[str, Any]] = None,
        original_exception: Optional[Exception] = None
    ):
        self.message = message
        self.error_code = error_code
        self.context = context or {}
        self.original_exception = original_exception
        self.timestamp = datetime.now().isoformat()
        super().__init__(f"[{self.error_code}] {self.message}")

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging/serialization"""
        return {
            "error_code": self.error_code,
            "message": self.message,
            "context": self.context,
            "timestamp": self.timestamp,
            "original_error": str(self.original_exception) if self.original_exception else None
        }


class InvariantViolationException(CareerException):
    """
    Raised when tenure stats or a firing record fail their validator.

    Examples:
    - Negative win or season counts
    - Win percentage outside 0-1
    - More Super Bowl wins than appearances
    - Final patience value outside 0-100
    """

    def __init__(self, entity: str, violations: List[str], **kwargs):
        super().__init__(
            message=f"Invalid {entity}: {'; '.join(violations)}",
            error_code="CAREER_INVARIANT_001",
            context={"entity": entity, "violations": violations, **kwargs.get('context', {})},
            original_exception=kwargs.get('original_exception')
        )
        self.entity = entity
        self.violations = violations
