"""
Firing data models.

FiringRecord is an immutable snapshot created exactly once when a GM is
terminated. Its internal_reason must never be shown in public-facing output;
use FiringRecord.public_summary for that.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Tuple, Any

from career.tenure import TenureStats


class FiringReasonCategory(Enum):
    """Reason categories, declared in selection priority order."""
    PR = "pr"
    RELATIONSHIP = "relationship"
    EXPECTATIONS = "expectations"
    PERFORMANCE = "performance"
    OWNERSHIP_CHANGE = "ownershipChange"
    OTHER = "other"


class SeasonExpectation(Enum):
    REBUILD = "rebuild"
    COMPETITIVE = "competitive"
    CONTENDER = "contender"
    DYNASTY = "dynasty"


class LegacyTier(Enum):
    LEGENDARY = "legendary"
    EXCELLENT = "excellent"
    GOOD = "good"
    AVERAGE = "average"
    POOR = "poor"
    DISASTROUS = "disastrous"

    @classmethod
    def from_score(cls, score: int) -> "LegacyTier":
        if score >= 90:
            return cls.LEGENDARY
        if score >= 75:
            return cls.EXCELLENT
        if score >= 60:
            return cls.GOOD
        if score >= 40:
            return cls.AVERAGE
        if score >= 20:
            return cls.POOR
        return cls.DISASTROUS


@dataclass(frozen=True)
class FiringContext:
    """
    Facts about the GM's tenure that can trigger or explain a firing.

    Attributes:
        consecutive_losing_seasons: Losing seasons in a row, ending with the latest
        missed_playoffs_count: Seasons the team missed the playoffs
        owner_defiance_count: Owner directives the GM ignored
        major_scandals: PR incidents under the GM
        recent_patience_history: Recent meter values, oldest first
        ownership_just_changed: The team was sold this season
        season_expectation: What the owner expected from the roster
    """
    consecutive_losing_seasons: int = 0
    missed_playoffs_count: int = 0
    owner_defiance_count: int = 0
    major_scandals: int = 0
    recent_patience_history: Tuple[int, ...] = ()
    ownership_just_changed: bool = False
    season_expectation: SeasonExpectation = SeasonExpectation.COMPETITIVE


@dataclass(frozen=True)
class FiringDecision:
    should_fire: bool
    is_immediate: bool
    reason: str

    @classmethod
    def keep(cls) -> "FiringDecision":
        return cls(should_fire=False, is_immediate=False, reason="")


@dataclass(frozen=True)
class FiringReason:
    category: FiringReasonCategory
    primary_reason: str
    secondary_reasons: List[str]
    public_statement: str
    internal_reason: str


@dataclass(frozen=True)
class SeverancePackage:
    """Severance owed on termination; base and bonus are already scaled."""
    years_remaining: int
    base_severance: int
    performance_bonus: int
    total_value: int
    description: str


@dataclass(frozen=True)
class LegacyRating:
    overall: LegacyTier
    score: int
    achievements: List[str] = field(default_factory=list)
    failures: List[str] = field(default_factory=list)
    memorable_moments: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class FiringRecord:
    """Immutable snapshot of a GM termination."""
    gm_id: str
    team_id: int
    owner_id: str
    season: int
    week: int
    reason: FiringReason
    tenure: TenureStats
    severance: SeverancePackage
    legacy: LegacyRating
    final_patience_value: int
    was_forced: bool

    def public_summary(self) -> Dict[str, Any]:
        """Presentation-safe view: excludes the internal reason."""
        return {
            'gm_id': self.gm_id,
            'team_id': self.team_id,
            'season': self.season,
            'week': self.week,
            'category': self.reason.category.value,
            'primary_reason': self.reason.primary_reason,
            'public_statement': self.reason.public_statement,
            'severance': self.severance.description,
            'legacy': self.legacy.overall.value,
            'legacy_score': self.legacy.score,
        }

    def to_dict(self) -> Dict[str, Any]:
        """Full serialization including internal fields."""
        return {
            'gm_id': self.gm_id,
            'team_id': self.team_id,
            'owner_id': self.owner_id,
            'season': self.season,
            'week': self.week,
            'reason': {
                'category': self.reason.category.value,
                'primary_reason': self.reason.primary_reason,
                'secondary_reasons': list(self.reason.secondary_reasons),
                'public_statement': self.reason.public_statement,
                'internal_reason': self.reason.internal_reason,
            },
            'tenure': self.tenure.to_dict(),
            'severance': {
                'years_remaining': self.severance.years_remaining,
                'base_severance': self.severance.base_severance,
                'performance_bonus': self.severance.performance_bonus,
                'total_value': self.severance.total_value,
                'description': self.severance.description,
            },
            'legacy': {
                'overall': self.legacy.overall.value,
                'score': self.legacy.score,
                'achievements': list(self.legacy.achievements),
                'failures': list(self.legacy.failures),
                'memorable_moments': list(self.legacy.memorable_moments),
            },
            'final_patience_value': self.final_patience_value,
            'was_forced': self.was_forced,
        }
