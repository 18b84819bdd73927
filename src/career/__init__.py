"""
GM Career System

Owner patience tracking, tenure statistics and the firing decision engine.

Main Components:
- patience_meter: Weekly patience updates, trends and the qualitative view model
- tenure: Cumulative counters for the GM's current job
- firing_mechanics: Firing decision, reason, severance and legacy rating
"""

from career.owner_models import OwnerProfile, OwnerTraits, JobSecurityLevel, PR_OBSESSED
from career.career_exceptions import CareerException, InvariantViolationException
from career.patience_meter import (
    PatienceMeterState,
    PatienceHistoryEntry,
    PatienceTrend,
    PatienceViewModel,
    create_patience_meter_state,
    create_from_owner,
    update_patience_value,
    process_week_end,
    start_new_season,
    calculate_trend,
    create_patience_view_model,
    validate_patience_meter_state,
)
from career.tenure import (
    TenureStats,
    SeasonResult,
    create_default_tenure_stats,
    update_tenure_stats,
    validate_tenure_stats,
    require_valid_tenure_stats,
)
from career.firing_models import (
    FiringContext,
    FiringDecision,
    FiringReason,
    FiringReasonCategory,
    FiringRecord,
    LegacyRating,
    LegacyTier,
    SeasonExpectation,
    SeverancePackage,
)
from career.firing_mechanics import (
    should_fire,
    generate_firing_reason,
    calculate_severance,
    calculate_legacy,
    get_legacy_description,
    create_firing_record,
    validate_firing_record,
    require_valid_firing_record,
)

__all__ = [
    'OwnerProfile',
    'OwnerTraits',
    'JobSecurityLevel',
    'PR_OBSESSED',
    'CareerException',
    'InvariantViolationException',
    'PatienceMeterState',
    'PatienceHistoryEntry',
    'PatienceTrend',
    'PatienceViewModel',
    'create_patience_meter_state',
    'create_from_owner',
    'update_patience_value',
    'process_week_end',
    'start_new_season',
    'calculate_trend',
    'create_patience_view_model',
    'validate_patience_meter_state',
    'TenureStats',
    'SeasonResult',
    'create_default_tenure_stats',
    'update_tenure_stats',
    'validate_tenure_stats',
    'require_valid_tenure_stats',
    'FiringContext',
    'FiringDecision',
    'FiringReason',
    'FiringReasonCategory',
    'FiringRecord',
    'LegacyRating',
    'LegacyTier',
    'SeasonExpectation',
    'SeverancePackage',
    'should_fire',
    'generate_firing_reason',
    'calculate_severance',
    'calculate_legacy',
    'get_legacy_description',
    'create_firing_record',
    'validate_firing_record',
    'require_valid_firing_record',
]
