"""
Firing Mechanics

Decides whether the owner fires the GM and, when they do, builds the firing
record: reason, severance, tenure snapshot and legacy rating.

Randomness (the housecleaning coin flip and the public statement template)
comes from an injected random.Random so tests can pin outcomes. The firing
priority order itself is deterministic.
"""

import logging
import random
from typing import List, Optional, Tuple

from config.season_rules import SeasonRules
from career.career_exceptions import InvariantViolationException
from career.owner_models import OwnerProfile, PR_OBSESSED
from career.patience_meter import PatienceMeterState, round_half_up
from career.tenure import TenureStats, get_tenure_violations, require_valid_tenure_stats
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

logger = logging.getLogger(__name__)


PUBLIC_STATEMENT_TEMPLATES = {
    FiringReasonCategory.PERFORMANCE: [
        "We thank [GM] for their efforts and wish them well in future endeavors.",
        "After careful evaluation, we have decided to move in a new direction.",
        "We appreciate [GM]'s dedication but feel a change is needed.",
    ],
    FiringReasonCategory.EXPECTATIONS: [
        "We believe a change in leadership will help us reach our goals.",
        "Our expectations for the organization require a fresh perspective.",
        "We wish [GM] well as we seek to elevate our program.",
    ],
    FiringReasonCategory.RELATIONSHIP: [
        "We have mutually agreed to part ways.",
        "After discussions, we believe this is best for both parties.",
        "We thank [GM] for their service and wish them success.",
    ],
    FiringReasonCategory.PR: [
        "We are committed to the highest organizational standards.",
        "We must hold ourselves accountable at every level.",
        "We are taking steps to ensure our values are upheld.",
    ],
    FiringReasonCategory.OWNERSHIP_CHANGE: [
        "New ownership is excited to establish their vision for the team.",
        "We appreciate [GM]'s work and look forward to a new chapter.",
        "This transition allows us to build toward our ownership goals.",
    ],
    FiringReasonCategory.OTHER: [
        "We thank [GM] for their contributions to the organization.",
        "We wish [GM] all the best in their future endeavors.",
        "We appreciate the time [GM] spent with our organization.",
    ],
}

LEGACY_DESCRIPTIONS = {
    LegacyTier.LEGENDARY: "Will be remembered as one of the greatest GMs in franchise history",
    LegacyTier.EXCELLENT: "Left a lasting positive impact on the organization",
    LegacyTier.GOOD: "Solid tenure with notable achievements",
    LegacyTier.AVERAGE: "Had some successes but also significant challenges",
    LegacyTier.POOR: "Tenure fell short of expectations",
    LegacyTier.DISASTROUS: "One of the most difficult periods in franchise history",
}

# (primary, secondary reasons, category)
ReasonCandidate = Tuple[str, List[str], FiringReasonCategory]


# ==================== Decision ====================

def should_fire(
    patience_state: PatienceMeterState,
    context: FiringContext,
    owner: OwnerProfile,
    rng: Optional[random.Random] = None,
    include_season_end_rules: bool = True
) -> FiringDecision:
    """
    Evaluate termination conditions in fixed priority order.

    The first matching rule wins. The random source is only consulted for
    the ownership-change housecleaning rule, after every deterministic rule
    has failed.

    Args:
        include_season_end_rules: Also check the non-immediate rules (extended
            losing, housecleaning). Pass False for weeks that do not close the
            season; the random source is then never touched.
    """
    if patience_state.current_value < SeasonRules.FIRING_THRESHOLD:
        return FiringDecision(True, True, "Patience exhausted")

    if context.major_scandals >= 2 and owner.has_trait(PR_OBSESSED):
        return FiringDecision(True, True, "Multiple PR incidents with PR-sensitive ownership")

    if context.owner_defiance_count >= 3 and owner.traits.control >= 70:
        return FiringDecision(True, True, "Repeated defiance of controlling owner")

    if not include_season_end_rules:
        return FiringDecision.keep()

    if context.consecutive_losing_seasons >= 3 and owner.traits.patience <= 40:
        return FiringDecision(True, False, "Extended losing with impatient owner")

    if (
        context.ownership_just_changed
        and patience_state.current_value < SeasonRules.HOUSECLEANING_PATIENCE_CEILING
    ):
        rng = rng or random.Random()
        if rng.random() < SeasonRules.HOUSECLEANING_PROBABILITY:
            return FiringDecision(True, False, "New ownership seeking fresh start")

    return FiringDecision.keep()


# ==================== Reason ====================

def collect_reason_candidates(context: FiringContext, owner: OwnerProfile) -> List[ReasonCandidate]:
    """Every reason whose trigger holds, at most one per category."""
    candidates: List[ReasonCandidate] = []

    if context.consecutive_losing_seasons >= 3:
        candidates.append((
            "Prolonged losing culture",
            [
                f"{context.consecutive_losing_seasons} consecutive losing seasons",
                "Failed to establish winning foundation",
            ],
            FiringReasonCategory.PERFORMANCE
        ))
    elif context.consecutive_losing_seasons >= 2:
        candidates.append((
            "Failure to improve team performance",
            ["Consecutive losing seasons", "Lack of visible progress"],
            FiringReasonCategory.PERFORMANCE
        ))

    if context.missed_playoffs_count >= 2 and context.season_expectation == SeasonExpectation.CONTENDER:
        candidates.append((
            "Failed to meet playoff expectations",
            [
                "Team built to contend failed to reach playoffs",
                "Underperformance relative to roster talent",
            ],
            FiringReasonCategory.EXPECTATIONS
        ))

    if context.owner_defiance_count >= 3:
        candidates.append((
            "Irreconcilable differences with ownership",
            ["Repeated failure to follow owner directives", "Breakdown in communication"],
            FiringReasonCategory.RELATIONSHIP
        ))
    elif context.owner_defiance_count >= 1 and owner.traits.control >= 70:
        candidates.append((
            "Philosophical differences with ownership",
            ["Disagreement on team direction", "Loss of owner confidence"],
            FiringReasonCategory.RELATIONSHIP
        ))

    if context.major_scandals >= 2:
        candidates.append((
            "Pattern of organizational issues",
            ["Multiple PR incidents under leadership", "Damage to team reputation"],
            FiringReasonCategory.PR
        ))
    elif context.major_scandals >= 1:
        candidates.append((
            "Organizational accountability",
            ["Significant PR incident", "Need for fresh leadership"],
            FiringReasonCategory.PR
        ))

    if context.ownership_just_changed:
        candidates.append((
            "New ownership seeking fresh start",
            ["New vision for the organization", "Change in organizational philosophy"],
            FiringReasonCategory.OWNERSHIP_CHANGE
        ))

    if not candidates:
        candidates.append((
            "Loss of confidence in leadership",
            ["Accumulated concerns over tenure", "Time for new direction"],
            FiringReasonCategory.OTHER
        ))

    return candidates


def select_primary_reason(candidates: List[ReasonCandidate]) -> ReasonCandidate:
    """Pick the first populated category: pr > relationship > expectations > performance > ownership > other."""
    for category in FiringReasonCategory:
        for candidate in candidates:
            if candidate[2] == category:
                return candidate
    return candidates[0]


def generate_public_statement(
    category: FiringReasonCategory,
    rng: Optional[random.Random] = None,
    gm_name: Optional[str] = None
) -> str:
    """Pick a diplomatic statement for the category; [GM] is filled when a name is given."""
    rng = rng or random.Random()
    statement = rng.choice(PUBLIC_STATEMENT_TEMPLATES[category])
    if gm_name:
        statement = statement.replace("[GM]", gm_name)
    return statement


def generate_internal_reason(
    primary: str,
    context: FiringContext,
    patience_state: PatienceMeterState
) -> str:
    """The real reason, built only from the factors that actually contributed."""
    parts = [primary]

    if context.consecutive_losing_seasons > 0:
        parts.append(f"{context.consecutive_losing_seasons} losing season(s)")

    if context.owner_defiance_count > 0:
        parts.append(f"{context.owner_defiance_count} owner directive(s) ignored")

    if patience_state.consecutive_declines >= 3:
        parts.append("Consistent decline in owner confidence")

    return ". ".join(parts) + "."


def generate_firing_reason(
    context: FiringContext,
    owner: OwnerProfile,
    patience_state: PatienceMeterState,
    rng: Optional[random.Random] = None,
    gm_name: Optional[str] = None
) -> FiringReason:
    """Build the category, public statement and internal reason for a firing."""
    primary, secondary, category = select_primary_reason(collect_reason_candidates(context, owner))

    return FiringReason(
        category=category,
        primary_reason=primary,
        secondary_reasons=list(secondary),
        public_statement=generate_public_statement(category, rng, gm_name),
        internal_reason=generate_internal_reason(primary, context, patience_state)
    )


# ==================== Severance ====================

def describe_severance(total_value: int) -> str:
    if total_value == 0:
        return "Contract expired - no severance due"
    if total_value < 1_000_000:
        return "Modest severance package"
    if total_value < 5_000_000:
        return "Standard severance package"
    if total_value < 10_000_000:
        return "Substantial severance package"
    return "Golden parachute severance"


def calculate_severance(
    years_remaining: int,
    annual_salary: int,
    was_forced: bool,
    tenure: TenureStats
) -> SeverancePackage:
    """
    Severance = round((years_remaining * annual_salary + bonus) * modifier).

    The bonus pays for championships, conference titles and a .600+ tenure.
    Ownership-forced departures get a 0.75 modifier.

    Raises:
        InvariantViolationException: If tenure stats are invalid
    """
    require_valid_tenure_stats(tenure)

    base = years_remaining * annual_salary

    bonus = 0
    bonus += tenure.super_bowl_wins * 500_000
    bonus += tenure.conference_championships * 200_000
    if tenure.win_percentage >= 0.6:
        bonus += 100_000

    modifier = 0.75 if was_forced else 1.0
    total = round_half_up((base + bonus) * modifier)

    return SeverancePackage(
        years_remaining=years_remaining,
        base_severance=round_half_up(base * modifier),
        performance_bonus=round_half_up(bonus * modifier),
        total_value=total,
        description=describe_severance(total)
    )


# ==================== Legacy ====================

def calculate_legacy(tenure: TenureStats) -> LegacyRating:
    """
    Score a tenure from 50 with signed adjustments, clamped to 0-100.

    Uses the stored tenure.win_percentage.
    """
    score = 50
    achievements: List[str] = []
    failures: List[str] = []
    moments: List[str] = []

    if tenure.super_bowl_wins > 0:
        score += tenure.super_bowl_wins * 20
        achievements.append(f"{tenure.super_bowl_wins} Super Bowl championship(s)")
        moments.append("Super Bowl victory celebration")

    if tenure.super_bowl_appearances > tenure.super_bowl_wins:
        losses = tenure.super_bowl_appearances - tenure.super_bowl_wins
        score += losses * 5
        if losses == 1:
            moments.append("Super Bowl appearance")

    if tenure.conference_championships > 0:
        score += tenure.conference_championships * 10
        achievements.append(f"{tenure.conference_championships} conference championship(s)")

    if tenure.division_titles > 0:
        score += tenure.division_titles * 5
        achievements.append(f"{tenure.division_titles} division title(s)")

    playoff_rate = tenure.playoff_appearances / max(1, tenure.total_seasons)
    if playoff_rate >= 0.7:
        score += 15
        achievements.append("Consistent playoff contender")
    elif playoff_rate >= 0.5:
        score += 8
        achievements.append("Regular playoff appearances")
    elif playoff_rate < 0.2 and tenure.total_seasons >= 3:
        score -= 10
        failures.append("Rarely made playoffs")

    win_pct_label = round_half_up(tenure.win_percentage * 100)
    if tenure.win_percentage >= 0.65:
        score += 15
        achievements.append(f"Outstanding {win_pct_label}% win rate")
    elif tenure.win_percentage >= 0.55:
        score += 8
        achievements.append(f"Solid {win_pct_label}% win rate")
    elif tenure.win_percentage < 0.4:
        score -= 15
        failures.append(f"Poor {win_pct_label}% win rate")
    elif tenure.win_percentage < 0.45:
        score -= 8
        failures.append(f"Below average {win_pct_label}% win rate")

    if tenure.total_seasons >= 10:
        score += 10
        achievements.append("Decade of leadership")
        moments.append("10-year anniversary celebration")
    elif tenure.total_seasons >= 5:
        score += 5
        achievements.append("Extended tenure")
    elif tenure.total_seasons <= 2:
        score -= 5
        failures.append("Brief tenure")

    if tenure.first_round_picks >= 5:
        moments.append("Multiple first-round draft selections")

    if tenure.coaches_fired >= 3:
        score -= 5
        failures.append("High coaching turnover")
    elif tenure.coaches_fired == 0 and tenure.total_seasons >= 3:
        score += 5
        achievements.append("Coaching stability")

    score = max(0, min(100, score))

    return LegacyRating(
        overall=LegacyTier.from_score(score),
        score=score,
        achievements=achievements,
        failures=failures,
        memorable_moments=moments
    )


def get_legacy_description(legacy: LegacyRating) -> str:
    return LEGACY_DESCRIPTIONS[legacy.overall]


# ==================== Record ====================

def get_firing_record_violations(record: FiringRecord) -> List[str]:
    violations = []
    if not record.gm_id:
        violations.append("gm_id is missing")
    if record.team_id is None:
        violations.append("team_id is missing")
    if not record.owner_id:
        violations.append("owner_id is missing")
    if record.season < 1:
        violations.append(f"season {record.season} is before season 1")
    if record.week < 0:
        violations.append(f"week {record.week} is negative")
    if not record.reason.primary_reason:
        violations.append("primary reason is missing")
    violations.extend(get_tenure_violations(record.tenure))
    if not SeasonRules.PATIENCE_MIN <= record.final_patience_value <= SeasonRules.PATIENCE_MAX:
        violations.append(f"final patience {record.final_patience_value} outside 0-100")
    return violations


def validate_firing_record(record: FiringRecord) -> bool:
    """True when the record may be displayed or persisted."""
    return not get_firing_record_violations(record)


def require_valid_firing_record(record: FiringRecord) -> FiringRecord:
    """
    Gate a firing record before it is used.

    Raises:
        InvariantViolationException: If any invariant is broken
    """
    violations = get_firing_record_violations(record)
    if violations:
        logger.warning(f"Rejected firing record for GM {record.gm_id}: {violations}")
        raise InvariantViolationException("firing record", violations)
    return record


def create_firing_record(
    gm_id: str,
    team_id: int,
    owner: OwnerProfile,
    season: int,
    week: int,
    tenure: TenureStats,
    patience_state: PatienceMeterState,
    context: FiringContext,
    contract_years_remaining: int,
    annual_salary: int,
    rng: Optional[random.Random] = None,
    gm_name: Optional[str] = None
) -> FiringRecord:
    """
    Assemble and validate the complete firing record.

    The departure counts as forced when ownership just changed.
    """
    was_forced = context.ownership_just_changed
    record = FiringRecord(
        gm_id=gm_id,
        team_id=team_id,
        owner_id=owner.owner_id,
        season=season,
        week=week,
        reason=generate_firing_reason(context, owner, patience_state, rng, gm_name),
        tenure=tenure,
        severance=calculate_severance(contract_years_remaining, annual_salary, was_forced, tenure),
        legacy=calculate_legacy(tenure),
        final_patience_value=patience_state.current_value,
        was_forced=was_forced
    )

    require_valid_firing_record(record)
    logger.info(
        f"GM {gm_id} fired by owner {owner.owner_id} in season {season} week {week}: "
        f"{record.reason.primary_reason} (legacy {record.legacy.overall.value})"
    )
    return record
