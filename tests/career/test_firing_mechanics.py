"""
Tests for the firing decision engine.

Covers the priority-ordered firing rules, reason selection, severance,
legacy scoring and the immutable firing record.
"""

import random
from unittest.mock import MagicMock

import pytest

from career.career_exceptions import InvariantViolationException
from career.firing_mechanics import (
    calculate_legacy,
    calculate_severance,
    create_firing_record,
    generate_firing_reason,
    generate_public_statement,
    get_legacy_description,
    should_fire,
    validate_firing_record,
)
from career.firing_models import (
    FiringContext,
    FiringReasonCategory,
    LegacyTier,
    SeasonExpectation,
)
from career.owner_models import OwnerProfile, OwnerTraits, PR_OBSESSED
from career.patience_meter import create_patience_meter_state, update_patience_value
from career.tenure import TenureStats


def _patience(value):
    return create_patience_meter_state("owner_1", value)


def _rng_rolling(value):
    rng = MagicMock()
    rng.random.return_value = value
    rng.choice.side_effect = lambda options: options[0]
    return rng


@pytest.fixture
def champion_tenure():
    return TenureStats(
        total_seasons=6,
        total_wins=66,
        total_losses=36,
        win_percentage=0.65,
        playoff_appearances=4,
        super_bowl_wins=1,
        super_bowl_appearances=1,
    )


class TestShouldFire:
    """Rules are evaluated in fixed priority order."""

    def test_patience_exhausted_overrides_everything(self, owner):
        context = FiringContext(
            consecutive_losing_seasons=5,
            major_scandals=4,
            owner_defiance_count=9,
            ownership_just_changed=True,
        )

        decision = should_fire(_patience(15), context, owner, _rng_rolling(0.0))

        assert (decision.should_fire, decision.is_immediate, decision.reason) == \
            (True, True, "Patience exhausted")

    def test_threshold_is_exclusive(self, owner):
        assert not should_fire(_patience(20), FiringContext(), owner).should_fire

    def test_scandals_need_pr_obsessed_owner(self):
        context = FiringContext(major_scandals=2)
        plain = OwnerProfile("owner_1")
        sensitive = OwnerProfile("owner_1", secondary_traits=(PR_OBSESSED,))

        assert not should_fire(_patience(60), context, plain).should_fire
        decision = should_fire(_patience(60), context, sensitive)
        assert decision.is_immediate
        assert decision.reason == "Multiple PR incidents with PR-sensitive ownership"

    def test_defiance_with_controlling_owner(self):
        owner = OwnerProfile("owner_1", traits=OwnerTraits(control=70))

        decision = should_fire(_patience(60), FiringContext(owner_defiance_count=3), owner)

        assert decision.should_fire and decision.is_immediate
        assert decision.reason == "Repeated defiance of controlling owner"

    def test_losing_with_impatient_owner_is_end_of_season(self):
        owner = OwnerProfile("owner_1", traits=OwnerTraits(patience=40))

        decision = should_fire(_patience(60), FiringContext(consecutive_losing_seasons=3), owner)

        assert decision.should_fire
        assert not decision.is_immediate
        assert decision.reason == "Extended losing with impatient owner"

    def test_housecleaning_uses_random_source(self, owner):
        context = FiringContext(ownership_just_changed=True)

        fired = should_fire(_patience(50), context, owner, _rng_rolling(0.1))
        kept = should_fire(_patience(50), context, owner, _rng_rolling(0.9))

        assert fired.should_fire and not fired.is_immediate
        assert fired.reason == "New ownership seeking fresh start"
        assert not kept.should_fire

    def test_housecleaning_skipped_above_ceiling(self, owner):
        rng = _rng_rolling(0.0)

        decision = should_fire(_patience(60), FiringContext(ownership_just_changed=True), owner, rng)

        assert not decision.should_fire
        rng.random.assert_not_called()

    def test_season_end_rules_skipped_mid_season(self):
        owner = OwnerProfile("owner_1", traits=OwnerTraits(patience=40))
        context = FiringContext(consecutive_losing_seasons=3, ownership_just_changed=True)
        rng = _rng_rolling(0.0)

        decision = should_fire(_patience(50), context, owner, rng, include_season_end_rules=False)

        assert not decision.should_fire
        rng.random.assert_not_called()

    def test_immediate_rules_still_apply_mid_season(self, owner):
        decision = should_fire(_patience(10), FiringContext(), owner, include_season_end_rules=False)

        assert decision.should_fire and decision.is_immediate

    def test_deterministic_with_seeded_source(self, owner):
        context = FiringContext(ownership_just_changed=True)

        first = [should_fire(_patience(40), context, owner, random.Random(11)) for _ in range(5)]
        second = [should_fire(_patience(40), context, owner, random.Random(11)) for _ in range(5)]

        assert first == second


class TestFiringReason:
    """Category priority: pr > relationship > expectations > performance > ownership > other."""

    def test_pr_beats_relationship(self, owner):
        context = FiringContext(major_scandals=1, owner_defiance_count=3)

        reason = generate_firing_reason(context, owner, _patience(10), _rng_rolling(0.0))

        assert reason.category == FiringReasonCategory.PR
        assert reason.primary_reason == "Organizational accountability"
        assert reason.internal_reason == "Organizational accountability. 3 owner directive(s) ignored."

    def test_expectations_require_contender(self, owner):
        contender = FiringContext(
            missed_playoffs_count=2,
            consecutive_losing_seasons=2,
            season_expectation=SeasonExpectation.CONTENDER,
        )
        rebuild = FiringContext(missed_playoffs_count=2, consecutive_losing_seasons=2)

        assert generate_firing_reason(contender, owner, _patience(10)).category == \
            FiringReasonCategory.EXPECTATIONS
        assert generate_firing_reason(rebuild, owner, _patience(10)).category == \
            FiringReasonCategory.PERFORMANCE

    def test_fallback_is_other(self, owner):
        reason = generate_firing_reason(FiringContext(), owner, _patience(10))

        assert reason.category == FiringReasonCategory.OTHER
        assert reason.primary_reason == "Loss of confidence in leadership"

    def test_internal_reason_mentions_patience_decline(self, owner):
        state = _patience(40)
        for week in range(1, 4):
            state = update_patience_value(state, -6, week, 2025, "loss")

        reason = generate_firing_reason(FiringContext(consecutive_losing_seasons=2), owner, state)

        assert reason.internal_reason == (
            "Failure to improve team performance. 2 losing season(s). "
            "Consistent decline in owner confidence."
        )

    def test_public_statement_fills_gm_name(self):
        statement = generate_public_statement(
            FiringReasonCategory.PERFORMANCE, _rng_rolling(0.0), gm_name="Alex Morgan"
        )

        assert statement == "We thank Alex Morgan for their efforts and wish them well in future endeavors."


class TestSeverance:

    def test_championship_severance(self):
        tenure = TenureStats(
            total_seasons=4,
            win_percentage=0.65,
            super_bowl_wins=1,
            super_bowl_appearances=1,
        )

        package = calculate_severance(2, 3_000_000, False, tenure)

        assert package.total_value == 6_600_000
        assert package.performance_bonus == 600_000
        assert package.description == "Substantial severance package"

    @pytest.mark.parametrize("years,salary", [(0, 2_000_000), (1, 900_000), (3, 4_000_000), (5, 5_000_000)])
    def test_forced_never_exceeds_unforced(self, champion_tenure, years, salary):
        forced = calculate_severance(years, salary, True, champion_tenure)
        unforced = calculate_severance(years, salary, False, champion_tenure)

        assert forced.total_value <= unforced.total_value

    def test_forced_modifier(self):
        package = calculate_severance(2, 1_000_000, True, TenureStats())

        assert package.total_value == 1_500_000
        assert package.description == "Standard severance package"

    @pytest.mark.parametrize("years,salary,description", [
        (0, 1_000_000, "Contract expired - no severance due"),
        (1, 500_000, "Modest severance package"),
        (3, 4_000_000, "Golden parachute severance"),
    ])
    def test_descriptions(self, years, salary, description):
        assert calculate_severance(years, salary, False, TenureStats()).description == description

    def test_invalid_tenure_rejected(self):
        bad = TenureStats(super_bowl_wins=2, super_bowl_appearances=1)

        with pytest.raises(InvariantViolationException) as exc_info:
            calculate_severance(1, 1_000_000, False, bad)

        assert exc_info.value.error_code == "CAREER_INVARIANT_001"


class TestLegacy:

    def test_stored_win_percentage_drives_score(self):
        # win_percentage is stored, not derived from 40-40
        tenure = TenureStats(
            total_seasons=5,
            total_wins=40,
            total_losses=40,
            playoff_appearances=3,
            division_titles=1,
        )

        legacy = calculate_legacy(tenure)

        assert legacy.score == 58
        assert 40 < legacy.score < 60
        assert legacy.overall == LegacyTier.AVERAGE
        assert "Poor 0% win rate" in legacy.failures

    def test_monotonic_in_championships(self):
        scores = [
            calculate_legacy(TenureStats(
                total_seasons=8,
                win_percentage=0.55,
                playoff_appearances=4,
                super_bowl_wins=wins,
                super_bowl_appearances=3,
            )).score
            for wins in range(4)
        ]

        assert scores == sorted(scores)

    def test_score_clamped(self):
        dynasty = TenureStats(
            total_seasons=12,
            win_percentage=0.75,
            playoff_appearances=11,
            division_titles=9,
            conference_championships=4,
            super_bowl_wins=3,
            super_bowl_appearances=4,
        )

        legacy = calculate_legacy(dynasty)

        assert legacy.score == 100
        assert legacy.overall == LegacyTier.LEGENDARY
        assert "Decade of leadership" in legacy.achievements
        assert get_legacy_description(legacy).startswith("Will be remembered")

    def test_brief_failed_tenure(self):
        legacy = calculate_legacy(TenureStats(total_seasons=1, win_percentage=0.2))

        assert legacy.score == 30
        assert legacy.overall == LegacyTier.POOR
        assert "Brief tenure" in legacy.failures


class TestFiringRecord:

    def test_record_snapshot(self, owner, champion_tenure):
        context = FiringContext(ownership_just_changed=True)

        record = create_firing_record(
            gm_id="gm_1",
            team_id=3,
            owner=owner,
            season=2027,
            week=9,
            tenure=champion_tenure,
            patience_state=_patience(12),
            context=context,
            contract_years_remaining=2,
            annual_salary=2_000_000,
            rng=_rng_rolling(0.0),
            gm_name="Alex Morgan",
        )

        assert record.was_forced
        assert record.final_patience_value == 12
        assert record.reason.category == FiringReasonCategory.OWNERSHIP_CHANGE
        assert record.severance.total_value == round((4_000_000 + 600_000) * 0.75)
        assert validate_firing_record(record)

    def test_public_summary_hides_internal_reason(self, owner):
        record = create_firing_record(
            "gm_1", 3, owner, 2026, 5, TenureStats(), _patience(10),
            FiringContext(owner_defiance_count=2), 1, 1_000_000, _rng_rolling(0.0)
        )

        summary = record.public_summary()

        assert 'internal_reason' not in summary
        assert record.reason.internal_reason not in summary.values()
        assert record.to_dict()['reason']['internal_reason'] == record.reason.internal_reason
