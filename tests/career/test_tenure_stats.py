"""
Tests for GM tenure bookkeeping.
"""

import pytest

from career.career_exceptions import InvariantViolationException
from career.tenure import (
    SeasonResult,
    TenureStats,
    create_default_tenure_stats,
    get_tenure_violations,
    record_coaching_change,
    record_draft_pick,
    record_free_agent_signing,
    require_valid_tenure_stats,
    update_tenure_stats,
    validate_tenure_stats,
)


class TestUpdateTenureStats:

    def test_season_added(self):
        stats = update_tenure_stats(
            create_default_tenure_stats(),
            SeasonResult(wins=12, losses=5, made_playoffs=True, won_division=True)
        )

        assert stats.total_seasons == 1
        assert stats.total_wins == 12
        assert stats.playoff_appearances == 1
        assert stats.division_titles == 1
        assert stats.win_percentage == pytest.approx(12 / 17)

    def test_win_percentage_refreshed_across_seasons(self):
        stats = create_default_tenure_stats()
        stats = update_tenure_stats(stats, SeasonResult(wins=4, losses=13))
        stats = update_tenure_stats(stats, SeasonResult(
            wins=13, losses=4, made_playoffs=True, won_conference=True,
            made_super_bowl=True, won_super_bowl=True
        ))

        assert stats.total_seasons == 2
        assert stats.win_percentage == 0.5
        assert stats.super_bowl_wins == 1
        assert stats.super_bowl_appearances == 1
        assert stats.conference_championships == 1

    def test_winless_season_without_games(self):
        stats = update_tenure_stats(TenureStats(), SeasonResult(wins=0, losses=0))
        assert stats.win_percentage == 0.0

    def test_original_is_unchanged(self):
        stats = TenureStats()
        update_tenure_stats(stats, SeasonResult(wins=9, losses=8))
        assert stats.total_seasons == 0


class TestCounters:

    def test_coaching_changes(self):
        stats = record_coaching_change(TenureStats(), hired=True)
        stats = record_coaching_change(stats, hired=False)

        assert (stats.coaches_hired, stats.coaches_fired) == (1, 1)

    def test_only_first_round_picks_count(self):
        stats = record_draft_pick(TenureStats(), 1)
        stats = record_draft_pick(stats, 2)

        assert stats.first_round_picks == 1

    def test_free_agent_signing(self):
        assert record_free_agent_signing(TenureStats()).major_free_agents == 1


class TestValidation:

    def test_default_is_valid(self):
        assert validate_tenure_stats(TenureStats())

    def test_violations_listed(self):
        stats = TenureStats(total_wins=-1, win_percentage=1.5, super_bowl_wins=1)

        violations = get_tenure_violations(stats)

        assert len(violations) == 3
        assert not validate_tenure_stats(stats)

    def test_require_valid_raises(self):
        with pytest.raises(InvariantViolationException) as exc_info:
            require_valid_tenure_stats(TenureStats(total_seasons=-2))

        assert exc_info.value.entity == "tenure stats"
        assert "total_seasons is negative (-2)" in exc_info.value.violations

    def test_to_dict_has_every_field(self):
        data = TenureStats(total_seasons=3).to_dict()

        assert data['total_seasons'] == 3
        assert len(data) == 13
