"""
Tests for the owner patience meter.

Covers weekly change bands, trait modifiers, clamping, history recording and
the qualitative view shown to the player.
"""

import pytest

from career.owner_models import JobSecurityLevel, OwnerProfile, OwnerTraits
from career.patience_meter import (
    PatienceTrend,
    calculate_trend,
    calculate_weekly_change,
    create_patience_meter_state,
    create_patience_view_model,
    get_distance_to_next_threshold,
    get_impact_description,
    get_patience_summary,
    get_points_to_improve,
    get_season_change,
    process_week_end,
    round_half_up,
    start_new_season,
    update_patience_value,
    validate_patience_meter_state,
)
from shared.league_models import TeamRecord


def _owner(patience_trait=50, meter=50):
    return OwnerProfile(
        owner_id="owner_1",
        traits=OwnerTraits(patience=patience_trait),
        patience_meter=meter
    )


def _meter_with_values(*values):
    """Build a meter whose history walks through the given values."""
    state = create_patience_meter_state("owner_1", values[0])
    for week, value in enumerate(values[1:], start=2):
        state = update_patience_value(state, value - state.current_value, week, 2025, "step")
    return state


class TestRoundHalfUp:

    @pytest.mark.parametrize("value,expected", [
        (1.5, 2),
        (0.5, 1),
        (-1.5, -1),
        (-2.5, -2),
        (-6.0, -6),
        (2.4, 2),
    ])
    def test_rounding(self, value, expected):
        assert round_half_up(value) == expected


class TestWeeklyChange:
    """Base band times owner patience modifier."""

    @pytest.mark.parametrize("wins,losses,expected", [
        (7, 3, 3),   # 0.70 -> +3
        (5, 5, 1),   # 0.50 -> +1
        (4, 6, -2),  # 0.40 -> -2
        (3, 7, -4),  # 0.30 -> -4
        (0, 0, 1),   # no decisive games counts as .500
    ])
    def test_bands_for_neutral_owner(self, wins, losses, expected):
        record = TeamRecord(wins=wins, losses=losses)
        assert calculate_weekly_change(record, _owner()) == expected

    def test_ties_are_ignored(self):
        record = TeamRecord(wins=1, losses=1, ties=5)
        assert calculate_weekly_change(record, _owner()) == 1

    def test_impatient_owner_amplifies(self):
        record = TeamRecord(wins=0, losses=3)
        assert calculate_weekly_change(record, _owner(patience_trait=20)) == -6

    def test_impatient_owner_rounds_half_up(self):
        record = TeamRecord(wins=5, losses=5)
        assert calculate_weekly_change(record, _owner(patience_trait=20)) == 2

    def test_patient_owner_softens(self):
        assert calculate_weekly_change(TeamRecord(wins=1, losses=3), _owner(patience_trait=80)) == -2
        assert calculate_weekly_change(TeamRecord(wins=8, losses=2), _owner(patience_trait=80)) == 2
        assert calculate_weekly_change(TeamRecord(wins=4, losses=6), _owner(patience_trait=80)) == -1


class TestProcessWeekEnd:
    """Weekly processing against the meter state."""

    def test_creates_meter_from_owner(self):
        state = process_week_end(None, _owner(meter=65), TeamRecord(wins=1), week=1, year=2025)

        assert state.history[0].description == "Initial hire"
        assert state.history[0].value == 65
        assert state.current_value == 68
        assert state.last_week_value == 65

    def test_positive_description(self):
        state = process_week_end(None, _owner(), TeamRecord(wins=5, losses=1), 6, 2025)
        assert state.history[-1].description == "Team performance: 5-1"

    def test_negative_description(self):
        state = process_week_end(None, _owner(), TeamRecord(wins=1, losses=3), 4, 2025)
        assert state.history[-1].description == "Concerns over 3 losses"

    def test_value_clamped_at_ceiling(self):
        state = create_patience_meter_state("owner_1", 99)

        updated = process_week_end(state, _owner(), TeamRecord(wins=9, losses=1), 10, 2025)

        assert updated.current_value == 100
        assert updated.history[-1].delta == 3
        assert updated.history[-1].value == 100

    def test_value_clamped_at_floor(self):
        state = create_patience_meter_state("owner_1", 2)

        updated = process_week_end(state, _owner(patience_trait=10), TeamRecord(losses=8), 8, 2025)

        assert updated.current_value == 0
        assert validate_patience_meter_state(updated)

    def test_state_is_not_mutated(self):
        state = create_patience_meter_state("owner_1", 50)
        process_week_end(state, _owner(), TeamRecord(losses=4), 4, 2025)

        assert state.current_value == 50
        assert len(state.history) == 1


class TestUpdateCounters:

    def test_declines_and_improvements_alternate(self):
        state = create_patience_meter_state("owner_1", 50)
        state = update_patience_value(state, -2, 1, 2025, "loss")
        state = update_patience_value(state, -2, 2, 2025, "loss")
        assert state.consecutive_declines == 2

        state = update_patience_value(state, 3, 3, 2025, "win")
        assert state.consecutive_declines == 0
        assert state.consecutive_improvements == 1

    def test_zero_change_keeps_counters(self):
        state = update_patience_value(create_patience_meter_state("owner_1"), -2, 1, 2025, "loss")
        state = update_patience_value(state, 0, 2, 2025, "flat")

        assert state.consecutive_declines == 1

    def test_start_new_season(self):
        state = _meter_with_values(50, 60)
        assert start_new_season(state).season_start_value == 60


class TestSecurityLevels:

    @pytest.mark.parametrize("value,level,label", [
        (100, JobSecurityLevel.SECURE, "secure"),
        (70, JobSecurityLevel.SECURE, "secure"),
        (69, JobSecurityLevel.STABLE, "stable"),
        (49, JobSecurityLevel.WARM_SEAT, "warm seat"),
        (34, JobSecurityLevel.HOT_SEAT, "hot seat"),
        (20, JobSecurityLevel.HOT_SEAT, "hot seat"),
        (19, JobSecurityLevel.FIRED, "danger"),
    ])
    def test_from_patience(self, value, level, label):
        assert JobSecurityLevel.from_patience(value) == level
        assert level.status_label == label

    def test_distance_helpers(self):
        state = create_patience_meter_state("owner_1", 42)

        assert get_distance_to_next_threshold(state) == 7
        assert get_points_to_improve(state) == 8
        assert get_points_to_improve(create_patience_meter_state("owner_1", 90)) is None
        assert get_distance_to_next_threshold(create_patience_meter_state("owner_1", 5)) is None


class TestViewModel:
    """The player sees qualitative values only."""

    def test_trend_needs_three_entries(self):
        assert calculate_trend(_meter_with_values(50, 30)) == PatienceTrend.STABLE

    def test_declining_trend(self):
        state = _meter_with_values(50, 46, 42, 38)

        view = create_patience_view_model(state)

        assert view.trend == PatienceTrend.DECLINING
        assert view.status == "warm seat"
        assert view.trend_description == "Owner patience is wearing thin"
        assert view.weekly_change == "worsened"
        assert view.urgency_level == "medium"
        assert not view.is_at_risk

    def test_improving_trend_from_hot_seat(self):
        state = _meter_with_values(20, 24, 28, 32)

        view = create_patience_view_model(state)

        assert view.trend == PatienceTrend.IMPROVING
        assert view.trend_description == "Owner confidence is recovering"
        assert view.is_at_risk
        assert view.urgency_level == "high"

    def test_season_change(self):
        state = _meter_with_values(50, 75)
        assert get_season_change(state) == "much better"
        assert get_season_change(start_new_season(state)) == "same"

    @pytest.mark.parametrize("change,description", [
        (30, "major boost"),
        (3, "slight boost"),
        (0, "no change"),
        (-3, "slight concern"),
        (-10, "moderate concern"),
        (-25, "major concern"),
    ])
    def test_impact_description(self, change, description):
        assert get_impact_description(change) == description

    def test_patience_summary(self):
        summary = get_patience_summary(_meter_with_values(50, 55, 45, 47))

        assert summary['total_changes'] == 3
        assert summary['positive_changes'] == 2
        assert summary['biggest_gain'] == 5
        assert summary['biggest_loss'] == -10
        assert summary['average_change'] == -1.0
