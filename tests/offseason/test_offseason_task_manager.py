"""
Tests for the offseason phase/task manager.

Covers phase ordering, task completion, refusal strings, external
validation gates, simulation and transaction recording.
"""

import logging
from dataclasses import replace

import pytest

from offseason.offseason_phases import OffseasonPhase
from offseason.offseason_tasks import (
    CompletionCondition,
    OffseasonContext,
    TaskActionType,
    check_phase_gate,
    get_phase_tasks,
)
from offseason.offseason_manager import (
    PlayerRelease,
    PlayerSigning,
    advance_day,
    advance_phase,
    are_all_tasks_complete,
    auto_complete_phase,
    can_advance,
    complete_task,
    create_offseason_state,
    get_phase_events,
    get_progress,
    get_recent_events,
    get_summary,
    record_release,
    record_roster_change,
    record_signing,
    reset_phase,
    simulate_remaining_offseason,
    validate_offseason_state,
)


SIMULATED = OffseasonContext.simulated()


@pytest.fixture
def state():
    return create_offseason_state(2025)


def advance_to(state, phase):
    """Walk the offseason forward until `phase` is current."""
    while state.current_phase != phase:
        state = advance_phase(auto_complete_phase(state, SIMULATED), SIMULATED)
        assert not isinstance(state, str), state
    return state


def _signing(name="Jordan Hale", signing_type='free_agent'):
    return PlayerSigning(
        player_id=f"p-{name}",
        player_name=name,
        position="WR",
        team_id=3,
        contract_years=3,
        contract_value=24_000_000,
        signing_type=signing_type,
    )


class TestOffseasonPhase:
    """Fixed twelve-phase order."""

    def test_order_and_numbers(self):
        phases = OffseasonPhase.ordered()

        assert len(phases) == 12
        assert phases[0] == OffseasonPhase.SEASON_END
        assert phases[-1] == OffseasonPhase.SEASON_START
        assert [p.phase_number for p in phases] == list(range(1, 13))

    def test_from_number(self):
        assert OffseasonPhase.from_number(6) == OffseasonPhase.DRAFT
        with pytest.raises(ValueError):
            OffseasonPhase.from_number(13)

    def test_display_names(self):
        assert str(OffseasonPhase.DRAFT) == "NFL Draft"
        assert OffseasonPhase.get_display_name(OffseasonPhase.UDFA) == "UDFA Signing"
        assert OffseasonPhase.FINAL_CUTS.description == "Cut roster to 53 players"

    def test_next_phase(self):
        assert OffseasonPhase.DRAFT.next_phase == OffseasonPhase.UDFA
        assert OffseasonPhase.SEASON_START.next_phase is None


class TestTaskTable:

    def test_every_phase_has_exactly_one_required_task(self):
        for phase in OffseasonPhase.ordered():
            required = [t for t in get_phase_tasks(phase) if t.is_required]
            assert len(required) == 1, phase

    def test_special_tasks(self):
        make_picks = get_phase_tasks(OffseasonPhase.DRAFT)[0]
        cut_to_53 = get_phase_tasks(OffseasonPhase.FINAL_CUTS)[0]

        assert make_picks.completion_condition == CompletionCondition.DRAFT_COMPLETE
        assert cut_to_53.action_type == TaskActionType.VALIDATE
        assert cut_to_53.completion_condition.value == "roster_size<=53"


class TestCreateOffseasonState:

    def test_starts_at_season_end(self, state):
        assert state.current_phase == OffseasonPhase.SEASON_END
        assert state.phase_day == 1
        assert not state.is_complete
        assert len(state.phase_tasks) == 12
        assert state.events[0].event_id == "event-2025-1"
        assert state.events[0].description == "Season End phase begins"
        assert validate_offseason_state(state)

    @pytest.mark.parametrize("year", [1999, 2101])
    def test_year_out_of_range(self, year):
        with pytest.raises(ValueError):
            create_offseason_state(year)


class TestCompleteTask:

    def test_marks_task_and_logs_event(self, state):
        updated = complete_task(state, 'view_recap')

        assert updated.current_tasks.get_task('view_recap').is_complete
        assert updated.current_tasks.tasks_completed == ('view_recap',)
        assert updated.events[-1].description == "Completed: View Season Recap"
        assert not state.current_tasks.get_task('view_recap').is_complete

    def test_unknown_task_is_a_no_op(self, state):
        assert complete_task(state, 'sign_players') is state

    def test_completing_twice_is_a_no_op(self, state):
        once = complete_task(state, 'view_recap')
        assert complete_task(once, 'view_recap') is once

    def test_all_tasks(self, state):
        for task_id in ('view_recap', 'view_awards', 'view_draft_order'):
            state = complete_task(state, task_id)

        assert are_all_tasks_complete(state)


class TestAdvancePhase:

    def test_refused_with_required_tasks_open(self, state):
        result = advance_phase(state)

        assert result == "Cannot leave Season End: required tasks incomplete (View Season Recap)"
        assert state.current_phase == OffseasonPhase.SEASON_END
        assert not can_advance(state)

    def test_advances_after_required_task(self, state):
        state = advance_day(advance_day(state))

        result = advance_phase(complete_task(state, 'view_recap'))

        assert result.current_phase == OffseasonPhase.COACHING_DECISIONS
        assert result.phase_day == 1
        assert result.completed_phases == (OffseasonPhase.SEASON_END,)
        assert [e.event_type for e in result.events[-2:]] == ['phase_complete', 'phase_start']
        assert get_phase_events(result, OffseasonPhase.COACHING_DECISIONS)[0].description == \
            "Coaching Decisions phase begins"

    def test_optional_tasks_do_not_block(self, state):
        assert can_advance(complete_task(state, 'view_recap'))


class TestDraftGate:

    def test_make_picks_needs_completed_draft(self, state):
        state = advance_to(state, OffseasonPhase.DRAFT)

        assert complete_task(state, 'make_picks') is state

        done = complete_task(state, 'make_picks', OffseasonContext(draft_complete=True))
        assert done.current_tasks.get_task('make_picks').is_complete

    def test_gate_rechecked_when_leaving(self, state):
        state = advance_to(state, OffseasonPhase.DRAFT)
        state = complete_task(state, 'make_picks', OffseasonContext(draft_complete=True))

        refusal = advance_phase(state, OffseasonContext(draft_complete=False))

        assert refusal == "Cannot leave NFL Draft: The draft is not complete"
        assert advance_phase(state, SIMULATED).current_phase == OffseasonPhase.UDFA


class TestFinalCuts:

    def test_cut_to_53_validation(self, state):
        state = advance_to(state, OffseasonPhase.FINAL_CUTS)

        assert complete_task(state, 'cut_to_53', OffseasonContext(active_roster_size=60)) is state

        done = complete_task(state, 'cut_to_53', OffseasonContext(active_roster_size=53))
        assert done.current_tasks.get_task('cut_to_53').is_complete

    def test_roster_over_limit_blocks_advance(self, state):
        state = advance_to(state, OffseasonPhase.FINAL_CUTS)
        state = complete_task(state, 'cut_to_53', OffseasonContext(active_roster_size=53))

        refusal = advance_phase(state, OffseasonContext(active_roster_size=60))

        assert refusal == "Cannot leave Final Cuts: Active roster has 60 players; cut to 53 before continuing"

    def test_unknown_roster_size_fails(self):
        assert check_phase_gate(OffseasonPhase.FINAL_CUTS, OffseasonContext()) == \
            "Active roster size unknown; it must be at most 53"
        assert check_phase_gate(OffseasonPhase.COMBINE, OffseasonContext()) is None


class TestSimulation:

    def test_simulate_to_completion(self, state):
        final = simulate_remaining_offseason(state)

        assert final.is_complete
        assert len(final.completed_phases) == 12
        assert final.current_phase == OffseasonPhase.SEASON_START
        assert final.events[-1].description == "Offseason complete! Ready for the new season."
        assert get_progress(final).percent_complete == 100
        assert validate_offseason_state(final)

    def test_complete_offseason_refuses_further_advance(self, state):
        final = simulate_remaining_offseason(state)

        assert advance_phase(final, SIMULATED) == "The offseason is already complete"

    def test_simulation_stops_at_failing_gate(self, state, caplog):
        context = OffseasonContext(active_roster_size=53, draft_complete=False)

        with caplog.at_level(logging.WARNING, logger="offseason.offseason_manager"):
            stopped = simulate_remaining_offseason(state, context)

        assert stopped.current_phase == OffseasonPhase.DRAFT
        assert not stopped.is_complete
        assert "Offseason simulation stopped at NFL Draft" in caplog.text

    def test_event_ids_are_deterministic(self):
        first = simulate_remaining_offseason(create_offseason_state(2030))
        second = simulate_remaining_offseason(create_offseason_state(2030))

        assert [e.event_id for e in first.events] == [e.event_id for e in second.events]
        assert first.events[-1].event_id == f"event-2030-{len(first.events)}"


class TestProgress:

    @pytest.mark.parametrize("phases_done,percent", [(0, 0), (1, 8), (3, 25), (6, 50), (11, 92)])
    def test_percent_complete(self, state, phases_done, percent):
        state = advance_to(state, OffseasonPhase.from_number(phases_done + 1))

        progress = get_progress(state)

        assert progress.completed_phases == phases_done
        assert progress.percent_complete == percent
        assert progress.current_phase_number == phases_done + 1

    def test_can_advance_reflects_context(self, state):
        state = advance_to(state, OffseasonPhase.DRAFT)
        state = complete_task(state, 'make_picks', SIMULATED)

        assert not get_progress(state).can_advance
        assert get_progress(state, SIMULATED).can_advance


class TestAutoTasks:
    """AUTO tasks complete themselves when their phase starts."""

    def test_completed_on_phase_entry(self, state):
        state = advance_to(state, OffseasonPhase.SEASON_START)

        tasks = state.current_tasks
        assert tasks.get_task('media_projections').is_complete
        assert tasks.get_task('set_goals').is_complete
        assert not tasks.get_task('view_expectations').is_complete

    def test_logged_after_phase_start(self, state):
        state = advance_to(state, OffseasonPhase.SEASON_START)

        events = get_phase_events(state, OffseasonPhase.SEASON_START)

        assert [e.event_type for e in events] == ['phase_start', 'task_complete', 'task_complete']
        assert events[1].description == "Completed: View Media Projections"

    def test_only_required_task_left(self, state):
        state = advance_to(state, OffseasonPhase.SEASON_START)
        assert not get_progress(state).all_tasks_complete

        state = complete_task(state, 'view_expectations')

        assert get_progress(state).all_tasks_complete

    def test_reset_of_current_phase_keeps_auto_tasks_done(self, state):
        state = advance_to(state, OffseasonPhase.SEASON_START)

        reset = reset_phase(state, OffseasonPhase.SEASON_START)

        assert reset.current_tasks.get_task('set_goals').is_complete


class TestResetPhase:

    def test_reset_restores_tasks(self, state):
        state = advance_to(state, OffseasonPhase.COMBINE)

        reset = reset_phase(state, OffseasonPhase.SEASON_END)

        assert OffseasonPhase.SEASON_END not in reset.completed_phases
        assert not reset.phase_tasks[OffseasonPhase.SEASON_END].required_complete
        assert reset.current_phase == OffseasonPhase.COMBINE


class TestTransactions:

    def test_signing_satisfies_has_signed(self, state):
        state = advance_to(state, OffseasonPhase.FREE_AGENCY)
        assert complete_task(state, 'sign_players') is state

        state = record_signing(state, _signing())
        state = complete_task(state, 'sign_players')

        assert state.current_tasks.get_task('sign_players').is_complete

    def test_summary_counts(self, state):
        state = record_signing(state, _signing("A One"))
        state = record_signing(state, _signing("B Two", 'udfa'))
        state = record_release(state, PlayerRelease("p9", "C Three", "LB", 3, cap_savings=2_000_000))
        state = record_roster_change(state, 'trade', "p10", "D Four", "CB", 3)

        summary = get_summary(state)

        assert summary.total_signings == 2
        assert summary.total_releases == 1
        assert summary.total_roster_moves == 1
        assert [e.event_type for e in summary.key_events] == \
            ['signing', 'signing', 'release', 'roster_change']
        assert state.roster_changes[0].change_id == "roster-2025-1"

    def test_summary_keeps_latest_ten_key_events(self, state):
        for n in range(12):
            state = record_signing(state, _signing(f"Player {n}"))

        key_events = get_summary(state).key_events

        assert len(key_events) == 10
        assert key_events[-1].description == "Signed Player 11 (WR)"

    def test_recent_events_newest_first(self, state):
        state = record_signing(state, _signing())

        recent = get_recent_events(state, limit=2)

        assert recent[0].event_type == 'signing'
        assert recent[1].event_type == 'phase_start'

    @pytest.mark.parametrize("factory", [
        lambda: _signing(signing_type='trade'),
        lambda: PlayerRelease("p1", "X", "QB", 1, release_type='retired'),
    ])
    def test_invalid_types_rejected(self, factory):
        with pytest.raises(ValueError):
            factory()

    def test_invalid_roster_change_type(self, state):
        with pytest.raises(ValueError):
            record_roster_change(state, 'holdout', "p1", "X", "QB", 1)


class TestValidation:

    def test_bad_phase_day(self, state):
        assert not validate_offseason_state(replace(state, phase_day=0))

    def test_completed_phase_ahead_of_current(self, state):
        bad = replace(state, completed_phases=(OffseasonPhase.DRAFT,))
        assert not validate_offseason_state(bad)
