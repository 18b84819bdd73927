"""
Game Cycle - Week-by-week simulation of the schedule.

Plays each week's remaining games through a pluggable game engine, then
derives standings, playoff implications, injuries and headlines.
"""

from .game_engine import GameEngine, InstantResultEngine
from .week_models import (
    InjuryStatus,
    HeadlineImportance,
    InjuryReportEntry,
    NewsHeadline,
    SimulatedGame,
    SkippedGame,
    WeekResults,
    WeekSummary,
    WeekAdvancementResult,
)
from .week_simulator import (
    WeekSimulator,
    apply_results_to_teams,
    advance_week,
    get_user_team_game,
    get_week_games,
    get_week_summary,
    is_user_on_bye,
    rebuild_team_records,
)

__all__ = [
    "GameEngine",
    "InstantResultEngine",
    "InjuryStatus",
    "HeadlineImportance",
    "InjuryReportEntry",
    "NewsHeadline",
    "SimulatedGame",
    "SkippedGame",
    "WeekResults",
    "WeekSummary",
    "WeekAdvancementResult",
    "WeekSimulator",
    "apply_results_to_teams",
    "advance_week",
    "get_user_team_game",
    "get_week_games",
    "get_week_summary",
    "is_user_on_bye",
    "rebuild_team_records",
]
