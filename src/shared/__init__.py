"""
Shared league value types.

Team, schedule and game result classes that every engine component imports
without circular dependency issues.
"""

from shared.league_models import Team, TeamRecord, ScheduledGame
from shared.game_result import GameConfig, GameInjury, GameResult

__all__ = [
    'Team',
    'TeamRecord',
    'ScheduledGame',
    'GameConfig',
    'GameInjury',
    'GameResult',
]
