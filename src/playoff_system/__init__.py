"""
Playoff System

Standings, playoff implication and bracket components. Standings are recomputed from
the full set of completed games every week.
"""

from .standings_models import (
    TeamStanding,
    LeagueStandings,
    HeadToHeadRecord,
    PlayoffPosition,
    ImplicationType,
    PlayoffImplication,
    ConferencePlayoffTeams,
)
from .standings_calculator import (
    StandingsCalculator,
    calculate_standings,
    get_team_standing,
    determine_playoff_teams,
    sort_standings,
)
from .implication_analyzer import PlayoffImplicationAnalyzer, generate_playoff_implications
from .playoff_manager import PlayoffManager, create_conference_matchups, get_playoff_loser

__all__ = [
    'TeamStanding',
    'LeagueStandings',
    'HeadToHeadRecord',
    'PlayoffPosition',
    'ImplicationType',
    'PlayoffImplication',
    'ConferencePlayoffTeams',
    'StandingsCalculator',
    'calculate_standings',
    'get_team_standing',
    'determine_playoff_teams',
    'sort_standings',
    'PlayoffImplicationAnalyzer',
    'generate_playoff_implications',
    'PlayoffManager',
    'create_conference_matchups',
    'get_playoff_loser',
]
