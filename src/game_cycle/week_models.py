"""
Week simulation result models.

Plain, serializable data returned by the week simulator for presentation.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Any

from shared.league_models import ScheduledGame
from shared.game_result import GameResult
from playoff_system.standings_models import LeagueStandings, PlayoffImplication


class InjuryStatus(Enum):
    """Game status designation derived from weeks out."""
    PROBABLE = "probable"
    QUESTIONABLE = "questionable"
    DOUBTFUL = "doubtful"
    OUT = "out"

    @classmethod
    def from_weeks_out(cls, weeks_out: int) -> "InjuryStatus":
        """0 -> probable, 1 -> questionable, 2 -> doubtful, more -> out."""
        if weeks_out <= 0:
            return cls.PROBABLE
        if weeks_out == 1:
            return cls.QUESTIONABLE
        if weeks_out == 2:
            return cls.DOUBTFUL
        return cls.OUT


class HeadlineImportance(Enum):
    """Headline ranking, lower rank sorts first."""
    MAJOR = "major"
    NOTABLE = "notable"
    MINOR = "minor"

    @property
    def rank(self) -> int:
        return {"major": 0, "notable": 1, "minor": 2}[self.value]


@dataclass(frozen=True)
class InjuryReportEntry:
    player_id: str
    player_name: str
    team_id: int
    injury: str
    status: InjuryStatus
    weeks_remaining: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            'player_id': self.player_id,
            'player_name': self.player_name,
            'team_id': self.team_id,
            'injury': self.injury,
            'status': self.status.value,
            'weeks_remaining': self.weeks_remaining,
        }


@dataclass(frozen=True)
class NewsHeadline:
    headline: str
    importance: HeadlineImportance
    team_ids: List[int] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'headline': self.headline,
            'importance': self.importance.value,
            'team_ids': list(self.team_ids),
        }


@dataclass(frozen=True)
class SimulatedGame:
    """A schedule entry after simulation together with the engine's result."""
    game: ScheduledGame
    result: GameResult


@dataclass(frozen=True)
class SkippedGame:
    """A game that could not be simulated this week."""
    game_id: str
    reason: str


@dataclass
class WeekResults:
    """
    Aggregate output of one week's simulation.

    Attributes:
        week: Week that was simulated
        games: Games simulated this call (already-complete games are not repeated)
        schedule: Full schedule with this week's results applied
        standings: Standings over every completed game, not just this week
        playoff_implications: Implications for this week only
        injury_report: Injuries sustained this week
        news_headlines: Up to 5 headlines, most important first
        failures: Games skipped because a team was missing
    """
    week: int
    games: List[SimulatedGame]
    schedule: List[ScheduledGame]
    standings: LeagueStandings
    playoff_implications: List[PlayoffImplication] = field(default_factory=list)
    injury_report: List[InjuryReportEntry] = field(default_factory=list)
    news_headlines: List[NewsHeadline] = field(default_factory=list)
    failures: List[SkippedGame] = field(default_factory=list)

    @property
    def success(self) -> bool:
        """True if every eligible game was simulated."""
        return len(self.failures) == 0

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            'week': self.week,
            'games': [
                {'game': g.game.to_dict(), 'result': g.result.to_dict()}
                for g in self.games
            ],
            'standings': self.standings.to_dict(),
            'playoff_implications': [i.to_dict() for i in self.playoff_implications],
            'injury_report': [i.to_dict() for i in self.injury_report],
            'news_headlines': [h.to_dict() for h in self.news_headlines],
            'failures': [{'game_id': f.game_id, 'reason': f.reason} for f in self.failures],
        }


@dataclass(frozen=True)
class WeekSummary:
    total_games: int
    upsets: int
    high_scoring: int


@dataclass(frozen=True)
class WeekAdvancementResult:
    """Injury countdown after a week ends."""
    new_week: int
    recovered_players: List[str]
    injuries: Dict[str, int]
    fatigue_reset: bool = True
