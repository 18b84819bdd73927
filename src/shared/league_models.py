"""
League value types: teams, their records and the schedule.

All classes are frozen dataclasses. Updates return new instances so a league
snapshot can be handed to the engine and the previous one kept untouched.
"""

from dataclasses import dataclass, field, replace
from typing import Optional, Dict, Any

from config.season_rules import SeasonRules


@dataclass(frozen=True)
class TeamRecord:
    """
    Win/loss record folded from completed games.

    Attributes:
        streak: Signed streak, positive = consecutive wins, negative = losses.
            A tie resets it to 0.
    """
    wins: int = 0
    losses: int = 0
    ties: int = 0
    points_for: int = 0
    points_against: int = 0
    streak: int = 0

    def __post_init__(self):
        for name in ('wins', 'losses', 'ties', 'points_for', 'points_against'):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be non-negative, got {getattr(self, name)}")

    @property
    def games_played(self) -> int:
        return self.wins + self.losses + self.ties

    @property
    def win_percentage(self) -> float:
        """Ties count as half a win; 0.0 before any game is played."""
        if self.games_played == 0:
            return 0.0
        return (self.wins + 0.5 * self.ties) / self.games_played

    @property
    def point_differential(self) -> int:
        return self.points_for - self.points_against

    @property
    def record_str(self) -> str:
        """Get record as string (e.g., '13-4' or '10-6-1')."""
        if self.ties > 0:
            return f"{self.wins}-{self.losses}-{self.ties}"
        return f"{self.wins}-{self.losses}"

    def apply_result(self, own_score: int, opponent_score: int) -> 'TeamRecord':
        """Return a new record with one more game folded in."""
        if own_score > opponent_score:
            streak = self.streak + 1 if self.streak > 0 else 1
            return replace(
                self,
                wins=self.wins + 1,
                points_for=self.points_for + own_score,
                points_against=self.points_against + opponent_score,
                streak=streak
            )
        if own_score < opponent_score:
            streak = self.streak - 1 if self.streak < 0 else -1
            return replace(
                self,
                losses=self.losses + 1,
                points_for=self.points_for + own_score,
                points_against=self.points_against + opponent_score,
                streak=streak
            )
        return replace(
            self,
            ties=self.ties + 1,
            points_for=self.points_for + own_score,
            points_against=self.points_against + opponent_score,
            streak=0
        )


@dataclass(frozen=True)
class Team:
    """
    A franchise as seen by the season engine.

    Attributes:
        team_id: Unique team identifier
        nickname: Short name used in headlines (e.g., "Bears")
        conference: Conference code (e.g., "AFC")
        division: Division name within the conference (e.g., "North")
        record: Current season record
    """
    team_id: int
    nickname: str
    conference: str
    division: str
    record: TeamRecord = field(default_factory=TeamRecord)

    @property
    def division_key(self) -> str:
        """Unique division name across conferences (e.g., 'AFC North')."""
        return f"{self.conference} {self.division}"


@dataclass(frozen=True)
class ScheduledGame:
    """
    One entry of the season schedule.

    Once is_complete is True the scores and winner are final. winner_id stays
    None for ties and for games not yet played.
    """
    game_id: str
    week: int
    home_team_id: int
    away_team_id: int
    is_complete: bool = False
    home_score: Optional[int] = None
    away_score: Optional[int] = None
    winner_id: Optional[int] = None

    def __post_init__(self):
        if not 1 <= self.week <= SeasonRules.PLAYOFF_LAST_WEEK:
            raise ValueError(
                f"Week must be 1-{SeasonRules.PLAYOFF_LAST_WEEK}, got {self.week}"
            )
        if self.home_team_id == self.away_team_id:
            raise ValueError(f"Team {self.home_team_id} cannot play itself")

    @property
    def is_playoff(self) -> bool:
        return self.week >= SeasonRules.PLAYOFF_FIRST_WEEK

    @property
    def is_tie(self) -> bool:
        return self.is_complete and self.home_score == self.away_score

    def involves(self, team_id: int) -> bool:
        return team_id in (self.home_team_id, self.away_team_id)

    def opponent_of(self, team_id: int) -> int:
        return self.away_team_id if team_id == self.home_team_id else self.home_team_id

    def complete(self, home_score: int, away_score: int) -> 'ScheduledGame':
        """
        Return a completed copy of this game.

        Raises:
            ValueError: If the game is already complete or a score is negative
        """
        if self.is_complete:
            raise ValueError(f"Game {self.game_id} is already complete")
        if home_score < 0 or away_score < 0:
            raise ValueError(f"Scores must be non-negative, got {home_score}-{away_score}")

        if home_score > away_score:
            winner_id = self.home_team_id
        elif away_score > home_score:
            winner_id = self.away_team_id
        else:
            winner_id = None

        return replace(
            self,
            is_complete=True,
            home_score=home_score,
            away_score=away_score,
            winner_id=winner_id
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization"""
        return {
            'game_id': self.game_id,
            'week': self.week,
            'home_team_id': self.home_team_id,
            'away_team_id': self.away_team_id,
            'is_complete': self.is_complete,
            'home_score': self.home_score,
            'away_score': self.away_score,
            'winner_id': self.winner_id,
        }
