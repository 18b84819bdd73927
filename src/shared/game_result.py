"""
Shared Game Result Classes

The contract between the week simulator and whatever game engine plays the
games. The season engine never computes play outcomes itself.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Any


@dataclass(frozen=True)
class GameConfig:
    """Configuration handed to the game engine for a single game"""
    home_team_id: int
    away_team_id: int
    week: int
    is_playoff: bool = False


@dataclass(frozen=True)
class GameInjury:
    """An injury sustained during a game"""
    player_id: str
    player_name: str
    team_id: int
    injury_type: str
    weeks_out: int

    def __post_init__(self):
        if self.weeks_out < 0:
            raise ValueError(f"weeks_out must be non-negative, got {self.weeks_out}")


@dataclass(frozen=True)
class GameResult:
    """Final result returned by the game engine"""
    home_score: int
    away_score: int
    winner_id: Optional[int] = None
    is_tie: bool = False
    injuries: List[GameInjury] = field(default_factory=list)

    def __post_init__(self):
        if self.home_score < 0 or self.away_score < 0:
            raise ValueError(
                f"Scores must be non-negative, got {self.home_score}-{self.away_score}"
            )

    @property
    def total_score(self) -> int:
        return self.home_score + self.away_score

    @property
    def margin(self) -> int:
        return abs(self.home_score - self.away_score)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization"""
        return {
            'home_score': self.home_score,
            'away_score': self.away_score,
            'winner_id': self.winner_id,
            'is_tie': self.is_tie,
            'injuries': [
                {
                    'player_id': injury.player_id,
                    'player_name': injury.player_name,
                    'team_id': injury.team_id,
                    'injury_type': injury.injury_type,
                    'weeks_out': injury.weeks_out,
                }
                for injury in self.injuries
            ],
        }
