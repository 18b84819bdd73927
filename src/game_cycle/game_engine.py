"""
Game engine interface for the week simulator.

The season engine only consumes results; any engine that satisfies the
GameEngine protocol can be plugged in. InstantResultEngine produces random
but realistic NFL scores without play-by-play simulation.
"""

import random
from typing import Dict, Optional, Protocol

from shared.league_models import Team
from shared.game_result import GameConfig, GameResult


# Most common realistic NFL final scores
REALISTIC_SCORES = [
    0, 3, 6, 7, 9, 10, 12, 13, 14, 16, 17, 19, 20, 21, 23, 24,
    26, 27, 28, 30, 31, 33, 34, 35, 37, 38, 40, 41, 42, 44, 45
]


class GameEngine(Protocol):
    """Plays a single game and reports the final result."""

    def play_game(self, config: GameConfig, teams: Dict[int, Team]) -> GameResult:
        ...


class InstantResultEngine:
    """
    Generates instant game results from a seedable random source.

    Playoff games use a tighter score range and never end in a tie.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    def play_game(self, config: GameConfig, teams: Dict[int, Team]) -> GameResult:
        home_score, away_score = self.generate_scores(config.is_playoff)

        if home_score > away_score:
            winner_id = config.home_team_id
        elif away_score > home_score:
            winner_id = config.away_team_id
        else:
            winner_id = None

        return GameResult(
            home_score=home_score,
            away_score=away_score,
            winner_id=winner_id,
            is_tie=winner_id is None
        )

    def generate_scores(self, is_playoff: bool = False):
        """
        Generate a (home_score, away_score) pair.

        Args:
            is_playoff: If True, uses tighter score ranges and breaks ties
        """
        if is_playoff:
            base_score = self.rng.randint(17, 28)
            spread = self.rng.randint(-7, 7)
            home_advantage = self.rng.randint(0, 3)

            home_score = max(3, base_score + home_advantage)
            away_score = max(3, base_score - spread)
        else:
            # Home field advantage: +3 points on average
            home_score = self.rng.randint(14, 31) + self.rng.randint(0, 6)
            away_score = self.rng.randint(10, 28)

        home_score = adjust_to_realistic_score(home_score)
        away_score = adjust_to_realistic_score(away_score)

        if is_playoff and home_score == away_score:
            home_score += 7  # Overtime touchdown

        return home_score, away_score


def adjust_to_realistic_score(score: int) -> int:
    """Snap a raw score to the closest common NFL final score."""
    return min(REALISTIC_SCORES, key=lambda x: abs(x - score))
