"""
Standings and Playoff Implication Data Models

Data structures produced by the standings calculator. Standings are always
recomputed from completed games and never stored as authoritative state.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Any


class PlayoffPosition(Enum):
    """Where a team currently sits in its conference playoff picture."""
    DIVISION_LEADER = "division_leader"
    WILDCARD = "wildcard"
    IN_HUNT = "in_hunt"


class ImplicationType(Enum):
    """
    Kinds of playoff implication.

    CONTROLS_DESTINY is part of the presentation contract but the analyzer
    does not currently emit it.
    """
    CLINCHED_DIVISION = "clinched_division"
    CLINCHED_PLAYOFF = "clinched_playoff"
    ELIMINATED = "eliminated"
    CONTROLS_DESTINY = "controls_destiny"


@dataclass
class HeadToHeadRecord:
    """Record of one team against a single opponent this season."""
    wins: int = 0
    losses: int = 0
    ties: int = 0

    @property
    def win_percentage(self) -> float:
        total = self.wins + self.losses + self.ties
        if total == 0:
            return 0.0
        return (self.wins + 0.5 * self.ties) / total


@dataclass
class TeamStanding:
    """
    Standing of a single team derived from completed games.

    Division and conference splits are kept for display; ranking only uses
    win percentage, head-to-head and point differential.
    """
    team_id: int
    conference: str
    division: str
    wins: int = 0
    losses: int = 0
    ties: int = 0
    division_wins: int = 0
    division_losses: int = 0
    division_ties: int = 0
    conference_wins: int = 0
    conference_losses: int = 0
    conference_ties: int = 0
    points_for: int = 0
    points_against: int = 0
    head_to_head: Dict[int, HeadToHeadRecord] = field(default_factory=dict)
    current_streak: int = 0        # Positive = win streak, negative = loss streak
    division_rank: int = 0
    conference_rank: int = 0
    playoff_position: PlayoffPosition = PlayoffPosition.IN_HUNT
    games_behind: float = 0.0

    @property
    def games_played(self) -> int:
        return self.wins + self.losses + self.ties

    @property
    def win_percentage(self) -> float:
        """Calculate win percentage (ties count as 0.5 wins)."""
        if self.games_played == 0:
            return 0.0
        return (self.wins + 0.5 * self.ties) / self.games_played

    @property
    def point_differential(self) -> int:
        return self.points_for - self.points_against

    @property
    def division_key(self) -> str:
        return f"{self.conference} {self.division}"

    @property
    def record_str(self) -> str:
        """Get record as string (e.g., '13-4' or '10-6-1')."""
        if self.ties > 0:
            return f"{self.wins}-{self.losses}-{self.ties}"
        return f"{self.wins}-{self.losses}"

    @property
    def division_record(self) -> str:
        return _format_record(self.division_wins, self.division_losses, self.division_ties)

    @property
    def conference_record(self) -> str:
        return _format_record(self.conference_wins, self.conference_losses, self.conference_ties)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            'team_id': self.team_id,
            'conference': self.conference,
            'division': self.division,
            'wins': self.wins,
            'losses': self.losses,
            'ties': self.ties,
            'win_percentage': self.win_percentage,
            'division_record': self.division_record,
            'conference_record': self.conference_record,
            'points_for': self.points_for,
            'points_against': self.points_against,
            'point_differential': self.point_differential,
            'streak': self.current_streak,
            'division_rank': self.division_rank,
            'conference_rank': self.conference_rank,
            'playoff_position': self.playoff_position.value,
            'games_behind': self.games_behind,
        }


@dataclass
class LeagueStandings:
    """
    Complete standings for the league.

    divisions maps 'AFC North' style keys to teams ordered by division rank;
    conferences maps conference codes to teams ordered by conference rank.
    """
    divisions: Dict[str, List[TeamStanding]]
    conferences: Dict[str, List[TeamStanding]]

    def get_team_standing(self, team_id: int) -> Optional[TeamStanding]:
        """Get standing for a specific team."""
        for teams in self.conferences.values():
            for standing in teams:
                if standing.team_id == team_id:
                    return standing
        return None

    def get_team_at_conference_rank(self, conference: str, rank: int) -> Optional[TeamStanding]:
        """Get the team holding a conference rank, if that many teams exist."""
        for standing in self.conferences.get(conference, []):
            if standing.conference_rank == rank:
                return standing
        return None

    def all_standings(self) -> List[TeamStanding]:
        return [s for conference in sorted(self.conferences) for s in self.conferences[conference]]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            'divisions': {
                key: [s.to_dict() for s in teams]
                for key, teams in self.divisions.items()
            },
            'conferences': {
                key: [s.team_id for s in teams]
                for key, teams in self.conferences.items()
            },
        }


@dataclass(frozen=True)
class PlayoffImplication:
    """A clinch or elimination claim for one team in one week."""
    team_id: int
    implication: ImplicationType
    description: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            'team_id': self.team_id,
            'implication': self.implication.value,
            'description': self.description,
        }


@dataclass
class ConferencePlayoffTeams:
    """Current playoff field for one conference."""
    conference: str
    division_winners: List[int]
    wild_cards: List[int]

    @property
    def seeds(self) -> List[int]:
        """Team IDs ordered by seed (division winners first)."""
        return self.division_winners + self.wild_cards


def _format_record(wins: int, losses: int, ties: int) -> str:
    if ties > 0:
        return f"{wins}-{losses}-{ties}"
    return f"{wins}-{losses}"
