"""
Tenure statistics for a GM's current job.

Created at hire, updated once per completed season and reset when a new GM
is hired. All helpers return new instances.
"""

import logging
from dataclasses import dataclass, replace, fields
from typing import Dict, List, Any

from career.career_exceptions import InvariantViolationException

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TenureStats:
    """
    Cumulative counters for one GM tenure.

    win_percentage is a stored value refreshed by update_tenure_stats; it is
    not derived from total_wins/total_losses on the fly.
    """
    total_seasons: int = 0
    total_wins: int = 0
    total_losses: int = 0
    win_percentage: float = 0.0
    playoff_appearances: int = 0
    division_titles: int = 0
    conference_championships: int = 0
    super_bowl_wins: int = 0
    super_bowl_appearances: int = 0
    first_round_picks: int = 0
    major_free_agents: int = 0
    coaches_hired: int = 0
    coaches_fired: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


@dataclass(frozen=True)
class SeasonResult:
    """Outcome of one completed season for tenure bookkeeping."""
    wins: int
    losses: int
    made_playoffs: bool = False
    won_division: bool = False
    won_conference: bool = False
    won_super_bowl: bool = False
    made_super_bowl: bool = False


def create_default_tenure_stats() -> TenureStats:
    return TenureStats()


def update_tenure_stats(stats: TenureStats, season: SeasonResult) -> TenureStats:
    """Add one season to the tenure and refresh the win percentage."""
    total_wins = stats.total_wins + season.wins
    total_losses = stats.total_losses + season.losses
    total_games = total_wins + total_losses

    return replace(
        stats,
        total_seasons=stats.total_seasons + 1,
        total_wins=total_wins,
        total_losses=total_losses,
        win_percentage=total_wins / total_games if total_games > 0 else 0.0,
        playoff_appearances=stats.playoff_appearances + int(season.made_playoffs),
        division_titles=stats.division_titles + int(season.won_division),
        conference_championships=stats.conference_championships + int(season.won_conference),
        super_bowl_wins=stats.super_bowl_wins + int(season.won_super_bowl),
        super_bowl_appearances=stats.super_bowl_appearances + int(season.made_super_bowl)
    )


def record_coaching_change(stats: TenureStats, hired: bool) -> TenureStats:
    if hired:
        return replace(stats, coaches_hired=stats.coaches_hired + 1)
    return replace(stats, coaches_fired=stats.coaches_fired + 1)


def record_draft_pick(stats: TenureStats, draft_round: int) -> TenureStats:
    """Only first-round picks are tracked."""
    if draft_round == 1:
        return replace(stats, first_round_picks=stats.first_round_picks + 1)
    return stats


def record_free_agent_signing(stats: TenureStats) -> TenureStats:
    return replace(stats, major_free_agents=stats.major_free_agents + 1)


def get_tenure_violations(stats: TenureStats) -> List[str]:
    """List every invariant the stats break (empty when valid)."""
    violations = []

    for f in fields(stats):
        if f.name == 'win_percentage':
            continue
        if getattr(stats, f.name) < 0:
            violations.append(f"{f.name} is negative ({getattr(stats, f.name)})")

    if not 0.0 <= stats.win_percentage <= 1.0:
        violations.append(f"win_percentage {stats.win_percentage} outside 0-1")

    if stats.super_bowl_wins > stats.super_bowl_appearances:
        violations.append(
            f"super_bowl_wins ({stats.super_bowl_wins}) exceeds "
            f"super_bowl_appearances ({stats.super_bowl_appearances})"
        )

    return violations


def validate_tenure_stats(stats: TenureStats) -> bool:
    """True when the stats satisfy every invariant."""
    return not get_tenure_violations(stats)


def require_valid_tenure_stats(stats: TenureStats) -> TenureStats:
    """
    Gate tenure stats before they are used.

    Raises:
        InvariantViolationException: If any invariant is broken
    """
    violations = get_tenure_violations(stats)
    if violations:
        logger.warning(f"Rejected tenure stats: {violations}")
        raise InvariantViolationException("tenure stats", violations)
    return stats
