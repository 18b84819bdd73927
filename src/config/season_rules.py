"""
Season Rules

Centralized constants for the season and career engine to eliminate magic numbers.
All season lengths, implication gating weeks and patience thresholds live here.

Usage:
    from config.season_rules import SeasonRules

    if week > SeasonRules.REGULAR_SEASON_WEEKS:
        # Transition to playoffs
"""


class SeasonRules:
    """
    League rule constants.

    The regular season is 18 scheduled weeks but only 17 decisive games per
    team; the extra week is the bye. Anything counting games uses
    GAMES_PER_TEAM, anything counting calendar weeks uses REGULAR_SEASON_WEEKS.
    """

    # ==================== Calendar ====================

    PRESEASON_WEEKS = 4
    """Preseason weeks before the regular season starts"""

    REGULAR_SEASON_WEEKS = 18
    """Scheduled regular season weeks (17 games + 1 bye)"""

    GAMES_PER_TEAM = 17
    """Decisive regular season games per team"""

    PLAYOFF_FIRST_WEEK = 19
    """Wild Card weekend"""

    PLAYOFF_LAST_WEEK = 22
    """Super Bowl"""

    OFFSEASON_PHASE_COUNT = 12
    """Number of sequential offseason phases"""

    MIN_YEAR = 2000
    MAX_YEAR = 2100

    PLAYOFF_ROUND_NAMES = {
        19: "Wild Card Round",
        20: "Divisional Round",
        21: "Conference Championships",
        22: "Super Bowl",
    }

    # ==================== Playoff Implications ====================

    IMPLICATIONS_START_WEEK = 10
    """No implications are claimed before this week"""

    ELIMINATION_START_WEEK = 12
    DIVISION_CLINCH_START_WEEK = 14
    WILDCARD_CLINCH_START_WEEK = 15

    PLAYOFF_SEEDS_PER_CONFERENCE = 7
    """Division winners plus wild cards per conference"""

    WILDCARDS_PER_CONFERENCE = 3

    # ==================== Week Results ====================

    MAX_HEADLINES = 5
    SHOOTOUT_TOTAL_POINTS = 70
    THRILLER_MAX_MARGIN = 3
    BLOWOUT_MIN_MARGIN = 21
    HIGH_SCORING_TOTAL_POINTS = 60
    UPSET_MIN_MARGIN = 17

    # ==================== Patience & Firing ====================

    DEFAULT_PATIENCE = 50
    """Starting patience meter and default owner trait value"""

    PATIENCE_MIN = 0
    PATIENCE_MAX = 100

    FIRING_THRESHOLD = 20
    """Patience below this fires the GM immediately"""

    HOUSECLEANING_PATIENCE_CEILING = 60
    HOUSECLEANING_PROBABILITY = 0.6

    # ==================== Roster ====================

    ACTIVE_ROSTER_LIMIT = 53
    """Active roster size required to leave final cuts"""

    @classmethod
    def games_remaining(cls, games_played: int) -> int:
        """Decisive games left for a team that has played games_played."""
        return max(0, cls.GAMES_PER_TEAM - games_played)
