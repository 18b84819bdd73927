"""
Season Engine Configuration

Named constants for season length, playoff-implication gating, patience
thresholds and roster limits. Rule changes should only touch this package.
"""

from config.season_rules import SeasonRules

__all__ = ['SeasonRules']
