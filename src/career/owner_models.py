"""
Owner models used by the patience and firing engine.

Only the owner attributes that influence GM job security live here.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Tuple, Dict, Any

from config.season_rules import SeasonRules


PR_OBSESSED = "pr_obsessed"
"""Secondary trait: owner is sensitive to scandals and bad press"""


class JobSecurityLevel(Enum):
    """Qualitative job security band derived from the patience meter."""
    SECURE = "secure"        # 70+
    STABLE = "stable"        # 50-69
    WARM_SEAT = "warm_seat"  # 35-49
    HOT_SEAT = "hot_seat"    # 20-34
    FIRED = "fired"          # below 20

    @property
    def status_label(self) -> str:
        """Player-facing label; raw numbers are never shown."""
        return {
            "secure": "secure",
            "stable": "stable",
            "warm_seat": "warm seat",
            "hot_seat": "hot seat",
            "fired": "danger",
        }[self.value]

    @classmethod
    def from_patience(cls, value: int) -> "JobSecurityLevel":
        if value >= 70:
            return cls.SECURE
        if value >= 50:
            return cls.STABLE
        if value >= 35:
            return cls.WARM_SEAT
        if value >= SeasonRules.FIRING_THRESHOLD:
            return cls.HOT_SEAT
        return cls.FIRED


@dataclass(frozen=True)
class OwnerTraits:
    """
    Owner personality traits on a 0-100 scale.

    patience: low values react harder to losing
    control: high values punish defiance of directives
    """
    patience: int = SeasonRules.DEFAULT_PATIENCE
    spending: int = SeasonRules.DEFAULT_PATIENCE
    control: int = SeasonRules.DEFAULT_PATIENCE
    loyalty: int = SeasonRules.DEFAULT_PATIENCE

    def __post_init__(self):
        for name in ('patience', 'spending', 'control', 'loyalty'):
            value = getattr(self, name)
            if not 0 <= value <= 100:
                raise ValueError(f"{name} trait must be 0-100, got {value}")


@dataclass(frozen=True)
class OwnerProfile:
    """
    The team owner as seen by the firing engine.

    Attributes:
        owner_id: Unique owner identifier
        traits: Personality traits
        secondary_traits: Named quirks such as PR_OBSESSED
        patience_meter: Stored patience value used to seed a new meter
    """
    owner_id: str
    traits: OwnerTraits = field(default_factory=OwnerTraits)
    secondary_traits: Tuple[str, ...] = ()
    patience_meter: int = SeasonRules.DEFAULT_PATIENCE

    def __post_init__(self):
        if not self.owner_id:
            raise ValueError("owner_id is required")

    def has_trait(self, trait: str) -> bool:
        return trait in self.secondary_traits

    def to_dict(self) -> Dict[str, Any]:
        return {
            'owner_id': self.owner_id,
            'traits': {
                'patience': self.traits.patience,
                'spending': self.traits.spending,
                'control': self.traits.control,
                'loyalty': self.traits.loyalty,
            },
            'secondary_traits': list(self.secondary_traits),
            'patience_meter': self.patience_meter,
        }
