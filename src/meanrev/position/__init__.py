"""Position sizing -- risk profiles and signal-strength scaled sizing."""

from meanrev.position.profiles import RISK_PROFILES, RiskMode, RiskProfile, get_profile
from meanrev.position.sizing import PositionSizer, strength_multipliers

__all__ = [
    "RISK_PROFILES",
    "PositionSizer",
    "RiskMode",
    "RiskProfile",
    "get_profile",
    "strength_multipliers",
]
