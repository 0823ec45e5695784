"""Risk profiles governing per-trade risk and leverage.

A fixed, process-wide table. Each profile also carries the minimum signal
quality (z-score and confirmations) it is meant to trade.
"""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

from meanrev.models import AnalysisResult


class RiskMode(str, Enum):
    """Selectable risk profile."""

    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    ULTRA = "ULTRA"


@dataclass(frozen=True)
class RiskProfile:
    """Risk budget for a single trade under one risk mode."""

    mode: RiskMode
    risk_per_trade: Decimal  # fraction of capital
    max_leverage: int
    min_confirmations: int
    min_z: Decimal
    description: str = ""

    def accepts(self, analysis: AnalysisResult) -> bool:
        """Return True when the analysis clears this profile's quality bar."""
        return (
            abs(analysis.z_score) >= self.min_z
            and analysis.confirmations >= self.min_confirmations
        )

    def to_dict(self) -> dict:
        """Serialize to JSON-safe dict with Decimal values as strings."""
        return {
            "mode": self.mode.value,
            "risk_per_trade": str(self.risk_per_trade),
            "max_leverage": self.max_leverage,
            "min_confirmations": self.min_confirmations,
            "min_z": str(self.min_z),
            "description": self.description,
        }


RISK_PROFILES: dict[RiskMode, RiskProfile] = {
    RiskMode.LOW: RiskProfile(
        mode=RiskMode.LOW,
        risk_per_trade=Decimal("0.02"),
        max_leverage=3,
        min_confirmations=2,
        min_z=Decimal("1.8"),
        description="Conservative - slow compounding",
    ),
    RiskMode.MEDIUM: RiskProfile(
        mode=RiskMode.MEDIUM,
        risk_per_trade=Decimal("0.03"),
        max_leverage=5,
        min_confirmations=3,
        min_z=Decimal("2.0"),
        description="Balanced growth",
    ),
    RiskMode.HIGH: RiskProfile(
        mode=RiskMode.HIGH,
        risk_per_trade=Decimal("0.05"),
        max_leverage=7,
        min_confirmations=4,
        min_z=Decimal("2.5"),
        description="Aggressive trading",
    ),
    RiskMode.ULTRA: RiskProfile(
        mode=RiskMode.ULTRA,
        risk_per_trade=Decimal("0.08"),
        max_leverage=10,
        min_confirmations=5,
        min_z=Decimal("3.0"),
        description="Maximum aggression",
    ),
}


def get_profile(mode: RiskMode | str) -> RiskProfile:
    """Look up a profile by enum value or its name."""
    return RISK_PROFILES[RiskMode(mode)]
