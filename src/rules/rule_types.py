"""
Rule type definitions.

Provides enums shared by strategy records and the matching engine.
"""

from enum import Enum


class StrategyCategory(str, Enum):
    """Categories of planning strategies."""
    TIMING = "timing"
    STRUCTURE = "structure"
    WITHDRAWAL = "withdrawal"
    GIVING = "giving"
    GENERAL = "general"
    REAL_ESTATE = "real-estate"
    BUSINESS = "business"
    INVESTMENT = "investment"
    HEALTHCARE = "healthcare"


class ImpactTier(str, Enum):
    """Declared impact of a strategy, highest first."""
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    def downgrade(self) -> "ImpactTier":
        """One step lower, LOW stays LOW."""
        if self is ImpactTier.HIGH:
            return ImpactTier.MEDIUM
        return ImpactTier.LOW


class Complexity(str, Enum):
    """Implementation complexity shown alongside a strategy."""
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class UrgencyLevel(str, Enum):
    """How prominently a matched strategy should be presented."""
    WORTH_DEEPER_REVIEW = "worth-deeper-review"
    WORTH_CONSIDERING = "worth-considering"
    WORTH_NOTING = "worth-noting"
