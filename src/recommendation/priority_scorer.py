"""Priority Scorer.

Assigns every eligible strategy an additive priority score and sorts by it.

Score components are independent of each other:
- transition-year priority (declared value, only in a transition year)
- impact bonus for the impact tier as adjusted for the profile (compute_impact)
- retirement tier bonus (tier index x step when the tier is listed)
- real estate tier bonus (same, for the real estate bracket)
- age window bonus (inclusive window)
- fixed per-strategy boost

Net worth only contributes through the tier bonuses, never through
eligibility.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from typing import Dict, Iterable, List, Optional, Tuple

from config.settings import ScoringSettings, get_settings
from onboarding.investor_profile import InvestorProfile
from rules.rule_types import ImpactTier
from rules.strategy_definitions import StrategyRecord
from rules.triggers import ProfileFlag

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScoringWeights:
    """Constants used by the scorer."""
    high_impact_bonus: int = 30
    medium_impact_bonus: int = 20
    low_impact_bonus: int = 10
    tier_step_bonus: int = 5
    age_window_bonus: int = 15

    @classmethod
    def from_settings(cls, settings: Optional[ScoringSettings] = None) -> "ScoringWeights":
        """Weights from STRATEGY_SCORING_* settings."""
        settings = settings or get_settings().scoring
        return cls(
            high_impact_bonus=settings.high_impact_bonus,
            medium_impact_bonus=settings.medium_impact_bonus,
            low_impact_bonus=settings.low_impact_bonus,
            tier_step_bonus=settings.tier_step_bonus,
            age_window_bonus=settings.age_window_bonus,
        )

    def impact_bonus(self, impact: ImpactTier) -> int:
        if impact == ImpactTier.HIGH:
            return self.high_impact_bonus
        if impact == ImpactTier.MEDIUM:
            return self.medium_impact_bonus
        return self.low_impact_bonus


@dataclass(frozen=True)
class ScoreBreakdown:
    """Per-component contributions to one strategy's score."""
    transition: int = 0
    impact: int = 0
    retirement_tier: int = 0
    real_estate_tier: int = 0
    age_window: int = 0
    boost: int = 0

    @property
    def total(self) -> int:
        return (
            self.transition
            + self.impact
            + self.retirement_tier
            + self.real_estate_tier
            + self.age_window
            + self.boost
        )

    def to_dict(self) -> Dict[str, int]:
        data = asdict(self)
        data["total"] = self.total
        return data


def compute_impact(strategy: StrategyRecord, profile: InvestorProfile) -> ImpactTier:
    """
    Impact of a strategy for this profile; the impact bonus is scored on it.

    Smaller retirement balances, and small real estate holdings for rental
    strategies, shrink what a strategy is likely to be worth.
    """
    impact = strategy.impact
    if profile.retirement_tier == 0:
        return impact.downgrade()

    if strategy.requires(ProfileFlag.HAS_RENTAL_REAL_ESTATE):
        if profile.real_estate_tier <= 1:
            return impact.downgrade()
        if profile.real_estate_tier == 2 and impact == ImpactTier.HIGH:
            return ImpactTier.MEDIUM

    return impact


class PriorityScorer:
    """
    Scores and ranks eligible strategies.

    Ranking uses Python's stable sort, so strategies with equal scores keep
    their catalog order.
    """

    def __init__(self, weights: Optional[ScoringWeights] = None):
        self.weights = weights or ScoringWeights.from_settings()

    def breakdown(self, strategy: StrategyRecord, profile: InvestorProfile) -> ScoreBreakdown:
        """Compute each score component for one strategy."""
        transition = 0
        if profile.is_transition_year and strategy.transition_year_priority:
            transition = strategy.transition_year_priority

        retirement_bonus = real_estate_bonus = age_bonus = boost = 0
        modifiers = strategy.priority_modifiers
        if modifiers is not None:
            if profile.retirement_range in modifiers.retirement_tiers:
                retirement_bonus = profile.retirement_tier * self.weights.tier_step_bonus
            if profile.real_estate_range in modifiers.real_estate_tiers:
                real_estate_bonus = profile.real_estate_tier * self.weights.tier_step_bonus
            if modifiers.age_window is not None and modifiers.age_window.contains(profile.age):
                age_bonus = self.weights.age_window_bonus
            boost = modifiers.boost

        return ScoreBreakdown(
            transition=transition,
            impact=self.weights.impact_bonus(compute_impact(strategy, profile)),
            retirement_tier=retirement_bonus,
            real_estate_tier=real_estate_bonus,
            age_window=age_bonus,
            boost=boost,
        )

    def score(self, strategy: StrategyRecord, profile: InvestorProfile) -> int:
        return self.breakdown(strategy, profile).total

    def rank(
        self, strategies: Iterable[StrategyRecord], profile: InvestorProfile
    ) -> List[Tuple[StrategyRecord, ScoreBreakdown]]:
        """
        Score strategies and order them by descending score.

        Args:
            strategies: Eligible strategies in catalog order
            profile: Profile they were filtered against

        Returns:
            (strategy, breakdown) pairs, highest score first
        """
        scored = [(s, self.breakdown(s, profile)) for s in strategies]
        return sorted(scored, key=lambda pair: -pair[1].total)
