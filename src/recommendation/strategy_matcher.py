"""Strategy Matcher.

Runs the full matching pipeline for one profile: eligibility filter, then
priority scoring with a stable descending sort. Each result also carries
display annotations derived from the profile. The computed impact is the
same one the scorer awards its impact bonus for; urgency is display only.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

from config.catalog_loader import get_default_catalog
from onboarding.investor_profile import InvestorProfile
from recommendation.eligibility import EligibilityFilter
from recommendation.priority_scorer import PriorityScorer, ScoreBreakdown, compute_impact
from rules.rule_types import ImpactTier, StrategyCategory, UrgencyLevel
from rules.strategy_definitions import StrategyRecord
from services.logging_config import MatchingLogger

logger = logging.getLogger(__name__)

# Strategies that merit a deeper review at higher balances regardless of category
DEEPER_REVIEW_STRATEGY_IDS = frozenset({"roth-conversion-window", "rmd-planning"})
DEEPER_REVIEW_MIN_RETIREMENT_TIER = 3
DEEPER_REVIEW_TRANSITION_PRIORITY = 70

HEALTHCARE_SUBSIDY_AGE = 65
MEDICARE_LOOKAHEAD_AGE = 62


@dataclass(frozen=True)
class MatchedStrategy:
    """One eligible strategy with its score and display annotations."""
    strategy: StrategyRecord
    breakdown: ScoreBreakdown
    computed_impact: ImpactTier
    urgency: UrgencyLevel

    @property
    def strategy_id(self) -> str:
        return self.strategy.strategy_id

    @property
    def score(self) -> int:
        return self.breakdown.total

    def to_dict(self, include_score: bool = False) -> Dict[str, Any]:
        """Convert to dictionary; the score is only attached on request."""
        data = self.strategy.to_dict()
        data["computed_impact"] = self.computed_impact.value
        data["urgency"] = self.urgency.value
        if include_score:
            data["score"] = self.score
            data["score_breakdown"] = self.breakdown.to_dict()
        return data


def compute_urgency(strategy: StrategyRecord, profile: InvestorProfile) -> UrgencyLevel:
    """How prominently to present a matched strategy."""
    tier = profile.retirement_tier

    if tier >= DEEPER_REVIEW_MIN_RETIREMENT_TIER and (
        strategy.category == StrategyCategory.WITHDRAWAL
        or strategy.strategy_id in DEEPER_REVIEW_STRATEGY_IDS
    ):
        return UrgencyLevel.WORTH_DEEPER_REVIEW

    if (
        profile.is_transition_year
        and strategy.transition_year_priority
        and strategy.transition_year_priority > DEEPER_REVIEW_TRANSITION_PRIORITY
    ):
        return UrgencyLevel.WORTH_DEEPER_REVIEW

    if tier == 0:
        return UrgencyLevel.WORTH_NOTING
    return UrgencyLevel.WORTH_CONSIDERING


def transition_year_cautions(profile: InvestorProfile) -> List[str]:
    """Caution notes shown alongside results in a transition year."""
    flags = profile.transition
    cautions: List[str] = []
    if not flags.is_transition_year:
        return cautions

    if flags.income_lower_than_typical and profile.age < HEALTHCARE_SUBSIDY_AGE:
        cautions.append(
            "Healthcare subsidies: If you're using marketplace insurance, additional income "
            "(from conversions or capital gains) could affect your premium subsidies. "
            "Consider the full picture before acting."
        )

    if flags.income_lower_than_typical:
        cautions.append(
            "Bracket thresholds: While lower income creates opportunities, be mindful of key "
            "thresholds, like the 12%/22% bracket boundary or capital gains rate changes, "
            "when timing income recognition."
        )

    if MEDICARE_LOOKAHEAD_AGE <= profile.age < HEALTHCARE_SUBSIDY_AGE:
        cautions.append(
            "Medicare ahead: Income decisions now may affect Medicare premiums when you enroll. "
            "IRMAA surcharges are based on income from two years prior."
        )

    if flags.both_unemployed:
        cautions.append(
            "Temporary window: With both partners in transition, this year may offer unusual "
            "planning flexibility. Consider what actions make sense before circumstances change."
        )

    if flags.short_term_transition:
        cautions.append(
            "Time-limited opportunity: If you expect income to return to normal within a year, "
            "some strategies work best when implemented promptly."
        )

    return cautions


class StrategyMatcher:
    """
    Matches investor profiles against a strategy catalog.

    The catalog is injected and never mutated, so one matcher can serve any
    number of profiles.
    """

    def __init__(
        self,
        catalog: Sequence[StrategyRecord],
        scorer: Optional[PriorityScorer] = None,
        eligibility: Optional[EligibilityFilter] = None,
    ):
        self.catalog = tuple(catalog)
        self.scorer = scorer or PriorityScorer()
        self.eligibility = eligibility or EligibilityFilter()

    def match(self, profile: InvestorProfile, session_id: Optional[str] = None) -> List[MatchedStrategy]:
        """
        Eligible strategies for a profile, highest priority first.

        Args:
            profile: Fully built investor profile
            session_id: Optional wizard session id for log correlation

        Returns:
            Matched strategies ordered by descending score; ties keep
            catalog order
        """
        run_log = MatchingLogger(session_id)
        run_log.start_match(
            {
                "age": profile.age,
                "retirement_range": profile.retirement_range.value,
                "transition_year": profile.is_transition_year,
            },
            catalog_size=len(self.catalog),
        )

        eligible = self.eligibility.filter(self.catalog, profile)
        suppressed = sum(1 for s in self.catalog if self.eligibility.is_suppressed(s, profile))
        run_log.log_filtered(eligible=len(eligible), suppressed=suppressed)

        matched = [
            MatchedStrategy(
                strategy=strategy,
                breakdown=breakdown,
                computed_impact=compute_impact(strategy, profile),
                urgency=compute_urgency(strategy, profile),
            )
            for strategy, breakdown in self.scorer.rank(eligible, profile)
        ]

        run_log.log_result(m.strategy_id for m in matched)
        return matched


def match_strategies(
    profile: InvestorProfile,
    catalog: Optional[Sequence[StrategyRecord]] = None,
) -> List[MatchedStrategy]:
    """
    Match a profile against a catalog.

    Uses the configured default catalog when none is given.
    """
    if catalog is None:
        catalog = get_default_catalog()
    return StrategyMatcher(catalog).match(profile)
