"""Strategy Recommendation Module.

Matches an investor profile against the strategy catalog:
- Eligibility filter (suppression, then trigger conjunction)
- Additive priority scoring with a stable sort
- Display annotations and transition-year cautions
"""

from recommendation.eligibility import EligibilityDecision, EligibilityFilter, filter_eligible
from recommendation.priority_scorer import (
    PriorityScorer,
    ScoreBreakdown,
    ScoringWeights,
    compute_impact,
)
from recommendation.strategy_matcher import (
    MatchedStrategy,
    StrategyMatcher,
    compute_urgency,
    match_strategies,
    transition_year_cautions,
)

__all__ = [
    "EligibilityDecision",
    "EligibilityFilter",
    "filter_eligible",
    "PriorityScorer",
    "ScoreBreakdown",
    "ScoringWeights",
    "MatchedStrategy",
    "StrategyMatcher",
    "compute_impact",
    "compute_urgency",
    "match_strategies",
    "transition_year_cautions",
]
