"""
Strategy Definitions.

StrategyRecord is one read-only catalog entry. Records are built once when
the catalog is loaded and never mutated afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, FrozenSet, Optional, Tuple

from onboarding.investor_profile import RealEstateRange, RetirementRange
from rules.rule_types import Complexity, ImpactTier, StrategyCategory
from rules.triggers import ProfileFlag, RequiresFlag, Trigger


@dataclass(frozen=True)
class AgeWindow:
    """Inclusive age range."""
    min_age: int
    max_age: int

    def contains(self, age: int) -> bool:
        return self.min_age <= age <= self.max_age


@dataclass(frozen=True)
class PriorityModifiers:
    """Weights that affect rank but never eligibility."""
    retirement_tiers: FrozenSet[RetirementRange] = frozenset()
    real_estate_tiers: FrozenSet[RealEstateRange] = frozenset()
    age_window: Optional[AgeWindow] = None
    boost: int = 0


@dataclass(frozen=True)
class StrategyRecord:
    """Individual planning strategy in the catalog."""
    strategy_id: str
    title: str
    impact: ImpactTier
    category: StrategyCategory
    description: str = ""
    why_for_you: str = ""
    trigger_reason: str = ""
    evaluator: str = ""
    complexity: Optional[Complexity] = None

    # Eligibility
    triggers: Tuple[Trigger, ...] = ()
    suppress_during_unemployment: bool = False

    # Ranking
    priority_modifiers: Optional[PriorityModifiers] = None
    transition_year_priority: Optional[int] = None

    @property
    def is_general_education(self) -> bool:
        """No triggers: shown to everyone."""
        return not self.triggers

    def requires(self, flag: ProfileFlag) -> bool:
        return any(isinstance(t, RequiresFlag) and t.flag == flag for t in self.triggers)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for display."""
        return {
            "id": self.strategy_id,
            "title": self.title,
            "description": self.description,
            "why_for_you": self.why_for_you,
            "trigger_reason": self.trigger_reason,
            "evaluator": self.evaluator,
            "impact": self.impact.value,
            "category": self.category.value,
            "complexity": self.complexity.value if self.complexity else None,
            "triggers": [t.describe() for t in self.triggers],
        }
