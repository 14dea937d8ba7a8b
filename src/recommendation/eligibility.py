"""Eligibility Filter.

Decides catalog membership for one profile. A strategy is eligible when it
is not suppressed and every one of its triggers holds; suppression is
checked before any trigger. The filter keeps catalog order.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, List, Tuple

from onboarding.investor_profile import InvestorProfile
from rules.strategy_definitions import StrategyRecord
from rules.triggers import Trigger, evaluate_triggers, failed_triggers

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EligibilityDecision:
    """Why a strategy was or was not admitted, for diagnostics."""
    strategy_id: str
    eligible: bool
    suppressed: bool = False
    failed: Tuple[Trigger, ...] = ()

    @property
    def reasons(self) -> List[str]:
        if self.suppressed:
            return ["suppressed during unemployment"]
        return [f"requires {t.describe()}" for t in self.failed]


class EligibilityFilter:
    """Trigger conjunction with unemployment suppression evaluated first."""

    def is_suppressed(self, strategy: StrategyRecord, profile: InvestorProfile) -> bool:
        return strategy.suppress_during_unemployment and profile.anyone_unemployed

    def is_eligible(self, strategy: StrategyRecord, profile: InvestorProfile) -> bool:
        if self.is_suppressed(strategy, profile):
            return False
        return evaluate_triggers(strategy.triggers, profile)

    def explain(self, strategy: StrategyRecord, profile: InvestorProfile) -> EligibilityDecision:
        """Full decision including the triggers that did not hold."""
        if self.is_suppressed(strategy, profile):
            return EligibilityDecision(strategy.strategy_id, eligible=False, suppressed=True)
        failed = tuple(failed_triggers(strategy.triggers, profile))
        return EligibilityDecision(strategy.strategy_id, eligible=not failed, failed=failed)

    def filter(
        self, catalog: Iterable[StrategyRecord], profile: InvestorProfile
    ) -> List[StrategyRecord]:
        """
        Eligible strategies for a profile.

        Args:
            catalog: Strategy records in catalog order
            profile: Fully built investor profile

        Returns:
            The eligible subset, in catalog order
        """
        eligible = [s for s in catalog if self.is_eligible(s, profile)]
        logger.debug(f"{len(eligible)} strategies passed eligibility")
        return eligible


def filter_eligible(
    catalog: Iterable[StrategyRecord], profile: InvestorProfile
) -> List[StrategyRecord]:
    """Convenience wrapper around EligibilityFilter.filter."""
    return EligibilityFilter().filter(catalog, profile)
