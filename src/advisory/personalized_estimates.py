"""
Personalized Estimates.

Rough savings ranges for a strategy, scaled to the profile's retirement
bracket. These are illustrative only: each bracket is represented by a
midpoint and every figure is rounded to the nearest $1,000.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Callable, Dict

from onboarding.investor_profile import RetirementRange

logger = logging.getLogger(__name__)

ASSET_MIDPOINTS: Dict[RetirementRange, int] = {
    RetirementRange.UNDER_250K: 175_000,
    RetirementRange.FROM_250K_TO_500K: 375_000,
    RetirementRange.FROM_500K_TO_1M: 750_000,
    RetirementRange.FROM_1M_TO_2_5M: 1_750_000,
    RetirementRange.FROM_2_5M_TO_5M: 3_750_000,
    RetirementRange.OVER_5M: 6_000_000,
}

RMD_START_AGE = 73
HSA_FAMILY_LIMIT = 8_300
IRA_CONTRIBUTION_LIMIT = 7_000
QCD_ANNUAL_LIMIT = 105_000


@dataclass(frozen=True)
class PersonalizedEstimate:
    """Low/high savings range with a one-line explanation."""
    low_estimate: int
    high_estimate: int
    explanation: str

    def to_dict(self) -> Dict[str, object]:
        return {
            "low_estimate": self.low_estimate,
            "high_estimate": self.high_estimate,
            "explanation": self.explanation,
            "formatted": format_estimate(self),
        }


def asset_value_for_range(retirement_range: RetirementRange) -> int:
    """Representative asset value for a retirement bracket."""
    return ASSET_MIDPOINTS[retirement_range]


def _round_thousand(value: float) -> int:
    """Nearest $1,000, halves rounded up."""
    return int(math.floor(value / 1000 + 0.5)) * 1000


def _estimate(low: float, high: float, explanation: str) -> PersonalizedEstimate:
    return PersonalizedEstimate(_round_thousand(low), _round_thousand(high), explanation)


def _roth_conversion(assets: int, age: int) -> PersonalizedEstimate:
    # ~70% of assets pre-tax, converted over ten years before RMDs
    annual_conversion = assets * 0.7 / 10
    years = max(0, min(10, RMD_START_AGE - age))
    return _estimate(
        annual_conversion * 0.10 * years * 0.7,
        annual_conversion * 0.15 * years * 1.2,
        f"Converting ~${annual_conversion / 1000:.0f}k/year at lower rates before RMDs",
    )


def _rmd_planning(assets: int, age: int) -> PersonalizedEstimate:
    years_of_rmds = 20
    tax_saved = assets * 0.04 * years_of_rmds * 0.15
    return _estimate(
        tax_saved * 0.6,
        tax_saved * 1.5,
        f"Reducing taxable RMDs through strategic planning over {years_of_rmds} years",
    )


def _qcd(assets: int, age: int) -> PersonalizedEstimate:
    annual_qcd = min(assets * 0.02, QCD_ANNUAL_LIMIT)
    tax_rate = 0.28 if assets > 1_000_000 else 0.22
    return _estimate(
        annual_qcd * tax_rate * 10,
        annual_qcd * 0.32 * 15,
        f"QCDs of ~${annual_qcd / 1000:.0f}k/year excluded from taxable income",
    )


def _asset_location(assets: int, age: int) -> PersonalizedEstimate:
    return _estimate(
        assets * 0.002 * 15,
        assets * 0.005 * 20,
        f"0.2-0.5% annual after-tax return improvement on ${assets / 1_000_000:.1f}M",
    )


def _tax_loss_harvesting(assets: int, age: int) -> PersonalizedEstimate:
    # 40% held in taxable accounts, 5% of that harvestable each year
    harvestable = assets * 0.4 * 0.05
    return _estimate(
        harvestable * 0.15 * 10,
        harvestable * 0.238 * 15,
        f"Harvesting ~${harvestable / 1000:.0f}k in losses annually to offset gains",
    )


def _hsa(assets: int, age: int) -> PersonalizedEstimate:
    years = max(0, 65 - age)
    contributed = HSA_FAMILY_LIMIT * years
    tax_savings = contributed * 0.30
    return _estimate(
        tax_savings,
        tax_savings + contributed * 0.5,
        f"{years} years of max HSA contributions with triple tax advantage",
    )


def _like_kind_exchange(assets: int, age: int) -> PersonalizedEstimate:
    # Real estate ~30% of assets carrying a 50% embedded gain
    embedded_gain = assets * 0.3 * 0.5
    deferred = embedded_gain * 0.238
    return _estimate(
        deferred * 0.6,
        deferred * 1.2,
        f"Deferring tax on ~${embedded_gain / 1000:.0f}k in property gains",
    )


def _backdoor_roth(assets: int, age: int) -> PersonalizedEstimate:
    years = max(0, 70 - age)
    tax_free_growth = IRA_CONTRIBUTION_LIMIT * years * 0.5 * 0.24
    return _estimate(
        tax_free_growth * 0.7,
        tax_free_growth * 1.5,
        f"{years} years of ${IRA_CONTRIBUTION_LIMIT:,} annual contributions growing tax-free",
    )


def _generic(assets: int, age: int) -> PersonalizedEstimate:
    base = assets * 0.02
    return _estimate(base * 0.5, base * 2, "Estimated based on your asset level")


EstimateFormula = Callable[[int, int], PersonalizedEstimate]

ESTIMATE_FORMULAS: Dict[str, EstimateFormula] = {
    "roth-conversion-window": _roth_conversion,
    "rmd-planning": _rmd_planning,
    "qcd-qualified-charitable": _qcd,
    "asset-location": _asset_location,
    "tax-loss-harvesting": _tax_loss_harvesting,
    "hsa-optimization": _hsa,
    "1031-exchange": _like_kind_exchange,
    "backdoor-roth": _backdoor_roth,
}


def calculate_personalized_estimate(
    strategy_id: str,
    retirement_range: RetirementRange,
    age: int,
) -> PersonalizedEstimate:
    """
    Savings range for a strategy at the given bracket and age.

    Args:
        strategy_id: Catalog id; ids without a formula use the generic one
        retirement_range: Profile's retirement bracket
        age: Profile age in years

    Returns:
        PersonalizedEstimate
    """
    formula = ESTIMATE_FORMULAS.get(strategy_id)
    if formula is None:
        logger.debug(f"No estimate formula for {strategy_id}, using generic")
        formula = _generic
    return formula(asset_value_for_range(retirement_range), age)


def format_amount(amount: int) -> str:
    if amount >= 1_000_000:
        return f"${amount / 1_000_000:.1f}M"
    if amount >= 1000:
        return f"${amount / 1000:.0f}k"
    return f"${amount}"


def format_estimate(estimate: PersonalizedEstimate) -> str:
    """Display range such as '$12k - $45k'."""
    return f"{format_amount(estimate.low_estimate)} - {format_amount(estimate.high_estimate)}"
