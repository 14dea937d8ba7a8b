"""Inference Rules.

Explicit, named assumptions used to fill situational flags the
questionnaire never asked about. Each rule is a pure function of the
inference context; an explicit answer always wins over a rule.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, Mapping, Optional

from onboarding.investor_profile import (
    RealEstateRange,
    RetirementRange,
    retirement_tier_index,
)


# Situational flags on InvestorProfile that the builder resolves
SITUATIONAL_FIELDS = (
    "has_traditional_ira",
    "has_401k",
    "has_taxable_brokerage",
    "has_large_pre_tax_ira",
    "has_529_account",
    "has_employer_stock",
    "separated_from_service",
    "employer_401k_allows_after_tax",
    "income_above_roth_limits",
    "high_tax_bracket",
    "has_rental_real_estate",
    "selling_primary_residence",
    "has_business_ownership",
    "has_realized_capital_gains",
    "education_funding_intent",
    "enrolled_in_hdhp",
    "family_wealth_transfer_intent",
    # Resolved last, they read the flags above
    "has_pre_tax_retirement",
    "has_multiple_account_types",
)


@dataclass(frozen=True)
class InferenceContext:
    """Normalized brackets plus the flags the user answered explicitly."""
    retirement_range: RetirementRange
    real_estate_range: RealEstateRange
    answered: Mapping[str, Optional[bool]] = field(default_factory=dict)

    def answer(self, name: str) -> Optional[bool]:
        return self.answered.get(name)


InferenceRule = Callable[[InferenceContext, Dict[str, bool]], bool]


def unanswered_is_false(context: InferenceContext, resolved: Dict[str, bool]) -> bool:
    """An unanswered situational question never admits a strategy."""
    return False


def pre_tax_from_accounts_or_tier(context: InferenceContext, resolved: Dict[str, bool]) -> bool:
    """
    Assume pre-tax retirement accounts when the user holds a traditional IRA
    or 401(k), or when retirement assets reach the $250k tier.
    """
    if resolved.get("has_traditional_ira") or resolved.get("has_401k"):
        return True
    return retirement_tier_index(context.retirement_range) >= 1


def multiple_account_types_from_holdings(context: InferenceContext, resolved: Dict[str, bool]) -> bool:
    """Taxable brokerage alongside pre-tax accounts means multiple account types."""
    return bool(resolved.get("has_taxable_brokerage") and resolved.get("has_pre_tax_retirement"))


INFERENCE_RULES: Dict[str, InferenceRule] = {
    "has_pre_tax_retirement": pre_tax_from_accounts_or_tier,
    "has_multiple_account_types": multiple_account_types_from_holdings,
}


def rule_for(field_name: str) -> InferenceRule:
    """Inference rule used when a flag is unanswered."""
    return INFERENCE_RULES.get(field_name, unanswered_is_false)


def resolve_situational_flags(context: InferenceContext) -> Dict[str, bool]:
    """
    Resolve every situational flag to a concrete boolean.

    Args:
        context: Normalized brackets and explicit answers

    Returns:
        Mapping of profile field name to resolved value
    """
    resolved: Dict[str, bool] = {}
    for name in SITUATIONAL_FIELDS:
        explicit = context.answer(name)
        if explicit is not None:
            resolved[name] = bool(explicit)
        else:
            resolved[name] = rule_for(name)(context, resolved)
    return resolved
