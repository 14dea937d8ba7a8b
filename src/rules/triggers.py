"""
Primary triggers.

A trigger is a required predicate over an InvestorProfile. The set of
trigger kinds is closed: every kind is a frozen dataclass below and
evaluate_trigger dispatches over all of them. A strategy is eligible only
when every one of its triggers holds.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, FrozenSet, Iterable, List, Optional, Union

from onboarding.investor_profile import EmploymentStatus, InvestorProfile, MaritalStatus


class ProfileFlag(str, Enum):
    """Boolean profile predicates a trigger can require or forbid."""
    HAS_PRE_TAX_RETIREMENT = "has_pre_tax_retirement"
    HAS_TRADITIONAL_IRA = "has_traditional_ira"
    HAS_401K = "has_401k"
    HAS_TAXABLE_BROKERAGE = "has_taxable_brokerage"
    HAS_MULTIPLE_ACCOUNT_TYPES = "has_multiple_account_types"
    HAS_LARGE_PRE_TAX_IRA = "has_large_pre_tax_ira"
    HAS_529_ACCOUNT = "has_529_account"
    HAS_EMPLOYER_STOCK = "has_employer_stock"
    SEPARATED_FROM_SERVICE = "separated_from_service"
    EMPLOYER_401K_ALLOWS_AFTER_TAX = "employer_401k_allows_after_tax"
    INCOME_ABOVE_ROTH_LIMITS = "income_above_roth_limits"
    HIGH_TAX_BRACKET = "high_tax_bracket"
    HAS_RENTAL_REAL_ESTATE = "has_rental_real_estate"
    SELLING_PRIMARY_RESIDENCE = "selling_primary_residence"
    HAS_BUSINESS_OWNERSHIP = "has_business_ownership"
    HAS_REALIZED_CAPITAL_GAINS = "has_realized_capital_gains"
    EDUCATION_FUNDING_INTENT = "education_funding_intent"
    ENROLLED_IN_HDHP = "enrolled_in_hdhp"
    FAMILY_WEALTH_TRANSFER_INTENT = "family_wealth_transfer_intent"
    HAS_CHARITABLE_INTENT = "has_charitable_intent"
    IS_TRANSITION_YEAR = "is_transition_year"
    INCOME_LOWER_THAN_TYPICAL = "income_lower_than_typical"


# Flags whose default comes from the net-worth tier when unanswered
NET_WORTH_DERIVED_FLAGS: FrozenSet[ProfileFlag] = frozenset({
    ProfileFlag.HAS_PRE_TAX_RETIREMENT,
    ProfileFlag.HAS_MULTIPLE_ACCOUNT_TYPES,
})


def flag_value(profile: InvestorProfile, flag: ProfileFlag) -> Optional[bool]:
    """Current value of a flag, None when unset."""
    value = getattr(profile, flag.value, None)
    if value is None:
        return None
    return bool(value)


@dataclass(frozen=True)
class AgeAtLeast:
    """Age >= years (inclusive)."""
    kind: ClassVar[str] = "age_at_least"
    years: int

    def describe(self) -> str:
        return f"age {self.years}+"


@dataclass(frozen=True)
class AgeAtMost:
    """Age <= years (inclusive)."""
    kind: ClassVar[str] = "age_at_most"
    years: int

    def describe(self) -> str:
        return f"age {self.years} or under"


@dataclass(frozen=True)
class MaritalStatusIn:
    kind: ClassVar[str] = "marital_status_in"
    allowed: FrozenSet[MaritalStatus]

    def describe(self) -> str:
        return "marital status " + "/".join(sorted(s.value for s in self.allowed))


@dataclass(frozen=True)
class EmploymentStatusIn:
    """Primary earner's employment status is one of allowed."""
    kind: ClassVar[str] = "employment_status_in"
    allowed: FrozenSet[EmploymentStatus]

    def describe(self) -> str:
        return "employment " + "/".join(sorted(s.value for s in self.allowed))


@dataclass(frozen=True)
class RequiresFlag:
    kind: ClassVar[str] = "requires"
    flag: ProfileFlag

    def describe(self) -> str:
        return self.flag.value.replace("_", " ")


@dataclass(frozen=True)
class ForbidsFlag:
    """Flag must be answered and false."""
    kind: ClassVar[str] = "forbids"
    flag: ProfileFlag

    def describe(self) -> str:
        return "not " + self.flag.value.replace("_", " ")


Trigger = Union[AgeAtLeast, AgeAtMost, MaritalStatusIn, EmploymentStatusIn, RequiresFlag, ForbidsFlag]

TRIGGER_TYPES = (AgeAtLeast, AgeAtMost, MaritalStatusIn, EmploymentStatusIn, RequiresFlag, ForbidsFlag)


def evaluate_trigger(trigger: Trigger, profile: InvestorProfile) -> bool:
    """
    Evaluate one trigger against a profile.

    Unset profile fields never satisfy a trigger.
    """
    if isinstance(trigger, AgeAtLeast):
        return profile.age is not None and profile.age >= trigger.years
    if isinstance(trigger, AgeAtMost):
        return profile.age is not None and profile.age <= trigger.years
    if isinstance(trigger, MaritalStatusIn):
        return profile.marital_status in trigger.allowed
    if isinstance(trigger, EmploymentStatusIn):
        return profile.employment_status in trigger.allowed
    if isinstance(trigger, RequiresFlag):
        return flag_value(profile, trigger.flag) is True
    if isinstance(trigger, ForbidsFlag):
        return flag_value(profile, trigger.flag) is False
    raise TypeError(f"Unknown trigger type: {type(trigger).__name__}")


def evaluate_triggers(triggers: Iterable[Trigger], profile: InvestorProfile) -> bool:
    """Conjunction of triggers; an empty set holds for everyone."""
    return all(evaluate_trigger(t, profile) for t in triggers)


def failed_triggers(triggers: Iterable[Trigger], profile: InvestorProfile) -> List[Trigger]:
    """Triggers that do not hold, in declaration order."""
    return [t for t in triggers if not evaluate_trigger(t, profile)]


def depends_on_net_worth(trigger: Trigger) -> bool:
    """True when the trigger reads a flag inferred from the net-worth tier."""
    return isinstance(trigger, (RequiresFlag, ForbidsFlag)) and trigger.flag in NET_WORTH_DERIVED_FLAGS
