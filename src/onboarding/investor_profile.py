"""Investor Profile.

Canonical representation of one user's questionnaire answers, consumed by
the strategy matching engine. Profiles are built once per session by the
ProfileBuilder and are immutable afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional


class MaritalStatus(str, Enum):
    """Household marital status."""
    SINGLE = "single"
    MARRIED = "married"


class EmploymentStatus(str, Enum):
    """Employment status of one spouse."""
    EMPLOYED = "employed"
    UNEMPLOYED = "unemployed"
    SELF_EMPLOYED = "self_employed"
    CONSULTING = "consulting"
    RETIRED = "retired"


class RetirementRange(str, Enum):
    """Retirement account net-worth bracket, lowest first."""
    UNDER_250K = "<250k"
    FROM_250K_TO_500K = "250k-500k"
    FROM_500K_TO_1M = "500k-1m"
    FROM_1M_TO_2_5M = "1m-2.5m"
    FROM_2_5M_TO_5M = "2.5m-5m"
    OVER_5M = ">5m"


class RealEstateRange(str, Enum):
    """Real estate equity bracket, lowest first."""
    NONE = "none"
    UNDER_250K = "<250k"
    FROM_250K_TO_750K = "250k-750k"
    FROM_750K_TO_2M = "750k-2m"
    OVER_2M = ">2m"


class CharitableRange(str, Enum):
    """Expected annual charitable giving."""
    NONE = "none"
    UNDER_5K = "<5k"
    FROM_5K_TO_25K = "5k-25k"
    FROM_25K_TO_100K = "25k-100k"
    OVER_100K = ">100k"


class UnemploymentDuration(str, Enum):
    """How long a spouse has been (or expects to be) out of work."""
    UNDER_3_MONTHS = "<3months"
    FROM_3_TO_6_MONTHS = "3-6months"
    FROM_6_TO_12_MONTHS = "6-12months"
    OVER_12_MONTHS = ">12months"


class IncomeComparison(str, Enum):
    """Current-year income compared to a typical year."""
    HIGHER = "higher"
    SIMILAR = "similar"
    LOWER = "lower"
    UNSURE = "unsure"


RETIREMENT_TIER_ORDER = tuple(RetirementRange)
REAL_ESTATE_TIER_ORDER = tuple(RealEstateRange)

UNEMPLOYED_STATUSES = frozenset({EmploymentStatus.UNEMPLOYED})
SELF_EMPLOYED_STATUSES = frozenset({EmploymentStatus.SELF_EMPLOYED, EmploymentStatus.CONSULTING})
SHORT_TERM_DURATIONS = frozenset({
    UnemploymentDuration.UNDER_3_MONTHS,
    UnemploymentDuration.FROM_3_TO_6_MONTHS,
})


def retirement_tier_index(tier: RetirementRange) -> int:
    """Rank of a retirement bracket, 0 for the lowest."""
    return RETIREMENT_TIER_ORDER.index(tier)


def real_estate_tier_index(tier: RealEstateRange) -> int:
    """Rank of a real estate bracket, 0 for none."""
    return REAL_ESTATE_TIER_ORDER.index(tier)


@dataclass(frozen=True)
class UnemploymentDetails:
    """Follow-up answers for a spouse who is out of work."""
    duration: Optional[UnemploymentDuration] = None
    income_comparison: Optional[IncomeComparison] = None


@dataclass(frozen=True)
class TransitionYearFlags:
    """Derived flags describing a lower-income or changed-income year."""
    is_transition_year: bool = False
    anyone_unemployed: bool = False
    both_unemployed: bool = False
    short_term_transition: bool = False
    income_lower_than_typical: bool = False
    income_volatility: bool = False

    @classmethod
    def compute(
        cls,
        employment_status: EmploymentStatus,
        spouse_employment_status: Optional[EmploymentStatus] = None,
        unemployment: Optional[UnemploymentDetails] = None,
        spouse_unemployment: Optional[UnemploymentDetails] = None,
    ) -> "TransitionYearFlags":
        """Derive the flags from both spouses' employment answers."""
        primary_unemployed = employment_status in UNEMPLOYED_STATUSES
        spouse_unemployed = spouse_employment_status in UNEMPLOYED_STATUSES
        primary_self_employed = employment_status in SELF_EMPLOYED_STATUSES
        spouse_self_employed = spouse_employment_status in SELF_EMPLOYED_STATUSES

        details = [d for d in (unemployment, spouse_unemployment) if d is not None]
        short_term = any(d.duration in SHORT_TERM_DURATIONS for d in details)
        lower_income = any(d.income_comparison == IncomeComparison.LOWER for d in details)

        anyone_unemployed = primary_unemployed or spouse_unemployed
        anyone_self_employed = primary_self_employed or spouse_self_employed

        return cls(
            is_transition_year=anyone_unemployed or anyone_self_employed,
            anyone_unemployed=anyone_unemployed,
            both_unemployed=primary_unemployed and spouse_unemployed,
            short_term_transition=short_term,
            income_lower_than_typical=lower_income,
            income_volatility=anyone_unemployed or anyone_self_employed,
        )


@dataclass(frozen=True)
class InvestorProfile:
    """
    Complete profile of one user, ready for strategy matching.

    Situational flags are Optional: None means the question was never
    answered and no inference rule filled it in. Trigger evaluation treats
    None as "not satisfied".
    """
    # Demographics
    age: int
    marital_status: MaritalStatus = MaritalStatus.SINGLE

    # Employment
    employment_status: EmploymentStatus = EmploymentStatus.EMPLOYED
    spouse_employment_status: Optional[EmploymentStatus] = None
    unemployment: Optional[UnemploymentDetails] = None
    spouse_unemployment: Optional[UnemploymentDetails] = None

    # Net-worth brackets
    retirement_range: RetirementRange = RetirementRange.UNDER_250K
    real_estate_range: RealEstateRange = RealEstateRange.NONE
    charitable_giving: CharitableRange = CharitableRange.NONE

    # Accounts
    has_pre_tax_retirement: Optional[bool] = None
    has_traditional_ira: Optional[bool] = None
    has_401k: Optional[bool] = None
    has_taxable_brokerage: Optional[bool] = None
    has_multiple_account_types: Optional[bool] = None
    has_large_pre_tax_ira: Optional[bool] = None
    has_529_account: Optional[bool] = None

    # Employment and compensation
    has_employer_stock: Optional[bool] = None
    separated_from_service: Optional[bool] = None
    employer_401k_allows_after_tax: Optional[bool] = None
    income_above_roth_limits: Optional[bool] = None
    high_tax_bracket: Optional[bool] = None

    # Property, business and investments
    has_rental_real_estate: Optional[bool] = None
    selling_primary_residence: Optional[bool] = None
    has_business_ownership: Optional[bool] = None
    has_realized_capital_gains: Optional[bool] = None

    # Goals
    education_funding_intent: Optional[bool] = None
    enrolled_in_hdhp: Optional[bool] = None
    family_wealth_transfer_intent: Optional[bool] = None

    transition: TransitionYearFlags = field(default_factory=TransitionYearFlags)

    @property
    def has_charitable_intent(self) -> bool:
        return self.charitable_giving != CharitableRange.NONE

    @property
    def is_transition_year(self) -> bool:
        return self.transition.is_transition_year

    @property
    def income_lower_than_typical(self) -> bool:
        return self.transition.income_lower_than_typical

    @property
    def anyone_unemployed(self) -> bool:
        return self.transition.anyone_unemployed

    @property
    def retirement_tier(self) -> int:
        return retirement_tier_index(self.retirement_range)

    @property
    def real_estate_tier(self) -> int:
        return real_estate_tier_index(self.real_estate_range)

    def to_dict(self) -> Dict[str, Any]:
        """Convert profile to a display dictionary."""
        return {
            "demographics": {
                "age": self.age,
                "marital_status": self.marital_status.value,
            },
            "employment": {
                "status": self.employment_status.value,
                "spouse_status": (
                    self.spouse_employment_status.value
                    if self.spouse_employment_status else None
                ),
            },
            "net_worth": {
                "retirement_range": self.retirement_range.value,
                "real_estate_range": self.real_estate_range.value,
                "charitable_giving": self.charitable_giving.value,
            },
            "transition": {
                "is_transition_year": self.transition.is_transition_year,
                "anyone_unemployed": self.transition.anyone_unemployed,
                "both_unemployed": self.transition.both_unemployed,
                "short_term_transition": self.transition.short_term_transition,
                "income_lower_than_typical": self.transition.income_lower_than_typical,
                "income_volatility": self.transition.income_volatility,
            },
        }
