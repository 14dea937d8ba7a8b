"""Profile Builder.

Normalizes raw questionnaire answers into a canonical InvestorProfile.

Answers arrive from the wizard with several historical spellings
("500k-1M" vs "500k-1m", "Married" vs "married"). Every value is mapped onto
the canonical enums; anything unrecognized falls back to the most
conservative default instead of raising, so a malformed answer degrades the
result rather than ending the session.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Dict, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel

from onboarding.inference_rules import (
    SITUATIONAL_FIELDS,
    InferenceContext,
    resolve_situational_flags,
)
from onboarding.investor_profile import (
    CharitableRange,
    EmploymentStatus,
    IncomeComparison,
    InvestorProfile,
    MaritalStatus,
    RealEstateRange,
    RetirementRange,
    TransitionYearFlags,
    UnemploymentDetails,
    UnemploymentDuration,
)

logger = logging.getLogger(__name__)

DEFAULT_AGE = 55

_TRUE_TOKENS = {"true", "yes", "y", "1", "on"}
_FALSE_TOKENS = {"false", "no", "n", "0", "off", "none"}


def _key(value: Any) -> str:
    return "".join(str(value).split()).lower()


MARITAL_VARIANTS: Dict[str, MaritalStatus] = {
    "single": MaritalStatus.SINGLE,
    "divorced": MaritalStatus.SINGLE,
    "widowed": MaritalStatus.SINGLE,
    "married": MaritalStatus.MARRIED,
    "married_joint": MaritalStatus.MARRIED,
    "marriedfilingjointly": MaritalStatus.MARRIED,
}

EMPLOYMENT_VARIANTS: Dict[str, EmploymentStatus] = {
    "employed": EmploymentStatus.EMPLOYED,
    "w-2": EmploymentStatus.EMPLOYED,
    "w2": EmploymentStatus.EMPLOYED,
    "unemployed": EmploymentStatus.UNEMPLOYED,
    "severance": EmploymentStatus.UNEMPLOYED,
    "self-employed": EmploymentStatus.SELF_EMPLOYED,
    "self_employed": EmploymentStatus.SELF_EMPLOYED,
    "selfemployed": EmploymentStatus.SELF_EMPLOYED,
    "consulting": EmploymentStatus.CONSULTING,
    "retired": EmploymentStatus.RETIRED,
}

RETIREMENT_VARIANTS: Dict[str, RetirementRange] = {
    "<250k": RetirementRange.UNDER_250K,
    "250k-500k": RetirementRange.FROM_250K_TO_500K,
    "500k-1m": RetirementRange.FROM_500K_TO_1M,
    "1m-2.5m": RetirementRange.FROM_1M_TO_2_5M,
    "2.5m-5m": RetirementRange.FROM_2_5M_TO_5M,
    ">5m": RetirementRange.OVER_5M,
    "5m+": RetirementRange.OVER_5M,
}

REAL_ESTATE_VARIANTS: Dict[str, RealEstateRange] = {
    "none": RealEstateRange.NONE,
    "<250k": RealEstateRange.UNDER_250K,
    "250k-750k": RealEstateRange.FROM_250K_TO_750K,
    "750k-2m": RealEstateRange.FROM_750K_TO_2M,
    ">2m": RealEstateRange.OVER_2M,
    "2m+": RealEstateRange.OVER_2M,
}

CHARITABLE_VARIANTS: Dict[str, CharitableRange] = {r.value: r for r in CharitableRange}
DURATION_VARIANTS: Dict[str, UnemploymentDuration] = {d.value: d for d in UnemploymentDuration}
INCOME_COMPARISON_VARIANTS: Dict[str, IncomeComparison] = {c.value: c for c in IncomeComparison}


def _lookup(table: Mapping[str, Any], value: Any, default: Any, label: str) -> Any:
    """Map a raw answer through a variant table, failing closed to default."""
    if value is None or value == "":
        return default
    if hasattr(value, "value"):
        value = value.value
    found = table.get(_key(value))
    if found is None:
        logger.warning(f"Unrecognized {label} value {value!r}, defaulting to {default!r}")
        return default
    return found


def normalize_marital_status(value: Any) -> MaritalStatus:
    return _lookup(MARITAL_VARIANTS, value, MaritalStatus.SINGLE, "marital status")


def normalize_employment_status(value: Any) -> EmploymentStatus:
    return _lookup(EMPLOYMENT_VARIANTS, value, EmploymentStatus.EMPLOYED, "employment status")


def normalize_retirement_range(value: Any) -> RetirementRange:
    return _lookup(RETIREMENT_VARIANTS, value, RetirementRange.UNDER_250K, "retirement range")


def normalize_real_estate_range(value: Any) -> RealEstateRange:
    return _lookup(REAL_ESTATE_VARIANTS, value, RealEstateRange.NONE, "real estate range")


def normalize_charitable_giving(value: Any) -> CharitableRange:
    return _lookup(CHARITABLE_VARIANTS, value, CharitableRange.NONE, "charitable giving")


def normalize_age(value: Any) -> int:
    """Whole years; missing or unparseable ages use DEFAULT_AGE."""
    if value is None or value == "":
        return DEFAULT_AGE
    try:
        age = int(float(value))
    except (TypeError, ValueError, OverflowError):
        logger.warning(f"Unparseable age {value!r}, defaulting to {DEFAULT_AGE}")
        return DEFAULT_AGE
    if age < 0:
        logger.warning(f"Negative age {age}, defaulting to {DEFAULT_AGE}")
        return DEFAULT_AGE
    return age


def coerce_flag(value: Any) -> Optional[bool]:
    """Interpret a yes/no answer; anything unclear counts as unanswered."""
    if value is None or isinstance(value, bool):
        return value
    if isinstance(value, float) and math.isnan(value):
        return None
    if isinstance(value, (int, float)):
        return bool(value)
    token = _key(value)
    if token in _TRUE_TOKENS:
        return True
    if token in _FALSE_TOKENS:
        return False
    if token:
        logger.warning(f"Unrecognized yes/no answer {value!r}, treating as unanswered")
    return None


class WizardAnswers(BaseModel):
    """
    Raw answers collected by the questionnaire.

    Accepts both snake_case and the wizard's camelCase keys. Enum-like
    answers are kept as raw strings here and normalized by ProfileBuilder.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    age: Optional[Any] = None
    marital_status: Optional[str] = None
    employment_status: Optional[str] = None
    spouse_employment_status: Optional[str] = None
    retirement_range: Optional[str] = None
    real_estate_range: Optional[str] = None
    charitable_giving: Optional[str] = None

    unemployment_duration: Optional[str] = None
    income_comparison: Optional[str] = None
    spouse_unemployment_duration: Optional[str] = None
    spouse_income_comparison: Optional[str] = None

    has_pre_tax_retirement: Optional[bool] = None
    has_multiple_account_types: Optional[bool] = None
    has_traditional_ira: Optional[bool] = None
    has_401k: Optional[bool] = None
    has_taxable_brokerage: Optional[bool] = None
    has_large_pre_tax_ira: Optional[bool] = None
    has_529_account: Optional[bool] = None
    has_employer_stock: Optional[bool] = None
    separated_from_service: Optional[bool] = None
    employer_401k_allows_after_tax: Optional[bool] = None
    income_above_roth_limits: Optional[bool] = None
    high_tax_bracket: Optional[bool] = None
    has_rental_real_estate: Optional[bool] = None
    selling_primary_residence: Optional[bool] = None
    has_business_ownership: Optional[bool] = None
    has_realized_capital_gains: Optional[bool] = None
    education_funding_intent: Optional[bool] = None
    enrolled_in_hdhp: Optional[bool] = None
    family_wealth_transfer_intent: Optional[bool] = None

    @field_validator(*SITUATIONAL_FIELDS, mode="before")
    @classmethod
    def _coerce_flags(cls, value: Any) -> Optional[bool]:
        return coerce_flag(value)

    @field_validator(
        "marital_status",
        "employment_status",
        "spouse_employment_status",
        "retirement_range",
        "real_estate_range",
        "charitable_giving",
        "unemployment_duration",
        "income_comparison",
        "spouse_unemployment_duration",
        "spouse_income_comparison",
        mode="before",
    )
    @classmethod
    def _stringify(cls, value: Any) -> Optional[str]:
        if value is None:
            return None
        if hasattr(value, "value"):
            return str(value.value)
        return str(value)


class ProfileBuilder:
    """
    Builds investor profiles from questionnaire answers.

    Every field of the resulting profile is either user-supplied or filled
    by a named inference rule, so the matching engine never sees an
    unanswered situational flag from this path.
    """

    def build_profile(self, answers: Union[WizardAnswers, Mapping[str, Any]]) -> InvestorProfile:
        """Build a profile from questionnaire answers."""
        if not isinstance(answers, WizardAnswers):
            answers = WizardAnswers.model_validate(dict(answers))

        age = normalize_age(answers.age)
        marital_status = normalize_marital_status(answers.marital_status)
        employment_status = normalize_employment_status(answers.employment_status)
        spouse_employment_status = self._spouse_status(answers, marital_status)
        retirement_range = normalize_retirement_range(answers.retirement_range)
        real_estate_range = normalize_real_estate_range(answers.real_estate_range)
        charitable_giving = normalize_charitable_giving(answers.charitable_giving)

        unemployment = self._unemployment_details(
            answers.unemployment_duration, answers.income_comparison
        )
        spouse_unemployment = None
        if spouse_employment_status is not None:
            spouse_unemployment = self._unemployment_details(
                answers.spouse_unemployment_duration, answers.spouse_income_comparison
            )

        transition = TransitionYearFlags.compute(
            employment_status,
            spouse_employment_status,
            unemployment,
            spouse_unemployment,
        )

        context = InferenceContext(
            retirement_range=retirement_range,
            real_estate_range=real_estate_range,
            answered={name: getattr(answers, name) for name in SITUATIONAL_FIELDS},
        )
        flags = resolve_situational_flags(context)

        profile = InvestorProfile(
            age=age,
            marital_status=marital_status,
            employment_status=employment_status,
            spouse_employment_status=spouse_employment_status,
            unemployment=unemployment,
            spouse_unemployment=spouse_unemployment,
            retirement_range=retirement_range,
            real_estate_range=real_estate_range,
            charitable_giving=charitable_giving,
            transition=transition,
            **flags,
        )
        logger.debug(
            f"Built profile: age={profile.age} retirement={profile.retirement_range.value} "
            f"transition_year={profile.is_transition_year}"
        )
        return profile

    def _spouse_status(
        self, answers: WizardAnswers, marital_status: MaritalStatus
    ) -> Optional[EmploymentStatus]:
        """Spouse employment only applies to married households."""
        if marital_status != MaritalStatus.MARRIED or not answers.spouse_employment_status:
            return None
        return normalize_employment_status(answers.spouse_employment_status)

    def _unemployment_details(
        self, duration: Optional[str], comparison: Optional[str]
    ) -> Optional[UnemploymentDetails]:
        """Follow-up answers, or None when neither was given."""
        if not duration and not comparison:
            return None
        return UnemploymentDetails(
            duration=_lookup(DURATION_VARIANTS, duration, None, "unemployment duration"),
            income_comparison=_lookup(
                INCOME_COMPARISON_VARIANTS, comparison, None, "income comparison"
            ),
        )


def build_profile(answers: Union[WizardAnswers, Mapping[str, Any]]) -> InvestorProfile:
    """Convenience wrapper around ProfileBuilder.build_profile."""
    return ProfileBuilder().build_profile(answers)
