"""Persona Adapter.

Maps the coarse persona picked on the landing step (age band, household,
employment, asset bracket, real estate type) onto wizard answers so that a
persona can be run through the same ProfileBuilder as a full questionnaire.
"""

from __future__ import annotations

import logging
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from onboarding.investor_profile import InvestorProfile
from onboarding.profile_builder import ProfileBuilder, WizardAnswers

logger = logging.getLogger(__name__)

AGE_BAND_MIDPOINTS: Dict[str, int] = {
    "45-49": 47,
    "50-54": 52,
    "55-59": 57,
    "60-65": 62,
    "60-69": 65,
    "70+": 72,
}
DEFAULT_PERSONA_AGE = 52

# Persona only captures the type of real estate, not its value.
# Owned property maps to a mid tier.
REAL_ESTATE_TYPE_RANGES: Dict[str, str] = {
    "none": "none",
    "primary": "250k-750k",
    "rental": "250k-750k",
}

# Retirement is not a transition-year status on its own, but a retired
# persona is treated like someone without earned income this year.
PERSONA_EMPLOYMENT: Dict[str, str] = {
    "retired": "unemployed",
    "w-2": "employed",
}

PERSONA_CHARITABLE_RANGE = "5k-25k"


class PersonaInput(BaseModel):
    """Persona selected on the landing step, plus optional refiners."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    age_band: str
    marital_status: str
    employment: str
    spouse_employment: Optional[str] = None
    retirement_range: str
    real_estate: str = "None"

    has_taxable_brokerage: Optional[bool] = None
    has_employer_stock_in_401k: Optional[bool] = None
    charitable_giving_intent: Optional[bool] = None
    has_hsa: Optional[bool] = Field(default=None, alias="hasHSA")
    has_529: Optional[bool] = None
    business_owner_or_equity: Optional[bool] = None


def _persona_employment(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    return PERSONA_EMPLOYMENT.get(value.strip().lower(), value)


def persona_to_answers(persona: PersonaInput) -> WizardAnswers:
    """Translate a persona into the equivalent wizard answers."""
    age = AGE_BAND_MIDPOINTS.get(persona.age_band.strip())
    if age is None:
        logger.warning(f"Unknown age band {persona.age_band!r}, using {DEFAULT_PERSONA_AGE}")
        age = DEFAULT_PERSONA_AGE

    real_estate_type = persona.real_estate.strip().lower()
    real_estate_range = REAL_ESTATE_TYPE_RANGES.get(real_estate_type, "none")

    return WizardAnswers(
        age=age,
        marital_status=persona.marital_status,
        employment_status=_persona_employment(persona.employment),
        spouse_employment_status=_persona_employment(persona.spouse_employment),
        retirement_range=persona.retirement_range,
        real_estate_range=real_estate_range,
        has_rental_real_estate=real_estate_type == "rental",
        charitable_giving=PERSONA_CHARITABLE_RANGE if persona.charitable_giving_intent else "none",
        has_taxable_brokerage=persona.has_taxable_brokerage,
        has_employer_stock=persona.has_employer_stock_in_401k,
        enrolled_in_hdhp=persona.has_hsa,
        has_529_account=persona.has_529,
        education_funding_intent=persona.has_529,
        has_business_ownership=persona.business_owner_or_equity,
    )


def persona_to_profile(persona: PersonaInput) -> InvestorProfile:
    """Build a full profile from a persona."""
    return ProfileBuilder().build_profile(persona_to_answers(persona))
