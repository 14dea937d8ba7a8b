"""Investor Onboarding Module.

Turns questionnaire answers into the canonical profile consumed by the
strategy matcher:
- Canonical investor profile and transition-year flags
- Answer normalization with tolerant variant tables
- Named inference rules for unanswered questions
- Persona shortcut from the landing step
"""

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
from onboarding.inference_rules import INFERENCE_RULES, InferenceContext, resolve_situational_flags
from onboarding.profile_builder import ProfileBuilder, WizardAnswers, build_profile
from onboarding.persona_adapter import PersonaInput, persona_to_answers, persona_to_profile

__all__ = [
    "CharitableRange",
    "EmploymentStatus",
    "IncomeComparison",
    "InvestorProfile",
    "MaritalStatus",
    "RealEstateRange",
    "RetirementRange",
    "TransitionYearFlags",
    "UnemploymentDetails",
    "UnemploymentDuration",
    "INFERENCE_RULES",
    "InferenceContext",
    "resolve_situational_flags",
    "ProfileBuilder",
    "WizardAnswers",
    "build_profile",
    "PersonaInput",
    "persona_to_answers",
    "persona_to_profile",
]
