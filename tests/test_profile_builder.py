"""
Tests for questionnaire normalization and profile building.

Covers:
- Variant spellings and unknown values for every enum-like answer
- Age defaults
- Named inference rules and explicit-answer precedence
- Transition-year flag derivation
- camelCase wizard payloads
"""

import pytest
import os
import sys

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from onboarding.inference_rules import SITUATIONAL_FIELDS
from onboarding.investor_profile import (
    CharitableRange,
    EmploymentStatus,
    IncomeComparison,
    MaritalStatus,
    RealEstateRange,
    RetirementRange,
    UnemploymentDuration,
)
from onboarding.profile_builder import (
    DEFAULT_AGE,
    ProfileBuilder,
    WizardAnswers,
    build_profile,
    coerce_flag,
    normalize_age,
    normalize_employment_status,
    normalize_marital_status,
    normalize_real_estate_range,
    normalize_retirement_range,
)


class TestNormalization:
    """Variant spellings map onto canonical enums."""

    @pytest.mark.parametrize("raw,expected", [
        ("500k-1m", RetirementRange.FROM_500K_TO_1M),
        ("500k-1M", RetirementRange.FROM_500K_TO_1M),
        ("1M-2.5M", RetirementRange.FROM_1M_TO_2_5M),
        ("5M+", RetirementRange.OVER_5M),
        (">5m", RetirementRange.OVER_5M),
        (" <250K ", RetirementRange.UNDER_250K),
    ])
    def test_retirement_variants(self, raw, expected):
        assert normalize_retirement_range(raw) == expected

    @pytest.mark.parametrize("raw,expected", [
        ("None", RealEstateRange.NONE),
        ("750k-2M", RealEstateRange.FROM_750K_TO_2M),
        ("2M+", RealEstateRange.OVER_2M),
    ])
    def test_real_estate_variants(self, raw, expected):
        assert normalize_real_estate_range(raw) == expected

    @pytest.mark.parametrize("raw,expected", [
        ("Married", MaritalStatus.MARRIED),
        ("married_joint", MaritalStatus.MARRIED),
        ("Divorced", MaritalStatus.SINGLE),
        ("single", MaritalStatus.SINGLE),
    ])
    def test_marital_variants(self, raw, expected):
        assert normalize_marital_status(raw) == expected

    @pytest.mark.parametrize("raw,expected", [
        ("W-2", EmploymentStatus.EMPLOYED),
        ("Severance", EmploymentStatus.UNEMPLOYED),
        ("self-employed", EmploymentStatus.SELF_EMPLOYED),
        ("Consulting", EmploymentStatus.CONSULTING),
        ("retired", EmploymentStatus.RETIRED),
    ])
    def test_employment_variants(self, raw, expected):
        assert normalize_employment_status(raw) == expected

    def test_enum_instances_pass_through(self):
        assert normalize_retirement_range(RetirementRange.OVER_5M) == RetirementRange.OVER_5M


class TestUnknownValues:
    """Unrecognized answers fall back to the conservative default."""

    def test_unknown_retirement_is_lowest_tier(self):
        assert normalize_retirement_range("lots") == RetirementRange.UNDER_250K

    def test_unknown_real_estate_is_none(self):
        assert normalize_real_estate_range("a castle") == RealEstateRange.NONE

    def test_unknown_marital_is_single(self):
        assert normalize_marital_status("complicated") == MaritalStatus.SINGLE

    def test_unknown_employment_is_employed(self):
        assert normalize_employment_status("astronaut") == EmploymentStatus.EMPLOYED

    def test_unknown_value_is_logged(self, caplog):
        import logging

        with caplog.at_level(logging.WARNING, logger="onboarding.profile_builder"):
            normalize_retirement_range("lots")

        assert "Unrecognized retirement range" in caplog.text

    def test_unknown_values_do_not_raise_in_builder(self):
        profile = build_profile({
            "age": "fifty",
            "marital_status": "???",
            "employment_status": "???",
            "retirement_range": "???",
            "real_estate_range": "???",
            "charitable_giving": "???",
        })

        assert profile.age == DEFAULT_AGE
        assert profile.marital_status == MaritalStatus.SINGLE
        assert profile.employment_status == EmploymentStatus.EMPLOYED
        assert profile.retirement_range == RetirementRange.UNDER_250K
        assert profile.real_estate_range == RealEstateRange.NONE
        assert profile.charitable_giving == CharitableRange.NONE


class TestAge:
    """Age parsing."""

    def test_missing_age_defaults_to_55(self):
        assert DEFAULT_AGE == 55
        assert build_profile({}).age == 55

    def test_numeric_strings_are_parsed(self):
        assert normalize_age("62") == 62
        assert normalize_age(61.7) == 61

    def test_negative_age_uses_default(self):
        assert normalize_age(-3) == DEFAULT_AGE

    @pytest.mark.parametrize("raw", ["inf", "-inf", "1e400", float("inf"), "nan"])
    def test_non_finite_age_uses_default(self, raw):
        assert normalize_age(raw) == DEFAULT_AGE

    def test_non_finite_age_does_not_raise_in_builder(self):
        assert build_profile({"age": "1e400", "marital_status": "single"}).age == DEFAULT_AGE


class TestCoerceFlag:
    """Yes/no answers."""

    @pytest.mark.parametrize("raw,expected", [
        (True, True),
        (False, False),
        ("yes", True),
        ("No", False),
        ("true", True),
        (1, True),
        (0, False),
        (None, None),
        ("", None),
        ("maybe", None),
        (float("nan"), None),
        (0.0, False),
        (2.5, True),
    ])
    def test_values(self, raw, expected):
        assert coerce_flag(raw) is expected


class TestInferenceRules:
    """Unanswered situational flags are filled by named rules."""

    def test_every_situational_flag_is_resolved(self):
        profile = build_profile({"age": 50})

        for name in SITUATIONAL_FIELDS:
            assert getattr(profile, name) is not None, name

    def test_unanswered_flags_default_false(self):
        profile = build_profile({"age": 50})

        assert profile.has_rental_real_estate is False
        assert profile.has_business_ownership is False
        assert profile.employer_401k_allows_after_tax is False

    def test_pre_tax_inferred_from_tier(self):
        low = build_profile({"retirement_range": "<250k"})
        mid = build_profile({"retirement_range": "250k-500k"})

        assert low.has_pre_tax_retirement is False
        assert mid.has_pre_tax_retirement is True

    def test_pre_tax_inferred_from_accounts(self):
        profile = build_profile({"retirement_range": "<250k", "has_401k": True})
        assert profile.has_pre_tax_retirement is True

    def test_explicit_answer_wins_over_rule(self):
        profile = build_profile({"retirement_range": ">5m", "has_pre_tax_retirement": False})
        assert profile.has_pre_tax_retirement is False

    def test_multiple_account_types(self):
        both = build_profile({"retirement_range": "1m-2.5m", "has_taxable_brokerage": True})
        only_pre_tax = build_profile({"retirement_range": "1m-2.5m"})

        assert both.has_multiple_account_types is True
        assert only_pre_tax.has_multiple_account_types is False

    def test_rule_lookup(self):
        from onboarding.inference_rules import (
            pre_tax_from_accounts_or_tier,
            rule_for,
            unanswered_is_false,
        )

        assert rule_for("has_pre_tax_retirement") is pre_tax_from_accounts_or_tier
        assert rule_for("has_rental_real_estate") is unanswered_is_false


class TestTransitionYear:
    """Transition flags derived from both spouses' employment."""

    def test_employed_is_not_transition(self):
        profile = build_profile({"employment_status": "employed"})

        assert profile.is_transition_year is False
        assert profile.anyone_unemployed is False

    def test_self_employed_is_transition_without_unemployment(self):
        profile = build_profile({"employment_status": "self_employed"})

        assert profile.is_transition_year is True
        assert profile.anyone_unemployed is False
        assert profile.transition.income_volatility is True

    def test_spouse_unemployed_counts(self):
        profile = build_profile({
            "marital_status": "married",
            "employment_status": "employed",
            "spouse_employment_status": "unemployed",
        })

        assert profile.anyone_unemployed is True
        assert profile.transition.both_unemployed is False

    def test_both_unemployed(self):
        profile = build_profile({
            "marital_status": "married",
            "employment_status": "unemployed",
            "spouse_employment_status": "severance",
        })
        assert profile.transition.both_unemployed is True

    def test_spouse_ignored_when_single(self):
        profile = build_profile({
            "marital_status": "single",
            "employment_status": "employed",
            "spouse_employment_status": "unemployed",
        })

        assert profile.spouse_employment_status is None
        assert profile.anyone_unemployed is False

    def test_unemployment_details(self):
        profile = build_profile({
            "employment_status": "unemployed",
            "unemployment_duration": "<3months",
            "income_comparison": "lower",
        })

        assert profile.unemployment.duration == UnemploymentDuration.UNDER_3_MONTHS
        assert profile.unemployment.income_comparison == IncomeComparison.LOWER
        assert profile.transition.short_term_transition is True
        assert profile.income_lower_than_typical is True

    def test_retired_is_not_transition(self):
        profile = build_profile({"employment_status": "retired"})
        assert profile.is_transition_year is False


class TestWizardAnswers:
    """Payload parsing."""

    def test_camel_case_keys(self):
        profile = build_profile({
            "age": 60,
            "maritalStatus": "Married",
            "retirementRange": "1M-2.5M",
            "realEstateRange": "750k-2M",
            "hasRentalRealEstate": "yes",
            "charitableGiving": "5k-25k",
        })

        assert profile.marital_status == MaritalStatus.MARRIED
        assert profile.retirement_range == RetirementRange.FROM_1M_TO_2_5M
        assert profile.real_estate_range == RealEstateRange.FROM_750K_TO_2M
        assert profile.has_rental_real_estate is True
        assert profile.has_charitable_intent is True

    def test_unknown_keys_ignored(self):
        answers = WizardAnswers.model_validate({"age": 40, "favoriteColor": "blue"})
        assert answers.age == 40

    def test_builder_accepts_model(self):
        answers = WizardAnswers(age=47, retirement_range="500k-1m")
        profile = ProfileBuilder().build_profile(answers)

        assert profile.age == 47
        assert profile.retirement_tier == 2

    def test_profile_is_frozen(self):
        from dataclasses import FrozenInstanceError

        profile = build_profile({"age": 50})
        with pytest.raises(FrozenInstanceError):
            profile.age = 51

    def test_to_dict(self):
        profile = build_profile({"age": 58, "retirement_range": "500k-1m"})
        data = profile.to_dict()

        assert data["demographics"]["age"] == 58
        assert data["net_worth"]["retirement_range"] == "500k-1m"
        assert data["transition"]["is_transition_year"] is False
