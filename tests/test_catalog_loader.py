"""
Tests for the YAML strategy catalog loader.

Covers:
- The bundled catalog parses and has the expected shape
- Malformed entries fail at load time
- Caching and the configured default catalog
"""

import pytest
import os
import sys
import textwrap

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from config.catalog_loader import (
    CatalogLoader,
    clear_catalog_cache,
    get_catalog_loader,
    get_default_catalog,
)
from rules.exceptions import CatalogValidationError
from rules.rule_types import ImpactTier, StrategyCategory
from rules.triggers import AgeAtMost, EmploymentStatusIn, ProfileFlag


def _parse(entries):
    return CatalogLoader().parse_catalog({"strategies": entries})


def _entry(**overrides):
    entry = {"id": "s1", "title": "Strategy", "impact": "medium", "category": "general"}
    entry.update(overrides)
    return entry


class TestBundledCatalog:
    """The shipped catalog_v1.yaml."""

    def test_loads(self, catalog):
        assert len(catalog) >= 25

    def test_ids_unique(self, catalog_ids):
        assert len(catalog_ids) == len(set(catalog_ids))

    def test_general_education_entry(self, catalog):
        by_id = {s.strategy_id: s for s in catalog}

        assert by_id["529-to-roth"].triggers == ()
        assert by_id["529-to-roth"].is_general_education

    def test_hsa_triggers(self, catalog):
        from onboarding.investor_profile import EmploymentStatus

        hsa = next(s for s in catalog if s.strategy_id == "hsa-optimization")

        assert AgeAtMost(65) in hsa.triggers
        assert EmploymentStatusIn(
            frozenset({EmploymentStatus.EMPLOYED, EmploymentStatus.UNEMPLOYED})
        ) in hsa.triggers

    def test_mega_backdoor_suppressed_during_unemployment(self, catalog):
        mega = next(s for s in catalog if s.strategy_id == "mega-backdoor-roth")
        assert mega.suppress_during_unemployment is True

    def test_exchange_is_real_estate(self, catalog):
        exchange = next(s for s in catalog if s.strategy_id == "1031-exchange")

        assert exchange.category == StrategyCategory.REAL_ESTATE
        assert exchange.impact == ImpactTier.HIGH
        assert exchange.requires(ProfileFlag.HAS_RENTAL_REAL_ESTATE)

    def test_all_triggers_are_known_types(self, catalog):
        from rules.triggers import TRIGGER_TYPES

        for strategy in catalog:
            for trigger in strategy.triggers:
                assert isinstance(trigger, TRIGGER_TYPES)

    def test_metadata(self):
        loader = CatalogLoader()
        metadata = loader.get_metadata("1")

        assert metadata is not None
        assert metadata.version == "1"
        assert metadata.effective_date

    def test_get_strategy(self):
        loader = CatalogLoader()

        assert loader.get_strategy("rmd-planning").title
        assert loader.get_strategy("no-such-strategy") is None

    def test_to_dict(self, catalog):
        roth = next(s for s in catalog if s.strategy_id == "roth-conversion-window")
        data = roth.to_dict()

        assert data["id"] == "roth-conversion-window"
        assert data["impact"] == "high"
        assert data["triggers"] == ["age 45+", "age 72 or under", "has pre tax retirement"]


class TestParsing:
    """Entry parsing and validation."""

    def test_minimal_entry(self):
        (record,) = _parse([_entry()])

        assert record.strategy_id == "s1"
        assert record.triggers == ()
        assert record.priority_modifiers is None
        assert record.transition_year_priority is None

    def test_modifiers(self):
        from onboarding.investor_profile import RetirementRange

        (record,) = _parse([_entry(priority_modifiers={
            "retirement_tiers": ["1m-2.5m", ">5m"],
            "age_window": {"min": 60, "max": 70},
            "boost": -5,
        })])
        modifiers = record.priority_modifiers

        assert modifiers.retirement_tiers == frozenset({RetirementRange.FROM_1M_TO_2_5M, RetirementRange.OVER_5M})
        assert modifiers.age_window.contains(60)
        assert modifiers.age_window.contains(70)
        assert not modifiers.age_window.contains(71)
        assert modifiers.boost == -5

    def test_unknown_trigger_kind(self):
        with pytest.raises(CatalogValidationError) as exc_info:
            _parse([_entry(triggers=[{"kind": "net_worth_at_least", "value": 1}])])

        assert exc_info.value.strategy_id == "s1"
        assert "Unknown trigger kind" in str(exc_info.value)

    def test_unknown_flag(self):
        with pytest.raises(CatalogValidationError):
            _parse([_entry(triggers=[{"kind": "requires", "flag": "owns_yacht"}])])

    def test_duplicate_id(self):
        with pytest.raises(CatalogValidationError, match="Duplicate"):
            _parse([_entry(), _entry()])

    @pytest.mark.parametrize("years", [-1, "sixty", True, None])
    def test_bad_years(self, years):
        with pytest.raises(CatalogValidationError):
            _parse([_entry(triggers=[{"kind": "age_at_least", "years": years}])])

    def test_age_window_min_above_max(self):
        with pytest.raises(CatalogValidationError):
            _parse([_entry(priority_modifiers={"age_window": {"min": 70, "max": 60}})])

    def test_empty_allowed_list(self):
        with pytest.raises(CatalogValidationError):
            _parse([_entry(triggers=[{"kind": "marital_status_in", "allowed": []}])])

    def test_unknown_impact(self):
        with pytest.raises(CatalogValidationError):
            _parse([_entry(impact="huge")])

    def test_missing_strategies_list(self):
        with pytest.raises(CatalogValidationError):
            CatalogLoader().parse_catalog({"items": []})

    def test_missing_file(self, tmp_path):
        with pytest.raises(CatalogValidationError, match="No catalog file"):
            CatalogLoader(tmp_path).load_catalog("9")


class TestCaching:
    """Loader caching and the configured default catalog."""

    def test_same_tuple_returned(self):
        loader = CatalogLoader()
        assert loader.load_catalog("1") is loader.load_catalog("1")

    def test_global_loader_singleton(self):
        assert get_catalog_loader() is get_catalog_loader()

    def test_clear_cache(self):
        first = get_catalog_loader()
        clear_catalog_cache()
        assert get_catalog_loader() is not first

    def test_default_catalog_is_bundled(self, catalog):
        assert get_default_catalog() == catalog

    def test_catalog_dir_from_environment(self, tmp_path, monkeypatch):
        (tmp_path / "catalog_v2.yaml").write_text(textwrap.dedent("""
            _metadata:
              version: "2"
            strategies:
              - id: only-one
                title: Only One
                impact: low
                category: general
        """))
        monkeypatch.setenv("STRATEGY_CATALOG_DIR", str(tmp_path))
        monkeypatch.setenv("STRATEGY_CATALOG_VERSION", "2")

        catalog = get_default_catalog()

        assert [s.strategy_id for s in catalog] == ["only-one"]
