"""Pytest configuration and fixtures for test suite."""

import os
import sys
from pathlib import Path

import pytest

# Keep developer .env / shell overrides out of the tests
for _key in list(os.environ):
    if _key.startswith("STRATEGY_"):
        del os.environ[_key]

# Add src to path for imports
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

CATALOG_DIR = src_path / "config" / "strategy_catalog"


def _reset_config_caches():
    """Reset cached settings and catalogs to ensure clean state."""
    from config.catalog_loader import clear_catalog_cache
    from config.settings import get_settings

    clear_catalog_cache()
    get_settings.cache_clear()


@pytest.fixture(autouse=True)
def reset_config_globals():
    """Reset config module globals before and after each test."""
    _reset_config_caches()
    yield
    _reset_config_caches()


@pytest.fixture
def catalog():
    """The bundled strategy catalog."""
    from config.catalog_loader import CatalogLoader
    return CatalogLoader(CATALOG_DIR).load_catalog("1")


@pytest.fixture
def catalog_ids(catalog):
    return [s.strategy_id for s in catalog]


@pytest.fixture
def make_profile():
    """
    Factory for InvestorProfile with every situational flag answered False.

    Usage:
        profile = make_profile(age=68, has_pre_tax_retirement=True)
    """
    from onboarding.inference_rules import SITUATIONAL_FIELDS
    from onboarding.investor_profile import InvestorProfile, TransitionYearFlags

    def _make(**overrides):
        values = {name: False for name in SITUATIONAL_FIELDS}
        values["age"] = 50
        values.update(overrides)
        if "transition" not in values:
            values["transition"] = TransitionYearFlags.compute(
                values.get("employment_status", InvestorProfile.employment_status),
                values.get("spouse_employment_status"),
                values.get("unemployment"),
                values.get("spouse_unemployment"),
            )
        return InvestorProfile(**values)

    return _make


@pytest.fixture
def make_strategy():
    """Factory for StrategyRecord with sensible defaults."""
    from rules.rule_types import ImpactTier, StrategyCategory
    from rules.strategy_definitions import StrategyRecord

    def _make(strategy_id="test-strategy", **overrides):
        values = {
            "strategy_id": strategy_id,
            "title": strategy_id.replace("-", " ").title(),
            "impact": ImpactTier.MEDIUM,
            "category": StrategyCategory.GENERAL,
        }
        values.update(overrides)
        return StrategyRecord(**values)

    return _make
