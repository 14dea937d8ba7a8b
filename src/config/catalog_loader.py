"""
Strategy Catalog Loader.

Loads the planning strategy catalog from versioned YAML files and turns
each entry into a frozen StrategyRecord. All validation happens here, at
load time, so a malformed entry fails loudly once instead of silently
dropping strategies during a user session.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Type

import yaml

from config.settings import get_settings
from onboarding.investor_profile import (
    EmploymentStatus,
    MaritalStatus,
    RealEstateRange,
    RetirementRange,
)
from rules.exceptions import CatalogValidationError
from rules.rule_types import Complexity, ImpactTier, StrategyCategory
from rules.strategy_definitions import AgeWindow, PriorityModifiers, StrategyRecord
from rules.triggers import (
    AgeAtLeast,
    AgeAtMost,
    EmploymentStatusIn,
    ForbidsFlag,
    MaritalStatusIn,
    ProfileFlag,
    RequiresFlag,
    Trigger,
)

logger = logging.getLogger(__name__)

# Default catalog directory
CATALOG_DIR = Path(__file__).parent / "strategy_catalog"
DEFAULT_CATALOG_VERSION = "1"

Catalog = Tuple[StrategyRecord, ...]


@dataclass
class CatalogMetadata:
    """Metadata about a catalog file."""
    version: str
    effective_date: str = ""
    source: str = ""
    last_updated: str = ""
    notes: str = ""


class CatalogLoader:
    """
    Loads and validates strategy catalogs from YAML files.

    Catalogs are cached per version; records are immutable so the same
    tuple can be handed to every matcher.
    """

    def __init__(self, catalog_dir: Optional[Path] = None):
        """
        Initialize the catalog loader.

        Args:
            catalog_dir: Directory containing catalog_v<version>.yaml files.
                        Defaults to src/config/strategy_catalog/
        """
        self.catalog_dir = Path(catalog_dir) if catalog_dir else CATALOG_DIR
        self._catalogs: Dict[str, Catalog] = {}
        self._metadata: Dict[str, CatalogMetadata] = {}

    def load_catalog(self, version: str = DEFAULT_CATALOG_VERSION) -> Catalog:
        """
        Load the catalog for a version.

        Args:
            version: Catalog version (e.g., "1")

        Returns:
            Tuple of strategy records in catalog order

        Raises:
            CatalogValidationError: If the file is missing or an entry is malformed
        """
        version = str(version)
        if version in self._catalogs:
            return self._catalogs[version]

        data = self._load_from_file(version)
        if "_metadata" in data:
            self._metadata[version] = CatalogMetadata(**data.pop("_metadata"))

        catalog = self.parse_catalog(data)
        self._catalogs[version] = catalog
        logger.info(f"Loaded strategy catalog v{version}: {len(catalog)} strategies")
        return catalog

    def get_metadata(self, version: str = DEFAULT_CATALOG_VERSION) -> Optional[CatalogMetadata]:
        """Get metadata for a catalog version."""
        self.load_catalog(version)
        return self._metadata.get(str(version))

    def get_strategy(
        self, strategy_id: str, version: str = DEFAULT_CATALOG_VERSION
    ) -> Optional[StrategyRecord]:
        """Look up one record by id."""
        for record in self.load_catalog(version):
            if record.strategy_id == strategy_id:
                return record
        return None

    def _load_from_file(self, version: str) -> Dict[str, Any]:
        """Read the raw YAML document for a version."""
        catalog_file = self.catalog_dir / f"catalog_v{version}.yaml"
        if not catalog_file.exists():
            raise CatalogValidationError(
                f"No catalog file for version {version}", path=str(catalog_file)
            )

        logger.debug(f"Loading strategy catalog from {catalog_file}")
        with open(catalog_file, 'r') as f:
            data = yaml.safe_load(f)

        if not isinstance(data, dict):
            raise CatalogValidationError("Catalog file must contain a mapping", path=str(catalog_file))
        return data

    # ------------------------------------------------------------------
    # Parsing
    # ------------------------------------------------------------------

    def parse_catalog(self, data: Mapping[str, Any]) -> Catalog:
        """
        Build records from an already-parsed catalog document.

        Args:
            data: Mapping with a 'strategies' list

        Returns:
            Tuple of strategy records in document order
        """
        entries = data.get("strategies")
        if not isinstance(entries, list):
            raise CatalogValidationError("Catalog must define a 'strategies' list")

        records: List[StrategyRecord] = []
        seen = set()
        for raw in entries:
            record = self._parse_strategy(raw)
            if record.strategy_id in seen:
                raise CatalogValidationError("Duplicate strategy id", strategy_id=record.strategy_id)
            seen.add(record.strategy_id)
            records.append(record)
        return tuple(records)

    def _parse_strategy(self, raw: Any) -> StrategyRecord:
        if not isinstance(raw, dict):
            raise CatalogValidationError(f"Catalog entry must be a mapping, got {type(raw).__name__}")

        strategy_id = raw.get("id")
        if not strategy_id or not isinstance(strategy_id, str):
            raise CatalogValidationError("Catalog entry is missing a string 'id'")
        if not raw.get("title"):
            raise CatalogValidationError("Missing title", strategy_id=strategy_id)

        complexity = raw.get("complexity")
        transition_priority = raw.get("transition_year_priority")
        if transition_priority is not None:
            transition_priority = self._int(transition_priority, strategy_id, "transition_year_priority")

        modifiers = raw.get("priority_modifiers")

        return StrategyRecord(
            strategy_id=strategy_id,
            title=str(raw["title"]),
            impact=self._enum(ImpactTier, raw.get("impact"), strategy_id, "impact"),
            category=self._enum(StrategyCategory, raw.get("category"), strategy_id, "category"),
            description=str(raw.get("description", "")),
            why_for_you=str(raw.get("why_for_you", "")),
            trigger_reason=str(raw.get("trigger_reason", "")),
            evaluator=str(raw.get("evaluator", "")),
            complexity=(
                self._enum(Complexity, complexity, strategy_id, "complexity")
                if complexity is not None else None
            ),
            triggers=tuple(
                self._parse_trigger(t, strategy_id) for t in (raw.get("triggers") or [])
            ),
            suppress_during_unemployment=bool(raw.get("suppress_during_unemployment", False)),
            priority_modifiers=(
                self._parse_modifiers(modifiers, strategy_id) if modifiers is not None else None
            ),
            transition_year_priority=transition_priority,
        )

    def _parse_trigger(self, raw: Any, strategy_id: str) -> Trigger:
        """Map a {kind: ...} mapping onto its trigger dataclass."""
        if not isinstance(raw, dict) or "kind" not in raw:
            raise CatalogValidationError("Trigger must be a mapping with a 'kind'", strategy_id=strategy_id)

        kind = raw["kind"]
        if kind == AgeAtLeast.kind:
            return AgeAtLeast(self._int(raw.get("years"), strategy_id, kind))
        if kind == AgeAtMost.kind:
            return AgeAtMost(self._int(raw.get("years"), strategy_id, kind))
        if kind == MaritalStatusIn.kind:
            return MaritalStatusIn(self._enum_set(MaritalStatus, raw.get("allowed"), strategy_id, kind))
        if kind == EmploymentStatusIn.kind:
            return EmploymentStatusIn(self._enum_set(EmploymentStatus, raw.get("allowed"), strategy_id, kind))
        if kind == RequiresFlag.kind:
            return RequiresFlag(self._enum(ProfileFlag, raw.get("flag"), strategy_id, "flag"))
        if kind == ForbidsFlag.kind:
            return ForbidsFlag(self._enum(ProfileFlag, raw.get("flag"), strategy_id, "flag"))

        raise CatalogValidationError(f"Unknown trigger kind {kind!r}", strategy_id=strategy_id, kind=kind)

    def _parse_modifiers(self, raw: Any, strategy_id: str) -> PriorityModifiers:
        if not isinstance(raw, dict):
            raise CatalogValidationError("priority_modifiers must be a mapping", strategy_id=strategy_id)

        age_window = None
        window = raw.get("age_window")
        if window is not None:
            if not isinstance(window, dict):
                raise CatalogValidationError("age_window must be a mapping", strategy_id=strategy_id)
            min_age = self._int(window.get("min"), strategy_id, "age_window.min")
            max_age = self._int(window.get("max"), strategy_id, "age_window.max")
            if min_age > max_age:
                raise CatalogValidationError(
                    f"age_window min {min_age} is above max {max_age}", strategy_id=strategy_id
                )
            age_window = AgeWindow(min_age, max_age)

        return PriorityModifiers(
            retirement_tiers=frozenset(
                self._enum(RetirementRange, t, strategy_id, "retirement_tiers")
                for t in (raw.get("retirement_tiers") or [])
            ),
            real_estate_tiers=frozenset(
                self._enum(RealEstateRange, t, strategy_id, "real_estate_tiers")
                for t in (raw.get("real_estate_tiers") or [])
            ),
            age_window=age_window,
            boost=self._int(raw.get("boost", 0), strategy_id, "boost", allow_negative=True),
        )

    @staticmethod
    def _enum(enum_cls: Type[Enum], value: Any, strategy_id: str, label: str) -> Any:
        try:
            return enum_cls(value)
        except ValueError:
            raise CatalogValidationError(
                f"Unknown {label} value {value!r}", strategy_id=strategy_id, field=label
            ) from None

    def _enum_set(
        self, enum_cls: Type[Enum], values: Optional[Iterable[Any]], strategy_id: str, label: str
    ) -> frozenset:
        if not values:
            raise CatalogValidationError(f"{label} needs a non-empty 'allowed' list", strategy_id=strategy_id)
        return frozenset(self._enum(enum_cls, v, strategy_id, label) for v in values)

    @staticmethod
    def _int(value: Any, strategy_id: str, label: str, allow_negative: bool = False) -> int:
        if isinstance(value, bool) or not isinstance(value, int):
            raise CatalogValidationError(
                f"{label} must be an integer, got {value!r}", strategy_id=strategy_id, field=label
            )
        if value < 0 and not allow_negative:
            raise CatalogValidationError(f"{label} must not be negative", strategy_id=strategy_id, field=label)
        return value


# Global singleton
_catalog_loader: Optional[CatalogLoader] = None


def get_catalog_loader() -> CatalogLoader:
    """Get the global catalog loader, pointed at the configured directory."""
    global _catalog_loader
    if _catalog_loader is None:
        _catalog_loader = CatalogLoader(get_settings().catalog_dir)
    return _catalog_loader


def get_default_catalog() -> Catalog:
    """
    The configured catalog version, loaded once and cached.

    This is the catalog used when a matcher is created without one.
    """
    return get_catalog_loader().load_catalog(get_settings().catalog_version)


def clear_catalog_cache() -> None:
    """Clear the loaded catalogs (useful for testing)."""
    global _catalog_loader
    _catalog_loader = None
