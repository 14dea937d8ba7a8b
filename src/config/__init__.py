"""Configuration module for the strategy engine."""

from .catalog_loader import (
    CatalogLoader,
    CatalogMetadata,
    clear_catalog_cache,
    get_catalog_loader,
    get_default_catalog,
)
from .settings import ScoringSettings, Settings, get_settings

__all__ = [
    "CatalogLoader",
    "CatalogMetadata",
    "clear_catalog_cache",
    "get_catalog_loader",
    "get_default_catalog",
    "ScoringSettings",
    "Settings",
    "get_settings",
]
