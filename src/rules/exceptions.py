"""
Strategy engine exceptions.

The matching path itself never raises for well-typed input; these are
reserved for problems in the static catalog, which are caught when the
catalog is loaded rather than during a user's session.
"""

from typing import Any, Dict, Optional


class StrategyEngineError(Exception):
    """Base exception for the strategy engine."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class CatalogValidationError(StrategyEngineError):
    """A catalog entry is malformed (unknown trigger kind, duplicate id, ...)."""

    def __init__(self, message: str, strategy_id: Optional[str] = None, **details: Any):
        if strategy_id:
            details["strategy_id"] = strategy_id
            message = f"{strategy_id}: {message}"
        super().__init__(message, details)
        self.strategy_id = strategy_id
