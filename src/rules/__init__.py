"""
Strategy Rules Module.

Declarative eligibility rules for the planning strategy catalog:
- Tagged trigger predicates and their interpreter
- Read-only strategy records and priority modifiers
- Shared enums and catalog exceptions
"""

from .exceptions import CatalogValidationError, StrategyEngineError
from .rule_types import (
    Complexity,
    ImpactTier,
    StrategyCategory,
    UrgencyLevel,
)
from .strategy_definitions import AgeWindow, PriorityModifiers, StrategyRecord
from .triggers import (
    AgeAtLeast,
    AgeAtMost,
    EmploymentStatusIn,
    ForbidsFlag,
    MaritalStatusIn,
    ProfileFlag,
    RequiresFlag,
    Trigger,
    evaluate_trigger,
    evaluate_triggers,
)

__all__ = [
    'CatalogValidationError',
    'StrategyEngineError',
    'Complexity',
    'ImpactTier',
    'StrategyCategory',
    'UrgencyLevel',
    'AgeWindow',
    'PriorityModifiers',
    'StrategyRecord',
    'AgeAtLeast',
    'AgeAtMost',
    'EmploymentStatusIn',
    'ForbidsFlag',
    'MaritalStatusIn',
    'ProfileFlag',
    'RequiresFlag',
    'Trigger',
    'evaluate_trigger',
    'evaluate_triggers',
]
