"""
Advisory Briefing System - turns matched strategies into advisor-ready briefings.

- Auxiliary content per strategy (advisor checklists, examples, follow-up questions)
- Personalized savings estimates scaled to the retirement bracket
- Single and consolidated briefing assembly

Main exports:
    BriefingBuilder: Briefing assembly class
    build_briefing: Convenience function
"""

from .briefing import (
    BriefingBuilder,
    BriefingDocument,
    BriefingSection,
    ClientSummary,
    QuestionAnswer,
    build_briefing,
)
from .personalized_estimates import (
    PersonalizedEstimate,
    calculate_personalized_estimate,
    format_estimate,
)
from .strategy_content import (
    AdvisorInfo,
    StrategyExample,
    StrategyQuestion,
    get_advisor_info,
    get_strategy_example,
    get_strategy_questions,
)

__all__ = [
    # Briefing assembly
    "BriefingBuilder",
    "BriefingDocument",
    "BriefingSection",
    "ClientSummary",
    "QuestionAnswer",
    "build_briefing",
    # Estimates
    "PersonalizedEstimate",
    "calculate_personalized_estimate",
    "format_estimate",
    # Content
    "AdvisorInfo",
    "StrategyExample",
    "StrategyQuestion",
    "get_advisor_info",
    "get_strategy_example",
    "get_strategy_questions",
]
