"""
Advisor Briefing - assembles the briefing a client takes to their CPA or CFP.

Builds the structured content of a single-strategy or consolidated
multi-strategy briefing from catalog records, the client's answers and the
auxiliary content tables. Rendering (PDF or otherwise) is up to the caller;
BriefingDocument.to_dict() is the hand-off format.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional, Sequence, Union

from advisory.personalized_estimates import (
    calculate_personalized_estimate,
    format_estimate,
)
from advisory.strategy_content import (
    get_advisor_info,
    get_strategy_example,
    has_specific_content,
)
from onboarding.investor_profile import InvestorProfile, RetirementRange
from recommendation.strategy_matcher import MatchedStrategy
from rules.strategy_definitions import StrategyRecord

logger = logging.getLogger(__name__)

# Used when the client summary lacks age or bracket
FALLBACK_AGE = 55
FALLBACK_RETIREMENT_RANGE = RetirementRange.FROM_500K_TO_1M

MAX_COMBINED_DOCUMENTS = 15
MAX_COMBINED_DEADLINES = 8
KEY_QUESTIONS_PER_STRATEGY = 2
NOT_PROVIDED = "Not provided"

ESTIMATE_NOTE = (
    "Note: This estimate is based on general assumptions and example scenarios. "
    "Actual savings will depend on your specific circumstances. Consult with a "
    "qualified professional for personalized analysis."
)

DISCLAIMERS = [
    "This briefing is educational and does not constitute tax, legal or investment advice.",
    "Strategies are surfaced from general rules applied to your answers; eligibility "
    "must be confirmed by a qualified professional.",
    "Savings figures are illustrative estimates, not projections of actual results.",
]

StrategyLike = Union[StrategyRecord, MatchedStrategy]


@dataclass
class ClientSummary:
    """Client details printed at the top of a briefing."""
    name: Optional[str] = None
    age: Optional[int] = None
    age_band: Optional[str] = None
    marital_status: Optional[str] = None
    employment_status: Optional[str] = None
    retirement_range: Optional[RetirementRange] = None
    real_estate_range: Optional[str] = None

    @classmethod
    def from_profile(
        cls,
        profile: InvestorProfile,
        name: Optional[str] = None,
        age_band: Optional[str] = None,
    ) -> "ClientSummary":
        return cls(
            name=name,
            age=profile.age,
            age_band=age_band,
            marital_status=profile.marital_status.value,
            employment_status=profile.employment_status.value,
            retirement_range=profile.retirement_range,
            real_estate_range=profile.real_estate_range.value,
        )

    def to_dict(self) -> Dict[str, str]:
        return {
            "name": self.name or NOT_PROVIDED,
            "age": self.age_band or (str(self.age) if self.age is not None else NOT_PROVIDED),
            "marital_status": self.marital_status or NOT_PROVIDED,
            "employment": self.employment_status or NOT_PROVIDED,
            "retirement_assets": self.retirement_range.value if self.retirement_range else NOT_PROVIDED,
        }


@dataclass
class QuestionAnswer:
    """Client answer to one follow-up question."""
    question_id: str
    question_label: str
    answer: str


@dataclass
class BriefingSection:
    """Individual section of a briefing."""
    section_id: str
    title: str
    content: Dict[str, Any]


@dataclass
class BriefingDocument:
    """Complete briefing, sections in display order."""
    briefing_id: str
    title: str
    generated_at: str
    client: ClientSummary
    strategy_ids: List[str]
    sections: List[BriefingSection] = field(default_factory=list)

    @property
    def is_consolidated(self) -> bool:
        return len(self.strategy_ids) > 1

    def section(self, section_id: str) -> Optional[BriefingSection]:
        for section in self.sections:
            if section.section_id == section_id:
                return section
        return None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "briefing_id": self.briefing_id,
            "title": self.title,
            "generated_at": self.generated_at,
            "client": self.client.to_dict(),
            "strategy_ids": list(self.strategy_ids),
            "sections": [
                {"section_id": s.section_id, "title": s.title, "content": s.content}
                for s in self.sections
            ],
        }


def _record(strategy: StrategyLike) -> StrategyRecord:
    if isinstance(strategy, MatchedStrategy):
        return strategy.strategy
    return strategy


def _dedupe(items: Iterable[str], limit: int) -> List[str]:
    """First occurrence of each item, in order, capped at limit."""
    seen: Dict[str, None] = {}
    for item in items:
        seen.setdefault(item, None)
    return list(seen)[:limit]


class BriefingBuilder:
    """Builds single and consolidated advisor briefings."""

    def build_single(
        self,
        strategy: StrategyLike,
        client: ClientSummary,
        answers: Sequence[QuestionAnswer] = (),
        generated_at: Optional[str] = None,
    ) -> BriefingDocument:
        """
        Briefing for one strategy.

        Sections: client summary, strategy overview, the client's answers
        (when any), estimated savings, advisor questions, documents,
        deadlines (when any), example scenario, disclaimer.
        """
        record = _record(strategy)
        logger.info(f"Building briefing for {record.strategy_id}")

        advisor_info = get_advisor_info(record.strategy_id)
        example = get_strategy_example(record.strategy_id)
        estimate = self._estimate(record, client)

        sections = [
            self._client_section(client),
            BriefingSection(
                section_id="strategy_overview",
                title="Strategy Overview",
                content={
                    "title": record.title,
                    "description": record.description,
                    "why_this_may_apply": record.why_for_you,
                    "evaluator": record.evaluator,
                },
            ),
        ]
        if answers:
            sections.append(self._answers_section("specific_situation", "Your Specific Situation", answers))

        sections.append(BriefingSection(
            section_id="estimated_savings",
            title="Estimated Savings Analysis",
            content={
                "range": format_estimate(estimate),
                "explanation": estimate.explanation,
                "note": ESTIMATE_NOTE,
            },
        ))
        sections.append(BriefingSection(
            section_id="advisor_questions",
            title="Questions to Discuss With Your Advisor",
            content={
                "questions": list(advisor_info.questions_for_advisor),
                "professional_type": advisor_info.professional_type,
            },
        ))
        sections.append(BriefingSection(
            section_id="documents",
            title="Documents to Gather",
            content={"documents": list(advisor_info.documents_to_gather)},
        ))
        if advisor_info.deadlines:
            sections.append(BriefingSection(
                section_id="deadlines",
                title="Important Deadlines & Timing",
                content={"deadlines": list(advisor_info.deadlines)},
            ))
        sections.append(BriefingSection(
            section_id="example",
            title="Example Scenario",
            content={**example.to_dict(), "is_generic": not has_specific_content(record.strategy_id)},
        ))
        sections.append(self._disclaimer_section())

        return BriefingDocument(
            briefing_id=str(uuid.uuid4()),
            title="Tax Strategy Briefing",
            generated_at=generated_at or datetime.now().isoformat(),
            client=client,
            strategy_ids=[record.strategy_id],
            sections=sections,
        )

    def build_multi(
        self,
        strategies: Sequence[StrategyLike],
        client: ClientSummary,
        answers: Sequence[QuestionAnswer] = (),
        generated_at: Optional[str] = None,
    ) -> BriefingDocument:
        """
        Consolidated briefing for several strategies.

        Documents and deadlines are merged across strategies without
        duplicates. Raises ValueError when no strategies are given.
        """
        if not strategies:
            raise ValueError("A briefing needs at least one strategy")
        records = [_record(s) for s in strategies]
        logger.info(f"Building consolidated briefing for {len(records)} strategies")

        details = []
        total_low = total_high = 0
        for index, record in enumerate(records, 1):
            advisor_info = get_advisor_info(record.strategy_id)
            estimate = self._estimate(record, client)
            total_low += estimate.low_estimate
            total_high += estimate.high_estimate
            details.append({
                "number": index,
                "strategy_id": record.strategy_id,
                "title": record.title,
                "description": record.description,
                "why_this_may_apply": record.why_for_you,
                "estimated_savings": format_estimate(estimate),
                "explanation": estimate.explanation,
                "key_questions": list(advisor_info.questions_for_advisor[:KEY_QUESTIONS_PER_STRATEGY]),
            })

        if total_low == total_high:
            combined = f"${total_low:,}"
        else:
            combined = f"${total_low:,} - ${total_high:,}"

        sections = [
            self._client_section(client),
            BriefingSection(
                section_id="executive_summary",
                title="Executive Summary",
                content={
                    "strategy_count": len(records),
                    "headline": f"{len(records)} tax strategies identified based on your profile",
                    "combined_savings": combined,
                    "note": "Estimates based on your profile; actual savings will vary.",
                },
            ),
        ]
        if answers:
            sections.append(self._answers_section("planning_context", "Your Planning Context", answers))

        sections.append(BriefingSection(
            section_id="strategy_details",
            title="Strategy Details",
            content={"strategies": details},
        ))

        infos = [get_advisor_info(r.strategy_id) for r in records]
        sections.append(BriefingSection(
            section_id="documents",
            title="Documents to Gather",
            content={
                "documents": _dedupe(
                    (doc for info in infos for doc in info.documents_to_gather),
                    MAX_COMBINED_DOCUMENTS,
                ),
            },
        ))
        deadlines = _dedupe(
            (d for info in infos for d in info.deadlines), MAX_COMBINED_DEADLINES
        )
        if deadlines:
            sections.append(BriefingSection(
                section_id="deadlines",
                title="Important Deadlines & Timing",
                content={"deadlines": deadlines},
            ))
        sections.append(self._disclaimer_section())

        return BriefingDocument(
            briefing_id=str(uuid.uuid4()),
            title="Consolidated Tax Strategy Briefing",
            generated_at=generated_at or datetime.now().isoformat(),
            client=client,
            strategy_ids=[r.strategy_id for r in records],
            sections=sections,
        )

    # Helper methods

    def _estimate(self, record: StrategyRecord, client: ClientSummary):
        return calculate_personalized_estimate(
            record.strategy_id,
            client.retirement_range or FALLBACK_RETIREMENT_RANGE,
            client.age if client.age is not None else FALLBACK_AGE,
        )

    def _client_section(self, client: ClientSummary) -> BriefingSection:
        return BriefingSection(section_id="client_summary", title="Client Summary", content=client.to_dict())

    def _answers_section(
        self, section_id: str, title: str, answers: Sequence[QuestionAnswer]
    ) -> BriefingSection:
        return BriefingSection(
            section_id=section_id,
            title=title,
            content={
                "answers": [
                    {"question": a.question_label, "answer": a.answer} for a in answers
                ],
            },
        )

    def _disclaimer_section(self) -> BriefingSection:
        return BriefingSection(
            section_id="disclaimer",
            title="Educational Disclaimer",
            content={"disclaimers": list(DISCLAIMERS)},
        )


def build_briefing(
    strategies: Union[StrategyLike, Sequence[StrategyLike]],
    client: ClientSummary,
    answers: Sequence[QuestionAnswer] = (),
) -> BriefingDocument:
    """
    Convenience function: single briefing for one strategy, consolidated
    briefing for several. An empty selection raises ValueError.
    """
    builder = BriefingBuilder()
    if isinstance(strategies, (StrategyRecord, MatchedStrategy)):
        return builder.build_single(strategies, client, answers)
    if len(strategies) == 1:
        return builder.build_single(strategies[0], client, answers)
    return builder.build_multi(strategies, client, answers)
