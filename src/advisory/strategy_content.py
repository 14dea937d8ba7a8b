"""
Strategy Content.

Auxiliary content for the advisor briefing, keyed by strategy id:
- advisor questions, documents to gather, deadlines
- worked example scenarios with indicative savings
- follow-up questions asked before a briefing is generated

Every lookup falls back to a generic default record, so a strategy added to
the catalog without content still produces a usable briefing.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Optional, Tuple

logger = logging.getLogger(__name__)

DEFAULT_CONTENT_KEY = "default"


@dataclass(frozen=True)
class AdvisorInfo:
    """What to bring to, and ask, the professional who evaluates a strategy."""
    questions_for_advisor: Tuple[str, ...]
    documents_to_gather: Tuple[str, ...]
    professional_type: str
    deadlines: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "questions_for_advisor": list(self.questions_for_advisor),
            "documents_to_gather": list(self.documents_to_gather),
            "deadlines": list(self.deadlines),
            "professional_type": self.professional_type,
        }


@dataclass(frozen=True)
class StrategyExample:
    """Illustrative scenario for a strategy."""
    scenario: str
    potential_savings: str
    timeframe: str
    who_should_consider: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["who_should_consider"] = list(self.who_should_consider)
        return data


@dataclass(frozen=True)
class QuestionOption:
    value: str
    label: str


@dataclass(frozen=True)
class StrategyQuestion:
    """Follow-up question shown before the briefing is generated."""
    question_id: str
    label: str
    question_type: str  # select, checkbox, text
    options: Tuple[QuestionOption, ...] = ()
    placeholder: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.question_id,
            "label": self.label,
            "type": self.question_type,
            "options": [{"value": o.value, "label": o.label} for o in self.options],
            "placeholder": self.placeholder,
        }


def _options(*pairs: Tuple[str, str]) -> Tuple[QuestionOption, ...]:
    return tuple(QuestionOption(value, label) for value, label in pairs)


# =============================================================================
# ADVISOR INFO
# =============================================================================

ADVISOR_INFO: Dict[str, AdvisorInfo] = {
    "roth-conversion-window": AdvisorInfo(
        questions_for_advisor=(
            "What is the optimal annual conversion amount given my tax bracket?",
            "How will conversions affect my Medicare premiums (IRMAA)?",
            "Should I convert all at once or spread across multiple years?",
            "What are the state tax implications of Roth conversions?",
            "How does this strategy interact with my Social Security benefits?",
        ),
        documents_to_gather=(
            "Most recent federal and state tax returns (2-3 years)",
            "IRA and 401(k) account statements",
            "Social Security statement",
            "Current year income estimates",
            "Pension or annuity income documentation",
        ),
        deadlines=(
            "Roth conversions must be completed by December 31st of the tax year",
        ),
        professional_type="CPA or CFP",
    ),
    "backdoor-roth": AdvisorInfo(
        questions_for_advisor=(
            "Do I have any existing pre-tax IRA balances that would trigger the pro-rata rule?",
            "What is the proper sequence of steps to execute this correctly?",
            "How do I report this on my tax return (Form 8606)?",
            "Should I wait for the contribution to settle before converting?",
        ),
        documents_to_gather=(
            "All IRA account statements",
            "Prior year Form 8606 (if applicable)",
            "Current year income documentation",
            "Most recent tax return",
        ),
        deadlines=(
            "IRA contribution deadline: April 15th (or tax filing deadline)",
            "Conversion can be done anytime after contribution",
        ),
        professional_type="CPA",
    ),
    "mega-backdoor-roth": AdvisorInfo(
        questions_for_advisor=(
            "Does my employer plan allow after-tax contributions?",
            "Can I do in-plan Roth conversions or in-service distributions?",
            "What is my plan's total contribution limit?",
            "How often can I convert the after-tax contributions?",
        ),
        documents_to_gather=(
            "401(k) Summary Plan Description (SPD)",
            "Current 401(k) contribution elections",
            "Year-to-date 401(k) statement",
            "HR benefits contact information",
        ),
        deadlines=(
            "Contributions must be made during the plan year",
            "Check plan rules for conversion frequency limits",
        ),
        professional_type="CPA or CFP",
    ),
    "rmd-planning": AdvisorInfo(
        questions_for_advisor=(
            "What is my projected RMD amount over the next 10 years?",
            "Should I accelerate Roth conversions before RMDs begin?",
            "How will RMDs affect my Social Security taxation?",
            "What strategies can reduce my RMD base?",
        ),
        documents_to_gather=(
            "All retirement account statements (IRA, 401(k), 403(b))",
            "Social Security benefit statement",
            "Pension documentation",
            "Most recent tax returns",
        ),
        deadlines=(
            "RMDs must be taken by December 31st each year",
            "First RMD deadline: April 1st of the year after turning 73",
        ),
        professional_type="CPA or CFP",
    ),
    "qcd-qualified-charitable": AdvisorInfo(
        questions_for_advisor=(
            "What is the maximum QCD amount I can give this year?",
            "How do I coordinate QCDs with my RMD requirements?",
            "Which charities qualify for QCDs?",
            "Should I use QCD instead of other giving methods?",
        ),
        documents_to_gather=(
            "IRA statements",
            "List of intended charitable recipients with EINs",
            "Prior year charitable giving records",
            "RMD calculation from IRA custodian",
        ),
        deadlines=(
            "QCDs count toward RMD if done by December 31st",
            "Must be age 70 1/2 or older at time of distribution",
        ),
        professional_type="CPA",
    ),
    "charitable-bunching": AdvisorInfo(
        questions_for_advisor=(
            "What assets are best to contribute to a donor-advised fund?",
            "How much can I deduct this year?",
            "Which donor-advised fund provider fits my situation?",
            "How many years of giving should I bunch together?",
        ),
        documents_to_gather=(
            "Investment account statements with cost basis",
            "Charitable giving history",
            "Current year income estimates",
            "Most recent tax return",
        ),
        deadlines=(
            "Contributions must be completed by December 31st for current year deduction",
            "Grants from a donor-advised fund can be made anytime",
        ),
        professional_type="CPA or CFP",
    ),
    "1031-exchange": AdvisorInfo(
        questions_for_advisor=(
            "What properties qualify as like-kind for my exchange?",
            "How do I handle boot (cash or non-like-kind property)?",
            "What is my depreciation recapture exposure?",
            "Should I consider a Delaware Statutory Trust (DST)?",
        ),
        documents_to_gather=(
            "Current property purchase documents and closing statement",
            "Depreciation schedules",
            "Capital improvement receipts",
            "Current property appraisal",
            "Mortgage payoff amount",
        ),
        deadlines=(
            "45 days: Identify replacement property(ies)",
            "180 days: Close on replacement property",
            "Deadlines are strict and cannot be extended",
        ),
        professional_type="CPA and Real Estate Attorney",
    ),
    "tax-loss-harvesting": AdvisorInfo(
        questions_for_advisor=(
            "Which positions should I harvest losses from?",
            "How do I avoid wash sale violations?",
            "What replacement securities should I use?",
            "Should I harvest losses in December or throughout the year?",
        ),
        documents_to_gather=(
            "Brokerage statements with cost basis",
            "Year-to-date realized gains/losses",
            "All investment account holdings (including spouse)",
        ),
        deadlines=(
            "Must execute trades by December 31st for current year benefit",
            "30-day wash sale rule applies before and after sale",
        ),
        professional_type="CPA or CFP",
    ),
    "hsa-optimization": AdvisorInfo(
        questions_for_advisor=(
            "Am I eligible for HSA contributions?",
            "What is my maximum contribution amount?",
            "Should I invest my HSA or use it for current expenses?",
            "How do I maximize the triple tax benefit?",
        ),
        documents_to_gather=(
            "Health insurance plan documents (HDHP verification)",
            "Current HSA account statements",
            "Medical expense receipts",
        ),
        deadlines=(
            "Contribution deadline: April 15th (tax filing deadline)",
            "Must be enrolled in HDHP on the 1st of the month to contribute",
        ),
        professional_type="CPA or CFP",
    ),
    DEFAULT_CONTENT_KEY: AdvisorInfo(
        questions_for_advisor=(
            "What are the specific requirements for this strategy?",
            "What are the potential risks or downsides?",
            "How does this fit with my overall financial plan?",
            "What is the implementation process?",
        ),
        documents_to_gather=(
            "Most recent tax returns (2-3 years)",
            "Relevant account statements",
            "Current income documentation",
        ),
        professional_type="CPA or CFP",
    ),
}


# =============================================================================
# EXAMPLES
# =============================================================================

STRATEGY_EXAMPLES: Dict[str, StrategyExample] = {
    "roth-conversion-window": StrategyExample(
        scenario=(
            "A couple, age 60, retired with $1M in traditional IRAs, converts $80k/year for "
            "10 years at a 22% rate. Instead of facing 32%+ rates on forced RMDs in their 70s, "
            "they pay tax now at lower rates."
        ),
        potential_savings="$120,000 - $200,000+ lifetime",
        timeframe="Best done ages 60-72, before RMDs begin",
        who_should_consider=(
            "Those in lower-income years (early retirement, gap years)",
            "Anyone expecting higher future tax brackets",
            "Those wanting to reduce future RMD impact on Medicare premiums",
        ),
    ),
    "backdoor-roth": StrategyExample(
        scenario=(
            "High earner contributes $7,000 to a non-deductible traditional IRA, then "
            "immediately converts to Roth. Done annually for 20 years with 7% growth."
        ),
        potential_savings="$50,000 - $100,000+ in tax-free growth",
        timeframe="Annual opportunity until retirement",
        who_should_consider=(
            "Income above Roth contribution limits",
            "Those without large existing traditional IRA balances (pro-rata rule)",
        ),
    ),
    "mega-backdoor-roth": StrategyExample(
        scenario=(
            "Executive maxes the 401(k), then adds $30,000 in after-tax contributions with "
            "immediate Roth conversion. Over 10 years: $300,000+ into Roth accounts."
        ),
        potential_savings="$150,000 - $300,000+ in tax-free growth",
        timeframe="While employed with an eligible 401(k) plan",
        who_should_consider=(
            "Employees with 401(k) plans allowing after-tax contributions",
            "High earners already maxing regular 401(k)",
        ),
    ),
    "rmd-planning": StrategyExample(
        scenario=(
            "Retiree with $1M IRA faces $40,000 RMDs at 73. Through strategic Roth conversions "
            "and QCDs, they reduce RMDs by 30-40%, keeping income in lower brackets."
        ),
        potential_savings="$100,000 - $300,000+ over retirement",
        timeframe="Planning should begin 5-10 years before age 73",
        who_should_consider=(
            "Those with $500k+ in traditional retirement accounts",
            "Those wanting to avoid Medicare premium surcharges (IRMAA)",
        ),
    ),
    "qcd-qualified-charitable": StrategyExample(
        scenario=(
            "Retiree, age 73, has a $40,000 RMD and normally gives $15,000/year to charity. "
            "With a QCD the $15,000 goes directly to charity from the IRA, satisfying the RMD "
            "but excluded from taxable income."
        ),
        potential_savings="$5,000 - $15,000+ annually",
        timeframe="Available after age 70 1/2",
        who_should_consider=(
            "Charitably inclined individuals age 70 1/2+",
            "Those who don't itemize (still get benefit)",
        ),
    ),
    "qlac-awareness": StrategyExample(
        scenario=(
            "Investor uses $130,000 from an IRA to purchase a QLAC that begins payments at "
            "age 85. That amount is excluded from RMD calculations until payout begins."
        ),
        potential_savings="$30,000 - $80,000 in deferred taxes",
        timeframe="Best purchased in early 70s",
        who_should_consider=(
            "Those with longevity in their family history",
            "Those seeking guaranteed late-life income",
        ),
    ),
    "nua-employer-stock": StrategyExample(
        scenario=(
            "Employee's 401(k) holds $500k of employer stock with $100k cost basis. Using NUA, "
            "the $400k appreciation is taxed at capital gains rates instead of ordinary income."
        ),
        potential_savings="$60,000 - $100,000+",
        timeframe="One-time opportunity at separation from service",
        who_should_consider=(
            "Those with highly appreciated employer stock in a 401(k)",
            "Recent retirees or those changing jobs",
        ),
    ),
    "asset-location": StrategyExample(
        scenario=(
            "Investor with $1.5M across taxable, IRA, and Roth accounts places bonds in the IRA, "
            "index funds in taxable, and high-growth assets in the Roth."
        ),
        potential_savings="0.2% - 0.5% additional return annually",
        timeframe="Ongoing optimization",
        who_should_consider=(
            "Anyone with investments in multiple account types",
            "Those with $250k+ in total investments",
        ),
    ),
    "tax-loss-harvesting": StrategyExample(
        scenario=(
            "Investor harvests $50,000 of losses during a downturn by selling underperforming "
            "funds and reinvesting in similar alternatives, offsetting a $50,000 gain."
        ),
        potential_savings="$7,500 - $12,000 per $50k harvested",
        timeframe="Year-round, especially during market declines",
        who_should_consider=(
            "Those with taxable brokerage accounts",
            "Anyone with realized capital gains to offset",
        ),
    ),
    "hsa-optimization": StrategyExample(
        scenario=(
            "Family contributes the maximum to an HSA for 20 years, investing rather than "
            "spending. By age 65: a $250k+ tax-free bucket for medical expenses."
        ),
        potential_savings="$100,000 - $200,000+ in triple tax advantage",
        timeframe="While enrolled in a high-deductible health plan (before age 65)",
        who_should_consider=(
            "Those with high-deductible health plans",
            "Anyone under age 65 who can pay medical costs from other funds",
        ),
    ),
    "529-to-roth": StrategyExample(
        scenario=(
            "Grandparents have $200k in a 529 for a grandchild. Unused funds can roll to the "
            "grandchild's Roth IRA, up to $35k lifetime."
        ),
        potential_savings="$50,000 - $100,000+ in tax-free growth",
        timeframe="Best started early for maximum compounding",
        who_should_consider=(
            "Parents/grandparents planning for education costs",
            "Families wanting flexibility for unused education funds",
        ),
    ),
    "charitable-bunching": StrategyExample(
        scenario=(
            "High-income year: donate $150k of appreciated stock (basis $50k) to a donor-advised "
            "fund, avoiding capital gains and deducting the full value. Grants go out over 10+ years."
        ),
        potential_savings="$20,000 - $80,000+ in combined tax benefits",
        timeframe="Best in high-income years; grants spread over time",
        who_should_consider=(
            "Those who itemize deductions",
            "Anyone with appreciated stock or assets",
        ),
    ),
    "crt-charitable-trust": StrategyExample(
        scenario=(
            "Client with $1M stock (basis $100k) creates a CRT. The trust sells the stock "
            "tax-free and pays the client ~5%/year; the charity receives the remainder."
        ),
        potential_savings="$200,000 - $400,000+ (avoided capital gains + deduction)",
        timeframe="Irrevocable; best with highly appreciated assets",
        who_should_consider=(
            "Those with $500k+ in highly appreciated assets",
            "Investors reluctant to sell due to embedded gains",
        ),
    ),
    "1031-exchange": StrategyExample(
        scenario=(
            "Sell a rental property with a $500k gain and exchange into a $1.2M apartment "
            "building. Full equity keeps working; tax is deferred."
        ),
        potential_savings="$100,000 - $500,000+ deferred",
        timeframe="45-day identification, 180-day closing deadlines",
        who_should_consider=(
            "Investment real estate owners considering selling",
            "Those wanting to reposition real estate holdings",
        ),
    ),
    "depreciation-awareness": StrategyExample(
        scenario=(
            "Building with $300k accumulated depreciation. Plan the sale via a 1031 exchange to "
            "defer the recapture tax, or hold for a step-up in basis."
        ),
        potential_savings="$50,000 - $150,000+ in deferred/eliminated recapture",
        timeframe="Planning before property sale",
        who_should_consider=(
            "Investment property owners considering sale",
            "Those with significant accumulated depreciation",
        ),
    ),
    "home-sale-exclusion": StrategyExample(
        scenario=(
            "Couple sells their home for $1M (bought for $400k). Of the $600k gain, $500k is "
            "excluded; only $100k is taxable."
        ),
        potential_savings="$75,000 - $120,000 on a typical home sale",
        timeframe="Must own and live in home 2 of last 5 years",
        who_should_consider=(
            "Homeowners with significant appreciation",
            "Those planning to downsize",
        ),
    ),
    "spousal-ira": StrategyExample(
        scenario=(
            "One-earner couple contributes to the working spouse's IRA plus a spousal IRA for "
            "the non-working spouse, doubling retirement savings on the same income."
        ),
        potential_savings="$3,000 - $5,000+ annually in tax benefits",
        timeframe="Annual opportunity while one spouse has no earned income",
        who_should_consider=(
            "Married couples with one working spouse",
            "Families with a stay-at-home parent",
        ),
    ),
    DEFAULT_CONTENT_KEY: StrategyExample(
        scenario="Savings depend on your specific situation; your advisor can model the numbers.",
        potential_savings="Varies by situation",
        timeframe="Discuss timing with your advisor",
    ),
}


# =============================================================================
# FOLLOW-UP QUESTIONS
# =============================================================================

_TIMELINE_QUESTION = StrategyQuestion(
    question_id="timeline",
    label="What is your expected timeline for implementing this strategy?",
    question_type="select",
    options=_options(
        ("immediate", "Immediately (within 3 months)"),
        ("soon", "Soon (3-12 months)"),
        ("later", "Later (1-2 years)"),
        ("exploring", "Just exploring"),
    ),
)

STRATEGY_QUESTIONS: Dict[str, Tuple[StrategyQuestion, ...]] = {
    "roth-conversion-window": (
        StrategyQuestion(
            "pretax-balance",
            "What is your approximate traditional IRA/401(k) balance?",
            "select",
            _options(
                ("under-100k", "Under $100,000"),
                ("100k-250k", "$100,000 - $250,000"),
                ("250k-500k", "$250,000 - $500,000"),
                ("500k-1m", "$500,000 - $1,000,000"),
                ("over-1m", "Over $1,000,000"),
            ),
        ),
        StrategyQuestion(
            "income-comparison",
            "How does your expected income this year compare to typical years?",
            "select",
            _options(
                ("much-lower", "Much lower than usual"),
                ("somewhat-lower", "Somewhat lower than usual"),
                ("similar", "About the same"),
                ("higher", "Higher than usual"),
            ),
        ),
        StrategyQuestion(
            "large-income-events",
            "Do you expect any large income events in the next 5 years?",
            "checkbox",
        ),
    ),
    "backdoor-roth": (
        StrategyQuestion(
            "existing-pretax-ira",
            "Do you have an existing traditional IRA with pre-tax money?",
            "select",
            _options(
                ("none", "No existing traditional IRA"),
                ("small", "Yes, but small balance (under $10,000)"),
                ("significant", "Yes, significant balance"),
            ),
        ),
        StrategyQuestion(
            "done-before",
            "Have you done a backdoor Roth conversion before?",
            "select",
            _options(("yes", "Yes, regularly"), ("once", "Yes, but only once"), ("no", "No, never")),
        ),
    ),
    "mega-backdoor-roth": (
        StrategyQuestion(
            "plan-allows",
            "Does your employer 401(k) allow after-tax contributions?",
            "select",
            _options(("yes", "Yes"), ("no", "No"), ("unsure", "I'm not sure")),
        ),
        StrategyQuestion(
            "current-contributions",
            "Are you currently maxing out your 401(k) contributions?",
            "select",
            _options(
                ("yes", "Yes, contributing the maximum"),
                ("close", "Close to maximum"),
                ("no", "No, below maximum"),
            ),
        ),
    ),
    "rmd-planning": (
        StrategyQuestion(
            "rmd-started",
            "Have your Required Minimum Distributions started?",
            "select",
            _options(
                ("yes", "Yes, already taking RMDs"),
                ("soon", "No, but within 5 years"),
                ("later", "No, more than 5 years away"),
            ),
        ),
        StrategyQuestion(
            "need-income",
            "Do you need the RMD income for living expenses?",
            "select",
            _options(
                ("yes", "Yes, I need all of it"),
                ("partial", "I need some of it"),
                ("no", "No, I don't need it"),
            ),
        ),
    ),
    "qcd-qualified-charitable": (
        StrategyQuestion(
            "annual-giving",
            "What is your typical annual charitable giving amount?",
            "select",
            _options(
                ("under-1k", "Under $1,000"),
                ("1k-5k", "$1,000 - $5,000"),
                ("5k-15k", "$5,000 - $15,000"),
                ("15k-50k", "$15,000 - $50,000"),
                ("over-50k", "Over $50,000"),
            ),
        ),
        StrategyQuestion(
            "deduction-type",
            "Do you currently itemize deductions or take the standard deduction?",
            "select",
            _options(("itemize", "Itemize"), ("standard", "Standard deduction"), ("unsure", "Not sure")),
        ),
    ),
    "1031-exchange": (
        StrategyQuestion(
            "sale-timeline",
            "When are you thinking of selling?",
            "select",
            _options(
                ("0-6-months", "Within 6 months"),
                ("6-12-months", "6-12 months"),
                ("1-2-years", "1-2 years"),
                ("exploring", "Just exploring options"),
            ),
        ),
        StrategyQuestion(
            "replacement-property",
            "Do you have a replacement property in mind?",
            "select",
            _options(("yes-identified", "Yes, already identified"), ("looking", "Actively looking"), ("no", "Not yet")),
        ),
    ),
    "hsa-optimization": (
        StrategyQuestion(
            "hdhp-enrolled",
            "Are you enrolled in a High Deductible Health Plan (HDHP)?",
            "select",
            _options(
                ("yes", "Yes, currently enrolled"),
                ("no-eligible", "No, but I could enroll"),
                ("no-not-eligible", "No, not eligible"),
                ("unsure", "I'm not sure"),
            ),
        ),
    ),
    DEFAULT_CONTENT_KEY: (
        StrategyQuestion(
            "current-situation",
            "Briefly describe your current situation related to this strategy:",
            "text",
            placeholder="e.g., I have a rental property I might sell...",
        ),
        _TIMELINE_QUESTION,
        StrategyQuestion(
            "concerns",
            "What questions or concerns do you have about this strategy?",
            "text",
            placeholder="Enter any specific questions...",
        ),
    ),
}


def get_advisor_info(strategy_id: str) -> AdvisorInfo:
    """Advisor checklist for a strategy, or the generic one."""
    info = ADVISOR_INFO.get(strategy_id)
    if info is None:
        logger.debug(f"No advisor info for {strategy_id}, using default")
        return ADVISOR_INFO[DEFAULT_CONTENT_KEY]
    return info


def get_strategy_example(strategy_id: str) -> StrategyExample:
    """Example scenario for a strategy, or the generic one."""
    example = STRATEGY_EXAMPLES.get(strategy_id)
    if example is None:
        logger.debug(f"No example for {strategy_id}, using default")
        return STRATEGY_EXAMPLES[DEFAULT_CONTENT_KEY]
    return example


def get_strategy_questions(strategy_id: str) -> List[StrategyQuestion]:
    """Follow-up questions for a strategy, or the generic set."""
    questions = STRATEGY_QUESTIONS.get(strategy_id)
    if questions is None:
        logger.debug(f"No follow-up questions for {strategy_id}, using default")
        questions = STRATEGY_QUESTIONS[DEFAULT_CONTENT_KEY]
    return list(questions)


def has_specific_content(strategy_id: str) -> bool:
    return strategy_id in ADVISOR_INFO or strategy_id in STRATEGY_EXAMPLES
