"""
Compliance Scoring Rules
========================

Declarative rule tables for the compliance health check.

Every per-question decision the engine makes is looked up here:

    - QUESTION_WEIGHTS: relative importance of each question
    - ANSWER_RULES:     credit, insight, strength and red-flag text per option
    - RISK_RULES:       penalty / probability forecast per question id

Credit Philosophy:
    - Credit is a value in [0, 1] where 1.0 = fully compliant
    - Unanswered or unrecognised answers fall into the option with the
      lowest credit for that question
    - A negative answer to a question with a warning costs more than a
      negative answer to one without

Author: Health Check Team
Version: 1.0.0
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional

from healthcheck.catalog.questions import NO, NOT_SURE, YES, FollowUpKind


class Probability(Enum):
    """
    Risk probability tiers with sort rank (higher = more likely).
    """
    HIGH = ("high", 3)
    MEDIUM = ("medium", 2)
    LOW = ("low", 1)

    def __init__(self, value: str, rank: int):
        self._value_ = value
        self.rank = rank


class CategoryStatus(str, Enum):
    """Qualitative label derived from a category score."""
    EXCELLENT = "excellent"
    GOOD = "good"
    NEEDS_ATTENTION = "needs-attention"
    CRITICAL = "critical"


@dataclass(frozen=True)
class OptionRule:
    """
    Outcome of choosing one answer option.

    `red_flag` and `insight` may contain `{count}`, filled from a numeric
    follow-up answer. `forecast` marks the option whose red flag also feeds
    the risk forecast.
    """
    credit: float
    insight: str
    strength: Optional[str] = None
    red_flag: Optional[str] = None
    forecast: bool = False


@dataclass(frozen=True)
class RiskRule:
    """
    Forecast entry emitted for an unresolved red flag.

    `penalty` may contain `{count}` and `{total}`; total is
    `unit_penalty * count`, capped at `penalty_cap` when set.
    """
    type: str
    penalty: str
    probability: Probability
    unit_penalty: int = 0
    penalty_cap: Optional[int] = None

    def estimate_total(self, count: int) -> int:
        total = self.unit_penalty * count
        if self.penalty_cap is not None:
            total = min(total, self.penalty_cap)
        return total

    def describe_penalty(self, count: int) -> str:
        return self.penalty.format(count=count, total=self.estimate_total(count))


# =============================================================================
# Constants
# =============================================================================

FORECAST_PERIOD = "6 months"

# Follow-up kinds whose answer is a count used in red-flag / penalty text
COUNT_FOLLOW_UPS = frozenset({
    FollowUpKind.DIRECTOR_COUNT,
    FollowUpKind.MISSED_MONTHS,
    FollowUpKind.MISSED_YEARS,
})

DEFAULT_COUNT = 1

# Category status thresholds (score >= threshold)
STATUS_THRESHOLDS = (
    (85, CategoryStatus.EXCELLENT),
    (70, CategoryStatus.GOOD),
    (50, CategoryStatus.NEEDS_ATTENTION),
)


# =============================================================================
# Question Weights
# =============================================================================

QUESTION_WEIGHTS: Dict[int, int] = {
    1: 25,   # Incorporation (critical)
    2: 20,   # MCA annual returns
    3: 15,   # Director KYC
    4: 20,   # GST registration
    5: 25,   # GST returns (critical)
    6: 20,   # Income tax returns
    7: 30,   # Trademark
    8: 25,   # Patents
    9: 15,   # Copyright
    10: 25,  # ISO certification
    11: 30,  # Industry licenses (critical)
    12: 20,  # Bookkeeping
    13: 25,  # Overdue liabilities (critical)
    14: 15,  # Tax planning
    15: 20,  # Compliance officer
}


# =============================================================================
# Answer Rules
# =============================================================================

ANSWER_RULES: Dict[int, Dict[str, OptionRule]] = {
    1: {
        YES: OptionRule(1.0, "Legally incorporated with proper registration",
                        strength="Company is legally incorporated"),
        NO: OptionRule(0.0, "Critical: company not incorporated",
                       red_flag="Company not legally incorporated", forecast=True),
        NOT_SURE: OptionRule(0.3, "Incorporation status unclear"),
    },
    2: {
        YES: OptionRule(1.0, "MCA compliance up to date",
                        strength="MCA annual returns filed on time"),
        NO: OptionRule(0.0, "MCA returns overdue - immediate action needed",
                       red_flag="MCA annual returns not filed", forecast=True),
        NOT_SURE: OptionRule(0.5, "MCA filing status uncertain"),
    },
    3: {
        YES: OptionRule(1.0, "All director KYC updated",
                        strength="Director KYC compliance maintained"),
        NO: OptionRule(0.0, "KYC pending for {count} director(s)",
                       red_flag="DIN KYC pending for {count} director(s)", forecast=True),
        NOT_SURE: OptionRule(0.6, "Director KYC status unclear"),
    },
    4: {
        YES: OptionRule(1.0, "GST registered and active",
                        strength="GST registration active"),
        NO: OptionRule(0.0, "GST registration required",
                       red_flag="GST registration missing", forecast=True),
        NOT_SURE: OptionRule(0.4, "GST registration status unclear"),
    },
    5: {
        YES: OptionRule(1.0, "GST compliance current",
                        strength="GST returns filed on time"),
        NO: OptionRule(0.0, "{count} month(s) of GST returns overdue",
                       red_flag="GST returns missed for {count} month(s)", forecast=True),
        NOT_SURE: OptionRule(0.5, "GST filing status uncertain"),
    },
    6: {
        YES: OptionRule(1.0, "ITR compliance maintained",
                        strength="Income Tax Returns filed"),
        NO: OptionRule(0.0, "ITR overdue for {count} year(s)",
                       red_flag="ITR not filed for {count} year(s)", forecast=True),
        NOT_SURE: OptionRule(0.6, "ITR filing status unclear"),
    },
    7: {
        YES: OptionRule(1.0, "Brand legally protected",
                        strength="Trademark protection secured"),
        NO: OptionRule(0.0, "Brand vulnerable to infringement",
                       red_flag="Trademark not filed", forecast=True),
        NOT_SURE: OptionRule(0.3, "Trademark status unclear"),
    },
    8: {
        "Yes, filed patents": OptionRule(
            1.0, "Innovation legally protected",
            strength="Patent protection secured"),
        "Not applicable": OptionRule(0.9, "Patent assessment not applicable"),
        "No unique products/technology": OptionRule(
            0.8, "No patentable technology identified"),
        "No, but have unique products/technology": OptionRule(
            0.3, "Technology needs patent protection",
            red_flag="Unique technology not patent-protected", forecast=True),
    },
    9: {
        YES: OptionRule(1.0, "Creative works protected",
                        strength="Copyright registrations maintained"),
        NO: OptionRule(0.6, "Consider copyright for creative works",
                       red_flag="Copyright not registered for creative works"),
        NOT_SURE: OptionRule(0.8, "Copyright status unclear"),
    },
    10: {
        YES: OptionRule(1.0, "Quality standards certified",
                        strength="ISO certification obtained"),
        NO: OptionRule(0.0, "ISO certification recommended",
                       red_flag="ISO certification missing", forecast=True),
        NOT_SURE: OptionRule(0.5, "ISO certification status unclear"),
    },
    11: {
        "Yes, all required licenses": OptionRule(
            1.0, "Fully licensed for operations",
            strength="All industry licenses obtained"),
        "No special licenses required": OptionRule(0.9, "No special licenses required"),
        "Not sure what licenses needed": OptionRule(
            0.4, "License audit required",
            red_flag="License requirements not assessed"),
        "Some licenses missing": OptionRule(
            0.2, "Critical licenses missing",
            red_flag="Some industry licenses missing", forecast=True),
    },
    12: {
        YES: OptionRule(1.0, "Financial compliance maintained",
                        strength="Proper financial record maintenance"),
        NO: OptionRule(0.0, "Bookkeeping needs improvement",
                       red_flag="Inadequate bookkeeping practices", forecast=True),
        NOT_SURE: OptionRule(0.4, "Bookkeeping practices need review"),
    },
    13: {
        YES: OptionRule(1.0, "Financial obligations current",
                        strength="No overdue liabilities"),
        NO: OptionRule(0.0, "Overdue payments need attention",
                       red_flag="Outstanding overdue liabilities", forecast=True),
        NOT_SURE: OptionRule(0.6, "Liability status needs review"),
    },
    14: {
        YES: OptionRule(1.0, "Tax optimization in place",
                        strength="Tax planning implemented"),
        NO: OptionRule(0.6, "Tax planning opportunity exists",
                       red_flag="No tax planning strategy in place"),
        NOT_SURE: OptionRule(0.8, "Tax planning status unclear"),
    },
    15: {
        YES: OptionRule(1.0, "Professional compliance oversight",
                        strength="External compliance monitoring"),
        NO: OptionRule(0.6, "Consider compliance officer engagement",
                       red_flag="No dedicated compliance oversight"),
        NOT_SURE: OptionRule(0.8, "Compliance oversight unclear"),
    },
}


# =============================================================================
# Risk Forecast Rules
# =============================================================================

RISK_RULES: Dict[int, RiskRule] = {
    1: RiskRule(
        type="Legal Structure Risk",
        penalty="Personal liability exposure + ₹1-10 Lakhs penalty",
        probability=Probability.HIGH,
    ),
    2: RiskRule(
        type="MCA Non-compliance",
        penalty="₹50,000-5 Lakhs + strike-off risk",
        probability=Probability.HIGH,
    ),
    3: RiskRule(
        type="Director KYC Penalty",
        penalty="₹5,000 per director (₹{total:,} total)",
        probability=Probability.MEDIUM,
        unit_penalty=5000,
    ),
    4: RiskRule(
        type="GST Non-registration",
        penalty="₹10,000 + 18% tax on turnover",
        probability=Probability.HIGH,
    ),
    5: RiskRule(
        type="GST Late Filing Penalty",
        penalty="₹200 per month (₹{total:,} for {count} month(s)) + interest",
        probability=Probability.HIGH,
        unit_penalty=200,
    ),
    6: RiskRule(
        type="Income Tax Penalty",
        penalty="₹5,000-1 Lakh per year (₹{total:,} estimated)",
        probability=Probability.HIGH,
        unit_penalty=5000,
        penalty_cap=100000,
    ),
    7: RiskRule(
        type="Brand Protection Risk",
        penalty="₹2-5 Lakhs + legal costs",
        probability=Probability.HIGH,
    ),
    8: RiskRule(
        type="IP Theft Risk",
        penalty="Loss of competitive advantage",
        probability=Probability.MEDIUM,
    ),
    10: RiskRule(
        type="Market Access Risk",
        penalty="Lost business opportunities",
        probability=Probability.MEDIUM,
    ),
    11: RiskRule(
        type="Regulatory Compliance Risk",
        penalty="₹1-10 Lakhs + operational shutdown",
        probability=Probability.HIGH,
    ),
    12: RiskRule(
        type="Audit Risk",
        penalty="₹25,000-2 Lakhs penalty",
        probability=Probability.MEDIUM,
    ),
    13: RiskRule(
        type="Financial Distress Risk",
        penalty="Credit rating impact + legal action",
        probability=Probability.HIGH,
    ),
}


# =============================================================================
# Lookups
# =============================================================================

def least_favorable_option(question_id: int) -> str:
    """Option with the lowest credit; ties resolve to the first listed."""
    options = ANSWER_RULES[question_id]
    return min(options, key=lambda option: options[option].credit)


def best_option(question_id: int) -> str:
    """Option with the highest credit."""
    options = ANSWER_RULES[question_id]
    return max(options, key=lambda option: options[option].credit)


def option_rank(question_id: int, option: str) -> int:
    """0 for the most compliant option, increasing as credit drops."""
    options = ANSWER_RULES[question_id]
    ordered = sorted(options, key=lambda o: -options[o].credit)
    return ordered.index(option)


def classify_status(score: int) -> CategoryStatus:
    """Map a 0-100 category score to a status label."""
    for threshold, status in STATUS_THRESHOLDS:
        if score >= threshold:
            return status
    return CategoryStatus.CRITICAL
