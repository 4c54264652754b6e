"""
Compliance Scoring Engine
=========================

Converts questionnaire answers into a ComplianceResult:

    - overall score (0-100)
    - per-category scores with status and insight text
    - strengths and red flags
    - a risk forecast for unresolved red flags

The engine is a pure function of its two input mappings and the static
catalog. It performs no I/O, holds no mutable state and never raises on
malformed input: unanswered or unrecognised answers are scored as the
least-favourable option for that question.

Aggregation:
    question credit   = ANSWER_RULES[id][option].credit            (0..1)
    category score    = weighted mean of question credits * 100
    overall score     = weighted mean of all question credits * 100
    (weights from QUESTION_WEIGHTS, rounded half-up, clamped to 0..100)

Author: Health Check Team
Version: 1.0.0
"""

import logging
import math
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple

from healthcheck.catalog.questions import (
    CATEGORY_ORDER,
    QUESTIONS,
    Category,
    Question,
    category_rank,
    coerce_question_id,
)
from healthcheck.scoring.rules import (
    ANSWER_RULES,
    COUNT_FOLLOW_UPS,
    DEFAULT_COUNT,
    FORECAST_PERIOD,
    QUESTION_WEIGHTS,
    RISK_RULES,
    CategoryStatus,
    OptionRule,
    Probability,
    classify_status,
    least_favorable_option,
)


logger = logging.getLogger(__name__)

_PROBABILITY_RANK = {p.value: p.rank for p in Probability}
_COUNT_PREFIX = re.compile(r"\s*[+-]?\d+")


# =============================================================================
# Result Types
# =============================================================================


@dataclass(frozen=True)
class RiskItem:
    """One forecast entry."""
    type: str
    penalty: str
    probability: str
    question_id: int = field(compare=True, repr=False)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type,
            "penalty": self.penalty,
            "probability": self.probability,
        }


@dataclass(frozen=True)
class RiskForecast:
    """Forward risk estimate over a fixed period."""
    period: str
    risks: Tuple[RiskItem, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "period": self.period,
            "risks": [r.to_dict() for r in self.risks],
        }


@dataclass(frozen=True)
class CategoryScore:
    """Score and qualitative summary for one category."""
    category: str
    score: int
    insights: str
    status: CategoryStatus

    def to_dict(self) -> Dict[str, Any]:
        return {
            "category": self.category,
            "score": self.score,
            "insights": self.insights,
            "status": self.status.value,
        }


@dataclass(frozen=True)
class QuestionEvaluation:
    """How a single question was scored."""
    question_id: int
    category: Category
    option: str
    answered: bool
    credit: float
    weight: int
    insight: str
    strength: Optional[str] = None
    red_flag: Optional[str] = None
    risk: Optional[RiskItem] = None


@dataclass(frozen=True)
class ComplianceResult:
    """The engine's sole output. Immutable once produced."""
    overall_score: int
    category_scores: Tuple[CategoryScore, ...]
    strengths: Tuple[str, ...]
    red_flags: Tuple[str, ...]
    risk_forecast: RiskForecast

    def to_dict(self) -> Dict[str, Any]:
        return {
            "overallScore": self.overall_score,
            "categoryScores": [c.to_dict() for c in self.category_scores],
            "strengths": list(self.strengths),
            "redFlags": list(self.red_flags),
            "riskForecast": self.risk_forecast.to_dict(),
        }

    def category(self, name: str) -> Optional[CategoryScore]:
        for score in self.category_scores:
            if score.category == name:
                return score
        return None


# =============================================================================
# Helpers
# =============================================================================


def _round_score(value: float) -> int:
    """Round half-up and clamp to [0, 100]."""
    return max(0, min(100, int(math.floor(value + 0.5))))


def normalize_answers(mapping: Optional[Mapping[Any, Any]]) -> Dict[int, str]:
    """Key by catalog id and stringify values; drop unknown keys and None."""
    normalized: Dict[int, str] = {}
    if not mapping:
        return normalized
    for key, value in mapping.items():
        question_id = coerce_question_id(key)
        if question_id is None or value is None:
            continue
        normalized[question_id] = str(value).strip()
    return normalized


def parse_count(raw: Optional[str]) -> int:
    """Parse a numeric follow-up answer; anything unusable becomes 1."""
    if raw is None:
        return DEFAULT_COUNT
    # Leading integer only: "2.7" -> 2, "1e30" -> 1, "3 months" -> 3
    match = _COUNT_PREFIX.match(str(raw))
    if match is None:
        return DEFAULT_COUNT
    count = int(match.group(0))
    return count if count >= 1 else DEFAULT_COUNT


def resolve_option(question: Question, raw: Optional[str]) -> Optional[str]:
    """
    Match a raw answer to one of the question's options.

    Matching is case-insensitive. Returns None when nothing matches.
    """
    if not raw:
        return None
    wanted = raw.strip().casefold()
    for option in ANSWER_RULES[question.id]:
        if option.casefold() == wanted:
            return option
    return None


# =============================================================================
# Engine
# =============================================================================


class ScoringEngine:
    """
    Rule-based compliance scoring engine.

    Usage:
        engine = ScoringEngine()
        result = engine.compute({1: "Yes", 2: "No"}, {})
        print(result.overall_score)
    """

    def __init__(self, questions: Tuple[Question, ...] = QUESTIONS):
        self.questions = questions

    def compute(
        self,
        answers: Optional[Mapping[Any, Any]],
        follow_up_answers: Optional[Mapping[Any, Any]] = None,
    ) -> ComplianceResult:
        """
        Score an answer set.

        Args:
            answers: question id -> answer value
            follow_up_answers: question id -> follow-up value

        Returns:
            ComplianceResult
        """
        main = normalize_answers(answers)
        follow_ups = normalize_answers(follow_up_answers)

        evaluations = [
            self.evaluate_question(q, main.get(q.id), follow_ups.get(q.id))
            for q in self.questions
        ]

        ranked = sorted(
            evaluations,
            key=lambda e: (category_rank(e.category), e.question_id),
        )
        strengths = tuple(e.strength for e in ranked if e.strength)
        red_flags = tuple(e.red_flag for e in ranked if e.red_flag)
        risks = tuple(sorted(
            (e.risk for e in evaluations if e.risk is not None),
            key=lambda r: (-_PROBABILITY_RANK[r.probability], r.question_id),
        ))

        result = ComplianceResult(
            overall_score=self._aggregate(evaluations),
            category_scores=self._category_scores(evaluations),
            strengths=strengths,
            red_flags=red_flags,
            risk_forecast=RiskForecast(period=FORECAST_PERIOD, risks=risks),
        )

        logger.debug(
            "Computed compliance result: overall=%d answered=%d red_flags=%d risks=%d",
            result.overall_score,
            sum(1 for e in evaluations if e.answered),
            len(red_flags),
            len(risks),
        )
        return result

    def evaluate_question(
        self,
        question: Question,
        raw_answer: Optional[str],
        raw_follow_up: Optional[str] = None,
    ) -> QuestionEvaluation:
        """Score one question against its rule table."""
        option = resolve_option(question, raw_answer)
        answered = option is not None
        if option is None:
            option = least_favorable_option(question.id)

        rule: OptionRule = ANSWER_RULES[question.id][option]

        count = DEFAULT_COUNT
        if (
            answered
            and question.follow_up is not None
            and question.follow_up.kind in COUNT_FOLLOW_UPS
            and question.follow_up_applies(option)
        ):
            count = parse_count(raw_follow_up)

        red_flag = rule.red_flag.format(count=count) if rule.red_flag else None

        risk = None
        risk_rule = RISK_RULES.get(question.id)
        if red_flag and rule.forecast and risk_rule is not None:
            risk = RiskItem(
                type=risk_rule.type,
                penalty=risk_rule.describe_penalty(count),
                probability=risk_rule.probability.value,
                question_id=question.id,
            )

        return QuestionEvaluation(
            question_id=question.id,
            category=question.category,
            option=option,
            answered=answered,
            credit=rule.credit,
            weight=QUESTION_WEIGHTS[question.id],
            insight=rule.insight.format(count=count),
            strength=rule.strength,
            red_flag=red_flag,
            risk=risk,
        )

    # =========================================================================
    # Aggregation
    # =========================================================================

    @staticmethod
    def _aggregate(evaluations: List[QuestionEvaluation]) -> int:
        max_total = sum(e.weight for e in evaluations)
        if max_total <= 0:
            return 0
        earned = sum(e.credit * e.weight for e in evaluations)
        return _round_score(earned / max_total * 100)

    def _category_scores(
        self,
        evaluations: List[QuestionEvaluation],
    ) -> Tuple[CategoryScore, ...]:
        scores = []
        for category in CATEGORY_ORDER:
            members = [e for e in evaluations if e.category == category]
            if not members:
                continue

            score = self._aggregate(members)
            # Weakest question speaks for the category; ties go to lowest id
            weakest = min(members, key=lambda e: (e.credit, e.question_id))

            scores.append(CategoryScore(
                category=category.value,
                score=score,
                insights=weakest.insight,
                status=classify_status(score),
            ))
        return tuple(scores)


_default_engine = ScoringEngine()


def compute(
    answers: Optional[Mapping[Any, Any]],
    follow_up_answers: Optional[Mapping[Any, Any]] = None,
) -> ComplianceResult:
    """Score with the default catalog."""
    return _default_engine.compute(answers, follow_up_answers)
