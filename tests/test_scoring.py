"""
Health Check Test Suite - Scoring Engine
========================================

Tests for ScoringEngine: aggregation, ordering, follow-ups and the
behavioural properties the engine guarantees.

Author: Health Check Team
Version: 1.0.0
"""

import pytest

from healthcheck.catalog.questions import (
    CATEGORY_ORDER,
    NO,
    NOT_SURE,
    QUESTIONS,
    YES,
    QuestionType,
    get_question,
)
from healthcheck.scoring import ScoringEngine, compute
from healthcheck.scoring.engine import normalize_answers, parse_count, resolve_option
from healthcheck.scoring.rules import (
    ANSWER_RULES,
    CategoryStatus,
    least_favorable_option,
    option_rank,
)


SEVERE_IDS = [q.id for q in QUESTIONS if q.is_high_severity]


class TestHelpers:
    """Tests for input normalisation helpers."""

    def test_normalize_answers_drops_unknown_and_none(self):
        """Only catalog keys with values survive."""
        assert normalize_answers({"1": " Yes ", 2: None, "99": "No", "x": "No"}) == {1: "Yes"}

    def test_normalize_answers_handles_none(self):
        """None input is an empty answer set."""
        assert normalize_answers(None) == {}

    @pytest.mark.parametrize("raw,expected", [
        ("3", 3),
        ("2.7", 2),
        ("0", 1),
        ("-4", 1),
        ("", 1),
        ("many", 1),
        (None, 1),
        ("inf", 1),
        ("1e30", 1),
        ("3 months", 3),
    ])
    def test_parse_count(self, raw, expected):
        """Counts parse leniently and never drop below 1."""
        assert parse_count(raw) == expected

    def test_resolve_option_is_case_insensitive(self):
        """Matching ignores case."""
        assert resolve_option(get_question(1), "yes") == YES
        assert resolve_option(get_question(1), "NOT SURE") == NOT_SURE
        assert resolve_option(get_question(8), "yes, FILED patents") == "Yes, filed patents"

    def test_resolve_option_unknown(self):
        """Unrecognised answers resolve to None."""
        assert resolve_option(get_question(1), "Maybe") is None
        assert resolve_option(get_question(8), YES) is None


class TestDeterminismAndBounds:
    """Tests for purity and score bounds."""

    def test_repeated_calls_are_equal(self, single_red_flag_answers):
        """Identical inputs give structurally equal results."""
        engine = ScoringEngine()
        first = engine.compute(single_red_flag_answers, {3: "2"})
        second = engine.compute(single_red_flag_answers, {3: "2"})
        assert first == second
        assert first.to_dict() == second.to_dict()

    def test_module_compute_matches_engine(self, compliant_answers):
        """The module-level shortcut uses the default catalog."""
        assert compute(compliant_answers) == ScoringEngine().compute(compliant_answers, {})

    @pytest.mark.parametrize("answers", [
        {},
        {1: 123, "2": None, "x": "Yes", 99: "Yes", 5: "   yes  "},
        {q.id: "garbage" for q in QUESTIONS},
        {q.id: NOT_SURE for q in QUESTIONS},
    ])
    def test_scores_within_bounds(self, answers):
        """Overall and category scores stay in [0, 100]."""
        result = compute(answers, {3: "-7", 5: "1e9", 6: object()})
        assert 0 <= result.overall_score <= 100
        for category in result.category_scores:
            assert 0 <= category.score <= 100

    def test_every_category_reported_in_catalog_order(self):
        """All five categories appear even for an empty answer set."""
        result = compute({})
        assert [c.category for c in result.category_scores] == [
            c.value for c in CATEGORY_ORDER
        ]


class TestTotality:
    """Tests for empty and malformed answer sets."""

    def test_empty_answers(self):
        """Empty input scores at the bottom and flags every severe question."""
        result = compute({}, {})
        assert result.overall_score == 13
        assert len(result.red_flags) == 15
        assert len(result.risk_forecast.risks) == len(SEVERE_IDS)
        assert result.strengths == ()

    def test_unrecognised_answer_scores_as_least_favorable(self):
        """Garbage is never rewarded."""
        assert compute({1: "Definitely"}) == compute({1: NO})
        assert compute({8: "Yes"}) == compute({8: least_favorable_option(8)})

    def test_case_insensitive_answers(self, compliant_answers):
        """Answer case does not change the result."""
        shouted = {k: v.upper() for k, v in compliant_answers.items()}
        assert compute(shouted) == compute(compliant_answers)


class TestScenarios:
    """End-to-end answer scenarios."""

    def test_all_compliant(self, compliant_answers, compliant_follow_ups):
        """Best answers everywhere score 100 with no flags or risks."""
        result = compute(compliant_answers, compliant_follow_ups)
        assert result.overall_score == 100
        assert result.red_flags == ()
        assert result.risk_forecast.risks == ()
        assert len(result.strengths) == 15
        assert all(c.status == CategoryStatus.EXCELLENT for c in result.category_scores)

    def test_all_noncompliant(self, noncompliant_answers, minimal_follow_ups):
        """Worst answers score low and forecast every severe question."""
        result = compute(noncompliant_answers, minimal_follow_ups)
        assert result.overall_score == 13

        risks = result.risk_forecast.risks
        assert [r.question_id for r in risks] == [1, 2, 4, 5, 6, 7, 11, 13, 3, 8, 10, 12]
        assert [r.probability for r in risks] == ["high"] * 8 + ["medium"] * 4
        assert result.risk_forecast.period == "6 months"

    def test_single_red_flag(self, single_red_flag_answers):
        """Only incorporation is flagged; other categories stay at maximum."""
        result = compute(single_red_flag_answers, {})

        assert result.red_flags == ("Company not legally incorporated",)
        assert len(result.risk_forecast.risks) == 1
        assert result.risk_forecast.risks[0].type == "Legal Structure Risk"
        assert result.risk_forecast.risks[0].probability == "high"

        legal = result.category("Company & Legal Structure")
        assert legal.score == 58
        assert legal.status == CategoryStatus.NEEDS_ATTENTION
        assert legal.insights == "Critical: company not incorporated"
        for category in result.category_scores[1:]:
            assert category.score == 100

        assert result.overall_score == 92

    def test_not_sure_is_scored_but_never_flagged(self):
        """Uncertainty lowers the score without red flags."""
        answers = {
            q.id: NOT_SURE if q.type == QuestionType.YESNO else q.options[0]
            for q in QUESTIONS
        }
        result = compute(answers)
        assert result.red_flags == ()
        assert result.risk_forecast.risks == ()
        assert result.overall_score == 60


class TestSeverityLinkage:
    """Negative answers on warning questions flag and forecast."""

    @pytest.mark.parametrize("question_id", SEVERE_IDS)
    def test_negative_answer_flags_and_forecasts(self, compliant_answers, question_id):
        """Exactly one red flag and one risk for the negative answer."""
        answers = dict(compliant_answers)
        answers[question_id] = least_favorable_option(question_id)
        result = compute(answers)

        assert len(result.red_flags) == 1
        assert len(result.risk_forecast.risks) == 1
        assert result.risk_forecast.risks[0].question_id == question_id

    @pytest.mark.parametrize("question_id", [9, 14, 15])
    def test_negative_answer_without_warning_only_flags(self, compliant_answers, question_id):
        """No forecast entry for questions without a warning."""
        answers = dict(compliant_answers)
        answers[question_id] = NO
        result = compute(answers)

        assert len(result.red_flags) == 1
        assert result.risk_forecast.risks == ()

    def test_unassessed_licenses_flag_without_risk(self, compliant_answers):
        """Not knowing which licenses apply is flagged, not forecast."""
        answers = dict(compliant_answers)
        answers[11] = "Not sure what licenses needed"
        result = compute(answers)
        assert result.red_flags == ("License requirements not assessed",)
        assert result.risk_forecast.risks == ()


class TestMonotonicity:
    """Improving one answer never lowers a score."""

    @pytest.mark.parametrize("baseline_option", [NO, NOT_SURE, YES])
    def test_single_answer_improvement(self, baseline_option):
        """Walking each question up its ranking never decreases scores."""
        baseline = {
            q.id: baseline_option if q.type == QuestionType.YESNO else q.options[-1]
            for q in QUESTIONS
        }

        for question in QUESTIONS:
            ranked = sorted(
                ANSWER_RULES[question.id],
                key=lambda o: option_rank(question.id, o),
                reverse=True,
            )
            previous = None
            for option in ranked:
                answers = dict(baseline)
                answers[question.id] = option
                result = compute(answers)
                category_score = result.category(question.category.value).score
                if previous is not None:
                    assert result.overall_score >= previous[0]
                    assert category_score >= previous[1]
                previous = (result.overall_score, category_score)


class TestOrdering:
    """Strengths and red flags follow catalog order."""

    def test_red_flags_follow_catalog_order(self):
        """Flags are ordered by category, then question id."""
        result = compute({})
        expected = [
            ANSWER_RULES[q.id][least_favorable_option(q.id)].red_flag.format(count=1)
            for q in QUESTIONS
        ]
        assert list(result.red_flags) == expected

    def test_strengths_follow_catalog_order(self):
        """Strengths come out in catalog order regardless of input order."""
        answers = {15: YES, 1: YES, 7: YES, 4: YES}
        result = compute(answers)
        assert result.strengths == (
            "Company is legally incorporated",
            "GST registration active",
            "Trademark protection secured",
            "External compliance monitoring",
        )

    def test_category_insight_tie_goes_to_lowest_id(self, compliant_answers):
        """Equally weak questions resolve to the lower id."""
        answers = dict(compliant_answers)
        answers[12] = NO
        answers[13] = NO
        result = compute(answers)
        assert result.category("Financial Health & Risk").insights == (
            "Bookkeeping needs improvement"
        )


class TestFollowUps:
    """Numeric follow-ups feed red flags and penalties."""

    def test_director_count(self):
        """Director count appears in flag and penalty."""
        result = compute({3: NO}, {3: "3"})
        assert "DIN KYC pending for 3 director(s)" in result.red_flags
        risk = next(r for r in result.risk_forecast.risks if r.question_id == 3)
        assert risk.penalty == "₹5,000 per director (₹15,000 total)"

    def test_missed_gst_months(self):
        """GST month count appears in flag and penalty."""
        result = compute({5: NO}, {"5": "6"})
        assert "GST returns missed for 6 month(s)" in result.red_flags
        risk = next(r for r in result.risk_forecast.risks if r.question_id == 5)
        assert risk.penalty == "₹200 per month (₹1,200 for 6 month(s)) + interest"

    def test_exponent_count_reads_leading_integer(self):
        """Exponent notation does not inflate the director count."""
        result = compute({3: NO}, {3: "1e30"})
        assert "DIN KYC pending for 1 director(s)" in result.red_flags

    def test_invalid_count_defaults_to_one(self):
        """Unparseable counts fall back to 1."""
        result = compute({6: NO}, {6: "lots"})
        assert "ITR not filed for 1 year(s)" in result.red_flags

    def test_follow_up_ignored_when_condition_unmet(self):
        """A count without the triggering answer has no effect."""
        assert compute({3: YES}, {3: "5"}) == compute({3: YES}, {})
        assert compute({3: NOT_SURE}, {3: "5"}) == compute({3: NOT_SURE}, {})

    def test_follow_up_does_not_change_score(self):
        """Counts shape text, not credit."""
        one = compute({5: NO}, {5: "1"})
        many = compute({5: NO}, {5: "24"})
        assert one.overall_score == many.overall_score

    def test_text_follow_up_is_informational(self, compliant_answers):
        """A CIN follow-up does not alter the result."""
        with_cin = compute(compliant_answers, {1: "U72900KA2019PTC123456"})
        assert with_cin == compute(compliant_answers, {})


class TestSerialization:
    """Tests for the wire form of the result."""

    def test_to_dict_uses_camel_case(self, single_red_flag_answers):
        """Keys match the frontend contract."""
        data = compute(single_red_flag_answers).to_dict()
        assert set(data) == {
            "overallScore", "categoryScores", "strengths", "redFlags", "riskForecast",
        }
        assert data["categoryScores"][0]["status"] == "needs-attention"
        assert data["riskForecast"]["risks"][0] == {
            "type": "Legal Structure Risk",
            "penalty": "Personal liability exposure + ₹1-10 Lakhs penalty",
            "probability": "high",
        }
