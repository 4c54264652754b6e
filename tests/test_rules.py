"""
Health Check Test Suite - Scoring Rules
=======================================

Tests for the declarative rule tables.

Author: Health Check Team
Version: 1.0.0
"""

import pytest

from healthcheck.catalog.questions import NO, NOT_SURE, QUESTIONS, YES, QuestionType
from healthcheck.scoring.rules import (
    ANSWER_RULES,
    QUESTION_WEIGHTS,
    RISK_RULES,
    CategoryStatus,
    Probability,
    best_option,
    classify_status,
    least_favorable_option,
    option_rank,
)


class TestRuleTables:
    """Tests for rule table completeness and consistency."""

    def test_every_question_has_rules_and_weight(self):
        """Each catalog id has answer rules and a positive weight."""
        for question in QUESTIONS:
            assert question.id in ANSWER_RULES
            assert QUESTION_WEIGHTS[question.id] > 0

    def test_rule_options_match_catalog_options(self):
        """Rule keys are exactly the answer options."""
        for question in QUESTIONS:
            assert set(ANSWER_RULES[question.id]) == set(question.answer_options)

    def test_credit_within_unit_interval(self):
        """Credits are in [0, 1]."""
        for options in ANSWER_RULES.values():
            for rule in options.values():
                assert 0.0 <= rule.credit <= 1.0

    def test_not_sure_strictly_between_yes_and_no(self):
        """Not Sure is partial credit, never equal to Yes or No."""
        for question in QUESTIONS:
            if question.type != QuestionType.YESNO:
                continue
            rules = ANSWER_RULES[question.id]
            assert rules[NO].credit < rules[NOT_SURE].credit < rules[YES].credit

    def test_warning_questions_penalize_more(self):
        """A negative answer costs more on high-severity questions."""
        for question in QUESTIONS:
            if question.type != QuestionType.YESNO:
                continue
            no_credit = ANSWER_RULES[question.id][NO].credit
            if question.is_high_severity:
                assert no_credit == 0.0
            else:
                assert no_credit > 0.0

    def test_least_favorable_option_carries_forecast_on_severe_questions(self):
        """The worst answer to a warning question feeds the forecast."""
        for question in QUESTIONS:
            if not question.is_high_severity:
                continue
            rule = ANSWER_RULES[question.id][least_favorable_option(question.id)]
            assert rule.red_flag
            assert rule.forecast
            assert question.id in RISK_RULES

    def test_no_risk_rules_without_warning(self):
        """Questions without a warning never enter the forecast."""
        severe = {q.id for q in QUESTIONS if q.is_high_severity}
        assert set(RISK_RULES) == severe

    def test_not_sure_never_flags(self):
        """Uncertainty is scored, not flagged."""
        for options in ANSWER_RULES.values():
            if NOT_SURE in options:
                assert options[NOT_SURE].red_flag is None


class TestRuleLookups:
    """Tests for lookup helpers."""

    def test_best_and_worst_yesno(self):
        """Yes is best, No is worst."""
        assert best_option(1) == YES
        assert least_favorable_option(1) == NO

    def test_dropdown_ranking_patents(self):
        """Patent options rank by credit."""
        assert [o for o in sorted(ANSWER_RULES[8], key=lambda o: option_rank(8, o))] == [
            "Yes, filed patents",
            "Not applicable",
            "No unique products/technology",
            "No, but have unique products/technology",
        ]

    def test_dropdown_ranking_licenses(self):
        """Missing licenses is the least favourable license answer."""
        assert best_option(11) == "Yes, all required licenses"
        assert least_favorable_option(11) == "Some licenses missing"

    @pytest.mark.parametrize("score,status", [
        (100, CategoryStatus.EXCELLENT),
        (85, CategoryStatus.EXCELLENT),
        (84, CategoryStatus.GOOD),
        (70, CategoryStatus.GOOD),
        (69, CategoryStatus.NEEDS_ATTENTION),
        (50, CategoryStatus.NEEDS_ATTENTION),
        (49, CategoryStatus.CRITICAL),
        (0, CategoryStatus.CRITICAL),
    ])
    def test_classify_status(self, score, status):
        """Status thresholds."""
        assert classify_status(score) == status


class TestRiskRules:
    """Tests for penalty estimation."""

    def test_probability_ranks(self):
        """High outranks medium outranks low."""
        assert Probability.HIGH.rank > Probability.MEDIUM.rank > Probability.LOW.rank
        assert Probability.HIGH.value == "high"

    def test_per_director_penalty(self):
        """Director KYC penalty scales with count."""
        assert RISK_RULES[3].describe_penalty(3) == "₹5,000 per director (₹15,000 total)"

    def test_gst_month_penalty(self):
        """GST penalty mentions months."""
        assert RISK_RULES[5].describe_penalty(4) == (
            "₹200 per month (₹800 for 4 month(s)) + interest"
        )

    def test_itr_penalty_is_capped(self):
        """Income tax estimate is capped."""
        assert RISK_RULES[6].estimate_total(50) == 100000

    def test_fixed_penalty_ignores_count(self):
        """Fixed penalty text is unchanged by count."""
        assert RISK_RULES[7].describe_penalty(9) == "₹2-5 Lakhs + legal costs"
