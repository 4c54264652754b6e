"""
Health Check Test Suite - Recommendations
=========================================

Tests for remediation service and plan recommendations.

Author: Health Check Team
Version: 1.0.0
"""

import pytest

from healthcheck.catalog.questions import NO, NOT_SURE, YES
from healthcheck.recommendations import (
    MAX_RECOMMENDED_SERVICES,
    SERVICES,
    ServicePriority,
    recommend_plan,
    recommend_services,
)


def _ids(services):
    return [s.id for s in services]


class TestRecommendServices:
    """Tests for recommend_services."""

    def test_compliant_answers_need_nothing(self, compliant_answers):
        """No "No" answers, no services."""
        assert recommend_services(compliant_answers) == []

    def test_rule_order(self, compliant_answers):
        """Services follow the rule table order, not answer order."""
        answers = dict(compliant_answers)
        for question_id in (15, 12, 10, 1):
            answers[question_id] = NO
        assert _ids(recommend_services(answers)) == [
            "business_registration",
            "iso_certification",
            "bookkeeping",
            "compliance_officer",
        ]

    def test_gst_service_deduplicated(self, compliant_answers):
        """Two GST gaps recommend GST compliance once."""
        answers = dict(compliant_answers)
        answers[4] = NO
        answers[5] = NO
        assert _ids(recommend_services(answers)) == ["gst_compliance"]

    def test_not_sure_does_not_trigger(self, compliant_answers):
        """Only a "No" recommends a service."""
        answers = dict(compliant_answers)
        answers[7] = NOT_SURE
        assert recommend_services(answers) == []

    def test_missing_answers_resolve_to_no(self):
        """Unanswered designated questions count as "No"."""
        assert _ids(recommend_services({})) == [
            "business_registration",
            "trademark_registration",
            "iso_certification",
            "gst_compliance",
            "bookkeeping",
            "compliance_officer",
        ]

    def test_capped_at_six(self, noncompliant_answers):
        """Never more than six services."""
        assert len(recommend_services(noncompliant_answers)) <= MAX_RECOMMENDED_SERVICES

    def test_custom_limit(self):
        """A smaller limit truncates in order."""
        assert _ids(recommend_services({}, limit=2)) == [
            "business_registration",
            "trademark_registration",
        ]

    def test_case_insensitive(self, compliant_answers):
        """Lower-case "no" still triggers."""
        answers = dict(compliant_answers)
        answers[1] = "no"
        assert _ids(recommend_services(answers)) == ["business_registration"]

    def test_service_serialization(self):
        """Services serialize with camelCase prices."""
        data = SERVICES["trademark_registration"].to_dict()
        assert data["originalPrice"] == 12999
        assert data["discountedPrice"] == 5999
        assert data["priority"] == "high"


class TestRecommendPlan:
    """Tests for recommend_plan."""

    def test_low_score_is_urgent(self):
        """Scores under 50 need the elite plan urgently."""
        plan = recommend_plan(40, [])
        assert plan.plan == "elite"
        assert plan.urgency == "high"

    def test_many_critical_services_is_urgent(self):
        """Three high-priority gaps are urgent regardless of score."""
        services = [s for s in SERVICES.values() if s.priority == ServicePriority.HIGH]
        assert len(services) == 3
        assert recommend_plan(90, services).urgency == "high"

    def test_medium_urgency(self):
        """A mid score or a single critical gap is medium urgency."""
        assert recommend_plan(70, []).urgency == "medium"
        plan = recommend_plan(95, [SERVICES["gst_compliance"]])
        assert plan.plan == "elite"
        assert plan.urgency == "medium"

    def test_essentials(self):
        """A strong score with no critical gaps gets essentials."""
        plan = recommend_plan(80, [SERVICES["bookkeeping"]])
        assert plan.plan == "essentials"
        assert plan.urgency == "low"

    @pytest.mark.parametrize("score,urgency", [(49, "high"), (50, "medium"), (74, "medium"), (75, "low")])
    def test_score_thresholds(self, score, urgency):
        """Boundary scores."""
        assert recommend_plan(score, []).urgency == urgency
