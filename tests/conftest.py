"""
pytest configuration and fixtures.

Author: Health Check Team
Version: 1.0.0
"""

import pytest

from healthcheck.catalog.questions import NO, QUESTIONS, YES, QuestionType
from healthcheck.scoring.rules import best_option, least_favorable_option


@pytest.fixture
def compliant_answers():
    """Every question answered with its most compliant option."""
    return {q.id: best_option(q.id) for q in QUESTIONS}


@pytest.fixture
def noncompliant_answers():
    """Every yes/no answered "No", every dropdown its least favourable option."""
    return {
        q.id: NO if q.type == QuestionType.YESNO else least_favorable_option(q.id)
        for q in QUESTIONS
    }


@pytest.fixture
def minimal_follow_ups():
    """Smallest valid follow-up values for every count follow-up."""
    return {3: "1", 5: "1", 6: "1"}


@pytest.fixture
def compliant_follow_ups():
    return {1: "U72900KA2019PTC123456", 4: "29ABCDE1234F1Z5"}


@pytest.fixture
def single_red_flag_answers(compliant_answers):
    """Not incorporated, everything else maximally compliant."""
    answers = dict(compliant_answers)
    answers[1] = NO
    return answers


@pytest.fixture
def yes_everywhere():
    return {q.id: YES for q in QUESTIONS if q.type == QuestionType.YESNO}
