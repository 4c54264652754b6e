"""
Health Check Test Suite - Question Catalog
==========================================

Tests for the static questionnaire definition.

Author: Health Check Team
Version: 1.0.0
"""

import pytest

from healthcheck.catalog import (
    CATEGORY_ORDER,
    QUESTIONS,
    CatalogError,
    Category,
    FollowUpKind,
    InvalidAnswerSetError,
    QuestionType,
    catalog_as_dicts,
    get_question,
    questions_in,
    validate_answer_keys,
)
from healthcheck.catalog.questions import NO, YES, coerce_question_id


class TestCatalogShape:
    """Tests for the fixed catalog contents."""

    def test_fifteen_questions_with_sequential_ids(self):
        """Catalog has ids 1..15 in order."""
        assert [q.id for q in QUESTIONS] == list(range(1, 16))

    def test_five_categories_in_catalog_order(self):
        """Categories appear in the documented order."""
        assert [c.value for c in CATEGORY_ORDER] == [
            "Company & Legal Structure",
            "Taxation & GST",
            "Intellectual Property (IP)",
            "Certifications & Industry Licenses",
            "Financial Health & Risk",
        ]

    def test_every_category_has_questions(self):
        """No empty category."""
        for category in Category:
            assert questions_in(category)

    def test_dropdowns_have_options_and_yesno_do_not(self):
        """Options are present only for dropdown questions."""
        for question in QUESTIONS:
            if question.type == QuestionType.DROPDOWN:
                assert len(question.options) >= 2
            else:
                assert question.options == ()

    def test_high_severity_questions(self):
        """Questions with a warning are the high-severity set."""
        severe = {q.id for q in QUESTIONS if q.is_high_severity}
        assert severe == {1, 2, 3, 4, 5, 6, 7, 8, 10, 11, 12, 13}

    def test_follow_up_kinds(self):
        """Follow-ups carry an explicit kind tag."""
        kinds = {q.id: q.follow_up.kind for q in QUESTIONS if q.follow_up}
        assert kinds == {
            1: FollowUpKind.CIN,
            3: FollowUpKind.DIRECTOR_COUNT,
            4: FollowUpKind.GSTIN,
            5: FollowUpKind.MISSED_MONTHS,
            6: FollowUpKind.MISSED_YEARS,
        }

    def test_follow_up_condition(self):
        """Follow-up applies only to its trigger answer."""
        assert get_question(1).follow_up_applies(YES)
        assert not get_question(1).follow_up_applies(NO)
        assert get_question(5).follow_up_applies(NO)
        assert not get_question(9).follow_up_applies(YES)


class TestCatalogLookup:
    """Tests for lookup helpers."""

    def test_get_question(self):
        """Strict lookup returns the entry."""
        assert get_question(7).category == Category.INTELLECTUAL_PROPERTY

    def test_get_unknown_question_raises(self):
        """Unknown ids raise CatalogError."""
        with pytest.raises(CatalogError):
            get_question(99)

    @pytest.mark.parametrize("key,expected", [
        (1, 1),
        ("15", 15),
        (" 3 ", 3),
        ("16", None),
        (0, None),
        ("abc", None),
        (None, None),
    ])
    def test_coerce_question_id(self, key, expected):
        """Keys coerce to catalog ids or None."""
        assert coerce_question_id(key) == expected

    def test_validate_answer_keys_accepts_catalog_ids(self):
        """Numeric string keys are valid."""
        validate_answer_keys({"1": YES, 2: NO})

    def test_validate_answer_keys_rejects_unknown(self):
        """Unknown keys are reported."""
        with pytest.raises(InvalidAnswerSetError) as exc:
            validate_answer_keys({"1": YES, "42": NO, "x": YES})
        assert exc.value.unknown_ids == ["42", "x"]


class TestCatalogSerialization:
    """Tests for the serialized catalog."""

    def test_catalog_as_dicts(self):
        """Serialized entries carry no presentation fields."""
        data = catalog_as_dicts()
        assert len(data) == 15
        first = data[0]
        assert first["question"]
        assert first["followUp"]["kind"] == "cin"
        assert "icon" not in first

    def test_dropdown_serialization_includes_options(self):
        """Dropdown options serialize in catalog order."""
        data = get_question(8).to_dict()
        assert data["type"] == "dropdown"
        assert data["options"][0] == "Yes, filed patents"
