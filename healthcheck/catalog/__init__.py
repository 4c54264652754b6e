"""
Question Catalog Package
========================

Static questionnaire definition.

Author: Health Check Team
Version: 1.0.0
"""

from .questions import (
    CATEGORY_ORDER,
    QUESTIONS,
    CatalogError,
    Category,
    FollowUp,
    FollowUpKind,
    InvalidAnswerSetError,
    Question,
    QuestionType,
    catalog_as_dicts,
    get_question,
    questions_in,
    validate_answer_keys,
)

__all__ = [
    "CATEGORY_ORDER",
    "QUESTIONS",
    "CatalogError",
    "Category",
    "FollowUp",
    "FollowUpKind",
    "InvalidAnswerSetError",
    "Question",
    "QuestionType",
    "catalog_as_dicts",
    "get_question",
    "questions_in",
    "validate_answer_keys",
]
