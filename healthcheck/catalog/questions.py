"""
Question Catalog
================

The fixed 15-question compliance health-check questionnaire.

The catalog is pure data: no presentation concerns (icons, colours) are
embedded here. Renderers look those up by category name.

Author: Health Check Team
Version: 1.0.0
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Tuple


class Category(str, Enum):
    """The five compliance domains, in catalog order."""
    LEGAL_STRUCTURE = "Company & Legal Structure"
    TAXATION = "Taxation & GST"
    INTELLECTUAL_PROPERTY = "Intellectual Property (IP)"
    CERTIFICATIONS = "Certifications & Industry Licenses"
    FINANCIAL_HEALTH = "Financial Health & Risk"


class QuestionType(str, Enum):
    """Answer widget / value type."""
    YESNO = "yesno"
    DROPDOWN = "dropdown"
    TEXT = "text"
    NUMBER = "number"


class FollowUpKind(str, Enum):
    """
    What a follow-up answer means to downstream logic.

    Replaces matching on the follow-up prompt text.
    """
    CIN = "cin"
    GSTIN = "gstin"
    DIRECTOR_COUNT = "director_count"
    MISSED_MONTHS = "missed_months"
    MISSED_YEARS = "missed_years"


YES = "Yes"
NO = "No"
NOT_SURE = "Not Sure"
YESNO_OPTIONS: Tuple[str, ...] = (YES, NO, NOT_SURE)


class CatalogError(KeyError):
    """Raised when a question id is not part of the catalog."""
    pass


class InvalidAnswerSetError(ValueError):
    """Raised when an answer set references ids outside the catalog."""

    def __init__(self, unknown_ids: List[Any]):
        self.unknown_ids = unknown_ids
        super().__init__(f"Unknown question ids: {unknown_ids}")


@dataclass(frozen=True)
class FollowUp:
    """A secondary prompt shown when the parent answer equals `condition`."""
    condition: str
    prompt: str
    kind: FollowUpKind
    type: QuestionType = QuestionType.TEXT

    def to_dict(self) -> Dict[str, Any]:
        return {
            "condition": self.condition,
            "prompt": self.prompt,
            "kind": self.kind.value,
            "type": self.type.value,
        }


@dataclass(frozen=True)
class Question:
    """A single catalog entry."""
    id: int
    category: Category
    text: str
    type: QuestionType
    options: Tuple[str, ...] = ()
    warning: Optional[str] = None
    follow_up: Optional[FollowUp] = None

    @property
    def answer_options(self) -> Tuple[str, ...]:
        """Valid main answers for this question."""
        if self.type == QuestionType.YESNO:
            return YESNO_OPTIONS
        return self.options

    @property
    def is_high_severity(self) -> bool:
        return bool(self.warning)

    def follow_up_applies(self, answer: Optional[str]) -> bool:
        """Whether the follow-up is active for the given main answer."""
        return self.follow_up is not None and answer == self.follow_up.condition

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "id": self.id,
            "category": self.category.value,
            "question": self.text,
            "type": self.type.value,
        }
        if self.type == QuestionType.DROPDOWN:
            data["options"] = list(self.options)
        if self.warning:
            data["warning"] = self.warning
        if self.follow_up:
            data["followUp"] = self.follow_up.to_dict()
        return data


QUESTIONS: Tuple[Question, ...] = (
    # =========================================================================
    # Company & Legal Structure
    # =========================================================================
    Question(
        id=1,
        category=Category.LEGAL_STRUCTURE,
        text="Is your company legally incorporated (Private Limited, LLP or OPC)?",
        type=QuestionType.YESNO,
        warning=(
            "Operating without incorporation leaves founders personally "
            "liable for business debts and penalties."
        ),
        follow_up=FollowUp(
            condition=YES,
            prompt="Please enter your Corporate Identification Number (CIN)",
            kind=FollowUpKind.CIN,
        ),
    ),
    Question(
        id=2,
        category=Category.LEGAL_STRUCTURE,
        text="Have you filed your MCA annual returns (AOC-4 and MGT-7) for the last financial year?",
        type=QuestionType.YESNO,
        warning=(
            "Unfiled annual returns attract daily late fees and can lead "
            "to the company being struck off."
        ),
    ),
    Question(
        id=3,
        category=Category.LEGAL_STRUCTURE,
        text="Have all directors completed their DIN KYC (DIR-3 KYC) for this year?",
        type=QuestionType.YESNO,
        warning="Directors with pending KYC have their DIN deactivated and face a fixed penalty.",
        follow_up=FollowUp(
            condition=NO,
            prompt="How many directors have pending KYC?",
            kind=FollowUpKind.DIRECTOR_COUNT,
            type=QuestionType.NUMBER,
        ),
    ),
    # =========================================================================
    # Taxation & GST
    # =========================================================================
    Question(
        id=4,
        category=Category.TAXATION,
        text="Is your business registered under GST?",
        type=QuestionType.YESNO,
        warning="Trading above the threshold without GST registration attracts tax plus penalty.",
        follow_up=FollowUp(
            condition=YES,
            prompt="Please enter your GSTIN",
            kind=FollowUpKind.GSTIN,
        ),
    ),
    Question(
        id=5,
        category=Category.TAXATION,
        text="Are your GST returns (GSTR-1 and GSTR-3B) filed on time every month?",
        type=QuestionType.YESNO,
        warning="Late GST returns accrue late fees per return plus interest on tax due.",
        follow_up=FollowUp(
            condition=NO,
            prompt="For how many months are GST returns pending?",
            kind=FollowUpKind.MISSED_MONTHS,
            type=QuestionType.NUMBER,
        ),
    ),
    Question(
        id=6,
        category=Category.TAXATION,
        text="Have you filed Income Tax Returns for all previous financial years?",
        type=QuestionType.YESNO,
        warning="Unfiled income tax returns lead to penalties and loss of carried-forward losses.",
        follow_up=FollowUp(
            condition=NO,
            prompt="For how many years are ITRs pending?",
            kind=FollowUpKind.MISSED_YEARS,
            type=QuestionType.NUMBER,
        ),
    ),
    # =========================================================================
    # Intellectual Property
    # =========================================================================
    Question(
        id=7,
        category=Category.INTELLECTUAL_PROPERTY,
        text="Have you filed a trademark application for your brand name or logo?",
        type=QuestionType.YESNO,
        warning="An unregistered brand can be claimed by a competitor or infringer.",
    ),
    Question(
        id=8,
        category=Category.INTELLECTUAL_PROPERTY,
        text="Have you filed patents for your products or technology?",
        type=QuestionType.DROPDOWN,
        options=(
            "Yes, filed patents",
            "No, but have unique products/technology",
            "No unique products/technology",
            "Not applicable",
        ),
        warning="Unprotected unique technology can be copied without recourse.",
    ),
    Question(
        id=9,
        category=Category.INTELLECTUAL_PROPERTY,
        text="Have you registered copyrights for your software, content or creative works?",
        type=QuestionType.YESNO,
    ),
    # =========================================================================
    # Certifications & Industry Licenses
    # =========================================================================
    Question(
        id=10,
        category=Category.CERTIFICATIONS,
        text="Does your company hold an ISO certification relevant to your operations?",
        type=QuestionType.YESNO,
        warning="Many enterprise and government buyers require ISO certification from vendors.",
    ),
    Question(
        id=11,
        category=Category.CERTIFICATIONS,
        text="Do you hold all industry-specific licenses required for your business?",
        type=QuestionType.DROPDOWN,
        options=(
            "Yes, all required licenses",
            "Some licenses missing",
            "Not sure what licenses needed",
            "No special licenses required",
        ),
        warning="Operating without mandatory licenses can result in fines and forced closure.",
    ),
    # =========================================================================
    # Financial Health & Risk
    # =========================================================================
    Question(
        id=12,
        category=Category.FINANCIAL_HEALTH,
        text="Do you maintain proper books of accounts as required by law?",
        type=QuestionType.YESNO,
        warning="Improper books of accounts attract penalties and fail statutory audit.",
    ),
    Question(
        id=13,
        category=Category.FINANCIAL_HEALTH,
        text="Are all your statutory dues, vendor payments and loan repayments current (nothing overdue)?",
        type=QuestionType.YESNO,
        warning="Overdue liabilities damage credit standing and invite recovery action.",
    ),
    Question(
        id=14,
        category=Category.FINANCIAL_HEALTH,
        text="Do you have a tax planning strategy in place for the current year?",
        type=QuestionType.YESNO,
    ),
    Question(
        id=15,
        category=Category.FINANCIAL_HEALTH,
        text="Do you have a compliance officer or external firm monitoring your filings?",
        type=QuestionType.YESNO,
    ),
)


_BY_ID: Dict[int, Question] = {q.id: q for q in QUESTIONS}

CATEGORY_ORDER: Tuple[Category, ...] = tuple(
    dict.fromkeys(q.category for q in QUESTIONS)
)


def get_question(question_id: int) -> Question:
    """Strict lookup by id."""
    try:
        return _BY_ID[question_id]
    except KeyError:
        raise CatalogError(question_id) from None


def questions_in(category: Category) -> List[Question]:
    """Questions of a category, in id order."""
    return [q for q in QUESTIONS if q.category == category]


def category_rank(category: Category) -> int:
    """Position of a category in catalog order."""
    return CATEGORY_ORDER.index(category)


def coerce_question_id(key: Any) -> Optional[int]:
    """
    Map an answer-set key (int or numeric string) to a catalog id.

    Returns None for keys that are not catalog ids.
    """
    try:
        question_id = int(str(key).strip())
    except (TypeError, ValueError):
        return None
    return question_id if question_id in _BY_ID else None


def validate_answer_keys(answers: Mapping[Any, Any]) -> None:
    """Raise InvalidAnswerSetError if any key is not a catalog id."""
    unknown = [key for key in answers if coerce_question_id(key) is None]
    if unknown:
        raise InvalidAnswerSetError(unknown)


def catalog_as_dicts() -> List[Dict[str, Any]]:
    """Serializable form of the catalog."""
    return [q.to_dict() for q in QUESTIONS]
