"""
Remediation Service Recommendations
===================================

Maps non-compliant answers to remediation services and picks a plan.

Derived from the same answer set as the score but independent of it:
a fixed rule table links designated questions to a service.

Author: Health Check Team
Version: 1.0.0
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from healthcheck.catalog.questions import NO, get_question
from healthcheck.scoring.engine import normalize_answers, resolve_option
from healthcheck.scoring.rules import least_favorable_option


MAX_RECOMMENDED_SERVICES = 6


class ServicePriority(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"


@dataclass(frozen=True)
class RemediationService:
    """A purchasable remediation service."""
    id: str
    title: str
    description: str
    original_price: int
    discounted_price: int
    features: Tuple[str, ...]
    priority: ServicePriority

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "originalPrice": self.original_price,
            "discountedPrice": self.discounted_price,
            "features": list(self.features),
            "priority": self.priority.value,
        }


SERVICES: Dict[str, RemediationService] = {
    s.id: s for s in (
        RemediationService(
            id="business_registration",
            title="Business Registration",
            description="Complete incorporation package with all legal documentation",
            original_price=17999,
            discounted_price=11999,
            features=("Company Incorporation", "PAN & TAN Registration",
                      "Bank Account Opening", "Digital Signature"),
            priority=ServicePriority.HIGH,
        ),
        RemediationService(
            id="trademark_registration",
            title="Trademark Registration",
            description="Protect your brand identity with comprehensive trademark services",
            original_price=12999,
            discounted_price=5999,
            features=("Trademark Search", "Application Filing",
                      "Response to Objections", "Registration Certificate"),
            priority=ServicePriority.HIGH,
        ),
        RemediationService(
            id="iso_certification",
            title="ISO Certification",
            description="Quality management standards certification for business credibility",
            original_price=15999,
            discounted_price=5999,
            features=("Gap Analysis", "Documentation", "Internal Audit",
                      "Certification Support"),
            priority=ServicePriority.MEDIUM,
        ),
        RemediationService(
            id="gst_compliance",
            title="GST Registration & Compliance",
            description="Complete GST registration and ongoing compliance management",
            original_price=8999,
            discounted_price=4999,
            features=("GST Registration", "Monthly Returns Filing",
                      "Input Tax Credit", "Compliance Support"),
            priority=ServicePriority.HIGH,
        ),
        RemediationService(
            id="bookkeeping",
            title="Bookkeeping & Accounting",
            description="Professional bookkeeping and financial record maintenance",
            original_price=12999,
            discounted_price=7999,
            features=("Monthly Bookkeeping", "Financial Statements",
                      "Tax Preparation", "Audit Support"),
            priority=ServicePriority.MEDIUM,
        ),
        RemediationService(
            id="compliance_officer",
            title="Compliance Officer Service",
            description="Dedicated compliance officer for ongoing regulatory management",
            original_price=25999,
            discounted_price=15999,
            features=("Monthly Compliance Review", "Regulatory Updates",
                      "Risk Assessment", "Legal Advisory"),
            priority=ServicePriority.MEDIUM,
        ),
    )
}


# (question id, service id) in recommendation order. A "No" answer, or an
# answer that resolves to "No" as least favourable, triggers the service.
RECOMMENDATION_RULES: Tuple[Tuple[int, str], ...] = (
    (1, "business_registration"),
    (7, "trademark_registration"),
    (10, "iso_certification"),
    (4, "gst_compliance"),
    (5, "gst_compliance"),
    (12, "bookkeeping"),
    (15, "compliance_officer"),
)


def recommend_services(
    answers: Optional[Mapping[Any, Any]],
    limit: int = MAX_RECOMMENDED_SERVICES,
) -> List[RemediationService]:
    """
    Ordered, de-duplicated remediation services for an answer set.

    Args:
        answers: question id -> answer value
        limit: maximum number of services (capped at 6)

    Returns:
        List of RemediationService
    """
    limit = max(0, min(limit, MAX_RECOMMENDED_SERVICES))
    main = normalize_answers(answers)

    recommended: List[RemediationService] = []
    seen = set()
    for question_id, service_id in RECOMMENDATION_RULES:
        if service_id in seen:
            continue
        option = resolve_option(get_question(question_id), main.get(question_id))
        if option is None:
            option = least_favorable_option(question_id)
        if option != NO:
            continue
        seen.add(service_id)
        recommended.append(SERVICES[service_id])

    return recommended[:limit]


@dataclass(frozen=True)
class PlanRecommendation:
    plan: str
    title: str
    subtitle: str
    reason: str
    urgency: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "plan": self.plan,
            "title": self.title,
            "subtitle": self.subtitle,
            "reason": self.reason,
            "urgency": self.urgency,
        }


def recommend_plan(
    overall_score: int,
    services: Sequence[RemediationService],
) -> PlanRecommendation:
    """Pick a subscription plan from the score and critical service count."""
    critical = sum(1 for s in services if s.priority == ServicePriority.HIGH)

    if overall_score < 50 or critical >= 3:
        return PlanRecommendation(
            plan="elite",
            title="Elite",
            subtitle="RECOMMENDED FOR YOU",
            reason=(
                "Your compliance score indicates significant gaps that require "
                "expert guidance and ongoing monitoring."
            ),
            urgency="high",
        )
    if overall_score < 75 or critical >= 1:
        return PlanRecommendation(
            plan="elite",
            title="Elite",
            subtitle="RECOMMENDED",
            reason=(
                "Your assessment shows areas for improvement that would benefit "
                "from professional compliance management."
            ),
            urgency="medium",
        )
    return PlanRecommendation(
        plan="essentials",
        title="Essentials",
        subtitle="GOOD START",
        reason=(
            "Your compliance foundation is solid. The free plan will help you "
            "maintain and monitor your status."
        ),
        urgency="low",
    )
