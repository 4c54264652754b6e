"""
Compliance Report Generator
============================

Turn a ComplianceResult into a sectioned report for display or export.

The generator only formats: every score, flag and risk comes from the
ComplianceResult as computed by the scoring engine.

Author: Health Check Team
Version: 1.0.0
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Sequence

from healthcheck.recommendations.services import (
    PlanRecommendation,
    RemediationService,
)
from healthcheck.scoring.engine import ComplianceResult


@dataclass
class ReportSection:
    """A section of a compliance report."""
    title: str
    content: str
    items: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "content": self.content,
            "items": self.items,
        }


@dataclass
class ComplianceReport:
    """A complete compliance health report."""
    title: str
    company_name: str
    generated_at: datetime
    overall_score: int
    overall_label: str
    executive_summary: str
    sections: List[ReportSection]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "companyName": self.company_name,
            "generatedAt": self.generated_at.isoformat(),
            "overallScore": self.overall_score,
            "overallLabel": self.overall_label,
            "executiveSummary": self.executive_summary,
            "sections": [s.to_dict() for s in self.sections],
        }

    def to_markdown(self) -> str:
        """Generate markdown version of report."""
        lines = [
            f"# {self.title}",
            "",
            f"**Company:** {self.company_name}",
            f"**Report Date:** {self.generated_at.strftime('%B %d, %Y')}",
            f"**Overall Score:** {self.overall_score}/100 ({self.overall_label})",
            "",
            "## Executive Summary",
            "",
            self.executive_summary,
            "",
        ]

        for section in self.sections:
            lines.append(f"## {section.title}")
            lines.append("")
            if section.content:
                lines.append(section.content)
                lines.append("")
            for item in section.items:
                lines.append(f"- {item}")
            if section.items:
                lines.append("")

        return "\n".join(lines)


def overall_label(score: int) -> str:
    """Headline label for the overall score."""
    if score >= 80:
        return "EXCELLENT"
    if score >= 60:
        return "GOOD"
    return "NEEDS IMPROVEMENT"


class ReportGenerator:
    """
    Build compliance health reports.

    Example:
        generator = ReportGenerator()
        report = generator.generate(result, company_name="Acme Pvt Ltd")
        markdown = report.to_markdown()
    """

    def generate(
        self,
        result: ComplianceResult,
        company_name: Optional[str] = None,
        services: Sequence[RemediationService] = (),
        plan: Optional[PlanRecommendation] = None,
        generated_at: Optional[datetime] = None,
    ) -> ComplianceReport:
        """
        Generate a report from an engine result.

        Args:
            result: ComplianceResult from the scoring engine
            company_name: Display name; defaults to a placeholder
            services: Recommended remediation services
            plan: Recommended plan
            generated_at: Report timestamp (now if omitted)

        Returns:
            ComplianceReport
        """
        sections = [self._category_section(result)]

        if result.strengths:
            sections.append(ReportSection(
                title="Strengths",
                content="",
                items=list(result.strengths),
            ))

        sections.append(ReportSection(
            title="Red Flags",
            content="" if result.red_flags else "No red flags identified.",
            items=list(result.red_flags),
        ))

        sections.append(self._forecast_section(result))

        if services or plan:
            sections.append(self._recommendation_section(services, plan))

        return ComplianceReport(
            title="Compliance Health Report",
            company_name=company_name or "Your Company",
            generated_at=generated_at or datetime.now(timezone.utc),
            overall_score=result.overall_score,
            overall_label=overall_label(result.overall_score),
            executive_summary=self._executive_summary(result),
            sections=sections,
        )

    def _executive_summary(self, result: ComplianceResult) -> str:
        weakest = min(
            result.category_scores,
            key=lambda c: c.score,
            default=None,
        )
        summary = (
            f"Overall compliance score is {result.overall_score}/100 with "
            f"{len(result.strengths)} strengths and {len(result.red_flags)} red flags. "
        )
        if weakest is not None and weakest.score < 100:
            summary += (
                f"The weakest area is {weakest.category} "
                f"({weakest.score}/100): {weakest.insights}."
            )
        else:
            summary += "All compliance areas are fully covered."
        return summary

    def _category_section(self, result: ComplianceResult) -> ReportSection:
        return ReportSection(
            title="Category Breakdown",
            content="",
            items=[
                f"{c.category}: {c.score}/100 ({c.status.value}) - {c.insights}"
                for c in result.category_scores
            ],
        )

    def _forecast_section(self, result: ComplianceResult) -> ReportSection:
        forecast = result.risk_forecast
        return ReportSection(
            title=f"{forecast.period} Risk Forecast",
            content="" if forecast.risks else "No material risks forecast.",
            items=[
                f"{r.type} [{r.probability}]: {r.penalty}"
                for r in forecast.risks
            ],
        )

    def _recommendation_section(
        self,
        services: Sequence[RemediationService],
        plan: Optional[PlanRecommendation],
    ) -> ReportSection:
        content = ""
        if plan is not None:
            content = f"Recommended plan: {plan.title} ({plan.subtitle}). {plan.reason}"
        return ReportSection(
            title="Recommended Services",
            content=content,
            items=[
                f"{s.title} - ₹{s.discounted_price:,} (was ₹{s.original_price:,})"
                for s in services
            ],
        )
