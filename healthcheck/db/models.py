"""
Health Check ORM Models
=======================

Author: Health Check Team
Version: 1.0.0
"""

from datetime import datetime
from typing import Any, Dict, List

from sqlalchemy import JSON, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from healthcheck.db.base import Base, TimestampMixin, generate_uuid, utc_now


class HealthCheckDB(TimestampMixin, Base):
    """A completed, scored health check for one user."""

    __tablename__ = "health_checks"
    __table_args__ = (
        Index("ix_health_checks_user_date", "user_id", "assessment_date"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)
    user_id: Mapped[str] = mapped_column(String(255), nullable=False)
    assessment_date: Mapped[datetime] = mapped_column(default=utc_now, nullable=False)
    answers: Mapped[Dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)
    follow_up_answers: Mapped[Dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)
    score: Mapped[int] = mapped_column(Integer, nullable=False)
    category_scores: Mapped[List[Dict[str, Any]]] = mapped_column(JSON, nullable=False, default=list)
    strengths: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)
    red_flags: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)
    risks: Mapped[List[Dict[str, Any]]] = mapped_column(JSON, nullable=False, default=list)
    recommendations: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="completed")
