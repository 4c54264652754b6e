"""
Health Check Results Store
==========================

PostgreSQL-backed persistence of scored health checks with in-memory fallback.

Tracks each user's assessments for:
    - Latest result and paginated history
    - Aggregate statistics and trend
    - Score improvement between consecutive assessments

The store receives a finished ComplianceResult; it never scores.

Author: Health Check Team
Version: 1.0.0
"""

import logging
import math
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import async_sessionmaker

from healthcheck.db.base import generate_uuid
from healthcheck.db.models import HealthCheckDB
from healthcheck.scoring.engine import ComplianceResult

logger = logging.getLogger(__name__)


RISK_LEVEL_THRESHOLDS: Tuple[Tuple[int, str], ...] = (
    (80, "low"),
    (60, "medium"),
    (40, "high"),
)
RISK_LEVELS = ("low", "medium", "high", "critical")


class StorageError(Exception):
    """Persistence backend failed."""


def risk_level(score: int) -> str:
    """Map an overall score to a risk level."""
    for threshold, level in RISK_LEVEL_THRESHOLDS:
        if score >= threshold:
            return level
    return "critical"


def _stringify_keys(mapping: Optional[Mapping[Any, Any]]) -> Dict[str, Any]:
    return {str(k): v for k, v in (mapping or {}).items()}


@dataclass
class HealthCheckRecord:
    """A saved health check."""
    user_id: str
    score: int
    answers: Dict[str, Any] = field(default_factory=dict)
    follow_up_answers: Dict[str, Any] = field(default_factory=dict)
    category_scores: List[Dict[str, Any]] = field(default_factory=list)
    strengths: List[str] = field(default_factory=list)
    red_flags: List[str] = field(default_factory=list)
    risks: List[Dict[str, Any]] = field(default_factory=list)
    recommendations: List[str] = field(default_factory=list)
    status: str = "completed"
    id: str = field(default_factory=generate_uuid)
    assessment_date: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def risk_level(self) -> str:
        return risk_level(self.score)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "userId": self.user_id,
            "assessmentDate": self.assessment_date.isoformat(),
            "score": self.score,
            "riskLevel": self.risk_level,
            "answers": self.answers,
            "followUpAnswers": self.follow_up_answers,
            "categoryScores": self.category_scores,
            "strengths": self.strengths,
            "redFlags": self.red_flags,
            "risks": self.risks,
            "recommendations": self.recommendations,
            "status": self.status,
        }

    @classmethod
    def from_result(
        cls,
        user_id: str,
        answers: Optional[Mapping[Any, Any]],
        follow_up_answers: Optional[Mapping[Any, Any]],
        result: ComplianceResult,
        recommendations: Sequence[str] = (),
        assessment_date: Optional[datetime] = None,
    ) -> "HealthCheckRecord":
        record = cls(
            user_id=user_id,
            score=result.overall_score,
            answers=_stringify_keys(answers),
            follow_up_answers=_stringify_keys(follow_up_answers),
            category_scores=[c.to_dict() for c in result.category_scores],
            strengths=list(result.strengths),
            red_flags=list(result.red_flags),
            risks=[r.to_dict() for r in result.risk_forecast.risks],
            recommendations=list(recommendations),
        )
        if assessment_date is not None:
            record.assessment_date = assessment_date
        return record

    @classmethod
    def from_row(cls, row: HealthCheckDB) -> "HealthCheckRecord":
        return cls(
            id=row.id,
            user_id=row.user_id,
            assessment_date=row.assessment_date,
            score=row.score,
            answers=dict(row.answers or {}),
            follow_up_answers=dict(row.follow_up_answers or {}),
            category_scores=list(row.category_scores or []),
            strengths=list(row.strengths or []),
            red_flags=list(row.red_flags or []),
            risks=list(row.risks or []),
            recommendations=list(row.recommendations or []),
            status=row.status,
        )

    def to_row(self) -> HealthCheckDB:
        return HealthCheckDB(
            id=self.id,
            user_id=self.user_id,
            assessment_date=self.assessment_date,
            score=self.score,
            answers=self.answers,
            follow_up_answers=self.follow_up_answers,
            category_scores=self.category_scores,
            strengths=self.strengths,
            red_flags=self.red_flags,
            risks=self.risks,
            recommendations=self.recommendations,
            status=self.status,
        )


class HealthCheckStore:
    """
    Persistent health check results with PostgreSQL backend.

    Falls back to in-memory storage when no session factory is given.

    Usage:
        store = HealthCheckStore(session_factory=get_session_factory())
        record = await store.save("user-1", answers, follow_ups, result, ["bookkeeping"])
        history, total = await store.history("user-1", limit=10, page=1)
    """

    def __init__(self, session_factory: Optional[async_sessionmaker] = None):
        self._session_factory = session_factory
        # In-memory fallback: {user_id -> [HealthCheckRecord]} in insertion order
        self._memory: Dict[str, List[HealthCheckRecord]] = defaultdict(list)

    @property
    def mode(self) -> str:
        return "postgres" if self._session_factory is not None else "memory"

    # =========================================================================
    # Write
    # =========================================================================

    async def save(
        self,
        user_id: str,
        answers: Optional[Mapping[Any, Any]],
        follow_up_answers: Optional[Mapping[Any, Any]],
        result: ComplianceResult,
        recommendations: Sequence[str] = (),
        assessment_date: Optional[datetime] = None,
    ) -> HealthCheckRecord:
        """Persist a scored health check for a user."""
        record = HealthCheckRecord.from_result(
            user_id,
            answers,
            follow_up_answers,
            result,
            recommendations,
            assessment_date,
        )

        if self._session_factory is not None:
            await self._sql_insert(record)
        else:
            self._memory[user_id].append(record)

        logger.info(
            "Saved health check %s for user %s (score=%d)",
            record.id, user_id, record.score,
        )
        return record

    async def _sql_insert(self, record: HealthCheckRecord) -> None:
        try:
            async with self._session_factory() as session:
                session.add(record.to_row())
                await session.commit()
        except SQLAlchemyError as e:
            logger.error(f"Failed to save health check for {record.user_id}: {e}")
            raise StorageError("Failed to save health check") from e

    # =========================================================================
    # Read
    # =========================================================================

    async def get(self, record_id: str, user_id: str) -> Optional[HealthCheckRecord]:
        """A single assessment, only if it belongs to the user."""
        if self._session_factory is None:
            for record in self._memory.get(user_id, []):
                if record.id == record_id:
                    return record
            return None

        try:
            async with self._session_factory() as session:
                row = await session.scalar(
                    select(HealthCheckDB).where(
                        HealthCheckDB.id == record_id,
                        HealthCheckDB.user_id == user_id,
                    )
                )
                return HealthCheckRecord.from_row(row) if row is not None else None
        except SQLAlchemyError as e:
            logger.error(f"Failed to load health check {record_id}: {e}")
            raise StorageError("Failed to load health check") from e

    async def latest(self, user_id: str) -> Optional[HealthCheckRecord]:
        """Most recent assessment for a user, or None."""
        records, _ = await self.history(user_id, limit=1, page=1)
        return records[0] if records else None

    async def history(
        self,
        user_id: str,
        limit: int = 10,
        page: int = 1,
    ) -> Tuple[List[HealthCheckRecord], int]:
        """
        Page through a user's assessments, most recent first.

        Returns:
            (records on the page, total record count)
        """
        limit = max(1, limit)
        offset = (max(1, page) - 1) * limit

        if self._session_factory is not None:
            return await self._sql_history(user_id, limit, offset)

        ordered = self._memory_ordered(user_id)
        return ordered[offset:offset + limit], len(ordered)

    def _memory_ordered(self, user_id: str) -> List[HealthCheckRecord]:
        # Newest first; among equal timestamps the later save wins
        return sorted(
            reversed(self._memory.get(user_id, [])),
            key=lambda r: r.assessment_date,
            reverse=True,
        )

    async def _sql_history(
        self, user_id: str, limit: int, offset: int
    ) -> Tuple[List[HealthCheckRecord], int]:
        try:
            async with self._session_factory() as session:
                total = await session.scalar(
                    select(func.count())
                    .select_from(HealthCheckDB)
                    .where(HealthCheckDB.user_id == user_id)
                )
                rows = await session.scalars(
                    select(HealthCheckDB)
                    .where(HealthCheckDB.user_id == user_id)
                    .order_by(
                        HealthCheckDB.assessment_date.desc(),
                        HealthCheckDB.created_at.desc(),
                    )
                    .limit(limit)
                    .offset(offset)
                )
                return [HealthCheckRecord.from_row(r) for r in rows], int(total or 0)
        except SQLAlchemyError as e:
            logger.error(f"Failed to load history for {user_id}: {e}")
            raise StorageError("Failed to load health check history") from e

    async def _all_chronological(self, user_id: str) -> List[HealthCheckRecord]:
        if self._session_factory is None:
            return list(reversed(self._memory_ordered(user_id)))

        try:
            async with self._session_factory() as session:
                rows = await session.scalars(
                    select(HealthCheckDB)
                    .where(HealthCheckDB.user_id == user_id)
                    .order_by(
                        HealthCheckDB.assessment_date.asc(),
                        HealthCheckDB.created_at.asc(),
                    )
                )
                return [HealthCheckRecord.from_row(r) for r in rows]
        except SQLAlchemyError as e:
            logger.error(f"Failed to load assessments for {user_id}: {e}")
            raise StorageError("Failed to load health checks") from e

    # =========================================================================
    # Analytics
    # =========================================================================

    async def stats(self, user_id: str) -> Dict[str, Any]:
        """
        Aggregate statistics across a user's assessments.

        Returns:
            dict with keys: total_assessments, average_score, highest_score,
            lowest_score, last_assessment, trend, risk_distribution
        """
        records = await self._all_chronological(user_id)
        distribution = {level: 0 for level in RISK_LEVELS}

        if not records:
            return {
                "total_assessments": 0,
                "average_score": 0,
                "highest_score": 0,
                "lowest_score": 0,
                "last_assessment": None,
                "trend": "no-data",
                "risk_distribution": distribution,
            }

        scores = [r.score for r in records]
        for score in scores:
            distribution[risk_level(score)] += 1

        trend = "stable"
        if len(scores) >= 2:
            if scores[-1] > scores[-2]:
                trend = "improving"
            elif scores[-1] < scores[-2]:
                trend = "declining"

        return {
            "total_assessments": len(scores),
            "average_score": round(sum(scores) / len(scores), 2),
            "highest_score": max(scores),
            "lowest_score": min(scores),
            "last_assessment": records[-1].assessment_date,
            "trend": trend,
            "risk_distribution": distribution,
        }

    async def improvement(self, record: HealthCheckRecord) -> Optional[Dict[str, Any]]:
        """Score change against the assessment immediately before this one."""
        chronological = await self._all_chronological(record.user_id)
        ids = [r.id for r in chronological]
        if record.id in ids:
            earlier = chronological[:ids.index(record.id)]
        else:
            earlier = [r for r in chronological if r.assessment_date < record.assessment_date]
        if not earlier:
            return None

        previous = earlier[-1]
        elapsed = record.assessment_date - previous.assessment_date
        return {
            "score_change": record.score - previous.score,
            "previous_score": previous.score,
            "current_score": record.score,
            "days_between": math.ceil(elapsed.total_seconds() / 86400),
        }
