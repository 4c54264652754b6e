"""
Shareable Report Store
======================

Public, expiring links to a snapshot of a saved health check.

A link is addressed by company slug plus a random 64-hex token. Snapshots
are copied at creation, so later assessments never change a shared report.

Author: Health Check Team
Version: 1.0.0
"""

import logging
import re
import secrets
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from threading import Lock
from typing import Any, Callable, Dict, List, Optional

from healthcheck.storage.results_store import HealthCheckRecord

logger = logging.getLogger(__name__)


MIN_EXPIRY_DAYS = 1
MAX_EXPIRY_DAYS = 365
DEFAULT_EXPIRY_DAYS = 30


class ReportNotFoundError(KeyError):
    """No shared report for this slug/token."""


class ReportExpiredError(Exception):
    """Shared report is past expiry or was deactivated."""


class ReportForbiddenError(Exception):
    """Caller does not own the shared report."""


def slugify(name: str) -> str:
    """Lower-case, collapse runs of non-alphanumerics to '-', trim dashes."""
    return re.sub(r"[^a-z0-9]+", "-", (name or "").lower()).strip("-")


@dataclass
class ShareableReport:
    """A shared snapshot of one health check."""
    token: str
    user_id: str
    health_check_id: str
    company_name: str
    company_slug: str
    expires_at: datetime
    snapshot: Dict[str, Any]
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    is_active: bool = True
    view_count: int = 0

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        now = now or datetime.now(timezone.utc)
        return now > self.expires_at

    def report_info(self) -> Dict[str, Any]:
        return {
            "createdAt": self.created_at.isoformat(),
            "expiresAt": self.expires_at.isoformat(),
            "viewCount": self.view_count,
        }


class ShareableReportStore:
    """
    In-memory registry of shareable reports.

    Usage:
        store = ShareableReportStore(frontend_url="https://app.example.com")
        report = store.create(record, "Acme Pvt Ltd", expires_in_days=7)
        url = store.url_for(report)
        shared = store.get(report.company_slug, report.token)
    """

    def __init__(
        self,
        frontend_url: str = "http://localhost:5173",
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ):
        self.frontend_url = frontend_url.rstrip("/")
        self._clock = clock
        self._reports: Dict[str, ShareableReport] = {}
        self._lock = Lock()

    def create(
        self,
        record: HealthCheckRecord,
        company_name: str,
        expires_in_days: int = DEFAULT_EXPIRY_DAYS,
    ) -> ShareableReport:
        """
        Share a saved health check.

        Raises:
            ValueError: expiry outside 1..365 days
        """
        if not MIN_EXPIRY_DAYS <= expires_in_days <= MAX_EXPIRY_DAYS:
            raise ValueError(
                f"expires_in_days must be between {MIN_EXPIRY_DAYS} and {MAX_EXPIRY_DAYS}"
            )

        now = self._clock()
        snapshot = record.to_dict()
        snapshot.pop("userId", None)

        report = ShareableReport(
            token=secrets.token_hex(32),
            user_id=record.user_id,
            health_check_id=record.id,
            company_name=company_name,
            company_slug=slugify(company_name),
            expires_at=now + timedelta(days=expires_in_days),
            snapshot=snapshot,
            created_at=now,
        )

        with self._lock:
            self._reports[report.token] = report

        logger.info(
            "Created shareable report for health check %s (expires in %d days)",
            record.id, expires_in_days,
        )
        return report

    def url_for(self, report: ShareableReport) -> str:
        return f"{self.frontend_url}/shared-report/{report.company_slug}/{report.token}"

    def get(self, company_slug: str, token: str) -> ShareableReport:
        """
        Fetch a shared report and count the view.

        Raises:
            ReportNotFoundError: unknown token or slug mismatch
            ReportExpiredError: expired or deactivated
        """
        with self._lock:
            report = self._reports.get(token)
            if report is None:
                raise ReportNotFoundError(token)
            if not report.is_active or report.is_expired(self._clock()):
                raise ReportExpiredError(token)
            if report.company_slug != company_slug:
                raise ReportNotFoundError(token)
            report.view_count += 1
            return report

    def list_for_user(self, user_id: str) -> List[ShareableReport]:
        """A user's shared reports, newest first."""
        with self._lock:
            owned = [r for r in self._reports.values() if r.user_id == user_id]
        return sorted(owned, key=lambda r: r.created_at, reverse=True)

    def deactivate(self, token: str, user_id: str) -> None:
        """
        Revoke a shared report. Only its owner may do so.

        Raises:
            ReportNotFoundError: unknown token
            ReportForbiddenError: report belongs to another user
        """
        with self._lock:
            report = self._reports.get(token)
            if report is None:
                raise ReportNotFoundError(token)
            if report.user_id != user_id:
                raise ReportForbiddenError(token)
            report.is_active = False
        logger.info("Deactivated shareable report for health check %s", report.health_check_id)
