"""
Reporting Package
=================

Author: Health Check Team
Version: 1.0.0
"""

from .report_generator import ComplianceReport, ReportGenerator, ReportSection

__all__ = [
    "ComplianceReport",
    "ReportGenerator",
    "ReportSection",
]
