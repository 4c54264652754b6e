"""
Compliance Health Check Package
===============================

Startup compliance health check: questionnaire, scoring and reporting.

This package contains:
    - catalog/: Static 15-question compliance questionnaire
    - scoring/: Rule tables and the deterministic scoring engine
    - recommendations/: Remediation services and plan selection
    - reporting/: Report generation (dict and Markdown)
    - storage/: Saved results and shareable report links
    - integrations/: Company registry lookup
    - api/: FastAPI REST API layer

Author: Health Check Team
Version: 1.0.0
"""

__version__ = "1.0.0"
