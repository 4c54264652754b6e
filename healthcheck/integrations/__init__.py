"""
Integrations Package
====================

Author: Health Check Team
Version: 1.0.0
"""

from .registry_client import (
    InvalidCompanyIdentifierError,
    RegistryClient,
    RegistryLookupError,
    parse_company_info,
    validate_cin,
)

__all__ = [
    "InvalidCompanyIdentifierError",
    "RegistryClient",
    "RegistryLookupError",
    "parse_company_info",
    "validate_cin",
]
