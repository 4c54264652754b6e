"""
Company Registry Client
=======================

Async HTTP client for looking up a company by its Corporate
Identification Number (CIN).

Registry data is display-only: it labels reports and never feeds scoring.

Author: Health Check Team
Version: 1.0.0
"""

import logging
import re
from typing import Any, Dict, Optional

import httpx

from healthcheck.config import settings

logger = logging.getLogger(__name__)


# L/U, 5-digit industry code, 2-letter state, 4-digit year, 3-letter
# ownership class, 6-digit registration number
CIN_PATTERN = re.compile(r"^[LU]\d{5}[A-Z]{2}\d{4}[A-Z]{3}\d{6}$")
CIN_LENGTH = 21


class InvalidCompanyIdentifierError(ValueError):
    """CIN is malformed."""


class RegistryLookupError(Exception):
    """Registry could not be reached or answered with an error."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


def validate_cin(value: Any) -> str:
    """
    Normalise and validate a CIN.

    Returns:
        The upper-cased, stripped CIN

    Raises:
        InvalidCompanyIdentifierError: wrong length or shape
    """
    cin = str(value or "").strip().upper()
    if len(cin) != CIN_LENGTH:
        raise InvalidCompanyIdentifierError(
            f"CIN must be {CIN_LENGTH} characters, got {len(cin)}"
        )
    if not CIN_PATTERN.match(cin):
        raise InvalidCompanyIdentifierError(f"Invalid CIN format: {cin}")
    return cin


def parse_company_info(payload: Any) -> Dict[str, str]:
    """Flatten the registry's Attribute/Value list into a dict."""
    data = payload.get("data", payload) if isinstance(payload, dict) else None
    if not isinstance(data, dict):
        return {}
    entries = data.get("company_info")
    if not isinstance(entries, list):
        return {}
    info: Dict[str, str] = {}
    for entry in entries:
        if not isinstance(entry, dict):
            continue
        attribute = entry.get("Attribute")
        if attribute:
            info[str(attribute)] = str(entry.get("Value", ""))
    return info


class RegistryClient:
    """
    Async HTTP client for the company registry.

    Endpoints:
        GET /company/{cin}: company master data

    Usage:
        async with RegistryClient() as client:
            info = await client.lookup("U72900KA2019PTC123456")
            print(info.get("Company Name"))
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize registry client.

        Args:
            base_url: Registry URL (defaults to config)
            timeout: Request timeout in seconds (defaults to config)
            transport: Optional httpx transport, e.g. MockTransport in tests
        """
        self.base_url = (base_url or settings.registry_api_url).rstrip("/")
        self.timeout = timeout or settings.registry_timeout_seconds
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                transport=self._transport,
                headers={"User-Agent": "HealthCheck-RegistryClient/1.0"},
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "RegistryClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def lookup(self, cin: str) -> Dict[str, str]:
        """
        Fetch company details by CIN.

        Args:
            cin: Corporate Identification Number

        Returns:
            Attribute -> value mapping (e.g. "Company Name")

        Raises:
            InvalidCompanyIdentifierError: malformed CIN, no request made
            RegistryLookupError: transport failure or non-2xx response
        """
        cin = validate_cin(cin)
        client = await self._get_client()
        try:
            response = await client.get(f"/company/{cin}")
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPStatusError as e:
            logger.error(f"Registry lookup failed: {e.response.status_code}")
            raise RegistryLookupError(
                f"Registry returned HTTP {e.response.status_code}",
                status_code=e.response.status_code,
            ) from e
        except httpx.TransportError as e:
            logger.warning(f"Registry unreachable: {e}")
            raise RegistryLookupError(f"Registry unreachable: {e}") from e
        except ValueError as e:
            raise RegistryLookupError("Registry returned invalid JSON") from e

        return parse_company_info(payload)
