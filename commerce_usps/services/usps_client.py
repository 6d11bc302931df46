"""USPS Web Tools client.

Talks to the legacy ShippingAPI.dll endpoint: the request is an XML
document passed in the ``XML`` query parameter, the response is XML
which is returned as the xmltodict-parsed dict. The rate pipeline only
depends on the ``CarrierClient`` protocol, so tests and other transports
can stand in for ``USPSClient``.

Example:
    with USPSClient() as client:
        client.configure(Credentials(user_id="123ABC"), test_mode=True)
        raw = client.quote([package])
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Protocol
from xml.parsers.expat import ExpatError

import httpx
import xmltodict

from commerce_usps.errors.domain import ConfigurationError
from commerce_usps.errors.registry import format_message, get_error
from commerce_usps.errors.usps_translation import translate_usps_error
from commerce_usps.models.rates import CarrierPackageRequest
from commerce_usps.services.errors import USPSServiceError
from commerce_usps.services.usps_constants import (
    DEFAULT_TIMEOUT_SECONDS,
    PACKAGE_IDS,
    RATE_API,
    RATE_API_REVISION,
    SERVICE_DELIVERY_API,
    USPS_LIVE_URL,
    USPS_TEST_URL,
)
from commerce_usps.utils.redaction import redact_for_logging, sanitize_message

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Credentials:
    """USPS Web Tools credentials."""

    user_id: str
    password: str = ""

    def __repr__(self) -> str:
        return "Credentials(user_id='***', password='***')"


class CarrierClient(Protocol):
    """Interface the rate request service drives."""

    def configure(
        self,
        credentials: Credentials,
        test_mode: bool,
        log_request: bool = False,
        log_response: bool = False,
    ) -> None:
        """Set credentials, endpoint mode and tracing flags."""
        ...

    def quote(self, packages: Sequence[CarrierPackageRequest]) -> dict[str, Any]:
        """Request rates for the packages and return the raw response."""
        ...

    def service_delivery(
        self, mail_class: int, origin_zip: str, destination_zip: str
    ) -> dict[str, Any]:
        """Request a delivery estimate and return the raw response."""
        ...


def _package_id(index: int) -> str:
    """USPS package IDs: 1ST, 2ND, ... then PKG6, PKG7."""
    if index < len(PACKAGE_IDS):
        return PACKAGE_IDS[index]
    return f"PKG{index + 1}"


def build_rate_request(
    user_id: str, packages: Sequence[CarrierPackageRequest]
) -> dict[str, Any]:
    """Build the RateV4Request document as an xmltodict-ready dict."""
    return {
        "RateV4Request": {
            "@USERID": user_id,
            "Revision": RATE_API_REVISION,
            "Package": [
                {"@ID": _package_id(i), **package.to_xml_fields()}
                for i, package in enumerate(packages)
            ],
        }
    }


def build_service_delivery_request(
    user_id: str, mail_class: int, origin_zip: str, destination_zip: str
) -> dict[str, Any]:
    """Build the SDCGetLocationsRequest document as an xmltodict-ready dict."""
    return {
        "SDCGetLocationsRequest": {
            "@USERID": user_id,
            "MailClass": str(mail_class),
            "OriginZIP": origin_zip,
            "DestinationZIP": destination_zip,
        }
    }


class USPSClient:
    """Synchronous USPS Web Tools client over httpx.

    One call is one HTTP request; there is no retry. Failures surface as
    USPSServiceError with ``is_retryable`` set where a later identical
    request may succeed.
    """

    def __init__(
        self,
        http_client: httpx.Client | None = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        """Initialize the client.

        Args:
            http_client: Pre-built httpx client (tests pass one backed by
                httpx.MockTransport). Owned by the caller when given.
            timeout: Request timeout in seconds for the internal client.
        """
        self._owns_client = http_client is None
        self._http = http_client or httpx.Client(timeout=timeout)
        self._credentials: Credentials | None = None
        self._test_mode = True
        self._log_request = False
        self._log_response = False

    def __enter__(self) -> "USPSClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def close(self) -> None:
        """Close the internal httpx client."""
        if self._owns_client:
            self._http.close()

    @property
    def base_url(self) -> str:
        """Endpoint URL for the configured mode."""
        return USPS_TEST_URL if self._test_mode else USPS_LIVE_URL

    def configure(
        self,
        credentials: Credentials,
        test_mode: bool,
        log_request: bool = False,
        log_response: bool = False,
    ) -> None:
        """Set credentials, endpoint mode and tracing flags.

        Args:
            credentials: USPS Web Tools credentials.
            test_mode: Use the test endpoint when True.
            log_request: Log outbound request documents (credentials redacted).
            log_response: Log inbound response bodies.
        """
        self._credentials = credentials
        self._test_mode = test_mode
        self._log_request = log_request
        self._log_response = log_response

    def quote(self, packages: Sequence[CarrierPackageRequest]) -> dict[str, Any]:
        """Request RateV4 rates for the packages.

        Args:
            packages: Package descriptors; one ``<Package>`` each.

        Returns:
            The parsed response, e.g. ``{"RateV4Response": {"Package": ...}}``.

        Raises:
            ConfigurationError: If configure() was not called.
            USPSServiceError: On transport, HTTP or USPS-level errors.
        """
        credentials = self._require_credentials()
        document = build_rate_request(credentials.user_id, packages)
        return self._call(RATE_API, document)

    def service_delivery(
        self, mail_class: int, origin_zip: str, destination_zip: str
    ) -> dict[str, Any]:
        """Request a delivery estimate from the service delivery calculator.

        Raises:
            ConfigurationError: If configure() was not called.
            USPSServiceError: On transport, HTTP or USPS-level errors.
        """
        credentials = self._require_credentials()
        document = build_service_delivery_request(
            credentials.user_id, mail_class, origin_zip, destination_zip
        )
        return self._call(SERVICE_DELIVERY_API, document)

    # ── Internals ─────────────────────────────────────────────────────

    def _require_credentials(self) -> Credentials:
        if self._credentials is None or not self._credentials.user_id:
            raise ConfigurationError("USPS client used before configure() set a user ID")
        return self._credentials

    def _call(self, api: str, document: dict[str, Any]) -> dict[str, Any]:
        """Send one API request and return the parsed response."""
        xml_body = xmltodict.unparse(document, full_document=False)

        if self._log_request:
            logger.info(
                "USPS %s request to %s: %s",
                api,
                self.base_url,
                xmltodict.unparse(redact_for_logging(document), full_document=False),
            )

        try:
            resp = self._http.get(self.base_url, params={"API": api, "XML": xml_body})
        except httpx.TimeoutException as e:
            raise self._unavailable(api, f"timed out: {e}")
        except httpx.TransportError as e:
            raise self._unavailable(api, str(e))

        if self._log_response:
            logger.info(
                "USPS %s response (%s): %s",
                api,
                resp.status_code,
                sanitize_message(resp.text),
            )

        if resp.status_code >= 400:
            raise self._unavailable(api, f"HTTP {resp.status_code}")

        try:
            parsed = xmltodict.parse(resp.text) or {}
        except ExpatError as e:
            error = get_error("E-4001")
            raise USPSServiceError(
                code=error.code,
                message=format_message(error.message_template, details=str(e)),
                remediation=error.remediation,
                is_retryable=error.is_retryable,
                details={"body": sanitize_message(resp.text, max_length=500)},
            )

        if "Error" in parsed:
            raise self._translate_error(parsed["Error"])

        return parsed

    def _unavailable(self, api: str, reason: str) -> USPSServiceError:
        """Build the error for a USPS endpoint that did not answer usefully."""
        error = get_error("E-3001")
        return USPSServiceError(
            code=error.code,
            message=format_message(error.message_template, service=api),
            remediation=error.remediation,
            is_retryable=error.is_retryable,
            details={"reason": sanitize_message(reason)},
        )

    def _translate_error(self, error_data: Any) -> USPSServiceError:
        """Translate a top-level USPS ``<Error>`` document to USPSServiceError."""
        if not isinstance(error_data, dict):
            error_data = {"Description": str(error_data)}

        number = error_data.get("Number")
        description = error_data.get("Description") or ""
        code, message, remediation = translate_usps_error(
            str(number).strip() if number is not None else None,
            str(description).strip(),
        )
        error = get_error(code)
        return USPSServiceError(
            code=code,
            message=message,
            remediation=remediation,
            is_retryable=error.is_retryable if error else False,
            details=dict(error_data),
        )
