"""Shared service-layer error types.

Provides the error dataclass raised at the USPS client boundary.
Centralised here to avoid circular imports between service modules.
"""

from dataclasses import dataclass


@dataclass
class USPSServiceError(Exception):
    """Error from the USPS client boundary.

    Attributes:
        code: commerce_usps error code (E-XXXX format)
        message: Human-readable error message
        remediation: Suggested fix
        is_retryable: Whether a later identical request may succeed
        details: Raw error details
    """

    code: str
    message: str
    remediation: str = ""
    is_retryable: bool = False
    details: dict | None = None

    def __str__(self) -> str:
        """Return formatted error message."""
        return f"[{self.code}] {self.message}"
