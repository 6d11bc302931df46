"""Typed domain exceptions for the rate request pipeline.

Precondition failures raise these instead of returning empty results,
so the hosting platform can tell a misconfigured shipping method apart
from a destination USPS simply does not serve.

Usage:
    try:
        rates = rate_request.get_rates(shipment)
    except ConfigurationError as e:
        logger.error("USPS misconfigured: %s", e)
"""

from commerce_usps.errors.registry import format_message, get_error


class DomainError(Exception):
    """Base exception for all domain errors."""

    code = "E-4000"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    @property
    def remediation(self) -> str:
        """Remediation text from the error registry, if the code is known."""
        error = get_error(self.code)
        return error.remediation if error else ""


class ValidationError(DomainError):
    """Invalid input passed to the rate pipeline."""

    code = "E-2001"


class ShipmentNotProvidedError(ValidationError):
    """A rate request was made without a shipment."""

    code = "E-2010"

    def __init__(self) -> None:
        super().__init__("Shipment not provided")


class UnsupportedWeightUnitError(ValidationError):
    """Weight unit has no conversion to ounces."""

    code = "E-1002"

    def __init__(self, unit: str) -> None:
        error = get_error(self.code)
        super().__init__(format_message(error.message_template, unit=unit))
        self.unit = unit


class ConfigurationError(DomainError):
    """Provider configuration is missing or incomplete."""

    code = "E-5003"

    def __init__(self, details: str) -> None:
        error = get_error(self.code)
        super().__init__(format_message(error.message_template, details=details))
        self.details = details
