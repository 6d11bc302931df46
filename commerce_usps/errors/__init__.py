"""Error handling framework for commerce_usps.

This package provides:
- Error code registry with E-XXXX format codes
- USPS Web Tools error translation to friendly messages
- Typed domain exceptions for precondition failures

Error categories:
- E-1xxx: Shipment data errors
- E-2xxx: Validation errors
- E-3xxx: USPS API errors
- E-4xxx: System/internal errors
- E-5xxx: Authentication/configuration errors
"""

from commerce_usps.errors.domain import (
    ConfigurationError,
    DomainError,
    ShipmentNotProvidedError,
    UnsupportedWeightUnitError,
    ValidationError,
)
from commerce_usps.errors.registry import (
    ERROR_REGISTRY,
    ErrorCategory,
    ErrorCode,
    get_error,
    get_errors_by_category,
)
from commerce_usps.errors.usps_translation import (
    USPS_ERROR_MAP,
    extract_usps_error,
    translate_usps_error,
)

__all__ = [
    # Registry
    "ErrorCode",
    "ErrorCategory",
    "ERROR_REGISTRY",
    "get_error",
    "get_errors_by_category",
    # USPS translation
    "translate_usps_error",
    "extract_usps_error",
    "USPS_ERROR_MAP",
    # Domain exceptions
    "DomainError",
    "ValidationError",
    "ShipmentNotProvidedError",
    "UnsupportedWeightUnitError",
    "ConfigurationError",
]
