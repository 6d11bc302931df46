"""Error code registry with E-XXXX format codes.

This module defines the error code system for commerce_usps, organizing
errors into categories:
- E-1xxx: Shipment data errors
- E-2xxx: Validation errors
- E-3xxx: USPS API errors
- E-4xxx: System/internal errors
- E-5xxx: Authentication and configuration errors

Each error includes a code, title, message template, and remediation steps.
"""

from dataclasses import dataclass
from enum import Enum


class ErrorCategory(str, Enum):
    """Categories for error codes."""

    DATA = "data"  # E-1xxx: Shipment data errors
    VALIDATION = "validation"  # E-2xxx: Validation errors
    USPS_API = "usps_api"  # E-3xxx: USPS API errors
    SYSTEM = "system"  # E-4xxx: System/internal errors
    AUTH = "auth"  # E-5xxx: Authentication/configuration errors


@dataclass
class ErrorCode:
    """Definition of an error code with metadata.

    Attributes:
        code: Error code in E-XXXX format.
        category: Error category for grouping.
        title: Short title for display.
        message_template: Message with {placeholders} for context.
        remediation: Action the store administrator should take.
        is_retryable: Whether the operation can be retried without user action.
    """

    code: str  # E-XXXX format
    category: ErrorCategory
    title: str
    message_template: str
    remediation: str
    is_retryable: bool = False


ERROR_REGISTRY: dict[str, ErrorCode] = {
    # Data errors (E-1xxx)
    "E-1002": ErrorCode(
        code="E-1002",
        category=ErrorCategory.DATA,
        title="Unsupported Weight Unit",
        message_template="Weight unit '{unit}' cannot be converted to ounces.",
        remediation="Use one of: oz, lb, g, kg.",
    ),
    # Validation errors (E-2xxx)
    "E-2001": ErrorCode(
        code="E-2001",
        category=ErrorCategory.VALIDATION,
        title="Invalid ZIP Code",
        message_template="Invalid ZIP code '{value}'.",
        remediation="US ZIP codes should be 5 digits (12345) or 9 digits (12345-6789).",
    ),
    "E-2004": ErrorCode(
        code="E-2004",
        category=ErrorCategory.VALIDATION,
        title="Invalid Weight",
        message_template="USPS rejected the package weight: {usps_message}",
        remediation="Check the product weights on the order.",
    ),
    "E-2010": ErrorCode(
        code="E-2010",
        category=ErrorCategory.VALIDATION,
        title="Shipment Not Provided",
        message_template="Shipment not provided.",
        remediation="Pass a shipment to the rate request.",
    ),
    # USPS API errors (E-3xxx)
    "E-3001": ErrorCode(
        code="E-3001",
        category=ErrorCategory.USPS_API,
        title="USPS Service Unavailable",
        message_template="USPS {service} API is not responding.",
        remediation="Wait a few minutes and retry. Check the USPS Web Tools status page if the issue persists.",
        is_retryable=True,
    ),
    "E-3003": ErrorCode(
        code="E-3003",
        category=ErrorCategory.USPS_API,
        title="USPS Address Rejected",
        message_template="USPS rejected the address: {usps_message}",
        remediation="Verify the origin and destination ZIP codes.",
    ),
    "E-3004": ErrorCode(
        code="E-3004",
        category=ErrorCategory.USPS_API,
        title="USPS Service Not Available",
        message_template="USPS service is not available for this shipment: {usps_message}",
        remediation="Verify the destination is serviceable by USPS.",
    ),
    "E-3005": ErrorCode(
        code="E-3005",
        category=ErrorCategory.USPS_API,
        title="USPS Unknown Error",
        message_template="USPS returned an unexpected error: {usps_message}",
        remediation="Contact support with error code E-3005 and the USPS message.",
    ),
    # System errors (E-4xxx)
    "E-4001": ErrorCode(
        code="E-4001",
        category=ErrorCategory.SYSTEM,
        title="Malformed USPS Response",
        message_template="USPS response could not be parsed: {details}",
        remediation="Retry the request. Contact support if the issue persists.",
        is_retryable=True,
    ),
    # Auth errors (E-5xxx)
    "E-5001": ErrorCode(
        code="E-5001",
        category=ErrorCategory.AUTH,
        title="USPS Authorization Failed",
        message_template="USPS rejected the Web Tools user ID: {usps_message}",
        remediation="Check the USPS user ID in the shipping method settings.",
    ),
    "E-5002": ErrorCode(
        code="E-5002",
        category=ErrorCategory.AUTH,
        title="USPS API Not Enabled",
        message_template="The USPS account is not authorized for this API: {usps_message}",
        remediation="Ask USPS Web Tools support to enable the API for your user ID.",
    ),
    "E-5003": ErrorCode(
        code="E-5003",
        category=ErrorCategory.AUTH,
        title="USPS Not Configured",
        message_template="USPS shipping method is not configured: {details}",
        remediation="Fill in the USPS API information in the shipping method settings.",
    ),
}


def get_error(code: str) -> ErrorCode | None:
    """Get error definition by code.

    Args:
        code: Error code in E-XXXX format.

    Returns:
        ErrorCode if found, None otherwise.
    """
    return ERROR_REGISTRY.get(code)


def get_errors_by_category(category: ErrorCategory) -> list[ErrorCode]:
    """Get all errors in a category.

    Args:
        category: The error category to filter by.

    Returns:
        List of ErrorCode objects in the specified category.
    """
    return [e for e in ERROR_REGISTRY.values() if e.category == category]


def format_message(template: str, **kwargs: object) -> str:
    """Format a message template with context, ignoring missing keys.

    Args:
        template: Message template with {placeholder} syntax.
        **kwargs: Values to substitute into the template.

    Returns:
        Formatted message string, or the raw template when a
        placeholder has no value.
    """
    try:
        return template.format(**kwargs)
    except KeyError:
        return template
