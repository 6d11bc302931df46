"""USPS Web Tools error translation to commerce_usps error codes.

USPS reports failures as an ``<Error>`` element carrying a ``Number``
(decimal or hex string), a ``Source`` and a ``Description``. This module
maps them to the E-XXXX registry so callers get a stable code plus a
remediation hint.
"""

from commerce_usps.errors.registry import format_message, get_error


# Map of USPS error numbers to commerce_usps error codes
USPS_ERROR_MAP: dict[str, str] = {
    "80040B1A": "E-5001",  # Authorization failure
    "-2147219401": "E-5002",  # API authorization failure (API not enabled)
    "80040B19": "E-4001",  # XML syntax error
}

# Description fragments, checked in order when the number is unknown
USPS_MESSAGE_PATTERNS: dict[str, str] = {
    "authorization failure": "E-5001",
    "not authorized": "E-5002",
    "zip code": "E-3003",
    "zipcode": "E-3003",
    "weight": "E-2004",
    "pounds": "E-2004",
    "ounces": "E-2004",
    "not available": "E-3004",
    "invalid destination": "E-3004",
}


def translate_usps_error(
    usps_number: str | None,
    usps_message: str | None,
    context: dict | None = None,
) -> tuple[str, str, str]:
    """Translate a USPS error to a commerce_usps error.

    Args:
        usps_number: USPS error number (e.g., "80040B1A").
        usps_message: USPS error description text.
        context: Additional template context.

    Returns:
        Tuple of (error_code, formatted_message, remediation).
    """
    context = context or {}

    if usps_number and usps_number in USPS_ERROR_MAP:
        error = get_error(USPS_ERROR_MAP[usps_number])
        if error:
            message = format_message(
                error.message_template,
                usps_message=usps_message or "Unknown error",
                details=usps_message or "Unknown error",
                **context,
            )
            return (error.code, message, error.remediation)

    if usps_message:
        usps_message_lower = usps_message.lower()
        for pattern, code in USPS_MESSAGE_PATTERNS.items():
            if pattern in usps_message_lower:
                error = get_error(code)
                if error:
                    message = format_message(
                        error.message_template,
                        usps_message=usps_message,
                        **context,
                    )
                    return (error.code, message, error.remediation)

    error = get_error("E-3005")
    if error:
        message = format_message(
            error.message_template,
            usps_message=usps_message or f"Number: {usps_number}",
            **context,
        )
        return (error.code, message, error.remediation)

    return (
        "E-3005",
        f"USPS error: {usps_message or usps_number or 'Unknown'}",
        "Contact support with this error message for assistance.",
    )


def extract_usps_error(response: dict) -> tuple[str | None, str | None]:
    """Extract error number and description from a parsed USPS response.

    USPS places errors either at the document root or inside a
    ``Package`` of an otherwise successful response.

    Args:
        response: xmltodict-parsed USPS response.

    Returns:
        Tuple of (error_number, error_description), either may be None.
    """
    # Format 1: <Error> as the document root
    error = response.get("Error")

    # Format 2: <Error> nested one level down, e.g. RateV4Response/Error
    if error is None:
        for value in response.values():
            if isinstance(value, dict) and "Error" in value:
                error = value["Error"]
                break

    if isinstance(error, list):
        error = error[0] if error else None
    if not isinstance(error, dict):
        return (None, None)

    number = error.get("Number")
    description = error.get("Description")
    return (
        str(number).strip() if number is not None else None,
        str(description).strip() if description is not None else None,
    )
