"""Canonical USPS domestic service class definitions.

USPS identifies each RateV4 postage entry by a ``CLASSID`` attribute.
These are the values the exclusion list in the provider configuration
refers to.
"""

from enum import Enum


class ServiceClass(str, Enum):
    """USPS RateV4 domestic CLASSID values."""

    FIRST_CLASS = "0"
    PRIORITY_MAIL = "1"
    PRIORITY_MAIL_EXPRESS_HOLD_FOR_PICKUP = "2"
    PRIORITY_MAIL_EXPRESS = "3"
    RETAIL_GROUND = "4"
    MEDIA_MAIL = "6"
    LIBRARY_MAIL = "7"
    PRIORITY_MAIL_EXPRESS_FLAT_RATE_ENVELOPE = "13"
    PRIORITY_MAIL_FLAT_RATE_ENVELOPE = "16"
    PRIORITY_MAIL_MEDIUM_FLAT_RATE_BOX = "17"
    PRIORITY_MAIL_LARGE_FLAT_RATE_BOX = "22"
    PRIORITY_MAIL_SMALL_FLAT_RATE_BOX = "28"
    GROUND_ADVANTAGE = "1058"


# Display names: CLASSID → human-readable name
SERVICE_CLASS_NAMES: dict[str, str] = {
    "0": "First-Class Mail",
    "1": "Priority Mail",
    "2": "Priority Mail Express Hold For Pickup",
    "3": "Priority Mail Express",
    "4": "USPS Retail Ground",
    "6": "Media Mail",
    "7": "Library Mail",
    "13": "Priority Mail Express Flat Rate Envelope",
    "16": "Priority Mail Flat Rate Envelope",
    "17": "Priority Mail Medium Flat Rate Box",
    "22": "Priority Mail Large Flat Rate Box",
    "28": "Priority Mail Small Flat Rate Box",
    "1058": "USPS Ground Advantage",
}

KNOWN_SERVICE_CLASSES: frozenset[str] = frozenset(c.value for c in ServiceClass)


def is_known_service_class(class_id: str) -> bool:
    """Return True if class_id is a CLASSID this module knows about."""
    return str(class_id).strip() in KNOWN_SERVICE_CLASSES
