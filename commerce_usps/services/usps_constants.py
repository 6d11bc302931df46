"""Canonical USPS Web Tools constants.

Single source of truth for request defaults, fixed package policy,
endpoints and unit conversion factors. Payload-building modules import
from here instead of using inline magic values.
"""

import re
from decimal import Decimal
from enum import Enum


# ---------------------------------------------------------------------------
# Currency
# ---------------------------------------------------------------------------

DEFAULT_CURRENCY_CODE = "USD"

# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

USPS_LIVE_URL = "https://secure.shippingapis.com/ShippingAPI.dll"
USPS_TEST_URL = "https://secure.shippingapis.com/ShippingAPITest.dll"
DEFAULT_TIMEOUT_SECONDS = 30.0

RATE_API = "RateV4"
RATE_API_REVISION = "2"
SERVICE_DELIVERY_API = "SDCGetLocations"

# ---------------------------------------------------------------------------
# Fixed package policy (no dimensional packaging support)
# ---------------------------------------------------------------------------


class RateService(str, Enum):
    """RateV4 ``Service`` values."""

    ALL = "ALL"
    ONLINE = "ONLINE"
    PRIORITY = "PRIORITY"
    MEDIA = "MEDIA"


class Container(str, Enum):
    """RateV4 ``Container`` values."""

    VARIABLE = "VARIABLE"
    RECTANGULAR = "RECTANGULAR"
    NONRECTANGULAR = "NONRECTANGULAR"


class PackageSize(str, Enum):
    """RateV4 ``Size`` values."""

    REGULAR = "REGULAR"
    LARGE = "LARGE"


# Element order inside <Package>; USPS validates against an ordered schema
PACKAGE_FIELD_ORDER = (
    "Service",
    "ZipOrigination",
    "ZipDestination",
    "Pounds",
    "Ounces",
    "Container",
    "Size",
    "Machinable",
    "ShipDate",
)

PACKAGE_IDS = ("1ST", "2ND", "3RD", "4TH", "5TH")

# ---------------------------------------------------------------------------
# Service delivery calculator
# ---------------------------------------------------------------------------

# Mail class 3: ground/domestic parcel route
ROUTE_TYPE_GROUND = 3

# ---------------------------------------------------------------------------
# Weight
# ---------------------------------------------------------------------------

OUNCES_PER_POUND = 16

# RateV4 accepts fractional ounces; finer digits are unit-conversion noise
OUNCES_PRECISION = Decimal("0.1")

OUNCES_PER_UNIT: dict[str, Decimal] = {
    "oz": Decimal("1"),
    "lb": Decimal("16"),
    "g": Decimal("0.03527396195"),
    "kg": Decimal("35.27396195"),
}

# ---------------------------------------------------------------------------
# Response cleanup
# ---------------------------------------------------------------------------

# HTML-encoded trademark superscript USPS appends to some service names
TRADEMARK_MARKUP = "&lt;sup&gt;&#8482;&lt;/sup&gt;"

USA_ZIP_PATTERN = re.compile(r"^([0-9]{5})(-[0-9]{4})?$", re.IGNORECASE)
