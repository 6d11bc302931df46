"""USPS shipment mapper.

Transforms a store shipment into the RateV4 package descriptor the USPS
client sends. Quotes every service (``Service=ALL``); filtering by the
provider configuration happens on the response, not the request.

Example:
    from commerce_usps.services.usps_shipment import build_package

    package = build_package(shipment)
    raw = client.quote([package])
"""

import logging
import re
from datetime import date
from decimal import ROUND_FLOOR, ROUND_HALF_UP, Decimal

from commerce_usps.models.rates import CarrierAddress, CarrierPackageRequest
from commerce_usps.services.usps_constants import (
    OUNCES_PER_POUND,
    OUNCES_PRECISION,
    USA_ZIP_PATTERN,
    Container,
    PackageSize,
    RateService,
)

logger = logging.getLogger(__name__)


def is_valid_usa_zip(zip_code: str | None) -> bool:
    """Return True for a 5-digit ZIP or ZIP+4 (12345 or 12345-6789)."""
    if not zip_code:
        return False
    return USA_ZIP_PATTERN.match(zip_code.strip()) is not None


def normalize_zip(postal_code: str | None) -> str:
    """Normalize a US postal code to its 5-digit ZIP.

    Args:
        postal_code: Raw postal code ("90210", " 90210-1234 ", "902101234").

    Returns:
        The 5-digit ZIP, or the trimmed input when it does not look
        like a US ZIP code.
    """
    if not postal_code:
        return ""

    postal_code = str(postal_code).strip()
    digits = re.sub(r"\D", "", postal_code)
    if len(digits) in (5, 9) and digits == postal_code.replace("-", ""):
        return digits[:5]
    return postal_code


def split_weight(ounces: Decimal) -> tuple[int, Decimal]:
    """Split a weight in ounces into whole pounds and remaining ounces.

    Args:
        ounces: Weight in ounces, >= 0.

    Returns:
        Tuple of (pounds, ounces) with pounds = floor(oz / 16) and
        ounces = oz mod 16.
    """
    pounds = int((ounces / OUNCES_PER_POUND).to_integral_value(rounding=ROUND_FLOOR))
    remainder = ounces - pounds * OUNCES_PER_POUND
    return pounds, remainder


def to_ounces(weight) -> Decimal:
    """Convert a shipment weight to ounces, rounded to a tenth of an ounce.

    The weight's amount may be any number (int, float, str or Decimal);
    it goes through ``str`` so floats keep their printed value.

    Raises:
        UnsupportedWeightUnitError: If the weight's unit is unknown.
    """
    ounces = Decimal(str(weight.convert("oz").number))
    return ounces.quantize(OUNCES_PRECISION, rounding=ROUND_HALF_UP)


def build_ship_to(address) -> CarrierAddress:
    """Build the destination address from a shipping profile address."""
    return CarrierAddress(
        address=address.address_line1 or "",
        apt=address.address_line2 or "",
        city=address.locality or "",
        state=address.administrative_area or "",
        zip5=normalize_zip(address.postal_code),
    )


def build_ship_from(address) -> CarrierAddress:
    """Build the origin address from a store address, firm name included."""
    zip5 = normalize_zip(address.postal_code)
    return CarrierAddress(
        address=address.address_line1 or "",
        city=address.locality or "",
        state=address.administrative_area or "",
        zip5=zip5,
        zip4=zip5,
        firm_name=getattr(address, "name", "") or "",
    )


def get_production_date(ship_date: date | None = None) -> str:
    """Return the ship date formatted YYYY-MM-DD, today when unset."""
    return (ship_date or date.today()).isoformat()


def build_package(shipment, ship_date: date | None = None) -> CarrierPackageRequest:
    """Build a RateV4 package descriptor for a shipment.

    Args:
        shipment: Store shipment exposing ``shipping_profile.address``,
            ``order.store.address`` and ``weight``.
        ship_date: Overrides ``shipment.ship_date``.

    Returns:
        CarrierPackageRequest with addresses, weight and fixed policy set.
    """
    package = CarrierPackageRequest(service=RateService.ALL.value)

    from_address = shipment.order.store.address
    package.origin = build_ship_from(from_address)
    package.zip_origination = package.origin.zip5

    to_address = shipment.shipping_profile.address
    package.destination = build_ship_to(to_address)
    package.zip_destination = package.destination.zip5
    if not is_valid_usa_zip(to_address.postal_code):
        logger.warning(
            "Destination postal code %r is not a valid US ZIP; USPS will likely reject it",
            to_address.postal_code,
        )

    weight = shipment.weight
    if weight.number > 0:
        ounces = to_ounces(weight)
        package.pounds, package.ounces = split_weight(ounces)

    package.container = Container.VARIABLE.value
    package.size = PackageSize.REGULAR.value

    package.machinable = True
    package.ship_date = get_production_date(
        ship_date or getattr(shipment, "ship_date", None)
    )

    logger.debug(
        "Built USPS package %s -> %s, %s lb %s oz, ship date %s",
        package.zip_origination,
        package.zip_destination,
        package.pounds,
        package.ounces,
        package.ship_date,
    )
    return package


class USPSShipment:
    """Shipment mapper injected into the rate request service."""

    def get_package(self, shipment, ship_date: date | None = None) -> CarrierPackageRequest:
        """Return an initialized rate package for the shipment."""
        return build_package(shipment, ship_date=ship_date)
