"""Platform-side shipment data consumed by the rate pipeline.

The hosting store hands over its own shipment entity; these dataclasses
describe the attributes the pipeline reads from it. Any object exposing
the same attributes works in their place.
"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Any

from commerce_usps.errors.domain import UnsupportedWeightUnitError
from commerce_usps.services.usps_constants import OUNCES_PER_UNIT


@dataclass
class Address:
    """Postal address as stored on a profile or store."""

    address_line1: str = ""
    address_line2: str = ""
    locality: str = ""
    administrative_area: str = ""
    postal_code: str = ""
    country_code: str = "US"

    def is_empty(self) -> bool:
        """Return True when no addressable field is filled in.

        The country code alone does not make an address: stores default
        it before the customer types anything.
        """
        return not any(
            (value or "").strip()
            for value in (
                self.address_line1,
                self.address_line2,
                self.locality,
                self.administrative_area,
                self.postal_code,
            )
        )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Address":
        """Construct from a plain mapping, tolerating extra keys."""
        return cls(
            address_line1=data.get("address_line1", "") or "",
            address_line2=data.get("address_line2", "") or "",
            locality=data.get("locality", "") or "",
            administrative_area=data.get("administrative_area", "") or "",
            postal_code=str(data.get("postal_code", "") or ""),
            country_code=data.get("country_code", "US") or "US",
        )


@dataclass
class StoreAddress(Address):
    """Store address; ``name`` is the firm name printed on the origin."""

    name: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "StoreAddress":
        """Construct from a plain mapping, tolerating extra keys."""
        base = Address.from_dict(data)
        return cls(name=data.get("name", "") or "", **vars(base))


@dataclass
class Weight:
    """A weight amount in a named unit."""

    number: Decimal
    unit: str = "oz"

    def __post_init__(self) -> None:
        self.number = Decimal(str(self.number))
        self.unit = self.unit.strip().lower()

    def convert(self, unit: str) -> "Weight":
        """Convert to another unit.

        Args:
            unit: Target unit (oz, lb, g or kg).

        Returns:
            A new Weight in the target unit.

        Raises:
            UnsupportedWeightUnitError: If either unit is unknown.
        """
        unit = unit.strip().lower()
        if self.unit not in OUNCES_PER_UNIT:
            raise UnsupportedWeightUnitError(self.unit)
        if unit not in OUNCES_PER_UNIT:
            raise UnsupportedWeightUnitError(unit)
        if unit == self.unit:
            return Weight(self.number, unit)

        ounces = self.number * OUNCES_PER_UNIT[self.unit]
        return Weight(ounces / OUNCES_PER_UNIT[unit], unit)


@dataclass
class Store:
    """The store an order was placed in."""

    address: StoreAddress


@dataclass
class Order:
    """The order a shipment belongs to."""

    store: Store


@dataclass
class ShippingProfile:
    """Customer shipping profile; address is None until checkout fills it."""

    address: Address | None = None


@dataclass
class Shipment:
    """One shipment to quote.

    Attributes:
        shipping_profile: Destination profile.
        order: Order whose store supplies the origin address.
        weight: Total package weight.
        ship_date: Date the package is tendered; today when unset.
    """

    shipping_profile: ShippingProfile
    order: Order
    weight: Weight = field(default_factory=lambda: Weight(Decimal("0")))
    ship_date: date | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Shipment":
        """Construct from a nested mapping.

        Expected shape::

            {
                "shipping_profile": {"address": {...}},
                "store": {"address": {..., "name": "..."}},
                "weight": {"number": "32", "unit": "oz"},
                "ship_date": "2024-05-01",
            }
        """
        profile_address = (data.get("shipping_profile") or {}).get("address")
        store_address = (data.get("store") or {}).get("address") or {}
        weight = data.get("weight") or {}
        ship_date = data.get("ship_date")
        if isinstance(ship_date, str):
            ship_date = date.fromisoformat(ship_date)

        return cls(
            shipping_profile=ShippingProfile(
                address=Address.from_dict(profile_address) if profile_address else None,
            ),
            order=Order(store=Store(address=StoreAddress.from_dict(store_address))),
            weight=Weight(weight.get("number", "0"), weight.get("unit", "oz")),
            ship_date=ship_date,
        )
