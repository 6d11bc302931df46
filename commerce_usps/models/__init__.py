"""Data models for shipments, carrier requests and normalized rates."""

from commerce_usps.models.rates import (
    CarrierAddress,
    CarrierPackageRequest,
    PostageEntry,
    Price,
    ShippingRate,
)
from commerce_usps.models.shipment import (
    Address,
    Order,
    Shipment,
    ShippingProfile,
    Store,
    StoreAddress,
    Weight,
)

__all__ = [
    "Address",
    "StoreAddress",
    "Weight",
    "Store",
    "Order",
    "ShippingProfile",
    "Shipment",
    "CarrierAddress",
    "CarrierPackageRequest",
    "PostageEntry",
    "Price",
    "ShippingRate",
]
