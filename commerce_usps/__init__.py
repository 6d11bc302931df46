"""USPS shipping rates for a commerce platform's checkout.

Typical use:

    from commerce_usps import USPSShippingMethod, load_config

    method = USPSShippingMethod(load_config())
    rates = method.calculate_rates(shipment)
"""

from commerce_usps.config import ProviderConfig, load_config
from commerce_usps.models import (
    Address,
    Order,
    Price,
    Shipment,
    ShippingProfile,
    ShippingRate,
    Store,
    StoreAddress,
    Weight,
)
from commerce_usps.services.errors import USPSServiceError
from commerce_usps.services.shipping_method import USPSShippingMethod
from commerce_usps.services.usps_client import CarrierClient, Credentials, USPSClient
from commerce_usps.services.usps_rate_request import USPSRateRequest, fetch_rates
from commerce_usps.services.usps_shipment import USPSShipment, build_package

__all__ = [
    "ProviderConfig",
    "load_config",
    "Address",
    "StoreAddress",
    "Weight",
    "Store",
    "Order",
    "ShippingProfile",
    "Shipment",
    "Price",
    "ShippingRate",
    "USPSServiceError",
    "USPSShippingMethod",
    "CarrierClient",
    "Credentials",
    "USPSClient",
    "USPSRateRequest",
    "fetch_rates",
    "USPSShipment",
    "build_package",
]
