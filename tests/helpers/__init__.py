"""Test helper utilities for the USPS rate pipeline."""

from tests.helpers.usps_fakes import (
    MEDIA,
    PRIORITY,
    FakeCarrierClient,
    make_shipment,
    postage,
    rate_response,
)

__all__ = [
    "FakeCarrierClient",
    "make_shipment",
    "postage",
    "rate_response",
    "PRIORITY",
    "MEDIA",
]
