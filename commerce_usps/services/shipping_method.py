"""USPS shipping method exposed to the store's checkout.

The store calls ``calculate_rates`` whenever it needs shipping options,
including speculatively before the customer has entered an address.
"""

import logging
from collections.abc import Mapping
from typing import Any

from commerce_usps.config import ProviderConfig, default_configuration
from commerce_usps.errors.domain import DomainError
from commerce_usps.models.rates import ShippingRate
from commerce_usps.services.errors import USPSServiceError
from commerce_usps.services.usps_client import CarrierClient
from commerce_usps.services.usps_rate_request import USPSRateRequest

logger = logging.getLogger(__name__)

SHIPPING_METHOD_ID = "usps"
SHIPPING_METHOD_LABEL = "USPS"


class USPSShippingMethod:
    """Shipping method plugin backed by the USPS rate API.

    Configuration is fixed at construction for the lifetime of the
    instance.
    """

    id = SHIPPING_METHOD_ID
    label = SHIPPING_METHOD_LABEL

    def __init__(
        self,
        configuration: ProviderConfig | Mapping[str, Any] | None = None,
        rate_request: USPSRateRequest | None = None,
        client: CarrierClient | None = None,
    ) -> None:
        """Initialize the shipping method.

        Args:
            configuration: Provider configuration; defaults when None.
            rate_request: Rate request service; built around ``client``
                when None.
            client: Carrier client for the default rate request service.
                Only valid without ``rate_request``.

        Raises:
            ValueError: If both ``rate_request`` and ``client`` are given.
        """
        if rate_request is not None and client is not None:
            raise ValueError("Pass either rate_request or client, not both")

        if configuration is None:
            configuration = ProviderConfig()
        elif not isinstance(configuration, ProviderConfig):
            configuration = ProviderConfig.model_validate(dict(configuration))
        self._configuration = configuration

        self._owns_rate_request = rate_request is None
        if rate_request is None:
            rate_request = USPSRateRequest(client=client)
        self._rate_request = rate_request
        self._rate_request.set_config(self._configuration)

    def __enter__(self) -> "USPSShippingMethod":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def close(self) -> None:
        """Release the rate request service if this instance built it."""
        if self._owns_rate_request:
            self._rate_request.close()

    @classmethod
    def default_configuration(cls) -> dict[str, Any]:
        """Default configuration values for a new shipping method."""
        return default_configuration()

    @property
    def configuration(self) -> ProviderConfig:
        """The (immutable) provider configuration."""
        return self._configuration

    def is_configured(self) -> bool:
        """Determine if we have the minimum information to connect to USPS."""
        return self._configuration.is_configured()

    def calculate_rates(self, shipment) -> list[ShippingRate]:
        """Calculate USPS rates for a shipment.

        Only attempts to collect rates if an address exists on the
        shipment; otherwise returns an empty list without calling USPS.

        Raises:
            DomainError: On precondition or configuration failures.
            USPSServiceError: On USPS transport or authorization failures.
        """
        if shipment is not None and not _has_destination(shipment):
            return []

        try:
            return self._rate_request.get_rates(shipment)
        except USPSServiceError as e:
            logger.error("USPS rate request failed: %s (%s)", e, e.remediation)
            raise
        except DomainError as e:
            logger.error("USPS rate request rejected: %s", e)
            raise


def _has_destination(shipment) -> bool:
    """True when the shipment's shipping profile carries a non-empty address."""
    profile = getattr(shipment, "shipping_profile", None)
    address = getattr(profile, "address", None) if profile is not None else None
    if address is None:
        return False
    return not address.is_empty()
