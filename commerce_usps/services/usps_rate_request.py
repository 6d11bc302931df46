"""USPS rate request service.

Builds a RateV4 request for a shipment, calls the USPS client and
normalizes the nested response into a flat list of ShippingRate
records. Services listed in ``conditions.conditions`` are excluded.

Example:
    rate_request = USPSRateRequest(client=USPSClient())
    rate_request.set_config(config)
    rates = rate_request.get_rates(shipment)
"""

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from commerce_usps.config import ProviderConfig
from commerce_usps.errors.domain import ConfigurationError, ShipmentNotProvidedError
from commerce_usps.errors.usps_translation import extract_usps_error
from commerce_usps.models.rates import PostageEntry, Price, ShippingRate
from commerce_usps.services.usps_client import CarrierClient, Credentials, USPSClient
from commerce_usps.services.usps_constants import (
    DEFAULT_CURRENCY_CODE,
    ROUTE_TYPE_GROUND,
    TRADEMARK_MARKUP,
)
from commerce_usps.services.usps_service_codes import SERVICE_CLASS_NAMES
from commerce_usps.services.usps_shipment import USPSShipment, normalize_zip

logger = logging.getLogger(__name__)


def clean_service_name(service: str) -> str:
    """Remove the HTML-encoded trademark markup checkout labels cannot render."""
    return service.replace(TRADEMARK_MARKUP, "")


def _as_list(value: Any) -> list:
    """xmltodict yields a dict for one child element and a list for several."""
    if value is None:
        return []
    if isinstance(value, list):
        return value
    return [value]


def parse_rate_response(
    raw: Any, excluded_services: Iterable[str] = ()
) -> list[ShippingRate]:
    """Normalize a parsed RateV4 response into shipping rates.

    Missing or unexpected structure yields no rates rather than an error.

    Args:
        raw: xmltodict-parsed RateV4 response.
        excluded_services: Service CLASSIDs to drop.

    Returns:
        Rates in response order.
    """
    excluded = frozenset(str(code) for code in excluded_services)

    response = raw.get("RateV4Response") if isinstance(raw, Mapping) else None
    if not isinstance(response, Mapping):
        logger.warning("USPS rate response has no RateV4Response element")
        return []

    rates: list[ShippingRate] = []
    for package in _as_list(response.get("Package")):
        if not isinstance(package, Mapping):
            continue

        if "Error" in package:
            number, description = extract_usps_error(package)
            logger.warning(
                "USPS returned no rates for package %s: [%s] %s",
                package.get("@ID", "?"),
                number,
                description,
            )
            continue

        for entry in _as_list(package.get("Postage")):
            try:
                postage = PostageEntry.model_validate(entry)
            except PydanticValidationError as e:
                logger.warning("Skipping malformed USPS postage entry: %s", e.errors())
                continue

            if postage.class_id in excluded:
                continue

            service_name = (
                clean_service_name(postage.mail_service)
                or SERVICE_CLASS_NAMES.get(postage.class_id, postage.class_id)
            )
            rates.append(
                ShippingRate(
                    service_code=postage.class_id,
                    service_name=service_name,
                    price=Price(postage.rate, DEFAULT_CURRENCY_CODE),
                )
            )

    return rates


def _configure_client(client: CarrierClient, config: ProviderConfig) -> None:
    """Apply credentials, mode and tracing flags from the configuration."""
    api = config.api_information
    if not api.user_id:
        raise ConfigurationError("api_information.user_id is empty")

    client.configure(
        Credentials(user_id=api.user_id, password=api.password),
        test_mode=config.is_test_mode,
        log_request=config.options.log.request,
        log_response=config.options.log.response,
    )


def fetch_rates(
    shipment,
    config: ProviderConfig,
    client: CarrierClient,
    mapper: USPSShipment | None = None,
) -> list[ShippingRate]:
    """Quote a shipment: map, call USPS once, normalize and filter.

    Args:
        shipment: Store shipment to quote.
        config: Provider configuration.
        client: Carrier client to call.
        mapper: Shipment mapper; the default USPSShipment when None.

    Returns:
        Shipping rates not excluded by the configuration; empty when
        USPS offers none.

    Raises:
        ShipmentNotProvidedError: If shipment is None.
        ConfigurationError: If the configuration has no user ID.
        USPSServiceError: Propagated unmodified from the client.
    """
    if shipment is None:
        raise ShipmentNotProvidedError()

    mapper = mapper or USPSShipment()

    # TODO: Support multiple packages.
    packages = [mapper.get_package(shipment)]

    _configure_client(client, config)
    raw = client.quote(packages)

    rates = parse_rate_response(raw, config.excluded_services)
    logger.info(
        "USPS quote %s -> %s: %d rate(s)",
        packages[0].zip_origination,
        packages[0].zip_destination,
        len(rates),
    )
    return rates


class USPSRateRequest:
    """Fetches and returns rates using the USPS API.

    Holds only the provider configuration and its collaborators; each
    get_rates() call is independent.
    """

    def __init__(
        self,
        usps_shipment: USPSShipment | None = None,
        client: CarrierClient | None = None,
    ) -> None:
        """Initialize with collaborators.

        Args:
            usps_shipment: Shipment mapper.
            client: Carrier client; a USPSClient when None.
        """
        self._usps_shipment = usps_shipment or USPSShipment()
        self._owns_client = client is None
        self._client = USPSClient() if client is None else client
        self._config: ProviderConfig | None = None

    def __enter__(self) -> "USPSRateRequest":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def close(self) -> None:
        """Close the carrier client if this instance created it."""
        if self._owns_client:
            self._client.close()

    @property
    def config(self) -> ProviderConfig | None:
        """The provider configuration, None until set_config() is called."""
        return self._config

    def set_config(self, config: ProviderConfig | Mapping[str, Any]) -> None:
        """Set the provider configuration.

        Args:
            config: A ProviderConfig, or a mapping validated into one.
        """
        if not isinstance(config, ProviderConfig):
            config = ProviderConfig.model_validate(dict(config))
        self._config = config

    def get_rates(self, shipment) -> list[ShippingRate]:
        """Fetch rates from the USPS API.

        Raises:
            ShipmentNotProvidedError: If shipment is None.
            ConfigurationError: If set_config() was not called or has no user ID.
            USPSServiceError: Propagated unmodified from the client.
        """
        if shipment is None:
            raise ShipmentNotProvidedError()
        return fetch_rates(
            shipment, self._require_config(), self._client, self._usps_shipment
        )

    def check_delivery_date(self, shipment) -> dict[str, Any]:
        """Check the delivery date of a USPS shipment.

        Diagnostic pass-through: the raw service delivery response is
        returned as USPS sent it.

        Raises:
            ShipmentNotProvidedError: If shipment is None.
            ConfigurationError: If set_config() was not called or has no user ID.
            USPSServiceError: Propagated unmodified from the client.
        """
        if shipment is None:
            raise ShipmentNotProvidedError()

        config = self._require_config()
        _configure_client(self._client, config)

        origin_zip = normalize_zip(shipment.order.store.address.postal_code)
        destination_zip = normalize_zip(shipment.shipping_profile.address.postal_code)
        return self._client.service_delivery(
            ROUTE_TYPE_GROUND, origin_zip, destination_zip
        )

    def _require_config(self) -> ProviderConfig:
        if self._config is None:
            raise ConfigurationError("set_config() must be called before requesting rates")
        return self._config
