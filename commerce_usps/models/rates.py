"""Carrier-side request and rate records.

``CarrierPackageRequest`` is what the shipment mapper produces and the
USPS client serializes; ``PostageEntry`` validates one entry of the raw
RateV4 response; ``ShippingRate`` is the normalized record handed back
to the store.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from commerce_usps.services.usps_constants import (
    DEFAULT_CURRENCY_CODE,
    PACKAGE_FIELD_ORDER,
    Container,
    PackageSize,
    RateService,
)


@dataclass
class CarrierAddress:
    """Address fields in USPS naming (``Zip5``, ``FirmName``...)."""

    address: str = ""
    apt: str = ""
    city: str = ""
    state: str = ""
    zip5: str = ""
    zip4: str = ""
    firm_name: str = ""


@dataclass
class CarrierPackageRequest:
    """One RateV4 ``<Package>`` descriptor.

    ``pounds`` and ``ounces`` stay None for a zero weight so USPS applies
    its own default instead of receiving explicit zeros.
    """

    zip_origination: str = ""
    zip_destination: str = ""
    pounds: int | None = None
    ounces: Decimal | None = None
    service: str = RateService.ALL.value
    container: str = Container.VARIABLE.value
    size: str = PackageSize.REGULAR.value
    machinable: bool = True
    ship_date: str = ""
    origin: CarrierAddress = field(default_factory=CarrierAddress)
    destination: CarrierAddress = field(default_factory=CarrierAddress)

    def to_xml_fields(self) -> dict[str, str]:
        """Return the package's XML child elements in schema order.

        Unset weight fields are left out entirely.
        """
        values = {
            "Service": self.service,
            "ZipOrigination": self.zip_origination,
            "ZipDestination": self.zip_destination,
            "Pounds": None if self.pounds is None else str(self.pounds),
            "Ounces": None if self.ounces is None else _format_ounces(self.ounces),
            "Container": self.container,
            "Size": self.size,
            "Machinable": "true" if self.machinable else "false",
            "ShipDate": self.ship_date,
        }
        return {
            name: values[name]
            for name in PACKAGE_FIELD_ORDER
            if values[name] is not None
        }


def _format_ounces(ounces: Decimal) -> str:
    """Render ounces without exponent or trailing zeros ("8", "8.5")."""
    return format(ounces.normalize(), "f")


class PostageEntry(BaseModel):
    """One ``<Postage>`` element of a RateV4 response, as parsed by xmltodict."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    class_id: str = Field(alias="@CLASSID")
    mail_service: str = Field(default="", alias="MailService")
    rate: Decimal = Field(alias="Rate")

    @field_validator("class_id", mode="before")
    @classmethod
    def _strip_class_id(cls, value: Any) -> str:
        if value is None or str(value).strip() == "":
            raise ValueError("CLASSID is empty")
        return str(value).strip()

    @field_validator("mail_service", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> str:
        return "" if value is None else str(value)


@dataclass(frozen=True)
class Price:
    """A money amount."""

    number: Decimal
    currency_code: str = DEFAULT_CURRENCY_CODE

    def __str__(self) -> str:
        return f"{self.number} {self.currency_code}"


@dataclass(frozen=True)
class ShippingRate:
    """A normalized shipping option offered at checkout.

    Attributes:
        service_code: USPS CLASSID of the service.
        service_name: Display name with USPS markup removed.
        price: Postage for the package.
    """

    service_code: str
    service_name: str
    price: Price

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON responses."""
        return {
            "serviceCode": self.service_code,
            "serviceName": self.service_name,
            "amount": str(self.price.number),
            "currencyCode": self.price.currency_code,
        }
