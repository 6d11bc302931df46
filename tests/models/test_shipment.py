"""Tests for shipment dataclasses."""

from datetime import date
from decimal import Decimal

import pytest

from commerce_usps.errors.domain import UnsupportedWeightUnitError
from commerce_usps.models.shipment import Address, Shipment, StoreAddress, Weight


class TestWeight:
    """Tests for weight unit conversion."""

    def test_number_coerced_to_decimal(self):
        """Numbers and strings become Decimal."""
        assert Weight("2.5", "LB").number == Decimal("2.5")
        assert Weight(3).number == Decimal("3")

    def test_unit_normalized(self):
        """Units are lowercased and stripped."""
        assert Weight(1, " LB ").unit == "lb"

    def test_pounds_to_ounces(self):
        """One pound is sixteen ounces."""
        assert Weight(Decimal("2"), "lb").convert("oz").number == Decimal("32")

    def test_kilograms_to_ounces(self):
        """Metric weights convert through the ounce factor."""
        ounces = Weight(Decimal("1"), "kg").convert("oz").number
        assert ounces.quantize(Decimal("0.01")) == Decimal("35.27")

    def test_same_unit(self):
        """Converting to the same unit keeps the amount."""
        weight = Weight(Decimal("8"), "oz").convert("oz")
        assert weight == Weight(Decimal("8"), "oz")

    def test_unknown_target_unit(self):
        """Unknown target units raise."""
        with pytest.raises(UnsupportedWeightUnitError) as exc_info:
            Weight(1, "oz").convert("stone")
        assert exc_info.value.unit == "stone"
        assert exc_info.value.code == "E-1002"

    def test_unknown_source_unit(self):
        """Unknown source units raise."""
        with pytest.raises(UnsupportedWeightUnitError):
            Weight(1, "ton").convert("oz")


class TestAddress:
    """Tests for address emptiness and construction."""

    def test_default_is_empty(self):
        """A fresh address is empty even with a country set."""
        assert Address().is_empty()
        assert Address(country_code="CA").is_empty()

    def test_whitespace_is_empty(self):
        """Whitespace-only fields do not count."""
        assert Address(locality="   ").is_empty()

    def test_any_field_fills_it(self):
        """A single field makes the address non-empty."""
        assert not Address(postal_code="10001").is_empty()

    def test_from_dict_tolerates_extra_and_none(self):
        """Unknown keys are ignored and None becomes empty."""
        address = Address.from_dict({"postal_code": 10001, "locality": None, "extra": "x"})
        assert address.postal_code == "10001"
        assert address.locality == ""
        assert address.country_code == "US"

    def test_store_address_name(self):
        """StoreAddress keeps the firm name alongside address fields."""
        address = StoreAddress.from_dict({"name": "Acme", "postal_code": "90210"})
        assert address.name == "Acme"
        assert address.postal_code == "90210"


class TestShipmentFromDict:
    """Tests for Shipment.from_dict."""

    def test_full_mapping(self):
        """Nested mappings build the full shipment graph."""
        shipment = Shipment.from_dict({
            "shipping_profile": {"address": {"postal_code": "10001"}},
            "store": {"address": {"postal_code": "90210", "name": "Acme"}},
            "weight": {"number": "2", "unit": "lb"},
            "ship_date": "2024-05-01",
        })

        assert shipment.shipping_profile.address.postal_code == "10001"
        assert shipment.order.store.address.name == "Acme"
        assert shipment.weight == Weight(Decimal("2"), "lb")
        assert shipment.ship_date == date(2024, 5, 1)

    def test_missing_profile_address(self):
        """No profile address leaves it unset."""
        shipment = Shipment.from_dict({"store": {"address": {"postal_code": "90210"}}})

        assert shipment.shipping_profile.address is None
        assert shipment.weight.number == Decimal("0")
        assert shipment.ship_date is None
