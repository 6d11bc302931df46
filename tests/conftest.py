"""Root-level pytest fixtures for all tests.

Provides shared fixtures:
- A default shipment (90210 -> 10001, 32 oz)
- A fake carrier client answering with Priority Mail and Media Mail
- A test-mode provider configuration
"""

import pytest

from commerce_usps.config import ProviderConfig
from commerce_usps.models.shipment import Shipment
from tests.helpers.usps_fakes import FakeCarrierClient, make_shipment


# ============================================================================
# Pytest Markers
# ============================================================================


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "integration: marks tests requiring the live USPS Web Tools API"
    )


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def shipment() -> Shipment:
    """A 32 oz shipment from 90210 to 10001."""
    return make_shipment()


@pytest.fixture
def fake_client() -> FakeCarrierClient:
    """Fake client answering with Priority Mail and Media Mail."""
    return FakeCarrierClient()


@pytest.fixture
def provider_config() -> ProviderConfig:
    """Test-mode configuration excluding Media Mail."""
    return ProviderConfig(
        api_information={"user_id": "123ACME", "password": "hunter2", "mode": "test"},
        conditions={"conditions": ["6"]},
    )
