"""Live USPS Web Tools smoke test.

Needs a registered Web Tools user ID in USPS_USER_ID and
RUN_USPS_INTEGRATION=1; skipped otherwise.
"""

import os

import pytest

from commerce_usps import USPSShippingMethod
from tests.helpers.usps_fakes import make_shipment


@pytest.mark.skipif(
    not (os.environ.get("RUN_USPS_INTEGRATION") and os.environ.get("USPS_USER_ID")),
    reason="Set RUN_USPS_INTEGRATION=1 and USPS_USER_ID to run live USPS tests",
)
@pytest.mark.integration
class TestLiveRates:
    """Round trip against USPS Web Tools."""

    def test_domestic_quote(self):
        """A 2 lb domestic package gets at least one priced service."""
        config = {
            "api_information": {
                "user_id": os.environ["USPS_USER_ID"],
                "mode": os.environ.get("USPS_MODE", "live"),
            },
        }
        with USPSShippingMethod(config) as method:
            rates = method.calculate_rates(make_shipment(ship_date=None))

        assert rates
        assert all(rate.price.number > 0 for rate in rates)
        assert all("&lt;sup&gt;" not in rate.service_name for rate in rates)
