"""Service layer for commerce_usps.

Shipment mapping, the USPS client, the rate request service and the
shipping method adapter. Import from the submodules directly.
"""
