"""Utility for resolving vendor business names to IDs."""

from washbook.domain.errors import VendorNotFoundError
from washbook.domain.vendor import VendorService


def resolve_vendor(vendor_service: VendorService, vendor: str | int) -> int:
    """Resolve vendor business name or ID to vendor ID.

    Args:
        vendor_service: VendorService instance
        vendor: Business name (str) or ID (int or string representation of int)

    Returns:
        Vendor ID

    Raises:
        VendorNotFoundError: If vendor is not found
    """
    try:
        vendor_id = int(vendor)
    except (ValueError, TypeError):
        vendor_id = None

    if vendor_id is not None:
        return vendor_service.require_vendor(vendor_id).id

    name = str(vendor).strip().lower()
    for candidate in vendor_service.list_vendors(include_banned=True):
        if candidate.business_name.lower() == name:
            return candidate.id

    raise VendorNotFoundError(f"Vendor '{vendor}' not found")
