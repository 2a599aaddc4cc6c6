"""Vendor domain service."""

import logging
from typing import Optional

from washbook.database.base import Database
from washbook.domain.entities import Vendor as VendorEntity
from washbook.domain.errors import (
    ConflictError,
    UserNotFoundError,
    VendorNotFoundError,
    duplicate_vendor_field,
    user_not_found,
    vendor_not_found,
)

logger = logging.getLogger(__name__)

# (name, description, icon, order) created for every new vendor
DEFAULT_SERVICE_CATEGORIES = [
    ("Basic wash", "Basic and quick washes", "car", 1),
    ("Interior cleaning", "Cleaning of the car interior", "armchair", 2),
    ("Premium", "Premium washes and treatments", "star", 3),
    ("Special services", "Special treatments and add-on services", "sparkles", 4),
]

SEARCH_LIMIT = 50


class VendorService:
    """Service for managing vendors."""

    def __init__(self, db: Database):
        """Initialize vendor service.

        Args:
            db: Database instance
        """
        self.db = db

    def _check_unique(self, field_name: str, value: Optional[str], vendor_id: Optional[int] = None):
        if value and self.db.vendor_field_exists(field_name, value, exclude_vendor_id=vendor_id):
            raise ConflictError(duplicate_vendor_field(field_name, value))

    def create_vendor(
        self,
        user_id: int,
        business_name: str,
        business_id: str,
        address: str,
        postal_code: str,
        city: str,
        phone_number: str,
        email: Optional[str] = None,
        description: Optional[str] = None,
    ) -> int:
        """Create a vendor profile together with its default service categories.

        New vendors start unverified with no rating.

        Returns:
            Vendor ID

        Raises:
            UserNotFoundError: If the owning user does not exist
            ConflictError: If the business ID or phone number is taken
        """
        if self.db.get_user(user_id) is None:
            raise UserNotFoundError(user_not_found(user_id))
        self._check_unique("business_id", business_id)
        self._check_unique("phone_number", phone_number)

        with self.db.atomic():
            vendor_id = self.db.create_vendor(
                user_id=user_id,
                business_name=business_name,
                business_id=business_id,
                address=address,
                postal_code=postal_code,
                city=city,
                phone_number=phone_number,
                email=email,
                description=description,
            )
            for name, category_description, icon, order in DEFAULT_SERVICE_CATEGORIES:
                self.db.create_service_category(
                    vendor_id=vendor_id,
                    name=name,
                    description=category_description,
                    icon=icon,
                    order=order,
                )

        logger.info("Created vendor %s '%s' for user %s", vendor_id, business_name, user_id)
        return vendor_id

    def get_vendor(self, vendor_id: int) -> Optional[VendorEntity]:
        """Get a vendor visible to customers.

        Returns:
            Vendor entity, or None if missing or banned
        """
        vendor = self.db.get_vendor(vendor_id)
        if vendor is None or vendor.banned:
            return None
        return vendor

    def get_vendor_by_user(self, user_id: int) -> Optional[VendorEntity]:
        """Get the non-banned vendor owned by a user."""
        vendor = self.db.get_vendor_by_user(user_id)
        if vendor is None or vendor.banned:
            return None
        return vendor

    def require_vendor(self, vendor_id: int) -> VendorEntity:
        """Get a vendor (banned included) or raise VendorNotFoundError."""
        vendor = self.db.get_vendor(vendor_id)
        if vendor is None:
            raise VendorNotFoundError(vendor_not_found(vendor_id))
        return vendor

    def list_vendors(self, include_banned: bool = False) -> list[VendorEntity]:
        """List vendors for administration."""
        if include_banned:
            return self.db.list_vendors()
        return self.db.list_vendors(banned=False)

    def update_vendor(
        self,
        vendor_id: int,
        business_name: Optional[str] = None,
        address: Optional[str] = None,
        postal_code: Optional[str] = None,
        city: Optional[str] = None,
        phone_number: Optional[str] = None,
        email: Optional[str] = None,
        description: Optional[str] = None,
    ) -> None:
        """Update vendor profile fields.

        Raises:
            VendorNotFoundError: If the vendor does not exist
            ConflictError: If the new phone number is taken
        """
        self.require_vendor(vendor_id)
        self._check_unique("phone_number", phone_number, vendor_id=vendor_id)
        self.db.update_vendor(
            vendor_id,
            business_name=business_name,
            address=address,
            postal_code=postal_code,
            city=city,
            phone_number=phone_number,
            email=email,
            description=description,
        )

    def set_verified(self, vendor_id: int, verified: bool) -> None:
        """Verify or unverify a vendor."""
        self.require_vendor(vendor_id)
        self.db.update_vendor(vendor_id, verified=verified)
        logger.info("Vendor %s %s", vendor_id, "verified" if verified else "unverified")

    def set_banned(self, vendor_id: int, banned: bool) -> None:
        """Ban or unban a vendor. Banned vendors cannot take bookings."""
        self.require_vendor(vendor_id)
        self.db.update_vendor(vendor_id, banned=banned)
        logger.info("Vendor %s %s", vendor_id, "banned" if banned else "unbanned")

    def search_vendors(self, query: str, city: Optional[str] = None) -> list[VendorEntity]:
        """Find verified, non-banned vendors offering a matching service.

        Args:
            query: Text matched against service names and descriptions
            city: Optional city the vendor must be in (case-insensitive)

        Returns:
            Vendors with a matching service, or every candidate vendor when
            none of their services match
        """
        candidates = self.db.list_vendors(verified=True, banned=False, city=city)[:SEARCH_LIMIT]
        if not candidates:
            return []

        term = query.strip().lower()
        matching_vendor_ids = {
            service.vendor_id
            for service in self.db.list_services()
            if term in service.name.lower() or term in (service.description or "").lower()
        }
        matches = [vendor for vendor in candidates if vendor.id in matching_vendor_ids]
        return matches or candidates

    def delete_vendor(self, vendor_id: int) -> None:
        """Delete a vendor with its services, categories and appointments.

        Raises:
            VendorNotFoundError: If the vendor does not exist
        """
        self.require_vendor(vendor_id)
        with self.db.atomic():
            self.db.delete_vendor(vendor_id)
        logger.info("Deleted vendor %s", vendor_id)
