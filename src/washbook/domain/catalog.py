"""Catalog domain service: vendor services and service categories."""

import logging
from decimal import Decimal
from typing import Optional

from washbook.database.base import Database
from washbook.domain.entities import Service, ServiceCategory
from washbook.domain.errors import (
    NotFoundError,
    ServiceNotFoundError,
    ValidationError,
    VendorNotFoundError,
    service_not_found,
    vendor_not_found,
)

logger = logging.getLogger(__name__)

RECOMMENDED_LIMIT = 5


def _validate_service_fields(
    price: Optional[Decimal] = None,
    duration: Optional[int] = None,
    coin_reward: Optional[int] = None,
) -> None:
    if price is not None and Decimal(price) < 0:
        raise ValidationError("Price cannot be negative")
    if duration is not None and duration <= 0:
        raise ValidationError("Duration must be a positive number of minutes")
    if coin_reward is not None and coin_reward < 0:
        raise ValidationError("Coin reward cannot be negative")


class CatalogService:
    """Service for managing what vendors offer."""

    def __init__(self, db: Database):
        """Initialize catalog service.

        Args:
            db: Database instance
        """
        self.db = db

    def _require_vendor(self, vendor_id: int):
        vendor = self.db.get_vendor(vendor_id)
        if vendor is None:
            raise VendorNotFoundError(vendor_not_found(vendor_id))
        return vendor

    def create_service(
        self,
        vendor_id: int,
        name: str,
        price: Decimal,
        duration: int,
        description: str = "",
        category: Optional[str] = None,
        coin_reward: int = 0,
        available: bool = True,
    ) -> int:
        """Create a service for a vendor.

        Args:
            vendor_id: Offering vendor
            name: Service name
            price: Price, zero or more
            duration: Minutes, more than zero
            description: Free text shown to customers
            category: Optional category name
            coin_reward: Coins credited to the customer on completion
            available: Whether the service can be booked

        Returns:
            Service ID

        Raises:
            ValidationError: If price, duration or coin reward is invalid
            VendorNotFoundError: If the vendor does not exist
        """
        if not name or not name.strip():
            raise ValidationError("Service name is required")
        _validate_service_fields(price, duration, coin_reward)
        self._require_vendor(vendor_id)

        service_id = self.db.create_service(
            vendor_id=vendor_id,
            name=name.strip(),
            price=Decimal(price),
            duration=duration,
            description=description,
            category=category,
            coin_reward=coin_reward,
            available=available,
        )
        logger.info("Created service %s '%s' for vendor %s", service_id, name, vendor_id)
        return service_id

    def get_service(self, service_id: int) -> Optional[Service]:
        """Get service by ID."""
        return self.db.get_service(service_id)

    def require_service(self, service_id: int) -> Service:
        """Get service by ID or raise ServiceNotFoundError."""
        service = self.db.get_service(service_id)
        if service is None:
            raise ServiceNotFoundError(service_not_found(service_id))
        return service

    def update_service(
        self,
        service_id: int,
        name: Optional[str] = None,
        description: Optional[str] = None,
        price: Optional[Decimal] = None,
        duration: Optional[int] = None,
        category: Optional[str] = None,
        coin_reward: Optional[int] = None,
        available: Optional[bool] = None,
    ) -> None:
        """Update service fields. Only the given fields change.

        Raises:
            ValidationError: If price, duration or coin reward is invalid
            ServiceNotFoundError: If the service does not exist
        """
        _validate_service_fields(price, duration, coin_reward)
        self.require_service(service_id)
        self.db.update_service(
            service_id,
            name=name,
            description=description,
            price=Decimal(price) if price is not None else None,
            duration=duration,
            category=category,
            coin_reward=coin_reward,
            available=available,
        )

    def delete_service(self, service_id: int) -> None:
        """Delete a service.

        Existing appointments keep their reference; completing one of them
        later fails with ServiceNotFoundError.
        """
        self.require_service(service_id)
        self.db.delete_service(service_id)
        logger.info("Deleted service %s", service_id)

    def list_vendor_services(self, vendor_id: int) -> list[Service]:
        """List a vendor's services. Empty for a missing or banned vendor."""
        vendor = self.db.get_vendor(vendor_id)
        if vendor is None or vendor.banned:
            return []
        return self.db.list_services(vendor_id=vendor_id)

    def recommended_services(self, limit: int = RECOMMENDED_LIMIT) -> list[Service]:
        """Available services from verified, non-banned vendors."""
        vendor_ids = {vendor.id for vendor in self.db.list_vendors(verified=True, banned=False)}
        services = [
            service
            for service in self.db.list_services(available=True)
            if service.vendor_id in vendor_ids
        ]
        return services[:limit]

    # Categories

    def create_category(
        self,
        vendor_id: int,
        name: str,
        description: Optional[str] = None,
        icon: Optional[str] = None,
        order: int = 0,
    ) -> int:
        """Create a service category.

        Returns:
            Category ID

        Raises:
            ValidationError: If the name is empty
            VendorNotFoundError: If the vendor does not exist
        """
        if not name or not name.strip():
            raise ValidationError("Category name is required")
        self._require_vendor(vendor_id)
        return self.db.create_service_category(
            vendor_id=vendor_id,
            name=name.strip(),
            description=description,
            icon=icon,
            order=order,
        )

    def update_category(
        self,
        category_id: int,
        name: Optional[str] = None,
        description: Optional[str] = None,
        icon: Optional[str] = None,
        order: Optional[int] = None,
    ) -> None:
        """Update a service category."""
        if self.db.get_service_category(category_id) is None:
            raise NotFoundError(f"Service category {category_id} not found")
        self.db.update_service_category(
            category_id, name=name, description=description, icon=icon, order=order
        )

    def list_categories(self, vendor_id: int) -> list[ServiceCategory]:
        """List a vendor's categories sorted by display order."""
        return self.db.list_service_categories(vendor_id)
