"""Offer domain service: time-limited discounts advertised by vendors."""

import logging
from datetime import datetime
from decimal import Decimal
from typing import Optional

from washbook.database.base import Database
from washbook.domain.entities import Offer
from washbook.domain.errors import (
    OfferNotFoundError,
    ServiceNotFoundError,
    ValidationError,
    VendorNotFoundError,
    offer_not_found,
    service_not_found,
    vendor_not_found,
)

logger = logging.getLogger(__name__)

DEFAULT_DISCOUNT_PERCENTAGE = 10


def _validate_offer_fields(
    start_date: Optional[datetime] = None,
    end_date: Optional[datetime] = None,
    discount_percentage: Optional[int] = None,
    price: Optional[Decimal] = None,
    original_price: Optional[Decimal] = None,
) -> None:
    if start_date is not None and end_date is not None and end_date < start_date:
        raise ValidationError("Offer cannot end before it starts")
    if discount_percentage is not None and not 0 <= discount_percentage <= 100:
        raise ValidationError("Discount percentage must be between 0 and 100")
    for value in (price, original_price):
        if value is not None and Decimal(value) < 0:
            raise ValidationError("Offer prices cannot be negative")


class OfferService:
    """Service for vendor offers."""

    def __init__(self, db: Database):
        """Initialize offer service.

        Args:
            db: Database instance
        """
        self.db = db

    def _check_service(self, vendor_id: int, service_id: int) -> None:
        service = self.db.get_service(service_id)
        if service is None:
            raise ServiceNotFoundError(service_not_found(service_id))
        if service.vendor_id != vendor_id:
            raise ValidationError(
                f"Service {service_id} does not belong to vendor {vendor_id}"
            )

    def create_offer(
        self,
        vendor_id: int,
        title: str,
        description: str,
        start_date: datetime,
        end_date: datetime,
        service_id: Optional[int] = None,
        discount_percentage: int = DEFAULT_DISCOUNT_PERCENTAGE,
        price: Optional[Decimal] = None,
        original_price: Optional[Decimal] = None,
        active: bool = True,
    ) -> int:
        """Create an offer for a vendor.

        Args:
            vendor_id: Advertising vendor
            title: Headline shown to customers
            description: Offer details
            start_date: First moment the offer applies
            end_date: Last moment the offer applies
            service_id: Optional service of the same vendor the offer is for
            discount_percentage: Discount, 0-100
            price: Optional offer price
            original_price: Optional price before the offer
            active: Whether the offer is shown at all

        Returns:
            Offer ID

        Raises:
            ValidationError: If a field is missing or invalid
            VendorNotFoundError: If the vendor does not exist
            ServiceNotFoundError: If the service does not exist
        """
        if not title or not title.strip() or not description or not description.strip():
            raise ValidationError("Offer title and description are required")
        _validate_offer_fields(start_date, end_date, discount_percentage, price, original_price)
        if self.db.get_vendor(vendor_id) is None:
            raise VendorNotFoundError(vendor_not_found(vendor_id))
        if service_id is not None:
            self._check_service(vendor_id, service_id)

        offer_id = self.db.create_offer(
            vendor_id=vendor_id,
            title=title.strip(),
            description=description.strip(),
            start_date=start_date,
            end_date=end_date,
            service_id=service_id,
            discount_percentage=discount_percentage,
            price=Decimal(price) if price is not None else None,
            original_price=Decimal(original_price) if original_price is not None else None,
            active=active,
        )
        logger.info("Created offer %s '%s' for vendor %s", offer_id, title, vendor_id)
        return offer_id

    def get_offer(self, offer_id: int) -> Optional[Offer]:
        """Get offer by ID."""
        return self.db.get_offer(offer_id)

    def require_offer(self, offer_id: int) -> Offer:
        """Get offer by ID or raise OfferNotFoundError."""
        offer = self.db.get_offer(offer_id)
        if offer is None:
            raise OfferNotFoundError(offer_not_found(offer_id))
        return offer

    def update_offer(
        self,
        offer_id: int,
        title: Optional[str] = None,
        description: Optional[str] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
        service_id: Optional[int] = None,
        discount_percentage: Optional[int] = None,
        price: Optional[Decimal] = None,
        original_price: Optional[Decimal] = None,
        active: Optional[bool] = None,
    ) -> None:
        """Update offer fields. Only the given fields change.

        The date range is checked against the stored dates when only one
        end of it changes.

        Raises:
            OfferNotFoundError: If the offer does not exist
            ValidationError: If a field is invalid
            ServiceNotFoundError: If the new service does not exist
        """
        current = self.require_offer(offer_id)
        if title is not None and not title.strip():
            raise ValidationError("Offer title cannot be empty")
        _validate_offer_fields(
            start_date if start_date is not None else current.start_date,
            end_date if end_date is not None else current.end_date,
            discount_percentage,
            price,
            original_price,
        )
        if service_id is not None:
            self._check_service(current.vendor_id, service_id)

        self.db.update_offer(
            offer_id,
            title=title.strip() if title is not None else None,
            description=description,
            start_date=start_date,
            end_date=end_date,
            service_id=service_id,
            discount_percentage=discount_percentage,
            price=Decimal(price) if price is not None else None,
            original_price=Decimal(original_price) if original_price is not None else None,
            active=active,
        )

    def list_vendor_offers(self, vendor_id: int) -> list[Offer]:
        """List a vendor's offers, latest start date first."""
        return self.db.list_offers(vendor_id)

    def running_offers(self, vendor_id: int, on: Optional[datetime] = None) -> list[Offer]:
        """Active offers of a vendor whose date range includes on (default now)."""
        on = on or datetime.now()
        return [offer for offer in self.db.list_offers(vendor_id) if offer.is_running(on)]
