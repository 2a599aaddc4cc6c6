"""Booking domain service: appointment creation, status changes and coin rewards."""

import logging
from datetime import datetime, UTC
from decimal import Decimal
from typing import Optional

from washbook.database.base import Database
from washbook.domain.entities import Appointment, CustomerDetails
from washbook.domain.errors import (
    AppointmentNotFoundError,
    ConflictError,
    CustomerNotFoundError,
    InsufficientCoinsError,
    InvalidStatusTransitionError,
    ServiceNotFoundError,
    UserNotFoundError,
    ValidationError,
    VendorNotFoundError,
    VendorUnavailableError,
    appointment_not_found,
    customer_not_found,
    insufficient_coins,
    invalid_transition,
    service_not_found,
    user_not_found,
    vendor_not_found,
    vendor_unavailable,
)
from washbook.domain.events import AppointmentCompleted, AppointmentCreated, EventBus
from washbook.domain.ledger import LedgerService
from washbook.domain.status import (
    AppointmentStatus,
    can_transition,
    parse_status,
    reward_eligible,
)

logger = logging.getLogger(__name__)

COINS_USED_DESCRIPTION = "Coins used for discount"


def reward_description(service_name: str) -> str:
    return f"Coins from service: {service_name}"


class BookingService:
    """Service for booking appointments and moving them through their lifecycle."""

    def __init__(self, db: Database, events: Optional[EventBus] = None):
        """Initialize booking service.

        Args:
            db: Database instance
            events: Event bus that receives AppointmentCreated and
                AppointmentCompleted after each commit
        """
        self.db = db
        self.events = events if events is not None else EventBus()
        self.ledger = LedgerService(db)

    def _require_bookable_vendor(self, vendor_id: int):
        vendor = self.db.get_vendor(vendor_id)
        if vendor is None or vendor.banned:
            raise VendorUnavailableError(vendor_unavailable(vendor_id))
        return vendor

    def _resolve_duration(self, service_id: Optional[int], duration: Optional[int]) -> int:
        if duration is None:
            if service_id is None:
                raise ValidationError("Duration is required when no service is given")
            service = self.db.get_service(service_id)
            if service is None:
                raise ServiceNotFoundError(service_not_found(service_id))
            duration = service.duration
        if duration <= 0:
            raise ValidationError("Duration must be a positive number of minutes")
        return duration

    def create_appointment(
        self,
        vendor_id: int,
        service_id: int,
        customer_id: int,
        date: datetime,
        total_price: Decimal,
        customer_details: CustomerDetails,
        duration: Optional[int] = None,
        notes: Optional[str] = None,
        coins_to_use: int = 0,
    ) -> int:
        """Book a confirmed appointment, optionally redeeming coins.

        When coins are redeemed, the wallet debit and the appointment insert
        commit together or not at all.

        Args:
            vendor_id: Vendor to book with
            service_id: Booked service
            customer_id: Booking customer
            date: Appointment start
            total_price: Price after discounts
            customer_details: Contact details captured with the booking
            duration: Minutes; defaults to the service's duration
            notes: Optional free text for the vendor
            coins_to_use: Coins to redeem for a discount

        Returns:
            Appointment ID

        Raises:
            ValidationError: If coins_to_use is negative or the duration is invalid
            VendorUnavailableError: If the vendor is missing or banned
            CustomerNotFoundError: If the customer is missing when coins are redeemed
            InsufficientCoinsError: If the customer has fewer coins than requested
        """
        if coins_to_use < 0:
            raise ValidationError("Coins to use cannot be negative")

        vendor = self._require_bookable_vendor(vendor_id)
        duration = self._resolve_duration(service_id, duration)

        booking = dict(
            vendor_id=vendor_id,
            service_id=service_id,
            customer_id=customer_id,
            date=date,
            duration=duration,
            total_price=total_price,
            status=AppointmentStatus.CONFIRMED.value,
            customer_details=customer_details,
            coins_used=coins_to_use,
            notes=notes,
        )

        if coins_to_use > 0:
            with self.db.atomic():
                customer = self.db.get_user(customer_id, for_update=True)
                if customer is None:
                    raise CustomerNotFoundError(customer_not_found(customer_id))
                if customer.wallet.coins < coins_to_use:
                    raise InsufficientCoinsError(
                        insufficient_coins(customer_id, customer.wallet.coins, coins_to_use)
                    )
                appointment_id = self.db.create_appointment(**booking)
                self.ledger.apply_delta(
                    customer_id,
                    -coins_to_use,
                    COINS_USED_DESCRIPTION,
                    appointment_id=appointment_id,
                )
        else:
            appointment_id = self.db.create_appointment(**booking)

        logger.info(
            "Booked appointment %s at vendor %s for customer %s (%d coins used)",
            appointment_id,
            vendor_id,
            customer_id,
            coins_to_use,
        )

        appointment = self.db.get_appointment(appointment_id)
        self.events.publish(AppointmentCreated(appointment=appointment, vendor=vendor))
        return appointment_id

    def create_pending_appointment(
        self,
        vendor_id: int,
        date: datetime,
        duration: int,
        total_price: Decimal,
        customer_details: CustomerDetails,
        service_id: Optional[int] = None,
        customer_id: Optional[int] = None,
        notes: Optional[str] = None,
    ) -> int:
        """Record an appointment awaiting vendor confirmation.

        Used for administrative entry, e.g. phone bookings. No coins move.

        Raises:
            VendorUnavailableError: If the vendor is missing or banned
        """
        self._require_bookable_vendor(vendor_id)
        duration = self._resolve_duration(service_id, duration)
        appointment_id = self.db.create_appointment(
            vendor_id=vendor_id,
            service_id=service_id,
            customer_id=customer_id,
            date=date,
            duration=duration,
            total_price=total_price,
            status=AppointmentStatus.PENDING.value,
            customer_details=customer_details,
            notes=notes,
        )
        logger.info("Recorded pending appointment %s at vendor %s", appointment_id, vendor_id)
        return appointment_id

    def get_appointment(self, appointment_id: int) -> Optional[Appointment]:
        """Get appointment by ID."""
        return self.db.get_appointment(appointment_id)

    def require_appointment(self, appointment_id: int) -> Appointment:
        """Get appointment by ID or raise AppointmentNotFoundError."""
        appointment = self.db.get_appointment(appointment_id)
        if appointment is None:
            raise AppointmentNotFoundError(appointment_not_found(appointment_id))
        return appointment

    def update_appointment(
        self,
        appointment_id: int,
        status: "Optional[str | AppointmentStatus]" = None,
        date: Optional[datetime] = None,
        duration: Optional[int] = None,
        total_price: Optional[Decimal] = None,
        notes: Optional[str] = None,
        cancel_reason: Optional[str] = None,
        strict: bool = False,
    ) -> bool:
        """Apply a partial update, crediting the coin reward on first completion.

        Args:
            appointment_id: Appointment to update
            status: New status, if changing it
            date: New start time
            duration: New duration in minutes
            total_price: New price
            notes: New notes
            cancel_reason: Reason recorded with a cancellation
            strict: Reject status changes outside the normal lifecycle
                (see ALLOWED_TRANSITIONS). Any change is accepted otherwise.
                The reward is issued at most once either way.

        Returns:
            True once the update is stored

        Raises:
            AppointmentNotFoundError: If the appointment does not exist
            InvalidStatusTransitionError: If strict and the status change is not allowed
            ServiceNotFoundError: If the booked service vanished before the reward
            UserNotFoundError: If the customer vanished before the reward
        """
        current = self.require_appointment(appointment_id)
        new_status = parse_status(status) if status is not None else None

        if new_status is not None and strict and not can_transition(current.status, new_status):
            raise InvalidStatusTransitionError(
                invalid_transition(appointment_id, current.status.value, new_status.value)
            )
        if duration is not None and duration <= 0:
            raise ValidationError("Duration must be a positive number of minutes")

        changes = dict(
            status=new_status.value if new_status is not None else None,
            date=date,
            duration=duration,
            total_price=total_price,
            notes=notes,
            cancel_reason=cancel_reason,
        )

        if new_status is not None and reward_eligible(
            current.status, new_status, current.coin_reward_processed
        ):
            if current.customer_id is None or current.service_id is None:
                logger.warning(
                    "Appointment %s has no customer or service; completing without coin reward",
                    appointment_id,
                )
            else:
                self._complete_with_reward(current, changes)
                return True
        elif (
            new_status == AppointmentStatus.COMPLETED
            and current.status != AppointmentStatus.COMPLETED
        ):
            logger.warning(
                "Appointment %s already received its coin reward; not crediting again",
                appointment_id,
            )

        self.db.update_appointment(appointment_id, **changes)
        logger.info("Updated appointment %s", appointment_id)
        return True

    def _complete_with_reward(self, current: Appointment, changes: dict) -> None:
        appointment_id = current.id
        reward = None
        with self.db.atomic():
            locked = self.db.get_appointment(appointment_id, for_update=True)
            if locked is None:
                raise AppointmentNotFoundError(appointment_not_found(appointment_id))

            if locked.coin_reward_processed:
                # A concurrent completion got here first
                logger.warning(
                    "Appointment %s was rewarded concurrently; not crediting again",
                    appointment_id,
                )
                self.db.update_appointment(appointment_id, **changes)
            else:
                service = self.db.get_service(locked.service_id, for_update=True)
                if service is None:
                    raise ServiceNotFoundError(service_not_found(locked.service_id))
                customer = self.db.get_user(locked.customer_id, for_update=True)
                if customer is None:
                    raise UserNotFoundError(user_not_found(locked.customer_id))

                reward = service.coin_reward
                if reward > 0:
                    self.ledger.apply_delta(
                        customer.id,
                        reward,
                        reward_description(service.name),
                        service_id=service.id,
                        appointment_id=appointment_id,
                    )
                self.db.update_appointment(
                    appointment_id,
                    coin_reward_processed=True,
                    coin_reward_amount=reward,
                    coin_reward_at=datetime.now(UTC),
                    **changes,
                )

        if reward is not None:
            logger.info(
                "Appointment %s completed, %d coins credited to customer %s",
                appointment_id,
                reward,
                current.customer_id,
            )
            self.events.publish(
                AppointmentCompleted(
                    appointment=self.db.get_appointment(appointment_id), coin_reward=reward
                )
            )

    def list_customer_appointments(self, customer_id: int) -> list[Appointment]:
        """List a customer's appointments, newest first."""
        return self.db.list_appointments(customer_id=customer_id)

    def list_vendor_appointments(self, vendor_id: int) -> list[Appointment]:
        """List a vendor's appointments, newest first.

        Returns an empty list for a missing or banned vendor.
        """
        vendor = self.db.get_vendor(vendor_id)
        if vendor is None or vendor.banned:
            return []
        return self.db.list_appointments(vendor_id=vendor_id)

    def add_feedback(self, appointment_id: int, rating: int, comment: str) -> None:
        """Store customer feedback and fold the rating into the vendor's average.

        Raises:
            ValidationError: If rating is outside 1-5
            AppointmentNotFoundError: If the appointment does not exist
            ConflictError: If feedback was already given for the appointment
            VendorNotFoundError: If the appointment's vendor no longer exists
        """
        if not 1 <= rating <= 5:
            raise ValidationError("Rating must be between 1 and 5")

        with self.db.atomic():
            appointment = self.db.get_appointment(appointment_id, for_update=True)
            if appointment is None:
                raise AppointmentNotFoundError(appointment_not_found(appointment_id))
            if appointment.feedback_rating is not None:
                raise ConflictError(f"Appointment {appointment_id} already has feedback")

            vendor = self.db.get_vendor(appointment.vendor_id)
            if vendor is None:
                raise VendorNotFoundError(vendor_not_found(appointment.vendor_id))

            new_rating = (vendor.rating * vendor.rating_count + rating) / (vendor.rating_count + 1)
            self.db.update_appointment(
                appointment_id, feedback_rating=rating, feedback_comment=comment
            )
            self.db.update_vendor(
                vendor.id,
                rating=round(new_rating, 1),
                rating_count=vendor.rating_count + 1,
            )
