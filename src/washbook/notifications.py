"""Outbound notifications for booking and account events.

Notifications hang off the domain event bus. Each channel is attempted
independently and a failure is logged, never raised back to the operation
that published the event.
"""

import logging
from abc import ABC, abstractmethod

from washbook.domain.entities import Appointment, User, Vendor
from washbook.domain.events import AppointmentCreated, EventBus, UserRegistered

logger = logging.getLogger(__name__)

NEW_BOOKING_SUBJECT = "New booking"


class Notifier(ABC):
    """Delivery port for customer and vendor messages."""

    @abstractmethod
    def send_appointment_confirmation(self, appointment: Appointment, vendor: Vendor) -> None:
        """Confirm a booking to the customer."""
        pass

    @abstractmethod
    def send_vendor_notification(self, vendor_id: int, subject: str, message: str) -> None:
        """Notify a vendor."""
        pass

    @abstractmethod
    def send_welcome(self, user: User) -> None:
        """Welcome a newly registered customer."""
        pass


class LoggingNotifier(Notifier):
    """Notifier that writes every message to the log instead of delivering it."""

    def send_appointment_confirmation(self, appointment: Appointment, vendor: Vendor) -> None:
        details = appointment.customer_details
        logger.info(
            "Booking confirmation to %s: appointment %s at %s on %s",
            details.email,
            appointment.id,
            vendor.business_name,
            appointment.date.isoformat(),
        )

    def send_vendor_notification(self, vendor_id: int, subject: str, message: str) -> None:
        logger.info("Vendor %s notification [%s]: %s", vendor_id, subject, message)

    def send_welcome(self, user: User) -> None:
        logger.info("Welcome message to %s (%s)", user.email, user.full_name)


def register_notification_handlers(bus: EventBus, notifier: Notifier) -> None:
    """Subscribe notifier-backed handlers to the event bus."""

    def on_appointment_created(event: AppointmentCreated) -> None:
        appointment = event.appointment
        try:
            notifier.send_appointment_confirmation(appointment, event.vendor)
        except Exception as e:
            logger.error(
                "Failed to send confirmation for appointment %s: %s", appointment.id, e
            )
        try:
            notifier.send_vendor_notification(
                event.vendor.id, NEW_BOOKING_SUBJECT, f"New booking made: {appointment.id}"
            )
        except Exception as e:
            logger.error(
                "Failed to notify vendor %s of appointment %s: %s",
                event.vendor.id,
                appointment.id,
                e,
            )

    def on_user_registered(event: UserRegistered) -> None:
        try:
            notifier.send_welcome(event.user)
        except Exception as e:
            logger.error("Failed to send welcome message to %s: %s", event.user.email, e)

    bus.subscribe(AppointmentCreated, on_appointment_created)
    bus.subscribe(UserRegistered, on_user_registered)
