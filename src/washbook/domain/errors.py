"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class PreconditionFailedError(DomainError):
    """Entity exists but its current state forbids the operation."""


class UserNotFoundError(NotFoundError):
    """User record is missing."""


class CustomerNotFoundError(NotFoundError):
    """Customer record is missing when coins are being redeemed."""


class VendorNotFoundError(NotFoundError):
    """Vendor record is missing."""


class ServiceNotFoundError(NotFoundError):
    """Service record is missing."""


class AppointmentNotFoundError(NotFoundError):
    """Appointment record is missing."""


class TicketNotFoundError(NotFoundError):
    """Support ticket is missing."""


class OfferNotFoundError(NotFoundError):
    """Offer record is missing."""


class VendorUnavailableError(PreconditionFailedError):
    """Vendor is missing or banned and cannot take bookings."""


class InsufficientCoinsError(PreconditionFailedError):
    """Wallet balance is too low for the requested debit."""


class InvalidReferralCodeError(PreconditionFailedError):
    """No user owns the given referral code."""


class SelfReferralNotAllowedError(PreconditionFailedError):
    """User tried to redeem their own referral code."""


class ReferralAlreadyUsedError(PreconditionFailedError):
    """User has already redeemed a referral code."""


class InvalidStatusTransitionError(PreconditionFailedError):
    """Appointment cannot move from its current status to the requested one."""


def user_not_found(user_id: int) -> str:
    """Return message for missing user."""
    return f"User {user_id} not found"


def customer_not_found(customer_id: int) -> str:
    """Return message for missing customer during coin redemption."""
    return f"Customer {customer_id} not found"


def vendor_not_found(vendor_id: int) -> str:
    """Return message for missing vendor."""
    return f"Vendor {vendor_id} not found"


def vendor_unavailable(vendor_id: int) -> str:
    """Return message for a vendor that cannot take bookings."""
    return f"Vendor {vendor_id} is no longer available"


def service_not_found(service_id: int) -> str:
    """Return message for missing service."""
    return f"Service {service_id} not found"


def appointment_not_found(appointment_id: int) -> str:
    """Return message for missing appointment."""
    return f"Appointment {appointment_id} not found"


def ticket_not_found(ticket_id: int) -> str:
    """Return message for missing support ticket."""
    return f"Support ticket {ticket_id} not found"


def offer_not_found(offer_id: int) -> str:
    """Return message for missing offer."""
    return f"Offer {offer_id} not found"


def insufficient_coins(user_id: int, balance: int, requested: int) -> str:
    """Return message when a debit would overdraw a wallet."""
    return (
        f"Not enough coins: user {user_id} has {balance} "
        f"coin{'s' if balance != 1 else ''}, {requested} requested"
    )


def invalid_referral_code(code: str) -> str:
    """Return message for an unknown referral code."""
    return f"Invalid referral code '{code}'"


def self_referral(code: str) -> str:
    """Return message when a user redeems their own code."""
    return f"You cannot use your own referral code '{code}'"


def referral_already_used(user_id: int, code: str) -> str:
    """Return message when a user has already redeemed a code."""
    return f"User {user_id} has already used referral code '{code}'"


def invalid_status(value: str) -> str:
    """Return message for an unknown appointment status."""
    return f"Unknown appointment status '{value}'"


def invalid_transition(appointment_id: int, old: str, new: str) -> str:
    """Return message for a forbidden status change."""
    return f"Appointment {appointment_id} cannot move from '{old}' to '{new}'"


def duplicate_email(email: str) -> str:
    """Return message for a duplicate user email."""
    return f"User with email '{email}' already exists"


def duplicate_vendor_field(field_name: str, value: str) -> str:
    """Return message for a duplicate business ID or phone number."""
    return f"A vendor with {field_name} '{value}' already exists"
