"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, so the schema (for example the
flattened customer details on appointments) can change without touching
the domain services.
"""

from decimal import Decimal

from washbook.domain import entities as domain
from washbook.domain.status import AppointmentStatus
from washbook.database.models import (
    User as ORMUser,
    WalletTransaction as ORMWalletTransaction,
    Vendor as ORMVendor,
    Service as ORMService,
    ServiceCategory as ORMServiceCategory,
    Offer as ORMOffer,
    Appointment as ORMAppointment,
    SupportTicket as ORMSupportTicket,
    TicketResponse as ORMTicketResponse,
)


def wallet_transaction_to_domain(orm_txn: ORMWalletTransaction) -> domain.WalletTransaction:
    """Convert SQLAlchemy WalletTransaction model to domain WalletTransaction entity."""
    return domain.WalletTransaction(
        id=orm_txn.uid,
        amount=orm_txn.amount,
        type=orm_txn.type,
        description=orm_txn.description,
        timestamp=orm_txn.timestamp,
        service_id=orm_txn.service_id,
        appointment_id=orm_txn.appointment_id,
    )


def user_to_domain(orm_user: ORMUser) -> domain.User:
    """Convert SQLAlchemy User model to domain User entity, wallet included."""
    wallet = domain.Wallet(
        coins=orm_user.coins,
        transactions=tuple(
            wallet_transaction_to_domain(txn) for txn in orm_user.wallet_transactions
        ),
    )
    return domain.User(
        id=orm_user.id,
        email=orm_user.email,
        first_name=orm_user.first_name,
        last_name=orm_user.last_name,
        role=orm_user.role,
        phone=orm_user.phone,
        banned=orm_user.banned,
        verified=orm_user.verified,
        referral_code=orm_user.referral_code,
        referral_count=orm_user.referral_count,
        used_referral_code=orm_user.used_referral_code,
        created_at=orm_user.created_at,
        updated_at=orm_user.updated_at,
        wallet=wallet,
    )


def vendor_to_domain(orm_vendor: ORMVendor) -> domain.Vendor:
    """Convert SQLAlchemy Vendor model to domain Vendor entity."""
    return domain.Vendor(
        id=orm_vendor.id,
        user_id=orm_vendor.user_id,
        business_name=orm_vendor.business_name,
        business_id=orm_vendor.business_id,
        address=orm_vendor.address,
        postal_code=orm_vendor.postal_code,
        city=orm_vendor.city,
        phone_number=orm_vendor.phone_number,
        email=orm_vendor.email,
        description=orm_vendor.description,
        rating=orm_vendor.rating,
        rating_count=orm_vendor.rating_count,
        verified=orm_vendor.verified,
        banned=orm_vendor.banned,
        created_at=orm_vendor.created_at,
        updated_at=orm_vendor.updated_at,
    )


def service_to_domain(orm_service: ORMService) -> domain.Service:
    """Convert SQLAlchemy Service model to domain Service entity."""
    return domain.Service(
        id=orm_service.id,
        vendor_id=orm_service.vendor_id,
        name=orm_service.name,
        description=orm_service.description,
        price=Decimal(orm_service.price),
        duration=orm_service.duration,
        category=orm_service.category,
        coin_reward=orm_service.coin_reward,
        available=orm_service.available,
        created_at=orm_service.created_at,
    )


def offer_to_domain(orm_offer: ORMOffer) -> domain.Offer:
    """Convert SQLAlchemy Offer model to domain Offer entity."""
    return domain.Offer(
        id=orm_offer.id,
        vendor_id=orm_offer.vendor_id,
        title=orm_offer.title,
        description=orm_offer.description,
        start_date=orm_offer.start_date,
        end_date=orm_offer.end_date,
        service_id=orm_offer.service_id,
        discount_percentage=orm_offer.discount_percentage,
        price=Decimal(orm_offer.price) if orm_offer.price is not None else None,
        original_price=(
            Decimal(orm_offer.original_price) if orm_offer.original_price is not None else None
        ),
        active=orm_offer.active,
        created_at=orm_offer.created_at,
        updated_at=orm_offer.updated_at,
    )


def service_category_to_domain(orm_category: ORMServiceCategory) -> domain.ServiceCategory:
    """Convert SQLAlchemy ServiceCategory model to domain ServiceCategory entity."""
    return domain.ServiceCategory(
        id=orm_category.id,
        vendor_id=orm_category.vendor_id,
        name=orm_category.name,
        description=orm_category.description,
        icon=orm_category.icon,
        order=orm_category.order,
        created_at=orm_category.created_at,
    )


def appointment_to_domain(orm_appointment: ORMAppointment) -> domain.Appointment:
    """Convert SQLAlchemy Appointment model to domain Appointment entity."""
    return domain.Appointment(
        id=orm_appointment.id,
        vendor_id=orm_appointment.vendor_id,
        service_id=orm_appointment.service_id,
        customer_id=orm_appointment.customer_id,
        date=orm_appointment.date,
        duration=orm_appointment.duration,
        total_price=Decimal(orm_appointment.total_price),
        coins_used=orm_appointment.coins_used,
        status=AppointmentStatus(orm_appointment.status),
        coin_reward_processed=orm_appointment.coin_reward_processed,
        coin_reward_amount=orm_appointment.coin_reward_amount,
        coin_reward_at=orm_appointment.coin_reward_at,
        customer_details=domain.CustomerDetails(
            first_name=orm_appointment.customer_first_name,
            last_name=orm_appointment.customer_last_name,
            email=orm_appointment.customer_email,
            phone=orm_appointment.customer_phone,
            license_plate=orm_appointment.license_plate,
        ),
        notes=orm_appointment.notes,
        cancel_reason=orm_appointment.cancel_reason,
        feedback_rating=orm_appointment.feedback_rating,
        feedback_comment=orm_appointment.feedback_comment,
        created_at=orm_appointment.created_at,
        updated_at=orm_appointment.updated_at,
    )


def ticket_response_to_domain(orm_response: ORMTicketResponse) -> domain.TicketResponse:
    """Convert SQLAlchemy TicketResponse model to domain TicketResponse entity."""
    return domain.TicketResponse(
        id=orm_response.id,
        ticket_id=orm_response.ticket_id,
        user_id=orm_response.user_id,
        user_role=orm_response.user_role,
        message=orm_response.message,
        created_at=orm_response.created_at,
    )


def support_ticket_to_domain(orm_ticket: ORMSupportTicket) -> domain.SupportTicket:
    """Convert SQLAlchemy SupportTicket model to domain SupportTicket entity."""
    return domain.SupportTicket(
        id=orm_ticket.id,
        user_id=orm_ticket.user_id,
        user_email=orm_ticket.user_email,
        user_role=orm_ticket.user_role,
        subject=orm_ticket.subject,
        message=orm_ticket.message,
        status=orm_ticket.status,
        priority=orm_ticket.priority,
        category=orm_ticket.category,
        created_at=orm_ticket.created_at,
        updated_at=orm_ticket.updated_at,
        responses=tuple(ticket_response_to_domain(r) for r in orm_ticket.responses),
    )
