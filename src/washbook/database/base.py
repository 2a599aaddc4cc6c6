"""Abstract database interface."""

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from datetime import datetime
from decimal import Decimal
from typing import Optional

# Import entities directly to avoid circular import through domain/__init__.py
from washbook.domain.entities import (
    User,
    WalletTransaction,
    Vendor,
    Service,
    ServiceCategory,
    Offer,
    Appointment,
    CustomerDetails,
    SupportTicket,
    TicketResponse,
)


class Database(ABC):
    """Abstract database interface for washbook.

    Every write commits immediately unless it runs inside ``atomic()``, in
    which case it becomes part of that unit and commits with it.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    @abstractmethod
    def atomic(self) -> AbstractContextManager[None]:
        """Open an atomic unit of work.

        Reads inside the block lock the rows they return where the backend
        supports it. All writes commit together when the block exits
        normally and are rolled back if it raises. Nested blocks join the
        outermost one.
        """
        pass

    # User operations
    @abstractmethod
    def create_user(
        self,
        email: str,
        first_name: str,
        last_name: str,
        role: str,
        referral_code: str,
        phone: Optional[str] = None,
    ) -> int:
        """Create a user with an empty wallet. Returns user ID."""
        pass

    @abstractmethod
    def get_user(self, user_id: int, for_update: bool = False) -> Optional[User]:
        """Get user by ID, wallet included."""
        pass

    @abstractmethod
    def get_user_by_email(self, email: str) -> Optional[User]:
        """Get user by email address."""
        pass

    @abstractmethod
    def get_user_by_referral_code(self, referral_code: str) -> Optional[User]:
        """Get the owner of a referral code."""
        pass

    @abstractmethod
    def list_users(self, role: Optional[str] = None) -> list[User]:
        """List users, optionally filtered by role."""
        pass

    @abstractmethod
    def update_user(
        self,
        user_id: int,
        first_name: Optional[str] = None,
        last_name: Optional[str] = None,
        phone: Optional[str] = None,
        banned: Optional[bool] = None,
        verified: Optional[bool] = None,
        used_referral_code: Optional[str] = None,
    ) -> None:
        """Update user profile fields."""
        pass

    @abstractmethod
    def increment_referral_count(self, user_id: int) -> None:
        """Add one to the user's successful referral count."""
        pass

    @abstractmethod
    def delete_user(self, user_id: int) -> None:
        """Delete a user with their appointments, wallet history and owned vendors."""
        pass

    # Wallet operations
    @abstractmethod
    def append_wallet_transaction(
        self,
        user_id: int,
        amount: int,
        type: str,
        description: str,
        service_id: Optional[int] = None,
        appointment_id: Optional[int] = None,
    ) -> str:
        """Append a ledger entry and move the wallet balance by the same amount.

        Both effects are applied in one write. Returns the transaction ID.
        """
        pass

    @abstractmethod
    def list_wallet_transactions(self, user_id: int) -> list[WalletTransaction]:
        """List a user's wallet transactions in insertion order."""
        pass

    # Vendor operations
    @abstractmethod
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
        """Create an unverified vendor. Returns vendor ID."""
        pass

    @abstractmethod
    def get_vendor(self, vendor_id: int) -> Optional[Vendor]:
        """Get vendor by ID, banned or not."""
        pass

    @abstractmethod
    def get_vendor_by_user(self, user_id: int) -> Optional[Vendor]:
        """Get the vendor owned by a user."""
        pass

    @abstractmethod
    def vendor_field_exists(
        self, field_name: str, value: str, exclude_vendor_id: Optional[int] = None
    ) -> bool:
        """Check whether any vendor already uses a business_id or phone_number."""
        pass

    @abstractmethod
    def list_vendors(
        self,
        verified: Optional[bool] = None,
        banned: Optional[bool] = None,
        city: Optional[str] = None,
    ) -> list[Vendor]:
        """List vendors with optional filters. City matching is case-insensitive."""
        pass

    @abstractmethod
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
        verified: Optional[bool] = None,
        banned: Optional[bool] = None,
        rating: Optional[float] = None,
        rating_count: Optional[int] = None,
    ) -> None:
        """Update vendor fields."""
        pass

    @abstractmethod
    def delete_vendor(self, vendor_id: int) -> None:
        """Delete a vendor with its services, categories and appointments."""
        pass

    # Service operations
    @abstractmethod
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
        """Create a service. Returns service ID."""
        pass

    @abstractmethod
    def get_service(self, service_id: int, for_update: bool = False) -> Optional[Service]:
        """Get service by ID."""
        pass

    @abstractmethod
    def list_services(
        self, vendor_id: Optional[int] = None, available: Optional[bool] = None
    ) -> list[Service]:
        """List services, optionally filtered by vendor and availability."""
        pass

    @abstractmethod
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
        """Update service fields."""
        pass

    @abstractmethod
    def delete_service(self, service_id: int) -> None:
        """Delete a service. Appointments referencing it are left untouched."""
        pass

    # Service category operations
    @abstractmethod
    def create_service_category(
        self,
        vendor_id: int,
        name: str,
        description: Optional[str] = None,
        icon: Optional[str] = None,
        order: int = 0,
    ) -> int:
        """Create a service category. Returns category ID."""
        pass

    @abstractmethod
    def get_service_category(self, category_id: int) -> Optional[ServiceCategory]:
        """Get service category by ID."""
        pass

    @abstractmethod
    def list_service_categories(self, vendor_id: int) -> list[ServiceCategory]:
        """List a vendor's service categories sorted by order."""
        pass

    @abstractmethod
    def update_service_category(
        self,
        category_id: int,
        name: Optional[str] = None,
        description: Optional[str] = None,
        icon: Optional[str] = None,
        order: Optional[int] = None,
    ) -> None:
        """Update service category fields."""
        pass

    # Offer operations
    @abstractmethod
    def create_offer(
        self,
        vendor_id: int,
        title: str,
        description: str,
        start_date: datetime,
        end_date: datetime,
        service_id: Optional[int] = None,
        discount_percentage: int = 0,
        price: Optional[Decimal] = None,
        original_price: Optional[Decimal] = None,
        active: bool = True,
    ) -> int:
        """Create an offer. Returns offer ID."""
        pass

    @abstractmethod
    def get_offer(self, offer_id: int) -> Optional[Offer]:
        """Get offer by ID."""
        pass

    @abstractmethod
    def list_offers(self, vendor_id: int) -> list[Offer]:
        """List a vendor's offers, latest start date first."""
        pass

    @abstractmethod
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
        """Update offer fields."""
        pass

    # Appointment operations
    @abstractmethod
    def create_appointment(
        self,
        vendor_id: int,
        service_id: Optional[int],
        customer_id: Optional[int],
        date: datetime,
        duration: int,
        total_price: Decimal,
        status: str,
        customer_details: CustomerDetails,
        coins_used: int = 0,
        notes: Optional[str] = None,
    ) -> int:
        """Create an appointment. Returns appointment ID."""
        pass

    @abstractmethod
    def get_appointment(
        self, appointment_id: int, for_update: bool = False
    ) -> Optional[Appointment]:
        """Get appointment by ID."""
        pass

    @abstractmethod
    def list_appointments(
        self, customer_id: Optional[int] = None, vendor_id: Optional[int] = None
    ) -> list[Appointment]:
        """List appointments newest date first, optionally filtered."""
        pass

    @abstractmethod
    def update_appointment(
        self,
        appointment_id: int,
        status: Optional[str] = None,
        date: Optional[datetime] = None,
        duration: Optional[int] = None,
        total_price: Optional[Decimal] = None,
        notes: Optional[str] = None,
        cancel_reason: Optional[str] = None,
        coin_reward_processed: Optional[bool] = None,
        coin_reward_amount: Optional[int] = None,
        coin_reward_at: Optional[datetime] = None,
        feedback_rating: Optional[int] = None,
        feedback_comment: Optional[str] = None,
    ) -> None:
        """Update appointment fields."""
        pass

    # Support ticket operations
    @abstractmethod
    def create_support_ticket(
        self,
        user_id: int,
        user_email: str,
        user_role: str,
        subject: str,
        message: str,
        category: str,
        priority: str = "medium",
    ) -> int:
        """Create an open support ticket. Returns ticket ID."""
        pass

    @abstractmethod
    def get_support_ticket(self, ticket_id: int) -> Optional[SupportTicket]:
        """Get support ticket by ID, responses included."""
        pass

    @abstractmethod
    def list_support_tickets(
        self, user_id: Optional[int] = None, status: Optional[str] = None
    ) -> list[SupportTicket]:
        """List support tickets newest first, optionally filtered."""
        pass

    @abstractmethod
    def add_ticket_response(
        self, ticket_id: int, user_id: int, user_role: str, message: str
    ) -> TicketResponse:
        """Append a response to a ticket."""
        pass

    @abstractmethod
    def update_ticket_status(self, ticket_id: int, status: str) -> None:
        """Change a ticket's status."""
        pass
