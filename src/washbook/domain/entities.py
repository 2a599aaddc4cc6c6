"""Domain model entities for washbook.

These are pure data classes representing business concepts, independent of
database schema. Services and the CLI only ever see these; the ORM rows stay
inside the database layer.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional

from washbook.domain.status import AppointmentStatus

CREDIT = "credit"
DEBIT = "debit"


@dataclass(frozen=True)
class WalletTransaction:
    """One immutable entry in a user's coin ledger."""

    id: str
    amount: int
    type: str
    description: str
    timestamp: datetime
    service_id: Optional[int] = None
    appointment_id: Optional[int] = None

    @property
    def is_credit(self) -> bool:
        return self.type == CREDIT


@dataclass(frozen=True)
class Wallet:
    """Coin balance plus the ordered history that produced it."""

    coins: int
    transactions: tuple[WalletTransaction, ...] = ()

    def history_total(self) -> int:
        """Signed sum of every recorded transaction."""
        return sum(txn.amount for txn in self.transactions)

    def is_consistent(self) -> bool:
        return self.coins == self.history_total() and self.coins >= 0


@dataclass(frozen=True)
class User:
    """Marketplace user (customer, vendor owner or administrator)."""

    id: int
    email: str
    first_name: str
    last_name: str
    role: str
    phone: Optional[str]
    banned: bool
    verified: bool
    referral_code: str
    referral_count: int
    used_referral_code: Optional[str]
    created_at: datetime
    updated_at: datetime
    wallet: Wallet = field(default_factory=lambda: Wallet(coins=0))

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


@dataclass(frozen=True)
class Vendor:
    """Car wash business profile."""

    id: int
    user_id: int
    business_name: str
    business_id: str
    address: str
    postal_code: str
    city: str
    phone_number: str
    email: Optional[str]
    description: Optional[str]
    rating: float
    rating_count: int
    verified: bool
    banned: bool
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class Service:
    """Bookable service offered by a vendor."""

    id: int
    vendor_id: int
    name: str
    description: str
    price: Decimal
    duration: int
    category: Optional[str]
    coin_reward: int
    available: bool
    created_at: datetime


@dataclass(frozen=True)
class ServiceCategory:
    """Vendor-specific grouping of services."""

    id: int
    vendor_id: int
    name: str
    description: Optional[str]
    icon: Optional[str]
    order: int
    created_at: datetime


@dataclass(frozen=True)
class Offer:
    """Time-limited discount a vendor advertises, optionally on one service."""

    id: int
    vendor_id: int
    title: str
    description: str
    start_date: datetime
    end_date: datetime
    service_id: Optional[int]
    discount_percentage: int
    price: Optional[Decimal]
    original_price: Optional[Decimal]
    active: bool
    created_at: datetime
    updated_at: datetime

    def is_running(self, on: datetime) -> bool:
        """Whether the offer is active and on is within its date range."""
        return self.active and self.start_date <= on <= self.end_date


@dataclass(frozen=True)
class CustomerDetails:
    """Contact details captured with a booking."""

    first_name: str
    last_name: str
    email: str
    phone: Optional[str] = None
    license_plate: Optional[str] = None


@dataclass(frozen=True)
class Appointment:
    """A single booking of a service at a vendor."""

    id: int
    vendor_id: int
    service_id: Optional[int]
    customer_id: Optional[int]
    date: datetime
    duration: int
    total_price: Decimal
    coins_used: int
    status: AppointmentStatus
    coin_reward_processed: bool
    coin_reward_amount: int
    coin_reward_at: Optional[datetime]
    customer_details: CustomerDetails
    notes: Optional[str]
    cancel_reason: Optional[str]
    feedback_rating: Optional[int]
    feedback_comment: Optional[str]
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class TicketResponse:
    """Reply posted on a support ticket."""

    id: int
    ticket_id: int
    user_id: int
    user_role: str
    message: str
    created_at: datetime


@dataclass(frozen=True)
class SupportTicket:
    """Support request raised by a user."""

    id: int
    user_id: int
    user_email: str
    user_role: str
    subject: str
    message: str
    status: str
    priority: str
    category: str
    created_at: datetime
    updated_at: datetime
    responses: tuple[TicketResponse, ...] = ()
