"""SQLAlchemy models for washbook database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    Text,
    ForeignKey,
    DateTime,
    Numeric,
    Float,
    Boolean,
    CheckConstraint,
    create_engine,
    event,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()

# Execution option that makes a SQLite transaction take the write lock up front
BEGIN_IMMEDIATE = "washbook_begin_immediate"


def utc_now() -> datetime:
    """Return the current time as a timezone-aware UTC datetime."""
    return datetime.now(UTC)


class User(Base):
    """User model with embedded coin wallet."""

    __tablename__ = "users"
    __table_args__ = (CheckConstraint("coins >= 0", name="ck_users_coins_not_negative"),)

    id = Column(Integer, primary_key=True)
    email = Column(String, unique=True, nullable=False)
    first_name = Column(String, nullable=False)
    last_name = Column(String, nullable=False)
    phone = Column(String, nullable=True)
    role = Column(String, nullable=False, default="customer")
    banned = Column(Boolean, default=False, nullable=False)
    verified = Column(Boolean, default=False, nullable=False)
    referral_code = Column(String, unique=True, nullable=False)
    referral_count = Column(Integer, default=0, nullable=False)
    used_referral_code = Column(String, nullable=True)
    coins = Column(Integer, default=0, nullable=False)
    created_at = Column(DateTime, default=utc_now, nullable=False)
    updated_at = Column(DateTime, default=utc_now, onupdate=utc_now, nullable=False)

    # Relationships
    wallet_transactions = relationship(
        "WalletTransaction",
        back_populates="user",
        cascade="all, delete-orphan",
        order_by="WalletTransaction.seq",
    )


class WalletTransaction(Base):
    """Append-only coin ledger entry.

    seq is the insertion order; uid is the public transaction identifier.
    """

    __tablename__ = "wallet_transactions"

    seq = Column(Integer, primary_key=True)
    uid = Column(String, unique=True, nullable=False)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    amount = Column(Integer, nullable=False)
    type = Column(String, nullable=False)
    description = Column(String, nullable=False)
    timestamp = Column(DateTime, default=utc_now, nullable=False)
    service_id = Column(Integer, nullable=True)
    appointment_id = Column(Integer, nullable=True)

    # Relationships
    user = relationship("User", back_populates="wallet_transactions")


class Vendor(Base):
    """Car wash business model."""

    __tablename__ = "vendors"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    business_name = Column(String, nullable=False)
    business_id = Column(String, unique=True, nullable=False)
    address = Column(String, nullable=False)
    postal_code = Column(String, nullable=False)
    city = Column(String, nullable=False)
    phone_number = Column(String, unique=True, nullable=False)
    email = Column(String, nullable=True)
    description = Column(Text, nullable=True)
    rating = Column(Float, default=0.0, nullable=False)
    rating_count = Column(Integer, default=0, nullable=False)
    verified = Column(Boolean, default=False, nullable=False)
    banned = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=utc_now, nullable=False)
    updated_at = Column(DateTime, default=utc_now, onupdate=utc_now, nullable=False)


class Service(Base):
    """Bookable service model."""

    __tablename__ = "services"

    id = Column(Integer, primary_key=True)
    vendor_id = Column(Integer, ForeignKey("vendors.id"), nullable=False)
    name = Column(String, nullable=False)
    description = Column(Text, nullable=False, default="")
    price = Column(Numeric(10, 2), nullable=False)
    duration = Column(Integer, nullable=False)
    category = Column(String, nullable=True)
    coin_reward = Column(Integer, default=0, nullable=False)
    available = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=utc_now, nullable=False)


class ServiceCategory(Base):
    """Vendor-specific service category model."""

    __tablename__ = "service_categories"

    id = Column(Integer, primary_key=True)
    vendor_id = Column(Integer, ForeignKey("vendors.id"), nullable=False)
    name = Column(String, nullable=False)
    description = Column(String, nullable=True)
    icon = Column(String, nullable=True)
    order = Column(Integer, default=0, nullable=False)
    created_at = Column(DateTime, default=utc_now, nullable=False)


class Offer(Base):
    """Vendor offer model."""

    __tablename__ = "offers"

    id = Column(Integer, primary_key=True)
    vendor_id = Column(Integer, ForeignKey("vendors.id"), nullable=False)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=False)
    start_date = Column(DateTime, nullable=False)
    end_date = Column(DateTime, nullable=False)
    service_id = Column(Integer, nullable=True)
    discount_percentage = Column(Integer, default=0, nullable=False)
    price = Column(Numeric(10, 2), nullable=True)
    original_price = Column(Numeric(10, 2), nullable=True)
    active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=utc_now, nullable=False)
    updated_at = Column(DateTime, default=utc_now, onupdate=utc_now, nullable=False)


class Appointment(Base):
    """Appointment model.

    service_id and customer_id are plain references: rows may outlive the
    service or user they point at.
    """

    __tablename__ = "appointments"

    id = Column(Integer, primary_key=True)
    vendor_id = Column(Integer, ForeignKey("vendors.id"), nullable=False)
    service_id = Column(Integer, nullable=True)
    customer_id = Column(Integer, nullable=True)
    date = Column(DateTime, nullable=False)
    duration = Column(Integer, nullable=False)
    total_price = Column(Numeric(10, 2), nullable=False)
    coins_used = Column(Integer, default=0, nullable=False)
    status = Column(String, nullable=False)
    coin_reward_processed = Column(Boolean, default=False, nullable=False)
    coin_reward_amount = Column(Integer, default=0, nullable=False)
    coin_reward_at = Column(DateTime, nullable=True)
    customer_first_name = Column(String, nullable=False)
    customer_last_name = Column(String, nullable=False)
    customer_email = Column(String, nullable=False)
    customer_phone = Column(String, nullable=True)
    license_plate = Column(String, nullable=True)
    notes = Column(Text, nullable=True)
    cancel_reason = Column(String, nullable=True)
    feedback_rating = Column(Integer, nullable=True)
    feedback_comment = Column(Text, nullable=True)
    created_at = Column(DateTime, default=utc_now, nullable=False)
    updated_at = Column(DateTime, default=utc_now, onupdate=utc_now, nullable=False)


class SupportTicket(Base):
    """Support ticket model."""

    __tablename__ = "support_tickets"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, nullable=False)
    user_email = Column(String, nullable=False)
    user_role = Column(String, nullable=False)
    subject = Column(String, nullable=False)
    message = Column(Text, nullable=False)
    status = Column(String, default="open", nullable=False)
    priority = Column(String, default="medium", nullable=False)
    category = Column(String, nullable=False)
    created_at = Column(DateTime, default=utc_now, nullable=False)
    updated_at = Column(DateTime, default=utc_now, onupdate=utc_now, nullable=False)

    # Relationships
    responses = relationship(
        "TicketResponse",
        back_populates="ticket",
        cascade="all, delete-orphan",
        order_by="TicketResponse.id",
    )


class TicketResponse(Base):
    """Reply on a support ticket."""

    __tablename__ = "ticket_responses"

    id = Column(Integer, primary_key=True)
    ticket_id = Column(Integer, ForeignKey("support_tickets.id"), nullable=False)
    user_id = Column(Integer, nullable=False)
    user_role = Column(String, nullable=False)
    message = Column(Text, nullable=False)
    created_at = Column(DateTime, default=utc_now, nullable=False)

    # Relationships
    ticket = relationship("SupportTicket", back_populates="responses")


def _begin_immediate(conn) -> None:
    if conn.get_execution_options().get(BEGIN_IMMEDIATE):
        conn.exec_driver_sql("BEGIN IMMEDIATE")


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory.

    On SQLite, connections opened with the BEGIN_IMMEDIATE execution option
    start their transaction with BEGIN IMMEDIATE, so a read-check-write unit
    holds the write lock from its first read.
    """
    engine = create_engine(database_url, echo=False)
    if engine.dialect.name == "sqlite":
        event.listen(engine, "begin", _begin_immediate)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
