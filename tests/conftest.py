"""Shared pytest fixtures for washbook tests."""

import tempfile
import os
from decimal import Decimal
import pytest

from washbook.database.factories import create_sqlite_database
from washbook.domain.booking import BookingService
from washbook.domain.catalog import CatalogService
from washbook.domain.entities import CustomerDetails
from washbook.domain.events import EventBus
from washbook.domain.ledger import LedgerService
from washbook.domain.offer import OfferService
from washbook.domain.referral import ReferralService
from washbook.domain.support import SupportService
from washbook.domain.user import UserService
from washbook.domain.vendor import VendorService


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    # Create database
    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def events():
    """Create an event bus shared by the services under test."""
    return EventBus()


@pytest.fixture
def user_service(temp_db, events):
    """Create a UserService with a temporary database."""
    return UserService(temp_db, events)


@pytest.fixture
def vendor_service(temp_db):
    """Create a VendorService with a temporary database."""
    return VendorService(temp_db)


@pytest.fixture
def catalog_service(temp_db):
    """Create a CatalogService with a temporary database."""
    return CatalogService(temp_db)


@pytest.fixture
def ledger_service(temp_db):
    """Create a LedgerService with a temporary database."""
    return LedgerService(temp_db)


@pytest.fixture
def booking_service(temp_db, events):
    """Create a BookingService with a temporary database."""
    return BookingService(temp_db, events)


@pytest.fixture
def offer_service(temp_db):
    """Create an OfferService with a temporary database."""
    return OfferService(temp_db)


@pytest.fixture
def referral_service(temp_db):
    """Create a ReferralService with a temporary database."""
    return ReferralService(temp_db)


@pytest.fixture
def support_service(temp_db):
    """Create a SupportService with a temporary database."""
    return SupportService(temp_db)


@pytest.fixture
def sample_customer(user_service):
    """Create a customer. New customers hold the 10 coin welcome bonus."""
    user_id = user_service.create_user(
        email="anna@example.com", first_name="Anna", last_name="Virtanen", phone="0401111111"
    )
    return user_service.get_user(user_id)


@pytest.fixture
def sample_owner(user_service):
    """Create a user that owns the sample vendor."""
    user_id = user_service.create_user(
        email="owner@shinywash.fi", first_name="Pekka", last_name="Laine", role="vendor"
    )
    return user_service.get_user(user_id)


@pytest.fixture
def sample_vendor(vendor_service, sample_owner):
    """Create a verified vendor."""
    vendor_id = vendor_service.create_vendor(
        user_id=sample_owner.id,
        business_name="Shiny Wash",
        business_id="1234567-8",
        address="Mannerheimintie 1",
        postal_code="00100",
        city="Helsinki",
        phone_number="0407654321",
        email="info@shinywash.fi",
    )
    vendor_service.set_verified(vendor_id, True)
    return vendor_service.get_vendor(vendor_id)


@pytest.fixture
def sample_service(catalog_service, sample_vendor):
    """Create a service priced 50.00 that rewards 20 coins."""
    service_id = catalog_service.create_service(
        vendor_id=sample_vendor.id,
        name="Full wash",
        price=Decimal("50.00"),
        duration=60,
        description="Exterior and interior wash",
        category="Basic wash",
        coin_reward=20,
    )
    return catalog_service.get_service(service_id)


@pytest.fixture
def customer_details(sample_customer):
    """Contact details for bookings made by the sample customer."""
    return CustomerDetails(
        first_name=sample_customer.first_name,
        last_name=sample_customer.last_name,
        email=sample_customer.email,
        phone=sample_customer.phone,
        license_plate="ABC-123",
    )


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
