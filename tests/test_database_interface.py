"""Tests for the Database interface and its atomic unit of work."""

import pytest
from datetime import datetime
from decimal import Decimal

from sqlalchemy.exc import IntegrityError

from washbook.database.models import User
from washbook.domain import entities
from washbook.domain.entities import CustomerDetails
from washbook.domain.errors import UserNotFoundError, ValidationError
from washbook.domain.status import AppointmentStatus


def make_user(db, email="anna@example.com", code="code0001"):
    return db.create_user(
        email=email, first_name="Anna", last_name="Virtanen", role="customer", referral_code=code
    )


def make_vendor(db, owner_id, business_id="1234567-8", phone="0407654321"):
    return db.create_vendor(
        user_id=owner_id,
        business_name="Shiny Wash",
        business_id=business_id,
        address="Main St 1",
        postal_code="00100",
        city="Helsinki",
        phone_number=phone,
    )


def make_appointment(db, vendor_id, service_id, customer_id):
    return db.create_appointment(
        vendor_id=vendor_id,
        service_id=service_id,
        customer_id=customer_id,
        date=datetime(2030, 5, 1, 10, 0),
        duration=60,
        total_price=Decimal("50.00"),
        status="confirmed",
        customer_details=CustomerDetails("Anna", "Virtanen", "anna@example.com"),
    )


class TestDatabaseInterface:
    """Tests to verify Database interface returns domain models."""

    def test_get_user_returns_domain_model(self, temp_db):
        """Test that get_user returns a domain User with an empty wallet."""
        user_id = make_user(temp_db)

        user = temp_db.get_user(user_id)

        assert isinstance(user, entities.User)
        assert user.email == "anna@example.com"
        assert user.wallet.coins == 0
        assert user.wallet.transactions == ()
        assert isinstance(user.created_at, datetime)

    def test_get_user_by_email_is_case_insensitive(self, temp_db):
        """Test looking up users by email regardless of case."""
        user_id = make_user(temp_db)
        assert temp_db.get_user_by_email("ANNA@example.com").id == user_id
        assert temp_db.get_user_by_email("nobody@example.com") is None

    def test_get_missing_returns_none(self, temp_db):
        """Test that missing rows come back as None."""
        assert temp_db.get_user(999) is None
        assert temp_db.get_vendor(999) is None
        assert temp_db.get_service(999) is None
        assert temp_db.get_appointment(999) is None
        assert temp_db.get_support_ticket(999) is None

    def test_get_appointment_returns_domain_model(self, temp_db):
        """Test that appointments come back with enum status and details."""
        user_id = make_user(temp_db)
        vendor_id = make_vendor(temp_db, user_id)
        service_id = temp_db.create_service(vendor_id, "Wash", Decimal("50.00"), 60)
        appointment_id = make_appointment(temp_db, vendor_id, service_id, user_id)

        appointment = temp_db.get_appointment(appointment_id)

        assert isinstance(appointment, entities.Appointment)
        assert appointment.status is AppointmentStatus.CONFIRMED
        assert appointment.customer_details.email == "anna@example.com"
        assert appointment.coin_reward_processed is False
        assert appointment.total_price == Decimal("50.00")


class TestWalletStorage:
    """Tests for the wallet append operation."""

    def test_append_moves_balance_and_history_together(self, temp_db):
        """Test that each append updates coins and history."""
        user_id = make_user(temp_db)

        temp_db.append_wallet_transaction(user_id, 10, "credit", "Welcome")
        txn_id = temp_db.append_wallet_transaction(user_id, -4, "debit", "Discount")

        user = temp_db.get_user(user_id)
        assert user.wallet.coins == 6
        assert [t.amount for t in user.wallet.transactions] == [10, -4]
        assert user.wallet.transactions[-1].id == txn_id
        assert temp_db.list_wallet_transactions(user_id)[-1].description == "Discount"

    def test_append_for_missing_user(self, temp_db):
        """Test appending to a wallet that does not exist."""
        with pytest.raises(UserNotFoundError):
            temp_db.append_wallet_transaction(999, 10, "credit", "Welcome")


class TestAtomic:
    """Tests for the atomic unit of work."""

    def test_atomic_commits_on_success(self, temp_db):
        """Test that writes inside a successful block are kept."""
        user_id = make_user(temp_db)
        with temp_db.atomic():
            temp_db.append_wallet_transaction(user_id, 10, "credit", "Welcome")
            temp_db.increment_referral_count(user_id)

        user = temp_db.get_user(user_id)
        assert user.wallet.coins == 10
        assert user.referral_count == 1

    def test_atomic_rolls_back_on_error(self, temp_db):
        """Test that an exception discards every write in the block."""
        user_id = make_user(temp_db)

        with pytest.raises(RuntimeError):
            with temp_db.atomic():
                temp_db.append_wallet_transaction(user_id, 10, "credit", "Welcome")
                temp_db.update_user(user_id, used_referral_code="other")
                raise RuntimeError("boom")

        user = temp_db.get_user(user_id)
        assert user.wallet.coins == 0
        assert user.wallet.transactions == ()
        assert user.used_referral_code is None

    def test_nested_atomic_joins_outer_block(self, temp_db):
        """Test that an inner block is undone when the outer block fails."""
        user_id = make_user(temp_db)

        with pytest.raises(RuntimeError):
            with temp_db.atomic():
                with temp_db.atomic():
                    temp_db.append_wallet_transaction(user_id, 10, "credit", "Welcome")
                raise RuntimeError("boom")

        assert temp_db.get_user(user_id).wallet.coins == 0

    def test_write_after_rollback_still_works(self, temp_db):
        """Test that the database is usable after a rolled back block."""
        user_id = make_user(temp_db)
        with pytest.raises(RuntimeError):
            with temp_db.atomic():
                raise RuntimeError("boom")

        temp_db.append_wallet_transaction(user_id, 5, "credit", "Later")
        assert temp_db.get_user(user_id).wallet.coins == 5

    def test_failed_commit_is_rolled_back(self, temp_db):
        """Test that the database is usable after the final commit fails."""
        user_id = make_user(temp_db)

        with pytest.raises(IntegrityError):
            with temp_db.atomic():
                # Left unflushed so the duplicate email fails at commit time
                temp_db._get_session().add(
                    User(
                        email="anna@example.com",
                        first_name="Other",
                        last_name="Person",
                        role="customer",
                        referral_code="code0002",
                    )
                )

        temp_db.append_wallet_transaction(user_id, 5, "credit", "Later")
        assert temp_db.get_user(user_id).wallet.coins == 5
        assert len(temp_db.list_users()) == 1

    def test_balance_cannot_go_negative(self, temp_db):
        """Test that the schema rejects a write that overdraws a wallet."""
        user_id = make_user(temp_db)
        temp_db.append_wallet_transaction(user_id, 10, "credit", "Welcome")

        with pytest.raises(IntegrityError):
            temp_db.append_wallet_transaction(user_id, -11, "debit", "Overdraft")

        user = temp_db.get_user(user_id)
        assert user.wallet.coins == 10
        assert [t.amount for t in user.wallet.transactions] == [10]


class TestVendorStorage:
    """Tests for vendor queries."""

    def test_vendor_field_exists(self, temp_db):
        """Test unique field lookups with and without an excluded vendor."""
        owner_id = make_user(temp_db)
        vendor_id = make_vendor(temp_db, owner_id)

        assert temp_db.vendor_field_exists("business_id", "1234567-8")
        assert temp_db.vendor_field_exists("phone_number", "0407654321")
        assert not temp_db.vendor_field_exists("phone_number", "0407654321", exclude_vendor_id=vendor_id)
        assert not temp_db.vendor_field_exists("business_id", "0000000-0")

    def test_vendor_field_exists_rejects_other_fields(self, temp_db):
        """Test that only unique vendor fields can be checked."""
        with pytest.raises(ValidationError):
            temp_db.vendor_field_exists("city", "Helsinki")

    def test_list_vendors_filters(self, temp_db):
        """Test vendor filters on verification, ban and city."""
        owner_id = make_user(temp_db)
        first = make_vendor(temp_db, owner_id)
        second = make_vendor(temp_db, owner_id, business_id="7654321-0", phone="0400000000")
        temp_db.update_vendor(first, verified=True)
        temp_db.update_vendor(second, city="Espoo", banned=True)

        assert [v.id for v in temp_db.list_vendors(verified=True)] == [first]
        assert [v.id for v in temp_db.list_vendors(banned=True)] == [second]
        assert [v.id for v in temp_db.list_vendors(city="espoo")] == [second]

    def test_delete_vendor_removes_dependents(self, temp_db):
        """Test that deleting a vendor removes its services, categories and appointments."""
        user_id = make_user(temp_db)
        vendor_id = make_vendor(temp_db, user_id)
        service_id = temp_db.create_service(vendor_id, "Wash", Decimal("50.00"), 60)
        temp_db.create_service_category(vendor_id, "Basic wash")
        appointment_id = make_appointment(temp_db, vendor_id, service_id, user_id)

        temp_db.delete_vendor(vendor_id)

        assert temp_db.get_vendor(vendor_id) is None
        assert temp_db.get_service(service_id) is None
        assert temp_db.list_service_categories(vendor_id) == []
        assert temp_db.get_appointment(appointment_id) is None

    def test_delete_service_keeps_appointments(self, temp_db):
        """Test that appointments outlive the service they reference."""
        user_id = make_user(temp_db)
        vendor_id = make_vendor(temp_db, user_id)
        service_id = temp_db.create_service(vendor_id, "Wash", Decimal("50.00"), 60)
        appointment_id = make_appointment(temp_db, vendor_id, service_id, user_id)

        temp_db.delete_service(service_id)

        appointment = temp_db.get_appointment(appointment_id)
        assert appointment is not None
        assert appointment.service_id == service_id


class TestAppointmentStorage:
    """Tests for appointment queries."""

    def test_list_appointments_newest_first(self, temp_db):
        """Test appointment ordering by date."""
        user_id = make_user(temp_db)
        vendor_id = make_vendor(temp_db, user_id)
        details = CustomerDetails("Anna", "Virtanen", "anna@example.com")
        early = temp_db.create_appointment(
            vendor_id, None, user_id, datetime(2030, 1, 1, 9, 0), 30, Decimal("10"), "pending", details
        )
        late = temp_db.create_appointment(
            vendor_id, None, user_id, datetime(2030, 6, 1, 9, 0), 30, Decimal("10"), "pending", details
        )

        assert [a.id for a in temp_db.list_appointments(customer_id=user_id)] == [late, early]
        assert [a.id for a in temp_db.list_appointments(vendor_id=vendor_id)] == [late, early]
