"""Tests for domain entities."""

import pytest
from datetime import datetime, UTC
from decimal import Decimal

from washbook.domain.entities import (
    CREDIT,
    DEBIT,
    Appointment,
    CustomerDetails,
    User,
    Wallet,
    WalletTransaction,
)
from washbook.domain.status import AppointmentStatus


def make_txn(amount: int, txn_id: str = "t1") -> WalletTransaction:
    return WalletTransaction(
        id=txn_id,
        amount=amount,
        type=CREDIT if amount > 0 else DEBIT,
        description="test",
        timestamp=datetime.now(UTC),
    )


class TestWallet:
    """Tests for Wallet entity."""

    def test_empty_wallet_is_consistent(self):
        """Test that a fresh wallet holds nothing and balances."""
        wallet = Wallet(coins=0)
        assert wallet.transactions == ()
        assert wallet.history_total() == 0
        assert wallet.is_consistent()

    def test_history_total_sums_signed_amounts(self):
        """Test that credits and debits are summed with their signs."""
        wallet = Wallet(coins=15, transactions=(make_txn(10, "a"), make_txn(15, "b"), make_txn(-10, "c")))
        assert wallet.history_total() == 15
        assert wallet.is_consistent()

    def test_balance_mismatch_is_inconsistent(self):
        """Test that a balance not matching the history is detected."""
        wallet = Wallet(coins=30, transactions=(make_txn(10),))
        assert not wallet.is_consistent()

    def test_wallet_immutability(self):
        """Test that Wallet entities are immutable."""
        wallet = Wallet(coins=5)
        with pytest.raises(Exception):  # dataclass frozen raises FrozenInstanceError
            wallet.coins = 10


class TestWalletTransaction:
    """Tests for WalletTransaction entity."""

    def test_is_credit(self):
        """Test credit and debit detection."""
        assert make_txn(5).is_credit
        assert not make_txn(-5).is_credit


class TestUser:
    """Tests for User entity."""

    def test_full_name_and_default_wallet(self):
        """Test the derived full name and the empty default wallet."""
        now = datetime.now(UTC)
        user = User(
            id=1,
            email="anna@example.com",
            first_name="Anna",
            last_name="Virtanen",
            role="customer",
            phone=None,
            banned=False,
            verified=False,
            referral_code="abcd1234",
            referral_count=0,
            used_referral_code=None,
            created_at=now,
            updated_at=now,
        )
        assert user.full_name == "Anna Virtanen"
        assert user.wallet.coins == 0


class TestAppointment:
    """Tests for Appointment entity."""

    def test_appointment_equality(self):
        """Test that appointments with the same data are equal."""
        now = datetime.now(UTC)
        kwargs = dict(
            id=1,
            vendor_id=2,
            service_id=3,
            customer_id=4,
            date=now,
            duration=60,
            total_price=Decimal("50.00"),
            coins_used=0,
            status=AppointmentStatus.CONFIRMED,
            coin_reward_processed=False,
            coin_reward_amount=0,
            coin_reward_at=None,
            customer_details=CustomerDetails("Anna", "Virtanen", "anna@example.com"),
            notes=None,
            cancel_reason=None,
            feedback_rating=None,
            feedback_comment=None,
            created_at=now,
            updated_at=now,
        )
        assert Appointment(**kwargs) == Appointment(**kwargs)
